"""Database connections."""

from ragcore.boundary.db.connection import get_async_engine

__all__ = ["get_async_engine"]
