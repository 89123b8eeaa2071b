"""Boundary layer: embedding providers, vector stores and database connections."""
