"""
ragcore: token-aware chunking, vector indexing and retrieval.

Layers: configs, models, core (pure logic), boundary (providers),
application (orchestration), observability.
"""

__version__ = "0.1.0"
