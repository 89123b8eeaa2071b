"""In-process result caching."""

from ragcore.core.caching.cache_keys import make_cache_key, normalize_text
from ragcore.core.caching.result_cache import MISS, ResultCache

__all__ = ["MISS", "ResultCache", "make_cache_key", "normalize_text"]
