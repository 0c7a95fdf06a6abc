import functools
import logging
LOGGER = logging.getLogger(__name__)

_cached_functions = []


def sample_cache(func):
    """
    Caches the result of a factory for the life of the process.
    Use under @classmethod to get a shared instance, e.g. Config.config().
    """
    cached = functools.lru_cache(maxsize=None)(func)
    _cached_functions.append(cached)
    return cached


def sample_cache_clear():
    for cached in _cached_functions:
        cached.cache_clear()
    LOGGER.debug(f"Cleared {len(_cached_functions)} cached factories")
