"""
Caching utilities for public catalog queries
Uses Redis (django-redis) when configured, the local-memory cache otherwise
"""
from django.core.cache import cache
from functools import wraps
import hashlib
import logging

logger = logging.getLogger(__name__)

# Cache TTLs (in seconds)
GEMSTONES_LIST_CACHE_TTL = 120  # 2 minutes
CATALOG_LOOKUP_CACHE_TTL = 600  # 10 minutes (categories and suppliers change rarely)

GEMSTONES_LIST_PREFIX = "gemstones_list"
CATEGORIES_LIST_PREFIX = "gemstone_categories_list"
SUPPLIERS_LIST_PREFIX = "suppliers_list"


def make_cache_key(prefix, *args, **kwargs):
    """Generate a unique cache key from arguments"""
    key_data = f"{prefix}:{args}:{sorted(kwargs.items())}"
    # Hash it to keep key length reasonable
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    return f"{prefix}:{key_hash}"


def cached_query(cache_ttl=60, key_prefix="query"):
    """
    Decorator to cache expensive queries

    Usage:
        @cached_query(cache_ttl=600, key_prefix=CATEGORIES_LIST_PREFIX)
        def get_categories_data():
            return data
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            cache_key = make_cache_key(key_prefix, *args, **kwargs)

            cached_data = cache.get(cache_key)
            if cached_data is not None:
                logger.debug(f"Cache HIT for {key_prefix}: {cache_key}")
                return cached_data

            logger.debug(f"Cache MISS for {key_prefix}: {cache_key}")
            result = func(*args, **kwargs)
            cache.set(cache_key, result, cache_ttl)
            return result
        return wrapper
    return decorator


def invalidate_cache_pattern(pattern):
    """
    Invalidate all cache keys matching a pattern
    django-redis supports pattern deletion; other backends are cleared entirely
    """
    try:
        if hasattr(cache, 'delete_pattern'):
            deleted = cache.delete_pattern(f"*{pattern}*")
            logger.info(f"Invalidated {deleted} cache keys matching pattern: {pattern}")
        else:
            cache.clear()
            logger.info(f"Cleared cache for pattern: {pattern}")
    except Exception as e:
        logger.warning(f"Could not invalidate cache pattern {pattern}: {str(e)}")


def get_cached_gemstones_list(filters_dict):
    """
    Get cached gemstones list for a set of query filters
    Returns tuple: (cached_data, cache_key)
    """
    cache_key = make_cache_key(GEMSTONES_LIST_PREFIX, **filters_dict)
    return cache.get(cache_key), cache_key


def cache_gemstones_list(cache_key, data, ttl=GEMSTONES_LIST_CACHE_TTL):
    """Cache gemstones list data"""
    cache.set(cache_key, data, ttl)
    logger.debug(f"Cached gemstones list: {cache_key}")


def invalidate_catalog_cache():
    """Invalidate every cached catalog list"""
    invalidate_cache_pattern(GEMSTONES_LIST_PREFIX)
    invalidate_cache_pattern(CATEGORIES_LIST_PREFIX)
    invalidate_cache_pattern(SUPPLIERS_LIST_PREFIX)
