"""
Cache invalidation signals
Automatically invalidate catalog caches when gemstone data changes
"""
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
import logging
import threading
from contextlib import contextmanager

from .cache_utils import (
    invalidate_cache_pattern, GEMSTONES_LIST_PREFIX, CATEGORIES_LIST_PREFIX, SUPPLIERS_LIST_PREFIX,
)

logger = logging.getLogger(__name__)

# Thread-local storage to track signal suspension
_thread_locals = threading.local()

CATALOG_MODELS = {
    'Gemstone': [GEMSTONES_LIST_PREFIX],
    'GemstoneCategory': [CATEGORIES_LIST_PREFIX, GEMSTONES_LIST_PREFIX],
    'Supplier': [SUPPLIERS_LIST_PREFIX, GEMSTONES_LIST_PREFIX],
}


@contextmanager
def suspend_cache_signals():
    """
    Context manager to temporarily suspend cache invalidation signals.
    Useful for bulk operations to prevent excessive cache clearing.
    Remember to manually invalidate cache after the block!
    """
    try:
        _thread_locals.suspended = True
        yield
    finally:
        _thread_locals.suspended = False


def is_suspended():
    return getattr(_thread_locals, 'suspended', False)


@receiver([post_save, post_delete])
def invalidate_catalog_cache_on_change(sender, instance, **kwargs):
    """Invalidate cached catalog lists when gemstones, categories or suppliers change"""
    if is_suspended():
        return

    prefixes = CATALOG_MODELS.get(sender.__name__)
    if not prefixes or sender._meta.app_label != 'gemstones':
        return

    for prefix in prefixes:
        invalidate_cache_pattern(prefix)
