"""
Wikipedia module for wiki_path.

Link sources that discover the neighbours of an article, and the cache that
keeps their answers between searches.
"""

from .link_cache import CacheStats, LinkCache
from .link_source import LinkSource, WikipediaLinkSource

__all__ = [
    'CacheStats',
    'LinkCache',
    'LinkSource',
    'WikipediaLinkSource',
]
