"""
Core cache engine.

The `CacheManager` acts as the coordinator of the cache, delegating page
lookup to the `LanguageResolver` and downloads to the `ArchiveFetcher`.
"""

from .cache_manager import CacheManager
from .language import LanguageResolver

__all__ = ["CacheManager", "LanguageResolver"]
