"""
Storage Layer.

This package handles all data persistence, including the configuration file,
the cache directory layout and the parsed page manifest.
"""

from .config_manager import ConfigManager
from .indexer import load_index
from .layout import CacheStore

__all__ = ["CacheStore", "ConfigManager", "load_index"]
