"""
Archive Transfer Layer.

This package is responsible for downloading the remote page archive and
unpacking it into the cache directory.
"""

from .fetcher import ArchiveFetcher

__all__ = ["ArchiveFetcher"]
