"""
tldr-cache: an offline cache of tldr command pages with language fallback.
"""

__version__ = "0.1.0"
