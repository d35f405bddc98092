"""
Computes the on-disk layout of the page cache.
"""

import logging
import shutil
from pathlib import Path

log = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
INDEX_FILE_NAME = "index.json"
ARCHIVE_TEMP_NAME = "_tldr.zip"
PAGES_DIR_PREFIX = "pages"


def ensure_directory(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def language_directory(lang: str) -> str:
    """Maps a language code to its pages directory name."""
    if lang == DEFAULT_LANGUAGE:
        return PAGES_DIR_PREFIX
    return f"{PAGES_DIR_PREFIX}.{lang}"


class CacheStore:
    """Path computation for a cache root. No network access."""

    def __init__(self, root: Path):
        self.root = Path(root)
        ensure_directory(self.root)

    def ensure_directory(self, path: Path) -> None:
        ensure_directory(path)

    def language_directory(self, lang: str) -> str:
        return language_directory(lang)

    def index_file_path(self) -> Path:
        return self.root / INDEX_FILE_NAME

    def archive_temp_path(self) -> Path:
        return self.root / ARCHIVE_TEMP_NAME

    def page_path(self, language_dir: str, platform: str, name: str) -> Path:
        return self.root / language_dir / platform / f"{name}.md"

    def has_index(self) -> bool:
        return self.index_file_path().is_file()

    def clear(self) -> int:
        """
        Removes the manifest, every pages directory and any stale temporary
        archive from the cache root.

        Returns:
            The number of top-level entries removed.
        """
        removed = 0
        for entry in self.root.iterdir():
            if entry.is_dir() and (
                entry.name == PAGES_DIR_PREFIX
                or entry.name.startswith(f"{PAGES_DIR_PREFIX}.")
            ):
                shutil.rmtree(entry)
            elif entry.name in (INDEX_FILE_NAME, ARCHIVE_TEMP_NAME):
                entry.unlink()
            else:
                continue
            removed += 1
        log.debug(f"Removed {removed} entries from cache at '{self.root}'.")
        return removed
