"""
The public coordinator of the page cache.

`CacheManager` owns the resident index, the preferred language and the
single-flight refresh guard, and composes the layout, fetcher, indexer and
language resolver into the read and refresh operations used by callers.
"""

import logging
import os
import threading
from contextlib import suppress
from pathlib import Path

from tldr_cache.core.language import LanguageResolver
from tldr_cache.exceptions import (
    BusyError,
    ExtractionError,
    FetchError,
    IndexCorruptError,
)
from tldr_cache.media.fetcher import ArchiveFetcher
from tldr_cache.models.command import CacheIndex, CommandMetadata
from tldr_cache.models.config import DEFAULT_ARCHIVE_URL, TldrConfig
from tldr_cache.models.status import RefreshState, RefreshStatus
from tldr_cache.storage.indexer import load_index
from tldr_cache.storage.layout import DEFAULT_LANGUAGE, CacheStore

log = logging.getLogger(__name__)


class CacheManager:
    """
    Serves cached tldr pages and refreshes the cache from the remote archive.

    Reads (`commands`, `command`, `man`) are synchronous and load the manifest
    on first use. `update_cache` is the only coroutine; at most one refresh
    runs at a time and a competing call fails fast with BusyError.
    """

    def __init__(
        self,
        cache_dir: Path,
        lang: str = DEFAULT_LANGUAGE,
        archive_url: str = DEFAULT_ARCHIVE_URL,
        fetcher: ArchiveFetcher | None = None,
    ):
        self.store = CacheStore(cache_dir)
        self.resolver = LanguageResolver(self.store)
        self.fetcher = fetcher or ArchiveFetcher()
        self.archive_url = archive_url
        self.status = RefreshStatus()
        self._lang = lang
        self._index: CacheIndex | None = None
        self._state = RefreshState.IDLE
        self._state_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: TldrConfig) -> "CacheManager":
        fetcher = ArchiveFetcher(
            max_attempts=config.max_attempts,
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
        )
        return cls(
            config.cache_path,
            lang=config.language,
            archive_url=config.archive_url,
            fetcher=fetcher,
        )

    @property
    def language(self) -> str:
        return self._lang

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def is_updating(self) -> bool:
        """True while a refresh is in flight."""
        return self._state is RefreshState.REFRESHING

    def update_lang(self, lang: str) -> None:
        self._lang = lang

    def _sync(self) -> CacheIndex:
        """Loads the manifest once; later calls return the resident snapshot."""
        index = self._index
        if index is None:
            index = load_index(self.store.index_file_path())
            self._index = index
        return index

    def commands(self) -> list[str]:
        """Returns every cached command name in manifest order."""
        return list(self._sync().names)

    def command(self, name: str) -> CommandMetadata | None:
        return self._sync().get(name)

    def man(self, name: str) -> str:
        """
        Returns the page text for `name` in the preferred language, falling
        back to English and then to the command's first listed language.

        An unknown command yields an empty string.

        Raises:
            PageNotFoundError: If the manifest lists the command but its page
            file is missing.
        """
        metadata = self.command(name)
        if metadata is None:
            return ""
        language_dir, platform = self.resolver.resolve_page(metadata, self._lang)
        return self.resolver.read_page(language_dir, platform, metadata.name)

    async def update_cache(self, force_refresh: bool = False) -> bool:
        """
        Downloads and extracts the archive when the manifest is missing or
        `force_refresh` is set, then re-syncs the in-memory index.

        Fetch and extraction failures are logged and recorded in `status`
        rather than raised.

        Returns:
            True if a refresh ran and succeeded.

        Raises:
            BusyError: If another refresh is already in flight.
        """
        with self._state_lock:
            if self._state is RefreshState.REFRESHING:
                raise BusyError("Cache is already updating.")
            triggered = force_refresh or not self.store.has_index()
            if triggered:
                self._state = RefreshState.REFRESHING

        refreshed = False
        if triggered:
            refreshed = await self._refresh()

        if refreshed:
            # Swap in the new snapshot only once it is fully parsed.
            try:
                index = load_index(self.store.index_file_path())
            except IndexCorruptError as e:
                log.error(f"Refreshed manifest is unusable: {e}")
                self.status.record_failure(e)
                raise
            self._index = index
            self.status.record_success()
            log.info(f"Cache refreshed at '{self.store.root}'.")
        elif self.store.has_index():
            self._sync()
        else:
            log.warning(
                f"No manifest at '{self.store.index_file_path()}'; "
                "the cache is empty until a refresh succeeds."
            )
        return refreshed

    async def _refresh(self) -> bool:
        archive_path = self.store.archive_temp_path()
        log.info(f"Refreshing tldr cache from '{self.archive_url}'...")
        try:
            await self.fetcher.fetch_archive(self.archive_url, archive_path)
            await self.fetcher.extract_archive(archive_path, self.store.root)
        except (FetchError, ExtractionError) as e:
            log.error(f"Cache refresh failed: {e}")
            self.status.record_failure(e)
            return False
        finally:
            # No awaits here: a second cancellation must not skip the reset.
            try:
                with suppress(FileNotFoundError):
                    os.remove(archive_path)
            finally:
                with self._state_lock:
                    self._state = RefreshState.IDLE
        return True

    def clear_cache(self) -> int:
        """
        Deletes every cached page and the manifest, and drops the resident index.

        Raises:
            BusyError: If a refresh is in flight.
        """
        with self._state_lock:
            if self._state is RefreshState.REFRESHING:
                raise BusyError("Cannot clear the cache while it is updating.")
            removed = self.store.clear()
            self._index = None
        return removed
