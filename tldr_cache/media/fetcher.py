"""
Handles downloading the page archive over HTTP and unpacking it into the cache.
"""

import asyncio
import logging
import os
import zipfile
from contextlib import suppress
from pathlib import Path

import aiofiles
import aiohttp

from tldr_cache.exceptions import ExtractionError, FetchError
from tldr_cache.utils.formatting import format_size

log = logging.getLogger(__name__)


class ArchiveFetcher:
    """Streams the remote archive to disk with retry logic and extracts it."""

    CHUNK_SIZE = 131072  # 128 KB

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.5,
        connect_timeout: float = 15.0,
        read_timeout: float = 90.0,
    ):
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.timeout = aiohttp.ClientTimeout(
            total=None, sock_connect=connect_timeout, sock_read=read_timeout
        )

    async def fetch_archive(self, url: str, dest_path: Path) -> int:
        """
        Streams the response body of `url` into `dest_path`.

        Returns:
            The number of bytes written.

        Raises:
            FetchError: If every attempt fails. The partial destination file is
            removed before raising.
        """
        last_exception: Exception | None = None
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            for attempt in range(1, self.max_attempts + 1):
                try:
                    written = await self._stream_to_file(session, url, dest_path)
                    log.debug(
                        f"Fetched '{url}' ({format_size(written)}) to "
                        f"'{os.path.basename(dest_path)}'."
                    )
                    return written
                except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
                    last_exception = e
                    await asyncio.to_thread(self._discard, dest_path)
                    log.debug(
                        f"Fetch attempt {attempt}/{self.max_attempts} for "
                        f"'{url}' failed: {e}. Retrying..."
                    )
                    if attempt < self.max_attempts:
                        await asyncio.sleep(self.base_delay * (2 ** (attempt - 1)))

        raise FetchError(
            f"Failed to fetch '{url}' after {self.max_attempts} attempts: "
            f"{last_exception}"
        ) from last_exception

    async def _stream_to_file(
        self, session: aiohttp.ClientSession, url: str, dest_path: Path
    ) -> int:
        async with session.get(url, allow_redirects=True) as response:
            response.raise_for_status()
            expected = response.content_length

            bytes_downloaded = 0
            async with aiofiles.open(dest_path, "wb") as f:
                async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                    await f.write(chunk)
                    bytes_downloaded += len(chunk)

        if expected is not None and bytes_downloaded != expected:
            raise aiohttp.ClientPayloadError(
                f"Incomplete body: got {bytes_downloaded} of {expected} bytes"
            )
        return bytes_downloaded

    @staticmethod
    def _discard(path: Path) -> None:
        with suppress(FileNotFoundError):
            os.remove(path)

    async def extract_archive(self, archive_path: Path, dest_dir: Path) -> int:
        """
        Extracts every entry of the zip at `archive_path` into `dest_dir`,
        overwriting existing files.

        Returns:
            The number of archive entries.

        Raises:
            ExtractionError: If the archive is missing, corrupt or cannot be written.
        """

        def extract_zip() -> int:
            with zipfile.ZipFile(archive_path, "r") as zf:
                bad_member = zf.testzip()
                if bad_member is not None:
                    raise zipfile.BadZipFile(f"CRC mismatch in member '{bad_member}'")
                zf.extractall(dest_dir)
                return len(zf.infolist())

        try:
            count = await asyncio.to_thread(extract_zip)
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise ExtractionError(f"Corrupt archive '{archive_path}': {e}") from e
        except OSError as e:
            raise ExtractionError(f"Failed to extract '{archive_path}': {e}") from e

        log.debug(f"Extracted {count} entries into '{dest_dir}'.")
        return count
