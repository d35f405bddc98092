"""Shared fixtures for building page caches and archives."""

from __future__ import annotations

import asyncio
import io
import json
import zipfile
from pathlib import Path

import pytest

from tldr_cache.exceptions import FetchError
from tldr_cache.media.fetcher import ArchiveFetcher
from tldr_cache.storage.layout import language_directory

GCC_EN = "# gcc\n\n> Preprocess and compile C and C++ source files.\n"
GCC_ZH = "# gcc\n\n> 预处理并编译 C 和 C++ 源代码文件。\n"
FOO_JA = "# foo\n\n> フーコマンド。\n"
TAR_EN = "# tar\n\n> Archiving utility.\n"


def manifest_entry(name, platform, language):
    return {
        "name": name,
        "platform": platform,
        "language": language,
        "target": [{"os": p, "language": lang} for p in platform for lang in language],
    }


SAMPLE_COMMANDS = [
    manifest_entry("tar", ["common"], ["en"]),
    manifest_entry("gcc", ["linux"], ["en", "zh"]),
    manifest_entry("foo", ["osx"], ["ja"]),
]

SAMPLE_PAGES = {
    ("en", "common", "tar"): TAR_EN,
    ("en", "linux", "gcc"): GCC_EN,
    ("zh", "linux", "gcc"): GCC_ZH,
    ("ja", "osx", "foo"): FOO_JA,
}


def page_relpath(lang: str, platform: str, name: str) -> str:
    return f"{language_directory(lang)}/{platform}/{name}.md"


def write_cache(root: Path, commands=None, pages=None) -> Path:
    """Lays out a cache tree (manifest and pages) under `root`."""
    commands = SAMPLE_COMMANDS if commands is None else commands
    pages = SAMPLE_PAGES if pages is None else pages
    root.mkdir(parents=True, exist_ok=True)
    (root / "index.json").write_text(
        json.dumps({"commands": commands}), encoding="utf-8"
    )
    for (lang, platform, name), text in pages.items():
        path = root / page_relpath(lang, platform, name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


def build_archive(commands=None, pages=None) -> bytes:
    """Builds an in-memory zip with the same layout as the remote archive."""
    commands = SAMPLE_COMMANDS if commands is None else commands
    pages = SAMPLE_PAGES if pages is None else pages
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        zf.writestr("index.json", json.dumps({"commands": commands}))
        for (lang, platform, name), text in pages.items():
            zf.writestr(page_relpath(lang, platform, name), text)
    return buffer.getvalue()


class FakeFetcher(ArchiveFetcher):
    """Writes canned archive bytes instead of going to the network."""

    def __init__(self, payload: bytes | None = None, error: Exception | None = None):
        super().__init__(max_attempts=1, base_delay=0)
        self.payload = build_archive() if payload is None else payload
        self.error = error
        self.fetch_calls = 0
        self.started = asyncio.Event()
        self.gate: asyncio.Event | None = None

    async def fetch_archive(self, url: str, dest_path: Path) -> int:
        self.fetch_calls += 1
        # Half a download is on disk while the fetch is held open.
        Path(dest_path).write_bytes(self.payload[: len(self.payload) // 2])
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        Path(dest_path).write_bytes(self.payload)
        return len(self.payload)


@pytest.fixture
def cache_dir(tmp_path):
    """A populated cache root."""
    return write_cache(tmp_path / "cache")


@pytest.fixture
def empty_cache_dir(tmp_path):
    root = tmp_path / "empty_cache"
    root.mkdir()
    return root


@pytest.fixture
def archive_bytes():
    return build_archive()


@pytest.fixture
def failing_fetcher():
    return FakeFetcher(error=FetchError("connection refused"))
