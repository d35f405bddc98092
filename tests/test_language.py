"""Tests for language fallback and page reads."""

import pytest

from conftest import GCC_ZH
from tldr_cache.core.language import LanguageResolver
from tldr_cache.exceptions import PageNotFoundError
from tldr_cache.models.command import CommandMetadata
from tldr_cache.storage.layout import CacheStore


def metadata(language, platform=("linux", "osx")):
    return CommandMetadata(name="gcc", platform=list(platform), language=language)


@pytest.mark.parametrize(
    "languages, preferred, expected",
    [
        (["en", "zh"], "zh", "zh"),
        (["en", "zh"], "en", "en"),
        (["zh", "en"], "fr", "en"),
        (["ja", "ko"], "fr", "ja"),
        (["ko", "ja"], "fr", "ko"),
    ],
)
def test_resolve_language(languages, preferred, expected):
    assert LanguageResolver.resolve_language(metadata(languages), preferred) == expected


def test_resolve_page_uses_first_platform(tmp_path):
    resolver = LanguageResolver(CacheStore(tmp_path))
    assert resolver.resolve_page(metadata(["en", "zh"]), "zh") == ("pages.zh", "linux")
    assert resolver.resolve_page(metadata(["en", "zh"]), "fr") == ("pages", "linux")


def test_read_page(cache_dir):
    resolver = LanguageResolver(CacheStore(cache_dir))
    assert resolver.read_page("pages.zh", "linux", "gcc") == GCC_ZH


def test_read_missing_page(cache_dir):
    resolver = LanguageResolver(CacheStore(cache_dir))
    with pytest.raises(PageNotFoundError, match="gcc"):
        resolver.read_page("pages.fr", "linux", "gcc")
