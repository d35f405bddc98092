"""
Chooses which language variant of a page to read and reads it from the cache.
"""

import logging

from tldr_cache.exceptions import PageNotFoundError
from tldr_cache.models.command import CommandMetadata
from tldr_cache.storage.layout import DEFAULT_LANGUAGE, CacheStore

log = logging.getLogger(__name__)


class LanguageResolver:
    """
    Resolves a command's page location with language-preference fallback.

    The preferred language wins if the command has it, then English, then
    whichever language the manifest lists first.
    """

    def __init__(self, store: CacheStore):
        self.store = store

    @staticmethod
    def resolve_language(metadata: CommandMetadata, preferred: str) -> str:
        if preferred in metadata.language:
            return preferred
        if DEFAULT_LANGUAGE in metadata.language:
            return DEFAULT_LANGUAGE
        return metadata.language[0]

    def resolve_page(
        self, metadata: CommandMetadata, preferred: str
    ) -> tuple[str, str]:
        """Returns (language directory name, platform) for a command's page."""
        lang = self.resolve_language(metadata, preferred)
        if lang != preferred:
            log.debug(
                f"'{metadata.name}' has no '{preferred}' page, falling back to '{lang}'."
            )
        return self.store.language_directory(lang), metadata.default_platform

    def read_page(self, language_dir: str, platform: str, name: str) -> str:
        path = self.store.page_path(language_dir, platform, name)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise PageNotFoundError(
                f"Page for '{name}' is listed in the manifest but missing at '{path}'."
            ) from e
