"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_ARCHIVE_URL = "https://tldr.sh/assets/tldr.zip"
DEFAULT_CACHE_DIR = str(Path("~") / ".tldr" / "cache")

# e.g. "en", "zh", "pt_BR", "zh_TW"
_LANGUAGE_REGEX = re.compile(r"^[A-Za-z]{2,3}(?:_[A-Za-z0-9]{2,4})?$")


class TldrConfig(BaseModel):
    """A validated configuration model for the page cache."""

    language: str = "en"
    cache_dir: str = DEFAULT_CACHE_DIR
    archive_url: str = DEFAULT_ARCHIVE_URL

    # Network Settings
    max_attempts: int = 3
    connect_timeout: float = 15.0
    read_timeout: float = 90.0

    # Internal fields not loaded from INI file
    config_path: str = Field("", repr=False)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Ensures the language looks like a tldr language code."""
        if not _LANGUAGE_REGEX.match(v):
            raise ValueError(
                f"Language must be a code such as 'en', 'zh' or 'pt_BR', got: '{v}'"
            )
        return v

    @field_validator("cache_dir")
    @classmethod
    def validate_cache_dir(cls, v: str) -> str:
        if not v:
            raise ValueError("Cache directory cannot be empty.")
        return v

    @field_validator("archive_url")
    @classmethod
    def validate_archive_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("Archive URL must be an http(s) URL.")
        return v

    @field_validator("max_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        """Ensures a reasonable number of download attempts."""
        if v < 1 or v > 10:
            raise ValueError("Max attempts must be between 1 and 10.")
        return v

    @field_validator("connect_timeout", "read_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeouts must be positive.")
        return v

    @property
    def cache_path(self) -> Path:
        """The cache root with '~' expanded."""
        return Path(self.cache_dir).expanduser()

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
