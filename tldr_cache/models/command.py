"""
Models describing the cached command manifest (index.json).
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pydantic import BaseModel, Field


class CommandTarget(BaseModel):
    """An (os, language) pair a page exists for. Informational only."""

    os: str
    language: str


class CommandMetadata(BaseModel):
    """A single manifest entry."""

    name: str = Field(..., min_length=1)
    # The first platform is the default one pages are read from.
    platform: list[str] = Field(..., min_length=1)
    language: list[str] = Field(..., min_length=1)
    target: list[CommandTarget] = Field(default_factory=list)

    @property
    def default_platform(self) -> str:
        return self.platform[0]


class Manifest(BaseModel):
    """The top-level shape of index.json."""

    commands: list[CommandMetadata]


@dataclass(frozen=True)
class CacheIndex:
    """
    An immutable, fully-parsed snapshot of the manifest.

    Readers hold a reference to one snapshot at a time, so a refresh never
    exposes a partially-built index.
    """

    names: tuple[str, ...] = ()
    commands: Mapping[str, CommandMetadata] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_commands(cls, commands: list[CommandMetadata]) -> "CacheIndex":
        return cls(
            names=tuple(c.name for c in commands),
            commands=MappingProxyType({c.name: c for c in commands}),
        )

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.commands

    def get(self, name: str) -> CommandMetadata | None:
        return self.commands.get(name)
