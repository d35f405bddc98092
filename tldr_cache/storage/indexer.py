"""
Parses the cache manifest (index.json) into an in-memory CacheIndex.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from tldr_cache.exceptions import IndexCorruptError
from tldr_cache.models.command import CacheIndex, Manifest

log = logging.getLogger(__name__)


def load_index(path: Path) -> CacheIndex:
    """
    Reads and parses the manifest, preserving the order of its commands.

    Args:
        path: Location of the index.json file.

    Returns:
        A fully-populated CacheIndex.

    Raises:
        IndexCorruptError: If the file is missing, unreadable, not valid JSON,
        or does not match the expected shape.
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise IndexCorruptError(f"Manifest not found at '{path}'.") from e
    except (OSError, UnicodeDecodeError) as e:
        raise IndexCorruptError(f"Could not read manifest '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise IndexCorruptError(f"Manifest '{path}' is not valid JSON: {e}") from e

    try:
        manifest = Manifest.model_validate(raw)
    except ValidationError as e:
        raise IndexCorruptError(f"Manifest '{path}' has an invalid shape:\n{e}") from e

    seen: set[str] = set()
    for command in manifest.commands:
        if command.name in seen:
            raise IndexCorruptError(
                f"Manifest '{path}' lists command '{command.name}' more than once."
            )
        seen.add(command.name)

    index = CacheIndex.from_commands(manifest.commands)
    log.debug(f"Loaded {len(index)} commands from '{path}'.")
    return index
