"""
Data Models Layer.

This package contains the Pydantic models and dataclasses that define the core
data structures used throughout the application, such as configuration, the
command manifest and refresh status.
"""

from .command import CacheIndex, CommandMetadata, CommandTarget, Manifest
from .config import TldrConfig
from .status import RefreshState, RefreshStatus

__all__ = [
    "CacheIndex",
    "CommandMetadata",
    "CommandTarget",
    "Manifest",
    "RefreshState",
    "RefreshStatus",
    "TldrConfig",
]
