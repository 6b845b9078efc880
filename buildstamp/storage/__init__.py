"""Storage implementations for Buildstamp."""

from .store import INCOMPATIBLE_SCHEMA_REASON, LoadOutcome, LoadStatus, VersionStore

__all__ = [
    "INCOMPATIBLE_SCHEMA_REASON",
    "LoadOutcome",
    "LoadStatus",
    "VersionStore",
]
