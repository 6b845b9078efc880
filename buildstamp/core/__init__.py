"""Core types and logic for Buildstamp."""

from .codec import (
    decode_state,
    encode_state,
    is_legacy_payload,
    state_from_dict,
    state_to_dict,
)
from .errors import (
    IncompatibleSchemaError,
    MalformedStateError,
    VersionEncodingError,
    VersionStateError,
)
from .types import UNKNOWN_STAGE_ABBREVIATION, VersionStage, VersionState

__all__ = [
    # Core types
    "VersionStage",
    "VersionState",
    "UNKNOWN_STAGE_ABBREVIATION",
    # Codec
    "encode_state",
    "decode_state",
    "state_to_dict",
    "state_from_dict",
    "is_legacy_payload",
    # Exceptions
    "VersionStateError",
    "MalformedStateError",
    "IncompatibleSchemaError",
    "VersionEncodingError",
]
