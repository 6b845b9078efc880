from .core import (
    # Core types
    UNKNOWN_STAGE_ABBREVIATION,
    # Exceptions
    IncompatibleSchemaError,
    MalformedStateError,
    VersionEncodingError,
    VersionStage,
    VersionState,
    VersionStateError,
    # Codec
    decode_state,
    encode_state,
    is_legacy_payload,
)
from .hooks import on_build
from .publish import (
    BuildSettings,
    BuildSettingsPublisher,
    NullPublisher,
    RecordingPublisher,
    VersionPublisher,
)
from .storage import INCOMPATIBLE_SCHEMA_REASON, LoadOutcome, LoadStatus, VersionStore
from .version import (
    BUILDSTAMP_VERSION,
    DEFAULT_SAVE_PATH,
    MINIMUM_PACKAGE_VERSION,
    PACKAGE_VERSION,
)

__version__ = BUILDSTAMP_VERSION

__all__ = [
    # Version
    "BUILDSTAMP_VERSION",
    "PACKAGE_VERSION",
    "MINIMUM_PACKAGE_VERSION",
    "DEFAULT_SAVE_PATH",
    # Core types
    "VersionStage",
    "VersionState",
    "UNKNOWN_STAGE_ABBREVIATION",
    # Codec
    "encode_state",
    "decode_state",
    "is_legacy_payload",
    # Storage
    "VersionStore",
    "LoadOutcome",
    "LoadStatus",
    "INCOMPATIBLE_SCHEMA_REASON",
    # Publishers
    "VersionPublisher",
    "NullPublisher",
    "BuildSettings",
    "BuildSettingsPublisher",
    "RecordingPublisher",
    # Hooks
    "on_build",
    # Exceptions
    "VersionStateError",
    "MalformedStateError",
    "IncompatibleSchemaError",
    "VersionEncodingError",
]
