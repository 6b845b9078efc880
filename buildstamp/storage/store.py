from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Union

from ..core.codec import decode_state, encode_state
from ..core.errors import IncompatibleSchemaError
from ..core.types import VersionStage, VersionState
from ..publish import NullPublisher, VersionPublisher
from ..version import DEFAULT_SAVE_PATH, MINIMUM_PACKAGE_VERSION

logger = logging.getLogger("buildstamp.store")

INCOMPATIBLE_SCHEMA_REASON = "incompatible schema version"


class LoadStatus(str, Enum):
    """Result classification of VersionStore.load()."""

    LOADED = "loaded"  # File read and installed
    DEFAULTED = "defaulted"  # No file, default version installed
    REJECTED = "rejected"  # File too old, live state kept


@dataclass(frozen=True)
class LoadOutcome:
    """
    Outcome of a load attempt.

    Attributes:
        status: What happened to the live state
        path: File that was (or would have been) read
        reason: Why the file was rejected, None otherwise
        package_version: Schema marker found in the file, if one was read
    """

    status: LoadStatus
    path: str
    reason: Optional[str] = None
    package_version: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status != LoadStatus.REJECTED


@dataclass
class VersionStore:
    """
    Owns the live version of one project and its JSON file.

    A store is constructed by the caller and handed to whoever needs it;
    there is no module-level instance. Within one store exactly one
    VersionState is live. It is loaded lazily on first access, mutated in
    place by set/increment operations and replaced wholesale by a
    successful load().

    Not thread-safe: callers sharing a store across threads must serialize
    access themselves. Writes are plain overwrites with no atomic rename.
    """

    path: str = DEFAULT_SAVE_PATH
    publisher: VersionPublisher = field(default_factory=NullPublisher)
    minimum_package_version: int = MINIMUM_PACKAGE_VERSION
    on_saved: Optional[Callable[[str], None]] = None
    _state: Optional[VersionState] = field(default=None, init=False, repr=False)

    @property
    def is_loaded(self) -> bool:
        return self._state is not None

    def current(self) -> VersionState:
        """Return the live state, loading it from disk on first access."""
        if self._state is None:
            self.load()
        return self._state

    def reset(self) -> None:
        """Forget the live state; the next current() reloads from disk."""
        self._state = None

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def set_version(
        self,
        major: int,
        minor: int,
        patch: int,
        stage: Union[VersionStage, int],
        build: int = 0,
    ) -> VersionState:
        """
        Overwrite the five product fields and publish the result.

        The package version marker is left untouched.

        Raises:
            ValueError: If a number is negative or stage is not a known
                VersionStage. The live state is not modified.
        """
        numbers = {"major": major, "minor": minor, "patch": patch, "build": build}
        for name, value in numbers.items():
            if value < 0:
                raise ValueError(f"{name} version must not be negative, got {value}")
        stage = VersionStage(stage)

        state = self.current()
        state.major = major
        state.minor = minor
        state.patch = patch
        state.stage = stage
        state.build = build

        self._publish()
        return state

    def increment_major(self) -> VersionState:
        """Increment major and reset minor, patch and build."""
        state = self.current()
        state.major += 1
        state.minor = 0
        state.patch = 0
        state.build = 0

        self._publish()
        return state

    def increment_minor(self) -> VersionState:
        """Increment minor and reset patch and build."""
        state = self.current()
        state.minor += 1
        state.patch = 0
        state.build = 0

        self._publish()
        return state

    def increment_patch(self) -> VersionState:
        """Increment patch and reset build."""
        state = self.current()
        state.patch += 1
        state.build = 0

        self._publish()
        return state

    def increment_build(self) -> VersionState:
        state = self.current()
        state.build += 1

        self._publish()
        return state

    def _publish(self) -> None:
        # The mutation already happened; a failing sink must not undo it.
        try:
            self.publisher.publish(self._state)
        except Exception:
            logger.exception(
                "Failed to publish version %s to build settings",
                self._state.version_string,
            )

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self) -> None:
        """
        Write the live state to the version file, replacing its content.

        Raises:
            OSError: If the file cannot be written. Not retried.
        """
        text = encode_state(self.current())
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)
        logger.debug("Saved version %s to %s", self._state.version_string, self.path)

        if self.on_saved is not None:
            try:
                self.on_saved(self.path)
            except Exception:
                logger.exception("on_saved callback failed for %s", self.path)

    def load(self, strict: bool = False) -> LoadOutcome:
        """
        Load the version file and install it as the live state.

        - No file: the default version 0.1.0a0 is installed (DEFAULTED).
        - Compatible file: its content is installed (LOADED).
        - File with a package version below the minimum: the live state is
          kept, or the default installed if there was none (REJECTED). With
          ``strict=True`` IncompatibleSchemaError is raised instead of
          returning.

        Raises:
            MalformedStateError: If the file exists but cannot be parsed.
                The live state is not modified.
            OSError: If the file exists but cannot be read.
        """
        if not os.path.exists(self.path):
            self._state = VersionState.default()
            logger.info("No version file at %s, using default version", self.path)
            return LoadOutcome(status=LoadStatus.DEFAULTED, path=self.path)

        with open(self.path, "rb") as f:
            data = f.read()
        loaded = decode_state(data, path=self.path)

        if not loaded.is_compatible(self.minimum_package_version):
            logger.warning(
                "Incompatible version file %s (package version %d, minimum %d); "
                "keeping the current version",
                self.path,
                loaded.package_version,
                self.minimum_package_version,
            )
            if self._state is None:
                self._state = VersionState.default()
            if strict:
                raise IncompatibleSchemaError(
                    f"{self.path} was written by an incompatible version",
                    package_version=loaded.package_version,
                    minimum=self.minimum_package_version,
                    path=self.path,
                )
            return LoadOutcome(
                status=LoadStatus.REJECTED,
                path=self.path,
                reason=INCOMPATIBLE_SCHEMA_REASON,
                package_version=loaded.package_version,
            )

        self._state = loaded
        logger.debug("Loaded version %s from %s", loaded.version_string, self.path)
        return LoadOutcome(
            status=LoadStatus.LOADED,
            path=self.path,
            package_version=loaded.package_version,
        )
