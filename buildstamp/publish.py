"""
Publishers that propagate the current version to build settings.

The store calls ``publish(state)`` after every mutation. Two configurations
exist:

- NullPublisher for shipped runtime code, where there are no build settings
  to update
- BuildSettingsPublisher for tooling, which fills the four build
  configuration slots (and optionally writes them to a JSON file)

A publisher has no return value. The store logs and swallows publisher
failures so that a broken sink never undoes a version change.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import List, Optional, Protocol

from .core.types import VersionState

logger = logging.getLogger("buildstamp.publish")


class VersionPublisher(Protocol):
    def publish(self, state: VersionState) -> None:
        ...


class NullPublisher:
    """Publisher for runtime builds: ignores every version change."""

    def publish(self, state: VersionState) -> None:
        return None


@dataclass
class BuildSettings:
    """
    Build configuration slots that carry the version.

    Attributes:
        bundle_version: Full version string (desktop bundle version)
        package_version: "major.minor.patch.build" package version
        version_code: Numeric encoding (integer version code)
        build_number: Full version string (store build number)
    """

    bundle_version: Optional[str] = None
    package_version: Optional[str] = None
    version_code: Optional[int] = None
    build_number: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class BuildSettingsPublisher:
    """
    Writes the version into a BuildSettings instance.

    Each slot is assigned independently, in order. If the numeric encoding
    fails the error propagates after the string slots were written and
    version_code keeps its previous value.

    If ``path`` is set, the settings are dumped to that JSON file after
    every publish, including one whose numeric encoding failed.
    """

    settings: BuildSettings = field(default_factory=BuildSettings)
    path: Optional[str] = None

    def publish(self, state: VersionState) -> None:
        version_string = state.version_string
        self.settings.bundle_version = version_string
        self.settings.package_version = ".".join(str(n) for n in state.version_tuple)
        self.settings.build_number = version_string
        try:
            self.settings.version_code = state.version_numeric
        finally:
            # The string slots reach the file even if the numeric encoding fails
            if self.path:
                self._write()

        logger.debug("Published version %s to build settings", version_string)

    def _write(self) -> None:
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.settings.to_dict(), f, indent=2)


@dataclass
class RecordingPublisher:
    """Keeps a snapshot of every published state, oldest first."""

    published: List[VersionState] = field(default_factory=list)

    def publish(self, state: VersionState) -> None:
        self.published.append(state.copy())

    @property
    def last(self) -> Optional[VersionState]:
        return self.published[-1] if self.published else None
