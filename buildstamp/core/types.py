from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional, Tuple

from ..version import (
    DEFAULT_BUILD,
    DEFAULT_MAJOR,
    DEFAULT_MINOR,
    DEFAULT_PATCH,
    DEFAULT_STAGE_NUMBER,
    MINIMUM_PACKAGE_VERSION,
)
from .errors import VersionEncodingError

logger = logging.getLogger("buildstamp.types")

UNKNOWN_STAGE_ABBREVIATION = "-"

# Each of minor and patch gets two decimal digits in the numeric encoding
NUMERIC_FIELD_LIMIT = 100


class VersionStage(IntEnum):
    """Release maturity, ordered by ascending maturity."""

    ALPHA = 0
    BETA = 1
    RC = 2
    RELEASE = 3

    @property
    def abbreviation(self) -> str:
        return _STAGE_ABBREVIATIONS[self]

    @classmethod
    def parse(cls, text: str) -> "VersionStage":
        """
        Parse a stage from its name or abbreviation (case-insensitive).

        Accepts "alpha", "beta", "rc", "release" as well as "a", "b", "f".
        """
        key = text.strip().lower()
        for stage in cls:
            if key in (stage.name.lower(), stage.abbreviation):
                return stage
        raise ValueError(f"Unknown version stage: {text!r}")


_STAGE_ABBREVIATIONS = {
    VersionStage.ALPHA: "a",
    VersionStage.BETA: "b",
    VersionStage.RC: "rc",
    VersionStage.RELEASE: "f",
}


@dataclass
class VersionState:
    """
    The version of a project, as held in memory and persisted to disk.

    Attributes:
        package_version: Schema marker of the persisted format (not the
            product version)
        major: Increased for major breaking changes
        minor: Increased for minor changes
        patch: Increased for small backwards compatible changes
        stage_number: Ordinal of the VersionStage; kept as a plain int so
            that unknown ordinals read from disk survive a round trip
        build: Increased every time the project is built

    Derived values (version_string, version_numeric, ...) are computed on
    access and never stored.
    """

    package_version: int = MINIMUM_PACKAGE_VERSION
    major: int = DEFAULT_MAJOR
    minor: int = DEFAULT_MINOR
    patch: int = DEFAULT_PATCH
    stage_number: int = DEFAULT_STAGE_NUMBER
    build: int = DEFAULT_BUILD

    @classmethod
    def default(cls) -> "VersionState":
        """The version installed when nothing has been saved yet: 0.1.0a0."""
        return cls()

    @property
    def stage(self) -> Optional[VersionStage]:
        """The release stage, or None if stage_number is not a known ordinal."""
        try:
            return VersionStage(self.stage_number)
        except ValueError:
            return None

    @stage.setter
    def stage(self, value: VersionStage) -> None:
        self.stage_number = int(value)

    @property
    def stage_abbreviation(self) -> str:
        stage = self.stage
        if stage is None:
            logger.warning(
                "Unrecognized stage number %r, using %r as abbreviation",
                self.stage_number,
                UNKNOWN_STAGE_ABBREVIATION,
            )
            return UNKNOWN_STAGE_ABBREVIATION
        return stage.abbreviation

    @property
    def version_string(self) -> str:
        """Format [major].[minor].[patch][stage][build], e.g. 1.2.3rc4."""
        return (
            f"{self.major}.{self.minor}.{self.patch}"
            f"{self.stage_abbreviation}{self.build}"
        )

    @property
    def short_version_string(self) -> str:
        """Format [major].[minor], with .[patch] only if patch is not 0."""
        short = f"{self.major}.{self.minor}"
        if self.patch != 0:
            short += f".{self.patch}"
        return short

    @property
    def version_numeric(self) -> int:
        """
        Numeric encoding major*10000 + minor*100 + patch (1.2.3 -> 10203).

        Raises:
            VersionEncodingError: If minor or patch do not fit into two
                decimal digits; the encoding would collide with another
                version otherwise.
        """
        for name, value in (("minor", self.minor), ("patch", self.patch)):
            if not 0 <= value < NUMERIC_FIELD_LIMIT:
                raise VersionEncodingError(
                    f"{name} version {value} does not fit the numeric encoding "
                    f"(must be between 0 and {NUMERIC_FIELD_LIMIT - 1})"
                )
        return self.major * 10000 + self.minor * 100 + self.patch

    @property
    def version_tuple(self) -> Tuple[int, int, int, int]:
        return (self.major, self.minor, self.patch, self.build)

    def is_compatible(self, minimum: int = MINIMUM_PACKAGE_VERSION) -> bool:
        return self.package_version >= minimum

    def same_version(self, other: "VersionState") -> bool:
        """Compare the product fields only, ignoring the schema marker."""
        return (
            self.major == other.major
            and self.minor == other.minor
            and self.patch == other.patch
            and self.stage_number == other.stage_number
            and self.build == other.build
        )

    def copy(self) -> "VersionState":
        return replace(self)
