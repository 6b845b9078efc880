"""Exceptions raised by the version state layer."""

from __future__ import annotations

from typing import Optional


class VersionStateError(Exception):
    """Base exception for version state errors."""

    pass


class MalformedStateError(VersionStateError):
    """
    Raised when a version file exists but cannot be parsed.

    Malformed state is never silently replaced by the default version:
    the caller decides whether to abort or repair the file.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"MalformedStateError({self.path}): {self.args[0]}"
        return f"MalformedStateError: {self.args[0]}"


class IncompatibleSchemaError(VersionStateError):
    """
    Raised by strict loading when the stored package version is too old.

    Non-strict loading reports the same condition as a rejected
    LoadOutcome instead.
    """

    def __init__(
        self,
        message: str,
        package_version: int,
        minimum: int,
        path: Optional[str] = None,
    ):
        super().__init__(message)
        self.package_version = package_version
        self.minimum = minimum
        self.path = path

    def __str__(self) -> str:
        return (
            f"IncompatibleSchemaError(package_version={self.package_version}, "
            f"minimum={self.minimum}): {self.args[0]}"
        )


class VersionEncodingError(VersionStateError, ValueError):
    """Raised when a version cannot be packed into its numeric encoding."""

    pass
