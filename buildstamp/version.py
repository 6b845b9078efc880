"""
Buildstamp version constants.

This module defines version constants for the Buildstamp library and the
format of the persisted version file. The package version marker is what
gates loading: files written by an incompatible earlier format carry a lower
marker (or none at all) and are rejected instead of being installed.
"""

# Library version (matches pyproject.toml)
BUILDSTAMP_VERSION = "0.2.0"

# Schema marker of the current file format; new files start at the minimum
# marker and saves keep whatever marker was loaded.
# Increment when the file format changes in a breaking way
PACKAGE_VERSION = 200

# Oldest schema marker that can still be loaded (0.2.0 and upwards)
MINIMUM_PACKAGE_VERSION = 200

# Where the version file lives unless configured otherwise
DEFAULT_SAVE_PATH = "versionConfig.json"

# Version installed when no file exists yet: 0.1.0a0
DEFAULT_MAJOR = 0
DEFAULT_MINOR = 1
DEFAULT_PATCH = 0
DEFAULT_STAGE_NUMBER = 0
DEFAULT_BUILD = 0
