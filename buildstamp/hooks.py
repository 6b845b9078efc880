from __future__ import annotations

import logging
from typing import Tuple

from .storage.store import VersionStore

logger = logging.getLogger("buildstamp.hooks")


def on_build(store: VersionStore) -> Tuple[str, str]:
    """
    Build hook: bump the build counter and persist it.

    Call once per build, before the artifact is produced.

    Returns:
        (previous, current) version strings
    """
    previous = store.current().version_string

    store.increment_build()
    store.save()

    current = store.current().version_string
    logger.info("Incremented build number: %s -> %s", previous, current)
    return previous, current
