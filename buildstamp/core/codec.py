"""JSON encoding of the persisted version file.

File shape (compact, keys in this exact order):

    {"packageVersion":200,"majorVersion":0,"minorVersion":1,
     "patchVersion":0,"stageNumber":0,"buildVersion":0}

Guarantees:
- encode_state(s) is deterministic: same state always yields identical text
- Keys follow field declaration order, not sorted order
- No whitespace between tokens and no trailing newline
- decode_state never guesses: anything that is not an object of integers
  raises MalformedStateError

The legacy shape written before the compatibility marker existed has no
"packageVersion" key and stores the stage under "stage". It decodes with a
package version of 0, which the store's gate then rejects.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional, Union

from .errors import MalformedStateError
from .types import VersionState

# (json key, attribute) in declaration order
FIELDS = (
    ("packageVersion", "package_version"),
    ("majorVersion", "major"),
    ("minorVersion", "minor"),
    ("patchVersion", "patch"),
    ("stageNumber", "stage_number"),
    ("buildVersion", "build"),
)

LEGACY_STAGE_KEY = "stage"


def state_to_dict(state: VersionState) -> Dict[str, int]:
    return {key: getattr(state, attr) for key, attr in FIELDS}


def encode_state(state: VersionState) -> str:
    """Serialize a state to the canonical compact JSON text."""
    return json.dumps(state_to_dict(state), separators=(",", ":"))


def is_legacy_payload(data: Dict[str, Any]) -> bool:
    """True for documents written before the package version marker existed."""
    return "packageVersion" not in data


def state_from_dict(data: Dict[str, Any], path: Optional[str] = None) -> VersionState:
    """
    Build a state from a decoded JSON object.

    Missing keys read as 0. The legacy "stage" key is used when
    "stageNumber" is absent.
    """
    values: Dict[str, int] = {}
    for key, attr in FIELDS:
        raw = data.get(key, 0)
        if key == "stageNumber" and key not in data:
            raw = data.get(LEGACY_STAGE_KEY, 0)
        # bool is an int subclass but never a valid field value
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise MalformedStateError(
                f"field {key!r} must be an integer, got {raw!r}", path=path
            )
        values[attr] = raw
    return VersionState(**values)


def decode_state(text: Union[str, bytes], path: Optional[str] = None) -> VersionState:
    """Parse the persisted JSON text (or raw UTF-8 bytes) into a state."""
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedStateError(f"invalid UTF-8: {e}", path=path) from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedStateError(f"invalid JSON: {e}", path=path) from e
    except RecursionError as e:
        raise MalformedStateError("JSON nested too deeply", path=path) from e
    if not isinstance(data, dict):
        raise MalformedStateError(
            f"expected a JSON object, got {type(data).__name__}", path=path
        )
    return state_from_dict(data, path=path)
