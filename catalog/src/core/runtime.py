"""Wire codec for movie runtimes.

Clients send runtimes as ``"<N> mins"`` and receive them back as
``"<N> minutes"``. Existing callers depend on both spellings.
"""
import json
import re

from core.errors import InvalidRuntimeFormat

INPUT_UNIT = "mins"
OUTPUT_UNIT = "minutes"

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_runtime(value) -> int:
    """Parse an already-unquoted runtime value such as ``"102 mins"``."""
    if not isinstance(value, str):
        raise InvalidRuntimeFormat()

    parts = value.split(" ")
    if len(parts) != 2 or parts[1] != INPUT_UNIT:
        raise InvalidRuntimeFormat()

    if not _INTEGER_PATTERN.fullmatch(parts[0]):
        raise InvalidRuntimeFormat()
    minutes = int(parts[0])
    if not _INT32_MIN <= minutes <= _INT32_MAX:
        raise InvalidRuntimeFormat()

    return minutes


def decode_runtime(raw: str | bytes) -> int:
    """Decode a raw JSON token, e.g. ``b'"102 mins"'``, into minutes."""
    try:
        value = json.loads(raw)
    except (ValueError, TypeError) as exc:
        raise InvalidRuntimeFormat() from exc
    return parse_runtime(value)


def format_runtime(minutes: int) -> str:
    return f"{minutes} {OUTPUT_UNIT}"


def encode_runtime(minutes: int) -> str:
    """Return the JSON token for a runtime, quotes included."""
    return json.dumps(format_runtime(minutes))
