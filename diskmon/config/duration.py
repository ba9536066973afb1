"""
Duration strings such as "10s", "500ms" or "1h30m".
"""

import re

from diskmon.exceptions import ConfigError

UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
    "d": 86400.0,
}

_PART = re.compile(r"(\d+(?:\.\d+)?)\s*(ns|us|ms|s|m|h|d)")
_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def parse_duration(text: str) -> float:
    """
    Parse a duration into seconds.

    A bare number is read as seconds. Otherwise the text must be one or more
    <number><unit> parts, e.g. "1m30s".

    Raises:
        ConfigError: If the text is empty or malformed.
    """
    if not isinstance(text, str):
        raise ConfigError(f"illegal interval: {text!r}")

    value = text.strip().lower()
    if _NUMBER.fullmatch(value):
        return float(value)

    total = 0.0
    pos = 0
    for match in _PART.finditer(value):
        if match.start() != pos and value[pos : match.start()].strip():
            raise ConfigError(f"illegal interval: {text}")
        total += float(match.group(1)) * UNIT_SECONDS[match.group(2)]
        pos = match.end()

    if pos == 0 or value[pos:].strip():
        raise ConfigError(f"illegal interval: {text}")
    return total
