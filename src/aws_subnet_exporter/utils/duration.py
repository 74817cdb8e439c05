"""
Duration string parsing for the --period option.

Accepts Go-style durations ("60s", "1m30s", "500ms", "1.5h") and bare
numbers, which are read as seconds.
"""

import math
import re

from aws_subnet_exporter.exceptions import ConfigurationError

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """
    Parse a duration string into seconds.

    Args:
        value: Duration such as "60s", "1m30s" or "45".

    Returns:
        Duration in seconds.

    Raises:
        ConfigurationError: If the string is not a valid duration.
    """
    text = value.strip()
    if not text:
        raise ConfigurationError("Empty duration")

    try:
        seconds = float(text)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds):
            raise ConfigurationError(f"Invalid duration '{value}'")
        return seconds

    position = 0
    seconds = 0.0
    for match in _COMPONENT.finditer(text):
        if match.start() != position:
            break
        number, unit = match.groups()
        seconds += float(number) * _UNIT_SECONDS[unit]
        position = match.end()

    if position != len(text):
        raise ConfigurationError(
            f"Invalid duration '{value}'. Expected e.g. '60s', '1m30s' or '500ms'"
        )
    return seconds
