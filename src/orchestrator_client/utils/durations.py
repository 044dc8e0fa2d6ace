from __future__ import annotations

import math
import re
from datetime import timedelta
from decimal import ROUND_DOWN, Decimal
from typing import Union

# Compact or spaced tokens, e.g. "1h30m", "1h 30m", "90s", "1.5h", "2d"
TOKEN_RE = re.compile(r"(\d+(?:\.\d+)?)\s*([dhms])")
UNIT_SECONDS = {"d": 86400, "h": 3600, "m": 60, "s": 1}

DurationLike = Union[str, int, float, timedelta]


class DurationParseError(ValueError):
    """Raised when a duration cannot be turned into whole seconds."""


def parse_duration_seconds(duration: DurationLike) -> int:
    """
    Convert a timedelta, a number of seconds or a string like "1h 30m" into
    whole seconds.

    Rules:
    - Accept d/h/m/s tokens, compact or spaced; a bare number means seconds.
    - Decimals are allowed and truncated to the whole second.
    - Reject negatives, zero and strings with leftover text.
    """
    if duration is None:
        raise DurationParseError("Duration is required.")

    if isinstance(duration, bool):
        raise DurationParseError("Duration must be a number, string or timedelta.")
    if isinstance(duration, timedelta):
        total = Decimal(str(duration.total_seconds()))
    elif isinstance(duration, (int, float)):
        if isinstance(duration, float) and not math.isfinite(duration):
            raise DurationParseError(f"Duration must be finite, got {duration!r}.")
        total = Decimal(str(duration))
    else:
        total = _parse_string(duration)

    seconds = int(total.quantize(Decimal("1"), rounding=ROUND_DOWN))
    if seconds <= 0:
        raise DurationParseError(
            "Duration must be at least one second (e.g., '90s', '30m')."
        )
    return seconds


def format_duration(duration: DurationLike) -> str:
    """Render a duration the way orchestrator expects it in a path: "<N>s"."""
    return f"{parse_duration_seconds(duration)}s"


def _parse_string(text: str) -> Decimal:
    normalized = " ".join(str(text).lower().strip().split())
    if not normalized:
        raise DurationParseError("Duration is required.")
    if "-" in normalized:
        raise DurationParseError("Negative durations are not allowed.")

    if re.fullmatch(r"\d+(?:\.\d+)?", normalized):
        return Decimal(normalized)

    matches = list(TOKEN_RE.finditer(normalized))
    if not matches or TOKEN_RE.sub("", normalized).strip():
        raise DurationParseError(
            f"Could not parse duration {text!r} (e.g., '90s', '30m', '1h 30m')."
        )

    total = Decimal("0")
    for match in matches:
        total += Decimal(match.group(1)) * UNIT_SECONDS[match.group(2)]
    return total


__all__ = [
    "DurationParseError",
    "DurationLike",
    "parse_duration_seconds",
    "format_duration",
]
