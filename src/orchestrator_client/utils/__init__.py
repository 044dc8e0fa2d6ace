from .durations import (
    DurationParseError,
    format_duration,
    parse_duration_seconds,
)

__all__ = ["DurationParseError", "format_duration", "parse_duration_seconds"]
