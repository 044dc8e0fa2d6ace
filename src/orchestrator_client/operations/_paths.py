from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional
from urllib.parse import quote

from orchestrator_client.models import InstanceKey
from orchestrator_client.utils.durations import DurationLike, format_duration


def segment(value: Any) -> str:
    """Percent-encode one path segment; "/" included."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe="")


def build_path(*parts: Any) -> str:
    """
    Join positional segments into "/a/b/c".

    An InstanceKey expands to two segments, hostname then port. None parts
    are skipped so optional trailing segments can be passed inline.
    """
    segments: List[str] = []
    for part in parts:
        if part is None:
            continue
        if isinstance(part, InstanceKey):
            segments.append(segment(part.hostname))
            segments.append(str(part.port))
        else:
            segments.append(segment(part))
    return "/" + "/".join(segments)


def duration_segment(duration: Optional[DurationLike]) -> Optional[str]:
    return None if duration is None else format_duration(duration)


def parse_instance_keys(values: List[str]) -> List[InstanceKey]:
    """Parse "host:port" strings, skipping anything malformed."""
    keys: List[InstanceKey] = []
    for value in values:
        try:
            keys.append(InstanceKey.parse(value))
        except ValueError:
            continue
    return keys
