"""Envelope decoding: {Code, Message, Details} into typed results."""

from __future__ import annotations

import json
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Optional, Type, TypeVar, get_origin

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .errors import OrchestratorAPIError, OrchestratorDecodeError

T = TypeVar("T")

INTEGER_SUCCESS = 1
STRING_SUCCESS = "OK"


class CodeConvention(str, Enum):
    """How the success discriminant in `Code` is represented."""

    AUTO = "auto"
    INTEGER = "integer"
    STRING = "string"

    @classmethod
    def parse(cls, value: "CodeConvention | str | None") -> "CodeConvention":
        if isinstance(value, cls):
            return value
        if not value:
            return cls.AUTO
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(
                f"Unknown code convention {value!r}; expected auto, integer or string"
            ) from exc


class Envelope(BaseModel):
    code: Any = Field(default=None, alias="Code")
    message: Optional[str] = Field(default="", alias="Message")
    details: Any = Field(default=None, alias="Details")

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    def is_success(self, convention: CodeConvention = CodeConvention.AUTO) -> bool:
        return is_success(self.code, convention)

    def raise_for_code(
        self,
        convention: CodeConvention = CodeConvention.AUTO,
        *,
        status_code: Optional[int] = None,
    ) -> "Envelope":
        if not self.is_success(convention):
            raise OrchestratorAPIError(self.message or "", status_code=status_code)
        return self


def is_success(code: Any, convention: CodeConvention = CodeConvention.AUTO) -> bool:
    # bool is an int subclass; a JSON true is never a valid code.
    if isinstance(code, bool):
        return False
    if convention is CodeConvention.INTEGER:
        return isinstance(code, int) and code == INTEGER_SUCCESS
    if convention is CodeConvention.STRING:
        return isinstance(code, str) and code == STRING_SUCCESS
    if isinstance(code, int):
        return code == INTEGER_SUCCESS
    if isinstance(code, str):
        return code == STRING_SUCCESS
    return False


def parse_envelope(payload: Any) -> Optional[Envelope]:
    """Return an Envelope if `payload` looks like one, else None."""
    if not isinstance(payload, dict) or "Code" not in payload:
        return None
    message = payload.get("Message")
    if message is not None and not isinstance(message, str):
        return None
    try:
        return Envelope.model_validate(payload)
    except ValidationError:
        return None


@lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def _is_collection(target: Any) -> bool:
    origin = get_origin(target) or target
    return origin in (list, dict, tuple, set, frozenset)


def _empty(target: Any) -> Any:
    origin = get_origin(target) or target
    if origin is dict:
        return {}
    if origin is tuple:
        return ()
    if origin in (set, frozenset):
        return origin()
    return []


def decode_details(details: Any, target: Type[T]) -> T:
    """
    Decode an untyped Details tree into `target`.

    Details is re-serialized to JSON and validated against the target. Record
    scalars are strict: unknown keys are ignored and missing keys take their
    defaults, but a string where a number belongs fails.
    A null Details decodes to an empty collection for list/dict targets and
    is an error for single records.
    """
    if details is None:
        if _is_collection(target):
            return _empty(target)
        raise OrchestratorDecodeError(
            f"Response Details is null; expected {_target_name(target)}"
        )

    try:
        raw = json.dumps(details)
    except (TypeError, ValueError) as exc:
        raise OrchestratorDecodeError(
            f"Details is not serializable as JSON: {exc}"
        ) from exc

    try:
        return _adapter(target).validate_json(raw)
    except ValidationError as exc:
        raise OrchestratorDecodeError(
            f"Details did not match {_target_name(target)}: {exc}"
        ) from exc


def _target_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


# Scalar accessors. These read Details directly and fall back to the
# stringified form for unexpected JSON types instead of failing.


def details_as_str(details: Any) -> str:
    if details is None:
        return ""
    if isinstance(details, str):
        return details
    if isinstance(details, bool):
        return "true" if details else "false"
    if isinstance(details, float) and details.is_integer():
        return str(int(details))
    if isinstance(details, (int, float)):
        return str(details)
    if isinstance(details, (dict, list)):
        return json.dumps(details)
    return str(details)


def details_as_bool(details: Any) -> bool:
    if isinstance(details, bool):
        return details
    if details is None:
        return False
    if isinstance(details, (int, float)):
        return details != 0
    return details_as_str(details).strip().lower() == "true"


def details_as_int(details: Any) -> int:
    """
    Normalize a numeric Details value (lag and similar counters).

    Floats are truncated, ints pass through, null is zero. Anything else,
    including booleans and numeric-looking strings, is a decode error.
    """
    if details is None:
        return 0
    if isinstance(details, bool):
        raise OrchestratorDecodeError("unexpected type for numeric value: bool")
    if isinstance(details, int):
        return details
    if isinstance(details, float):
        return int(details)
    raise OrchestratorDecodeError(
        f"unexpected type for numeric value: {type(details).__name__}"
    )


def details_as_dict(details: Any) -> Dict[str, Any]:
    return decode_details(details, Dict[str, Any])


__all__ = [
    "CodeConvention",
    "Envelope",
    "INTEGER_SUCCESS",
    "STRING_SUCCESS",
    "is_success",
    "parse_envelope",
    "decode_details",
    "details_as_str",
    "details_as_bool",
    "details_as_int",
    "details_as_dict",
]
