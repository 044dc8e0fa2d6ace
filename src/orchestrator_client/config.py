from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from dotenv import load_dotenv

from .client import DEFAULT_TIMEOUT_SECONDS, OrchestratorClient


class MissingBaseUrlError(ValueError):
    """Raised when neither a base URL nor endpoints are configured."""


@dataclass(frozen=True)
class OrchestratorSettings:
    base_url: str = ""
    endpoints: Tuple[str, ...] = ()
    username: str = ""
    password: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    insecure_skip_verify: bool = False
    url_prefix: str = ""
    code_convention: str = "auto"

    def client_kwargs(self) -> Dict[str, Any]:
        return {
            "base_url": self.base_url or None,
            "endpoints": list(self.endpoints),
            "username": self.username or None,
            "password": self.password or None,
            "headers": dict(self.headers),
            "timeout_seconds": self.timeout_seconds,
            "verify": not self.insecure_skip_verify,
            "url_prefix": self.url_prefix or None,
            "code_convention": self.code_convention,
        }


def _get_bool_env(name: str, default: bool) -> bool:
    """Parse a boolean environment variable with a safe default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if val in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be greater than zero, got {raw!r}")
    return value


def _split_csv_env(name: str) -> List[str]:
    raw = os.getenv(name, "")
    return [part.strip() for part in raw.split(",") if part.strip()]


def _parse_headers_env(name: str) -> Dict[str, str]:
    """Parse comma separated "Name: value" pairs into a header dict."""
    headers: Dict[str, str] = {}
    for item in _split_csv_env(name):
        key, sep, value = item.partition(":")
        if not sep or not key.strip():
            raise ValueError(f"{name} entries must look like 'Name: value', got {item!r}")
        headers[key.strip()] = value.strip()
    return headers


def load_settings(*, use_dotenv: bool = True) -> OrchestratorSettings:
    """Load orchestrator connection settings from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    return OrchestratorSettings(
        base_url=os.getenv("ORCHESTRATOR_URL", "").strip(),
        endpoints=tuple(_split_csv_env("ORCHESTRATOR_ENDPOINTS")),
        username=os.getenv("ORCHESTRATOR_USERNAME", "").strip(),
        password=os.getenv("ORCHESTRATOR_PASSWORD", ""),
        headers=_parse_headers_env("ORCHESTRATOR_HEADERS"),
        timeout_seconds=_get_float_env("ORCHESTRATOR_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        insecure_skip_verify=_get_bool_env("ORCHESTRATOR_INSECURE_SKIP_VERIFY", False),
        url_prefix=os.getenv("ORCHESTRATOR_URL_PREFIX", "").strip(),
        code_convention=os.getenv("ORCHESTRATOR_CODE_CONVENTION", "auto").strip()
        or "auto",
    )


def create_client_from_env(*, use_dotenv: bool = True, **kwargs) -> OrchestratorClient:
    """Create an OrchestratorClient from environment variables."""
    settings = load_settings(use_dotenv=use_dotenv)
    if not settings.base_url and not settings.endpoints:
        raise MissingBaseUrlError(
            "Missing ORCHESTRATOR_URL or ORCHESTRATOR_ENDPOINTS in environment."
        )
    options = settings.client_kwargs()
    options.update(kwargs)
    return OrchestratorClient(**options)


__all__ = [
    "MissingBaseUrlError",
    "OrchestratorSettings",
    "load_settings",
    "create_client_from_env",
]
