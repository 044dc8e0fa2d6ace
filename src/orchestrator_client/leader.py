from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import httpx

from .core.observability import log_event
from .errors import LeaderResolutionError

LEADER_PROBE_TIMEOUT_SECONDS = 5.0
LEADER_CHECK = "leader-check"
ROUTED_LEADER_CHECK = "routed-leader-check"


def normalize_prefix(prefix: Optional[str]) -> str:
    """Leading slash, no trailing slash; empty stays empty."""
    cleaned = (prefix or "").strip().strip("/")
    return f"/{cleaned}" if cleaned else ""


def normalize_endpoint(endpoint: str, url_prefix: Optional[str] = None) -> str:
    """
    Turn a configured endpoint into an API root.

    Trailing slashes are dropped, the URL prefix is inserted and "/api" is
    appended exactly once.
    """
    base = (endpoint or "").strip().rstrip("/")
    if base.endswith("/api"):
        return base
    prefix = normalize_prefix(url_prefix)
    if prefix and not base.endswith(prefix):
        base = f"{base}{prefix}"
    return f"{base}/api"


class LeaderResolver:
    """
    Picks the authoritative API root out of the configured endpoints.

    - no endpoints: the base URL is trusted as-is
    - one endpoint: used without probing
    - several: GET <endpoint>/leader-check on each in order, first 200 wins;
      then the same with /routed-leader-check; otherwise LeaderResolutionError
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        endpoints: Sequence[str] = (),
        url_prefix: Optional[str] = None,
        probe_timeout_seconds: float = LEADER_PROBE_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        self.endpoints: List[str] = [
            normalize_endpoint(e, url_prefix) for e in endpoints if e and e.strip()
        ]
        self.base_url = normalize_endpoint(base_url, url_prefix) if base_url else None
        if not self.endpoints and not self.base_url:
            raise ValueError("base_url or endpoints must be provided.")
        self.probe_timeout_seconds = probe_timeout_seconds
        self.log = logger or logging.getLogger("orchestrator_client.leader")

    @property
    def requires_probe(self) -> bool:
        return len(self.endpoints) > 1

    async def resolve(self, http: httpx.AsyncClient) -> str:
        if not self.endpoints:
            return self.base_url  # type: ignore[return-value]
        if len(self.endpoints) == 1:
            return self.endpoints[0]

        for check in (LEADER_CHECK, ROUTED_LEADER_CHECK):
            for endpoint in self.endpoints:
                if await self._probe(http, endpoint, check):
                    log_event(
                        "orchestrator.leader_resolved",
                        self.log,
                        leader=endpoint,
                        op=check,
                    )
                    return endpoint

        raise LeaderResolutionError(self.endpoints)

    async def _probe(self, http: httpx.AsyncClient, endpoint: str, check: str) -> bool:
        url = f"{endpoint}/{check}"
        try:
            resp = await http.get(url, timeout=self.probe_timeout_seconds)
        except httpx.HTTPError as exc:
            # An unreachable candidate is simply not the leader.
            log_event(
                "orchestrator.leader_probe_failed",
                self.log,
                endpoint=endpoint,
                op=check,
                error_type=type(exc).__name__,
            )
            return False
        log_event(
            "orchestrator.leader_probe",
            self.log,
            endpoint=endpoint,
            op=check,
            status=resp.status_code,
        )
        return resp.status_code == 200


__all__ = [
    "LeaderResolver",
    "normalize_endpoint",
    "normalize_prefix",
    "LEADER_PROBE_TIMEOUT_SECONDS",
]
