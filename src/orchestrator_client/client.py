import asyncio
import logging
import time
from typing import Any, Awaitable, Dict, Mapping, Optional, Sequence, Type, TypeVar

import httpx

from .core.context import CallContext, current_call_context
from .core.observability import log_event
from .envelope import (
    CodeConvention,
    Envelope,
    decode_details,
    details_as_bool,
    details_as_int,
    details_as_str,
    parse_envelope,
)
from .errors import (
    OrchestratorAPIError,
    OrchestratorCancelledError,
    OrchestratorDecodeError,
    OrchestratorHTTPError,
    OrchestratorParseError,
    OrchestratorTransportError,
)
from .leader import LeaderResolver

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 30.0
_NO_JSON = object()


async def _bounded(aw: Awaitable[T], ctx: Optional[CallContext], what: str) -> T:
    """
    Await `aw` unless the call context is cancelled or its deadline passes
    first; the loser is cancelled so the underlying connection is released.
    """
    if ctx is None:
        return await aw

    work = asyncio.ensure_future(aw)
    watcher = asyncio.ensure_future(ctx.wait_cancelled())
    remaining = ctx.remaining()
    try:
        done, _ = await asyncio.wait(
            {work, watcher},
            timeout=None if remaining is None else max(remaining, 0),
            return_when=asyncio.FIRST_COMPLETED,
        )
    finally:
        watcher.cancel()
        if not work.done():
            work.cancel()

    if work in done:
        return work.result()

    await asyncio.gather(work, return_exceptions=True)
    if ctx.cancelled:
        reason = f": {ctx.reason}" if ctx.reason else ""
        raise OrchestratorCancelledError(f"call cancelled during {what}{reason}")
    raise OrchestratorCancelledError(f"call deadline exceeded during {what}")


class OrchestratorClient:
    """
    Shared async HTTP client for the orchestrator REST API.
    - Handles auth, custom headers, timeouts and leader pinning
    - Decodes the {Code, Message, Details} envelope and maps errors
    - No retries and no business logic; operations own the paths
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        endpoints: Optional[Sequence[str]] = None,
        host: Optional[str] = None,
        use_https: bool = False,
        username: Optional[str] = None,
        password: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        verify: bool = True,
        url_prefix: Optional[str] = None,
        code_convention: "CodeConvention | str" = CodeConvention.AUTO,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        if not base_url and host:
            scheme = "https" if use_https else "http"
            base_url = f"{scheme}://{host.strip()}"

        self.resolver = LeaderResolver(
            base_url=base_url,
            endpoints=endpoints or (),
            url_prefix=url_prefix,
            logger=logger,
        )
        self.timeout_seconds = timeout_seconds
        self.code_convention = CodeConvention.parse(code_convention)
        self.log = logger or logging.getLogger("orchestrator_client.client")

        auth = None
        if username or password:
            auth = httpx.BasicAuth(username or "", password or "")

        default_headers = {"Accept": "application/json"}
        default_headers.update(headers or {})

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            auth=auth,
            headers=default_headers,
            timeout=timeout_seconds,
            verify=verify,
        )

        self._leader: Optional[str] = None
        self._leader_lock = asyncio.Lock()

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "OrchestratorClient":
        await self.ensure_leader()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- Leader pinning ---

    @property
    def leader(self) -> Optional[str]:
        """API root currently pinned, or None before the first resolution."""
        return self._leader

    async def ensure_leader(self) -> str:
        if self._leader is not None:
            return self._leader
        async with self._leader_lock:
            if self._leader is None:
                self._leader = await self.resolver.resolve(self.http)
        return self._leader

    async def refresh_leader(self) -> str:
        """Re-run leader detection. Only probes when several endpoints exist."""
        if self._leader is not None and not self.resolver.requires_probe:
            return self._leader
        async with self._leader_lock:
            self._leader = await self.resolver.resolve(self.http)
        return self._leader

    # --- Transport ---

    def _url(self, root: str, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return f"{root}{path}"

    async def send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        op: Optional[str] = None,
    ) -> httpx.Response:
        """
        Issue one request against the pinned leader and return the raw response.
        - Honours the active call context, before dispatch and while in flight
        - Raises OrchestratorTransportError on network/timeout errors
        - Does not look at the status code or body
        """
        method = method.upper()
        ctx = current_call_context()
        if ctx is not None:
            ctx.check()

        root = await _bounded(self.ensure_leader(), ctx, "leader resolution")
        url = self._url(root, path)
        start = time.perf_counter()

        try:
            resp = await _bounded(
                self.http.request(method, url, params=params, json=json),
                ctx,
                f"{method} {url}",
            )
        except OrchestratorCancelledError:
            self._log_request(method, path, root, "cancelled", start, op)
            raise
        except httpx.HTTPError as exc:
            self._log_request(
                method, path, root, "exception", start, op, error_type=type(exc).__name__
            )
            raise OrchestratorTransportError(
                f"Network error calling {method} {url}: {exc}"
            ) from exc

        self._log_request(method, path, root, resp.status_code, start, op)
        return resp

    def _log_request(
        self,
        method: str,
        path: str,
        endpoint: str,
        status: Any,
        start: float,
        op: Optional[str],
        **fields: Any,
    ) -> None:
        # Credentials live in the auth header only; never logged.
        log_event(
            "orchestrator.request",
            self.log,
            method=method,
            path=path,
            endpoint=endpoint,
            status=status,
            duration_ms=int((time.perf_counter() - start) * 1000),
            op=op,
            **fields,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        op: Optional[str] = None,
    ) -> Envelope:
        """
        Core request method.
        - Raises OrchestratorAPIError when the envelope Code is not success,
          or when a >= 400 response still carries an error envelope
        - Raises OrchestratorHTTPError on >= 400 without an envelope
        - Raises OrchestratorParseError if the body isn't a JSON object
        - Returns the successful Envelope
        """
        resp = await self.send(method, path, params=params, json=json, op=op)
        payload = self._json_or_missing(resp)

        if resp.status_code >= 400:
            raise self._to_error(resp, payload, method=method.upper())

        if payload is _NO_JSON or not isinstance(payload, dict):
            snippet = (resp.text or "")[:500]
            raise OrchestratorParseError(
                f"Expected JSON object from {resp.request.method} "
                f"{resp.request.url}, got body snippet: {snippet!r}"
            )

        envelope = parse_envelope(payload)
        if envelope is None:
            raise OrchestratorDecodeError(
                f"Response from {resp.request.method} {resp.request.url} is not "
                f"an orchestrator envelope (keys: {sorted(payload)})"
            )
        return envelope.raise_for_code(self.code_convention)

    @staticmethod
    def _json_or_missing(resp: httpx.Response) -> Any:
        if not resp.content:
            return _NO_JSON
        try:
            return resp.json()
        except ValueError:
            return _NO_JSON

    def _to_error(self, resp: httpx.Response, payload: Any, *, method: str) -> Exception:
        envelope = parse_envelope(payload) if payload is not _NO_JSON else None
        if envelope is not None and envelope.message:
            return OrchestratorAPIError(envelope.message, status_code=resp.status_code)
        return OrchestratorHTTPError(
            status_code=resp.status_code,
            method=method,
            url=str(resp.request.url),
            response_text=(resp.text or "")[:500],
        )

    async def get(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        op: Optional[str] = None,
    ) -> Envelope:
        return await self.request("GET", path, params=params, op=op)

    async def post(self, path: str, *, json: Any, op: Optional[str] = None) -> Envelope:
        return await self.request("POST", path, json=json, op=op)

    # --- Typed helpers used by the operation modules ---

    async def call(
        self,
        target: Type[T],
        path: str,
        *,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        op: Optional[str] = None,
    ) -> T:
        envelope = await self.request(method, path, params=params, json=json, op=op)
        return decode_details(envelope.details, target)

    async def call_action(
        self,
        path: str,
        *,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        op: Optional[str] = None,
    ) -> Envelope:
        return await self.request(method, path, params=params, json=json, op=op)

    async def call_bool(self, path: str, *, op: Optional[str] = None, **kwargs) -> bool:
        envelope = await self.request("GET", path, op=op, **kwargs)
        return details_as_bool(envelope.details)

    async def call_str(self, path: str, *, op: Optional[str] = None, **kwargs) -> str:
        envelope = await self.request("GET", path, op=op, **kwargs)
        return details_as_str(envelope.details)

    async def call_int(self, path: str, *, op: Optional[str] = None, **kwargs) -> int:
        envelope = await self.request("GET", path, op=op, **kwargs)
        return details_as_int(envelope.details)

    async def get_text(self, path: str, *, op: Optional[str] = None) -> str:
        """
        Fetch a text payload (ASCII topology and friends). Accepts either a
        plain-text body or an envelope whose Details is the text.
        """
        resp = await self.send("GET", path, op=op)
        payload = self._json_or_missing(resp)
        if resp.status_code >= 400:
            raise self._to_error(resp, payload, method="GET")

        envelope = parse_envelope(payload) if payload is not _NO_JSON else None
        if envelope is None:
            return resp.text
        envelope.raise_for_code(self.code_convention)
        return details_as_str(envelope.details)

    async def get_bytes(self, path: str, *, op: Optional[str] = None) -> bytes:
        resp = await self.send("GET", path, op=op)
        if resp.status_code >= 400:
            raise self._to_error(resp, self._json_or_missing(resp), method="GET")
        return resp.content


__all__ = ["OrchestratorClient", "DEFAULT_TIMEOUT_SECONDS"]
