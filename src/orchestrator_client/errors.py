from typing import Optional


class OrchestratorClientError(Exception):
    """Base error for client failures."""


class OrchestratorTransportError(OrchestratorClientError):
    """Connection, DNS, TLS or timeout failure; the httpx error is chained."""


class OrchestratorCancelledError(OrchestratorClientError):
    """The active call context was cancelled or its deadline passed."""


class OrchestratorHTTPError(OrchestratorClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        response_text: Optional[str] = None,
    ):
        message = f"API request failed with status {status_code}: {method} {url}"
        if response_text:
            message = f"{message}: {response_text}"
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.url = url
        self.response_text = response_text


class OrchestratorAPIError(OrchestratorClientError):
    """
    Envelope came back with a non-success Code.

    `message` is the server's Message, untouched; callers match on it.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(f"API error: {message}")
        self.message = message
        self.status_code = status_code


class OrchestratorDecodeError(OrchestratorClientError):
    """Details could not be coerced into the requested shape."""


class OrchestratorParseError(OrchestratorDecodeError):
    """Response body was not a JSON object."""


class LeaderResolutionError(OrchestratorClientError):
    def __init__(self, endpoints):
        super().__init__("no leader found among endpoints: " + ", ".join(endpoints))
        self.endpoints = list(endpoints)


__all__ = [
    "OrchestratorClientError",
    "OrchestratorTransportError",
    "OrchestratorCancelledError",
    "OrchestratorHTTPError",
    "OrchestratorAPIError",
    "OrchestratorDecodeError",
    "OrchestratorParseError",
    "LeaderResolutionError",
]
