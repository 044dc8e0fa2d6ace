"""orchestrator_client package exports."""

from . import operations
from .client import OrchestratorClient
from .config import (
    MissingBaseUrlError,
    OrchestratorSettings,
    create_client_from_env,
    load_settings,
)
from .core import CallContext, call_context, setup_logging
from .envelope import (
    CodeConvention,
    Envelope,
    decode_details,
    details_as_bool,
    details_as_int,
    details_as_str,
)
from .errors import (
    LeaderResolutionError,
    OrchestratorAPIError,
    OrchestratorCancelledError,
    OrchestratorClientError,
    OrchestratorDecodeError,
    OrchestratorHTTPError,
    OrchestratorParseError,
    OrchestratorTransportError,
)
from .models import Instance, InstanceKey, InvalidInstanceKeyError

__all__ = [
    # Client
    "OrchestratorClient",
    "operations",
    # Configuration
    "OrchestratorSettings",
    "MissingBaseUrlError",
    "load_settings",
    "create_client_from_env",
    # Call context and logging
    "CallContext",
    "call_context",
    "setup_logging",
    # Envelope
    "CodeConvention",
    "Envelope",
    "decode_details",
    "details_as_str",
    "details_as_bool",
    "details_as_int",
    # Exceptions
    "OrchestratorClientError",
    "OrchestratorTransportError",
    "OrchestratorCancelledError",
    "OrchestratorHTTPError",
    "OrchestratorAPIError",
    "OrchestratorDecodeError",
    "OrchestratorParseError",
    "LeaderResolutionError",
    # Models
    "Instance",
    "InstanceKey",
    "InvalidInstanceKeyError",
]
