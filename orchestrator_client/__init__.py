"""orchestrator-client: topology management commands over the orchestrator HTTP API."""

from orchestrator_client.config import VERSION
from orchestrator_client.exceptions import (
    CliError,
    MissingParameterError,
    RemoteOutcomeError,
    TransportError,
    UnsupportedCommandError,
)
from orchestrator_client.models import CommandRequest, InstanceKey

__all__ = [
    "VERSION",
    "CliError",
    "CommandRequest",
    "InstanceKey",
    "MissingParameterError",
    "RemoteOutcomeError",
    "TransportError",
    "UnsupportedCommandError",
]
