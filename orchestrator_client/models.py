"""
Typed models for command requests, instance keys, and API responses.
"""

from dataclasses import dataclass, field
from typing import Any

from orchestrator_client import config
from orchestrator_client._utils import normalize_hostport
from orchestrator_client.exceptions import TransportError
from orchestrator_client.types import InstanceKeyPayload


@dataclass(frozen=True)
class InstanceKey:
    """Identity of a database instance, rendered as ``hostname:port``."""

    hostname: str
    port: int

    def __str__(self):
        return f"{self.hostname}:{self.port}"

    @classmethod
    def from_payload(cls, value: InstanceKeyPayload | None) -> "InstanceKey | None":
        """Build from ``{"Hostname", "Port"}``. Returns None when unusable."""
        if not isinstance(value, dict):
            return None
        hostname = value.get("Hostname")
        if not hostname:
            return None
        return cls(hostname=str(hostname), port=value.get("Port", 0))


@dataclass(frozen=True)
class CommandRequest:
    """Validated parameter set for one invocation.

    ``instance`` and ``destination`` hold the normalized ``host/port``
    path form; ``instance_raw`` keeps the operator's input for commands
    that forward it untouched (search, pool submission).
    """

    command: str
    instance: str = ""
    instance_raw: str = ""
    destination: str = ""
    alias: str = ""
    owner: str = ""
    reason: str = ""
    duration: str = config.DEFAULT_DURATION
    promotion_rule: str = ""
    tag: str = ""
    pool: str = ""
    hostname: str = ""
    path: str = ""

    def value(self, name):
        """Return a parameter by name; ``a|b`` picks the first non-empty one."""
        for part in name.split("|"):
            found = getattr(self, part.replace("-", "_"), "")
            if found:
                return found
        return ""

    @classmethod
    def from_namespace(cls, ns):
        default_port = getattr(ns, "default_port", config.DEFAULT_PORT)
        command = (ns.command or "").strip()
        return cls(
            command=command,
            instance=normalize_hostport(ns.instance, default_port),
            instance_raw=ns.instance or "",
            destination=normalize_hostport(ns.destination, default_port),
            alias=ns.alias or "",
            owner=ns.owner or "",
            reason=ns.reason or "",
            duration=ns.duration or config.DEFAULT_DURATION,
            promotion_rule=ns.promotion_rule or "",
            tag=ns.tag or "",
            pool=ns.pool or "",
            hostname=ns.hostname or "",
            path=ns.path or "",
        )


# ---------------------------------------------------------------------------
# API responses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ArrayResponse:
    """Top-level JSON array (list endpoints)."""

    items: list

    @property
    def raw(self):
        return self.items


@dataclass(frozen=True)
class OutcomeResponse:
    """``{Code, Message, Details}`` envelope (action endpoints)."""

    code: str
    message: str
    details: Any = None
    raw: dict = field(default_factory=dict)


@dataclass(frozen=True)
class PlainObjectResponse:
    """JSON object without an outcome envelope (e.g. instance lookup)."""

    fields: dict

    @property
    def raw(self):
        return self.fields


ApiResponse = ArrayResponse | OutcomeResponse | PlainObjectResponse


def inspect_response(value) -> ApiResponse:
    """Classify decoded JSON into one of the three response shapes."""
    if isinstance(value, list):
        return ArrayResponse(items=value)
    if isinstance(value, dict):
        if "Code" in value:
            return OutcomeResponse(
                code=str(value.get("Code") or ""),
                message=str(value.get("Message") or ""),
                details=value.get("Details"),
                raw=value,
            )
        return PlainObjectResponse(fields=value)
    raise TransportError(
        "[ERROR] Unexpected response shape from orchestrator API: "
        f"expected JSON array or object, got {type(value).__name__}."
    )


@dataclass(frozen=True)
class Success:
    payload: Any


@dataclass(frozen=True)
class Failure:
    message: str
    details: Any = None


Outcome = Success | Failure
