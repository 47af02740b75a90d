"""Instance-key extractors: pure, fail-soft projections over payloads."""

from __future__ import annotations

from orchestrator_client.models import InstanceKey
from orchestrator_client.types import InstancePayload, TopologyRecoveryPayload


def extract_key(payload: InstancePayload) -> InstanceKey | None:
    """Read ``payload.Key``; None when absent or not a key object."""
    if not isinstance(payload, dict):
        return None
    return InstanceKey.from_payload(payload.get("Key"))


def extract_master_key(payload: InstancePayload) -> InstanceKey | None:
    """Read ``payload.MasterKey``; an empty master hostname means no master."""
    if not isinstance(payload, dict):
        return None
    return InstanceKey.from_payload(payload.get("MasterKey"))


def extract_successor_key(payload: TopologyRecoveryPayload) -> InstanceKey | None:
    """Read ``payload.SuccessorKey`` from a recovery record."""
    if not isinstance(payload, dict):
        return None
    return InstanceKey.from_payload(payload.get("SuccessorKey"))


def extract_keys(payload) -> list[InstanceKey]:
    """Collect keys from ``[{"Key": ...}, ...]``.

    A ``{"Key": [...]}`` object, or an array of bare key objects, is
    accepted as well. Entries without a usable key are skipped.
    """
    if isinstance(payload, dict):
        items = payload.get("Key")
        if not isinstance(items, list):
            return []
        candidates = items
    elif isinstance(payload, list):
        candidates = [
            item.get("Key") if isinstance(item, dict) and "Key" in item else item
            for item in payload
        ]
    else:
        return []
    keys = []
    for candidate in candidates:
        key = InstanceKey.from_payload(candidate)
        if key is not None:
            keys.append(key)
    return keys


def render_key(key: InstanceKey | None) -> str:
    """``hostname:port``, or an empty string for no key."""
    if key is None:
        return ""
    return str(key)


def render_keys(keys):
    return "\n".join(render_key(k) for k in keys)


def render_moved_below(payload):
    """``<moved instance><<new master>`` as printed after a relocation."""
    return f"{render_key(extract_key(payload))}<{render_key(extract_master_key(payload))}"
