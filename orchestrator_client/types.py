"""Typed definitions for the JSON the remote service returns.

These TypedDicts document the shape of dicts consumed by the extractors.
They are optional; runtime behavior is unchanged (plain dicts).
"""

from __future__ import annotations

from typing import TypedDict

# ---------------------------------------------------------------------------
# Instance types
# ---------------------------------------------------------------------------


class InstanceKeyPayload(TypedDict):
    """``{"Hostname": ..., "Port": ...}`` as sent by the service."""

    Hostname: str
    Port: int


class InstancePayload(TypedDict, total=False):
    """Instance lookup result (only the fields the client reads)."""

    Key: InstanceKeyPayload
    MasterKey: InstanceKeyPayload
    ClusterName: str
    ReadOnly: bool


# ---------------------------------------------------------------------------
# Cluster types
# ---------------------------------------------------------------------------


class ClusterInfoPayload(TypedDict, total=False):
    ClusterName: str
    ClusterAlias: str
    ClusterDomain: str
    CountInstances: int


class ReplicationAnalysisEntry(TypedDict, total=False):
    AnalyzedInstanceKey: InstanceKeyPayload
    ClusterDetails: ClusterInfoPayload
    Analysis: str


class TopologyRecoveryPayload(TypedDict, total=False):
    """Recovery record returned by recover / failover / takeover."""

    Id: int
    SuccessorKey: InstanceKeyPayload | None
    IsSuccessful: bool
