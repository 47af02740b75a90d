"""Cluster-wide renderers: cluster alias listing and replication analysis."""

from __future__ import annotations

from orchestrator_client.formatters._keys import render_key
from orchestrator_client.models import InstanceKey
from orchestrator_client.types import ClusterInfoPayload, ReplicationAnalysisEntry


def format_cluster_aliases(payload: list[ClusterInfoPayload]) -> str:
    """``ClusterName,ClusterAlias`` per cluster."""
    if not isinstance(payload, list):
        return ""
    lines = []
    for cluster in payload:
        if not isinstance(cluster, dict):
            continue
        lines.append(f"{cluster.get('ClusterName', '')},{cluster.get('ClusterAlias', '')}")
    return "\n".join(lines)


def format_replication_analysis(payload: list[ReplicationAnalysisEntry]) -> str:
    """One line per analyzed instance that has a problem to report."""
    if not isinstance(payload, list):
        return ""
    lines = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        analysis = entry.get("Analysis") or ""
        if not analysis or analysis == "NoProblem":
            continue
        key = InstanceKey.from_payload(entry.get("AnalyzedInstanceKey"))
        cluster = (entry.get("ClusterDetails") or {}).get("ClusterName", "")
        lines.append(f"{render_key(key)} (cluster {cluster}): {analysis}")
    return "\n".join(lines)
