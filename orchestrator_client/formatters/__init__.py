"""Output formatting package for orchestrator-client.

Re-exports all public names so consumers can do:
    from orchestrator_client.formatters import render_key
"""

from orchestrator_client.formatters._clusters import (
    format_cluster_aliases,
    format_replication_analysis,
)
from orchestrator_client.formatters._core import (
    emit_error_details,
    output,
    pretty_json,
    render_field,
    render_raw,
    render_values,
)
from orchestrator_client.formatters._keys import (
    extract_key,
    extract_keys,
    extract_master_key,
    extract_successor_key,
    render_key,
    render_keys,
    render_moved_below,
)

__all__ = [
    "emit_error_details",
    "extract_key",
    "extract_keys",
    "extract_master_key",
    "extract_successor_key",
    "format_cluster_aliases",
    "format_replication_analysis",
    "output",
    "pretty_json",
    "render_field",
    "render_key",
    "render_keys",
    "render_moved_below",
    "render_raw",
    "render_values",
]
