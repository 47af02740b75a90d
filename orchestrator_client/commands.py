"""
Command dispatch for orchestrator-client.

Every supported command is one CommandBinding row in BINDINGS: a handler
shape, an endpoint path template, the parameters it needs, and the rule
that turns the response payload into output text. Adding a command means
appending one row.

Path templates use ``{param}`` placeholders, ``{a|b}`` for "first
non-empty of", and ``[/{param}]`` for a segment kept only when set.
"""

import re
import urllib.parse
from dataclasses import dataclass

from orchestrator_client import api, config
from orchestrator_client._utils import normalize_api_base
from orchestrator_client.exceptions import MissingParameterError, UnsupportedCommandError
from orchestrator_client.formatters import (
    extract_key,
    extract_keys,
    extract_master_key,
    extract_successor_key,
    format_cluster_aliases,
    format_replication_analysis,
    pretty_json,
    render_field,
    render_key,
    render_keys,
    render_moved_below,
    render_raw,
    render_values,
)
from orchestrator_client.models import InstanceKey

SINGLE_QUERY = "single-query"
RELOCATE_PAIR = "relocate-pair"
RELOCATE_REPLICAS = "relocate-replicas"
INSTANCE_ACTION = "instance-action"
GLOBAL_TOGGLE = "global-toggle"

# Parameters holding a normalized host/port; substituted without escaping.
_HOSTPORT_PARAMS = frozenset({"instance", "destination"})

_OPTIONAL_SEGMENT = re.compile(r"\[/\{([\w|-]+)\}\]")
_PLACEHOLDER = re.compile(r"\{([\w|-]+)\}")


@dataclass(frozen=True)
class CommandBinding:
    """One command: shape, path template, required params, output rule."""

    name: str
    shape: str
    path: str
    required: tuple[str, ...] = ()
    output: str = "raw"
    query: tuple[tuple[str, str], ...] = ()


# ---------------------------------------------------------------------------
# Path and query construction
# ---------------------------------------------------------------------------


def _param(request, name):
    """Return (value, is_hostport) for ``name`` or the first set of ``a|b``."""
    for part in name.split("|"):
        value = request.value(part)
        if value:
            return value, part in _HOSTPORT_PARAMS
    return "", False


def _segment(request, name):
    value, is_hostport = _param(request, name)
    if is_hostport:
        return value
    return urllib.parse.quote(value, safe="")


def build_path(template, request):
    """Render a binding path template against a CommandRequest."""

    def optional(match):
        value, _ = _param(request, match.group(1))
        if not value:
            return ""
        return "/" + _segment(request, match.group(1))

    path = _OPTIONAL_SEGMENT.sub(optional, template)
    return _PLACEHOLDER.sub(lambda m: _segment(request, m.group(1)), path)


def build_query(binding, request):
    return {key: request.value(param) for key, param in binding.query}


def check_required(binding, request):
    for name in binding.required:
        value, _ = _param(request, name)
        if not value:
            raise MissingParameterError(name)


# ---------------------------------------------------------------------------
# Output assembly
# ---------------------------------------------------------------------------


def assemble_output(rule, payload):
    """Apply an output rule to a classified payload."""
    if rule == "key":
        return render_key(extract_key(payload))
    if rule == "master_key":
        return render_key(extract_master_key(payload))
    if rule == "keys":
        return render_keys(extract_keys(payload))
    if rule == "instance_key":
        return render_key(InstanceKey.from_payload(payload))
    if rule == "successor_key":
        return render_key(extract_successor_key(payload))
    if rule == "moved_below":
        return render_moved_below(payload)
    if rule == "values":
        return render_values(payload)
    if rule == "cluster_aliases":
        return format_cluster_aliases(payload)
    if rule == "analysis":
        return format_replication_analysis(payload)
    if rule.startswith("field:"):
        return render_field(payload, rule.split(":", 1)[1])
    return render_raw(payload)


# ---------------------------------------------------------------------------
# Shape handlers
# ---------------------------------------------------------------------------


def _call(binding, request):
    check_required(binding, request)
    return api.call([build_path(binding.path, request)], build_query(binding, request))


def _run_single_query(binding, request):
    return assemble_output(binding.output, _call(binding, request))


def _run_relocate_pair(binding, request):
    return render_moved_below(_call(binding, request))


def _run_relocate_replicas(binding, request):
    return render_keys(extract_keys(_call(binding, request)))


def _run_instance_action(binding, request):
    return assemble_output(binding.output, _call(binding, request))


def _run_global_toggle(binding, request):
    return assemble_output(binding.output, _call(binding, request))


SHAPE_HANDLERS = {
    SINGLE_QUERY: _run_single_query,
    RELOCATE_PAIR: _run_relocate_pair,
    RELOCATE_REPLICAS: _run_relocate_replicas,
    INSTANCE_ACTION: _run_instance_action,
    GLOBAL_TOGGLE: _run_global_toggle,
}


# ---------------------------------------------------------------------------
# Binding table
# ---------------------------------------------------------------------------


def _query(name, path, output, required=("instance",), query=()):
    return CommandBinding(name, SINGLE_QUERY, path, required, output, query)


def _relocate(name, with_destination=True):
    if with_destination:
        return CommandBinding(
            name, RELOCATE_PAIR, f"{name}/{{instance}}/{{destination}}", ("instance", "destination")
        )
    return CommandBinding(name, RELOCATE_PAIR, f"{name}/{{instance}}", ("instance",))


def _relocate_replicas(name, with_destination=True):
    if with_destination:
        return CommandBinding(
            name,
            RELOCATE_REPLICAS,
            f"{name}/{{instance}}/{{destination}}",
            ("instance", "destination"),
            "keys",
        )
    return CommandBinding(name, RELOCATE_REPLICAS, f"{name}/{{instance}}", ("instance",), "keys")


def _action(name, path=None, required=("instance",), output="key", query=()):
    return CommandBinding(
        name, INSTANCE_ACTION, path or f"{name}/{{instance}}", required, output, query
    )


def _toggle(name, path=None, required=(), output="raw", query=()):
    return CommandBinding(name, GLOBAL_TOGGLE, path or name, required, output, query)


_TAG_QUERY = (("tag", "tag"),)
_COMMENT_QUERY = (("comment", "reason"),)
# Cluster-scoped commands accept an alias or any member instance.
_CLUSTER_HINT = ("alias|instance",)
_CLUSTER_INFO = "cluster-info/{alias|instance}"

BINDINGS: tuple[CommandBinding, ...] = (
    # --- instance queries ---
    _query("instance", "instance/{instance}", "key"),
    _query("which-instance", "instance/{instance}", "key"),
    _query("which-master", "instance/{instance}", "master_key"),
    _query("which-replicas", "instance-replicas/{instance}", "keys"),
    _query("tags", "tags/{instance}", "values"),
    _query("tag-value", "tag-value/{instance}", "raw", ("instance", "tag"), _TAG_QUERY),
    _query("search", "search", "keys", query=(("s", "instance_raw"),)),
    _query("topology", "topology/{alias|instance}", "raw", _CLUSTER_HINT),
    _query("topology-tabulated", "topology-tabulated/{alias|instance}", "raw", _CLUSTER_HINT),
    # --- cluster queries ---
    _query("which-cluster", _CLUSTER_INFO, "field:ClusterName", _CLUSTER_HINT),
    _query("which-cluster-alias", _CLUSTER_INFO, "field:ClusterAlias", _CLUSTER_HINT),
    _query("which-cluster-domain", _CLUSTER_INFO, "field:ClusterDomain", _CLUSTER_HINT),
    _query("which-cluster-master", "master/{alias|instance}", "key", _CLUSTER_HINT),
    _query("which-cluster-instances", "cluster/{alias|instance}", "keys", _CLUSTER_HINT),
    _query(
        "which-cluster-osc-replicas",
        "cluster-osc-replicas/{alias|instance}",
        "keys",
        _CLUSTER_HINT,
    ),
    _query(
        "which-heuristic-cluster-pool-instances",
        "heuristic-cluster-pool-instances/{alias}[/{pool}]",
        "keys",
        ("alias",),
    ),
    # --- cluster-wide ---
    _toggle("clusters", output="values"),
    _toggle("clusters-alias", "clusters-info", output="cluster_aliases"),
    _toggle("all-clusters-masters", "masters", output="keys"),
    _toggle("all-instances", output="keys"),
    _toggle("which-downtimed-instances", "downtimed[/{alias}]", output="keys"),
    _toggle("which-lost-in-recovery", "lost-in-recovery", output="keys"),
    _toggle("replication-analysis", output="analysis"),
    _toggle("tagged", required=("tag",), output="keys", query=_TAG_QUERY),
    _toggle("untag-all", required=("tag",), output="keys", query=_TAG_QUERY),
    _toggle("snapshot-topologies"),
    _toggle(
        "submit-pool-instances",
        "submit-pool-instances/{pool}",
        ("pool", "instance"),
        query=(("instances", "instance_raw"),),
    ),
    # --- relocation ---
    _relocate("relocate"),
    _relocate("move-below"),
    _relocate("move-equivalent"),
    _relocate("move-gtid"),
    _relocate("match"),
    _relocate("move-up", with_destination=False),
    _relocate("match-up", with_destination=False),
    _relocate("take-master", with_destination=False),
    _relocate("make-co-master", with_destination=False),
    CommandBinding("repoint", RELOCATE_PAIR, "repoint/{instance}[/{destination}]", ("instance",)),
    _relocate_replicas("relocate-replicas"),
    _relocate_replicas("move-replicas-gtid"),
    _relocate_replicas("match-replicas"),
    _relocate_replicas("move-up-replicas", with_destination=False),
    _relocate_replicas("repoint-replicas", with_destination=False),
    _relocate_replicas("match-up-replicas", with_destination=False),
    # --- instance actions ---
    _action("discover"),
    _action("async-discover", output="raw"),
    _action("forget", output="instance_key"),
    _action(
        "begin-maintenance",
        "begin-maintenance/{instance}/{owner}/{reason}",
        ("instance", "owner", "reason"),
        "instance_key",
    ),
    _action("end-maintenance", output="instance_key"),
    _action(
        "begin-downtime",
        "begin-downtime/{instance}/{owner}/{reason}/{duration}",
        ("instance", "owner", "reason"),
        "instance_key",
    ),
    _action("end-downtime", output="instance_key"),
    _action(
        "register-candidate",
        "register-candidate/{instance}/{promotion-rule}",
        ("instance", "promotion-rule"),
        "instance_key",
    ),
    _action(
        "register-hostname-unresolve",
        "register-hostname-unresolve/{instance}/{hostname}",
        ("instance", "hostname"),
        "instance_key",
    ),
    _action("deregister-hostname-unresolve", output="instance_key"),
    _action("stop-replica"),
    _action("stop-replica-nice"),
    _action("start-replica"),
    _action("restart-replica"),
    _action("reset-replica"),
    _action("detach-replica"),
    _action("reattach-replica"),
    _action("detach-replica-master-host"),
    _action("reattach-replica-master-host"),
    _action("skip-query"),
    _action("set-read-only"),
    _action("set-writeable"),
    _action("enable-gtid"),
    _action("disable-gtid"),
    _action("gtid-errant-reset-master"),
    _action("gtid-errant-inject-empty"),
    _action("flush-binary-logs"),
    _action("take-siblings"),
    _action("enable-semi-sync-master"),
    _action("disable-semi-sync-master"),
    _action("enable-semi-sync-replica"),
    _action("disable-semi-sync-replica"),
    _action("tag", required=("instance", "tag"), output="instance_key", query=_TAG_QUERY),
    _action("untag", required=("instance", "tag"), output="keys", query=_TAG_QUERY),
    # --- recovery ---
    _action("recover", "recover/{instance}[/{destination}]", output="successor_key"),
    _action("recover-lite", "recover-lite/{instance}[/{destination}]", output="successor_key"),
    _toggle(
        "force-master-failover",
        "force-master-failover/{alias|instance}",
        _CLUSTER_HINT,
        "successor_key",
    ),
    _toggle(
        "force-master-takeover",
        "force-master-takeover/{alias|instance}/{destination}",
        (*_CLUSTER_HINT, "destination"),
        "successor_key",
    ),
    _toggle(
        "graceful-master-takeover",
        "graceful-master-takeover/{alias|instance}[/{destination}]",
        _CLUSTER_HINT,
        "successor_key",
    ),
    _toggle(
        "graceful-master-takeover-auto",
        "graceful-master-takeover-auto/{alias|instance}[/{destination}]",
        _CLUSTER_HINT,
        "successor_key",
    ),
    _toggle(
        "ack-cluster-recoveries",
        "ack-recovery/cluster/{alias}",
        ("alias", "reason"),
        query=_COMMENT_QUERY,
    ),
    _action(
        "ack-instance-recoveries",
        "ack-recovery/instance/{instance}",
        ("instance", "reason"),
        "raw",
        _COMMENT_QUERY,
    ),
    _toggle("ack-all-recoveries", required=("reason",), query=_COMMENT_QUERY),
    _toggle("disable-global-recoveries"),
    _toggle("enable-global-recoveries"),
    _toggle("check-global-recoveries"),
)

COMMANDS = {binding.name: binding for binding in BINDINGS}


def get_binding(command):
    """Look up a command, accepting legacy ``slave`` spellings."""
    binding = COMMANDS.get(command.replace("slave", "replica"))
    if binding is None:
        raise UnsupportedCommandError(command)
    return binding


# ---------------------------------------------------------------------------
# Front-end-only commands
# ---------------------------------------------------------------------------


def cmd_which_api(request):
    return normalize_api_base(config.API_URL)


def cmd_api(request):
    """Raw pass-through: print the whole response after outcome checks."""
    if not request.path:
        raise MissingParameterError("path")
    response = api.fetch([request.path])
    api.check_outcome(response)
    return pretty_json(response.raw)


LOCAL_COMMANDS = {
    "which-api": cmd_which_api,
    "api": cmd_api,
}


def dispatch(request):
    """Run one CommandRequest and return the text to print."""
    local = LOCAL_COMMANDS.get(request.command)
    if local is not None:
        return local(request)
    binding = get_binding(request.command)
    return SHAPE_HANDLERS[binding.shape](binding, request)
