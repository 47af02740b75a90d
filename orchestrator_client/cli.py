"""
orchestrator-client: topology management commands over the orchestrator HTTP API
"""

import argparse
import sys

from orchestrator_client import config
from orchestrator_client.commands import dispatch
from orchestrator_client.exceptions import CliError, MissingParameterError, RemoteOutcomeError
from orchestrator_client.formatters import emit_error_details, output
from orchestrator_client.models import CommandRequest

HELP_TEXT = """\
Usage: orchestrator-client -c <command> [flags...]

Flags:
  -c, --command <name>        Command to run (required)
  -i, --instance <host[:port]>
                              Instance to operate on (port defaults to --default-port)
  -d, --destination <host[:port]>
                              Destination instance for relocation (-s is accepted too)
  -a, --alias <name>          Cluster alias, usable instead of an instance
  -o, --owner <name>          Owner for downtime and maintenance
  -r, --reason <text>         Reason for downtime/maintenance, comment for acks
  -u, --duration <dur>        Downtime duration (default: 10m)
  -R, --promotion-rule <rule> Promotion rule for register-candidate
  -t, --tag <name[=value]>    Tag for tag commands
  -l, --pool <name>           Pool name for pool commands
  -H, --hostname <name>       Hostname for register-hostname-unresolve
  -P, --path <path>           Raw API path for the api command
  --default-port <n>          Port used when an instance omits one (default: 3306)
  -U, --api <url>             API base URL (default: $ORCHESTRATOR_API or http://localhost:3000)
  -b, --auth <user:password>  HTTP basic auth credentials
  -v, --verbose               Log HTTP requests to stderr
  --version                   Show version number

Commands:
  Instance:  instance, which-instance, which-master, which-replicas, tags, tag-value,
             search, topology, topology-tabulated
  Cluster:   which-cluster, which-cluster-alias, which-cluster-domain, which-cluster-master,
             which-cluster-instances, which-cluster-osc-replicas,
             which-heuristic-cluster-pool-instances
  Global:    clusters, clusters-alias, all-clusters-masters, all-instances,
             which-downtimed-instances, which-lost-in-recovery, replication-analysis,
             tagged, untag-all, snapshot-topologies, submit-pool-instances
  Relocate:  relocate, move-up, move-below, move-equivalent, move-gtid, match, match-up,
             take-master, make-co-master, repoint
  Replicas:  relocate-replicas, move-up-replicas, repoint-replicas, move-replicas-gtid,
             match-replicas, match-up-replicas
  Actions:   discover, async-discover, forget, begin-maintenance, end-maintenance,
             begin-downtime, end-downtime, register-candidate,
             register-hostname-unresolve, deregister-hostname-unresolve,
             stop-replica, stop-replica-nice, start-replica, restart-replica,
             reset-replica, detach-replica, reattach-replica,
             detach-replica-master-host, reattach-replica-master-host, skip-query,
             set-read-only, set-writeable, enable-gtid, disable-gtid,
             gtid-errant-reset-master, gtid-errant-inject-empty, flush-binary-logs,
             take-siblings, enable-semi-sync-master, disable-semi-sync-master,
             enable-semi-sync-replica, disable-semi-sync-replica, tag, untag
  Recovery:  recover, recover-lite, force-master-failover, force-master-takeover,
             graceful-master-takeover, graceful-master-takeover-auto,
             ack-cluster-recoveries, ack-instance-recoveries, ack-all-recoveries,
             disable-global-recoveries, enable-global-recoveries,
             check-global-recoveries
  Other:     help, which-api, api

Legacy command names spelled with "slave" are accepted (e.g. stop-slave).
"""


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _CliParser(argparse.ArgumentParser):
    """Parser that raises CliError instead of printing full help text."""

    def error(self, message):
        raise CliError(f"[ERROR] {message}")


def _port(value):
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be a positive integer") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return parsed


def build_parser():
    parser = _CliParser(
        prog="orchestrator-client",
        description="Topology management commands over the orchestrator HTTP API",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("--help", "-h", action="store_true", dest="show_help")
    parser.add_argument("--version", action="store_true", dest="show_version")
    parser.add_argument("--command", "-c")
    parser.add_argument("--instance", "-i")
    parser.add_argument("--destination", "-d", "-s")
    parser.add_argument("--alias", "-a")
    parser.add_argument("--owner", "-o")
    parser.add_argument("--reason", "-r")
    parser.add_argument("--duration", "-u", default=config.DEFAULT_DURATION)
    parser.add_argument("--promotion-rule", "-R", dest="promotion_rule")
    parser.add_argument("--tag", "-t")
    parser.add_argument("--pool", "-l")
    parser.add_argument("--hostname", "-H")
    parser.add_argument("--path", "-P")
    parser.add_argument(
        "--default-port", type=_port, default=config.DEFAULT_PORT, dest="default_port"
    )
    parser.add_argument("--api", "-U")
    parser.add_argument("--auth", "-b")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def _apply_overrides(ns):
    """Push per-invocation flags into module-level config."""
    if ns.api:
        config.API_URL = ns.api
    if ns.auth:
        user, _, password = ns.auth.partition(":")
        config.AUTH_USER = user
        config.AUTH_PASSWORD = password
    if ns.verbose:
        config.HTTP_LOG_ENABLED = True


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _emit_cli_error(err):
    if isinstance(err, RemoteOutcomeError):
        print(err.message, file=sys.stderr)
        emit_error_details(err.details)
        return
    print(str(err), file=sys.stderr)


def run(argv):
    """Parse ``argv`` and execute one command; returns the output text."""
    ns = build_parser().parse_args(argv)
    if ns.show_version:
        return f"orchestrator-client {config.VERSION}"
    if ns.show_help or ns.command == "help":
        return HELP_TEXT.rstrip("\n")
    if not ns.command:
        raise MissingParameterError("command")
    _apply_overrides(ns)
    return dispatch(CommandRequest.from_namespace(ns))


def main():
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    if len(sys.argv) < 2:
        print(HELP_TEXT)
        sys.exit(0)

    try:
        output(run(sys.argv[1:]))
    except CliError as e:
        _emit_cli_error(e)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
