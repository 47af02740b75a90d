"""
Shared pure-utility functions for orchestrator-client.

These helpers have no business logic and no side effects.
They are used across api.py, commands.py and cli.py.
"""


def normalize_hostport(raw, default_port):
    """Turn ``host`` or ``host:port`` into the ``host/port`` path form.

    Empty input yields an empty string so callers can run their own
    required-field checks. Nothing is validated: the server decides.
    """
    if not raw:
        return ""
    if ":" in raw:
        host, port = raw.rsplit(":", 1)
        return f"{host}/{port}"
    return f"{raw}/{default_port}"


def normalize_api_base(base):
    """Ensure the base URL ends with ``/api`` exactly once."""
    if base.endswith("/api"):
        return base
    if base.endswith("/"):
        base = base[:-1]
    if base.endswith("/api"):
        return base
    return base + "/api"


def _strip_message(message):
    """Trim whitespace and surrounding single quotes from a server message."""
    if message is None:
        return ""
    text = str(message).strip()
    if len(text) >= 2 and text[0] == text[-1] == "'":
        text = text[1:-1]
    return text.strip()
