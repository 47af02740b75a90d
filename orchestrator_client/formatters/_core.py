"""Core output dispatchers shared by the command handlers."""

import json
import sys


def pretty_json(data):
    """Two-space indented JSON, the layout operators' scripts parse."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def render_raw(payload):
    """Strings verbatim, everything else as indented JSON."""
    if isinstance(payload, str):
        return payload
    return pretty_json(payload)


def render_values(payload):
    """One array element per line; non-array payloads render raw."""
    if not isinstance(payload, list):
        return render_raw(payload)
    return "\n".join(v if isinstance(v, str) else json.dumps(v) for v in payload)


def render_field(payload, name):
    """A scalar field of an object payload, or an empty string."""
    if not isinstance(payload, dict):
        return ""
    value = payload.get(name)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def output(text):
    """Print a command result. Empty results print nothing."""
    if text:
        print(text)


def emit_error_details(details):
    """Print remote error details to stderr, skipping JSON null."""
    if details is None:
        return
    print(render_raw(details), file=sys.stderr)
