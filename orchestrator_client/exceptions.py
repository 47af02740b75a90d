"""
orchestrator-client exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class CliError(Exception):
    """Exit code 1 for every failure this tool reports."""

    exit_code = 1


class MissingParameterError(CliError):
    """A parameter required by the selected command was empty."""

    def __init__(self, param):
        self.param = param
        super().__init__(f"[ERROR] {param} must be provided")


class UnsupportedCommandError(CliError):
    """Command name not found in the dispatch table."""

    def __init__(self, command):
        self.command = command
        super().__init__(f"[ERROR] Unsupported command {command}")


class TransportError(CliError):
    """Network failure, HTTP failure without an envelope, or unparseable body."""


class RemoteOutcomeError(CliError):
    """The remote outcome envelope reported an error code."""

    def __init__(self, message, details=None):
        self.message = message
        self.details = details
        super().__init__(message)


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
