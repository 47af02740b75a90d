"""
HTTP request layer, outcome classification, and the API gateway for
orchestrator-client.
"""

import base64
import http.client
import json
import sys
import time
import urllib.error
import urllib.parse
import urllib.request
import uuid

from orchestrator_client import config
from orchestrator_client._utils import _strip_message, normalize_api_base
from orchestrator_client.exceptions import HTTPError, RemoteOutcomeError, TransportError
from orchestrator_client.models import (
    Failure,
    OutcomeResponse,
    Success,
    inspect_response,
)

# ---------------------------------------------------------------------------
# Logging helpers
# ---------------------------------------------------------------------------


def _sanitize_url_for_log(url):
    """Mask credentials embedded in the URL before logging."""
    parsed = urllib.parse.urlsplit(url)
    if parsed.password is None:
        return url
    netloc = f"{parsed.username}:***@{parsed.hostname}"
    if parsed.port:
        netloc += f":{parsed.port}"
    return urllib.parse.urlunsplit(
        (parsed.scheme, netloc, parsed.path, parsed.query, parsed.fragment)
    )


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _sanitize_error(body, max_len=500):
    """Truncate and collapse an error body for safe display."""
    if not body:
        return ""
    cleaned = " ".join(body.split())
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _auth_header():
    if not config.AUTH_USER:
        return None
    token = f"{config.AUTH_USER}:{config.AUTH_PASSWORD}".encode()
    return "Basic " + base64.b64encode(token).decode("ascii")


def _http_request(url, headers=None):
    """Issue one GET and return the decoded JSON body.
    Raises HTTPError for HTTP errors (caller handles specific codes).
    Raises TransportError on network/timeout/parse errors."""
    request_id = (headers or {}).get("X-Request-Id")
    safe_url = _sanitize_url_for_log(url)
    timeout = config.HTTP_TIMEOUT_SECONDS or None
    start = time.perf_counter()
    req = urllib.request.Request(url, headers=headers or {}, method="GET")
    _log_http_event(
        phase="request",
        method="GET",
        url=safe_url,
        request_id=request_id,
        timeout_seconds=timeout,
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
            if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
                raise TransportError(
                    "[ERROR] Response too large from orchestrator API "
                    f"(>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
                )
            _log_http_event(
                phase="response",
                method="GET",
                url=safe_url,
                status=getattr(resp, "status", 200),
                bytes=len(raw),
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
            try:
                return json.loads(raw.decode("utf-8"))
            except (json.JSONDecodeError, UnicodeDecodeError):
                raise TransportError(
                    "[ERROR] Unexpected response from orchestrator API (not valid JSON)."
                ) from None
    except urllib.error.HTTPError as e:
        error_body = (
            e.read(config.HTTP_MAX_RESPONSE_BYTES).decode("utf-8", errors="replace")
            if e.fp
            else ""
        )
        _log_http_event(
            phase="response",
            method="GET",
            url=safe_url,
            status=e.code,
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
            request_id=request_id,
        )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        _log_http_event(
            phase="network_error",
            method="GET",
            url=safe_url,
            error="timeout",
            request_id=request_id,
        )
        raise TransportError(
            f"[ERROR] Request timed out after {timeout} seconds. Is the orchestrator API reachable?"
        ) from e
    except urllib.error.URLError as e:
        _log_http_event(
            phase="network_error",
            method="GET",
            url=safe_url,
            error=f"url_error: {e.reason}",
            request_id=request_id,
        )
        raise TransportError(f"[ERROR] Connection failed: {e.reason}") from e
    except (http.client.HTTPException, ConnectionError) as e:
        _log_http_event(
            phase="network_error",
            method="GET",
            url=safe_url,
            error=f"{type(e).__name__}: {e}",
            request_id=request_id,
        )
        raise TransportError(f"[ERROR] Connection failed: {e}") from e


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------


def build_url(path_segments, query_params=None):
    """Join ``path_segments`` under the normalized API base.

    Query values are percent-encoded in full, ``/`` included.
    """
    base = normalize_api_base(config.API_URL)
    url = base + "/" + "/".join(s.strip("/") for s in path_segments if s)
    params = {k: v for k, v in (query_params or {}).items() if v is not None}
    if params:
        url += "?" + urllib.parse.urlencode(params, quote_via=urllib.parse.quote, safe="")
    return url


def fetch(path_segments, query_params=None):
    """Issue exactly one GET and return the response as an ApiResponse.

    Error statuses whose body is an outcome envelope are returned like
    any other envelope so the classifier can report the server message.
    """
    url = build_url(path_segments, query_params)
    headers = {
        "Accept": "application/json",
        "X-Request-Id": str(uuid.uuid4()),
    }
    auth = _auth_header()
    if auth:
        headers["Authorization"] = auth
    try:
        value = _http_request(url, headers)
    except HTTPError as e:
        try:
            value = json.loads(e.body) if e.body else None
        except json.JSONDecodeError:
            value = None
        if not (isinstance(value, dict) and "Code" in value):
            detail = _sanitize_error(e.body)
            message = f"[ERROR] HTTP {e.code}: {e.reason}"
            if detail:
                message += f"\n{detail}"
            raise TransportError(message) from e
    return inspect_response(value)


def classify(response):
    """Map an ApiResponse to Success(payload) or Failure(message, details)."""
    if not isinstance(response, OutcomeResponse):
        return Success(payload=response.raw)
    if "ERROR" in response.code.upper():
        return Failure(message=_strip_message(response.message), details=response.details)
    return Success(payload=response.details)


def check_outcome(response):
    """Return the success payload, or raise RemoteOutcomeError."""
    outcome = classify(response)
    if isinstance(outcome, Failure):
        raise RemoteOutcomeError(outcome.message, outcome.details)
    return outcome.payload


def call(path_segments, query_params=None):
    """Fetch and classify; returns the payload handlers extract from."""
    return check_outcome(fetch(path_segments, query_params))
