"""
orchestrator-client shared configuration, constants, and module-level state.
Standalone module, no imports from other project files.
"""

import os

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")


def load_env():
    """Read .env KEY=VALUE pairs, then overlay the process environment."""
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    for key, val in os.environ.items():
        if key.startswith("ORCHESTRATOR_"):
            env[key] = val
    return env


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.1.0"

DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_PORT = 3306
DEFAULT_DURATION = "10m"

# ---------------------------------------------------------------------------
# Module-level state (loaded from .env and the environment)
# ---------------------------------------------------------------------------

env = load_env()

API_URL = env.get("ORCHESTRATOR_API", "") or DEFAULT_API_URL
AUTH_USER = env.get("ORCHESTRATOR_AUTH_USER", "")
AUTH_PASSWORD = env.get("ORCHESTRATOR_AUTH_PASSWORD", "")
# 0 means block until the server answers.
HTTP_TIMEOUT_SECONDS = max(0, _env_int("ORCHESTRATOR_HTTP_TIMEOUT_SECONDS", 0))
HTTP_MAX_RESPONSE_BYTES = _env_int("ORCHESTRATOR_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("ORCHESTRATOR_HTTP_LOG", False)
