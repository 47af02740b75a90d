"""Run lint, format, type and test checks and report results as JSON.

Usage:
    python scripts/quality_gate.py              # run all, JSON output
    python scripts/quality_gate.py --skip-tests # skip pytest (fast)
    python scripts/quality_gate.py --fix        # auto-fix ruff issues first
"""

from __future__ import annotations

import argparse
import json
import re
import subprocess
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent

CHECKS: dict[str, list[str]] = {
    "ruff_lint": ["ruff", "check", "."],
    "ruff_format": ["ruff", "format", "--check", "."],
    "mypy": ["mypy", "orchestrator_client"],
    "pytest": ["pytest", "tests/", "-q", "--no-header", "--tb=short"],
}


def _run(args: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", *args],
        capture_output=True,
        text=True,
        cwd=str(ROOT),
        timeout=300,
    )


def _summarize(name: str, r: subprocess.CompletedProcess) -> dict:
    """Turn a finished check into its JSON summary."""
    result: dict = {"status": "pass" if r.returncode == 0 else "fail"}
    out = r.stdout + r.stderr
    if name == "ruff_lint":
        result["errors"] = len(re.findall(r"^\S+:\d+:\d+:", out, re.MULTILINE))
    elif name == "ruff_format":
        result["files_to_reformat"] = out.count("Would reformat")
    elif name == "mypy":
        result["errors"] = out.count(": error:")
    elif name == "pytest":
        passed = re.search(r"(\d+)\s+passed", out)
        failed = re.search(r"(\d+)\s+failed", out)
        result["passed"] = int(passed.group(1)) if passed else 0
        result["failed"] = int(failed.group(1)) if failed else 0
    if r.returncode != 0:
        result["output"] = out.strip()[-2000:]
    return result


def main() -> None:
    parser = argparse.ArgumentParser(description="Run all quality checks")
    parser.add_argument("--skip-tests", action="store_true", help="Skip pytest")
    parser.add_argument("--fix", action="store_true", help="Auto-fix ruff issues first")
    args = parser.parse_args()

    if args.fix:
        _run(["ruff", "check", "--fix", "."])
        _run(["ruff", "format", "."])

    t0 = time.monotonic()
    checks: dict[str, dict] = {}
    for name, cmd in CHECKS.items():
        if name == "pytest" and args.skip_tests:
            checks[name] = {"status": "skip", "reason": "--skip-tests"}
            continue
        print(f"Running {name}...", file=sys.stderr)
        started = time.monotonic()
        checks[name] = _summarize(name, _run(cmd))
        checks[name]["duration_s"] = round(time.monotonic() - started, 1)

    overall = "pass" if all(c["status"] in ("pass", "skip") for c in checks.values()) else "fail"
    print(
        json.dumps(
            {
                "overall": overall,
                "checks": checks,
                "total_duration_s": round(time.monotonic() - t0, 1),
            },
            indent=2,
        )
    )
    sys.exit(0 if overall == "pass" else 1)


if __name__ == "__main__":
    main()
