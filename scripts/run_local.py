#!/usr/bin/env python3
"""Local smoke test runner.

Starts the assist service, sends a handful of requests to /api/ai, and
reports whether each answered with the expected status.
"""

import subprocess
import sys
import time

import httpx

BASE_URL = "http://localhost:8000"
REQUEST_TIMEOUT = 120  # seconds per request when a real provider is used
STARTUP_TIMEOUT = 30

# Each entry: (label, request body, expected status)
CASES: list[tuple[str, dict, int]] = [
    ("Brainstorm on an empty note", {"prompt": "brainstorm ideas for a team offsite", "context": ""}, 200),
    (
        "Expand existing content",
        {"prompt": "expand and improve this outline", "context": "Q1 goals:\n- ship onboarding"},
        200,
    ),
    ("Question prompt", {"prompt": "What should I cover next?", "context": "Chapter 1 draft"}, 200),
    ("Missing prompt", {}, 400),
]


def wait_until_healthy(client: httpx.Client) -> dict | None:
    """Poll /health until the service answers or STARTUP_TIMEOUT passes."""
    deadline = time.monotonic() + STARTUP_TIMEOUT
    while time.monotonic() < deadline:
        try:
            resp = client.get(f"{BASE_URL}/health", timeout=2)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError:
            time.sleep(0.5)
    return None


def check(client: httpx.Client, label: str, body: dict, expected: int) -> bool:
    resp = client.post(f"{BASE_URL}/api/ai", json=body, timeout=REQUEST_TIMEOUT)
    data = resp.json()
    passed = resp.status_code == expected
    detail = data.get("result", data.get("error", ""))[:80].replace("\n", " ")
    print(f"[{'PASS' if passed else 'FAIL'}] {label}: {resp.status_code} {detail}")
    return passed


def main() -> int:
    service = subprocess.Popen([sys.executable, "-m", "assist.main"])
    try:
        with httpx.Client() as client:
            health = wait_until_healthy(client)
            if health is None:
                print(f"Service did not start within {STARTUP_TIMEOUT}s")
                return 1
            print(f"Service ready in {health['mode']} mode\n")
            results = [check(client, *case) for case in CASES]
    finally:
        service.terminate()
        service.wait(timeout=10)

    print(f"\n{sum(results)}/{len(results)} checks passed")
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
