#!/usr/bin/env python
"""Simple container healthcheck probing the proxy's /api/health endpoint."""

import os
import sys

import requests


def main() -> int:
    host = os.getenv("HEALTHCHECK_HOST", "127.0.0.1")
    port = os.getenv("PORT", "8080")
    target = f"http://{host}:{port}/api/health"
    try:
        resp = requests.get(target, timeout=5)
    except requests.RequestException:
        return 1
    if resp.status_code != 200:
        return 1
    try:
        return 0 if resp.json().get("ok") is True else 1
    except ValueError:
        return 1


if __name__ == "__main__":
    sys.exit(main())
