"""
Container health check: GET /api/health on the local server.
"""
import os
import sys

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


def get_session_with_retries(total=2, backoff=0.5):
    s = requests.Session()
    retries = Retry(
        total=total,
        backoff_factor=backoff,
        status_forcelist=[500, 502, 503, 504],
        allowed_methods=["GET"],
    )
    s.mount("http://", HTTPAdapter(max_retries=retries))
    s.mount("https://", HTTPAdapter(max_retries=retries))
    return s


def main():
    port = os.getenv("PORT", "3000")
    url = os.getenv("HEALTHCHECK_URL", f"http://127.0.0.1:{port}/api/health")
    try:
        response = get_session_with_retries().get(url, timeout=5)
        response.raise_for_status()
        return 0 if response.json().get("status") == "ok" else 1
    except (requests.exceptions.RequestException, ValueError) as e:
        print(f"Health check failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
