"""HTTP session setup for the database provider API.

This module centralizes creation of the authenticated `requests.Session` and
normalizes the API base URL so endpoint paths can be appended safely.
"""

import os

import requests

DEFAULT_API_URL = "https://api.prisma.io"
API_URL_ENV = "DBCLEANUP_API_URL"


def sanitize_api_url(url: str | None) -> str:
    """
    Normalize a provider API base URL.

    - Falls back to `DBCLEANUP_API_URL`, then to the public default
    - Removes query strings
    - Removes trailing slashes
    """
    url = url or os.getenv(API_URL_ENV) or DEFAULT_API_URL
    url = url.split("?", 1)[0]
    return url.rstrip("/")


def build_session(service_token: str) -> requests.Session:
    """
    Create a session that sends the bearer token and JSON content type
    with every request.

    Building the session performs no network I/O.
    """
    session = requests.Session()
    session.headers.update(
        {
            "Authorization": f"Bearer {service_token}",
            "Content-Type": "application/json",
        }
    )
    return session
