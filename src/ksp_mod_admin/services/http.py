from __future__ import annotations

import logging

import requests

from ..constants import HTTP_TIMEOUT_S, USER_AGENT
from ..util.errors import SiteFetchError


log = logging.getLogger(__name__)

DEFAULT_HEADERS = {"User-Agent": USER_AGENT}


def fetch_html(url: str, *, timeout_s: float = HTTP_TIMEOUT_S) -> str:
    """GET a page and return its text."""
    log.debug("GET %s", url)
    try:
        r = requests.get(url, headers=DEFAULT_HEADERS, timeout=timeout_s)
        r.raise_for_status()
    except requests.RequestException as e:
        raise SiteFetchError(f"Failed to fetch {url}: {e}") from e
    return r.text


def fetch_json(url: str, *, timeout_s: float = HTTP_TIMEOUT_S):
    log.debug("GET %s (json)", url)
    try:
        r = requests.get(url, headers=DEFAULT_HEADERS, timeout=timeout_s)
        r.raise_for_status()
        return r.json()
    except requests.RequestException as e:
        raise SiteFetchError(f"Failed to fetch {url}: {e}") from e
    except ValueError as e:
        raise SiteFetchError(f"Invalid JSON from {url}: {e}") from e
