from __future__ import annotations

from ..constants import CKAN_REPOSITORY_LIST_URL, HTTP_TIMEOUT_S
from ..models import CkanRepositories
from . import http


def fetch_repositories(
    url: str = CKAN_REPOSITORY_LIST_URL,
    *,
    timeout_s: float = HTTP_TIMEOUT_S,
) -> CkanRepositories:
    """Fetch the list of CKAN metadata repositories."""
    return CkanRepositories.from_json(http.fetch_json(url, timeout_s=timeout_s))
