"""Site handlers known to the mod admin.

A handler claims the URLs of one hosting site. `get_handler` picks the first
registered handler that accepts a URL.
"""

from __future__ import annotations

from ..util.errors import UnsupportedSiteError
from .base import SiteHandler
from .github import GitHubHandler


_HANDLERS: list[SiteHandler] = [GitHubHandler()]


def all_handlers() -> list[SiteHandler]:
    return list(_HANDLERS)


def register_handler(handler: SiteHandler) -> None:
    _HANDLERS.append(handler)


def get_handler(url: str) -> SiteHandler:
    for handler in _HANDLERS:
        if handler.is_valid_url(url):
            return handler
    raise UnsupportedSiteError(f"No site handler for {url}")


def get_handler_by_name(name: str) -> SiteHandler:
    for handler in _HANDLERS:
        if handler.name.lower() == (name or "").lower():
            return handler
    raise UnsupportedSiteError(f"Unknown site handler: {name}")
