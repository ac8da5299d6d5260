"""Mod add / update-check / update flows, independent of any front end."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

from .. import site_handlers
from ..models import ModInfo
from ..site_handlers.base import SelectCallback, SiteHandler
from ..util.errors import ConfigError, InvalidUrlError, ModAdminError, UnsupportedSiteError
from . import mod_store
from .download import ProgressCallback
from .install_service import install_archive
from .settings_store import Settings, load_settings


log = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


def handler_for(mod_info: ModInfo) -> SiteHandler:
    if mod_info.site_handler_name:
        try:
            return site_handlers.get_handler_by_name(mod_info.site_handler_name)
        except UnsupportedSiteError:
            log.debug("Unknown handler %r, falling back to URL", mod_info.site_handler_name)
    return site_handlers.get_handler(mod_info.mod_url)


def plain_mod_url(url: str) -> str:
    """Normalise a user-supplied URL to the mod_url it is stored under."""
    try:
        return site_handlers.get_handler(url).plain_url(url)
    except (UnsupportedSiteError, InvalidUrlError):
        return url


def get_mod_info(url: str) -> ModInfo:
    return site_handlers.get_handler(url).get_mod_info(url)


def check_for_update(mod_info: ModInfo) -> tuple[bool, ModInfo]:
    updated, new_mod_info = handler_for(mod_info).check_for_updates(mod_info)
    log.info(
        "Update check %s: local=%s remote=%s update=%s",
        mod_info.name,
        mod_info.version or mod_info.latest_date,
        new_mod_info.version or new_mod_info.latest_date,
        updated,
    )
    return updated, new_mod_info


def check_all_updates(mods: Optional[list[ModInfo]] = None) -> list[tuple[ModInfo, ModInfo]]:
    """Check every mod; returns (stored, remote) pairs that have an update.

    A mod whose check fails is logged and skipped.
    """
    if mods is None:
        mods = mod_store.load_mods()
    updates = []
    for mod in mods:
        try:
            updated, new_mod_info = check_for_update(mod)
        except ModAdminError as e:
            log.warning("Update check for %s failed: %s", mod.name or mod.mod_url, e)
            continue
        if updated:
            updates.append((mod, new_mod_info))
    return updates


def _download_and_register(
    handler: SiteHandler,
    mod_info: ModInfo,
    *,
    install: bool,
    settings: Settings,
    select: SelectCallback | None,
    on_progress: ProgressCallback | None,
    on_status: StatusCallback | None,
) -> ModInfo:
    if install and not settings.selected_game_path:
        raise ConfigError("No KSP path selected; add one with `paths add <folder>`.")

    if on_status:
        on_status(f"Downloading {mod_info.name}...")
    handler.download_mod(
        mod_info,
        settings.effective_download_path,
        select=select,
        on_progress=on_progress,
    )
    mod_store.add_or_update_mod(mod_info)

    if install:
        if on_status:
            on_status(f"Installing {mod_info.name}...")
        install_archive(mod_info.local_path or "", settings.selected_game_path)
    return mod_info


def handle_add(
    url: str,
    *,
    mod_name: str | None = None,
    install: bool = False,
    settings: Settings | None = None,
    select: SelectCallback | None = None,
    on_progress: ProgressCallback | None = None,
    on_status: StatusCallback | None = None,
) -> ModInfo:
    """Scrape, download and register a mod; install it if requested."""
    handler = site_handlers.get_handler(url)
    if on_status:
        on_status(f"Reading mod info from {handler.name}...")
    mod_info = handler.get_mod_info(url)
    if mod_name:
        mod_info.name = mod_name

    return _download_and_register(
        handler,
        mod_info,
        install=install,
        settings=settings or load_settings(),
        select=select,
        on_progress=on_progress,
        on_status=on_status,
    )


def update_mod(
    mod_info: ModInfo,
    *,
    install: bool = False,
    settings: Settings | None = None,
    select: SelectCallback | None = None,
    on_progress: ProgressCallback | None = None,
    on_status: StatusCallback | None = None,
) -> ModInfo | None:
    """Download the newer release of a stored mod. None if it is up to date."""
    updated, new_mod_info = check_for_update(mod_info)
    if not updated:
        return None
    # keep the user's name for the mod
    new_mod_info.name = mod_info.name or new_mod_info.name
    return _download_and_register(
        handler_for(mod_info),
        new_mod_info,
        install=install,
        settings=settings or load_settings(),
        select=select,
        on_progress=on_progress,
        on_status=on_status,
    )
