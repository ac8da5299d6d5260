from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, replace
from typing import Optional

from ..constants import (
    CKAN_REPOSITORY_LIST_URL,
    DOWNLOADS_DIR,
    HTTP_TIMEOUT_S,
    SETTINGS_FILE,
)
from ..util.errors import ConfigError
from ..util.paths import data_dir


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    download_path: str = ""
    known_game_paths: tuple[str, ...] = field(default_factory=tuple)
    selected_game_path: str = ""
    ckan_repository_list_url: str = CKAN_REPOSITORY_LIST_URL
    http_timeout_s: float = HTTP_TIMEOUT_S

    @property
    def effective_download_path(self) -> str:
        return self.download_path or str(data_dir() / DOWNLOADS_DIR)


def settings_path() -> str:
    return str(data_dir() / SETTINGS_FILE)


def load_settings(path: Optional[str] = None) -> Settings:
    """Load persisted settings. Returns defaults if missing or unreadable."""
    path = path or settings_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f) or {}
    except FileNotFoundError:
        return Settings()
    except (OSError, ValueError) as e:
        # Corrupt file or access issue; fail safe
        log.warning("Ignoring unreadable settings file %s: %s", path, e)
        return Settings()

    if not isinstance(data, dict):
        log.warning("Ignoring settings file %s: expected a JSON object", path)
        return Settings()

    defaults = Settings()
    try:
        timeout = float(data.get("http_timeout_s", defaults.http_timeout_s))
    except (TypeError, ValueError):
        timeout = defaults.http_timeout_s
    return Settings(
        download_path=str(data.get("download_path") or ""),
        known_game_paths=_game_paths(data.get("known_game_paths")),
        selected_game_path=str(data.get("selected_game_path") or ""),
        ckan_repository_list_url=str(
            data.get("ckan_repository_list_url") or defaults.ckan_repository_list_url
        ),
        http_timeout_s=timeout,
    )


def _game_paths(value) -> tuple[str, ...]:
    if not isinstance(value, list):
        if value:
            log.warning("Ignoring known_game_paths: expected a list, got %r", value)
        return ()
    return tuple(str(p) for p in value if p)


def save_settings(settings: Settings, path: Optional[str] = None) -> None:
    path = path or settings_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    data = asdict(settings)
    data["known_game_paths"] = list(settings.known_game_paths)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def add_game_path(game_path: str, *, select: bool = True, path: Optional[str] = None) -> Settings:
    """Remember a KSP install folder (and optionally make it the selected one)."""
    game_path = os.path.normpath(game_path)
    current = load_settings(path)
    known = current.known_game_paths
    if game_path not in known:
        known = known + (game_path,)
    updated = replace(
        current,
        known_game_paths=known,
        selected_game_path=game_path if select else current.selected_game_path,
    )
    save_settings(updated, path)
    return updated


def select_game_path(game_path: str, *, path: Optional[str] = None) -> Settings:
    game_path = os.path.normpath(game_path)
    current = load_settings(path)
    if game_path not in current.known_game_paths:
        raise ConfigError(f"Unknown KSP path: {game_path}")
    updated = replace(current, selected_game_path=game_path)
    save_settings(updated, path)
    return updated
