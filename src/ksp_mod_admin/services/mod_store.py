from __future__ import annotations

import json
import logging
import os
from typing import Optional

from ..constants import MODS_FILE
from ..models import ModInfo
from ..util.paths import data_dir


log = logging.getLogger(__name__)


def mods_path() -> str:
    return str(data_dir() / MODS_FILE)


def load_mods(path: Optional[str] = None) -> list[ModInfo]:
    """Read the mod selection. A missing file is an empty selection."""
    path = path or mods_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read().strip()
    except FileNotFoundError:
        return []
    if not content:
        return []
    try:
        data = json.loads(content)
    except ValueError as e:
        log.warning("Ignoring unreadable mod selection %s: %s", path, e)
        return []
    if not isinstance(data, dict):
        return []
    return [ModInfo.from_dict(entry) for entry in data.get("mods", []) if isinstance(entry, dict)]


def save_mods(mods: list[ModInfo], path: Optional[str] = None) -> None:
    path = path or mods_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"mods": [m.to_dict() for m in mods]}, f, indent=2)


def find_mod(mods: list[ModInfo], mod_url: str) -> ModInfo | None:
    for mod in mods:
        if mod.mod_url == mod_url:
            return mod
    return None


def add_or_update_mod(mod_info: ModInfo, path: Optional[str] = None) -> list[ModInfo]:
    """Insert the mod, or replace the stored entry with the same mod_url."""
    mods = load_mods(path)
    for i, mod in enumerate(mods):
        if mod.mod_url == mod_info.mod_url:
            mods[i] = mod_info
            break
    else:
        mods.append(mod_info)
    save_mods(mods, path)
    return mods


def remove_mod(mod_url: str, path: Optional[str] = None) -> bool:
    mods = load_mods(path)
    remaining = [m for m in mods if m.mod_url != mod_url]
    if len(remaining) == len(mods):
        return False
    save_mods(remaining, path)
    return True
