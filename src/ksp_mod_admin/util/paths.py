from __future__ import annotations

import os
from pathlib import Path

from ..constants import APP_NAME, HOME_ENV_VAR


def data_dir() -> Path:
    """Where settings, the mod selection and logs live.

    `$KSP_MOD_ADMIN_HOME` wins, then `%LOCALAPPDATA%/KSPModAdmin`, then
    `$XDG_DATA_HOME/ksp_mod_admin` (default `~/.local/share/ksp_mod_admin`).
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override)
    base = os.environ.get("LOCALAPPDATA")
    if base:
        return Path(base) / APP_NAME
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "ksp_mod_admin"
    return Path.home() / ".local" / "share" / "ksp_mod_admin"

