from __future__ import annotations

import logging
import os
import shutil
import stat
import sys
import tempfile

from ..constants import GAMEDATA_FOLDER
from ..util.errors import InstallError
from .extract import extract_archive


log = logging.getLogger(__name__)


def _remove_readonly(func, path, _exc):
    """Error handler for shutil.rmtree: clear read-only flag and retry."""
    os.chmod(path, stat.S_IWRITE)
    func(path)


def robust_rmtree(path: str) -> None:
    """Remove a directory tree, handling read-only files on Windows."""
    if os.path.exists(path):
        if sys.version_info >= (3, 12):
            shutil.rmtree(path, onexc=_remove_readonly)
        else:
            shutil.rmtree(path, onerror=_remove_readonly)


def _copy2_force(src: str, dst: str, **kwargs) -> str:
    """Copy src to dst, clearing read-only flag on destination if needed."""
    if os.path.exists(dst):
        try:
            os.chmod(dst, stat.S_IWRITE)
        except OSError:
            pass
    return shutil.copy2(src, dst, **kwargs)


def robust_copytree(src: str, dst: str, **kwargs) -> str:
    """Copy a directory tree, handling read-only destination files."""
    return shutil.copytree(src, dst, copy_function=_copy2_force, **kwargs)


def _find_source_root(extract_dir: str, prefer_folder: str | None) -> tuple[str, str]:
    """Return (folder to copy from, folder under game_dir to copy into)."""
    # Prefer a named folder anywhere inside the archive (e.g. 'GameData/')
    if prefer_folder:
        for root, dirs, _files in os.walk(extract_dir):
            if prefer_folder in dirs:
                return os.path.join(root, prefer_folder), prefer_folder
        # Loose mod folders land below the preferred folder as they are
        return extract_dir, prefer_folder

    # Otherwise, if the archive holds a single top-level dir, descend into it
    src_root = extract_dir
    items = os.listdir(extract_dir)
    if len(items) == 1 and os.path.isdir(os.path.join(extract_dir, items[0])):
        src_root = os.path.join(extract_dir, items[0])
    return src_root, ""


def install_archive(
    archive_path: str,
    game_dir: str,
    *,
    prefer_folder: str | None = GAMEDATA_FOLDER,
) -> list[str]:
    """Extract a mod archive and overlay it into the game folder.

    Existing files not contained in the archive are preserved. Returns the
    installed top-level entries, relative to game_dir.
    """
    if not os.path.isfile(archive_path):
        raise InstallError(f"Archive not found: {archive_path}")
    if not os.path.isdir(game_dir):
        raise InstallError(f"Game folder not found: {game_dir}")

    temp_extract_dir = tempfile.mkdtemp(prefix="ksp_mod_admin_")
    installed: list[str] = []
    try:
        extract_archive(archive_path, temp_extract_dir)
        src_root, target_sub = _find_source_root(temp_extract_dir, prefer_folder)
        target_root = os.path.join(game_dir, target_sub) if target_sub else game_dir
        os.makedirs(target_root, exist_ok=True)

        for item in os.listdir(src_root):
            src_path = os.path.join(src_root, item)
            dst_path = os.path.join(target_root, item)
            if os.path.isdir(src_path):
                robust_copytree(src_path, dst_path, dirs_exist_ok=True)
            else:
                _copy2_force(src_path, dst_path)
            installed.append(os.path.join(target_sub, item) if target_sub else item)
    except OSError as e:
        raise InstallError(f"Failed to install {os.path.basename(archive_path)}: {e}") from e
    finally:
        robust_rmtree(temp_extract_dir)

    log.info("Installed %s into %s: %s", archive_path, game_dir, ", ".join(installed))
    return installed
