from __future__ import annotations

import os
from zipfile import BadZipFile, ZipFile

import rarfile

from ..util.errors import InstallError


def extract_zip(zip_path: str, dest_dir: str) -> None:
    os.makedirs(dest_dir, exist_ok=True)
    try:
        with ZipFile(zip_path, "r") as zf:
            zf.extractall(dest_dir)
    except BadZipFile as e:
        raise InstallError(f"Not a valid zip archive: {zip_path}") from e


def extract_rar(rar_path: str, dest_dir: str) -> None:
    os.makedirs(dest_dir, exist_ok=True)
    try:
        with rarfile.RarFile(rar_path, "r") as rf:
            rf.extractall(dest_dir)
    except rarfile.Error as e:
        raise InstallError(f"Failed to extract rar archive {rar_path}: {e}") from e


def extract_archive(archive_path: str, dest_dir: str) -> None:
    ext = os.path.splitext(archive_path)[1].lower()
    if ext == ".zip":
        extract_zip(archive_path, dest_dir)
    elif ext == ".rar":
        extract_rar(archive_path, dest_dir)
    else:
        raise InstallError(f"Unsupported archive type: {os.path.basename(archive_path)}")

