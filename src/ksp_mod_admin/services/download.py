from __future__ import annotations

import logging
import os
from collections.abc import Callable

import requests

from ..constants import DOWNLOAD_TIMEOUT_S
from ..util.errors import DownloadError
from .http import DEFAULT_HEADERS


log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]  # (bytes_received, total_bytes)
PART_SUFFIX = ".part"


def download_to_file(
    url: str,
    dest_path: str,
    *,
    chunk_size: int = 1 << 14,
    timeout_s: float = DOWNLOAD_TIMEOUT_S,
    on_progress: ProgressCallback | None = None,
) -> None:
    """Stream-download a URL to dest_path with optional progress callback.

    Data goes to `<dest_path>.part` first and replaces dest_path only once the
    transfer is complete, so a failed download keeps any earlier archive.
    """
    log.info("Downloading %s -> %s", url, dest_path)
    parent = os.path.dirname(dest_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    part_path = dest_path + PART_SUFFIX
    received = 0
    try:
        with requests.get(url, headers=DEFAULT_HEADERS, stream=True, timeout=timeout_s) as r:
            r.raise_for_status()
            total = int(r.headers.get("content-length", 0) or 0)

            with open(part_path, "wb") as f:
                for chunk in r.iter_content(chunk_size=chunk_size):
                    if not chunk:
                        continue
                    f.write(chunk)
                    received += len(chunk)
                    if on_progress is not None:
                        on_progress(received, total)
        os.replace(part_path, dest_path)
    except (requests.RequestException, OSError) as e:
        if os.path.exists(part_path):
            os.remove(part_path)
        raise DownloadError(f"Download of {url} failed: {e}") from e

    log.info("Downloaded %d bytes", received)
