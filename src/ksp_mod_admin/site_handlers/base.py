from __future__ import annotations

import abc
import logging
import os
from collections.abc import Callable, Sequence

from ..models import DownloadInfo, ModInfo
from ..services.download import ProgressCallback, download_to_file
from ..services.version_service import is_latest_newer
from ..util.errors import DownloadCancelled, NoDownloadFoundError


log = logging.getLogger(__name__)

# Picks one of the download options; None cancels.
SelectCallback = Callable[[Sequence[DownloadInfo]], "DownloadInfo | None"]


def select_first(options: Sequence[DownloadInfo]) -> DownloadInfo | None:
    return options[0] if options else None


def is_update(old: ModInfo, new: ModInfo) -> bool:
    """Version decides when both sides have one, otherwise the newest date does."""
    if not old.version and new.version:
        return True
    if old.version and new.version:
        return is_latest_newer(old.version, new.version)
    old_date = old.latest_date
    new_date = new.latest_date
    if old_date is None and new_date is not None:
        return True
    if old_date is not None and new_date is not None:
        return old_date < new_date
    return False


class SiteHandler(abc.ABC):
    """Turns a hosting-site URL into ModInfo and downloadable archives."""

    name: str = ""

    @abc.abstractmethod
    def is_valid_url(self, url: str) -> bool:
        ...

    def plain_url(self, url: str) -> str:
        """The form of url the mod is stored under."""
        return url.rstrip("/")

    @abc.abstractmethod
    def get_mod_info(self, url: str) -> ModInfo:
        ...

    @abc.abstractmethod
    def get_download_infos(self, mod_info: ModInfo) -> list[DownloadInfo]:
        ...

    def check_for_updates(self, mod_info: ModInfo) -> tuple[bool, ModInfo]:
        new_mod_info = self.get_mod_info(mod_info.mod_url)
        return is_update(mod_info, new_mod_info), new_mod_info

    def download_mod(
        self,
        mod_info: ModInfo,
        dest_dir: str,
        *,
        select: SelectCallback | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        """Download the latest archive of the mod into dest_dir.

        Sets and returns `mod_info.local_path`.
        """
        options = self.get_download_infos(mod_info)
        if not options:
            msg = f"No binary download found at {mod_info.site_handler_name or self.name}."
            log.error(msg)
            raise NoDownloadFoundError(msg)

        selected = (select or select_first)(options)
        if selected is None:
            raise DownloadCancelled(f"Download of {mod_info.name} cancelled.")

        local_path = os.path.join(dest_dir, selected.filename)
        download_to_file(selected.download_url, local_path, on_progress=on_progress)
        mod_info.local_path = local_path
        return local_path

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
