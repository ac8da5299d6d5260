"""GetModInfo and mod download for mods hosted on GitHub.

Release data is scraped from the repository's `/releases` page. Two layouts
are understood: the "latest release" label view and the tags timeline view.
"""

from __future__ import annotations

import logging
import os
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup

from ..constants import HTTP_TIMEOUT_S
from ..models import DownloadInfo, ModInfo, parse_timestamp
from ..services import http
from ..services.version_service import strip_version
from ..util.errors import InvalidUrlError
from .base import SiteHandler


log = logging.getLogger(__name__)

NAME = "GitHub"
HOST = "github.com"
HOST_WWW = "www.github.com"
HOST_RAW = "raw.githubusercontent.com"
BASE_URL = "https://github.com"

LABEL_VIEW = ".release.label-latest"
TAGS_VIEW = ".release-timeline-tags"

LABEL_VERSION = ".release.label-latest > div > ul > li > a > span"
LABEL_DATE = ".release.label-latest > div:nth-of-type(2) > div > p > relative-time"
LABEL_LINKS = ".release.label-latest > div:nth-of-type(2) > ul > li > a"
OTHER_LABEL_LINKS = '[class="release label-"] > div:nth-of-type(2) > ul > li > a'

TAGS_VERSION = "li:nth-of-type(1) > div > div > h3 > a > span"
TAGS_DATE = "li > span > relative-time"
TAGS_LINKS = ".release-timeline-tags > li:nth-of-type(1) > div > div > ul > li:nth-of-type(2) > a"


def get_project_url(user_name: str, project_name: str) -> str:
    """`https://github.com/<user>/<project>`, or "" when a part is missing."""
    if user_name and project_name:
        return f"{BASE_URL}/{user_name}/{project_name}"
    return ""


def get_url_parts(url: str) -> list[str]:
    """Split a URL into [scheme, authority, *path segments].

    Raises InvalidUrlError when the URL does not reach down to a repository.
    """
    split = urlsplit(url or "")
    parts = [split.scheme, split.netloc] + split.path.split("/")
    parts = [p.strip("/") for p in parts]
    parts = [p for p in parts if p.strip()]
    if len(parts) < 4:
        raise InvalidUrlError("GitHub URL must point to a repository.")
    return parts


def reduce_to_plain_url(url: str) -> str:
    """Shortest URL of the project (`scheme://host/owner/repo`)."""
    parts = get_url_parts(url)
    host = HOST if parts[1].lower() == HOST_RAW else parts[1]
    return f"{parts[0]}://{host}/{parts[2]}/{parts[3]}"


def get_path_to_releases(url: str) -> str:
    if "releases" in url:
        return url
    return reduce_to_plain_url(url) + "/releases"


class GitHubHandler(SiteHandler):
    name = NAME

    def __init__(self, *, timeout_s: float = HTTP_TIMEOUT_S) -> None:
        self.timeout_s = timeout_s

    def plain_url(self, url: str) -> str:
        return reduce_to_plain_url(url)

    def is_valid_url(self, url: str) -> bool:
        if not url:
            return False
        return urlsplit(url).netloc.lower() in (HOST, HOST_WWW, HOST_RAW)

    def get_mod_info(self, url: str) -> ModInfo:
        parts = get_url_parts(url)
        mod_info = ModInfo(
            site_handler_name=self.name,
            mod_url=reduce_to_plain_url(url),
            name=parts[3],
            author=parts[2],
        )
        self.parse_site(mod_info)
        return mod_info

    def parse_site(self, mod_info: ModInfo) -> None:
        """Fill version and change date of mod_info from its releases page.

        Missing markup is logged; the affected fields stay empty.
        """
        soup = self._load_releases(mod_info.mod_url)

        label_node = soup.select_one(LABEL_VIEW)
        tags_node = soup.select_one(TAGS_VIEW)
        if label_node is None and tags_node is None:
            log.error("Can't parse GitHub version or creation date of %s", mod_info.mod_url)
            return

        if label_node is not None:
            version_node = soup.select_one(LABEL_VERSION)
            update_node = soup.select_one(LABEL_DATE)
        else:
            version_node = tags_node.select_one(TAGS_VERSION)
            update_node = tags_node.select_one(TAGS_DATE)

        if version_node is None or update_node is None:
            log.error("Can't parse GitHub version or creation date of %s", mod_info.mod_url)

        if version_node is not None:
            mod_info.version = strip_version(version_node.get_text()) or None
        if update_node is not None:
            mod_info.change_date = parse_timestamp(update_node.get("datetime"))

    def get_download_infos(self, mod_info: ModInfo) -> list[DownloadInfo]:
        """Download links of the most recent release."""
        soup = self._load_releases(mod_info.mod_url)
        releases: list[DownloadInfo] = []

        label_node = soup.select_one(LABEL_VIEW)
        tags_node = soup.select_one(TAGS_VIEW)
        if label_node is None and tags_node is None:
            log.error("Can't parse GitHub for binaries of %s", mod_info.mod_url)
            return releases

        if label_node is not None:
            link_nodes = soup.select(LABEL_LINKS) or soup.select(OTHER_LABEL_LINKS)
        else:
            link_nodes = soup.select(TAGS_LINKS)

        for node in link_nodes:
            href = node.get("href")
            if not href:
                continue
            url = urljoin(BASE_URL, href)
            if "releases" not in url and "archive" not in url:
                continue

            filename = get_url_parts(url)[-1]
            releases.append(
                DownloadInfo(
                    download_url=url,
                    filename=filename,
                    name=os.path.splitext(filename)[0],
                )
            )

        log.debug("Found %d download(s) for %s", len(releases), mod_info.mod_url)
        return releases

    def _load_releases(self, url: str) -> BeautifulSoup:
        html = http.fetch_html(get_path_to_releases(url), timeout_s=self.timeout_s)
        return BeautifulSoup(html, "lxml")
