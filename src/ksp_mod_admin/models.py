"""Plain records shared by the site handlers, the mod store and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .constants import CKAN_DEFAULT_REPO_URL


def parse_timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        # GitHub renders UTC as a trailing "Z"
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass
class ModInfo:
    """What a site handler knows about a mod.

    Version and timestamps stay empty until a scrape succeeds.
    """

    name: str = ""
    author: str = ""
    mod_url: str = ""
    site_handler_name: str = ""
    version: str | None = None
    creation_date: datetime | None = None
    change_date: datetime | None = None
    local_path: str | None = None

    @property
    def latest_date(self) -> datetime | None:
        return self.change_date or self.creation_date

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "author": self.author,
            "mod_url": self.mod_url,
            "site_handler_name": self.site_handler_name,
            "version": self.version,
            "creation_date": _format_timestamp(self.creation_date),
            "change_date": _format_timestamp(self.change_date),
            "local_path": self.local_path,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ModInfo":
        version = data.get("version")
        return cls(
            name=str(data.get("name") or ""),
            author=str(data.get("author") or ""),
            mod_url=str(data.get("mod_url") or ""),
            site_handler_name=str(data.get("site_handler_name") or ""),
            version=str(version) if version else None,
            creation_date=parse_timestamp(data.get("creation_date")),
            change_date=parse_timestamp(data.get("change_date")),
            local_path=data.get("local_path") or None,
        )


@dataclass(frozen=True)
class DownloadInfo:
    download_url: str
    filename: str
    name: str

    def __str__(self) -> str:
        return self.name or self.filename


@dataclass(frozen=True)
class CkanRepository:
    name: str = ""
    uri: str = ""

    def __str__(self) -> str:
        return f"{self.name} ({self.uri})"

    @classmethod
    def github_repository(cls) -> "CkanRepository":
        return cls(name="GitHub", uri=CKAN_DEFAULT_REPO_URL)


@dataclass(frozen=True)
class CkanRepositories:
    repositories: tuple[CkanRepository, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.repositories)

    def __len__(self) -> int:
        return len(self.repositories)

    @classmethod
    def from_json(cls, data: Any) -> "CkanRepositories":
        """Build from CKAN's `repositories.json`; entries without name or uri are skipped."""
        entries = data.get("repositories") if isinstance(data, dict) else None
        repos = []
        for entry in entries or []:
            if not isinstance(entry, dict):
                continue
            name = entry.get("name")
            uri = entry.get("uri")
            if not name or not uri:
                continue
            repos.append(CkanRepository(name=str(name), uri=str(uri)))
        return cls(repositories=tuple(repos))
