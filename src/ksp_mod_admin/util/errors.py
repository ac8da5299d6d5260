from __future__ import annotations


class ModAdminError(Exception):
    """Base error for domain failures that should be shown to the user."""


class InvalidUrlError(ModAdminError, ValueError):
    pass


class UnsupportedSiteError(ModAdminError):
    pass


class SiteFetchError(ModAdminError):
    pass


class NoDownloadFoundError(ModAdminError):
    pass


class DownloadError(ModAdminError):
    pass


class DownloadCancelled(DownloadError):
    pass


class InstallError(ModAdminError):
    pass


class ConfigError(ModAdminError):
    pass
