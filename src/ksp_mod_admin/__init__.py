"""KSP Mod Admin: site handlers, update checks and installs for KSP mods."""

from .constants import APP_VERSION as __version__

__all__ = ["__version__"]
