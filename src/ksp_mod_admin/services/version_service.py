from __future__ import annotations

import enum
import re


_SEGMENT_SPLIT = re.compile(r"[.\-_\s]+")
_LETTERS = re.compile(r"[A-Za-z]")


class VersionCompareResult(enum.Enum):
    A_SMALLER_B = -1
    EQUAL = 0
    A_BIGGER_B = 1


def strip_version(text: str | None) -> str:
    """Drop ASCII letters from a release title ("v1.2.0" -> "1.2.0")."""
    return _LETTERS.sub("", text or "").strip()


def compare_versions(a: str, b: str) -> VersionCompareResult:
    ka = _version_key(a)
    kb = _version_key(b)
    # pad for stable compares ("1.2" == "1.2.0")
    width = max(len(ka), len(kb))
    ka += [(1, 0)] * (width - len(ka))
    kb += [(1, 0)] * (width - len(kb))
    if ka < kb:
        return VersionCompareResult.A_SMALLER_B
    if ka > kb:
        return VersionCompareResult.A_BIGGER_B
    return VersionCompareResult.EQUAL


def is_latest_newer(current_version: str, latest_version: str) -> bool:
    """True if latest_version > current_version."""
    return compare_versions(current_version, latest_version) is VersionCompareResult.A_SMALLER_B


def is_lower_version(current_version: str, required_version: str) -> bool:
    """True if current_version < required_version."""
    return compare_versions(current_version, required_version) is VersionCompareResult.A_SMALLER_B


def _version_key(v: str) -> list[tuple[int, int | str]]:
    # numeric segments sort after textual ones, so "1.0-beta" < "1.0"
    key: list[tuple[int, int | str]] = []
    for part in _SEGMENT_SPLIT.split((v or "").strip()):
        if not part:
            continue
        if part.isdecimal():
            key.append((1, int(part)))
        else:
            key.append((0, part.lower()))
    return key
