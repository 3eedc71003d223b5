#!/usr/bin/env python3
"""Semantic version helpers shared by the resolvers and the incrementor.

Parsing and precedence come from the ``semver`` library. The helpers here only
add the leniency GitHub tags need (a leading ``v``, surrounding whitespace) and
expose prerelease identifiers as a list the way the rest of the code uses them.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional, Union

import semver


class ReleaseType(str, Enum):
    """Kind of version bump to apply."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRERELEASE = "prerelease"

    def __str__(self) -> str:
        return self.value


NON_PRERELEASE_RELEASE_TYPES = frozenset({ReleaseType.MAJOR, ReleaseType.MINOR, ReleaseType.PATCH})

PrereleaseIdentifier = Union[int, str]


class VersionError(Exception):
    """Raised when a version cannot be parsed, read or incremented."""

    def __init__(self, message: str, code: str = "INVALID_VERSION") -> None:
        super().__init__(message)
        self.code = code


def parse_version(text: Optional[str]) -> Optional[semver.Version]:
    """Parse a SemVer string, returning None when it is not one.

    A single leading ``v`` is accepted so tags such as ``v1.2.3`` parse.
    """
    if not text:
        return None
    candidate = text.strip()
    if candidate[:1] in ("v", "V"):
        candidate = candidate[1:]
    try:
        return semver.Version.parse(candidate)
    except (ValueError, TypeError):
        return None


def require_version(text: Optional[str], source: str = "version") -> semver.Version:
    """Parse a SemVer string or raise VersionError naming where it came from."""
    version = parse_version(text)
    if version is None:
        raise VersionError(f"'{text}' from {source} is not a valid semantic version")
    return version


def prerelease_identifiers(version: semver.Version) -> List[PrereleaseIdentifier]:
    """Split the prerelease part into identifiers; numeric ones become ints."""
    if not version.prerelease:
        return []
    return [int(part) if part.isdigit() else part for part in version.prerelease.split(".")]


def first_prerelease_identifier(version: semver.Version) -> Optional[str]:
    """Return the first prerelease identifier as a string, or None."""
    identifiers = prerelease_identifiers(version)
    return str(identifiers[0]) if identifiers else None


def join_prerelease(identifiers: Iterable[PrereleaseIdentifier]) -> Optional[str]:
    joined = ".".join(str(identifier) for identifier in identifiers)
    return joined or None


def sort_versions_descending(versions: Iterable[semver.Version]) -> List[semver.Version]:
    """Order versions by SemVer precedence, highest first."""
    return sorted(versions, reverse=True)
