#!/usr/bin/env python3
"""Next-version computation.

The rules are those of npm's ``semver.inc``: a prerelease of ``X.0.0`` (for
major), ``X.Y.0`` (for minor) or ``X.Y.Z`` (for patch) is released by dropping
the prerelease instead of bumping again, and ``prerelease`` bumps the
right-most numeric identifier.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import semver

from utils.versioning import (
    ReleaseType,
    VersionError,
    join_prerelease,
    prerelease_identifiers,
    require_version,
)


class VersionIncrementor:
    """Increments versions by release type."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)

    def increment(self, version: str, release_type: Union[ReleaseType, str]) -> str:
        """Compute the next version string.

        Args:
            version: Current version
            release_type: One of major, minor, patch or prerelease

        Returns:
            The incremented version, without build metadata

        Raises:
            VersionError: If the version does not parse or the release type is unknown
        """
        current = require_version(version, "the version to increment")
        try:
            kind = ReleaseType(str(release_type))
        except ValueError as e:
            raise VersionError(
                f"'{release_type}' is not a valid SemVer release type",
                code="INVALID_RELEASE_TYPE",
            ) from e
        self._logger.info(f"Incrementing version '{version}' with release type '{kind}'")
        return str(_increment(current, kind))


def _increment(version: semver.Version, kind: ReleaseType) -> semver.Version:
    major, minor, patch = version.major, version.minor, version.patch
    pre = prerelease_identifiers(version)

    if kind is ReleaseType.MAJOR:
        if minor != 0 or patch != 0 or not pre:
            major += 1
        return semver.Version(major, 0, 0)
    if kind is ReleaseType.MINOR:
        if patch != 0 or not pre:
            minor += 1
        return semver.Version(major, minor, 0)
    if kind is ReleaseType.PATCH:
        if not pre:
            patch += 1
        return semver.Version(major, minor, patch)

    if not pre:
        return semver.Version(major, minor, patch + 1, prerelease="0")
    for index in range(len(pre) - 1, -1, -1):
        if isinstance(pre[index], int):
            pre[index] += 1
            break
    else:
        pre.append(0)
    return semver.Version(major, minor, patch, prerelease=join_prerelease(pre))
