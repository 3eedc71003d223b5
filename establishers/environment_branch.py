#!/usr/bin/env python3
"""Version selection for the environment branch."""

from __future__ import annotations

from typing import Tuple

import semver

from utils.versioning import VersionError, first_prerelease_identifier


def resolve_environment_version(
    resolved: semver.Version,
    environment_branch: str,
) -> Tuple[semver.Version, semver.Version]:
    """Return ``(current_version, prerelease_target)`` for an environment branch merge.

    A resolved version already on the environment channel is kept. Any other
    version is moved onto the channel: ``1.2.3`` or ``1.2.3-beta.4`` become
    ``1.2.3-<environment_branch>``.
    """
    if first_prerelease_identifier(resolved) == environment_branch:
        return resolved, resolved
    try:
        target = semver.Version.parse(f"{resolved.major}.{resolved.minor}.{resolved.patch}-{environment_branch}")
    except ValueError as e:
        raise VersionError(f"Environment branch '{environment_branch}' is not a valid prerelease identifier") from e
    return target, target
