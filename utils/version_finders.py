#!/usr/bin/env python3
"""Strategies for finding the current version.

One strategy is chosen at startup (see ``create_version_finder``):
a version file wins over a fixed version string, which wins over scanning
repository tags.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import semver

from configs.config import Config
from utils.versioning import (
    VersionError,
    first_prerelease_identifier,
    parse_version,
    require_version,
    sort_versions_descending,
)


class CurrentVersionFinder:
    """Finds the version a release increments from."""

    def find(self, prerelease_target: Optional[semver.Version] = None) -> semver.Version:
        raise NotImplementedError


class DefinedVersionFinder(CurrentVersionFinder):
    """Uses a version given literally in the configuration."""

    def __init__(self, version: str, logger: Optional[logging.Logger] = None):
        self._version = version
        self._logger = logger or logging.getLogger(__name__)

    def find(self, prerelease_target: Optional[semver.Version] = None) -> semver.Version:
        version = require_version(self._version, "the current-version input")
        self._logger.info(f"Using defined version '{version}'")
        return version


class VersionFromFileVersionFinder(CurrentVersionFinder):
    """Reads the version from a file in the workspace."""

    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        self._path = Path(path)
        self._logger = logger or logging.getLogger(__name__)

    def find(self, prerelease_target: Optional[semver.Version] = None) -> semver.Version:
        if not self._path.is_file():
            raise VersionError(f"Version file not found: {self._path}", code="VERSION_FILE_MISSING")
        content = self._path.read_text(encoding="utf-8").strip()
        version = require_version(content, f"version file {self._path}")
        self._logger.info(f"Using version '{version}' from {self._path}")
        return version


class TagVersionFinder(CurrentVersionFinder):
    """Picks the highest SemVer tag of the repository.

    With a prerelease target only tags on the same prerelease channel (same
    first prerelease identifier) are considered. A channel without tags starts
    from ``0.0.0-<identifier>``.
    """

    def __init__(self, github, owner: str, repo: str, logger: Optional[logging.Logger] = None):
        self._github = github
        self._owner = owner
        self._repo = repo
        self._logger = logger or logging.getLogger(__name__)

    def find(self, prerelease_target: Optional[semver.Version] = None) -> semver.Version:
        tag_names = self._github.list_tag_names(self._owner, self._repo)
        versions = [version for version in map(parse_version, tag_names) if version is not None]
        self._logger.debug(f"Found {len(versions)} version tags out of {len(tag_names)} tags")

        channel = first_prerelease_identifier(prerelease_target) if prerelease_target is not None else None
        if channel is not None:
            versions = [v for v in versions if first_prerelease_identifier(v) == channel]
            self._logger.debug(f"{len(versions)} tags on prerelease channel '{channel}'")

        if not versions:
            baseline = semver.Version.parse(Config.DEFAULT_BASELINE_VERSION)
            if channel is not None:
                baseline = baseline.replace(prerelease=channel)
            self._logger.info(f"No matching version tags found, starting from '{baseline}'")
            return baseline

        current = sort_versions_descending(versions)[0]
        self._logger.info(f"Using version '{current}' from tags")
        return current


def create_version_finder(
    *,
    version_file: str = "",
    current_version: str = "",
    github=None,
    owner: str = "",
    repo: str = "",
    logger: Optional[logging.Logger] = None,
) -> CurrentVersionFinder:
    """Select the version finder strategy from the configured inputs."""
    log = logger or logging.getLogger(__name__)
    if version_file:
        log.info("Using version file strategy for finding version")
        return VersionFromFileVersionFinder(version_file, logger=logger)
    if current_version:
        log.info("Using defined version strategy for finding version")
        return DefinedVersionFinder(current_version, logger=logger)
    if github is None:
        raise ValueError("A GitHub client is required for the tag strategy")
    log.info("Using tag strategy for finding version")
    return TagVersionFinder(github, owner, repo, logger=logger)
