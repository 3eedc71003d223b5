#!/usr/bin/env python3
"""Classification of the branch a pull request was merged into."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from utils.versioning import first_prerelease_identifier, parse_version

logger = logging.getLogger(__name__)


class BranchKind(str, Enum):
    RELEASE = "release"
    ENVIRONMENT = "environment"
    PRERELEASE = "prerelease"
    INELIGIBLE = "ineligible"


@dataclass(frozen=True)
class BranchClassification:
    kind: BranchKind
    prerelease_identifier: Optional[str] = None

    @property
    def is_eligible(self) -> bool:
        return self.kind is not BranchKind.INELIGIBLE


def classify_branch(
    branch_name: str,
    release_branches: Sequence[str],
    prerelease_branches: Sequence[str],
    environment_branch: str = "",
) -> BranchClassification:
    """Classify a branch name.

    Release branches are matched first. Prerelease branches are named like a
    version carrying a channel, e.g. ``1.0.0-beta``; the first prerelease
    identifier must be one of ``prerelease_branches``.
    """
    if branch_name in release_branches:
        return BranchClassification(BranchKind.RELEASE)
    if environment_branch and branch_name == environment_branch:
        return BranchClassification(BranchKind.ENVIRONMENT)

    branch_version = parse_version(branch_name)
    if branch_version is None:
        logger.debug(f"Branch: '{branch_name}' is not a prerelease branch")
        return BranchClassification(BranchKind.INELIGIBLE)
    identifier = first_prerelease_identifier(branch_version)
    if identifier is None:
        logger.debug(f"Branch: '{branch_name}' is not a prerelease branch")
        return BranchClassification(BranchKind.INELIGIBLE)

    logger.debug(f"Checking if configured prerelease branch for prerelease id {identifier}")
    if identifier in prerelease_branches:
        return BranchClassification(BranchKind.PRERELEASE, prerelease_identifier=identifier)
    return BranchClassification(BranchKind.INELIGIBLE)
