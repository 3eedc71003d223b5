#!/usr/bin/env python3
"""Release type extraction from pull request labels."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from utils.versioning import ReleaseType

_LABEL_TO_RELEASE_TYPE: Dict[str, ReleaseType] = {
    "major": ReleaseType.MAJOR,
    "minor": ReleaseType.MINOR,
    "patch": ReleaseType.PATCH,
    "prerelease": ReleaseType.PRERELEASE,
}

# Highest first; used when a pull request carries several release labels
RELEASE_TYPE_PRIORITY = (
    ReleaseType.MAJOR,
    ReleaseType.MINOR,
    ReleaseType.PATCH,
    ReleaseType.PRERELEASE,
)


class ReleaseTypeExtractor:
    """Maps pull request label names to a release type."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)

    def extract(self, labels: Iterable[str]) -> Optional[ReleaseType]:
        """Return the release type named by the labels, or None.

        Label matching is case-sensitive. When several release labels are
        present the one ranked highest in RELEASE_TYPE_PRIORITY wins.
        """
        found = {_LABEL_TO_RELEASE_TYPE[label] for label in labels if label in _LABEL_TO_RELEASE_TYPE}
        if not found:
            self._logger.debug("No release type label found")
            return None
        if len(found) > 1:
            names = ", ".join(str(t) for t in RELEASE_TYPE_PRIORITY if t in found)
            self._logger.warning(f"Pull request has multiple release type labels: [{names}]")
        for release_type in RELEASE_TYPE_PRIORITY:
            if release_type in found:
                self._logger.debug(f"Release type from labels: {release_type}")
                return release_type
        return None
