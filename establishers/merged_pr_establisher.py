#!/usr/bin/env python3
"""Build context for a pull request merged into a release, environment or prerelease branch."""

import logging
from typing import Optional, Sequence, Tuple

import semver

from establishers.branch_classification import BranchKind, classify_branch
from establishers.environment_branch import resolve_environment_version
from utils.build_context import BuildContext
from utils.event_context import EventContext
from utils.pr_models import MergedPullRequest
from utils.release_type_extractor import ReleaseTypeExtractor
from utils.version_finders import CurrentVersionFinder
from utils.version_incrementor import VersionIncrementor
from utils.versioning import NON_PRERELEASE_RELEASE_TYPES, ReleaseType, parse_version


class ContextEstablishmentError(Exception):
    """Raised when an eligible event cannot be turned into a build context."""

    def __init__(self, message: str, code: str = "UNKNOWN") -> None:
        super().__init__(message)
        self.code = code


class MergedPullRequestContextEstablisher:
    """Decides the release for a merged pull request.

    A merge into a release branch is bumped by the release type label on the
    pull request. A merge into a prerelease branch (named like ``2.0.0-beta``)
    or into the environment branch always produces a prerelease bump.
    """

    def __init__(
        self,
        release_branches: Sequence[str],
        prerelease_branches: Sequence[str],
        environment_branch: str,
        release_type_extractor: ReleaseTypeExtractor,
        current_version_finder: CurrentVersionFinder,
        version_incrementor: VersionIncrementor,
        github,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the establisher.

        Args:
            release_branches: Branches whose merges produce full releases
            prerelease_branches: Prerelease identifiers accepted in branch names
            environment_branch: Branch tracking its own prerelease channel ('' for none)
            release_type_extractor: Maps PR labels to a release type
            current_version_finder: Strategy resolving the current version
            version_incrementor: Computes the next version
            github: Client providing ``iter_closed_pull_requests``
            logger: Logger to use (defaults to the module logger)
        """
        self._release_branches = tuple(release_branches)
        self._prerelease_branches = tuple(prerelease_branches)
        self._environment_branch = environment_branch
        self._release_type_extractor = release_type_extractor
        self._current_version_finder = current_version_finder
        self._version_incrementor = version_incrementor
        self._github = github
        self._logger = logger or logging.getLogger(__name__)

    def can_establish_from(self, context: EventContext) -> Tuple[bool, Optional[str]]:
        """Check whether the event is a pull request merged into an eligible branch.

        Returns:
            ``(True, None)``, or ``(False, reason)``
        """
        if not context.is_pull_request:
            return False, "Not triggered by a Pull Request"
        if context.action != "closed":
            return False, "Not triggered by Pull Request closed event"
        if not context.is_merged:
            return False, "Not triggered by Pull Request being merged"
        classification = self._classify(context.branch_name)
        if not classification.is_eligible:
            return False, "Not merged to a release or prerelease branch"
        return True, None

    def establish(self, context: EventContext) -> BuildContext:
        """Establish the build context for the event.

        Raises:
            ContextEstablishmentError: If no merged PR matches the commit, or a
                release branch merge carries a prerelease label
        """
        can_establish, reason = self.can_establish_from(context)
        if not can_establish:
            self._logger.warning(f"Cannot establish context. {reason}")
            return BuildContext(should_publish=False)

        self._logger.info("Establishing context for merged pull build")
        merged_pr = self._get_merged_pr(context.owner, context.repo, context.sha)
        if merged_pr is None:
            raise ContextEstablishmentError(
                f"Could not find a merged pull request with the merge_commit_sha {context.sha}",
                code="NO_MERGED_PR",
            )

        branch_name = context.branch_name
        classification = self._classify(branch_name)
        prerelease_target: Optional[semver.Version] = None
        if classification.kind is not BranchKind.RELEASE:
            prerelease_target = parse_version(branch_name)

        current_version = self._current_version_finder.find(prerelease_target)
        if classification.kind is BranchKind.ENVIRONMENT:
            current_version, prerelease_target = resolve_environment_version(
                current_version, self._environment_branch
            )

        self._logger.info(f"Using version '{current_version}'")
        labels = merged_pr.label_names
        self._logger.info(f"PR has the following labels: '{', '.join(labels)}'")

        release_type: Optional[ReleaseType]
        if prerelease_target is not None:
            release_type = ReleaseType.PRERELEASE
        else:
            release_type = self._release_type_extractor.extract(labels)
        if release_type is None:
            self._logger.info("Found no release type label on pull request")
            return BuildContext(
                should_publish=False,
                pull_request_body=merged_pr.body,
                pull_request_url=merged_pr.html_url,
            )
        if prerelease_target is None and release_type not in NON_PRERELEASE_RELEASE_TYPES:
            allowed = ", ".join(str(t) for t in (ReleaseType.MAJOR, ReleaseType.MINOR, ReleaseType.PATCH))
            raise ContextEstablishmentError(
                f"When merging to release branch with a release type label it should be one of [{allowed}]",
                code="INVALID_RELEASE_TYPE",
            )

        return BuildContext(
            should_publish=True,
            release_type=release_type,
            current_version=str(current_version),
            new_version=self._version_incrementor.increment(str(current_version), release_type),
            pull_request_body=merged_pr.body,
            pull_request_url=merged_pr.html_url,
        )

    def _classify(self, branch_name: str):
        return classify_branch(
            branch_name,
            self._release_branches,
            self._prerelease_branches,
            self._environment_branch,
        )

    def _get_merged_pr(self, owner: str, repo: str, sha: str) -> Optional[MergedPullRequest]:
        self._logger.debug(f"Trying to get merged PR with merge_commit_sha: {sha}")
        for pr_data in self._github.iter_closed_pull_requests(owner, repo):
            if pr_data.get("merge_commit_sha") == sha:
                merged_pr = MergedPullRequest.from_api(pr_data)
                self._logger.debug(f"✓ Found merged PR #{merged_pr.number}")
                return merged_pr
        return None
