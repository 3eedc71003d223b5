"""Tests for the merged pull request context establisher."""

import pytest

from establishers.merged_pr_establisher import ContextEstablishmentError, MergedPullRequestContextEstablisher
from utils.build_context import BuildContext
from utils.event_context import EventContext
from utils.release_type_extractor import ReleaseTypeExtractor
from utils.version_finders import DefinedVersionFinder, TagVersionFinder
from utils.version_incrementor import VersionIncrementor
from utils.versioning import ReleaseType


def make_establisher(github, finder=None, environment_branch="develop"):
    return MergedPullRequestContextEstablisher(
        release_branches=["main"],
        prerelease_branches=["beta", "alpha"],
        environment_branch=environment_branch,
        release_type_extractor=ReleaseTypeExtractor(),
        current_version_finder=finder or TagVersionFinder(github, "octo", "widgets"),
        version_incrementor=VersionIncrementor(),
        github=github,
    )


class TestCanEstablishFrom:
    def test_eligible_merge(self, fake_github, make_event):
        assert make_establisher(fake_github()).can_establish_from(make_event("main")) == (True, None)

    def test_reasons_are_distinct(self, fake_github, make_event):
        establisher = make_establisher(fake_github())
        push_event = EventContext(event_name="push", ref="refs/heads/main", sha="abc")

        reasons = [
            establisher.can_establish_from(push_event),
            establisher.can_establish_from(make_event("main", action="opened")),
            establisher.can_establish_from(make_event("main", merged=False)),
            establisher.can_establish_from(make_event("feature-login")),
        ]

        assert all(ok is False for ok, _ in reasons)
        assert [reason for _, reason in reasons] == [
            "Not triggered by a Pull Request",
            "Not triggered by Pull Request closed event",
            "Not triggered by Pull Request being merged",
            "Not merged to a release or prerelease branch",
        ]

    @pytest.mark.parametrize("branch", ["main", "develop", "2.0.0-beta"])
    def test_eligible_branch_kinds(self, fake_github, make_event, branch):
        ok, reason = make_establisher(fake_github()).can_establish_from(make_event(branch))
        assert ok and reason is None


class TestEstablish:
    def test_ineligible_event_does_not_publish(self, fake_github, make_event):
        github = fake_github()

        context = make_establisher(github).establish(make_event("feature-login"))

        assert context == BuildContext(should_publish=False)
        assert github.pr_listings == 0

    def test_minor_label_on_release_branch(self, fake_github, make_pr, make_event):
        github = fake_github(pull_requests=[make_pr(labels=["minor"])], tags=["1.2.3", "1.2.2"])

        context = make_establisher(github).establish(make_event("main"))

        assert context.should_publish is True
        assert context.release_type == ReleaseType.MINOR
        assert context.current_version == "1.2.3"
        assert context.new_version == "1.3.0"
        assert context.pull_request_url == "https://github.com/octo/widgets/pull/42"
        assert context.pull_request_body == "Adds a feature"

    def test_matches_pull_request_by_merge_commit(self, fake_github, make_pr, make_event):
        github = fake_github(
            pull_requests=[
                make_pr(labels=["major"], merge_commit_sha="other", number=7),
                make_pr(labels=["patch"], number=8),
            ],
            tags=["1.0.0"],
        )

        context = make_establisher(github).establish(make_event("main"))

        assert context.new_version == "1.0.1"
        assert context.pull_request_url.endswith("/pull/8")

    def test_missing_merged_pull_request_is_fatal(self, fake_github, make_pr, make_event):
        github = fake_github(pull_requests=[make_pr(merge_commit_sha="other")])

        with pytest.raises(ContextEstablishmentError) as exc_info:
            make_establisher(github).establish(make_event("main"))
        assert exc_info.value.code == "NO_MERGED_PR"

    def test_unlabeled_pull_request_keeps_pr_details(self, fake_github, make_pr, make_event):
        github = fake_github(pull_requests=[make_pr(labels=["documentation"], body=None)], tags=["1.0.0"])

        context = make_establisher(github).establish(make_event("main"))

        assert context.should_publish is False
        assert context.release_type is None
        assert context.new_version is None
        assert context.pull_request_body is None
        assert context.pull_request_url == "https://github.com/octo/widgets/pull/42"

    def test_prerelease_label_on_release_branch_is_fatal(self, fake_github, make_pr, make_event):
        github = fake_github(pull_requests=[make_pr(labels=["prerelease"])], tags=["1.0.0"])

        with pytest.raises(ContextEstablishmentError) as exc_info:
            make_establisher(github).establish(make_event("main"))
        assert exc_info.value.code == "INVALID_RELEASE_TYPE"

    def test_new_prerelease_channel_starts_from_baseline(self, fake_github, make_pr, make_event):
        github = fake_github(pull_requests=[make_pr(labels=["major"])], tags=["1.2.3", "1.0.0-alpha.4"])

        context = make_establisher(github).establish(make_event("2.0.0-beta"))

        assert context.should_publish is True
        assert context.release_type == ReleaseType.PRERELEASE
        assert context.current_version == "0.0.0-beta"
        assert context.new_version == "0.0.0-beta.0"

    def test_existing_prerelease_channel_continues(self, fake_github, make_pr, make_event):
        github = fake_github(pull_requests=[make_pr()], tags=["2.0.0-beta.1", "2.0.0-beta.2", "1.9.0"])

        context = make_establisher(github).establish(make_event("2.0.0-beta"))

        assert context.current_version == "2.0.0-beta.2"
        assert context.new_version == "2.0.0-beta.3"

    def test_environment_branch_moves_release_onto_channel(self, fake_github, make_pr, make_event):
        github = fake_github(pull_requests=[make_pr(labels=["minor"])], tags=["1.4.0"])

        context = make_establisher(github).establish(make_event("develop"))

        assert context.release_type == ReleaseType.PRERELEASE
        assert context.current_version == "1.4.0-develop"
        assert context.new_version == "1.4.0-develop.0"

    def test_environment_branch_stays_on_channel(self, fake_github, make_pr, make_event):
        github = fake_github(pull_requests=[make_pr()], tags=["1.3.0", "1.4.0-develop.2"])

        context = make_establisher(github).establish(make_event("develop"))

        assert context.current_version == "1.4.0-develop.2"
        assert context.new_version == "1.4.0-develop.3"

    def test_defined_version_strategy(self, fake_github, make_pr, make_event):
        github = fake_github(pull_requests=[make_pr(labels=["major"])])

        context = make_establisher(github, finder=DefinedVersionFinder("4.5.6")).establish(make_event("main"))

        assert context.new_version == "5.0.0"
        assert github.tag_listings == 0

    def test_establish_is_idempotent(self, fake_github, make_pr, make_event):
        github = fake_github(pull_requests=[make_pr(labels=["patch"])], tags=["0.3.1"])
        establisher = make_establisher(github)
        event = make_event("main")

        assert establisher.establish(event) == establisher.establish(event)
