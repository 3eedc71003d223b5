"""Shared test fixtures for the release context tests."""

from typing import Any, Dict, Iterator, List, Optional

import pytest

from utils.event_context import EventContext

MERGE_SHA = "abc123def456"


class FakeGithub:
    """In-memory stand-in for GithubClient."""

    def __init__(self, pull_requests: Optional[List[Dict[str, Any]]] = None, tags: Optional[List[str]] = None):
        self.pull_requests = pull_requests or []
        self.tags = tags or []
        self.pr_listings = 0
        self.tag_listings = 0
        self.closed = False

    def iter_closed_pull_requests(self, owner: str, repo: str) -> Iterator[Dict[str, Any]]:
        self.pr_listings += 1
        yield from self.pull_requests

    def list_tag_names(self, owner: str, repo: str) -> List[str]:
        self.tag_listings += 1
        return list(self.tags)

    def close(self) -> None:
        self.closed = True


def pr_payload(
    labels: Optional[List[str]] = None,
    merge_commit_sha: str = MERGE_SHA,
    number: int = 42,
    body: Optional[str] = "Adds a feature",
) -> Dict[str, Any]:
    return {
        "number": number,
        "labels": [{"name": name} for name in (labels or [])],
        "body": body,
        "html_url": f"https://github.com/octo/widgets/pull/{number}",
        "merge_commit_sha": merge_commit_sha,
        "merged": True,
    }


def merged_event(branch: str, sha: str = MERGE_SHA, action: str = "closed", merged: bool = True) -> EventContext:
    return EventContext(
        event_name="pull_request",
        action=action,
        pull_request={"merged": merged, "number": 42},
        ref=f"refs/heads/{branch}",
        sha=sha,
        owner="octo",
        repo="widgets",
    )


@pytest.fixture
def fake_github():
    """Factory for FakeGithub instances."""
    return FakeGithub


@pytest.fixture
def make_pr():
    """Factory for raw pull request payloads."""
    return pr_payload


@pytest.fixture
def make_event():
    """Factory for merged pull request events."""
    return merged_event
