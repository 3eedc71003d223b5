#!/usr/bin/env python3
"""Pydantic models for pull request data structures.

Only the fields the release context reads are modelled; everything else in
the REST payload is ignored.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class LabelInfo(BaseModel):
    """Information about a GitHub label attached to a PR."""

    name: str = Field(..., description="Label name")

    model_config = {"extra": "ignore"}


class MergedPullRequest(BaseModel):
    """A closed pull request as returned by the pulls listing."""

    number: Optional[int] = Field(None, description="Pull request number")
    labels: List[LabelInfo] = Field(default_factory=list, description="Attached labels")
    body: Optional[str] = Field(None, description="Pull request body/description")
    html_url: Optional[str] = Field(None, description="GitHub URL for the PR")
    merge_commit_sha: Optional[str] = Field(None, description="SHA of the merge commit")

    model_config = {"extra": "ignore", "frozen": True}

    @property
    def label_names(self) -> List[str]:
        return [label.name for label in self.labels]

    @classmethod
    def from_api(cls, pr_data: Dict[str, Any]) -> "MergedPullRequest":
        """Normalize raw PR data, dropping labels without a name.

        Args:
            pr_data: Raw PR data from API

        Returns:
            Normalized MergedPullRequest
        """
        labels_data = pr_data.get("labels") or []
        return cls(
            number=pr_data.get("number"),
            labels=[LabelInfo(name=label["name"]) for label in labels_data if label.get("name")],
            body=pr_data.get("body"),
            html_url=pr_data.get("html_url"),
            merge_commit_sha=pr_data.get("merge_commit_sha"),
        )
