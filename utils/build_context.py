#!/usr/bin/env python3
"""The decision record produced for one CI event."""

from typing import Dict, Optional
from pydantic import BaseModel, Field, model_validator

from utils.versioning import ReleaseType


class BuildContext(BaseModel):
    """Whether to publish, and if so which version.

    ``release_type``, ``current_version`` and ``new_version`` are set exactly
    when ``should_publish`` is true.
    """

    should_publish: bool = Field(..., description="Whether a release should be published")
    release_type: Optional[ReleaseType] = Field(None, description="Kind of version bump")
    current_version: Optional[str] = Field(None, description="Version the bump starts from")
    new_version: Optional[str] = Field(None, description="Version to publish")
    pull_request_body: Optional[str] = Field(None, description="Body of the merged pull request")
    pull_request_url: Optional[str] = Field(None, description="URL of the merged pull request")

    model_config = {"extra": "forbid", "frozen": True}

    @model_validator(mode="after")
    def check_publish_fields(self) -> "BuildContext":
        publish_fields = (self.release_type, self.current_version, self.new_version)
        if self.should_publish and any(value is None for value in publish_fields):
            raise ValueError("release_type, current_version and new_version are required when publishing")
        if not self.should_publish and any(value is not None for value in publish_fields):
            raise ValueError("release_type, current_version and new_version must be unset when not publishing")
        return self

    def to_outputs(self) -> Dict[str, str]:
        """Render as action outputs; absent values become empty strings."""
        return {
            "should-publish": "true" if self.should_publish else "false",
            "current-version": self.current_version or "",
            "new-version": self.new_version or "",
            "release-type": str(self.release_type) if self.release_type else "",
            "pr-body": self.pull_request_body or "",
            "pr-url": self.pull_request_url or "",
        }


def default_outputs() -> Dict[str, str]:
    """Outputs written when no establisher applied to the event."""
    return BuildContext(should_publish=False).to_outputs()
