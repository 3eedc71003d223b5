#!/usr/bin/env python3
"""Triggering event as seen by a GitHub Actions job.

The runner describes the event through ``GITHUB_*`` environment variables and
a JSON payload file at ``GITHUB_EVENT_PATH``.
"""

from __future__ import annotations

import json
import logging
import os
import posixpath
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class EventContextError(Exception):
    """Raised when the event description is missing or unreadable."""

    def __init__(self, message: str, code: str = "MISSING_EVENT") -> None:
        super().__init__(message)
        self.code = code


class EventContext(BaseModel):
    """The parts of the workflow context the establishers read."""

    event_name: str = Field("", description="Name of the triggering event")
    action: Optional[str] = Field(None, description="Activity type of the event")
    pull_request: Optional[Dict[str, Any]] = Field(None, description="Pull request payload, if any")
    ref: str = Field("", description="Git ref the workflow runs on")
    sha: str = Field("", description="Commit SHA the workflow runs on")
    owner: str = Field("", description="Repository owner")
    repo: str = Field("", description="Repository name")

    model_config = {"extra": "ignore", "frozen": True}

    @property
    def branch_name(self) -> str:
        """Last segment of the ref (``refs/heads/main`` gives ``main``)."""
        return posixpath.basename(self.ref)

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None

    @property
    def is_merged(self) -> bool:
        return bool(self.pull_request and self.pull_request.get("merged"))

    @classmethod
    def from_payload(
        cls,
        payload: Dict[str, Any],
        *,
        event_name: str = "",
        ref: str = "",
        sha: str = "",
        repository: str = "",
    ) -> "EventContext":
        """Build a context from an event payload plus runner variables.

        ``repository`` is ``owner/repo``; when empty the payload's repository
        object is used instead.
        """
        owner, _, repo = repository.partition("/")
        if not repo:
            repo_data = payload.get("repository") or {}
            owner = (repo_data.get("owner") or {}).get("login", "")
            repo = repo_data.get("name", "")
        return cls(
            event_name=event_name,
            action=payload.get("action"),
            pull_request=payload.get("pull_request"),
            ref=ref,
            sha=sha,
            owner=owner,
            repo=repo,
        )

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        event_path: Optional[str] = None,
    ) -> "EventContext":
        """Build a context from the GitHub Actions environment.

        Args:
            environ: Environment mapping (defaults to ``os.environ``)
            event_path: Payload file overriding ``GITHUB_EVENT_PATH``

        Raises:
            EventContextError: If the payload file is missing or not JSON
        """
        env = os.environ if environ is None else environ
        path = event_path or env.get("GITHUB_EVENT_PATH", "")
        if not path:
            raise EventContextError("No event payload: GITHUB_EVENT_PATH is not set")
        try:
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise EventContextError(f"Event payload file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise EventContextError(f"Event payload is not valid JSON: {path}", code="INVALID_EVENT") from e

        context = cls.from_payload(
            payload,
            event_name=env.get("GITHUB_EVENT_NAME", ""),
            ref=env.get("GITHUB_REF", ""),
            sha=env.get("GITHUB_SHA", ""),
            repository=env.get("GITHUB_REPOSITORY", ""),
        )
        logger.debug(f"Event '{context.event_name}' ({context.action}) on {context.ref} at {context.sha}")
        return context
