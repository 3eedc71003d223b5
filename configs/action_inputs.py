#!/usr/bin/env python3
"""Action inputs as provided by the GitHub Actions runtime.

The runner exposes every `with:` input as an environment variable named
``INPUT_<NAME>`` where the name is upper-cased and spaces become underscores.
Hyphens are kept, so ``release-branches`` arrives as ``INPUT_RELEASE-BRANCHES``.
Composite actions usually map inputs by hand, often with underscores, so both
spellings are accepted.
"""

from __future__ import annotations

import os
import re
from typing import List, Mapping, Optional

from pydantic import BaseModel, Field

from configs.config import Config


class ActionInputError(Exception):
    """Raised when a required action input is missing."""

    def __init__(self, message: str, code: str = "MISSING_INPUT") -> None:
        super().__init__(message)
        self.code = code


_LIST_SEPARATOR = re.compile(r"[\n,]")


def get_input(name: str, environ: Optional[Mapping[str, str]] = None, required: bool = False) -> str:
    """Read a single action input, trimmed.

    Args:
        name: Input name as declared in action.yml (e.g. ``release-branches``)
        environ: Environment mapping (defaults to ``os.environ``)
        required: Raise when the input is empty

    Returns:
        The trimmed input value, or an empty string

    Raises:
        ActionInputError: If the input is required and empty
    """
    env = os.environ if environ is None else environ
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    value = env.get(key)
    if value is None:
        value = env.get(key.replace("-", "_"), "")
    value = value.strip()
    if required and not value:
        raise ActionInputError(f"Input required and not supplied: {name}")
    return value


def split_list_input(value: str) -> List[str]:
    """Split a multi-line (or comma separated) input into trimmed, non-empty items."""
    return [item.strip() for item in _LIST_SEPARATOR.split(value or "") if item.strip()]


class ActionInputs(BaseModel):
    """Inputs selecting branches and the version resolution strategy."""

    token: str = Field(..., description="GitHub token used for REST calls")
    release_branches: List[str] = Field(default_factory=list, description="Branches producing full releases")
    prerelease_branches: List[str] = Field(
        default_factory=list,
        description="Prerelease identifiers accepted in version-named branches",
    )
    current_version: str = Field("", description="Fixed current version")
    version_file: str = Field("", description="Path of a file holding the current version")
    environment_branch: str = Field("", description="Branch tracking its own prerelease channel")

    model_config = {"extra": "ignore", "frozen": True}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ActionInputs":
        """Build inputs from ``INPUT_*`` environment variables.

        The token falls back to ``GITHUB_TOKEN`` so local runs only need a
        `.env` file.

        Raises:
            ActionInputError: If no token is available
        """
        env = os.environ if environ is None else environ
        token = get_input("token", env) or env.get("GITHUB_TOKEN", "") or (Config.GITHUB_TOKEN or "")
        if not token:
            raise ActionInputError("Input required and not supplied: token")
        return cls(
            token=token,
            release_branches=split_list_input(get_input("release-branches", env)),
            prerelease_branches=split_list_input(get_input("prerelease-branches", env)),
            current_version=get_input("current-version", env),
            version_file=get_input("version-file", env),
            environment_branch=get_input("environment-branch", env),
        )
