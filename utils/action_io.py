#!/usr/bin/env python3
"""Writing step outputs and failure status for GitHub Actions."""

from __future__ import annotations

import logging
import os
import sys
import uuid
from typing import Dict, Mapping, Optional, TextIO

logger = logging.getLogger(__name__)


def _escape_command_value(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_outputs(
    outputs: Mapping[str, str],
    environ: Optional[Mapping[str, str]] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Write step outputs.

    Outputs go to the ``GITHUB_OUTPUT`` file using the delimiter form so values
    may span lines. Without ``GITHUB_OUTPUT`` the legacy ``::set-output``
    command is printed instead.
    """
    env = os.environ if environ is None else environ
    output_path = env.get("GITHUB_OUTPUT", "")
    if output_path:
        with open(output_path, "a", encoding="utf-8") as f:
            for name, value in outputs.items():
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        return
    out = stream or sys.stdout
    for name, value in outputs.items():
        out.write(f"::set-output name={name}::{_escape_command_value(value)}\n")


def log_outputs(outputs: Mapping[str, str]) -> None:
    logger.info("Outputting: ")
    for name in ("should-publish", "current-version", "new-version", "release-type"):
        if name in outputs:
            logger.info(f"'{name}': {outputs[name]}")


def output_context(outputs: Dict[str, str], environ: Optional[Mapping[str, str]] = None) -> None:
    log_outputs(outputs)
    set_outputs(outputs, environ)

