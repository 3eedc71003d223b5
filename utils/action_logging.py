#!/usr/bin/env python3
"""Logging setup rendering records as GitHub workflow commands."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from configs.config import Config

_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


class GithubActionsFormatter(logging.Formatter):
    """Formats DEBUG/WARNING/ERROR records as ``::debug::`` style commands.

    INFO records are printed as plain lines, which the runner shows verbatim.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _COMMANDS.get(record.levelno)
        if command is None:
            return message
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"::{command}::{escaped}"


def configure_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> None:
    """Install the workflow-command handler on the root logger.

    Args:
        verbose: Log at DEBUG level and keep library loggers chatty
        stream: Output stream (defaults to stdout, which the runner parses)
    """
    level = logging.DEBUG if verbose else getattr(logging, Config.LOG_LEVEL, logging.INFO)
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(GithubActionsFormatter("%(message)s"))
    logging.basicConfig(level=level, handlers=[handler], force=True)

    # Suppress verbose logs from libraries unless in debug mode
    if not verbose:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
