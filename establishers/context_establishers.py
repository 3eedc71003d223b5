#!/usr/bin/env python3
"""Registry trying each context establisher in turn."""

import logging
from typing import Optional

from utils.build_context import BuildContext
from utils.event_context import EventContext


class ContextEstablishers:
    """Delegates to the first establisher able to handle the event."""

    def __init__(self, *establishers, logger: Optional[logging.Logger] = None):
        self._establishers = establishers
        self._logger = logger or logging.getLogger(__name__)

    def establish_from(self, context: EventContext) -> Optional[BuildContext]:
        """Return the context of the first applicable establisher, or None."""
        for establisher in self._establishers:
            can_establish, reason = establisher.can_establish_from(context)
            if can_establish:
                return establisher.establish(context)
            self._logger.debug(f"{type(establisher).__name__} skipped: {reason}")
        return None
