"""Notification helpers (user-facing alerts).

Notices are fire-and-forget: callers never await them and a failing sink
must not break the pipeline.
"""

import logging
from typing import List

from models.schemas import Notice

logger = logging.getLogger(__name__)

_SEVERITY_LEVELS = {
    "info": logging.INFO,
    "destructive": logging.WARNING,
}


class LoggingNotifier:
    def notify(self, title: str, description: str, severity: str = "info") -> Notice:
        notice = Notice(title=title, description=description, severity=severity)
        logger.log(_SEVERITY_LEVELS.get(severity, logging.INFO), f"[{severity}] {title}: {description}")
        try:
            self._deliver(notice)
        except Exception as e:
            logger.error(f"Notice delivery failed: {e}")
        return notice

    def _deliver(self, notice: Notice) -> None:
        pass


class CollectingNotifier(LoggingNotifier):
    """Keeps every delivered notice in memory."""

    def __init__(self):
        self.notices: List[Notice] = []

    def _deliver(self, notice: Notice) -> None:
        self.notices.append(notice)
