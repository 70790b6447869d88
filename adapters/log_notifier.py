from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class LogNotifier:
    """Notices for headless runs go to the log."""

    def notify(self, title: str, message: str) -> None:
        logger.warning(f"{title}: {message}")
