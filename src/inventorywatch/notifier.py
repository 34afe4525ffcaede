"""Notification delivery interface."""

from __future__ import annotations

import logging
from typing import Protocol

from inventorywatch.models.result import Notification

_logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Delivers a composed notification to the user.

    Hosts pass their own implementation (desktop notification, chat bot,
    e-mail, ...) to :class:`~inventorywatch.fetcher.AvailabilityFetcher`.
    """

    async def notify(self, notification: Notification) -> None:
        ...


class LoggingNotifier:
    """Writes notifications to the log.  Used when no notifier is given."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _logger

    async def notify(self, notification: Notification) -> None:
        self._logger.info("%s: %s", notification.title, notification.body)
