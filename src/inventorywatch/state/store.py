"""In-memory store for published inventory state.

All mutations are expected to run on the event loop that owns the store.
Each mutation replaces the current :class:`InventorySnapshot` with a new
immutable value and then notifies subscribers, so an observer never sees
a partially updated snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from inventorywatch.exceptions import InventoryWatchError
from inventorywatch.models.result import ErrorState, InventorySnapshot, PollResult, VersionState

_logger = logging.getLogger(__name__)

Subscriber = Callable[[InventorySnapshot], None]


class InventoryStateStore:
    """Holds the current snapshot and broadcasts replacements."""

    def __init__(self, initial: InventorySnapshot | None = None) -> None:
        self._snapshot = initial or InventorySnapshot()
        self._subscribers: list[Subscriber] = []

    @property
    def snapshot(self) -> InventorySnapshot:
        return self._snapshot

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback* for future snapshots.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def _replace(self, **changes: Any) -> None:
        self._snapshot = self._snapshot.model_copy(update=changes)
        for callback in list(self._subscribers):
            try:
                callback(self._snapshot)
            except Exception:
                _logger.warning("State subscriber %r failed", callback, exc_info=True)

    def begin_cycle(self) -> None:
        """Mark a poll cycle as running and clear the previous error."""
        self._replace(is_loading=True, error=None)

    def publish_result(self, result: PollResult) -> None:
        self._replace(result=result, error=None, is_loading=False)

    def publish_error(self, exc: InventoryWatchError) -> None:
        """Surface *exc* to observers; the previous result stays visible."""
        self._replace(error=ErrorState.from_exception(exc), is_loading=False)

    def finish_cycle(self) -> None:
        if self._snapshot.is_loading:
            self._replace(is_loading=False)

    def publish_version(self, version: VersionState) -> None:
        self._replace(version=version)

    def publish_preferred_store(self, name: str | None) -> None:
        if name != self._snapshot.preferred_store_name:
            self._replace(preferred_store_name=name)
