"""Poll results and published state snapshots."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from inventorywatch.exceptions import ErrorKind, InventoryWatchError
from inventorywatch.models._base import InventoryBaseModel
from inventorywatch.models.availability import PartAvailability, Store


class PollEntry(InventoryBaseModel):
    """A store together with the parts that passed the availability filter."""

    store: Store
    parts: tuple[PartAvailability, ...]


class PollResult(InventoryBaseModel):
    """Outcome of one successful poll cycle.

    Only stores with at least one qualifying part are kept.  A new result
    replaces the previous one wholesale.
    """

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    entries: tuple[PollEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def formatted_timestamp(self) -> str:
        """Short local-time label such as ``"Nov 8, 3:04 PM"``."""
        local = self.timestamp.astimezone()
        hour = local.hour % 12 or 12
        return f"{local:%b} {local.day}, {hour}:{local:%M %p}"


class VersionState(InventoryBaseModel):
    local_version: str
    latest_known_version: str
    is_current: bool = True


class ErrorState(InventoryBaseModel):
    """User-visible failure of the latest poll cycle."""

    kind: ErrorKind
    message: str
    detail: str = ""

    @classmethod
    def from_exception(cls, exc: InventoryWatchError) -> ErrorState:
        return cls(kind=exc.kind, message=exc.display_message, detail=str(exc))


class Notification(InventoryBaseModel):
    title: str
    body: str
    is_preferred_hit: bool = False


class InventorySnapshot(InventoryBaseModel):
    """Everything the presentation layer needs, as one immutable value."""

    result: PollResult | None = None
    version: VersionState | None = None
    error: ErrorState | None = None
    is_loading: bool = False
    preferred_store_name: str | None = None
