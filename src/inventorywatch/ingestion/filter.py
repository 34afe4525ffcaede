"""Availability filtering."""

from __future__ import annotations

from collections.abc import Collection, Iterable

from inventorywatch.models.availability import PartAvailability, Store
from inventorywatch.models.result import PollEntry


def qualifies(part: PartAvailability, preferred: Collection[str] | None = None) -> bool:
    """Return ``True`` when *part* is available and, if given, preferred."""
    if not part.is_available:
        return False
    return preferred is None or part.part_number in preferred


def filter_available_parts(
    stores: Iterable[Store],
    preferred: Collection[str] | None = None,
) -> tuple[PollEntry, ...]:
    """Reduce *stores* to the parts that can be picked up now.

    Unavailable and ineligible parts are always dropped.  When *preferred*
    is given, only parts whose number is in it are kept.  Stores left with
    no parts are dropped; store order is preserved.
    """
    entries: list[PollEntry] = []
    for store in stores:
        parts = tuple(part for part in store.parts if qualifies(part, preferred))
        if parts:
            entries.append(PollEntry(store=store, parts=parts))
    return tuple(entries)
