"""Notification summary composition."""

from __future__ import annotations

from collections.abc import Collection, Iterable

from inventorywatch._constants import DEFAULT_TITLE, NO_INVENTORY_TEXT, PREFERRED_TITLE
from inventorywatch.models.catalog import SKUCatalog
from inventorywatch.models.result import Notification, PollEntry


def aggregate_counts(entries: Iterable[PollEntry]) -> dict[str, int]:
    """Count occurrences of each part number across all stores.

    Keys keep the order in which a part number was first seen.
    """
    counts: dict[str, int] = {}
    for entry in entries:
        for part in entry.parts:
            counts[part.part_number] = counts.get(part.part_number, 0) + 1
    return counts


def product_display_name(
    sku: str,
    catalog: SKUCatalog,
    custom_sku: str | None = None,
    custom_sku_nickname: str | None = None,
) -> str:
    """Human name for *sku*: catalog name, custom SKU label, or the SKU itself."""
    name = catalog.product_name(sku)
    if name is not None:
        return name
    if custom_sku and sku == custom_sku:
        return f"{custom_sku_nickname or sku} (custom SKU)"
    return sku


def is_preferred_hit(
    skus: Iterable[str],
    preferred: Collection[str],
    custom_sku: str | None = None,
) -> bool:
    return any(sku in preferred or (custom_sku is not None and sku == custom_sku) for sku in skus)


def compose_notification(
    entries: Iterable[PollEntry],
    catalog: SKUCatalog,
    preferred: Collection[str] = frozenset(),
    custom_sku: str | None = None,
    custom_sku_nickname: str | None = None,
) -> Notification:
    """Summarize *entries* as ``"<name>: <count> found, ..."``.

    Empty input produces ``"No Inventory Found"``.  The notification is
    flagged as a preferred hit when any counted SKU is preferred or is
    the custom SKU.
    """
    counts = aggregate_counts(entries)
    if counts:
        body = ", ".join(
            f"{product_display_name(sku, catalog, custom_sku, custom_sku_nickname)}: {count} found"
            for sku, count in counts.items()
        )
    else:
        body = NO_INVENTORY_TEXT

    hit = is_preferred_hit(counts, preferred, custom_sku)
    return Notification(
        title=PREFERRED_TITLE if hit else DEFAULT_TITLE,
        body=body,
        is_preferred_hit=hit,
    )
