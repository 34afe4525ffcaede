"""Data models for inventory responses and published state."""

from inventorywatch.models._base import InventoryBaseModel
from inventorywatch.models.availability import PartAvailability, PickupAvailability, Store
from inventorywatch.models.catalog import ProductLine, SKUCatalog, StoreInfo
from inventorywatch.models.result import (
    ErrorState,
    InventorySnapshot,
    Notification,
    PollEntry,
    PollResult,
    VersionState,
)

__all__ = [
    "ErrorState",
    "InventoryBaseModel",
    "InventorySnapshot",
    "Notification",
    "PartAvailability",
    "PickupAvailability",
    "PollEntry",
    "PollResult",
    "ProductLine",
    "SKUCatalog",
    "Store",
    "StoreInfo",
    "VersionState",
]
