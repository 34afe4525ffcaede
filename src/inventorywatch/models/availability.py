"""Store and part availability models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import Field, field_validator

from inventorywatch.models._base import InventoryBaseModel


class PickupAvailability(StrEnum):
    """Pickup state reported by ``pickupDisplay``."""

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    INELIGIBLE = "ineligible"


class PartAvailability(InventoryBaseModel):
    """Availability of one SKU at one store.

    Parameters
    ----------
    part_number : str
        SKU, the natural key of a part within a store.
    display_title : str
        Product title as shown by the store locator.
    availability : PickupAvailability
        Pickup state.
    """

    part_number: str
    display_title: str = Field(alias="storePickupProductTitle")
    availability: PickupAvailability = Field(alias="pickupDisplay")

    @property
    def is_available(self) -> bool:
        return self.availability is PickupAvailability.AVAILABLE


class Store(InventoryBaseModel):
    """A retail store and the parts it reported."""

    name: str = Field(alias="storeName")
    store_number: str
    city: str
    state: str | None = None
    parts: tuple[PartAvailability, ...] = Field(default=(), alias="partsAvailability")

    @field_validator("state", mode="before")
    @classmethod
    def _optional_state(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @property
    def location_description(self) -> str:
        """``"City, State"``, or just the city when the state is unknown."""
        return ", ".join(part for part in (self.city, self.state) if part)
