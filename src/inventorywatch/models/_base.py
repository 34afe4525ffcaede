"""Base model for inventorywatch records.

Every record inherits from :class:`InventoryBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields.
* ``frozen=True`` so published records can be shared between the
  poll cycle and its observers without copying.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class InventoryBaseModel(BaseModel):
    """Base for inventory endpoint and state models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
