"""Static catalog models: product lines, SKU tables and store listings."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from inventorywatch.models._base import InventoryBaseModel


class ProductLine(StrEnum):
    """Product lines a user can watch.

    Values match the keys used in the SKU catalog file.
    """

    MACBOOK_PRO = "MacBookPro"
    MAC_STUDIO = "MacStudio"
    STUDIO_DISPLAY = "StudioDisplay"
    IPAD_WIFI = "iPadWifi"
    IPAD_CELLULAR = "iPadCellular"
    IPHONE_REGULAR_13 = "iPhoneRegular13"
    IPHONE_MINI_13 = "iPhoneMini13"
    IPHONE_PRO_13 = "iPhonePro13"
    IPHONE_PRO_MAX_13 = "iPhoneProMax13"

    @property
    def presentable_name(self) -> str:
        return _PRESENTABLE_NAMES[self]


_PRESENTABLE_NAMES: dict[ProductLine, str] = {
    ProductLine.MACBOOK_PRO: "MacBook Pro",
    ProductLine.MAC_STUDIO: "Mac Studio",
    ProductLine.STUDIO_DISPLAY: "Studio Display",
    ProductLine.IPAD_WIFI: "iPad mini (Wifi)",
    ProductLine.IPAD_CELLULAR: "iPad mini (Cellular)",
    ProductLine.IPHONE_REGULAR_13: "iPhone 13",
    ProductLine.IPHONE_MINI_13: "iPhone 13 mini",
    ProductLine.IPHONE_PRO_13: "iPhone 13 Pro",
    ProductLine.IPHONE_PRO_MAX_13: "iPhone 13 Pro Max",
}


class SKUCatalog(InventoryBaseModel):
    """Ordered SKUs for one product line in one country.

    The order of ``ordered_skus`` is significant: a SKU's position is the
    ``parts.<i>`` index sent to the inventory endpoint.  Empty strings
    mark retired slots and are kept so later SKUs keep their index.
    """

    ordered_skus: tuple[str, ...] = ()
    names: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_pairs(cls, pairs: list[tuple[str, str]]) -> SKUCatalog:
        return cls(
            ordered_skus=tuple(sku for sku, _ in pairs),
            names={sku: name for sku, name in pairs if sku},
        )

    def product_name(self, sku: str) -> str | None:
        return self.names.get(sku)


class StoreInfo(InventoryBaseModel):
    """Static store listing entry (``storeName``, ``storeNumber``, ``city``)."""

    store_name: str
    store_number: str
    city: str
