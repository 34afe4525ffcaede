"""Internal constants shared across the library."""

HOST = "www.apple.com"
FULFILLMENT_PATH = "shop/fulfillment-messages"
RELEASE_TAGS_URL = "https://api.github.com/repos/worthbak/inventory-checker-app/tags"
USER_AGENT = "inventorywatch"

DEFAULT_COUNTRY = "US"
DEFAULT_STORE_NUMBER = "R032"
DEFAULT_UPDATE_INTERVAL_MINUTES = 1
MIN_UPDATE_INTERVAL_MINUTES = 1

NO_INVENTORY_TEXT = "No Inventory Found"
PREFERRED_TITLE = "Preferred Model Found!"
DEFAULT_TITLE = "Apple Store Inventory"

# Country codes whose storefront path is not "/<CC>/".
COUNTRY_PATH_OVERRIDES: dict[str, str] = {
    "US": "/",
    "CN": ".cn/",
}
