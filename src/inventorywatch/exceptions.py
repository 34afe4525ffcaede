"""Custom exception hierarchy for inventorywatch."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    URL_CONSTRUCTION = "url_construction"
    TRANSPORT = "transport"
    MALFORMED_JSON = "malformed_json"
    UNEXPECTED_STRUCTURE = "unexpected_structure"
    NO_STORES_FOUND = "no_stores_found"
    INVALID_LOCAL_CATALOG = "invalid_local_catalog"


_INVENTORY_DATA_MESSAGE = (
    "Unexpected inventory data found. Please confirm that the selected store is valid for the selected country."
)


class InventoryWatchError(Exception):
    """Base exception for all inventorywatch errors.

    Every subclass names the :class:`ErrorKind` it represents and the
    fixed message shown to the user when a poll cycle fails with it.
    """

    kind: ErrorKind = ErrorKind.TRANSPORT
    user_message: str = "An unexpected error occurred."

    @property
    def display_message(self) -> str:
        return self.user_message


class UrlConstructionError(InventoryWatchError):
    """The inventory URL could not be built from the current configuration."""

    kind = ErrorKind.URL_CONSTRUCTION
    user_message = "InventoryWatch failed to construct a valid URL for your search."


class InventoryTransportError(InventoryWatchError):
    """HTTP-level failure (network error, non-200 status)."""

    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)

    @property
    def display_message(self) -> str:
        return f"A network error occurred. Details: {self}"


class InventoryResponseError(InventoryWatchError):
    """The inventory endpoint answered with data that cannot be used."""

    kind = ErrorKind.MALFORMED_JSON
    user_message = _INVENTORY_DATA_MESSAGE


class MalformedJsonError(InventoryResponseError):
    """The response body is empty or not a JSON object."""

    kind = ErrorKind.MALFORMED_JSON


class UnexpectedJsonStructureError(InventoryResponseError):
    """``body.content.pickupMessage`` is missing or not an object.

    Usually means the remote API changed shape.
    """

    kind = ErrorKind.UNEXPECTED_STRUCTURE


class NoStoresFoundError(InventoryResponseError):
    """The response is well-formed but carries no store list.

    Usually means the store number is not valid for the selected country.
    """

    kind = ErrorKind.NO_STORES_FOUND


class InvalidLocalCatalogError(InventoryWatchError):
    """The on-disk store/SKU catalog is missing, unreadable or incomplete."""

    kind = ErrorKind.INVALID_LOCAL_CATALOG
    user_message = "InventoryWatch has invalid or corrupted local data."
