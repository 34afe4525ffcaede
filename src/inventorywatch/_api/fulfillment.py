"""Fulfillment-messages response parsing.

Validation is strict down to ``body.content.pickupMessage.stores`` and
tolerant below it: a store or part that is missing a field is dropped,
never fatal, so one odd entry cannot hide the rest of the result.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from inventorywatch.exceptions import MalformedJsonError, NoStoresFoundError, UnexpectedJsonStructureError
from inventorywatch.models.availability import PartAvailability, Store

_logger = logging.getLogger(__name__)

_PICKUP_PATH: tuple[str, ...] = ("body", "content", "pickupMessage")


def _decode_body(body: bytes | str | None) -> dict[str, Any]:
    if body is None or not body:
        raise MalformedJsonError("Empty inventory response")
    try:
        decoded = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        preview = body[:200] if isinstance(body, str) else body[:200].decode("utf-8", "replace")
        raise MalformedJsonError(f"Inventory response is not JSON: {preview}") from exc
    if not isinstance(decoded, dict):
        raise MalformedJsonError(f"Inventory response is a {type(decoded).__name__}, expected an object")
    return decoded


def _pickup_message(payload: dict[str, Any]) -> dict[str, Any]:
    node: Any = payload
    for key in _PICKUP_PATH:
        node = node.get(key) if isinstance(node, dict) else None
        if not isinstance(node, dict):
            raise UnexpectedJsonStructureError(f"Missing or invalid '{key}' in inventory response")
    return node


def _parse_part(raw: dict[str, Any]) -> PartAvailability | None:
    try:
        return PartAvailability.model_validate(raw, by_alias=True, by_name=False)
    except ValidationError:
        _logger.debug("Dropping malformed part: %s", raw)
        return None


def _parse_store(raw: Any) -> Store | None:
    if not isinstance(raw, dict):
        _logger.debug("Dropping non-object store entry: %r", raw)
        return None

    parts_raw = raw.get("partsAvailability")
    if not isinstance(parts_raw, dict) or not all(isinstance(part, dict) for part in parts_raw.values()):
        _logger.debug("Dropping store %s: invalid partsAvailability", raw.get("storeNumber"))
        return None

    parts = tuple(part for part in (_parse_part(value) for value in parts_raw.values()) if part is not None)
    try:
        return Store.model_validate({**raw, "partsAvailability": parts}, by_alias=True, by_name=False)
    except ValidationError:
        _logger.debug("Dropping malformed store: %s", raw.get("storeNumber"))
        return None


def parse_stores(body: bytes | str | None) -> list[Store]:
    """Parse a fulfillment-messages response body into stores.

    Stores are returned in the order the endpoint listed them.

    Raises
    ------
    MalformedJsonError
        The body is empty, not JSON, or not a JSON object.
    UnexpectedJsonStructureError
        ``body``, ``content`` or ``pickupMessage`` is missing.
    NoStoresFoundError
        ``pickupMessage.stores`` is missing, not a list, or empty.
    """
    payload = _decode_body(body)
    pickup_message = _pickup_message(payload)

    store_list = pickup_message.get("stores")
    if not isinstance(store_list, list) or not store_list:
        raise NoStoresFoundError("No stores found for this store/country combination")

    stores = [store for store in (_parse_store(item) for item in store_list) if store is not None]
    _logger.debug("Parsed %d of %d stores", len(stores), len(store_list))
    return stores
