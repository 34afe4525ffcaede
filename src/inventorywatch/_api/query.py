"""Inventory endpoint query construction.

The fulfillment endpoint binds ``parts.<i>`` to the i-th slot of the
product line's SKU table, so the index is a SKU's position in
the list and never the number of parts emitted so far.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from yarl import URL

from inventorywatch._constants import COUNTRY_PATH_OVERRIDES, FULFILLMENT_PATH, HOST
from inventorywatch.config import PollConfig
from inventorywatch.exceptions import UrlConstructionError
from inventorywatch.models.catalog import SKUCatalog

_INVALID_URL_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")


def build_query_string(
    ordered_skus: Sequence[str],
    store_number: str,
    custom_sku: str | None = None,
) -> str:
    """Build ``parts.<i>=<sku>&...&searchNearby=true&store=<store_number>``.

    Empty SKUs are skipped but still consume their index.
    """
    all_skus = list(ordered_skus)
    if custom_sku:
        all_skus.append(custom_sku)

    query_items = [f"parts.{index}={sku}" for index, sku in enumerate(all_skus) if sku]
    query_items.append("searchNearby=true")
    query_items.append(f"store={store_number}")
    return "&".join(query_items)


def country_path_element(country_code: str) -> str:
    """Map a country code to its storefront path segment.

    ``US`` -> ``/``, ``CN`` -> ``.cn/``, anything else -> ``/<CC>/``.
    """
    country = country_code.strip().upper()
    override = COUNTRY_PATH_OVERRIDES.get(country)
    if override is not None:
        return override
    return f"/{country}/"


def build_inventory_url(config: PollConfig, catalog: SKUCatalog, *, host: str = HOST) -> URL:
    """Build the full fulfillment-messages URL for *config*.

    Raises
    ------
    UrlConstructionError
        If the configuration cannot produce a valid absolute URL.
    """
    query = build_query_string(catalog.ordered_skus, config.store_number, config.custom_sku)
    raw = f"https://{host}{country_path_element(config.country_code).lower()}{FULFILLMENT_PATH}?{query}"

    if _INVALID_URL_CHARS.search(raw):
        raise UrlConstructionError(f"Invalid characters in inventory URL: {raw!r}")
    try:
        url = URL(raw, encoded=True)
    except ValueError as exc:
        raise UrlConstructionError(f"Could not parse inventory URL {raw!r}: {exc}") from exc
    if not url.is_absolute() or not url.host:
        raise UrlConstructionError(f"Inventory URL is not absolute: {raw!r}")
    return url
