"""Static store and SKU catalogs.

Catalogs are loaded once at startup and handed to the poll engine as
read-only lookup tables.  The SKU file maps country code to product line
to an ordered SKU table::

    {
        "US": {
            "MacBookPro": {"MKGR3LL/A": "14-inch M1 Pro 8-Core CPU", ...},
            "iPadWifi": [{"sku": "MK7M3LL/A", "name": "64GB Space Gray"}, {"sku": ""}, ...]
        }
    }

A product line may be an object (``sku -> name``) or a list of entries;
lists can hold empty SKUs to keep later SKUs at their query index.  The
store file is a list of ``{"storeName", "storeNumber", "city"}`` objects,
optionally grouped by country code.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from inventorywatch.exceptions import InvalidLocalCatalogError
from inventorywatch.models._base import InventoryBaseModel
from inventorywatch.models.catalog import ProductLine, SKUCatalog, StoreInfo

_logger = logging.getLogger(__name__)


def _parse_sku_table(country: str, line: str, raw: Any) -> SKUCatalog:
    pairs: list[tuple[str, str]] = []
    if isinstance(raw, Mapping):
        for sku, name in raw.items():
            if not isinstance(name, str):
                raise InvalidLocalCatalogError(f"Non-string product name for {sku} in {country}/{line}")
            pairs.append((str(sku), name))
    elif isinstance(raw, list):
        for item in raw:
            if not isinstance(item, Mapping) or not isinstance(item.get("sku", ""), str):
                raise InvalidLocalCatalogError(f"Invalid SKU entry in {country}/{line}: {item!r}")
            sku = item.get("sku", "")
            name = item.get("name") or sku
            pairs.append((sku, str(name)))
    else:
        raise InvalidLocalCatalogError(f"SKU table for {country}/{line} must be an object or a list")
    return SKUCatalog.from_pairs(pairs)


def _parse_stores(raw: Any) -> tuple[StoreInfo, ...]:
    if isinstance(raw, Mapping):
        items = [item for group in raw.values() if isinstance(group, list) for item in group]
    elif isinstance(raw, list):
        items = raw
    else:
        raise InvalidLocalCatalogError("Store catalog must be a list or an object of lists")
    try:
        return tuple(StoreInfo.model_validate(item) for item in items)
    except ValidationError as exc:
        raise InvalidLocalCatalogError(f"Invalid store catalog entry: {exc}") from exc


class CatalogTables(InventoryBaseModel):
    """Immutable lookup tables for SKUs and stores."""

    sku_tables: dict[str, dict[ProductLine, SKUCatalog]]
    stores: tuple[StoreInfo, ...] = ()

    @classmethod
    def from_data(cls, skus: Any, stores: Any = None) -> CatalogTables:
        """Build tables from decoded JSON.

        Raises
        ------
        InvalidLocalCatalogError
            If either structure is unusable.
        """
        if not isinstance(skus, Mapping) or not skus:
            raise InvalidLocalCatalogError("SKU catalog must be a non-empty object keyed by country")

        tables: dict[str, dict[ProductLine, SKUCatalog]] = {}
        for country, lines in skus.items():
            if not isinstance(lines, Mapping):
                raise InvalidLocalCatalogError(f"SKU catalog for {country} must be an object")
            country_tables: dict[ProductLine, SKUCatalog] = {}
            for line, raw_table in lines.items():
                try:
                    product_line = ProductLine(line)
                except ValueError:
                    _logger.debug("Ignoring unknown product line %s for %s", line, country)
                    continue
                country_tables[product_line] = _parse_sku_table(country, line, raw_table)
            tables[str(country).upper()] = country_tables

        return cls(sku_tables=tables, stores=_parse_stores(stores) if stores is not None else ())

    def sku_catalog(self, country_code: str, product_line: ProductLine) -> SKUCatalog:
        """Return the SKU table for *product_line* in *country_code*.

        A country without an entry for the product line yields an empty
        table (the query then carries only the store).

        Raises
        ------
        InvalidLocalCatalogError
            If the country is not in the catalog.
        """
        country_tables = self.sku_tables.get(country_code.upper())
        if country_tables is None:
            raise InvalidLocalCatalogError(f"No SKU catalog for country {country_code!r}")
        return country_tables.get(product_line, SKUCatalog())

    def store_info(self, store_number: str) -> StoreInfo | None:
        return next((store for store in self.stores if store.store_number == store_number), None)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidLocalCatalogError(f"Could not read catalog {path}: {exc}") from exc


def load_catalog_tables(skus_path: str | Path, stores_path: str | Path | None = None) -> CatalogTables:
    """Load catalog JSON files from disk."""
    skus = _read_json(Path(skus_path))
    stores = _read_json(Path(stores_path)) if stores_path is not None else None
    tables = CatalogTables.from_data(skus, stores)
    _logger.debug("Loaded SKU catalog for %d countries and %d stores", len(tables.sku_tables), len(tables.stores))
    return tables
