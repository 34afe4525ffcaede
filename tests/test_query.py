from __future__ import annotations

import pytest

from inventorywatch._api.query import build_inventory_url, build_query_string, country_path_element
from inventorywatch.config import PollConfig
from inventorywatch.exceptions import UrlConstructionError
from inventorywatch.models.catalog import SKUCatalog


def test_query_indices_follow_catalog_positions() -> None:
    assert build_query_string(["A", "", "B"], "R032") == "parts.0=A&parts.2=B&searchNearby=true&store=R032"


def test_custom_sku_takes_next_position() -> None:
    query = build_query_string(["A", ""], "R032", custom_sku="Z")

    assert query == "parts.0=A&parts.2=Z&searchNearby=true&store=R032"


def test_empty_catalog_yields_minimal_query() -> None:
    assert build_query_string([], "R095") == "searchNearby=true&store=R095"


def test_leading_empty_slots_are_skipped() -> None:
    assert build_query_string(["", "", "C"], "R1") == "parts.2=C&searchNearby=true&store=R1"


@pytest.mark.parametrize(
    ("country", "expected"),
    [("US", "/"), ("CN", ".cn/"), ("jp", "/JP/"), ("GB", "/GB/")],
)
def test_country_path_element(country: str, expected: str) -> None:
    assert country_path_element(country) == expected


def test_inventory_url_lowercases_country_path() -> None:
    config = PollConfig(country_code="JP", store_number="R079")
    catalog = SKUCatalog(ordered_skus=("MKGR3J/A",))

    url = build_inventory_url(config, catalog)

    assert str(url) == (
        "https://www.apple.com/jp/shop/fulfillment-messages?parts.0=MKGR3J/A&searchNearby=true&store=R079"
    )


def test_inventory_url_for_china_storefront() -> None:
    config = PollConfig(country_code="CN", store_number="R705")

    url = build_inventory_url(config, SKUCatalog())

    assert url.host == "www.apple.com.cn"
    assert url.path == "/shop/fulfillment-messages"


def test_inventory_url_keeps_query_verbatim() -> None:
    config = PollConfig(store_number="R032", custom_sku="MMQX3LL/A")
    catalog = SKUCatalog(ordered_skus=("MKGR3LL/A", ""))

    url = build_inventory_url(config, catalog)

    assert url.raw_query_string == "parts.0=MKGR3LL/A&parts.2=MMQX3LL/A&searchNearby=true&store=R032"


def test_inventory_url_with_empty_store_number() -> None:
    url = build_inventory_url(PollConfig(store_number=""), SKUCatalog())

    assert url.raw_query_string == "searchNearby=true&store="


def test_inventory_url_rejects_whitespace() -> None:
    catalog = SKUCatalog(ordered_skus=("BAD SKU",))

    with pytest.raises(UrlConstructionError) as exc_info:
        build_inventory_url(PollConfig(), catalog)

    assert exc_info.value.display_message == "InventoryWatch failed to construct a valid URL for your search."
