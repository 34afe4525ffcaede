#!/usr/bin/env python3
"""Watch store pickup availability from the command line.

Configuration comes from ``INVENTORYWATCH_*`` environment variables (see
``PollConfig.from_env``); command-line flags override them.

Examples::

    python scripts/watch.py --catalog skus.json --stores stores.json --once
    INVENTORYWATCH_COUNTRY=JP python scripts/watch.py --catalog skus.json --store R079
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Callable
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from inventorywatch import (  # noqa: E402
    InventorySnapshot,
    InventoryWatch,
    InventoryWatchError,
    PollConfig,
    load_catalog_tables,
)
from inventorywatch.ingestion.notification import product_display_name  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--catalog", required=True, type=Path, help="SKU catalog JSON file")
    parser.add_argument("--stores", type=Path, default=None, help="Store listing JSON file")
    parser.add_argument("--country", default=None, help="Country code (e.g. US, JP)")
    parser.add_argument("--product-line", default=None, help="Product line (e.g. MacBookPro, iPhonePro13)")
    parser.add_argument("--store", default=None, help="Store number used as search anchor")
    parser.add_argument("--preferred", default=None, help="Comma-separated preferred SKUs")
    parser.add_argument("--interval", type=int, default=None, help="Minutes between polls")
    parser.add_argument("--once", action="store_true", help="Poll once and exit")
    parser.add_argument("--no-version-check", action="store_true", help="Skip the release version check")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _config_from_args(args: argparse.Namespace) -> PollConfig:
    overrides = {
        "country_code": args.country,
        "product_line": args.product_line,
        "store_number": args.store,
        "preferred_skus": args.preferred,
        "update_interval_minutes": args.interval,
    }
    return PollConfig.from_env(**{key: value for key, value in overrides.items() if value is not None})


def _render(config: PollConfig, snapshot: InventorySnapshot, catalog_name: Callable[[str], str]) -> None:
    if snapshot.is_loading:
        return
    if snapshot.error is not None:
        print(f"! {snapshot.error.message}")
        return
    if snapshot.result is None:
        return

    anchor = snapshot.preferred_store_name or config.store_number
    print(f"Available Models near {anchor} (updated {snapshot.result.formatted_timestamp})")
    if snapshot.result.is_empty:
        print("  none")
    for entry in snapshot.result.entries:
        print(f"  {entry.store.name} ({entry.store.location_description})")
        for part in entry.parts:
            print(f"    - {catalog_name(part.part_number)}")
    if snapshot.version is not None and not snapshot.version.is_current:
        print(f"A newer release is available: {snapshot.version.latest_known_version}")


async def _main(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    catalogs = load_catalog_tables(args.catalog, args.stores)
    sku_catalog = catalogs.sku_catalog(config.country_code, config.product_line)

    def catalog_name(sku: str) -> str:
        return product_display_name(sku, sku_catalog, config.custom_sku, config.custom_sku_nickname)

    watch_kwargs = {"tags_url": None} if args.no_version_check else {}
    async with InventoryWatch(config, catalogs, **watch_kwargs) as watch:
        watch.subscribe(lambda snapshot: _render(config, snapshot, catalog_name))
        if args.once:
            result = await watch.run_query()
            return 0 if result is not None else 1

        watch.start()
        await asyncio.Event().wait()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_main(args))
    except InventoryWatchError as exc:
        print(f"Error: {exc.display_message} ({exc})", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
