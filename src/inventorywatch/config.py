"""Poll configuration for inventorywatch."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Iterable
from typing import Any

from inventorywatch._constants import (
    DEFAULT_COUNTRY,
    DEFAULT_STORE_NUMBER,
    DEFAULT_UPDATE_INTERVAL_MINUTES,
    MIN_UPDATE_INTERVAL_MINUTES,
)
from inventorywatch.models.catalog import ProductLine


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def parse_sku_list(value: str | Iterable[str] | None) -> frozenset[str]:
    """Parse a comma-separated SKU list (or any iterable of SKUs)."""
    if value is None:
        return frozenset()
    items = value.split(",") if isinstance(value, str) else value
    return frozenset(item.strip() for item in items if item and item.strip())


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def coerce_interval(value: Any) -> int:
    """Coerce an update interval to whole minutes, never below the minimum."""
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        return DEFAULT_UPDATE_INTERVAL_MINUTES
    return max(MIN_UPDATE_INTERVAL_MINUTES, minutes)


@dataclasses.dataclass(frozen=True)
class PollConfig:
    """Snapshot of the user's watch preferences.

    A fresh snapshot is read at the start of every poll cycle, so hosts
    can change preferences between cycles without restarting the watcher.

    Parameters
    ----------
    country_code : str
        ISO country code of the storefront (e.g. ``"US"``, ``"JP"``).
    product_line : ProductLine
        Which SKU table to query.
    store_number : str
        Store used as the search anchor (e.g. ``"R032"``).
    preferred_skus : frozenset[str]
        SKUs the user cares most about.
    custom_sku : str or None
        Extra SKU appended after the catalog SKUs.
    custom_sku_nickname : str or None
        Display name for ``custom_sku``.
    filter_preferred_only : bool
        Only keep preferred SKUs in the published result.
    notify_only_preferred : bool
        Suppress notifications unless a preferred SKU (or the custom SKU)
        is available.
    update_interval_minutes : int
        Minutes between polls.  Coerced to at least 1.
    app_version : str
        Local version compared against the latest release tag.
    """

    country_code: str = DEFAULT_COUNTRY
    product_line: ProductLine = ProductLine.MACBOOK_PRO
    store_number: str = DEFAULT_STORE_NUMBER
    preferred_skus: frozenset[str] = frozenset()
    custom_sku: str | None = None
    custom_sku_nickname: str | None = None
    filter_preferred_only: bool = False
    notify_only_preferred: bool = False
    update_interval_minutes: int = DEFAULT_UPDATE_INTERVAL_MINUTES
    app_version: str = "0"

    def __post_init__(self) -> None:
        object.__setattr__(self, "country_code", self.country_code.strip().upper())
        object.__setattr__(self, "product_line", ProductLine(self.product_line))
        object.__setattr__(self, "preferred_skus", parse_sku_list(self.preferred_skus))
        object.__setattr__(self, "custom_sku", _blank_to_none(self.custom_sku))
        object.__setattr__(self, "custom_sku_nickname", _blank_to_none(self.custom_sku_nickname))
        object.__setattr__(self, "update_interval_minutes", coerce_interval(self.update_interval_minutes))

    @property
    def update_interval_seconds(self) -> float:
        return float(self.update_interval_minutes * 60)

    @property
    def preferred_filter(self) -> frozenset[str] | None:
        """The SKU set used to filter results, or ``None`` for no filtering."""
        return self.preferred_skus if self.filter_preferred_only else None

    @classmethod
    def from_env(cls, **overrides: Any) -> PollConfig:
        """Create configuration from environment variables.

        Reads ``INVENTORYWATCH_*`` variables.  ``INVENTORYWATCH_PREFERRED_SKUS``
        is a comma-separated list.  Explicit keyword arguments override
        environment values.

        Returns
        -------
        PollConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "INVENTORYWATCH_COUNTRY": "country_code",
            "INVENTORYWATCH_PRODUCT_LINE": "product_line",
            "INVENTORYWATCH_STORE": "store_number",
            "INVENTORYWATCH_PREFERRED_SKUS": "preferred_skus",
            "INVENTORYWATCH_CUSTOM_SKU": "custom_sku",
            "INVENTORYWATCH_CUSTOM_SKU_NICKNAME": "custom_sku_nickname",
            "INVENTORYWATCH_APP_VERSION": "app_version",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        interval_env = env.get("INVENTORYWATCH_UPDATE_INTERVAL")
        if interval_env is not None and "update_interval_minutes" not in overrides:
            config_kwargs["update_interval_minutes"] = coerce_interval(interval_env)

        if "filter_preferred_only" not in overrides:
            config_kwargs["filter_preferred_only"] = _env_bool(env.get("INVENTORYWATCH_FILTER_PREFERRED"), False)

        if "notify_only_preferred" not in overrides:
            config_kwargs["notify_only_preferred"] = _env_bool(env.get("INVENTORYWATCH_NOTIFY_ONLY_PREFERRED"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)

    def replace(self, **changes: Any) -> PollConfig:
        return dataclasses.replace(self, **changes)
