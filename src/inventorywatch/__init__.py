"""inventorywatch - Async store pickup availability watcher."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("inventorywatch")
except PackageNotFoundError:
    __version__ = "0+local"
from inventorywatch.catalog import CatalogTables, load_catalog_tables
from inventorywatch.client import InventoryWatch
from inventorywatch.config import PollConfig
from inventorywatch.exceptions import (
    ErrorKind,
    InvalidLocalCatalogError,
    InventoryResponseError,
    InventoryTransportError,
    InventoryWatchError,
    MalformedJsonError,
    NoStoresFoundError,
    UnexpectedJsonStructureError,
    UrlConstructionError,
)
from inventorywatch.fetcher import AvailabilityFetcher
from inventorywatch.models import (
    ErrorState,
    InventorySnapshot,
    Notification,
    PartAvailability,
    PickupAvailability,
    PollEntry,
    PollResult,
    ProductLine,
    SKUCatalog,
    Store,
    StoreInfo,
    VersionState,
)
from inventorywatch.notifier import LoggingNotifier, Notifier
from inventorywatch.scheduler import PollScheduler, SchedulerState
from inventorywatch.version import VersionChecker, compare_versions

__all__ = [
    "__version__",
    "AvailabilityFetcher",
    "CatalogTables",
    "ErrorKind",
    "ErrorState",
    "InvalidLocalCatalogError",
    "InventoryResponseError",
    "InventorySnapshot",
    "InventoryTransportError",
    "InventoryWatch",
    "InventoryWatchError",
    "LoggingNotifier",
    "MalformedJsonError",
    "NoStoresFoundError",
    "Notification",
    "Notifier",
    "PartAvailability",
    "PickupAvailability",
    "PollConfig",
    "PollEntry",
    "PollResult",
    "PollScheduler",
    "ProductLine",
    "SKUCatalog",
    "SchedulerState",
    "Store",
    "StoreInfo",
    "UnexpectedJsonStructureError",
    "UrlConstructionError",
    "VersionChecker",
    "VersionState",
    "compare_versions",
    "load_catalog_tables",
]
