from __future__ import annotations

from datetime import datetime

from inventorywatch.exceptions import ErrorKind, InventoryTransportError, NoStoresFoundError
from inventorywatch.models.result import InventorySnapshot, PollResult, VersionState
from inventorywatch.state.store import InventoryStateStore


def test_subscribers_receive_each_snapshot() -> None:
    store = InventoryStateStore()
    seen: list[InventorySnapshot] = []
    store.subscribe(seen.append)

    store.begin_cycle()
    store.publish_result(PollResult())

    assert [snapshot.is_loading for snapshot in seen] == [True, False]
    assert seen[-1].result is not None


def test_unsubscribe_stops_updates() -> None:
    store = InventoryStateStore()
    seen: list[InventorySnapshot] = []
    unsubscribe = store.subscribe(seen.append)

    unsubscribe()
    store.begin_cycle()

    assert seen == []


def test_error_keeps_previous_result() -> None:
    store = InventoryStateStore()
    result = PollResult()
    store.publish_result(result)

    store.begin_cycle()
    store.publish_error(NoStoresFoundError("no stores"))

    snapshot = store.snapshot
    assert snapshot.result == result
    assert snapshot.error is not None
    assert snapshot.error.kind is ErrorKind.NO_STORES_FOUND
    assert snapshot.error.detail == "no stores"
    assert snapshot.is_loading is False


def test_transport_error_message_includes_detail() -> None:
    store = InventoryStateStore()

    store.publish_error(InventoryTransportError("connection reset"))

    assert store.snapshot.error is not None
    assert store.snapshot.error.message == "A network error occurred. Details: connection reset"


def test_begin_cycle_clears_error() -> None:
    store = InventoryStateStore()
    store.publish_error(NoStoresFoundError("no stores"))

    store.begin_cycle()

    assert store.snapshot.error is None
    assert store.snapshot.is_loading is True


def test_snapshots_are_replaced_not_mutated() -> None:
    store = InventoryStateStore()
    before = store.snapshot

    store.publish_version(VersionState(local_version="1.0", latest_known_version="1.1", is_current=False))

    assert before.version is None
    assert store.snapshot.version is not None


def test_failing_subscriber_does_not_block_others() -> None:
    store = InventoryStateStore()
    seen: list[InventorySnapshot] = []

    def _boom(_snapshot: InventorySnapshot) -> None:
        raise RuntimeError("render failed")

    store.subscribe(_boom)
    store.subscribe(seen.append)
    store.begin_cycle()

    assert len(seen) == 1


def test_preferred_store_published_only_on_change() -> None:
    store = InventoryStateStore()
    seen: list[InventorySnapshot] = []
    store.subscribe(seen.append)

    store.publish_preferred_store("Ginza")
    store.publish_preferred_store("Ginza")

    assert len(seen) == 1
    assert store.snapshot.preferred_store_name == "Ginza"


def test_formatted_timestamp() -> None:
    local = datetime(2021, 11, 8, 15, 4).astimezone()
    result = PollResult(timestamp=local)

    assert result.formatted_timestamp == "Nov 8, 3:04 PM"
