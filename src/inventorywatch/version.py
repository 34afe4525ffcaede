"""Release version comparison and staleness check."""

from __future__ import annotations

import functools
import json
import logging

from yarl import URL

from inventorywatch._constants import RELEASE_TAGS_URL
from inventorywatch._transport import Transport
from inventorywatch.exceptions import InventoryWatchError
from inventorywatch.models.result import VersionState
from inventorywatch.state.store import InventoryStateStore

_logger = logging.getLogger(__name__)


def _component(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def compare_versions(first: str, second: str) -> int:
    """Compare dotted numeric versions.

    Components are compared as integers left to right; a missing trailing
    component counts as ``0``.  Returns ``-1``, ``0`` or ``1``.

    >>> compare_versions("1.2.10", "1.2.9")
    1
    >>> compare_versions("1.2", "1.2.0")
    0
    """
    left = [_component(part) for part in first.strip().split(".")]
    right = [_component(part) for part in second.strip().split(".")]
    width = max(len(left), len(right))
    left += [0] * (width - len(left))
    right += [0] * (width - len(right))
    for a, b in zip(left, right, strict=True):
        if a != b:
            return 1 if a > b else -1
    return 0


version_sort_key = functools.cmp_to_key(compare_versions)


def latest_release(tag_names: list[str]) -> str | None:
    """Pick the highest release tag, ignoring ``v``-prefixed tags."""
    candidates = [name for name in tag_names if not name.startswith("v")]
    if not candidates:
        return None
    return sorted(candidates, key=version_sort_key, reverse=True)[0]


class VersionChecker:
    """Compares the local version with the newest published release tag.

    The check is advisory: any failure leaves the previously published
    :class:`VersionState` untouched.
    """

    def __init__(
        self,
        transport: Transport,
        state: InventoryStateStore,
        local_version: str,
        *,
        tags_url: str = RELEASE_TAGS_URL,
    ) -> None:
        self._transport = transport
        self._state = state
        self._local_version = local_version
        self._tags_url = URL(tags_url)

    async def check(self) -> VersionState | None:
        try:
            body = await self._transport.get(self._tags_url)
        except InventoryWatchError:
            _logger.debug("Release tag fetch failed", exc_info=True)
            return None

        try:
            tags = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError):
            _logger.debug("Release tag response is not JSON", exc_info=True)
            return None

        names = (
            [tag["name"] for tag in tags if isinstance(tag, dict) and isinstance(tag.get("name"), str)]
            if isinstance(tags, list)
            else []
        )
        latest = latest_release(names)
        if latest is None:
            _logger.debug("No usable release tags in %d entries", len(names))
            return None

        is_current = compare_versions(self._local_version, latest) >= 0
        _logger.info(
            "Has %s version: local: %s, remote: %s",
            "latest" if is_current else "outdated",
            self._local_version,
            latest,
        )
        version = VersionState(
            local_version=self._local_version,
            latest_known_version=latest,
            is_current=is_current,
        )
        self._state.publish_version(version)
        return version
