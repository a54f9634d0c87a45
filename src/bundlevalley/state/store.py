"""Local mirror of bundles and items.

The store holds a single immutable :class:`MirrorSnapshot`. Every mutation
builds a new snapshot and swaps the reference; unchanged bundles are shared
between the old and the new snapshot, and no history is kept.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from bundlevalley._constants import ALL_ROOMS
from bundlevalley.models import Bundle, BundleProgress, Item, ItemStatus

_logger = logging.getLogger(__name__)


class MirrorSnapshot(BaseModel):
    """An immutable view of every bundle and its items."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    bundles: tuple[Bundle, ...] = Field(default_factory=tuple)

    def find_item(self, item_id: str) -> Item | None:
        for bundle in self.bundles:
            for item in bundle.item_list:
                if item.id == item_id:
                    return item
        return None

    def find_bundle(self, bundle_id: str) -> Bundle | None:
        for bundle in self.bundles:
            if bundle.id == bundle_id:
                return bundle
        return None


def _with_item_status(
    bundles: tuple[Bundle, ...],
    item_id: str,
    new_status: ItemStatus,
) -> tuple[tuple[Bundle, ...], ItemStatus | None]:
    """Return ``(bundles, previous_status)`` with one item's status replaced.

    ``previous_status`` is ``None`` (and *bundles* returned as-is) when no item
    has *item_id*.
    """
    for bundle_index, bundle in enumerate(bundles):
        items = bundle.item_list
        for item_index, item in enumerate(items):
            if item.id != item_id:
                continue
            items[item_index] = item.model_copy(update={"status": new_status})
            updated_bundle = bundle.model_copy(update={"items": tuple(items)})
            updated = bundles[:bundle_index] + (updated_bundle,) + bundles[bundle_index + 1 :]
            return updated, item.status
    return bundles, None


class MirrorStore:
    """In-memory mirror of the remote bundle/item state."""

    def __init__(self, bundles: Iterable[Bundle] = ()) -> None:
        self._snapshot = MirrorSnapshot(bundles=tuple(bundles))

    @property
    def snapshot(self) -> MirrorSnapshot:
        return self._snapshot

    @property
    def bundles(self) -> tuple[Bundle, ...]:
        return self._snapshot.bundles

    def replace_all(self, bundles: Iterable[Bundle]) -> MirrorSnapshot:
        """Replace the whole snapshot."""
        self._snapshot = MirrorSnapshot(bundles=tuple(bundles))
        return self._snapshot

    def clear(self) -> None:
        self._snapshot = MirrorSnapshot()

    def item_status(self, item_id: str) -> ItemStatus | None:
        item = self._snapshot.find_item(item_id)
        return item.status if item is not None else None

    def mutate_item_status(self, item_id: str, new_status: ItemStatus) -> ItemStatus:
        """Set one item's status and return its previous status.

        An unknown *item_id* leaves the snapshot untouched and returns
        ``ItemStatus.MISSING``, indistinguishable from a missing item that
        really was ``missing``. Callers that need to tell the two apart use
        :meth:`item_status` first.
        """
        bundles, previous = _with_item_status(self._snapshot.bundles, item_id, new_status)
        if previous is None:
            _logger.debug("mutate_item_status: unknown item=%s, snapshot unchanged", item_id)
            return ItemStatus.MISSING
        self._snapshot = MirrorSnapshot(bundles=bundles)
        return previous

    # ------------------------------------------------------------------
    # Read selectors
    # ------------------------------------------------------------------

    def rooms(self) -> list[str]:
        """Distinct rooms in snapshot order."""
        seen: dict[str, None] = {}
        for bundle in self._snapshot.bundles:
            seen.setdefault(bundle.room, None)
        return list(seen)

    def bundles_in_room(self, room: str) -> list[Bundle]:
        """Bundles of *room*; ``"all"`` selects every bundle."""
        if room == ALL_ROOMS:
            return list(self._snapshot.bundles)
        return [bundle for bundle in self._snapshot.bundles if bundle.room == room]

    def bundle_progress(self, bundle_id: str) -> BundleProgress | None:
        bundle = self._snapshot.find_bundle(bundle_id)
        return bundle.progress() if bundle is not None else None
