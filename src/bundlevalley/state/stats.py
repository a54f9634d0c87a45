"""Statistics aggregation.

Two modes:

* :func:`compute_stats` is a full scan and the only local source of a
  correct ``bundles_completed``.
* :func:`apply_transition` is the incremental delta applied on an optimistic
  mutation. It leaves ``bundles_completed`` untouched; that counter is
  refreshed only from the authoritative service or by a full recompute.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import assert_never

from bundlevalley.models import Bundle, ItemStatus, ProgressStats


def status_contribution(status: ItemStatus) -> tuple[int, int]:
    """Return the ``(collected, delivered)`` counter contribution of *status*."""
    match status:
        case ItemStatus.MISSING:
            return (0, 0)
        case ItemStatus.COLLECTED:
            return (1, 0)
        case ItemStatus.DELIVERED:
            return (0, 1)
        case _:
            assert_never(status)


def compute_stats(bundles: Iterable[Bundle]) -> ProgressStats:
    """Derive every statistic from a complete scan of *bundles*."""
    total_items = 0
    collected_items = 0
    delivered_items = 0
    bundles_completed = 0
    total_bundles = 0

    for bundle in bundles:
        total_bundles += 1
        delivered_in_bundle = 0
        for item in bundle.item_list:
            total_items += 1
            collected, delivered = status_contribution(item.status)
            collected_items += collected
            delivered_items += delivered
            delivered_in_bundle += delivered
        if delivered_in_bundle >= bundle.required_items:
            bundles_completed += 1

    return ProgressStats.derive(
        total_items=total_items,
        collected_items=collected_items,
        delivered_items=delivered_items,
        bundles_completed=bundles_completed,
        total_bundles=total_bundles,
    )


def apply_transition(stats: ProgressStats, old: ItemStatus, new: ItemStatus) -> ProgressStats:
    """Apply one item's ``old -> new`` transition to *stats*.

    ``total_items``, ``total_bundles`` and ``bundles_completed`` are carried
    over unchanged.
    """
    if old is new:
        return stats

    old_collected, old_delivered = status_contribution(old)
    new_collected, new_delivered = status_contribution(new)

    # Counters stay within [0, total_items] even on a stale baseline.
    total = stats.total_items
    collected_items = min(total, max(0, stats.collected_items - old_collected + new_collected))
    delivered_items = min(total, max(0, stats.delivered_items - old_delivered + new_delivered))

    return ProgressStats.derive(
        total_items=stats.total_items,
        collected_items=collected_items,
        delivered_items=delivered_items,
        bundles_completed=stats.bundles_completed,
        total_bundles=stats.total_bundles,
    )
