from __future__ import annotations

import random

import pytest

from bundlevalley.models import Bundle, Item, ItemStatus, ProgressStats
from bundlevalley.state.stats import apply_transition, compute_stats, status_contribution
from bundlevalley.state.store import MirrorStore


def _bundles() -> list[Bundle]:
    return [
        Bundle(
            id="spring_crops",
            name="Spring Crops Bundle",
            room="Pantry",
            required_items=3,
            items=[
                Item(id=f"spring_{n}", bundle_id="spring_crops", name=f"Spring {n}")
                for n in range(4)
            ],
        ),
        Bundle(
            id="river_fish",
            name="River Fish Bundle",
            room="Fish Tank",
            required_items=2,
            items=[
                Item(id="river_sunfish", bundle_id="river_fish", name="Sunfish", status=ItemStatus.DELIVERED),
                Item(id="river_catfish", bundle_id="river_fish", name="Catfish", status=ItemStatus.COLLECTED),
            ],
        ),
        Bundle(id="vault_2500", name="2,500g", room="Vault", required_items=1, items=None),
    ]


def test_status_contribution_table() -> None:
    assert status_contribution(ItemStatus.MISSING) == (0, 0)
    assert status_contribution(ItemStatus.COLLECTED) == (1, 0)
    assert status_contribution(ItemStatus.DELIVERED) == (0, 1)


def test_compute_stats_full_scan() -> None:
    stats = compute_stats(_bundles())

    assert stats.total_items == 6
    assert stats.collected_items == 1
    assert stats.delivered_items == 1
    assert stats.total_bundles == 3
    # No bundle is complete: river_fish has 1/2 and the unloaded vault bundle 0/1.
    assert stats.bundles_completed == 0
    assert stats.progress_percentage == pytest.approx(100 / 6)


def test_compute_stats_counts_bundles_reaching_required_items() -> None:
    bundles = _bundles()
    store = MirrorStore(bundles)
    store.mutate_item_status("river_catfish", ItemStatus.DELIVERED)

    assert compute_stats(store.bundles).bundles_completed == 1


def test_compute_stats_of_nothing() -> None:
    stats = compute_stats([])

    assert stats.total_items == 0
    assert stats.progress_percentage == 0.0
    assert stats.total_bundles == 0


def test_transition_to_same_status_is_noop() -> None:
    stats = compute_stats(_bundles())

    for status in ItemStatus:
        assert apply_transition(stats, status, status) == stats


def test_transition_missing_to_delivered() -> None:
    stats = compute_stats(_bundles())

    updated = apply_transition(stats, ItemStatus.MISSING, ItemStatus.DELIVERED)

    assert updated.delivered_items == stats.delivered_items + 1
    assert updated.collected_items == stats.collected_items
    assert updated.progress_percentage == pytest.approx(updated.delivered_items / updated.total_items * 100)


def test_transition_collected_to_delivered_moves_between_counters() -> None:
    stats = compute_stats(_bundles())

    updated = apply_transition(stats, ItemStatus.COLLECTED, ItemStatus.DELIVERED)

    assert updated.collected_items == stats.collected_items - 1
    assert updated.delivered_items == stats.delivered_items + 1


def test_transition_never_touches_bundle_counters() -> None:
    stats = compute_stats(_bundles())

    updated = apply_transition(stats, ItemStatus.COLLECTED, ItemStatus.DELIVERED)

    assert updated.bundles_completed == stats.bundles_completed
    assert updated.total_bundles == stats.total_bundles


def test_transition_clamps_counters_at_zero() -> None:
    stats = compute_stats([])

    updated = apply_transition(stats, ItemStatus.DELIVERED, ItemStatus.MISSING)

    assert updated.delivered_items == 0


def test_transition_clamps_counters_at_total_items() -> None:
    stats = ProgressStats.derive(
        total_items=2,
        collected_items=0,
        delivered_items=2,
        bundles_completed=0,
        total_bundles=1,
    )

    updated = apply_transition(stats, ItemStatus.MISSING, ItemStatus.DELIVERED)

    assert updated.delivered_items == 2
    assert updated.progress_percentage == pytest.approx(100.0)


@pytest.mark.parametrize("seed", [1, 7, 42, 1234])
def test_delta_matches_full_scan_after_random_transitions(seed: int) -> None:
    rng = random.Random(seed)
    store = MirrorStore(_bundles())
    baseline = compute_stats(store.bundles)
    stats = baseline
    item_ids = [item.id for bundle in store.bundles for item in bundle.item_list]

    for _ in range(200):
        item_id = rng.choice(item_ids)
        new_status = rng.choice(list(ItemStatus))
        old_status = store.mutate_item_status(item_id, new_status)
        stats = apply_transition(stats, old_status, new_status)

        # Conservation.
        assert stats.total_items == baseline.total_items
        # Disjointness: every item is counted at most once.
        assert stats.collected_items + stats.delivered_items <= stats.total_items

    full = compute_stats(store.bundles)
    assert stats.collected_items == full.collected_items
    assert stats.delivered_items == full.delivered_items
    assert stats.progress_percentage == pytest.approx(full.progress_percentage)
