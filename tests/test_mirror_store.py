from __future__ import annotations

from bundlevalley.models import Bundle, Item, ItemStatus
from bundlevalley.state.store import MirrorStore


def _bundles() -> list[Bundle]:
    return [
        Bundle(
            id="spring_crops",
            name="Spring Crops Bundle",
            room="Pantry",
            required_items=2,
            items=[
                Item(id="spring_parsnip", bundle_id="spring_crops", name="Parsnip"),
                Item(id="spring_potato", bundle_id="spring_crops", name="Potato", status=ItemStatus.DELIVERED),
            ],
        ),
        Bundle(
            id="spring_foraging",
            name="Spring Foraging Bundle",
            room="Crafts Room",
            required_items=1,
            items=[Item(id="wild_horseradish", bundle_id="spring_foraging", name="Wild Horseradish")],
        ),
        Bundle(
            id="summer_crops",
            name="Summer Crops Bundle",
            room="Pantry",
            required_items=1,
            items=[],
        ),
    ]


def test_mutate_returns_previous_status_and_updates_item() -> None:
    store = MirrorStore(_bundles())

    previous = store.mutate_item_status("spring_potato", ItemStatus.COLLECTED)

    assert previous is ItemStatus.DELIVERED
    assert store.item_status("spring_potato") is ItemStatus.COLLECTED


def test_mutate_produces_new_snapshot_and_keeps_old_one_intact() -> None:
    store = MirrorStore(_bundles())
    before = store.snapshot

    store.mutate_item_status("spring_parsnip", ItemStatus.DELIVERED)

    assert store.snapshot is not before
    old_item = before.find_item("spring_parsnip")
    assert old_item is not None
    assert old_item.status is ItemStatus.MISSING


def test_mutate_shares_untouched_bundles() -> None:
    store = MirrorStore(_bundles())
    before = store.bundles

    store.mutate_item_status("spring_parsnip", ItemStatus.DELIVERED)

    after = store.bundles
    assert after[0] is not before[0]
    assert after[1] is before[1]
    assert after[2] is before[2]
    # Only the target item is replaced inside the touched bundle.
    assert after[0].item_list[1] is before[0].item_list[1]


def test_snapshot_items_are_read_only_tuples() -> None:
    source = _bundles()
    store = MirrorStore(source)
    store.mutate_item_status("spring_parsnip", ItemStatus.COLLECTED)

    for bundle in store.bundles:
        assert isinstance(bundle.items, tuple)

    # item_list hands out a copy.
    store.bundles[0].item_list.append(Item(id="extra", bundle_id="spring_crops", name="Extra"))
    assert len(store.bundles[0].item_list) == 2


def test_caller_list_does_not_alias_bundle_items() -> None:
    items = [Item(id="spring_parsnip", bundle_id="spring_crops", name="Parsnip")]
    bundle = Bundle(id="spring_crops", name="Spring Crops Bundle", room="Pantry", required_items=1, items=items)

    items.append(Item(id="spring_potato", bundle_id="spring_crops", name="Potato"))

    assert len(bundle.item_list) == 1


def test_mutate_unknown_item_is_a_silent_noop() -> None:
    store = MirrorStore(_bundles())
    before = store.snapshot

    previous = store.mutate_item_status("no_such_item", ItemStatus.DELIVERED)

    assert previous is ItemStatus.MISSING
    assert store.snapshot is before
    assert store.item_status("no_such_item") is None


def test_replace_all_swaps_everything() -> None:
    store = MirrorStore(_bundles())

    store.replace_all(_bundles()[:1])

    assert [bundle.id for bundle in store.bundles] == ["spring_crops"]
    assert store.item_status("wild_horseradish") is None


def test_clear_empties_the_store() -> None:
    store = MirrorStore(_bundles())

    store.clear()

    assert store.bundles == ()


def test_rooms_are_distinct_in_snapshot_order() -> None:
    assert MirrorStore(_bundles()).rooms() == ["Pantry", "Crafts Room"]


def test_bundles_in_room() -> None:
    store = MirrorStore(_bundles())

    assert [b.id for b in store.bundles_in_room("Pantry")] == ["spring_crops", "summer_crops"]
    assert len(store.bundles_in_room("all")) == 3
    assert store.bundles_in_room("Boiler Room") == []


def test_bundle_progress_follows_mutations() -> None:
    store = MirrorStore(_bundles())

    store.mutate_item_status("spring_parsnip", ItemStatus.DELIVERED)

    progress = store.bundle_progress("spring_crops")
    assert progress is not None
    assert progress.delivered == 2
    assert progress.is_complete
    assert store.bundle_progress("nope") is None
