from __future__ import annotations

import pytest
from pydantic import ValidationError

from bundlevalley.models import Bundle, BundleValleyBaseModel, Item, ItemStatus, ProgressStats, progress_percentage


def _bundle_payload() -> dict[str, object]:
    return {
        "id": "spring_crops",
        "name": "Spring Crops Bundle",
        "room": "Pantry",
        "required_items": 4,
        "items": [
            {"id": "spring_parsnip", "bundle_id": "spring_crops", "name": "Parsnip", "status": "delivered"},
            {
                "id": "spring_potato",
                "bundle_id": "spring_crops",
                "name": "Potato",
                "status": "collected",
                "quality": "gold",
            },
            {"id": "spring_green_bean", "bundle_id": "spring_crops", "name": "Green Bean", "status": "missing"},
        ],
    }


def test_bundle_wire_round_trip_is_lossless() -> None:
    payload = _bundle_payload()

    bundle = Bundle.model_validate(payload)

    assert bundle.to_wire() == payload
    assert bundle.item_list[0].status is ItemStatus.DELIVERED
    assert bundle.item_list[1].quality == "gold"


def test_bundle_without_items_omits_items_on_the_wire() -> None:
    bundle = Bundle.model_validate({"id": "b", "name": "B", "room": "Vault", "required_items": 1})

    assert bundle.items is None
    assert bundle.item_list == []
    assert "items" not in bundle.to_wire()


def test_unknown_status_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Item.model_validate({"id": "x", "bundle_id": "b", "name": "X", "status": "lost"})


def test_item_status_defaults_to_missing() -> None:
    item = Item.model_validate({"id": "x", "bundle_id": "b", "name": "X"})
    assert item.status is ItemStatus.MISSING


def test_unknown_fields_are_ignored() -> None:
    item = Item.model_validate({"id": "x", "bundle_id": "b", "name": "X", "status": "collected", "color": "red"})
    assert item.to_wire() == {"id": "x", "bundle_id": "b", "name": "X", "status": "collected"}


def test_wire_names_are_field_names() -> None:
    config = BundleValleyBaseModel.model_config
    assert config.get("frozen") is True
    assert config.get("extra") == "ignore"
    assert "populate_by_name" not in config
    assert all(info.alias is None for info in Item.model_fields.values())


def test_models_are_frozen() -> None:
    item = Item(id="x", bundle_id="b", name="X")
    with pytest.raises(ValidationError):
        item.status = ItemStatus.DELIVERED  # type: ignore[misc]


def test_bundle_progress_counts_delivered_items_only() -> None:
    progress = Bundle.model_validate(_bundle_payload()).progress()

    assert progress.delivered == 1
    assert progress.required == 4
    assert progress.percentage == pytest.approx(25.0)
    assert not progress.is_complete


def test_bundle_progress_with_zero_required_items() -> None:
    progress = Bundle(id="b", name="B", room="Vault", required_items=0, items=[]).progress()

    assert progress.percentage == 0.0
    assert progress.is_complete


def test_progress_stats_derive_computes_percentage() -> None:
    stats = ProgressStats.derive(
        total_items=8,
        collected_items=1,
        delivered_items=2,
        bundles_completed=0,
        total_bundles=2,
    )

    assert stats.progress_percentage == pytest.approx(25.0)


def test_progress_percentage_is_zero_without_items() -> None:
    assert progress_percentage(0, 0) == 0.0
    assert ProgressStats.derive(
        total_items=0,
        collected_items=0,
        delivered_items=0,
        bundles_completed=0,
        total_bundles=0,
    ).progress_percentage == 0.0


def test_progress_stats_wire_round_trip() -> None:
    payload = {
        "total_items": 10,
        "collected_items": 3,
        "delivered_items": 4,
        "progress_percentage": 40.0,
        "bundles_completed": 1,
        "total_bundles": 3,
    }

    assert ProgressStats.model_validate(payload).to_wire() == payload
