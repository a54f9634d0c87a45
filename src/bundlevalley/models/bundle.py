"""Bundle and item models."""

from __future__ import annotations

from pydantic import Field

from bundlevalley.models._base import BundleValleyBaseModel, ItemStatus


class Item(BundleValleyBaseModel):
    """A single trackable item belonging to a bundle."""

    id: str
    bundle_id: str
    name: str
    status: ItemStatus = ItemStatus.MISSING
    quality: str | None = None
    """Optional quality label (e.g. ``"gold"``)."""


class BundleProgress(BundleValleyBaseModel):
    """Delivered-item progress of one bundle."""

    bundle_id: str
    delivered: int
    required: int
    percentage: float

    @property
    def is_complete(self) -> bool:
        return self.delivered >= self.required


class Bundle(BundleValleyBaseModel):
    """A named collection of required items tied to a room.

    ``items`` is ``None`` when the bundle was fetched without its items.
    """

    id: str
    name: str
    room: str
    required_items: int = Field(ge=0)
    items: tuple[Item, ...] | None = None

    @property
    def item_list(self) -> list[Item]:
        return list(self.items) if self.items is not None else []

    @property
    def delivered_count(self) -> int:
        return sum(1 for item in self.item_list if item.status is ItemStatus.DELIVERED)

    def progress(self) -> BundleProgress:
        delivered = self.delivered_count
        required = self.required_items
        percentage = (delivered / required) * 100.0 if required > 0 else 0.0
        return BundleProgress(
            bundle_id=self.id,
            delivered=delivered,
            required=required,
            percentage=percentage,
        )
