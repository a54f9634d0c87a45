"""Aggregate progress statistics model."""

from __future__ import annotations

from pydantic import Field

from bundlevalley.models._base import BundleValleyBaseModel


def progress_percentage(delivered_items: int, total_items: int) -> float:
    """Delivered share of all items in percent, ``0.0`` when there are no items."""
    if total_items <= 0:
        return 0.0
    return (delivered_items / total_items) * 100.0


class ProgressStats(BundleValleyBaseModel):
    """Completion statistics over every bundle.

    Parameters
    ----------
    total_items : int
        Number of items across all bundles.
    collected_items : int
        Items whose current status is ``collected``.
    delivered_items : int
        Items whose current status is ``delivered``.
    progress_percentage : float
        ``delivered_items / total_items * 100``; ``0`` without items.
    bundles_completed : int
        Bundles whose delivered count reaches ``required_items``.
    total_bundles : int
        Number of bundles.
    """

    total_items: int = Field(default=0, ge=0)
    collected_items: int = Field(default=0, ge=0)
    delivered_items: int = Field(default=0, ge=0)
    progress_percentage: float = 0.0
    bundles_completed: int = Field(default=0, ge=0)
    total_bundles: int = Field(default=0, ge=0)

    @classmethod
    def derive(
        cls,
        *,
        total_items: int,
        collected_items: int,
        delivered_items: int,
        bundles_completed: int,
        total_bundles: int,
    ) -> ProgressStats:
        """Build stats whose percentage is computed from the counters."""
        return cls(
            total_items=total_items,
            collected_items=collected_items,
            delivered_items=delivered_items,
            progress_percentage=progress_percentage(delivered_items, total_items),
            bundles_completed=bundles_completed,
            total_bundles=total_bundles,
        )
