"""Data models for the bundle tracker."""

from bundlevalley.models._base import BundleValleyBaseModel, ItemStatus
from bundlevalley.models.bundle import Bundle, BundleProgress, Item
from bundlevalley.models.stats import ProgressStats, progress_percentage

__all__ = [
    "Bundle",
    "BundleProgress",
    "BundleValleyBaseModel",
    "Item",
    "ItemStatus",
    "ProgressStats",
    "progress_percentage",
]
