"""Base model and status enum for the bundle tracker wire schema.

Every wire model inherits from :class:`BundleValleyBaseModel`, which is
frozen (snapshots are replaced, never edited in place) and ignores unknown
keys so a newer service can add fields without breaking older clients.

Field names on the wire are the Python field names; there is no alias
generation. :meth:`BundleValleyBaseModel.to_wire` is the inverse of
``model_validate`` and omits optional fields that are ``None``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ItemStatus(StrEnum):
    """The three mutually exclusive states of an item.

    Unlike an open string, unknown values fail validation instead of
    producing an item the statistics cannot account for.
    """

    MISSING = "missing"
    COLLECTED = "collected"
    DELIVERED = "delivered"


class BundleValleyBaseModel(BaseModel):
    """Base for wire models."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        """Dump to the JSON-compatible wire representation."""
        return self.model_dump(mode="json", exclude_none=True)
