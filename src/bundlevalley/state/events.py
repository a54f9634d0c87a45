"""Events consumed by :meth:`bundlevalley.state.SyncCoordinator.apply`.

Every change to the coordinator's state goes through one of these events,
so the whole state history of a session is a plain sequence of values.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from bundlevalley.models import Bundle, ItemStatus, ProgressStats


class SyncPhase(StrEnum):
    """Lifecycle of a single status-change request."""

    IDLE = "idle"
    APPLIED = "applied"
    SETTLED = "settled"
    ROLLED_BACK = "rolled_back"


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class LoadStarted(_Event):
    """A full load from the remote service began."""


class SnapshotLoaded(_Event):
    """Authoritative bundles and statistics replace all local state."""

    bundles: tuple[Bundle, ...]
    stats: ProgressStats


class LoadFailed(_Event):
    """A full load failed; local state is left as it was."""

    message: str


class StatusApplied(_Event):
    """Optimistic local status change.

    ``previous`` is the status read from the snapshot before the change and
    drives the incremental statistics delta.
    """

    request_id: int
    item_id: str
    status: ItemStatus
    previous: ItemStatus


class StatsRefreshed(_Event):
    """Authoritative statistics replace the local ones; items are untouched."""

    request_id: int | None = None
    stats: ProgressStats


class StateDiscarded(_Event):
    """Teardown: all local state is dropped."""


SyncEvent = LoadStarted | SnapshotLoaded | LoadFailed | StatusApplied | StatsRefreshed | StateDiscarded


class StatusChangeOutcome(BaseModel):
    """Result of one status-change request once its remote round trip resolved."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    request_id: int
    item_id: str
    status: ItemStatus
    previous: ItemStatus
    phase: SyncPhase
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.phase is SyncPhase.SETTLED
