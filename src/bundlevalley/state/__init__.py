"""State layer.

This package owns the local mirror of bundles and items, the statistics
derived from it, and the coordinator that keeps both in step with the
remote service under optimistic updates.
"""

from bundlevalley.state.coordinator import StateListener, SyncCoordinator, SyncState
from bundlevalley.state.events import (
    LoadFailed,
    LoadStarted,
    SnapshotLoaded,
    StateDiscarded,
    StatsRefreshed,
    StatusApplied,
    StatusChangeOutcome,
    SyncEvent,
    SyncPhase,
)
from bundlevalley.state.remote import RemoteSyncClient
from bundlevalley.state.stats import apply_transition, compute_stats, status_contribution
from bundlevalley.state.store import MirrorSnapshot, MirrorStore

__all__ = [
    "LoadFailed",
    "LoadStarted",
    "MirrorSnapshot",
    "MirrorStore",
    "RemoteSyncClient",
    "SnapshotLoaded",
    "StateDiscarded",
    "StateListener",
    "StatsRefreshed",
    "StatusApplied",
    "StatusChangeOutcome",
    "SyncCoordinator",
    "SyncEvent",
    "SyncPhase",
    "SyncState",
    "apply_transition",
    "compute_stats",
    "status_contribution",
]
