"""bundlevalley - Async client and optimistic state engine for bundle progress tracking."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bundlevalley")
except PackageNotFoundError:
    __version__ = "0+local"
from bundlevalley.client import BundleValleyClient
from bundlevalley.config import BundleValleyConfig
from bundlevalley.exceptions import (
    BundleValleyApiError,
    BundleValleyConfigError,
    BundleValleyError,
    BundleValleyInvalidStatusError,
    BundleValleyItemNotFoundError,
    BundleValleyTransportError,
)
from bundlevalley.models import Bundle, BundleProgress, Item, ItemStatus, ProgressStats
from bundlevalley.state import (
    MirrorStore,
    RemoteSyncClient,
    StatusChangeOutcome,
    SyncCoordinator,
    SyncPhase,
    SyncState,
    apply_transition,
    compute_stats,
)

__all__ = [
    "__version__",
    "Bundle",
    "BundleProgress",
    "BundleValleyApiError",
    "BundleValleyClient",
    "BundleValleyConfig",
    "BundleValleyConfigError",
    "BundleValleyError",
    "BundleValleyInvalidStatusError",
    "BundleValleyItemNotFoundError",
    "BundleValleyTransportError",
    "Item",
    "ItemStatus",
    "MirrorStore",
    "ProgressStats",
    "RemoteSyncClient",
    "StatusChangeOutcome",
    "SyncCoordinator",
    "SyncPhase",
    "SyncState",
    "apply_transition",
    "compute_stats",
]
