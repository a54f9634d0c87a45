"""Optimistic update coordinator.

The coordinator owns the local mirror and the statistics. Every status
change goes through four steps:

1. read the item's current status from the mirror;
2. synchronously mutate the mirror and apply the statistics delta, so
   listeners see the new state before the first suspension point;
3. await the remote update;
4. on success replace the statistics with the authoritative ones, on any
   error reload everything. Errors other than
   :class:`~bundlevalley.exceptions.BundleValleyError` are re-raised after
   the reload.

There is no per-item queue and no cancellation. Overlapping requests for
the same item each read the then-current status and reconcile in completion
order, so statistics can disagree with item state until the next full load.
Requests still in flight at :meth:`SyncCoordinator.teardown` run to
completion; their reconciliation is dropped.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Callable
from typing import assert_never, cast

from pydantic import BaseModel, ConfigDict, Field

from bundlevalley.exceptions import BundleValleyError
from bundlevalley.models import Bundle, ItemStatus, ProgressStats
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
from bundlevalley.state.stats import apply_transition, compute_stats
from bundlevalley.state.store import MirrorStore

_logger = logging.getLogger(__name__)


class SyncState(BaseModel):
    """Read-only view handed to listeners after every event."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    bundles: tuple[Bundle, ...] = Field(default_factory=tuple)
    stats: ProgressStats | None = None
    loading: bool = False
    error: str | None = None


StateListener = Callable[[SyncState], None]


class SyncCoordinator:
    """Keeps a local mirror consistent with a :class:`RemoteSyncClient`.

    Usage::

        coordinator = SyncCoordinator(client)
        await coordinator.load()
        outcome = await coordinator.set_item_status("spring_parsnip", ItemStatus.DELIVERED)
    """

    def __init__(self, remote: RemoteSyncClient) -> None:
        self._remote = remote
        self._mirror = MirrorStore()
        self._stats: ProgressStats | None = None
        self._loading = False
        self._error: str | None = None
        self._state = SyncState()
        self._listeners: list[StateListener] = []
        self._request_ids = itertools.count(1)
        self._pending: set[int] = set()
        self._tasks: set[asyncio.Task[StatusChangeOutcome]] = set()
        self._closed = False

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def mirror(self) -> MirrorStore:
        return self._mirror

    @property
    def in_flight(self) -> int:
        """Status-change requests whose remote round trip has not resolved."""
        return len(self._pending)

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register *listener* for every new state; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Transition function
    # ------------------------------------------------------------------

    def apply(self, event: SyncEvent) -> SyncState:
        """Apply *event* to the owned state and return the new state."""
        match event:
            case LoadStarted():
                self._loading = True
            case SnapshotLoaded(bundles=bundles, stats=stats):
                self._mirror.replace_all(bundles)
                self._stats = stats
                self._loading = False
                self._error = None
            case LoadFailed(message=message):
                self._loading = False
                self._error = message
            case StatusApplied(item_id=item_id, status=status, previous=previous):
                self._mirror.mutate_item_status(item_id, status)
                if self._stats is not None:
                    self._stats = apply_transition(self._stats, previous, status)
            case StatsRefreshed(stats=stats):
                self._stats = stats
            case StateDiscarded():
                self._mirror.clear()
                self._stats = None
                self._loading = False
                self._error = None
            case _:
                assert_never(event)

        self._state = SyncState(
            bundles=self._mirror.bundles,
            stats=self._stats,
            loading=self._loading,
            error=self._error,
        )
        self._notify(self._state)
        return self._state

    def _notify(self, state: SyncState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _logger.warning("State listener %r failed", listener, exc_info=True)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _require_open(self) -> None:
        if self._closed:
            raise BundleValleyError("Coordinator has been torn down")

    async def load(self) -> SyncState:
        """Replace all local state with a fresh authoritative snapshot.

        Used for the initial load and for rollback. A failure is logged and
        recorded in :attr:`SyncState.error`; it is never retried.
        """
        self._require_open()
        self.apply(LoadStarted())

        results = await asyncio.gather(
            self._remote.fetch_all_bundles_with_items(),
            self._remote.fetch_progress_stats(),
            return_exceptions=True,
        )

        if self._closed:
            _logger.debug("Dropping load result: coordinator torn down")
            return self._state

        for result in results:
            if isinstance(result, BundleValleyError):
                _logger.error("Loading bundles failed", exc_info=result)
                return self.apply(LoadFailed(message=str(result)))
            if isinstance(result, BaseException):
                raise result

        bundles = cast(list[Bundle], results[0])
        stats = cast(ProgressStats, results[1])
        _logger.debug("Loaded %d bundles (%d items)", len(bundles), stats.total_items)
        return self.apply(SnapshotLoaded(bundles=tuple(bundles), stats=stats))

    def recompute_stats(self) -> SyncState:
        """Replace the statistics with a full local recompute over the mirror."""
        self._require_open()
        return self.apply(StatsRefreshed(stats=compute_stats(self._mirror.bundles)))

    def teardown(self) -> None:
        """Discard all state. In-flight requests are not cancelled."""
        if self._closed:
            return
        self.apply(StateDiscarded())
        self._closed = True
        self._listeners.clear()
        if self._pending:
            _logger.debug("Teardown with %d request(s) still in flight", len(self._pending))

    # ------------------------------------------------------------------
    # Status changes
    # ------------------------------------------------------------------

    def _apply_local(self, item_id: str, status: ItemStatus) -> tuple[int, ItemStatus]:
        self._require_open()
        current = self._mirror.item_status(item_id)
        if current is None:
            _logger.debug("Status change for unknown item=%s; assuming %s", item_id, ItemStatus.MISSING)
            current = ItemStatus.MISSING

        request_id = next(self._request_ids)
        self._pending.add(request_id)
        self.apply(StatusApplied(request_id=request_id, item_id=item_id, status=status, previous=current))
        return request_id, current

    async def _settle(
        self,
        request_id: int,
        item_id: str,
        status: ItemStatus,
        previous: ItemStatus,
    ) -> StatusChangeOutcome:
        try:
            try:
                await self._remote.update_item_status(item_id, status)
                stats = await self._remote.fetch_progress_stats()
            except Exception as exc:
                _logger.warning(
                    "Status change request=%d item=%s %s->%s failed: %s; reloading",
                    request_id,
                    item_id,
                    previous,
                    status,
                    exc,
                )
                if self._closed:
                    _logger.debug("Skipping rollback of request=%d: coordinator torn down", request_id)
                else:
                    await self.load()
                if not isinstance(exc, BundleValleyError):
                    raise
                return StatusChangeOutcome(
                    request_id=request_id,
                    item_id=item_id,
                    status=status,
                    previous=previous,
                    phase=SyncPhase.ROLLED_BACK,
                    error=str(exc),
                )

            if self._closed:
                _logger.debug("Dropping reconciliation of request=%d: coordinator torn down", request_id)
            else:
                self.apply(StatsRefreshed(request_id=request_id, stats=stats))
            return StatusChangeOutcome(
                request_id=request_id,
                item_id=item_id,
                status=status,
                previous=previous,
                phase=SyncPhase.SETTLED,
            )
        finally:
            self._pending.discard(request_id)

    async def set_item_status(self, item_id: str, status: ItemStatus | str) -> StatusChangeOutcome:
        """Optimistically change one item's status and reconcile with the service.

        The local change and the statistics delta are visible as soon as this
        coroutine starts running, before it first suspends. Setting an item to
        its current status still calls the service.

        Raises
        ------
        ValueError
            If *status* is not a valid :class:`ItemStatus` value.
        BundleValleyError
            If the coordinator has been torn down.
        Exception
            Any other error raised by the remote, after the rollback reload.
        """
        status = ItemStatus(status)
        request_id, previous = self._apply_local(item_id, status)
        return await self._settle(request_id, item_id, status, previous)

    def submit_status_change(self, item_id: str, status: ItemStatus | str) -> asyncio.Task[StatusChangeOutcome]:
        """Apply a status change locally now and settle it in a background task.

        Must be called from a running event loop. The local change is done
        when this returns.
        """
        status = ItemStatus(status)
        request_id, previous = self._apply_local(item_id, status)
        task = asyncio.get_running_loop().create_task(
            self._settle(request_id, item_id, status, previous),
            name=f"bundlevalley-status-{request_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> list[StatusChangeOutcome]:
        """Wait for every request started with :meth:`submit_status_change`."""
        outcomes: list[StatusChangeOutcome] = []
        seen: set[asyncio.Task[StatusChangeOutcome]] = set()
        while True:
            batch = [task for task in self._tasks if task not in seen]
            if not batch:
                return outcomes
            seen.update(batch)
            outcomes.extend(await asyncio.gather(*batch))
