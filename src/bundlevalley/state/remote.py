"""Contract of the authoritative remote service, as consumed by the state layer."""

from __future__ import annotations

from typing import Protocol

from bundlevalley.models import Bundle, ItemStatus, ProgressStats


class RemoteSyncClient(Protocol):
    """The three remote operations the coordinator relies on.

    :class:`bundlevalley.client.BundleValleyClient` is the production
    implementation; tests pass in-memory doubles. Failures are expected to
    surface as :class:`bundlevalley.exceptions.BundleValleyError`.
    """

    async def fetch_all_bundles_with_items(self) -> list[Bundle]: ...

    async def fetch_progress_stats(self) -> ProgressStats: ...

    async def update_item_status(self, item_id: str, status: ItemStatus) -> None: ...
