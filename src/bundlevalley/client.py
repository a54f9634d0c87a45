"""High-level async client for the bundle tracker service."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from bundlevalley._api import bundles as _bundles_api
from bundlevalley._api import items as _items_api
from bundlevalley._api import stats as _stats_api
from bundlevalley._transport import HttpTransport, Transport
from bundlevalley.config import BundleValleyConfig
from bundlevalley.exceptions import BundleValleyError
from bundlevalley.models import Bundle, ItemStatus, ProgressStats

_logger = logging.getLogger(__name__)


class BundleValleyClient:
    """Async client for the bundle tracker service.

    Implements :class:`bundlevalley.state.remote.RemoteSyncClient`, so it can
    be handed straight to a :class:`bundlevalley.state.SyncCoordinator`.

    Usage::

        async with BundleValleyClient(config) as client:
            bundles = await client.fetch_all_bundles_with_items()
    """

    def __init__(
        self,
        config: BundleValleyConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or BundleValleyConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport

    @property
    def config(self) -> BundleValleyConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> BundleValleyClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise BundleValleyError("Client not initialized. Use 'async with BundleValleyClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Remote operations
    # ------------------------------------------------------------------

    async def fetch_all_bundles_with_items(self) -> list[Bundle]:
        """Fetch every bundle together with its items."""
        return await _bundles_api.fetch_all_bundles_with_items(self._require_transport())

    async def fetch_progress_stats(self) -> ProgressStats:
        """Fetch authoritative statistics computed by the service."""
        return await _stats_api.fetch_progress_stats(self._require_transport())

    async def update_item_status(self, item_id: str, status: ItemStatus) -> None:
        """Set the authoritative status of one item."""
        _logger.debug("Updating item=%s status=%s", item_id, status)
        await _items_api.update_item_status(self._require_transport(), item_id, status)
