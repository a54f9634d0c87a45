"""Bundle listing command.

Command:
  - get_all_bundles_with_items (no arguments)
"""

from __future__ import annotations

import logging

from bundlevalley._api._common import invoke_command, validate_model
from bundlevalley._constants import CMD_GET_ALL_BUNDLES_WITH_ITEMS
from bundlevalley._transport import Transport
from bundlevalley.exceptions import BundleValleyApiError
from bundlevalley.models.bundle import Bundle

_logger = logging.getLogger(__name__)


async def fetch_all_bundles_with_items(transport: Transport) -> list[Bundle]:
    """Fetch every bundle, each carrying its items.

    Raises
    ------
    BundleValleyApiError
        If the service reports an error or the payload is not a list of bundles.
    """
    data = await invoke_command(transport, CMD_GET_ALL_BUNDLES_WITH_ITEMS)
    if not isinstance(data, list):
        raise BundleValleyApiError(
            f"{CMD_GET_ALL_BUNDLES_WITH_ITEMS} returned {type(data).__name__}, expected a list",
            code="invalid_payload",
            command=CMD_GET_ALL_BUNDLES_WITH_ITEMS,
        )
    bundles = [validate_model(Bundle, entry, command=CMD_GET_ALL_BUNDLES_WITH_ITEMS) for entry in data]
    _logger.debug(
        "Fetched %d bundles with %d items",
        len(bundles),
        sum(len(bundle.item_list) for bundle in bundles),
    )
    return bundles
