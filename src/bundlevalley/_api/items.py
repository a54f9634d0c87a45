"""Item status command.

Command:
  - update_item_status ``{"itemId": str, "status": str}``
"""

from __future__ import annotations

from bundlevalley._api._common import invoke_command
from bundlevalley._constants import CMD_UPDATE_ITEM_STATUS
from bundlevalley._transport import Transport
from bundlevalley.models import ItemStatus


async def update_item_status(transport: Transport, item_id: str, status: ItemStatus) -> None:
    """Set the authoritative status of one item.

    Raises
    ------
    BundleValleyItemNotFoundError
        If the service does not know *item_id*.
    BundleValleyInvalidStatusError
        If the service rejects *status*.
    """
    await invoke_command(
        transport,
        CMD_UPDATE_ITEM_STATUS,
        {"itemId": item_id, "status": ItemStatus(status).value},
    )
