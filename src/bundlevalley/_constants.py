"""Protocol constants for the bundle tracker service."""

from __future__ import annotations

USER_AGENT = "bundlevalley-python"

DEFAULT_BASE_URL = "http://127.0.0.1:8765"
DEFAULT_REQUEST_TIMEOUT = 10.0

INVOKE_PATH = "/invoke"

CMD_GET_ALL_BUNDLES_WITH_ITEMS = "get_all_bundles_with_items"
CMD_GET_PROGRESS_STATS = "get_progress_stats"
CMD_UPDATE_ITEM_STATUS = "update_item_status"

SUCCESS_CODE = "0"
ITEM_NOT_FOUND_CODES: frozenset[str] = frozenset({"404"})
INVALID_STATUS_CODES: frozenset[str] = frozenset({"422"})

#: Pseudo-room accepted by room selectors to mean "every room".
ALL_ROOMS = "all"
