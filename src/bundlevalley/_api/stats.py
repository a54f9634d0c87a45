"""Progress statistics command.

Command:
  - get_progress_stats (no arguments)
"""

from __future__ import annotations

from bundlevalley._api._common import invoke_command, validate_model
from bundlevalley._constants import CMD_GET_PROGRESS_STATS
from bundlevalley._transport import Transport
from bundlevalley.models.stats import ProgressStats


async def fetch_progress_stats(transport: Transport) -> ProgressStats:
    """Fetch the authoritative, server-side computed statistics."""
    data = await invoke_command(transport, CMD_GET_PROGRESS_STATS)
    return validate_model(ProgressStats, data, command=CMD_GET_PROGRESS_STATS)
