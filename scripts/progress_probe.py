#!/usr/bin/env python3
"""Inspect and change bundle progress against a running tracker service.

Loads every bundle through the optimistic sync engine and prints the
overall statistics plus per-bundle progress. With ``--set`` it also changes
item statuses and reports how each request settled, which makes it handy
for watching optimistic updates reconcile against a live service.

Usage
-----
::

    export BUNDLE_VALLEY_BASE_URL="http://127.0.0.1:8765"
    python scripts/progress_probe.py
    python scripts/progress_probe.py --room Pantry
    python scripts/progress_probe.py --set spring_parsnip=delivered --set spring_potato=collected

Options::

    --room ROOM          Only list bundles of ROOM (default: all rooms)
    --set ITEM=STATUS    Change an item's status (repeatable)
    --json               Output the final state as JSON
    --verbose, -v        Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from bundlevalley import BundleValleyClient, BundleValleyConfig, ItemStatus, SyncCoordinator  # noqa: E402
from bundlevalley.state import SyncState  # noqa: E402


def _parse_change(value: str) -> tuple[str, ItemStatus]:
    item_id, sep, status = value.partition("=")
    if not sep or not item_id:
        raise argparse.ArgumentTypeError(f"expected ITEM=STATUS, got {value!r}")
    try:
        return item_id, ItemStatus(status.strip().lower())
    except ValueError as exc:
        choices = ", ".join(s.value for s in ItemStatus)
        raise argparse.ArgumentTypeError(f"status must be one of: {choices}") from exc


def _print_state(coordinator: SyncCoordinator, state: SyncState, room: str) -> None:
    stats = state.stats
    if stats is not None:
        print("── Overall progress ──")
        print(f"  completion : {stats.progress_percentage:.1f}%")
        print(f"  delivered  : {stats.delivered_items}")
        print(f"  collected  : {stats.collected_items}")
        print(f"  bundles    : {stats.bundles_completed}/{stats.total_bundles}")
        print(f"  total items: {stats.total_items}")

    for bundle in coordinator.mirror.bundles_in_room(room):
        progress = bundle.progress()
        marker = "✔" if progress.is_complete else " "
        print(f"\n{marker} {bundle.name} [{bundle.room}] {progress.delivered}/{progress.required}")
        for item in bundle.item_list:
            quality = f" ({item.quality})" if item.quality else ""
            print(f"    {item.status.value:<9} {item.name}{quality}")


async def main() -> int:
    parser = argparse.ArgumentParser(description="Inspect and change bundle progress.")
    parser.add_argument("--room", default="all", help="Only list bundles of ROOM (default: all rooms)")
    parser.add_argument(
        "--set",
        action="append",
        type=_parse_change,
        default=[],
        dest="changes",
        metavar="ITEM=STATUS",
        help="Change an item's status (repeatable)",
    )
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output the final state as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = BundleValleyConfig.from_env()

    async with BundleValleyClient(config) as client:
        coordinator = SyncCoordinator(client)
        state = await coordinator.load()
        if state.error is not None:
            print(f"Load failed: {state.error}", file=sys.stderr)
            return 1

        for item_id, status in args.changes:
            coordinator.submit_status_change(item_id, status)
        for outcome in await coordinator.wait_idle():
            line = f"request {outcome.request_id}: {outcome.item_id} {outcome.previous} -> {outcome.status}"
            line += f" [{outcome.phase}]"
            if outcome.error:
                line += f" {outcome.error}"
            print(line, file=sys.stderr)

        state = coordinator.state
        if args.json_mode:
            payload = {
                "stats": state.stats.to_wire() if state.stats is not None else None,
                "bundles": [bundle.to_wire() for bundle in coordinator.mirror.bundles_in_room(args.room)],
            }
            print(json.dumps(payload, indent=2, ensure_ascii=False))
        else:
            _print_state(coordinator, state, args.room)

        coordinator.teardown()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
