import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from comment_miner.cli import common
from comment_miner.cli.common import console
from comment_miner.core.workflows import update_file
from comment_miner.watcher.watchfiles_adapter import WatchfilesWatcher

logger = logging.getLogger(__name__)


def watch(
    root: Annotated[Path, typer.Argument(help="Workspace root to watch.")] = Path("."),
    offline: Annotated[bool, typer.Option("--offline", help="Skip the classification backend.")] = False,
) -> None:
    """Keep the store up to date while files change."""
    store = common.get_store(root)
    classifier = None if offline else common.get_classifier()

    async def _on_change(paths: set[Path]) -> None:
        for path in sorted(paths):
            result = await update_file(path, root, store, classifier)
            logger.info("%s: %d preserved, %d reclassified", path, len(result.preserved), len(result.to_reclassify))

    async def _run() -> None:
        watcher = WatchfilesWatcher(root, _on_change)
        await watcher.start()
        try:
            await watcher.wait()
        finally:
            await watcher.stop()

    console.print(f"[green]Watching[/green] {root.resolve()} (Ctrl+C to stop)")
    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped.")
