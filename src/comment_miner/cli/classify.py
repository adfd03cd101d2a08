import asyncio
from pathlib import Path
from typing import Annotated

import typer

from comment_miner.cli import common
from comment_miner.cli.common import console, print_error
from comment_miner.core.errors import ClassifierError, StoreError, UnsupportedLanguage
from comment_miner.core.workflows import classify_workspace, update_file, update_workspace

_ROOT_OPTION = typer.Option(help="Workspace root; the store lives below it.")
_OFFLINE_OPTION = typer.Option("--offline", help="Skip the classification backend.")


def classify(
    root: Annotated[Path, typer.Argument(help="Workspace root to scan.")] = Path("."),
    offline: Annotated[bool, _OFFLINE_OPTION] = False,
) -> None:
    """Extract and classify every comment in the workspace, replacing the store."""
    store = common.get_store(root)
    classifier = None if offline else common.get_classifier()
    try:
        batch = asyncio.run(classify_workspace(root, store, classifier))
    except (ClassifierError, StoreError) as exc:
        print_error(exc)
        raise typer.Exit(1) from None
    total = sum(len(records) for records in batch.values())
    console.print(f"[green]Classified[/green] {total} comment(s) in {len(batch)} file(s)")


def update(
    path: Annotated[Path | None, typer.Argument(help="File to update; omit to update the whole workspace.")] = None,
    root: Annotated[Path, _ROOT_OPTION] = Path("."),
    offline: Annotated[bool, _OFFLINE_OPTION] = False,
) -> None:
    """Re-extract and only reclassify comments whose text changed."""
    store = common.get_store(root)
    classifier = None if offline else common.get_classifier()
    try:
        if path is not None:
            result = asyncio.run(update_file(path, root, store, classifier))
            preserved, reclassified = len(result.preserved), len(result.to_reclassify)
        else:
            results = asyncio.run(update_workspace(root, store, classifier))
            preserved = sum(len(r.preserved) for r in results.values())
            reclassified = sum(len(r.to_reclassify) for r in results.values())
    except (ClassifierError, StoreError, UnsupportedLanguage, FileNotFoundError) as exc:
        print_error(exc)
        raise typer.Exit(1) from None
    console.print(f"[green]Updated[/green] {preserved} preserved, {reclassified} reclassified")
