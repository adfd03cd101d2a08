import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from comment_miner.cli import common
from comment_miner.cli.common import console, print_error, render_records
from comment_miner.core.errors import StoreError
from comment_miner.models import CommentLevel


def show(
    root: Annotated[Path, typer.Option(help="Workspace root; the store lives below it.")] = Path("."),
    file: Annotated[Path | None, typer.Option(help="Only show comments of this file.")] = None,
    level: Annotated[CommentLevel | None, typer.Option(help="Only show comments at this level.")] = None,
) -> None:
    """Show stored comments."""
    store = common.get_store(root)
    try:
        batch = asyncio.run(store.load())
    except StoreError as exc:
        print_error(exc)
        raise typer.Exit(1) from None

    if file is not None:
        key = str(file.resolve())
        batch = {key: batch.get(key, [])}
    for path, records in batch.items():
        if level is not None:
            records = [record for record in records if record.level == level]
        render_records(records, title=path)


def edit(
    record_id: Annotated[int, typer.Argument(help="Id of the comment to edit.")],
    root: Annotated[Path, typer.Option(help="Workspace root; the store lives below it.")] = Path("."),
    level: Annotated[CommentLevel | None, typer.Option(help="New level.")] = None,
    type: Annotated[list[str] | None, typer.Option("--type", help="New type tag; repeat for several.")] = None,
) -> None:
    """Manually change the level and/or type of one stored comment."""
    if level is None and type is None:
        console.print("[red]Nothing to change: pass --level and/or --type.[/red]")
        raise typer.Exit(1)
    store = common.get_store(root)
    try:
        record = asyncio.run(store.update_record(record_id, level=level, type=type))
    except StoreError as exc:
        print_error(exc)
        raise typer.Exit(1) from None
    tags = ", ".join(record.type)
    console.print(f"[green]Updated[/green] comment {record.id}: {record.level.value} {escape(tags)}")
