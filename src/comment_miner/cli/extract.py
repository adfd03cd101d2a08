from pathlib import Path
from typing import Annotated

import typer
from pydantic import TypeAdapter

from comment_miner.cli.common import console, print_error, render_records
from comment_miner.core.errors import UnsupportedLanguage
from comment_miner.core.extract import extract_file
from comment_miner.core.languages import resolve_language, write_temp_code_file
from comment_miner.models import CommentRecord

_RECORDS_ADAPTER: TypeAdapter[list[CommentRecord]] = TypeAdapter(list[CommentRecord])


def extract(
    path: Annotated[Path | None, typer.Argument(help="Source file to extract comments from.")] = None,
    code: Annotated[str | None, typer.Option(help="Source code string to extract instead of a file.")] = None,
    language: Annotated[str | None, typer.Option(help="Language name (java, python, pharo).")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print records as JSON.")] = False,
) -> None:
    """Extract comment paragraphs from one file without touching the store."""
    temp_path: Path | None = None
    try:
        if code is not None:
            resolved_language = resolve_language(language, None)
            temp_path = write_temp_code_file(code, resolved_language)
            target = temp_path
        elif path is not None:
            target = path
        else:
            console.print("[red]Provide a PATH or --code.[/red]")
            raise typer.Exit(1)
        records = extract_file(target, target.parent, language=language)
    except (UnsupportedLanguage, FileNotFoundError) as exc:
        print_error(exc)
        raise typer.Exit(1) from None
    finally:
        if temp_path:
            temp_path.unlink(missing_ok=True)

    if as_json:
        typer.echo(_RECORDS_ADAPTER.dump_json(records, by_alias=True, indent=2).decode("utf-8"))
    else:
        render_records(records, title=str(path) if path else None)
