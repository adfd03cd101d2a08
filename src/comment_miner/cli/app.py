import logging
from typing import Annotated

import typer

from comment_miner.cli.classify import classify, update
from comment_miner.cli.common import configure_logging
from comment_miner.cli.extract import extract
from comment_miner.cli.store import edit, show
from comment_miner.cli.watch import watch

app = typer.Typer(
    name="comment-miner",
    help="Comment miner CLI: extract, reconcile and classify source comments.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    configure_logging(logging.DEBUG if verbose else logging.INFO)


app.command("extract")(extract)
app.command("classify")(classify)
app.command("update")(update)
app.command("show")(show)
app.command("edit")(edit)
app.command("watch")(watch)


def main() -> None:
    app()
