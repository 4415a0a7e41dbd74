"""retain CLI — review due flashcards from a CSV file in the terminal."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from retain.application.config import resolve_config
from retain.application.factory import get_review_service, get_terminal
from retain.application.review_service import Outcome
from retain.domain.errors import RetainError, UsageError

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="retain: spaced-repetition flashcards in your terminal.",
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def _configure_logging(verbose: int) -> None:
    logging.getLogger().setLevel(LOG_LEVELS.get(verbose, logging.DEBUG))


def _require_source(path: Path) -> None:
    if not path.exists():
        raise UsageError(f"Source file not found: {path}")
    if not path.is_file():
        raise UsageError(f"Source path is not a file: {path}")


# ---------------------------------------------------------------------------
# Root command
# ---------------------------------------------------------------------------


@app.command()
def review(
    source: Annotated[
        Path,
        typer.Argument(help="CSV file of cards: question, answer (one card per row)."),
    ],
    store: Annotated[
        Path | None,
        typer.Option(help="Review state file. Defaults to a hidden file next to SOURCE."),
    ] = None,
    seed: Annotated[
        int | None, typer.Option(help="Seed for the card order (reproducible sessions).")
    ] = None,
    delimiter: Annotated[str | None, typer.Option(help="Field delimiter of SOURCE.")] = None,
    header: Annotated[
        bool | None,
        typer.Option("--header/--no-header", help="Whether SOURCE starts with a header row."),
    ] = None,
    status: Annotated[
        bool, typer.Option("--status", help="Show due counts and exit without reviewing.")
    ] = False,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """[bold green]Review[/bold green] the cards in SOURCE that are due now.

    Space flips a card; 1 (or space) marks it correct, 2 incorrect. Esc
    quits without saving. Progress is saved once every due card is graded.
    """
    try:
        _require_source(source)
        try:
            config = resolve_config(
                {
                    "source_path": source,
                    "store_path": store,
                    "seed": seed,
                    "delimiter": delimiter,
                    "has_header": header,
                    "verbose": verbose or None,
                }
            )
        except ValidationError as e:
            raise UsageError(f"Invalid configuration: {e}") from e

        _configure_logging(config.verbose)
        service = get_review_service(config)

        if status:
            _print_status(service.status())
            return

        report = service.review(get_terminal(config))
    except RetainError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(e.exit_code)

    if report.outcome is Outcome.NOTHING_DUE:
        typer.echo("No cards due.")
    elif report.outcome is Outcome.ABORTED:
        typer.secho(
            f"Aborted after {report.session.graded}/{report.due} cards; nothing saved.",
            fg="yellow",
        )
    else:
        result = report.session
        typer.secho(
            f"Reviewed {result.graded} cards: {result.correct} correct, "
            f"{result.graded - result.correct} incorrect.",
            fg="green",
        )


def _print_status(summary) -> None:
    typer.echo(f"Cards: {summary.total}  Due: {summary.due}")
    for level, count in summary.by_level.items():
        typer.echo(f"  level {level}: {count}")
