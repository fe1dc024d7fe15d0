"""
CLI entry point for memorymatch.
"""

# Standard library imports
import logging
from typing import Optional

# Third-party imports
import typer
from rich.console import Console
from rich.table import Table

# Local application imports
from memorymatch.constants import DEFAULT_DIFFICULTY, DIFFICULTY_PAIR_COUNTS
from memorymatch.exceptions import MemoryMatchError
from memorymatch.cli._play_logic import play_logic


console = Console()

app = typer.Typer(
    name="memorymatch",
    help="Memorymatch: find all the pairs in a shuffled deck.",
    add_completion=False,
    rich_markup_mode="markdown",
)


# ---------------------------------------------------------------------------
# Difficulties
# ---------------------------------------------------------------------------


@app.command()
def difficulties():
    """List the available difficulties and how many cards each deals."""
    table = Table(title="Difficulties")
    table.add_column("Difficulty", style="cyan")
    table.add_column("Pairs", style="magenta")
    table.add_column("Cards", style="yellow")
    for level, pair_count in DIFFICULTY_PAIR_COUNTS.items():
        label = level.value
        if level == DEFAULT_DIFFICULTY:
            label += " (default)"
        table.add_row(label, str(pair_count), str(pair_count * 2))
    console.print(table)


# ---------------------------------------------------------------------------
# Play
# ---------------------------------------------------------------------------


@app.command()
def play(
    difficulty: Optional[str] = typer.Option(  # noqa: B008
        None,
        "--difficulty",
        "-d",
        help="easy, normal, hard or expert. "
        "Falls back to MEMORYMATCH_DIFFICULTY.",
    ),
    pairs: Optional[int] = typer.Option(  # noqa: B008
        None,
        "--pairs",
        "-p",
        min=1,
        help="Deal exactly this many pairs (overrides --difficulty).",
    ),
    delay_ms: Optional[int] = typer.Option(  # noqa: B008
        None,
        "--delay-ms",
        min=0,
        help="How long a mismatched pair stays visible, in milliseconds.",
    ),
    seed: Optional[int] = typer.Option(  # noqa: B008
        None,
        "--seed",
        help="Shuffle seed for a reproducible layout.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every flip."
    ),
):
    """Deal a deck and play until every pair is found."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        session = play_logic(
            difficulty=difficulty,
            pairs=pairs,
            delay_ms=delay_ms,
            seed=seed,
        )
    except MemoryMatchError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1) from e
    except Exception as e:
        console.print(f"[bold]An unexpected error occurred:[/bold] {e}")
        raise typer.Exit(code=1) from e

    if session.is_active:
        console.print(f"Moves played: [bold]{session.moves}[/bold]")
    else:
        seconds = (session.total_duration_ms or 0) / 1000
        console.print(
            f"Finished in [bold]{session.moves}[/bold] moves "
            f"and {seconds:.1f}s."
        )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    """
    Run the CLI application.

    If an unexpected exception occurs, print a bold red error message to the console and exit the process with status code 1.
    """
    try:
        app()
    except Exception as e:
        console.print(f"[bold red]UNEXPECTED ERROR: {e}[/bold red]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
