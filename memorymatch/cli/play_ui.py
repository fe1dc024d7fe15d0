"""
Command-line interface for playing a game.
"""

import logging
import time
from typing import Callable, Sequence

from rich.console import Console
from rich.table import Table

from memorymatch.models import Card, CardFace, GameSession
from memorymatch.turn_controller import (
    FlipRequested,
    GameWon,
    NewGameRequested,
    ResetTimerElapsed,
    ScheduleReset,
    TurnController,
)

logger = logging.getLogger(__name__)
console = Console()

BOARD_COLUMNS = 4


def _render_card(card: Card) -> str:
    if card.face == CardFace.Hidden:
        return f"[dim]#{card.id}[/dim]"
    if card.face == CardFace.Revealed:
        return f"[bold yellow]#{card.id}: {card.pair_value}[/bold yellow]"
    return f"[green]#{card.id}: {card.pair_value}[/green]"


def _display_board(cards: Sequence[Card], moves: int) -> None:
    """
    Print the deck as a grid of BOARD_COLUMNS columns.

    Hidden cards show only their id; revealed and matched cards also show
    their pair value.
    """
    table = Table(
        title=f"Moves: {moves}", show_header=False, show_lines=True
    )
    for _ in range(BOARD_COLUMNS):
        table.add_column(justify="center", min_width=8)
    for start in range(0, len(cards), BOARD_COLUMNS):
        chunk = cards[start : start + BOARD_COLUMNS]
        row = [_render_card(card) for card in chunk]
        row += [""] * (BOARD_COLUMNS - len(row))
        table.add_row(*row)
    console.print(table)


def _resolve_mismatch(
    controller: TurnController,
    schedule: ScheduleReset,
    sleep: Callable[[float], None],
) -> None:
    """Keep the mismatched pair visible for the delay, then hide it."""
    logger.debug(f"Hiding mismatched pair after {schedule.delay_ms} ms.")
    sleep(schedule.delay_ms / 1000.0)
    controller.dispatch(ResetTimerElapsed(schedule.generation))


def start_play_flow(
    controller: TurnController,
    sleep: Callable[[float], None] = time.sleep,
) -> GameSession:
    """
    Manages the interactive command-line game loop.

    Reads card ids from the console until the game is won or the player
    quits. 'n' deals a new deck, 'q' quits.

    Args:
        controller: The TurnController to play on.
        sleep: Used to wait out the mismatch delay.

    Returns:
        GameSession: The session of the last deck played.
    """
    console.print("[bold cyan]Find all the pairs![/bold cyan]")
    _display_board(controller.engine.get_cards(), controller.moves)

    while True:
        try:
            choice = console.input(
                "[bold]Card id (n: new game, q: quit): [/bold]"
            ).strip().lower()
        except (EOFError, KeyboardInterrupt):
            choice = "q"

        if choice == "q":
            console.print("[bold cyan]Game abandoned.[/bold cyan]")
            break
        if choice == "n":
            controller.dispatch(NewGameRequested())
            console.print("[bold cyan]New deck dealt.[/bold cyan]")
            _display_board(controller.engine.get_cards(), controller.moves)
            continue

        try:
            card_id = int(choice)
        except ValueError:
            console.print(
                "[bold red]Invalid input. Please enter a card id.[/bold red]"
            )
            continue

        outcome = controller.dispatch(FlipRequested(card_id))
        if not outcome.accepted:
            console.print(
                f"[bold red]Card {card_id} cannot be flipped.[/bold red]"
            )
            continue

        _display_board(outcome.cards, controller.moves)

        if outcome.matched is True:
            console.print("[green]Match![/green]")
        elif outcome.matched is False:
            console.print("[yellow]No match.[/yellow]")
            for effect in outcome.effects:
                if isinstance(effect, ScheduleReset):
                    _resolve_mismatch(controller, effect, sleep)
            _display_board(controller.engine.get_cards(), controller.moves)

        won = [e for e in outcome.effects if isinstance(e, GameWon)]
        if won:
            console.print(
                f"[bold green]You found every pair in "
                f"{won[0].moves} moves![/bold green]"
            )
            break

    return controller.session
