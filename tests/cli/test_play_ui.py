"""
Unit tests for the memorymatch.cli.play_ui module.
"""

import random
from unittest.mock import MagicMock, patch

import pytest

from conftest import ids_for_value
from memorymatch.cli.play_ui import start_play_flow
from memorymatch.deck import DeckEngine
from memorymatch.models import TurnPhase
from memorymatch.turn_controller import TurnController


@pytest.fixture
def play_controller() -> TurnController:
    """Provides a TurnController over a seeded four-card deck."""
    engine = DeckEngine(2, rng=random.Random(7))
    return TurnController(engine, mismatch_delay_ms=1500, rng=random.Random(8))


def _as_inputs(*ids) -> list:
    return [str(i) for i in ids]


def test_quit_immediately(play_controller, capsys):
    sleep = MagicMock()
    with patch("rich.console.Console.input", side_effect=["q"]):
        session = start_play_flow(play_controller, sleep=sleep)

    output = capsys.readouterr().out
    assert "Find all the pairs!" in output
    assert "Game abandoned." in output
    assert session.moves == 0
    sleep.assert_not_called()


def test_full_game_with_one_mismatch(play_controller, capsys):
    engine = play_controller.engine
    a, b = ids_for_value(engine, 1)
    c, d = ids_for_value(engine, 2)
    sleep = MagicMock()

    inputs = _as_inputs(a, c, a, b, c, d)
    with patch("rich.console.Console.input", side_effect=inputs):
        session = start_play_flow(play_controller, sleep=sleep)

    output = capsys.readouterr().out
    assert "No match." in output
    assert "Match!" in output
    assert "You found every pair in 3 moves!" in output
    assert session.moves == 3
    assert session.is_active is False
    sleep.assert_called_once_with(1.5)
    assert play_controller.phase == TurnPhase.Complete


def test_invalid_input_and_rejected_flip(play_controller, capsys):
    card_id = play_controller.engine.get_cards()[0].id
    inputs = ["abc", "99", str(card_id), str(card_id), "q"]
    with patch("rich.console.Console.input", side_effect=inputs):
        start_play_flow(play_controller, sleep=MagicMock())

    output = capsys.readouterr().out
    assert "Invalid input. Please enter a card id." in output
    assert "Card 99 cannot be flipped." in output
    assert f"Card {card_id} cannot be flipped." in output


def test_new_game_deals_fresh_deck(play_controller, capsys):
    old_engine = play_controller.engine
    a, b = ids_for_value(old_engine, 1)
    inputs = [str(a), str(b), "n", "q"]
    with patch("rich.console.Console.input", side_effect=inputs):
        session = start_play_flow(play_controller, sleep=MagicMock())

    output = capsys.readouterr().out
    assert "New deck dealt." in output
    assert play_controller.engine is not old_engine
    assert session.moves == 0


def test_end_of_input_quits(play_controller, capsys):
    with patch("rich.console.Console.input", side_effect=EOFError):
        start_play_flow(play_controller, sleep=MagicMock())
    assert "Game abandoned." in capsys.readouterr().out
