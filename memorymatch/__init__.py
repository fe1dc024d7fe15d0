"""Memorymatch - a memory-matching ("concentration") card game engine."""

from .models import Card, CardFace, Difficulty, GameSession, TurnPhase
from .constants import (
    DEFAULT_MISMATCH_DELAY_MS,
    DIFFICULTY_PAIR_COUNTS,
    pair_count_for,
)
from .deck import DeckEngine
from .turn_controller import (
    AsyncTurnDriver,
    CancelReset,
    FlipRequested,
    GameWon,
    NewGameRequested,
    ResetTimerElapsed,
    ScheduleReset,
    TurnController,
    TurnOutcome,
)

__all__ = [
    "Card",
    "CardFace",
    "Difficulty",
    "GameSession",
    "TurnPhase",
    "DEFAULT_MISMATCH_DELAY_MS",
    "DIFFICULTY_PAIR_COUNTS",
    "pair_count_for",
    "DeckEngine",
    "AsyncTurnDriver",
    "CancelReset",
    "FlipRequested",
    "GameWon",
    "NewGameRequested",
    "ResetTimerElapsed",
    "ScheduleReset",
    "TurnController",
    "TurnOutcome",
]
