"""
Turn orchestration on top of DeckEngine.

TurnController is an explicit state machine (Idle, AwaitingResolution,
Complete) fed with events. It never sleeps; when a mismatched pair has to
stay visible for a while it returns a ScheduleReset effect and the caller
delivers ResetTimerElapsed once the delay has passed. Timers are tagged with
the deck generation, so a reset scheduled for a deck that has since been
replaced is ignored.

AsyncTurnDriver performs those effects on an asyncio event loop.
"""

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple, Union

from .constants import (
    DEFAULT_MISMATCH_DELAY_MS,
    pair_count_for,
    parse_difficulty,
)
from .deck import DeckEngine
from .models import Card, Difficulty, GameSession, TurnPhase

# Initialize logger
logger = logging.getLogger(__name__)


# --- Events ---


@dataclass(frozen=True)
class FlipRequested:
    card_id: int


@dataclass(frozen=True)
class ResetTimerElapsed:
    generation: int


@dataclass(frozen=True)
class NewGameRequested:
    pair_count: Optional[int] = None
    difficulty: Optional[Union[str, Difficulty]] = None


Event = Union[FlipRequested, ResetTimerElapsed, NewGameRequested]


# --- Effects ---


@dataclass(frozen=True)
class ScheduleReset:
    """Dispatch ResetTimerElapsed(generation) after delay_ms."""

    generation: int
    delay_ms: int


@dataclass(frozen=True)
class CancelReset:
    """The pending reset for this generation will never be needed."""

    generation: int


@dataclass(frozen=True)
class GameWon:
    moves: int


Effect = Union[ScheduleReset, CancelReset, GameWon]


@dataclass
class TurnOutcome:
    """
    Result of dispatching one event.

    `matched` is None unless the event completed a turn.
    """

    accepted: bool
    phase: TurnPhase
    cards: Tuple[Card, ...]
    matched: Optional[bool] = None
    effects: Tuple[Effect, ...] = field(default_factory=tuple)


EngineFactory = Callable[[int, Optional[random.Random]], DeckEngine]


class TurnController:
    """
    Runs the flip / check / delayed-reset turn protocol for one game at a
    time and keeps the move counter.
    """

    def __init__(
        self,
        engine: DeckEngine,
        mismatch_delay_ms: int = DEFAULT_MISMATCH_DELAY_MS,
        difficulty: Optional[Union[str, Difficulty]] = None,
        rng: Optional[random.Random] = None,
        engine_factory: EngineFactory = DeckEngine,
    ):
        """
        Parameters:
            engine (DeckEngine): Freshly dealt deck to play on.
            mismatch_delay_ms (int): How long a mismatched pair stays visible.
            difficulty: Difficulty the deck was dealt for, if any.
            rng (Optional[random.Random]): Random source for decks dealt by
                later NewGameRequested events.
            engine_factory: Builds new decks from (pair_count, rng).
        """
        if mismatch_delay_ms < 0:
            raise ValueError("mismatch_delay_ms must not be negative")
        self.mismatch_delay_ms = mismatch_delay_ms
        self._rng = rng
        self._engine_factory = engine_factory
        self._engine = engine
        self._phase = TurnPhase.Idle
        self.session = GameSession(
            pair_count=engine.pair_count,
            difficulty=parse_difficulty(difficulty) if difficulty else None,
        )

    @property
    def engine(self) -> DeckEngine:
        return self._engine

    @property
    def phase(self) -> TurnPhase:
        return self._phase

    @property
    def moves(self) -> int:
        return self.session.moves

    @property
    def is_locked(self) -> bool:
        """True while flips are not accepted."""
        return self._phase != TurnPhase.Idle

    def dispatch(self, event: Event) -> TurnOutcome:
        """Apply one event and report what the caller has to do next."""
        if isinstance(event, FlipRequested):
            return self._on_flip(event.card_id)
        if isinstance(event, ResetTimerElapsed):
            return self._on_timer(event.generation)
        if isinstance(event, NewGameRequested):
            return self._on_new_game(event)
        raise TypeError(f"Unsupported event: {event!r}")

    def _outcome(self, accepted: bool, **kwargs) -> TurnOutcome:
        return TurnOutcome(
            accepted=accepted,
            phase=self._phase,
            cards=self._engine.get_cards(),
            **kwargs,
        )

    def _on_flip(self, card_id: int) -> TurnOutcome:
        if self._phase != TurnPhase.Idle:
            logger.debug(f"Ignoring flip of {card_id}: phase {self._phase.name}.")
            return self._outcome(False)
        if len(self._engine.get_face_up_unmatched()) >= 2:
            return self._outcome(False)
        if not self._engine.flip_card(card_id):
            return self._outcome(False)

        if len(self._engine.get_face_up_unmatched()) < 2:
            return self._outcome(True)

        matched = self._engine.check_match()
        self.session.record_move(matched)

        if not matched:
            self._phase = TurnPhase.AwaitingResolution
            return self._outcome(
                True,
                matched=False,
                effects=(
                    ScheduleReset(
                        self._engine.generation, self.mismatch_delay_ms
                    ),
                ),
            )

        if self._engine.is_complete():
            self._phase = TurnPhase.Complete
            self.session.end_session()
            logger.info(
                f"Game {self.session.session_uuid} won in "
                f"{self.session.moves} moves."
            )
            return self._outcome(
                True, matched=True, effects=(GameWon(self.session.moves),)
            )
        return self._outcome(True, matched=True)

    def _on_timer(self, generation: int) -> TurnOutcome:
        if generation != self._engine.generation:
            logger.debug(f"Ignoring stale reset timer for generation {generation}.")
            return self._outcome(False)
        if self._phase != TurnPhase.AwaitingResolution:
            return self._outcome(False)

        self._engine.reset_unmatched_face_up()
        self._phase = TurnPhase.Idle
        return self._outcome(True)

    def _on_new_game(self, event: NewGameRequested) -> TurnOutcome:
        effects: Tuple[Effect, ...] = ()
        if self._phase == TurnPhase.AwaitingResolution:
            effects = (CancelReset(self._engine.generation),)

        difficulty = None
        if event.pair_count is not None:
            pair_count = event.pair_count
        elif event.difficulty is not None:
            difficulty = parse_difficulty(event.difficulty)
            pair_count = pair_count_for(difficulty)
        else:
            difficulty = self.session.difficulty
            pair_count = self._engine.pair_count

        self._engine = self._engine_factory(pair_count, self._rng)
        self._phase = TurnPhase.Idle
        self.session = GameSession(pair_count=pair_count, difficulty=difficulty)
        logger.info(
            f"Started new game {self.session.session_uuid} "
            f"(generation {self._engine.generation})."
        )
        return self._outcome(True, effects=effects)


class AsyncTurnDriver:
    """
    Drives a TurnController from asyncio code, turning ScheduleReset into
    loop.call_later timers and cancelling them on CancelReset.
    """

    def __init__(self, controller: TurnController):
        self.controller = controller
        self._timers: Dict[int, asyncio.TimerHandle] = {}
        self._waiter: Optional[asyncio.Future] = None

    async def flip(self, card_id: int) -> TurnOutcome:
        return self._run(FlipRequested(card_id))

    async def new_game(
        self,
        pair_count: Optional[int] = None,
        difficulty: Optional[Union[str, Difficulty]] = None,
    ) -> TurnOutcome:
        return self._run(
            NewGameRequested(pair_count=pair_count, difficulty=difficulty)
        )

    async def wait_idle(self) -> None:
        """Wait until a pending reset (if any) has fired or been cancelled."""
        if self._waiter is not None:
            await self._waiter

    @property
    def pending_resets(self) -> int:
        return len(self._timers)

    def _run(self, event: Event) -> TurnOutcome:
        outcome = self.controller.dispatch(event)
        loop = asyncio.get_running_loop()
        for effect in outcome.effects:
            if isinstance(effect, ScheduleReset):
                self._waiter = loop.create_future()
                self._timers[effect.generation] = loop.call_later(
                    effect.delay_ms / 1000.0,
                    self._on_timer,
                    effect.generation,
                )
            elif isinstance(effect, CancelReset):
                handle = self._timers.pop(effect.generation, None)
                if handle is not None:
                    handle.cancel()
                self._release_waiter()
        return outcome

    def _on_timer(self, generation: int) -> None:
        self._timers.pop(generation, None)
        self.controller.dispatch(ResetTimerElapsed(generation))
        self._release_waiter()

    def _release_waiter(self) -> None:
        if self._waiter is not None and not self._waiter.done():
            self._waiter.set_result(None)
        self._waiter = None
