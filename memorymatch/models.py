"""
Data models for the memory-matching game: cards, their faces, difficulty
labels and per-game session bookkeeping.
"""

from __future__ import annotations

import uuid
from enum import Enum, IntEnum
from uuid import UUID
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import IllegalTransitionError


class CardFace(IntEnum):
    """
    Represents where a card is in its lifecycle.

    Legal transitions:
        Hidden   -> Revealed  (flip)
        Revealed -> Matched   (successful match check)
        Revealed -> Hidden    (reset after a mismatch)
    Matched is terminal.
    """

    Hidden = 0
    Revealed = 1
    Matched = 2


class Difficulty(str, Enum):
    """
    Difficulty label selecting how many pairs are dealt.
    """

    Easy = "easy"
    Normal = "normal"
    Hard = "hard"
    Expert = "expert"


class TurnPhase(IntEnum):
    """
    State of the turn controller.
    """

    Idle = 0
    AwaitingResolution = 1
    Complete = 2


class Card(BaseModel):
    """
    A single physical card slot in a deck.

    Cards are immutable; every transition returns a new Card so snapshots
    handed to callers never change underneath them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int = Field(
        ...,
        ge=1,
        description="Unique positive identifier of this card slot.",
    )
    pair_value: int = Field(
        ...,
        ge=1,
        description="Pair identifier; exactly two cards in a deck share it.",
    )
    face: CardFace = Field(
        default=CardFace.Hidden,
        description="Current face of the card.",
    )

    @property
    def is_face_up(self) -> bool:
        """True while the card is revealed or permanently matched."""
        return self.face != CardFace.Hidden

    @property
    def is_matched(self) -> bool:
        return self.face == CardFace.Matched

    def _move(self, allowed_from: CardFace, to: CardFace) -> Card:
        if self.face != allowed_from:
            raise IllegalTransitionError(
                f"Card {self.id} cannot go from {self.face.name} to {to.name}."
            )
        return self.model_copy(update={"face": to})

    def reveal(self) -> Card:
        return self._move(CardFace.Hidden, CardFace.Revealed)

    def match(self) -> Card:
        return self._move(CardFace.Revealed, CardFace.Matched)

    def hide(self) -> Card:
        return self._move(CardFace.Revealed, CardFace.Hidden)


class GameSession(BaseModel):
    """
    Bookkeeping for one dealt deck: move counter and timing.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    session_uuid: UUID = Field(
        default_factory=uuid.uuid4,
        description="Unique identifier of this game.",
    )
    difficulty: Optional[Difficulty] = Field(
        default=None,
        description="Difficulty the deck was dealt for (None if pair count "
        "was given directly).",
    )
    pair_count: int = Field(
        ...,
        ge=1,
        description="Number of pairs in the deck.",
    )
    moves: int = Field(
        default=0,
        ge=0,
        description="Completed turns (two cards revealed).",
    )
    matches_found: int = Field(
        default=0,
        ge=0,
        description="Pairs matched so far.",
    )
    start_ts: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC timestamp when the deck was dealt.",
    )
    end_ts: Optional[datetime] = Field(
        default=None,
        description="UTC timestamp when the last pair was matched.",
    )
    total_duration_ms: Optional[int] = Field(
        default=None,
        ge=0,
        description="Total duration in ms (calculated on end).",
    )

    def calculate_duration(self) -> Optional[int]:
        """Calculate game duration in milliseconds if the game has ended."""
        if self.end_ts is None:
            return None
        return int((self.end_ts - self.start_ts).total_seconds() * 1000)

    def record_move(self, matched: bool) -> None:
        """Count one completed turn, and a found pair if it matched."""
        self.moves += 1
        if matched:
            self.matches_found += 1

    def end_session(self) -> None:
        """Mark the game as finished and calculate its duration."""
        if self.end_ts is None:
            self.end_ts = datetime.now(timezone.utc)
            self.total_duration_ms = self.calculate_duration()

    @property
    def is_active(self) -> bool:
        """Check if the game is still being played."""
        return self.end_ts is None
