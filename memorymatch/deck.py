"""
This module defines the DeckEngine class, which owns a shuffled deck of
paired cards and the per-card state of a memory-matching game. It validates
flips, detects matches, hides mismatched pairs and reports completion.
"""

import itertools
import logging
import random
from typing import List, Optional, Tuple, Union

from .constants import pair_count_for
from .exceptions import InvalidPairCountError
from .models import Card, CardFace, Difficulty

# Initialize logger
logger = logging.getLogger(__name__)

# Every dealt deck gets a fresh generation so stale timers can be told apart.
_generations = itertools.count(1)


class DeckEngine:
    """
    Manages one dealt deck.

    This class is responsible for:
    - Building 2 x pair_count cards and shuffling them.
    - Revealing single cards on request.
    - Resolving the pending pair into a match or leaving it for reset.
    - Hiding unmatched revealed cards.

    Invalid play-time requests never raise; they return False and leave the
    deck untouched. Ordering of turns (at most two revealed cards, waiting
    before a reset) is the caller's responsibility.
    """

    def __init__(self, pair_count: int, rng: Optional[random.Random] = None):
        """
        Deal a new shuffled deck.

        Parameters:
            pair_count (int): Number of pairs to deal; must be positive.
            rng (Optional[random.Random]): Random source for the shuffle.
                A fresh unseeded instance is used when omitted.

        Raises:
            InvalidPairCountError: If `pair_count` is not a positive integer.
        """
        if (
            not isinstance(pair_count, int)
            or isinstance(pair_count, bool)
            or pair_count < 1
        ):
            raise InvalidPairCountError(
                f"pair_count must be a positive integer, got {pair_count!r}."
            )
        self._pair_count = pair_count
        self._rng = rng if rng is not None else random.Random()
        self.generation = next(_generations)
        self.version = 0
        self._cards: List[Card] = self._build_cards()
        self._shuffle()
        logger.info(
            f"Dealt deck generation {self.generation} with "
            f"{pair_count} pairs ({len(self._cards)} cards)."
        )

    @classmethod
    def from_difficulty(
        cls,
        difficulty: Union[str, Difficulty],
        rng: Optional[random.Random] = None,
    ) -> "DeckEngine":
        """Deal a deck sized for a difficulty label (easy/normal/hard/expert)."""
        return cls(pair_count_for(difficulty), rng=rng)

    def _build_cards(self) -> List[Card]:
        cards: List[Card] = []
        for value in range(1, self._pair_count + 1):
            cards.append(Card(id=value * 2 - 1, pair_value=value))
            cards.append(Card(id=value * 2, pair_value=value))
        return cards

    def _shuffle(self) -> None:
        """Fisher-Yates shuffle: every permutation is equally likely."""
        cards = self._cards
        for i in range(len(cards) - 1, 0, -1):
            j = self._rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def _index_of(self, card_id: int) -> Optional[int]:
        for index, card in enumerate(self._cards):
            if card.id == card_id:
                return index
        return None

    @property
    def pair_count(self) -> int:
        return self._pair_count

    @property
    def card_count(self) -> int:
        return len(self._cards)

    def get_cards(self) -> Tuple[Card, ...]:
        """
        Return a snapshot of the deck in its current order.

        Cards are immutable, so the snapshot never reflects later changes
        and cannot be used to modify the deck.
        """
        return tuple(self._cards)

    def get_card(self, card_id: int) -> Optional[Card]:
        index = self._index_of(card_id)
        return None if index is None else self._cards[index]

    def flip_card(self, card_id: int) -> bool:
        """
        Reveal exactly one card.

        Parameters:
            card_id (int): Id of the card to reveal.

        Returns:
            bool: True if the card was hidden and is now revealed. False if
                no such card exists, it is already matched, or it is already
                face-up; the deck is unchanged in that case.
        """
        index = self._index_of(card_id)
        if index is None:
            logger.debug(f"Rejected flip of unknown card {card_id}.")
            return False
        card = self._cards[index]
        if card.is_matched:
            logger.debug(f"Rejected flip of matched card {card_id}.")
            return False
        if card.is_face_up:
            logger.debug(f"Rejected flip of face-up card {card_id}.")
            return False

        self._cards[index] = card.reveal()
        self.version += 1
        logger.debug(f"Revealed card {card_id}.")
        return True

    def get_face_up_unmatched(self) -> List[Card]:
        """Revealed cards still waiting for resolution, in deck order."""
        return [card for card in self._cards if card.face == CardFace.Revealed]

    def check_match(self) -> bool:
        """
        Resolve the pending pair.

        Returns:
            bool: True if exactly two cards are revealed and share a pair
                value; both are then matched and stay face-up. False
                otherwise, with no change (a mismatched pair stays revealed
                until reset_unmatched_face_up is called).
        """
        pending = self.get_face_up_unmatched()
        if len(pending) != 2:
            return False

        first, second = pending
        if first.pair_value != second.pair_value:
            logger.debug(f"Cards {first.id} and {second.id} do not match.")
            return False

        for card in pending:
            self._cards[self._index_of(card.id)] = card.match()
        self.version += 1
        logger.debug(
            f"Matched cards {first.id} and {second.id} "
            f"(pair {first.pair_value})."
        )
        return True

    def reset_unmatched_face_up(self) -> None:
        """Hide every revealed card that is not matched. Idempotent."""
        changed = False
        for index, card in enumerate(self._cards):
            if card.face == CardFace.Revealed:
                self._cards[index] = card.hide()
                changed = True
        if changed:
            self.version += 1

    def is_complete(self) -> bool:
        """True once every card in the deck is matched."""
        return all(card.is_matched for card in self._cards)

    def matched_pairs(self) -> int:
        return sum(1 for card in self._cards if card.is_matched) // 2
