"""
Game constants.

Difficulty-to-pair-count table and the default mismatch delay.
No runtime configuration here - pure constants only.
"""
from typing import Dict, Union

from .exceptions import UnknownDifficultyError
from .models import Difficulty

# Number of card pairs dealt for each difficulty.
DIFFICULTY_PAIR_COUNTS: Dict[Difficulty, int] = {
    Difficulty.Easy: 4,
    Difficulty.Normal: 6,
    Difficulty.Hard: 8,
    Difficulty.Expert: 10,
}

DEFAULT_DIFFICULTY: Difficulty = Difficulty.Normal

# How long a mismatched pair stays visible before it is hidden again.
DEFAULT_MISMATCH_DELAY_MS: int = 1000


def parse_difficulty(label: Union[str, Difficulty]) -> Difficulty:
    """Resolve a case-insensitive difficulty label to a Difficulty."""
    if isinstance(label, Difficulty):
        return label
    try:
        return Difficulty(str(label).strip().lower())
    except ValueError as e:
        allowed = ", ".join(d.value for d in Difficulty)
        raise UnknownDifficultyError(
            f"Unknown difficulty '{label}'. Allowed: {allowed}.", e
        ) from e


def pair_count_for(difficulty: Union[str, Difficulty]) -> int:
    """Return the number of pairs dealt for a difficulty label."""
    return DIFFICULTY_PAIR_COUNTS[parse_difficulty(difficulty)]
