import random
from typing import Optional

from memorymatch.cli.play_ui import start_play_flow
from memorymatch.config import Settings, get_settings
from memorymatch.constants import parse_difficulty, pair_count_for
from memorymatch.deck import DeckEngine
from memorymatch.models import GameSession
from memorymatch.turn_controller import TurnController


def play_logic(
    difficulty: Optional[str] = None,
    pairs: Optional[int] = None,
    delay_ms: Optional[int] = None,
    seed: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> GameSession:
    """
    Deal a deck and start an interactive game.

    Explicit arguments win over settings loaded from the environment.
    `pairs` wins over `difficulty`.

    Parameters:
        difficulty (Optional[str]): Difficulty label (easy/normal/hard/expert).
        pairs (Optional[int]): Exact number of pairs to deal.
        delay_ms (Optional[int]): How long a mismatched pair stays visible.
        seed (Optional[int]): Shuffle seed for a reproducible layout.
        settings (Optional[Settings]): Settings to fall back on.

    Returns:
        GameSession: The session of the last deck played.
    """
    settings = settings or get_settings()
    if seed is None:
        seed = settings.seed
    rng = random.Random(seed)

    level = None
    if pairs is None:
        level = parse_difficulty(difficulty or settings.difficulty)
        pairs = pair_count_for(level)

    engine = DeckEngine(pairs, rng=rng)
    controller = TurnController(
        engine,
        mismatch_delay_ms=(
            settings.mismatch_delay_ms if delay_ms is None else delay_ms
        ),
        difficulty=level,
        rng=rng,
    )
    return start_play_flow(controller)
