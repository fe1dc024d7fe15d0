import random
from typing import List

import pytest

from memorymatch.deck import DeckEngine
from memorymatch.turn_controller import TurnController


# each test runs on cwd to its temp dir
@pytest.fixture(autouse=True)
def go_to_tmpdir(request, monkeypatch):
    """
    Temporarily change the working directory to the test's tmpdir and clear
    MEMORYMATCH_* variables, so neither a stray .env file nor the caller's
    environment leaks into settings.
    """
    for name in (
        "MEMORYMATCH_DIFFICULTY",
        "MEMORYMATCH_MISMATCH_DELAY_MS",
        "MEMORYMATCH_SEED",
    ):
        monkeypatch.delenv(name, raising=False)
    tmpdir = request.getfixturevalue("tmpdir")
    with tmpdir.as_cwd():
        yield


def ids_for_value(engine: DeckEngine, pair_value: int) -> List[int]:
    """Return the ids of the two cards carrying `pair_value`, in deck order."""
    return [c.id for c in engine.get_cards() if c.pair_value == pair_value]


@pytest.fixture
def rng() -> random.Random:
    """A seeded random source so layouts are reproducible."""
    return random.Random(1234)


@pytest.fixture
def two_pair_engine(rng: random.Random) -> DeckEngine:
    """A four-card deck: ids 1-4, pair values [1, 1, 2, 2] before shuffling."""
    return DeckEngine(2, rng=rng)


@pytest.fixture
def controller(two_pair_engine: DeckEngine, rng: random.Random) -> TurnController:
    """A TurnController over the four-card deck with a 1000 ms delay."""
    return TurnController(two_pair_engine, mismatch_delay_ms=1000, rng=rng)
