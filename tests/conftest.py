"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import random
from typing import Generator

import pytest

from src.core.models import RemotePlayer
from src.db.memory_repository import InMemoryGameSessionStore
from src.games.checkers import CheckersGame
from src.games.guess import NumberGuessingGame
from src.games.tictactoe import TicTacToeGame
from src.harness import Harness
from src.services.game_engine import GameEngine

SEED = 20240519


@pytest.fixture
def rng() -> random.Random:
    """Seeded, so the bots play the same moves on every run"""
    return random.Random(SEED)


@pytest.fixture
def player() -> RemotePlayer:
    return RemotePlayer("alice")


@pytest.fixture
def store() -> Generator[InMemoryGameSessionStore, None, None]:
    """Fresh store per test. Cleared at teardown to make tests independent of each other."""
    session_store = InMemoryGameSessionStore()
    try:
        yield session_store
    finally:
        session_store.clear()


@pytest.fixture
def engine(store: InMemoryGameSessionStore, rng: random.Random) -> GameEngine:
    """All three games. The guessing game always picks 5 so tests can play it deterministically."""
    games = (
        NumberGuessingGame(rng=rng, target=5),
        TicTacToeGame(rng=rng),
        CheckersGame(rng=rng),
    )
    return GameEngine(games, store)


@pytest.fixture
def harness(engine: GameEngine, player: RemotePlayer) -> Harness:
    return Harness(engine, player=player)
