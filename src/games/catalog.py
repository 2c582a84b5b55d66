"""The games the bot knows how to play"""

import random

from src.core.config import Settings
from src.core.exceptions import UnknownGameError
from src.games.checkers import CheckersGame
from src.games.game import Game
from src.games.guess import NumberGuessingGame
from src.games.tictactoe import TicTacToeGame


def all_games(
    rng: random.Random | None = None, guess_range: tuple[int, int] = (1, 10)
) -> tuple[Game, ...]:
    """Every game, in the order they get listed to players. Pass an rng to make the bots (and the guessing target) repeatable."""
    lowest, highest = guess_range
    return (
        NumberGuessingGame(lowest=lowest, highest=highest, rng=rng),
        TicTacToeGame(rng=rng),
        CheckersGame(rng=rng),
    )


def games_from_settings(settings: Settings, rng: random.Random | None = None) -> tuple[Game, ...]:
    """Only the enabled games, in the order the settings list them"""
    available = {
        game.game_id: game
        for game in all_games(rng, guess_range=(settings.guess_min, settings.guess_max))
    }
    unknown = [game_id for game_id in settings.enabled_games if game_id.lower() not in available]
    if unknown:
        raise UnknownGameError(
            f"Unknown game(s) {', '.join(unknown)}. Pick from {', '.join(available)}"
        )
    games = tuple(available[game_id.lower()] for game_id in settings.enabled_games)
    if not games:
        raise ValueError("At least one game must be enabled")
    return games
