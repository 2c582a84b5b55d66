"""
Play the games in a terminal.

Usage:
    python -m src.cli                      all enabled games, default player
    python -m src.cli --games checkers     only checkers
    python -m src.cli --player alice --log-level DEBUG

Every line you type is sent as a reply to the last response. Type 'quit' (or end the input) to stop.
"""

import argparse
import sys
from typing import TextIO

from src.core.config import get_settings
from src.core.exceptions import UnknownGameError
from src.core.logging_config import LOG_LEVELS, configure_logging
from src.core.models import RemotePlayer
from src.db.memory_repository import InMemoryGameSessionStore
from src.games.catalog import games_from_settings
from src.harness import DEFAULT_PLAYER, Harness, HarnessResponse
from src.services.game_engine import GameEngine

QUIT_COMMANDS = {"quit", "exit"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fedigame",
        description="Play the bot's turn-based games in a terminal",
    )
    parser.add_argument(
        "--games",
        nargs="+",
        metavar="GAME_ID",
        help="ids of the games to offer (default: the enabled games from the settings)",
    )
    parser.add_argument("--player", default=DEFAULT_PLAYER.name, help="your player name")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="overrides FEDIGAME_LOG_LEVEL",
    )
    return parser


def play(harness: Harness, lines: TextIO, out: TextIO) -> int:
    """Feed lines to the engine until 'quit' or the end of the input. Returns the number of exchanges."""
    response: HarnessResponse | None = None
    exchanges = 0
    for line in lines:
        text = line.strip()
        if not text:
            continue
        if text.lower() in QUIT_COMMANDS:
            break
        response = harness.first_request(text) if response is None else response.request(text)
        print(response.body, file=out)
        exchanges += 1
    return exchanges


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    if args.games:
        settings = settings.model_copy(update={"enabled_games": args.games})
    configure_logging(args.log_level or settings.effective_log_level)

    try:
        games = games_from_settings(settings)
    except UnknownGameError as error:
        print(error, file=sys.stderr)
        return 2

    engine = GameEngine(games, InMemoryGameSessionStore())
    harness = Harness(engine, player=RemotePlayer(args.player), post_suffix=settings.post_suffix)

    print("Enter a command (play <game id> or quit):")
    for game in engine.available_games():
        print(f" - {game.game_id}: {game.game_name}")
    exchanges = play(harness, sys.stdin, sys.stdout)
    print(f"Gameplay finished after {exchanges} messages")
    return 0


if __name__ == "__main__":
    sys.exit(main())
