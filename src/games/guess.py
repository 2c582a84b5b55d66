"""
A simple number guessing game: the bot thinks of a number, the player guesses until they get it.
The bot never has to move, which makes this the smallest possible implementation of the Game contract.
"""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass, replace

from src.core.exceptions import GameDefectError, GameOverError, InvalidMoveError, NotYourPieceError
from src.core.models import (
    ABANDON,
    CONTINUE,
    GameMoveResult,
    GameState,
    Player,
    RemotePlayer,
    Win,
)
from src.core.shared_types import Status
from src.games.game import own_state

logger = logging.getLogger(__name__)

GUESS_PATTERN = re.compile(r"\b(\d+)\b")


def extract_guess(move: str) -> str | None:
    """Digits of the first number in the text (leading zeros dropped), if there is one"""
    match = GUESS_PATTERN.search(move)
    if match is None:
        return None
    return match.group(1).lstrip("0") or "0"


@dataclass(frozen=True)
class NumberGuessingState(GameState):
    player: RemotePlayer
    target_number: int
    attempts: int = 0
    last_guess: int | None = None


class NumberGuessingGame:
    game_id = "guess"
    game_name = "Number Guessing Game"

    def __init__(
        self,
        lowest: int = 1,
        highest: int = 10,
        rng: random.Random | None = None,
        target: int | None = None,
    ) -> None:
        """'target' fixes the number to guess for every new game (handy in tests)."""
        if lowest > highest:
            raise ValueError(f"Empty range: {lowest}..{highest}")
        self.lowest = lowest
        self.highest = highest
        self.rng = rng or random.Random()
        self.target = target

    def create_initial_state(
        self, session_id: str, player: RemotePlayer, params: str | None
    ) -> NumberGuessingState:
        target = self.target if self.target is not None else self.rng.randint(self.lowest, self.highest)
        return NumberGuessingState(
            session_id=session_id,
            status=Status.WAITING_FOR_PLAYER,
            player=player,
            target_number=target,
        )

    def process_move(self, state: GameState, player: Player, move: str) -> NumberGuessingState:
        guessing = own_state(state, NumberGuessingState)
        if guessing.is_terminal:
            raise GameOverError("Game is over")
        if player != guessing.player:
            raise NotYourPieceError(f"Only {guessing.player.mention} is playing this game")

        digits = extract_guess(move)
        if digits is None:
            raise InvalidMoveError(f"Please provide a number between {self.lowest} and {self.highest}")
        # more digits than the highest allowed number: out of range, no need to convert
        if len(digits) > len(str(self.highest)) or not (self.lowest <= int(digits) <= self.highest):
            raise InvalidMoveError(f"Please guess a number between {self.lowest} and {self.highest}")
        guess = int(digits)

        correct = guess == guessing.target_number
        logger.debug("%s guessed %d (%s)", player, guess, "correct" if correct else "wrong")
        return replace(
            guessing,
            attempts=guessing.attempts + 1,
            last_guess=guess,
            status=Status.COMPLETED if correct else Status.WAITING_FOR_PLAYER,
        )

    def generate_response(self, state: GameState) -> str:
        guessing = own_state(state, NumberGuessingState)
        last_guess = guessing.last_guess
        if guessing.status == Status.COMPLETED:
            return (
                f"Congratulations! You guessed the correct number ({guessing.target_number}) "
                f"in {guessing.attempts} attempts!"
            )
        if last_guess is None:
            return f"I'm thinking of a number between {self.lowest} and {self.highest}. Can you guess what it is?"
        if last_guess < guessing.target_number:
            return f"Your guess ({last_guess}) is too low. Try again!"
        return f"Your guess ({last_guess}) is too high. Try again!"

    def game_move_result(self, state: GameState) -> GameMoveResult:
        guessing = own_state(state, NumberGuessingState)
        if guessing.status == Status.COMPLETED:
            return Win(guessing.player)
        if guessing.status == Status.ABANDONED:
            return ABANDON
        return CONTINUE

    def is_bot_turn(self, state: GameState) -> bool:
        # the bot never moves in this game
        own_state(state, NumberGuessingState)
        return False

    def generate_bot_move(self, state: GameState) -> str:
        raise GameDefectError("Bot doesn't make moves in the number guessing game")
