"""
Contract every game implements, so the engine can run any of them the same way.

A Game is a stateless strategy object: it is created once and holds no per-game data.
Everything that changes during play lives in the (immutable) GameState it gets handed.
"""

from typing import Protocol, TypeVar

from src.core.exceptions import GameDefectError
from src.core.models import GameMoveResult, GameState, Player, RemotePlayer

S = TypeVar("S", bound=GameState)


class Game(Protocol):
    """The rules of one kind of game"""

    @property
    def game_id(self) -> str:
        """Short machine readable id, used in the 'play <id>' command"""
        ...

    @property
    def game_name(self) -> str: ...

    def create_initial_state(
        self, session_id: str, player: RemotePlayer, params: str | None
    ) -> GameState:
        """State of a brand new game started by 'player'."""
        ...

    def process_move(self, state: GameState, player: Player, move: str) -> GameState:
        """
        Validate and apply the move. Returns the new state (the given one is left untouched).

        Raises a GameError if the move is not acceptable.
        """
        ...

    def generate_response(self, state: GameState) -> str:
        """Text shown to the player(s) for this state"""
        ...

    def game_move_result(self, state: GameState) -> GameMoveResult: ...

    def is_bot_turn(self, state: GameState) -> bool: ...

    def generate_bot_move(self, state: GameState) -> str:
        """The host bot's move, in the same text format a player would use."""
        ...


def own_state(state: GameState, state_type: type[S]) -> S:
    """
    The engine hands every game an opaque GameState. Each game narrows it to its own type here.
    Getting somebody else's state means the session got mixed up: that is a bug, not a player problem.
    """
    if not isinstance(state, state_type):
        raise GameDefectError(
            f"Invalid game state type: expected {state_type.__name__}, got {type(state).__name__}"
        )
    return state
