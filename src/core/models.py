"""
Boundary layer data model(s).

These objects get passed between the engine (service layer), the game rules (domain layer) and the session store (db layer).
All of them are immutable: a move never changes a state in place, it produces a new one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Self

from src.core.shared_types import Status

if TYPE_CHECKING:
    from src.games.game import Game


# --- PLAYERS ---
@dataclass(frozen=True)
class RemotePlayer:
    """Somebody on the social platform. The name is the account handle."""

    name: str

    @property
    def mention(self) -> str:
        return f"@{self.name}"

    def __str__(self) -> str:
        return self.mention


@dataclass(frozen=True)
class HostBot:
    """The engine's own opponent. No fields, so every instance compares equal."""

    @property
    def mention(self) -> str:
        # the bot talks about itself in the first person
        return "I"

    def __str__(self) -> str:
        return "the host bot"


HOST_BOT = HostBot()

Player = RemotePlayer | HostBot


# --- GAME STATE ---
@dataclass(frozen=True)
class GameState:
    """Common part of every game's state. Each game subclasses this with its own board/target/etc."""

    session_id: str
    status: Status

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


# --- RESULT OF A MOVE ---
@dataclass(frozen=True)
class Win:
    winner: Player


@dataclass(frozen=True)
class Draw:
    pass


@dataclass(frozen=True)
class Abandon:
    pass


@dataclass(frozen=True)
class Continue:
    pass


DRAW = Draw()
ABANDON = Abandon()
CONTINUE = Continue()

GameMoveResult = Win | Draw | Abandon | Continue


# --- SESSION ---
@dataclass(frozen=True)
class GameSession:
    """A game definition (the rules) together with the current state of one game played by those rules."""

    game: Game
    state: GameState

    def update(self, state: GameState) -> Self:
        return replace(self, state=state)
