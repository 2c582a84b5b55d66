"""
Tic-Tac-Toe against the host bot. The player who starts is X and moves first, the bot is O.

Cells are numbered 0-8 row by row. Players name them by column letter + row number: 'a1' is the top left, 'c3' bottom right.
"""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Self

from src.core.exceptions import (
    GameDefectError,
    GameOverError,
    IllegalMoveError,
    InvalidMoveError,
    NotYourPieceError,
    NotYourTurnError,
)
from src.core.models import (
    ABANDON,
    CONTINUE,
    DRAW,
    HOST_BOT,
    GameMoveResult,
    GameState,
    Player,
    RemotePlayer,
    Win,
)
from src.core.shared_types import Status
from src.games.game import own_state

logger = logging.getLogger(__name__)

MOVE_PATTERN = re.compile(r"[a-c][1-3]", re.IGNORECASE)

GRID_SIZE = 3
COLUMN_CHARS = "ABC"
ROW_CHARS = "123"
COLUMN_HEADERS = ("🅐", "🅑", "🅒")
ROW_HEADERS = ("❶", "❷", "❸")
CORNER = "⬛"

# 3 rows, 3 columns, 2 diagonals
LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class Mark(Enum):
    """What a cell holds. Values are the glyphs used to draw it."""

    X = "❌"
    O = "⭕"
    EMPTY = "⬜"


def cell_index(coordinate: str) -> int:
    """'a1' -> 0, 'B2' -> 4, 'c3' -> 8"""
    if len(coordinate) != 2:
        raise InvalidMoveError(f"Failed to parse move: {coordinate!r}")
    column = COLUMN_CHARS.find(coordinate[0].upper())
    row = ROW_CHARS.find(coordinate[1])
    if column < 0 or row < 0:
        raise InvalidMoveError(f"Failed to parse move: {coordinate!r}")
    return row * GRID_SIZE + column


def cell_name(index: int) -> str:
    """Inverse of cell_index (upper case column)"""
    row, column = divmod(index, GRID_SIZE)
    return f"{COLUMN_CHARS[column]}{ROW_CHARS[row]}"


@dataclass(frozen=True)
class TicTacToeBoard:
    cells: tuple[Mark, ...] = (Mark.EMPTY,) * (GRID_SIZE * GRID_SIZE)

    @classmethod
    def from_rows(cls, *rows: str) -> Self:
        """Convenience method: TicTacToeBoard.from_rows('XO.', '.X.', '..O') ('.' is empty)"""
        lookup = {"X": Mark.X, "O": Mark.O, ".": Mark.EMPTY}
        return cls(tuple(lookup[char.upper()] for row in rows for char in row))

    def winner(self) -> Mark | None:
        """The mark that fills any of the 8 lines, if any"""
        for a, b, c in LINES:
            if self.cells[a] != Mark.EMPTY and self.cells[a] == self.cells[b] == self.cells[c]:
                return self.cells[a]
        return None

    def is_full(self) -> bool:
        return Mark.EMPTY not in self.cells

    def empty_cells(self) -> list[int]:
        return [index for index, mark in enumerate(self.cells) if mark == Mark.EMPTY]

    def with_mark(self, index: int, mark: Mark) -> Self:
        if self.winner() is not None:
            raise GameOverError("The game is already won")
        if self.cells[index] != Mark.EMPTY:
            raise IllegalMoveError("Square must be empty")
        cells = list(self.cells)
        cells[index] = mark
        return type(self)(tuple(cells))

    def render(self) -> str:
        lines = [f"{CORNER} {' '.join(COLUMN_HEADERS)}"]
        for row in range(GRID_SIZE):
            marks = self.cells[row * GRID_SIZE : (row + 1) * GRID_SIZE]
            lines.append(f"{ROW_HEADERS[row]} {' '.join(mark.value for mark in marks)}")
        return "\n".join(lines)


@dataclass(frozen=True)
class TicTacToeState(GameState):
    # (X, O)
    players: tuple[Player, Player]
    next_player: Player
    board: TicTacToeBoard = TicTacToeBoard()

    def player(self, mark: Mark) -> Player:
        if mark == Mark.X:
            return self.players[0]
        if mark == Mark.O:
            return self.players[1]
        raise GameDefectError("An empty cell has no player")

    def mark(self, player: Player) -> Mark | None:
        if player == self.players[0]:
            return Mark.X
        if player == self.players[1]:
            return Mark.O
        return None

    def move(self, player: Player, index: int) -> TicTacToeState:
        if player != self.next_player:
            raise NotYourTurnError("Player is moving out of turn")
        mark = self.mark(player)
        if mark is None:
            raise NotYourPieceError(f"Player is not part of this game: {player}")
        board = self.board.with_mark(index, mark)
        other = self.players[1] if player == self.players[0] else self.players[0]
        if board.winner() is not None or board.is_full():
            status = Status.COMPLETED
        elif other == HOST_BOT:
            status = Status.WAITING_FOR_BOT
        else:
            status = Status.WAITING_FOR_PLAYER
        return replace(self, board=board, next_player=other, status=status)


class TicTacToeGame:
    game_id = "tictactoe"
    game_name = "Tic-Tac-Toe"

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def create_initial_state(
        self, session_id: str, player: RemotePlayer, params: str | None
    ) -> TicTacToeState:
        return TicTacToeState(
            session_id=session_id,
            status=Status.WAITING_FOR_PLAYER,
            players=(player, HOST_BOT),
            next_player=player,
        )

    def process_move(self, state: GameState, player: Player, move: str) -> TicTacToeState:
        tictactoe = own_state(state, TicTacToeState)
        match = MOVE_PATTERN.search(move)
        if match is None:
            raise InvalidMoveError(f"Did not contain a valid move: {move}")
        index = cell_index(match.group(0))
        if tictactoe.is_terminal:
            raise GameOverError("Game is over")
        logger.debug("%s plays %s in %s", player, cell_name(index), tictactoe.session_id)
        return tictactoe.move(player, index)

    def generate_response(self, state: GameState) -> str:
        return own_state(state, TicTacToeState).board.render()

    def game_move_result(self, state: GameState) -> GameMoveResult:
        tictactoe = own_state(state, TicTacToeState)
        if tictactoe.status == Status.ABANDONED:
            return ABANDON
        winner = tictactoe.board.winner()
        if winner is not None:
            return Win(tictactoe.player(winner))
        if tictactoe.board.is_full():
            return DRAW
        return CONTINUE

    def is_bot_turn(self, state: GameState) -> bool:
        return own_state(state, TicTacToeState).next_player == HOST_BOT

    def generate_bot_move(self, state: GameState) -> str:
        """Any empty cell, picked at random"""
        empty_cells = own_state(state, TicTacToeState).board.empty_cells()
        if not empty_cells:
            raise GameDefectError("I can't move: the board is full")
        return cell_name(self.rng.choice(empty_cells))
