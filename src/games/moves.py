"""
Geometry of checkers moves

A move is either a single diagonal step or a jump (two diagonal steps over the square in between).
Whether a move is actually allowed depends on the position, which is checked by the CheckersState.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.core.exceptions import GameDefectError, IllegalMoveError, InvalidMoveError
from src.core.shared_types import PieceShade
from src.games.square import Square

Vector = tuple[int, int]

DIAGONALS: tuple[Vector, ...] = ((1, 1), (-1, 1), (1, -1), (-1, -1))

MOVE_PATTERN = re.compile(r"([a-hA-H][1-8]) to ([a-hA-H][1-8])")


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def of(cls, from_square: Square, to_square: Square) -> Move:
        """Build a SingleMove or JumpMove, depending on the distance between the squares."""
        file_dist = abs(from_square.file_value - to_square.file_value)
        rank_dist = abs(from_square.rank_value - to_square.rank_value)
        if file_dist == 1 and rank_dist == 1:
            return SingleMove(from_square, to_square)
        if file_dist == 2 and rank_dist == 2:
            return JumpMove(from_square, to_square)
        raise IllegalMoveError(
            f"Move must be a single or jump: {from_square.short_string} to {to_square.short_string}"
        )

    @classmethod
    def from_text(cls, text: str) -> Move:
        """
        Find '<from> to <to>' in free text

        examples:
        * "d6 to c5"
        * "I'll go with F6 to e5 this time"
        """
        match = MOVE_PATTERN.search(text)
        if match is None:
            raise InvalidMoveError(f"Expected a move like 'd6 to c5' but got: {text!r}")
        from_square = Square.from_algebraic(match.group(1))
        to_square = Square.from_algebraic(match.group(2))
        return cls.of(from_square, to_square)

    @property
    def direction(self) -> PieceShade:
        """
        Which side's men move this way.
        Light men move up the board (towards rank 8), dark men move down (towards rank 1).
        """
        return (
            PieceShade.LIGHT
            if self.to_square.rank_value > self.from_square.rank_value
            else PieceShade.DARK
        )

    @property
    def short_string(self) -> str:
        return f"{self.from_square.short_string} to {self.to_square.short_string}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.short_string})"


@dataclass(frozen=True, repr=False)
class SingleMove(Move):
    """One diagonal step"""


@dataclass(frozen=True, repr=False)
class JumpMove(Move):
    @property
    def jumped_square(self) -> Square:
        """The square in between: exactly halfway between from and to."""
        # both ends are on the board, so the midpoint is too
        return ensure_on_board(
            Square.from_ordinals(
                (self.from_square.file_value + self.to_square.file_value) // 2,
                (self.from_square.rank_value + self.to_square.rank_value) // 2,
            )
        )


def single(from_alg: str, to_alg: str) -> SingleMove:
    """Convenience method: SingleMove from square names"""
    move = Move.of(Square.from_algebraic(from_alg), Square.from_algebraic(to_alg))
    if not isinstance(move, SingleMove):
        raise IllegalMoveError(f"Not a single move: {move.short_string}")
    return move


def jump(from_alg: str, to_alg: str) -> JumpMove:
    """Convenience method: JumpMove from square names"""
    move = Move.of(Square.from_algebraic(from_alg), Square.from_algebraic(to_alg))
    if not isinstance(move, JumpMove):
        raise IllegalMoveError(f"Not a jump move: {move.short_string}")
    return move


# --- CANDIDATE MOVES ---
def candidate_single_moves(square: Square) -> list[SingleMove]:
    """All diagonal steps that stay on the board. Ignores what is on the board and which way the piece may move."""
    moves: list[SingleMove] = []
    for df, dr in DIAGONALS:
        target_square = square.offset(df, dr)
        if target_square is None:
            continue
        moves.append(SingleMove(square, target_square))
    return moves


def candidate_jump_moves(square: Square) -> list[JumpMove]:
    """Same as candidate_single_moves, but two squares along each diagonal"""
    moves: list[JumpMove] = []
    for df, dr in DIAGONALS:
        target_square = square.offset(2 * df, 2 * dr)
        if target_square is None:
            continue
        moves.append(JumpMove(square, target_square))
    return moves


def ensure_on_board(square: Square | None) -> Square:
    """For offsets the caller already knows are on the board"""
    if square is None:
        raise GameDefectError("Stepped off the board")
    return square
