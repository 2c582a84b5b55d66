"""The board holds the position (which piece stands where) of a chess/checkers-like game and knows how to draw itself."""

from dataclasses import dataclass, field
from typing import Iterable, Protocol, Self

from src.core.exceptions import GameDefectError
from src.core.shared_types import PieceShade
from src.games.square import RANKS, Square


class BoardPiece(Protocol):
    """Just the parts the board needs from a piece"""

    @property
    def shade(self) -> PieceShade: ...

    @property
    def symbol(self) -> str: ...


# file labels across the top and bottom of the rendered board
RENDER_FILES = "+X+a+b+c+d+e+f+g+h+X+"


def render_board(pieces: dict[Square, BoardPiece] | None = None) -> str:
    """
    Plain text drawing of the board
    ----

    Ranks are listed from 8 down to 1, each one wrapped in its label. A square shows the piece standing on it,
    or its own shade when empty.

    +X+a+b+c+d+e+f+g+h+X+
    |8|◻|⚫|◻|⚫|◻|⚫|◻|⚫|8|
    ...
    |1|🔴|◻|🔴|◻|🔴|◻|🔴|◻|1|
    +X+a+b+c+d+e+f+g+h+X+
    """
    pieces = pieces or {}
    rendered_ranks = [
        f"|{rank.char}|"
        + "|".join(
            pieces[square].symbol if square in pieces else square.shade.value
            for square in rank.squares
        )
        + f"|{rank.char}|"
        for rank in reversed(RANKS)
    ]
    return "\n".join([RENDER_FILES, *rendered_ranks, RENDER_FILES])


@dataclass(frozen=True)
class Board:
    """
    Immutable position. Only occupied squares are stored.

    Moving pieces gives you a new Board; the old one stays as it was.
    """

    position: dict[Square, BoardPiece] = field(default_factory=dict)

    @classmethod
    def from_algebraic(cls, position: dict[str, BoardPiece]) -> Self:
        """Convenience method: set up a position using square names ({'d6': piece, ...})"""
        return cls({Square.from_algebraic(name): piece for name, piece in position.items()})

    def piece(self, square: Square) -> BoardPiece:
        """The piece on an occupied square. Asking for an empty square is a bug in the caller."""
        try:
            return self.position[square]
        except KeyError:
            raise GameDefectError(f"No piece at {square.short_string}") from None

    def piece_at(self, square: Square) -> BoardPiece | None:
        return self.position.get(square)

    def is_empty(self, square: Square) -> bool:
        return square not in self.position

    def locate_shade(self, shade: PieceShade) -> list[Square]:
        return [square for square, piece in self.position.items() if piece.shade == shade]

    def move_piece(
        self,
        from_square: Square,
        to_square: Square,
        captured: Iterable[Square] = (),
        new_piece: BoardPiece | None = None,
    ) -> Self:
        """Return the position after the move (optionally removing captured pieces / replacing the moving piece)"""
        moving_piece = self.piece(from_square)
        position = dict(self.position)
        del position[from_square]
        for square in captured:
            position.pop(square, None)
        position[to_square] = new_piece if new_piece is not None else moving_piece
        return type(self)(position)

    def render(self) -> str:
        return render_board(dict(self.position))
