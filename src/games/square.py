"""
A square on an 8x8 (chess / checkers) board

(placed in its own module as multiple other modules need to import it)

All 64 squares are created once, when this module gets imported, and live in SQUARES.
Use Square.of / Square.from_algebraic to look them up instead of constructing new ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from src.core.exceptions import GameDefectError, InvalidMoveError

# Chess/checkers board is always 8x8.
BOARD_DIMENSIONS = (8, 8)


class FileValue(IntEnum):
    """Files a-h. The value is the ordinal (a = 0)."""

    A = 0
    B = 1
    C = 2
    D = 3
    E = 4
    F = 5
    G = 6
    H = 7

    @property
    def char(self) -> str:
        return self.name.lower()

    @classmethod
    def from_char(cls, char: str) -> FileValue:
        upper = char.upper()
        if len(upper) != 1 or not ("A" <= upper <= "H"):
            raise InvalidMoveError(f"Expected a file in range A..H but got {char!r}")
        return cls[upper]


class RankValue(IntEnum):
    """Ranks 1-8. The value is the ordinal (rank 1 = 0)."""

    R1 = 0
    R2 = 1
    R3 = 2
    R4 = 3
    R5 = 4
    R6 = 5
    R7 = 6
    R8 = 7

    @property
    def char(self) -> str:
        return self.name[1]

    @classmethod
    def from_char(cls, char: str) -> RankValue:
        if len(char) != 1 or not ("1" <= char <= "8"):
            raise InvalidMoveError(f"Expected a rank in range 1..8 but got {char!r}")
        return cls[f"R{char}"]

    def is_board_end(self) -> bool:
        """First or last rank: where checkers men get crowned"""
        return self in (RankValue.R1, RankValue.R8)


class Shade(Enum):
    """Square color. Values are the glyphs used to draw an empty square."""

    LIGHT = "◻"
    DARK = "◼"


@dataclass(frozen=True)
class Square:
    file_value: FileValue
    rank_value: RankValue

    @classmethod
    def of(cls, file_value: FileValue, rank_value: RankValue) -> Square:
        try:
            return SQUARES[(file_value, rank_value)]
        except KeyError:
            raise GameDefectError(f"No square at: {file_value!r}{rank_value!r}") from None

    @classmethod
    def from_ordinals(cls, file: int, rank: int) -> Square | None:
        """Look up by (0-based) ordinals. Returns None for anything off the board (so callers can step off the edge)."""
        if not (0 <= file < BOARD_DIMENSIONS[0] and 0 <= rank < BOARD_DIMENSIONS[1]):
            return None
        return cls.of(FileValue(file), RankValue(rank))

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8'. The file letter may be upper case."""
        if len(sq) != 2:
            raise InvalidMoveError(f"Cannot interpret {sq!r} as a square")
        return cls.of(FileValue.from_char(sq[0]), RankValue.from_char(sq[1]))

    def to_algebraic(self) -> str:
        return f"{self.file_value.char}{self.rank_value.char}"

    @property
    def short_string(self) -> str:
        return self.to_algebraic()

    @property
    def shade(self) -> Shade:
        # a1 is a dark square
        return Shade.DARK if (self.file_value + self.rank_value) % 2 == 0 else Shade.LIGHT

    @property
    def file(self) -> File:
        return FILES[self.file_value]

    @property
    def rank(self) -> Rank:
        return RANKS[self.rank_value]

    def offset(self, files: int, ranks: int) -> Square | None:
        """The square reached by stepping (files, ranks) away, or None if that leaves the board"""
        return Square.from_ordinals(self.file_value + files, self.rank_value + ranks)

    def __repr__(self) -> str:
        return f"Square({self.short_string})"


@dataclass(frozen=True)
class File:
    file_value: FileValue
    squares: tuple[Square, ...]

    @property
    def char(self) -> str:
        return self.file_value.char


@dataclass(frozen=True)
class Rank:
    rank_value: RankValue
    squares: tuple[Square, ...]

    @property
    def char(self) -> str:
        return self.rank_value.char


# --- THE BOARD'S SQUARES, BUILT ONCE ---
SQUARES: dict[tuple[FileValue, RankValue], Square] = {
    (file_value, rank_value): Square(file_value, rank_value)
    for file_value in FileValue
    for rank_value in RankValue
}

FILES: tuple[File, ...] = tuple(
    File(file_value, tuple(SQUARES[(file_value, rank_value)] for rank_value in RankValue))
    for file_value in FileValue
)

# within a rank, squares are ordered a -> h
RANKS: tuple[Rank, ...] = tuple(
    Rank(rank_value, tuple(SQUARES[(file_value, rank_value)] for file_value in FileValue))
    for rank_value in RankValue
)

ALL_SQUARES: tuple[Square, ...] = tuple(SQUARES.values())
