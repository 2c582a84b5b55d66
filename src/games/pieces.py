"""Defines the checkers pieces"""

from __future__ import annotations

from enum import Enum

from src.core.shared_types import PieceShade


class CheckersPiece(Enum):
    """Values are (shade, is_king, symbol)"""

    LIGHT = (PieceShade.LIGHT, False, "🔴")
    DARK = (PieceShade.DARK, False, "⚫")
    LIGHT_KING = (PieceShade.LIGHT, True, "🚩")
    DARK_KING = (PieceShade.DARK, True, "🏴")

    @property
    def shade(self) -> PieceShade:
        return self.value[0]

    @property
    def is_king(self) -> bool:
        return self.value[1]

    @property
    def symbol(self) -> str:
        return self.value[2]

    @classmethod
    def man(cls, shade: PieceShade) -> CheckersPiece:
        return cls.LIGHT if shade == PieceShade.LIGHT else cls.DARK

    def promote(self) -> CheckersPiece:
        """Crowning a king is a no-op."""
        return CheckersPiece.LIGHT_KING if self.shade == PieceShade.LIGHT else CheckersPiece.DARK_KING
