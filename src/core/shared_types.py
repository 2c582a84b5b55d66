"""
Type definitions used across layers
"""

from __future__ import annotations

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYER = "waiting for player"
    WAITING_FOR_BOT = "waiting for bot"
    COMPLETED = "completed"
    ABANDONED = "abandoned"

    @property
    def is_terminal(self) -> bool:
        """No further moves are accepted once a game reaches one of these."""
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES: frozenset[Status] = frozenset({Status.COMPLETED, Status.ABANDONED})


class PieceShade(StrEnum):
    """The two sides of a checkers-like game. (Named after the piece colors, not the square colors.)"""

    LIGHT = "light"
    DARK = "dark"

    def opponent(self) -> PieceShade:
        return PieceShade.DARK if self == PieceShade.LIGHT else PieceShade.LIGHT
