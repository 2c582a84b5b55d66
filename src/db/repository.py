"""Protocol session store (the engine only needs these two methods, the in-memory store is the one implementation for now)"""

from typing import Protocol

from src.core.models import GameSession


class GameSessionStore(Protocol):
    """Persistence layer orchestration"""

    def get(self, thread_id: str) -> GameSession | None:
        """Session that the message with this id belongs to, if any."""
        ...

    def put(self, thread_id: str, session: GameSession) -> None:
        """Remember that replies to this message id continue this session."""
        ...
