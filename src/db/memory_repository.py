"""Implementation of GameSessionStore that keeps everything in memory"""

import logging
import threading

from src.core.models import GameSession

logger = logging.getLogger(__name__)


class InMemoryGameSessionStore:
    """
    Sessions stored in two dictionaries
    ----

    * by thread id: every message the bot sent in a game is an alias of that game. This is the one the engine reads.
    * by session id: all (thread id, session) pairs ever stored for one game, oldest first.

    Both get updated together under one lock. Last writer wins for a thread id. Nothing ever gets evicted.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_thread: dict[str, GameSession] = {}
        self._by_session: dict[str, list[tuple[str, GameSession]]] = {}

    def get(self, thread_id: str) -> GameSession | None:
        with self._lock:
            return self._by_thread.get(thread_id)

    def put(self, thread_id: str, session: GameSession) -> None:
        session_id = session.state.session_id
        with self._lock:
            self._by_session.setdefault(session_id, []).append((thread_id, session))
            self._by_thread[thread_id] = session
        logger.debug("Stored session %s under thread %s", session_id, thread_id)

    def aliases(self, session_id: str) -> list[str]:
        """Every thread id the game was stored under (for fanning out messages to all of them)"""
        with self._lock:
            return [thread_id for thread_id, _ in self._by_session.get(session_id, [])]

    def history(self, session_id: str) -> list[tuple[str, GameSession]]:
        with self._lock:
            return list(self._by_session.get(session_id, []))

    def clear(self) -> None:
        """Clear the store (useful in between tests)"""
        with self._lock:
            self._by_thread.clear()
            self._by_session.clear()
