from __future__ import annotations

import threading
import uuid
from typing import Dict, List, Optional

from ...engine.game import Game


class GameNotFoundError(KeyError):
    """Raised when a session id is unknown."""


class InMemorySessionStore:
    """Thread-safe registry of draughts games keyed by ``game_id``.

    The ASGI server may handle requests concurrently; the engine core is not
    thread-aware, so every access to the registry goes through one lock.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._games: Dict[str, Game] = {}

    def create(self, game: Optional[Game] = None) -> str:
        gid = uuid.uuid4().hex
        with self._lock:
            self._games[gid] = game if game is not None else Game.new()
        return gid

    def get(self, game_id: str) -> Optional[Game]:
        with self._lock:
            return self._games.get(game_id)

    def replace(self, game_id: str, game: Game) -> None:
        with self._lock:
            if game_id not in self._games:
                raise GameNotFoundError(game_id)
            self._games[game_id] = game

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._games.pop(game_id, None) is not None

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._games)
