"""In-process DungeonSession registry.

Sessions live only as long as the process (no persistence). Access is guarded
by a lock because Flask-SocketIO may interleave handlers across threads or
greenlets; each session additionally serializes its own transitions.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from .session import DungeonSession

DEFAULT_MAX_SESSIONS = 256


class SessionRegistry:
    def __init__(self, factory: Callable[[], DungeonSession], max_sessions: int = DEFAULT_MAX_SESSIONS):
        self.factory = factory
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, DungeonSession]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[DungeonSession]:
        with self._lock:
            dungeon = self._sessions.get(key)
            if dungeon is not None:
                self._sessions.move_to_end(key)
            return dungeon

    def get_or_create(self, key: str) -> Tuple[DungeonSession, bool]:
        existing = self.get(key)
        if existing is not None:
            return existing, False
        # Generate outside the registry lock; a racing creator for the same key wins first.
        dungeon = self.factory()
        with self._lock:
            if key in self._sessions:
                return self._sessions[key], False
            self._put(key, dungeon)
        return dungeon, True

    def replace(self, key: str, dungeon: DungeonSession) -> None:
        with self._lock:
            self._sessions.pop(key, None)
            self._put(key, dungeon)

    def discard(self, key: str) -> bool:
        with self._lock:
            return self._sessions.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._sessions

    def _put(self, key: str, dungeon: DungeonSession) -> None:
        self._sessions[key] = dungeon
        while len(self._sessions) > self.max_sessions:
            self._sessions.popitem(last=False)
