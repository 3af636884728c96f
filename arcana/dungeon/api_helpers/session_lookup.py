"""Resolve the caller's DungeonSession from the Flask session.

Shared by the HTTP routes and the Socket.IO handlers. The only identity is an
opaque id kept in the signed session cookie; accounts are out of scope.
"""

from __future__ import annotations

import uuid

from flask import current_app, session

from arcana.dungeon import DungeonConfig, DungeonSession
from arcana.logging_utils import get_logger

__all__ = ["SESSION_KEY", "session_key", "current_dungeon", "new_dungeon", "session_factory"]

SESSION_KEY = "dungeon_id"

log = get_logger("arcana.sessions")


def session_key() -> str:
    key = session.get(SESSION_KEY)
    if not key:
        key = uuid.uuid4().hex
        session[SESSION_KEY] = key
    return key


def session_factory(**overrides) -> DungeonSession:
    """Build a session from the app's DUNGEON_* config, optionally overriding width/height/seed."""
    config = DungeonConfig.from_mapping(current_app.config)
    return DungeonSession(config=config, **overrides)


def current_dungeon() -> DungeonSession:
    from arcana import sessions

    key = session_key()
    dungeon, created = sessions.get_or_create(key)
    if created:
        log.info(event="session_created", key=key[:8], dungeon_level=dungeon.level)
    return dungeon


def new_dungeon(**overrides) -> DungeonSession:
    from arcana import sessions

    key = session_key()
    dungeon = session_factory(**overrides)
    sessions.replace(key, dungeon)
    log.info(event="session_reset", key=key[:8], width=dungeon.config.width, height=dungeon.config.height)
    return dungeon
