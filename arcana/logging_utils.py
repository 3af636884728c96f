"""Minimal structured logging helper.

Emits key=value pairs with a timestamp and level (or compact JSON records)
so session and API events stay greppable without a logging config.

Usage:
    from arcana.logging_utils import get_logger
    log = get_logger("arcana.session")
    log.info(event="level_generated", dungeon_level=2, door=(19, 23))

Level comes from ARCANA_LOG_LEVEL (debug|info|warn|error, default info) and
JSON output is enabled with ARCANA_LOG_JSON=1. Both are read on every call so
tests can flip them with monkeypatch. Reserved keys: level, ts, logger
(use e.g. ``dungeon_level`` for a game level).
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def _current_level() -> int:
    return LEVELS.get(os.getenv("ARCANA_LOG_LEVEL", "info").lower(), 20)


def _json_mode() -> bool:
    return os.getenv("ARCANA_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def _format(lvl: str, /, **fields) -> str:
    if _json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = lvl
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={lvl}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '_')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "arcana"

    def enabled_for(self, lvl: str) -> bool:
        return LEVELS[lvl] >= _current_level()

    def _log(self, lvl: str, /, **fields):
        if not self.enabled_for(lvl):
            return
        fields.setdefault("logger", self.name)
        print(_format(lvl, **fields), file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE: dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("arcana")
