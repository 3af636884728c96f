"""
project: Arcana Crawler
module: __init__.py
License: MIT

Flask application factory and core extensions setup.

This module wires together the Flask app, Flask-SocketIO and the in-process
dungeon session registry. Configuration is sourced from environment variables
(optionally via a .env file) with reasonable defaults for development. A local
`instance/` directory holds the rotating log file.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_socketio import SocketIO

from arcana.dungeon import DungeonConfigError, SessionRegistry

# Load .env if present so `SECRET_KEY`, `DUNGEON_*` etc. can be supplied
# without exporting shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only deployments still work; only the log file is lost
    pass

app.config.update(
    SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
    # Dungeon generation; raw strings are coerced by DungeonConfig.from_mapping
    DUNGEON_WIDTH=os.getenv("DUNGEON_WIDTH", "25"),
    DUNGEON_HEIGHT=os.getenv("DUNGEON_HEIGHT", "25"),
    DUNGEON_LOOP_CHANCE=os.getenv("DUNGEON_LOOP_CHANCE", "0.2"),
    DUNGEON_MIN_ROOMS=os.getenv("DUNGEON_MIN_ROOMS", "3"),
    DUNGEON_MAX_ROOMS=os.getenv("DUNGEON_MAX_ROOMS", "5"),
    DUNGEON_ROOM_SPACING=os.getenv("DUNGEON_ROOM_SPACING", "5"),
    DUNGEON_SEED=os.getenv("DUNGEON_SEED"),
    DUNGEON_CONSUME_ENCOUNTERS=os.getenv("DUNGEON_CONSUME_ENCOUNTERS", "0"),
    DUNGEON_MAX_SESSIONS=int(os.getenv("DUNGEON_MAX_SESSIONS", "256")),
)

# Let Flask-SocketIO select best async_mode based on installed deps (eventlet/gevent/threading)
socketio = SocketIO(
    app,
    async_mode=os.getenv("SOCKETIO_ASYNC_MODE") or None,
    cors_allowed_origins=os.getenv("CORS_ALLOWED_ORIGINS", "*"),
    engineio_logger=bool(os.getenv("ENGINEIO_LOGGER", "0") == "1"),
    ping_interval=20,
    ping_timeout=10,
)


def _new_session():
    from arcana.dungeon.api_helpers.session_lookup import session_factory

    return session_factory()


sessions = SessionRegistry(_new_session, max_sessions=app.config["DUNGEON_MAX_SESSIONS"])

# Register HTTP blueprints (import after app/socketio/sessions exist)
from arcana.routes.dungeon_api import bp_dungeon  # noqa: E402

app.register_blueprint(bp_dungeon)

# Import websocket handlers so their event decorators register with Socket.IO (side-effect)
from arcana.websockets import game as _ws_game  # noqa: F401,E402


def create_app():
    """Return the Flask app instance.

    The app is a module-level singleton; this exists so entry points and tests
    have one obvious way to obtain it.
    """
    return app


@app.errorhandler(DungeonConfigError)
def dungeon_config_error(e):
    logging.getLogger(__name__).error("Invalid dungeon configuration: %s", e)
    return jsonify({"error": "invalid_dungeon_config", "field": e.field, "detail": e.message}), 500


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal", "error_id": error_id}), 500
