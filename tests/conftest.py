import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from arcana import create_app, sessions, socketio  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True, "DUNGEON_WIDTH": "11", "DUNGEON_HEIGHT": "11", "DUNGEON_SEED": None})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def socket_client(test_app):
    # Flask-SocketIO test client sharing the Flask test client's cookie jar
    test_client = socketio.test_client(test_app, flask_test_client=test_app.test_client())
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()


# ---------------- Additional autouse cleanup ----------------
@pytest.fixture(autouse=True)
def _clear_dungeon_sessions():
    """Dungeon sessions are process-global; don't let one test's maze leak into the next."""
    sessions.clear()
    yield
    sessions.clear()
