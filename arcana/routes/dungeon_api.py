"""
project: Arcana Crawler
module: dungeon_api.py
License: MIT

Dungeon state, turning, movement and regeneration API routes.

Thin JSON surface over DungeonSession. Clients poll `/api/dungeon/state` (or
use the Socket.IO events) and render the `grid` rows themselves using the
`legend` char map; nothing here renders.
"""

from flask import Blueprint, jsonify, request

from arcana.dungeon import DungeonConfigError, MoveOutcome
from arcana.dungeon.api_helpers.session_lookup import current_dungeon, new_dungeon
from arcana.dungeon.api_helpers.tiles import legend
from arcana.logging_utils import get_logger
from arcana.websockets.validation import DUNGEON_NEW, DUNGEON_TURN, validate

bp_dungeon = Blueprint("dungeon", __name__)

log = get_logger("arcana.api")


def _bad_request(result: dict):
    return jsonify({"error": result["error"], "field": result["field"], "code": result["code"]}), 400


@bp_dungeon.route("/api/dungeon/state")
def dungeon_state():
    """
    Return the render snapshot for the caller's dungeon, creating one on first use.
    Response: { 'grid': [row strings], 'pos': [x, y], 'facing', 'message', 'level', 'legend' }
    """
    dungeon = current_dungeon()
    return jsonify(dict(dungeon.snapshot.to_dict(), legend=legend()))


@bp_dungeon.route("/api/dungeon/turn", methods=["POST"])
def dungeon_turn():
    """Body (JSON): {"dir": "left" | "right"}."""
    ok, result = validate(request.get_json(silent=True), DUNGEON_TURN)
    if not ok:
        return _bad_request(result)
    dungeon = current_dungeon()
    snap = dungeon.turn_left() if result["dir"] == "left" else dungeon.turn_right()
    return jsonify(snap.to_dict())


@bp_dungeon.route("/api/dungeon/move", methods=["POST"])
def dungeon_move():
    """Step forward. `battle` is true when the step landed on an encounter tile."""
    dungeon = current_dungeon()
    outcome, snap = dungeon.advance()
    if outcome is not MoveOutcome.BLOCKED:
        log.debug(event="move", outcome=outcome.value, dungeon_level=snap.level, pos=snap.position)
    return jsonify(
        {
            "outcome": outcome.value,
            "battle": outcome is MoveOutcome.ENCOUNTER,
            "state": snap.to_dict(),
        }
    )


@bp_dungeon.route("/api/dungeon/new", methods=["POST"])
def dungeon_new():
    """Discard the current dungeon. Body (JSON, optional): {"width", "height", "seed"}."""
    ok, result = validate(request.get_json(silent=True), DUNGEON_NEW)
    if not ok:
        return _bad_request(result)
    try:
        dungeon = new_dungeon(**result)
    except DungeonConfigError as e:
        return jsonify({"error": e.message, "field": e.field, "code": "config"}), 400
    return jsonify(dungeon.snapshot.to_dict())


@bp_dungeon.route("/api/dungeon/metrics")
def dungeon_metrics():
    """Generation metrics for the current level."""
    dungeon = current_dungeon()
    return jsonify({"level": dungeon.level, "metrics": dungeon.metrics})
