"""Socket.IO dungeon handlers.

Events:
    - dungeon_join: Attach to (or create) the caller's dungeon; no payload
    - dungeon_turn: Rotate the player; payload { dir: "left"|"right" }
    - dungeon_move: Step forward in the facing direction; no payload
    - dungeon_new:  Start a fresh dungeon; payload { width?, height?, seed? }

Emits:
    - dungeon_state: Snapshot after every transition
    - start_battle: Player stepped onto an encounter tile { level, pos }
    - error: Invalid payload { message, field, code }
"""

from flask_socketio import emit

from arcana import socketio
from arcana.dungeon import DungeonConfigError, MoveOutcome
from arcana.dungeon.api_helpers.session_lookup import current_dungeon, new_dungeon
from arcana.logging_utils import get_logger

from .validation import DUNGEON_MOVE, DUNGEON_NEW, DUNGEON_TURN, validate

_log = get_logger("arcana.ws")


def _emit_error(event: str, result: dict):
    emit('error', {'message': f"Invalid {event}: {result['error']}", 'field': result['field'], 'code': result['code']})


@socketio.on('dungeon_join')
def handle_dungeon_join(data=None):
    dungeon = current_dungeon()
    emit('dungeon_state', dungeon.snapshot.to_dict())


@socketio.on('dungeon_turn')
def handle_dungeon_turn(data=None):
    ok, result = validate(data, DUNGEON_TURN)
    if not ok:
        _emit_error('dungeon_turn', result)
        return
    dungeon = current_dungeon()
    snap = dungeon.turn_left() if result['dir'] == 'left' else dungeon.turn_right()
    emit('dungeon_state', snap.to_dict())


@socketio.on('dungeon_move')
def handle_dungeon_move(data=None):
    ok, result = validate(data, DUNGEON_MOVE)
    if not ok:
        _emit_error('dungeon_move', result)
        return
    dungeon = current_dungeon()
    outcome, snap = dungeon.advance()
    emit('dungeon_state', dict(snap.to_dict(), outcome=outcome.value))
    if outcome is MoveOutcome.ENCOUNTER:
        emit('start_battle', {'level': snap.level, 'pos': list(snap.position)})
        _log.info(event="start_battle", dungeon_level=snap.level, pos=snap.position)


@socketio.on('dungeon_new')
def handle_dungeon_new(data=None):
    ok, result = validate(data, DUNGEON_NEW)
    if not ok:
        _emit_error('dungeon_new', result)
        return
    try:
        dungeon = new_dungeon(**result)
    except DungeonConfigError as e:
        emit('error', {'message': f"Invalid dungeon_new: {e.message}", 'field': e.field, 'code': 'config'})
        return
    emit('dungeon_state', dungeon.snapshot.to_dict())
