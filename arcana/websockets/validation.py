"""Lightweight websocket payload validation utilities.

Provides minimal schema-like checking with clear, consistent error responses
for the dungeon socket events.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int', 'dict'
Extras: max_len, min_len (str), choices (str, case-insensitive; value is lowercased)

Example:
 schema = {
   'dir': ('str', True, {'choices': ('left', 'right')})
 }
 ok, data_or_err = validate(data, schema)

If invalid: (False, {'field': 'dir', 'error': 'must be one of left, right', 'code': 'choice'})
If valid: (True, normalized_data)
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

PRIMITIVES = {
    'str': str,
    'int': int,
    'dict': dict,
}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    out: Dict[str, Any] = {}
    for name, spec in schema.items():
        type_name, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        if name not in payload:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        py_type = PRIMITIVES[type_name]
        if not isinstance(value, py_type) or (type_name == 'int' and isinstance(value, bool)):
            return _fail(name, f'expected {type_name}', 'type')
        if type_name == 'str':
            s = value.strip()
            if not s:
                return _fail(name, 'must not be empty', 'empty')
            if 'max_len' in extras and len(s) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            if 'min_len' in extras and len(s) < extras['min_len']:
                return _fail(name, 'too short', 'min_len')
            if 'choices' in extras:
                s = s.lower()
                if s not in extras['choices']:
                    return _fail(name, 'must be one of ' + ', '.join(extras['choices']), 'choice')
            out[name] = s
        else:
            out[name] = value
    return True, out


# Predefined schemas used by handlers
DUNGEON_TURN = {
    'dir': ('str', True, {'choices': ('left', 'right')})
}
DUNGEON_MOVE: Dict[str, tuple] = {}
DUNGEON_NEW = {
    'width': ('int', False),
    'height': ('int', False),
    'seed': ('int', False),
}
