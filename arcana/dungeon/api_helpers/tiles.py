"""Shared tile utility helpers for the dungeon API and socket handlers.

Isolated to avoid circular imports between `dungeon_api` and the websocket layer.
"""

from arcana.dungeon import TileKind


def kind_to_type(kind: TileKind) -> str:
    return kind.name.lower()


def legend() -> dict:
    """Wire char -> tile type name, shipped with state payloads so clients can decode rows."""
    return {kind.value: kind_to_type(kind) for kind in TileKind}
