from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'cells_carved': 0,
        'loops_added': 0,
        'dead_ends': 0,
        'rooms_requested': 0,
        'rooms_placed': 0,
        'rooms_skipped': 0,
        'door_fallback': False,
        'encounter_placed': False,
        'runtime_ms': 0.0,
    }
