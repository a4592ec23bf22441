"""Game engine components."""

from .combat import ActionKind, UnitAction, compute_damage, resolve_unit_action
from .hexgrid import HexGrid, HexLayout
from .map_generator import generate_board, new_match
from .turn_engine import TurnEngine, build_schedule

__all__ = [
    "ActionKind",
    "build_schedule",
    "compute_damage",
    "generate_board",
    "HexGrid",
    "HexLayout",
    "new_match",
    "resolve_unit_action",
    "TurnEngine",
    "UnitAction",
]
