"""Utility functions and constants for Hex Skirmish."""

from .constants import (
    ATTACK_RANGE,
    COLS,
    DEFAULT_GOLD_CAP,
    DEFAULT_LAYOUT,
    DEFAULT_ROUND_LIMIT,
    HEAL_RANGE,
    INITIAL_GOLD,
    INTEREST_RATE,
    MIN_DAMAGE,
    P1_START_CELLS,
    ROUND_STIPEND,
    ROWS,
    TERRITORY_COST,
)
from .errors import ConfigurationError, IllegalMove, IllegalMoveReason, InvalidSnapshot

__all__ = [
    "ATTACK_RANGE",
    "COLS",
    "DEFAULT_GOLD_CAP",
    "DEFAULT_LAYOUT",
    "DEFAULT_ROUND_LIMIT",
    "HEAL_RANGE",
    "INITIAL_GOLD",
    "INTEREST_RATE",
    "MIN_DAMAGE",
    "P1_START_CELLS",
    "ROUND_STIPEND",
    "ROWS",
    "TERRITORY_COST",
    "ConfigurationError",
    "IllegalMove",
    "IllegalMoveReason",
    "InvalidSnapshot",
]
