"""Engine error taxonomy.

None of these errors is fatal to a match:
- IllegalMove: a shopping or control action was rejected; nothing changed.
- InvalidSnapshot: persisted state could not be restored; start a fresh match.
- ConfigurationError: match configuration is missing or out of range.
"""

from enum import Enum


class IllegalMoveReason(Enum):
    """Classification of rejected player actions."""

    WRONG_PHASE = "wrong_phase"
    OUT_OF_BOUNDS = "out_of_bounds"
    INVALID_CELL = "invalid_cell"
    CELL_OWNED = "cell_owned"
    ALREADY_BOUGHT = "already_bought"
    INSUFFICIENT_GOLD = "insufficient_gold"
    NOT_ADJACENT = "not_adjacent"
    NOT_OWNED = "not_owned"
    CELL_OCCUPIED = "cell_occupied"
    UNIT_CAP = "unit_cap"
    UNKNOWN_UNIT = "unknown_unit"
    PHASE_INCOMPLETE = "phase_incomplete"


class IllegalMove(ValueError):
    """Raised when a player action is rejected without mutating state."""

    def __init__(self, reason: IllegalMoveReason, message: str):
        """Initialize illegal move.

        Args:
            reason: Classification of the rejection
            message: Human-readable explanation
        """
        self.reason = reason
        self.message = message
        super().__init__(message)


class InvalidSnapshot(ValueError):
    """Raised when a stored match snapshot does not fit the configured board."""


class ConfigurationError(ValueError):
    """Raised when match configuration is missing or invalid."""
