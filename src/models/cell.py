"""Board cell data model."""

from dataclasses import dataclass
from typing import Optional

from .unit import Unit


@dataclass
class Cell:
    """One hex on the board.

    A cell may hold a unit only if the cell is owned by that unit's owner.
    Invalid cells are holes in the board: they are never owned, occupied,
    or returned as neighbors.
    """

    row: int
    col: int
    owner: Optional[str] = None  # "p1", "p2", or None (unclaimed)
    occupant: Optional[Unit] = None
    valid: bool = True  # False for cells outside a non-rectangular map

    def __post_init__(self):
        """Validate cell data after initialization."""
        if self.row < 0 or self.col < 0:
            raise ValueError(f"Invalid position: ({self.row}, {self.col})")
        if self.owner not in (None, "p1", "p2"):
            raise ValueError(f"Invalid owner: {self.owner} (must be None, 'p1', or 'p2')")
        if not self.valid and (self.owner is not None or self.occupant is not None):
            raise ValueError(f"Invalid cell ({self.row}, {self.col}) cannot be owned or occupied")
        if self.occupant is not None and self.occupant.owner != self.owner:
            raise ValueError(
                f"Cell ({self.row}, {self.col}) owned by {self.owner} "
                f"cannot hold a unit of {self.occupant.owner}"
            )

    @property
    def is_empty(self) -> bool:
        return self.occupant is None

    @property
    def position(self) -> tuple[int, int]:
        return (self.row, self.col)
