"""Hex board geometry: adjacency and distance over offset coordinates.

The board is a rectangle of (row, col) cells laid out with one fixed
parity rule. Cells can be marked invalid to carve non-rectangular maps;
invalid cells are never returned as neighbors.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from ..models.match import MatchState
from ..utils.distance import hex_distance


class HexLayout(Enum):
    """Offset layouts (pointy-top rows or flat-top columns)."""

    ODD_R = "odd-r"
    EVEN_R = "even-r"
    ODD_Q = "odd-q"
    EVEN_Q = "even-q"


# (d_row, d_col) neighbor offsets keyed by layout, then by parity of the
# shifted axis (0 = even row/col, 1 = odd row/col)
_NEIGHBOR_OFFSETS: dict[HexLayout, tuple[tuple[tuple[int, int], ...], ...]] = {
    HexLayout.ODD_R: (
        ((-1, -1), (-1, 0), (0, -1), (0, 1), (1, -1), (1, 0)),
        ((-1, 0), (-1, 1), (0, -1), (0, 1), (1, 0), (1, 1)),
    ),
    HexLayout.EVEN_R: (
        ((-1, 0), (-1, 1), (0, -1), (0, 1), (1, 0), (1, 1)),
        ((-1, -1), (-1, 0), (0, -1), (0, 1), (1, -1), (1, 0)),
    ),
    HexLayout.ODD_Q: (
        ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, 0)),
        ((-1, 0), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)),
    ),
    HexLayout.EVEN_Q: (
        ((-1, 0), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)),
        ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, 0)),
    ),
}


@dataclass(frozen=True)
class HexGrid:
    """Immutable board geometry.

    Attributes:
        rows: Board height
        cols: Board width
        layout: Offset parity rule for the whole board
        invalid: Cells that are not part of the playable board
    """

    rows: int
    cols: int
    layout: HexLayout = HexLayout.ODD_R
    invalid: frozenset[tuple[int, int]] = field(default_factory=frozenset)

    def __post_init__(self):
        """Validate geometry after initialization."""
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Invalid board size: {self.rows}x{self.cols}")

    @classmethod
    def for_match(cls, match: MatchState) -> "HexGrid":
        """Build the geometry of a match's board, including its holes."""
        invalid = frozenset(cell.position for cell in match.cells() if not cell.valid)
        return cls(match.rows, match.cols, HexLayout(match.layout), invalid)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_valid(self, row: int, col: int) -> bool:
        """True if (row, col) is on the board and not carved out."""
        return self.in_bounds(row, col) and (row, col) not in self.invalid

    def neighbors(self, row: int, col: int) -> list[tuple[int, int]]:
        """Return the up-to-six playable cells adjacent to (row, col).

        Args:
            row: Row index
            col: Column index

        Returns:
            Neighbor positions in offset-table order; never includes the origin
        """
        if self.layout in (HexLayout.ODD_R, HexLayout.EVEN_R):
            parity = row & 1
        else:
            parity = col & 1
        offsets = _NEIGHBOR_OFFSETS[self.layout][parity]
        return [
            (row + d_row, col + d_col)
            for d_row, d_col in offsets
            if self.is_valid(row + d_row, col + d_col)
        ]

    def distance(self, a: tuple[int, int], b: tuple[int, int]) -> int:
        """Exact hex distance between two positions."""
        return hex_distance(a[0], a[1], b[0], b[1], self.layout.value)

    def is_adjacent_to_any(self, row: int, col: int, positions: Iterable[tuple[int, int]]) -> bool:
        """True if any of positions neighbors (row, col)."""
        targets = set(positions)
        return any(neighbor in targets for neighbor in self.neighbors(row, col))
