"""Match state container and phase model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from .cell import Cell
from .player import PlayerState


class PhaseKind(Enum):
    """Top-level states of the turn engine."""

    SHOPPING = "shopping"
    EXECUTING = "executing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Phase:
    """Current engine state.

    player is the shopping player for SHOPPING, the execution filter
    ("p1", "p2", or "all") for EXECUTING, and None for GAME_OVER.
    """

    kind: PhaseKind
    player: Optional[str] = None

    def __post_init__(self):
        """Validate phase data after initialization."""
        if self.kind is PhaseKind.SHOPPING and self.player not in ("p1", "p2"):
            raise ValueError(f"Invalid shopping player: {self.player}")
        if self.kind is PhaseKind.EXECUTING and self.player not in ("p1", "p2", "all"):
            raise ValueError(f"Invalid execution filter: {self.player}")
        if self.kind is PhaseKind.GAME_OVER and self.player is not None:
            raise ValueError("Game over phase carries no player")

    @classmethod
    def shopping(cls, player: str) -> "Phase":
        return cls(PhaseKind.SHOPPING, player)

    @classmethod
    def executing(cls, player_filter: str) -> "Phase":
        return cls(PhaseKind.EXECUTING, player_filter)

    @classmethod
    def game_over(cls) -> "Phase":
        return cls(PhaseKind.GAME_OVER)

    @property
    def is_shopping(self) -> bool:
        return self.kind is PhaseKind.SHOPPING

    @property
    def is_executing(self) -> bool:
        return self.kind is PhaseKind.EXECUTING

    @property
    def is_over(self) -> bool:
        return self.kind is PhaseKind.GAME_OVER

    def __str__(self) -> str:
        if self.player is None:
            return self.kind.value
        return f"{self.kind.value}({self.player})"


@dataclass
class MatchState:
    """Main match state container.

    Holds the board, both player purses, the round/phase cursor, the
    execution schedule for the current EXECUTING phase, and the action log.
    Exactly one engine owns a MatchState at a time; all mutation happens
    in place through that engine.
    """

    rows: int
    cols: int
    layout: str  # Hex offset layout name (see engine.hexgrid.HexLayout)
    grid: list[list[Cell]] = field(default_factory=list)
    players: dict[str, PlayerState] = field(default_factory=dict)  # "p1" and "p2"
    round_index: int = 1  # 1-based round counter
    phase: Phase = field(default_factory=lambda: Phase.shopping("p1"))
    winner: Optional[str] = None  # "p1", "p2", "draw", or None
    schedule: list[tuple[str, int]] = field(
        default_factory=list
    )  # (owner, spawn_order) keys fixed at execution start
    schedule_index: int = 0  # Next slot to resolve in schedule
    action_log: list[dict] = field(
        default_factory=list
    )  # Resolved unit actions, oldest first

    def __post_init__(self):
        """Validate match data after initialization."""
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Invalid board size: {self.rows}x{self.cols}")
        if self.round_index < 1:
            raise ValueError(f"Invalid round_index: {self.round_index} (must be >= 1)")
        if self.winner not in (None, "p1", "p2", "draw"):
            raise ValueError(f"Invalid winner: {self.winner} (must be None, 'p1', 'p2', or 'draw')")
        if self.grid and (
            len(self.grid) != self.rows or any(len(row) != self.cols for row in self.grid)
        ):
            raise ValueError(f"Grid shape does not match {self.rows}x{self.cols}")

    def cell(self, row: int, col: int) -> Cell:
        """Return the cell at (row, col). Raises IndexError when out of bounds."""
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Cell ({row}, {col}) is outside the {self.rows}x{self.cols} board")
        return self.grid[row][col]

    def cells(self) -> Iterator[Cell]:
        """Iterate all cells in row-major order."""
        for row in self.grid:
            yield from row

    @property
    def is_over(self) -> bool:
        return self.phase.is_over
