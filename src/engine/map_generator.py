"""Board generation with mirrored starting territories."""

import logging
from typing import Iterable

from ..models import Cell, MatchConfig, MatchState, Phase, PlayerState
from ..utils.constants import P1_START_CELLS
from ..utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


def mirror(row: int, col: int, rows: int, cols: int) -> tuple[int, int]:
    """Point-mirror a position through the board center."""
    return (rows - 1 - row, cols - 1 - col)


def start_cells(config: MatchConfig) -> dict[str, list[tuple[int, int]]]:
    """Starting territory per player before invalid cells are removed.

    p1 gets the fixed corner block; p2 gets its point mirror in the
    opposite corner. Cells beyond the board are dropped.
    """
    p1 = [
        (row, col)
        for row, col in P1_START_CELLS
        if 0 <= row < config.rows and 0 <= col < config.cols
    ]
    p2 = [mirror(row, col, config.rows, config.cols) for row, col in p1]
    return {"p1": p1, "p2": p2}


def generate_board(
    config: MatchConfig, invalid_cells: Iterable[tuple[int, int]] = ()
) -> list[list[Cell]]:
    """Build the grid and assign starting territories.

    Algorithm:
    1. Create rows x cols cells, marking invalid_cells as holes
    2. Give p1 its starting block, skipping holes
    3. Give p2 the mirrored block, skipping holes and cells p1 already holds

    Args:
        config: Match configuration (board size)
        invalid_cells: Positions that are not part of the playable board

    Returns:
        Row-major grid of cells

    Raises:
        ConfigurationError: If a hole lies outside the board or a player
            would start with no territory
    """
    holes = set(invalid_cells)
    for row, col in holes:
        if not (0 <= row < config.rows and 0 <= col < config.cols):
            raise ConfigurationError(
                f"Invalid cell ({row}, {col}) is outside the {config.rows}x{config.cols} board"
            )

    grid = [
        [Cell(row, col, valid=(row, col) not in holes) for col in range(config.cols)]
        for row in range(config.rows)
    ]

    for player_id, positions in start_cells(config).items():
        claimed = 0
        for row, col in positions:
            cell = grid[row][col]
            if cell.valid and cell.owner is None:
                cell.owner = player_id
                claimed += 1
        if claimed == 0:
            raise ConfigurationError(f"{player_id} has no playable starting territory")

    return grid


def new_match(config: MatchConfig, invalid_cells: Iterable[tuple[int, int]] = ()) -> MatchState:
    """Create a fresh match at round 1, p1 shopping, both players at initial gold.

    Args:
        config: Match configuration
        invalid_cells: Positions carved out of the board

    Returns:
        New MatchState
    """
    grid = generate_board(config, invalid_cells)
    match = MatchState(
        rows=config.rows,
        cols=config.cols,
        layout=config.layout,
        grid=grid,
        players={
            "p1": PlayerState(id="p1", gold=config.initial_gold),
            "p2": PlayerState(id="p2", gold=config.initial_gold),
        },
        round_index=1,
        phase=Phase.shopping("p1"),
    )
    logger.info(
        f"New match: {config.rows}x{config.cols} {config.layout} board, "
        f"{config.round_limit} rounds, {config.initial_gold} starting gold"
    )
    return match
