"""Read-only roster queries over the board.

Counts used by shopping legality checks and front ends. Nothing here
mutates the match.
"""

from dataclasses import dataclass
from typing import Optional

from ..models.match import MatchState
from ..models.unit import Unit


@dataclass(frozen=True)
class Placement:
    """A living unit and where it stands."""

    unit: Unit
    row: int
    col: int

    @property
    def position(self) -> tuple[int, int]:
        return (self.row, self.col)


def territory_count(match: MatchState, player_id: str) -> int:
    """Number of cells owned by player_id."""
    return sum(1 for cell in match.cells() if cell.owner == player_id)


def occupied_count(match: MatchState, player_id: str) -> int:
    """Number of player_id's cells that hold a unit."""
    return sum(
        1 for cell in match.cells() if cell.owner == player_id and cell.occupant is not None
    )


def unit_cap(match: MatchState, player_id: str) -> int:
    """Maximum units a player may field: one per owned cell."""
    return territory_count(match, player_id)


def living_units(match: MatchState, owner: Optional[str] = None) -> list[Placement]:
    """List living units sorted by (owner, spawn_order).

    Args:
        match: Current match state
        owner: Restrict to one player, or None for both

    Returns:
        Placements in deterministic execution-tiebreak order
    """
    placements = [
        Placement(cell.occupant, cell.row, cell.col)
        for cell in match.cells()
        if cell.occupant is not None
        and cell.occupant.is_alive
        and (owner is None or cell.occupant.owner == owner)
    ]
    placements.sort(key=lambda p: (p.unit.owner, p.unit.spawn_order))
    return placements


def find_unit(match: MatchState, owner: str, spawn_order: int) -> Optional[Placement]:
    """Locate a living unit by its stable (owner, spawn_order) key."""
    for cell in match.cells():
        unit = cell.occupant
        if unit is not None and unit.owner == owner and unit.spawn_order == spawn_order:
            return Placement(unit, cell.row, cell.col) if unit.is_alive else None
    return None


def total_hp(match: MatchState, owner: str) -> int:
    """Sum of remaining hit points across a player's units."""
    return sum(p.unit.hp for p in living_units(match, owner))


def has_living_units(match: MatchState, owner: str) -> bool:
    return any(
        cell.occupant is not None and cell.occupant.owner == owner and cell.occupant.is_alive
        for cell in match.cells()
    )
