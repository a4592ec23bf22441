"""Execution phase: per-unit combat and movement resolution.

Each scheduled unit takes exactly one action per slot:
1. Healers mend the most wounded ally in range, or walk toward it
2. Everyone else strikes the nearest adjacent enemy, or walks toward it
3. A unit with no empty neighbor that closes the distance is blocked

The grid is mutated in place and one UnitAction describes what happened.
"""

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional

from ..models.match import MatchState
from ..models.unit import Strategy, Unit
from ..utils.constants import ATTACK_RANGE, HEAL_RANGE, MIN_DAMAGE
from .hexgrid import HexGrid

logger = logging.getLogger(__name__)


class ActionKind(Enum):
    """Outcome of one unit's turn."""

    IDLE = "idle"
    HEAL = "heal"
    HIT = "hit"
    KILL = "kill"
    MOVE = "move"
    BLOCKED = "blocked"


@dataclass
class UnitAction:
    """Record of a single resolved unit turn.

    Attributes:
        round: Round in which the action happened
        owner: Acting unit's owner ("p1" or "p2")
        spawn_order: Acting unit's spawn order
        unit_name: Acting unit's display name
        kind: What the unit did
        position: Actor's cell after the action
        target_owner: Owner of the healed/attacked unit, if any
        target_spawn_order: Spawn order of the healed/attacked unit, if any
        target_name: Display name of the healed/attacked unit, if any
        amount: Damage dealt or hit points restored
        remaining_hp: Target's hit points after the action
        from_position: Actor's cell before a move
        description: Human-readable summary for logs and front ends
    """

    round: int
    owner: str
    spawn_order: int
    unit_name: str
    kind: ActionKind
    position: tuple[int, int]
    target_owner: Optional[str] = None
    target_spawn_order: Optional[int] = None
    target_name: Optional[str] = None
    amount: int = 0
    remaining_hp: Optional[int] = None
    from_position: Optional[tuple[int, int]] = None
    description: str = ""

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dict for the action log."""
        data = asdict(self)
        data["kind"] = self.kind.value
        data["position"] = list(self.position)
        if self.from_position is not None:
            data["from_position"] = list(self.from_position)
        return data


@dataclass
class _Contact:
    """A living unit seen from the actor, with its distance."""

    unit: Unit
    row: int
    col: int
    distance: int


def compute_damage(attack: int, defense: int) -> int:
    """Damage dealt by one strike: attack minus defense, never below MIN_DAMAGE.

    Examples:
        >>> compute_damage(30, 20)
        10
        >>> compute_damage(15, 20)
        1
    """
    return max(MIN_DAMAGE, attack - defense)


def resolve_unit_action(match: MatchState, row: int, col: int) -> tuple[MatchState, UnitAction]:
    """Resolve one autonomous turn for the unit standing at (row, col).

    Args:
        match: Current match state (mutated in place)
        row: Actor's row
        col: Actor's column

    Returns:
        Tuple of (match, action describing what the unit did)

    Raises:
        ValueError: If no living unit stands at (row, col)
    """
    actor = match.grid[row][col].occupant
    if actor is None or not actor.is_alive:
        raise ValueError(f"No living unit at ({row}, {col})")

    board = HexGrid.for_match(match)
    enemies, allies = _survey(match, board, actor, row, col)

    if not enemies:
        action = _action(match, actor, ActionKind.IDLE, (row, col), "No enemies remain")
        logger.debug(action.description)
        return match, action

    if actor.strategy is Strategy.HEAL:
        wounded = [ally for ally in allies if ally.unit.is_wounded]
        if wounded:
            # min() keeps the first of equal keys, so enumeration order breaks ties
            target = min(wounded, key=lambda a: (a.unit.hp, a.unit.spawn_order))
            if target.distance <= HEAL_RANGE:
                action = _heal(match, actor, (row, col), target)
            else:
                action = _move_toward(
                    match, board, actor, (row, col), target,
                    f"moving toward wounded {target.unit.name}",
                )
            logger.debug(action.description)
            return match, action

    nearest = min(enemies, key=lambda e: e.distance)
    if nearest.distance <= ATTACK_RANGE:
        action = _strike(match, actor, (row, col), nearest)
    else:
        action = _move_toward(
            match, board, actor, (row, col), nearest, f"moving toward {nearest.unit.name}"
        )
    logger.debug(action.description)
    return match, action


def _survey(
    match: MatchState, board: HexGrid, actor: Unit, row: int, col: int
) -> tuple[list[_Contact], list[_Contact]]:
    """Split living units (other than the actor) into enemies and allies.

    Both lists are in (owner, spawn_order) order.
    """
    contacts = []
    for cell in match.cells():
        unit = cell.occupant
        if unit is None or unit is actor or not unit.is_alive:
            continue
        contacts.append(_Contact(unit, cell.row, cell.col, board.distance((row, col), cell.position)))
    contacts.sort(key=lambda c: (c.unit.owner, c.unit.spawn_order))

    enemies = [c for c in contacts if c.unit.owner != actor.owner]
    allies = [c for c in contacts if c.unit.owner == actor.owner]
    return enemies, allies


def _action(
    match: MatchState, actor: Unit, kind: ActionKind, position: tuple[int, int], text: str, **extra
) -> UnitAction:
    return UnitAction(
        round=match.round_index,
        owner=actor.owner,
        spawn_order=actor.spawn_order,
        unit_name=actor.name,
        kind=kind,
        position=position,
        description=f"{actor.owner} {actor.name} #{actor.spawn_order}: {text}",
        **extra,
    )


def _heal(match: MatchState, actor: Unit, position: tuple[int, int], target: _Contact) -> UnitAction:
    restored = target.unit.restore(actor.attack)
    return _action(
        match, actor, ActionKind.HEAL, position,
        f"healed {target.unit.name} +{restored}HP ({target.unit.hp}/{target.unit.max_hp})",
        target_owner=target.unit.owner,
        target_spawn_order=target.unit.spawn_order,
        target_name=target.unit.name,
        amount=restored,
        remaining_hp=target.unit.hp,
    )


def _strike(
    match: MatchState, actor: Unit, position: tuple[int, int], target: _Contact
) -> UnitAction:
    damage = compute_damage(actor.attack, target.unit.defense)
    remaining = target.unit.take_damage(damage)
    extra = dict(
        target_owner=target.unit.owner,
        target_spawn_order=target.unit.spawn_order,
        target_name=target.unit.name,
        amount=damage,
        remaining_hp=remaining,
    )

    if remaining == 0:
        match.grid[target.row][target.col].occupant = None
        return _action(
            match, actor, ActionKind.KILL, position,
            f"attacked {target.unit.name} for {damage} dmg, KILLED",
            **extra,
        )
    return _action(
        match, actor, ActionKind.HIT, position,
        f"attacked {target.unit.name} for {damage} dmg ({remaining}HP left)",
        **extra,
    )


def _move_toward(
    match: MatchState,
    board: HexGrid,
    actor: Unit,
    origin: tuple[int, int],
    target: _Contact,
    intent: str,
) -> UnitAction:
    """Step one hex toward target, or report the actor blocked.

    Only empty neighbors that strictly reduce the distance qualify; among
    them the first with the smallest distance wins, in neighbor-table order.
    Entering a cell claims it for the mover's owner.
    """
    destination = (target.row, target.col)
    best_distance = board.distance(origin, destination)
    best: Optional[tuple[int, int]] = None

    for neighbor in board.neighbors(*origin):
        if match.grid[neighbor[0]][neighbor[1]].occupant is not None:
            continue
        d = board.distance(neighbor, destination)
        if d < best_distance:
            best_distance = d
            best = neighbor

    if best is None:
        return _action(match, actor, ActionKind.BLOCKED, origin, "blocked, cannot move")

    source_cell = match.grid[origin[0]][origin[1]]
    dest_cell = match.grid[best[0]][best[1]]
    source_cell.occupant = None
    dest_cell.owner = actor.owner
    dest_cell.occupant = actor

    return _action(
        match, actor, ActionKind.MOVE, best,
        f"{intent}, ({origin[0]}, {origin[1]}) -> ({best[0]}, {best[1]})",
        from_position=origin,
    )
