"""Tests for unit combat and movement resolution."""

import pytest

from src.engine.combat import ActionKind, compute_damage, resolve_unit_action
from src.models import Cell, MatchState, PlayerState, Strategy, Unit, UnitTemplate, get_template
from src.models.catalog import strategy_for

STRIKER = UnitTemplate("striker", "Striker", "*", base_hp=100, attack=30, defense=3, cost=1, tier=1)
BULWARK = UnitTemplate("bulwark", "Bulwark", "#", base_hp=100, attack=8, defense=20, cost=1, tier=1)


def create_match(rows=8, cols=8):
    """Create an empty board with no territory."""
    return MatchState(
        rows=rows,
        cols=cols,
        layout="odd-r",
        grid=[[Cell(r, c) for c in range(cols)] for r in range(rows)],
        players={"p1": PlayerState("p1", 20), "p2": PlayerState("p2", 20)},
    )


def place(match, owner, template, row, col, hp=None):
    """Put a unit on the board, claiming the cell for its owner."""
    if isinstance(template, str):
        template = get_template(template)
    unit = Unit(
        template=template,
        hp=template.base_hp if hp is None else hp,
        max_hp=template.base_hp,
        owner=owner,
        spawn_order=match.players[owner].take_spawn_order(),
        strategy=strategy_for(template),
    )
    cell = match.grid[row][col]
    cell.owner = owner
    cell.occupant = unit
    return unit


def test_compute_damage():
    assert compute_damage(30, 20) == 10
    assert compute_damage(8, 3) == 5


def test_compute_damage_floor():
    """High defense never reduces damage below 1."""
    assert compute_damage(15, 20) == 1
    assert compute_damage(0, 50) == 1


def test_adjacent_exchange_scenario():
    """A (30/3) hits B (8/20) for 10; B hits A back for 5."""
    match = create_match()
    a = place(match, "p1", STRIKER, 3, 3)
    b = place(match, "p2", BULWARK, 3, 4)

    _, action = resolve_unit_action(match, 3, 3)
    assert action.kind == ActionKind.HIT
    assert action.amount == 10
    assert action.remaining_hp == 90
    assert b.hp == 90

    _, action = resolve_unit_action(match, 3, 4)
    assert action.kind == ActionKind.HIT
    assert action.amount == 5
    assert a.hp == 95


def test_kill_removes_unit_and_clamps_hp():
    match = create_match()
    place(match, "p1", STRIKER, 3, 3)
    victim = place(match, "p2", BULWARK, 3, 4, hp=4)

    _, action = resolve_unit_action(match, 3, 3)

    assert action.kind == ActionKind.KILL
    assert action.remaining_hp == 0
    assert victim.hp == 0
    assert match.grid[3][4].occupant is None
    assert match.grid[3][4].owner == "p2"


def test_attack_picks_nearest_enemy():
    match = create_match()
    place(match, "p1", "warrior", 3, 3)
    near = place(match, "p2", "warrior", 3, 4)
    far = place(match, "p2", "warrior", 6, 6)

    _, action = resolve_unit_action(match, 3, 3)

    assert action.target_spawn_order == near.spawn_order
    assert far.hp == far.max_hp


def test_attack_ties_break_by_spawn_order():
    """Equidistant enemies: the earlier-spawned one is struck."""
    match = create_match()
    place(match, "p1", "warrior", 3, 3)
    first = place(match, "p2", "warrior", 3, 4)
    second = place(match, "p2", "warrior", 3, 2)

    _, action = resolve_unit_action(match, 3, 3)

    assert action.target_spawn_order == first.spawn_order == 0
    assert second.hp == second.max_hp


def test_healer_heals_ally_without_moving():
    """Healer (atk 10) within range 2 of a 40/90 ally heals it to 50/90."""
    match = create_match()
    place(match, "p1", "healer", 3, 3)
    ally = place(match, "p1", "healer", 3, 5, hp=40)
    place(match, "p2", "warrior", 7, 7)

    _, action = resolve_unit_action(match, 3, 3)

    assert action.kind == ActionKind.HEAL
    assert action.amount == 10
    assert ally.hp == 50
    assert ally.max_hp == 90
    assert action.position == (3, 3)
    assert match.grid[3][3].occupant is not None
    assert action.from_position is None


def test_heal_is_capped_at_max_hp():
    match = create_match()
    place(match, "p1", "healer", 3, 3)
    ally = place(match, "p1", "warrior", 3, 4, hp=115)
    place(match, "p2", "warrior", 7, 7)

    _, action = resolve_unit_action(match, 3, 3)

    assert ally.hp == 120
    assert action.amount == 5


def test_healer_targets_lowest_hp_ally():
    match = create_match()
    place(match, "p1", "healer", 3, 3)
    scratched = place(match, "p1", "warrior", 3, 4, hp=100)
    battered = place(match, "p1", "warrior", 3, 2, hp=30)
    place(match, "p2", "warrior", 7, 7)

    _, action = resolve_unit_action(match, 3, 3)

    assert action.target_spawn_order == battered.spawn_order
    assert battered.hp == 40
    assert scratched.hp == 100


def test_healer_hp_ties_break_by_spawn_order():
    match = create_match()
    place(match, "p1", "healer", 3, 3)
    first = place(match, "p1", "warrior", 3, 4, hp=50)
    second = place(match, "p1", "warrior", 3, 2, hp=50)

    place(match, "p2", "warrior", 7, 7)
    _, action = resolve_unit_action(match, 3, 3)

    assert action.target_spawn_order == first.spawn_order
    assert second.hp == 50


def test_healer_moves_toward_distant_wounded_ally():
    match = create_match()
    place(match, "p1", "healer", 0, 0)
    place(match, "p1", "warrior", 0, 5, hp=10)
    place(match, "p2", "warrior", 7, 7)

    _, action = resolve_unit_action(match, 0, 0)

    assert action.kind == ActionKind.MOVE
    assert action.from_position == (0, 0)
    assert action.position == (0, 1)
    assert match.grid[0][1].occupant.template.id == "healer"


def test_healer_without_wounded_allies_attacks():
    match = create_match()
    healer = place(match, "p1", "healer", 3, 3)
    enemy = place(match, "p2", "warrior", 3, 4)

    _, action = resolve_unit_action(match, 3, 3)

    assert healer.strategy is Strategy.HEAL
    assert action.kind == ActionKind.HIT
    assert action.amount == 1  # 10 attack vs 10 defense
    assert enemy.hp == 119


def test_idle_when_no_enemies():
    match = create_match()
    place(match, "p1", "warrior", 3, 3)
    place(match, "p1", "mage", 3, 4)

    _, action = resolve_unit_action(match, 3, 3)

    assert action.kind == ActionKind.IDLE
    assert match.grid[3][3].occupant is not None


def test_move_one_step_toward_enemy():
    match = create_match()
    mover = place(match, "p1", "warrior", 0, 0)
    place(match, "p2", "warrior", 0, 3)

    _, action = resolve_unit_action(match, 0, 0)

    assert action.kind == ActionKind.MOVE
    assert action.position == (0, 1)
    assert match.grid[0][0].occupant is None
    assert match.grid[0][1].occupant is mover


def test_entering_a_cell_claims_it():
    match = create_match()
    place(match, "p1", "warrior", 0, 0)
    place(match, "p2", "warrior", 0, 3)

    resolve_unit_action(match, 0, 0)

    assert match.grid[0][1].owner == "p1"
    assert match.grid[0][0].owner == "p1"


def test_move_takes_first_best_neighbor():
    """Two neighbors close the gap equally; the first in neighbor order wins."""
    match = create_match()
    place(match, "p1", "warrior", 2, 2)
    place(match, "p2", "warrior", 4, 2)

    _, action = resolve_unit_action(match, 2, 2)

    assert action.position == (3, 1)


def test_blocked_when_no_empty_neighbor_helps():
    match = create_match()
    place(match, "p1", "warrior", 0, 0)
    place(match, "p1", "warrior", 0, 1)
    place(match, "p1", "warrior", 1, 0)
    place(match, "p2", "warrior", 5, 5)

    _, action = resolve_unit_action(match, 0, 0)

    assert action.kind == ActionKind.BLOCKED
    assert action.position == (0, 0)
    assert match.grid[0][0].occupant.spawn_order == 0


def test_movement_skips_invalid_cells():
    match = create_match()
    match.grid[0][1] = Cell(0, 1, valid=False)
    place(match, "p1", "warrior", 0, 0)
    place(match, "p2", "warrior", 0, 3)

    _, action = resolve_unit_action(match, 0, 0)

    # (1, 0) does not close the distance, and (0, 1) is a hole
    assert action.kind == ActionKind.BLOCKED


def test_resolve_requires_living_unit():
    match = create_match()
    with pytest.raises(ValueError, match="No living unit"):
        resolve_unit_action(match, 3, 3)


def test_action_to_dict():
    match = create_match()
    place(match, "p1", "warrior", 0, 0)
    place(match, "p2", "warrior", 0, 3)

    _, action = resolve_unit_action(match, 0, 0)
    data = action.to_dict()

    assert data["kind"] == "move"
    assert data["position"] == [0, 1]
    assert data["from_position"] == [0, 0]
    assert data["owner"] == "p1"
    assert data["round"] == 1
    assert "Warrior" in data["description"]
