"""Tests for shopping economy: territory, deployment, interest."""

import pytest

from src.engine.economy import buy_territory, deploy_unit, settle_interest
from src.engine.map_generator import new_match
from src.engine.roster import occupied_count, territory_count
from src.models import Cell, MatchConfig, MatchState, PlayerState, get_template
from src.utils.errors import IllegalMove, IllegalMoveReason


def create_empty_match(rows=8, cols=8, gold=20, invalid=()):
    """Create a match with no territory assigned."""
    grid = [
        [Cell(r, c, valid=(r, c) not in invalid) for c in range(cols)] for r in range(rows)
    ]
    return MatchState(
        rows=rows,
        cols=cols,
        layout="odd-r",
        grid=grid,
        players={"p1": PlayerState("p1", gold), "p2": PlayerState("p2", gold)},
    )


def snapshot(match):
    """Capture the mutable facts a rejected action must not touch."""
    return (
        [(cell.owner, cell.occupant) for cell in match.cells()],
        {pid: (p.gold, p.territory_bought_this_round, p.next_spawn_order)
         for pid, p in match.players.items()},
    )


def test_buy_adjacent_territory_scenario():
    """One owned cell, 20 gold, cost 3: buy succeeds, second buy fails."""
    match = create_empty_match()
    match.grid[3][3].owner = "p1"
    config = MatchConfig()

    buy_territory(match, "p1", 3, 4, config)

    assert match.grid[3][4].owner == "p1"
    assert match.players["p1"].gold == 17
    assert match.players["p1"].territory_bought_this_round is True

    with pytest.raises(IllegalMove) as exc_info:
        buy_territory(match, "p1", 3, 2, config)
    assert exc_info.value.reason == IllegalMoveReason.ALREADY_BOUGHT
    assert match.grid[3][2].owner is None
    assert match.players["p1"].gold == 17


def test_second_purchase_fails_regardless_of_gold():
    match = new_match(MatchConfig())
    config = MatchConfig()
    buy_territory(match, "p1", 2, 1, config)
    match.players["p1"].gold = 50

    with pytest.raises(IllegalMove) as exc_info:
        buy_territory(match, "p1", 2, 2, config)
    assert exc_info.value.reason == IllegalMoveReason.ALREADY_BOUGHT


def test_purchase_flags_are_per_player():
    match = new_match(MatchConfig())
    config = MatchConfig()
    buy_territory(match, "p1", 2, 1, config)
    buy_territory(match, "p2", 5, 6, config)

    assert match.grid[5][6].owner == "p2"
    assert territory_count(match, "p1") == 6
    assert territory_count(match, "p2") == 6


@pytest.mark.parametrize(
    "row,col,reason",
    [
        (5, 5, IllegalMoveReason.NOT_ADJACENT),
        (0, 1, IllegalMoveReason.CELL_OWNED),
        (7, 6, IllegalMoveReason.CELL_OWNED),
        (8, 0, IllegalMoveReason.OUT_OF_BOUNDS),
        (0, -1, IllegalMoveReason.OUT_OF_BOUNDS),
    ],
)
def test_illegal_purchases_leave_state_untouched(row, col, reason):
    match = new_match(MatchConfig())
    before = snapshot(match)

    with pytest.raises(IllegalMove) as exc_info:
        buy_territory(match, "p1", row, col, MatchConfig())

    assert exc_info.value.reason == reason
    assert snapshot(match) == before


def test_purchase_requires_gold():
    match = new_match(MatchConfig())
    match.players["p1"].gold = 2

    with pytest.raises(IllegalMove) as exc_info:
        buy_territory(match, "p1", 2, 1, MatchConfig())
    assert exc_info.value.reason == IllegalMoveReason.INSUFFICIENT_GOLD
    assert match.players["p1"].territory_bought_this_round is False


def test_purchase_rejects_invalid_cell():
    match = create_empty_match(invalid=[(3, 4)])
    match.grid[3][3].owner = "p1"

    with pytest.raises(IllegalMove) as exc_info:
        buy_territory(match, "p1", 3, 4, MatchConfig())
    assert exc_info.value.reason == IllegalMoveReason.INVALID_CELL


def test_purchase_uses_configured_cost():
    match = new_match(MatchConfig())
    buy_territory(match, "p1", 2, 1, MatchConfig(territory_cost=5))
    assert match.players["p1"].gold == 15


def test_deploy_unit_places_fresh_unit():
    match = new_match(MatchConfig())

    unit = deploy_unit(match, "p1", 0, 1, get_template("mage"))

    assert match.grid[0][1].occupant is unit
    assert unit.hp == unit.max_hp == 80
    assert unit.owner == "p1"
    assert unit.spawn_order == 0
    assert match.players["p1"].gold == 18


def test_spawn_orders_keep_increasing_after_deaths():
    match = new_match(MatchConfig())
    first = deploy_unit(match, "p1", 0, 1, get_template("warrior"))
    second = deploy_unit(match, "p1", 0, 2, get_template("warrior"))
    match.grid[0][1].occupant = None  # first unit died

    third = deploy_unit(match, "p1", 0, 1, get_template("warrior"))

    assert [first.spawn_order, second.spawn_order, third.spawn_order] == [0, 1, 2]


def test_healer_gets_heal_strategy():
    from src.models.unit import Strategy

    match = new_match(MatchConfig())
    healer = deploy_unit(match, "p1", 0, 1, get_template("healer"))
    tank = deploy_unit(match, "p1", 0, 2, get_template("tank"))

    assert healer.strategy is Strategy.HEAL
    assert tank.strategy is Strategy.ATTACK_NEAREST


@pytest.mark.parametrize(
    "row,col,reason",
    [
        (3, 3, IllegalMoveReason.NOT_OWNED),
        (7, 6, IllegalMoveReason.NOT_OWNED),
        (9, 9, IllegalMoveReason.OUT_OF_BOUNDS),
    ],
)
def test_illegal_deployments(row, col, reason):
    match = new_match(MatchConfig())
    before = snapshot(match)

    with pytest.raises(IllegalMove) as exc_info:
        deploy_unit(match, "p1", row, col, get_template("warrior"))

    assert exc_info.value.reason == reason
    assert snapshot(match) == before


def test_deploy_on_occupied_cell_fails():
    match = new_match(MatchConfig())
    deploy_unit(match, "p1", 0, 1, get_template("warrior"))

    with pytest.raises(IllegalMove) as exc_info:
        deploy_unit(match, "p1", 0, 1, get_template("mage"))
    assert exc_info.value.reason == IllegalMoveReason.CELL_OCCUPIED


def test_deploy_requires_gold():
    match = new_match(MatchConfig())
    match.players["p1"].gold = 2

    with pytest.raises(IllegalMove) as exc_info:
        deploy_unit(match, "p1", 0, 1, get_template("tank"))
    assert exc_info.value.reason == IllegalMoveReason.INSUFFICIENT_GOLD
    assert match.grid[0][1].occupant is None
    assert match.players["p1"].next_spawn_order == 0


def test_deployment_never_exceeds_territory():
    """Filling every owned cell leaves no way to deploy another unit."""
    match = new_match(MatchConfig(gold_cap=100, initial_gold=100))
    owned = [cell.position for cell in match.cells() if cell.owner == "p1"]

    for row, col in owned:
        deploy_unit(match, "p1", row, col, get_template("warrior"))
        assert occupied_count(match, "p1") <= territory_count(match, "p1")

    for row, col in owned:
        with pytest.raises(IllegalMove):
            deploy_unit(match, "p1", row, col, get_template("warrior"))
    assert occupied_count(match, "p1") == territory_count(match, "p1") == 5


def test_settle_interest_formula():
    """gold + floor(gold * 10%) + stipend, for both players at once."""
    match = new_match(MatchConfig())
    match.players["p1"].gold = 20
    match.players["p2"].gold = 9

    gains = settle_interest(match, MatchConfig())

    assert match.players["p1"].gold == 27
    assert match.players["p2"].gold == 14
    assert gains == {"p1": 7, "p2": 5}


def test_settle_interest_respects_cap():
    match = new_match(MatchConfig())
    match.players["p1"].gold = 47
    match.players["p2"].gold = 50

    settle_interest(match, MatchConfig(gold_cap=50))

    assert match.players["p1"].gold == 50
    assert match.players["p2"].gold == 50


def test_settle_interest_uses_config():
    match = new_match(MatchConfig())
    match.players["p1"].gold = 10
    match.players["p2"].gold = 0

    settle_interest(match, MatchConfig(stipend=0, interest_rate=0.5, gold_cap=100))

    assert match.players["p1"].gold == 15
    assert match.players["p2"].gold == 0
