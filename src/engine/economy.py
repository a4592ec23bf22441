"""Shopping economy: territory purchases, unit deployment, round-end interest.

Every spend is validated in full before anything is mutated, so a rejected
action leaves the match untouched.
"""

import logging

from ..models.catalog import strategy_for
from ..models.cell import Cell
from ..models.config import MatchConfig
from ..models.match import MatchState
from ..models.unit import Unit, UnitTemplate
from ..utils.errors import IllegalMove, IllegalMoveReason
from .hexgrid import HexGrid
from .roster import occupied_count, territory_count

logger = logging.getLogger(__name__)


def _playable_cell(match: MatchState, row: int, col: int) -> Cell:
    """Fetch a cell, rejecting out-of-bounds and carved-out positions."""
    if not (0 <= row < match.rows and 0 <= col < match.cols):
        raise IllegalMove(
            IllegalMoveReason.OUT_OF_BOUNDS,
            f"Cell ({row}, {col}) is outside the {match.rows}x{match.cols} board",
        )
    cell = match.grid[row][col]
    if not cell.valid:
        raise IllegalMove(IllegalMoveReason.INVALID_CELL, f"Cell ({row}, {col}) is not playable")
    return cell


def buy_territory(
    match: MatchState, player_id: str, row: int, col: int, config: MatchConfig
) -> MatchState:
    """Claim an unowned cell adjacent to the player's territory.

    Legality (all checked before mutation):
    - the cell is on the board and unowned
    - the player has not bought territory this round (hard cap of one)
    - the player can afford config.territory_cost
    - the cell neighbors at least one cell the player owns

    Args:
        match: Current match state
        player_id: Buying player ("p1" or "p2")
        row: Target row
        col: Target column
        config: Match configuration (territory cost)

    Returns:
        The same match, mutated

    Raises:
        IllegalMove: If any legality check fails
    """
    player = match.players[player_id]
    cell = _playable_cell(match, row, col)

    if cell.owner is not None:
        raise IllegalMove(
            IllegalMoveReason.CELL_OWNED, f"Cell ({row}, {col}) is already owned by {cell.owner}"
        )
    if player.territory_bought_this_round:
        raise IllegalMove(
            IllegalMoveReason.ALREADY_BOUGHT,
            f"{player_id} already bought territory in round {match.round_index}",
        )
    if not player.can_afford(config.territory_cost):
        raise IllegalMove(
            IllegalMoveReason.INSUFFICIENT_GOLD,
            f"Territory costs {config.territory_cost} gold, {player_id} has {player.gold}",
        )

    board = HexGrid.for_match(match)
    owned = [c.position for c in match.cells() if c.owner == player_id]
    if not board.is_adjacent_to_any(row, col, owned):
        raise IllegalMove(
            IllegalMoveReason.NOT_ADJACENT,
            f"Cell ({row}, {col}) is not adjacent to {player_id}'s territory",
        )

    cell.owner = player_id
    player.spend(config.territory_cost)
    player.territory_bought_this_round = True

    logger.info(
        f"{player_id} bought ({row}, {col}) for {config.territory_cost} gold "
        f"({player.gold} left)"
    )
    return match


def deploy_unit(
    match: MatchState, player_id: str, row: int, col: int, template: UnitTemplate
) -> Unit:
    """Place a new unit on an empty cell the player owns.

    Legality (all checked before mutation):
    - the cell is owned by the player and empty
    - the player can afford template.cost
    - the player fields fewer units than cells owned

    Args:
        match: Current match state
        player_id: Deploying player ("p1" or "p2")
        row: Target row
        col: Target column
        template: Catalog template to instantiate

    Returns:
        The newly placed unit

    Raises:
        IllegalMove: If any legality check fails
    """
    player = match.players[player_id]
    cell = _playable_cell(match, row, col)

    if cell.owner != player_id:
        raise IllegalMove(
            IllegalMoveReason.NOT_OWNED, f"{player_id} does not own cell ({row}, {col})"
        )
    if cell.occupant is not None:
        raise IllegalMove(
            IllegalMoveReason.CELL_OCCUPIED,
            f"Cell ({row}, {col}) is already occupied by {cell.occupant.name}",
        )
    if not player.can_afford(template.cost):
        raise IllegalMove(
            IllegalMoveReason.INSUFFICIENT_GOLD,
            f"{template.name} costs {template.cost} gold, {player_id} has {player.gold}",
        )
    units = occupied_count(match, player_id)
    cap = territory_count(match, player_id)
    if units >= cap:
        raise IllegalMove(
            IllegalMoveReason.UNIT_CAP,
            f"{player_id} fields {units}/{cap} units; buy territory to deploy more",
        )

    player.spend(template.cost)
    unit = Unit(
        template=template,
        hp=template.base_hp,
        max_hp=template.base_hp,
        owner=player_id,
        spawn_order=player.take_spawn_order(),
        strategy=strategy_for(template),
    )
    cell.occupant = unit

    logger.info(
        f"{player_id} deployed {template.name} #{unit.spawn_order} at ({row}, {col}) "
        f"({player.gold} gold left)"
    )
    return unit


def settle_interest(match: MatchState, config: MatchConfig) -> dict[str, int]:
    """Pay round-end income to both players simultaneously.

    gold = min(gold_cap, gold + floor(gold * interest_rate) + stipend)

    Args:
        match: Current match state
        config: Match configuration (rate, stipend, cap)

    Returns:
        Gold gained per player (after capping)
    """
    gains = {}
    for player_id, player in match.players.items():
        interest = int(player.gold * config.interest_rate)
        new_gold = min(config.gold_cap, player.gold + interest + config.stipend)
        gains[player_id] = new_gold - player.gold
        player.gold = new_gold

    logger.info(
        "Interest settled: "
        + ", ".join(f"{pid} +{gain} ({match.players[pid].gold})" for pid, gain in gains.items())
    )
    return gains
