"""Round information display for human players.

This module prints shopping status, unit rosters, execution reports,
and the final result of a match.
"""

from typing import List, Optional

from ..engine.combat import ActionKind, UnitAction
from ..engine.roster import living_units, territory_count, total_hp, unit_cap
from ..engine.turn_engine import TurnEngine
from ..models.unit import UnitTemplate

PLAYER_NAMES = {"p1": "Player 1", "p2": "Player 2"}

# Action report prefixes for visual differentiation
ACTION_EMOJIS = {
    ActionKind.IDLE: "💤",
    ActionKind.HEAL: "💚",
    ActionKind.HIT: "⚔️",
    ActionKind.KILL: "💀",
    ActionKind.MOVE: "👣",
    ActionKind.BLOCKED: "⛔",
}


def player_name(player_id: str) -> str:
    return PLAYER_NAMES.get(player_id, player_id)


class DisplayManager:
    """Manages round information display."""

    def show_shopping_header(self, engine: TurnEngine) -> None:
        """Display the banner for the current shopping sub-phase."""
        player_id = engine.current_player
        print(f"\n{'=' * 60}")
        print(f"Round {engine.round_index}/{engine.config.round_limit} - "
              f"{player_name(player_id)} shopping")
        print(f"{'=' * 60}\n")

    def show_status(self, engine: TurnEngine, player_id: str) -> None:
        """Display one player's purse, territory and unit usage.

        Args:
            engine: Running match
            player_id: Player whose status to show
        """
        match = engine.match
        player = match.players[player_id]
        bought = "used" if player.territory_bought_this_round else "available"
        units = len(living_units(match, player_id))

        print(f"{player_name(player_id)}:")
        print(f"  Gold:       {player.gold} (cap {engine.config.gold_cap})")
        print(f"  Territory:  {territory_count(match, player_id)} cells "
              f"(purchase this round: {bought}, cost {engine.config.territory_cost})")
        print(f"  Units:      {units}/{unit_cap(match, player_id)}")
        print()

    def show_units(self, templates: List[UnitTemplate]) -> None:
        """Display deployable unit templates in table format."""
        print("Available Units:")
        print("┌──────────┬──────┬──────┬──────┬──────┐")
        print("│ Unit     │  HP  │ ATK  │ DEF  │ Cost │")
        print("├──────────┼──────┼──────┼──────┼──────┤")
        for template in templates:
            print(
                f"│ {template.id:<9}│{template.base_hp:>5} │{template.attack:>5} │"
                f"{template.defense:>5} │{template.cost:>5} │"
            )
        print("└──────────┴──────┴──────┴──────┴──────┘")
        print()

    def show_roster(self, engine: TurnEngine, player_id: str) -> None:
        """Display a player's living units with positions and hit points."""
        placements = living_units(engine.match, player_id)
        if not placements:
            print(f"{player_name(player_id)} Units: None\n")
            return

        print(f"{player_name(player_id)} Units:")
        for placement in placements:
            unit = placement.unit
            print(
                f"  #{unit.spawn_order:<3} {unit.name:<9} at ({placement.row}, {placement.col})"
                f"  {unit.hp}/{unit.max_hp} HP"
            )
        print()

    def show_help(self) -> None:
        """Display help information for human players."""
        print("\n=== Hex Skirmish - Command Help ===\n")
        print("Commands:")
        print("  buy <row> <col>              - Claim a cell next to your territory")
        print("  deploy <unit> <row> <col>    - Place a unit on an empty cell you own")
        print("  done                         - Finish shopping")
        print("  units                        - List deployable units")
        print("  status                       - Show gold, territory and units")
        print("  help                         - Show this help message")
        print("  quit                         - Exit the game")
        print()
        print("Examples:")
        print("  buy 2 1")
        print("  deploy warrior 1 1")
        print("  buy 3 0; deploy mage 3 0")
        print()
        print("Board Legend:")
        print("  ..  - Unclaimed cell")
        print("  1.  - Empty cell owned by Player 1 (2. for Player 2)")
        print("  1W  - Player 1 unit (W warrior, M mage, T tank, A assassin, H healer)")
        print()

    def show_execution_header(self, engine: TurnEngine) -> None:
        scope = engine.current_player
        who = "all units" if scope == "all" else f"{player_name(scope)} units"
        print(f"\n--- Round {engine.round_index} execution: {who} "
              f"({engine.remaining_slots} to act) ---")

    def show_action(self, action: UnitAction) -> None:
        """Display a single resolved unit action."""
        emoji = ACTION_EMOJIS.get(action.kind, "•")
        print(f"  {emoji} {action.description}")

    def show_actions(self, actions: List[UnitAction]) -> None:
        for action in actions:
            self.show_action(action)

    def show_game_over(self, engine: TurnEngine, reason: Optional[str] = None) -> None:
        """Display the final result.

        Args:
            engine: Finished match
            reason: Optional explanation of how the match ended
        """
        match = engine.match
        print(f"\n{'=' * 60}")
        print("GAME OVER")
        print(f"{'=' * 60}\n")

        if match.winner == "draw":
            print("The match ended in a DRAW!")
        elif match.winner in ("p1", "p2"):
            print(f"{player_name(match.winner)} WINS!")
        else:
            print("Match ended with unknown result.")
        if reason:
            print(reason)

        print(f"\nRemaining HP: Player 1 {total_hp(match, 'p1')}, "
              f"Player 2 {total_hp(match, 'p2')}")
        print(f"Match lasted {match.round_index} round(s).")
        print()
