#!/usr/bin/env python3
"""Hex Skirmish - Main entry point.

A two-player, turn-based territory and combat game on a hex grid. Players
shop for territory and units, then watch their units fight on their own.
"""

import argparse
import logging
import sys
import time

from src.engine.roster import has_living_units
from src.engine.turn_engine import TurnEngine
from src.interface.display import DisplayManager
from src.interface.human_player import HumanPlayer
from src.models.catalog import CATALOG, enabled_templates
from src.models.config import MatchConfig
from src.utils.errors import ConfigurationError
from src.utils.serialization import SnapshotStore


class GameOrchestrator:
    """Manages the round loop and player coordination."""

    def __init__(self, engine: TurnEngine, p1_controller, p2_controller, delay: float = 0.0):
        """Initialize game orchestrator.

        Args:
            engine: Match to drive
            p1_controller: Shopping controller for player 1
            p2_controller: Shopping controller for player 2
            delay: Seconds to pause between unit actions during execution
        """
        self.engine = engine
        self.players = {"p1": p1_controller, "p2": p2_controller}
        self.display = DisplayManager()
        self.delay = delay

    def run(self) -> TurnEngine:
        """Main game loop."""
        print("\n" + "=" * 60)
        print("Hex Skirmish")
        print("=" * 60)
        print("\nGoal: Destroy every enemy unit, or hold the most HP when time runs out!")
        print("Press Ctrl+C at any time to quit.\n")

        try:
            while not self.engine.is_over:
                if self.engine.phase.is_shopping:
                    self.players[self.engine.current_player].take_turn(self.engine)
                else:
                    self._run_execution()

        except KeyboardInterrupt:
            print("\n\nGame interrupted by user. Exiting...")
            sys.exit(0)

        self.display.show_game_over(self.engine, self._end_reason())
        return self.engine

    def _end_reason(self) -> str:
        match = self.engine.match
        if has_living_units(match, "p1") and has_living_units(match, "p2"):
            return f"Decided on remaining HP after {self.engine.config.round_limit} round(s)."
        return "Decided by elimination."

    def _run_execution(self) -> None:
        """Play out the current execution phase, then move on."""
        self.display.show_execution_header(self.engine)
        if self.delay <= 0:
            self.display.show_actions(self.engine.run_phase())
        while not self.engine.is_phase_complete():
            action = self.engine.step()
            if action is None:
                break
            self.display.show_action(action)
            if self.delay > 0:
                time.sleep(self.delay)

        if not self.engine.is_over:
            self.engine.finish_execution()


def build_config(args, store: SnapshotStore | None) -> MatchConfig:
    """Combine command-line settings with a stored configuration.

    Flags given on the command line win; anything else comes from the
    stored record when there is one, then from the defaults.
    """
    base = store.load_config() if store else None
    values = base.to_dict() if base else {}
    if args.rounds is not None:
        values["round_limit"] = args.rounds
    if args.gold_cap is not None:
        values["gold_cap"] = args.gold_cap
    if args.stipend is not None:
        values["stipend"] = args.stipend
    return MatchConfig(**values)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Hex Skirmish - Turn-based hex territory and combat game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                      # Hot-seat match (text mode)
  %(prog)s --tui                                # Terminal user interface (TUI)
  %(prog)s --rounds 6 --gold-cap 40             # Shorter, poorer match
  %(prog)s --units warrior,healer,tank          # Restrict deployable units
  %(prog)s --state-dir state                    # Save progress and resume later
  %(prog)s --state-dir state --fresh            # Discard the saved match
        """,
    )

    parser.add_argument("--rounds", type=int, default=None, help="Round limit (default: 10)")
    parser.add_argument(
        "--gold-cap", type=int, default=None, help="Maximum gold after round-end income (default: 50)"
    )
    parser.add_argument(
        "--stipend", type=int, default=None, help="Flat round-end income (default: 5)"
    )
    parser.add_argument(
        "--units",
        type=str,
        default=None,
        help=f"Comma-separated deployable units (default: all of {', '.join(t.id for t in CATALOG)})",
    )
    parser.add_argument(
        "--state-dir",
        type=str,
        default=None,
        metavar="DIR",
        help="Directory for match snapshots; enables saving and resuming",
    )
    parser.add_argument(
        "--fresh", action="store_true", help="Ignore any saved match in --state-dir"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.3,
        help="Seconds between unit actions in text mode (default: 0.3)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--tui",
        action="store_true",
        help="Use terminal user interface (TUI) instead of basic text mode",
    )

    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if not args.debug:
        # Engine logs only surface with --debug
        logging.getLogger("src").setLevel(logging.WARNING)

    store = SnapshotStore(args.state_dir) if args.state_dir else None

    try:
        config = build_config(args, store)
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(2)

    if args.units:
        unit_ids = [unit.strip() for unit in args.units.split(",") if unit.strip()]
        if store:
            store.save_enabled_units(unit_ids)
    else:
        unit_ids = store.load_enabled_units() if store else None
    templates = enabled_templates(unit_ids)

    if store:
        store.save_config(config)
        if args.fresh:
            store.clear_match()
        engine = TurnEngine.resume(config, store, templates)
    else:
        engine = TurnEngine.new_match(config, templates=templates)

    print(
        f"Round {engine.round_index}/{config.round_limit}, {engine.phase} - "
        f"units: {', '.join(t.id for t in templates)}"
    )

    if args.tui:
        from src.interface.tui_app import run_tui

        run_tui(engine, run_interval=max(args.delay, 0.1))
        return

    orchestrator = GameOrchestrator(engine, HumanPlayer("p1"), HumanPlayer("p2"), delay=args.delay)
    orchestrator.run()


if __name__ == "__main__":
    main()
