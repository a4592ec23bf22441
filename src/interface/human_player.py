"""Human player controller for CLI interaction.

This module provides the HumanPlayer class which runs one player's
shopping sub-phase from the command line.
"""

from ..engine.turn_engine import TurnEngine
from ..utils.errors import IllegalMove
from .command_parser import Command, CommandParseError, CommandParser, ErrorType
from .display import DisplayManager
from .renderer import BoardRenderer

COMMAND_HINT = "Available commands: buy, deploy, done, units, status, help, quit"


class HumanPlayer:
    """Human player controller class.

    Handles CLI interaction for one player: showing the board, reading
    shopping commands, and forwarding them to the engine until the player
    types 'done'.
    """

    def __init__(self, player_id: str):
        """Initialize human player controller.

        Args:
            player_id: Player ID ("p1" or "p2")
        """
        self.player_id = player_id
        self.renderer = BoardRenderer()
        self.display = DisplayManager()
        self.parser = CommandParser()

    def _format_error_message(self, error_type: ErrorType, message: str) -> str:
        """Format error message with emoji and optional help.

        Args:
            error_type: Classification of the error
            message: Error message content

        Returns:
            Formatted error message string
        """
        formatted = f"❌ {message}"

        # Only Unknown Command errors show help hint
        if error_type == ErrorType.UNKNOWN_COMMAND:
            formatted += f"\n\n{COMMAND_HINT}"
            formatted += "\nExample: buy 2 1"

        return formatted

    def show_overview(self, engine: TurnEngine) -> None:
        """Display the shopping banner, status, and board."""
        self.display.show_shopping_header(engine)
        self.display.show_status(engine, self.player_id)
        print("Board:")
        print(self.renderer.render_with_coords(engine.match))
        print()

    def take_turn(self, engine: TurnEngine) -> None:
        """Run this player's shopping sub-phase to completion.

        Commands are applied immediately; rejected ones are reported and the
        player is re-prompted. Returns once 'done' has been accepted.

        Args:
            engine: Running match, in shopping for this player
        """
        print("\n" * 2)
        self.show_overview(engine)
        print("Enter commands (type 'done' to finish shopping, 'help' for commands):")
        print()

        while True:
            try:
                line = input(f"[Round {engine.round_index}] [{self.player_id}] > ").strip()
                if not line:
                    continue

                try:
                    commands = self.parser.parse_multiple(line)
                except CommandParseError as e:
                    print(self._format_error_message(e.error_type, e.message))
                    continue

                for command in commands:
                    if self._apply(engine, command):
                        return

            except KeyboardInterrupt:
                print("\nInterrupted. Type 'done' to finish shopping or 'quit' to exit.")
                continue

    def _apply(self, engine: TurnEngine, command: Command) -> bool:
        """Execute one parsed command.

        Returns:
            True once shopping is finished
        """
        if command.action == "done":
            engine.done()
            print(f"{self.player_id} finished shopping.")
            return True

        if command.action == "quit":
            print("\nExiting game. Thanks for playing!")
            raise SystemExit(0)

        if command.action == "help":
            self.display.show_help()
        elif command.action == "units":
            self.display.show_units(engine.templates)
        elif command.action == "status":
            self.show_overview(engine)
            self.display.show_roster(engine, self.player_id)
        elif command.action == "buy":
            try:
                engine.buy_territory(command.row, command.col)
                gold = engine.player(self.player_id).gold
                print(f"✓ Bought ({command.row}, {command.col}), {gold} gold left")
            except IllegalMove as e:
                print(self._format_error_message(ErrorType.VALIDATION_ERROR, e.message))
        elif command.action == "deploy":
            try:
                unit = engine.deploy_unit(command.row, command.col, command.unit)
                gold = engine.player(self.player_id).gold
                print(f"✓ Deployed {unit.name} at ({command.row}, {command.col}), "
                      f"{gold} gold left")
            except IllegalMove as e:
                print(self._format_error_message(ErrorType.VALIDATION_ERROR, e.message))
        return False
