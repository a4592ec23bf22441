"""Textual TUI application for Hex Skirmish.

This module provides a Terminal User Interface using the Textual framework.
It shows the board, both players' status, an action log, and a command
input. Shopping commands are typed; execution is paced with key bindings:
's' steps one unit, 'r' toggles auto-run, 'n' continues once the
execution phase is complete.
"""

import io
from contextlib import redirect_stdout

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import Footer, Header, Input, RichLog, Static

from ..engine.turn_engine import TurnEngine
from ..utils.errors import IllegalMove
from .command_parser import CommandParseError, CommandParser, ErrorType
from .display import DisplayManager, player_name
from .renderer import BoardRenderer

DEFAULT_RUN_INTERVAL = 0.5


class BoardPanel(Static):
    """Widget to display the hex board."""

    def __init__(self, *args, **kwargs):
        """Initialize board panel."""
        super().__init__(*args, **kwargs)
        self.renderer = BoardRenderer()
        self.border_title = "Board"

    def update_board(self, engine: TurnEngine) -> None:
        self.update(self.renderer.render_with_coords(engine.match))


class StatusPanel(Static):
    """Widget to display both players' gold, territory and units."""

    def __init__(self, *args, **kwargs):
        """Initialize status panel."""
        super().__init__(*args, **kwargs)
        self.display_manager = DisplayManager()

    def update_status(self, engine: TurnEngine) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            for player_id in ("p1", "p2"):
                self.display_manager.show_status(engine, player_id)
                self.display_manager.show_roster(engine, player_id)
        self.update(buffer.getvalue())


class TerminalPanel(RichLog):
    """Terminal-style panel with inline command input and responses."""

    def __init__(self, *args, **kwargs):
        """Initialize terminal panel."""
        super().__init__(*args, highlight=True, markup=True, wrap=True, **kwargs)

    def show_command(self, command: str) -> None:
        self.write(f"[bold cyan]>[/bold cyan] {command}")

    def show_response(self, message: str, is_error: bool = False) -> None:
        """Show response to a command.

        Args:
            message: Response message to display
            is_error: If True, display in red; otherwise green
        """
        if is_error:
            self.write(f"[red]{message}[/red]")
        else:
            self.write(f"[green]{message}[/green]")

    def show_info(self, message: str) -> None:
        self.write(message)


class SkirmishTUI(App):
    """Textual front end driving one hot-seat match."""

    CSS = """
    #board_container {
        height: auto;
        border: solid green;
        padding: 0 1;
    }

    #status_container {
        height: 1fr;
        border: solid blue;
        overflow-y: auto;
    }

    #terminal_container {
        height: 12;
        border: solid cyan;
    }

    TerminalPanel {
        height: 1fr;
        overflow-y: auto;
        border: none;
    }

    #input_row {
        dock: bottom;
        height: 1;
        background: $surface;
    }

    #prompt_label {
        width: auto;
        color: cyan;
    }

    #command_input {
        width: 1fr;
        height: 1;
        border: none;
        padding: 0;
    }
    """

    BINDINGS = [
        Binding("s", "step", "Step", show=True),
        Binding("r", "toggle_run", "Run/Pause", show=True),
        Binding("n", "continue", "Continue", show=True),
        Binding("ctrl+c", "quit", "Quit", show=True),
    ]

    def __init__(self, engine: TurnEngine, run_interval: float = DEFAULT_RUN_INTERVAL, *args, **kwargs):
        """Initialize the TUI app.

        Args:
            engine: Match to drive
            run_interval: Seconds between steps while auto-running
        """
        super().__init__(*args, **kwargs)
        self.engine = engine
        self.run_interval = run_interval
        self.parser = CommandParser()
        self.display_manager = DisplayManager()
        self.board_panel = None
        self.status_panel = None
        self.terminal_panel = None
        self.run_timer = None
        self._running = False

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Header()

        board_container = Container(id="board_container")
        with board_container:
            self.board_panel = BoardPanel()
            yield self.board_panel

        status_container = Container(id="status_container")
        status_container.border_title = "Players"
        with status_container:
            self.status_panel = StatusPanel()
            yield self.status_panel

        terminal_container = Container(id="terminal_container")
        terminal_container.border_title = "Log"
        with terminal_container:
            self.terminal_panel = TerminalPanel()
            yield self.terminal_panel
            with Horizontal(id="input_row"):
                yield Static("> ", id="prompt_label")
                yield Input(placeholder="", id="command_input")

        yield Footer()

    def on_mount(self) -> None:
        """Start paused auto-run timer and announce the current phase."""
        self.run_timer = self.set_interval(self.run_interval, self._auto_step, pause=True)
        self.terminal_panel.show_info("Type 'help' for shopping commands")
        self._enter_phase()

    # =========================================================================
    # DISPLAY
    # =========================================================================

    def refresh_display(self) -> None:
        """Refresh board and status panels."""
        self.board_panel.update_board(self.engine)
        self.status_panel.update_status(self.engine)
        phase = self.engine.phase
        self.title = f"Hex Skirmish - Round {self.engine.round_index} - {phase}"

    def _enter_phase(self) -> None:
        """Announce the phase the engine is in and set input focus to match."""
        self.refresh_display()
        terminal = self.terminal_panel
        command_input = self.query_one("#command_input", Input)

        if self.engine.is_over:
            self._pause()
            winner = self.engine.winner
            result = "DRAW" if winner == "draw" else f"{player_name(winner)} WINS"
            terminal.show_info(f"[bold yellow]GAME OVER: {result}[/bold yellow]")
            command_input.disabled = True
        elif self.engine.phase.is_shopping:
            player_id = self.engine.current_player
            terminal.show_info(
                f"[bold cyan]Round {self.engine.round_index}: "
                f"{player_name(player_id)} shopping[/bold cyan]"
            )
            command_input.disabled = False
            command_input.focus()
        else:
            scope = self.engine.current_player
            who = "all units" if scope == "all" else f"{player_name(scope)} units"
            terminal.show_info(
                f"[bold magenta]Execution ({who}): s step, r run/pause, n continue[/bold magenta]"
            )
            command_input.disabled = True

    # =========================================================================
    # SHOPPING INPUT
    # =========================================================================

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle a typed shopping command.

        Args:
            event: Input submission event
        """
        line = event.value.strip()
        event.input.value = ""
        if not line:
            return

        terminal = self.terminal_panel
        terminal.show_command(line)

        try:
            commands = self.parser.parse_multiple(line)
        except CommandParseError as e:
            terminal.show_response(f"❌ {e.message}", is_error=True)
            if e.error_type == ErrorType.UNKNOWN_COMMAND:
                terminal.show_info("Commands: buy, deploy, done, units, status, help, quit")
            return

        for command in commands:
            if command.action == "quit":
                self.exit()
                return
            if command.action == "help":
                self._show_captured(self.display_manager.show_help)
                continue
            if command.action == "units":
                self._show_captured(self.display_manager.show_units, self.engine.templates)
                continue
            if command.action == "status":
                self.refresh_display()
                continue

            try:
                if command.action == "buy":
                    self.engine.buy_territory(command.row, command.col)
                    terminal.show_response(f"Bought ({command.row}, {command.col})")
                elif command.action == "deploy":
                    unit = self.engine.deploy_unit(command.row, command.col, command.unit)
                    terminal.show_response(
                        f"Deployed {unit.name} at ({command.row}, {command.col})"
                    )
                elif command.action == "done":
                    self.engine.done()
                    self._enter_phase()
                    return
            except IllegalMove as e:
                terminal.show_response(f"❌ {e.message}", is_error=True)

        self.refresh_display()

    def _show_captured(self, show, *args) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            show(*args)
        self.terminal_panel.show_info(buffer.getvalue().rstrip())

    # =========================================================================
    # EXECUTION CONTROLS
    # =========================================================================

    def action_step(self) -> None:
        """Resolve one scheduled unit."""
        if not self.engine.phase.is_executing:
            return
        action = self.engine.step()
        if action is not None:
            self.terminal_panel.show_info(action.description)
        self.refresh_display()

        if self.engine.is_over:
            self._enter_phase()
        elif self.engine.is_phase_complete():
            self._pause()
            self.terminal_panel.show_info("Execution complete, press 'n' to continue")

    def action_toggle_run(self) -> None:
        """Start or pause auto-run."""
        if not self.engine.phase.is_executing or self.engine.is_phase_complete():
            return
        if self.run_timer is None:
            return
        if self._running:
            self._pause()
            self.terminal_panel.show_info("Paused")
        else:
            self._running = True
            self.run_timer.resume()
            self.terminal_panel.show_info("Running...")

    def action_continue(self) -> None:
        """Leave a completed execution phase."""
        if not self.engine.phase.is_executing:
            return
        try:
            self.engine.finish_execution()
        except IllegalMove as e:
            self.terminal_panel.show_response(f"❌ {e.message}", is_error=True)
            return
        self._enter_phase()

    def _auto_step(self) -> None:
        if not self._running:
            return
        self.action_step()

    def _pause(self) -> None:
        self._running = False
        if self.run_timer is not None:
            self.run_timer.pause()

    def action_quit(self) -> None:
        self.exit()


def run_tui(engine: TurnEngine, run_interval: float = DEFAULT_RUN_INTERVAL) -> None:
    """Run the TUI until the match ends or the players quit."""
    app = SkirmishTUI(engine, run_interval)
    app.run(mouse=False)
