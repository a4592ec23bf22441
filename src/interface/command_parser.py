"""Shopping command parser for human players.

This module parses typed commands like "buy 2 1" or "deploy mage 1 1"
into Command objects that front ends hand to the turn engine.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class ErrorType(Enum):
    """Classification of command input errors."""
    UNKNOWN_COMMAND = "unknown_command"
    SYNTAX_ERROR = "syntax_error"
    VALIDATION_ERROR = "validation_error"


class CommandParseError(Exception):
    """Raised when command parsing fails with classification."""

    def __init__(self, error_type: ErrorType, message: str):
        """Initialize parse error.

        Args:
            error_type: Classification of the error
            message: Human-readable error message
        """
        self.error_type = error_type
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class Command:
    """A parsed player command.

    Attributes:
        action: "buy", "deploy", "done", "units", "status", "help", or "quit"
        row: Target row for buy/deploy
        col: Target column for buy/deploy
        unit: Template id for deploy
    """

    action: str
    row: Optional[int] = None
    col: Optional[int] = None
    unit: Optional[str] = None


# Single-word commands and their aliases
_KEYWORDS = {
    "done": "done", "end": "done", "pass": "done",
    "units": "units", "list": "units", "ls": "units",
    "status": "status", "st": "status",
    "help": "help", "h": "help", "?": "help",
    "quit": "quit", "exit": "quit", "q": "quit",
}

BUY_FORMAT = "buy <row> <col>"
DEPLOY_FORMAT = "deploy <unit> <row> <col>"


class CommandParser:
    """Parse shopping commands into Command objects."""

    def parse(self, command: str) -> Command:
        """Parse a command string.

        Supported formats:
        - "buy <row> <col>" (alias: "b")
        - "deploy <unit> <row> <col>" (aliases: "d", "place")
        - "done", "units", "status", "help", "quit" and their aliases

        Args:
            command: Command string to parse

        Returns:
            Parsed Command

        Raises:
            CommandParseError: If the command is unknown or malformed
        """
        cmd = command.strip().lower()
        parts = cmd.split()
        if not parts:
            raise CommandParseError(ErrorType.SYNTAX_ERROR, "Empty command (type 'help')")

        verb = parts[0]
        if verb in _KEYWORDS:
            if len(parts) > 1:
                raise CommandParseError(
                    ErrorType.SYNTAX_ERROR, f"'{verb}' takes no arguments"
                )
            return Command(_KEYWORDS[verb])

        if verb in ("buy", "b"):
            return self._parse_buy(cmd)
        if verb in ("deploy", "d", "place"):
            return self._parse_deploy(cmd)

        raise CommandParseError(ErrorType.UNKNOWN_COMMAND, f"Unknown command: '{verb}'")

    def _parse_buy(self, cmd: str) -> Command:
        """Parse 'buy <row> <col>' (a comma between coordinates is allowed)."""
        match = re.fullmatch(r"(?:buy|b)\s+(-?\d+)\s*[,\s]\s*(-?\d+)", cmd)
        if match is None:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR,
                f"Syntax error: invalid buy command\nCorrect format: {BUY_FORMAT}",
            )
        row, col = self._coordinates(match.group(1), match.group(2))
        return Command("buy", row=row, col=col)

    def _parse_deploy(self, cmd: str) -> Command:
        """Parse 'deploy <unit> <row> <col>'."""
        match = re.fullmatch(r"(?:deploy|d|place)\s+([a-z]+)\s+(-?\d+)\s*[,\s]\s*(-?\d+)", cmd)
        if match:
            row, col = self._coordinates(match.group(2), match.group(3))
            return Command("deploy", row=row, col=col, unit=match.group(1))

        parts = cmd.split()
        if len(parts) >= 2 and parts[1].lstrip("-").isdigit():
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR,
                f"Syntax error: unit name comes before coordinates\nCorrect format: {DEPLOY_FORMAT}",
            )
        raise CommandParseError(
            ErrorType.SYNTAX_ERROR,
            f"Syntax error: invalid deploy command\nCorrect format: {DEPLOY_FORMAT}",
        )

    def _coordinates(self, row_text: str, col_text: str) -> tuple[int, int]:
        row, col = int(row_text), int(col_text)
        if row < 0 or col < 0:
            raise CommandParseError(
                ErrorType.VALIDATION_ERROR,
                f"Invalid coordinates: ({row}, {col}) must not be negative",
            )
        return row, col

    def parse_multiple(self, command: str) -> List[Command]:
        """Parse several commands separated by semicolons.

        Args:
            command: Command string potentially containing multiple commands

        Returns:
            List of Command objects in input order

        Raises:
            CommandParseError: If any command is invalid
        """
        return [self.parse(part) for part in command.split(";") if part.strip()]
