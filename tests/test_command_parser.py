"""Tests for the shopping command parser."""

import pytest

from src.interface.command_parser import Command, CommandParseError, CommandParser, ErrorType


def test_parse_buy():
    """Test parsing 'buy <row> <col>'."""
    parser = CommandParser()

    command = parser.parse("buy 2 1")
    assert command == Command("buy", row=2, col=1)


def test_parse_buy_variants():
    """Test the short alias, commas and mixed case."""
    parser = CommandParser()

    assert parser.parse("b 3 4") == Command("buy", row=3, col=4)
    assert parser.parse("buy 3,4") == Command("buy", row=3, col=4)
    assert parser.parse("  BUY 3 , 4  ") == Command("buy", row=3, col=4)


def test_parse_deploy():
    """Test parsing 'deploy <unit> <row> <col>'."""
    parser = CommandParser()

    command = parser.parse("deploy mage 1 1")
    assert command.action == "deploy"
    assert command.unit == "mage"
    assert (command.row, command.col) == (1, 1)


def test_parse_deploy_aliases():
    parser = CommandParser()

    assert parser.parse("d Tank 0 2") == Command("deploy", row=0, col=2, unit="tank")
    assert parser.parse("place healer 2,0") == Command("deploy", row=2, col=0, unit="healer")


@pytest.mark.parametrize(
    "text,action",
    [
        ("done", "done"),
        ("end", "done"),
        ("pass", "done"),
        ("units", "units"),
        ("ls", "units"),
        ("status", "status"),
        ("help", "help"),
        ("?", "help"),
        ("quit", "quit"),
        ("Q", "quit"),
    ],
)
def test_parse_keywords(text, action):
    assert CommandParser().parse(text) == Command(action)


def test_keyword_with_arguments_rejected():
    with pytest.raises(CommandParseError) as exc_info:
        CommandParser().parse("done now")
    assert exc_info.value.error_type == ErrorType.SYNTAX_ERROR


def test_unknown_command():
    """Test that unknown verbs are classified as UNKNOWN_COMMAND."""
    with pytest.raises(CommandParseError) as exc_info:
        CommandParser().parse("attack 1 1")
    assert exc_info.value.error_type == ErrorType.UNKNOWN_COMMAND
    assert "attack" in exc_info.value.message


def test_empty_command():
    with pytest.raises(CommandParseError) as exc_info:
        CommandParser().parse("   ")
    assert exc_info.value.error_type == ErrorType.SYNTAX_ERROR


@pytest.mark.parametrize("text", ["buy", "buy 2", "buy two one", "buy 2 1 3", "b 21"])
def test_malformed_buy(text):
    with pytest.raises(CommandParseError) as exc_info:
        CommandParser().parse(text)
    assert exc_info.value.error_type == ErrorType.SYNTAX_ERROR
    assert "buy <row> <col>" in exc_info.value.message


def test_deploy_with_coordinates_first():
    """Test that swapped arguments get a targeted hint."""
    with pytest.raises(CommandParseError) as exc_info:
        CommandParser().parse("deploy 1 1 mage")
    assert exc_info.value.error_type == ErrorType.SYNTAX_ERROR
    assert "unit name comes before coordinates" in exc_info.value.message


def test_deploy_missing_coordinates():
    with pytest.raises(CommandParseError) as exc_info:
        CommandParser().parse("deploy mage")
    assert "deploy <unit> <row> <col>" in exc_info.value.message


def test_negative_coordinates():
    """Test that negative coordinates are a validation error, not syntax."""
    with pytest.raises(CommandParseError) as exc_info:
        CommandParser().parse("buy -1 2")
    assert exc_info.value.error_type == ErrorType.VALIDATION_ERROR

    with pytest.raises(CommandParseError) as exc_info:
        CommandParser().parse("deploy mage 1 -3")
    assert exc_info.value.error_type == ErrorType.VALIDATION_ERROR


def test_parse_multiple():
    """Test parsing multiple commands separated by semicolons."""
    parser = CommandParser()

    commands = parser.parse_multiple("buy 2 1; deploy warrior 2 1;done;")
    assert [c.action for c in commands] == ["buy", "deploy", "done"]
    assert commands[1].unit == "warrior"


def test_parse_multiple_stops_on_error():
    with pytest.raises(CommandParseError):
        CommandParser().parse_multiple("buy 2 1; fly away")
