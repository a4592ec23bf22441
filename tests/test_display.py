"""Tests for CLI display output and roster queries."""

from src.engine import roster
from src.engine.turn_engine import TurnEngine
from src.interface.display import DisplayManager, player_name
from src.models import MatchConfig


def shopping_engine():
    """Round 1, p1 has bought a cell and fielded two units."""
    engine = TurnEngine.new_match(MatchConfig())
    engine.buy_territory(2, 1)
    engine.deploy_unit(0, 1, "warrior")
    engine.deploy_unit(2, 1, "healer")
    return engine


def test_player_name():
    assert player_name("p1") == "Player 1"
    assert player_name("all") == "all"


def test_show_status(capsys):
    DisplayManager().show_status(shopping_engine(), "p1")
    out = capsys.readouterr().out

    assert "Gold:       14 (cap 50)" in out
    assert "6 cells" in out
    assert "purchase this round: used" in out
    assert "Units:      2/6" in out


def test_show_units_table(capsys):
    engine = shopping_engine()
    DisplayManager().show_units(engine.templates)
    out = capsys.readouterr().out

    assert "│ warrior  │  120 │   15 │   10 │    1 │" in out
    assert "assassin" in out


def test_show_roster(capsys):
    display = DisplayManager()
    engine = shopping_engine()

    display.show_roster(engine, "p1")
    display.show_roster(engine, "p2")
    out = capsys.readouterr().out

    assert "Warrior   at (0, 1)  120/120 HP" in out
    assert "Player 2 Units: None" in out


def test_show_execution_and_actions(capsys):
    engine = shopping_engine()
    engine.done()
    engine.deploy_unit(7, 6, "tank")
    engine.done()
    display = DisplayManager()

    display.show_execution_header(engine)
    display.show_actions(engine.run_phase())
    out = capsys.readouterr().out

    assert "Round 1 execution: all units (3 to act)" in out
    assert out.count("👣") == 3


def test_show_game_over(capsys):
    engine = TurnEngine.new_match(MatchConfig())
    engine.deploy_unit(0, 1, "tank")
    engine.done()
    engine.done()
    engine.run_phase()
    assert engine.is_over

    DisplayManager().show_game_over(engine, reason="Decided by elimination.")
    out = capsys.readouterr().out

    assert "Player 1 WINS!" in out
    assert "Decided by elimination." in out
    assert "Remaining HP: Player 1 200, Player 2 0" in out


def test_roster_counts():
    engine = shopping_engine()
    match = engine.match

    assert roster.territory_count(match, "p1") == 6
    assert roster.occupied_count(match, "p1") == 2
    assert roster.unit_cap(match, "p1") == 6
    assert roster.total_hp(match, "p1") == 210
    assert roster.has_living_units(match, "p1")
    assert not roster.has_living_units(match, "p2")


def test_find_unit():
    match = shopping_engine().match

    placement = roster.find_unit(match, "p1", 1)
    assert placement.position == (2, 1)
    assert placement.unit.name == "Healer"
    assert roster.find_unit(match, "p1", 5) is None


def test_living_units_sorted_by_owner_then_spawn():
    engine = shopping_engine()
    engine.done()
    engine.deploy_unit(7, 6, "mage")

    keys = [p.unit.key for p in roster.living_units(engine.match)]
    assert keys == [("p1", 0), ("p1", 1), ("p2", 0)]
