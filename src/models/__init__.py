"""Data models for Hex Skirmish."""

from .catalog import CATALOG, enabled_templates, get_template, strategy_for
from .cell import Cell
from .config import MatchConfig
from .match import MatchState, Phase, PhaseKind
from .player import PlayerState
from .unit import Strategy, Unit, UnitTemplate

__all__ = [
    "CATALOG",
    "Cell",
    "MatchConfig",
    "MatchState",
    "Phase",
    "PhaseKind",
    "PlayerState",
    "Strategy",
    "Unit",
    "UnitTemplate",
    "enabled_templates",
    "get_template",
    "strategy_for",
]
