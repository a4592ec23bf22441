"""Match state serialization to/from JSON.

This module provides the snapshot stores the turn engine persists through
at phase boundaries, plus the helpers that convert a MatchState to and
from plain JSON data.

Snapshots are validated against the configured board on load: a grid of
the wrong shape or layout, or any malformed record, raises InvalidSnapshot
so the caller can fall back to a fresh match.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..models.catalog import get_template
from ..models.cell import Cell
from ..models.config import MatchConfig
from ..models.match import MatchState, Phase, PhaseKind
from ..models.player import PlayerState
from ..models.unit import Strategy, Unit
from .errors import ConfigurationError, InvalidSnapshot

logger = logging.getLogger(__name__)

DEFAULT_STATE_DIR = Path(__file__).parent.parent.parent / "state"

MATCH_FILE = "match.json"
ENABLED_UNITS_FILE = "enabled_units.json"
CONFIG_FILE = "config.json"


def save_match(match: MatchState, filepath: str) -> None:
    """Save match state to a JSON file.

    Args:
        match: Match state to save
        filepath: Path to save file (created in the state directory if relative)

    Example:
        save_match(match, "match.json")  # Saves to state/match.json
        save_match(match, "/absolute/path/match.json")  # Saves to absolute path
    """
    path = _resolve(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(_serialize_match(match), f, indent=2)


def load_match(filepath: str, config: MatchConfig) -> MatchState:
    """Load match state from a JSON file.

    Args:
        filepath: Path to saved match file
        config: Configuration the stored board must fit

    Returns:
        Loaded MatchState

    Raises:
        FileNotFoundError: If the file doesn't exist
        InvalidSnapshot: If the JSON is invalid, malformed, or the wrong shape
    """
    path = _resolve(filepath)
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidSnapshot(f"Corrupt snapshot {path}: {e}") from e
    return _deserialize_match(data, config)


def _resolve(filepath: str) -> Path:
    path = Path(filepath)
    if not path.is_absolute():
        path = DEFAULT_STATE_DIR / filepath
    return path


class SnapshotStore:
    """JSON-file store for the match snapshot and its companion records.

    Files live in one state directory:
    - match.json: the serialized MatchState
    - enabled_units.json: list of deployable template ids
    - config.json: the match configuration record
    """

    def __init__(self, directory: Optional[str] = None):
        self.directory = Path(directory).resolve() if directory else DEFAULT_STATE_DIR

    def _path(self, name: str) -> Path:
        return self.directory / name

    def _write(self, name: str, data: Any) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        with open(self._path(name), "w") as f:
            json.dump(data, f, indent=2)

    def _read(self, name: str) -> Any:
        """Return the parsed file, or None when it does not exist."""
        path = self._path(name)
        if not path.exists():
            return None
        with open(path) as f:
            return json.load(f)

    def save_match(self, match: MatchState) -> None:
        save_match(match, str(self._path(MATCH_FILE)))
        logger.debug(f"Saved match snapshot (round {match.round_index}, {match.phase})")

    def load_match(self, config: MatchConfig) -> Optional[MatchState]:
        """Load the stored match, or None if nothing is stored.

        Raises:
            InvalidSnapshot: If the stored match does not fit config
        """
        path = self._path(MATCH_FILE)
        if not path.exists():
            return None
        return load_match(str(path), config)

    def clear_match(self) -> None:
        self._path(MATCH_FILE).unlink(missing_ok=True)

    def save_enabled_units(self, template_ids: list[str]) -> None:
        self._write(ENABLED_UNITS_FILE, list(template_ids))

    def load_enabled_units(self) -> Optional[list[str]]:
        """Stored template ids, or None when absent or unreadable."""
        try:
            data = self._read(ENABLED_UNITS_FILE)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring corrupt enabled units file: {e}")
            return None
        if not isinstance(data, list):
            return None
        return [str(item) for item in data]

    def save_config(self, config: MatchConfig) -> None:
        self._write(CONFIG_FILE, config.to_dict())

    def load_config(self) -> Optional[MatchConfig]:
        """Stored configuration, or None when absent.

        Raises:
            ConfigurationError: If the stored record is invalid
        """
        try:
            data = self._read(CONFIG_FILE)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Corrupt configuration file: {e}") from e
        if data is None:
            return None
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration record must be an object")
        return MatchConfig.from_dict(data)


class MemoryStore:
    """In-process store with the same interface as SnapshotStore.

    Snapshots are kept as serialized dicts so a reload never aliases the
    live match.
    """

    def __init__(self):
        self.match_data: Optional[dict[str, Any]] = None
        self.enabled_units: Optional[list[str]] = None
        self.config_data: Optional[dict[str, Any]] = None
        self.saves = 0

    def save_match(self, match: MatchState) -> None:
        # Round-trip through JSON text to detach from the live objects
        self.match_data = json.loads(json.dumps(_serialize_match(match)))
        self.saves += 1

    def load_match(self, config: MatchConfig) -> Optional[MatchState]:
        if self.match_data is None:
            return None
        return _deserialize_match(self.match_data, config)

    def clear_match(self) -> None:
        self.match_data = None

    def save_enabled_units(self, template_ids: list[str]) -> None:
        self.enabled_units = list(template_ids)

    def load_enabled_units(self) -> Optional[list[str]]:
        return list(self.enabled_units) if self.enabled_units is not None else None

    def save_config(self, config: MatchConfig) -> None:
        self.config_data = config.to_dict()

    def load_config(self) -> Optional[MatchConfig]:
        if self.config_data is None:
            return None
        return MatchConfig.from_dict(self.config_data)


def _serialize_match(match: MatchState) -> dict[str, Any]:
    """Convert MatchState to dictionary."""
    return {
        "rows": match.rows,
        "cols": match.cols,
        "layout": match.layout,
        "round_index": match.round_index,
        "phase": {"kind": match.phase.kind.value, "player": match.phase.player},
        "winner": match.winner,
        "players": {pid: _serialize_player(player) for pid, player in match.players.items()},
        "grid": [[_serialize_cell(cell) for cell in row] for row in match.grid],
        "schedule": [[owner, spawn_order] for owner, spawn_order in match.schedule],
        "schedule_index": match.schedule_index,
        "action_log": match.action_log,
    }


def _deserialize_match(data: dict[str, Any], config: MatchConfig) -> MatchState:
    """Convert dictionary to MatchState, checking it against config.

    Raises:
        InvalidSnapshot: If the board shape differs from config or data is malformed
    """
    if not isinstance(data, dict):
        raise InvalidSnapshot("Snapshot must be a JSON object")

    try:
        rows, cols, layout = data["rows"], data["cols"], data["layout"]
        if (rows, cols) != (config.rows, config.cols) or layout != config.layout:
            raise InvalidSnapshot(
                f"Stored board {rows}x{cols} {layout} does not match "
                f"configured {config.rows}x{config.cols} {config.layout}"
            )

        grid_data = data["grid"]
        if len(grid_data) != rows or any(len(row) != cols for row in grid_data):
            raise InvalidSnapshot(f"Stored grid shape does not match {rows}x{cols}")

        phase_data = data["phase"]
        return MatchState(
            rows=rows,
            cols=cols,
            layout=layout,
            grid=[[_deserialize_cell(cell) for cell in row] for row in grid_data],
            players={
                pid: _deserialize_player(player) for pid, player in data["players"].items()
            },
            round_index=data["round_index"],
            phase=Phase(PhaseKind(phase_data["kind"]), phase_data.get("player")),
            winner=data.get("winner"),
            schedule=[(owner, spawn_order) for owner, spawn_order in data.get("schedule", [])],
            schedule_index=data.get("schedule_index", 0),
            action_log=list(data.get("action_log", [])),
        )
    except InvalidSnapshot:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise InvalidSnapshot(f"Malformed snapshot: {e}") from e


def _serialize_cell(cell: Cell) -> dict[str, Any]:
    """Convert Cell to dictionary."""
    return {
        "row": cell.row,
        "col": cell.col,
        "owner": cell.owner,
        "valid": cell.valid,
        "occupant": _serialize_unit(cell.occupant) if cell.occupant else None,
    }


def _deserialize_cell(data: dict[str, Any]) -> Cell:
    """Convert dictionary to Cell."""
    occupant = data.get("occupant")
    return Cell(
        row=data["row"],
        col=data["col"],
        owner=data.get("owner"),
        occupant=_deserialize_unit(occupant) if occupant else None,
        valid=data.get("valid", True),
    )


def _serialize_unit(unit: Unit) -> dict[str, Any]:
    """Convert Unit to dictionary. Templates are stored by catalog id."""
    return {
        "template": unit.template.id,
        "hp": unit.hp,
        "max_hp": unit.max_hp,
        "owner": unit.owner,
        "spawn_order": unit.spawn_order,
        "strategy": unit.strategy.value,
    }


def _deserialize_unit(data: dict[str, Any]) -> Unit:
    """Convert dictionary to Unit."""
    template = get_template(data["template"])
    if template is None:
        raise InvalidSnapshot(f"Unknown unit template in snapshot: {data['template']}")
    return Unit(
        template=template,
        hp=data["hp"],
        max_hp=data["max_hp"],
        owner=data["owner"],
        spawn_order=data["spawn_order"],
        strategy=Strategy(data["strategy"]),
    )


def _serialize_player(player: PlayerState) -> dict[str, Any]:
    """Convert PlayerState to dictionary."""
    return {
        "id": player.id,
        "gold": player.gold,
        "territory_bought_this_round": player.territory_bought_this_round,
        "next_spawn_order": player.next_spawn_order,
    }


def _deserialize_player(data: dict[str, Any]) -> PlayerState:
    """Convert dictionary to PlayerState."""
    return PlayerState(
        id=data["id"],
        gold=data["gold"],
        territory_bought_this_round=data.get("territory_bought_this_round", False),
        next_spawn_order=data.get("next_spawn_order", 0),
    )
