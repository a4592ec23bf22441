"""Match session management for hot-seat browser play."""

import logging
import uuid
from dataclasses import dataclass, field

from ..engine.roster import living_units, territory_count, total_hp, unit_cap
from ..engine.turn_engine import TurnEngine
from ..models.catalog import enabled_templates
from ..models.config import MatchConfig
from ..utils.serialization import MemoryStore

logger = logging.getLogger(__name__)

# Most recent actions included in state payloads
RECENT_ACTIONS = 20


@dataclass
class GameSession:
    """Manages one hot-seat match.

    Both players share the browser; the session only holds the engine and
    its in-memory snapshot store.
    """

    id: str
    engine: TurnEngine
    store: MemoryStore = field(default_factory=MemoryStore)

    @property
    def phase(self) -> str:
        return str(self.engine.phase)

    def get_state(self) -> dict:
        """Serialize match state for the browser.

        Returns:
            Dictionary with board, players, phase and recent actions
        """
        match = self.engine.match
        return {
            "round": match.round_index,
            "roundLimit": self.engine.config.round_limit,
            "phase": {"kind": match.phase.kind.value, "player": match.phase.player},
            "winner": match.winner,
            "phaseComplete": self.engine.is_phase_complete(),
            "remainingSlots": self.engine.remaining_slots,
            "players": {pid: self._serialize_player(pid) for pid in match.players},
            "board": [[self._serialize_cell(cell) for cell in row] for row in match.grid],
            "recentActions": match.action_log[-RECENT_ACTIONS:],
        }

    def _serialize_player(self, player_id: str) -> dict:
        match = self.engine.match
        player = match.players[player_id]
        return {
            "gold": player.gold,
            "territoryBoughtThisRound": player.territory_bought_this_round,
            "territory": territory_count(match, player_id),
            "units": len(living_units(match, player_id)),
            "unitCap": unit_cap(match, player_id),
            "totalHp": total_hp(match, player_id),
        }

    def _serialize_cell(self, cell) -> dict:
        unit = cell.occupant
        return {
            "row": cell.row,
            "col": cell.col,
            "owner": cell.owner,
            "valid": cell.valid,
            "unit": None
            if unit is None
            else {
                "template": unit.template.id,
                "name": unit.name,
                "emoji": unit.template.emoji,
                "owner": unit.owner,
                "spawnOrder": unit.spawn_order,
                "hp": unit.hp,
                "maxHp": unit.max_hp,
            },
        }


class GameSessionManager:
    """Manages all active match sessions.

    In-memory storage; sessions live until deleted or server shutdown.
    """

    def __init__(self):
        self.sessions: dict[str, GameSession] = {}

    def create_session(
        self, config: MatchConfig, enabled_units: list[str] | None = None
    ) -> GameSession:
        """Create a new match session.

        Args:
            config: Validated match configuration
            enabled_units: Template ids players may deploy, or None for all

        Returns:
            Newly created GameSession
        """
        game_id = f"game-{uuid.uuid4().hex[:8]}"

        store = MemoryStore()
        store.save_config(config)
        templates = enabled_templates(enabled_units)
        store.save_enabled_units([template.id for template in templates])

        engine = TurnEngine.new_match(config, store=store, templates=templates)
        session = GameSession(id=game_id, engine=engine, store=store)
        self.sessions[game_id] = session

        logger.info(
            f"Created game {game_id}: {config.round_limit} rounds, gold cap {config.gold_cap}, "
            f"units {', '.join(t.id for t in templates)}"
        )
        return session

    def get(self, game_id: str) -> GameSession | None:
        return self.sessions.get(game_id)

    def delete(self, game_id: str) -> bool:
        """Delete a match session.

        Returns:
            True if deleted, False if not found
        """
        if game_id in self.sessions:
            del self.sessions[game_id]
            logger.info(f"Deleted game {game_id}")
            return True
        return False

    async def cleanup_all(self):
        """Clean up all sessions (called on shutdown)."""
        logger.info(f"Cleaning up {len(self.sessions)} game sessions")
        self.sessions.clear()
