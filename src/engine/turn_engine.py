"""Turn engine: the match phase state machine.

Round 1:       shopping(p1) -> shopping(p2) -> executing(all) -> round end
Later rounds:  shopping(p1) -> executing(p1) -> shopping(p2) -> executing(p2) -> round end

Round end either resolves the match by remaining HP (round limit reached)
or settles interest and opens the next round with shopping(p1). The win
condition is checked after every resolved unit action.

Architecture:
Shopping operations delegate legality and mutation to the economy module.
Execution is caller-paced: step() resolves exactly one scheduled unit and
run_phase() is a convenience loop over it. The engine owns no timers or
threads; front ends decide when to call step().
"""

import logging
from typing import Optional

from ..models.catalog import enabled_templates
from ..models.config import MatchConfig
from ..models.match import MatchState, Phase
from ..models.player import PlayerState
from ..models.unit import Unit, UnitTemplate
from ..utils.errors import IllegalMove, IllegalMoveReason, InvalidSnapshot
from . import economy
from .combat import UnitAction, resolve_unit_action
from .map_generator import new_match as generate_match
from .roster import find_unit, living_units
from .victory import check_elimination, resolve_by_hp

logger = logging.getLogger(__name__)


def build_schedule(match: MatchState, player_filter: str) -> list[tuple[str, int]]:
    """Order the living units that act in an execution phase.

    For "all", odd rounds run every p1 unit before any p2 unit and even
    rounds the reverse. Within one player units go by ascending spawn order.

    Args:
        match: Current match state
        player_filter: "p1", "p2", or "all"

    Returns:
        (owner, spawn_order) keys in acting order
    """
    if player_filter == "all":
        owners = ("p1", "p2") if match.round_index % 2 == 1 else ("p2", "p1")
    else:
        owners = (player_filter,)

    schedule = []
    for owner in owners:
        schedule.extend(placement.unit.key for placement in living_units(match, owner))
    return schedule


class TurnEngine:
    """Drives one match through shopping and execution phases.

    The engine holds the one live MatchState and mutates it in place.
    Callers issue shopping intents and execution steps; illegal intents
    raise IllegalMove without touching the state.
    """

    def __init__(
        self,
        match: MatchState,
        config: MatchConfig,
        store=None,
        templates: Optional[list[UnitTemplate]] = None,
    ):
        """Wrap an existing match.

        Args:
            match: Match to drive
            config: Match configuration
            store: Optional snapshot store (SnapshotStore or MemoryStore)
            templates: Deployable templates; None enables the full catalog
        """
        self.match = match
        self.config = config
        self.store = store
        self.templates = templates if templates else enabled_templates(None)

    @classmethod
    def new_match(
        cls,
        config: MatchConfig,
        store=None,
        templates: Optional[list[UnitTemplate]] = None,
        invalid_cells=(),
    ) -> "TurnEngine":
        """Start a fresh match at round 1 with p1 shopping."""
        return cls(generate_match(config, invalid_cells), config, store, templates)

    @classmethod
    def resume(
        cls,
        config: MatchConfig,
        store,
        templates: Optional[list[UnitTemplate]] = None,
    ) -> "TurnEngine":
        """Reload the stored match, or start fresh when there is nothing usable.

        A snapshot that does not fit the configured board, or is malformed,
        is discarded. A finished match is not resumed.

        Args:
            config: Match configuration the snapshot must fit
            store: Snapshot store to read from
            templates: Deployable templates; None reads the stored roster

        Returns:
            Engine positioned at the stored phase, or at a new match
        """
        if templates is None:
            templates = enabled_templates(store.load_enabled_units())

        try:
            match = store.load_match(config)
        except InvalidSnapshot as e:
            logger.warning(f"Discarding stored match: {e}")
            store.clear_match()
            match = None

        if match is not None and match.is_over:
            logger.info(f"Stored match already finished (winner: {match.winner}); starting fresh")
            store.clear_match()
            match = None

        if match is None:
            return cls.new_match(config, store, templates)

        logger.info(f"Resumed match at round {match.round_index}, {match.phase}")
        return cls(match, config, store, templates)

    # =========================================================================
    # READ ACCESSORS
    # =========================================================================

    @property
    def phase(self) -> Phase:
        return self.match.phase

    @property
    def round_index(self) -> int:
        return self.match.round_index

    @property
    def winner(self) -> Optional[str]:
        return self.match.winner

    @property
    def is_over(self) -> bool:
        return self.match.is_over

    @property
    def current_player(self) -> Optional[str]:
        """Shopping player, execution filter, or None once the match is over."""
        return self.match.phase.player

    def player(self, player_id: str) -> PlayerState:
        return self.match.players[player_id]

    def template(self, template_id: str) -> UnitTemplate:
        """Resolve a deployable template by id.

        Raises:
            IllegalMove: If the id is not among the enabled templates
        """
        wanted = template_id.strip().lower()
        for template in self.templates:
            if template.id == wanted:
                return template
        raise IllegalMove(
            IllegalMoveReason.UNKNOWN_UNIT,
            f"Unknown unit '{template_id}' (available: "
            f"{', '.join(t.id for t in self.templates)})",
        )

    @property
    def remaining_slots(self) -> int:
        """Scheduled slots not yet resolved in the current execution phase."""
        return max(0, len(self.match.schedule) - self.match.schedule_index)

    # =========================================================================
    # SHOPPING
    # =========================================================================

    def buy_territory(self, row: int, col: int) -> MatchState:
        """Current shopping player claims (row, col).

        Raises:
            IllegalMove: Outside shopping, or when the purchase is illegal
        """
        player_id = self._require_shopping("buy territory")
        try:
            return economy.buy_territory(self.match, player_id, row, col, self.config)
        except IllegalMove as e:
            logger.warning(f"Rejected purchase by {player_id}: {e.message}")
            raise

    def deploy_unit(self, row: int, col: int, template_id: str) -> Unit:
        """Current shopping player deploys template_id on (row, col).

        Raises:
            IllegalMove: Outside shopping, for unknown units, or when the
                deployment is illegal
        """
        player_id = self._require_shopping("deploy units")
        try:
            template = self.template(template_id)
            return economy.deploy_unit(self.match, player_id, row, col, template)
        except IllegalMove as e:
            logger.warning(f"Rejected deployment by {player_id}: {e.message}")
            raise

    def done(self) -> Phase:
        """End the current shopping sub-phase.

        Returns:
            The phase entered

        Raises:
            IllegalMove: If the match is not in a shopping phase
        """
        player_id = self._require_shopping("finish shopping")

        if self.match.round_index == 1:
            if player_id == "p1":
                self._enter(Phase.shopping("p2"))
            else:
                self._start_execution("all")
                self._persist()
        else:
            self._start_execution(player_id)
            self._persist()

        return self.match.phase

    # =========================================================================
    # EXECUTION
    # =========================================================================

    def is_phase_complete(self) -> bool:
        """True once every scheduled slot of the execution phase is used.

        Also true when the match is over. Always False while shopping.
        """
        if self.match.is_over:
            return True
        if not self.match.phase.is_executing:
            return False
        return self.match.schedule_index >= len(self.match.schedule)

    def step(self) -> Optional[UnitAction]:
        """Resolve the next scheduled unit.

        Units that died before their slot are skipped without consuming an
        action. The win condition is checked after the action.

        Returns:
            The resolved action, or None if the phase is complete

        Raises:
            IllegalMove: If called during shopping
        """
        if self.match.is_over:
            return None
        if not self.match.phase.is_executing:
            raise IllegalMove(
                IllegalMoveReason.WRONG_PHASE, f"Cannot step units during {self.match.phase}"
            )

        while self.match.schedule_index < len(self.match.schedule):
            owner, spawn_order = self.match.schedule[self.match.schedule_index]
            self.match.schedule_index += 1

            placement = find_unit(self.match, owner, spawn_order)
            if placement is None:
                logger.debug(f"Skipping {owner} unit #{spawn_order} (no longer on the board)")
                continue

            _, action = resolve_unit_action(self.match, placement.row, placement.col)
            self.match.action_log.append(action.to_dict())

            winner = check_elimination(self.match)
            if winner is not None:
                self._game_over(winner)
            return action

        return None

    def run_phase(self) -> list[UnitAction]:
        """Step until the current execution phase is complete.

        Returns:
            Actions resolved, in order
        """
        actions = []
        while not self.is_phase_complete():
            action = self.step()
            if action is None:
                break
            actions.append(action)
        return actions

    def finish_execution(self) -> Phase:
        """Leave a completed execution phase.

        executing(p1) hands over to shopping(p2); executing(all) and
        executing(p2) end the round.

        Returns:
            The phase entered

        Raises:
            IllegalMove: If not executing, or slots remain unresolved
        """
        phase = self.match.phase
        if not phase.is_executing:
            raise IllegalMove(
                IllegalMoveReason.WRONG_PHASE, f"Cannot finish execution during {phase}"
            )
        if not self.is_phase_complete():
            raise IllegalMove(
                IllegalMoveReason.PHASE_INCOMPLETE,
                f"{self.remaining_slots} unit(s) still to act in {phase}",
            )

        self.match.schedule = []
        self.match.schedule_index = 0

        if phase.player == "p1":
            self._enter(Phase.shopping("p2"))
        else:
            self._round_end()
        return self.match.phase

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _require_shopping(self, what: str) -> str:
        phase = self.match.phase
        if not phase.is_shopping:
            raise IllegalMove(IllegalMoveReason.WRONG_PHASE, f"Cannot {what} during {phase}")
        return phase.player

    def _enter(self, phase: Phase) -> None:
        logger.info(f"Round {self.match.round_index}: {self.match.phase} -> {phase}")
        self.match.phase = phase

    def _start_execution(self, player_filter: str) -> None:
        self.match.schedule = build_schedule(self.match, player_filter)
        self.match.schedule_index = 0
        self._enter(Phase.executing(player_filter))
        logger.debug(f"Execution schedule: {self.match.schedule}")

    def _round_end(self) -> None:
        """Close the round: final HP resolution, or interest and a new round."""
        if self.match.round_index + 1 > self.config.round_limit:
            self._game_over(resolve_by_hp(self.match))
            return

        economy.settle_interest(self.match, self.config)
        self.match.round_index += 1
        for player in self.match.players.values():
            player.territory_bought_this_round = False
        self._enter(Phase.shopping("p1"))
        self._persist()

    def _game_over(self, winner: str) -> None:
        self.match.winner = winner
        self.match.schedule = []
        self.match.schedule_index = 0
        self._enter(Phase.game_over())
        logger.info(f"Game over in round {self.match.round_index}: winner {winner}")
        self._persist()

    def _persist(self) -> None:
        if self.store is not None:
            self.store.save_match(self.match)
