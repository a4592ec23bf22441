"""FastAPI server for Hex Skirmish.

Provides an HTTP API for a browser front end driving hot-seat matches:
both players share one client, which issues shopping commands and paces
execution with step/run/continue.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..engine.combat import UnitAction
from ..models.catalog import CATALOG
from ..models.config import MatchConfig
from ..utils.errors import ConfigurationError, IllegalMove
from .schemas.requests import BuyTerritoryRequest, CreateGameRequest, DeployUnitRequest
from .schemas.responses import (
    ActionResponse,
    CreateGameResponse,
    GameStateResponse,
    UnitTemplateResponse,
)
from .session import GameSession, GameSessionManager

logger = logging.getLogger(__name__)

# Global session manager
sessions = GameSessionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("Hex Skirmish server starting...")
    yield
    logger.info("Hex Skirmish server shutting down...")
    await sessions.cleanup_all()


app = FastAPI(
    title="Hex Skirmish API",
    description="Web API for hot-seat Hex Skirmish matches",
    version="1.0.0",
    lifespan=lifespan,
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_session(game_id: str) -> GameSession:
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


def _respond(
    session: GameSession,
    actions: list[UnitAction] | None = None,
    error: IllegalMove | None = None,
) -> ActionResponse:
    engine = session.engine
    return ActionResponse(
        accepted=error is None,
        errors=[error.message] if error else [],
        reason=error.reason.value if error else None,
        phase=session.phase,
        winner=engine.winner,
        actions=[action.to_dict() for action in actions or []],
        phaseComplete=engine.is_phase_complete(),
        state=session.get_state(),
    )


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "Hex Skirmish",
        "status": "operational",
        "activeGames": len(sessions.sessions),
    }


@app.get("/api/units", response_model=list[UnitTemplateResponse])
async def list_units():
    """List the full unit catalog."""
    return [
        UnitTemplateResponse(
            id=t.id,
            name=t.name,
            emoji=t.emoji,
            hp=t.base_hp,
            attack=t.attack,
            defense=t.defense,
            cost=t.cost,
            tier=t.tier,
        )
        for t in CATALOG
    ]


@app.post("/api/games", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest):
    """Create a new hot-seat match.

    Example:
        POST /api/games
        {"roundLimit": 10, "goldCap": 50, "enabledUnits": ["warrior", "healer"]}
    """
    overrides = {}
    if request.stipend is not None:
        overrides["stipend"] = request.stipend
    try:
        config = MatchConfig(round_limit=request.roundLimit, gold_cap=request.goldCap, **overrides)
    except ConfigurationError as e:
        logger.warning(f"Rejected match configuration: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    session = sessions.create_session(config, request.enabledUnits)
    return CreateGameResponse(
        gameId=session.id,
        roundLimit=config.round_limit,
        goldCap=config.gold_cap,
        enabledUnits=[template.id for template in session.engine.templates],
        state=session.get_state(),
    )


@app.get("/api/games/{game_id}/state", response_model=GameStateResponse)
async def get_game_state(game_id: str):
    """Get current match state."""
    session = _get_session(game_id)
    return GameStateResponse(
        gameId=game_id,
        round=session.engine.round_index,
        phase=session.phase,
        winner=session.engine.winner,
        state=session.get_state(),
    )


@app.post("/api/games/{game_id}/territory", response_model=ActionResponse)
async def buy_territory(game_id: str, request: BuyTerritoryRequest):
    """Claim a cell for the shopping player.

    Example:
        POST /api/games/game-abc123/territory
        {"row": 2, "col": 1}
    """
    session = _get_session(game_id)
    try:
        session.engine.buy_territory(request.row, request.col)
    except IllegalMove as e:
        return _respond(session, error=e)
    return _respond(session)


@app.post("/api/games/{game_id}/units", response_model=ActionResponse)
async def deploy_unit(game_id: str, request: DeployUnitRequest):
    """Deploy a unit for the shopping player.

    Example:
        POST /api/games/game-abc123/units
        {"unit": "mage", "row": 1, "col": 1}
    """
    session = _get_session(game_id)
    try:
        session.engine.deploy_unit(request.row, request.col, request.unit)
    except IllegalMove as e:
        return _respond(session, error=e)
    return _respond(session)


@app.post("/api/games/{game_id}/done", response_model=ActionResponse)
async def finish_shopping(game_id: str):
    """End the shopping player's sub-phase."""
    session = _get_session(game_id)
    try:
        session.engine.done()
    except IllegalMove as e:
        return _respond(session, error=e)
    logger.info(f"Game {game_id}: entered {session.phase}")
    return _respond(session)


@app.post("/api/games/{game_id}/step", response_model=ActionResponse)
async def step(game_id: str):
    """Resolve the next scheduled unit."""
    session = _get_session(game_id)
    try:
        action = session.engine.step()
    except IllegalMove as e:
        return _respond(session, error=e)
    return _respond(session, actions=[action] if action else [])


@app.post("/api/games/{game_id}/run", response_model=ActionResponse)
async def run_phase(game_id: str):
    """Resolve every remaining unit of the execution phase."""
    session = _get_session(game_id)
    try:
        actions = session.engine.run_phase()
    except IllegalMove as e:
        return _respond(session, error=e)
    return _respond(session, actions=actions)


@app.post("/api/games/{game_id}/continue", response_model=ActionResponse)
async def continue_match(game_id: str):
    """Leave a completed execution phase."""
    session = _get_session(game_id)
    try:
        session.engine.finish_execution()
    except IllegalMove as e:
        return _respond(session, error=e)
    logger.info(f"Game {game_id}: entered {session.phase}")
    return _respond(session)


@app.delete("/api/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a match session."""
    if sessions.delete(game_id):
        return {"message": f"Game {game_id} deleted"}
    raise HTTPException(status_code=404, detail="Game not found")

