"""Pydantic response schemas for API endpoints."""

from pydantic import BaseModel, Field


class GameStateResponse(BaseModel):
    """Response containing current match state."""

    gameId: str  # noqa: N815
    round: int
    phase: str
    winner: str | None
    state: dict


class CreateGameResponse(BaseModel):
    """Response after creating a new match."""

    gameId: str  # noqa: N815
    roundLimit: int  # noqa: N815
    goldCap: int  # noqa: N815
    enabledUnits: list[str]  # noqa: N815
    state: dict


class ActionResponse(BaseModel):
    """Response after a shopping command or execution control.

    Rejected commands come back with accepted=False and the reason; the
    match state is unchanged in that case.
    """

    accepted: bool
    errors: list[str] = Field(default_factory=list)
    reason: str | None = None
    phase: str
    winner: str | None = None
    actions: list[dict] = Field(default_factory=list)
    phaseComplete: bool = False  # noqa: N815
    state: dict


class UnitTemplateResponse(BaseModel):
    """One deployable unit template."""

    id: str
    name: str
    emoji: str
    hp: int
    attack: int
    defense: int
    cost: int
    tier: int
