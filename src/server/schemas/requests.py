"""Pydantic request schemas for API endpoints."""

from pydantic import BaseModel, Field


class CreateGameRequest(BaseModel):
    """Request to create a new hot-seat match."""

    roundLimit: int = Field(  # noqa: N815
        default=10, description="Number of rounds before the match is decided by remaining HP"
    )
    goldCap: int = Field(  # noqa: N815
        default=50, description="Maximum gold a player can hold after round-end income"
    )
    stipend: int | None = Field(
        default=None, description="Optional flat round-end income (default 5)"
    )
    enabledUnits: list[str] | None = Field(  # noqa: N815
        default=None, description="Template ids players may deploy; omit for the full catalog"
    )


class BuyTerritoryRequest(BaseModel):
    """Claim one cell for the shopping player."""

    row: int = Field(ge=0, description="Target row")
    col: int = Field(ge=0, description="Target column")


class DeployUnitRequest(BaseModel):
    """Deploy one unit for the shopping player."""

    unit: str = Field(description="Template id, e.g. 'warrior'")
    row: int = Field(ge=0, description="Target row")
    col: int = Field(ge=0, description="Target column")
