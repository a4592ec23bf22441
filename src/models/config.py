"""Match configuration record."""

from dataclasses import asdict, dataclass
from typing import Any

from ..utils.errors import ConfigurationError
from ..utils.constants import (
    COLS,
    DEFAULT_GOLD_CAP,
    DEFAULT_LAYOUT,
    DEFAULT_ROUND_LIMIT,
    INITIAL_GOLD,
    INTEREST_RATE,
    ROUND_STIPEND,
    ROWS,
    TERRITORY_COST,
)

LAYOUTS = ("odd-r", "even-r", "odd-q", "even-q")


@dataclass(frozen=True)
class MatchConfig:
    """Knobs fixed for the lifetime of a match.

    round_limit and gold_cap are the player-facing settings; the rest
    default to the standard rules.
    """

    round_limit: int = DEFAULT_ROUND_LIMIT
    gold_cap: int = DEFAULT_GOLD_CAP
    initial_gold: int = INITIAL_GOLD
    territory_cost: int = TERRITORY_COST
    stipend: int = ROUND_STIPEND
    interest_rate: float = INTEREST_RATE
    rows: int = ROWS
    cols: int = COLS
    layout: str = DEFAULT_LAYOUT

    def __post_init__(self):
        """Validate configuration, failing fast with ConfigurationError."""
        if not isinstance(self.round_limit, int) or self.round_limit < 1:
            raise ConfigurationError(f"Invalid round_limit: {self.round_limit} (must be >= 1)")
        if not isinstance(self.gold_cap, int) or self.gold_cap < 0:
            raise ConfigurationError(f"Invalid gold_cap: {self.gold_cap} (must be >= 0)")
        if self.initial_gold < 0 or self.initial_gold > self.gold_cap:
            raise ConfigurationError(
                f"Invalid initial_gold: {self.initial_gold} (must be 0-{self.gold_cap})"
            )
        if self.territory_cost < 1:
            raise ConfigurationError(
                f"Invalid territory_cost: {self.territory_cost} (must be >= 1)"
            )
        if self.stipend < 0:
            raise ConfigurationError(f"Invalid stipend: {self.stipend} (must be >= 0)")
        if not (0 <= self.interest_rate <= 1):
            raise ConfigurationError(
                f"Invalid interest_rate: {self.interest_rate} (must be 0-1)"
            )
        if self.rows < 2 or self.cols < 2:
            raise ConfigurationError(f"Invalid board size: {self.rows}x{self.cols} (min 2x2)")
        if self.layout not in LAYOUTS:
            raise ConfigurationError(
                f"Invalid layout: {self.layout} (must be one of {', '.join(LAYOUTS)})"
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MatchConfig":
        """Build a config from a stored record.

        round_limit and gold_cap are required; other keys fall back to
        defaults and unknown keys are ignored.

        Raises:
            ConfigurationError: If required keys are missing or values invalid
        """
        missing = [key for key in ("round_limit", "gold_cap") if data.get(key) is None]
        if missing:
            raise ConfigurationError(f"Missing match configuration: {', '.join(missing)}")

        known = {key: value for key, value in data.items() if key in cls.__dataclass_fields__}
        try:
            return cls(**known)
        except TypeError as e:
            raise ConfigurationError(f"Malformed match configuration: {e}") from e
