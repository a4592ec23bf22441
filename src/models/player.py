"""Player economy state."""

from dataclasses import dataclass


@dataclass
class PlayerState:
    """Per-player purse and round bookkeeping.

    Gold never goes negative: every spend is checked for affordability
    before it is applied. next_spawn_order only ever increases, so spawn
    orders stay unique per owner even after units die.
    """

    id: str  # "p1" or "p2"
    gold: int
    territory_bought_this_round: bool = False
    next_spawn_order: int = 0

    def __post_init__(self):
        """Validate player data after initialization."""
        if self.id not in ("p1", "p2"):
            raise ValueError(f"Invalid player id: {self.id} (must be 'p1' or 'p2')")
        if self.gold < 0:
            raise ValueError(f"Invalid gold: {self.gold} (must be >= 0)")
        if self.next_spawn_order < 0:
            raise ValueError(
                f"Invalid next_spawn_order: {self.next_spawn_order} (must be >= 0)"
            )

    def can_afford(self, cost: int) -> bool:
        return self.gold >= cost

    def spend(self, cost: int) -> None:
        """Deduct gold. Callers check can_afford first."""
        if cost > self.gold:
            raise ValueError(f"{self.id} cannot afford {cost} gold (has {self.gold})")
        self.gold -= cost

    def take_spawn_order(self) -> int:
        """Reserve the next spawn order for a newly deployed unit."""
        order = self.next_spawn_order
        self.next_spawn_order += 1
        return order
