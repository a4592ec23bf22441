"""Unit data models: catalog templates and live battle units."""

from dataclasses import dataclass
from enum import Enum


class Strategy(Enum):
    """Closed set of autonomous unit behaviors."""

    HEAL = "heal"
    ATTACK_NEAREST = "attack_nearest"


@dataclass(frozen=True)
class UnitTemplate:
    """Immutable catalog entry describing a deployable unit type."""

    id: str  # Catalog key (e.g., "warrior")
    name: str  # Display name
    emoji: str  # Board glyph for rich front ends
    base_hp: int
    attack: int
    defense: int
    cost: int  # Gold cost to deploy
    tier: int  # 1-3, cosmetic ranking

    def __post_init__(self):
        """Validate template stats after initialization."""
        if not self.id:
            raise ValueError("Template id cannot be empty")
        if self.base_hp <= 0:
            raise ValueError(f"Invalid base_hp: {self.base_hp} (must be > 0)")
        if self.attack < 0 or self.defense < 0:
            raise ValueError(
                f"Invalid stats for {self.id}: attack={self.attack}, defense={self.defense}"
            )
        if self.cost < 0:
            raise ValueError(f"Invalid cost: {self.cost} (must be >= 0)")


@dataclass
class Unit:
    """A live battle unit placed on the board.

    Units are created by deployment during shopping and mutated in place
    during execution (hp changes, relocation). spawn_order is assigned from
    the owner's counter at creation and never changes; it breaks ties in
    execution order.
    """

    template: UnitTemplate
    hp: int  # Current hit points, clamped to [0, max_hp]
    max_hp: int
    owner: str  # "p1" or "p2"
    spawn_order: int  # Per-owner creation index
    strategy: Strategy = Strategy.ATTACK_NEAREST

    def __post_init__(self):
        """Validate unit data after initialization."""
        if self.owner not in ("p1", "p2"):
            raise ValueError(f"Invalid owner: {self.owner} (must be 'p1' or 'p2')")
        if self.max_hp <= 0:
            raise ValueError(f"Invalid max_hp: {self.max_hp} (must be > 0)")
        if not (0 <= self.hp <= self.max_hp):
            raise ValueError(f"Invalid hp: {self.hp} (must be 0-{self.max_hp})")
        if self.spawn_order < 0:
            raise ValueError(f"Invalid spawn_order: {self.spawn_order} (must be >= 0)")

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def attack(self) -> int:
        return self.template.attack

    @property
    def defense(self) -> int:
        return self.template.defense

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def is_wounded(self) -> bool:
        return self.hp < self.max_hp

    @property
    def key(self) -> tuple[str, int]:
        """Stable identity of this unit within a match."""
        return (self.owner, self.spawn_order)

    def take_damage(self, amount: int) -> int:
        """Subtract damage, clamping at zero.

        Args:
            amount: Damage to apply (non-negative)

        Returns:
            Remaining hit points
        """
        self.hp = max(0, self.hp - amount)
        return self.hp

    def restore(self, amount: int) -> int:
        """Add hit points, capped at max_hp.

        Args:
            amount: Healing to apply (non-negative)

        Returns:
            Hit points actually restored
        """
        before = self.hp
        self.hp = min(self.max_hp, self.hp + amount)
        return self.hp - before
