"""Unit catalog: the read-only set of deployable unit templates."""

from .unit import Strategy, UnitTemplate

CATALOG: tuple[UnitTemplate, ...] = (
    UnitTemplate("warrior", "Warrior", "⚔️", base_hp=120, attack=15, defense=10, cost=1, tier=1),
    UnitTemplate("mage", "Mage", "🔮", base_hp=80, attack=25, defense=5, cost=2, tier=2),
    UnitTemplate("tank", "Tank", "🛡️", base_hp=200, attack=8, defense=20, cost=3, tier=2),
    UnitTemplate("assassin", "Assassin", "🗡️", base_hp=70, attack=30, defense=3, cost=3, tier=3),
    UnitTemplate("healer", "Healer", "💚", base_hp=90, attack=10, defense=8, cost=2, tier=1),
)

_BY_ID = {template.id: template for template in CATALOG}

# Templates whose units run the heal strategy instead of attack-nearest
HEALER_TEMPLATES = frozenset({"healer"})


def get_template(template_id: str) -> UnitTemplate | None:
    """Look up a catalog template by id (case-insensitive)."""
    return _BY_ID.get(template_id.strip().lower())


def strategy_for(template: UnitTemplate) -> Strategy:
    """Return the fixed strategy a deployed unit of this template follows."""
    if template.id in HEALER_TEMPLATES:
        return Strategy.HEAL
    return Strategy.ATTACK_NEAREST


def enabled_templates(template_ids: list[str] | None) -> list[UnitTemplate]:
    """Resolve a curated list of template ids against the catalog.

    Unknown ids are ignored. A missing or empty selection enables the full
    catalog. Catalog order is preserved regardless of selection order.

    Args:
        template_ids: Ids chosen by the players, or None

    Returns:
        List of deployable templates
    """
    if not template_ids:
        return list(CATALOG)
    wanted = {tid.strip().lower() for tid in template_ids}
    selected = [template for template in CATALOG if template.id in wanted]
    return selected or list(CATALOG)
