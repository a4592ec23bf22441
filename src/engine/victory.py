"""Victory condition checking.

This module handles:
1. Elimination: a side with no living units loses (both empty is a draw)
2. Round limit: the side with more remaining hit points wins (equal is a draw)
"""

import logging
from typing import Optional

from ..models.match import MatchState
from .roster import has_living_units, total_hp

logger = logging.getLogger(__name__)


def check_elimination(match: MatchState) -> Optional[str]:
    """Check whether either side has been wiped out.

    - Neither side has living units → "draw"
    - Only p1 has none → "p2"
    - Only p2 has none → "p1"
    - Both sides alive → None (continue)

    Args:
        match: Current match state

    Returns:
        Winner ("p1", "p2", "draw") or None if the battle goes on
    """
    p1_alive = has_living_units(match, "p1")
    p2_alive = has_living_units(match, "p2")

    if not p1_alive and not p2_alive:
        return "draw"
    if not p1_alive:
        return "p2"
    if not p2_alive:
        return "p1"
    return None


def resolve_by_hp(match: MatchState) -> str:
    """Decide a match that reached its round limit.

    Args:
        match: Current match state

    Returns:
        "p1" or "p2" for the higher summed remaining HP, "draw" if equal
    """
    p1_hp = total_hp(match, "p1")
    p2_hp = total_hp(match, "p2")
    logger.info(f"Round limit reached: p1 {p1_hp} HP vs p2 {p2_hp} HP")

    if p1_hp > p2_hp:
        return "p1"
    if p2_hp > p1_hp:
        return "p2"
    return "draw"
