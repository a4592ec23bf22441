"""Game configuration constants."""

# Board dimensions
ROWS = 8
COLS = 8
DEFAULT_LAYOUT = "odd-r"  # Pointy-top, odd rows shoved right

# Economy
INITIAL_GOLD = 20
TERRITORY_COST = 3
INTEREST_RATE = 0.10  # Applied to current gold at round end, floored
ROUND_STIPEND = 5  # Flat income added at round end

# Match limits
DEFAULT_ROUND_LIMIT = 10
DEFAULT_GOLD_CAP = 50

# Combat
ATTACK_RANGE = 1  # Hex distance at which a unit can strike
HEAL_RANGE = 2  # Hex distance at which a healer can mend an ally
MIN_DAMAGE = 1  # Floor on damage per strike

# Starting territory for p1 (row, col); p2 gets the point mirror
P1_START_CELLS = ((0, 1), (0, 2), (1, 0), (1, 1), (2, 0))
