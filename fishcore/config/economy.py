"""Round economy and player constants."""

# Procedural goal: BASE * GROWTH ** (level - 1) + LINEAR_ADD * (level - 1)
PROCEDURAL_BASE_GOAL = 2.0
PROCEDURAL_GROWTH_FACTOR = 1.25  # +25% per level
PROCEDURAL_LINEAR_ADD = 0.5

# Optional authored goals, used only when ALWAYS_USE_PROCEDURAL is False
LEVEL_PRICE_GOALS = (2.0, 5.0, 10.0, 20.0)
ALWAYS_USE_PROCEDURAL = True

MAX_SELLS_PER_ROUND = 5
ONE_SELL_ATTEMPT_PER_ROUND = True

# Round-end housekeeping
RETURN_ALL_FISH_ON_ROUND_END = True
REFILL_POOLS_ON_ROUND_END = True
AUTO_START_NEXT_ROUND = True
EQUIP_STARTING_GEAR_AT_ROUND_START = True

# Sell station
SELL_SLOT_COUNT = 5
EMPTY_SLOT_CONSUMES_SELL = False
EMPTY_PRESS_CONSUMES_ONE = False

# Player stats
STAT_MIN = 0
STAT_MAX = 100
STAT_NORM_SCALE = 0.01  # stat 100 -> norm 1.0
