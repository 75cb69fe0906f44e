"""Fish generation and pricing constants."""

# Size sampling: truncated normal around SIZE_MEAN_FRACTION * size_max
SIZE_MEAN_FRACTION = 0.7
SIZE_SD_FRACTION = 0.15
STRENGTH_SIZE_BOOST = 0.1  # strength_norm=1 -> sizes up to +10%

# Quality composition (weights sum to 1 before the fishing bonus)
QUALITY_SPECIES_WEIGHT = 0.35
QUALITY_SIZE_WEIGHT = 0.45
QUALITY_AGE_WEIGHT = 0.20
QUALITY_FISHING_WEIGHT = 0.5

# Rarity composition
RARITY_SPECIES_WEIGHT = 0.6
RARITY_SIZE_WEIGHT = 0.4
RARITY_LUCK_WEIGHT = 0.5

# Special trait roll: BASE + luck_norm * LUCK
SPECIAL_TRAIT_BASE_CHANCE = 0.01
SPECIAL_TRAIT_LUCK_CHANCE = 0.02

# =============================================================================
# PRICING
# =============================================================================
# price = base * tier_multiplier * qr_multiplier * jackpot * trading_boost
#   base = max(MIN_BASE_PRICE, size_max * PRICE_BASE_PER_CM * species.price_scale)
# =============================================================================
PRICE_BASE_PER_CM = 0.01
MIN_BASE_PRICE = 0.01

# Main-stat tiers (bad -> good); main_stat = size_score*0.7 + age_score*0.3
MAIN_STAT_SIZE_WEIGHT = 0.7
MAIN_STAT_AGE_WEIGHT = 0.3
MAIN_TIER_MULTIPLIERS = (0.05, 0.15, 0.5, 1.5, 6.0)

# Quality/rarity multiplier: lerp(QR_MIN, QR_MAX, ((q + r) / 2) ** QR_EXPONENT)
QUALITY_RARITY_EXPONENT = 1.6
QR_MIN_MULTIPLIER = 0.2
QR_MAX_MULTIPLIER = 3.0

# Trading=100 -> +50% price
TRADING_PRICE_BOOST_FACTOR = 0.5

# Jackpot (rare high-value spikes)
BASE_JACKPOT_CHANCE = 0.0005  # 0.05%
LUCK_JACKPOT_WEIGHT = 0.015  # luck_norm=1 -> +1.5%
MIN_TIER_INDEX_FOR_JACKPOT = 3
JACKPOT_MULTIPLIERS = (3.0, 8.0, 20.0, 50.0)
JACKPOT_WEIGHTS = (80.0, 15.0, 4.0, 1.0)
# Used when the jackpot table is empty or its weights don't line up.
MISCONFIGURED_JACKPOT_MULTIPLIER = 5.0

# Display projection: 1 + norm * 9
DISPLAY_MIN = 1.0
DISPLAY_SPAN = 9.0
