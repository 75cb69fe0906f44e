"""Fight resolution constants."""

# Higher => closer to 50/50 regardless of stat difference
BALANCE_FACTOR = 5.0

# Seconds the fight lasts before the outcome is drawn
RESOLUTION_DURATION = 1.2

# fish_strength = size_score * FISH_STRENGTH_SCALE
FISH_STRENGTH_SCALE = 10.0
# player strength = strength_norm * PLAYER_STRENGTH_SCALE + rod.strength_bonus
PLAYER_STRENGTH_SCALE = 10.0
