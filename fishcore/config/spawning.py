"""Bite loop and pool constants."""

BITE_CHANCE = 0.25
BITE_INTERVAL_MIN = 1.0  # seconds
BITE_INTERVAL_MAX = 5.0  # seconds

# Delay before the first bite check after the lure enters the water
INITIAL_SETTLE_DELAY = 0.25
# Re-check delay while the socket already holds a pending or hooked fish
BUSY_POLL_INTERVAL = 0.25

# How long a pending fish waits for socket acceptance
ACCEPT_TIMEOUT = 5.0

# Spawn weight shaping
LUCK_SPAWN_WEIGHT = 0.1  # luck_norm=1 -> +10% to every species weight

# Pools
POOL_INITIAL_SIZE = 5
