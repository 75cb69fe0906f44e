"""Configuration dataclasses for a fishing session."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from fishcore.config import catch as catch_cfg
from fishcore.config import economy as economy_cfg
from fishcore.config import fish as fish_cfg
from fishcore.config import spawning as spawning_cfg
from fishcore.config.species import STARTING_LURE_ID, STARTING_ROD_ID


@dataclass
class FactoryConfig:
    """Fish generation and pricing tuning."""

    size_mean_fraction: float = fish_cfg.SIZE_MEAN_FRACTION
    size_sd_fraction: float = fish_cfg.SIZE_SD_FRACTION
    price_base_per_cm: float = fish_cfg.PRICE_BASE_PER_CM
    main_tier_multipliers: Tuple[float, ...] = fish_cfg.MAIN_TIER_MULTIPLIERS
    quality_rarity_exponent: float = fish_cfg.QUALITY_RARITY_EXPONENT
    qr_min_multiplier: float = fish_cfg.QR_MIN_MULTIPLIER
    qr_max_multiplier: float = fish_cfg.QR_MAX_MULTIPLIER
    trading_price_boost_factor: float = fish_cfg.TRADING_PRICE_BOOST_FACTOR
    base_jackpot_chance: float = fish_cfg.BASE_JACKPOT_CHANCE
    luck_jackpot_weight: float = fish_cfg.LUCK_JACKPOT_WEIGHT
    min_tier_index_for_jackpot: int = fish_cfg.MIN_TIER_INDEX_FOR_JACKPOT
    jackpot_multipliers: Tuple[float, ...] = fish_cfg.JACKPOT_MULTIPLIERS
    jackpot_weights: Tuple[float, ...] = fish_cfg.JACKPOT_WEIGHTS


@dataclass
class SpawnConfig:
    """Bite loop timing and pool sizing."""

    bite_chance: float = spawning_cfg.BITE_CHANCE
    bite_interval_min: float = spawning_cfg.BITE_INTERVAL_MIN
    bite_interval_max: float = spawning_cfg.BITE_INTERVAL_MAX
    initial_settle_delay: float = spawning_cfg.INITIAL_SETTLE_DELAY
    busy_poll_interval: float = spawning_cfg.BUSY_POLL_INTERVAL
    accept_timeout: float = spawning_cfg.ACCEPT_TIMEOUT
    pool_initial_size: int = spawning_cfg.POOL_INITIAL_SIZE


@dataclass
class CatchConfig:
    """Fight resolution tuning."""

    balance_factor: float = catch_cfg.BALANCE_FACTOR
    resolution_duration: float = catch_cfg.RESOLUTION_DURATION


@dataclass
class LevelConfig:
    """Round goals, sell limits and round-end behaviour."""

    procedural_base_goal: float = economy_cfg.PROCEDURAL_BASE_GOAL
    procedural_growth_factor: float = economy_cfg.PROCEDURAL_GROWTH_FACTOR
    procedural_linear_add: float = economy_cfg.PROCEDURAL_LINEAR_ADD
    always_use_procedural: bool = economy_cfg.ALWAYS_USE_PROCEDURAL
    level_price_goals: Tuple[float, ...] = economy_cfg.LEVEL_PRICE_GOALS
    max_sells_per_round: int = economy_cfg.MAX_SELLS_PER_ROUND
    one_sell_attempt_per_round: bool = economy_cfg.ONE_SELL_ATTEMPT_PER_ROUND
    return_all_fish_on_round_end: bool = economy_cfg.RETURN_ALL_FISH_ON_ROUND_END
    refill_pools_on_round_end: bool = economy_cfg.REFILL_POOLS_ON_ROUND_END
    auto_start_next_round: bool = economy_cfg.AUTO_START_NEXT_ROUND
    equip_starting_gear_at_round_start: bool = economy_cfg.EQUIP_STARTING_GEAR_AT_ROUND_START
    starting_rod_id: Optional[str] = STARTING_ROD_ID
    starting_lure_id: Optional[str] = STARTING_LURE_ID


@dataclass
class SellConfig:
    """Sell station rules."""

    slot_count: int = economy_cfg.SELL_SLOT_COUNT
    empty_slot_consumes_sell: bool = economy_cfg.EMPTY_SLOT_CONSUMES_SELL
    empty_press_consumes_one: bool = economy_cfg.EMPTY_PRESS_CONSUMES_ONE


@dataclass
class SessionConfig:
    """Top-level configuration for a ``FishingSession``.

    Attributes:
        seed: Seed for the session RNG; None for an OS-seeded stream
    """

    seed: Optional[int] = None
    factory: FactoryConfig = field(default_factory=FactoryConfig)
    spawn: SpawnConfig = field(default_factory=SpawnConfig)
    catch: CatchConfig = field(default_factory=CatchConfig)
    level: LevelConfig = field(default_factory=LevelConfig)
    sell: SellConfig = field(default_factory=SellConfig)
