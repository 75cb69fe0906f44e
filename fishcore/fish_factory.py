"""Procedural fish generation and pricing.

``FishFactory.generate_fish_data`` samples a fish's physical attributes
from its species template, scores them into quality and rarity, and prices
the result through a chain of multipliers:

    price = base * tier * quality_rarity * jackpot * trading

The draw order from the RNG stream is fixed (size, age, special trait, then
the jackpot roll and jackpot table draw only when the tier allows it) so a
seeded stream reproduces the same fish.
"""

import logging
import math
from typing import Optional

from fishcore.config import fish as fish_cfg
from fishcore.config.session_config import FactoryConfig
from fishcore.data import FishData, FishSpeciesTemplate, LureTemplate
from fishcore.events import EventBus, FishSpawnedEvent
from fishcore.fish_pool import FishInstance, FishPoolRegistry
from fishcore.math_utils import Vector3, clamp, clamp01, lerp, round_cents
from fishcore.player import PlayerProfile
from fishcore.state_machine import FishLifecycle
from fishcore.util.rng import RNGService, require_rng_param

logger = logging.getLogger(__name__)

# Pending fish float just above the socket they are offered to.
SPAWN_HEIGHT_OFFSET = 0.02


class FishFactory:
    """Generates fish stats and spawns pending fish from species pools.

    Attributes:
        config: Generation and pricing tuning
        rng: Session RNG service
        pools: Species pools used by ``spawn_pending_fish``
    """

    def __init__(
        self,
        rng: Optional[RNGService] = None,
        config: Optional[FactoryConfig] = None,
        pools: Optional[FishPoolRegistry] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.rng = require_rng_param(rng, "FishFactory.__init__")
        self.config = config or FactoryConfig()
        self.pools = pools or FishPoolRegistry()
        self._event_bus = event_bus

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------

    def spawn_pending_fish(
        self,
        species: Optional[FishSpeciesTemplate],
        lure: Optional[LureTemplate],
        player: Optional[PlayerProfile],
        position: Optional[Vector3] = None,
    ) -> Optional[FishInstance]:
        """Acquire an instance for ``species`` and fill it with fresh stats.

        The instance is marked PENDING, kept inert and made non-throwable
        while it waits for socket acceptance.

        Returns:
            The pending instance, or None if the species or its pool is missing
        """
        if species is None:
            logger.warning("spawn_pending_fish called with no species")
            return None

        pool = self.pools.get(species.species_id)
        if pool is None:
            return None

        spawn_pos = (position or Vector3.zero()) + Vector3(0.0, SPAWN_HEIGHT_OFFSET, 0.0)
        instance = pool.acquire(spawn_pos)
        instance.data = self.generate_fish_data(species, lure, player)
        instance.advance(FishLifecycle.PENDING, reason="spawned")
        instance.make_inert()

        data = instance.data
        logger.info(
            f"Spawned pending fish {species.species_id} size={data.size_cm:.1f}cm "
            f"quality={data.quality_display:.2f} rarity={data.rarity_display:.2f} "
            f"price={data.price_euros:.2f}"
        )
        if self._event_bus is not None:
            self._event_bus.emit(
                FishSpawnedEvent(
                    instance_id=instance.instance_id,
                    species_id=species.species_id,
                    price_euros=data.price_euros,
                    jackpot=data.jackpot,
                )
            )
        return instance

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate_fish_data(
        self,
        species: FishSpeciesTemplate,
        lure: Optional[LureTemplate],
        player: Optional[PlayerProfile],
    ) -> FishData:
        """Sample and price one fish.

        Args:
            species: Template to sample from
            lure: Equipped lure (spawn bias only; unused by generation itself)
            player: Player whose stats shape the fish; None means all-zero stats

        Returns:
            The generated, priced stat tuple
        """
        cfg = self.config
        strength_norm = player.strength_norm if player is not None else 0.0
        fishing_norm = player.fishing_norm if player is not None else 0.0
        luck_norm = player.luck_norm if player is not None else 0.0
        trading_norm = player.trading_norm if player is not None else 0.0

        # Size
        mean = species.size_max * cfg.size_mean_fraction
        sd = species.size_max * cfg.size_sd_fraction
        size = self.rng.truncated_normal(mean, sd, species.size_min, species.size_max)
        size *= 1.0 + strength_norm * fish_cfg.STRENGTH_SIZE_BOOST
        size_cm = clamp(size, species.size_min, species.size_max)

        # Age
        age_years = self.rng.uniform_range(species.age_min, species.age_max)

        # Scores
        size_score = clamp01(size_cm / max(0.0001, species.size_max))
        age_range = max(0.01, species.age_max - species.optimal_age)
        age_score = clamp01(1.0 - abs(age_years - species.optimal_age) / age_range)

        quality_norm = clamp01(
            fish_cfg.QUALITY_SPECIES_WEIGHT * species.base_quality_norm
            + fish_cfg.QUALITY_SIZE_WEIGHT * size_score
            + fish_cfg.QUALITY_AGE_WEIGHT * age_score
            + fishing_norm * fish_cfg.QUALITY_FISHING_WEIGHT
        )
        rarity_norm = clamp01(
            fish_cfg.RARITY_SPECIES_WEIGHT * species.base_rarity_norm
            + fish_cfg.RARITY_SIZE_WEIGHT * size_score
            + luck_norm * fish_cfg.RARITY_LUCK_WEIGHT
        )

        trait_chance = fish_cfg.SPECIAL_TRAIT_BASE_CHANCE + luck_norm * fish_cfg.SPECIAL_TRAIT_LUCK_CHANCE
        special_trait = self.rng.uniform_range(0.0, 1.0) < trait_chance

        # Pricing
        base_price = max(
            fish_cfg.MIN_BASE_PRICE,
            species.size_max * cfg.price_base_per_cm * species.price_scale,
        )
        tier_index = self.main_tier_index(size_score, age_score)
        tier_multiplier = cfg.main_tier_multipliers[tier_index] if cfg.main_tier_multipliers else 1.0
        qr_multiplier = self.quality_rarity_multiplier(quality_norm, rarity_norm)
        jackpot_multiplier = self._roll_jackpot(species, tier_index, luck_norm)
        trading_boost = 1.0 + trading_norm * cfg.trading_price_boost_factor

        raw_price = base_price * tier_multiplier * qr_multiplier * jackpot_multiplier * trading_boost
        price_euros = max(0.0, round_cents(raw_price))

        return FishData(
            species_id=species.species_id,
            size_cm=size_cm,
            age_years=age_years,
            quality_norm=quality_norm,
            rarity_norm=rarity_norm,
            quality_display=to_display(quality_norm),
            rarity_display=to_display(rarity_norm),
            price_euros=price_euros,
            special_trait=special_trait,
            tier_index=tier_index,
            jackpot_multiplier=jackpot_multiplier,
        )

    def main_tier_index(self, size_score: float, age_score: float) -> int:
        """Bucket the combined size/age score into a tier index."""
        main_stat = clamp01(
            size_score * fish_cfg.MAIN_STAT_SIZE_WEIGHT + age_score * fish_cfg.MAIN_STAT_AGE_WEIGHT
        )
        tier_count = max(1, len(self.config.main_tier_multipliers))
        return int(clamp(math.floor(main_stat * (tier_count - 1)), 0, tier_count - 1))

    def quality_rarity_multiplier(self, quality_norm: float, rarity_norm: float) -> float:
        cfg = self.config
        combined = clamp01((quality_norm + rarity_norm) * 0.5)
        shaped = combined ** max(0.0001, cfg.quality_rarity_exponent)
        return lerp(cfg.qr_min_multiplier, cfg.qr_max_multiplier, shaped)

    def _roll_jackpot(self, species: FishSpeciesTemplate, tier_index: int, luck_norm: float) -> float:
        cfg = self.config
        if tier_index < cfg.min_tier_index_for_jackpot:
            return 1.0

        chance = clamp01(cfg.base_jackpot_chance + luck_norm * cfg.luck_jackpot_weight)
        if self.rng.uniform_range(0.0, 1.0) >= chance:
            return 1.0

        multipliers = cfg.jackpot_multipliers
        weights = cfg.jackpot_weights
        if not multipliers or len(weights) != len(multipliers):
            # Misconfigured table: keep the flat fallback rather than guessing.
            multiplier = fish_cfg.MISCONFIGURED_JACKPOT_MULTIPLIER
        else:
            multiplier = multipliers[0]
            total = sum(max(0.0, w) for w in weights)
            roll = self.rng.uniform_range(0.0, total)
            acc = 0.0
            for candidate, weight in zip(multipliers, weights):
                acc += max(0.0, weight)
                if roll <= acc:
                    multiplier = max(0.0001, candidate)
                    break

        logger.info(
            f"Jackpot! species={species.species_id} tier={tier_index} "
            f"jackpot_mul={multiplier:.2f} chance={chance:.3f}"
        )
        return multiplier


def to_display(norm: float) -> float:
    """Project a 0..1 norm onto the 1..10 display scale."""
    return fish_cfg.DISPLAY_MIN + clamp01(norm) * fish_cfg.DISPLAY_SPAN
