"""Batch sampling of fish generation for tuning.

Generates many fish for one species under a few player presets and
summarises the quality, rarity and price distributions. Used to sanity-check
tuning changes: the same seed and presets always produce the same report.
"""

import logging
import statistics
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from fishcore.config.session_config import FactoryConfig
from fishcore.data import FishSpeciesTemplate, LureTemplate, RodTemplate
from fishcore.fish_factory import FishFactory
from fishcore.player import PlayerProfile
from fishcore.util.rng import RNGService

logger = logging.getLogger(__name__)

DEFAULT_SAMPLES_PER_PRESET = 500


@dataclass(frozen=True)
class PlayerPreset:
    name: str
    fishing: int = 0
    strength: int = 0
    luck: int = 0
    trading: int = 0
    rod: Optional[RodTemplate] = None
    lure: Optional[LureTemplate] = None

    def build_player(self) -> PlayerProfile:
        player = PlayerProfile(self.fishing, self.strength, self.luck, self.trading)
        player.equipped_rod = self.rod
        player.equipped_lure = self.lure
        return player


DEFAULT_PRESETS = (
    PlayerPreset("Low", fishing=5, strength=5, luck=2, trading=5),
    PlayerPreset("Medium", fishing=30, strength=30, luck=20, trading=30),
    PlayerPreset("High", fishing=70, strength=70, luck=60, trading=60),
)


@dataclass(frozen=True)
class Distribution:
    avg: float
    median: float
    min: float
    max: float

    @classmethod
    def of(cls, values: Sequence[float]) -> "Distribution":
        if not values:
            return cls(0.0, 0.0, 0.0, 0.0)
        return cls(statistics.mean(values), statistics.median(values), min(values), max(values))

    def format(self) -> str:
        return f"avg={self.avg:.2f} med={self.median:.2f} min={self.min:.2f} max={self.max:.2f}"


@dataclass
class PresetReport:
    preset: str
    species_id: str
    samples: int
    quality: Distribution
    rarity: Distribution
    price: Distribution
    jackpots: int = 0
    special_traits: int = 0

    def summary_line(self) -> str:
        return (
            f"Preset='{self.preset}' Species='{self.species_id}' samples={self.samples} | "
            f"Quality {self.quality.format()} | Rarity {self.rarity.format()} | "
            f"Price {self.price.format()} | jackpots={self.jackpots} traits={self.special_traits}"
        )


@dataclass
class BatchReport:
    seed: Optional[int]
    reports: List[PresetReport] = field(default_factory=list)

    def by_preset(self) -> Dict[str, PresetReport]:
        return {report.preset: report for report in self.reports}


def sample_preset(
    factory: FishFactory,
    species: FishSpeciesTemplate,
    preset: PlayerPreset,
    samples: int = DEFAULT_SAMPLES_PER_PRESET,
    lure: Optional[LureTemplate] = None,
) -> PresetReport:
    """Generate ``samples`` fish for ``preset`` and summarise them."""
    player = preset.build_player()
    lure = preset.lure or lure

    qualities: List[float] = []
    rarities: List[float] = []
    prices: List[float] = []
    jackpots = 0
    traits = 0
    for _ in range(max(0, samples)):
        data = factory.generate_fish_data(species, lure, player)
        qualities.append(data.quality_display)
        rarities.append(data.rarity_display)
        prices.append(data.price_euros)
        jackpots += data.jackpot
        traits += data.special_trait

    report = PresetReport(
        preset=preset.name,
        species_id=species.species_id,
        samples=len(prices),
        quality=Distribution.of(qualities),
        rarity=Distribution.of(rarities),
        price=Distribution.of(prices),
        jackpots=jackpots,
        special_traits=traits,
    )
    logger.info(report.summary_line())
    return report


def run_batch(
    species: FishSpeciesTemplate,
    presets: Sequence[PlayerPreset] = DEFAULT_PRESETS,
    samples: int = DEFAULT_SAMPLES_PER_PRESET,
    seed: Optional[int] = None,
    config: Optional[FactoryConfig] = None,
    lure: Optional[LureTemplate] = None,
) -> BatchReport:
    """Sample every preset from one seeded stream, in preset order."""
    factory = FishFactory(rng=RNGService(seed), config=config)
    batch = BatchReport(seed=seed)
    for preset in presets:
        batch.reports.append(sample_preset(factory, species, preset, samples, lure))
    logger.info("Batch tests completed.")
    return batch
