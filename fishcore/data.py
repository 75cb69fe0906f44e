"""Authored data and generated fish stats.

Species, rods and lures are designer-authored and read-only to the core.
``FishData`` is what the factory produces for one spawn: the stat tuple the
HUD renders and the sell station prices.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from fishcore.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FishSpeciesTemplate:
    """Per-species designer data.

    Attributes:
        species_id: Unique id used in code
        display_name: Name shown to players
        size_min: Smallest plausible size (cm), lower sampling bound
        size_max: Largest plausible size (cm); also drives the base price
        age_min: Youngest possible age (years)
        age_max: Oldest possible age (years)
        optimal_age: Age scored as best quality
        base_quality_norm: Species quality baseline (0..1)
        base_rarity_norm: Species rarity baseline (0..1)
        spawn_weight: Relative spawn weight; higher is more common
        price_scale: Per-species multiplier on the base price
    """

    species_id: str
    display_name: str = ""
    size_min: float = 5.0
    size_max: float = 100.0
    age_min: float = 0.0
    age_max: float = 10.0
    optimal_age: float = 2.0
    base_quality_norm: float = 0.5
    base_rarity_norm: float = 0.5
    spawn_weight: float = 1.0
    price_scale: float = 1.0


@dataclass(frozen=True)
class RodTemplate:
    """A fishing rod and the stat bonuses it grants while equipped."""

    rod_id: str
    display_name: str = ""
    min_fishing: int = 0
    min_strength: int = 0
    fishing_bonus: float = 0.0
    strength_bonus: float = 0.0


@dataclass(frozen=True)
class LureTemplate:
    """A lure; ``spawn_bias`` scales every species weight by ``1 + spawn_bias``."""

    lure_id: str
    display_name: str = ""
    spawn_bias: float = 0.0


@dataclass(frozen=True)
class FishData:
    """Generated stats for one spawned fish.

    Frozen: the price of a spawn never changes once computed.
    """

    species_id: str
    size_cm: float
    age_years: float
    quality_norm: float
    rarity_norm: float
    quality_display: float
    rarity_display: float
    price_euros: float
    special_trait: bool = False
    tier_index: int = 0
    jackpot_multiplier: float = 1.0

    @property
    def jackpot(self) -> bool:
        return self.jackpot_multiplier != 1.0


def _build(cls: type, raw: Mapping[str, Any], key: str) -> Any:
    known = {f.name for f in fields(cls)}
    unknown = set(raw) - known
    if unknown:
        raise ConfigurationError(f"{cls.__name__} has unknown fields: {sorted(unknown)}")
    if not raw.get(key):
        raise ConfigurationError(f"{cls.__name__} entry is missing '{key}'")
    try:
        return cls(**raw)
    except TypeError as e:
        raise ConfigurationError(f"Invalid {cls.__name__} entry {raw!r}: {e}") from e


class SpeciesCatalog:
    """Ordered, id-indexed collection of species templates.

    Lookups of unknown ids return None and log; the core treats a missing
    template as a configuration error that degrades to a no-op.
    """

    def __init__(self, species: Iterable[FishSpeciesTemplate] = ()) -> None:
        self._species: Dict[str, FishSpeciesTemplate] = {}
        for template in species:
            self.add(template)

    @classmethod
    def from_dicts(cls, entries: Iterable[Mapping[str, Any]]) -> "SpeciesCatalog":
        """Build a catalog from plain dicts (e.g. a parsed JSON file).

        Raises:
            ConfigurationError: If an entry has unknown fields, no id, or
                a size/age range that is inverted
        """
        catalog = cls()
        for raw in entries:
            template = _build(FishSpeciesTemplate, raw, "species_id")
            if template.size_min > template.size_max:
                raise ConfigurationError(
                    f"Species {template.species_id}: size_min {template.size_min} > size_max {template.size_max}"
                )
            if template.age_min > template.age_max:
                raise ConfigurationError(
                    f"Species {template.species_id}: age_min {template.age_min} > age_max {template.age_max}"
                )
            catalog.add(template)
        return catalog

    def add(self, template: FishSpeciesTemplate) -> None:
        if template.species_id in self._species:
            logger.warning(f"Replacing species template {template.species_id}")
        self._species[template.species_id] = template

    def get(self, species_id: Optional[str]) -> Optional[FishSpeciesTemplate]:
        if species_id is None:
            return None
        template = self._species.get(species_id)
        if template is None:
            logger.warning(f"Unknown species template: {species_id}")
        return template

    def __contains__(self, species_id: object) -> bool:
        return species_id in self._species

    def __iter__(self) -> Iterator[FishSpeciesTemplate]:
        return iter(self._species.values())

    def __len__(self) -> int:
        return len(self._species)

    def species_ids(self) -> List[str]:
        return list(self._species)


def rods_from_dicts(entries: Iterable[Mapping[str, Any]]) -> Dict[str, RodTemplate]:
    return {rod.rod_id: rod for rod in (_build(RodTemplate, raw, "rod_id") for raw in entries)}


def lures_from_dicts(entries: Iterable[Mapping[str, Any]]) -> Dict[str, LureTemplate]:
    return {lure.lure_id: lure for lure in (_build(LureTemplate, raw, "lure_id") for raw in entries)}
