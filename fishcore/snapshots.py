"""Read-only snapshots for HUD and debug collaborators.

The core never hands its live objects to presentation code; these pydantic
models are what a stats panel, round HUD or debug overlay renders.
"""

from typing import TYPE_CHECKING, List, Optional

import orjson
from pydantic import BaseModel

if TYPE_CHECKING:
    from fishcore.data import FishData
    from fishcore.fish_pool import FishPool
    from fishcore.player import PlayerProfile


class FishStatsSnapshot(BaseModel):
    """What the fish stats panel shows for one fish."""

    species_id: str
    size_cm: float
    age_years: float
    quality_display: float
    rarity_display: float
    price_euros: float
    special_trait: bool = False
    tier_index: int = 0
    jackpot: bool = False
    jackpot_multiplier: float = 1.0

    @classmethod
    def from_fish_data(cls, data: "FishData") -> "FishStatsSnapshot":
        return cls(
            species_id=data.species_id,
            size_cm=round(data.size_cm, 1),
            age_years=round(data.age_years, 1),
            quality_display=round(data.quality_display, 2),
            rarity_display=round(data.rarity_display, 2),
            price_euros=data.price_euros,
            special_trait=data.special_trait,
            tier_index=data.tier_index,
            jackpot=data.jackpot,
            jackpot_multiplier=data.jackpot_multiplier,
        )


class RoundSummarySnapshot(BaseModel):
    """Round HUD payload."""

    level: int
    goal: float
    round_money: float
    sells_this_round: int
    max_sells_per_round: int
    remaining_sells: int
    round_active: bool
    last_round_was_win: bool
    phase: str


class PlayerSnapshot(BaseModel):
    fishing: int
    strength: int
    luck: int
    trading: int
    money: float
    equipped_rod_id: Optional[str] = None
    equipped_lure_id: Optional[str] = None
    owned_rod_ids: List[str] = []
    owned_lure_ids: List[str] = []

    @classmethod
    def from_player(cls, player: "PlayerProfile") -> "PlayerSnapshot":
        return cls(
            fishing=player.fishing,
            strength=player.strength,
            luck=player.luck,
            trading=player.trading,
            money=player.money,
            equipped_rod_id=player.equipped_rod.rod_id if player.equipped_rod else None,
            equipped_lure_id=player.equipped_lure.lure_id if player.equipped_lure else None,
            owned_rod_ids=[rod.rod_id for rod in player.owned_rods],
            owned_lure_ids=[lure.lure_id for lure in player.owned_lures],
        )


class PoolStatsSnapshot(BaseModel):
    species_id: str
    pool_size: int
    active_count: int
    total_capacity: int

    @classmethod
    def from_pool(cls, pool: "FishPool") -> "PoolStatsSnapshot":
        return cls(**pool.get_stats())


def to_json(model: BaseModel) -> str:
    """Serialize a snapshot to a JSON string."""
    return orjson.dumps(model.model_dump()).decode("utf-8")
