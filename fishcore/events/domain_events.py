"""Domain event definitions for the fishing core.

Events are facts: frozen dataclasses that carry everything a subscriber
needs, so presentation collaborators never reach back into core state while
handling them. Each event is emitted once per transition it describes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FishSpawnedEvent:
    """A bite produced a pending fish.

    Attributes:
        instance_id: Pool slot id of the spawned fish
        species_id: Species of the fish
        price_euros: Computed sale price
        jackpot: Whether the jackpot multiplier fired
    """

    instance_id: int
    species_id: str
    price_euros: float
    jackpot: bool


@dataclass(frozen=True)
class FishOfferedEvent:
    """A socket took a pending fish and started its acceptance countdown."""

    socket_id: str
    instance_id: int
    species_id: str


@dataclass(frozen=True)
class OfferExpiredEvent:
    """A pending offer timed out before acceptance."""

    socket_id: str
    instance_id: int


@dataclass(frozen=True)
class FishHookedEvent:
    """A socket accepted its pending fish.

    Carries the fight-resolution inputs so the lure controller can start the
    fight without looking anything up.

    Attributes:
        socket_id: Socket that accepted the fish
        instance_id: Pool slot id of the hooked fish
        species_id: Species of the hooked fish
        fish_strength: ``(size / size_max) * 10``, or None if the species is unknown
    """

    socket_id: str
    instance_id: int
    species_id: str
    fish_strength: Optional[float]


@dataclass(frozen=True)
class FishReleasedEvent:
    """The hooked fish was lifted out of its socket by the player."""

    socket_id: str
    instance_id: int


@dataclass(frozen=True)
class FishLandedEvent:
    """A fight resolved in the player's favour; the fish stays hooked."""

    instance_id: int
    probability: float


@dataclass(frozen=True)
class FishEscapedEvent:
    """A fight was lost; the fish went back to its pool."""

    instance_id: int
    probability: float


@dataclass(frozen=True)
class FishReturnedToPoolEvent:
    """A pool reclaimed an instance (timeout, escape, sale or round reset)."""

    species_id: str
    instance_id: int


@dataclass(frozen=True)
class SaleRegisteredEvent:
    """A sale was counted toward the current round."""

    price_euros: float
    round_money: float
    sells_this_round: int
    max_sells_per_round: int


@dataclass(frozen=True)
class RoundStartedEvent:
    level: int
    goal: float


@dataclass(frozen=True)
class RoundEndedEvent:
    """A round finished.

    Attributes:
        level: Level the round was played at
        won: True for RoundWon, False for RoundFailed
        round_money: Money collected during the round
        goal: Goal the round was measured against
        sells_used: Sell attempts consumed
    """

    level: int
    won: bool
    round_money: float
    goal: float
    sells_used: int


@dataclass(frozen=True)
class MoneyChangedEvent:
    balance: float


@dataclass(frozen=True)
class GearChangedEvent:
    rod_id: Optional[str]
    lure_id: Optional[str]


@dataclass(frozen=True)
class StatChangedEvent:
    stat: str
    value: int
