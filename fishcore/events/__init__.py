"""Events module for domain event dispatch.

This module provides the EventBus used for observer fan-out, plus typed
domain event definitions.
"""

from fishcore.events.domain_events import (
    FishEscapedEvent,
    FishHookedEvent,
    FishLandedEvent,
    FishOfferedEvent,
    FishReleasedEvent,
    FishReturnedToPoolEvent,
    FishSpawnedEvent,
    GearChangedEvent,
    MoneyChangedEvent,
    OfferExpiredEvent,
    RoundEndedEvent,
    RoundStartedEvent,
    SaleRegisteredEvent,
    StatChangedEvent,
)
from fishcore.events.event_bus import EventBus

__all__ = [
    "EventBus",
    "FishEscapedEvent",
    "FishHookedEvent",
    "FishLandedEvent",
    "FishOfferedEvent",
    "FishReleasedEvent",
    "FishReturnedToPoolEvent",
    "FishSpawnedEvent",
    "GearChangedEvent",
    "MoneyChangedEvent",
    "OfferExpiredEvent",
    "RoundEndedEvent",
    "RoundStartedEvent",
    "SaleRegisteredEvent",
    "StatChangedEvent",
]
