"""Pytest configuration and fixtures for fishing core tests."""

import asyncio

import pytest

from fishcore.config.session_config import SessionConfig
from fishcore.config.species import DEFAULT_LURES, DEFAULT_RODS, DEFAULT_SPECIES
from fishcore.data import FishSpeciesTemplate, SpeciesCatalog, lures_from_dicts, rods_from_dicts
from fishcore.events import EventBus
from fishcore.fish_pool import FishPool, FishPoolRegistry
from fishcore.session import FishingSession
from fishcore.util.rng import RNGService


@pytest.fixture
def rng():
    """Provide a deterministic RNG service for tests."""
    return RNGService(42)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def catalog():
    return SpeciesCatalog.from_dicts(DEFAULT_SPECIES)


@pytest.fixture
def rods():
    return rods_from_dicts(DEFAULT_RODS)


@pytest.fixture
def lures():
    return lures_from_dicts(DEFAULT_LURES)


@pytest.fixture
def perch():
    """The small species used by the golden-value tests."""
    return FishSpeciesTemplate(
        species_id="perch",
        display_name="Perch",
        size_min=10.0,
        size_max=50.0,
        age_min=1.0,
        age_max=12.0,
        optimal_age=4.0,
        base_quality_norm=0.4,
        base_rarity_norm=0.2,
        spawn_weight=6.0,
        price_scale=1.0,
    )


@pytest.fixture
def perch_pool(perch, event_bus):
    return FishPool(perch, initial_size=3, event_bus=event_bus)


@pytest.fixture
def pools(catalog, event_bus):
    return FishPoolRegistry.for_catalog(catalog, initial_size=2, event_bus=event_bus)


async def instant_sleep(_seconds: float) -> None:
    """Sleep replacement that only yields to the loop once."""
    await asyncio.sleep(0)


@pytest.fixture
def fast_sleep():
    return instant_sleep


@pytest.fixture
def session():
    """A wired session on a fixed seed; no timers are started."""
    return FishingSession(SessionConfig(seed=1))
