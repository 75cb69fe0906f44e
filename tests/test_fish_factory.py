"""Tests for fish generation and pricing."""

import pytest

from fishcore.config.session_config import FactoryConfig
from fishcore.data import FishSpeciesTemplate
from fishcore.events import FishSpawnedEvent
from fishcore.fish_factory import FishFactory, to_display
from fishcore.fish_pool import FishPoolRegistry
from fishcore.math_utils import Vector3, round_cents
from fishcore.player import PlayerProfile
from fishcore.state_machine import FishLifecycle
from fishcore.util.rng import MissingRNGError, RNGService


class TestGoldenSeed:
    def test_seed_12345_zero_stat_player(self, perch) -> None:
        """Scenario: seed 12345, 10..50 cm species, all stats zero."""
        factory = FishFactory(rng=RNGService(12345))
        data = factory.generate_fish_data(perch, None, PlayerProfile())

        assert data.size_cm == pytest.approx(34.502827929599611)
        assert data.age_years == pytest.approx(10.077271601791175)
        assert data.quality_norm == pytest.approx(0.4985936613216172)
        assert data.rarity_norm == pytest.approx(0.39602262343679689)
        assert data.quality_display == pytest.approx(5.4873429518945551)
        assert data.rarity_display == pytest.approx(4.5642036109311714)
        assert data.special_trait is False
        # Tier 2 sits below the jackpot threshold, so no jackpot draw is taken.
        assert data.tier_index == 2
        assert data.jackpot_multiplier == 1.0
        assert data.price_euros == 0.24
        assert factory.rng.value() == pytest.approx(0.36841168948847569)

    def test_seed_12345_is_stable_across_runs(self, perch) -> None:
        first = FishFactory(rng=RNGService(12345)).generate_fish_data(perch, None, None)
        second = FishFactory(rng=RNGService(12345)).generate_fish_data(perch, None, None)
        assert first == second


class TestDeterminism:
    def test_same_seed_same_sequence(self, catalog) -> None:
        player = PlayerProfile(fishing=40, strength=30, luck=50, trading=20)
        a = FishFactory(rng=RNGService(777))
        b = FishFactory(rng=RNGService(777))
        for species in catalog:
            for _ in range(25):
                assert a.generate_fish_data(species, None, player) == b.generate_fish_data(species, None, player)


class TestPricing:
    def test_price_non_negative_with_two_decimals(self, catalog) -> None:
        factory = FishFactory(rng=RNGService(5))
        player = PlayerProfile(fishing=100, strength=100, luck=100, trading=100)
        for species in catalog:
            for _ in range(300):
                price = factory.generate_fish_data(species, None, player).price_euros
                assert price >= 0.0
                assert round(price, 2) == pytest.approx(price)

    def test_display_values_within_one_to_ten(self, catalog) -> None:
        factory = FishFactory(rng=RNGService(6))
        for player in (PlayerProfile(), PlayerProfile(100, 100, 100, 100)):
            for species in catalog:
                for _ in range(200):
                    data = factory.generate_fish_data(species, None, player)
                    assert 1.0 <= data.quality_display <= 10.0
                    assert 1.0 <= data.rarity_display <= 10.0

    def test_size_stays_within_species_range(self, catalog) -> None:
        factory = FishFactory(rng=RNGService(9))
        strong = PlayerProfile(strength=100)
        for species in catalog:
            for _ in range(200):
                size = factory.generate_fish_data(species, None, strong).size_cm
                assert species.size_min <= size <= species.size_max

    def test_trading_raises_price(self, perch) -> None:
        plain = FishFactory(rng=RNGService(3), config=FactoryConfig(base_jackpot_chance=0.0))
        trader = FishFactory(rng=RNGService(3), config=FactoryConfig(base_jackpot_chance=0.0))
        base = plain.generate_fish_data(perch, None, PlayerProfile())
        boosted = trader.generate_fish_data(perch, None, PlayerProfile(trading=100))
        assert boosted.size_cm == base.size_cm
        assert boosted.price_euros == pytest.approx(round_cents(base.price_euros * 1.5), abs=0.011)

    def test_to_display(self) -> None:
        assert to_display(0.0) == 1.0
        assert to_display(1.0) == 10.0
        assert to_display(2.0) == 10.0
        assert to_display(-1.0) == 1.0


class TestJackpot:
    def test_disabled_jackpot_never_fires(self, perch) -> None:
        """Scenario: base chance 0 and zero luck over 10,000 fish."""
        factory = FishFactory(rng=RNGService(2024), config=FactoryConfig(base_jackpot_chance=0.0))
        player = PlayerProfile()
        for _ in range(10_000):
            assert factory.generate_fish_data(perch, None, player).jackpot_multiplier == 1.0

    @pytest.fixture
    def trophy(self) -> FishSpeciesTemplate:
        # Fixed max size and optimal age: always the top tier.
        return FishSpeciesTemplate(
            species_id="trophy",
            size_min=50.0,
            size_max=50.0,
            age_min=3.0,
            age_max=3.0,
            optimal_age=3.0,
        )

    def test_certain_jackpot_uses_table(self, trophy) -> None:
        factory = FishFactory(rng=RNGService(1), config=FactoryConfig(base_jackpot_chance=1.0))
        seen = set()
        for _ in range(500):
            data = factory.generate_fish_data(trophy, None, None)
            assert data.tier_index == 4
            assert data.jackpot
            seen.add(data.jackpot_multiplier)
        assert seen <= {3.0, 8.0, 20.0, 50.0}
        assert 3.0 in seen

    def test_jackpot_scales_price(self, trophy) -> None:
        factory = FishFactory(rng=RNGService(4), config=FactoryConfig(base_jackpot_chance=1.0))
        data = factory.generate_fish_data(trophy, None, None)
        qr = factory.quality_rarity_multiplier(data.quality_norm, data.rarity_norm)
        expected = round_cents(0.5 * 6.0 * qr * data.jackpot_multiplier)
        assert data.price_euros == pytest.approx(expected)

    def test_misconfigured_table_falls_back_to_flat_multiplier(self, trophy) -> None:
        config = FactoryConfig(base_jackpot_chance=1.0, jackpot_weights=(1.0,))
        factory = FishFactory(rng=RNGService(4), config=config)
        assert factory.generate_fish_data(trophy, None, None).jackpot_multiplier == 5.0

    def test_low_tier_never_rolls(self) -> None:
        tiny = FishSpeciesTemplate(species_id="tiny", size_min=1.0, size_max=100.0, age_min=30.0, age_max=30.0)
        factory = FishFactory(rng=RNGService(4), config=FactoryConfig(base_jackpot_chance=1.0))
        for _ in range(200):
            data = factory.generate_fish_data(tiny, None, None)
            if data.tier_index < 3:
                assert data.jackpot_multiplier == 1.0


class TestSpawnPendingFish:
    def test_spawn_marks_pending_and_emits(self, catalog, event_bus) -> None:
        pools = FishPoolRegistry.for_catalog(catalog, initial_size=1, event_bus=event_bus)
        factory = FishFactory(rng=RNGService(1), pools=pools, event_bus=event_bus)
        spawned = []
        event_bus.subscribe(FishSpawnedEvent, spawned.append)

        instance = factory.spawn_pending_fish(catalog.get("pike"), None, PlayerProfile(), Vector3(1.0, 0.0, 2.0))

        assert instance is not None
        assert instance.lifecycle is FishLifecycle.PENDING
        assert instance.inert and not instance.interactive and not instance.throw_on_detach
        assert instance.position == Vector3(1.0, 0.02, 2.0)
        assert instance.data.species_id == "pike"
        assert len(spawned) == 1
        assert spawned[0].instance_id == instance.instance_id
        assert spawned[0].price_euros == instance.data.price_euros

    def test_missing_species_or_pool_returns_none(self, perch) -> None:
        factory = FishFactory(rng=RNGService(1), pools=FishPoolRegistry())
        assert factory.spawn_pending_fish(None, None, None) is None
        assert factory.spawn_pending_fish(perch, None, None) is None

    def test_requires_rng(self) -> None:
        with pytest.raises(MissingRNGError):
            FishFactory(rng=None)
