"""Tests for the sell station batch rules."""

import pytest

from fishcore.catch_socket import CatchSocket
from fishcore.config.session_config import LevelConfig, SellConfig
from fishcore.fish_factory import FishFactory
from fishcore.level_manager import LevelManager
from fishcore.player import PlayerProfile
from fishcore.sell_station import SellStation
from fishcore.state_machine import FishLifecycle


@pytest.fixture
def factory(rng, pools, event_bus):
    return FishFactory(rng=rng, pools=pools, event_bus=event_bus)


@pytest.fixture
def levels(pools, event_bus, rods, lures):
    config = LevelConfig(always_use_procedural=False, level_price_goals=(1000.0,), max_sells_per_round=3)
    manager = LevelManager(config, PlayerProfile(), pools, event_bus, rods, lures)
    manager.start_round()
    return manager


def _caught(factory, catalog, species_id="perch"):
    """A fish that went through the socket and was lifted out."""
    socket = CatchSocket("lure_socket")
    instance = factory.spawn_pending_fish(catalog.get(species_id), None, None)
    socket.offer(instance, 5.0)
    socket.accept(instance)
    socket.release_occupant()
    socket.close()
    return instance


class TestPlacement:
    def test_place_and_remove(self, levels, factory, catalog, event_bus) -> None:
        station = SellStation(levels, SellConfig(slot_count=2), event_bus)
        fish = _caught(factory, catalog)

        assert station.place(0, fish).is_ok()
        assert station.occupied_count() == 1
        assert station.place(0, _caught(factory, catalog)).is_err()
        assert station.place(1, fish).is_err()
        assert station.place(5, fish).is_err()

        assert station.remove(0) is fish
        assert station.slots == [None, None]

    def test_only_caught_fish_can_be_placed(self, levels, factory, catalog, event_bus) -> None:
        station = SellStation(levels, event_bus=event_bus)
        pending = factory.spawn_pending_fish(catalog.get("perch"), None, None)
        assert station.place(0, pending).is_err()

    def test_reclaimed_fish_leaves_slot(self, levels, factory, catalog, event_bus) -> None:
        station = SellStation(levels, event_bus=event_bus)
        fish = _caught(factory, catalog)
        station.place(2, fish)
        fish.return_to_pool()
        assert station.occupied_count() == 0


class TestSellAll:
    def test_sells_in_slot_order_up_to_cap(self, levels, factory, catalog, event_bus) -> None:
        station = SellStation(levels, SellConfig(slot_count=5), event_bus)
        fish = [_caught(factory, catalog) for _ in range(5)]
        for index, instance in enumerate(fish):
            station.place(index, instance)
        prices = [instance.data.price_euros for instance in fish[:3]]

        report = station.sell_all()

        assert report.accepted
        assert report.sold_prices == prices
        assert report.sells_this_round == 3
        assert report.round_outcome is False
        # The failed round reclaims the unsold fish as well.
        assert all(instance.is_pooled for instance in fish)
        assert station.occupied_count() == 0

    def test_sold_fish_return_to_pool_through_sold(self, levels, factory, catalog, event_bus) -> None:
        station = SellStation(levels, event_bus=event_bus)
        fish = _caught(factory, catalog)
        station.place(0, fish)
        transitions = []
        original_advance = fish.advance

        def recording_advance(stage, reason=""):
            transitions.append(stage)
            return original_advance(stage, reason)

        fish.advance = recording_advance
        report = station.sell_all()

        assert report.sold_count == 1
        assert transitions[0] is FishLifecycle.SOLD
        assert fish.is_pooled
        assert levels.round_money == report.round_money

    def test_second_press_refused(self, levels, factory, catalog, event_bus) -> None:
        station = SellStation(levels, event_bus=event_bus)
        station.place(0, _caught(factory, catalog))
        station.sell_all()
        station.place(0, _caught(factory, catalog))

        report = station.sell_all()

        assert not report.accepted
        assert report.sold_count == 0
        assert station.occupied_count() == 1

    def test_empty_press_sells_nothing_by_default(self, levels, event_bus) -> None:
        station = SellStation(levels, event_bus=event_bus)
        report = station.sell_all()
        assert report.accepted
        assert report.sold_count == 0
        assert report.empty_sales == 0
        assert levels.sells_this_round == 0
        assert levels.sell_action_used_this_round

    def test_empty_press_can_consume_one_sell(self, levels, event_bus) -> None:
        station = SellStation(levels, SellConfig(empty_press_consumes_one=True), event_bus)
        report = station.sell_all()
        assert report.empty_sales == 1
        assert levels.sells_this_round == 1

    def test_empty_slots_can_consume_sells(self, levels, factory, catalog, event_bus) -> None:
        station = SellStation(levels, SellConfig(slot_count=4, empty_slot_consumes_sell=True), event_bus)
        fish = _caught(factory, catalog)
        station.place(2, fish)

        report = station.sell_all()

        # Slots 0 and 1 are empty and burn two of the three sells.
        assert report.empty_sales == 2
        assert report.sold_count == 1
        assert report.sells_this_round == 3

    def test_refused_when_round_inactive(self, pools, event_bus) -> None:
        levels = LevelManager(LevelConfig(), pools=pools, event_bus=event_bus)
        report = SellStation(levels, event_bus=event_bus).sell_all()
        assert report.rejected_reason == "Round is not active"

    def test_winning_press_reports_sold_round(self, pools, factory, catalog, event_bus) -> None:
        config = LevelConfig(always_use_procedural=False, level_price_goals=(0.01,), max_sells_per_round=5)
        levels = LevelManager(config, PlayerProfile(), pools, event_bus)
        levels.start_round()
        station = SellStation(levels, event_bus=event_bus)
        fish = [_caught(factory, catalog, "salmon") for _ in range(2)]
        station.place(0, fish[0])
        station.place(1, fish[1])

        report = station.sell_all()

        assert report.round_outcome is True
        assert report.sold_count == 2
        assert report.round_money == pytest.approx(sum(report.sold_prices))
        assert levels.current_level == 2
        assert levels.round_money == 0.0


class TestSellSlot:
    def test_sell_single_slot(self, levels, factory, catalog, event_bus) -> None:
        station = SellStation(levels, event_bus=event_bus)
        fish = _caught(factory, catalog)
        station.place(1, fish)

        report = station.sell_slot(1)

        assert report.sold_count == 1
        assert fish.is_pooled
        assert levels.sells_this_round == 1

    def test_sell_empty_slot_rejected(self, levels, event_bus) -> None:
        station = SellStation(levels, event_bus=event_bus)
        assert not station.sell_slot(0).accepted
        assert not levels.sell_action_used_this_round
