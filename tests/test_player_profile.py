"""Tests for player stats, gear and money."""

import pytest

from fishcore.data import RodTemplate
from fishcore.events import GearChangedEvent, MoneyChangedEvent, StatChangedEvent
from fishcore.player import PlayerProfile, StatType


class TestStats:
    def test_stats_clamped_on_construction(self) -> None:
        player = PlayerProfile(fishing=150, strength=-3, luck=50, trading=100)
        assert (player.fishing, player.strength, player.luck, player.trading) == (100, 0, 50, 100)

    def test_normalized_bonuses_include_rod(self) -> None:
        player = PlayerProfile(fishing=40, strength=20, luck=70, trading=10)
        player.equip_rod(RodTemplate("carbon_rod", fishing_bonus=0.05, strength_bonus=0.1))
        assert player.fishing_norm == pytest.approx(0.45)
        assert player.strength_norm == pytest.approx(0.3)
        assert player.luck_norm == pytest.approx(0.7)
        assert player.trading_norm == pytest.approx(0.1)

    def test_increase_stat_clamps_and_emits(self, event_bus) -> None:
        changes = []
        event_bus.subscribe(StatChangedEvent, changes.append)
        player = PlayerProfile(luck=98, event_bus=event_bus)

        assert player.increase_stat(StatType.LUCK, 5) == 100
        assert changes == [StatChangedEvent(stat="luck", value=100)]


class TestMoney:
    def test_add_and_spend_round_to_cents(self) -> None:
        player = PlayerProfile()
        player.add_money(0.1)
        player.add_money(0.2)
        assert player.money == 0.3
        assert player.spend_money(0.25) is True
        assert player.money == 0.05

    def test_spend_more_than_balance_fails(self) -> None:
        player = PlayerProfile(money=1.0)
        assert player.spend_money(1.01) is False
        assert player.money == 1.0

    def test_money_events(self, event_bus) -> None:
        balances = []
        event_bus.subscribe(MoneyChangedEvent, balances.append)
        player = PlayerProfile(event_bus=event_bus)
        player.add_money(2.5)
        player.add_money(0.0)
        player.spend_money(1.0)
        assert [e.balance for e in balances] == [2.5, 1.5]

    def test_buy_stat_upgrade(self) -> None:
        player = PlayerProfile(money=3.0)
        assert player.buy_stat_upgrade(StatType.STRENGTH, 2, cost=2.0).unwrap() == 2
        assert player.money == 1.0

        result = player.buy_stat_upgrade(StatType.STRENGTH, 2, cost=2.0)
        assert result.is_err()
        assert player.strength == 2
        assert player.money == 1.0

    def test_free_upgrade(self) -> None:
        player = PlayerProfile()
        assert player.buy_stat_upgrade(StatType.TRADING).is_ok()
        assert player.trading == 1


class TestGear:
    def test_equip_tracks_ownership_and_emits(self, event_bus, rods, lures) -> None:
        gear = []
        event_bus.subscribe(GearChangedEvent, gear.append)
        player = PlayerProfile(event_bus=event_bus)

        player.equip_rod(rods["carbon_rod"])
        player.equip_lure(lures["spinner"])

        assert player.owned_rods == [rods["carbon_rod"]]
        assert gear[-1] == GearChangedEvent(rod_id="carbon_rod", lure_id="spinner")

    def test_can_equip_rod_checks_requirements(self, rods) -> None:
        carbon = rods["carbon_rod"]
        assert not PlayerProfile(fishing=10, strength=30).can_equip_rod(carbon)
        assert PlayerProfile(fishing=20, strength=15).can_equip_rod(carbon)

    def test_unequip_all_gear(self, rods) -> None:
        player = PlayerProfile()
        player.equip_rod(rods["starter_rod"])
        player.unequip_all_gear(keep_owned=False)
        assert player.equipped_rod is None
        assert player.owned_rods == []

    def test_reset_keeps_owned_gear(self, rods) -> None:
        player = PlayerProfile(fishing=10, strength=10, luck=10, trading=10, money=9.99)
        player.equip_rod(rods["carbon_rod"])

        player.reset_stats_and_money()

        assert [player.get_stat(stat) for stat in StatType] == [0, 0, 0, 0]
        assert player.money == 0.0
        assert player.equipped_rod is None
        assert player.owned_rods == [rods["carbon_rod"]]
