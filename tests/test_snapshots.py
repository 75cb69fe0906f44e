"""Tests for HUD snapshots and their JSON form."""

import orjson

from fishcore.data import FishData
from fishcore.player import PlayerProfile
from fishcore.snapshots import FishStatsSnapshot, PlayerSnapshot, PoolStatsSnapshot, RoundSummarySnapshot, to_json


def test_fish_snapshot_rounds_for_display() -> None:
    data = FishData(
        species_id="pike",
        size_cm=87.4321,
        age_years=6.049,
        quality_norm=0.61,
        rarity_norm=0.5,
        quality_display=6.4912,
        rarity_display=5.5,
        price_euros=3.17,
        tier_index=3,
        jackpot_multiplier=8.0,
    )
    snapshot = FishStatsSnapshot.from_fish_data(data)
    assert snapshot.size_cm == 87.4
    assert snapshot.age_years == 6.0
    assert snapshot.quality_display == 6.49
    assert snapshot.jackpot is True


def test_player_snapshot(rods, lures) -> None:
    player = PlayerProfile(fishing=3, money=4.5)
    player.equip_rod(rods["starter_rod"])
    player.equip_lure(lures["spinner"])
    snapshot = PlayerSnapshot.from_player(player)
    assert snapshot.equipped_rod_id == "starter_rod"
    assert snapshot.owned_lure_ids == ["spinner"]
    assert snapshot.money == 4.5


def test_pool_snapshot(perch_pool) -> None:
    perch_pool.acquire()
    snapshot = PoolStatsSnapshot.from_pool(perch_pool)
    assert (snapshot.pool_size, snapshot.active_count, snapshot.total_capacity) == (2, 1, 3)


def test_to_json_round_trips_fields() -> None:
    summary = RoundSummarySnapshot(
        level=2,
        goal=3.0,
        round_money=1.25,
        sells_this_round=1,
        max_sells_per_round=5,
        remaining_sells=4,
        round_active=True,
        last_round_was_win=True,
        phase="ROUND_ACTIVE",
    )
    payload = orjson.loads(to_json(summary))
    assert payload["level"] == 2
    assert payload["round_money"] == 1.25
    assert payload["phase"] == "ROUND_ACTIVE"
    assert RoundSummarySnapshot(**payload) == summary
