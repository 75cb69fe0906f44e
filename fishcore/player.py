"""Player profile: stats, gear and money.

Stats are integers in [0, 100]; the generation and fight formulas consume
them as normalized bonuses (stat * 0.01, plus the equipped rod's bonus for
fishing and strength). Money is held in euros rounded to cents on every
change.
"""

import logging
from enum import Enum
from typing import List, Optional

from fishcore.config.economy import STAT_MAX, STAT_MIN, STAT_NORM_SCALE
from fishcore.data import LureTemplate, RodTemplate
from fishcore.events import EventBus, GearChangedEvent, MoneyChangedEvent, StatChangedEvent
from fishcore.math_utils import round_cents
from fishcore.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class StatType(Enum):
    FISHING = "fishing"
    STRENGTH = "strength"
    LUCK = "luck"
    TRADING = "trading"


class PlayerProfile:
    """Persistent player stats and equipped gear for one session.

    Attributes:
        fishing: Fishing stat (0..100); raises quality
        strength: Strength stat (0..100); raises size and fight odds
        luck: Luck stat (0..100); raises rarity, traits, spawns and jackpots
        trading: Trading stat (0..100); raises sale price
        equipped_rod: Rod currently equipped, if any
        equipped_lure: Lure currently equipped, if any
        money: Balance in euros
    """

    def __init__(
        self,
        fishing: int = 0,
        strength: int = 0,
        luck: int = 0,
        trading: int = 0,
        money: float = 0.0,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.fishing = _clamp_stat(fishing)
        self.strength = _clamp_stat(strength)
        self.luck = _clamp_stat(luck)
        self.trading = _clamp_stat(trading)
        self.money = round_cents(money)
        self.equipped_rod: Optional[RodTemplate] = None
        self.equipped_lure: Optional[LureTemplate] = None
        self.owned_rods: List[RodTemplate] = []
        self.owned_lures: List[LureTemplate] = []
        self._event_bus = event_bus

    # ------------------------------------------------------------------
    # Normalized bonuses (0..1 plus gear)
    # ------------------------------------------------------------------

    @property
    def fishing_norm(self) -> float:
        rod_bonus = self.equipped_rod.fishing_bonus if self.equipped_rod else 0.0
        return self.fishing * STAT_NORM_SCALE + rod_bonus

    @property
    def strength_norm(self) -> float:
        rod_bonus = self.equipped_rod.strength_bonus if self.equipped_rod else 0.0
        return self.strength * STAT_NORM_SCALE + rod_bonus

    @property
    def luck_norm(self) -> float:
        return self.luck * STAT_NORM_SCALE

    @property
    def trading_norm(self) -> float:
        return self.trading * STAT_NORM_SCALE

    def get_stat(self, stat: StatType) -> int:
        return getattr(self, stat.value)

    # ------------------------------------------------------------------
    # Gear
    # ------------------------------------------------------------------

    def add_owned_rod(self, rod: Optional[RodTemplate]) -> None:
        if rod is not None and rod not in self.owned_rods:
            self.owned_rods.append(rod)

    def add_owned_lure(self, lure: Optional[LureTemplate]) -> None:
        if lure is not None and lure not in self.owned_lures:
            self.owned_lures.append(lure)

    def can_equip_rod(self, rod: RodTemplate) -> bool:
        """Whether the player meets the rod's stat requirements."""
        return self.fishing >= rod.min_fishing and self.strength >= rod.min_strength

    def equip_rod(self, rod: Optional[RodTemplate]) -> None:
        self.equipped_rod = rod
        self.add_owned_rod(rod)
        logger.info(f"Equipped rod: {rod.display_name if rod else 'none'}")
        self._emit_gear_changed()

    def equip_lure(self, lure: Optional[LureTemplate]) -> None:
        self.equipped_lure = lure
        self.add_owned_lure(lure)
        logger.info(f"Equipped lure: {lure.display_name if lure else 'none'}")
        self._emit_gear_changed()

    def unequip_all_gear(self, keep_owned: bool = True) -> None:
        self.equipped_rod = None
        self.equipped_lure = None
        if not keep_owned:
            self.owned_rods.clear()
            self.owned_lures.clear()
        logger.info("Unequipped all gear")
        self._emit_gear_changed()

    # ------------------------------------------------------------------
    # Money
    # ------------------------------------------------------------------

    def add_money(self, euros: float) -> None:
        if euros == 0:
            return
        self.money = round_cents(self.money + euros)
        logger.info(f"Added money: {euros:.2f}€. New balance: {self.money:.2f}€")
        self._emit_money_changed()

    def spend_money(self, euros: float) -> bool:
        """Try to spend ``euros``.

        Returns:
            True if the balance covered it (and was reduced), False otherwise
        """
        euros = max(0.0, round_cents(euros))
        if self.money + 1e-6 < euros:
            logger.info(f"Not enough money to spend {euros:.2f}€ (balance {self.money:.2f}€)")
            return False
        self.money = round_cents(self.money - euros)
        logger.info(f"Spent {euros:.2f}€. New balance: {self.money:.2f}€")
        self._emit_money_changed()
        return True

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def increase_stat(self, stat: StatType, delta: int = 1) -> int:
        """Add ``delta`` to a stat, clamped to [0, 100]. Returns the new value."""
        value = _clamp_stat(self.get_stat(stat) + delta)
        setattr(self, stat.value, value)
        logger.info(f"{stat.value} -> {value}")
        if self._event_bus is not None:
            self._event_bus.emit(StatChangedEvent(stat=stat.value, value=value))
        return value

    def buy_stat_upgrade(self, stat: StatType, increment: int = 1, cost: float = 0.0) -> Result[int, str]:
        """Spend ``cost`` and raise ``stat`` by ``increment``.

        Free when ``cost`` is zero. Nothing changes if the balance is short.
        """
        if cost > 0 and not self.spend_money(cost):
            return Err(f"Not enough money for {stat.value} upgrade costing {cost:.2f}€")
        return Ok(self.increase_stat(stat, increment))

    def reset_stats_and_money(self) -> None:
        """Zero stats and money and unequip gear; owned gear is kept."""
        self.fishing = 0
        self.strength = 0
        self.luck = 0
        self.trading = 0
        self.money = 0.0
        self.equipped_rod = None
        self.equipped_lure = None
        logger.info("Reset stats and money due to run failure")
        self._emit_money_changed()
        self._emit_gear_changed()

    def attach_event_bus(self, event_bus: Optional[EventBus]) -> None:
        self._event_bus = event_bus

    # ------------------------------------------------------------------

    def _emit_money_changed(self) -> None:
        if self._event_bus is not None:
            self._event_bus.emit(MoneyChangedEvent(balance=self.money))

    def _emit_gear_changed(self) -> None:
        if self._event_bus is not None:
            self._event_bus.emit(
                GearChangedEvent(
                    rod_id=self.equipped_rod.rod_id if self.equipped_rod else None,
                    lure_id=self.equipped_lure.lure_id if self.equipped_lure else None,
                )
            )

    def __repr__(self) -> str:
        return (
            f"PlayerProfile(fishing={self.fishing}, strength={self.strength}, "
            f"luck={self.luck}, trading={self.trading}, money={self.money:.2f})"
        )


def _clamp_stat(value: int) -> int:
    return max(STAT_MIN, min(STAT_MAX, int(value)))
