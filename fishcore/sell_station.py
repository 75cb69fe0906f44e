"""Sell station: a row of slots the player fills with fish before selling.

Pressing Sell sells the occupied slots in order, up to the sells remaining
this round, as one batch: the round is evaluated once after the last sale.
Sold fish go SOLD and then straight back to their pools.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from fishcore.config.session_config import SellConfig
from fishcore.events import EventBus, FishReturnedToPoolEvent
from fishcore.fish_pool import FishInstance
from fishcore.level_manager import LevelManager
from fishcore.result import Err, Ok, Result
from fishcore.state_machine import FishLifecycle

logger = logging.getLogger(__name__)

_SELLABLE = (FishLifecycle.HOOKED, FishLifecycle.RELEASED)


@dataclass
class SellReport:
    """Outcome of one sell press.

    Counts and totals are captured before the batch closes, so they still
    describe the sold round even when closing it auto-starts the next one.

    Attributes:
        sold_prices: Price of each fish sold, in slot order
        empty_sales: Zero-euro sales consumed by empty slots or an empty press
        round_money: Round money right after the last sale
        sells_this_round: Sells used right after the last sale
        round_outcome: True/False if the press ended the round won/failed
        rejected_reason: Why nothing was sold, if the press was refused
    """

    sold_prices: List[float] = field(default_factory=list)
    empty_sales: int = 0
    round_money: float = 0.0
    sells_this_round: int = 0
    round_outcome: Optional[bool] = None
    rejected_reason: Optional[str] = None

    @property
    def sold_count(self) -> int:
        return len(self.sold_prices)

    @property
    def accepted(self) -> bool:
        return self.rejected_reason is None


class SellStation:
    """Fixed-size row of sell slots wired to the round economy."""

    def __init__(
        self,
        level_manager: LevelManager,
        config: Optional[SellConfig] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.level_manager = level_manager
        self.config = config or SellConfig()
        self._slots: List[Optional[FishInstance]] = [None] * max(0, self.config.slot_count)
        self._event_bus = event_bus
        if event_bus is not None:
            event_bus.subscribe(FishReturnedToPoolEvent, self._on_fish_returned)

    @property
    def slots(self) -> List[Optional[FishInstance]]:
        return list(self._slots)

    def occupied_count(self) -> int:
        return sum(1 for slot in self._slots if slot is not None)

    def place(self, index: int, instance: FishInstance) -> Result[FishInstance, str]:
        """Put a caught fish into slot ``index``."""
        if not 0 <= index < len(self._slots):
            return Err(f"Sell slot {index} out of range")
        if self._slots[index] is not None:
            return Err(f"Sell slot {index} already holds {self._slots[index].label}")
        if instance.lifecycle not in _SELLABLE:
            return Err(f"{instance.label} is {instance.lifecycle.name}; only caught fish can be sold")
        if instance in self._slots:
            return Err(f"{instance.label} already sits in another slot")
        self._slots[index] = instance
        logger.debug(f"Placed {instance.label} in sell slot {index}")
        return Ok(instance)

    def remove(self, index: int) -> Optional[FishInstance]:
        if not 0 <= index < len(self._slots):
            return None
        instance = self._slots[index]
        self._slots[index] = None
        return instance

    def sell_all(self) -> SellReport:
        """Sell the occupied slots in order, up to the remaining sells."""
        levels = self.level_manager
        refusal = self._refusal()
        if refusal is not None:
            logger.info(f"SellAll refused: {refusal}")
            return SellReport(rejected_reason=refusal)

        report = SellReport()
        any_fish = False
        levels.begin_batch()
        try:
            for index in range(len(self._slots)):
                if levels.remaining_sells <= 0:
                    break
                instance = self._slots[index]
                if instance is None:
                    if self.config.empty_slot_consumes_sell:
                        levels.register_sale(0.0)
                        report.empty_sales += 1
                        logger.debug(f"Empty slot {index} consumed one sell attempt")
                    continue
                any_fish = True
                self._sell_instance(index, instance, report)

            if not any_fish and self.config.empty_press_consumes_one and levels.remaining_sells > 0:
                levels.register_sale(0.0)
                report.empty_sales += 1
                logger.debug("Empty press consumed one sell attempt")

            report.round_money = levels.round_money
            report.sells_this_round = levels.sells_this_round
        finally:
            report.round_outcome = levels.end_batch(evaluate=True)

        logger.info(
            f"SellAll finished. Sold this action={report.sold_count}/{levels.config.max_sells_per_round} "
            f"Round total (at end)={report.round_money:.2f}€"
        )
        return report

    def sell_slot(self, index: int) -> SellReport:
        """Sell a single slot with the same batch semantics as ``sell_all``."""
        if not 0 <= index < len(self._slots) or self._slots[index] is None:
            return SellReport(rejected_reason=f"Sell slot {index} is empty")
        refusal = self._refusal()
        if refusal is not None:
            logger.info(f"Sell of slot {index} refused: {refusal}")
            return SellReport(rejected_reason=refusal)

        levels = self.level_manager
        report = SellReport()
        levels.begin_batch()
        try:
            self._sell_instance(index, self._slots[index], report)
            report.round_money = levels.round_money
            report.sells_this_round = levels.sells_this_round
        finally:
            report.round_outcome = levels.end_batch(evaluate=True)
        return report

    # ------------------------------------------------------------------

    def _refusal(self) -> Optional[str]:
        levels = self.level_manager
        if not levels.round_active:
            return "Round is not active"
        if levels.remaining_sells <= 0:
            return "No sells remaining for this round"
        claim = levels.try_begin_sell_action()
        if claim.is_err():
            return claim.error
        return None

    def _sell_instance(self, index: int, instance: FishInstance, report: SellReport) -> None:
        price = instance.data.price_euros if instance.data is not None else 0.0
        result = self.level_manager.register_sale(price)
        if result.is_err():
            return
        report.sold_prices.append(price)
        self._slots[index] = None
        instance.advance(FishLifecycle.SOLD, reason=f"sold for {price:.2f}")
        instance.return_to_pool()
        logger.debug(f"Sold {instance.label} from slot {index} for {price:.2f}€")

    def _on_fish_returned(self, event: FishReturnedToPoolEvent) -> None:
        for index, instance in enumerate(self._slots):
            if (
                instance is not None
                and instance.instance_id == event.instance_id
                and instance.species_id == event.species_id
            ):
                self._slots[index] = None
