"""Round economy: per-level money goals, sell limits and round outcomes.

A round is active until either the money collected reaches the level goal
(won: the money is paid out and the level advances) or the sell attempts run
out first (failed: the run restarts from level 1 with a zeroed player). Both
outcomes reclaim every fish into its pool before the next round starts.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from fishcore.config.session_config import LevelConfig
from fishcore.data import LureTemplate, RodTemplate
from fishcore.events import EventBus, RoundEndedEvent, RoundStartedEvent, SaleRegisteredEvent
from fishcore.fish_pool import FishPoolRegistry
from fishcore.math_utils import round_cents
from fishcore.player import PlayerProfile
from fishcore.result import Err, Ok, Result, UnitResult
from fishcore.snapshots import RoundSummarySnapshot
from fishcore.state_machine import RoundPhase, StateMachine, create_round_state_machine

logger = logging.getLogger(__name__)


def compute_level_goal(level: int, base: float, growth: float, linear_add: float) -> float:
    """Money goal for ``level``: ``base * growth**(level-1) + linear_add*(level-1)``.

    Levels below 1 count as level 1. The result is rounded to cents.
    """
    level_index = max(1, level)
    exp_part = base * growth ** (level_index - 1)
    lin_part = linear_add * (level_index - 1)
    return round_cents(exp_part + lin_part)


class LevelManager:
    """Owns the round state and applies round outcomes to the player and pools.

    Attributes:
        config: Goal and round-end tuning
        current_level: Level being played (1-based)
        round_money: Money collected this round
        sells_this_round: Sales registered this round
    """

    def __init__(
        self,
        config: Optional[LevelConfig] = None,
        player: Optional[PlayerProfile] = None,
        pools: Optional[FishPoolRegistry] = None,
        event_bus: Optional[EventBus] = None,
        rods: Optional[Dict[str, RodTemplate]] = None,
        lures: Optional[Dict[str, LureTemplate]] = None,
    ) -> None:
        self.config = config or LevelConfig()
        self.player = player
        self.pools = pools
        self._event_bus = event_bus or EventBus()
        self._rods = rods or {}
        self._lures = lures or {}

        self.current_level = 1
        self.round_money = 0.0
        self.sells_this_round = 0
        self._round_active = False
        self._in_batch = False
        self._sell_action_used = False
        self._last_round_was_win = False
        self._phase: StateMachine[RoundPhase] = create_round_state_machine()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def round_active(self) -> bool:
        return self._round_active

    @property
    def in_batch(self) -> bool:
        return self._in_batch

    @property
    def phase(self) -> RoundPhase:
        return self._phase.state

    @property
    def phase_history(self):
        return self._phase.history

    @property
    def remaining_sells(self) -> int:
        return max(0, self.config.max_sells_per_round - self.sells_this_round)

    @property
    def last_round_was_win(self) -> bool:
        return self._last_round_was_win

    @property
    def sell_action_used_this_round(self) -> bool:
        return self._sell_action_used

    @property
    def starting_rod(self) -> Optional[RodTemplate]:
        return self._rods.get(self.config.starting_rod_id) if self.config.starting_rod_id else None

    @property
    def starting_lure(self) -> Optional[LureTemplate]:
        return self._lures.get(self.config.starting_lure_id) if self.config.starting_lure_id else None

    def current_goal(self) -> float:
        """Goal for the current level.

        The authored goal list is used only when procedural goals are turned
        off, and only for levels it covers.
        """
        cfg = self.config
        if not cfg.always_use_procedural and cfg.level_price_goals:
            idx = self.current_level - 1
            if 0 <= idx < len(cfg.level_price_goals):
                return round_cents(cfg.level_price_goals[idx])
        return compute_level_goal(
            self.current_level,
            cfg.procedural_base_goal,
            cfg.procedural_growth_factor,
            cfg.procedural_linear_add,
        )

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def start_round(self) -> None:
        if self._phase.state is not RoundPhase.ROUND_ACTIVE:
            self._phase.transition(RoundPhase.ROUND_ACTIVE, reason=f"start level {self.current_level}")
        self.round_money = 0.0
        self.sells_this_round = 0
        self._round_active = True
        self._in_batch = False
        self._sell_action_used = False

        if self.config.equip_starting_gear_at_round_start and self.player is not None:
            # Only fills empty slots; the player's own choice of gear is kept.
            if self.player.equipped_rod is None and self.starting_rod is not None:
                self.player.equip_rod(self.starting_rod)
            if self.player.equipped_lure is None and self.starting_lure is not None:
                self.player.equip_lure(self.starting_lure)

        goal = self.current_goal()
        logger.info(f"Starting level {self.current_level}. Goal={goal:.2f}€")
        self._event_bus.emit(RoundStartedEvent(level=self.current_level, goal=goal))

    def try_begin_sell_action(self) -> UnitResult:
        """Claim this round's sell action.

        With one-sell-per-round enabled, a second sell action in the same
        round is rejected no matter how many sells remain.
        """
        if not self._round_active:
            return Err("No active round")
        if self.config.one_sell_attempt_per_round and self._sell_action_used:
            logger.info("Sell action already used this round")
            return Err("Sell action already used this round")
        self._sell_action_used = True
        return Ok(None)

    def register_sale(self, price_euros: float) -> Result[float, str]:
        """Count one sale toward the round.

        Returns:
            Ok(round_money) after the sale, or Err if no round is active or
            no sells remain (nothing changes in that case)
        """
        if not self._round_active:
            logger.warning("Tried to register sale while round inactive.")
            return Err("No active round")
        if self.sells_this_round >= self.config.max_sells_per_round:
            logger.warning(f"Sale of {price_euros:.2f}€ rejected: no sells remaining")
            return Err("No sells remaining this round")

        self.sells_this_round += 1
        self.round_money = round_cents(self.round_money + max(0.0, price_euros))
        logger.info(
            f"Fish sold: {price_euros:.2f}€. Round total={self.round_money:.2f}€. "
            f"Sells {self.sells_this_round}/{self.config.max_sells_per_round}"
        )
        round_money = self.round_money
        self._event_bus.emit(
            SaleRegisteredEvent(
                price_euros=price_euros,
                round_money=round_money,
                sells_this_round=self.sells_this_round,
                max_sells_per_round=self.config.max_sells_per_round,
            )
        )

        if not self._in_batch:
            self.check_round_end()
        return Ok(round_money)

    def begin_batch(self) -> None:
        self._in_batch = True

    def end_batch(self, evaluate: bool = True) -> Optional[bool]:
        """Close the batch and, if asked, evaluate the round once.

        Returns:
            The round outcome if the evaluation ended the round, else None
        """
        self._in_batch = False
        if evaluate:
            return self.check_round_end()
        return None

    @contextmanager
    def batch(self, evaluate: bool = True) -> Iterator["LevelManager"]:
        """Bracket several sales so the round is evaluated once at the end."""
        self.begin_batch()
        try:
            yield self
        finally:
            self.end_batch(evaluate=evaluate)

    def check_round_end(self) -> Optional[bool]:
        """Apply the end conditions.

        Returns:
            True if the round was won, False if failed, None if still active
        """
        if not self._round_active:
            return None
        if self.round_money >= self.current_goal():
            self._end_round(True)
            return True
        if self.sells_this_round >= self.config.max_sells_per_round:
            self._end_round(False)
            return False
        return None

    def _end_round(self, success: bool) -> None:
        cfg = self.config
        level = self.current_level
        goal = self.current_goal()
        round_money = self.round_money
        sells_used = self.sells_this_round

        self._round_active = False
        self._last_round_was_win = success
        self._phase.transition(
            RoundPhase.ROUND_WON if success else RoundPhase.ROUND_FAILED,
            reason=f"{round_money:.2f}/{goal:.2f} after {sells_used} sells",
        )
        logger.info(f"Round ended. Success={success}. Total={round_money:.2f}€ Goal={goal:.2f}€")

        if success:
            if self.player is not None and round_money > 0:
                self.player.add_money(round_money)
            self.current_level += 1
        else:
            self.current_level = 1
            if self.player is not None:
                self.player.reset_stats_and_money()
                self.player.equip_rod(self.starting_rod)
                self.player.equip_lure(self.starting_lure)

        if self.pools is not None:
            if cfg.return_all_fish_on_round_end:
                self.pools.return_all()
            if cfg.refill_pools_on_round_end:
                self.pools.refill_all()

        self._event_bus.emit(
            RoundEndedEvent(level=level, won=success, round_money=round_money, goal=goal, sells_used=sells_used)
        )

        if cfg.auto_start_next_round:
            self.start_round()
        else:
            self.round_money = 0.0

    # ------------------------------------------------------------------
    # Summaries
    # ------------------------------------------------------------------

    def round_summary(self) -> RoundSummarySnapshot:
        return RoundSummarySnapshot(
            level=self.current_level,
            goal=self.current_goal(),
            round_money=self.round_money,
            sells_this_round=self.sells_this_round,
            max_sells_per_round=self.config.max_sells_per_round,
            remaining_sells=self.remaining_sells,
            round_active=self._round_active,
            last_round_was_win=self._last_round_was_win,
            phase=self._phase.state.name,
        )

    def summary_text(self) -> str:
        return (
            f"Level {self.current_level} - {self.round_money:.2f}€ / {self.current_goal():.2f}€ - "
            f"Sells {self.sells_this_round}/{self.config.max_sells_per_round}"
        )
