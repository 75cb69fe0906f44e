"""Fight resolution for hooked fish.

When a socket accepts a fish the lure starts a short fight: the player's
effective strength is compared with the fish's strength through a logistic
curve and a single draw decides whether the fish is landed or escapes.

    success_probability = 1 / (1 + exp(-(player - fish) / balance_factor))

A larger ``balance_factor`` flattens the curve toward 50/50.
"""

import asyncio
import logging
import math
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, Tuple

from fishcore.config import catch as catch_cfg
from fishcore.config.session_config import CatchConfig
from fishcore.data import FishData, FishSpeciesTemplate, RodTemplate, SpeciesCatalog
from fishcore.events import (
    EventBus,
    FishEscapedEvent,
    FishHookedEvent,
    FishLandedEvent,
    FishOfferedEvent,
    FishReleasedEvent,
    OfferExpiredEvent,
)
from fishcore.math_utils import clamp01
from fishcore.player import PlayerProfile
from fishcore.state_machine import FishLifecycle, LureState, StateMachine, create_lure_state_machine
from fishcore.util.rng import RNGService, require_rng_param

if TYPE_CHECKING:
    from fishcore.catch_socket import CatchSocket
    from fishcore.fish_pool import FishInstance

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


def fish_strength(data: FishData, species: FishSpeciesTemplate) -> float:
    """Fish strength on a 0..10 scale from its relative size."""
    size_score = clamp01(data.size_cm / max(0.0001, species.size_max))
    return size_score * catch_cfg.FISH_STRENGTH_SCALE


def player_effective_strength(player: Optional[PlayerProfile], rod: Optional[RodTemplate]) -> float:
    """Player strength on the same scale, plus the rod's flat bonus.

    ``strength_norm`` already folds in the equipped rod's bonus, so the rod
    counts twice: once scaled, once flat.
    """
    strength_norm = player.strength_norm if player is not None else 0.0
    rod_bonus = rod.strength_bonus if rod is not None else 0.0
    return strength_norm * catch_cfg.PLAYER_STRENGTH_SCALE + rod_bonus


def success_probability(player_strength: float, fish_strength_value: float, balance_factor: float) -> float:
    x = (player_strength - fish_strength_value) / max(0.0001, balance_factor)
    # exp() only ever sees a non-positive argument, so it cannot overflow
    if x >= 0.0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


class CatchResolver:
    """Decides the outcome of a fight after a short suspense delay."""

    def __init__(
        self,
        rng: Optional[RNGService] = None,
        config: Optional[CatchConfig] = None,
        catalog: Optional[SpeciesCatalog] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.rng = require_rng_param(rng, "CatchResolver.__init__")
        self.config = config or CatchConfig()
        self.catalog = catalog or SpeciesCatalog()
        self._sleep = sleep
        self.last_probability: Optional[float] = None

    def probability_for(
        self,
        fish_data: FishData,
        species: FishSpeciesTemplate,
        player: Optional[PlayerProfile],
        rod: Optional[RodTemplate],
    ) -> float:
        return success_probability(
            player_effective_strength(player, rod),
            fish_strength(fish_data, species),
            self.config.balance_factor,
        )

    async def resolve(
        self,
        fish_data: Optional[FishData],
        player: Optional[PlayerProfile],
        rod: Optional[RodTemplate],
    ) -> bool:
        """Run one fight.

        Returns:
            True if the fish is landed. A fish whose species template cannot
            be found is landed immediately without a draw.
        """
        species = self.catalog.get(fish_data.species_id) if fish_data is not None else None
        if fish_data is None or species is None:
            logger.warning("Catch resolution skipped: no fish data or species template; counting as landed")
            self.last_probability = 1.0
            return True

        probability = self.probability_for(fish_data, species, player, rod)
        self.last_probability = probability
        await self._sleep(max(0.0, self.config.resolution_duration))

        success = self.rng.chance(probability)
        logger.info(
            f"Catch {'SUCCESS' if success else 'FAIL'}: {species.species_id} "
            f"p={probability:.3f} fish={fish_strength(fish_data, species):.2f} "
            f"player={player_effective_strength(player, rod):.2f}"
        )
        return success


class LureController:
    """Tracks the lure and runs the fight once a fish is hooked.

    Lure states follow the events on the bus: an offer makes the lure
    PENDING, acceptance makes it HOOKED, and an expiry, escape or release
    puts it back IN_WATER (or IDLE once the lure is out of the water).
    """

    def __init__(
        self,
        resolver: CatchResolver,
        socket: "CatchSocket",
        player: Optional[PlayerProfile],
        event_bus: EventBus,
        auto_resolve: bool = True,
    ) -> None:
        self.resolver = resolver
        self.socket = socket
        self.player = player
        self.auto_resolve = auto_resolve
        self._event_bus = event_bus
        self._sm: StateMachine[LureState] = create_lure_state_machine()
        self._in_water = False
        self._fight_task: Optional[asyncio.Task] = None
        # (instance, fish data) of the last fish landed on this line
        self._landed: Optional[Tuple["FishInstance", FishData]] = None

        event_bus.subscribe(FishOfferedEvent, self._on_offered)
        event_bus.subscribe(OfferExpiredEvent, self._on_offer_expired)
        event_bus.subscribe(FishHookedEvent, self._on_hooked)
        event_bus.subscribe(FishReleasedEvent, self._on_released)

    @property
    def state(self) -> LureState:
        return self._sm.state

    @property
    def in_water(self) -> bool:
        return self._in_water

    @property
    def fight_task(self) -> Optional[asyncio.Task]:
        return self._fight_task

    def set_in_water(self, in_water: bool) -> None:
        self._in_water = in_water
        if self._sm.state in (LureState.IDLE, LureState.IN_WATER):
            self._sm.transition(self._resting_state(), reason="water changed")

    async def fight(self, instance: "FishInstance") -> bool:
        """Resolve the fight for a hooked instance and apply the outcome.

        An instance that was sold or reclaimed while the fight was running is
        left alone; the outcome is still returned.
        """
        fish_data = instance.data
        rod = self.player.equipped_rod if self.player is not None else None
        success = await self.resolver.resolve(fish_data, self.player, rod)
        probability = self.resolver.last_probability or 0.0

        still_ours = instance.data is fish_data and instance.lifecycle in (
            FishLifecycle.HOOKED,
            FishLifecycle.RELEASED,
        )
        if not still_ours:
            logger.debug(f"Fight result for {instance.label} ignored; fish already left the line")
            return success

        if success:
            logger.info(f"Landed {instance.label}")
            self._landed = (instance, fish_data)
            self._event_bus.emit(FishLandedEvent(instance_id=instance.instance_id, probability=probability))
        else:
            logger.info(f"{instance.label} escaped; returning to pool")
            instance.return_to_pool()
            self._sm.transition(self._resting_state(), reason="fish escaped")
            self._event_bus.emit(FishEscapedEvent(instance_id=instance.instance_id, probability=probability))
        return success

    async def resolve_current(self) -> Optional[bool]:
        """Fight outcome for the socket's hooked fish.

        Awaits the running fight if there is one. A fish that has already been
        landed reports True again without a second draw.
        """
        task = self._fight_task
        if task is not None and not task.done():
            return await task
        occupant = self.socket.occupant
        if occupant is None:
            logger.warning("resolve_current: no hooked fish")
            return None
        if self._landed is not None and self._landed[0] is occupant and self._landed[1] is occupant.data:
            return True
        return await self.fight(occupant)

    def cancel(self) -> None:
        if self._fight_task is not None and not self._fight_task.done():
            self._fight_task.cancel()
        self._fight_task = None

    def close(self) -> None:
        self.cancel()
        self._event_bus.unsubscribe(FishOfferedEvent, self._on_offered)
        self._event_bus.unsubscribe(OfferExpiredEvent, self._on_offer_expired)
        self._event_bus.unsubscribe(FishHookedEvent, self._on_hooked)
        self._event_bus.unsubscribe(FishReleasedEvent, self._on_released)

    # ------------------------------------------------------------------

    def _resting_state(self) -> LureState:
        return LureState.IN_WATER if self._in_water else LureState.IDLE

    def _on_offered(self, event: FishOfferedEvent) -> None:
        if event.socket_id == self.socket.socket_id:
            self._sm.transition(LureState.PENDING, reason=f"offered {event.species_id}")

    def _on_offer_expired(self, event: OfferExpiredEvent) -> None:
        if event.socket_id == self.socket.socket_id:
            self._sm.transition(self._resting_state(), reason="offer expired")

    def _on_released(self, event: FishReleasedEvent) -> None:
        if event.socket_id == self.socket.socket_id:
            self._sm.transition(self._resting_state(), reason="fish lifted out")

    def _on_hooked(self, event: FishHookedEvent) -> None:
        if event.socket_id != self.socket.socket_id:
            return
        self._sm.transition(LureState.HOOKED, reason=f"hooked {event.species_id}")
        if not self.auto_resolve:
            return
        occupant = self.socket.occupant
        if occupant is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; fight waits for resolve_current()")
            return
        self._fight_task = loop.create_task(self._fight_guarded(occupant), name=f"fight_{occupant.label}")

    async def _fight_guarded(self, instance: "FishInstance") -> Optional[bool]:
        try:
            return await self.fight(instance)
        except asyncio.CancelledError:
            logger.info(f"Fight for {instance.label} cancelled")
            raise
        except Exception as e:
            logger.error(f"Error during fight for {instance.label}: {e}", exc_info=True)
            return None
