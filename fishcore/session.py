"""FishingSession: the single entry point presentation code talks to.

A session owns one RNG stream, one event bus and one of each component, all
wired together. Collaborators (water triggers, the line socket, sell buttons,
HUD panels) call the methods here and subscribe to ``session.event_bus``;
they never reach into the components directly.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Union

from fishcore.catch_resolution import CatchResolver, LureController
from fishcore.catch_socket import CatchSocket
from fishcore.config.session_config import SessionConfig
from fishcore.config.species import DEFAULT_LURES, DEFAULT_RODS, DEFAULT_SPECIES
from fishcore.data import LureTemplate, RodTemplate, SpeciesCatalog, lures_from_dicts, rods_from_dicts
from fishcore.events import EventBus
from fishcore.fish_factory import FishFactory
from fishcore.fish_pool import FishInstance, FishPoolRegistry
from fishcore.level_manager import LevelManager
from fishcore.player import PlayerProfile, StatType
from fishcore.result import Err, Ok, Result, UnitResult
from fishcore.sell_station import SellReport, SellStation
from fishcore.snapshots import FishStatsSnapshot, PlayerSnapshot, PoolStatsSnapshot, RoundSummarySnapshot
from fishcore.spawn_manager import SpawnManager
from fishcore.util.rng import RNGService

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class FishingSession:
    """One player's fishing run.

    Attributes:
        config: Session configuration
        rng: The only random source used by the session
        event_bus: Bus all domain events are published on
        catalog: Species that can bite
        player: The player's stats, gear and money
        pools: One pool per species
        socket: The line socket fish are offered to
        spawn_manager: Bite loop
        lure: Lure state and fight runner
        level_manager: Round economy
        sell_station: Sell slots
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        catalog: Optional[SpeciesCatalog] = None,
        rods: Optional[Dict[str, RodTemplate]] = None,
        lures: Optional[Dict[str, LureTemplate]] = None,
        player: Optional[PlayerProfile] = None,
        sleep: Sleep = asyncio.sleep,
        auto_resolve_fights: bool = True,
    ) -> None:
        self.config = config or SessionConfig()
        self.rng = RNGService(self.config.seed)
        self.event_bus = EventBus()
        self.catalog = catalog if catalog is not None else SpeciesCatalog.from_dicts(DEFAULT_SPECIES)
        self.rods = rods if rods is not None else rods_from_dicts(DEFAULT_RODS)
        self.lures = lures if lures is not None else lures_from_dicts(DEFAULT_LURES)

        self.player = player or PlayerProfile()
        self.player.attach_event_bus(self.event_bus)

        self.pools = FishPoolRegistry.for_catalog(
            self.catalog, self.config.spawn.pool_initial_size, self.event_bus
        )
        self.factory = FishFactory(self.rng, self.config.factory, self.pools, self.event_bus)
        self.socket = CatchSocket("lure_socket", self.event_bus, sleep=sleep)
        self.resolver = CatchResolver(self.rng, self.config.catch, self.catalog, sleep=sleep)
        self.lure = LureController(
            self.resolver, self.socket, self.player, self.event_bus, auto_resolve=auto_resolve_fights
        )
        self.spawn_manager = SpawnManager(
            self.rng,
            self.catalog,
            self.factory,
            self.socket,
            self.player,
            self.config.spawn,
            sleep=sleep,
        )
        self.level_manager = LevelManager(
            self.config.level, self.player, self.pools, self.event_bus, self.rods, self.lures
        )
        self.sell_station = SellStation(self.level_manager, self.config.sell, self.event_bus)

        self.level_manager.start_round()
        logger.info(f"Fishing session ready (seed={self.config.seed}, species={len(self.catalog)})")

    # ------------------------------------------------------------------
    # Lure and socket
    # ------------------------------------------------------------------

    def request_spawn_check(self, in_water: bool) -> None:
        """Water trigger report: the lure entered (True) or left (False) the water."""
        self.spawn_manager.request_spawn_check(in_water)
        self.lure.set_in_water(self.spawn_manager.in_water)

    def offer_to_socket(self, species_id: str) -> Result[FishInstance, str]:
        """Spawn a fish of ``species_id`` and offer it now, bypassing the bite roll."""
        species = self.catalog.get(species_id)
        if species is None:
            return Err(f"Unknown species {species_id}")
        instance = self.factory.spawn_pending_fish(
            species, self.player.equipped_lure, self.player, self.spawn_manager.spawn_position
        )
        if instance is None:
            return Err(f"Could not spawn {species_id}")
        result = self.socket.offer(instance, self.config.spawn.accept_timeout)
        if result.is_err():
            instance.return_to_pool()
        return result

    def accept_offer(self) -> Result[FishInstance, str]:
        return self.socket.accept_pending()

    def expire_offer(self) -> Result[FishInstance, str]:
        return self.socket.expire_offer()

    def release_hooked(self) -> Result[FishInstance, str]:
        return self.socket.release_occupant()

    async def resolve_fight(self) -> Optional[bool]:
        """Fight outcome for the hooked fish (None if nothing is hooked)."""
        return await self.lure.resolve_current()

    # ------------------------------------------------------------------
    # Economy
    # ------------------------------------------------------------------

    def register_sale(self, price_euros: float) -> Result[float, str]:
        return self.level_manager.register_sale(price_euros)

    def begin_batch(self) -> None:
        self.level_manager.begin_batch()

    def end_batch(self, evaluate: bool = True) -> Optional[bool]:
        return self.level_manager.end_batch(evaluate)

    def place_for_sale(self, index: int, instance: FishInstance) -> Result[FishInstance, str]:
        return self.sell_station.place(index, instance)

    def sell_all(self) -> SellReport:
        return self.sell_station.sell_all()

    def get_current_goal(self) -> float:
        return self.level_manager.current_goal()

    def buy_stat_upgrade(self, stat: Union[StatType, str], increment: int = 1, cost: float = 0.0) -> UnitResult:
        """Spend money on a stat point.

        Accepts a ``StatType`` or its name (e.g. ``"luck"``).
        """
        try:
            stat_type = stat if isinstance(stat, StatType) else StatType(str(stat).lower())
        except ValueError:
            return Err(f"Unknown stat {stat!r}")
        result = self.player.buy_stat_upgrade(stat_type, increment, cost)
        if result.is_err():
            return Err(result.error)
        return Ok(None)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def round_summary(self) -> RoundSummarySnapshot:
        return self.level_manager.round_summary()

    def player_snapshot(self) -> PlayerSnapshot:
        return PlayerSnapshot.from_player(self.player)

    def fish_snapshot(self, instance: FishInstance) -> Optional[FishStatsSnapshot]:
        if instance.data is None:
            return None
        return FishStatsSnapshot.from_fish_data(instance.data)

    def pool_stats(self) -> List[PoolStatsSnapshot]:
        return [PoolStatsSnapshot.from_pool(pool) for pool in self.pools]

    # ------------------------------------------------------------------

    async def shutdown(self) -> None:
        """Stop every timer the session owns."""
        await self.spawn_manager.shutdown()
        self.lure.set_in_water(False)
        self.lure.close()
        self.socket.close()
        logger.info("Fishing session shut down")
