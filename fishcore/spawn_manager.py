"""Bite loop: decides when and which fish bites while the lure is in water.

The loop runs as one asyncio task that exists only while at least one water
trigger reports the lure as submerged. Leaving the water cancels the task at
its current suspension point, so no bite is rolled after the exit.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from fishcore.catch_socket import CatchSocket
from fishcore.config import spawning as spawning_cfg
from fishcore.config.session_config import SpawnConfig
from fishcore.data import SpeciesCatalog
from fishcore.fish_factory import FishFactory
from fishcore.fish_pool import FishInstance
from fishcore.math_utils import Vector3
from fishcore.player import PlayerProfile
from fishcore.util.rng import RNGService, require_rng_param

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class SpawnManager:
    """Reference-counted bite loop feeding pending fish to a socket.

    Attributes:
        catalog: Species that can bite, in weight order
        factory: Builds pending fish
        socket: Receives offers; its busy state pauses rolling
        player: Source of luck and the equipped lure
        spawn_position: Socket position handed to the factory
        checks: Bite checks completed since the loop last started
        bites: Successful bite rolls since the loop last started
        spawned: Fish offered since the loop last started
    """

    def __init__(
        self,
        rng: Optional[RNGService],
        catalog: SpeciesCatalog,
        factory: FishFactory,
        socket: CatchSocket,
        player: Optional[PlayerProfile] = None,
        config: Optional[SpawnConfig] = None,
        sleep: Sleep = asyncio.sleep,
        spawn_position: Optional[Vector3] = None,
    ) -> None:
        self.rng = require_rng_param(rng, "SpawnManager.__init__")
        self.catalog = catalog
        self.factory = factory
        self.socket = socket
        self.player = player
        self.config = config or SpawnConfig()
        self.spawn_position = spawn_position or Vector3.zero()
        self._sleep = sleep
        self._water_count = 0
        self._task: Optional[asyncio.Task] = None
        self.checks = 0
        self.bites = 0
        self.spawned = 0

    # ------------------------------------------------------------------
    # Water triggers
    # ------------------------------------------------------------------

    @property
    def in_water(self) -> bool:
        return self._water_count > 0

    @property
    def water_count(self) -> int:
        return self._water_count

    @property
    def is_listening(self) -> bool:
        return self._task is not None and not self._task.done()

    def request_spawn_check(self, in_water: bool) -> None:
        """Entry point for water triggers reporting an enter or exit."""
        if in_water:
            self.enter_water()
        else:
            self.exit_water()

    def enter_water(self) -> None:
        self._water_count += 1
        if self._water_count == 1:
            self.begin_listening()

    def exit_water(self) -> None:
        if self._water_count == 0:
            logger.debug("exit_water with no matching enter; ignored")
            return
        self._water_count -= 1
        if self._water_count == 0:
            self.stop_listening()

    def begin_listening(self) -> None:
        logger.info("BeginListening called")
        if self.is_listening:
            return
        self.checks = 0
        self.bites = 0
        self.spawned = 0
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; bite loop not started")
            return
        self._task = loop.create_task(self._bite_loop(), name="bite_loop")

    def stop_listening(self) -> None:
        logger.info("StopListening called")
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def shutdown(self) -> None:
        """Cancel the loop and wait for it to finish unwinding."""
        task = self._task
        self._water_count = 0
        self._task = None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    async def _bite_loop(self) -> None:
        cfg = self.config
        try:
            await self._sleep(cfg.initial_settle_delay)

            while True:
                wait = self.rng.uniform_range(cfg.bite_interval_min, cfg.bite_interval_max)
                logger.debug(f"Waiting {wait:.2f}s for next bite check")
                await self._sleep(wait)

                if self.socket.has_pending_or_hooked():
                    logger.debug("Socket busy (selection or pending), skipping spawn check")
                    await self._sleep(cfg.busy_poll_interval)
                    continue

                try:
                    self.checks += 1
                    if not self.rng.chance(cfg.bite_chance):
                        continue
                    self.bites += 1
                    self.try_spawn()
                except Exception as e:
                    logger.error(f"Error during bite check: {e}", exc_info=True)

        except asyncio.CancelledError:
            logger.info("Bite loop cancelled")
            raise
        except Exception as e:
            logger.error(f"Fatal error in bite loop: {e}", exc_info=True)

    def spawn_weights(self) -> List[float]:
        """Per-species weights with the player's luck and lure applied."""
        luck_norm = self.player.luck_norm if self.player is not None else 0.0
        lure = self.player.equipped_lure if self.player is not None else None
        lure_bias = lure.spawn_bias if lure is not None else 0.0

        weights = []
        for species in self.catalog:
            weight = max(0.0, species.spawn_weight) * (1.0 + luck_norm * spawning_cfg.LUCK_SPAWN_WEIGHT)
            weight *= 1.0 + lure_bias
            logger.debug(f"Species {species.species_id} base_weight={species.spawn_weight} adj_weight={weight}")
            weights.append(weight)
        return weights

    def try_spawn(self) -> Optional[FishInstance]:
        """Pick a species, spawn it and offer it to the socket.

        Returns:
            The offered instance, or None if nothing could be spawned or the
            socket refused it
        """
        if len(self.catalog) == 0:
            logger.debug("No species in catalog, skipping spawn")
            return None

        species_list = list(self.catalog)
        idx = self.rng.weighted_choice_index(self.spawn_weights())
        if not 0 <= idx < len(species_list):
            logger.info("weighted_choice_index returned invalid index")
            return None

        species = species_list[idx]
        logger.info(f"Selected species {species.species_id} (idx {idx})")
        lure = self.player.equipped_lure if self.player is not None else None
        instance = self.factory.spawn_pending_fish(species, lure, self.player, self.spawn_position)
        if instance is None:
            return None

        result = self.socket.offer(instance, self.config.accept_timeout)
        if result.is_err():
            instance.return_to_pool()
            return None
        self.spawned += 1
        return instance
