"""Object pooling for fish instances.

Each species owns a pool: an arena of ``FishInstance`` slots indexed by
``instance_id`` with a free-list of idle slots. Fish are never destroyed;
timeouts, escapes, sales and round resets all hand the slot back to its
pool, which resets it to an inert physical state for the rendering
collaborator.
"""

import logging
from typing import Dict, Iterator, List, Optional, Set

from fishcore.data import FishData, FishSpeciesTemplate, SpeciesCatalog
from fishcore.events import EventBus, FishReturnedToPoolEvent
from fishcore.exceptions import LifecycleError
from fishcore.math_utils import Vector3
from fishcore.result import Result
from fishcore.state_machine import FishLifecycle, StateMachine, create_fish_lifecycle

logger = logging.getLogger(__name__)


class FishInstance:
    """One pooled fish slot.

    The physical fields are plain data consumed by the rendering
    collaborator: an inert fish is kinematic with zero velocity, and a
    non-interactive fish cannot be grabbed.

    Attributes:
        instance_id: Slot index within the owning pool
        pool: Pool that owns this slot
        data: Generated stats for the current spawn (None while pooled)
        position: Last placement requested by the core
        velocity: Always zero while inert
        inert: Kinematic, gravity off
        interactive: Whether the player may grab it
        throw_on_detach: Whether letting go throws the fish
        attached_to: Socket id currently holding the fish, if any
    """

    def __init__(self, instance_id: int, pool: "FishPool") -> None:
        self.instance_id = instance_id
        self.pool = pool
        self.data: Optional[FishData] = None
        self.position = Vector3.zero()
        self.velocity = Vector3.zero()
        self.inert = True
        self.interactive = False
        self.throw_on_detach = False
        self.attached_to: Optional[str] = None
        self._lifecycle: StateMachine[FishLifecycle] = create_fish_lifecycle()

    @property
    def species_id(self) -> str:
        return self.pool.species.species_id

    @property
    def lifecycle(self) -> FishLifecycle:
        return self._lifecycle.state

    @property
    def is_pooled(self) -> bool:
        return self._lifecycle.state is FishLifecycle.POOLED

    def try_advance(self, stage: FishLifecycle, reason: str = "") -> Result[FishLifecycle, str]:
        """Move to ``stage`` if the lifecycle allows it."""
        return self._lifecycle.try_transition(stage, reason)

    def advance(self, stage: FishLifecycle, reason: str = "") -> FishLifecycle:
        """Move to ``stage``; the caller has already checked the precondition.

        Raises:
            LifecycleError: If the lifecycle forbids the move
        """
        result = self.try_advance(stage, reason)
        if result.is_err():
            raise LifecycleError(f"Fish {self.label}: {result.error}")
        return result.unwrap()

    def make_inert(self) -> None:
        self.velocity = Vector3.zero()
        self.inert = True
        self.interactive = False
        self.throw_on_detach = False

    def return_to_pool(self) -> bool:
        """Hand this slot back to its pool (no-op if already pooled)."""
        return self.pool.release(self)

    @property
    def label(self) -> str:
        return f"{self.species_id}#{self.instance_id}"

    def __repr__(self) -> str:
        return f"FishInstance({self.label}, {self.lifecycle.name})"


class FishPool:
    """Per-species recycler for fish instances.

    An instance handed out by ``acquire`` is held by exactly one caller until
    it comes back through ``release``.
    """

    def __init__(
        self,
        species: FishSpeciesTemplate,
        initial_size: int = 5,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        """Initialize the pool and pre-allocate ``initial_size`` idle slots.

        Args:
            species: Species this pool produces
            initial_size: Idle reserve to create now and to refill back to
            event_bus: Bus for ``FishReturnedToPoolEvent``
        """
        self.species = species
        self.initial_size = max(0, initial_size)
        self._event_bus = event_bus
        self._slots: List[FishInstance] = []
        self._free: List[int] = []
        self._active: Set[int] = set()
        self.refill(self.initial_size)
        logger.info(f"Initialized pool for {species.species_id} with {self.initial_size} items")

    def _new_slot(self) -> FishInstance:
        instance = FishInstance(len(self._slots), self)
        self._slots.append(instance)
        return instance

    def acquire(self, position: Optional[Vector3] = None) -> FishInstance:
        """Get an idle instance, constructing one if the reserve is empty.

        The instance comes back inert and non-interactive, with no data and
        no attachment.
        """
        if self._free:
            instance = self._slots[self._free.pop()]
        else:
            instance = self._new_slot()

        instance.make_inert()
        instance.attached_to = None
        instance.data = None
        instance.position = position.copy() if position is not None else Vector3.zero()
        self._active.add(instance.instance_id)
        logger.debug(f"Acquire: handed out {instance.label}")
        return instance

    def release(self, instance: FishInstance) -> bool:
        """Return an instance to the free-list.

        Idempotent: releasing an idle instance, or one owned by another pool,
        is a logged no-op.

        Returns:
            True if the instance was reclaimed by this call
        """
        if instance.pool is not self:
            logger.warning(f"Release: {instance.label} does not belong to pool {self.species.species_id}")
            return False
        if instance.instance_id not in self._active:
            logger.debug(f"Release: {instance.label} already pooled")
            return False

        self._active.discard(instance.instance_id)
        instance.attached_to = None
        instance.make_inert()
        instance.data = None
        if not instance.is_pooled:
            instance.advance(FishLifecycle.POOLED, reason="released to pool")
        self._free.append(instance.instance_id)
        logger.debug(f"Release: pooled {instance.label}")

        if self._event_bus is not None:
            self._event_bus.emit(
                FishReturnedToPoolEvent(species_id=self.species.species_id, instance_id=instance.instance_id)
            )
        return True

    def release_all(self) -> int:
        """Reclaim every active instance. Returns how many were reclaimed."""
        active = [self._slots[i] for i in sorted(self._active)]
        for instance in active:
            self.release(instance)
        return len(active)

    def refill(self, target_count: Optional[int] = None) -> int:
        """Top the idle reserve up to ``target_count`` (default: initial size).

        Active instances are never touched. Returns the number of slots created.
        """
        target = self.initial_size if target_count is None else max(0, target_count)
        created = 0
        while len(self._free) < target:
            self._free.append(self._new_slot().instance_id)
            created += 1
        if created:
            logger.debug(f"Refill: created {created} slots for {self.species.species_id}")
        return created

    def active_instances(self) -> List[FishInstance]:
        return [self._slots[i] for i in sorted(self._active)]

    @property
    def idle_count(self) -> int:
        return len(self._free)

    @property
    def active_count(self) -> int:
        return len(self._active)

    def get_stats(self) -> dict:
        """Get pool statistics for monitoring."""
        return {
            "species_id": self.species.species_id,
            "pool_size": self.idle_count,
            "active_count": self.active_count,
            "total_capacity": len(self._slots),
        }


class FishPoolRegistry:
    """Species id -> pool lookup with round-end helpers."""

    def __init__(self, pools: Optional[List[FishPool]] = None) -> None:
        self._pools: Dict[str, FishPool] = {}
        for pool in pools or []:
            self.add(pool)

    @classmethod
    def for_catalog(
        cls,
        catalog: SpeciesCatalog,
        initial_size: int = 5,
        event_bus: Optional[EventBus] = None,
    ) -> "FishPoolRegistry":
        """One pool per species in ``catalog``."""
        return cls([FishPool(species, initial_size, event_bus) for species in catalog])

    def add(self, pool: FishPool) -> None:
        self._pools[pool.species.species_id] = pool

    def get(self, species_id: str) -> Optional[FishPool]:
        pool = self._pools.get(species_id)
        if pool is None:
            logger.warning(f"No pool found for species {species_id}")
        return pool

    def return_all(self) -> int:
        total = sum(pool.release_all() for pool in self._pools.values())
        logger.info(f"Returned {total} fish instance(s) to pools")
        return total

    def refill_all(self) -> int:
        logger.info(f"Refilling {len(self._pools)} fish pool(s)")
        return sum(pool.refill() for pool in self._pools.values())

    def active_instances(self) -> List[FishInstance]:
        return [instance for pool in self._pools.values() for instance in pool.active_instances()]

    def __iter__(self) -> Iterator[FishPool]:
        return iter(self._pools.values())

    def __len__(self) -> int:
        return len(self._pools)
