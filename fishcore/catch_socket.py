"""Catch socket: acceptance of a spawned fish at the lure.

A socket holds at most one fish. A freshly spawned fish is *offered* with a
deadline; the socket/XR collaborator either *accepts* that exact fish before
the deadline (IDLE -> PENDING -> HOOKED) or the countdown elapses and the
fish goes back to its pool (PENDING -> EXPIRED -> IDLE).

Expiry and acceptance are both guarded by the PENDING state and by identity
of the offered instance, so when both fire on the same tick whichever runs
first wins and the other is ignored.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from fishcore.catch_resolution import fish_strength
from fishcore.events import (
    EventBus,
    FishHookedEvent,
    FishOfferedEvent,
    FishReleasedEvent,
    FishReturnedToPoolEvent,
    OfferExpiredEvent,
)
from fishcore.fish_pool import FishInstance
from fishcore.result import Err, Ok, Result
from fishcore.state_machine import FishLifecycle, SocketState, StateMachine, create_socket_state_machine

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class CatchSocket:
    """Typed accessor for the socket at the end of the line.

    Attributes:
        socket_id: Identifier used in events and instance attachment
    """

    def __init__(
        self,
        socket_id: str = "lure_socket",
        event_bus: Optional[EventBus] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.socket_id = socket_id
        self._event_bus = event_bus or EventBus()
        self._sleep = sleep
        self._sm: StateMachine[SocketState] = create_socket_state_machine(track_history=True)
        self._pending: Optional[FishInstance] = None
        self._occupant: Optional[FishInstance] = None
        self._timeout_task: Optional[asyncio.Task] = None
        self._event_bus.subscribe(FishReturnedToPoolEvent, self._on_fish_returned)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> SocketState:
        return self._sm.state

    @property
    def pending(self) -> Optional[FishInstance]:
        return self._pending

    @property
    def occupant(self) -> Optional[FishInstance]:
        return self._occupant

    def query(self) -> SocketState:
        return self._sm.state

    def has_pending_or_hooked(self) -> bool:
        """True while a fish is awaiting acceptance or sits hooked in the socket."""
        return self._pending is not None or self._occupant is not None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def offer(self, instance: FishInstance, timeout_seconds: float) -> Result[FishInstance, str]:
        """Offer a pending fish and start its acceptance countdown.

        Rejected while another offer is pending or a fish is hooked.
        """
        if self._sm.state is not SocketState.IDLE:
            message = f"Socket {self.socket_id} busy ({self._sm.state.name}); offer of {instance.label} rejected"
            logger.warning(message)
            return Err(message)
        if instance.lifecycle is not FishLifecycle.PENDING:
            message = f"Offer of {instance.label} rejected: fish is {instance.lifecycle.name}, not PENDING"
            logger.warning(message)
            return Err(message)

        self._sm.transition(SocketState.PENDING, reason=f"offer {instance.label}")
        self._pending = instance
        instance.attached_to = self.socket_id
        self._start_countdown(instance, timeout_seconds)
        logger.info(f"Socket {self.socket_id}: pending {instance.label} timeout={timeout_seconds}")
        self._event_bus.emit(
            FishOfferedEvent(
                socket_id=self.socket_id,
                instance_id=instance.instance_id,
                species_id=instance.species_id,
            )
        )
        return Ok(instance)

    def accept(self, instance: FishInstance) -> Result[FishInstance, str]:
        """Accept the offered fish into the socket.

        Only valid while PENDING and only for the exact instance offered.
        Cancels the countdown and publishes ``FishHookedEvent``.
        """
        if self._sm.state is not SocketState.PENDING or self._pending is not instance:
            message = f"Socket {self.socket_id}: accept of {instance.label} ignored (no matching pending offer)"
            logger.warning(message)
            return Err(message)

        self._cancel_countdown()
        self._sm.transition(SocketState.HOOKED, reason=f"accept {instance.label}")
        instance.advance(FishLifecycle.HOOKED, reason=f"accepted by {self.socket_id}")
        instance.make_inert()
        self._pending = None
        self._occupant = instance
        logger.info(f"Socket {self.socket_id}: accepted pending {instance.label}")

        species = instance.pool.species
        self._event_bus.emit(
            FishHookedEvent(
                socket_id=self.socket_id,
                instance_id=instance.instance_id,
                species_id=species.species_id,
                fish_strength=fish_strength(instance.data, species) if instance.data else None,
            )
        )
        return Ok(instance)

    def accept_pending(self) -> Result[FishInstance, str]:
        """Accept whatever is pending (manual/test path)."""
        if self._pending is None:
            logger.warning(f"Socket {self.socket_id}: accept_pending called but no pending fish")
            return Err("No pending fish")
        return self.accept(self._pending)

    def expire_offer(self) -> Result[FishInstance, str]:
        """Expire the pending offer now (external timeout report)."""
        if self._pending is None:
            return Err("No pending offer to expire")
        self._cancel_countdown()
        return self._expire(self._pending)

    def release_occupant(self) -> Result[FishInstance, str]:
        """The player lifted the hooked fish out of the socket.

        The fish becomes grabbable and throwable and is no longer owned by the
        socket; the socket returns to IDLE.
        """
        instance = self._occupant
        if self._sm.state is not SocketState.HOOKED or instance is None:
            return Err(f"Socket {self.socket_id}: nothing hooked to release")

        instance.advance(FishLifecycle.RELEASED, reason=f"lifted from {self.socket_id}")
        instance.attached_to = None
        instance.inert = False
        instance.interactive = True
        instance.throw_on_detach = True
        self._occupant = None
        self._sm.transition(SocketState.IDLE, reason=f"release {instance.label}")
        logger.info(f"Socket {self.socket_id}: released {instance.label}")
        self._event_bus.emit(FishReleasedEvent(socket_id=self.socket_id, instance_id=instance.instance_id))
        return Ok(instance)

    def close(self) -> None:
        """Cancel any countdown and stop listening to pool events."""
        self._cancel_countdown()
        self._event_bus.unsubscribe(FishReturnedToPoolEvent, self._on_fish_returned)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _start_countdown(self, instance: FishInstance, timeout_seconds: float) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                f"Socket {self.socket_id}: no running event loop; offer of {instance.label} "
                "waits for an external expire_offer()"
            )
            return
        self._timeout_task = loop.create_task(
            self._countdown(instance, timeout_seconds), name=f"accept_timeout_{self.socket_id}"
        )

    async def _countdown(self, instance: FishInstance, timeout_seconds: float) -> None:
        await self._sleep(max(0.0, timeout_seconds))
        self._timeout_task = None
        self._expire(instance)

    def _cancel_countdown(self) -> None:
        task = self._timeout_task
        self._timeout_task = None
        if task is not None and not task.done():
            task.cancel()

    def _expire(self, instance: FishInstance) -> Result[FishInstance, str]:
        if self._sm.state is not SocketState.PENDING or self._pending is not instance:
            # Lost the race against accept (or a reset); nothing to do.
            return Err(f"Socket {self.socket_id}: expiry of {instance.label} ignored")

        self._sm.transition(SocketState.EXPIRED, reason=f"timeout {instance.label}")
        self._pending = None
        instance.return_to_pool()
        self._sm.transition(SocketState.IDLE, reason="expired offer cleared")
        logger.info(f"Socket {self.socket_id}: accept timeout expired, {instance.label} returned to pool")
        self._event_bus.emit(OfferExpiredEvent(socket_id=self.socket_id, instance_id=instance.instance_id))
        return Ok(instance)

    def _on_fish_returned(self, event: FishReturnedToPoolEvent) -> None:
        """Drop our reference when a pool reclaims the fish we hold."""
        if _matches(self._pending, event):
            self._cancel_countdown()
            self._pending = None
            self._sm.transition(SocketState.IDLE, reason="pending fish reclaimed")
            logger.debug(f"Socket {self.socket_id}: pending fish reclaimed by pool")
        elif _matches(self._occupant, event):
            self._occupant = None
            self._sm.transition(SocketState.IDLE, reason="hooked fish reclaimed")
            logger.debug(f"Socket {self.socket_id}: hooked fish reclaimed by pool")

    def __repr__(self) -> str:
        return f"CatchSocket({self.socket_id}, {self._sm.state.name})"


def _matches(instance: Optional[FishInstance], event: FishReturnedToPoolEvent) -> bool:
    return (
        instance is not None
        and instance.instance_id == event.instance_id
        and instance.species_id == event.species_id
    )
