"""State machine abstractions for the fishing core.

Every multi-stage object in the core (a pooled fish, a catch socket, the
lure, a round) keeps its stage in a ``StateMachine`` so that race-prone
events (an offer expiring the same tick it is accepted, a fish sold while a
round resets) can only ever take one legal path.

Usage:
------
    fish = create_fish_lifecycle()
    fish.transition(FishLifecycle.PENDING)          # OK
    fish.try_transition(FishLifecycle.SOLD)         # Err: PENDING -> SOLD

``transition`` raises for transitions the caller has already validated;
``try_transition`` returns a Result for transitions that may legitimately
lose a race.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Generic, List, TypeVar

from fishcore.result import Err, Ok, Result

# Type variable for state enum types
S = TypeVar("S", bound=Enum)


@dataclass
class StateTransition(Generic[S]):
    """Record of a state transition for debugging.

    Attributes:
        from_state: The state before transition
        to_state: The state after transition
        reason: Optional description of why transition happened
    """

    from_state: S
    to_state: S
    reason: str = ""


class StateMachine(Generic[S]):
    """A generic state machine with explicit transition validation.

    Example:
        transitions = {
            SocketState.IDLE: [SocketState.PENDING],
            SocketState.PENDING: [SocketState.HOOKED, SocketState.EXPIRED],
            ...
        }
        socket = StateMachine(SocketState.IDLE, transitions)
        socket.transition(SocketState.PENDING)
    """

    def __init__(
        self,
        initial_state: S,
        valid_transitions: Dict[S, List[S]],
        track_history: bool = False,
        max_history: int = 100,
    ) -> None:
        """Initialize the state machine.

        Args:
            initial_state: The starting state
            valid_transitions: Map of state -> list of valid target states
            track_history: Whether to record transition history
            max_history: Maximum number of transitions to keep in history
        """
        self._state = initial_state
        self._transitions = valid_transitions
        self._track_history = track_history
        self._max_history = max_history
        self._history: List[StateTransition[S]] = []

        if initial_state not in valid_transitions:
            raise ValueError(
                f"Initial state {initial_state} not in valid_transitions. "
                f"Valid states: {list(valid_transitions.keys())}"
            )

    @property
    def state(self) -> S:
        """Get the current state."""
        return self._state

    @property
    def history(self) -> List[StateTransition[S]]:
        """Get transition history (empty if tracking disabled)."""
        return self._history.copy()

    def can_transition(self, target: S) -> bool:
        """Check if transition to target state is valid."""
        return target in self._transitions.get(self._state, [])

    def try_transition(self, target: S, reason: str = "") -> Result[S, str]:
        """Attempt to transition to a new state.

        Args:
            target: The desired target state
            reason: Why this transition is happening (for debugging)

        Returns:
            Ok(new_state) if successful, Err(message) if invalid
        """
        if not self.can_transition(target):
            valid_targets = self._transitions.get(self._state, [])
            return Err(
                f"Invalid transition: {self._state.name} -> {target.name}. "
                f"Valid targets from {self._state.name}: {[t.name for t in valid_targets]}"
            )

        old_state = self._state
        self._state = target

        if self._track_history:
            self._record_transition(old_state, target, reason)

        return Ok(target)

    def transition(self, target: S, reason: str = "") -> S:
        """Transition to a new state, raising on invalid transition.

        Raises:
            ValueError: If the transition is invalid
        """
        result = self.try_transition(target, reason)
        if result.is_err():
            raise ValueError(result.error)
        return result.unwrap()

    def _record_transition(self, from_state: S, to_state: S, reason: str) -> None:
        self._history.append(StateTransition(from_state=from_state, to_state=to_state, reason=reason))
        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history :]

    def __repr__(self) -> str:
        return f"StateMachine(state={self._state.name})"


# ============================================================================
# Fish instance lifecycle
# ============================================================================


class FishLifecycle(Enum):
    """Ownership stage of a pooled fish instance.

    Exactly one stage is active at a time. POOLED means the pool owns the
    slot; every other stage names the single holder outside the pool.
    """

    POOLED = "pooled"  # Idle in its pool's free-list
    PENDING = "pending"  # Offered to a socket, awaiting acceptance
    HOOKED = "hooked"  # Accepted into a socket
    SOLD = "sold"  # Registered as a sale, about to be reclaimed
    RELEASED = "released"  # Lifted out of the socket by the player


# Every stage may fall back to POOLED (timeouts, escapes, round resets).
FISH_LIFECYCLE_TRANSITIONS: Dict[FishLifecycle, List[FishLifecycle]] = {
    FishLifecycle.POOLED: [FishLifecycle.PENDING],
    FishLifecycle.PENDING: [FishLifecycle.HOOKED, FishLifecycle.POOLED],
    FishLifecycle.HOOKED: [FishLifecycle.SOLD, FishLifecycle.RELEASED, FishLifecycle.POOLED],
    FishLifecycle.RELEASED: [FishLifecycle.SOLD, FishLifecycle.HOOKED, FishLifecycle.POOLED],
    FishLifecycle.SOLD: [FishLifecycle.POOLED],
}


def create_fish_lifecycle(track_history: bool = False) -> StateMachine[FishLifecycle]:
    """Create the lifecycle machine for a freshly constructed pool slot."""
    return StateMachine(
        initial_state=FishLifecycle.POOLED,
        valid_transitions=FISH_LIFECYCLE_TRANSITIONS,
        track_history=track_history,
    )


# ============================================================================
# Socket acceptance
# ============================================================================


class SocketState(Enum):
    """Acceptance states of a catch socket."""

    IDLE = auto()
    PENDING = auto()
    HOOKED = auto()
    EXPIRED = auto()


SOCKET_TRANSITIONS: Dict[SocketState, List[SocketState]] = {
    SocketState.IDLE: [SocketState.PENDING],
    SocketState.PENDING: [SocketState.HOOKED, SocketState.EXPIRED, SocketState.IDLE],
    SocketState.HOOKED: [SocketState.IDLE],
    SocketState.EXPIRED: [SocketState.IDLE],
}


def create_socket_state_machine(track_history: bool = False) -> StateMachine[SocketState]:
    return StateMachine(
        initial_state=SocketState.IDLE,
        valid_transitions=SOCKET_TRANSITIONS,
        track_history=track_history,
    )


# ============================================================================
# Lure
# ============================================================================


class LureState(Enum):
    """Where the lure is in the cast/bite/hook cycle."""

    IDLE = "idle"
    IN_WATER = "in_water"
    PENDING = "pending"
    HOOKED = "hooked"


# The lure follows whatever the socket and water trigger report, so any
# state may move to any other (including itself).
LURE_TRANSITIONS: Dict[LureState, List[LureState]] = {state: list(LureState) for state in LureState}


def create_lure_state_machine() -> StateMachine[LureState]:
    return StateMachine(initial_state=LureState.IDLE, valid_transitions=LURE_TRANSITIONS)


# ============================================================================
# Round economy
# ============================================================================


class RoundPhase(Enum):
    """Phases of a selling round."""

    ROUND_ACTIVE = auto()
    ROUND_WON = auto()
    ROUND_FAILED = auto()


ROUND_TRANSITIONS: Dict[RoundPhase, List[RoundPhase]] = {
    RoundPhase.ROUND_ACTIVE: [RoundPhase.ROUND_WON, RoundPhase.ROUND_FAILED],
    RoundPhase.ROUND_WON: [RoundPhase.ROUND_ACTIVE],
    RoundPhase.ROUND_FAILED: [RoundPhase.ROUND_ACTIVE],
}


def create_round_state_machine(track_history: bool = True) -> StateMachine[RoundPhase]:
    """Create a state machine for round flow.

    History is on by default so a HUD or test can see how the last round
    ended after the next one has already auto-started.
    """
    return StateMachine(
        initial_state=RoundPhase.ROUND_ACTIVE,
        valid_transitions=ROUND_TRANSITIONS,
        track_history=track_history,
    )
