"""Synchronous event bus for domain event dispatch.

The EventBus replaces per-component callback lists: components publish
frozen event dataclasses and collaborators (HUD, audio, the lure controller,
tests) subscribe by event type.

Design goals:
- Zero overhead when no subscribers (single dict lookup)
- Synchronous, so a handler sees state exactly as the publisher left it
- Type-safe dispatch via event type
"""

from __future__ import annotations

from collections import defaultdict
from typing import TypeVar
from collections.abc import Callable

T = TypeVar("T")


class EventBus:
    """Synchronous event bus for domain events.

    Events are dispatched immediately to all registered handlers, in
    registration order. Each emit reaches each handler exactly once.

    Example:
        bus = EventBus()
        bus.subscribe(RoundEndedEvent, hud.on_round_ended)
        bus.emit(RoundEndedEvent(level=3, won=True, round_money=12.5, goal=4.41, sells_used=2))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable]] = defaultdict(list)

    def emit(self, event: object) -> None:
        """Emit an event to all registered handlers.

        If no handlers are registered for this event type, this is a no-op.
        """
        handlers = self._handlers.get(type(event))
        if handlers:
            # Copy so a handler may unsubscribe itself mid-dispatch.
            for handler in list(handlers):
                handler(event)

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for a specific event type."""
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> bool:
        """Remove a handler for a specific event type.

        Returns:
            True if handler was found and removed, False otherwise
        """
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)
            return True
        return False

