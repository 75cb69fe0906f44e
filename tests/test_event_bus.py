"""Tests for the EventBus domain event dispatch system."""

from fishcore.events import EventBus
from fishcore.events.domain_events import (
    FishHookedEvent,
    OfferExpiredEvent,
    RoundEndedEvent,
)


class TestEventBus:
    """Test suite for EventBus functionality."""

    def test_emit_reaches_subscriber(self) -> None:
        """Verify events are delivered to subscribed handlers."""
        bus = EventBus()
        received_events: list = []

        bus.subscribe(FishHookedEvent, received_events.append)

        event = FishHookedEvent(socket_id="lure_socket", instance_id=4, species_id="pike", fish_strength=6.5)
        bus.emit(event)

        assert len(received_events) == 1
        assert received_events[0] is event
        assert received_events[0].species_id == "pike"

    def test_no_subscribers_no_crash(self) -> None:
        """Verify emitting with no subscribers is a no-op."""
        bus = EventBus()

        bus.emit(OfferExpiredEvent(socket_id="lure_socket", instance_id=1))

    def test_handlers_called_in_registration_order(self) -> None:
        bus = EventBus()
        results: list = []

        bus.subscribe(RoundEndedEvent, lambda e: results.append(("hud", e.level)))
        bus.subscribe(RoundEndedEvent, lambda e: results.append(("audio", e.level)))

        bus.emit(RoundEndedEvent(level=3, won=True, round_money=12.5, goal=4.41, sells_used=2))

        assert results == [("hud", 3), ("audio", 3)]

    def test_handler_receives_correct_type_only(self) -> None:
        """Verify handlers only receive events of their subscribed type."""
        bus = EventBus()
        expired: list = []
        hooked: list = []

        bus.subscribe(OfferExpiredEvent, expired.append)
        bus.subscribe(FishHookedEvent, hooked.append)

        bus.emit(OfferExpiredEvent(socket_id="lure_socket", instance_id=1))
        bus.emit(FishHookedEvent(socket_id="lure_socket", instance_id=2, species_id="perch", fish_strength=None))

        assert [e.instance_id for e in expired] == [1]
        assert [e.instance_id for e in hooked] == [2]

    def test_unsubscribe_removes_handler(self) -> None:
        """Verify unsubscribe removes the handler from receiving events."""
        bus = EventBus()
        received: list = []

        bus.subscribe(OfferExpiredEvent, received.append)
        bus.emit(OfferExpiredEvent(socket_id="a", instance_id=1))
        assert len(received) == 1

        assert bus.unsubscribe(OfferExpiredEvent, received.append) is True
        assert bus.unsubscribe(OfferExpiredEvent, received.append) is False

        bus.emit(OfferExpiredEvent(socket_id="a", instance_id=2))
        assert len(received) == 1

    def test_handler_may_unsubscribe_itself_during_dispatch(self) -> None:
        bus = EventBus()
        calls: list = []

        def once(event: OfferExpiredEvent) -> None:
            calls.append(event.instance_id)
            bus.unsubscribe(OfferExpiredEvent, once)

        bus.subscribe(OfferExpiredEvent, once)
        bus.subscribe(OfferExpiredEvent, lambda e: calls.append(-e.instance_id))

        bus.emit(OfferExpiredEvent(socket_id="a", instance_id=7))
        bus.emit(OfferExpiredEvent(socket_id="a", instance_id=8))

        assert calls == [7, -7, -8]

