"""Tests for event dispatch and the cart broadcast bus"""
from unittest.mock import Mock

from storefront.bus import BroadcastBus, EventDispatcher


def test_publish_without_subscribers(bus):
    """Publishing with nobody listening is a no-op"""
    bus.publish()

    assert bus.subscriber_count == 0


def test_publish_reaches_every_subscriber(bus):
    first, second = Mock(), Mock()
    bus.subscribe(first)
    bus.subscribe(second)

    bus.publish()

    first.assert_called_once_with()
    second.assert_called_once_with()


def test_unsubscribe_stops_delivery(bus):
    handler = Mock()
    unsubscribe = bus.subscribe(handler)

    unsubscribe()
    bus.publish()

    handler.assert_not_called()
    assert bus.subscriber_count == 0


def test_unsubscribe_is_idempotent(bus):
    handler = Mock()
    unsubscribe = bus.subscribe(handler)
    bus.subscribe(handler)

    unsubscribe()
    unsubscribe()

    # Only the first registration is gone
    assert bus.subscriber_count == 1


def test_failing_handler_does_not_block_others(bus):
    failing = Mock(side_effect=RuntimeError("boom"))
    healthy = Mock()
    bus.subscribe(failing)
    bus.subscribe(healthy)

    bus.publish()

    healthy.assert_called_once()


def test_unsubscribe_during_publish_affects_next_publish_only(bus):
    calls = []
    handles = {}

    def first():
        calls.append("first")
        handles["second"]()

    def second():
        calls.append("second")

    bus.subscribe(first)
    handles["second"] = bus.subscribe(second)

    bus.publish()
    bus.publish()

    assert calls == ["first", "second", "first"]


def test_bus_uses_cart_updated_event():
    dispatcher = EventDispatcher()
    bus = BroadcastBus(dispatcher)
    raw_listener = Mock()
    dispatcher.listen("cartUpdated", raw_listener)

    bus.publish()

    raw_listener.assert_called_once()


def test_dispatcher_isolates_event_names():
    dispatcher = EventDispatcher()
    handler = Mock()
    dispatcher.listen("other", handler)

    assert dispatcher.dispatch("cartUpdated") == 0
    handler.assert_not_called()
