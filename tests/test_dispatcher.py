"""Tests for the event bus and dispatcher."""

import pytest

from cashier_fastspring.errors.exceptions import DispatchFailure
from cashier_fastspring.events.bus import EventBus
from cashier_fastspring.events.dispatcher import dispatch
from cashier_fastspring.events.registry import ClassifiedEvent
from cashier_fastspring.models.webhook import RawEvent

from conftest import make_event


@pytest.fixture
def event() -> RawEvent:
    return RawEvent.model_validate(make_event("evt_1"))


class RecordingPublisher:
    def __init__(self):
        self.published = []

    def publish(self, kind, payload):
        self.published.append((kind, payload))


def test_publishes_three_notifications_in_order(event):
    publisher = RecordingPublisher()
    dispatch(event, ClassifiedEvent("OrderAny", "OrderCompleted"), publisher)

    assert [kind for kind, _ in publisher.published] == ["Any", "OrderAny", "OrderCompleted"]
    assert all(payload is event for _, payload in publisher.published)


def test_payload_carries_raw_fields(event):
    assert event.as_tuple() == (
        "evt_1",
        "order.completed",
        False,
        False,
        1426560444800,
        {"order": "US5UuRsmSvKNiXzNX1j0OA", "reference": "FUR150317-4811-20133"},
    )


def test_bus_runs_handlers_in_subscription_order():
    bus = EventBus()
    calls = []
    bus.subscribe("OrderCompleted", lambda e: calls.append("first"))

    @bus.listen("OrderCompleted")
    def second(e):
        calls.append("second")

    bus.publish("OrderCompleted", object())
    bus.publish("OrderFailed", object())
    assert calls == ["first", "second"]


def test_bus_unsubscribe():
    bus = EventBus()
    calls = []
    handler = bus.subscribe("Any", calls.append)
    bus.unsubscribe("Any", handler)
    bus.publish("Any", "payload")
    assert calls == []
    assert bus.handlers("Any") == []


def test_subscriber_error_becomes_dispatch_failure(event):
    bus = EventBus()
    received = []
    bus.subscribe("Any", received.append)

    def explode(e):
        raise RuntimeError("subscriber crashed")

    bus.subscribe("OrderAny", explode)
    bus.subscribe("OrderCompleted", received.append)

    with pytest.raises(DispatchFailure) as exc_info:
        dispatch(event, ClassifiedEvent("OrderAny", "OrderCompleted"), bus)

    failure = exc_info.value
    assert failure.event_id == "evt_1"
    assert failure.kind == "OrderAny"
    assert isinstance(failure.__cause__, RuntimeError)
    # Already published notifications stay published, later ones are skipped
    assert received == [event]
