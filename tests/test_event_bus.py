from tablesorter.services.event_bus import EventBus, SortEvent


def test_subscribe_publish_basic():
    bus = EventBus()
    received = []

    bus.subscribe(SortEvent.SORT_CHANGED, lambda evt: received.append((evt.name, evt.payload)))
    bus.publish(SortEvent.SORT_CHANGED, {"table_id": "t"})
    assert received == [(SortEvent.SORT_CHANGED.value, {"table_id": "t"})]


def test_once_subscription():
    bus = EventBus()
    count = 0

    def incr(_):
        nonlocal count
        count += 1

    bus.subscribe(SortEvent.SORT_STATE_RESTORED, incr, once=True)
    bus.publish(SortEvent.SORT_STATE_RESTORED)
    bus.publish(SortEvent.SORT_STATE_RESTORED)
    assert count == 1
    assert bus.subscriber_count(SortEvent.SORT_STATE_RESTORED) == 0


def test_error_isolation():
    bus = EventBus()
    order = []

    def bad(_):
        order.append("bad")
        raise RuntimeError("boom")

    def good(_):
        order.append("good")

    bus.subscribe("custom", bad)
    bus.subscribe("custom", good)
    bus.publish("custom", 123)
    assert order == ["bad", "good"]
    assert len(bus.errors) == 1


def test_unsubscribe_and_cancel():
    bus = EventBus()
    hits = []
    sub = bus.subscribe("x", hits.append)
    other = bus.subscribe("x", hits.append)
    other.cancel()
    bus.publish("x")
    assert len(hits) == 1
    bus.unsubscribe(sub)
    bus.unsubscribe(other)
    bus.publish("x")
    assert len(hits) == 1
    assert bus.subscriber_count("x") == 0
