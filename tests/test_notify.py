"""Tests for UpdateNotifier."""

from sisatset.notify import SCHEDULE_UPDATED, UpdateNotifier


def test_publish_reaches_subscribers():
    notifier = UpdateNotifier()
    seen = []
    notifier.subscribe(SCHEDULE_UPDATED, lambda topic, payload: seen.append((topic, payload)))

    assert notifier.publish(SCHEDULE_UPDATED, child_id="c1") == 1
    assert seen == [(SCHEDULE_UPDATED, {"child_id": "c1"})]


def test_unsubscribe():
    notifier = UpdateNotifier()
    seen = []
    unsubscribe = notifier.subscribe("x", lambda topic, payload: seen.append(topic))
    unsubscribe()

    assert notifier.publish("x") == 0
    assert seen == []


def test_failing_listener_does_not_block_others():
    notifier = UpdateNotifier()
    seen = []

    def broken(topic, payload):
        raise RuntimeError("boom")

    notifier.subscribe("x", broken)
    notifier.subscribe("x", lambda topic, payload: seen.append(topic))

    assert notifier.publish("x") == 1
    assert seen == ["x"]
