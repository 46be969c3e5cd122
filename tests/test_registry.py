import logging

import pytest

from src.message_service.context import MessageContext
from src.message_service.errors import DuplicateSubscriptionError
from src.message_service.registry import ChannelRegistry
from src.message_service.subscription import Subscription


def _noop(payload):
    return None


def _make(registry, channel="msg", sub_id=None):
    ctx = MessageContext(registry)
    return ctx, Subscription(channel, _noop, ctx, sub_id=sub_id)


def test_register_preserves_insertion_order():
    registry = ChannelRegistry()
    ctx = MessageContext(registry)
    subs = [Subscription("msg", _noop, ctx) for _ in range(5)]
    for sub in subs:
        registry.register("msg", sub)
    assert registry.snapshot("msg") == tuple(subs)
    assert registry.subscriber_count("msg") == 5
    assert len(registry) == 5


def test_duplicate_id_rejected_across_channels(caplog):
    registry = ChannelRegistry()
    _, first = _make(registry, "a", sub_id="fixed")
    _, second = _make(registry, "b", sub_id="fixed")
    registry.register("a", first)
    with caplog.at_level(logging.CRITICAL, logger="src.message_service.registry"):
        with pytest.raises(DuplicateSubscriptionError):
            registry.register("b", second)
    assert registry.snapshot("b") == ()
    critical = [r for r in caplog.records if r.levelno == logging.CRITICAL]
    assert len(critical) == 1
    assert "duplicate subscription id=fixed" in critical[0].getMessage()


def test_unregister_absent_is_noop():
    registry = ChannelRegistry()
    _, sub = _make(registry)
    assert registry.unregister(sub) is False
    registry.register("msg", sub)
    assert registry.unregister(sub) is True
    assert registry.unregister(sub) is False
    assert sub not in registry


def test_empty_channel_entry_dropped():
    registry = ChannelRegistry()
    _, sub = _make(registry, "gone")
    registry.register("gone", sub)
    assert registry.channels() == ["gone"]
    registry.unregister(sub)
    assert registry.channels() == []


def test_snapshot_is_a_copy():
    registry = ChannelRegistry()
    _, sub = _make(registry)
    registry.register("msg", sub)
    snap = registry.snapshot("msg")
    registry.unregister(sub)
    assert snap == (sub,)
    assert registry.snapshot("msg") == ()


def test_unknown_channel_snapshot_empty():
    assert ChannelRegistry().snapshot("nobody") == ()


def test_brokers_can_share_an_empty_registry():
    from src.message_service import MessageBroker

    shared = ChannelRegistry()
    first = MessageBroker(registry=shared)
    second = MessageBroker(registry=shared)
    received = []
    first.subscribe(first.create_context(), "msg", received.append)
    second.publish("msg", "shared")

    assert first.registry is shared
    assert received == ["shared"]
