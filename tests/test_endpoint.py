import pytest

from src.message_service import ChannelEndpoint, ContextDisposedError, InvalidChannelError, MessageBroker


def test_on_message_subscribes_once():
    broker = MessageBroker()
    endpoint = ChannelEndpoint(broker, "message")
    first = endpoint.on_message(lambda p: None)
    second = endpoint.on_message(lambda p: None)
    assert first is second
    assert broker.subscriber_count("message") == 1


def test_send_reaches_other_endpoint():
    broker = MessageBroker()
    publisher = ChannelEndpoint(broker, "message")
    subscriber = ChannelEndpoint(broker, "message")
    values = []
    subscriber.on_message(lambda p: values.append(p["value"]))

    assert publisher.send({"value": "hello"}) == 1
    assert values == ["hello"]


def test_close_removes_subscription_and_is_idempotent():
    broker = MessageBroker()
    endpoint = ChannelEndpoint(broker, "message")
    endpoint.on_message(lambda p: None)
    endpoint.close()
    endpoint.close()
    assert not endpoint.subscribed
    assert broker.subscriber_count("message") == 0
    with pytest.raises(ContextDisposedError):
        endpoint.on_message(lambda p: None)


def test_with_block_closes():
    broker = MessageBroker()
    with ChannelEndpoint(broker, "message") as endpoint:
        endpoint.on_message(lambda p: None)
        assert endpoint.subscribed
    assert broker.subscriber_count("message") == 0


def test_invalid_channel():
    with pytest.raises(InvalidChannelError):
        ChannelEndpoint(MessageBroker(), "")
