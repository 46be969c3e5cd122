from __future__ import annotations

"""Two publisher/subscriber pairs wired through the message service.

The "input" pair exchanges a string value on a plain channel name; the
"sample" pair exchanges a message on a declared ``MessageChannel``. Each
subscriber owns a context for its lifetime and disposes it on disconnect.
"""

from src.message_service import (
    BrokerSettings,
    ChannelEndpoint,
    MessageBroker,
    MessageChannel,
    create_message_context,
    publish,
    release_message_context,
    setup_logger,
    subscribe,
)

SAMPLE_CHANNEL = MessageChannel(name="Sample__c", description="Demo channel", message_fields=("messageText",))


class InputPublisher:
    def __init__(self, broker: MessageBroker):
        self.endpoint = ChannelEndpoint(broker, "message")
        self.item = ""

    def change(self, value: str):
        self.item = value

    def publish_event(self):
        print("published message:", self.item)
        self.endpoint.send({"value": self.item})


class InputSubscriber:
    def __init__(self, broker: MessageBroker):
        self.broker = broker
        self.value = ""
        self.endpoint: ChannelEndpoint | None = None

    def connected(self):
        self.endpoint = ChannelEndpoint(self.broker, "message")
        self.endpoint.on_message(self.handle_message)

    def handle_message(self, payload):
        self.value = payload["value"]

    def disconnected(self):
        if self.endpoint:
            self.endpoint.close()


class SamplePublisher:
    def __init__(self, broker: MessageBroker):
        self.context = create_message_context(broker)

    def handle_button_click(self):
        publish(self.context, SAMPLE_CHANNEL, {"messageText": "This is a test"})


class SampleSubscriber:
    def __init__(self, broker: MessageBroker):
        self.context = create_message_context(broker)
        self.subscription = None
        self.message_text = ""

    def connected(self):
        if self.subscription:
            return
        self.subscription = subscribe(self.context, SAMPLE_CHANNEL, self.on_message)

    def on_message(self, message):
        print(message["messageText"])
        self.message_text = message["messageText"]

    def disconnected(self):
        release_message_context(self.context)
        self.subscription = None


def main():
    settings = BrokerSettings.from_env()
    setup_logger(level=settings.log_level)
    broker = MessageBroker(settings=settings)

    input_sub = InputSubscriber(broker)
    input_sub.connected()
    input_pub = InputPublisher(broker)
    input_pub.change("hello")
    input_pub.publish_event()
    print("input subscriber value:", input_sub.value)

    sample_sub = SampleSubscriber(broker)
    sample_sub.connected()
    SamplePublisher(broker).handle_button_click()
    print("sample subscriber text:", sample_sub.message_text)

    input_sub.disconnected()
    sample_sub.disconnected()
    print("live subscriptions after disconnect:", len(broker.registry))


if __name__ == "__main__":
    main()
