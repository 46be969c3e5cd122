from __future__ import annotations

from typing import Any, Callable, Hashable, Optional

from .broker import MessageBroker
from .channel import validate_channel
from .subscription import Subscription


class ChannelEndpoint:
    """One component's view of one channel: its own context, at most one subscription."""

    def __init__(self, broker: MessageBroker, channel: Hashable):
        self.broker = broker
        self.channel = validate_channel(channel)
        self.context = broker.create_context()
        self.subscription: Optional[Subscription] = None

    @property
    def subscribed(self) -> bool:
        return self.subscription is not None and self.subscription.active

    def send(self, payload: Any) -> int:
        return self.broker.publish(self.channel, payload)

    def on_message(self, cb: Callable[[Any], None]) -> Subscription:
        if self.subscribed:
            return self.subscription
        self.subscription = self.broker.subscribe(self.context, self.channel, cb)
        return self.subscription

    def close(self):
        self.broker.dispose_context(self.context)
        self.subscription = None

    def __enter__(self) -> "ChannelEndpoint":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
