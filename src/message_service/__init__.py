from __future__ import annotations

"""In-process message channels: contexts, subscriptions and a synchronous broker."""

from .broker import MessageBroker
from .channel import MessageChannel, validate_channel
from .context import MessageContext
from .endpoint import ChannelEndpoint
from .errors import (
    ContextDisposedError,
    DuplicateSubscriptionError,
    ForeignContextError,
    InvalidChannelError,
    MessageServiceError,
    SubscriberCallbackError,
)
from .logger import setup_logger
from .registry import ChannelRegistry
from .service import (
    create_message_context,
    publish,
    release_message_context,
    subscribe,
    unsubscribe,
)
from .settings import BrokerSettings
from .subscription import Subscription, SubscriptionState

__all__ = [
    "MessageBroker",
    "MessageChannel",
    "MessageContext",
    "ChannelEndpoint",
    "ChannelRegistry",
    "Subscription",
    "SubscriptionState",
    "BrokerSettings",
    "setup_logger",
    "validate_channel",
    "create_message_context",
    "release_message_context",
    "subscribe",
    "unsubscribe",
    "publish",
    "MessageServiceError",
    "InvalidChannelError",
    "DuplicateSubscriptionError",
    "ContextDisposedError",
    "ForeignContextError",
    "SubscriberCallbackError",
]
