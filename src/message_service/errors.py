from __future__ import annotations

"""Exception types raised (or reported) by the message service."""

from typing import Any


class MessageServiceError(Exception):
    """Base class for every message-service failure."""


class InvalidChannelError(MessageServiceError, ValueError):
    """Channel identifier is missing, blank or unhashable."""


class DuplicateSubscriptionError(MessageServiceError):
    """A subscription id is already registered."""


class ContextDisposedError(MessageServiceError):
    """Context (or its subscription) can no longer be used."""


class ForeignContextError(ContextDisposedError):
    """Context or subscription belongs to a different broker's registry."""


class SubscriberCallbackError(MessageServiceError):
    """Wraps an exception raised by a subscriber callback during publish.

    Never raised to the publisher; handed to the broker's error handler
    instead. The original exception is available as ``__cause__``.
    """

    def __init__(self, subscription, channel: Any, payload: Any, error: BaseException):
        self.subscription = subscription
        self.channel = channel
        self.payload = payload
        self.error = error
        self.__cause__ = error
        super().__init__(
            f"Subscriber {subscription.id} on channel {channel!r} failed: {error!r}"
        )
