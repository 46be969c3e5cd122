from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Optional

from .channel import validate_channel
from .context import MessageContext
from .errors import ContextDisposedError, ForeignContextError, SubscriberCallbackError
from .registry import ChannelRegistry
from .settings import BrokerSettings
from .subscription import Subscription

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[SubscriberCallbackError], None]


def _log_subscriber_error(error: SubscriberCallbackError) -> None:
    logger.error(
        "[publish] subscriber failed id=%s channel=%r: %s",
        error.subscription.id,
        error.channel,
        error.error,
        exc_info=error.error,
    )


class MessageBroker:
    """Publish/subscribe coordination over a ``ChannelRegistry``.

    Delivery is synchronous, on the publishing thread, in registration order,
    over a snapshot taken when ``publish`` starts. A subscriber that raises is
    reported to the error handler and the remaining subscribers still run.
    There are no timeouts: a slow callback holds up the rest of that publish.
    """

    def __init__(
        self,
        settings: BrokerSettings | None = None,
        error_handler: Optional[ErrorHandler] = None,
        registry: ChannelRegistry | None = None,
    ):
        self.settings = settings or BrokerSettings()
        self.registry = registry if registry is not None else ChannelRegistry()
        self._error_handler: ErrorHandler = error_handler or _log_subscriber_error

    def set_error_handler(self, handler: Optional[ErrorHandler]) -> None:
        """Replace the error handler; ``None`` restores the logging default."""
        self._error_handler = handler or _log_subscriber_error

    # ------------------------------------------------------------------
    # Contexts
    # ------------------------------------------------------------------
    def create_context(self) -> MessageContext:
        context = MessageContext(self.registry, broker=self)
        logger.debug("[context] created id=%s", context.id)
        return context

    def dispose_context(self, context: MessageContext) -> None:
        context.dispose()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------
    def subscribe(self, context: MessageContext, channel: Hashable, callback: Callable[[Any], None]) -> Subscription:
        channel = validate_channel(channel)
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        if context.registry is not self.registry:
            raise ForeignContextError(f"Context {context.id} was not created by this broker")
        if context.is_disposed:
            raise ContextDisposedError(f"Context {context.id} is disposed")

        subscription = Subscription(channel, callback, context, registry=self.registry)
        self.registry.register(channel, subscription)
        try:
            context.track(subscription)
        except ContextDisposedError:
            # disposed by another thread between the check and track
            self.registry.unregister(subscription)
            subscription.mark_removed()
            raise
        logger.debug("[subscribe] id=%s channel=%r context=%s", subscription.id, channel, context.id)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        if subscription.registry is not None and subscription.registry is not self.registry:
            raise ForeignContextError(f"Subscription {subscription.id} was not created by this broker")
        removed = self.registry.unregister(subscription)
        context = subscription.context
        if context is not None:
            context.untrack(subscription)
        subscription.mark_removed()
        if removed:
            logger.debug("[unsubscribe] id=%s channel=%r", subscription.id, subscription.channel)

    def subscriber_count(self, channel: Hashable) -> int:
        return self.registry.subscriber_count(validate_channel(channel))

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------
    def publish(self, channel: Hashable, payload: Any = None) -> int:
        """Deliver ``payload`` to every current subscriber of ``channel``.

        Returns the number of callbacks invoked, failed ones included.
        """
        channel = validate_channel(channel)
        subscribers = self.registry.snapshot(channel)
        if not subscribers:
            logger.debug("[publish] channel=%r no subscribers", channel)
            return 0

        if self.settings.log_payloads:
            logger.debug("[publish] channel=%r subscribers=%d payload=%r", channel, len(subscribers), payload)
        else:
            logger.debug("[publish] channel=%r subscribers=%d", channel, len(subscribers))

        invoked = 0
        for subscription in subscribers:
            invoked += 1
            try:
                subscription(payload)
            except Exception as exc:
                self._report(SubscriberCallbackError(subscription, channel, payload, exc))
        return invoked

    def _report(self, error: SubscriberCallbackError) -> None:
        try:
            self._error_handler(error)
        except Exception:
            logger.exception("[publish] error handler failed for subscription id=%s", error.subscription.id)
