from __future__ import annotations

"""Context-first function API, shaped like a host page's message service.

Every call routes through the broker the context was created by, so two
contexts from different brokers never see each other's traffic and nothing
here is process-wide.
"""

from typing import Any, Callable, Hashable

from .broker import MessageBroker
from .context import MessageContext
from .errors import ContextDisposedError
from .subscription import Subscription


def _broker_for(context: MessageContext) -> MessageBroker:
    if context.broker is None:
        raise ContextDisposedError(f"Context {context.id} is not bound to a broker")
    return context.broker


def create_message_context(broker: MessageBroker | None = None) -> MessageContext:
    """Return a new context on ``broker`` (a fresh broker when omitted)."""
    return (broker or MessageBroker()).create_context()


def release_message_context(context: MessageContext) -> None:
    context.dispose()


def subscribe(context: MessageContext, channel: Hashable, callback: Callable[[Any], None]) -> Subscription:
    return _broker_for(context).subscribe(context, channel, callback)


def unsubscribe(subscription: Subscription) -> None:
    context = subscription.context
    if context is not None and context.broker is not None:
        context.broker.unsubscribe(subscription)
        return
    # no broker reachable: context collected, or built directly on a registry
    if subscription.registry is not None:
        subscription.registry.unregister(subscription)
    if context is not None:
        context.untrack(subscription)
    subscription.mark_removed()


def publish(context: MessageContext, channel: Hashable, message: Any) -> int:
    return _broker_for(context).publish(channel, message)
