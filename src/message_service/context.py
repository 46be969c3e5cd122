from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict, Tuple

from .errors import ContextDisposedError
from .registry import ChannelRegistry
from .subscription import Subscription

logger = logging.getLogger(__name__)


class MessageContext:
    """Lifetime scope for subscriptions.

    Whatever subscribes through a context is torn down with it, so a component
    creates one when it connects and disposes it when it disconnects.
    """

    def __init__(self, registry: ChannelRegistry, broker=None):
        self.id = uuid.uuid4().hex
        self.registry = registry
        self.broker = broker
        self._owned: Dict[str, Subscription] = {}  # insertion-ordered
        self._disposed = False
        self._lock = threading.Lock()

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def subscriptions(self) -> Tuple[Subscription, ...]:
        with self._lock:
            return tuple(self._owned.values())

    def track(self, subscription: Subscription) -> None:
        with self._lock:
            if self._disposed:
                raise ContextDisposedError(f"Context {self.id} is disposed")
            self._owned[subscription.id] = subscription

    def untrack(self, subscription: Subscription) -> None:
        with self._lock:
            self._owned.pop(subscription.id, None)

    def dispose(self) -> None:
        """Unregister every owned subscription. Safe to call more than once."""
        with self._lock:
            owned = list(self._owned.values())
            self._owned.clear()
            already = self._disposed
            self._disposed = True
        for subscription in owned:
            self.registry.unregister(subscription)
            subscription.mark_removed()
        if not already:
            logger.debug("[context] disposed id=%s removed=%d", self.id, len(owned))

    def __enter__(self) -> "MessageContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else f"{len(self._owned)} subscriptions"
        return f"MessageContext(id={self.id!r}, {state})"
