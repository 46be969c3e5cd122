from __future__ import annotations

import logging
import threading
from typing import Dict, Hashable, List, Tuple

from .errors import DuplicateSubscriptionError
from .subscription import Subscription

logger = logging.getLogger(__name__)


class ChannelRegistry:
    """In-memory directory of channel -> subscriptions, in registration order.

    All mutation and snapshotting happens under one lock. Callers iterate the
    tuples returned by ``snapshot`` without holding it.
    """

    def __init__(self):
        self._channels: Dict[Hashable, List[Subscription]] = {}
        self._by_id: Dict[str, Subscription] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def register(self, channel: Hashable, subscription: Subscription) -> None:
        with self._lock:
            if subscription.id in self._by_id:
                logger.critical("[registry] duplicate subscription id=%s channel=%r", subscription.id, channel)
                raise DuplicateSubscriptionError(f"Subscription {subscription.id} is already registered")
            self._channels.setdefault(channel, []).append(subscription)
            self._by_id[subscription.id] = subscription
        logger.debug("[registry] registered id=%s channel=%r", subscription.id, channel)

    def unregister(self, subscription: Subscription) -> bool:
        """Remove ``subscription``; returns False when it was not registered."""
        with self._lock:
            if self._by_id.get(subscription.id) is not subscription:
                return False
            del self._by_id[subscription.id]
            entry = self._channels.get(subscription.channel, [])
            entry.remove(subscription)
            if not entry:
                self._channels.pop(subscription.channel, None)
        logger.debug("[registry] unregistered id=%s channel=%r", subscription.id, subscription.channel)
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def snapshot(self, channel: Hashable) -> Tuple[Subscription, ...]:
        with self._lock:
            return tuple(self._channels.get(channel, ()))

    def subscriber_count(self, channel: Hashable) -> int:
        with self._lock:
            return len(self._channels.get(channel, ()))

    def channels(self) -> List[Hashable]:
        with self._lock:
            return list(self._channels)

    def __contains__(self, subscription: object) -> bool:
        if not isinstance(subscription, Subscription):
            return False
        with self._lock:
            return self._by_id.get(subscription.id) is subscription

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)
