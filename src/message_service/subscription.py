from __future__ import annotations

import uuid
import weakref
from enum import Enum
from typing import Any, Callable, Hashable, Optional


class SubscriptionState(str, Enum):
    ACTIVE = "active"
    REMOVED = "removed"


class Subscription:
    """Handle binding a callback to a channel within a context.

    Only ``MessageBroker.subscribe`` creates these. The owning context is held
    weakly; it is a lookup aid, not an owner.
    """

    __slots__ = ("id", "channel", "callback", "state", "registry", "_context_ref")

    def __init__(self, channel: Hashable, callback: Callable[[Any], None], context, sub_id: str | None = None, registry=None):
        self.id = sub_id or uuid.uuid4().hex
        self.channel = channel
        self.callback = callback
        self.state = SubscriptionState.ACTIVE
        self.registry = registry  # set by the broker that registered it
        self._context_ref = weakref.ref(context)

    @property
    def context(self) -> Optional[Any]:
        return self._context_ref()

    @property
    def active(self) -> bool:
        return self.state is SubscriptionState.ACTIVE

    def mark_removed(self) -> None:
        # terminal
        self.state = SubscriptionState.REMOVED

    def __call__(self, payload: Any) -> None:
        self.callback(payload)

    def __repr__(self) -> str:
        return f"Subscription(id={self.id!r}, channel={self.channel!r}, state={self.state.value})"
