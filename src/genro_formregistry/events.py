# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Registration events and the channel that broadcasts them.

Every structural change of the composite form is announced as a
``RegistrationEvent`` through an ``EventChannel``. Delivery is synchronous,
in subscription order, and there is no replay: a subscriber only receives
events published while it is subscribed.

Subscribers that need a node which is not registered yet subscribe first,
then act when the event for the node (or one of its ancestors) arrives::

    def on_event(event):
        if event.path == 'form1':
            registry.register_element('form1', 'notes', Control(notes_input))
            subscription.unsubscribe()

    subscription = registry.subscribe(on_event)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .node import Node

logger = logging.getLogger("genro_formregistry.events")


class EventKind(Enum):
    """Kind of structural change announced by a RegistrationEvent."""

    ROOT_REGISTERED = 'root'
    ELEMENT_REGISTERED = 'element'


@dataclass(frozen=True, slots=True)
class RegistrationEvent:
    """A structural change of the composite form.

    Attributes:
        kind: ROOT_REGISTERED or ELEMENT_REGISTERED.
        path: Root name for ROOT_REGISTERED, full dotted path of the new
            node for ELEMENT_REGISTERED.
        node: The inserted node for ELEMENT_REGISTERED, None otherwise.
    """

    kind: EventKind
    path: str
    node: Node | None = None


EventCallback = Callable[[RegistrationEvent], Any]


class Subscription:
    """Handle of one subscriber of an EventChannel.

    Usable as a context manager: the subscription is cancelled on exit.
    """

    __slots__ = ('_channel', 'callback', '_active')

    def __init__(self, channel: EventChannel, callback: EventCallback) -> None:
        self._channel = channel
        self.callback = callback
        self._active = True

    def __repr__(self) -> str:
        state = 'active' if self._active else 'cancelled'
        return f"Subscription({self.callback!r}, {state})"

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.unsubscribe()

    @property
    def active(self) -> bool:
        """True until the subscription is cancelled."""
        return self._active

    def unsubscribe(self) -> None:
        """Stop delivery to this subscriber. Idempotent."""
        self._channel.unsubscribe(self)


class EventChannel:
    """Synchronous multicast channel of RegistrationEvents.

    Example:
        >>> channel = EventChannel()
        >>> received = []
        >>> sub = channel.subscribe(received.append)
        >>> channel.publish(RegistrationEvent(EventKind.ROOT_REGISTERED, 'form1'))
        >>> received[0].path
        'form1'
        >>> sub.unsubscribe()
    """

    __slots__ = ('_subscriptions',)

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def __repr__(self) -> str:
        return f"EventChannel({len(self._subscriptions)} subscribers)"

    def __len__(self) -> int:
        """Return the number of active subscriptions."""
        return len(self._subscriptions)

    def subscribe(self, callback: EventCallback) -> Subscription:
        """Register callback for every event published from now on.

        Each call creates an independent subscription, even for a callback
        that is already subscribed.

        Args:
            callback: Called as ``callback(event)``.

        Returns:
            The Subscription handle, used to unsubscribe.
        """
        if not callable(callback):
            raise TypeError(f"callback must be callable, not {type(callback).__name__}")
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Cancel a subscription. Unknown or cancelled ones are ignored."""
        subscription._active = False
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def publish(self, event: RegistrationEvent) -> None:
        """Deliver event to the current subscribers, in subscription order.

        Subscribers added while the event is being delivered do not receive
        it; subscribers cancelled before their turn are skipped. A callback
        raising an exception is logged and does not stop delivery.
        """
        for subscription in list(self._subscriptions):
            if not subscription._active:
                continue
            try:
                subscription.callback(event)
            except Exception:
                logger.exception(
                    "Subscriber %r failed on %s event for '%s'",
                    subscription.callback, event.kind.value, event.path,
                )

    def clear(self) -> None:
        """Cancel every subscription."""
        for subscription in self._subscriptions:
            subscription._active = False
        self._subscriptions.clear()
