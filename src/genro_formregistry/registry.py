# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Registry - shared composite form for independently developed components.

A Registry owns one PathTree (the composite form) and one EventChannel.
Components register their root Groups by name, and add Groups or Controls
below nodes registered by other components. Every insertion is announced
on the channel after the tree has been updated, so subscribers always see
a consistent tree.

Registration order:
    Components register independently, so a child may be offered before
    its parent exists. Such a registration is dropped, not raised: the
    component is expected to subscribe before the parent shows up and to
    register when the event establishing the parent path arrives.
    ``when_available`` packages this pattern.

Lifetime:
    Each logical session (one screen or view) constructs its own Registry
    and closes it when the session ends. There is no shared default
    instance.

Example:
    >>> registry = Registry('customer-screen')
    >>> events = []
    >>> registry.subscribe(events.append)
    >>> registry.register_root('form1', Group())
    >>> registry.register_element('form1', 'name', Control(name_input))
    True
    >>> [e.path for e in events]
    ['form1', 'form1.name']
    >>> registry.get_control('form1.name').handle is name_input
    True
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator

from .events import EventCallback, EventChannel, EventKind, RegistrationEvent, Subscription
from .exceptions import InvalidPathError, RegistryClosedError
from .node import Group, Node, NodeKind, is_node
from .paths import is_prefix, join_path, parse_path, validate_name
from .tree import PathTree

logger = logging.getLogger("genro_formregistry.registry")


class Registry:
    """Composite form registry with structural change events.

    Attributes:
        name: Optional label identifying the session in logs and repr.
    """

    __slots__ = ('name', '_tree', '_channel', '_closed')

    def __init__(self, name: str | None = None) -> None:
        """Create an empty Registry.

        Args:
            name: Optional label for log records, e.g. the screen name.
        """
        self.name = name
        self._tree = PathTree()
        self._channel = EventChannel()
        self._closed = False

    def __repr__(self) -> str:
        state = ', closed' if self._closed else ''
        return f"Registry({self.name!r}, {self._tree.root.keys()}{state})"

    def __enter__(self) -> Registry:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _check_open(self) -> None:
        if self._closed:
            raise RegistryClosedError(f"Registry {self.name!r} is closed")

    # ==================== Registration ====================

    def register_root(self, name: str, group: Group) -> None:
        """Register a root subtree under name, replacing any previous one.

        Emits ROOT_REGISTERED once the tree holds the new group.

        Args:
            name: Root name, a single non-empty segment.
            group: The Group to register.

        Raises:
            InvalidPathError: If name is malformed or group is None.
            TypeError: If group is not a Group.
        """
        self._check_open()
        validate_name(name)
        if group is None:
            raise InvalidPathError(f"Cannot register None as root '{name}'")
        if not is_node(group) or group.kind is not NodeKind.GROUP:
            raise TypeError(f"root '{name}' must be a Group, not {type(group).__name__}")

        self._tree.set_root_child(name, group)
        logger.debug("%r: root '%s' registered", self, name)
        self._channel.publish(RegistrationEvent(EventKind.ROOT_REGISTERED, name))

    def register_element(self, parent_path: str, child_name: str, node: Node) -> bool:
        """Add node as child_name of the Group at parent_path.

        The call is a no-op when parent_path does not resolve to a Group
        (the parent is not registered yet) or when the Group already has a
        child named child_name. Otherwise the node is inserted and
        ELEMENT_REGISTERED is emitted with the node's full path.

        Args:
            parent_path: Dotted path of the parent Group ('' for the root).
            child_name: Name of the new child, a single non-empty segment.
            node: Group or Control to insert.

        Returns:
            True if the node was inserted, False if the call was a no-op.

        Raises:
            InvalidPathError: If parent_path or child_name is malformed,
                or node is None.
            TypeError: If node is not a Group or a Control.
        """
        self._check_open()
        parse_path(parent_path)
        validate_name(child_name)
        if node is None:
            raise InvalidPathError(f"Cannot register None as '{child_name}'")
        if not is_node(node):
            raise TypeError(
                f"node must be a Group or a Control, not {type(node).__name__}"
            )

        path = join_path(parent_path, child_name)
        try:
            parent = self._tree.resolve_group(parent_path)
        except KeyError as e:
            logger.debug("%r: dropped '%s', parent not available (%s)", self, path, e.args[0])
            return False

        if not self._tree.add_child(parent, child_name, node):
            logger.debug("%r: '%s' already registered, ignored", self, path)
            return False

        logger.debug("%r: element '%s' registered", self, path)
        self._channel.publish(
            RegistrationEvent(EventKind.ELEMENT_REGISTERED, path, node)
        )
        return True

    # ==================== Lookup ====================

    def get_control(self, path: str) -> Node | None:
        """Get the node at path, or None if there is none."""
        self._check_open()
        try:
            return self._tree.resolve(path)
        except (KeyError, InvalidPathError):
            return None

    def get_group(self, path: str) -> Group | None:
        """Get the Group at path, or None if missing or not a Group."""
        self._check_open()
        try:
            return self._tree.resolve_group(path)
        except (KeyError, InvalidPathError):
            return None

    def get_root(self) -> Group:
        """Return the root Group of the composite form.

        The Group is shared, not copied: later registrations are visible
        through it.
        """
        self._check_open()
        return self._tree.root

    def walk(self) -> Iterator[tuple[str, Node]]:
        """Yield (path, node) for every registered node, depth first."""
        self._check_open()
        return self._tree.walk()

    # ==================== Events ====================

    def subscribe(self, callback: EventCallback) -> Subscription:
        """Subscribe callback to the registration events published from now on."""
        self._check_open()
        return self._channel.subscribe(callback)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Cancel a subscription returned by subscribe."""
        self._channel.unsubscribe(subscription)

    def when_available(
        self, path: str, callback: Callable[[Node], Any]
    ) -> Subscription:
        """Call callback(node) once the node at path exists.

        If path already resolves, callback is called immediately. Otherwise
        it is called from within the delivery of the first event that makes
        path resolvable, that is an event for path itself or for one of its
        ancestors.

        Args:
            path: Dotted path of the awaited node.
            callback: Called once with the node.

        Returns:
            The underlying Subscription; it is cancelled once callback has
            been called, and can be cancelled earlier to stop waiting.

        Raises:
            InvalidPathError: If path is malformed.
        """
        self._check_open()
        parse_path(path)

        def on_event(event: RegistrationEvent) -> None:
            if not is_prefix(event.path, path):
                return
            try:
                node = self._tree.resolve(path)
            except KeyError:
                return
            subscription.unsubscribe()
            callback(node)

        subscription = self._channel.subscribe(on_event)
        try:
            node = self._tree.resolve(path)
        except KeyError:
            return subscription
        subscription.unsubscribe()
        callback(node)
        return subscription

    # ==================== Lifetime ====================

    @property
    def closed(self) -> bool:
        """True once close() has been called."""
        return self._closed

    def close(self) -> None:
        """End the session: cancel all subscriptions and discard the tree.

        Further use of the registry raises RegistryClosedError. Calling
        close() again does nothing.
        """
        if self._closed:
            return
        self._channel.clear()
        self._tree = PathTree()
        self._closed = True
        logger.debug("%r: closed", self)
