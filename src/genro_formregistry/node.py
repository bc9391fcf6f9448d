# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FormRegistry node classes.

A node of the composite form is one of two kinds, tagged by ``NodeKind``:

- ``Group``: a container of named child nodes.
- ``Control``: a leaf wrapping an opaque, externally owned handle
  (typically an input control object). The registry never looks inside it.

Example:
    >>> address = Group({'street': Control(street_input), 'zip': Control(zip_input)})
    >>> address['zip'].kind
    <NodeKind.CONTROL: 'control'>
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Union

from .paths import join_path, validate_name


class NodeKind(Enum):
    """Tag distinguishing the two node kinds."""

    GROUP = 'group'
    CONTROL = 'control'


class Control:
    """A leaf node holding an opaque handle.

    Controls compare by identity: two Controls wrapping the same handle are
    distinct nodes.

    Example:
        >>> ctrl = Control(name_input)
        >>> ctrl.handle is name_input
        True
    """

    __slots__ = ('handle',)

    kind = NodeKind.CONTROL

    def __init__(self, handle: Any) -> None:
        self.handle = handle

    def __repr__(self) -> str:
        return f"Control({self.handle!r})"

    @property
    def is_group(self) -> bool:
        """Always False for a Control."""
        return False

    @property
    def is_control(self) -> bool:
        """Always True for a Control."""
        return True


class Group:
    """A container node mapping child names to nodes.

    Children keep their insertion order. A Group exposes read access only:
    children are added through the registry that owns the tree, so that
    every structural change is announced.

    Example:
        >>> group = Group({'name': Control(name_input), 'address': {'zip': Control(zip_input)}})
        >>> list(group)
        ['name', 'address']
        >>> [path for path, node in group.walk()]
        ['name', 'address', 'address.zip']
    """

    __slots__ = ('_children',)

    kind = NodeKind.GROUP

    def __init__(self, source: dict[str, Any] | None = None) -> None:
        """Initialize a Group.

        Args:
            source: Optional mapping of child name to child. Values may be
                Group or Control instances, nested dicts (converted to
                Groups), or any other object (wrapped in a Control).

        Raises:
            TypeError: If source is not a dict.
            InvalidPathError: If a child name is empty or contains a dot.
        """
        self._children: dict[str, Node] = {}
        if source is not None:
            if not isinstance(source, dict):
                raise TypeError(
                    f"source must be dict, not {type(source).__name__}"
                )
            for name, value in source.items():
                self._children[validate_name(name)] = as_node(value)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"Group({list(self._children)})"

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[str]:
        """Iterate over child names in insertion order."""
        return iter(self._children)

    def __contains__(self, name: object) -> bool:
        return name in self._children

    def __getitem__(self, name: str) -> Node:
        return self._children[name]

    @property
    def is_group(self) -> bool:
        """Always True for a Group."""
        return True

    @property
    def is_control(self) -> bool:
        """Always False for a Group."""
        return False

    # ==================== Access ====================

    def get(self, name: str, default: Any = None) -> Any:
        """Get a direct child by name, with default."""
        return self._children.get(name, default)

    def keys(self) -> list[str]:
        """Return child names in insertion order."""
        return list(self._children)

    def values(self) -> list[Node]:
        """Return child nodes in insertion order."""
        return list(self._children.values())

    def items(self) -> list[tuple[str, Node]]:
        """Return (name, node) pairs in insertion order."""
        return list(self._children.items())

    def _insert_child(self, name: str, node: Node) -> None:
        """Set child ``name`` to ``node``, replacing any previous child."""
        self._children[name] = node

    # ==================== Walk ====================

    def walk(self, _prefix: str = '') -> Iterator[tuple[str, Node]]:
        """Yield (path, node) for every descendant, depth first.

        Example:
            >>> for path, node in group.walk():
            ...     print(path, node.kind)
        """
        for name, node in self._children.items():
            path = join_path(_prefix, name)
            yield path, node
            if node.kind is NodeKind.GROUP:
                yield from node.walk(path)

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Convert to a plain nested dict.

        Groups become dicts, Controls become their handle.
        """
        result: dict[str, Any] = {}
        for name, node in self._children.items():
            if node.kind is NodeKind.GROUP:
                result[name] = node.as_dict()
            else:
                result[name] = node.handle
        return result


Node = Union[Group, Control]


def is_node(value: Any) -> bool:
    """True if value is a Group or a Control."""
    return isinstance(value, (Group, Control))


def as_node(value: Any) -> Node:
    """Coerce a source value into a node.

    Nodes are returned as they are, dicts become Groups and anything else
    is wrapped in a Control.
    """
    if is_node(value):
        return value
    if isinstance(value, dict):
        return Group(value)
    return Control(value)
