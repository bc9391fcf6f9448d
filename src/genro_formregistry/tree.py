# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PathTree - the composite form as a tree of named nodes.

The tree has a single root Group. Nodes are addressed by dotted paths
resolved one child lookup per segment; descending through a Control is a
miss, like a missing segment.
"""

from __future__ import annotations

from typing import Iterator

from .node import Group, Node, NodeKind
from .paths import parse_path


class PathTree:
    """A tree of Groups and Controls rooted in one Group.

    Example:
        >>> tree = PathTree()
        >>> tree.set_root_child('form1', Group())
        >>> tree.add_child(tree.resolve_group('form1'), 'name', Control(name_input))
        True
        >>> tree.resolve('form1.name').handle is name_input
        True
    """

    __slots__ = ('_root',)

    def __init__(self) -> None:
        self._root = Group()

    def __repr__(self) -> str:
        return f"PathTree({self._root.keys()})"

    @property
    def root(self) -> Group:
        """The root Group (a live reference)."""
        return self._root

    def resolve(self, path: str) -> Node:
        """Get the node at the given path.

        Args:
            path: Dotted path. The empty path resolves to the root.

        Returns:
            The node at path.

        Raises:
            KeyError: If a segment is missing or a Control is traversed.
            InvalidPathError: If path is malformed.
        """
        parts = parse_path(path)
        current: Node = self._root
        for i, part in enumerate(parts):
            if current.kind is not NodeKind.GROUP:
                remaining = '.'.join(parts[i:])
                raise KeyError(f"'{parts[i - 1]}' is a control, cannot access '{remaining}'")
            if part not in current:
                raise KeyError(f"Path segment '{part}' not found")
            current = current[part]
        return current

    def resolve_group(self, path: str) -> Group:
        """Get the Group at the given path.

        Raises:
            KeyError: If path does not resolve or resolves to a Control.
            InvalidPathError: If path is malformed.
        """
        node = self.resolve(path)
        if node.kind is not NodeKind.GROUP:
            raise KeyError(f"'{path}' is a control, not a group")
        return node

    def set_root_child(self, name: str, group: Group) -> None:
        """Set ``group`` as the root child ``name``, overwriting any previous one."""
        self._root._insert_child(name, group)

    def add_child(self, group: Group, name: str, node: Node) -> bool:
        """Insert node under name in group if the name is free.

        Returns:
            True if inserted, False if group already had a child named name.
        """
        if name in group:
            return False
        group._insert_child(name, node)
        return True

    def walk(self) -> Iterator[tuple[str, Node]]:
        """Yield (path, node) for every node below the root."""
        return self._root.walk()
