# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-FormRegistry - Shared composite forms for nested UI components.

A lightweight, zero-dependency library letting independently developed
components contribute named Groups and Controls to one composite form,
with an event channel announcing every structural change.
"""

__version__ = "0.1.0"

from .events import EventChannel, EventKind, RegistrationEvent, Subscription
from .exceptions import FormRegistryError, InvalidPathError, RegistryClosedError
from .node import Control, Group, Node, NodeKind
from .paths import is_prefix, join_path, parse_path, validate_name
from .registry import Registry
from .tree import PathTree

__all__ = [
    # Core classes
    "Registry",
    "PathTree",
    # Nodes
    "Group",
    "Control",
    "Node",
    "NodeKind",
    # Events
    "EventChannel",
    "EventKind",
    "RegistrationEvent",
    "Subscription",
    # Paths
    "parse_path",
    "validate_name",
    "join_path",
    "is_prefix",
    # Exceptions
    "FormRegistryError",
    "InvalidPathError",
    "RegistryClosedError",
]
