# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Dotted path utilities.

Paths address nodes from the root of the composite form as dot-separated
child names, e.g. ``'mainForm.address.zip'``. The empty path addresses the
root itself. There is no escaping: a child name can never contain a dot.
"""

from __future__ import annotations

from typing import Any

from .exceptions import InvalidPathError


def parse_path(path: Any) -> tuple[str, ...]:
    """Split a dotted path into its validated segments.

    Args:
        path: Dotted path string. ``''`` addresses the root.

    Returns:
        Tuple of segments, empty for the root.

    Raises:
        InvalidPathError: If path is not a string or has an empty segment.

    Example:
        >>> parse_path('form1.address.zip')
        ('form1', 'address', 'zip')
        >>> parse_path('')
        ()
    """
    if not isinstance(path, str):
        raise InvalidPathError(f"path must be a string, not {type(path).__name__}")
    if not path:
        return ()
    segments = tuple(path.split('.'))
    if '' in segments:
        raise InvalidPathError(f"Empty segment in path '{path}'")
    return segments


def validate_name(name: Any) -> str:
    """Check that name is usable as a single child name.

    Raises:
        InvalidPathError: If name is empty, not a string, or contains a dot.
    """
    if not isinstance(name, str):
        raise InvalidPathError(f"name must be a string, not {type(name).__name__}")
    if not name:
        raise InvalidPathError("name must not be empty")
    if '.' in name:
        raise InvalidPathError(f"name '{name}' must not contain '.'")
    return name


def join_path(parent: str, name: str) -> str:
    """Return the path of child ``name`` under ``parent``."""
    return f"{parent}.{name}" if parent else name


def is_prefix(prefix: str, path: str) -> bool:
    """True if ``prefix`` addresses ``path`` or one of its ancestors.

    The test is segment-wise: ``'a.b'`` is a prefix of ``'a.b.c'`` but
    not of ``'a.bc'``.
    """
    if not prefix:
        return True
    return path == prefix or path.startswith(prefix + '.')
