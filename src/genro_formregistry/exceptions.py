# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FormRegistry exceptions."""

from __future__ import annotations


class FormRegistryError(Exception):
    """Base exception for FormRegistry errors."""

    pass


class InvalidPathError(FormRegistryError, ValueError):
    """Raised when a path, a child name or a node argument is malformed."""

    pass


class RegistryClosedError(FormRegistryError, RuntimeError):
    """Raised when a closed Registry is used."""

    pass
