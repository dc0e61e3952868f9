"""Exceptions raised by scopevars containers.

Only two conditions are errors. Missing keys and out-of-range indexes are
not: they fall back to the container's default value.
"""

from __future__ import annotations


class VarsError(Exception):
    """Base exception for all scopevars errors."""

    pass


class InvalidInput(VarsError, TypeError):
    """Raised when a container is asked to import from something it can't read."""

    def __init__(self, source: object):
        self.source = source
        super().__init__(f"Can't import from {type(source).__name__}: {source!r}")


class ReadOnlyField(VarsError, AttributeError):
    """Raised when assigning to a computed field that has no setter."""

    def __init__(self, name: str):
        super().__init__(f"Cannot reassign to {name}.")
        self.name = name
