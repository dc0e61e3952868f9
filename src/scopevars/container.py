"""Shared pieces of Vars and VarsList: the base class, the cursor, renaming.

Both containers expose the same read contract (get, has, keys, iteration
over (key, value) pairs). Iteration goes through a Cursor that asks the
owner for each value, so cells are unwrapped and computed fields show up
exactly as get() would return them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Iterator, Union

Modifier = Union[str, Callable[[Any], Any]]


class Cursor(Iterator[tuple]):
    """Forward, single-pass iterator over (key, value) pairs of a container.

    Keys are snapshotted when the cursor is created. Values are read lazily
    through owner.get() as the cursor advances. To start over, ask the
    container for a new cursor.
    """

    __slots__ = ("_owner", "_keys", "_pos")

    def __init__(self, owner: Container, keys: Iterable) -> None:
        self._owner = owner
        self._keys = list(keys)
        self._pos = 0

    def __iter__(self) -> Cursor:
        return self

    def __next__(self) -> tuple:
        if self._pos >= len(self._keys):
            raise StopIteration
        key = self._keys[self._pos]
        self._pos += 1
        return key, self._owner.get(key)

    def __length_hint__(self) -> int:
        return len(self._keys) - self._pos


class Container(ABC):
    """Abstract base for Vars and VarsList."""

    __slots__ = ()

    @abstractmethod
    def get(self, key, *default) -> Any: ...

    @abstractmethod
    def has(self, key) -> bool: ...

    @abstractmethod
    def keys(self) -> Iterable: ...

    @abstractmethod
    def count(self) -> int: ...

    @abstractmethod
    def export_recursive(self, depth: int | None = None) -> Any:
        """Plain-data export, descending into nested containers.

        depth=None is unbounded. depth=0 returns the container itself.
        """

    def items(self) -> Cursor:
        """A fresh cursor over (key, value) pairs."""
        return Cursor(self, self.keys())

    def __len__(self) -> int:
        return self.count()

    def __getitem__(self, key) -> Any:
        return self.get(key)

    def __contains__(self, key) -> bool:
        return self.has(key)


def rename(modifier: Modifier, key: Any) -> Any:
    """Apply an export/import name modifier to key.

    A string containing "%" is a format pattern ("data_%s"), a callable is a
    renaming function, and any other string is a literal prefix.
    """
    if isinstance(modifier, str) and "%" in modifier:
        return modifier % (key,)
    if callable(modifier):
        return modifier(key)
    return modifier + str(key)


def expand(value: Any, depth: int | None) -> Any:
    """Export value one level deeper if it's a container, else return it untouched."""
    if isinstance(value, Container):
        return value.export_recursive(None if depth is None else depth - 1)
    return value
