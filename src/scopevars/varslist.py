"""VarsList: an ordered sequence with default fallback and list algebra.

Reads past the end return the list's default value instead of raising.
Writes past the end back-fill the gap with the default (or an explicit fill
value), so indexes stay contiguous. Operations that build a new list
(slice, splice, reverse, map, filter) return a fresh VarsList.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Iterable, Iterator

from scopevars.cell import unwrap
from scopevars.container import Container, Modifier, expand, rename

_UNSET = object()


def _span(size: int, offset: int, length: int | None) -> tuple[int, int]:
    """Turn an (offset, length) pair into list start/stop bounds.

    Negative offsets count from the end. A negative length stops that many
    items before the end.
    """
    start = offset if offset >= 0 else max(size + offset, 0)
    start = min(start, size)
    if length is None:
        stop = size
    elif length < 0:
        stop = max(size + length, start)
    else:
        stop = min(start + length, size)
    return start, stop


class VarsList(Container):
    """An index-addressable list with the same default convention as Vars."""

    def __init__(self, items: Iterable | None = None, default: Any = None) -> None:
        self._items: list = list(items) if items is not None else []
        self._default = default

    # --- Construction ---

    @classmethod
    def from_array(cls, source: Iterable) -> VarsList:
        """Make a new list holding every element of source."""
        self = cls()
        self.concat(source)
        return self

    @classmethod
    def wrap(cls, items: list) -> VarsList:
        """Make a list that shares items as its storage."""
        self = cls()
        self._items = items
        return self

    @property
    def default(self) -> Any:
        return self._default

    def set_default(self, value: Any) -> None:
        """Set the value returned for out-of-range reads and used to back-fill."""
        self._default = value

    # --- Read operations ---

    def get(self, idx: int, default: Any = _UNSET) -> Any:
        """Return the element at idx, or default (else the list default)."""
        if self.has(idx):
            return unwrap(self._items[idx], self)
        return self._default if default is _UNSET else default

    def has(self, idx: int) -> bool:
        """True when idx addresses an element; negative indexes count from the end."""
        size = len(self._items)
        return isinstance(idx, int) and -size <= idx < size

    def keys(self) -> range:
        return range(len(self._items))

    def count(self) -> int:
        return len(self._items)

    def index(self, value: Any) -> int:
        """Position of the first element equal to value, or -1."""
        for i, item in enumerate(self):
            if item == value:
                return i
        return -1

    def join(self, sep: str = ",") -> str:
        return sep.join(str(item) for item in self)

    def __iter__(self) -> Iterator:
        for item in list(self._items):
            yield unwrap(item, self)

    def __contains__(self, value: object) -> bool:
        return self.index(value) != -1

    def __eq__(self, other: object) -> bool:
        if isinstance(other, VarsList):
            return list(self) == list(other)
        if isinstance(other, list):
            return list(self) == other
        return NotImplemented

    __hash__ = None

    # --- Write operations ---

    def set(self, idx: int, value: Any, fill: Any = _UNSET) -> None:
        """Store value at idx, back-filling any gap.

        Past the end, the gap is filled before value. A negative idx past the
        head grows the list at the front, so get(idx) afterwards returns value.
        """
        pad = self._default if fill is _UNSET else fill
        size = len(self._items)
        if idx >= size:
            self._items.extend([pad] * (idx - size))
            self._items.append(value)
        elif idx < -size:
            self._items[0:0] = [value] + [pad] * (-idx - size - 1)
        else:
            self._items[idx] = value

    def push(self, *values: Any) -> None:
        self._items.extend(values)

    def pop(self) -> Any:
        """Remove and return the last element (the default if empty)."""
        if not self._items:
            return self._default
        return unwrap(self._items.pop(), self)

    def unshift(self, *values: Any) -> None:
        """Insert values at the head, keeping their order."""
        self._items[0:0] = values

    def shift(self) -> Any:
        """Remove and return the first element (the default if empty)."""
        if not self._items:
            return self._default
        return unwrap(self._items.pop(0), self)

    def concat(self, *sources: Iterable) -> None:
        """Append every element of each source."""
        for source in sources:
            self._items.extend(source)

    def insert(self, offset: int, *values: Any) -> None:
        start, _ = _span(len(self._items), offset, 0)
        self._items[start:start] = values

    def remove(self, offset: int, length: int = 1) -> None:
        start, stop = _span(len(self._items), offset, length)
        del self._items[start:stop]

    def splice(
        self, offset: int, length: int | None, replacement: Iterable | None = None
    ) -> VarsList:
        """Remove length items at offset, insert replacement, return the removed."""
        start, stop = _span(len(self._items), offset, length)
        removed = self._items[start:stop]
        self._items[start:stop] = list(replacement) if replacement is not None else []
        return type(self).from_array(removed)

    def sort(
        self,
        comparator: Callable[[Any, Any], int] | None = None,
        *,
        key: Callable[[Any], Any] | None = None,
    ) -> None:
        """Stable in-place sort.

        Without arguments, natural ordering. comparator is an old-style
        cmp(a, b) function returning <0, 0 or >0; key is a sort-key function.
        Pass one or the other. Cells are compared by their resolved values.
        """
        if comparator is not None and key is not None:
            raise TypeError("sort() takes a comparator or key=, not both")
        if comparator is not None:
            key = functools.cmp_to_key(comparator)
        base = key if key is not None else (lambda value: value)
        self._items.sort(key=lambda item: base(unwrap(item, self)))

    def __setitem__(self, idx: int, value: Any) -> None:
        self.set(idx, value)

    def __delitem__(self, idx: int) -> None:
        self.remove(idx)

    # --- Derived lists ---

    def reverse(self) -> VarsList:
        """A reversed copy. This list is left untouched."""
        return type(self).from_array(reversed(self._items))

    def slice(self, offset: int, length: int | None = None) -> VarsList:
        start, stop = _span(len(self._items), offset, length)
        return type(self).from_array(self._items[start:stop])

    def each(self, fn: Callable[[Any], Any]) -> None:
        for item in self:
            fn(item)

    def map(self, fn: Callable[[Any], Any]) -> VarsList:
        return type(self).from_array(fn(item) for item in self)

    def filter(self, fn: Callable[[Any], bool] | None = None) -> VarsList:
        """Keep elements where fn(item) is truthy (or the item itself is)."""
        test = fn if fn is not None else bool
        return type(self).from_array(item for item in self if test(item))

    def reduce(self, fn: Callable[[Any, Any], Any], initial: Any = None) -> Any:
        """Fold left: fn(carry, item), starting from initial."""
        return functools.reduce(fn, self, initial)

    # --- Export ---

    def to_array(self, modifier: Modifier | None = None) -> list | dict:
        """Export to a plain list, or to a dict keyed by renamed indexes."""
        if modifier:
            return {rename(modifier, i): v for i, v in self.items()}
        return list(self)

    def to_array_recursive(self, depth: int | None = None) -> Any:
        """Export to a plain list, descending into nested Vars and VarsList.

        depth=None is unbounded. depth=0 returns this list unexpanded.
        """
        if depth is not None and depth == 0:
            return self
        return [expand(item, depth) for item in self]

    export_recursive = to_array_recursive

    def __repr__(self) -> str:
        return f"VarsList({self._items!r})"
