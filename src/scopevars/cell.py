"""Value cells: stored values that may be computed on read.

A cell is either Concrete (a plain value, always resolved) or Deferred
(a function plus captured arguments). A Deferred cell is resolved against
the container that owns it: the function receives the owner as its first
argument, followed by the captured arguments.

Deferred cells come in two flavors:
- dynamic (oneshot=False): recomputed on every read.
- lazy (oneshot=True): computed on first read, then cached until
  invalidate() marks it dirty again.

Containers never type-test their entries themselves; they call unwrap()
and invalidate().
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger("scopevars.cell")

_UNSET = object()


class ValueCell(Generic[T]):
    """Common base for Concrete and Deferred cells."""

    __slots__ = ()

    def resolve(self, owner: Any = None) -> T:
        raise NotImplementedError

    def invalidate(self) -> None:
        raise NotImplementedError

    @property
    def dirty(self) -> bool:
        raise NotImplementedError


class Concrete(ValueCell[T]):
    """A cell holding a plain value. Always resolved, never dirty."""

    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    def resolve(self, owner: Any = None) -> T:
        return self.value

    def invalidate(self) -> None:
        pass

    @property
    def dirty(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"Concrete({self.value!r})"


class Deferred(ValueCell[T]):
    """A cell whose value is produced by calling fn(owner, *args)."""

    __slots__ = ("fn", "args", "oneshot", "_dirty", "_value")

    def __init__(
        self,
        fn: Callable[..., T],
        args: tuple | list = (),
        oneshot: bool = False,
    ) -> None:
        self.fn = fn
        self.args = tuple(args)
        self.oneshot = oneshot
        self._dirty = True
        self._value: Any = _UNSET

    @property
    def dirty(self) -> bool:
        return self._dirty

    def resolve(self, owner: Any = None) -> T:
        """Return the value, recomputing unless a lazy cache is still clean."""
        if self.oneshot and not self._dirty:
            return self._value

        logger.debug("Resolving %r", self)
        result = unwrap(self.fn(owner, *self.args), owner)

        if self.oneshot:
            self._value = result
            self._dirty = False
        return result

    def invalidate(self) -> None:
        """Mark dirty. The next resolve() recomputes."""
        if not self._dirty:
            logger.debug("Invalidating %r", self)
        self._dirty = True
        self._value = _UNSET

    def __repr__(self) -> str:
        name = getattr(self.fn, "__name__", repr(self.fn))
        if not self.oneshot:
            return f"Deferred({name}, dynamic)"
        state = "dirty" if self._dirty else f"cached={self._value!r}"
        return f"Deferred({name}, {state})"


def make_cell(source: Any, oneshot: bool = False, args: tuple | list = ()) -> ValueCell:
    """Wrap source in a cell: callables become Deferred, anything else Concrete."""
    if callable(source):
        return Deferred(source, args, oneshot)
    return Concrete(source)


def unwrap(value: Any, owner: Any = None) -> Any:
    """Resolve value if it's a cell (transitively), otherwise return it as-is."""
    while isinstance(value, ValueCell):
        value = value.resolve(owner)
    return value


def invalidate(value: Any) -> None:
    """Mark value dirty if it's a cell. Plain values are left alone."""
    if isinstance(value, ValueCell):
        value.invalidate()


def lazy(fn: Callable[..., T]) -> Deferred[T]:
    """Decorator/factory to create a memoized Deferred cell.

    Usage:
        calls = []

        @lazy
        def greeting(owner):
            calls.append(1)
            return "Hello, " + owner.get("name")

        v = Vars()
        v.set("name", "World")
        v.set("greeting", greeting)
        v.get("greeting")  # "Hello, World"
        v.get("greeting")  # cached, calls == [1]
    """
    return Deferred(fn, oneshot=True)


def dynamic(fn: Callable[..., T]) -> Deferred[T]:
    """Decorator/factory to create a Deferred cell recomputed on every read."""
    return Deferred(fn, oneshot=False)
