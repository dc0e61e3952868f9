"""Vars: an ordered, named container with lazy values and default fallback.

Entries are plain values or ValueCells. Reading a cell resolves it against
the container, so callers never see the cell itself. Missing names read as
the container's default value, and a "loose" container claims to have
every name.
"""

from __future__ import annotations

import collections.abc
import logging
from typing import Any, Callable, Iterable, Iterator, MutableMapping

from scopevars.cell import Deferred, invalidate, unwrap
from scopevars.container import Container, Modifier, expand, rename
from scopevars.errors import InvalidInput
from scopevars.varslist import VarsList

logger = logging.getLogger("scopevars.vars")

_UNSET = object()


class Vars(Container):
    """Ordered name → value mapping with lazy/dynamic entries."""

    def __init__(self, default: Any = None, loose: bool = False) -> None:
        self._vars: MutableMapping[str, Any] = {}
        self._default = default
        self._loose = loose

    # --- Construction ---

    @classmethod
    def from_array(cls, source: Any) -> Vars:
        """Make a new container and import everything from source."""
        self = cls()
        self.import_from(source)
        return self

    @classmethod
    def wrap(cls, mapping: MutableMapping[str, Any]) -> Vars:
        """Make a container that shares mapping as its storage.

        Mutations through either side are visible to the other.
        """
        self = cls()
        self._vars = mapping
        return self

    # --- Configuration ---

    @property
    def default(self) -> Any:
        return self._default

    def set_default(self, value: Any) -> None:
        """Set the value returned for missing names."""
        self._default = value

    @property
    def loose(self) -> bool:
        return self._loose

    def set_loose(self, flag: bool) -> None:
        """When set, has() returns True for any name."""
        self._loose = bool(flag)

    # --- Read operations ---

    def get(self, name: str, default: Any = _UNSET) -> Any:
        """Return the value for name, or default (else the container default)."""
        if name in self._vars:
            return unwrap(self._vars[name], self)
        return self._default if default is _UNSET else default

    def has(self, name: str) -> bool:
        return self._loose or name in self._vars

    def keys(self) -> VarsList:
        """All stored names, in insertion order."""
        return VarsList.from_array(self._vars.keys())

    def count(self) -> int:
        return len(self._vars)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    # --- Write operations ---

    def set(self, name: str, value: Any) -> None:
        self._vars[name] = value

    def register_dynamic(
        self, name: str, fn: Callable[..., Any], args: Iterable = ()
    ) -> None:
        """Store fn(self, *args) under name, recomputed on every read."""
        self._vars[name] = Deferred(fn, tuple(args), oneshot=False)

    def register_lazy(
        self, name: str, fn: Callable[..., Any], args: Iterable = ()
    ) -> None:
        """Store fn(self, *args) under name, computed once on first read."""
        self._vars[name] = Deferred(fn, tuple(args), oneshot=True)

    def mark_dirty(self, name: str) -> None:
        """Drop the cached value of a lazy entry so the next read recomputes."""
        invalidate(self._vars.get(name))

    def remove(self, name: str) -> None:
        self._vars.pop(name, None)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        self.remove(name)

    # --- Export ---

    def to_mapping(
        self,
        only: Iterable[str] | None = None,
        default: Any = None,
        modifier: Modifier = "%s",
    ) -> dict:
        """Export to a plain dict.

        only restricts (and orders) the exported names; names it lists that
        are missing here export as default. modifier renames each key: a
        "%"-pattern, a callable, or a literal prefix.
        """
        names = only if only else self.keys()
        return {rename(modifier, k): self.get(k, default) for k in names}

    def to_mapping_recursive(self, depth: int | None = None) -> Any:
        """Export to a plain dict, descending into nested Vars and VarsList.

        depth=None is unbounded. depth=0 returns this container unexpanded.
        """
        if depth is not None and depth == 0:
            return self
        return {k: expand(self.get(k), depth) for k in self.keys()}

    export_recursive = to_mapping_recursive

    # --- Import ---

    def import_from(
        self,
        source: Any,
        only: Iterable[str] | None = None,
        default: Any = None,
        modifier: Modifier = "%s",
    ) -> None:
        """Import entries from a mapping, a container, pairs or an object.

        Objects contribute their public instance attributes. Scalars raise
        InvalidInput. only and modifier behave as in to_mapping(); names in only
        that are missing from source are imported as default.
        """
        data = _as_mapping(source)
        logger.debug(
            "Importing %d entries from %s", len(data), type(source).__name__
        )
        names = only if only else list(data)
        for k in names:
            self.set(rename(modifier, k), data.get(k, default))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._vars)!r})"


def _as_mapping(source: Any) -> dict:
    """Read source into a plain dict, or raise InvalidInput."""
    if isinstance(source, collections.abc.Mapping):
        return dict(source)
    if isinstance(source, Container):
        return dict(source.items())
    if isinstance(source, (str, bytes, bytearray)):
        raise InvalidInput(source)
    if isinstance(source, collections.abc.Iterable):
        try:
            return dict(source)
        except (TypeError, ValueError) as e:
            raise InvalidInput(source) from e
    slots = _slot_names(type(source))
    if not slots and not hasattr(source, "__dict__"):
        raise InvalidInput(source)
    data = {
        k: getattr(source, k)
        for k in slots
        if not k.startswith("_") and hasattr(source, k)
    }
    if hasattr(source, "__dict__"):
        data.update(
            (k, v) for k, v in vars(source).items() if not k.startswith("_")
        )
    return data


def _slot_names(cls: type) -> list[str]:
    """Slot names declared along cls's MRO, base classes first."""
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in names)
    return names
