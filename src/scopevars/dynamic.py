"""DynamicVars: Vars with computed fields declared on the class.

A subclass declares computed fields with @computed_field, the same way it
would declare a property. The field registry is collected once, when the
class is created, by walking the MRO, so a subclass can override a base
field by redefining it under the same name.

get/has/set/keys consult the registry before the stored entries:
- get(name) calls the getter; stored entries of the same name are ignored.
- set(name, v) calls the setter, or raises ReadOnlyField when the field
  has a getter only.
- keys() lists computed names first, then stored names.

Setters that need to keep a value should write it with Vars.set(self, ...),
which bypasses the registry.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from scopevars.errors import ReadOnlyField
from scopevars.vars import Vars
from scopevars.varslist import VarsList

logger = logging.getLogger("scopevars.dynamic")


class ComputedField:
    """A getter (and optional setter) registered under a field name."""

    def __init__(
        self,
        fget: Callable[[Any], Any],
        fset: Callable[[Any, Any], None] | None = None,
        name: str | None = None,
    ) -> None:
        self.fget = fget
        self.fset = fset
        self.name = name or fget.__name__
        self.__doc__ = fget.__doc__

    @property
    def read_only(self) -> bool:
        return self.fset is None

    def setter(self, fset: Callable[[Any, Any], None]) -> ComputedField:
        """Return a copy of this field with fset as its setter."""
        return type(self)(self.fget, fset, self.name)

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    # Attribute access is a convenience; it goes through get()/set().
    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance.get(self.name)

    def __set__(self, instance, value) -> None:
        instance.set(self.name, value)

    def __repr__(self) -> str:
        mode = "read-only" if self.read_only else "read-write"
        return f"ComputedField({self.name}, {mode})"


def computed_field(fget: Callable[[Any], Any]) -> ComputedField:
    """Decorator to declare a computed field on a DynamicVars subclass.

    Usage:
        class Cart(DynamicVars):
            @computed_field
            def total(self):
                return sum(self.get("prices", []))

            @computed_field
            def owner(self):
                return self.get("_owner")

            @owner.setter
            def owner(self, value):
                Vars.set(self, "_owner", value.strip())

        cart = Cart()
        cart.set("prices", [1, 2])
        cart.get("total")     # 3
        cart.set("total", 0)  # raises ReadOnlyField
    """
    return ComputedField(fget)


class DynamicVars(Vars):
    """A Vars whose subclasses expose computed fields through get/set/has/keys."""

    _computed_fields: dict[str, ComputedField] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        fields: dict[str, ComputedField] = {}
        for klass in reversed(cls.__mro__):
            for attr_name, attr in vars(klass).items():
                if isinstance(attr, ComputedField):
                    fields[attr.name] = attr
                elif attr_name in fields:
                    # Shadowed by a plain attribute in a subclass.
                    del fields[attr_name]
        cls._computed_fields = fields
        logger.debug(
            "Registered computed fields for %s: %s",
            cls.__name__, ", ".join(fields) or "(none)",
        )

    @classmethod
    def computed_names(cls) -> list[str]:
        return list(cls._computed_fields)

    def get(self, name: str, *default: Any) -> Any:
        field = self._computed_fields.get(name)
        if field is not None:
            return field.fget(self)
        return super().get(name, *default)

    def set(self, name: str, value: Any) -> None:
        field = self._computed_fields.get(name)
        if field is None:
            super().set(name, value)
        elif field.fset is not None:
            field.fset(self, value)
        else:
            raise ReadOnlyField(name)

    def has(self, name: str) -> bool:
        return name in self._computed_fields or super().has(name)

    def keys(self) -> VarsList:
        """Computed field names, then stored names."""
        names = VarsList.from_array(self._computed_fields)
        names.concat(super().keys())
        return names
