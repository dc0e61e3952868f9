"""scopevars: ordered scope containers with lazy values and computed fields."""

from importlib.metadata import version as _version

__version__ = _version("scopevars")

from scopevars.errors import VarsError, InvalidInput, ReadOnlyField
# Import the dynamic submodule before binding the ``dynamic`` helper from
# cell, otherwise the submodule import would shadow the function.
from scopevars.dynamic import DynamicVars, ComputedField, computed_field
from scopevars.cell import (
    ValueCell, Concrete, Deferred, make_cell, unwrap, invalidate, lazy, dynamic,
)
from scopevars.container import Container, Cursor
from scopevars.varslist import VarsList
from scopevars.vars import Vars

__all__ = [
    "Vars",
    "VarsList",
    "DynamicVars",
    "ComputedField",
    "computed_field",
    "Container",
    "Cursor",
    "ValueCell",
    "Concrete",
    "Deferred",
    "make_cell",
    "unwrap",
    "invalidate",
    "lazy",
    "dynamic",
    "VarsError",
    "InvalidInput",
    "ReadOnlyField",
]
