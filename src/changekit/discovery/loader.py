"""Loaders that turn a discovered unit name into loaded types.

The resolver only knows unit names (``namespace.module``); a loader decides
how those names become classes:

- ImportLoader imports the module and collects the classes defined in it.
- RegistryLoader looks the name up in an explicit TypeRegistry.
"""

import importlib
import inspect
from abc import ABC, abstractmethod
from typing import FrozenSet, Optional, Set, Type

from changekit.discovery.registry import TypeRegistry, type_registry
from changekit.errors import UnregisteredUnitError


class TypeLoader(ABC):
    """Resolves a unit name to the set of types it provides."""

    @abstractmethod
    def load(self, unit_name: str) -> FrozenSet[Type]:
        """Load the types provided by a unit.

        Args:
            unit_name: Dotted unit name, e.g. ``acme.changes.audit``.

        Returns:
            Types defined by the unit. May be empty.
        """
        ...


class ImportLoader(TypeLoader):
    """Import the unit as a module and return the classes it defines.

    Classes nested in those classes are returned as well. Classes that a
    module merely imports from elsewhere are ignored; they are found
    through their own defining module.
    """

    def load(self, unit_name: str) -> FrozenSet[Type]:
        module = importlib.import_module(unit_name)
        found: Set[Type] = set()
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if obj.__module__ == module.__name__:
                _collect_nested(obj, module.__name__, found)
        return frozenset(found)


def _collect_nested(cls: Type, module_name: str, found: Set[Type]) -> None:
    if cls in found:
        return
    found.add(cls)
    prefix = cls.__qualname__ + "."
    for member in vars(cls).values():
        if (
            inspect.isclass(member)
            and member.__module__ == module_name
            and member.__qualname__.startswith(prefix)
        ):
            _collect_nested(member, module_name, found)


class RegistryLoader(TypeLoader):
    """Look units up in a TypeRegistry without importing anything.

    Raises:
        UnregisteredUnitError: If a unit has no registered types.
    """

    def __init__(self, registry: Optional[TypeRegistry] = None):
        self._registry = registry if registry is not None else type_registry

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    def load(self, unit_name: str) -> FrozenSet[Type]:
        types = self._registry.types_for(unit_name)
        if not types:
            raise UnregisteredUnitError(unit_name)
        return types
