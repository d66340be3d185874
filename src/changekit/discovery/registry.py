"""Explicit type registry for discovered units.

Plugin modules can self-register their classes at import time instead of
relying on dynamic import during discovery. The resolver still walks the
namespace directories to find candidate unit names; a RegistryLoader then
looks each name up here.

Example:
    >>> from changekit.discovery import register_type
    >>>
    >>> @register_type
    ... class AddAuditColumn(Change):
    ...     ...
"""

import threading
from typing import Dict, FrozenSet, List, Set, Type


class TypeRegistry:
    """Thread-safe mapping from unit name to the types it defines.

    Example:
        >>> registry = TypeRegistry()
        >>> registry.add("acme.changes.audit", AddAuditColumn)
        >>> registry.types_for("acme.changes.audit")
        frozenset({<class 'acme.changes.audit.AddAuditColumn'>})
    """

    def __init__(self):
        self._units: Dict[str, Set[Type]] = {}
        self._lock = threading.Lock()

    def add(self, unit_name: str, cls: Type) -> None:
        """Register a class under an explicit unit name.

        Args:
            unit_name: Dotted unit name (``namespace.module``).
            cls: The class to register.
        """
        if not unit_name:
            raise ValueError("Unit name must not be empty")
        with self._lock:
            self._units.setdefault(unit_name, set()).add(cls)

    def register(self, cls: Type) -> Type:
        """Register a class under its defining module.

        Returns the class unchanged so this can be used as a decorator.
        """
        self.add(cls.__module__, cls)
        return cls

    def types_for(self, unit_name: str) -> FrozenSet[Type]:
        """Get the types registered for a unit (empty when none)."""
        with self._lock:
            return frozenset(self._units.get(unit_name, ()))

    def list_units(self) -> List[str]:
        with self._lock:
            return sorted(self._units)

    def clear(self) -> None:
        with self._lock:
            self._units.clear()

    def __contains__(self, unit_name: str) -> bool:
        with self._lock:
            return unit_name in self._units

    def __len__(self) -> int:
        with self._lock:
            return len(self._units)

    def __repr__(self) -> str:
        return f"<TypeRegistry [{len(self)} units]>"


# Global type registry
type_registry = TypeRegistry()


def register_type(cls: Type) -> Type:
    """Register a class in the global type registry (decorator)."""
    return type_registry.register(cls)
