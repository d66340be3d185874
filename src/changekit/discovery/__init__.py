"""Extension discovery.

Two stages, run once at startup:

- NamespaceResolver: walks namespace directories on the search path and
  loads every unit below them into a set of types.
- classify: indexes the concrete types by the extension capability they
  implement.

Units become types through a TypeLoader: ImportLoader (dynamic import) by
default, or RegistryLoader backed by an explicit TypeRegistry.
"""

from changekit.discovery.classifier import (
    classify,
    describe_index,
    extension_capability,
    is_concrete,
    type_name,
)
from changekit.discovery.loader import ImportLoader, RegistryLoader, TypeLoader
from changekit.discovery.registry import TypeRegistry, register_type, type_registry
from changekit.discovery.resolver import (
    NamespaceResolver,
    is_valid_namespace,
    resolve_namespaces,
)

__all__ = [
    # Resolution
    "NamespaceResolver",
    "resolve_namespaces",
    "is_valid_namespace",
    # Loaders
    "TypeLoader",
    "ImportLoader",
    "RegistryLoader",
    # Registry
    "TypeRegistry",
    "type_registry",
    "register_type",
    # Classification
    "classify",
    "describe_index",
    "extension_capability",
    "is_concrete",
    "type_name",
]
