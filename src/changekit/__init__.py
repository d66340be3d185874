"""changekit - extension discovery for database change plugins.

changekit finds every Change and SqlGenerator implementation living under a
set of packages, so a host application can register plugins without manual
wiring.

Quick Start:
    >>> import changekit as ck
    >>>
    >>> # Discover from liquibase.sdk.properties (packages = com.acme.changes)
    >>> context = ck.Context.get_instance()
    >>> context.implementations(ck.Change)
    >>>
    >>> # Or scan packages explicitly
    >>> context = ck.Context()
    >>> context.init({"com.acme.changes", "com.acme.sqlgen"})

For advanced usage, see:
- changekit.discovery: NamespaceResolver, loaders, classify
- changekit.config: configuration file loading
"""

__version__ = "0.1.0"

from changekit.core import (
    EXTENSION_CAPABILITIES,
    Change,
    Sql,
    SqlGenerator,
)
from changekit.context import Context
from changekit.discovery import (
    ImportLoader,
    NamespaceResolver,
    RegistryLoader,
    TypeRegistry,
    classify,
    register_type,
    resolve_namespaces,
)
from changekit.errors import (
    ChangekitError,
    ConfigLoadError,
    ResolutionError,
    UnexpectedChangekitError,
    UnregisteredUnitError,
)

__all__ = [
    # Capabilities
    "Change",
    "SqlGenerator",
    "Sql",
    "EXTENSION_CAPABILITIES",
    # Context
    "Context",
    # Discovery
    "NamespaceResolver",
    "resolve_namespaces",
    "classify",
    "ImportLoader",
    "RegistryLoader",
    "TypeRegistry",
    "register_type",
    # Errors
    "ChangekitError",
    "ConfigLoadError",
    "UnexpectedChangekitError",
    "ResolutionError",
    "UnregisteredUnitError",
]
