"""Process-wide discovery context.

The context holds the result of one discovery pass: the namespaces that
were scanned, every type found below them, and the capability index built
from those types. It is built once and then only read.

Two ways to get one:

    >>> from changekit import Context
    >>>
    >>> # Explicit lifecycle
    >>> context = Context()
    >>> context.init({"com.acme.changes", "com.acme.sqlgen"})
    >>>
    >>> # Process-wide instance, initialized from liquibase.sdk.properties
    >>> context = Context.get_instance()
    >>> context.seen_extension_classes[Change]
"""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Optional, Sequence, Type, Union

from changekit.config import (
    SdkConfig,
    find_properties_file,
    load_sdk_config,
    properties_file_name,
)
from changekit.core import EXTENSION_CAPABILITIES
from changekit.discovery import NamespaceResolver, TypeLoader, classify
from changekit.errors import ChangekitError, ResolutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    """Immutable discovery result, published in a single assignment."""

    initialized: bool = False
    packages: FrozenSet[str] = frozenset()
    all_classes: FrozenSet[Type] = frozenset()
    seen_extension_classes: Mapping[Type, FrozenSet[Type]] = field(
        default_factory=lambda: MappingProxyType({})
    )


class Context:
    """Discovered extensions for a set of namespaces.

    Args:
        search_path: Directories searched for namespace roots
            (defaults to ``sys.path``).
        loader: Loader turning unit names into types
            (defaults to ImportLoader).
        capabilities: Recognized extension capabilities in priority order.
    """

    _instance: Optional["Context"] = None
    _instance_lock = threading.RLock()

    def __init__(
        self,
        search_path: Optional[Sequence[Union[str, Path]]] = None,
        loader: Optional[TypeLoader] = None,
        capabilities: Sequence[Type] = EXTENSION_CAPABILITIES,
    ):
        self._resolver = NamespaceResolver(search_path=search_path, loader=loader)
        self._capabilities = tuple(capabilities)
        self._state = _Snapshot()

    # -------------------------------------------------------------------------
    # Process-wide instance
    # -------------------------------------------------------------------------

    @classmethod
    def get_instance(cls) -> "Context":
        """Get the process-wide context, creating it on first use.

        The first call initializes the context from the configuration file.
        A failed automatic initialization is logged and leaves the context
        uninitialized; it never raises.
        """
        with cls._instance_lock:
            if cls._instance is None:
                instance = cls()
                cls._instance = instance
                name = properties_file_name()
                try:
                    path = find_properties_file(name)
                    if path is None:
                        logger.debug(f"No {name} found, context left uninitialized")
                    else:
                        instance.init_from_file(path)
                except ChangekitError as e:
                    logger.error(f"Error loading {name}: {e}")
            return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Discard the process-wide context."""
        with cls._instance_lock:
            cls._instance = None

    @staticmethod
    def properties_file_name() -> str:
        return properties_file_name()

    # -------------------------------------------------------------------------
    # Initialization
    # -------------------------------------------------------------------------

    def init(self, packages: Iterable[str]) -> None:
        """Discover and classify all types below the given namespaces.

        Replaces any previous state. On failure the previous state is kept.

        Args:
            packages: Namespaces to scan.

        Raises:
            TypeError: If ``packages`` is a single string.
            UnexpectedChangekitError: If resolution fails (ResolutionError).
        """
        if isinstance(packages, str):
            raise TypeError(
                f"packages must be a collection of names, not a string: {packages!r}"
            )
        try:
            packages = frozenset(packages)
        except TypeError as e:
            raise ResolutionError(f"Invalid packages: {e}") from e
        all_classes = self._resolver.resolve(packages)
        index = classify(all_classes, self._capabilities)

        self._state = _Snapshot(
            initialized=True,
            packages=packages,
            all_classes=all_classes,
            seen_extension_classes=MappingProxyType(index),
        )
        logger.info(
            f"Discovered {len(all_classes)} type(s) in {len(packages)} package(s), "
            f"{sum(len(types) for types in index.values())} extension(s)"
        )

    def init_from_config(self, config: SdkConfig) -> None:
        """Initialize from a configuration; no-op if it names no packages."""
        if config.packages is None:
            logger.debug("No 'packages' configured, context left uninitialized")
            return
        self.init(config.packages)

    def init_from_file(self, path: Union[str, Path]) -> None:
        """Initialize from a configuration file.

        Raises:
            ConfigLoadError: If the file cannot be loaded.
            ResolutionError: If discovery fails.
        """
        self.init_from_config(load_sdk_config(path))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._state.initialized

    @property
    def packages(self) -> FrozenSet[str]:
        """Namespaces used by the last successful initialization."""
        return self._state.packages

    @property
    def all_classes(self) -> FrozenSet[Type]:
        """Every type discovered below the namespaces."""
        return self._state.all_classes

    @property
    def seen_extension_classes(self) -> Mapping[Type, FrozenSet[Type]]:
        """Read-only capability index."""
        return self._state.seen_extension_classes

    @property
    def capabilities(self) -> Sequence[Type]:
        return self._capabilities

    def implementations(self, capability: Type) -> FrozenSet[Type]:
        """Concrete types implementing a capability (empty when none)."""
        return self._state.seen_extension_classes.get(capability, frozenset())

    def __repr__(self) -> str:
        status = "initialized" if self.is_initialized else "uninitialized"
        return f"<Context {status} [{len(self.all_classes)} types]>"
