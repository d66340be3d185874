"""Namespace resolution.

Walks every directory that contributes a namespace on the search path and
collects the types of all loadable units below it, sub-namespaces included.

A namespace may be contributed by several search-path entries (PEP 420
namespace packages, or the same package installed twice); all of them are
scanned and the results merged as a set.

Example:
    >>> from changekit.discovery import NamespaceResolver
    >>>
    >>> resolver = NamespaceResolver()
    >>> types = resolver.resolve({"acme.changes", "acme.sqlgen"})
    >>> sorted(t.__name__ for t in types)
    ['AddAuditColumn', 'AuditColumnGenerator']
"""

import logging
import os
import sys
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Sequence, Set, Type, Union

from changekit.discovery.loader import ImportLoader, TypeLoader
from changekit.errors import ResolutionError

logger = logging.getLogger(__name__)

UNIT_SUFFIX = ".py"
SKIPPED_DIRECTORIES = frozenset({"__pycache__"})

PathLike = Union[str, Path]


def is_valid_namespace(namespace: str) -> bool:
    """Whether a string is a well-formed dotted namespace."""
    return isinstance(namespace, str) and bool(namespace) and all(
        segment.isidentifier() for segment in namespace.split(".")
    )


def _is_unit(path: Path) -> bool:
    if path.suffix != UNIT_SUFFIX:
        return False
    stem = path.stem
    return stem.isidentifier() and not (stem.startswith("__") and stem.endswith("__"))


def _is_subnamespace(path: Path) -> bool:
    return path.name.isidentifier() and path.name not in SKIPPED_DIRECTORIES


class NamespaceResolver:
    """Resolves namespaces into the set of types they contain.

    Resolution is all-or-nothing: any failure while locating roots, listing
    directories or loading a unit aborts the whole call with a
    ResolutionError.

    Args:
        search_path: Directories searched for namespace roots. Defaults to
            ``sys.path`` at resolution time.
        loader: Turns unit names into types. Defaults to ImportLoader.
    """

    def __init__(
        self,
        search_path: Optional[Sequence[PathLike]] = None,
        loader: Optional[TypeLoader] = None,
    ):
        self._search_path = list(search_path) if search_path is not None else None
        self._loader = loader if loader is not None else ImportLoader()

    @property
    def loader(self) -> TypeLoader:
        return self._loader

    @property
    def search_path(self) -> List[str]:
        entries = sys.path if self._search_path is None else self._search_path
        return [str(entry) for entry in entries]

    def namespace_roots(self, namespace: str) -> List[Path]:
        """Find every directory contributing a namespace.

        Args:
            namespace: Dotted namespace, e.g. ``acme.changes``.

        Returns:
            Existing root directories in search-path order, without
            duplicates. Empty if nothing contributes the namespace.

        Raises:
            ResolutionError: If the namespace is malformed.
        """
        if not is_valid_namespace(namespace):
            raise ResolutionError(
                f"Invalid namespace: {namespace!r}", namespace=namespace
            )

        relative = Path(*namespace.split("."))
        roots: List[Path] = []
        seen: Set[Path] = set()
        for entry in self.search_path:
            candidate = Path(entry or os.curdir) / relative
            if not candidate.is_dir():
                continue
            resolved = candidate.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            roots.append(candidate)
        return roots

    def resolve(self, namespaces: Iterable[str]) -> FrozenSet[Type]:
        """Resolve namespaces into the types of every unit below them.

        Args:
            namespaces: Dotted namespaces to walk.

        Returns:
            Frozen set of discovered types.

        Raises:
            TypeError: If ``namespaces`` is a single string.
            ResolutionError: If any namespace is malformed, cannot be walked
                or has a unit that cannot be loaded.
        """
        if isinstance(namespaces, str):
            raise TypeError(
                f"namespaces must be a collection of names, not a string: {namespaces!r}"
            )
        try:
            ordered = sorted(set(namespaces), key=str)
        except TypeError as e:
            raise ResolutionError(f"Invalid namespaces: {e}") from e

        found: Set[Type] = set()
        for namespace in ordered:
            try:
                roots = self.namespace_roots(namespace)
                logger.debug(f"Namespace '{namespace}' has {len(roots)} root(s)")
                for root in roots:
                    self._walk(namespace, root, found)
            except ResolutionError:
                raise
            except Exception as e:
                raise ResolutionError(
                    f"Failed to resolve namespace '{namespace}': {e}",
                    namespace=namespace,
                ) from e
        return frozenset(found)

    def _walk(self, namespace: str, directory: Path, found: Set[Type]) -> None:
        if not directory.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory}")

        subdirectories = []
        for path in sorted(directory.iterdir()):
            if path.is_dir():
                if _is_subnamespace(path):
                    subdirectories.append(path)
            elif _is_unit(path):
                unit_name = f"{namespace}.{path.stem}"
                types = self._loader.load(unit_name)
                logger.debug(f"Loaded {len(types)} type(s) from {unit_name}")
                found.update(types)

        for subdirectory in subdirectories:
            self._walk(f"{namespace}.{subdirectory.name}", subdirectory, found)


def resolve_namespaces(
    namespaces: Iterable[str],
    search_path: Optional[Sequence[PathLike]] = None,
    loader: Optional[TypeLoader] = None,
) -> FrozenSet[Type]:
    """Resolve namespaces with a one-off NamespaceResolver.

    Example:
        >>> types = resolve_namespaces({"acme.changes"})
    """
    return NamespaceResolver(search_path=search_path, loader=loader).resolve(namespaces)
