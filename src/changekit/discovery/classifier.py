"""Extension classification.

Builds the capability index: for every concrete discovered type, the one
extension capability it implements, found by walking its ancestor chain
nearest-first and checking each level's directly declared bases against
the capabilities in priority order. The first match wins, so a type lands
in at most one bucket.
"""

import inspect
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Set, Type

from changekit.core import EXTENSION_CAPABILITIES


def type_name(cls: Type) -> str:
    """Fully-qualified name of a type."""
    return f"{cls.__module__}.{cls.__qualname__}"


def is_concrete(cls: Type, capabilities: Sequence[Type] = EXTENSION_CAPABILITIES) -> bool:
    """Whether a type is an instantiable implementation.

    Abstract classes, the capability markers themselves and
    ``typing.Protocol`` declarations are not.
    """
    if inspect.isabstract(cls):
        return False
    if cls in capabilities:
        return False
    if getattr(cls, "_is_protocol", False):
        return False
    return True


def extension_capability(
    cls: Type,
    capabilities: Sequence[Type] = EXTENSION_CAPABILITIES,
) -> Optional[Type]:
    """Find the extension capability a type implements.

    Args:
        cls: Type to classify.
        capabilities: Recognized capabilities in priority order.

    Returns:
        The first capability declared directly by the type or, failing
        that, by its nearest ancestor that declares one. None when the
        chain is exhausted without a match.
    """
    for ancestor in inspect.getmro(cls):
        declared = ancestor.__bases__
        for capability in capabilities:
            if capability in declared:
                return capability
    return None


def classify(
    all_types: Iterable[Type],
    capabilities: Sequence[Type] = EXTENSION_CAPABILITIES,
) -> Dict[Type, FrozenSet[Type]]:
    """Build the capability index for a set of types.

    Args:
        all_types: Discovered types.
        capabilities: Recognized capabilities in priority order.

    Returns:
        Mapping from capability to the concrete types implementing it.
        Capabilities without implementations are absent.

    Example:
        >>> index = classify({AddAuditColumn, AuditColumnGenerator, Helper})
        >>> index[Change]
        frozenset({<class 'acme.changes.audit.AddAuditColumn'>})
    """
    index: Dict[Type, Set[Type]] = {}
    for cls in all_types:
        if not is_concrete(cls, capabilities):
            continue
        capability = extension_capability(cls, capabilities)
        if capability is not None:
            index.setdefault(capability, set()).add(cls)
    return {capability: frozenset(types) for capability, types in index.items()}


def describe_index(index: Mapping[Type, Iterable[Type]]) -> Dict[str, List[str]]:
    """Sorted, name-based view of a capability index."""
    return {
        capability.__name__: sorted(type_name(cls) for cls in types)
        for capability, types in sorted(index.items(), key=lambda item: item[0].__name__)
    }
