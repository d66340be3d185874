"""Exception hierarchy for changekit.

Configuration problems and discovery problems are kept apart so that the
process-wide accessor can swallow the former while explicit initialization
propagates the latter:

- ConfigLoadError: the configuration payload could not be read or parsed.
- UnexpectedChangekitError: unchecked failure surfaced to the caller.
- ResolutionError: a namespace walk or unit load failed.
- UnregisteredUnitError: a discovered unit has no registered types.
"""

from typing import Optional


class ChangekitError(Exception):
    """Base exception for all changekit errors."""

    pass


class ConfigLoadError(ChangekitError):
    """Error loading or validating configuration."""

    pass


class UnexpectedChangekitError(ChangekitError):
    """Unexpected failure raised from an explicit initialization call."""

    pass


class ResolutionError(UnexpectedChangekitError):
    """Error resolving namespaces into loaded types.

    Attributes:
        namespace: The namespace being walked when the failure occurred.
    """

    def __init__(self, message: str, namespace: Optional[str] = None):
        super().__init__(message)
        self.namespace = namespace


class UnregisteredUnitError(ResolutionError):
    """A unit was found on disk but nothing is registered under its name."""

    def __init__(self, unit_name: str):
        super().__init__(
            f"No types registered for unit '{unit_name}'",
            namespace=unit_name.rpartition(".")[0] or None,
        )
        self.unit_name = unit_name
