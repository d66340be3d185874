"""Change extension capability.

A change describes one unit of database evolution (create a table, add a
column, ...). Implementations turn themselves into statements for a target
database; SQL generators later render those statements.

Example:
    >>> from changekit.core import Change
    >>>
    >>> class CreateAuditTable(Change):
    ...     @property
    ...     def name(self) -> str:
    ...         return "createAuditTable"
    ...
    ...     def generate_statements(self, database):
    ...         return [CreateTableStatement("audit")]
"""

from abc import ABC, abstractmethod
from typing import Any, List


class Change(ABC):
    """Abstract base class for change extensions.

    Subclasses must implement:
    - name: Identifier used in changelogs
    - generate_statements: Produce the statements this change applies

    Optional overrides:
    - supports: Restrict the change to some databases
    - validate: Report configuration problems before execution
    - confirmation_message: Text shown once the change ran
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name identifying this change."""
        ...

    @abstractmethod
    def generate_statements(self, database: Any) -> List[Any]:
        """Generate the statements needed to apply this change.

        Args:
            database: Target database the statements are generated for.

        Returns:
            Ordered list of statements.
        """
        ...

    def supports(self, database: Any) -> bool:
        """Whether this change can run against the given database."""
        return True

    def validate(self, database: Any) -> List[str]:
        """Validate the change against a database.

        Returns:
            List of error messages, empty when the change is valid.
        """
        return []

    def confirmation_message(self) -> str:
        return f"{self.name} executed"

    def __repr__(self) -> str:
        return f"<Change {self.name}>"
