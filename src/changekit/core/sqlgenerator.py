"""SQL generator extension capability.

SQL generators render the statements produced by changes into SQL text for
a particular database. Several generators may support the same statement;
the one with the highest priority wins.

Example:
    >>> from changekit.core import SqlGenerator, Sql
    >>>
    >>> class CreateTableGenerator(SqlGenerator):
    ...     def supports(self, statement, database) -> bool:
    ...         return isinstance(statement, CreateTableStatement)
    ...
    ...     def generate_sql(self, statement, database):
    ...         return [Sql(f"CREATE TABLE {statement.table}")]
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List

PRIORITY_DEFAULT = 1
PRIORITY_DATABASE = 5


@dataclass
class Sql:
    """A single piece of generated SQL.

    Attributes:
        text: SQL text without the trailing delimiter.
        end_delimiter: Delimiter appended when rendering.
        affected_objects: Names of database objects touched by the SQL.
    """

    text: str
    end_delimiter: str = ";"
    affected_objects: List[str] = field(default_factory=list)

    def to_sql(self) -> str:
        return f"{self.text}{self.end_delimiter}"


class SqlGenerator(ABC):
    """Abstract base class for SQL generator extensions.

    Subclasses must implement:
    - supports: Whether a statement/database pair is handled
    - generate_sql: Render the statement

    Override ``priority`` to win over generic generators; database-specific
    generators conventionally return ``PRIORITY_DATABASE``.
    """

    @property
    def priority(self) -> int:
        return PRIORITY_DEFAULT

    @abstractmethod
    def supports(self, statement: Any, database: Any) -> bool:
        """Whether this generator can render the statement for the database."""
        ...

    @abstractmethod
    def generate_sql(self, statement: Any, database: Any) -> List[Sql]:
        """Render a statement to SQL.

        Args:
            statement: Statement produced by a change.
            database: Target database.

        Returns:
            List of Sql objects, in execution order.
        """
        ...
