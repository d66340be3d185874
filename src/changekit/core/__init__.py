"""Core extension capabilities for changekit.

Extension capabilities are the closed set of roles a discovered class can
fulfil to be treated as a plugin:

- Change: one unit of database evolution
- SqlGenerator: renders statements into SQL

EXTENSION_CAPABILITIES lists them in classification priority order.
"""

from changekit.core.change import Change
from changekit.core.sqlgenerator import (
    SqlGenerator,
    Sql,
    PRIORITY_DEFAULT,
    PRIORITY_DATABASE,
)

EXTENSION_CAPABILITIES = (Change, SqlGenerator)

__all__ = [
    "Change",
    "SqlGenerator",
    "Sql",
    "PRIORITY_DEFAULT",
    "PRIORITY_DATABASE",
    "EXTENSION_CAPABILITIES",
]
