"""Configuration for changekit.

Provides the configuration source for automatic initialization:
- Java-style properties (or YAML) file with a ``packages`` key
- Pydantic schema validation
- Environment variable substitution (${VAR} and ${VAR:-default})
- Resource-style lookup of the file on the search path

Example:
    >>> from changekit.config import find_properties_file, load_sdk_config
    >>> path = find_properties_file()
    >>> if path is not None:
    ...     config = load_sdk_config(path)
    ...     print(sorted(config.packages or ()))
"""

from changekit.config.schema import SdkConfig
from changekit.config.loader import (
    DEFAULT_PROPERTIES_FILE,
    PROPERTIES_FILE_SETTING,
    find_properties_file,
    load_sdk_config,
    parse_sdk_properties,
    properties_file_name,
    substitute_env_vars,
)
from changekit.errors import ConfigLoadError

__all__ = [
    # Schema
    "SdkConfig",
    # Loader
    "load_sdk_config",
    "parse_sdk_properties",
    "find_properties_file",
    "properties_file_name",
    "substitute_env_vars",
    "ConfigLoadError",
    "PROPERTIES_FILE_SETTING",
    "DEFAULT_PROPERTIES_FILE",
]
