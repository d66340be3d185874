"""Configuration loader with environment variable substitution.

The configuration file is a Java-style properties payload (parsed with
``javaproperties``), or YAML when the file name ends in ``.yaml``/``.yml``:

    # liquibase.sdk.properties
    packages = com.acme.changes, com.acme.sqlgen

    # liquibase.sdk.yaml
    packages:
      - com.acme.changes
      - com.acme.sqlgen

Values may reference environment variables:
    ${VAR}          - Required variable, raises error if not set
    ${VAR:-default} - Optional variable with default value

The file name comes from the ``liquibase.sdk.properties.file`` environment
variable and is looked up like a resource: an existing path is used as is,
otherwise the first match on the search path (``sys.path``) wins.
"""

import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

import javaproperties
import yaml
from pydantic import ValidationError

from changekit.config.schema import SdkConfig
from changekit.errors import ConfigLoadError

PROPERTIES_FILE_SETTING = "liquibase.sdk.properties.file"
DEFAULT_PROPERTIES_FILE = "liquibase.sdk.properties"
YAML_SUFFIXES = (".yaml", ".yml")

# Pattern for environment variables: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def substitute_env_vars(value: Any) -> Any:
    """Recursively substitute environment variables in a value.

    Supports:
    - ${VAR} - Required variable, raises KeyError if not set
    - ${VAR:-default} - Optional variable with default value

    Args:
        value: Value to process (string, dict, list, or other).

    Returns:
        Value with environment variables substituted.

    Raises:
        KeyError: If a required environment variable is not set.

    Examples:
        >>> os.environ["ACME_PACKAGES"] = "com.acme.changes"
        >>> substitute_env_vars("${ACME_PACKAGES}, com.acme.sqlgen")
        'com.acme.changes, com.acme.sqlgen'
        >>> substitute_env_vars("${MISSING:-com.acme}")
        'com.acme'
    """
    if isinstance(value, str):
        return _substitute_string(value)
    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    else:
        return value


def _substitute_string(s: str) -> str:
    def replacer(match: re.Match) -> str:
        var_name = match.group(1)
        default = match.group(2)  # None if no default specified

        value = os.environ.get(var_name)
        if value is not None:
            return value
        elif default is not None:
            return default
        else:
            raise KeyError(
                f"Environment variable '{var_name}' is not set "
                f"and no default provided"
            )

    return ENV_VAR_PATTERN.sub(replacer, s)


def properties_file_name() -> str:
    """Name of the configuration file, honouring the override setting."""
    return os.environ.get(PROPERTIES_FILE_SETTING, DEFAULT_PROPERTIES_FILE)


def find_properties_file(
    name: Optional[str] = None,
    search_path: Optional[Sequence[Union[str, Path]]] = None,
) -> Optional[Path]:
    """Locate the configuration file.

    Args:
        name: File name or path. Defaults to properties_file_name().
        search_path: Directories searched when ``name`` is not an existing
            path. Defaults to ``sys.path``.

    Returns:
        Path to the file, or None if it cannot be found.
    """
    name = name or properties_file_name()
    direct = Path(name)
    if direct.is_file():
        return direct
    if direct.is_absolute():
        return None

    entries = sys.path if search_path is None else search_path
    for entry in entries:
        candidate = Path(str(entry) or os.curdir) / name
        if candidate.is_file():
            return candidate
    return None


def _validate(raw_data: Any, source: str, substitute_vars: bool) -> SdkConfig:
    if raw_data is None:
        raw_data = {}

    if not isinstance(raw_data, dict):
        raise ConfigLoadError(
            f"Configuration must be a dictionary, got {type(raw_data).__name__}"
        )

    # Only recognized keys; other tools may share the file
    data: Dict[str, Any] = {
        key: value for key, value in raw_data.items() if key in SdkConfig.model_fields
    }

    if substitute_vars:
        try:
            data = substitute_env_vars(data)
        except KeyError as e:
            raise ConfigLoadError(f"Environment variable error in {source}: {e}") from e

    try:
        return SdkConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigLoadError(f"Configuration validation failed for {source}: {e}") from e


def parse_sdk_properties(content: str, substitute_vars: bool = True) -> SdkConfig:
    """Load and validate a properties payload from a string.

    Args:
        content: Properties content.
        substitute_vars: Whether to substitute environment variables.

    Returns:
        Validated SdkConfig.

    Raises:
        ConfigLoadError: If the content cannot be parsed or validated.
    """
    try:
        raw_data = javaproperties.loads(content)
    except ValueError as e:
        raise ConfigLoadError(f"Invalid properties: {e}") from e
    return _validate(raw_data, "<string>", substitute_vars)


def load_sdk_config(
    path: Union[str, Path],
    substitute_vars: bool = True,
) -> SdkConfig:
    """Load and validate a configuration file.

    Args:
        path: Path to a properties or YAML file.
        substitute_vars: Whether to substitute environment variables.

    Returns:
        Validated SdkConfig.

    Raises:
        ConfigLoadError: If the file cannot be read, parsed or validated.

    Example:
        >>> config = load_sdk_config("liquibase.sdk.properties")
        >>> sorted(config.packages)
        ['com.acme.changes', 'com.acme.sqlgen']
    """
    path = Path(path)

    try:
        if path.suffix in YAML_SUFFIXES:
            with open(path, "r", encoding="utf-8") as f:
                raw_data = yaml.safe_load(f)
        else:
            with open(path, "rb") as f:
                raw_data = javaproperties.load(f)
    except OSError as e:
        raise ConfigLoadError(f"Error loading {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}") from e
    except ValueError as e:
        raise ConfigLoadError(f"Invalid properties in {path}: {e}") from e

    return _validate(raw_data, str(path), substitute_vars)
