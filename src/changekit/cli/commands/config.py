"""Config command for changekit CLI."""

import sys
from typing import Optional

from changekit.config import (
    PROPERTIES_FILE_SETTING,
    ConfigLoadError,
    find_properties_file,
    load_sdk_config,
    properties_file_name,
)


def cmd_config(config_file: Optional[str] = None) -> int:
    """Show which configuration file is used and what it declares.

    Args:
        config_file: Explicit file; defaults to the configured name.

    Returns:
        Exit code (0 for success, 1 if missing or invalid).
    """
    name = config_file or properties_file_name()
    print(f"Setting: {PROPERTIES_FILE_SETTING}")
    print(f"File name: {name}")

    path = find_properties_file(name)
    if path is None:
        print(f"Error: Configuration file not found: {name}", file=sys.stderr)
        return 1

    print(f"Location: {path}")

    try:
        config = load_sdk_config(path)
    except ConfigLoadError as e:
        print(f"Validation failed: {e}", file=sys.stderr)
        return 1

    if config.packages is None:
        print("Packages: (not configured)")
    else:
        print(f"Packages: {len(config.packages)}")
        for package in sorted(config.packages):
            print(f"  - {package}")

    return 0
