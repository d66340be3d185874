"""Scan command for changekit CLI."""

import sys
from typing import List, Optional

from changekit.config import (
    ConfigLoadError,
    find_properties_file,
    load_sdk_config,
    properties_file_name,
)
from changekit.context import Context
from changekit.discovery import describe_index
from changekit.errors import ResolutionError


def cmd_scan(
    packages: Optional[List[str]] = None,
    search_path: Optional[List[str]] = None,
) -> int:
    """Discover extensions and print the capability index.

    Args:
        packages: Packages to scan. Falls back to the configured packages.
        search_path: Directories to search instead of sys.path.

    Returns:
        Exit code (0 for success, 1 for errors).
    """
    if not packages:
        name = properties_file_name()
        path = find_properties_file(name)
        if path is None:
            print(
                f"Error: no packages given and {name} not found",
                file=sys.stderr,
            )
            return 1
        try:
            config = load_sdk_config(path)
        except ConfigLoadError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if config.packages is None:
            print(f"Error: no 'packages' configured in {path}", file=sys.stderr)
            return 1
        packages = sorted(config.packages)

    # Units are imported by name, so extra roots must be importable too
    for entry in reversed(search_path or []):
        if entry not in sys.path:
            sys.path.insert(0, entry)

    context = Context(search_path=search_path)
    try:
        context.init(packages)
    except ResolutionError as e:
        print(f"Scan failed: {e}", file=sys.stderr)
        return 1

    print(f"Packages: {', '.join(sorted(context.packages))}")
    print(f"Discovered types: {len(context.all_classes)}")

    index = describe_index(context.seen_extension_classes)
    for capability in context.capabilities:
        names = index.get(capability.__name__, [])
        print()
        print(f"{capability.__name__} ({len(names)}):")
        print("-" * 40)
        if names:
            for name in names:
                print(f"  {name}")
        else:
            print("  (none found)")

    return 0
