"""Version command for changekit CLI."""

from importlib.metadata import version, PackageNotFoundError

from changekit.config import PROPERTIES_FILE_SETTING, properties_file_name
from changekit.core import EXTENSION_CAPABILITIES


def cmd_version() -> int:
    """Display the version and what discovery recognizes.

    Returns:
        Exit code (always 0).
    """
    try:
        ck_version = version("changekit")
    except PackageNotFoundError:
        ck_version = "development"

    print(f"changekit {ck_version}")

    print("\nExtension capabilities (priority order):")
    for priority, capability in enumerate(EXTENSION_CAPABILITIES, start=1):
        print(f"  {priority}. {capability.__module__}.{capability.__qualname__}")

    print(f"\nConfiguration: {properties_file_name()} (set {PROPERTIES_FILE_SETTING} to override)")

    return 0
