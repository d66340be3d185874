"""CLI entry point for changekit.

Provides command-line interface for:
- Scanning packages for extensions
- Showing the configuration file in use
- Displaying version information

Usage:
    changekit scan -p com.acme.changes -p com.acme.sqlgen
    changekit scan --path ./plugins -p com.acme
    changekit config
    changekit config -f custom.properties
    changekit version
"""

import argparse
import logging
import sys
from typing import List, Optional


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="changekit",
        description="Extension discovery for database change plugins",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # scan command
    scan_parser = subparsers.add_parser(
        "scan",
        help="Discover extensions below packages",
    )
    scan_parser.add_argument(
        "-p", "--package",
        dest="packages",
        action="append",
        help="Package to scan, repeatable (default: configured packages)",
    )
    scan_parser.add_argument(
        "--path",
        dest="search_path",
        action="append",
        help="Directory to search for packages, repeatable (default: sys.path)",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Show the configuration file and its packages",
    )
    config_parser.add_argument(
        "-f", "--file",
        help="Configuration file (default: liquibase.sdk.properties)",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Handle --version flag at top level
    if args.version:
        from changekit.cli.commands.version import cmd_version
        return cmd_version()

    if args.command is None:
        parser.print_help()
        return 0

    # Dispatch to command handlers
    if args.command == "scan":
        from changekit.cli.commands.scan import cmd_scan
        return cmd_scan(
            packages=args.packages,
            search_path=args.search_path,
        )

    elif args.command == "config":
        from changekit.cli.commands.config import cmd_config
        return cmd_config(config_file=args.file)

    elif args.command == "version":
        from changekit.cli.commands.version import cmd_version
        return cmd_version()

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
