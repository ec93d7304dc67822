"""
Main CLI for the nglibs tool.

Provides a single entry point for building, serving, packing, publishing,
adding and removing the libraries of an Angular workspace.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from nglibs.commands import AVAILABLE_COMMANDS
from nglibs.core.errors import NglibsError, UsageError
from nglibs.core.utils import DEFAULT_OPTIONS_FILE, log


# =============================================================================
# Version
# =============================================================================

__version__ = "0.1.0"


# =============================================================================
# Argument Parsing
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="nglibs",
        description="Angular library workspace task runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  build         Build libraries once
  build_watch   Build libraries and keep rebuilding on change
  serve         Build libraries in watch mode, then serve the showcase app
  pack          npm pack each built library
  publish       npm publish each built library
  pack_publish  npm pack then npm publish each built library
  add           Generate new libraries (names required)
  remove        Delete libraries
  configs       Resync angular.json and tsconfig.json with the libraries on disk

Library names are comma separated; with none given, every library is used.

Examples:
  nglibs build                     # Build every library concurrently
  nglibs build button,card         # Build two libraries (and unbuilt dependencies)
  nglibs build --sequential        # Build one at a time, dependencies first
  nglibs add tooltip               # Generate a new library and resync configs
  nglibs publish --dry-run         # Show what would be published
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "command",
        nargs="?",
        metavar="<command>",
        help="Command to run",
    )
    parser.add_argument(
        "libraries",
        nargs="*",
        metavar="<library>",
        help="Library names, comma separated (default: all libraries)",
    )
    parser.add_argument(
        "--config",
        default=str(DEFAULT_OPTIONS_FILE),
        help=f"Options file (default: {DEFAULT_OPTIONS_FILE})",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Run build commands one after another, dependencies first (build only)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without executing",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug tracing, and tracebacks for unexpected errors",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    return parser


def _report_unknown_command(command: Optional[str]) -> None:
    if command:
        log.warning(f"No Command {command} was found.")
    else:
        log.warning("You must enter a command to run.")
    log.info("Available Options are:")
    for name in AVAILABLE_COMMANDS:
        log.info(f"  {name}")


# =============================================================================
# Command Dispatch
# =============================================================================


def dispatch(args: argparse.Namespace) -> int:
    """Run the handler for ``args.command``."""
    if args.command == "build":
        from nglibs.commands.build import cmd_build
        return cmd_build(args)

    elif args.command == "build_watch":
        from nglibs.commands.build import cmd_build_watch
        return cmd_build_watch(args)

    elif args.command == "serve":
        from nglibs.commands.build import cmd_serve
        return cmd_serve(args)

    elif args.command == "pack":
        from nglibs.commands.package import cmd_pack
        return cmd_pack(args)

    elif args.command == "publish":
        from nglibs.commands.package import cmd_publish
        return cmd_publish(args)

    elif args.command == "pack_publish":
        from nglibs.commands.package import cmd_pack_publish
        return cmd_pack_publish(args)

    elif args.command == "add":
        from nglibs.commands.library import cmd_add
        return cmd_add(args)

    elif args.command == "remove":
        from nglibs.commands.library import cmd_remove
        return cmd_remove(args)

    elif args.command == "configs":
        from nglibs.commands.configs import cmd_configs
        return cmd_configs(args)

    raise UsageError(f"Unknown command: {args.command}")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        log.set_color(False)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command not in AVAILABLE_COMMANDS:
        _report_unknown_command(args.command)
        return 2

    try:
        return dispatch(args)

    except UsageError as e:
        log.error(str(e))
        return 2
    except NglibsError as e:
        log.error(str(e))
        return 1
    except KeyboardInterrupt:
        log.warning("\nInterrupted")
        return 130
    except Exception as e:
        log.error(str(e))
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
