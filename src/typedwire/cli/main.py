"""Main CLI entry point for typedwire."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .. import __version__
from ..cli.listing import inspect_file
from ..exceptions import TypedwireError


def main() -> int:
    """Main entry point for the typedwire CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="typedwire",
        description="typedwire: Self-Describing Binary Serialization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  typedwire --inspect data.bin         List the elements of an encoded file
  typedwire --version                  Show version
        """,
    )

    parser.add_argument(
        "--inspect",
        metavar="FILE",
        type=str,
        help="List type IDs and sizes of the elements in an encoded file",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"typedwire {__version__}",
    )

    args = parser.parse_args()

    # Handle --inspect
    if args.inspect:
        file_path = Path(args.inspect)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            inspect_file(file_path)
            return 0
        except (TypedwireError, OSError) as e:
            print(f"Error inspecting file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
