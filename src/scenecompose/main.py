"""Subcommand dispatcher for scenecompose.

Usage:
    scenecompose preview --manifest ... --output ...
    scenecompose scenes [name]
"""

import argparse
import sys


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="scenecompose",
        description="Scene-based compositor previews and scene type listing.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands. Each delegates to its own module's main().
    subparsers.add_parser("preview", help="Render a YAML scene manifest to png/mp4")
    subparsers.add_parser("scenes", help="List registered scene types")

    # Parse only the subcommand name, pass the rest to the subcommand's parser.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    if parsed.command == "preview":
        from .cli import main as preview_main
        preview_main(remaining)
    elif parsed.command == "scenes":
        from .scenes_cli import main as scenes_main
        scenes_main(remaining)


if __name__ == "__main__":
    main()
