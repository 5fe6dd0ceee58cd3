"""
fgu-builder command line.

Usage:
    fgu-builder build -m module.yaml -o MyModule.mod
    fgu-builder create-spell -o spells/fire-bolt.yaml --name "Fire Bolt"
    fgu-builder create-table -o tables/wild-magic.yaml --name "Wild Magic"
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .assembler import build_module
from .config import Settings, load_settings
from .errors import BuilderError
from .loader import load_module
from .scaffold import sample_spell, sample_table, write_sample

logger = logging.getLogger("fgu-builder")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fgu-builder",
        description="Build Fantasy Grounds Unity modules from YAML content",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $FGU_BUILDER_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build", help="Take a module definition and generate a module file",
    )
    build_parser.add_argument(
        "-m", "--module-definition", required=True,
        help="Path to the root module definition",
    )
    build_parser.add_argument(
        "-o", "--output", required=True, help="Where to write the module file to",
    )

    spell_parser = subparsers.add_parser(
        "create-spell", help="Create a new spell file, fully populated",
    )
    spell_parser.add_argument("-o", "--output", required=True, help="Spell file to write")
    spell_parser.add_argument("--name", required=True, help="Spell name")

    table_parser = subparsers.add_parser(
        "create-table", help="Create a new table file, fully populated",
    )
    table_parser.add_argument("-o", "--output", required=True, help="Table file to write")
    table_parser.add_argument("--name", required=True, help="Table name")

    return parser.parse_args(argv)


def run(args: argparse.Namespace, settings: Settings) -> None:
    if args.command == "build":
        content = load_module(args.module_definition)
        build_module(content, settings.resolve_output(args.output))
    elif args.command == "create-spell":
        write_sample(sample_spell(args.name), settings.resolve_output(args.output))
    elif args.command == "create-table":
        write_sample(sample_table(args.name), settings.resolve_output(args.output))
    else:
        raise BuilderError(f"Unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(log_level=args.log_level)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run(args, settings)
    except BuilderError as e:
        logger.error("Error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
