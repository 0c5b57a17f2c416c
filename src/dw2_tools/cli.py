"""CLI entry point for the Digimon World 2 dungeon decoder."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from dw2_tools.dungeon.data import DEFAULT_DUNGEON_FILE
from dw2_tools.dungeon.errors import DungeonError
from dw2_tools.dungeon.parser import load_dungeon


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dw2-dungeon",
        description="Decode a Digimon World 2 dungeon file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Lists every floor in the dungeon file with its layouts.  Layout slots
that share a layout are shown once.

Examples:
  dw2-dungeon data/DUNG4000.BIN
  dw2-dungeon data/DUNG4000.BIN --floor 3 --plans
""",
    )
    parser.add_argument("dungeon_file", nargs="?", default=DEFAULT_DUNGEON_FILE,
                        help=f"Path to dungeon file to parse (default: {DEFAULT_DUNGEON_FILE})")
    parser.add_argument("--floor", type=int, default=None, metavar="N",
                        help="Only show floor N (1-indexed)")
    parser.add_argument("--plans", action="store_true",
                        help="Hex dump the floor plan of every layout")
    parser.add_argument("--verbose", action="store_true",
                        help="Print progress and debug logging while decoding")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    try:
        dungeon = load_dungeon(args.dungeon_file, verbose=args.verbose)
    except OSError as e:
        print(f"Cannot read dungeon file {args.dungeon_file}: {e}", file=sys.stderr)
        return 1
    except DungeonError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.floor is not None:
        try:
            floor = dungeon.get_floor(args.floor)
        except IndexError:
            print(f"Floor {args.floor} not found; file has {len(dungeon)} floors.",
                  file=sys.stderr)
            return 1
        print(floor.to_full(include_plans=args.plans))
        return 0

    if args.plans:
        for floor in dungeon:
            print(floor.to_full(include_plans=True))
            print()
    else:
        print(dungeon.to_brief())
    return 0


if __name__ == "__main__":
    sys.exit(main())
