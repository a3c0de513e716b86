#!/usr/bin/env python3
"""
RPG Maker -> rule-tile atlas converter.

Turns RPG Maker MV/MZ A2 (ground) and A4 (wall) autotile sheets into a
47-tile (ground) or 68-tile (wall) atlas plus JSON metadata that a rule-tile
adapter maps onto tiling rules by tile index.

Usage:
    rpgmaker-ruletile ground Grass.png
    rpgmaker-ruletile wall Dungeon.png --output-dir out/
    rpgmaker-ruletile animated-ground Water.png --frames 3
    rpgmaker-ruletile check
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .config import FRAME_COUNT, FULL_SIZE, ORIGIN, ORIGINS, TilesetConfig
from .errors import RuleTileError
from .pipeline import generate
from .tile_table import tile_table, validate_table

MODES = {
    "ground": (False, False),
    "wall": (True, False),
    "animated-ground": (False, True),
    "animated-wall": (True, True),
}


def run_check() -> int:
    """Self-test the combination table for both modes."""
    failed = False
    for is_wall in (False, True):
        mode = "wall" if is_wall else "ground"
        try:
            validate_table(is_wall)
        except RuleTileError as exc:
            print(f"✗ {mode} table: {exc}")
            failed = True
            continue
        print(f"✓ {mode} table: {len(tile_table(is_wall))} tiles, all fragments resolved")
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rpgmaker-ruletile",
        description="Convert RPG Maker autotile sheets into rule-tile atlases.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "mode",
        choices=sorted(MODES) + ["check"],
        help="Tileset kind to build, or 'check' to self-test the tile table.",
    )
    parser.add_argument("inputs", nargs="*", help="Source PNG files.")
    parser.add_argument(
        "--tile-size",
        type=int,
        default=FULL_SIZE,
        help="Output tile size in pixels (source quarter pieces are half of this).",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=FRAME_COUNT,
        help="Animation frames laid out side by side in animated sources.",
    )
    parser.add_argument(
        "--origin",
        choices=ORIGINS,
        default=ORIGIN,
        help="Row order of the source pixel buffer. PNG files decode top-down; use "
        "bottom-left only for sources already stored bottom-up.",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for <name>.RuleTile folders (default: next to each input).",
    )
    parser.add_argument(
        "--no-metadata",
        action="store_true",
        help="Only write the atlas PNG.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print errors.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.mode == "check":
        return run_check()

    if not args.inputs:
        parser.error("at least one input image is required")

    is_wall, is_animated = MODES[args.mode]
    try:
        config = TilesetConfig(
            full_size=args.tile_size,
            frame_count=args.frames,
            is_wall=is_wall,
            is_animated=is_animated,
            origin=args.origin,
        )
    except RuleTileError as exc:
        print(f"❌ Error: {exc}")
        return 1

    failures = 0
    for path in args.inputs:
        result = generate(
            path,
            config,
            args.output_dir,
            metadata=not args.no_metadata,
            quiet=args.quiet,
        )
        if result is None:
            failures += 1

    if not args.quiet:
        print("")
        print(f"Done: {len(args.inputs) - failures}/{len(args.inputs)} tileset(s) created.")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
