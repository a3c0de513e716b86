"""
RPG Maker tileset -> rule-tile atlas pipeline.

    source.png -> slice -> assemble (per frame) -> stack -> atlas.png + atlas.json

Output for <dir>/<name>.png lands in <dir>/<name>.RuleTile/:
  - <name>.png:  the atlas (one row per animation frame)
  - <name>.json: tile rects and frame lists for rule-tile adapters
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image, UnidentifiedImageError

from . import image_ops
from .config import RULETILE_SUFFIX, TilesetConfig
from .errors import RuleTileError
from .frames import build_frame, stitch_frames
from .metadata import build_metadata, write_metadata
from .tile_table import tile_names


@dataclass
class Tileset:
    atlas: Image.Image
    tile_order: List[str]
    config: TilesetConfig

    @property
    def tile_width(self) -> int:
        return self.config.tile_width

    @property
    def tile_height(self) -> int:
        return self.config.tile_height

    @property
    def frame_count(self) -> int:
        return self.config.frames


@dataclass
class GeneratedTileset:
    tileset: Tileset
    atlas_path: Path
    metadata_path: Optional[Path]


def build_tileset(image: Image.Image, config: TilesetConfig) -> Tileset:
    """
    Convert a decoded source image into the rule-tile atlas.

    Bottom-left-origin buffers are flipped to top-left for slicing and each
    frame atlas is flipped back before stacking, so the fragment offsets
    always read top-to-bottom and frame 0 stays on the top row.

    Raises:
        SourceImageError: source too small or not divisible into frames
        TileTableError: combination table references an unknown fragment
    """
    source = image if image.mode == "RGBA" else image.convert("RGBA")
    if config.origin == "bottom-left":
        source = image_ops.flip_vertical(source)

    if config.is_animated:
        atlas = stitch_frames(source, config)
    else:
        atlas = build_frame(source, config)

    return Tileset(atlas, tile_names(config.is_wall), config)


def output_paths(input_path: Path, output_dir: Optional[Path] = None):
    """(folder, atlas path, metadata path) for one source image."""
    prefix = input_path.stem
    folder = (output_dir or input_path.parent) / f"{prefix}{RULETILE_SUFFIX}"
    return folder, folder / f"{prefix}.png", folder / f"{prefix}.json"


def remove_partial_output(folder: Path, *paths: Path) -> None:
    """Delete files of a failed run, and the folder if that leaves it empty."""
    for path in paths:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
    if folder.is_dir() and not any(folder.iterdir()):
        folder.rmdir()


def generate(
    input_path: Union[str, Path],
    config: TilesetConfig,
    output_dir: Optional[Union[str, Path]] = None,
    *,
    metadata: bool = True,
    quiet: bool = False,
) -> Optional[GeneratedTileset]:
    """
    Build and save the atlas for one source image.

    Failures are reported and return None; nothing is written unless the
    whole atlas was built.
    """
    input_path = Path(input_path)
    label = f"{config.mode}{' (animated)' if config.is_animated else ''}"

    if not input_path.is_file():
        print(f"❌ Error: source image not found: {input_path}")
        return None

    try:
        source = image_ops.load_image(input_path)
    except (UnidentifiedImageError, OSError) as exc:
        print(f"❌ Error: could not decode {input_path}: {exc}")
        return None

    if not quiet:
        print(f"→ Building {label} tileset from {input_path.name} ({source.width}x{source.height})")

    try:
        tileset = build_tileset(source, config)
    except RuleTileError as exc:
        print(f"❌ Error: {input_path.name}: {exc}")
        return None

    folder, atlas_path, metadata_path = output_paths(
        input_path, Path(output_dir) if output_dir else None
    )

    atlas_metadata = build_metadata(tileset) if metadata else None

    try:
        image_ops.save_image(tileset.atlas, atlas_path)
        if atlas_metadata is not None:
            write_metadata(atlas_metadata, metadata_path)
    except (RuleTileError, OSError) as exc:
        print(f"❌ Error: could not write tileset to {folder}: {exc}")
        remove_partial_output(folder, atlas_path, metadata_path)
        return None

    if not quiet:
        for index, name in enumerate(tileset.tile_order):
            print(f"  [{index:2d}] {name:16s} at x={index * tileset.tile_width:4d}")
        width, height = tileset.atlas.size
        print(f"✓ Saved atlas: {atlas_path} ({width}x{height}, "
              f"{len(tileset.tile_order)} tiles x {tileset.frame_count} frame(s))")
        if metadata:
            print(f"✓ Saved metadata: {metadata_path}")

    return GeneratedTileset(tileset, atlas_path, metadata_path if metadata else None)
