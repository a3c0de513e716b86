"""
Atlas metadata for rule-tile adapters.

The JSON mirrors the other atlas generators in this repo: atlas size, tile
size and one entry per tile with its pixel position and UV rect. Animated
tilesets list every frame position of a tile under "frames".
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Tuple, Union

from .errors import RuleTileError

if TYPE_CHECKING:
    from .pipeline import Tileset

Rect = Tuple[int, int, int, int]


def tile_rects(tileset: "Tileset", frame: int = 0) -> List[Tuple[int, str, Rect]]:
    """(index, name, (x, y, width, height)) for every tile of one frame row."""
    width, height = tileset.tile_width, tileset.tile_height
    return [
        (index, name, (index * width, frame * height, width, height))
        for index, name in enumerate(tileset.tile_order)
    ]


def tile_frames(tileset: "Tileset", index: int) -> List[Dict[str, int]]:
    """Atlas positions of one tile across all frames, frame 0 first."""
    return [
        {
            "frame": frame,
            "atlas_x": index * tileset.tile_width,
            "atlas_y": frame * tileset.tile_height,
        }
        for frame in range(tileset.frame_count)
    ]


def build_metadata(tileset: "Tileset") -> Dict[str, Any]:
    atlas_width, atlas_height = tileset.atlas.size

    metadata: Dict[str, Any] = {
        "atlas_width": atlas_width,
        "atlas_height": atlas_height,
        "tile_width": tileset.tile_width,
        "tile_height": tileset.tile_height,
        "total_tiles": len(tileset.tile_order),
        "frame_count": tileset.frame_count,
        "mode": tileset.config.mode,
        "animated": tileset.config.is_animated,
        "tiles": [],
    }

    for index, name, (x, y, width, height) in tile_rects(tileset):
        metadata["tiles"].append({
            "index": index,
            "name": name,
            "atlas_x": x,
            "atlas_y": y,
            "uv_rect": {
                "x": x / atlas_width,
                "y": y / atlas_height,
                "width": width / atlas_width,
                "height": height / atlas_height,
            },
            "frames": tile_frames(tileset, index),
        })

    return metadata


def write_metadata(metadata: Dict[str, Any], path: Union[str, Path]) -> None:
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(metadata, f, indent=2)
    except OSError as exc:
        raise RuleTileError(f"could not write metadata to {path}: {exc}") from exc
