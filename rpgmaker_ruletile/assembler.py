"""
Tile Assembler: builds composite tiles from fragments and lays them out
left-to-right into a single-frame atlas.
"""

from __future__ import annotations

from typing import List, Tuple

from PIL import Image

from . import image_ops
from .config import TilesetConfig
from .errors import TileTableError
from .slicer import FragmentSet
from .tile_table import TileRecipe, referenced_fragments, tile_table


def _fragment(fragments: FragmentSet, recipe: TileRecipe, name: str) -> Image.Image:
    try:
        return fragments[name]
    except KeyError:
        raise TileTableError(f"tile {recipe.name!r} references missing fragment {name!r}") from None


def stitch_tile(recipe: TileRecipe, fragments: FragmentSet, config: TilesetConfig) -> Image.Image:
    """Compose one tile: ceiling quadrants on top, wall body underneath."""
    half, full = config.half_size, config.full_size
    tile = image_ops.new_canvas(config.tile_width, config.tile_height)

    if len(recipe.quadrants) == 1:
        image_ops.blit(tile, _fragment(fragments, recipe, recipe.quadrants[0]), 0, 0)
    else:
        top_left, top_right, bottom_left, bottom_right = recipe.quadrants
        image_ops.blit(tile, _fragment(fragments, recipe, top_left), 0, 0)
        image_ops.blit(tile, _fragment(fragments, recipe, top_right), half, 0)
        image_ops.blit(tile, _fragment(fragments, recipe, bottom_left), 0, half)
        image_ops.blit(tile, _fragment(fragments, recipe, bottom_right), half, half)

    # Tiles without a wall body keep a transparent strip so every wall tile has one height
    if config.is_wall and recipe.wall:
        image_ops.blit(tile, _fragment(fragments, recipe, recipe.wall), 0, full)

    return tile


def assemble(fragments: FragmentSet, config: TilesetConfig) -> Tuple[Image.Image, List[str]]:
    """
    Build every tile of the mode's table and concatenate them into one atlas.

    Every fragment reference is resolved before any pixel is drawn, so a
    broken table aborts without producing a partial atlas.

    Returns:
        (atlas, tile_order): atlas is tile_count * tile_width wide and
        tile_height tall; tile_order lists tile names by atlas column.
    """
    table = tile_table(config.is_wall)
    for recipe in table:
        for name in referenced_fragments(recipe, config.is_wall):
            _fragment(fragments, recipe, name)

    tiles = [stitch_tile(recipe, fragments, config) for recipe in table]
    atlas = image_ops.concat_horizontal(tiles)
    return atlas, [recipe.name for recipe in table]
