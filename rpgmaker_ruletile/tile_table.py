"""
Combination table: which fragments make up each output tile.

Tile order is positional. Rule-tile consumers map tile index N to rule N,
so entries must never be reordered; new tiles are only ever appended.

Naming, in the tile-painting sense of "which sides are bordered":
  wall*  tiles with edges (E) and/or corners (C) on the named sides
  corner* tiles that are fully surrounded except for inner corners
  T/B/L/R = top/bottom/left/right
"""

from __future__ import annotations

from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from .errors import TileTableError
from .slicer import fragment_names


class TileRecipe(NamedTuple):
    name: str
    quadrants: Tuple[str, ...]  # TL, TR, BL, BR; or one full-tile fragment
    wall: Optional[str] = None  # wall body stacked below (wall mode only)


def _tile(name, tl, tr, bl, br, wall=None):
    return TileRecipe(name, (tl, tr, bl, br), wall)


GROUND_TILES: List[TileRecipe] = [
    # Single wall, empty, four corners
    TileRecipe("wallS", ("ceilSingle",), "wallS"),
    _tile("empty",        "ceilBTRL", "ceilBTLR", "ceilTBRL", "ceilTBLR"),
    _tile("cornerTBLR",   "cornerTL", "cornerTR", "cornerBL", "cornerBR"),

    # Top-bottom edge, left-right edge
    _tile("wallTBE",      "ceilTTLR", "ceilTTRL", "ceilBBLR", "ceilBBRL", "wallM"),
    _tile("wallLRE",      "ceilTBLL", "ceilTBRR", "ceilBTLL", "ceilBTRR"),

    # Three-sided edges
    _tile("wallTLRE",     "ceilTTLL", "ceilTTRR", "ceilTBLL", "ceilTBRR"),
    _tile("wallBLRE",     "ceilBTLL", "ceilBTRR", "ceilBBLL", "ceilBBRR", "wallS"),
    _tile("wallLTBE",     "ceilTTLL", "ceilTTLR", "ceilBBLL", "ceilBBLR", "wallL"),
    _tile("wallRTBE",     "ceilTTRL", "ceilTTRR", "ceilBBRL", "ceilBBRR", "wallR"),

    # Single edges
    _tile("wallTE",       "ceilTTRL", "ceilTTLR", "ceilTBRL", "ceilTBLR"),
    _tile("wallBE",       "ceilBTRL", "ceilBTLR", "ceilBBRL", "ceilBBLR", "wallM"),
    _tile("wallLE",       "ceilBTLL", "ceilBTLR", "ceilTBLL", "ceilTBLR"),
    _tile("wallRE",       "ceilBTRL", "ceilBTRR", "ceilTBRL", "ceilTBRR"),

    # Edge with both opposite corners
    _tile("wallTELRC",    "ceilTTLR", "ceilTTRL", "cornerBL", "cornerBR"),
    _tile("wallBELRC",    "cornerTL", "cornerTR", "ceilBBLR", "ceilBBRL", "wallM"),
    _tile("wallLETBC",    "ceilTBLL", "cornerTR", "ceilBTLL", "cornerBR"),
    _tile("wallRETBC",    "cornerTL", "ceilTBRR", "cornerBL", "ceilBTRR"),

    # Two corners on one side
    _tile("wallTC",       "cornerTL", "cornerTR", "ceilTBRL", "ceilTBLR"),
    _tile("wallBC",       "ceilBTRL", "ceilBTLR", "cornerBL", "cornerBR"),
    _tile("wallLC",       "cornerTL", "ceilBTLR", "cornerBL", "ceilTBLR"),
    _tile("wallRC",       "ceilBTRL", "cornerTR", "ceilTBRL", "cornerBR"),

    # Two adjacent edges
    _tile("wallTLE",      "ceilTTLL", "ceilTTLR", "ceilTBLL", "ceilTBLR"),
    _tile("wallTRE",      "ceilTTRL", "ceilTTRR", "ceilTBRL", "ceilTBRR"),
    _tile("wallBLE",      "ceilBTLL", "ceilBTLR", "ceilBBLL", "ceilBBLR", "wallL"),
    _tile("wallBRE",      "ceilBTRL", "ceilBTRR", "ceilBBRL", "ceilBBRR", "wallR"),

    # Two adjacent edges with the opposite corner
    _tile("wallTLEC",     "ceilTTLL", "ceilTTLR", "ceilTBLL", "cornerBR"),
    _tile("wallTREC",     "ceilTTRL", "ceilTTRR", "cornerBL", "ceilTBRR"),
    _tile("wallBLEC",     "ceilBTLL", "cornerTR", "ceilBBLL", "ceilBBLR", "wallL"),
    _tile("wallBREC",     "cornerTL", "ceilBTRR", "ceilBBRL", "ceilBBRR", "wallR"),

    # Top/bottom edge with one corner
    _tile("wallTELC",     "ceilTTLR", "ceilTTRL", "cornerBL", "ceilTBLR"),
    _tile("wallTERC",     "ceilTTLR", "ceilTTRL", "ceilTBRL", "cornerBR"),
    _tile("wallBELC",     "cornerTL", "ceilBTLR", "ceilBBLR", "ceilBBRL", "wallM"),
    _tile("wallBERC",     "ceilBTRL", "cornerTR", "ceilBBLR", "ceilBBRL", "wallM"),

    # Left/right edge with one corner
    _tile("wallLETC",     "ceilTBLL", "cornerTR", "ceilBTLL", "ceilTBLR"),
    _tile("wallRETC",     "cornerTL", "ceilTBRR", "ceilTBRL", "ceilBTRR"),
    _tile("wallLEBC",     "ceilTBLL", "ceilBTLR", "ceilBTLL", "cornerBR"),
    _tile("wallREBC",     "ceilBTRL", "ceilTBRR", "cornerBL", "ceilBTRR"),

    # Single inner corner
    _tile("cornerTL",     "cornerTL", "ceilBTLR", "ceilTBRL", "ceilTBLR"),
    _tile("cornerTR",     "ceilBTRL", "cornerTR", "ceilTBRL", "ceilTBLR"),
    _tile("cornerBL",     "ceilBTRL", "ceilBTLR", "cornerBL", "ceilTBLR"),
    _tile("cornerBR",     "ceilBTRL", "ceilBTLR", "ceilTBRL", "cornerBR"),

    # Diagonal corner pairs
    _tile("cornerTLBR",   "cornerTL", "ceilBTLR", "ceilTBRL", "cornerBR"),
    _tile("cornerBLTR",   "ceilBTRL", "cornerTR", "cornerBL", "ceilTBLR"),

    # Three inner corners
    _tile("cornerTLTRBL", "cornerTL", "cornerTR", "cornerBL", "ceilTBLR"),
    _tile("cornerTLTRBR", "cornerTL", "cornerTR", "ceilTBRL", "cornerBR"),
    _tile("cornerTLBLBR", "cornerTL", "ceilBTLR", "cornerBL", "cornerBR"),
    _tile("cornerTRBLBR", "ceilBTRL", "cornerTR", "cornerBL", "cornerBR"),
]

# Wall mode appends variants whose wall body changes with the neighbours
# left and right of the tile; the ceiling stays that of the base tile.
WALL_VARIANT_BODIES: Dict[str, Tuple[str, ...]] = {
    "wallTBE": ("wallS", "wallL", "wallR"),
    "wallBE": ("wallS", "wallL", "wallR"),
    "wallBELRC": ("wallS", "wallL", "wallR"),
    "wallBELC": ("wallS", "wallL", "wallR"),
    "wallBERC": ("wallS", "wallL", "wallR"),
    "wallLTBE": ("wallS",),
    "wallBLE": ("wallS",),
    "wallBLEC": ("wallS",),
    "wallRTBE": ("wallS",),
    "wallBRE": ("wallS",),
    "wallBREC": ("wallS",),
}


def _wall_variants() -> List[TileRecipe]:
    by_name = {recipe.name: recipe for recipe in GROUND_TILES}
    variants = []
    for base, bodies in WALL_VARIANT_BODIES.items():
        recipe = by_name[base]
        for body in bodies:
            # "wallS" -> "_S"
            variants.append(recipe._replace(name=f"{base}_{body[-1]}", wall=body))
    return variants


WALL_TILES: List[TileRecipe] = GROUND_TILES + _wall_variants()

GROUND_TILE_COUNT = len(GROUND_TILES)   # 47
WALL_TILE_COUNT = len(WALL_TILES)       # 68


def tile_table(is_wall: bool) -> List[TileRecipe]:
    return WALL_TILES if is_wall else GROUND_TILES


def tile_names(is_wall: bool) -> List[str]:
    return [recipe.name for recipe in tile_table(is_wall)]


def referenced_fragments(recipe: TileRecipe, is_wall: bool) -> Tuple[str, ...]:
    """Fragments a recipe needs; wall bodies only count in wall mode."""
    if is_wall and recipe.wall:
        return recipe.quadrants + (recipe.wall,)
    return recipe.quadrants


def missing_fragments(is_wall: bool, available: Optional[Iterable[str]] = None) -> Dict[str, List[str]]:
    """Map tile name -> fragment names it references that are not available."""
    known = set(fragment_names(is_wall) if available is None else available)
    missing = {}
    for recipe in tile_table(is_wall):
        absent = [name for name in referenced_fragments(recipe, is_wall) if name not in known]
        if absent:
            missing[recipe.name] = absent
    return missing


def validate_table(is_wall: bool) -> None:
    """
    Self-check the table for one mode.

    Raises TileTableError when names repeat, a recipe is malformed, or a
    recipe references a fragment the slicer does not produce.
    """
    table = tile_table(is_wall)
    names = [recipe.name for recipe in table]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise TileTableError(f"duplicate tile names: {', '.join(duplicates)}")

    for recipe in table:
        if len(recipe.quadrants) not in (1, 4):
            raise TileTableError(f"{recipe.name}: expected 1 or 4 ceiling fragments, got {len(recipe.quadrants)}")

    missing = missing_fragments(is_wall)
    if missing:
        details = "; ".join(f"{tile}: {', '.join(names)}" for tile, names in missing.items())
        raise TileTableError(f"{len(missing)} tile(s) reference unknown fragments ({details})")
