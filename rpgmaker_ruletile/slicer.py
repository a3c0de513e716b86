"""
Slicer: crops the RPG Maker source sheet into named fragments.

Source layout, in half-tile units (24px for the default 48px grid):

    col:   0      1      2        3
    row 0  ceilSingle    cornerTL cornerTR
    row 1  (2x2)         cornerBL cornerBR
    row 2  ceilTTLL ceilTTLR ceilTTRL ceilTTRR
    row 3  ceilTBLL ceilTBLR ceilTBRL ceilTBRR
    row 4  ceilBTLL ceilBTLR ceilBTRL ceilBTRR
    row 5  ceilBBLL ceilBBLR ceilBBRL ceilBBRR
    row 6  wallLL   wallLR   wallRL   wallRR     (wall mode, 4 rows tall)

Rows 2-5 are the 2x2-tile "combination" block: T/B picks the top or bottom
tile of the block and T/B again the half within it; LL/LR/RL/RR do the same
horizontally.
"""

from __future__ import annotations

from typing import Dict, NamedTuple, Tuple

from PIL import Image

from . import image_ops
from .config import TilesetConfig
from .errors import SourceImageError

FragmentSet = Dict[str, Image.Image]


class FragmentSpec(NamedTuple):
    col: int     # half-tile units
    row: int
    width: int
    height: int


_HALVES = ("LL", "LR", "RL", "RR")
_BLOCK_ROWS = ("TT", "TB", "BT", "BB")

CEILING_FRAGMENTS: Dict[str, FragmentSpec] = {
    "ceilSingle": FragmentSpec(0, 0, 2, 2),
    "cornerTL": FragmentSpec(2, 0, 1, 1),
    "cornerTR": FragmentSpec(3, 0, 1, 1),
    "cornerBL": FragmentSpec(2, 1, 1, 1),
    "cornerBR": FragmentSpec(3, 1, 1, 1),
}
CEILING_FRAGMENTS.update({
    f"ceil{prefix}{half}": FragmentSpec(col, row, 1, 1)
    for row, prefix in enumerate(_BLOCK_ROWS, start=2)
    for col, half in enumerate(_HALVES)
})

WALL_STRIPS: Dict[str, FragmentSpec] = {
    f"wall{half}": FragmentSpec(col, 6, 1, 4) for col, half in enumerate(_HALVES)
}

# Wall bodies: (left strip, right strip)
WALL_BODIES: Dict[str, Tuple[str, str]] = {
    "wallS": ("wallLL", "wallRR"),   # single
    "wallL": ("wallLL", "wallLR"),   # left end
    "wallM": ("wallLR", "wallRL"),   # middle
    "wallR": ("wallRL", "wallRR"),   # right end
}


def fragment_names(is_wall: bool) -> Tuple[str, ...]:
    """Names of every fragment `slice_fragments` produces for the mode."""
    names = tuple(CEILING_FRAGMENTS)
    if is_wall:
        names += tuple(WALL_STRIPS) + tuple(WALL_BODIES)
    return names


def check_size(width: int, height: int, config: TilesetConfig) -> None:
    """Fail before cropping if a frame of this size cannot hold every fragment."""
    min_width, min_height = config.min_source_size
    if width < min_width or height < min_height:
        raise SourceImageError(
            f"{config.mode} source must be at least {min_width}x{min_height}px per frame, "
            f"got {width}x{height}"
        )


def check_bounds(image: Image.Image, config: TilesetConfig) -> None:
    check_size(image.width, image.height, config)


def _cut(image: Image.Image, spec: FragmentSpec, half: int) -> Image.Image:
    return image_ops.crop(image, spec.col * half, spec.row * half, spec.width * half, spec.height * half)


def slice_fragments(image: Image.Image, config: TilesetConfig) -> FragmentSet:
    """Crop one frame (top-left origin) into its named fragments."""
    check_bounds(image, config)
    half = config.half_size

    fragments: FragmentSet = {name: _cut(image, spec, half) for name, spec in CEILING_FRAGMENTS.items()}
    if not config.is_wall:
        return fragments

    for name, spec in WALL_STRIPS.items():
        fragments[name] = _cut(image, spec, half)

    for name, (left, right) in WALL_BODIES.items():
        body = image_ops.new_canvas(config.full_size, config.full_size * 2)
        image_ops.blit(body, fragments[left], 0, 0)
        image_ops.blit(body, fragments[right], half, 0)
        fragments[name] = body

    return fragments
