"""
Frame Stitcher for animated tilesets.

Animated RPG Maker sheets hold their frames side by side. Each frame is
sliced and assembled on its own, then the per-frame atlases are stacked
with frame 0 on top:

    Row 0: frame 0 (tile 0 .. tile N-1)
    Row 1: frame 1
    Row 2: frame 2

so tile i of frame j sits at column i, row j (flat index i + j * N).
"""

from __future__ import annotations

from typing import List

from PIL import Image

from . import image_ops
from .assembler import assemble
from .config import TilesetConfig
from .errors import SourceImageError
from .slicer import check_size, slice_fragments


def _check_divisible(width: int, frame_count: int) -> None:
    if width % frame_count:
        raise SourceImageError(
            f"source width {width} is not divisible into {frame_count} frames"
        )


def split_frames(image: Image.Image, frame_count: int) -> List[Image.Image]:
    """Cut the source into frame_count equal-width strips, left to right."""
    _check_divisible(image.width, frame_count)
    frame_width = image.width // frame_count
    return [
        image_ops.crop(image, index * frame_width, 0, frame_width, image.height)
        for index in range(frame_count)
    ]


def stack_frames(atlases: List[Image.Image]) -> Image.Image:
    return image_ops.concat_vertical(atlases)


def check_frames(image: Image.Image, config: TilesetConfig) -> None:
    """Validate every frame strip before any of them is sliced."""
    _check_divisible(image.width, config.frame_count)
    check_size(image.width // config.frame_count, image.height, config)


def build_frame(frame: Image.Image, config: TilesetConfig) -> Image.Image:
    """
    Slice and assemble one top-left-origin frame.

    For bottom-left sources the frame atlas is flipped back here, before
    stacking, so frame 0 stays on the top row of the encoded image.
    """
    atlas, _ = assemble(slice_fragments(frame, config), config)
    if config.origin == "bottom-left":
        atlas = image_ops.flip_vertical(atlas)
    return atlas


def stitch_frames(image: Image.Image, config: TilesetConfig) -> Image.Image:
    """Run slicer and assembler per frame strip and stack the results."""
    check_frames(image, config)
    return stack_frames([build_frame(frame, config) for frame in split_frames(image, config.frame_count)])
