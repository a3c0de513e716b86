"""Pillow helpers shared by the slicer, assembler and frame stitcher."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

from PIL import Image

from .errors import SourceImageError

TRANSPARENT = (0, 0, 0, 0)


def load_image(path: Union[str, Path]) -> Image.Image:
    """Decode a PNG fully into memory as RGBA."""
    with Image.open(path) as img:
        img.load()
        return img.convert("RGBA")


def save_image(image: Image.Image, path: Union[str, Path]) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    image.save(str(path), "PNG")


def new_canvas(width: int, height: int) -> Image.Image:
    """Blank RGBA image, fully transparent."""
    return Image.new("RGBA", (width, height), TRANSPARENT)


def flip_vertical(image: Image.Image) -> Image.Image:
    return image.transpose(Image.Transpose.FLIP_TOP_BOTTOM)


def crop(image: Image.Image, x: int, y: int, width: int, height: int) -> Image.Image:
    """Cut a (width x height) region whose top-left corner sits at (x, y)."""
    if x < 0 or y < 0 or x + width > image.width or y + height > image.height:
        raise SourceImageError(
            f"crop ({x}, {y}, {width}x{height}) outside {image.width}x{image.height} image"
        )
    return image.crop((x, y, x + width, y + height))


def blit(dst: Image.Image, src: Image.Image, x: int, y: int) -> None:
    """Copy src pixels (alpha included) into dst at (x, y)."""
    dst.paste(src, (x, y))


def concat_horizontal(images: Sequence[Image.Image]) -> Image.Image:
    """Place images left-to-right; all must share one height."""
    height = images[0].height
    canvas = new_canvas(sum(img.width for img in images), height)
    x = 0
    for img in images:
        if img.height != height:
            raise ValueError(f"image height {img.height} differs from {height}")
        blit(canvas, img, x, 0)
        x += img.width
    return canvas


def concat_vertical(images: Sequence[Image.Image]) -> Image.Image:
    """Stack images top-to-bottom; all must share one width."""
    width = images[0].width
    canvas = new_canvas(width, sum(img.height for img in images))
    y = 0
    for img in images:
        if img.width != width:
            raise ValueError(f"image width {img.width} differs from {width}")
        blit(canvas, img, 0, y)
        y += img.height
    return canvas
