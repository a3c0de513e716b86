"""Synthetic RPG Maker sources: every 24px cell gets its own colour."""

import pytest
from PIL import Image

HALF = 24


def cell_color(cx, cy, tag=0):
    """Colour of the half-tile cell at column cx, row cy; tag marks the frame."""
    return (10 + cx * 15, 10 + cy * 12, 20 + tag * 50, 255)


def make_source(width, height, frames=1):
    """Source image of width x height per frame, frames laid side by side."""
    image = Image.new("RGBA", (width * frames, height))
    for frame in range(frames):
        for cy in range(height // HALF):
            for cx in range(width // HALF):
                x = frame * width + cx * HALF
                image.paste(cell_color(cx, cy, frame), (x, cy * HALF, x + HALF, cy * HALF + HALF))
    return image


@pytest.fixture
def ground_source():
    return make_source(96, 144)


@pytest.fixture
def wall_source():
    return make_source(96, 240)
