"""
Pipeline configuration.

Defaults follow the RPG Maker MV/MZ autotile grid: 48px tiles made of 24px
quarter pieces, animated sheets holding three frames side by side.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .errors import ConfigError

# Configuration
FULL_SIZE = 48        # Width/height of one output tile (ceiling part)
FRAME_COUNT = 3       # Animation frames laid out left-to-right in the source
ORIGIN = "top-left"   # Row order of decoded pixel buffers (Pillow is top-left)
RULETILE_SUFFIX = ".RuleTile"

ORIGINS = ("top-left", "bottom-left")

# Source layout in half-tile units: 4 columns, ceiling rows 0-5, wall rows 6-9
SOURCE_COLUMNS = 4
CEILING_ROWS = 6
WALL_ROWS = 4


@dataclass(frozen=True)
class TilesetConfig:
    full_size: int = FULL_SIZE
    frame_count: int = FRAME_COUNT
    is_wall: bool = False
    is_animated: bool = False
    origin: str = ORIGIN

    def __post_init__(self) -> None:
        if self.full_size <= 0 or self.full_size % 2:
            raise ConfigError(f"full_size must be a positive even number, got {self.full_size}")
        if self.frame_count < 1:
            raise ConfigError(f"frame_count must be at least 1, got {self.frame_count}")
        if self.origin not in ORIGINS:
            raise ConfigError(f"origin must be one of {', '.join(ORIGINS)}, got {self.origin!r}")

    @property
    def half_size(self) -> int:
        return self.full_size // 2

    @property
    def mode(self) -> str:
        return "wall" if self.is_wall else "ground"

    @property
    def frames(self) -> int:
        """Number of frames actually produced (1 unless animated)."""
        return self.frame_count if self.is_animated else 1

    @property
    def tile_width(self) -> int:
        return self.full_size

    @property
    def tile_height(self) -> int:
        # Wall tiles carry a two-tile-high wall body under the ceiling
        return self.full_size * 3 if self.is_wall else self.full_size

    @property
    def min_source_size(self) -> Tuple[int, int]:
        """Smallest (width, height) of one frame that covers every fragment."""
        rows = CEILING_ROWS + (WALL_ROWS if self.is_wall else 0)
        return SOURCE_COLUMNS * self.half_size, rows * self.half_size
