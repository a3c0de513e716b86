"""Convert RPG Maker autotile sheets into rule-tile atlases."""

from .assembler import assemble, stitch_tile
from .config import TilesetConfig
from .errors import ConfigError, RuleTileError, SourceImageError, TileTableError
from .frames import build_frame, split_frames, stack_frames, stitch_frames
from .metadata import build_metadata, tile_rects, write_metadata
from .pipeline import GeneratedTileset, Tileset, build_tileset, generate
from .slicer import slice_fragments
from .tile_table import GROUND_TILES, WALL_TILES, tile_names, validate_table

__version__ = "0.1.0"
