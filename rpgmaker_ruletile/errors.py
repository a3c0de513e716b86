"""Exceptions raised by the tileset pipeline."""


class RuleTileError(RuntimeError):
    """Raised when a tileset cannot be built or written."""


class ConfigError(RuleTileError):
    """Raised for an invalid pipeline configuration."""


class SourceImageError(RuleTileError):
    """Raised when the source image cannot be sliced (too small, bad frame split)."""


class TileTableError(RuleTileError):
    """Raised when the combination table references a fragment that was not sliced."""
