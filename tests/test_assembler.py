"""Tile Assembler tests"""

import pytest

from rpgmaker_ruletile.assembler import assemble, stitch_tile
from rpgmaker_ruletile.config import TilesetConfig
from rpgmaker_ruletile.errors import TileTableError
from rpgmaker_ruletile.slicer import slice_fragments
from rpgmaker_ruletile.tile_table import GROUND_TILES, WALL_TILES

from conftest import cell_color, make_source

TRANSPARENT = (0, 0, 0, 0)


def build(source, is_wall=False):
    config = TilesetConfig(is_wall=is_wall)
    return assemble(slice_fragments(source, config), config)


def quadrant_colors(atlas, index, size=48):
    """Top-left pixel of each ceiling quadrant of tile `index`."""
    x, half = index * size, size // 2
    return (
        atlas.getpixel((x, 0)),
        atlas.getpixel((x + half, 0)),
        atlas.getpixel((x, half)),
        atlas.getpixel((x + half, half)),
    )


def test_ground_example_sheet():
    """192x432 ground sheet -> 47 tiles in a 2256x48 atlas."""
    atlas, order = build(make_source(192, 432))

    assert len(order) == 47
    assert atlas.size == (47 * 48, 48)
    assert atlas.size == (2256, 48)
    assert order[0] == "wallS"
    assert quadrant_colors(atlas, 0) == (
        cell_color(0, 0), cell_color(1, 0), cell_color(0, 1), cell_color(1, 1),
    )


def test_empty_tile_uses_inner_combination_pieces(ground_source):
    atlas, order = build(ground_source)

    assert order[1] == "empty"
    # ceilBTRL, ceilBTLR, ceilTBRL, ceilTBLR
    assert quadrant_colors(atlas, 1) == (
        cell_color(2, 4), cell_color(1, 4), cell_color(2, 3), cell_color(1, 3),
    )


def test_four_corner_tile(ground_source):
    atlas, order = build(ground_source)

    assert order[2] == "cornerTBLR"
    assert quadrant_colors(atlas, 2) == (
        cell_color(2, 0), cell_color(3, 0), cell_color(2, 1), cell_color(3, 1),
    )


def test_every_ground_tile_matches_its_recipe(ground_source):
    config = TilesetConfig()
    fragments = slice_fragments(ground_source, config)
    atlas, order = assemble(fragments, config)

    for index, recipe in enumerate(GROUND_TILES):
        if len(recipe.quadrants) != 4:
            continue
        expected = tuple(fragments[name].getpixel((0, 0)) for name in recipe.quadrants)
        assert quadrant_colors(atlas, index) == expected, recipe.name


def test_ground_tile_geometry(ground_source):
    config = TilesetConfig()
    fragments = slice_fragments(ground_source, config)

    for recipe in GROUND_TILES:
        assert stitch_tile(recipe, fragments, config).size == (48, 48)


def test_wall_tile_geometry(wall_source):
    config = TilesetConfig(is_wall=True)
    fragments = slice_fragments(wall_source, config)

    for recipe in WALL_TILES:
        assert stitch_tile(recipe, fragments, config).size == (48, 144)


def test_wall_atlas_size(wall_source):
    atlas, order = build(wall_source, is_wall=True)

    assert len(order) == 68
    assert atlas.size == (68 * 48, 144)


def test_wall_single_has_single_body(wall_source):
    atlas, _ = build(wall_source, is_wall=True)

    assert atlas.getpixel((0, 48)) == cell_color(0, 6)
    assert atlas.getpixel((24, 48)) == cell_color(3, 6)
    assert atlas.getpixel((0, 143)) == cell_color(0, 9)
    assert atlas.getpixel((47, 143)) == cell_color(3, 9)


def test_tiles_without_body_are_padded_transparent(wall_source):
    atlas, order = build(wall_source, is_wall=True)
    x = order.index("empty") * 48

    assert atlas.getpixel((x, 47)) != TRANSPARENT
    assert atlas.getpixel((x, 48)) == TRANSPARENT
    assert atlas.getpixel((x + 47, 143)) == TRANSPARENT


def test_wall_variant_swaps_body_only(wall_source):
    atlas, order = build(wall_source, is_wall=True)
    base = order.index("wallTBE")
    variant = order.index("wallTBE_L")

    assert quadrant_colors(atlas, variant) == quadrant_colors(atlas, base)
    # wallM (LR + RL) under the base, wallL (LL + LR) under the variant
    assert atlas.getpixel((base * 48, 48)) == cell_color(1, 6)
    assert atlas.getpixel((base * 48 + 24, 48)) == cell_color(2, 6)
    assert atlas.getpixel((variant * 48, 48)) == cell_color(0, 6)
    assert atlas.getpixel((variant * 48 + 24, 48)) == cell_color(1, 6)


def test_ground_mode_has_no_wall_body(wall_source):
    """A wall-capable sheet built as ground only uses its ceiling rows."""
    atlas, _ = build(wall_source, is_wall=False)

    assert atlas.size == (47 * 48, 48)


def test_assemble_is_deterministic(wall_source):
    first, _ = build(wall_source, is_wall=True)
    second, _ = build(wall_source, is_wall=True)

    assert first.tobytes() == second.tobytes()


def test_missing_fragment_aborts(ground_source):
    config = TilesetConfig()
    fragments = slice_fragments(ground_source, config)
    del fragments["cornerBR"]

    with pytest.raises(TileTableError, match="cornerBR"):
        assemble(fragments, config)


def test_wall_mode_needs_wall_fragments(ground_source):
    """Ground fragments cannot satisfy the wall table."""
    fragments = slice_fragments(ground_source, TilesetConfig())

    with pytest.raises(TileTableError):
        assemble(fragments, TilesetConfig(is_wall=True))


# Source cell (column, row) of each half-tile fragment, from the sheet layout
FRAGMENT_CELLS = {
    "cornerTL": (2, 0), "cornerTR": (3, 0), "cornerBL": (2, 1), "cornerBR": (3, 1),
}
for _row, _block in enumerate(("TT", "TB", "BT", "BB"), start=2):
    for _col, _half in enumerate(("LL", "LR", "RL", "RR")):
        FRAGMENT_CELLS[f"ceil{_block}{_half}"] = (_col, _row)

# Wall body -> (left strip column, right strip column)
BODY_COLUMNS = {"wallS": (0, 3), "wallL": (0, 1), "wallM": (1, 2), "wallR": (2, 3)}


def test_ground_atlas_pixels_follow_reference_layout(ground_source):
    """Ceiling quadrant colours of all 47 tiles come from the listed source cells."""
    from test_tile_table import EXPECTED_GROUND_TILES

    atlas, order = build(ground_source)

    for index, (name, *quadrants, _) in enumerate(EXPECTED_GROUND_TILES):
        assert order[index] == name
        if name == "wallS":
            continue
        expected = tuple(cell_color(*FRAGMENT_CELLS[fragment]) for fragment in quadrants)
        assert quadrant_colors(atlas, index) == expected, name


def test_every_wall_tile_body(wall_source):
    """Each wall tile carries its listed body, or transparent padding when it has none."""
    from test_tile_table import EXPECTED_GROUND_TILES, EXPECTED_WALL_VARIANTS

    bodies = [(name, wall) for name, *_, wall in EXPECTED_GROUND_TILES] + EXPECTED_WALL_VARIANTS
    atlas, order = build(wall_source, is_wall=True)

    assert order == [name for name, _ in bodies]
    for index, (name, body) in enumerate(bodies):
        x = index * 48
        if body is None:
            assert atlas.getpixel((x, 48)) == TRANSPARENT, name
            assert atlas.getpixel((x + 47, 143)) == TRANSPARENT, name
            continue
        left, right = BODY_COLUMNS[body]
        assert atlas.getpixel((x, 48)) == cell_color(left, 6), name
        assert atlas.getpixel((x + 24, 48)) == cell_color(right, 6), name
        assert atlas.getpixel((x + 23, 143)) == cell_color(left, 9), name
        assert atlas.getpixel((x + 47, 143)) == cell_color(right, 9), name


def test_wall_variant_ceilings_match_base_tile(wall_source):
    atlas, order = build(wall_source, is_wall=True)

    for index, name in enumerate(order[47:], start=47):
        base = order.index(name.rsplit("_", 1)[0])
        assert atlas.crop((index * 48, 0, index * 48 + 48, 48)).tobytes() == \
            atlas.crop((base * 48, 0, base * 48 + 48, 48)).tobytes(), name
