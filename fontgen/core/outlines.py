"""
Glyph outline utilities.

CFF to TrueType conversion and contour clean-up.
"""

from fontTools.pens.cu2quPen import Cu2QuPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont, newTable
from fontTools.ttLib.tables._g_l_y_f import GlyphCoordinates

from fontgen.errors import UnsupportedFontError
from fontgen.utils.logging import logger

# Maximum error, in font units, when approximating cubic curves
MAX_ERR = 1.0
POST_FORMAT = 2.0

TRUETYPE_SFNT_VERSION = "\000\001\000\000"
FLAG_ON_CURVE = 0x01


def glyphs_to_quadratic(glyph_set, *, max_err: float = MAX_ERR) -> dict:
    """Draw every glyph of ``glyph_set`` into quadratic TrueType glyphs."""
    quad_glyphs = {}
    for glyph_name in glyph_set.keys():
        tt_pen = TTGlyphPen(glyph_set)
        # PostScript contours run counter-clockwise, TrueType clockwise
        glyph_set[glyph_name].draw(Cu2QuPen(tt_pen, max_err, reverse_direction=True))
        quad_glyphs[glyph_name] = tt_pen.glyph()
    return quad_glyphs


def cff_to_glyf(font: TTFont) -> None:
    """
    Replace CFF outlines with TrueType ``glyf`` outlines in place.

    Raises:
        UnsupportedFontError: For CFF2 (variable) fonts
    """
    if "glyf" in font:
        return
    if "CFF2" in font:
        raise UnsupportedFontError("CFF2 variable fonts cannot be converted to TrueType")
    if "CFF " not in font:
        raise UnsupportedFontError("Font has neither glyf nor CFF outlines")

    glyph_order = font.getGlyphOrder()
    glyphs = glyphs_to_quadratic(font.getGlyphSet())

    font["loca"] = newTable("loca")
    font["glyf"] = glyf = newTable("glyf")
    glyf.glyphOrder = glyph_order
    glyf.glyphs = glyphs
    del font["CFF "]
    if "VORG" in font:
        del font["VORG"]
    glyf.compile(font)

    hmtx = font["hmtx"]
    for glyph_name, glyph in glyf.glyphs.items():
        if hasattr(glyph, "xMin"):
            hmtx[glyph_name] = (hmtx[glyph_name][0], glyph.xMin)

    font["maxp"] = maxp = newTable("maxp")
    maxp.tableVersion = 0x00010000
    maxp.maxZones = 1
    maxp.maxTwilightPoints = 0
    maxp.maxStorage = 0
    maxp.maxFunctionDefs = 0
    maxp.maxInstructionDefs = 0
    maxp.maxStackElements = 0
    maxp.maxSizeOfInstructions = 0
    maxp.maxComponentElements = max(
        (len(getattr(g, "components", [])) for g in glyf.glyphs.values()), default=0
    )
    maxp.compile(font)

    post = font["post"]
    post.formatType = POST_FORMAT
    post.extraNames = []
    post.mapping = {}
    post.glyphOrder = glyph_order
    try:
        post.compile(font)
    except OverflowError:
        post.formatType = 3
        logger.warning("Dropping glyph names, they do not fit in 'post' table")

    font.sfntVersion = TRUETYPE_SFNT_VERSION
    logger.debug(f"Converted {len(glyph_order)} CFF glyphs to TrueType outlines")


def _is_on_curve(flags, index: int) -> bool:
    return bool(flags[index] & FLAG_ON_CURVE)


def remove_duplicate_points(glyph) -> int:
    """
    Drop repeated on-curve points from each contour of a simple glyph.

    Includes the closing point when it repeats the first. Off-curve points
    are never removed, since that would change the curve.

    Returns:
        Number of points removed
    """
    coordinates = glyph.coordinates
    flags = glyph.flags
    new_coordinates = []
    new_flags = bytearray()
    new_ends = []

    start = 0
    for end in glyph.endPtsOfContours:
        kept: list[int] = []
        for index in range(start, end + 1):
            if (
                kept
                and coordinates[index] == coordinates[kept[-1]]
                and _is_on_curve(flags, index)
                and _is_on_curve(flags, kept[-1])
            ):
                continue
            kept.append(index)
        while (
            len(kept) > 1
            and coordinates[kept[-1]] == coordinates[kept[0]]
            and _is_on_curve(flags, kept[-1])
            and _is_on_curve(flags, kept[0])
        ):
            kept.pop()

        for index in kept:
            new_coordinates.append(coordinates[index])
            new_flags.append(flags[index])
        new_ends.append(len(new_coordinates) - 1)
        start = end + 1

    removed = len(coordinates) - len(new_coordinates)
    if removed:
        glyph.coordinates = GlyphCoordinates(new_coordinates)
        glyph.flags = new_flags
        glyph.endPtsOfContours = new_ends
    return removed


def optimize_font(font: TTFont) -> int:
    """
    Clean up TrueType contours in place.

    Glyphs carrying instructions are left alone because instructions address
    points by index. Variable fonts are skipped for the same reason (gvar
    deltas).

    Returns:
        Total number of points removed
    """
    if "glyf" not in font or "gvar" in font:
        return 0

    glyf = font["glyf"]
    removed = 0
    for glyph_name in glyf.keys():
        glyph = glyf[glyph_name]
        if glyph.numberOfContours <= 0:
            continue
        program = getattr(glyph, "program", None)
        if program is not None and program.getBytecode():
            continue
        removed += remove_duplicate_points(glyph)

    if removed:
        logger.debug(f"Removed {removed} duplicate points")
    return removed
