"""
fontTools subsetter wrappers.

Used both to restrict a font to a code point subset and to strip hinting
while keeping every glyph.
"""

from collections.abc import Iterable

from fontTools import subset
from fontTools.ttLib import TTFont

from fontgen.utils.logging import logger

# Tables fontTools drops when hinting is disabled, listed for logging
HINTING_TABLES = ["cvt ", "cvar", "fpgm", "prep", "hdmx", "VDMX", "LTSH"]


def subsetter_options(*, hinting: bool = True) -> subset.Options:
    """Subsetter options that keep everything except what was asked to go."""
    options = subset.Options()
    options.layout_features = ["*"]
    options.name_IDs = ["*"]
    options.name_languages = ["*"]
    options.name_legacy = True
    options.glyph_names = True
    options.notdef_glyph = True
    options.notdef_outline = True
    options.passthrough_tables = True
    options.hinting = hinting
    return options


def all_unicodes(font: TTFont) -> set[int]:
    """Every code point mapped by any cmap subtable."""
    if "cmap" not in font:
        return set()
    unicodes: set[int] = set()
    for table in font["cmap"].tables:
        if table.isUnicode():
            unicodes.update(table.cmap)
    return unicodes


def subset_font(font: TTFont, unicodes: Iterable[int]) -> None:
    """
    Restrict a font, in place, to the glyphs reachable from ``unicodes``.

    Code points the font does not map are ignored. Hinting is kept; it is
    decided separately when the font is written.
    """
    unicodes = sorted(unicodes)
    before = len(font.getGlyphOrder())

    subsetter = subset.Subsetter(subsetter_options(hinting=True))
    subsetter.populate(unicodes=unicodes)
    subsetter.subset(font)

    logger.debug(
        f"Subset to {len(unicodes)} code points: "
        f"{before} -> {len(font.getGlyphOrder())} glyphs"
    )


def drop_hints(font: TTFont) -> None:
    """
    Remove hinting from a font in place, keeping every glyph.

    Strips TrueType instructions and hinting tables, and CFF hints.
    """
    present = [tag for tag in HINTING_TABLES if tag in font]

    subsetter = subset.Subsetter(subsetter_options(hinting=False))
    subsetter.populate(glyphs=font.getGlyphOrder(), unicodes=all_unicodes(font))
    subsetter.subset(font)

    if present:
        logger.debug(f"Dropped hinting tables: {', '.join(t.strip() for t in present)}")
