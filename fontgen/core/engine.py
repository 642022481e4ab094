"""
Font engine backed by fontTools.

Parses any supported input into a TTFont and serializes it to each output
format. Engine failures surface as ``ConversionError`` with the fontTools
exception chained.
"""

import threading
from collections.abc import Iterable
from io import BytesIO

from fontTools.ttLib import TTFont

from fontgen.config.formats import TRUETYPE_ONLY_FORMATS, WEB_FLAVORS
from fontgen.core.eot import decode_eot, encode_eot
from fontgen.core.outlines import cff_to_glyf, optimize_font
from fontgen.core.subsetter import drop_hints, subset_font
from fontgen.core.svg_font import read_svg_font, write_svg_font
from fontgen.errors import ConversionError, FontGenError, UnsupportedFontError
from fontgen.utils.logging import logger

_woff2_lock = threading.Lock()
_woff2_ready = False


def ensure_woff2() -> None:
    """
    Make sure the WOFF2 (Brotli) codec is available.

    Runs the check once per process; later and concurrent calls are no-ops.

    Raises:
        UnsupportedFontError: If no Brotli module is installed
    """
    global _woff2_ready
    if _woff2_ready:
        return

    with _woff2_lock:
        if _woff2_ready:
            return
        from fontTools.ttLib import woff2

        if not woff2.haveBrotli:
            raise UnsupportedFontError("WOFF2 support requires the 'brotli' package")
        _woff2_ready = True
        logger.debug("WOFF2 codec initialized")


def save_font(font: TTFont, flavor: str | None = None) -> bytes:
    """Compile a font to bytes with the given flavor, restoring the old one."""
    previous = font.flavor
    font.flavor = flavor
    try:
        buffer = BytesIO()
        font.save(buffer)
        return buffer.getvalue()
    finally:
        font.flavor = previous


def clone_font(font: TTFont) -> TTFont:
    """Independent copy of a font, going through its compiled sfnt."""
    return TTFont(BytesIO(save_font(font)))


class FontEngine:
    """Parse, optimize, and serialize fonts."""

    def ensure_woff2(self) -> None:
        ensure_woff2()

    def load(
        self,
        data: bytes,
        font_type: str,
        subset: Iterable[int] | None = None,
    ) -> TTFont:
        """
        Parse raw font bytes.

        Args:
            data: File contents
            font_type: Input type tag (ttf, otf, woff, woff2, eot, svg)
            subset: Code points to keep, or None to keep every glyph

        Returns:
            Parsed font

        Raises:
            ConversionError: If the data cannot be parsed as ``font_type``
        """
        try:
            if font_type == "svg":
                font = read_svg_font(data)
            else:
                if font_type == "eot":
                    data = decode_eot(data)
                elif font_type == "woff2":
                    ensure_woff2()
                font = TTFont(BytesIO(data))
                # Force table decompilation so bad input fails here
                font.getGlyphOrder()
                if "cmap" in font:
                    font.getBestCmap()

            if subset is not None:
                subset_font(font, subset)
        except FontGenError:
            raise
        except Exception as e:
            raise ConversionError(f"Failed to parse {font_type} font: {e}") from e

        return font

    def optimize(self, font: TTFont) -> int:
        """Clean up outlines in place. Returns the number of points removed."""
        try:
            return optimize_font(font)
        except Exception as e:
            raise ConversionError(f"Failed to optimize font: {e}") from e

    def write(self, font: TTFont, font_type: str, *, hinting: bool = True) -> bytes:
        """
        Serialize a font to an output format.

        The font itself is never modified, so one model can be written to
        several formats in turn.

        Args:
            font: Parsed font
            font_type: Output type tag (ttf, woff, woff2, eot, svg)
            hinting: Keep hinting instructions and tables

        Returns:
            Encoded file contents

        Raises:
            ConversionError: If serialization fails
        """
        if font_type == "woff2":
            ensure_woff2()

        try:
            work = clone_font(font)
            if not hinting:
                drop_hints(work)
            if font_type in TRUETYPE_ONLY_FORMATS:
                cff_to_glyf(work)

            if font_type in WEB_FLAVORS:
                return save_font(work, WEB_FLAVORS[font_type])
            if font_type == "ttf":
                return save_font(work)
            if font_type == "eot":
                font_data = save_font(work)
                return encode_eot(font_data, TTFont(BytesIO(font_data)))
            if font_type == "svg":
                return write_svg_font(work)
        except FontGenError:
            raise
        except Exception as e:
            raise ConversionError(f"Failed to write {font_type} font: {e}") from e

        raise ConversionError(f"Unknown output format {font_type!r}")
