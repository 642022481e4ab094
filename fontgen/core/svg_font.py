"""
SVG 1.1 font documents.

Writes a ``<font>`` element from any TTFont glyph set and reads one back into
a TrueType font built with FontBuilder.
"""

from io import BytesIO

from fontTools.fontBuilder import FontBuilder
from fontTools.misc import etree
from fontTools.misc.xmlWriter import XMLWriter
from fontTools.pens.cu2quPen import Cu2QuPen
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.svgLib.path import parse_path
from fontTools.ttLib import TTFont

from fontgen.errors import UnsupportedFontError
from fontgen.utils.logging import logger

SVG_NS = "http://www.w3.org/2000/svg"
SVG_DOCTYPE = (
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">'
)

DEFAULT_UNITS_PER_EM = 1000
# Maximum error, in font units, when approximating cubic curves
CU2QU_MAX_ERR = 1.0

PANOSE_FIELDS = (
    "bFamilyType",
    "bSerifStyle",
    "bWeight",
    "bProportion",
    "bContrast",
    "bStrokeVariation",
    "bArmStyle",
    "bLetterForm",
    "bMidline",
    "bXHeight",
)


def _is_xml_char(code_point: int) -> bool:
    """Whether a code point survives as an XML 1.0 attribute value."""
    # Control characters are either illegal or normalized to spaces on read
    if code_point < 0x20 or 0xD800 <= code_point <= 0xDFFF:
        return False
    return code_point not in (0xFFFE, 0xFFFF)


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _glyph_path(glyph_set, glyph_name: str) -> str:
    pen = SVGPathPen(glyph_set, ntos=_fmt)
    glyph_set[glyph_name].draw(pen)
    return pen.getCommands()


def _font_face_attributes(font: TTFont) -> dict[str, str]:
    head = font["head"]
    hhea = font["hhea"]
    attributes = {
        "font-family": font["name"].getDebugName(1) or "",
        "units-per-em": _fmt(head.unitsPerEm),
        "ascent": _fmt(hhea.ascent),
        "descent": _fmt(hhea.descent),
        "bbox": " ".join(_fmt(v) for v in (head.xMin, head.yMin, head.xMax, head.yMax)),
    }

    if "OS/2" in font:
        os2 = font["OS/2"]
        attributes["font-weight"] = _fmt(os2.usWeightClass)
        attributes["font-stretch"] = "normal"
        attributes["panose-1"] = " ".join(
            str(getattr(os2.panose, field)) for field in PANOSE_FIELDS
        )
        if getattr(os2, "sxHeight", 0):
            attributes["x-height"] = _fmt(os2.sxHeight)
        if getattr(os2, "sCapHeight", 0):
            attributes["cap-height"] = _fmt(os2.sCapHeight)

    if "post" in font:
        post = font["post"]
        attributes["underline-thickness"] = _fmt(post.underlineThickness)
        attributes["underline-position"] = _fmt(post.underlinePosition)
        if post.italicAngle:
            attributes["slope"] = _fmt(post.italicAngle)

    return attributes


def _glyph_attributes(glyph_set, hmtx, glyph_name: str) -> list[tuple[str, str]]:
    return [
        ("horiz-adv-x", _fmt(hmtx[glyph_name][0])),
        ("d", _glyph_path(glyph_set, glyph_name)),
    ]


def write_svg_font(font: TTFont) -> bytes:
    """
    Serialize a font as an SVG 1.1 font document.

    Each cmap entry becomes one ``<glyph>``; glyphs without a code point are
    written by name only, ``.notdef`` becomes ``<missing-glyph>``.
    """
    glyph_set = font.getGlyphSet()
    glyph_order = font.getGlyphOrder()
    hmtx = font["hmtx"]
    cmap = (font.getBestCmap() if "cmap" in font else None) or {}
    font_name = font["name"].getDebugName(6) or font["name"].getDebugName(1) or "font"
    default_advance = hmtx[glyph_order[0]][0] if glyph_order else 0

    buffer = BytesIO()
    writer = XMLWriter(buffer, indentwhite="  ")
    # XMLWriter escapes everything written through its public methods
    writer._writeraw(SVG_DOCTYPE)
    writer.newline()
    writer.begintag("svg", xmlns=SVG_NS)
    writer.newline()
    writer.simpletag("metadata")
    writer.newline()
    writer.begintag("defs")
    writer.newline()
    writer.begintag("font", [("id", font_name), ("horiz-adv-x", _fmt(default_advance))])
    writer.newline()
    writer.simpletag("font-face", list(_font_face_attributes(font).items()))
    writer.newline()

    if ".notdef" in glyph_set:
        writer.simpletag("missing-glyph", _glyph_attributes(glyph_set, hmtx, ".notdef"))
        writer.newline()

    mapped = set()
    for code_point, glyph_name in sorted(cmap.items()):
        if not _is_xml_char(code_point):
            continue
        mapped.add(glyph_name)
        attributes = [("glyph-name", glyph_name), ("unicode", chr(code_point))]
        writer.simpletag(
            "glyph", attributes + _glyph_attributes(glyph_set, hmtx, glyph_name)
        )
        writer.newline()

    for glyph_name in glyph_order:
        if glyph_name == ".notdef" or glyph_name in mapped:
            continue
        attributes = [("glyph-name", glyph_name)]
        writer.simpletag(
            "glyph", attributes + _glyph_attributes(glyph_set, hmtx, glyph_name)
        )
        writer.newline()

    writer.endtag("font")
    writer.newline()
    writer.endtag("defs")
    writer.newline()
    writer.endtag("svg")
    writer.newline()
    return buffer.getvalue()


def _local(tag) -> str:
    """Element tag without its namespace."""
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _number(value: str | None, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _unused_name(name: str, taken) -> str:
    candidate = name
    suffix = 1
    while candidate in taken:
        candidate = f"{name}.{suffix}"
        suffix += 1
    return candidate


def _draw_glyph(d: str | None):
    pen = TTGlyphPen(None)
    if d:
        parse_path(d, Cu2QuPen(pen, CU2QU_MAX_ERR))
    return pen.glyph()


def read_svg_font(data: bytes) -> TTFont:
    """
    Build a TrueType font from the first ``<font>`` in an SVG document.

    Raises:
        UnsupportedFontError: If the document has no font or cannot be parsed
    """
    try:
        root = etree.fromstring(data)
    except etree.ParseError as e:
        raise UnsupportedFontError(f"Invalid SVG document: {e}") from e

    font_el = next((el for el in root.iter() if _local(el.tag) == "font"), None)
    if font_el is None:
        raise UnsupportedFontError("SVG document contains no <font> element")

    face = next((el for el in font_el if _local(el.tag) == "font-face"), None)
    face_attrs = dict(face.attrib) if face is not None else {}
    units_per_em = int(_number(face_attrs.get("units-per-em"), DEFAULT_UNITS_PER_EM))
    ascent = round(_number(face_attrs.get("ascent"), units_per_em * 0.8))
    descent = round(_number(face_attrs.get("descent"), -(units_per_em * 0.2)))
    if descent > 0:
        descent = -descent
    family = face_attrs.get("font-family") or font_el.get("id") or "SVGFont"
    default_advance = round(_number(font_el.get("horiz-adv-x"), units_per_em / 2))

    glyphs = {}
    advances = {}
    cmap: dict[int, str] = {}
    order = [".notdef"]

    missing = next((el for el in font_el if _local(el.tag) == "missing-glyph"), None)
    glyphs[".notdef"] = _draw_glyph(missing.get("d") if missing is not None else None)
    advances[".notdef"] = round(
        _number(missing.get("horiz-adv-x") if missing is not None else None, default_advance)
    )

    for index, el in enumerate(el for el in font_el if _local(el.tag) == "glyph"):
        unicode = el.get("unicode") or ""
        name = el.get("glyph-name") or ""
        if not name or name in glyphs:
            name = f"uni{ord(unicode):04X}" if len(unicode) == 1 else f"glyph{index}"
        name = _unused_name(name, glyphs)

        glyphs[name] = _draw_glyph(el.get("d"))
        advances[name] = round(_number(el.get("horiz-adv-x"), default_advance))
        order.append(name)
        # Ligature sequences have no cmap entry
        if len(unicode) == 1 and ord(unicode) not in cmap:
            cmap[ord(unicode)] = name

    logger.debug(f"Read SVG font {family!r}: {len(order)} glyphs, {len(cmap)} mapped")

    fb = FontBuilder(units_per_em, isTTF=True)
    fb.setupGlyphOrder(order)
    fb.setupCharacterMap(cmap)
    fb.setupGlyf(glyphs)
    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics(
        {name: (advances[name], getattr(glyf[name], "xMin", 0)) for name in order}
    )
    fb.setupHorizontalHeader(ascent=ascent, descent=descent)
    fb.setupNameTable(
        {
            "familyName": family,
            "styleName": "Regular",
            "psName": family.replace(" ", "") + "-Regular",
        }
    )
    fb.setupOS2(
        sTypoAscender=ascent,
        sTypoDescender=descent,
        usWinAscent=ascent,
        usWinDescent=-descent,
        usWeightClass=int(_number(face_attrs.get("font-weight"), 400)),
    )
    fb.setupPost()

    # Round-trip so the model matches what a parsed binary font looks like
    buffer = BytesIO()
    fb.font.save(buffer)
    buffer.seek(0)
    return TTFont(buffer)
