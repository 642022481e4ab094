"""
Embedded OpenType (EOT) container.

Wraps and unwraps TrueType sfnt data. Only uncompressed payloads are
supported; MicroType Express compression raises ``UnsupportedFontError``.

Reference: https://www.w3.org/submissions/EOT/
"""

from fontTools.misc import sstruct
from fontTools.ttLib import TTFont

from fontgen.errors import UnsupportedFontError

EOT_MAGIC = 0x504C

VERSION_1 = 0x00010000
VERSION_2_1 = 0x00020001
VERSION_2_2 = 0x00020002
SUPPORTED_VERSIONS = (VERSION_1, VERSION_2_1, VERSION_2_2)

# Flags
TTEMBED_TTCOMPRESSED = 0x00000004
TTEMBED_XORENCRYPTDATA = 0x10000000
XOR_KEY = 0x50

DEFAULT_CHARSET = 1

# Name table IDs copied into the header, in header order
NAME_ID_FAMILY = 1
NAME_ID_STYLE = 2
NAME_ID_VERSION = 5
NAME_ID_FULL = 4

EOT_HEADER_FORMAT = """
    <  # little endian
    eotSize:            L
    fontDataSize:       L
    version:            L
    flags:              L
    panose:             10s
    charset:            B
    italic:             B
    weight:             L
    fsType:             H
    magicNumber:        H
    unicodeRange1:      L
    unicodeRange2:      L
    unicodeRange3:      L
    unicodeRange4:      L
    codePageRange1:     L
    codePageRange2:     L
    checkSumAdjustment: L
    reserved1:          L
    reserved2:          L
    reserved3:          L
    reserved4:          L
"""

EOT_HEADER_SIZE = sstruct.calcsize(EOT_HEADER_FORMAT)

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


def read_eot_header(data: bytes) -> dict:
    """
    Parse the fixed EOT header.

    Raises:
        UnsupportedFontError: If the data is not an EOT file
    """
    if len(data) < EOT_HEADER_SIZE:
        raise UnsupportedFontError("EOT data is shorter than its header")

    header = sstruct.unpack(EOT_HEADER_FORMAT, data[:EOT_HEADER_SIZE])
    if header["magicNumber"] != EOT_MAGIC:
        raise UnsupportedFontError(
            f"Bad EOT magic number 0x{header['magicNumber']:04X}"
        )
    if header["version"] not in SUPPORTED_VERSIONS:
        raise UnsupportedFontError(f"Unknown EOT version 0x{header['version']:08X}")
    return header


def decode_eot(data: bytes) -> bytes:
    """
    Extract the sfnt font data from an EOT file.

    Font data always sits at the end of the file, after the variable-length
    name strings and (in version 2.2) the signature and EUDC blocks.

    Raises:
        UnsupportedFontError: On malformed, truncated, or compressed files
    """
    header = read_eot_header(data)
    eot_size = header["eotSize"]
    font_size = header["fontDataSize"]

    if eot_size > len(data) or font_size > eot_size - EOT_HEADER_SIZE:
        raise UnsupportedFontError(
            f"Truncated EOT data ({len(data)} bytes, header claims {eot_size})"
        )
    if header["flags"] & TTEMBED_TTCOMPRESSED:
        raise UnsupportedFontError("MicroType Express compressed EOT is not supported")

    font_data = data[eot_size - font_size : eot_size]
    if header["flags"] & TTEMBED_XORENCRYPTDATA:
        font_data = bytes(byte ^ XOR_KEY for byte in font_data)
    return font_data


def _name_string(font: TTFont, name_id: int) -> bytes:
    """UTF-16LE encoded name record, empty when missing."""
    text = font["name"].getDebugName(name_id) if "name" in font else None
    return (text or "").encode("utf-16-le")


def _sized(value: bytes) -> bytes:
    return len(value).to_bytes(2, "little") + value


def encode_eot(font_data: bytes, font: TTFont) -> bytes:
    """
    Wrap TrueType sfnt bytes in an EOT version 2.1 container.

    Args:
        font_data: Compiled TrueType font
        font: The same font, parsed, for header metadata

    Returns:
        EOT file contents
    """
    os2 = font["OS/2"] if "OS/2" in font else None
    padding = b"\x00\x00"

    names = b"".join(
        [
            padding,  # Padding1
            _sized(_name_string(font, NAME_ID_FAMILY)),
            padding,
            _sized(_name_string(font, NAME_ID_STYLE)),
            padding,
            _sized(_name_string(font, NAME_ID_VERSION)),
            padding,
            _sized(_name_string(font, NAME_ID_FULL)),
            padding,
            _sized(b""),  # RootString
        ]
    )

    header = {
        "eotSize": EOT_HEADER_SIZE + len(names) + len(font_data),
        "fontDataSize": len(font_data),
        "version": VERSION_2_1,
        "flags": 0,
        "panose": bytes(10),
        "charset": DEFAULT_CHARSET,
        "italic": 0,
        "weight": 400,
        "fsType": 0,
        "magicNumber": EOT_MAGIC,
        "unicodeRange1": 0,
        "unicodeRange2": 0,
        "unicodeRange3": 0,
        "unicodeRange4": 0,
        "codePageRange1": 0,
        "codePageRange2": 0,
        "checkSumAdjustment": font["head"].checkSumAdjustment,
        "reserved1": 0,
        "reserved2": 0,
        "reserved3": 0,
        "reserved4": 0,
    }

    if os2 is not None:
        header["panose"] = bytes(getattr(os2.panose, name) for name in PANOSE_FIELDS)
        header["italic"] = os2.fsSelection & 0x01
        header["weight"] = os2.usWeightClass
        header["fsType"] = os2.fsType
        header["unicodeRange1"] = os2.ulUnicodeRange1
        header["unicodeRange2"] = os2.ulUnicodeRange2
        header["unicodeRange3"] = os2.ulUnicodeRange3
        header["unicodeRange4"] = os2.ulUnicodeRange4
        header["codePageRange1"] = getattr(os2, "ulCodePageRange1", 0)
        header["codePageRange2"] = getattr(os2, "ulCodePageRange2", 0)

    return sstruct.pack(EOT_HEADER_FORMAT, header) + names + font_data
