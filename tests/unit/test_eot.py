"""Tests for the EOT container."""

from io import BytesIO

import pytest
from fontTools.misc import sstruct
from fontTools.ttLib import TTFont

from fontgen.core.eot import (
    EOT_HEADER_FORMAT,
    EOT_HEADER_SIZE,
    EOT_MAGIC,
    TTEMBED_TTCOMPRESSED,
    TTEMBED_XORENCRYPTDATA,
    VERSION_2_1,
    XOR_KEY,
    decode_eot,
    encode_eot,
    read_eot_header,
)
from fontgen.errors import UnsupportedFontError


@pytest.fixture
def font_data(make_font) -> bytes:
    return make_font("Test.ttf").read_bytes()


def _with_flags(eot: bytes, flags: int) -> bytes:
    header = sstruct.unpack(EOT_HEADER_FORMAT, eot[:EOT_HEADER_SIZE])
    header["flags"] = flags
    return sstruct.pack(EOT_HEADER_FORMAT, header) + eot[EOT_HEADER_SIZE:]


def test_encode_header_fields(font_data):
    """Test the written header describes the wrapped font."""
    eot = encode_eot(font_data, TTFont(BytesIO(font_data)))
    header = read_eot_header(eot)

    assert header["eotSize"] == len(eot)
    assert header["fontDataSize"] == len(font_data)
    assert header["version"] == VERSION_2_1
    assert header["magicNumber"] == EOT_MAGIC
    assert header["weight"] == 400
    assert header["flags"] == 0


def test_encode_names(font_data):
    """Test the family name is stored as UTF-16LE after the header."""
    eot = encode_eot(font_data, TTFont(BytesIO(font_data)))
    family = "Fontgen Test".encode("utf-16-le")
    offset = EOT_HEADER_SIZE + 2
    size = int.from_bytes(eot[offset : offset + 2], "little")
    assert eot[offset + 2 : offset + 2 + size] == family


def test_decode_returns_font_data(font_data):
    """Test decoding gives back the embedded sfnt."""
    eot = encode_eot(font_data, TTFont(BytesIO(font_data)))
    assert decode_eot(eot) == font_data


def test_decode_xor_obfuscated(font_data):
    """Test XOR-obfuscated payloads are restored."""
    eot = encode_eot(font_data, TTFont(BytesIO(font_data)))
    prefix = eot[: len(eot) - len(font_data)]
    obfuscated = prefix + bytes(b ^ XOR_KEY for b in font_data)
    assert decode_eot(_with_flags(obfuscated, TTEMBED_XORENCRYPTDATA)) == font_data


def test_compressed_rejected(font_data):
    """Test MicroType Express payloads are refused."""
    eot = encode_eot(font_data, TTFont(BytesIO(font_data)))
    with pytest.raises(UnsupportedFontError, match="MicroType"):
        decode_eot(_with_flags(eot, TTEMBED_TTCOMPRESSED))


def test_bad_magic_rejected():
    """Test non-EOT data is refused."""
    with pytest.raises(UnsupportedFontError, match="magic"):
        decode_eot(bytes(EOT_HEADER_SIZE + 16))


def test_truncated_rejected(font_data):
    """Test truncated files are refused."""
    eot = encode_eot(font_data, TTFont(BytesIO(font_data)))
    with pytest.raises(UnsupportedFontError):
        decode_eot(eot[:-10])
    with pytest.raises(UnsupportedFontError):
        decode_eot(eot[:20])
