"""Shared pytest fixtures."""

import array
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.t2CharStringPen import T2CharStringPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import newTable
from fontTools.ttLib.tables import ttProgram

from fontgen.pipeline.host import DirectoryChoice

# Code point -> glyph name for the generated test font
TEST_CMAP = {
    0x20: "space",
    0x21: "exclam",
    0x30: "zero",
    0x41: "A",
    0x61: "a",
    0x62: "b",
    0x78: "x",
    0x4E00: "uni4E00",
}

# PUSHB[0] 0, POP
TINY_PROGRAM = b"\xb0\x00\x21"


def _program(bytecode: bytes) -> ttProgram.Program:
    program = ttProgram.Program()
    program.fromBytecode(bytecode)
    return program


def _draw_box(pen, x0=50, y0=0, x1=450, y1=700):
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()


def build_font(path: Path, *, hinted: bool = False, cff: bool = False) -> Path:
    """Write a small Latin test font with box glyphs."""
    glyph_order = [".notdef", *TEST_CMAP.values()]
    fb = FontBuilder(1000, isTTF=not cff)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(TEST_CMAP)

    if cff:
        charstrings = {}
        for name in glyph_order:
            pen = T2CharStringPen(500, None)
            if name != "space":
                _draw_box(pen)
            charstrings[name] = pen.getCharString()
        fb.setupCFF(
            psName="FontgenTest-Regular",
            fontInfo={"version": "1.0"},
            charStringsDict=charstrings,
            privateDict={},
        )
    else:
        glyphs = {}
        for name in glyph_order:
            pen = TTGlyphPen(None)
            if name != "space":
                _draw_box(pen)
            glyphs[name] = pen.glyph()
        if hinted:
            glyphs["a"].program = _program(TINY_PROGRAM)
        fb.setupGlyf(glyphs)

    fb.setupHorizontalMetrics({name: (500, 0 if name == "space" else 50) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Fontgen Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    if hinted and not cff:
        fb.font["fpgm"] = fpgm = newTable("fpgm")
        fpgm.program = _program(TINY_PROGRAM)
        fb.font["prep"] = prep = newTable("prep")
        prep.program = _program(TINY_PROGRAM)
        fb.font["cvt "] = cvt = newTable("cvt ")
        cvt.values = array.array("h", [0, 20, 40])

    path.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(path))
    return path


@pytest.fixture
def temp_font_dir(tmp_path):
    """Create a temporary directory for font testing."""
    return tmp_path / "fonts"


@pytest.fixture
def make_font(temp_font_dir):
    """Factory writing a test font into the temporary font directory."""

    def factory(name: str = "Test.ttf", **kwargs) -> Path:
        return build_font(temp_font_dir / name, **kwargs)

    return factory


class RecordingHost:
    """Host double that records every callback."""

    def __init__(self, choice: DirectoryChoice | None = None):
        self.choice = choice or DirectoryChoice(cancelled=True)
        self.prompts: list[Path] = []
        self.stages: list[str] = []
        self.progress: list[tuple[int, int]] = []
        self.outputs: list[Path] = []

    def prompt_directory(self, start: Path) -> DirectoryChoice:
        self.prompts.append(start)
        return self.choice

    def report_stage(self, label: str) -> None:
        self.stages.append(label)

    def report_progress(self, total: int, completed: int) -> None:
        self.progress.append((total, completed))

    def report_output_file(self, path: Path) -> None:
        self.outputs.append(path)


class FakeFont:
    """Stand-in for a parsed font."""

    def __init__(self, data: bytes, font_type: str, subset):
        self.data = data
        self.font_type = font_type
        self.subset = subset
        self.optimized = False


class FakeEngine:
    """Engine double: output bytes are ``<format>:<input bytes>``."""

    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.loaded: list[FakeFont] = []
        self.written: list[tuple[str, bool]] = []
        self.woff2_inits = 0

    def ensure_woff2(self) -> None:
        self.woff2_inits += 1

    def load(self, data, font_type, subset=None):
        font = FakeFont(data, font_type, subset)
        self.loaded.append(font)
        return font

    def optimize(self, font) -> int:
        font.optimized = True
        return 0

    def write(self, font, font_type, *, hinting=True) -> bytes:
        from fontgen.errors import ConversionError

        if font_type == self.fail_on:
            raise ConversionError(f"cannot write {font_type}")
        self.written.append((font_type, hinting))
        return font_type.encode() + b":" + font.data


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def host_with_choice():
    """Factory for a host whose directory prompt returns ``choice``."""
    return RecordingHost


@pytest.fixture
def failing_engine():
    """Factory for an engine that fails when writing ``fail_on``."""
    return lambda fail_on: FakeEngine(fail_on=fail_on)
