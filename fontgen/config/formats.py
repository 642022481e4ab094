"""
Font format tags accepted as input and produced as output.
"""

from typing import Literal

FontType = Literal["ttf", "woff", "woff2", "eot", "svg"]
InputFontType = Literal["ttf", "woff", "woff2", "eot", "svg", "otf"]

# Emission order in help output follows this tuple
OUTPUT_FORMATS: tuple[str, ...] = ("ttf", "woff", "woff2", "eot", "svg")
INPUT_FORMATS: tuple[str, ...] = (*OUTPUT_FORMATS, "otf")

# Formats whose container requires TrueType (glyf) outlines
TRUETYPE_ONLY_FORMATS = frozenset({"ttf", "eot"})

# TTFont.flavor values for the web font wrappers
WEB_FLAVORS = {"woff": "woff", "woff2": "woff2"}


def input_type_for(extension: str) -> str:
    """Normalize a file extension (``".TTF"``, ``"woff2"``) to a type tag."""
    return extension.strip().lstrip(".").lower()


def is_input_type(value: str) -> bool:
    """Whether ``value`` is a font type the engine can read."""
    return value in INPUT_FORMATS
