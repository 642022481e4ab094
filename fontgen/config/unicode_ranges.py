"""
Code point ranges for the named subset categories.

All ranges are inclusive on both ends.
Reference: https://www.unicode.org/charts/PDF/U0000.pdf, U0080.pdf
"""

SPACE = 0x20

CUSTOM_SUBSET = "custom"

SUBSET_RANGES: dict[str, list[tuple[int, int]]] = {
    "a-z": [(0x61, 0x7A)],
    "A-Z": [(0x41, 0x5A)],
    "0-9": [(0x30, 0x39)],
    "punctuation": [
        (0x21, 0x2F),  # ! through /
        (0x3A, 0x40),  # : through @
        (0x5B, 0x60),  # [ through `
        (0x7B, 0x7E),  # { through ~
        (0xA1, 0xBF),  # Latin-1 punctuation and symbols
    ],
}

SUBSET_CATEGORIES: tuple[str, ...] = (*SUBSET_RANGES, CUSTOM_SUBSET)
