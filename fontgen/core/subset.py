"""
Code point subset resolution.

Translates subset category names and free-form text into the set of code
points a generated font keeps.
"""

from collections.abc import Iterable

from fontgen.config.unicode_ranges import CUSTOM_SUBSET, SPACE, SUBSET_RANGES


def code_points(text: str) -> list[int]:
    """Distinct code points of ``text`` in first-seen order."""
    return list(dict.fromkeys(ord(char) for char in text))


def expand_ranges(ranges: Iterable[tuple[int, int]]) -> set[int]:
    """Expand inclusive ``(start, end)`` pairs into a set of code points."""
    result: set[int] = set()
    for start, end in ranges:
        result.update(range(start, end + 1))
    return result


def resolve_subset(
    subsets: Iterable[str],
    custom_subset: str = "",
) -> frozenset[int] | None:
    """
    Resolve subset categories into code points.

    Args:
        subsets: Category names (``a-z``, ``A-Z``, ``0-9``, ``punctuation``, ``custom``)
        custom_subset: Text whose characters are kept when ``custom`` is selected

    Returns:
        None when no category is selected (keep every glyph), otherwise the
        code points to keep. Space is always included.
    """
    subsets = list(subsets)
    if not subsets:
        return None

    result = {SPACE}
    for name in subsets:
        if name == CUSTOM_SUBSET:
            result.update(code_points(custom_subset))
        elif name in SUBSET_RANGES:
            result |= expand_ranges(SUBSET_RANGES[name])

    return frozenset(result)


def format_unicodes(subset: Iterable[int]) -> str:
    """Compact ``U+XXXX-YYYY`` listing for logging."""
    points = sorted(subset)
    if not points:
        return ""

    parts = []
    start = prev = points[0]
    for point in points[1:]:
        if point == prev + 1:
            prev = point
            continue
        parts.append(_format_span(start, prev))
        start = prev = point
    parts.append(_format_span(start, prev))
    return ",".join(parts)


def _format_span(start: int, end: int) -> str:
    if start == end:
        return f"U+{start:04X}"
    return f"U+{start:04X}-{end:04X}"
