"""
Output path naming and collision detection.
"""

import os
from pathlib import Path

BACKUP_MARKER = ".BACKUP"


def normalize_path(path: str | os.PathLike) -> str:
    """Trim whitespace and trailing separators, then collapse the path."""
    text = os.fspath(path).strip().rstrip("\\/")
    return os.path.normpath(text) if text else os.sep


def is_case_sensitive(path: str | os.PathLike) -> bool:
    """
    Ask the filesystem whether names at ``path`` are case sensitive.

    Looks up the case-swapped variant of an existing path. When the name has
    no cased letters, or the path does not exist, falls back to the
    platform's ``os.path.normcase`` behaviour.
    """
    path = Path(path)
    swapped = path.with_name(path.name.swapcase()) if path.name else path
    if swapped == path or not path.exists():
        return os.path.normcase("A") != os.path.normcase("a")
    try:
        return not (swapped.exists() and os.path.samefile(path, swapped))
    except OSError:
        return True


def is_same_path(
    path_a: str | os.PathLike,
    path_b: str | os.PathLike,
    *,
    case_sensitive: bool = True,
) -> bool:
    """Compare two paths after normalization, optionally ignoring case."""
    a = normalize_path(path_a)
    b = normalize_path(path_b)
    if not case_sensitive:
        a = a.casefold()
        b = b.casefold()
    return a == b


def resolve_destination(input_path: Path, destination: str | os.PathLike) -> Path:
    """
    Resolve the output directory for an input file.

    Empty destination means the input's own directory. Relative destinations
    start at the input's directory; absolute ones are used as given.
    """
    base = input_path.parent
    destination = os.fspath(destination).strip()
    if not destination:
        return base
    return Path(os.path.normpath(base / os.path.expanduser(destination)))


def output_path(directory: Path, stem: str, font_type: str) -> Path:
    """``<directory>/<stem>.<font_type>``"""
    return directory / f"{stem}.{font_type}"


def backup_path(input_path: Path) -> Path:
    """``<stem>.BACKUP<ext>`` next to the input file."""
    return input_path.with_name(f"{input_path.stem}{BACKUP_MARKER}{input_path.suffix}")
