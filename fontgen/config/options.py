"""
Job configuration.

Defaults are applied once, when a ``Configuration`` is built. Everything
downstream reads plain attributes.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from fontgen.config.formats import OUTPUT_FORMATS
from fontgen.config.unicode_ranges import SUBSET_CATEGORIES
from fontgen.errors import ConfigurationError

# Host option names that differ from attribute names
OPTION_ALIASES = {
    "customSubset": "custom_subset",
}


def _unique(values: Iterable[str] | None, allowed: tuple[str, ...], kind: str) -> tuple[str, ...]:
    """Deduplicate while keeping first-seen order, rejecting unknown names."""
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    elif not isinstance(values, Iterable):
        raise ConfigurationError(f"Expected a list of {kind} names, got {values!r}")
    result: list[str] = []
    for value in values:
        if value not in allowed:
            raise ConfigurationError(
                f"Unknown {kind} {value!r}, expected one of: {', '.join(allowed)}"
            )
        if value not in result:
            result.append(value)
    return tuple(result)


@dataclass(frozen=True)
class Configuration:
    """Resolved options for a single conversion job."""

    ask: bool = False
    destination: str = ""  # relative to the input's directory; empty = same directory
    backup: bool = True
    formats: tuple[str, ...] = field(default=())
    subsets: tuple[str, ...] = field(default=())
    custom_subset: str = ""  # only read when "custom" is in subsets
    hinting: bool = True

    def __post_init__(self):
        object.__setattr__(
            self, "formats", _unique(self.formats, OUTPUT_FORMATS, "format")
        )
        object.__setattr__(
            self, "subsets", _unique(self.subsets, SUBSET_CATEGORIES, "subset")
        )
        if self.destination is None:
            object.__setattr__(self, "destination", "")
        if self.custom_subset is None:
            object.__setattr__(self, "custom_subset", "")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Configuration":
        """
        Build a configuration from host-provided options.

        Accepts both snake_case attribute names and the host's camelCase
        names. Missing keys take their defaults.

        Raises:
            ConfigurationError: On unknown keys or values
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in mapping.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown option {key!r}")
            kwargs[name] = value
        return cls(**kwargs)
