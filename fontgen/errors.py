"""
Exception hierarchy for font generation jobs.

A cancelled destination prompt is not an error and never raises; see
``fontgen.pipeline.host.JobStatus.ABORTED``.
"""


class FontGenError(Exception):
    """Base class for all fontgen failures."""


class ConfigurationError(FontGenError):
    """Invalid input type, option value, or destination prompt result."""


class ConversionError(FontGenError):
    """The font engine failed to parse or serialize a font."""


class UnsupportedFontError(ConversionError):
    """The font uses a feature this engine cannot handle."""


class FontIOError(FontGenError):
    """Reading, renaming, or writing a file failed."""
