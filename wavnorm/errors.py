"""
Exceptions raised while reading and rewriting WAV files
"""


class WavError(ValueError):
    """Base class for all WAV parsing and codec errors."""


class FormatError(WavError):
    """Buffer is not a usable RIFF/WAVE container."""


class UnsupportedFormat(WavError):
    """Audio format or bit depth the sample codec cannot handle."""


class TruncatedFile(WavError):
    """A chunk declares more bytes than the buffer holds."""
