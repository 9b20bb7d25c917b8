"""
WavNormalizer

Matches the peak level of every WAV file in a folder to the loudest one.

Subpackages:
- wavfile: RIFF chunk traversal and per-bit-depth sample codec
- postprocess: amplitude analysis, gain re-encoding and batch orchestration
"""

from wavnorm.errors import WavError, FormatError, UnsupportedFormat, TruncatedFile

__version__ = '1.0.0'

__all__ = [
    'WavError',
    'FormatError',
    'UnsupportedFormat',
    'TruncatedFile',
]
