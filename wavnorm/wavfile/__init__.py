"""
WAV container and sample codec

- chunk_walker: RIFF/WAVE chunk traversal
- sample_codec: per-bit-depth decode/encode with saturation
"""

from wavnorm.wavfile.chunk_walker import (
    FormatDescriptor, DataRange, ChunkInfo, WavLayout, walk_chunks
)
from wavnorm.wavfile.sample_codec import (
    SampleTier, PCM_8, PCM_16, PCM_24, PCM_32, tier_for_bits, tier_for_format
)

__all__ = [
    'FormatDescriptor',
    'DataRange',
    'ChunkInfo',
    'WavLayout',
    'walk_chunks',
    'SampleTier',
    'PCM_8',
    'PCM_16',
    'PCM_24',
    'PCM_32',
    'tier_for_bits',
    'tier_for_format',
]
