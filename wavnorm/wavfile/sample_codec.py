"""
Sample codec for linear PCM.

One SampleTier per supported bit depth (8, 16, 24, 32). Depths in between are
rounded up to the next tier, so 12-bit audio is handled as 16-bit, 20-bit as
24-bit, and so on. Every tier decodes raw little-endian bytes into signed
integers and encodes them back after a gain has been applied. Encoding
saturates at the tier's range instead of wrapping around.
"""

from dataclasses import dataclass

import numpy as np

from wavnorm.errors import UnsupportedFormat
from wavnorm.wavfile.chunk_walker import FormatDescriptor


@dataclass(frozen=True)
class SampleTier:
    """Byte layout and value range of one bit-depth tier."""
    bits: int
    width: int
    min_value: int
    max_value: int
    divisor: float
    offset: int = 0

    def sample_count(self, length: int) -> int:
        """Number of whole samples in ``length`` bytes."""
        return length // self.width

    def decode(self, raw) -> np.ndarray:
        """
        Decode raw sample bytes into signed integer values.

        Args:
            raw: Bytes holding whole samples only

        Returns:
            int64 array of raw signed sample values
        """
        if self.bits == 8:
            return np.frombuffer(raw, dtype=np.uint8).astype(np.int64) - self.offset
        if self.bits == 16:
            return np.frombuffer(raw, dtype='<i2').astype(np.int64)
        if self.bits == 24:
            b = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.int64)
            values = b[:, 0] | (b[:, 1] << 8) | (b[:, 2] << 16)
            # sign extend from bit 23
            return np.where(values & 0x800000, values - 0x1000000, values)
        return np.frombuffer(raw, dtype='<i4').astype(np.int64)

    def magnitudes(self, raw) -> np.ndarray:
        """
        Normalized absolute sample values, clipped to 1.0.

        The 32-bit divisor is INT32_MAX, so INT32_MIN would read slightly
        above full scale without the clip.
        """
        values = self.decode(raw)
        return np.minimum(np.abs(values) / self.divisor, 1.0)

    def encode(self, values: np.ndarray, gain: float = 1.0) -> bytes:
        """
        Apply gain to raw sample values and pack them back into bytes.

        Values are rounded half away from zero, then clamped to the tier's
        range.

        Args:
            values: Raw signed sample values (as returned by decode)
            gain: Linear gain factor

        Returns:
            Encoded bytes in the tier's layout
        """
        scaled = np.asarray(values, dtype=np.float64) * gain
        # x - trunc(x) is exact; adding 0.5 first is not (0.49999999999999994 + 0.5 == 1.0)
        whole = np.trunc(scaled)
        rounded = np.where(np.abs(scaled - whole) >= 0.5, whole + np.sign(scaled), whole)
        clamped = np.clip(rounded, self.min_value, self.max_value).astype(np.int64)

        if self.bits == 8:
            return (clamped + self.offset).astype(np.uint8).tobytes()
        if self.bits == 16:
            return clamped.astype('<i2').tobytes()
        if self.bits == 24:
            packed = np.stack([clamped & 0xFF, (clamped >> 8) & 0xFF, (clamped >> 16) & 0xFF], axis=1)
            return packed.astype(np.uint8).tobytes()
        return clamped.astype('<i4').tobytes()


PCM_8 = SampleTier(bits=8, width=1, min_value=-128, max_value=127, divisor=128.0, offset=128)
PCM_16 = SampleTier(bits=16, width=2, min_value=-32768, max_value=32767, divisor=32768.0)
PCM_24 = SampleTier(bits=24, width=3, min_value=-8388608, max_value=8388607, divisor=8388608.0)
PCM_32 = SampleTier(bits=32, width=4, min_value=-2147483648, max_value=2147483647,
                    divisor=2147483647.0)

TIERS = [PCM_8, PCM_16, PCM_24, PCM_32]


def tier_for_bits(bits_per_sample: int) -> SampleTier:
    """
    Pick the codec tier for a bit depth.

    Raises:
        UnsupportedFormat: For 0 or more than 32 bits
    """
    if bits_per_sample > 0:
        for tier in TIERS:
            if bits_per_sample <= tier.bits:
                return tier
    raise UnsupportedFormat(f"Unsupported bit depth: {bits_per_sample}")


def tier_for_format(fmt: FormatDescriptor) -> SampleTier:
    """
    Pick the codec tier for a format descriptor.

    Raises:
        UnsupportedFormat: Non-PCM audio, no channels, or unsupported depth
    """
    if not fmt.is_pcm:
        raise UnsupportedFormat(f"Unsupported audio format {fmt.audio_format} (only PCM supported)")
    if fmt.num_channels == 0:
        raise UnsupportedFormat("Format declares zero channels")
    return tier_for_bits(fmt.bits_per_sample)
