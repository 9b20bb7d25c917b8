"""
Normalization operations for postprocessing
"""

import logging
from pathlib import Path

from wavnorm.errors import FormatError, WavError
from wavnorm.postprocess.gain import validate_gain
from wavnorm.wavfile.chunk_walker import walk_chunks
from wavnorm.wavfile.sample_codec import tier_for_format


def normalize_buffer(buffer: bytearray, gain: float, strict: bool = False) -> bytearray:
    """
    Apply gain to every sample of a WAV buffer in place.

    Only the whole samples inside the data chunk are rewritten. The RIFF
    header, all other chunks and a trailing partial sample stay untouched.

    Args:
        buffer: Complete file contents, modified in place
        gain: Linear gain factor (applied even when 1.0)
        strict: Raise TruncatedFile for chunks running past the buffer end

    Returns:
        The same buffer

    Raises:
        FormatError: Buffer is not a WAV file or has no fmt/data pair
        UnsupportedFormat: Non-PCM audio or unsupported bit depth
        ValueError: Gain is not a positive finite number
    """
    validate_gain(gain)

    layout = walk_chunks(buffer, strict=strict)
    if not layout.has_audio:
        raise FormatError("No fmt/data chunk pair found")

    tier = tier_for_format(layout.format)
    count = tier.sample_count(layout.data.length)
    start = layout.data.offset
    stop = start + count * tier.width

    values = tier.decode(bytes(buffer[start:stop]))
    buffer[start:stop] = tier.encode(values, gain)

    logging.debug(f"Re-encoded {count} samples ({tier.bits}-bit) with gain {gain:.6f}")
    return buffer


def normalize_wav(input_path, output_path, gain: float, strict: bool = False) -> bool:
    """
    Write a gain-adjusted copy of a WAV file.

    Args:
        input_path: Source WAV file
        output_path: Destination path (overwritten if it exists)
        gain: Linear gain factor
        strict: Treat truncated chunks as errors

    Returns:
        True if the output was written, False otherwise. A failed write may
        leave a partial or missing output file.
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    try:
        buffer = bytearray(input_path.read_bytes())
        normalize_buffer(buffer, gain, strict=strict)
        output_path.write_bytes(buffer)
    except (WavError, OSError, ValueError) as e:
        logging.error(f"Failed to normalize {input_path.name} -> {output_path.name}: {e}")
        return False

    logging.debug(f"Saved: {output_path}")
    return True
