"""
Peak amplitude analysis
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from wavnorm.errors import FormatError, TruncatedFile, UnsupportedFormat
from wavnorm.wavfile.chunk_walker import DataRange, FormatDescriptor, walk_chunks
from wavnorm.wavfile.sample_codec import tier_for_format

STATUS_OK = 'ok'
STATUS_SILENT = 'silent'
STATUS_NO_AUDIO = 'no_audio'
STATUS_UNSUPPORTED = 'unsupported'
STATUS_MALFORMED = 'malformed'
STATUS_UNREADABLE = 'unreadable'


@dataclass(frozen=True)
class AnalysisResult:
    """Peak amplitude of one file and how it was obtained."""
    path: Path
    amplitude: float
    status: str

    @property
    def usable(self) -> bool:
        """True if the file can be a loudness reference or gain target."""
        return self.status == STATUS_OK


def peak_amplitude(buffer, fmt: FormatDescriptor, data: DataRange) -> float:
    """
    Maximum normalized sample magnitude in a data range.

    Args:
        buffer: Complete file contents
        fmt: Format descriptor of the file
        data: Byte range of the sample data

    Returns:
        Peak magnitude in [0, 1]; 0.0 when the range holds no whole sample

    Raises:
        UnsupportedFormat: Non-PCM audio or unsupported bit depth
    """
    tier = tier_for_format(fmt)
    count = tier.sample_count(data.length)
    if count == 0:
        return 0.0

    raw = memoryview(buffer)[data.offset:data.offset + count * tier.width]
    return float(tier.magnitudes(raw).max())


def analyze_buffer(buffer, strict: bool = False) -> float:
    """
    Peak amplitude of a complete WAV buffer.

    Returns 0.0 if no 'fmt '/'data' pair was found.
    """
    layout = walk_chunks(buffer, strict=strict)
    if not layout.has_audio:
        return 0.0
    return peak_amplitude(buffer, layout.format, layout.data)


def analyze_file(path, strict: bool = False) -> AnalysisResult:
    """
    Read a WAV file and measure its peak amplitude.

    Errors never propagate: they are logged and reported through the
    result status with amplitude 0.

    Args:
        path: WAV file path
        strict: Treat truncated chunks as malformed

    Returns:
        AnalysisResult for the file
    """
    path = Path(path)

    try:
        buffer = path.read_bytes()
    except OSError as e:
        logging.error(f"Failed to read {path}: {e}")
        return AnalysisResult(path, 0.0, STATUS_UNREADABLE)

    try:
        layout = walk_chunks(buffer, strict=strict)
        if not layout.has_audio:
            logging.warning(f"No fmt/data chunk pair in {path.name}, skipping")
            return AnalysisResult(path, 0.0, STATUS_NO_AUDIO)
        amplitude = peak_amplitude(buffer, layout.format, layout.data)
    except UnsupportedFormat as e:
        logging.warning(f"{path.name}: {e}")
        return AnalysisResult(path, 0.0, STATUS_UNSUPPORTED)
    except (FormatError, TruncatedFile) as e:
        logging.warning(f"{path.name}: not a usable WAV file ({e})")
        return AnalysisResult(path, 0.0, STATUS_MALFORMED)

    if amplitude == 0.0:
        logging.info(f"{path.name} is silent")
        return AnalysisResult(path, 0.0, STATUS_SILENT)

    logging.debug(f"{path.name}: peak {amplitude:.6f}")
    return AnalysisResult(path, amplitude, STATUS_OK)
