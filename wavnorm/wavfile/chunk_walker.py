"""
RIFF/WAVE chunk traversal.

Walks the chunk list of an in-memory WAV buffer and locates the 'fmt ' and
'data' chunks. Unknown chunks are skipped, odd-sized payloads carry one pad
byte, and a chunk running past the end of the buffer ends the walk.
"""

import logging
import struct
from dataclasses import dataclass, field
from typing import List, Optional

from wavnorm.errors import FormatError, TruncatedFile

RIFF_HEADER = struct.Struct('<4sI4s')
CHUNK_HEADER = struct.Struct('<4sI')
FMT_FIELDS = struct.Struct('<HHIIHH')

WAVE_FORMAT_PCM = 1


@dataclass(frozen=True)
class FormatDescriptor:
    """Fields of the first 16 bytes of a 'fmt ' chunk."""
    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int

    @property
    def is_pcm(self) -> bool:
        return self.audio_format == WAVE_FORMAT_PCM


@dataclass(frozen=True)
class DataRange:
    """Byte range of the sample data inside the file buffer."""
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass(frozen=True)
class ChunkInfo:
    chunk_id: bytes
    size: int
    offset: int

    @property
    def name(self) -> str:
        return self.chunk_id.decode('latin1')


@dataclass
class WavLayout:
    """Result of walking a RIFF/WAVE buffer."""
    riff_size: int
    format: Optional[FormatDescriptor] = None
    data: Optional[DataRange] = None
    chunks: List[ChunkInfo] = field(default_factory=list)
    truncated: bool = False

    @property
    def has_audio(self) -> bool:
        return self.format is not None and self.data is not None


def read_format(buffer, offset: int, size: int) -> FormatDescriptor:
    """
    Parse a FormatDescriptor from a 'fmt ' payload.

    No semantic checks happen here; the codec decides what it can handle.
    """
    if size < FMT_FIELDS.size:
        raise FormatError(f"fmt chunk too short: {size} bytes (need {FMT_FIELDS.size})")
    return FormatDescriptor(*FMT_FIELDS.unpack_from(buffer, offset))


def walk_chunks(buffer, strict: bool = False) -> WavLayout:
    """
    Walk the chunks of a RIFF/WAVE buffer.

    Args:
        buffer: Complete file contents (bytes or bytearray)
        strict: Raise TruncatedFile instead of stopping early when a chunk
            declares more bytes than the buffer holds

    Returns:
        WavLayout with the format descriptor and data range if found.
        ``layout.has_audio`` is False when either is missing.

    Raises:
        FormatError: Missing RIFF/WAVE tags or malformed 'fmt ' chunk
        TruncatedFile: Only in strict mode
    """
    end = len(buffer)
    if end < RIFF_HEADER.size:
        raise FormatError(f"Buffer too short for RIFF header ({end} bytes)")

    riff_id, riff_size, wave_id = RIFF_HEADER.unpack_from(buffer, 0)
    if riff_id != b'RIFF' or wave_id != b'WAVE':
        raise FormatError(f"Missing RIFF/WAVE tags (got {riff_id!r}/{wave_id!r})")

    layout = WavLayout(riff_size=riff_size)
    pos = RIFF_HEADER.size

    while pos + CHUNK_HEADER.size <= end:
        chunk_id, size = CHUNK_HEADER.unpack_from(buffer, pos)
        payload = pos + CHUNK_HEADER.size
        chunk = ChunkInfo(chunk_id, size, payload)
        layout.chunks.append(chunk)
        available = end - payload

        if size > available:
            if strict:
                raise TruncatedFile(
                    f"Chunk '{chunk.name}' declares {size} bytes, only {available} available")
            layout.truncated = True
            if chunk_id == b'data':
                logging.warning(f"Data chunk truncated: declared {size} bytes, "
                                f"using the {available} available")
                layout.data = DataRange(payload, available)
            else:
                logging.warning(f"Chunk '{chunk.name}' runs past end of file, stopping")
            break

        if chunk_id == b'fmt ':
            layout.format = read_format(buffer, payload, size)
            logging.debug(f"fmt: {layout.format}")
        elif chunk_id == b'data':
            layout.data = DataRange(payload, size)
            logging.debug(f"data: {size} bytes at offset {payload}")
            break
        else:
            logging.info(f"Unknown chunk: {chunk.name} ({size} bytes)")

        pos = payload + size
        if size % 2:
            pos += 1

    return layout
