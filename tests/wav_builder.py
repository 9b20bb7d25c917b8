"""
Helpers for building WAV test files byte by byte.
"""

import struct
import wave

import numpy as np


def pack_samples(values, bits):
    """Pack signed integer sample values into little-endian PCM bytes."""
    out = bytearray()
    for v in values:
        if bits == 8:
            out += struct.pack('<B', v + 128)
        elif bits == 16:
            out += struct.pack('<h', v)
        elif bits == 24:
            out += struct.pack('<i', v)[:3]
        elif bits == 32:
            out += struct.pack('<i', v)
        else:
            raise ValueError(f"Unsupported bits: {bits}")
    return bytes(out)


def chunk(chunk_id, payload, declared_size=None):
    """Build one chunk with pad byte for odd sizes."""
    size = len(payload) if declared_size is None else declared_size
    data = chunk_id + struct.pack('<I', size) + payload
    if len(payload) % 2:
        data += b'\x00'
    return data


def fmt_payload(bits=16, channels=1, samplerate=44100, audio_format=1):
    block_align = channels * ((bits + 7) // 8)
    return struct.pack('<HHIIHH', audio_format, channels, samplerate,
                       samplerate * block_align, block_align, bits)


def build_wav(data, bits=16, channels=1, samplerate=44100, audio_format=1,
              before_data=(), after_data=(), data_size=None,
              riff_tag=b'RIFF', wave_tag=b'WAVE'):
    """
    Build a complete WAV buffer.

    Args:
        data: Raw sample bytes for the data chunk
        before_data: Extra (id, payload) chunks placed between fmt and data
        after_data: Extra (id, payload) chunks placed after data
        data_size: Declared data size, defaults to len(data)
    """
    body = wave_tag + chunk(b'fmt ', fmt_payload(bits, channels, samplerate, audio_format))
    for chunk_id, payload in before_data:
        body += chunk(chunk_id, payload)
    if data_size is None:
        body += chunk(b'data', data)
    else:
        # truncated chunks are written without padding
        body += b'data' + struct.pack('<I', data_size) + data
    for chunk_id, payload in after_data:
        body += chunk(chunk_id, payload)
    return riff_tag + struct.pack('<I', len(body)) + body


def write_sine_wav(path, peak, bits=16, channels=2, samplerate=44100,
                   duration=0.05, frequency=440.0):
    """
    Write a sine tone WAV file with the wave module.

    Args:
        peak: Target peak amplitude (0.0-1.0)

    Returns:
        The integer samples written
    """
    frames = int(duration * samplerate)
    t = np.arange(frames) / samplerate
    signal = np.sin(2 * np.pi * frequency * t)
    signal = signal / np.abs(signal).max() * peak

    full_scale = {8: 127, 16: 32767, 24: 8388607, 32: 2147483647}[bits]
    mono = np.round(signal * full_scale).astype(np.int64)
    samples = np.repeat(mono, channels)

    with wave.open(str(path), 'wb') as wav:
        wav.setnchannels(channels)
        wav.setsampwidth(bits // 8)
        wav.setframerate(samplerate)
        wav.writeframes(pack_samples(samples.tolist(), bits))

    return samples
