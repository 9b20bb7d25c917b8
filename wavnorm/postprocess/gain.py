"""
Gain factor helpers
Computes the linear gain that lifts a file to the loudest peak
"""

import math
import logging


def compute_gain(global_peak: float, own_peak: float) -> float:
    """
    Linear gain that brings a file's peak up to the global peak.

    Args:
        global_peak: Peak amplitude of the loudest file (0.0-1.0)
        own_peak: Peak amplitude of the file to scale (0.0-1.0)

    Returns:
        Gain factor (global_peak / own_peak)

    Raises:
        ValueError: If own_peak is not positive
    """
    if own_peak <= 0.0:
        raise ValueError(f"Cannot compute gain for peak {own_peak}")

    gain = global_peak / own_peak
    logging.debug(f"Gain: {global_peak:.6f} / {own_peak:.6f} = {gain:.6f}x")
    return gain


def gain_to_db(gain: float) -> float:
    """
    Convert a linear gain to decibels.

    Formula: dB = 20 * log10(linear)
    """
    if gain <= 0.0:
        return float('-inf')
    return 20.0 * math.log10(gain)


def validate_gain(gain: float) -> None:
    """Raise ValueError unless gain is a positive finite number."""
    if not math.isfinite(gain) or gain <= 0.0:
        raise ValueError(f"Gain must be a positive finite number, got {gain}")
