"""
Postprocessing operations for WavNormalizer
Peak analysis runs over the whole folder before any file is rewritten.
"""

from .amplitude import AnalysisResult, peak_amplitude, analyze_buffer, analyze_file
from .gain import compute_gain, gain_to_db
from .normalize import normalize_buffer, normalize_wav
from .processor import BatchNormalizer, BatchResult, NormalizeOutcome

__all__ = [
    'AnalysisResult',
    'peak_amplitude',
    'analyze_buffer',
    'analyze_file',
    'compute_gain',
    'gain_to_db',
    'normalize_buffer',
    'normalize_wav',
    'BatchNormalizer',
    'BatchResult',
    'NormalizeOutcome',
]
