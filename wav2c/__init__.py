"""
WAV to C Array Converter
Converts PCM WAV files to C arrays for embedding in firmware flash
"""

__version__ = '0.3.0'

from .carray import emit
from .config import ArrayFormat, EmitConfig, TypeNames
from .errors import (
    EmptySampleSet,
    InvalidContainer,
    MisalignedSampleData,
    OutputConflict,
    OutputExists,
    SampleLimitExceeded,
    TruncatedFile,
    UnsupportedFormat,
    Wav2CError,
)
from .wavfile import SampleBuffer, WavFormat, parse, read

__all__ = [
    'ArrayFormat',
    'EmitConfig',
    'EmptySampleSet',
    'InvalidContainer',
    'MisalignedSampleData',
    'OutputConflict',
    'OutputExists',
    'SampleBuffer',
    'SampleLimitExceeded',
    'TruncatedFile',
    'TypeNames',
    'UnsupportedFormat',
    'WavFormat',
    'Wav2CError',
    'emit',
    'parse',
    'read',
]
