"""
UPD7759 ADPCM Encoder

Converts mono 16-bit PCM audio into the 4-bit ADPCM bitstream played by the
NEC UPD7759 speech synthesis chip, including its repeating frequency marker
framing.
"""

__version__ = "1.0.0"

from .encoder import UPD7759Encoder, create_encoder, create_legacy_encoder, encode, as_sample_buffer
from .predictor import AdaptivePredictor, encode_sample, sample_to_code, clamp_nibble
from .bitstream import FramePacker, pack_stream, expected_stream_length, split_blocks
from .header import FrequencyMarker, frequency_marker_for, SUPPORTED_SAMPLE_RATES
from .audio import PCMAudio, read_pcm, read_wav
from .config import EncoderConfig
from .exceptions import (
    UPD7759Error,
    InvalidInputError,
    InvalidSampleRateError,
    InvalidStreamError,
    SinkWriteError,
    AllocationError
)

__all__ = [
    # Main encoder interface
    'UPD7759Encoder',
    'create_encoder',
    'create_legacy_encoder',
    'encode',
    'as_sample_buffer',

    # Core components
    'AdaptivePredictor',
    'encode_sample',
    'sample_to_code',
    'clamp_nibble',
    'FramePacker',
    'pack_stream',
    'expected_stream_length',
    'split_blocks',
    'FrequencyMarker',
    'frequency_marker_for',
    'SUPPORTED_SAMPLE_RATES',

    # Input and configuration
    'PCMAudio',
    'read_pcm',
    'read_wav',
    'EncoderConfig',

    # Errors
    'UPD7759Error',
    'InvalidInputError',
    'InvalidSampleRateError',
    'InvalidStreamError',
    'SinkWriteError',
    'AllocationError'
]
