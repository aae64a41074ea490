import io
import logging
from typing import Any, BinaryIO, Dict, Sequence, Union

import numpy as np

from .bitstream import DEFAULT_BLOCK_SIZE, FramePacker
from .exceptions import AllocationError, InvalidInputError
from .header import frequency_marker_for
from .predictor import AdaptivePredictor

_LOGGER = logging.getLogger(__name__)

PCM_MIN = -2**15
PCM_MAX = 2**15 - 1

SampleBuffer = Union[Sequence[int], np.ndarray]


def as_sample_buffer(samples: SampleBuffer) -> np.ndarray:
    """
    Convert input samples into a single owned int16 buffer

    Args:
        samples: Sequence or 1-D array of signed 16-bit PCM values

    Returns:
        buffer: 1-D numpy int16 array

    Raises:
        InvalidInputError: If the data is not 1-D integer PCM within 16-bit range
        AllocationError: If the buffer cannot be allocated
    """
    try:
        data = np.asarray(samples)
        if data.size == 0:
            return np.zeros(0, dtype=np.int16)

        if data.ndim != 1:
            raise InvalidInputError(
                f"Expected a 1-D mono sample sequence, got shape {data.shape}. "
                "Only single channel audio is supported."
            )
        if not np.issubdtype(data.dtype, np.integer):
            raise InvalidInputError(f"Audio data must be 16-bit PCM, got dtype {data.dtype}")

        if data.dtype != np.int16:
            if data.min() < PCM_MIN or data.max() > PCM_MAX:
                raise InvalidInputError(
                    f"Sample values outside 16-bit range [{PCM_MIN}, {PCM_MAX}]"
                )
        return np.array(data, dtype=np.int16, copy=True)
    except MemoryError as e:
        raise AllocationError(f"Could not allocate sample buffer: {e}") from e


class UPD7759Encoder:
    """
    UPD7759 ADPCM Encoder

    One encode session per call: the predictor starts from state 0 and the
    packer starts a fresh stream with a leading frequency marker. Encoding
    is a single deterministic pass over the samples in order.

    Pipeline:
    1. Predictive state encoding: each sample becomes a 4-bit nibble,
       threading the adaptation state from sample to sample
    2. Framing: nibbles are packed two per byte, first nibble high, with the
       frequency marker at the start and after every block_size packed bytes
    """

    def __init__(self, sample_rate: int,
                 block_size: int = DEFAULT_BLOCK_SIZE,
                 block_unit: str = 'bytes') -> None:
        """
        Initialize encoder

        Args:
            sample_rate: 5000, 6000 or 8000 Hz
            block_size: Packed bytes (or samples) between repeated markers
            block_unit: 'bytes' (default) or 'samples' (legacy framing)

        Raises:
            InvalidSampleRateError: If the rate has no frequency marker
        """
        self.sample_rate = sample_rate
        self.marker = frequency_marker_for(sample_rate)
        self.block_size = block_size
        self.block_unit = block_unit

        # Validate framing parameters up front
        FramePacker(self.marker, io.BytesIO(), block_size=block_size, block_unit=block_unit)

    def encode_to(self, samples: SampleBuffer, sink: BinaryIO) -> Dict[str, Any]:
        """
        Encode samples and write the framed stream to a sink

        Args:
            samples: Signed 16-bit PCM samples in stream order
            sink: Binary writer receiving the stream

        Returns:
            Dictionary containing:
                - num_samples: Number of input samples
                - sample_rate: Sample rate in Hz
                - frequency_marker: Marker byte value
                - packed_bytes: Bytes holding nibble data
                - marker_bytes: Marker bytes written (initial + repeats)
                - output_bytes: Total bytes written
                - compression_ratio: Input PCM size / output size
                - bits_per_sample: Output bits per input sample
                - final_state: Adaptation state after the last sample
        """
        buffer = as_sample_buffer(samples)

        packer = FramePacker(self.marker, sink,
                             block_size=self.block_size, block_unit=self.block_unit)
        predictor = AdaptivePredictor()

        packer.write_samples(buffer.tolist(), predictor)

        num_samples = int(buffer.size)
        stats = {
            'num_samples': num_samples,
            'sample_rate': self.sample_rate,
            'frequency_marker': int(self.marker),
            'packed_bytes': packer.packed_bytes,
            'marker_bytes': packer.markers_written,
            'output_bytes': packer.bytes_written,
            'compression_ratio': (num_samples * 2) / packer.bytes_written,
            'bits_per_sample': (packer.bytes_written * 8) / num_samples if num_samples else 0.0,
            'final_state': predictor.state,
        }
        _LOGGER.info("Encoded %d samples at %d Hz into %d bytes (%d markers)",
                     num_samples, self.sample_rate, stats['output_bytes'], stats['marker_bytes'])
        return stats

    def encode(self, samples: SampleBuffer) -> bytes:
        """Encode samples and return the complete framed stream"""
        sink = io.BytesIO()
        self.encode_to(samples, sink)
        return sink.getvalue()


def create_encoder(sample_rate: int, **kwargs: Any) -> UPD7759Encoder:
    """
    Create an encoder using the standard marker framing

    Args:
        sample_rate: 5000, 6000 or 8000 Hz
        **kwargs: Additional encoder parameters

    Returns:
        Configured encoder
    """
    return UPD7759Encoder(sample_rate=sample_rate, **kwargs)


def create_legacy_encoder(sample_rate: int, **kwargs: Any) -> UPD7759Encoder:
    """
    Create an encoder that repeats the marker every 256 input samples

    This is the legacy stream layout produced by older encoders.
    """
    return UPD7759Encoder(sample_rate=sample_rate, block_unit='samples', **kwargs)


def encode(samples: SampleBuffer, sample_rate: int) -> bytes:
    """Encode PCM samples into a UPD7759 stream in one call"""
    return create_encoder(sample_rate).encode(samples)
