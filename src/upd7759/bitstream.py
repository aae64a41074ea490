"""
UPD7759 Bitstream Framing

Packs the 4-bit codes produced by the predictor two per byte (first nibble in
the high bits) and interleaves frequency marker bytes:

1. One marker byte at the start of the stream
2. A repeat of the same marker after every block of packed bytes
3. A final half-filled byte if the sample count is odd
"""

import logging
from typing import BinaryIO, Iterable, List, Tuple

from .exceptions import InvalidStreamError, SinkWriteError
from .header import FrequencyMarker, frequency_marker_for, marker_from_byte
from .predictor import AdaptivePredictor

_LOGGER = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 256
BLOCK_UNITS = ('bytes', 'samples')


class FramePacker:
    """
    Stateful nibble packer writing a framed UPD7759 stream to a sink

    The marker counter advances per packed byte ('bytes', the default) or
    per input nibble ('samples', the legacy framing where a marker follows
    every 256 samples).
    """

    def __init__(self, marker: FrequencyMarker, sink: BinaryIO,
                 block_size: int = DEFAULT_BLOCK_SIZE,
                 block_unit: str = 'bytes'):
        """
        Initialize frame packer

        Args:
            marker: Frequency marker written at the start and between blocks
            sink: Binary writer receiving the stream
            block_size: Counter value that triggers a repeated marker
            block_unit: 'bytes' or 'samples', what the counter counts
        """
        marker = FrequencyMarker(marker)
        if marker is FrequencyMarker.NONE:
            raise InvalidStreamError("FrequencyMarker.NONE cannot be written to a stream")
        if block_size <= 0:
            raise ValueError(f"Invalid block size: {block_size}. Must be positive.")
        if block_unit not in BLOCK_UNITS:
            raise ValueError(f"Invalid block unit: {block_unit}. Must be 'bytes' or 'samples'.")
        if block_unit == 'samples' and block_size % 2:
            raise ValueError("Sample-counted blocks must hold an even number of samples")

        self.marker = marker
        self.sink = sink
        self.block_size = block_size
        self.block_unit = block_unit

        self._marker_byte = self.marker.to_byte()
        self._pending = 0
        self._odd = False
        self._counter = 0
        self._started = False

        self.bytes_written = 0
        self.packed_bytes = 0
        self.markers_written = 0

    def _write(self, data: bytes) -> None:
        try:
            self.sink.write(data)
        except OSError as e:
            raise SinkWriteError(f"Failed to write output: {e}") from e
        self.bytes_written += len(data)

    def _write_marker(self) -> None:
        self._write(self._marker_byte)
        self.markers_written += 1

    def _advance(self) -> None:
        self._counter += 1
        if self._counter == self.block_size:
            self._counter = 0
            self._write_marker()

    def start(self) -> None:
        """Write the leading marker byte (once)"""
        if not self._started:
            self._started = True
            self._write_marker()

    def push_nibble(self, nibble: int) -> None:
        """
        Add one 4-bit code to the stream

        Args:
            nibble: Encoded value, only the low 4 bits are used
        """
        self.start()
        nibble &= 0x0F

        if self._odd:
            self._write(bytes(((self._pending << 4) | nibble,)))
            self.packed_bytes += 1
            self._odd = False
            if self.block_unit == 'bytes':
                self._advance()
        else:
            self._pending = nibble
            self._odd = True

        if self.block_unit == 'samples':
            self._advance()

    def flush(self) -> None:
        """Write any unpaired nibble in the high half of a final byte"""
        self.start()
        if self._odd:
            self._write(bytes(((self._pending << 4) & 0xF0,)))
            self.packed_bytes += 1
            self._odd = False

    def write_samples(self, samples: Iterable[int], predictor: AdaptivePredictor) -> None:
        """
        Encode samples through a predictor and write the complete stream

        Args:
            samples: Signed 16-bit PCM samples in stream order
            predictor: Predictor holding the adaptation state for this stream
        """
        trace = _LOGGER.isEnabledFor(logging.DEBUG)
        self.start()
        for sample in samples:
            nibble = predictor.encode(sample)
            if trace:
                _LOGGER.debug("State%04x Sample%02x", predictor.state, nibble)
            self.push_nibble(nibble)
        self.flush()


def pack_stream(samples: Iterable[int], sample_rate: int, sink: BinaryIO,
                block_size: int = DEFAULT_BLOCK_SIZE,
                block_unit: str = 'bytes') -> int:
    """
    Encode PCM samples and write the framed UPD7759 stream

    The sample rate is resolved before anything is written, so an
    unsupported rate leaves the sink untouched.

    Args:
        samples: Signed 16-bit PCM samples in stream order
        sample_rate: 5000, 6000 or 8000
        sink: Binary writer receiving the stream
        block_size: Packed bytes (or samples) between repeated markers
        block_unit: 'bytes' or 'samples'

    Returns:
        bytes_written: Total number of bytes written to the sink

    Raises:
        InvalidSampleRateError: If the rate has no frequency marker
        SinkWriteError: If the sink fails
    """
    marker = frequency_marker_for(sample_rate)
    packer = FramePacker(marker, sink, block_size=block_size, block_unit=block_unit)
    packer.write_samples(samples, AdaptivePredictor())

    return packer.bytes_written


def expected_stream_length(num_samples: int, block_size: int = DEFAULT_BLOCK_SIZE,
                           block_unit: str = 'bytes') -> int:
    """
    Exact number of bytes pack_stream writes for a given sample count

    A trailing half-filled byte never triggers a marker of its own.

    Args:
        num_samples: Number of input samples
        block_size: Packed bytes (or samples) between repeated markers
        block_unit: 'bytes' or 'samples'

    Returns:
        length: Output size in bytes
    """
    if num_samples < 0:
        raise ValueError("Sample count must be non-negative")

    packed_bytes = (num_samples + 1) // 2
    if block_unit == 'bytes':
        repeats = (num_samples // 2) // block_size
    elif block_unit == 'samples':
        repeats = num_samples // block_size
    else:
        raise ValueError(f"Invalid block unit: {block_unit}. Must be 'bytes' or 'samples'.")

    return 1 + packed_bytes + repeats


def split_blocks(data: bytes, block_size: int = DEFAULT_BLOCK_SIZE,
                 block_unit: str = 'bytes') -> Tuple[FrequencyMarker, List[bytes]]:
    """
    Split an encoded stream into its marker-separated payload blocks

    Args:
        data: Complete encoded stream
        block_size: Packed bytes (or samples) between repeated markers
        block_unit: 'bytes' or 'samples'

    Returns:
        marker, blocks: The stream's frequency marker and the payload bytes
                        of each block (the last block may be short or empty)

    Raises:
        InvalidStreamError: If the stream is empty, starts with an unknown
                            byte, or a repeated marker does not match
    """
    if not data:
        raise InvalidStreamError("Stream is empty")

    marker = marker_from_byte(data[0])
    if marker is FrequencyMarker.NONE:
        raise InvalidStreamError(f"Unknown frequency marker: 0x{data[0]:02X}")

    if block_unit == 'bytes':
        payload_len = block_size
    elif block_unit == 'samples':
        payload_len = block_size // 2
    else:
        raise ValueError(f"Invalid block unit: {block_unit}. Must be 'bytes' or 'samples'.")
    if payload_len <= 0:
        raise ValueError(f"Invalid block size: {block_size}. Must be positive.")

    blocks = []
    pos = 1
    while True:
        block = data[pos:pos + payload_len]
        blocks.append(block)
        pos += len(block)
        if len(block) < payload_len or pos >= len(data):
            break
        if data[pos] != marker:
            raise InvalidStreamError(
                f"Expected marker 0x{marker:02X} at offset {pos}, got 0x{data[pos]:02X}"
            )
        pos += 1

    return marker, blocks
