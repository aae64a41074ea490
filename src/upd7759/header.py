"""
UPD7759 Frequency Marker

The UPD7759 bitstream has no container header. The only metadata is a single
frequency marker byte that identifies the playback sample rate. It is written
at the start of the stream and repeated between blocks of packed samples.
"""

from enum import IntEnum
from typing import Dict

from .exceptions import InvalidSampleRateError


class FrequencyMarker(IntEnum):
    """Sample rate class markers understood by the playback hardware"""
    NONE = 0x00        # unset, never emitted
    FIVE_KHZ = 0x5F
    SIX_KHZ = 0x59
    EIGHT_KHZ = 0x53

    @property
    def sample_rate(self) -> int:
        """Sample rate in Hz signalled by this marker"""
        if self is FrequencyMarker.NONE:
            raise InvalidSampleRateError(0)
        return _MARKER_TO_RATE[self]

    def to_byte(self) -> bytes:
        """Marker as a one-byte string, ready to write to a sink"""
        if self is FrequencyMarker.NONE:
            raise InvalidSampleRateError(0)
        return bytes((self.value,))


_RATE_TO_MARKER: Dict[int, FrequencyMarker] = {
    5000: FrequencyMarker.FIVE_KHZ,
    6000: FrequencyMarker.SIX_KHZ,
    8000: FrequencyMarker.EIGHT_KHZ,
}

_MARKER_TO_RATE: Dict[FrequencyMarker, int] = {
    marker: rate for rate, marker in _RATE_TO_MARKER.items()
}

SUPPORTED_SAMPLE_RATES = tuple(sorted(_RATE_TO_MARKER))


def frequency_marker_for(sample_rate: int) -> FrequencyMarker:
    """
    Resolve a sample rate to its frequency marker

    Args:
        sample_rate: Sample rate in Hz (5000, 6000 or 8000)

    Returns:
        marker: Matching FrequencyMarker

    Raises:
        InvalidSampleRateError: If the rate has no marker
    """
    try:
        return _RATE_TO_MARKER[sample_rate]
    except (KeyError, TypeError):
        raise InvalidSampleRateError(sample_rate) from None


def marker_from_byte(value: int) -> FrequencyMarker:
    """Map a raw stream byte to a FrequencyMarker, or NONE if it is not one"""
    try:
        marker = FrequencyMarker(value)
    except ValueError:
        return FrequencyMarker.NONE
    return marker
