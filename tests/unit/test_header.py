"""
Tests for frequency marker resolution
"""

import pytest

from upd7759.exceptions import InvalidInputError, InvalidSampleRateError
from upd7759.header import (
    SUPPORTED_SAMPLE_RATES,
    FrequencyMarker,
    frequency_marker_for,
    marker_from_byte,
)


def test_marker_values():
    assert frequency_marker_for(5000) == 0x5F
    assert frequency_marker_for(6000) == 0x59
    assert frequency_marker_for(8000) == 0x53
    assert SUPPORTED_SAMPLE_RATES == (5000, 6000, 8000)


def test_marker_round_trip_rate():
    for rate in SUPPORTED_SAMPLE_RATES:
        marker = frequency_marker_for(rate)
        assert marker.sample_rate == rate
        assert marker.to_byte() == bytes([int(marker)])


@pytest.mark.parametrize("sample_rate", [0, 4000, 11025, 44100, -8000, None, "8000"])
def test_unsupported_rate_rejected(sample_rate):
    with pytest.raises(InvalidSampleRateError) as exc_info:
        frequency_marker_for(sample_rate)

    # Callers may catch the broader validation errors
    assert isinstance(exc_info.value, InvalidInputError)
    assert isinstance(exc_info.value, ValueError)
    assert exc_info.value.sample_rate == sample_rate


def test_none_marker_is_never_emitted():
    assert FrequencyMarker.NONE == 0
    with pytest.raises(InvalidSampleRateError):
        FrequencyMarker.NONE.to_byte()
    with pytest.raises(InvalidSampleRateError):
        FrequencyMarker.NONE.sample_rate


def test_marker_from_byte():
    assert marker_from_byte(0x53) is FrequencyMarker.EIGHT_KHZ
    assert marker_from_byte(0x5F) is FrequencyMarker.FIVE_KHZ
    assert marker_from_byte(0x12) is FrequencyMarker.NONE
