"""
Error types raised by the UPD7759 encoder

Every failure in this package is fatal to the current encode run. Library
code raises these exceptions and leaves reporting to the caller.
"""


class UPD7759Error(Exception):
    """Base class for all encoder errors"""


class InvalidInputError(UPD7759Error, ValueError):
    """Source audio failed validation (sample rate, channels, bit depth, range)"""


class InvalidSampleRateError(InvalidInputError):
    """No frequency marker exists for the requested sample rate"""

    def __init__(self, sample_rate):
        self.sample_rate = sample_rate
        super().__init__(
            f"Unsupported sample rate: {sample_rate} Hz. "
            "Only sample rates of 5khz, 6khz, or 8khz are supported."
        )


class InvalidStreamError(UPD7759Error, ValueError):
    """An encoded UPD7759 stream does not follow the marker framing"""


class SinkWriteError(UPD7759Error, IOError):
    """Writing to the output byte stream failed"""


class AllocationError(UPD7759Error, MemoryError):
    """The sample buffer could not be allocated"""
