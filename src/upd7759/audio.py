"""
PCM Audio Input

Reads the source audio for the encoder and rejects anything the UPD7759
cannot play: the stream must be mono, 16-bit PCM, sampled at 5, 6 or 8 kHz.

Supported containers:
- WAV (RIFF PCM), read with the standard wave module
- .npy arrays of int16 samples, with the sample rate given by the caller
"""

import io
import logging
import wave
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

import numpy as np

from .encoder import as_sample_buffer
from .exceptions import AllocationError, InvalidInputError
from .header import SUPPORTED_SAMPLE_RATES

_LOGGER = logging.getLogger(__name__)

PCM_16_WIDTH = 2

Source = Union[str, Path, BinaryIO]


@dataclass
class PCMAudio:
    """Validated mono 16-bit PCM audio held in one owned sample buffer"""
    samples: np.ndarray
    sample_rate: int
    channels: int = 1
    sample_width: int = PCM_16_WIDTH
    container: str = "WAV"

    @property
    def frames(self) -> int:
        return int(self.samples.size)

    @property
    def duration(self) -> float:
        return self.frames / self.sample_rate if self.sample_rate else 0.0

    def describe(self) -> str:
        """Human-readable summary for verbose output"""
        return "\n".join([
            f"Frames:         {self.frames}",
            f"Sample Rate:    {self.sample_rate}",
            f"Channels:       {self.channels}",
            f"Format:         {self.container} PCM_{self.sample_width * 8}",
            f"Duration:       {self.duration:.3f}s",
        ])


def validate_format(sample_rate: int, channels: int, sample_width: int) -> None:
    """
    Check that a stream can be encoded for the UPD7759

    Raises:
        InvalidInputError: On unsupported sample rate, channel count or bit depth
    """
    if sample_rate not in SUPPORTED_SAMPLE_RATES:
        raise InvalidInputError("Only sample rates of 5khz, 6khz, or 8khz are supported.")
    if channels != 1:
        raise InvalidInputError("Only single channel audio is supported.")
    if sample_width != PCM_16_WIDTH:
        raise InvalidInputError("Audio data must be 16-bit PCM.")


def read_wav(source: Source) -> PCMAudio:
    """
    Read a mono 16-bit PCM WAV file

    Args:
        source: Path or binary file object (non-seekable streams are buffered)

    Returns:
        audio: Validated PCMAudio
    """
    if isinstance(source, Path):
        source = str(source)
    elif not isinstance(source, str) and not _seekable(source):
        source = io.BytesIO(source.read())

    try:
        with wave.open(source, 'rb') as wav_file:
            channels = wav_file.getnchannels()
            sample_width = wav_file.getsampwidth()
            sample_rate = wav_file.getframerate()
            validate_format(sample_rate, channels, sample_width)
            frames = wav_file.readframes(wav_file.getnframes())
    except (wave.Error, EOFError) as e:
        raise InvalidInputError(f"Cannot read WAV input: {e}") from e
    except OSError as e:
        raise InvalidInputError(f"Cannot open input: {e}") from e

    try:
        samples = np.frombuffer(frames, dtype='<i2').astype(np.int16)
    except MemoryError as e:
        raise AllocationError(f"Could not allocate sample buffer: {e}") from e

    return PCMAudio(samples=samples, sample_rate=sample_rate,
                    channels=channels, sample_width=sample_width, container="WAV")


def read_npy(path: Union[str, Path], sample_rate: Optional[int]) -> PCMAudio:
    """
    Read a 1-D int16 sample array saved with numpy.save

    Args:
        path: Path to the .npy file
        sample_rate: Sample rate of the array (not stored in the file)

    Returns:
        audio: Validated PCMAudio
    """
    if sample_rate is None:
        raise InvalidInputError("A sample rate is required for .npy input")

    try:
        data = np.load(path, allow_pickle=False)
    except (OSError, ValueError) as e:
        raise InvalidInputError(f"Cannot read .npy input: {e}") from e

    if data.ndim not in (1, 2):
        raise InvalidInputError("Only single channel audio is supported.")
    channels = 1 if data.ndim == 1 else int(data.shape[-1])
    validate_format(sample_rate, channels, data.dtype.itemsize)
    if data.ndim == 2:
        data = data.reshape(-1)
    if data.dtype != np.int16:
        raise InvalidInputError("Audio data must be 16-bit PCM.")

    return PCMAudio(samples=as_sample_buffer(data), sample_rate=sample_rate,
                    container="NPY")


def read_pcm(source: Source, sample_rate: Optional[int] = None) -> PCMAudio:
    """
    Read source audio from a path or binary stream

    Args:
        source: Path (.wav or .npy) or binary file object containing WAV data
        sample_rate: Sample rate for .npy input; ignored with a warning for WAV

    Returns:
        audio: Validated PCMAudio

    Raises:
        InvalidInputError: If the audio cannot be read or fails validation
    """
    if isinstance(source, (str, Path)) and Path(source).suffix.lower() == '.npy':
        return read_npy(source, sample_rate)

    audio = read_wav(source)
    if sample_rate is not None and sample_rate != audio.sample_rate:
        _LOGGER.warning("Ignoring sample rate %d Hz, WAV header says %d Hz",
                        sample_rate, audio.sample_rate)
    return audio


def _seekable(stream: BinaryIO) -> bool:
    try:
        return stream.seekable()
    except (AttributeError, ValueError):
        return False
