"""
Shared test utilities for the UPD7759 encoder tests
"""
import wave
import numpy as np
from pathlib import Path
from typing import Optional, Union


def generate_test_signal(
    num_samples: int = 1024,
    sample_rate: int = 8000,
    frequency: float = 440.0,
    amplitude: float = 0.5,
    noise_level: float = 0.05,
    seed: Optional[int] = 42
) -> np.ndarray:
    """
    Generate a synthetic mono speech-band test signal.

    Args:
        num_samples: Number of samples to generate
        sample_rate: Sample rate in Hz
        frequency: Tone frequency in Hz
        amplitude: Peak amplitude as a fraction of full scale (0.0 to 1.0)
        noise_level: Amount of random noise to add (0.0 to 1.0)
        seed: Random seed for reproducibility

    Returns:
        np.ndarray: int16 samples of shape (num_samples,)
    """
    rng = np.random.default_rng(seed)

    t = np.arange(num_samples) / sample_rate
    signal = amplitude * np.sin(2 * np.pi * frequency * t)
    signal += noise_level * rng.standard_normal(num_samples)

    return np.clip(np.round(signal * 32767), -32768, 32767).astype(np.int16)


def write_test_wav(
    path: Union[str, Path],
    samples: np.ndarray,
    sample_rate: int = 8000,
    channels: int = 1,
    sample_width: int = 2
) -> Path:
    """
    Write samples to a PCM WAV file.

    Samples are written as-is for 16-bit files; for 8-bit files they are
    reduced to unsigned bytes.
    """
    path = Path(path)
    samples = np.asarray(samples)

    if sample_width == 1:
        frames = ((samples.astype(np.int32) >> 8) + 128).astype(np.uint8).tobytes()
    else:
        frames = samples.astype('<i2').tobytes()

    with wave.open(str(path), 'wb') as wav_file:
        wav_file.setnchannels(channels)
        wav_file.setsampwidth(sample_width)
        wav_file.setframerate(sample_rate)
        wav_file.writeframes(frames)

    return path
