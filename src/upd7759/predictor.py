from typing import Iterable, Tuple

import numpy as np

from .tables import UPD7759Tables

NIBBLE_MIN = 0
NIBBLE_MAX = UPD7759Tables.NUM_CODES - 1


def clamp_nibble(value: int) -> int:
    """Clamp an integer into [0, 15] without wrapping"""
    if value < NIBBLE_MIN:
        return NIBBLE_MIN
    if value > NIBBLE_MAX:
        return NIBBLE_MAX
    return value


def sample_to_code(sample: int) -> int:
    """
    Reduce a 16-bit PCM sample to the chip's working value

    The chip has a 9-bit DAC, so the low 7 bits of the sample are discarded
    and the remainder is narrowed to a signed 8-bit quantity. The result is
    not clamped here.

    Args:
        sample: Signed 16-bit PCM sample

    Returns:
        value: Signed 8-bit working value (-128..127)
    """
    value = (int(sample) >> 7) & 0xFF
    if value >= 0x80:
        value -= 0x100
    return value


def encode_sample(sample: int, state: int) -> Tuple[int, int]:
    """
    Encode one PCM sample into a 4-bit UPD7759 nibble

    Both differences below are taken in this exact order (table value minus
    current value). Hardware compatibility depends on it.

        code      = clamp(sample >> 7)
        new_state = clamp(state_table[code] - clamp(state))
        nibble    = (step[new_state][code] - code) & 0x0F

    Args:
        sample: Signed 16-bit PCM sample
        state: Current adaptation state (clamped before use)

    Returns:
        nibble, new_state: Encoded 4-bit value and the state for the next sample
    """
    state = clamp_nibble(state)
    code = clamp_nibble(sample_to_code(sample))

    new_state = clamp_nibble(UPD7759Tables.transition(code) - state)
    nibble = (UPD7759Tables.step(new_state, code) - code) & 0x0F

    return nibble, new_state


class AdaptivePredictor:
    """
    UPD7759 Predictive State Encoder

    Holds the adaptation state between samples. Samples must be fed in
    stream order: the state after sample i determines the code of sample i+1.
    """

    def __init__(self, initial_state: int = 0) -> None:
        self.initial_state = clamp_nibble(initial_state)
        self.state = self.initial_state
        self.samples_encoded = 0

    def reset(self) -> None:
        """Return to the stream-start state"""
        self.state = self.initial_state
        self.samples_encoded = 0

    def encode(self, sample: int) -> int:
        """Encode a single sample and advance the adaptation state"""
        nibble, self.state = encode_sample(sample, self.state)
        self.samples_encoded += 1
        return nibble

    def encode_samples(self, samples: Iterable[int]) -> np.ndarray:
        """
        Encode a sequence of samples into nibbles

        Args:
            samples: Signed 16-bit PCM samples in stream order

        Returns:
            nibbles: uint8 array with one value in [0, 15] per sample
        """
        nibbles = [self.encode(sample) for sample in samples]
        return np.asarray(nibbles, dtype=np.uint8)
