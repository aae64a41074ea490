"""
UPD7759 ADPCM Lookup Tables

This module contains the two constant tables used by the UPD7759 speech
synthesis chip: the 16x16 step (delta) table and the 16-entry state
transition table. The tables are stored as nested tuples so they cannot
be modified at runtime.
"""

from typing import Tuple


class UPD7759Tables:
    """
    Container for the UPD7759 step and state transition tables

    Rows of the step table are indexed by adaptation state, columns by the
    4-bit sample code. The state transition table is indexed by the 4-bit
    sample code only.
    """

    NUM_STATES = 16
    NUM_CODES = 16

    STEP: Tuple[Tuple[int, ...], ...] = (
        (0,  0,  1,  2,  3,   5,   7,  10,  0,   0,  -1,  -2,  -3,   -5,   -7,  -10),
        (0,  1,  2,  3,  4,   6,   8,  13,  0,  -1,  -2,  -3,  -4,   -6,   -8,  -13),
        (0,  1,  2,  4,  5,   7,  10,  15,  0,  -1,  -2,  -4,  -5,   -7,  -10,  -15),
        (0,  1,  3,  4,  6,   9,  13,  19,  0,  -1,  -3,  -4,  -6,   -9,  -13,  -19),
        (0,  2,  3,  5,  8,  11,  15,  23,  0,  -2,  -3,  -5,  -8,  -11,  -15,  -23),
        (0,  2,  4,  7, 10,  14,  19,  29,  0,  -2,  -4,  -7, -10,  -14,  -19,  -29),
        (0,  3,  5,  8, 12,  16,  22,  33,  0,  -3,  -5,  -8, -12,  -16,  -22,  -33),
        (1,  4,  7, 10, 15,  20,  29,  43, -1,  -4,  -7, -10, -15,  -20,  -29,  -43),
        (1,  4,  8, 13, 18,  25,  35,  53, -1,  -4,  -8, -13, -18,  -25,  -35,  -53),
        (1,  6, 10, 16, 22,  31,  43,  64, -1,  -6, -10, -16, -22,  -31,  -43,  -64),
        (2,  7, 12, 19, 27,  37,  51,  76, -2,  -7, -12, -19, -27,  -37,  -51,  -76),
        (2,  9, 16, 24, 34,  46,  64,  96, -2,  -9, -16, -24, -34,  -46,  -64,  -96),
        (3, 11, 19, 29, 41,  57,  79, 117, -3, -11, -19, -29, -41,  -57,  -79, -117),
        (4, 13, 24, 36, 50,  69,  96, 143, -4, -13, -24, -36, -50,  -69,  -96, -143),
        (4, 16, 29, 44, 62,  85, 118, 175, -4, -16, -29, -44, -62,  -85, -118, -175),
        (6, 20, 36, 54, 76, 104, 144, 214, -6, -20, -36, -54, -76, -104, -144, -214),
    )

    STATE_TRANSITION: Tuple[int, ...] = (
        -1, -1, 0, 0, 1, 2, 2, 3, -1, -1, 0, 0, 1, 2, 2, 3
    )

    @classmethod
    def step(cls, state: int, code: int) -> int:
        """
        Look up a step table entry

        Args:
            state: Adaptation state (row), 0..15
            code: 4-bit sample code (column), 0..15

        Returns:
            step_value: Signed delta from the step table
        """
        return cls.STEP[state][code]

    @classmethod
    def transition(cls, code: int) -> int:
        """Look up the raw adaptation delta for a 4-bit sample code"""
        return cls.STATE_TRANSITION[code]
