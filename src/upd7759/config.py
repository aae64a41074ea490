"""Run configuration for the UPD7759 command-line encoder.

One immutable value built from the command line and passed explicitly
through the encode run. No module keeps mutable option state.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .bitstream import BLOCK_UNITS, DEFAULT_BLOCK_SIZE


@dataclass(frozen=True)
class EncoderConfig:
    """Immutable settings for a single encode run."""

    # Input/output selection; None means stdin/stdout
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None

    # Required for raw sample arrays (.npy), ignored for WAV
    sample_rate: Optional[int] = None

    # Framing
    block_size: int = DEFAULT_BLOCK_SIZE
    block_unit: str = "bytes"

    # Diagnostics
    verbose: bool = False
    debug: bool = False

    def __post_init__(self) -> None:
        if self.block_unit not in BLOCK_UNITS:
            raise ValueError(f"Invalid block unit: {self.block_unit}")
        if self.block_size <= 0:
            raise ValueError(f"Invalid block size: {self.block_size}")
        if self.block_unit == "samples" and self.block_size % 2:
            raise ValueError("Sample-counted blocks must hold an even number of samples")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "EncoderConfig":
        """Build a configuration from parsed command-line arguments."""
        return cls(
            input_path=Path(args.input) if args.input not in (None, "-") else None,
            output_path=Path(args.output) if args.output not in (None, "-") else None,
            sample_rate=args.sample_rate,
            block_size=args.block_size,
            block_unit=args.block_unit,
            verbose=args.verbose,
            debug=args.debug,
        )
