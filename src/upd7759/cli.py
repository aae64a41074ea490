#!/usr/bin/env python3
"""
Command Line Interface for the UPD7759 Encoder

Provides command-line tools for encoding PCM audio and inspecting encoded streams.
"""

import argparse
import logging
import sys
import time
from contextlib import ExitStack
from pathlib import Path
from typing import List, Optional

from .audio import read_pcm
from .bitstream import BLOCK_UNITS, DEFAULT_BLOCK_SIZE, split_blocks
from .config import EncoderConfig
from .encoder import UPD7759Encoder
from .exceptions import UPD7759Error

_LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(stream=sys.stderr, level=level, force=True,
                        format="%(levelname)s %(name)s: %(message)s")


def _fail(err: Exception) -> int:
    print(f"Sorry :( -- {err}", file=sys.stderr)
    return 1


def build_encode_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="UPD7759 ADPCM Encoder")
    parser.add_argument("-i", "--input", help="Input audio file (.wav, .npy); default stdin")
    parser.add_argument("-o", "--output", help="Output UPD7759 stream; default stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--sample-rate", type=int,
                        help="Sample rate in Hz for .npy input (5000, 6000 or 8000)")
    parser.add_argument("--block-size", type=int, default=DEFAULT_BLOCK_SIZE,
                        help="Packed bytes between repeated frequency markers")
    parser.add_argument("--block-unit", choices=BLOCK_UNITS, default="bytes",
                        help="Count marker blocks in packed bytes or in input samples")
    parser.add_argument("--debug", action="store_true",
                        help="Trace adaptation state and nibble for every sample")
    return parser


def run_encode(config: EncoderConfig) -> dict:
    """
    Execute one encode run described by a configuration

    Input and output handles are released on every exit path. Nothing is
    written to the output if the input fails validation.

    Args:
        config: Run configuration

    Returns:
        stats: Encoding statistics from UPD7759Encoder.encode_to
    """
    _LOGGER.debug("Reading input from %s", config.input_path or "stdin")
    if config.input_path is not None:
        audio = read_pcm(config.input_path, config.sample_rate)
    else:
        audio = read_pcm(sys.stdin.buffer, config.sample_rate)

    if config.verbose:
        print(audio.describe(), file=sys.stderr)

    encoder = UPD7759Encoder(audio.sample_rate,
                             block_size=config.block_size,
                             block_unit=config.block_unit)

    _LOGGER.debug("Writing output to %s", config.output_path or "stdout")
    with ExitStack() as stack:
        if config.output_path is not None:
            sink = stack.enter_context(open(config.output_path, "wb"))
        else:
            sink = sys.stdout.buffer
        stats = encoder.encode_to(audio.samples, sink)
        sink.flush()

    return stats


def encode_cli(argv: Optional[List[str]] = None) -> int:
    """Command-line interface for encoding"""
    args = build_encode_parser().parse_args(argv)

    try:
        config = EncoderConfig.from_args(args)
    except ValueError as e:
        return _fail(e)
    _configure_logging(config.verbose, config.debug)

    start_time = time.time()
    try:
        stats = run_encode(config)
    except (UPD7759Error, OSError) as e:
        return _fail(e)
    encode_time = time.time() - start_time

    if config.verbose:
        print(f"Encoding time: {encode_time:.3f} seconds", file=sys.stderr)
        print(f"Samples: {stats['num_samples']}", file=sys.stderr)
        print(f"Output size: {stats['output_bytes']} bytes "
              f"({stats['marker_bytes']} markers)", file=sys.stderr)
        print(f"Compression ratio: {stats['compression_ratio']:.2f}:1", file=sys.stderr)
        print(f"Bits per sample: {stats['bits_per_sample']:.2f}", file=sys.stderr)

    return 0


def inspect_cli(argv: Optional[List[str]] = None) -> int:
    """Command-line interface for inspecting an encoded stream"""
    parser = argparse.ArgumentParser(description="UPD7759 Stream Inspector")
    parser.add_argument("input", help="Encoded UPD7759 stream")
    parser.add_argument("--block-size", type=int, default=DEFAULT_BLOCK_SIZE,
                        help="Packed bytes between repeated frequency markers")
    parser.add_argument("--block-unit", choices=BLOCK_UNITS, default="bytes",
                        help="Count marker blocks in packed bytes or in input samples")
    args = parser.parse_args(argv)

    try:
        data = Path(args.input).read_bytes()
        marker, blocks = split_blocks(data, block_size=args.block_size,
                                      block_unit=args.block_unit)
    except (UPD7759Error, OSError, ValueError) as e:
        return _fail(e)

    payload = sum(len(block) for block in blocks)
    print(f"Stream: {args.input} ({len(data)} bytes)")
    print(f"Frequency marker: 0x{marker:02X} ({marker.sample_rate} Hz)")
    print(f"Blocks: {len(blocks)}")
    print(f"Packed bytes: {payload} (up to {payload * 2} samples)")
    print(f"Duration: ~{payload * 2 / marker.sample_rate:.3f}s")
    return 0

