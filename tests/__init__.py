"""
Test Suite for the UPD7759 Encoder

This package contains tests for the predictive state encoder, the frame
packer, audio input validation and the command-line tools.
"""

# Test discovery and utilities
import os
import sys
from .utils import generate_test_signal, write_test_wav

__all__ = [
        'generate_test_signal',
        'write_test_wav'
        ]

# Add src directory to path for testing
test_dir = os.path.dirname(__file__)
src_dir = os.path.join(os.path.dirname(test_dir), 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)
