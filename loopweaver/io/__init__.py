"""
Read I/O module for LoopWeaver.

Handles loading equal-length reads and writing assembled templates.
"""

from .io_core_module import (
    READ_FORMATS,
    InconsistentReadLengthError,
    detect_format,
    load_sequences,
    validate_read_lengths,
    write_fasta,
)

__all__ = [
    "READ_FORMATS",
    "InconsistentReadLengthError",
    "detect_format",
    "load_sequences",
    "validate_read_lengths",
    "write_fasta",
]
