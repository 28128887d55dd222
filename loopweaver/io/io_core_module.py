#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Core I/O module for LoopWeaver.

Loads equal-length reads for circular assembly and writes assembled
templates:
- Plain text, one read per line (the native input format)
- FASTA / FASTQ via Biopython
- Read length validation
"""

# =============================================================================
# SECTION 1: IMPORTS AND DEPENDENCIES
# =============================================================================

import logging
from pathlib import Path
from typing import Dict, List, Union

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

logger = logging.getLogger(__name__)

READ_FORMATS = ('auto', 'lines', 'fasta', 'fastq')


class InconsistentReadLengthError(ValueError):
    """Raised when reads do not all share the first read's length."""
    pass


# =============================================================================
# SECTION 2: READ LOADING
# =============================================================================

def detect_format(filepath: Union[str, Path]) -> str:
    """
    Guess the read file format from its first non-blank character.

    Returns:
        'fasta' for '>', 'fastq' for '@', otherwise 'lines'
    """
    with open(filepath, 'r') as handle:
        for line in handle:
            stripped = line.strip()
            if not stripped:
                continue
            if stripped.startswith('>'):
                return 'fasta'
            if stripped.startswith('@'):
                return 'fastq'
            return 'lines'
    return 'lines'


def _read_lines(filepath: Path) -> List[str]:
    with open(filepath, 'r') as handle:
        return [line.strip().upper() for line in handle if line.strip()]


def load_sequences(filepath: Union[str, Path], fmt: str = 'auto') -> List[str]:
    """
    Load reads from a file.

    Args:
        filepath: Path to the reads file
        fmt: One of 'auto', 'lines', 'fasta', 'fastq'

    Returns:
        Uppercased read sequences in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If fmt is not a known format
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Reads file not found: {filepath}")
    if fmt not in READ_FORMATS:
        raise ValueError(f"Unknown read format {fmt!r}, expected one of {READ_FORMATS}")

    if fmt == 'auto':
        fmt = detect_format(filepath)

    if fmt == 'lines':
        sequences = _read_lines(filepath)
    else:
        with open(filepath, 'r') as handle:
            sequences = [str(record.seq).upper() for record in SeqIO.parse(handle, fmt)]

    logger.info(f"Loaded {len(sequences)} reads from {filepath} ({fmt})")
    return sequences


def validate_read_lengths(sequences: List[str]) -> int:
    """
    Check that all reads share one length.

    Returns:
        The shared read length

    Raises:
        ValueError: If there are no reads
        InconsistentReadLengthError: If any read differs from the first
    """
    if not sequences:
        raise ValueError("No reads to assemble")

    read_length = len(sequences[0])
    for index, sequence in enumerate(sequences):
        if len(sequence) != read_length:
            raise InconsistentReadLengthError(
                f"Inconsistent read length: read {index} has length "
                f"{len(sequence)}, expected {read_length}"
            )
    return read_length


# =============================================================================
# SECTION 3: OUTPUT
# =============================================================================

def write_fasta(filepath: Union[str, Path], records: Dict[str, str]) -> int:
    """
    Write name -> sequence records as FASTA.

    Returns:
        Number of records written
    """
    seq_records = [
        SeqRecord(Seq(sequence), id=name, description='')
        for name, sequence in records.items()
    ]
    with open(filepath, 'w') as handle:
        count = SeqIO.write(seq_records, handle, 'fasta')
    logger.info(f"Wrote {count} sequences to {filepath}")
    return count
