#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Tests for read loading and template output.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from loopweaver.io import (
    InconsistentReadLengthError,
    detect_format,
    load_sequences,
    validate_read_lengths,
    write_fasta,
)


class TestLoadSequences:
    """Test the supported read formats."""

    def test_plain_lines(self, temp_output_dir):
        path = temp_output_dir / "reads.txt"
        path.write_text("acgtac\n\nTTGACC  \n")

        assert load_sequences(path) == ["ACGTAC", "TTGACC"]

    def test_fasta(self, temp_output_dir):
        path = temp_output_dir / "reads.fasta"
        path.write_text(">r1\nACGTAC\n>r2\nttgacc\n")

        assert detect_format(path) == 'fasta'
        assert load_sequences(path) == ["ACGTAC", "TTGACC"]

    def test_fastq(self, temp_output_dir):
        path = temp_output_dir / "reads.fastq"
        path.write_text("@r1\nACGTAC\n+\nIIIIII\n@r2\nTTGACC\n+\nIIIIII\n")

        assert detect_format(path) == 'fastq'
        assert load_sequences(path) == ["ACGTAC", "TTGACC"]

    def test_explicit_format(self, temp_output_dir):
        path = temp_output_dir / "reads.dat"
        path.write_text("ACGTAC\n")

        assert load_sequences(path, fmt='lines') == ["ACGTAC"]

    def test_missing_file(self, temp_output_dir):
        with pytest.raises(FileNotFoundError):
            load_sequences(temp_output_dir / "missing.txt")

    def test_unknown_format(self, reads_file):
        with pytest.raises(ValueError):
            load_sequences(reads_file, fmt='bam')

    def test_fixture_reads(self, reads_file, circular_reads):
        assert load_sequences(reads_file) == circular_reads


class TestValidateReadLengths:

    def test_shared_length(self):
        assert validate_read_lengths(["ACGT", "TTGA"]) == 4

    def test_inconsistent(self):
        with pytest.raises(InconsistentReadLengthError, match="read 2"):
            validate_read_lengths(["ACGT", "TTGA", "TTG"])

    def test_empty(self):
        with pytest.raises(ValueError):
            validate_read_lengths([])


class TestWriteFasta:

    def test_write_and_reload(self, temp_output_dir):
        path = temp_output_dir / "template.fasta"
        count = write_fasta(path, {'circular_template': "TACGCATCAAGG"})

        assert count == 1
        assert path.read_text().startswith(">circular_template\n")
        assert load_sequences(path) == ["TACGCATCAAGG"]

# LoopWeaver v0.1.0
# Any usage is subject to this software's license.
