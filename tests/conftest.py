#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Pytest configuration and shared fixtures.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from pathlib import Path
import tempfile
import shutil


# 12 bp circular genome whose circular 5-mers are unique across both strands
CIRCULAR_GENOME = "ATGCGTACCTTG"
READ_LENGTH = 6


def circular_windows(genome, length):
    """Every window of the given length, read around the circle."""
    doubled = genome + genome
    return [doubled[i:i + length] for i in range(len(genome))]


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="loopweaver_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def circular_genome():
    """Forward strand of the test plasmid."""
    return CIRCULAR_GENOME


@pytest.fixture
def circular_reads():
    """Equal-length reads tiling the test plasmid."""
    return circular_windows(CIRCULAR_GENOME, READ_LENGTH)


@pytest.fixture
def reads_file(temp_output_dir, circular_reads):
    """Plain one-read-per-line file for the test plasmid."""
    path = temp_output_dir / "reads.txt"
    path.write_text("\n".join(circular_reads) + "\n")
    return path

# LoopWeaver v0.1.0
# Any usage is subject to this software's license.
