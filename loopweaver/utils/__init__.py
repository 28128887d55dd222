"""
Utilities module for LoopWeaver.

This module provides core utilities for circular assembly:
- Sequence helpers (reverse complement, rotation check, k-mer windows)
- The k+1-mer size sweep orchestrator lives in loopweaver.utils.pipeline
"""

from .sequence_utils import (
    InvalidBaseError,
    extract_kmers,
    reverse_complement,
    is_cyclic_permutation,
)

__all__ = [
    # Sequence helpers
    "InvalidBaseError",
    "extract_kmers",
    "reverse_complement",
    "is_cyclic_permutation",
]
