"""
Assembly Core module for LoopWeaver.

This module provides the de Bruijn graph assembly algorithms:
- De Bruijn graph construction from both strands of equal-length reads
- Destructive cyclic superstring extraction
- Superstring shaving and length filtering
"""

from .dbg_engine_module import (
    DeBruijnGraph,
    DeBruijnGraphBuilder,
    build_graph,
    MIN_KPLUS1_SIZE,
)

from .cycle_extraction_module import (
    CycleExtractor,
    cycle_to_superstring,
    extract_cyclic_superstrings,
    shave_superstrings,
    filter_superstrings,
)

__all__ = [
    # Graph
    "DeBruijnGraph",
    "DeBruijnGraphBuilder",
    "build_graph",
    "MIN_KPLUS1_SIZE",
    # Cycle extraction
    "CycleExtractor",
    "cycle_to_superstring",
    "extract_cyclic_superstrings",
    "shave_superstrings",
    "filter_superstrings",
]
