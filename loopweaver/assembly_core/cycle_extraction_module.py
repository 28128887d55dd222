#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
LoopWeaver v0.1.0

Cyclic superstring extraction from a de Bruijn graph.

Walks the graph from every node in lexicographic order, records one simple
cycle per starting node where one closes, and prunes the edges of each
recorded cycle so later walks cannot reuse them. The raw superstrings are
then shaved to their cyclic period and filtered by length.

Traversal keeps a single linear path stack per starting node and never
backtracks across branches. This is sound for graphs built from one circular
molecule, where out-degree is at most 2 and real branching is rare.
"""

from typing import List
import logging

from .dbg_engine_module import DeBruijnGraph

logger = logging.getLogger(__name__)


def cycle_to_superstring(cycle: List[str]) -> str:
    """
    Spell a closed walk of k-mers as a string.

    The walk starts and ends on the same node. The result is the first node
    in full followed by the last base of each later node, excluding the
    closing repeat of the first node.

    Example:
        >>> cycle_to_superstring(["ATG", "TGA", "GAT", "ATG"])
        'ATGAT'
    """
    if len(cycle) < 2:
        raise ValueError("A closed walk needs at least two entries")
    return cycle[0] + ''.join(node[-1] for node in cycle[1:-1])


class CycleExtractor:
    """
    Destructive cycle extractor.

    Each call to extract() consumes edges of the wrapped graph; the graph is
    not reusable for a second independent extraction.
    """

    def __init__(self, graph: DeBruijnGraph):
        self.graph = graph
        self.cycles: List[List[str]] = []

    def extract(self) -> List[str]:
        """
        Extract cyclic superstrings, ordered by starting node.

        Returns:
            One superstring per starting node from which a cycle closed
        """
        superstrings = []

        # The graph is pruned while walking; iterate over a frozen copy
        for focal_node in self.graph.snapshot_nodes():
            cycle = self._walk_from(focal_node)
            if cycle is None:
                continue
            superstring = cycle_to_superstring(cycle)
            logger.debug(f"Cycle from {focal_node}: {superstring}")
            self.graph.prune(cycle)
            self.cycles.append(cycle)
            superstrings.append(superstring)

        logger.debug(f"Extracted {len(superstrings)} cyclic superstrings")
        return superstrings

    def _walk_from(self, focal_node: str):
        """
        Walk from focal_node until the walk closes, dead-ends or revisits.

        Returns the confirmed node path (closing node repeated at the end)
        if the walk returned to focal_node, else None.
        """
        node_stack = [focal_node]
        confirmed = []
        visited = set()

        while True:
            cur_node = node_stack[-1]

            if cur_node in visited:
                if cur_node == focal_node:
                    confirmed.append(cur_node)
                    return confirmed
                return None

            visited.add(cur_node)
            confirmed.append(cur_node)

            added = 0
            for neighbour in self.graph.neighbors(cur_node):
                # Dead-end neighbours cannot lead back to focal_node
                if self.graph.out_degree(neighbour) == 0:
                    continue
                node_stack.append(neighbour)
                added += 1

            if added == 0:
                return None


def extract_cyclic_superstrings(graph: DeBruijnGraph) -> List[str]:
    """Convenience wrapper around CycleExtractor. Consumes graph edges."""
    return CycleExtractor(graph).extract()


# ============================================================================
# Post-processing
# ============================================================================

def shave_superstrings(superstrings: List[str], k: int) -> List[str]:
    """
    Drop the first k-2 characters of each superstring.

    Cycle spelling over-counts the wrap-around overlap; with k the k+1-mer
    size used to build the graph, the shaved string has exactly the length of
    the cycle.
    """
    if k < 2:
        raise ValueError(f"k must be >= 2 to shave, got {k}")
    return [superstring[k - 2:] for superstring in superstrings]


def filter_superstrings(superstrings: List[str], min_length: int) -> List[str]:
    """Keep superstrings long enough to contain a whole read."""
    return [s for s in superstrings if len(s) >= min_length]


__all__ = [
    'CycleExtractor',
    'cycle_to_superstring',
    'extract_cyclic_superstrings',
    'shave_superstrings',
    'filter_superstrings',
]
