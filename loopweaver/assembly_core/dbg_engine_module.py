#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
LoopWeaver v0.1.0

De Bruijn Graph (DBG) Engine for LoopWeaver.
- Nodes are k-mers, keyed by sequence, iterated in lexicographic order
- Edges come from (k+1)-mers cut from every read and its reverse complement
- Edges are a plain set per node (no multi-edges, no coverage)
- Supports in-place edge pruning during cycle extraction
"""

from dataclasses import dataclass, field
from typing import Dict, Set, List, Tuple, Iterable, Iterator, Mapping
import logging

from loopweaver.utils.sequence_utils import extract_kmers, reverse_complement

logger = logging.getLogger(__name__)

# Smallest k+1-mer size the sweep goes down to (2-mer nodes)
MIN_KPLUS1_SIZE = 3


# ============================================================================
# Core Data Structure
# ============================================================================

@dataclass
class DeBruijnGraph:
    """
    De Bruijn graph over k-mer strings.

    Each node maps to the set of nodes it has an outgoing edge to. Every
    neighbour is also present as a key, possibly with an empty set.
    """
    nodes: Dict[str, Set[str]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple[str, str]]) -> "DeBruijnGraph":
        """Build a graph from explicit (source, target) pairs."""
        graph = cls()
        for source, target in edges:
            graph.add_edge(source, target)
        return graph

    @classmethod
    def from_adjacency(cls, adjacency: Mapping[str, Iterable[str]]) -> "DeBruijnGraph":
        """Build a graph from a node -> neighbours mapping."""
        graph = cls()
        for source, targets in adjacency.items():
            graph.add_node(source)
            for target in targets:
                graph.add_edge(source, target)
        return graph

    def add_node(self, node: str):
        """Add a node with no outgoing edges (no-op if present)."""
        if node not in self.nodes:
            self.nodes[node] = set()

    def add_edge(self, source: str, target: str):
        """
        Add a directed edge source -> target, creating both nodes.

        The two k-mers must have equal length and overlap by k-1 characters.
        """
        if len(source) != len(target) or source[1:] != target[:-1]:
            raise ValueError(
                f"Nodes {source!r} and {target!r} do not overlap by k-1 characters"
            )
        self.add_node(target)
        self.add_node(source)
        self.nodes[source].add(target)

    def add_kplus1_mer(self, kplus1_mer: str):
        """
        Add the two k-mers of a (k+1)-mer and the edge between them.

        Adding the same (k+1)-mer twice leaves the graph unchanged.
        """
        if len(kplus1_mer) < 2:
            raise ValueError(f"k+1-mer must have length >= 2, got {kplus1_mer!r}")

        left_kmer = kplus1_mer[:-1]
        right_kmer = kplus1_mer[1:]

        if left_kmer in self.nodes:
            self.nodes[left_kmer].add(right_kmer)
        else:
            self.nodes[left_kmer] = {right_kmer}

        if right_kmer not in self.nodes:
            self.nodes[right_kmer] = set()

    def remove_edge(self, source: str, target: str):
        """Remove source -> target if present."""
        neighbours = self.nodes.get(source)
        if neighbours is not None:
            neighbours.discard(target)

    def prune(self, path: List[str]):
        """Remove every edge path[i] -> path[i+1] along a walked path."""
        for source, target in zip(path, path[1:]):
            self.remove_edge(source, target)

    def neighbors(self, node: str) -> List[str]:
        """Outgoing neighbours of node, in sorted order."""
        return sorted(self.nodes[node])

    def out_degree(self, node: str) -> int:
        """Number of outgoing edges."""
        return len(self.nodes.get(node, ()))

    def has_edge(self, source: str, target: str) -> bool:
        return target in self.nodes.get(source, ())

    def snapshot_nodes(self) -> Tuple[str, ...]:
        """Immutable copy of the node set, in lexicographic order."""
        return tuple(sorted(self.nodes))

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(neighbours) for neighbours in self.nodes.values())

    def __contains__(self, node: str) -> bool:
        return node in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.nodes))

    # Introspection

    def describe(self) -> List[str]:
        """One line per node listing its neighbours."""
        return [
            f"Node: {node}, neighbours: {self.neighbors(node)}"
            for node in self
        ]

    def log_contents(self, level: int = logging.DEBUG):
        """Emit describe() lines through the module logger."""
        if not logger.isEnabledFor(level):
            return
        for line in self.describe():
            logger.log(level, line)


# ============================================================================
# De Bruijn Graph Builder
# ============================================================================

class DeBruijnGraphBuilder:
    """
    Builder for de Bruijn graphs over equal-length reads from a circular
    source.

    Windows of length kplus1_size are cut from each read and from its
    reverse complement, so both strands contribute edges.
    """

    def __init__(self, kplus1_size: int):
        """
        Initialize DBG builder.

        Args:
            kplus1_size: Length of the windows cut from reads; nodes are one
                base shorter
        """
        if kplus1_size < MIN_KPLUS1_SIZE:
            raise ValueError(
                f"k+1-mer size must be >= {MIN_KPLUS1_SIZE}, got {kplus1_size}"
            )
        self.kplus1_size = kplus1_size

    def build(self, sequences: Iterable[str], read_length: int) -> DeBruijnGraph:
        """
        Build a de Bruijn graph from reads and their reverse complements.

        Args:
            sequences: Reads, all of length read_length
            read_length: Shared read length

        Returns:
            DeBruijnGraph with (kplus1_size - 1)-mer nodes

        Raises:
            ValueError: If kplus1_size exceeds read_length
            InvalidBaseError: If a read contains a non-ACGT character
        """
        if self.kplus1_size > read_length:
            raise ValueError(
                f"k+1-mer size {self.kplus1_size} exceeds read length {read_length}"
            )

        graph = DeBruijnGraph()
        k = self.kplus1_size
        num_sequences = 0

        for sequence in sequences:
            sequence = sequence.upper()
            forward = sequence[:read_length]
            revcomp = reverse_complement(sequence)[:read_length]
            for kplus1_mer in extract_kmers(forward, k) + extract_kmers(revcomp, k):
                graph.add_kplus1_mer(kplus1_mer)
            num_sequences += 1

        logger.debug(
            f"Built DBG from {num_sequences} reads (k+1={k}): "
            f"{graph.node_count} nodes, {graph.edge_count} edges"
        )
        return graph


def build_graph(
    sequences: Iterable[str],
    kplus1_size: int,
    read_length: int
) -> DeBruijnGraph:
    """
    Convenience function to build a DBG at one k+1-mer size.

    Args:
        sequences: Equal-length reads
        kplus1_size: Window length cut from each read
        read_length: Shared read length

    Returns:
        DeBruijnGraph capturing both strands
    """
    builder = DeBruijnGraphBuilder(kplus1_size)
    return builder.build(sequences, read_length)
