"""
LoopWeaver v0.1.0

Sequence utility functions for LoopWeaver.

Provides the strand and rotation helpers used by graph construction and by
the k-size sweep.
"""

from typing import List


class InvalidBaseError(ValueError):
    """Raised when a sequence contains a character outside A/C/G/T."""
    pass


_COMPLEMENT = {
    'A': 'T', 'T': 'A',
    'G': 'C', 'C': 'G',
}


def extract_kmers(sequence: str, k: int) -> List[str]:
    """
    Slide a window of width k along a sequence.

    Windows come back uppercased, in read order, overlapping by k-1 bases.
    The graph builder feeds these to the de Bruijn graph as k+1-mers.

    Example:
        >>> extract_kmers("ATCGATCG", 3)
        ['ATC', 'TCG', 'CGA', 'GAT', 'ATC', 'TCG']
    """
    sequence = sequence.upper()
    return [sequence[i:i + k] for i in range(len(sequence) - k + 1)]


def reverse_complement(sequence: str) -> str:
    """
    Generate reverse complement of DNA sequence.

    Input is case-insensitive; output is always uppercase.

    Args:
        sequence: DNA sequence string over A/C/G/T

    Returns:
        Reverse complement sequence

    Raises:
        InvalidBaseError: If any character is not A, C, G or T

    Example:
        >>> reverse_complement("TGTAA")
        'TTACA'
    """
    sequence = sequence.upper()
    result = []

    for offset, base in enumerate(reversed(sequence)):
        try:
            result.append(_COMPLEMENT[base])
        except KeyError:
            position = len(sequence) - 1 - offset
            raise InvalidBaseError(
                f"Unrecognised DNA character {base!r} at position {position}"
            ) from None

    return ''.join(result)


def is_cyclic_permutation(query: str, target: str) -> bool:
    """
    Check whether query is a rotation of the circular string target.

    A rotation of target is always a substring of target doubled; a query
    longer than target never is.

    Example:
        >>> is_cyclic_permutation("TTACA", "ACATT")
        True
        >>> is_cyclic_permutation("TTAA", "TTTT")
        False
    """
    if len(query) > len(target):
        return False
    return query in target + target


__all__ = [
    'InvalidBaseError',
    'extract_kmers',
    'reverse_complement',
    'is_cyclic_permutation',
]
