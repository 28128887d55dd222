"""
LoopWeaver Circular Assembly Orchestrator.

Sweeps the k+1-mer size from the read length down to 3 and, at every size:
- Builds a fresh de Bruijn graph from all reads and their reverse complements
- Extracts cyclic superstrings, shaves them to their period, drops short ones
- Treats exactly two survivors as the two strands of one circular template

The first resolved size (the largest) supplies the template; every later
resolved size is checked against it by rotation, and disagreements are kept
as warnings. The sweep always runs to the end.
"""

from typing import Optional, Dict, Any, List
import copy
from dataclasses import dataclass, field
import logging

from ..assembly_core.dbg_engine_module import build_graph, MIN_KPLUS1_SIZE
from ..assembly_core.cycle_extraction_module import (
    extract_cyclic_superstrings,
    shave_superstrings,
    filter_superstrings,
)
from ..config.schema import DEFAULT_CONFIG, ConfigValidationError, _deep_merge, validate_config
from ..io.io_core_module import validate_read_lengths
from .sequence_utils import is_cyclic_permutation

logger = logging.getLogger(__name__)


# ============================================================================
# Data Structures
# ============================================================================

@dataclass
class KmerSizeOutcome:
    """
    Result of one k+1-mer size iteration.

    Attributes:
        kplus1_size: Window length used to build the graph
        superstrings: Superstrings left after shaving and filtering
        node_count: Graph nodes before extraction
        edge_count: Graph edges before extraction
        resolved: Whether exactly the expected number of superstrings survived
        consistent: None when this size adopted the template or did not
            resolve, otherwise whether it agreed with the template
    """
    kplus1_size: int
    superstrings: List[str]
    node_count: int = 0
    edge_count: int = 0
    resolved: bool = False
    consistent: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kplus1_size': self.kplus1_size,
            'superstrings': list(self.superstrings),
            'node_count': self.node_count,
            'edge_count': self.edge_count,
            'resolved': self.resolved,
            'consistent': self.consistent,
        }


@dataclass
class AssemblyResult:
    """Result of a full k+1-mer size sweep."""
    template: Optional[str] = None
    template_kplus1_size: Optional[int] = None
    read_length: int = 0
    outcomes: List[KmerSizeOutcome] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when some size resolved to a template."""
        return self.template is not None

    def resolved_sizes(self) -> List[int]:
        return [o.kplus1_size for o in self.outcomes if o.resolved]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'template': self.template,
            'template_kplus1_size': self.template_kplus1_size,
            'read_length': self.read_length,
            'success': self.success,
            'outcomes': [o.to_dict() for o in self.outcomes],
            'warnings': list(self.warnings),
        }


# ============================================================================
# Orchestrator
# ============================================================================

class CircularAssembler:
    """
    Reconstructs a circular template from equal-length reads by sweeping
    the k+1-mer size downward.
    """

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize assembler.

        Args:
            config: Optional configuration dictionary, merged over defaults

        Raises:
            ConfigValidationError: If the merged configuration is invalid
        """
        self.config = _deep_merge(copy.deepcopy(DEFAULT_CONFIG), config or {})
        errors = validate_config(self.config)
        if errors:
            raise ConfigValidationError("; ".join(errors))

        assembly = self.config['assembly']
        self.min_kplus1_size = max(assembly['min_kplus1_size'], MIN_KPLUS1_SIZE)
        self.max_kplus1_size = assembly['max_kplus1_size']
        self.expected_superstrings = assembly['expected_superstrings']
        self.min_superstring_length = assembly['min_superstring_length']
        self.validate_lengths = self.config['input']['validate_read_lengths']
        self.logger = logging.getLogger(f"{__name__}.CircularAssembler")

    def assemble_at_size(
        self,
        sequences: List[str],
        kplus1_size: int,
        read_length: int
    ) -> KmerSizeOutcome:
        """
        Build, extract, shave and filter at one k+1-mer size.

        The graph is local to this call and discarded afterwards.
        """
        graph = build_graph(sequences, kplus1_size, read_length)
        node_count = graph.node_count
        edge_count = graph.edge_count
        graph.log_contents()

        superstrings = extract_cyclic_superstrings(graph)
        superstrings = shave_superstrings(superstrings, kplus1_size)
        min_length = self.min_superstring_length or read_length
        superstrings = filter_superstrings(superstrings, min_length)

        self.logger.debug(
            f"k+1={kplus1_size}: {node_count} nodes, {edge_count} edges, "
            f"{len(superstrings)} cyclic superstrings kept"
        )

        return KmerSizeOutcome(
            kplus1_size=kplus1_size,
            superstrings=superstrings,
            node_count=node_count,
            edge_count=edge_count,
            resolved=len(superstrings) == self.expected_superstrings,
        )

    def assemble(self, sequences: List[str]) -> AssemblyResult:
        """
        Run the full sweep over k+1-mer sizes.

        Args:
            sequences: Reads sampled from both strands of a circular molecule

        Returns:
            AssemblyResult; success is False when no size resolved

        Raises:
            ValueError: If there are no reads
            InconsistentReadLengthError: If read lengths differ (when
                validation is enabled)
            InvalidBaseError: If a read contains a non-ACGT character
        """
        if not sequences:
            raise ValueError("No reads to assemble")

        if self.validate_lengths:
            read_length = validate_read_lengths(sequences)
        else:
            read_length = len(sequences[0])

        top = read_length
        if self.max_kplus1_size is not None:
            top = min(top, self.max_kplus1_size)

        self.logger.info(
            f"Assembling {len(sequences)} reads of length {read_length}, "
            f"k+1-mer sizes {top}..{self.min_kplus1_size}"
        )

        result = AssemblyResult(read_length=read_length)
        template = None

        for kplus1_size in range(top, self.min_kplus1_size - 1, -1):
            outcome = self.assemble_at_size(sequences, kplus1_size, read_length)
            result.outcomes.append(outcome)

            if not outcome.resolved:
                continue

            self.logger.info(
                f"{len(outcome.superstrings)} cyclic superstrings found "
                f"at k+1-mer size {kplus1_size}"
            )

            if template is None:
                template = outcome.superstrings[0]
                result.template_kplus1_size = kplus1_size
                continue

            outcome.consistent = any(
                is_cyclic_permutation(superstring, template)
                for superstring in outcome.superstrings
            )
            if not outcome.consistent:
                message = (
                    f"Cyclic superstrings for k+1-mer size of {kplus1_size} "
                    f"found not identical to template"
                )
                self.logger.warning(message)
                result.warnings.append(message)

        result.template = template
        if template is None:
            self.logger.warning("No k+1-mer size yielded a stable cyclic assembly")
        else:
            self.logger.info(
                f"Template of length {len(template)} "
                f"from k+1-mer size {result.template_kplus1_size}"
            )
        return result


def assemble_circular_genome(
    sequences: List[str],
    config: Optional[Dict] = None
) -> AssemblyResult:
    """
    Convenience function to run the k+1-mer size sweep.

    Args:
        sequences: Equal-length reads
        config: Optional configuration overrides

    Returns:
        AssemblyResult
    """
    return CircularAssembler(config).assemble(sequences)
