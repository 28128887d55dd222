#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Tests for the k+1-mer size sweep orchestrator.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging

import pytest
from loopweaver.config.schema import DEFAULT_CONFIG, ConfigValidationError
from loopweaver.io import InconsistentReadLengthError
from loopweaver.utils.pipeline import (
    AssemblyResult,
    CircularAssembler,
    KmerSizeOutcome,
    assemble_circular_genome,
)
from loopweaver.utils.sequence_utils import (
    InvalidBaseError,
    is_cyclic_permutation,
    reverse_complement,
)


class TestAssembleAtSize:
    """Test a single k+1-mer size iteration."""

    def test_two_strands_resolve(self, circular_reads):
        assembler = CircularAssembler()
        outcome = assembler.assemble_at_size(circular_reads, 6, 6)

        assert outcome.resolved
        assert outcome.superstrings == ["TACGCATCAAGG", "TGATGCGTACCT"]
        assert outcome.node_count == 24
        assert outcome.edge_count == 24

    def test_outcome_superstrings_have_genome_length(self, circular_reads, circular_genome):
        outcome = CircularAssembler().assemble_at_size(circular_reads, 6, 6)

        for superstring in outcome.superstrings:
            assert len(superstring) == len(circular_genome)


class TestCircularAssembler:
    """End-to-end sweep over k+1-mer sizes."""

    def test_recovers_plasmid(self, circular_reads, circular_genome):
        result = assemble_circular_genome(circular_reads)

        assert result.success
        assert result.template == "TACGCATCAAGG"
        assert result.template_kplus1_size == 6
        assert result.read_length == 6
        assert is_cyclic_permutation(
            reverse_complement(result.template), circular_genome
        )

    def test_sweeps_every_size(self, circular_reads):
        result = assemble_circular_genome(circular_reads)

        assert [o.kplus1_size for o in result.outcomes] == [6, 5, 4, 3]

    def test_reverse_strand_reads_give_same_graph(self, circular_reads):
        """Reads from the other strand carry the same evidence."""
        flipped = [reverse_complement(read) for read in circular_reads]

        assert assemble_circular_genome(flipped).template == \
            assemble_circular_genome(circular_reads).template

    def test_lowercase_reads(self, circular_reads):
        lower = [read.lower() for read in circular_reads]

        assert assemble_circular_genome(lower).template == "TACGCATCAAGG"

    def test_no_assembly(self):
        """Homopolymer reads never leave two long superstrings."""
        result = assemble_circular_genome(["AAAA", "AAAA"])

        assert not result.success
        assert result.template is None
        assert result.template_kplus1_size is None
        assert result.resolved_sizes() == []
        assert len(result.outcomes) == 2

    def test_size_range_from_config(self, circular_reads):
        config = {'assembly': {'min_kplus1_size': 5}}
        result = assemble_circular_genome(circular_reads, config)

        assert [o.kplus1_size for o in result.outcomes] == [6, 5]

    def test_max_size_from_config(self, circular_reads):
        config = {'assembly': {'max_kplus1_size': 4}}
        result = assemble_circular_genome(circular_reads, config)

        assert [o.kplus1_size for o in result.outcomes] == [4, 3]

    def test_empty_input(self):
        with pytest.raises(ValueError):
            assemble_circular_genome([])

    def test_inconsistent_read_lengths(self):
        with pytest.raises(InconsistentReadLengthError):
            assemble_circular_genome(["ACGTAC", "ACGTA"])

    def test_invalid_base(self):
        with pytest.raises(InvalidBaseError):
            assemble_circular_genome(["ACGTNA", "ACGTAC"])

    def test_invalid_config(self):
        with pytest.raises(ConfigValidationError):
            CircularAssembler({'assembly': {'min_kplus1_size': 2}})

    def test_empty_config_section(self):
        with pytest.raises(ConfigValidationError, match="'assembly'"):
            CircularAssembler({'assembly': None})

    def test_defaults_are_not_shared(self):
        assembler = CircularAssembler()
        assembler.config['output']['logging']['level'] = 'DEBUG'
        assembler.config['assembly']['min_kplus1_size'] = 5

        assert DEFAULT_CONFIG['output']['logging']['level'] == 'WARNING'
        assert CircularAssembler().config['assembly']['min_kplus1_size'] == 3


class TestTemplateConsistency:
    """Template adoption and rotation checks across sizes."""

    @staticmethod
    def _canned(monkeypatch, outcomes):
        by_size = {o.kplus1_size: o for o in outcomes}

        def fake_assemble_at_size(self, sequences, kplus1_size, read_length):
            return by_size.get(kplus1_size, KmerSizeOutcome(kplus1_size, []))

        monkeypatch.setattr(CircularAssembler, "assemble_at_size", fake_assemble_at_size)

    def test_largest_resolved_size_is_template(self, monkeypatch):
        self._canned(monkeypatch, [
            KmerSizeOutcome(5, ["ACATT", "AATGT"], resolved=True),
            KmerSizeOutcome(4, ["TTACA", "TGTAA"], resolved=True),
        ])
        result = CircularAssembler().assemble(["ACATT", "TTACA"])

        assert result.template == "ACATT"
        assert result.template_kplus1_size == 5
        assert result.outcomes[0].consistent is None
        assert result.outcomes[1].consistent is True
        assert result.warnings == []

    def test_disagreement_warns_without_stopping(self, monkeypatch, caplog):
        self._canned(monkeypatch, [
            KmerSizeOutcome(5, ["ACATT", "AATGT"], resolved=True),
            KmerSizeOutcome(4, ["GGGCC", "GGCCC"], resolved=True),
        ])
        with caplog.at_level(logging.WARNING):
            result = CircularAssembler().assemble(["ACATT", "TTACA"])

        assert result.template == "ACATT"
        assert result.outcomes[1].consistent is False
        assert len(result.warnings) == 1
        assert "k+1-mer size of 4" in result.warnings[0]
        assert "not identical to template" in caplog.text
        assert [o.kplus1_size for o in result.outcomes] == [5, 4, 3]

    def test_unresolved_sizes_are_skipped(self, monkeypatch):
        self._canned(monkeypatch, [
            KmerSizeOutcome(5, ["ACATT"], resolved=False),
            KmerSizeOutcome(3, ["TTACA", "TGTAA"], resolved=True),
        ])
        result = CircularAssembler().assemble(["ACATT", "TTACA"])

        assert result.template == "TTACA"
        assert result.template_kplus1_size == 3
        assert result.resolved_sizes() == [3]


class TestAssemblyResult:

    def test_to_dict(self):
        result = AssemblyResult(
            template="ACATT",
            template_kplus1_size=5,
            read_length=5,
            outcomes=[KmerSizeOutcome(5, ["ACATT", "AATGT"], resolved=True)],
        )
        data = result.to_dict()

        assert data['success'] is True
        assert data['outcomes'][0]['superstrings'] == ["ACATT", "AATGT"]

# LoopWeaver v0.1.0
# Any usage is subject to this software's license.
