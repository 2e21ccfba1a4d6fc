"""
Tests for StrandEditManager: helix extension, insertion, ligation and nicking.
"""

import numpy as np
import pytest

from polystrand.config.settings import config_from_dict
from polystrand.core.frames import OrientedFrame
from polystrand.core.helix import DNA_B_FORM, Direction, extend_helix
from polystrand.core.vectors import X_AXIS, Z_AXIS
from polystrand.managers.strand_edit_manager import StrandEditManager
from polystrand.models.exceptions import (
    StrandSeedError, TopologyError, UnsupportedStrandOperationError,
)

REVERSE_COMPLEMENT = {"A": "T", "C": "G", "G": "C", "T": "A"}


def reverse_complement(sequence):
    return "".join(REVERSE_COMPLEMENT[s] for s in reversed(sequence))


def assert_backrefs(strand):
    for e in strand.get_monomers():
        assert e.strand is strand


@pytest.fixture
def editor(system):
    return StrandEditManager(system)


class TestExtendStrand:
    """Tests for extension along an ideal helix."""

    def test_extend_3_prime(self, system, editor):
        seed = editor.create_strand_from_sequence("A").elements[0]
        strand = seed.strand
        result = editor.extend_strand(strand, "CGT", Direction.N3)
        assert strand.get_sequence() == "ACGT"
        assert strand.end5 is seed
        assert strand.end3 is result.elements[-1]
        assert result.complement is None

    def test_extend_5_prime(self, system, editor):
        seed = editor.create_strand_from_sequence("A").elements[0]
        strand = seed.strand
        result = editor.extend_strand(strand, "CGT", "n5")
        # generation order moves away from the 5' end
        assert strand.get_sequence() == "TGCA"
        assert strand.end3 is seed
        assert strand.end5 is result.elements[-1]

    def test_frames_match_engine(self, system, editor):
        seed = editor.create_strand_from_sequence("A").elements[0]
        start = seed.get_frame()
        result = editor.extend_strand(seed.strand, "CGTA")
        expected = extend_helix(start, 4, Direction.N3, False, DNA_B_FORM)
        for e, frame in zip(result.elements, expected):
            assert e.get_frame().is_close(frame, atol=1e-9)

    def test_double_builds_paired_complement(self, system, editor):
        seed = editor.create_strand_from_sequence("A").elements[0]
        result = editor.extend_strand(seed.strand, "CGTT", double=True)
        complement = result.complement
        assert complement is not None
        assert complement.get_sequence() == reverse_complement("CGTT")
        for e in result.elements:
            assert e.pair is not None
            assert e.pair.pair is e
            assert e.pair.strand is complement
        assert_backrefs(complement)

    def test_double_is_antiparallel(self, system, editor):
        seed = editor.create_strand_from_sequence("A").elements[0]
        result = editor.extend_strand(seed.strand, "CGTT", double=True)
        partners_5_to_3 = [e.pair for e in reversed(result.elements)]
        assert result.complement.get_monomers() == partners_5_to_3

    def test_empty_sequence(self, system, editor):
        seed = editor.create_strand_from_sequence("A").elements[0]
        result = editor.extend_strand(seed.strand, "", double=True)
        assert result.elements == []
        assert result.complement is None
        assert seed.strand.get_length() == 1

    def test_invalid_symbol_leaves_strand_unchanged(self, system, editor):
        seed = editor.create_strand_from_sequence("AC").elements[0]
        elements_before = len(system.registry)
        with pytest.raises(ValueError):
            editor.extend_strand(seed.strand, "GUA")
        assert seed.strand.get_sequence() == "AC"
        assert len(system.registry) == elements_before

    def test_rna_extension(self, system, editor):
        result = editor.create_strand_from_sequence("ACGU", nucleic_type="RNA", double=True)
        strand = result.elements[0].strand
        assert strand.get_sequence() == "ACGU"
        assert all(e.is_rna() for e in strand.get_monomers())
        assert result.complement.get_sequence() == "ACG"

    def test_empty_strand_rejected(self, system, editor):
        with pytest.raises(StrandSeedError):
            editor.extend_strand(system.create_strand(), "ACG")

    def test_circular_strand_rejected(self, system, editor, build_chain):
        strand, _ = build_chain(system, "ACGT", circular=True)
        with pytest.raises(TopologyError):
            editor.extend_strand(strand, "A")

    def test_peptide_rejected(self, system, editor, build_chain):
        strand, _ = build_chain(system, "MKV", family="peptide")
        with pytest.raises(UnsupportedStrandOperationError):
            editor.extend_strand(strand, "A")

    def test_config_overrides_twist(self, system):
        config = config_from_dict({"helix": {"dna": {"twist_deg": 30.0}}})
        editor = StrandEditManager(system, config)
        seed = editor.create_strand_from_sequence("A").elements[0]
        start = seed.get_frame()
        result = editor.extend_strand(seed.strand, "C")
        custom = config.helix.parameters_for("DNA")
        expected = extend_helix(start, 1, Direction.N3, False, custom)
        assert result.elements[0].get_frame().is_close(expected[0], atol=1e-9)

    def test_records_update(self, system, editor):
        seed = editor.create_strand_from_sequence("A").elements[0]
        system.update_history.clear()
        editor.extend_strand(seed.strand, "CG")
        assert system.update_history == [['instanceOffset']]


class TestCreateStrandFromSequence:
    """Tests for building whole strands."""

    def test_first_monomer_at_frame(self, system, editor):
        frame = OrientedFrame([3.0, 0.0, 0.0], X_AXIS, Z_AXIS)
        result = editor.create_strand_from_sequence("GATTACA", frame=frame)
        assert result.elements[0].get_frame().is_close(frame, atol=1e-9)
        assert result.elements[0].strand.get_sequence() == "GATTACA"

    def test_peptide_layout(self, system, editor):
        result = editor.create_strand_from_sequence("MKV", family="peptide", spacing=2.0)
        strand = result.elements[0].strand
        assert strand.get_sequence() == "MKV"
        z = [e.get_pos()[2] for e in strand.get_monomers()]
        assert z == pytest.approx([0.0, 2.0, 4.0])

    def test_empty_sequence_rejected(self, editor):
        with pytest.raises(ValueError):
            editor.create_strand_from_sequence("")

    def test_invalid_symbol_creates_nothing(self, system, editor):
        with pytest.raises(ValueError):
            editor.create_strand_from_sequence("GAUTACA")
        assert system.strands == []
        assert len(system.registry) == 0

    def test_unknown_nucleic_type(self, system, editor):
        with pytest.raises(ValueError):
            editor.create_strand_from_sequence("ACG", nucleic_type="XNA")
        assert system.strands == []


class TestInsertAfter:
    """Tests for single-element insertion."""

    def test_insert_in_middle(self, system, editor, build_chain):
        strand, elements = build_chain(system, "ACG")
        new = editor.insert_after(elements[0], "T")
        assert strand.get_sequence() == "ATCG"
        assert new.n5 is elements[0]
        assert new.n3 is elements[1]
        assert elements[1].n5 is new

    def test_insert_at_3_prime_end(self, system, editor, build_chain):
        strand, elements = build_chain(system, "ACG")
        new = editor.insert_after(elements[-1], "T")
        assert strand.end3 is new
        assert strand.get_sequence() == "ACGT"

    def test_insert_midway(self, system, editor):
        result = editor.create_strand_from_sequence("AC")
        a, c = result.elements
        new = editor.insert_after(a, "G")
        np.testing.assert_allclose(new.get_pos(), (a.get_pos() + c.get_pos()) / 2)


class TestLigateAndNick:
    """Tests for joining and cutting strands."""

    def test_circularize(self, system, editor, build_chain):
        strand, elements = build_chain(system, "ACGT")
        editor.ligate(elements[-1], elements[0])
        assert strand.is_circular()
        assert strand.get_length() == 4

    def test_merge_two_strands(self, system, editor, build_chain):
        first, first_elements = build_chain(system, "AC")
        second, second_elements = build_chain(system, "GT")
        kept = editor.ligate(first_elements[-1], second_elements[0])
        assert kept is first
        assert second not in system.strands
        assert first.get_sequence() == "ACGT"
        assert second.is_empty()
        assert_backrefs(first)
        # merged elements stay registered
        assert all(system.registry.get(e.gid) is e for e in second_elements)

    def test_ligate_requires_free_ends(self, system, editor, build_chain):
        strand, elements = build_chain(system, "ACGT")
        with pytest.raises(TopologyError):
            editor.ligate(elements[1], elements[0])

    def test_ligate_rejects_mixed_families(self, system, editor, build_chain):
        dna, dna_elements = build_chain(system, "AC")
        peptide, peptide_elements = build_chain(system, "MK", family="peptide")
        with pytest.raises(UnsupportedStrandOperationError):
            editor.ligate(dna_elements[-1], peptide_elements[0])

    def test_nick_linear(self, system, editor, build_chain):
        strand, elements = build_chain(system, "ACGTA")
        kept, new = editor.nick(elements[1])
        assert kept is strand
        assert strand.get_sequence() == "AC"
        assert new.get_sequence() == "GTA"
        assert new in system.strands
        assert_backrefs(strand)
        assert_backrefs(new)

    def test_nick_circular_opens(self, system, editor, build_chain):
        strand, elements = build_chain(system, "ACGT", circular=True)
        kept, new = editor.nick(elements[1])
        assert new is None
        assert not strand.is_circular()
        assert strand.end3 is elements[1]
        assert strand.end5 is elements[2]
        assert strand.get_sequence() == "GTAC"

    def test_nick_at_3_prime_end_rejected(self, system, editor, build_chain):
        strand, elements = build_chain(system, "ACG")
        with pytest.raises(TopologyError):
            editor.nick(elements[-1])

    def test_ligate_nick_round_trip(self, system, editor, build_chain):
        strand, elements = build_chain(system, "ACGTAC")
        editor.ligate(elements[-1], elements[0])
        editor.nick(elements[-1])
        assert not strand.is_circular()
        assert strand.get_monomers() == elements
