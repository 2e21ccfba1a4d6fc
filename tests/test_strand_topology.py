"""
Tests for Strand topology: ends, traversal, search and serialization.
"""

import pytest

from polystrand.models.exceptions import (
    ElementNotFoundError, StrandSeedError, TopologyError,
)


class TestUpdateEnds:
    """Tests for end discovery on linear and circular chains."""

    def test_linear_ends(self, system, build_chain):
        strand, elements = build_chain(system, "ACGTA")
        assert strand.end5 is elements[0]
        assert strand.end3 is elements[-1]
        assert not strand.is_circular()

    def test_seed_from_any_element(self, system, build_chain):
        strand, elements = build_chain(system, "ACGTA")
        for e in elements:
            strand.set_from(e)
            assert strand.end5 is elements[0]
            assert strand.end3 is elements[-1]

    def test_circular_ends(self, system, build_chain):
        strand, elements = build_chain(system, "ACGTAC", circular=True)
        assert strand.is_circular()
        assert strand.end3.n3 is strand.end5

    def test_circular_seed_from_any_element(self, system, build_chain):
        strand, elements = build_chain(system, "ACGT", circular=True)
        for e in elements:
            strand.set_from(e)
            assert strand.is_circular()
            assert strand.get_length() == 4

    def test_single_element(self, system, build_chain):
        strand, elements = build_chain(system, "A")
        assert strand.end3 is strand.end5 is elements[0]
        assert strand.get_length() == 1

    def test_single_element_circular(self, system, build_chain):
        strand, elements = build_chain(system, "A", circular=True)
        assert strand.is_circular()
        assert strand.get_length() == 1

    def test_seed_none_rejected(self, system, build_chain):
        strand, elements = build_chain(system, "ACG")
        with pytest.raises(StrandSeedError):
            strand.set_from(None)
        assert strand.end5 is elements[0]
        assert strand.end3 is elements[-1]

    def test_malformed_chain_rejected(self, system, build_chain):
        """A tail leading into a loop is neither linear nor circular."""
        strand, elements = build_chain(system, "ACGT")
        elements[-1].n3 = elements[1]
        with pytest.raises(TopologyError):
            strand.set_from(elements[0])

    def test_set_from_adopts_elements(self, system, build_chain):
        strand, elements = build_chain(system, "ACG")
        other = system.create_strand()
        other.set_from(elements[1])
        assert all(e.strand is other for e in elements)

    def test_empty_strand(self, system):
        strand = system.create_strand()
        assert strand.is_empty()
        assert strand.get_monomers() == []
        assert strand.get_length() == 0
        assert strand.get_sequence() == ""


class TestTraversal:
    """Tests for natural-order traversal."""

    def test_nucleic_acid_natural_order(self, system, build_chain):
        strand, elements = build_chain(system, "ACGTT")
        assert strand.get_monomers() == elements
        assert strand.get_monomers(reverse=True) == elements[::-1]
        assert strand.get_sequence() == "ACGTT"

    def test_peptide_natural_order_is_inverted(self, system, build_chain):
        """Peptides walk from the 3' end along 5' links."""
        strand, elements = build_chain(system, "MKV", family="peptide")
        assert strand.get_monomers() == elements[::-1]
        assert strand.get_sequence() == "VKM"

    def test_circular_walk_visits_each_once(self, system, build_chain):
        strand, elements = build_chain(system, "ACGTAC", circular=True)
        assert len(strand.get_monomers()) == 6
        assert set(map(id, strand.get_monomers())) == set(map(id, elements))

    def test_for_each_passes_index(self, system, build_chain):
        strand, elements = build_chain(system, "ACG")
        seen = []
        strand.for_each(lambda e, i: seen.append((i, e.type)))
        assert seen == [(0, "A"), (1, "C"), (2, "G")]

    def test_condition_stops_walk(self, system, build_chain):
        strand, elements = build_chain(system, "ACGTA")
        visited = strand.map(lambda e, i: e.type, condition=lambda e, i: e.type != "T")
        assert visited == ["A", "C", "G"]

    def test_filter(self, system, build_chain):
        strand, elements = build_chain(system, "ACGAA")
        assert strand.filter(lambda e, i: e.type == "A") == [elements[0], elements[3], elements[4]]

    def test_iteration(self, system, build_chain):
        strand, elements = build_chain(system, "ACG")
        assert list(strand) == elements


class TestSubstrandAndSearch:
    """Tests for substrand extraction and sequence search."""

    def test_substrand(self, system, build_chain):
        strand, elements = build_chain(system, "ACGTACGT")
        assert strand.get_substrand(elements[2], elements[5]) == elements[2:6]

    def test_substrand_single(self, system, build_chain):
        strand, elements = build_chain(system, "ACGT")
        assert strand.get_substrand(elements[1], elements[1]) == [elements[1]]

    def test_substrand_wrong_order(self, system, build_chain):
        strand, elements = build_chain(system, "ACGT")
        with pytest.raises(ElementNotFoundError):
            strand.get_substrand(elements[3], elements[1])

    def test_search_all_matches(self, system, build_chain):
        strand, elements = build_chain(system, "ACGTTACG")
        matches = strand.search("ACG")
        assert matches == [elements[0:3], elements[5:8]]

    def test_search_no_match(self, system, build_chain):
        strand, _ = build_chain(system, "ACGT")
        assert strand.search("GGG") == []

    def test_search_empty_pattern(self, system, build_chain):
        strand, _ = build_chain(system, "ACGT")
        assert strand.search("") == []

    def test_search_resyncs_on_first_symbol(self, system, build_chain):
        strand, elements = build_chain(system, "AACG")
        assert strand.search("ACG") == [elements[1:4]]

    def test_search_does_not_backtrack(self, system, build_chain):
        """Only the failing element is re-tested against the first symbol."""
        strand, _ = build_chain(system, "AAAC")
        # the run starting at index 1 is skipped: the third A only restarts the match
        assert strand.search("AAC") == []
        strand2, elements2 = build_chain(system, "ACACG")
        assert strand2.search("ACG") == [elements2[2:5]]


class TestSerialization:
    """Tests for JSON views of strands and elements."""

    def test_strand_to_json(self, system, build_chain):
        strand, elements = build_chain(system, "ACG")
        strand.label = "staple"
        record = strand.to_json()
        assert record['class'] == "NucleicAcidStrand"
        assert record['label'] == "staple"
        assert record['end5'] == elements[0].gid
        assert record['end3'] == elements[-1].gid
        assert [m['type'] for m in record['monomers']] == ["A", "C", "G"]

    def test_element_to_json_sentinels(self, system, build_chain):
        strand, elements = build_chain(system, "ACG")
        record = elements[0].to_json()
        assert record['n5'] == -1
        assert record['n3'] == elements[1].gid
        assert 'bp' not in record

    def test_class_tags(self, system, build_chain):
        peptide, _ = build_chain(system, "MK", family="peptide")
        generic, _ = build_chain(system, "ab", family="generic")
        assert peptide.to_json()['class'] == "Peptide"
        assert generic.to_json()['class'] == "GS"

    def test_empty_strand_is_truthy(self, system):
        assert system.create_strand()
