"""
Strand families: the closed set of behaviors a strand delegates to.

Each family decides:
    - which element class the strand creates (create_element)
    - which walking direction is "natural" (natural_reversed)
    - how a rigid translation is applied (apply_translation)

Nucleic acids are written 3'->5' in oxDNA files, i.e. backwards relative to
their natural 5'->3' order; peptides and generic chains are written the
natural way, so their default traversal is inverted.
"""

import numpy as np

from .elements import AminoAcid, DNANucleotide, GenericSphere, RNANucleotide
from ..utils.logger.logger import Logger

COORDINATE_TABLES = ('ns', 'bb', 'bbcon', 'cm')


class StrandFamily:
    """Interface for strand family behavior."""

    name = None
    class_tag = None
    natural_reversed = False
    supports_helix = False

    def create_element(self, strand, nucleic_type=None):
        """Return a new, unregistered element owned by `strand`, or None."""
        raise NotImplementedError()

    def apply_translation(self, strand, amount: np.ndarray) -> None:
        raise NotImplementedError()

    def __repr__(self):
        return f"{type(self).__name__}()"


class NucleicAcidFamily(StrandFamily):
    """DNA or RNA, chosen by the strand's kwdata['type'] or an explicit type."""

    name = "nucleic_acid"
    class_tag = "NucleicAcidStrand"
    natural_reversed = False
    supports_helix = True

    def create_element(self, strand, nucleic_type=None):
        if nucleic_type is None:
            if strand.kwdata.get('type') == 'RNA':
                return RNANucleotide(None, strand)
            return DNANucleotide(None, strand)

        kind = str(nucleic_type).lower()
        if kind == 'rna':
            return RNANucleotide(None, strand)
        elif kind == 'dna':
            return DNANucleotide(None, strand)
        strand.system.notify(
            f"{nucleic_type} is not a recognized nucleic acid type, "
            "only 'dna' or 'rna' are supported."
        )
        return None

    def apply_translation(self, strand, amount):
        # per-element update: each nucleotide owns its position fields
        for e in strand.get_monomers(reverse=True):
            e.translate_position(amount)


class TableBackedFamily(StrandFamily):
    """
    Families whose positions live in the system's flat coordinate tables.

    Translation is one bulk update over the slot block spanned by the
    strand; when that block has gaps (after insertions or ligations) only
    the strand's own rows are shifted.
    """

    natural_reversed = True
    element_type = None

    def create_element(self, strand, nucleic_type=None):
        if nucleic_type is not None:
            strand.system.notify(
                f"{nucleic_type} is not a valid element type for a {self.class_tag} strand."
            )
            return None
        return self.element_type(None, strand)

    def apply_translation(self, strand, amount):
        monomers = strand.get_monomers()
        if not monomers:
            return
        sids = [e.sid for e in monomers]
        first, last = min(sids), max(sids)
        if last - first + 1 == len(monomers):
            rows = slice(first, last + 1)
        else:
            # block is shared with other strands: only this strand's rows
            Logger.log(
                f"strand {strand.id}: slot block {first}..{last} is not contiguous "
                f"({len(monomers)} monomers), translating its rows one by one"
            )
            rows = np.array(sids)
        system = strand.system
        for table_name in COORDINATE_TABLES:
            system.get_table(table_name)[rows] += amount


class PeptideFamily(TableBackedFamily):
    name = "peptide"
    class_tag = "Peptide"
    element_type = AminoAcid


class GenericFamily(TableBackedFamily):
    name = "generic"
    class_tag = "GS"
    element_type = GenericSphere


FAMILIES = {
    NucleicAcidFamily.name: NucleicAcidFamily(),
    PeptideFamily.name: PeptideFamily(),
    GenericFamily.name: GenericFamily(),
}

CLASS_TAGS = {family.class_tag: family for family in FAMILIES.values()}


def get_family(family) -> StrandFamily:
    """Resolve a family instance, family name or class tag."""
    if isinstance(family, StrandFamily):
        return family
    if family in FAMILIES:
        return FAMILIES[family]
    if family in CLASS_TAGS:
        return CLASS_TAGS[family]
    raise ValueError(
        f"Unknown strand family: {family!r} "
        f"(expected one of {sorted(FAMILIES)} or {sorted(CLASS_TAGS)})"
    )
