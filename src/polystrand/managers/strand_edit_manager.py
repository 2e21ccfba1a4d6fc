from dataclasses import dataclass
from typing import List, Optional

from ..config.settings import BuildConfig
from ..core.frames import OrientedFrame
from ..core.helix import Direction, extend_helix
from ..core.vectors import normalize
from ..models.elements import BasicElement, DNANucleotide, Nucleotide, RNANucleotide
from ..models.exceptions import (
    StrandSeedError, TopologyError, UnsupportedStrandOperationError,
)
from ..models.strand import Strand
from ..models.strand_families import get_family
from ..utils.logger.logger import Logger

DEFAULT_FRAME = OrientedFrame([0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0])


@dataclass
class ExtensionResult:
    """
    Outcome of a helix extension.

    Attributes:
        elements: New elements on the extended strand, in generation order
            (moving away from the anchor).
        complement: Newly created complementary strand, if requested.
    """
    elements: List[BasicElement]
    complement: Optional[Strand] = None


def link_chain(elements, direction: Direction) -> None:
    """Link consecutive elements so each one follows the previous along `direction`."""
    for prev, nxt in zip(elements, elements[1:]):
        if direction is Direction.N3:
            prev.n3 = nxt
            nxt.n5 = prev
        else:
            prev.n5 = nxt
            nxt.n3 = prev


class StrandEditManager:
    """Grow, join and cut strands of one system."""

    def __init__(self, system, config: Optional[BuildConfig] = None):
        Logger.log(f"start StrandEditManager __init__(self, {system})")
        self.system = system
        self.config = config if config is not None else BuildConfig()
        Logger.log("end StrandEditManager __init__(self, system)")

    def helix_parameters_for(self, element):
        """Helix constants for the family of `element` (config overrides applied)."""
        if not isinstance(element, Nucleotide):
            raise UnsupportedStrandOperationError(
                f"No helix geometry for {type(element).__name__} elements."
            )
        return self.config.helix.parameters_for("RNA" if element.is_rna() else "DNA")

    # EXTEND STRAND ALONG AN IDEAL HELIX
    def extend_strand(self, strand: Strand, sequence: str, direction=Direction.N3,
                      double: bool = False) -> ExtensionResult:
        """
        Continue `strand` from its 3' (N3) or 5' (N5) end along an ideal helix.

        Args:
            strand: Non-empty, linear nucleic-acid strand.
            sequence: Types of the new monomers, in growth order.
            direction: Direction.N3 or Direction.N5.
            double: Also build the base-paired complementary strand.

        Raises:
            UnsupportedStrandOperationError: Strand family has no helix geometry.
            StrandSeedError: Strand is empty.
            TopologyError: Strand is circular.
            ValueError: A symbol is not valid for the strand's nucleotides.
        """
        Logger.log(f"start extend_strand(self, {strand.id}, {sequence!r}, {direction}, {double})")
        direction = Direction.parse(direction)
        if not strand.family.supports_helix:
            raise UnsupportedStrandOperationError(
                f"Cannot extend a {strand.family.class_tag} strand along a helix."
            )
        if strand.is_empty():
            raise StrandSeedError("Cannot extend an empty strand.")
        if strand.is_circular():
            raise TopologyError(f"Cannot extend circular strand {strand.id}.")

        with strand._lock:
            anchor = strand.end3 if direction is Direction.N3 else strand.end5
            alphabet = anchor.alphabet
            sequence = str(sequence).upper()
            invalid = [s for s in sequence if s not in alphabet]
            if invalid:
                raise ValueError(
                    f"Invalid {anchor.element_class} symbol(s) {''.join(invalid)!r} in {sequence!r}"
                )

            n = len(sequence)
            kind = "rna" if anchor.is_rna() else "dna"
            frames = extend_helix(
                anchor.get_frame(), n, direction, double, self.helix_parameters_for(anchor)
            )

            new_elements = []
            for symbol, frame in zip(sequence, frames[:n]):
                e = strand.create_element(kind)
                e.type = symbol
                e.set_frame(frame)
                new_elements.append(e)

            link_chain([anchor] + new_elements, direction)
            strand.update_ends()

            complement = None
            if double and n > 0:
                complement = self._build_complement(strand, new_elements, frames[n:], direction, kind)

        self.system.call_updates(['instanceOffset'])
        Logger.log(f"end extend_strand: added {len(new_elements)} element(s) to strand {strand.id}")
        return ExtensionResult(elements=new_elements, complement=complement)

    def _build_complement(self, strand, partners, frames, direction, kind):
        """
        frames[k] pairs with partners[n-1-k]; linking them in order along
        `direction` makes the new strand antiparallel to `strand`.
        """
        n = len(partners)
        complement = self.system.create_strand(strand.family, **strand.kwdata)
        elements = []
        for k, frame in enumerate(frames):
            partner = partners[n - 1 - k]
            e = complement.create_element(kind)
            e.type = partner.get_complementary_type()
            e.set_frame(frame)
            e.pair = partner
            partner.pair = e
            elements.append(e)
        link_chain(elements, direction)
        complement.set_from(elements[0])
        Logger.log(f"_build_complement: strand {complement.id} pairs with strand {strand.id}")
        return complement

    # CREATE A STRAND FROM A SEQUENCE
    def create_strand_from_sequence(self, sequence: str, family="nucleic_acid",
                                    frame: Optional[OrientedFrame] = None,
                                    nucleic_type: str = "DNA", double: bool = False,
                                    spacing: float = 1.0, label=None) -> ExtensionResult:
        """
        Create a strand holding `sequence`, 5'->3' for nucleic acids.

        Nucleic acids: the first monomer sits at `frame`, the rest follow
        the ideal helix. With `double`, the seed monomer itself stays
        unpaired. Peptide/generic chains: monomers are evenly spaced
        along a3 starting at `frame`.

        Returns:
            ExtensionResult with every element of the new strand.
        """
        Logger.log(f"start create_strand_from_sequence(self, {sequence!r}, {family})")
        if not sequence:
            raise ValueError("sequence must not be empty")
        family = get_family(family)
        if family.supports_helix:
            nucleic_type = str(nucleic_type).upper()
            if nucleic_type not in ("DNA", "RNA"):
                raise ValueError(f"Unknown nucleic acid type: {nucleic_type!r} (expected DNA or RNA)")
            element_type = RNANucleotide if nucleic_type == "RNA" else DNANucleotide
        else:
            element_type = family.element_type
        if element_type.alphabet is not None:
            invalid = [s for s in str(sequence).upper() if s not in element_type.alphabet]
            if invalid:
                raise ValueError(
                    f"Invalid {element_type.element_class} symbol(s) {''.join(invalid)!r} in {sequence!r}"
                )
        frame = frame if frame is not None else DEFAULT_FRAME

        strand = self.system.create_strand(family, label=label)
        if strand.is_nucleic_acid():
            strand.kwdata["type"] = nucleic_type

        first = strand.create_element()
        first.type = sequence[0]
        first.set_frame(frame)
        strand.set_from(first)

        if strand.family.supports_helix:
            result = self.extend_strand(strand, sequence[1:], Direction.N3, double)
            Logger.log("end create_strand_from_sequence")
            return ExtensionResult(elements=[first] + result.elements, complement=result.complement)

        step = normalize(frame.a3) * spacing
        elements = [first]
        for i, symbol in enumerate(sequence[1:], start=1):
            e = strand.create_element()
            e.type = symbol
            e.set_frame(frame.translated(step * i))
            elements.append(e)
        # natural order for table-backed chains runs from end3 along 5' links
        link_chain(elements, Direction.N5)
        strand.set_from(first)
        self.system.call_updates(['instanceOffset'])
        Logger.log("end create_strand_from_sequence")
        return ExtensionResult(elements=elements)

    # INSERT A SINGLE ELEMENT
    def insert_after(self, element: BasicElement, type_symbol, frame: Optional[OrientedFrame] = None):
        """
        Insert a new element on `element`'s 3' side.

        Without `frame` the new element takes `element`'s orientation and
        sits midway to the old 3' neighbor (or one unit along a3 at a 3' end).
        """
        strand = element.strand
        Logger.log(f"start insert_after(self, {element!r}, {type_symbol!r})")
        with strand._lock:
            kind = None
            if isinstance(element, Nucleotide):
                kind = "rna" if element.is_rna() else "dna"
            new = strand.create_element(kind)
            new.type = type_symbol
            if frame is None:
                old_frame = element.get_frame()
                if element.n3 is not None:
                    position = (old_frame.position + element.n3.get_pos()) / 2
                else:
                    position = old_frame.position + normalize(old_frame.a3)
                frame = OrientedFrame(position, old_frame.a1, old_frame.a3)
            new.set_frame(frame)

            old_n3 = element.n3
            new.n5 = element
            new.n3 = old_n3
            element.n3 = new
            if old_n3 is not None:
                old_n3.n5 = new
            strand.update_ends()
        self.system.call_updates(['instanceOffset'])
        Logger.log("end insert_after")
        return new

    # LIGATE TWO ENDS
    def ligate(self, end3: BasicElement, end5: BasicElement) -> Strand:
        """
        Bond the 3' end `end3` to the 5' end `end5`.

        Same strand: the strand becomes circular. Different strands: the
        strand of `end5` is merged into the strand of `end3` and removed.

        Raises:
            TopologyError: `end3` already has a 3' neighbor or `end5` a 5' one.
            UnsupportedStrandOperationError: strands of different families
                or systems.
        """
        Logger.log(f"start ligate(self, {end3!r}, {end5!r})")
        if end3.n3 is not None or end5.n5 is not None:
            raise TopologyError("Can only ligate a free 3' end to a free 5' end.")
        keep = end3.strand
        donor = end5.strand
        if keep.system is not donor.system:
            raise UnsupportedStrandOperationError("Cannot ligate strands of different systems.")
        if keep.family is not donor.family:
            raise UnsupportedStrandOperationError(
                f"Cannot ligate a {keep.family.class_tag} strand to a {donor.family.class_tag} strand."
            )

        with keep._lock:
            end3.n3 = end5
            end5.n5 = end3
            if donor is keep:
                keep.update_ends()
                Logger.log(f"ligate: strand {keep.id} circularized")
            else:
                keep.set_from(end3)
                self.system.remove_strand(donor, deregister_elements=False)
                donor.end3 = donor.end5 = None
                Logger.log(f"ligate: strand {donor.id} merged into strand {keep.id}")
        self.system.call_updates(['instanceOffset'])
        Logger.log("end ligate")
        return keep

    # NICK A STRAND
    def nick(self, element: BasicElement):
        """
        Cut the bond between `element` and its 3' neighbor.

        Returns:
            (strand, new_strand): a circular strand is opened in place and
            new_strand is None; a linear strand keeps the 5' part and the 3'
            part moves to new_strand.

        Raises:
            TopologyError: `element` has no 3' neighbor.
        """
        Logger.log(f"start nick(self, {element!r})")
        neighbor = element.n3
        if neighbor is None:
            raise TopologyError(f"{element!r} has no 3' neighbor to cut from.")
        strand = element.strand
        with strand._lock:
            was_circular = strand.is_circular()
            element.n3 = None
            neighbor.n5 = None
            strand.set_from(element)
            new_strand = None
            if not was_circular:
                new_strand = self.system.create_strand(strand.family, **strand.kwdata)
                new_strand.set_from(neighbor)
        self.system.call_updates(['instanceOffset'])
        Logger.log(f"end nick: {'opened circular strand' if was_circular else 'split strand'} {strand.id}")
        return strand, new_strand

