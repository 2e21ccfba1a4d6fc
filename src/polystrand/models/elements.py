"""
Monomer elements: nucleotides, amino acids and generic spheres.

Two storage layouts:
    - Nucleotides keep their centre, backbone site and a1 on the element.
    - Amino acids and generic spheres keep positions in the owning system's
      flat coordinate tables at their slot index (sid); orientation stays on
      the element.

Each family owns a pure pair of functions relating the stored fields to the
frame: calc_backbone_position (frame -> backbone site) and derive_a3
(centre, backbone site, a1 -> a3).
"""

from typing import Optional

import numpy as np

from ..core.frames import OrientedFrame
from ..core.vectors import as_vector, normalize
from ..core.helix.constants import DNA_B_FORM, RNA_A_FORM

DNA_ALPHABET = frozenset("ACGT")
RNA_ALPHABET = frozenset("ACGU")
AMINO_ACID_ALPHABET = frozenset("ACDEFGHIKLMNPQRSTVWYX")


class BasicElement:
    """
    One chain unit. Never exists without an owning strand.

    Attributes:
        gid: Globally unique id (assigned by the element registry).
        strand: Owning strand (back-reference).
        n3, n5: 3' and 5' neighbors, None at a chain end.
        pair: Base-pair partner, if any.
        sid: Slot index in the owning system.
    """

    element_class = "BasicElement"
    alphabet = None

    def __init__(self, gid: Optional[int], strand):
        self.gid = gid
        self.strand = strand
        self.n3 = None
        self.n5 = None
        self.pair = None
        self.sid = None
        self._type = None

    @property
    def id(self):
        return self.gid

    @property
    def type(self):
        return self._type

    @type.setter
    def type(self, value):
        if value is not None and self.alphabet is not None:
            value = str(value).upper()
            if value not in self.alphabet:
                raise ValueError(
                    f"'{value}' is not a valid {self.element_class} type "
                    f"(expected one of {''.join(sorted(self.alphabet))})"
                )
        self._type = value

    def is_type(self, symbol) -> bool:
        if self._type is None or symbol is None:
            return False
        return str(self._type).upper() == str(symbol).upper()

    @property
    def system(self):
        return self.strand.system

    # --- frame access -------------------------------------------------

    def get_pos(self) -> np.ndarray:
        raise NotImplementedError()

    def get_a1(self) -> np.ndarray:
        raise NotImplementedError()

    def get_a3(self) -> np.ndarray:
        raise NotImplementedError()

    def get_a2(self) -> np.ndarray:
        return normalize(np.cross(self.get_a1(), self.get_a3()))

    def get_frame(self) -> OrientedFrame:
        return OrientedFrame(self.get_pos(), self.get_a1(), self.get_a3())

    def set_frame(self, frame: OrientedFrame) -> None:
        raise NotImplementedError()

    def get_backbone_pos(self) -> np.ndarray:
        """Backbone-site position computed from the stored frame."""
        position, a1, a3 = self.get_frame()
        return self.calc_backbone_position(position, a1, a3)

    def translate_position(self, amount) -> None:
        raise NotImplementedError()

    @staticmethod
    def calc_backbone_position(position, a1, a3) -> np.ndarray:
        return as_vector(position)

    # --- pairing ------------------------------------------------------

    def is_paired(self) -> bool:
        return self.pair is not None

    def get_complementary_type(self):
        return None

    # --- views --------------------------------------------------------

    def get_dat_file_output(self) -> str:
        """One configuration line: position, a1, a3, zero velocities."""
        p, a1, a3 = self.get_frame()
        values = [*p, *a1, *a3]
        return " ".join(repr(float(v)) for v in values) + " 0 0 0 0 0 0\n"

    def to_json(self) -> dict:
        json = {
            'id': self.gid,
            'type': self.type,
            'class': self.element_class,
            'n3': self.n3.gid if self.n3 is not None else -1,
            'n5': self.n5.gid if self.n5 is not None else -1,
        }
        if self.pair is not None:
            json['bp'] = self.pair.gid
        return json

    def __repr__(self):
        return f"{type(self).__name__}(gid={self.gid}, type={self.type!r})"


class Nucleotide(BasicElement):
    """Nucleotide storing its centre, backbone site and a1 on itself."""

    element_class = "Nucleotide"
    complement_map = {}
    helix_parameters = None

    def __init__(self, gid: Optional[int], strand):
        super().__init__(gid, strand)
        self._cm = np.zeros(3)
        self._a1 = np.array([1.0, 0.0, 0.0])
        # default pose: a1 along x, a3 along z
        self._bb = self.calc_backbone_position(self._cm, self._a1, [0.0, 0.0, 1.0])

    def get_pos(self) -> np.ndarray:
        return self._cm.copy()

    def get_a1(self) -> np.ndarray:
        return self._a1.copy()

    def get_a3(self) -> np.ndarray:
        return self.derive_a3(self._cm, self._bb, self._a1)

    def get_stored_backbone(self) -> np.ndarray:
        return self._bb.copy()

    def set_frame(self, frame: OrientedFrame) -> None:
        position, a1, a3 = frame
        self._cm = as_vector(position)
        self._a1 = as_vector(a1)
        self._bb = self.calc_backbone_position(position, a1, a3)

    def translate_position(self, amount) -> None:
        amount = as_vector(amount)
        self._cm = self._cm + amount
        self._bb = self._bb + amount

    @staticmethod
    def derive_a3(position, backbone, a1) -> np.ndarray:
        raise NotImplementedError()

    def get_complementary_type(self):
        return self.complement_map.get(self.type)

    def is_rna(self) -> bool:
        return False


class DNANucleotide(Nucleotide):
    """
    DNA nucleotide (oxDNA2 site layout).

        bb = p - 0.34 a1 + 0.3408 a2,  a2 = normalize(a1 x a3)
    """

    element_class = "DNA"
    alphabet = DNA_ALPHABET
    complement_map = {'A': 'T', 'G': 'C', 'C': 'G', 'T': 'A'}
    helix_parameters = DNA_B_FORM

    @staticmethod
    def calc_backbone_position(position, a1, a3) -> np.ndarray:
        a1 = as_vector(a1)
        a2 = normalize(np.cross(a1, as_vector(a3)))
        return as_vector(position) - 0.34 * a1 + 0.3408 * a2

    @staticmethod
    def derive_a3(position, backbone, a1) -> np.ndarray:
        a1 = as_vector(a1)
        a2 = (as_vector(backbone) - as_vector(position) + 0.34 * a1) / 0.3408
        return normalize(np.cross(a2, a1))


class RNANucleotide(Nucleotide):
    """
    RNA nucleotide.

        bb = p - (0.4 a1 + 0.2 a3)
    """

    element_class = "RNA"
    alphabet = RNA_ALPHABET
    complement_map = {'A': 'U', 'G': 'C', 'C': 'G', 'U': 'A'}
    helix_parameters = RNA_A_FORM
    bbns_dist = 0.8246211

    @staticmethod
    def calc_backbone_position(position, a1, a3) -> np.ndarray:
        return as_vector(position) - (0.4 * as_vector(a1) + 0.2 * as_vector(a3))

    @staticmethod
    def derive_a3(position, backbone, a1) -> np.ndarray:
        return (as_vector(backbone) - as_vector(position) + 0.4 * as_vector(a1)) / -0.2

    def is_rna(self) -> bool:
        return True


class TableBackedElement(BasicElement):
    """
    Element whose positions live in the system's flat coordinate tables.

    Row `sid` of cm/bb/ns/bbcon offsets holds this element's sites; a
    sphere-like monomer keeps all four sites at its centre.
    """

    def __init__(self, gid: Optional[int], strand):
        super().__init__(gid, strand)
        self._a1 = np.array([1.0, 0.0, 0.0])
        self._a3 = np.array([0.0, 0.0, 1.0])

    def _row(self, table_name):
        if self.sid is None:
            raise RuntimeError(f"{self!r} has no slot index; register it with its system first")
        return self.system.get_table(table_name)[self.sid]

    def get_pos(self) -> np.ndarray:
        return self._row('cm').copy()

    def get_a1(self) -> np.ndarray:
        return self._a1.copy()

    def get_a3(self) -> np.ndarray:
        return self._a3.copy()

    def set_frame(self, frame: OrientedFrame) -> None:
        position, a1, a3 = frame
        self._a1 = as_vector(a1)
        self._a3 = as_vector(a3)
        backbone = self.calc_backbone_position(position, a1, a3)
        self._row('cm')[:] = position
        self._row('bb')[:] = backbone
        self._row('ns')[:] = position
        self._row('bbcon')[:] = backbone

    def translate_position(self, amount) -> None:
        amount = as_vector(amount)
        for table_name in ('cm', 'bb', 'ns', 'bbcon'):
            self._row(table_name)[:] += amount

    @staticmethod
    def derive_a3(position, backbone, a1):
        # a3 is stored directly; nothing to solve
        return None


class AminoAcid(TableBackedElement):
    element_class = "AA"
    alphabet = AMINO_ACID_ALPHABET


class GenericSphere(TableBackedElement):
    """Multi-sized generic particle representing an arbitrary type."""

    element_class = "GS"
    alphabet = None

    def __init__(self, gid: Optional[int], strand, radius: float = 1.0):
        super().__init__(gid, strand)
        self.radius = radius

    def to_json(self) -> dict:
        json = super().to_json()
        json['radius'] = self.radius
        return json
