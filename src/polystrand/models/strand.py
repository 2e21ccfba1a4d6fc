"""
Strand: an ordered, possibly circular chain of linked monomer elements.

The chain is reachable from two cached ends, end3 and end5. There is no
"circular" flag: update_ends() derives both ends from the links, and a
strand is circular exactly when end3.n3 is end5.
"""

import threading

import numpy as np

from .exceptions import ElementNotFoundError, StrandSeedError, TopologyError
from .strand_families import get_family
from ..core.vectors import as_vector
from ..utils.logger.logger import Logger


class Strand:
    """
    Chain of elements owned by a System.

    Attributes:
        id: Strand id within its system.
        system: Owning system.
        family: StrandFamily deciding element creation, natural direction
            and translation strategy.
        label: Optional label.
        kwdata: Free-form key/value metadata (e.g. {'type': 'RNA'}).
        end3, end5: Chain ends (None while empty).
    """

    def __init__(self, id, system, family="nucleic_acid", label=None, kwdata=None):
        self.id = id
        self.system = system
        self.family = get_family(family)
        self.label = label
        self.kwdata = dict(kwdata or {})
        self.end3 = None
        self.end5 = None
        self._lock = threading.RLock()

    # --- seeding and ends -----------------------------------------------

    def set_from(self, element):
        """
        Seed the strand from any element of an already linked chain.

        Raises:
            StrandSeedError: `element` is None (strand left unmodified).
        """
        if element is None:
            raise StrandSeedError()
        with self._lock:
            self.end3 = self.end5 = element
            self.update_ends()
            self.for_each(self._adopt)

    def _adopt(self, element, index):
        element.strand = self

    def update_ends(self):
        """
        Walk end3 along 3' links and end5 along 5' links to the chain ends.

        Revisiting the start while advancing end3 means the chain is a
        cycle: end5 becomes end3's 3' neighbor. The same holds for end5.

        Raises:
            TopologyError: the walk loops back on an element other than the
                start (ends are restored first).
        """
        if self.end3 is None or self.end5 is None:
            return
        with self._lock:
            original_ends = (self.end3, self.end5)

            start = self.end3
            seen = {id(start)}
            while self.end3.n3 is not None and self.end3.n3 is not self.end5:
                self.end3 = self.end3.n3
                if self.end3 is start:
                    self.end5 = self.end3.n3
                    return
                if id(self.end3) in seen:
                    self.end3, self.end5 = original_ends
                    raise TopologyError(f"Strand {self.id}: 3' links loop back mid-chain.")
                seen.add(id(self.end3))

            start = self.end5
            seen = {id(start)}
            while self.end5.n5 is not None and self.end5.n5 is not self.end3:
                self.end5 = self.end5.n5
                if self.end5 is start:
                    self.end3 = self.end5.n5
                    return
                if id(self.end5) in seen:
                    self.end3, self.end5 = original_ends
                    raise TopologyError(f"Strand {self.id}: 5' links loop back mid-chain.")
                seen.add(id(self.end5))

    def is_circular(self) -> bool:
        return self.end3 is not None and self.end3.n3 is not None and self.end3.n3 is self.end5

    def is_empty(self) -> bool:
        return self.end3 is None and self.end5 is None

    # --- traversal --------------------------------------------------------

    def _walk(self, reverse=False, condition=None):
        """
        The single traversal primitive; yields (index, element).

        Args:
            reverse: Walk 3'->5' instead of 5'->3', before the family's
                natural-direction inversion is applied.
            condition: Optional (element, index) -> bool; the walk stops at
                the first element for which it is false.
        """
        walk_3_to_5 = bool(reverse) != self.family.natural_reversed
        start = self.end3 if walk_3_to_5 else self.end5
        e = start
        i = 0
        while e is not None and (condition is None or condition(e, i)):
            yield i, e
            e = e.n5 if walk_3_to_5 else e.n3
            i += 1
            if e is start:
                break

    def for_each(self, callback, reverse=False, condition=None):
        """Call callback(element, index) along the strand."""
        for i, e in self._walk(reverse, condition):
            callback(e, i)

    def map(self, callback, reverse=False, condition=None) -> list:
        return [callback(e, i) for i, e in self._walk(reverse, condition)]

    def filter(self, callback, reverse=False, condition=None) -> list:
        return [e for i, e in self._walk(reverse, condition) if callback(e, i)]

    def get_monomers(self, reverse=False) -> list:
        """
        All monomers in natural order (5'->3' for nucleic acids).

        Args:
            reverse: Return them in the opposite order.
        """
        return [e for _, e in self._walk(reverse)]

    def get_length(self) -> int:
        return sum(1 for _ in self._walk())

    def __iter__(self):
        return iter(self.get_monomers())

    def get_sequence(self) -> str:
        return ''.join(self.map(lambda e, i: str(e.type) if e.type is not None else ''))

    def get_substrand(self, start, end) -> list:
        """
        Elements from `start` through `end` inclusive, in natural order.

        Raises:
            ElementNotFoundError: `start` is not on the strand, or `end` does
                not follow it.
        """
        out = []
        for _, e in self._walk(condition=lambda e, i: not out or out[-1] is not end):
            if out or e is start:
                out.append(e)
        if not out or out[-1] is not end:
            raise ElementNotFoundError(
                f"No substrand from {start!r} to {end!r} on strand {self.id}."
            )
        return out

    def search(self, pattern: str) -> list:
        """
        Find every run of consecutive elements whose types spell `pattern`.

        On a mismatch the current element is only re-tested against the
        first pattern symbol (no backtracking).

        Returns:
            List of element lists, empty if nothing matches.
        """
        if not pattern:
            return []
        matching = []
        matchings = []
        for _, e in self._walk():
            if len(matching) == len(pattern):
                matchings.append(matching)
                matching = []
            if e.is_type(pattern[len(matching)]):
                matching.append(e)
            else:
                matching = []
                if e.is_type(pattern[0]):
                    matching.append(e)
        if len(matching) == len(pattern):
            matchings.append(matching)
        return matchings

    def get_pos(self) -> np.ndarray:
        """Centre of mass of all monomers."""
        positions = self.map(lambda e, i: e.get_pos())
        if not positions:
            return np.zeros(3)
        return np.mean(positions, axis=0)

    # --- mutation ---------------------------------------------------------

    def create_element(self, nucleic_type=None, gid=None):
        """
        Create and register an element of this strand's family.

        Returns:
            The new (unlinked) element, or None when the family rejects
            `nucleic_type` (reported through the system's notify sink).
        """
        element = self.family.create_element(self, nucleic_type)
        if element is None:
            return None
        self.system.register_element(element, gid)
        return element

    def translate_strand(self, amount):
        """Rigidly shift every monomer by `amount`."""
        amount = as_vector(amount)
        with self._lock:
            Logger.log(f"start translate_strand({self.id}, {amount.tolist()})")
            self.family.apply_translation(self, amount)
            self.system.call_updates(['instanceOffset'])
            Logger.log(f"end translate_strand({self.id})")

    # --- family queries ---------------------------------------------------

    def is_nucleic_acid(self) -> bool:
        return self.family.name == "nucleic_acid"

    def is_peptide(self) -> bool:
        return self.family.name == "peptide"

    def is_generic(self) -> bool:
        return self.family.name == "generic"

    # --- views ------------------------------------------------------------

    def get_kwdata_string(self, exclude=()) -> str:
        return " ".join(f"{key}={value}" for key, value in self.kwdata.items() if key not in exclude)

    def to_json(self) -> dict:
        json = {
            'id': self.id,
            'monomers': self.map(lambda e, i: e.to_json()),
            'end3': self.end3.gid if self.end3 is not None else None,
            'end5': self.end5.gid if self.end5 is not None else None,
        }
        if self.label:
            json['label'] = self.label
        json['class'] = self.family.class_tag
        return json

    def __repr__(self):
        return f"Strand(id={self.id}, family={self.family.name}, length={self.get_length()})"
