"""
System: a collection of strands sharing slot indices and coordinate tables.

The system is the collaborator the strand core talks to:
    - element registration (gid via the shared ElementRegistry, slot index)
    - flat coordinate tables (cm/bb/ns/bbcon offsets, 3 floats per slot)
      backing peptide and generic elements
    - call_updates(kinds) after bulk coordinate changes
    - notify(message) for recoverable, user-facing conditions
"""

import numpy as np

from .registry import ElementRegistry
from .strand import Strand
from .strand_families import COORDINATE_TABLES
from ..utils.logger.logger import Logger


def log_notification(message):
    """Default notify sink: a WARNING log entry."""
    Logger.log(message, Logger.LogPriority.WARNING)


class System:
    """
    Owns strands, slot indices and coordinate tables.

    Attributes:
        id: System id.
        registry: Shared ElementRegistry (gid allocation).
        strands: Strands in creation order.
        update_history: Every list of change kinds passed to call_updates.
    """

    def __init__(self, id=0, registry=None, notify=None, initial_capacity=64):
        Logger.log(f"start System __init__(self, {id})")
        self.id = id
        self.registry = registry if registry is not None else ElementRegistry()
        self.strands = []
        self.update_history = []
        self._notify_sink = notify if notify is not None else log_notification
        self._update_listeners = []
        self._slots = []
        self._next_strand_id = 0
        self._tables = {
            name: np.zeros(max(1, initial_capacity) * 3, dtype=np.float64)
            for name in COORDINATE_TABLES
        }
        Logger.log(f"end System __init__(self, {id})")

    # --- strands ----------------------------------------------------------

    def create_strand(self, family="nucleic_acid", label=None, **kwdata) -> Strand:
        """Create an empty strand of `family` and add it to the system."""
        strand = Strand(self._next_strand_id, self, family=family, label=label, kwdata=kwdata)
        self.add_strand(strand)
        return strand

    def add_strand(self, strand: Strand) -> None:
        if strand in self.strands:
            raise ValueError(f"Strand {strand.id} is already in system {self.id}.")
        strand.system = self
        self.strands.append(strand)
        self._next_strand_id = max(self._next_strand_id, strand.id + 1)
        Logger.log(f"System {self.id}: added strand {strand.id} ({strand.family.name})")

    def remove_strand(self, strand: Strand, deregister_elements=True) -> None:
        """
        Remove `strand`; its elements leave the registry unless
        `deregister_elements` is False (used when they move to another strand).
        """
        if strand not in self.strands:
            raise ValueError(f"Strand {strand.id} is not in system {self.id}.")
        if deregister_elements:
            for e in strand.get_monomers():
                self.deregister_element(e)
        self.strands.remove(strand)
        Logger.log(f"System {self.id}: removed strand {strand.id}")

    def get_strand(self, strand_id):
        for strand in self.strands:
            if strand.id == strand_id:
                return strand
        return None

    def get_elements(self) -> list:
        """All elements, strand by strand, in natural order."""
        return [e for strand in self.strands for e in strand.get_monomers()]

    def get_sequences(self) -> list:
        return [strand.get_sequence() for strand in self.strands]

    # --- elements and slots -----------------------------------------------

    def register_element(self, element, gid=None) -> None:
        """Give `element` a gid and the next free slot index."""
        self.registry.register(element, gid)
        element.sid = len(self._slots)
        self._slots.append(element)
        self._ensure_capacity(len(self._slots))

    def deregister_element(self, element) -> None:
        self.registry.remove(element)
        if element.sid is not None and element.sid < len(self._slots) \
                and self._slots[element.sid] is element:
            # keep the slot reserved so other slot indices stay stable
            self._slots[element.sid] = None

    def slot_of(self, element):
        sid = element.sid
        if sid is None or sid >= len(self._slots) or self._slots[sid] is not element:
            return None
        return sid

    def element_at_slot(self, sid):
        return self._slots[sid] if 0 <= sid < len(self._slots) else None

    @property
    def slot_count(self) -> int:
        return len(self._slots)

    def element_count(self) -> int:
        """Number of registered elements still holding a slot."""
        return sum(1 for e in self._slots if e is not None)

    def _ensure_capacity(self, n_slots):
        capacity = len(self._tables['cm']) // 3
        if n_slots <= capacity:
            return
        new_capacity = max(n_slots, capacity * 2)
        for name, table in self._tables.items():
            grown = np.zeros(new_capacity * 3, dtype=np.float64)
            grown[:len(table)] = table
            self._tables[name] = grown

    # --- coordinate tables ------------------------------------------------

    def get_table(self, name) -> np.ndarray:
        """(n_slots, 3) view onto the flat table `name` ('cm', 'bb', 'ns', 'bbcon')."""
        if name not in self._tables:
            raise KeyError(f"Unknown coordinate table: {name!r}")
        return self._tables[name].reshape(-1, 3)

    @property
    def cm_offsets(self) -> np.ndarray:
        return self._tables['cm']

    @property
    def bb_offsets(self) -> np.ndarray:
        return self._tables['bb']

    @property
    def ns_offsets(self) -> np.ndarray:
        return self._tables['ns']

    @property
    def bbcon_offsets(self) -> np.ndarray:
        return self._tables['bbcon']

    # --- collaborators ----------------------------------------------------

    def add_update_listener(self, listener) -> None:
        """Register listener(kinds), e.g. a renderer refreshing its buffers."""
        self._update_listeners.append(listener)

    def call_updates(self, kinds) -> None:
        kinds = list(kinds)
        self.update_history.append(kinds)
        Logger.log(f"System {self.id}: call_updates({kinds})")
        for listener in self._update_listeners:
            listener(kinds)

    def notify(self, message) -> None:
        """Report a recoverable condition to the user-facing sink."""
        Logger.log(f"notify: {message}", Logger.LogPriority.INFO)
        self._notify_sink(message)

    def __repr__(self):
        return f"System(id={self.id}, strands={len(self.strands)})"
