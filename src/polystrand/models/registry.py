import threading

from ..utils.logger.logger import Logger


class ElementRegistry:
    """Global gid -> element map shared by every system of a session."""

    def __init__(self):
        self._elements = {}
        self._next_gid = 0
        self._lock = threading.Lock()

    def register(self, element, gid=None) -> int:
        """
        Assign a gid to `element` and record it.

        Args:
            element: Element to register.
            gid: Requested gid (e.g. when restoring a saved view); a fresh
                one is allocated when None.

        Raises:
            ValueError: The requested gid is already taken.
        """
        with self._lock:
            if gid is None:
                gid = self._next_gid
            elif gid in self._elements and self._elements[gid] is not element:
                raise ValueError(f"Element gid {gid} is already registered.")
            self._elements[gid] = element
            self._next_gid = max(self._next_gid, gid + 1)
        element.gid = gid
        return gid

    def remove(self, element) -> None:
        with self._lock:
            if self._elements.get(element.gid) is element:
                del self._elements[element.gid]
            else:
                Logger.log(f"remove: gid {element.gid} not registered", Logger.LogPriority.WARNING)

    def get(self, gid):
        return self._elements.get(gid)

    def __contains__(self, element):
        return self._elements.get(getattr(element, 'gid', None)) is element

    def __len__(self):
        return len(self._elements)

    def __iter__(self):
        return iter(list(self._elements.values()))
