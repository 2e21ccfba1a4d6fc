"""
Oriented frame: a monomer's position plus its orientation triad.

    a1: backbone -> base direction (or the analogous local axis)
    a3: stacking / backbone tangent axis
    a2: normalize(a1 x a3), always derived, never stored
"""

from dataclasses import dataclass

import numpy as np

from .vectors import as_vector, normalize


def _frozen(v) -> np.ndarray:
    arr = as_vector(v)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class OrientedFrame:
    """
    Immutable pose of one monomer.

    Attributes:
        position: Centre of mass, shape (3,).
        a1: Base-pointing axis (unit length expected).
        a3: Stacking axis (unit length, ideally perpendicular to a1).
    """
    position: np.ndarray
    a1: np.ndarray
    a3: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'position', _frozen(self.position))
        object.__setattr__(self, 'a1', _frozen(self.a1))
        object.__setattr__(self, 'a3', _frozen(self.a3))

    @property
    def a2(self) -> np.ndarray:
        return normalize(np.cross(self.a1, self.a3))

    def __iter__(self):
        # unpacks as (position, a1, a3)
        return iter((self.position, self.a1, self.a3))

    def translated(self, offset) -> "OrientedFrame":
        return OrientedFrame(self.position + as_vector(offset), self.a1, self.a3)

    def as_tuple(self):
        """(position, a1, a3) as writable copies."""
        return self.position.copy(), self.a1.copy(), self.a3.copy()

    def is_close(self, other: "OrientedFrame", atol: float = 1e-6) -> bool:
        return (
            np.allclose(self.position, other.position, atol=atol)
            and np.allclose(self.a1, other.a1, atol=atol)
            and np.allclose(self.a3, other.a3, atol=atol)
        )

    @classmethod
    def from_tuple(cls, values) -> "OrientedFrame":
        position, a1, a3 = values
        return cls(position, a1, a3)
