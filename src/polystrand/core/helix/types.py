"""
Type definitions for the helix engine.

Lengths are in oxDNA simulation units (1 unit = 0.8518 nm), angles are
stored in degrees and exposed in radians.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import math


class Direction(Enum):
    """Which neighbor link a chain grows along."""
    N3 = "n3"
    N5 = "n5"

    @classmethod
    def parse(cls, value) -> "Direction":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown direction: {value!r} (expected 'n3' or 'n5')")


@dataclass(frozen=True)
class HelixParameters:
    """
    Geometric constants of one idealized double-helix family.

    The two backbone sites of a base pair are a chord across a circle of
    `diameter` centred on the helix axis, tilted by `inclination_deg`.

    Attributes:
        name: Family label, e.g. "A-RNA".
        inclination_deg: Tilt between a base pair and the helix normal plane.
        bp_backbone_distance: Distance between the two backbone sites of a pair.
        diameter: Helix diameter.
        rise: Step along the axis per base pair.
        twist_deg: Rotation about the axis per base pair.
        cm_offset: Distance from backbone site to centre of mass along a1.
    """
    name: str
    inclination_deg: float
    bp_backbone_distance: float
    diameter: float
    rise: float
    twist_deg: float
    cm_offset: float = 0.4

    @property
    def inclination(self) -> float:
        return math.radians(self.inclination_deg)

    @property
    def twist(self) -> float:
        return math.radians(self.twist_deg)

    @property
    def chord(self) -> float:
        """Base-pair chord length projected onto the helix normal plane."""
        return math.cos(self.inclination) * self.bp_backbone_distance

    @property
    def center_to_chord(self) -> float:
        """Distance from the helix axis to the chord midpoint."""
        return math.sqrt(max(0.0, (self.diameter / 2) ** 2 - (self.chord / 2) ** 2))

    def validate(self) -> tuple[bool, Optional[str]]:
        """
        Validate parameter values.

        Returns:
            (is_valid, error_message) tuple.
        """
        if self.rise <= 0:
            return False, "rise must be positive"
        if self.diameter <= 0:
            return False, "diameter must be positive"
        if self.bp_backbone_distance <= 0:
            return False, "bp_backbone_distance must be positive"
        if not (0 <= self.inclination_deg < 90):
            return False, "inclination_deg must lie in [0, 90)"
        if self.chord > self.diameter + 1e-12:
            return False, "base-pair chord does not fit inside the helix diameter"
        if self.cm_offset < 0:
            return False, "cm_offset must be non-negative"
        return True, None
