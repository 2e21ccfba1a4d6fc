"""
Idealized double-helix geometry.

Usage:
    from polystrand.core.helix import extend_helix, Direction, RNA_A_FORM
"""

from .types import Direction, HelixParameters
from .constants import RNA_A_FORM, DNA_B_FORM, HELIX_FAMILIES
from .engine import extend_helix, check_frame, helix_axis, chord_template, alignment_rotation

__all__ = [
    # Types
    'Direction',
    'HelixParameters',
    # Constants
    'RNA_A_FORM',
    'DNA_B_FORM',
    'HELIX_FAMILIES',
    # Engine
    'extend_helix',
    'check_frame',
    'helix_axis',
    'chord_template',
    'alignment_rotation',
]
