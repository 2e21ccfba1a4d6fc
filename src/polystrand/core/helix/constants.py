"""
Helix family constants (oxDNA simulation units, degrees).
"""

from .types import HelixParameters

# A-form RNA, as in oxDNA's generate_RNA.py
RNA_A_FORM = HelixParameters(
    name="A-RNA",
    inclination_deg=15.5,
    bp_backbone_distance=2.0,
    diameter=2.35,
    rise=0.3287,
    twist_deg=32.7,
    cm_offset=0.4,
)

# B-form DNA: bases point at the axis, so the chord is a full diameter
DNA_B_FORM = HelixParameters(
    name="B-DNA",
    inclination_deg=0.0,
    bp_backbone_distance=2.0,
    diameter=2.0,
    rise=0.3897628551303122,
    twist_deg=35.9,
    cm_offset=0.4,
)

HELIX_FAMILIES = {
    "RNA": RNA_A_FORM,
    "DNA": DNA_B_FORM,
}
