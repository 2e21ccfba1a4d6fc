"""
polystrand - strand topology and ideal helix geometry for nucleic-acid
and protein structures.

Strands are chains of monomers (DNA/RNA nucleotides, amino acids, generic
spheres) linked 5'->3'; the helix engine generates the frames that continue
a strand along an ideal A-form or B-form helix.

Units:
    - Length: oxDNA simulation units (1 unit = 0.8518 nm)
    - Angles: degrees in configuration, radians internally
"""

__version__ = "0.1.0"

# Geometry
from .core.frames import OrientedFrame
from .core.helix import (
    Direction,
    HelixParameters,
    RNA_A_FORM,
    DNA_B_FORM,
    HELIX_FAMILIES,
    extend_helix,
)

# Topology model
from .models import (
    BasicElement,
    Nucleotide,
    DNANucleotide,
    RNANucleotide,
    AminoAcid,
    GenericSphere,
    Strand,
    System,
    ElementRegistry,
    get_family,
    StrandSeedError,
    TopologyError,
    DegenerateFrameError,
    ElementNotFoundError,
    UnsupportedStrandOperationError,
    InvalidViewDataError,
    UnsupportedFileTypeError,
)

# Config exports
from .config import FeatureFlags, BuildConfig, load_config

# Managers
from .managers import (
    StrandEditManager,
    ExtensionResult,
    ExportManager,
    InputManager,
    load_system_from_view,
    load_systems_from_view,
)
