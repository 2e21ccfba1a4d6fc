"""
Strand topology model: elements, strands, strand families and the system.
"""

from .exceptions import (
    StrandSeedError,
    TopologyError,
    DegenerateFrameError,
    ElementNotFoundError,
    UnsupportedStrandOperationError,
    InvalidViewDataError,
    UnsupportedFileTypeError,
)
from .elements import (
    BasicElement,
    Nucleotide,
    DNANucleotide,
    RNANucleotide,
    AminoAcid,
    GenericSphere,
)
from .strand_families import (
    StrandFamily,
    NucleicAcidFamily,
    PeptideFamily,
    GenericFamily,
    get_family,
)
from .strand import Strand
from .registry import ElementRegistry
from .system import System
