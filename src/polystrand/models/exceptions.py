class StrandSeedError(Exception):
    """Strand seeded from an absent element."""
    def __init__(self, message="Cannot set empty strand end."):
        super().__init__(message)

class TopologyError(Exception):
    """Element links do not form a linear or circular chain."""
    def __init__(self, message="Malformed strand topology."):
        super().__init__(message)

class DegenerateFrameError(Exception):
    """Frame vectors are zero-length or collinear."""
    def __init__(self, message="Degenerate orientation frame."):
        super().__init__(message)

class ElementNotFoundError(Exception):
    """Element is not part of the strand or system."""
    def __init__(self, message="Element not found in strand."):
        super().__init__(message)

class UnsupportedStrandOperationError(Exception):
    """Operation not available for this strand family."""
    def __init__(self, message="Operation not supported for this strand family."):
        super().__init__(message)

class InvalidViewDataError(Exception):
    """Serialized system view failed validation."""
    def __init__(self, message="Unable to validate system view data."):
        super().__init__(message)

class UnsupportedFileTypeError(Exception):
    """Input file extension has no processing strategy."""
    def __init__(self, message="Unsupported file type."):
        super().__init__(message)
