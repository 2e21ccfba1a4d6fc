"""
Feature flags for polystrand.

Runtime switches for geometry checks and diagnostics.

Usage:
    from polystrand.config.feature_flags import FeatureFlags

    if FeatureFlags.STRICT_FRAME_CHECKS:
        # reject degenerate frames before building a helix
"""


class FeatureFlags:
    """
    Global feature flag registry.

    Flags are toggleable at runtime for testing.

    Invariant: no flag changes the output of the helix engine for
    well-formed (non-degenerate) input frames.
    """

    STRICT_FRAME_CHECKS = True
    """
    Reject degenerate input frames in the helix engine.

    When True (default):
    - Zero-length or collinear a1/a3 raise DegenerateFrameError
      before any geometry is built.

    When False:
    - Input is used as-is (legacy behavior); the result for
      degenerate frames is unspecified.
    """

    DEGENERACY_TOLERANCE = 1e-9
    """
    Norm below which a frame vector, or the cross product of a1 and a3,
    counts as zero.

    Default: 1e-9
    """

    LOG_HELIX_ALIGNMENT = False
    """
    Log the template alignment diagnostics while building a helix
    (chord vs a1 angle, chord vs helix axis angle).

    Default: False (diagnostics are noisy on long extensions)
    """

    # --- Static Methods for Safe Flag Management ---

    @classmethod
    def enable_helix_alignment_logging(cls):
        cls.LOG_HELIX_ALIGNMENT = True

    @classmethod
    def disable_helix_alignment_logging(cls):
        cls.LOG_HELIX_ALIGNMENT = False

    @classmethod
    def legacy_mode(cls):
        """Accept frames unchecked, the pre-validation behavior."""
        cls.STRICT_FRAME_CHECKS = False
        cls.DEGENERACY_TOLERANCE = 1e-9
        cls.LOG_HELIX_ALIGNMENT = False

    @classmethod
    def reset(cls):
        """Restore documented defaults."""
        cls.STRICT_FRAME_CHECKS = True
        cls.DEGENERACY_TOLERANCE = 1e-9
        cls.LOG_HELIX_ALIGNMENT = False

    @classmethod
    def validate(cls) -> bool:
        """
        Validate flag consistency.

        Returns:
            True if flags are in valid state.

        Raises:
            ValueError if a flag holds an unusable value.
        """
        if not (0.0 < cls.DEGENERACY_TOLERANCE < 1e-3):
            raise ValueError(
                "DEGENERACY_TOLERANCE must lie in (0, 1e-3), "
                f"got {cls.DEGENERACY_TOLERANCE}"
            )
        return True
