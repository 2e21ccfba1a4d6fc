"""
Idealized helix construction.

Continues an existing helix from one monomer's frame. The base pair is
modelled as a chord across a circle centred on the helix axis (oxDNA's
generate_RNA.py construction):

    1. helix axis = a3 (negated when growing toward 5') tilted by
       -inclination about a2
    2. chord template, defined with the axis along +z, is rotated onto the
       helix axis, then rotated so the chord direction meets the old a1
    3. every new base pair = previous chord rotated by `twist` about the
       axis and shifted by `rise` along it

Pure function of its inputs: no shared state, no I/O.
"""

import math
from typing import List

import numpy as np
from scipy.spatial.transform import Rotation

from ..frames import OrientedFrame
from ..vectors import (
    Z_AXIS, angle_between, axis_angle_rotation, norm, normalize,
    perpendicular_unit_vector, project_on_plane,
)
from .constants import RNA_A_FORM
from .types import Direction, HelixParameters
from ...config.feature_flags import FeatureFlags
from ...models.exceptions import DegenerateFrameError
from ...utils.logger.logger import Logger


def check_frame(frame: OrientedFrame, tolerance: float = None) -> None:
    """
    Raise DegenerateFrameError if a1 or a3 is zero-length or they are collinear.
    """
    if tolerance is None:
        tolerance = FeatureFlags.DEGENERACY_TOLERANCE
    a1_len = norm(frame.a1)
    a3_len = norm(frame.a3)
    if a1_len < tolerance or a3_len < tolerance:
        raise DegenerateFrameError(
            f"Frame has a zero-length axis (|a1|={a1_len:.3g}, |a3|={a3_len:.3g})."
        )
    if norm(np.cross(frame.a1, frame.a3)) / (a1_len * a3_len) < tolerance:
        raise DegenerateFrameError("Frame axes a1 and a3 are collinear.")


def alignment_rotation(source, target, hint=None) -> Rotation:
    """
    Rotation about source x target by the unsigned angle between them.

    Maps the direction of `source` onto `target`. When the two are
    antiparallel the cross product vanishes; the axis is then taken
    perpendicular to `source` (along `hint` where possible).
    """
    axis = np.cross(source, target)
    angle = angle_between(source, target)
    if norm(axis) < 1e-12 and angle > math.pi / 2:
        axis = perpendicular_unit_vector(source, hint)
    return axis_angle_rotation(axis, angle)


def helix_axis(frame: OrientedFrame, direction: Direction, parameters: HelixParameters) -> np.ndarray:
    """Unit helix axis implied by `frame`, pointing along the growth direction."""
    axis = np.array(frame.a3, dtype=np.float64)
    if direction is Direction.N5:
        axis = -axis
    axis = axis_angle_rotation(frame.a2, -parameters.inclination).apply(axis)
    return normalize(axis)


def chord_template(parameters: HelixParameters):
    """Backbone sites (r1, r2) of one base pair with the helix axis along +z."""
    half_chord = parameters.chord / 2
    z_offset = (parameters.bp_backbone_distance / 2) * math.sin(parameters.inclination)
    r1 = np.array([parameters.center_to_chord, half_chord, -z_offset])
    r2 = np.array([parameters.center_to_chord, -half_chord, z_offset])
    return r1, r2


def _stacking_axis(a1, axis, cos_i, sin_i, axis_sign):
    a1_proj = normalize(project_on_plane(a1, axis))
    return -normalize(axis_sign * cos_i * axis + sin_i * a1_proj)


def extend_helix(
    frame: OrientedFrame,
    count: int,
    direction=Direction.N3,
    generate_complement: bool = False,
    parameters: HelixParameters = RNA_A_FORM,
) -> List[OrientedFrame]:
    """
    Build `count` frames continuing the helix that `frame` belongs to.

    Args:
        frame: Frame of the monomer to continue from.
        count: Number of new monomers (>= 0).
        direction: Direction.N3 or Direction.N5 (or "n3"/"n5").
        generate_complement: Also build the antiparallel partner strand.
        parameters: Helix family constants.

    Returns:
        List of OrientedFrame (unpackable as position, a1, a3). With
        generate_complement the list holds 2*count frames; the partner of
        index i is at count*2 - (i+1), because the complementary chain runs
        backward relative to generation order.

    Raises:
        ValueError: count < 0 or invalid parameters.
        DegenerateFrameError: degenerate frame (FeatureFlags.STRICT_FRAME_CHECKS).
    """
    direction = Direction.parse(direction)
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    is_valid, error = parameters.validate()
    if not is_valid:
        raise ValueError(f"Invalid helix parameters ({parameters.name}): {error}")
    if FeatureFlags.STRICT_FRAME_CHECKS:
        check_frame(frame)

    out = [None] * (count * 2 if generate_complement else count)
    if count == 0:
        return out

    inclination = parameters.inclination
    cos_i = math.cos(inclination)
    sin_i = math.sin(inclination)
    old_a1 = np.array(frame.a1, dtype=np.float64)

    axis = helix_axis(frame, direction, parameters)
    r1, r2 = chord_template(parameters)

    # put the template axis on the helix axis
    to_axis = alignment_rotation(Z_AXIS, axis, hint=frame.a1)
    r1 = to_axis.apply(r1)
    r2 = to_axis.apply(r2)

    # unsigned angle: only guaranteed to land the chord on a1 when a1 is
    # perpendicular to the axis; inclined families (A-RNA) land close to it
    # but not exactly (see TestAlignment in tests/test_helix_engine.py)
    to_a1 = alignment_rotation(normalize(r2 - r1), old_a1, hint=axis)
    r1 = to_a1.apply(r1)
    r2 = to_a1.apply(r2)

    if FeatureFlags.LOG_HELIX_ALIGNMENT:
        chord = normalize(r2 - r1)
        Logger.log(
            f"helix alignment ({parameters.name}): chord to a1 "
            f"{math.degrees(angle_between(chord, old_a1)):.4f} deg, chord to axis "
            f"{math.degrees(angle_between(chord, axis)):.4f} deg "
            f"(expected {90 - parameters.inclination_deg:.4f})"
        )

    # helix axis passes through `origin`; p = r1 + cm_offset * a1 + origin
    origin = frame.position - r1 - parameters.cm_offset * old_a1

    step = axis_angle_rotation(axis, parameters.twist)
    rise = axis * parameters.rise

    for i in range(count):
        r1 = step.apply(r1) + rise
        r2 = step.apply(r2) + rise

        a1 = normalize(r2 - r1)
        a3 = _stacking_axis(a1, axis, cos_i, sin_i, -1.0)
        position = r1 + parameters.cm_offset * a1 + origin
        out[i] = OrientedFrame(position, a1, a3)

        if generate_complement:
            pair_a1 = -a1
            pair_a3 = _stacking_axis(pair_a1, axis, cos_i, sin_i, 1.0)
            pair_position = r2 + parameters.cm_offset * pair_a1 + origin
            out[count * 2 - (i + 1)] = OrientedFrame(pair_position, pair_a1, pair_a3)

    return out
