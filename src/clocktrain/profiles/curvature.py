"""Flank arc centres for ogival teeth.

A BS 978 tooth flank is a circular arc of radius ``fillet_factor * module``
that passes through the tooth tip on the local Y axis and through the point
where the tooth crosses the pitch circle. The arc centre therefore sits on the
perpendicular bisector of those two points.
"""

from __future__ import annotations

import logging
import math
from functools import lru_cache

from ..models.geometry import CurvatureCenter, GearSpec

logger = logging.getLogger(__name__)


def tip_point(gear: GearSpec) -> tuple[float, float]:
    """Tooth apex, addendum above the pitch circle on the local Y axis."""
    return (0.0, gear.pitch_radius + gear.addendum_factor * gear.module)


def pitch_point(gear: GearSpec) -> tuple[float, float]:
    """Where the right-hand flank crosses the pitch circle."""
    half_angle = math.radians(gear.half_tooth_angle)
    return (
        gear.pitch_radius * math.sin(half_angle),
        gear.pitch_radius * math.cos(half_angle),
    )


def half_chord(gear: GearSpec) -> float:
    """Half the distance from the tip point to the pitch point."""
    tx, ty = tip_point(gear)
    px, py = pitch_point(gear)
    return math.hypot(tx - px, ty - py) / 2


def is_degenerate(gear: GearSpec) -> bool:
    """True when the flank radius is too short to bridge tip and pitch point."""
    return gear.flank_radius <= half_chord(gear)


@lru_cache(maxsize=None)
def curvature_center(gear: GearSpec) -> CurvatureCenter:
    """Centre of the arc forming the right-hand flank of the tooth on +Y.

    The centre is ``flank_radius`` from both points, on the same side of the
    tip-to-pitch-point chord as the wheel axis. Its x may have either sign: a
    radius barely longer than the half chord keeps it near the chord
    midpoint, right of the tooth axis. When the
    flank radius cannot reach both the tip and the pitch point the centre
    falls back to the pitch circle on the Y axis, ``(0, T*m/2)``, which draws
    a flat transition instead of an ogive.
    """
    tx, ty = tip_point(gear)
    px, py = pitch_point(gear)
    radius = gear.flank_radius
    half = math.hypot(tx - px, ty - py) / 2

    if radius <= half:
        logger.warning(
            "Flank radius %.4f cannot bridge tip and pitch point (half chord %.4f) "
            "for %d teeth; using pitch circle centre",
            radius,
            half,
            gear.teeth,
        )
        return CurvatureCenter(0.0, gear.pitch_radius)

    mid_x = (tx + px) / 2
    mid_y = (ty + py) / 2
    offset = math.sqrt(radius**2 - half**2)

    # t - p rotated by +90 degrees
    nx = -(ty - py)
    ny = tx - px
    norm = math.hypot(nx, ny)

    return CurvatureCenter(
        mid_x + nx / norm * offset,
        mid_y + ny / norm * offset,
    )


def flank_centers(gear: GearSpec) -> tuple[CurvatureCenter, CurvatureCenter]:
    """Centres for the right and left flanks of one tooth."""
    center = curvature_center(gear)
    return center, center.mirrored()
