"""Single ogival tooth.

The tip of the tooth is the lens where two disks of the flank radius overlap,
one centred on each flank's curvature centre. Below the point where each arc
becomes tangent to a line through the wheel axis the flanks continue as
straight radial lines, drawn as a wedge from the axis.
"""

from __future__ import annotations

import math
from typing import Optional

from ..models.geometry import GearSpec
from ..models.solid import Circle, Extrude, Intersection, Polygon, Solid, union
from ..profiles.curvature import flank_centers


class ToothProfileGenerator:
    """Generator for one tooth of a wheel or pinion, standing on the +Y axis."""

    def __init__(self, gear: GearSpec, thickness: float = 1.0):
        """Initialize generator.

        Args:
            gear: Tooth proportions
            thickness: Extrusion depth along Z (unit depth by default)
        """
        self.gear = gear
        self.thickness = thickness

    def reaches_axis(self) -> bool:
        """True when the flank disks cover the wheel axis.

        No radial line from the axis can then touch the flank arc, and the
        lens alone already spans from the axis to the tip.
        """
        center, _ = flank_centers(self.gear)
        return self.gear.flank_radius >= center.distance

    def tangent_points(self) -> Optional[tuple[tuple[float, float], tuple[float, float]]]:
        """Where the radial flanks meet the flank arcs, right then left.

        ``None`` when the flank disks cover the axis.
        """
        if self.reaches_axis():
            return None
        center, _ = flank_centers(self.gear)
        radius = self.gear.flank_radius
        distance = center.distance

        phi = math.atan(-center.x / center.y)
        theta = math.asin(radius / distance)
        psi = theta - phi
        rad = math.sqrt(distance**2 - radius**2)

        return (
            (rad * math.sin(psi), rad * math.cos(psi)),
            (-rad * math.sin(psi), rad * math.cos(psi)),
        )

    def tip(self) -> Intersection:
        """Lens formed by the two flank disks."""
        right, left = flank_centers(self.gear)
        radius = self.gear.flank_radius
        return Intersection(
            (
                Circle(radius, (right.x, right.y)),
                Circle(radius, (left.x, left.y)),
            )
        )

    def wedge(self) -> Optional[Polygon]:
        """Radial flanks from the wheel axis to the tangent points."""
        points = self.tangent_points()
        if points is None:
            return None
        right, left = points
        return Polygon(((0.0, 0.0), right, left))

    def outline(self) -> Solid:
        """Closed 2D outline of the tooth."""
        wedge = self.wedge()
        if wedge is None:
            return self.tip()
        return union(self.tip(), wedge)

    def generate(self) -> Extrude:
        return Extrude(self.outline(), self.thickness)
