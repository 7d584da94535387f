"""Crossing-out and drilling for finished wheels.

Clock wheels are "crossed out": the web between hub and rim is cut away
leaving a few straight spokes. Both operations here only add cutouts to a
``WheelModel`` and never touch its rim, so pitch and root geometry are
unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import DecorationError
from ..models.solid import Circle, Cylinder, Difference, Extrude, Polygon, Rotate, Translate, union
from .wheel import WheelModel

# Cutters overshoot both faces so they never leave a skin
CUT_OVERSHOOT = 1.0


@dataclass(frozen=True)
class SpokeCutter:
    """Remove the web between hub and rim, leaving ``spokes`` straight spokes.

    All dimensions are absolute, in mm.
    """

    spokes: int
    outer_diameter: float
    hub_diameter: float
    spoke_width: float

    def _check(self, wheel: WheelModel) -> None:
        root_diameter = 2 * wheel.gear.root_radius
        if self.outer_diameter >= root_diameter:
            raise DecorationError(
                f"Spoke cut diameter ({self.outer_diameter:.3f}) must be smaller than "
                f"the root diameter ({root_diameter:.3f})"
            )
        if self.hub_diameter >= self.outer_diameter:
            raise DecorationError(
                f"Hub diameter ({self.hub_diameter:.3f}) must be smaller than "
                f"the spoke cut diameter ({self.outer_diameter:.3f})"
            )
        if self.spokes and self.spoke_width <= 0:
            raise DecorationError("spoke_width must be positive")

    def cutter(self, thickness: float):
        """Expression tree of the material to remove."""
        r_out = self.outer_diameter / 2
        ring = Difference(Circle(r_out), (Circle(self.hub_diameter / 2),))

        if self.spokes:
            half = self.spoke_width / 2
            bar = Polygon(((-half, 0.0), (half, 0.0), (half, r_out + 1.0), (-half, r_out + 1.0)))
            step = 360.0 / self.spokes
            bars = union(*(Rotate(bar, i * step) for i in range(self.spokes)))
            ring = Difference(ring, (bars,))

        return Translate(
            Extrude(ring, thickness + 2 * CUT_OVERSHOOT), (0.0, 0.0, -CUT_OVERSHOOT)
        )

    def apply(self, wheel: WheelModel) -> WheelModel:
        self._check(wheel)
        return wheel.with_cutout(self.cutter(wheel.thickness))


def drill_center_hole(wheel: WheelModel, diameter: float) -> WheelModel:
    """Bore an arbor hole through the wheel axis."""
    if diameter <= 0:
        return wheel
    root_diameter = 2 * wheel.gear.root_radius
    if diameter >= root_diameter:
        raise DecorationError(
            f"Hole diameter ({diameter:.3f}) must be smaller than the root "
            f"diameter ({root_diameter:.3f})"
        )
    bore = Translate(
        Cylinder(diameter / 2, wheel.thickness + 2 * CUT_OVERSHOOT),
        (0.0, 0.0, -CUT_OVERSHOOT),
    )
    return wheel.with_cutout(bore)
