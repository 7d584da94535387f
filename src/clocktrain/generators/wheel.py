"""Wheel and pinion generator for cycloidal clock gears.

A wheel is ``T`` copies of one ogival tooth spaced 360/T degrees apart,
standing on a root disk. Two root forms are available:

- ``square``: a plain disk on the nominal root circle, pi/2 modules inside
  the pitch circle.
- ``rounded``: a larger disk scalloped by one circular cutout per gap. The
  cutout radius makes each scallop tangent to both radial flanks and to the
  nominal root circle. BS 978 only asks for roots that are "approximately
  semi-circular", so this follows the Swiss NIHS construction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Optional

from ..models.geometry import GearSpec, PartMetadata, PartType, RootProfile
from ..models.solid import Cylinder, Difference, Rotate, Solid, Translate, union
from ..models.spec import RenderSettings
from ..profiles.curvature import curvature_center
from .tooth import ToothProfileGenerator


@dataclass(frozen=True)
class WheelModel:
    """A complete wheel or pinion with optional decoration cutouts."""

    gear: GearSpec
    root_profile: RootProfile
    thickness: float
    tooth: Solid
    tooth_angles: tuple[float, ...]
    root: Optional[Solid]
    full_teeth: bool = True
    cutouts: tuple[Solid, ...] = field(default_factory=tuple)

    @property
    def pitch_diameter(self) -> float:
        return self.gear.pitch_diameter

    @property
    def teeth(self) -> tuple[Solid, ...]:
        """Tooth copies rotated into place."""
        return tuple(Rotate(self.tooth, angle) for angle in self.tooth_angles)

    @property
    def rim(self) -> Solid:
        if not self.full_teeth:
            return Cylinder(self.gear.pitch_radius, self.thickness)
        if self.root is None:
            return union(*self.teeth)
        return union(self.root, *self.teeth)

    @property
    def solid(self) -> Solid:
        if not self.cutouts:
            return self.rim
        return Difference(self.rim, self.cutouts)

    def with_cutout(self, cutter: Solid) -> "WheelModel":
        return replace(self, cutouts=self.cutouts + (cutter,))


def root_fillet_radius(gear: GearSpec) -> float:
    """Radius of the circular scallop between two teeth (rounded root).

    Zero when the flank disks cover the wheel axis, since the flanks then
    have no radial part for a scallop to touch.
    """
    center = curvature_center(gear)
    t = -center.x
    r1 = center.distance
    if gear.flank_radius >= r1:
        return 0.0
    beta = math.radians(
        180 / gear.teeth
        - math.degrees(math.asin(gear.flank_radius / r1))
        + math.degrees(math.asin(t / r1))
    )
    return (gear.teeth - math.pi) * gear.module * math.sin(beta) / (2 * (1 - math.sin(beta)))


class WheelGenerator:
    """Generator for a toothed wheel or pinion.

    The wheel axis is Z, the first tooth stands on +Y and the body spans
    Z=0 to Z=thickness.
    """

    def __init__(
        self,
        gear: GearSpec,
        root_profile: "str | RootProfile" = RootProfile.ROUNDED,
        thickness: float = 1.0,
        settings: Optional[RenderSettings] = None,
    ):
        """Initialize generator.

        Args:
            gear: Tooth proportions
            root_profile: "square" or "rounded"
            thickness: Face width along Z
            settings: Render options; ``full_teeth=False`` yields a pitch disk
        """
        self.gear = gear
        self.root_profile = RootProfile.parse(root_profile)
        self.thickness = thickness
        self.settings = settings or RenderSettings()

    @property
    def tooth_pitch_angle(self) -> float:
        return 360.0 / self.gear.teeth

    def tooth_angles(self) -> tuple[float, ...]:
        return tuple(i * self.tooth_pitch_angle for i in range(self.gear.teeth))

    def gap_angles(self) -> tuple[float, ...]:
        """Angles midway between adjacent teeth."""
        return tuple((i + 0.5) * self.tooth_pitch_angle for i in range(self.gear.teeth))

    def _square_root(self) -> Optional[Solid]:
        # Very low counts have no root circle; the teeth meet at the axis
        if self.gear.root_radius <= 0:
            return None
        return Cylinder(self.gear.root_radius, self.thickness)

    def _rounded_root(self) -> Optional[Solid]:
        rho = root_fillet_radius(self.gear)
        if rho <= 0 or self.gear.root_radius <= 0:
            return self._square_root()
        scallop_center = self.gear.root_radius + rho
        cutter = Translate(Cylinder(rho, self.thickness), (0.0, scallop_center, 0.0))
        return Difference(
            Cylinder(scallop_center, self.thickness),
            tuple(Rotate(cutter, angle) for angle in self.gap_angles()),
        )

    def generate(self) -> WheelModel:
        """Generate the wheel model."""
        tooth = ToothProfileGenerator(self.gear, self.thickness).generate()

        if self.root_profile is RootProfile.SQUARE:
            root = self._square_root()
        else:
            root = self._rounded_root()

        return WheelModel(
            gear=self.gear,
            root_profile=self.root_profile,
            thickness=self.thickness,
            tooth=tooth,
            tooth_angles=self.tooth_angles(),
            root=root,
            full_teeth=self.settings.full_teeth,
        )

    def get_metadata(self, part_id: str, part_type: PartType = PartType.WHEEL) -> PartMetadata:
        """Get metadata for BOM."""
        gear = self.gear
        dimensions = {
            "module": gear.module,
            "teeth": gear.teeth,
            "pitch_diameter": gear.pitch_diameter,
            "outside_diameter": gear.outside_diameter,
            "root_diameter": 2 * gear.root_radius,
            "face_width": self.thickness,
        }
        if self.root_profile is RootProfile.ROUNDED:
            dimensions["root_fillet_radius"] = root_fillet_radius(gear)

        return PartMetadata(
            part_id=part_id,
            part_type=part_type,
            name=f"{gear.teeth}-tooth {part_type.value}",
            material="steel" if part_type is PartType.PINION else "brass",
            dimensions=dimensions,
            notes=f"{self.root_profile.value} root",
        )
