"""Internal geometric models for gears and train layout."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..errors import InvalidSelectionError


def pitch_diameter(teeth: int, module: float) -> float:
    """Pitch diameter of a gear: teeth times module."""
    return teeth * module


class RootProfile(str, Enum):
    """Shape of the gap between adjacent teeth."""

    SQUARE = "square"
    ROUNDED = "rounded"

    @classmethod
    def parse(cls, value: "str | RootProfile") -> "RootProfile":
        try:
            return cls(value)
        except ValueError:
            raise InvalidSelectionError(
                f"Unknown root profile {value!r}, expected one of "
                f"{', '.join(m.value for m in cls)}"
            ) from None


class PinionFamily(str, Enum):
    """BS 978 pinion tooth forms."""

    A = "A"  # half round
    B = "B"  # ogival, medium
    C = "C"  # ogival, full

    @classmethod
    def parse(cls, value: "str | PinionFamily | None") -> Optional["PinionFamily"]:
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            raise InvalidSelectionError(
                f"Unknown pinion family {value!r}, expected one of "
                f"{', '.join(m.value for m in cls)}"
            ) from None


@dataclass(frozen=True)
class GearSpec:
    """Tooth geometry of one wheel or pinion.

    Factors are multiples of the module. ``thickness_factor`` is the tooth
    thickness at the pitch circle divided by the module, so the half-tooth
    angle is ``thickness_factor / teeth`` radians. The default pi/2 gives a
    tooth as wide as the gap.
    """

    teeth: int
    module: float
    addendum_factor: float
    fillet_factor: float
    thickness_factor: float = math.pi / 2

    @property
    def pitch_radius(self) -> float:
        return self.teeth * self.module / 2

    @property
    def pitch_diameter(self) -> float:
        return pitch_diameter(self.teeth, self.module)

    @property
    def outside_diameter(self) -> float:
        return self.pitch_diameter + 2 * self.addendum_factor * self.module

    @property
    def root_radius(self) -> float:
        """Nominal root circle, pi/2 modules inside the pitch circle."""
        return (self.teeth - math.pi) * self.module / 2

    @property
    def flank_radius(self) -> float:
        return self.fillet_factor * self.module

    @property
    def half_tooth_angle(self) -> float:
        """Angular half-thickness of a tooth at the pitch circle, in degrees."""
        return self.thickness_factor * (180 / math.pi) / self.teeth


@dataclass(frozen=True)
class CurvatureCenter:
    """Centre of a tooth flank arc in the wheel's local frame."""

    x: float
    y: float

    def mirrored(self) -> "CurvatureCenter":
        """Centre of the twin flank across the local Y axis."""
        return CurvatureCenter(-self.x, self.y)

    @property
    def distance(self) -> float:
        return math.hypot(self.x, self.y)


@dataclass(frozen=True)
class TrainNode:
    """One arbor of a four-position train.

    ``None`` rotation means the arbor carries no such part.
    """

    position: tuple[float, float]
    wheel_rotation: Optional[float] = None
    pinion_rotation: Optional[float] = None

    @property
    def has_wheel(self) -> bool:
        return self.wheel_rotation is not None

    @property
    def has_pinion(self) -> bool:
        return self.pinion_rotation is not None


@dataclass(frozen=True)
class TrainLayout:
    """Four placed arbors, node 1 at the origin and node 4 on the +X axis."""

    nodes: tuple[TrainNode, TrainNode, TrainNode, TrainNode]
    center_distances: tuple[float, float, float]

    def __post_init__(self):
        if len(self.nodes) != 4:
            raise ValueError(f"A train layout needs 4 nodes, got {len(self.nodes)}")

    def __iter__(self):
        return iter(self.nodes)

    def __getitem__(self, index: int) -> TrainNode:
        return self.nodes[index]


class PartType(Enum):
    """Types of parts in a train assembly."""

    WHEEL = "wheel"
    PINION = "pinion"


@dataclass
class PartPlacement:
    """Placement of a part in the assembly coordinate frame."""

    part_type: PartType
    part_id: str
    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: float = 0.0  # About Z, degrees

    def to_location(self):
        """Convert to CadQuery Location for assembly positioning."""
        import cadquery as cq

        return cq.Location(cq.Vector(*self.origin), cq.Vector(0, 0, 1), self.rotation)


@dataclass
class PartMetadata:
    """Metadata for BOM generation."""

    part_id: str
    part_type: PartType
    name: str
    material: str = "brass"
    count: int = 1
    dimensions: dict[str, float] = field(default_factory=dict)
    notes: Optional[str] = None
