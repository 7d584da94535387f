"""Layout solver for four-position wheel trains.

The train runs from node 1 (a bare pinion at the origin) to node 4 (a bare
wheel on the +X axis at ``span_length``):

    node 1: pinion t1
    node 2: wheel T2 (meshes t1)  + pinion t2
    node 3: wheel T3 (meshes t2)  + pinion t3
    node 4: wheel T4 (meshes t3)

Node 2 is placed at ``initial_angle`` from node 1. Node 3 closes the triangle
formed with nodes 2 and 4, whose sides are the two remaining centre distances.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ..errors import TrainConfigurationError
from ..models.geometry import TrainLayout, TrainNode
from ..models.spec import TrainSpec

logger = logging.getLogger(__name__)


def center_distance(teeth_a: int, teeth_b: int, module: float) -> float:
    """Distance between two meshing arbors: sum of pitch radii."""
    return (teeth_a + teeth_b) * module / 2


def _direction(origin: tuple[float, float], target: tuple[float, float]) -> float:
    """Angle of the line from ``origin`` to ``target``, degrees from +X."""
    return math.degrees(math.atan2(target[1] - origin[1], target[0] - origin[0]))


def wheel_rotation(center, mate) -> float:
    """Rotation that puts a wheel tooth on the line of centres.

    Teeth are modelled standing on +Y, hence the 90 degree offset.
    """
    return (_direction(center, mate) - 90.0) % 360.0


def pinion_rotation(center, mate, leaves: int) -> float:
    """Rotation that puts a pinion gap on the line of centres."""
    return (_direction(center, mate) - 90.0 + 180.0 / leaves) % 360.0


class TrainLayoutSolver:
    """Computes arbor positions and tooth phasing for a four wheel train."""

    def __init__(
        self,
        initial_angle: float,
        span_length: float,
        module: float,
        teeth: Sequence[int],
    ):
        """Initialize solver.

        Args:
            initial_angle: Angle of node 2 seen from node 1, degrees
            span_length: Distance from node 1 to node 4
            module: Common module of every gear in the train
            teeth: Tooth counts (t1, T2, t2, T3, t3, T4)
        """
        if len(teeth) != 6:
            raise TrainConfigurationError(
                f"Expected 6 tooth counts (t1, T2, t2, T3, t3, T4), got {len(teeth)}"
            )
        self.initial_angle = initial_angle
        self.span_length = span_length
        self.module = module
        self.teeth = tuple(teeth)

    @classmethod
    def from_spec(cls, spec: TrainSpec) -> "TrainLayoutSolver":
        return cls(spec.initial_angle, spec.span_length, spec.module, spec.teeth.as_tuple())

    def center_distances(self) -> tuple[float, float, float]:
        t1, T2, t2, T3, t3, T4 = self.teeth
        m = self.module
        return (
            center_distance(t1, T2, m),
            center_distance(t2, T3, m),
            center_distance(t3, T4, m),
        )

    def solve(self) -> TrainLayout:
        """Compute all arbor placements.

        Raises:
            TrainConfigurationError: when nodes 2 and 4 are too far apart or
                too close for the last two centre distances to bridge them.
        """
        t1, _, t2, _, t3, _ = self.teeth
        r1, r2, r3 = self.center_distances()
        angle = math.radians(self.initial_angle)

        p1 = (0.0, 0.0)
        p2 = (r1 * math.cos(angle), r1 * math.sin(angle))
        p4 = (self.span_length, 0.0)

        dx = p4[0] - p2[0]
        dy = p2[1]
        span = math.hypot(dx, dy)

        if span == 0.0:
            raise TrainConfigurationError("Node 2 coincides with node 4")
        if r2 + r3 < span or abs(r2 - r3) > span:
            raise TrainConfigurationError(
                f"Centre distances {r2:.3f} and {r3:.3f} cannot join nodes 2 and 4 "
                f"{span:.3f} apart; adjust span_length, initial_angle or tooth counts"
            )

        # Angle at node 4 between the axis back to node 1 and node 2
        alpha = math.atan2(dy, dx)
        cos_phi = (span**2 + r3**2 - r2**2) / (2 * r3 * span)
        phi = math.acos(max(-1.0, min(1.0, cos_phi)))

        p3 = (
            p4[0] - r3 * math.cos(alpha + phi),
            r3 * math.sin(alpha + phi),
        )

        logger.debug(
            "Train nodes: %s, %s, %s, %s (alpha=%.3f deg, phi=%.3f deg)",
            p1, p2, p3, p4, math.degrees(alpha), math.degrees(phi),
        )

        nodes = (
            TrainNode(p1, pinion_rotation=pinion_rotation(p1, p2, t1)),
            TrainNode(
                p2,
                wheel_rotation=wheel_rotation(p2, p1),
                pinion_rotation=pinion_rotation(p2, p3, t2),
            ),
            TrainNode(
                p3,
                wheel_rotation=wheel_rotation(p3, p2),
                pinion_rotation=pinion_rotation(p3, p4, t3),
            ),
            TrainNode(p4, wheel_rotation=wheel_rotation(p4, p3)),
        )
        return TrainLayout(nodes=nodes, center_distances=(r1, r2, r3))
