"""Assembly builder - constructs a placed wheel train from a specification."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..generators import SpokeCutter, WheelGenerator, WheelModel, drill_center_hole
from ..models.geometry import PartMetadata, PartPlacement, PartType, TrainLayout
from ..models.solid import Rotate, Solid, Translate
from ..models.spec import TrainSpec
from ..profiles.standard import driven_pinion_profile, driving_wheel_profile
from .layout import TrainLayoutSolver

logger = logging.getLogger(__name__)

# Axial gap between successive meshing planes
PLANE_GAP = 1.0


class TrainAssemblyBuilder:
    """Builds every wheel and pinion of a four wheel train and places them.

    Power flows from node 4 towards node 1: each wheel drives the pinion on
    the previous node, so wheels take the driving-wheel proportions for
    that pinion and pinions take the driven-pinion forms.
    """

    def __init__(self, spec: TrainSpec):
        self.spec = spec
        self.layout: Optional[TrainLayout] = None
        self.models: dict[str, WheelModel] = {}
        self.placements: dict[str, PartPlacement] = {}
        self.metadata: dict[str, PartMetadata] = {}
        self.parts: dict[str, Any] = {}

    def _plane_z(self, mesh_index: int) -> float:
        """Base Z of the wheels in the given meshing plane (0, 1 or 2)."""
        return mesh_index * (self.spec.pinion_thickness + PLANE_GAP)

    def _make_wheel(self, part_id: str, teeth: int, mate_leaves: int) -> WheelModel:
        spec = self.spec
        gear = driving_wheel_profile(teeth, mate_leaves, spec.module)
        generator = WheelGenerator(gear, spec.root_profile, spec.wheel_thickness, spec.render)
        wheel = generator.generate()

        deco = spec.decoration
        if deco.spokes:
            wheel = SpokeCutter(
                spokes=deco.spokes,
                outer_diameter=deco.rim_diameter * gear.pitch_diameter,
                hub_diameter=deco.hub_diameter * gear.pitch_diameter,
                spoke_width=deco.spoke_width * gear.pitch_diameter,
            ).apply(wheel)
        wheel = drill_center_hole(wheel, deco.hole_diameter)

        self.metadata[part_id] = generator.get_metadata(part_id, PartType.WHEEL)
        return wheel

    def _make_pinion(self, part_id: str, leaves: int) -> WheelModel:
        spec = self.spec
        gear = driven_pinion_profile(leaves, spec.module, spec.pinion_family)
        generator = WheelGenerator(gear, spec.root_profile, spec.pinion_thickness, spec.render)
        pinion = drill_center_hole(generator.generate(), spec.decoration.hole_diameter)

        self.metadata[part_id] = generator.get_metadata(part_id, PartType.PINION)
        return pinion

    def _place(self, part_id: str, part_type: PartType, node_index: int, z: float) -> None:
        node = self.layout.nodes[node_index]
        rotation = node.wheel_rotation if part_type is PartType.WHEEL else node.pinion_rotation
        self.placements[part_id] = PartPlacement(
            part_type=part_type,
            part_id=part_id,
            origin=(node.position[0], node.position[1], z),
            rotation=rotation,
        )

    def generate_parts(self) -> dict[str, Solid]:
        """Solve the layout, build every part and return placed expression trees."""
        spec = self.spec
        t1, T2, t2, T3, t3, T4 = spec.teeth.as_tuple()

        self.layout = TrainLayoutSolver.from_spec(spec).solve()

        # Pinions are centred on the wheel plane they mesh in
        pinion_drop = (spec.pinion_thickness - spec.wheel_thickness) / 2
        parts = [
            # (part_id, type, node index, meshing plane, teeth, mate)
            ("pinion_1", PartType.PINION, 0, 0, t1, None),
            ("wheel_2", PartType.WHEEL, 1, 0, T2, t1),
            ("pinion_2", PartType.PINION, 1, 1, t2, None),
            ("wheel_3", PartType.WHEEL, 2, 1, T3, t2),
            ("pinion_3", PartType.PINION, 2, 2, t3, None),
            ("wheel_4", PartType.WHEEL, 3, 2, T4, t3),
        ]

        placed: dict[str, Solid] = {}
        for part_id, part_type, node_index, plane, teeth, mate in parts:
            z = self._plane_z(plane)
            if part_type is PartType.WHEEL:
                model = self._make_wheel(part_id, teeth, mate)
            else:
                model = self._make_pinion(part_id, teeth)
                z -= pinion_drop
            self.models[part_id] = model
            self._place(part_id, part_type, node_index, z)

            placement = self.placements[part_id]
            placed[part_id] = Translate(Rotate(model.solid, placement.rotation), placement.origin)

        logger.debug("Generated %d parts for train %s", len(placed), spec.name)
        return placed

    def build(self):
        """Build the complete CadQuery assembly.

        Returns:
            CadQuery Assembly with all parts positioned
        """
        import cadquery as cq

        from ..export.renderer import CadQueryRenderer

        if not self.models:
            self.generate_parts()

        renderer = CadQueryRenderer()
        assembly = cq.Assembly(name=self.spec.name)
        self.parts = {}

        for part_id, model in self.models.items():
            part = renderer.render(model.solid)
            self.parts[part_id] = part
            placement = self.placements[part_id]
            assembly.add(
                part,
                name=part_id,
                loc=placement.to_location(),
                color=self._get_color(placement.part_type),
            )

        return assembly

    def _get_color(self, part_type: PartType):
        """Get color for part type (for visualization)."""
        import cadquery as cq

        colors = {
            PartType.WHEEL: cq.Color(0.85, 0.65, 0.13, 1.0),  # Brass
            PartType.PINION: cq.Color(0.6, 0.6, 0.65, 1.0),  # Steel
        }
        return colors.get(part_type, cq.Color(0.8, 0.8, 0.8, 1.0))

    def get_bom(self) -> list[dict[str, Any]]:
        """Get bill of materials."""
        bom = []
        for part_id, meta in self.metadata.items():
            bom.append({
                "part_id": part_id,
                "name": meta.name,
                "material": meta.material,
                "count": meta.count,
                "dimensions": meta.dimensions,
                "notes": meta.notes,
            })
        return bom

    def get_layout_records(self) -> list[dict[str, Any]]:
        """Arbor positions and rotations, one record per node."""
        if self.layout is None:
            self.layout = TrainLayoutSolver.from_spec(self.spec).solve()
        return [
            {
                "node": index + 1,
                "x": node.position[0],
                "y": node.position[1],
                "wheel_rotation": node.wheel_rotation,
                "pinion_rotation": node.pinion_rotation,
            }
            for index, node in enumerate(self.layout.nodes)
        ]
