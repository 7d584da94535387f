"""Integration tests for full train generation."""

import json
import tempfile
from pathlib import Path

import pytest

from clocktrain.assembly.builder import PLANE_GAP, TrainAssemblyBuilder
from clocktrain.errors import DecorationError, TrainConfigurationError
from clocktrain.models.geometry import PartType
from clocktrain.models.solid import Rotate, Translate
from clocktrain.models.spec import TrainSpec

PART_IDS = ["pinion_1", "wheel_2", "pinion_2", "wheel_3", "pinion_3", "wheel_4"]


@pytest.fixture
def spec_data():
    return {
        "name": "test_train",
        "module": 1.0,
        "initial_angle": 30.0,
        "span_length": 80.0,
        "teeth": {"t1": 8, "T2": 64, "t2": 8, "T3": 60, "t3": 8, "T4": 48},
        "wheel_thickness": 1.5,
        "pinion_thickness": 3.0,
    }


@pytest.fixture
def spec(spec_data):
    return TrainSpec.model_validate(spec_data)


@pytest.fixture
def small_spec():
    """Low tooth counts keep the CAD kernel work small."""
    return TrainSpec.model_validate({
        "name": "small_train",
        "module": 1.0,
        "initial_angle": 60.0,
        "span_length": 30.0,
        "teeth": {"t1": 6, "T2": 24, "t2": 6, "T3": 24, "t3": 6, "T4": 24},
        "decoration": {"spokes": 4},
    })


class TestTrainParts:
    """Tests for part generation without a CAD kernel."""

    def test_generates_every_part(self, spec):
        builder = TrainAssemblyBuilder(spec)
        parts = builder.generate_parts()

        assert list(parts) == PART_IDS
        assert all(isinstance(p, Translate) and isinstance(p.child, Rotate) for p in parts.values())

    def test_parts_sit_on_their_nodes(self, spec):
        builder = TrainAssemblyBuilder(spec)
        parts = builder.generate_parts()
        nodes = builder.layout.nodes

        for part_id, node_index in [
            ("pinion_1", 0), ("wheel_2", 1), ("pinion_2", 1),
            ("wheel_3", 2), ("pinion_3", 2), ("wheel_4", 3),
        ]:
            x, y, _ = parts[part_id].offset
            assert (x, y) == nodes[node_index].position

    def test_meshing_parts_share_a_plane(self, spec):
        builder = TrainAssemblyBuilder(spec)
        builder.generate_parts()
        placements = builder.placements

        def mid(part_id, thickness):
            return placements[part_id].origin[2] + thickness / 2

        for wheel, pinion in [("wheel_2", "pinion_1"), ("wheel_3", "pinion_2"), ("wheel_4", "pinion_3")]:
            assert mid(wheel, 1.5) == pytest.approx(mid(pinion, 3.0))

        assert placements["wheel_3"].origin[2] == pytest.approx(3.0 + PLANE_GAP)

    def test_rotations_follow_layout(self, spec):
        builder = TrainAssemblyBuilder(spec)
        parts = builder.generate_parts()
        nodes = builder.layout.nodes

        assert parts["wheel_2"].child.angle == nodes[1].wheel_rotation
        assert parts["pinion_2"].child.angle == nodes[1].pinion_rotation
        assert parts["wheel_4"].child.angle == nodes[3].wheel_rotation

    def test_wheels_use_mating_pinion_proportions(self, spec):
        builder = TrainAssemblyBuilder(spec)
        builder.generate_parts()

        wheel = builder.models["wheel_2"]
        assert wheel.gear.teeth == 64
        assert wheel.pitch_diameter == 64.0
        # Wheels are crossed out and drilled, pinions only drilled
        assert len(wheel.cutouts) == 2
        assert len(builder.models["pinion_1"].cutouts) == 1
        assert builder.models["pinion_1"].gear.thickness_factor == 1.05

    def test_bom(self, spec):
        builder = TrainAssemblyBuilder(spec)
        builder.generate_parts()

        bom = builder.get_bom()
        assert [item["part_id"] for item in bom] == PART_IDS
        materials = {item["part_id"]: item["material"] for item in bom}
        assert materials["wheel_4"] == "brass"
        assert materials["pinion_3"] == "steel"
        assert builder.metadata["pinion_2"].part_type is PartType.PINION

    def test_layout_records(self, spec):
        builder = TrainAssemblyBuilder(spec)
        records = builder.get_layout_records()

        assert [r["node"] for r in records] == [1, 2, 3, 4]
        assert records[0]["wheel_rotation"] is None
        assert records[3]["pinion_rotation"] is None
        assert records[3]["x"] == 80.0

    def test_unreachable_layout(self, spec_data):
        spec_data["initial_angle"] = 0.0
        spec_data["span_length"] = 36.0
        builder = TrainAssemblyBuilder(TrainSpec.model_validate(spec_data))
        with pytest.raises(TrainConfigurationError):
            builder.generate_parts()

    def test_oversized_hole(self, spec_data):
        spec_data["decoration"] = {"hole_diameter": 5.0}
        # Root diameter of an 8-leaf pinion is under 5 mm
        with pytest.raises(ValueError, match="hole_diameter"):
            TrainSpec.model_validate(spec_data)

    def test_spoke_cut_into_teeth(self, spec_data):
        spec_data["decoration"] = {"rim_diameter": 0.99}
        builder = TrainAssemblyBuilder(TrainSpec.model_validate(spec_data))
        with pytest.raises(DecorationError, match="root diameter"):
            builder.generate_parts()

    def test_fine_module_without_hole(self, spec_data):
        spec_data["module"] = 0.2
        spec_data["span_length"] = 16.0
        spec_data["decoration"] = {"hole_diameter": 0.0}
        builder = TrainAssemblyBuilder(TrainSpec.model_validate(spec_data))
        builder.generate_parts()
        assert len(builder.models["pinion_1"].cutouts) == 0

    def test_pitch_only(self, spec_data):
        spec_data["render"] = {"full_teeth": False}
        builder = TrainAssemblyBuilder(TrainSpec.model_validate(spec_data))
        builder.generate_parts()
        assert builder.models["wheel_4"].rim.radius == 24.0


class TestFullAssembly:
    """Integration tests that render through CadQuery."""

    @pytest.fixture(autouse=True)
    def _cadquery(self):
        pytest.importorskip("cadquery")

    def test_build_assembly_succeeds(self, small_spec):
        builder = TrainAssemblyBuilder(small_spec)
        assembly = builder.build()

        assert assembly is not None
        assert assembly.name == "small_train"

    def test_assembly_contains_all_parts(self, small_spec):
        builder = TrainAssemblyBuilder(small_spec)
        assembly = builder.build()

        part_names = [child.name for child in assembly.children]
        assert sorted(part_names) == sorted(PART_IDS)
        assert sorted(builder.parts) == sorted(PART_IDS)

    def test_export(self, small_spec):
        from clocktrain.export.exporter import Exporter

        builder = TrainAssemblyBuilder(small_spec)
        assembly = builder.build()

        with tempfile.TemporaryDirectory() as tmpdir:
            exporter = Exporter(Path(tmpdir), ["step"], small_spec.render)
            outputs = exporter.export(
                assembly, builder.parts, builder.get_bom(), builder.get_layout_records()
            )

            step_path = outputs["assembly.step"]
            assert step_path.exists()
            assert step_path.stat().st_size > 0
            assert (Path(tmpdir) / "parts" / "wheel_2.step").exists()

            with open(outputs["layout.json"]) as f:
                layout = json.load(f)
            assert len(layout["nodes"]) == 4

    def test_unsupported_format(self, tmp_path):
        from clocktrain.export.exporter import Exporter

        with pytest.raises(ValueError, match="Unsupported format"):
            Exporter(tmp_path, ["obj"])
