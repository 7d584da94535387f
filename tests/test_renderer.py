"""Tests for rendering expression trees through CadQuery."""

import math

import pytest

cq = pytest.importorskip("cadquery")

from clocktrain.export.renderer import CadQueryRenderer
from clocktrain.generators.tooth import ToothProfileGenerator
from clocktrain.generators.wheel import WheelGenerator
from clocktrain.models.solid import Circle, Cylinder, Difference, Extrude, Rotate, Translate
from clocktrain.models.spec import RenderSettings
from clocktrain.profiles.curvature import tip_point
from clocktrain.profiles.standard import driven_pinion_profile, driving_wheel_profile


@pytest.fixture
def renderer():
    return CadQueryRenderer()


class TestPrimitives:
    """Tests for primitive and boolean nodes."""

    def test_cylinder(self, renderer):
        solid = renderer.render(Cylinder(2.0, 3.0)).val()
        assert solid.Volume() == pytest.approx(math.pi * 4 * 3, rel=1e-6)

    def test_extruded_circle(self, renderer):
        bb = renderer.render(Extrude(Circle(1.0, (5.0, 0.0)), 2.0)).val().BoundingBox()
        assert bb.xmin == pytest.approx(4.0)
        assert bb.zlen == pytest.approx(2.0)

    def test_difference(self, renderer):
        node = Difference(Cylinder(2.0, 1.0), (Translate(Cylinder(1.0, 3.0), (0.0, 0.0, -1.0)),))
        volume = renderer.render(node).val().Volume()
        assert volume == pytest.approx(math.pi * 3, rel=1e-6)

    def test_rotate(self, renderer):
        node = Rotate(Translate(Cylinder(1.0, 1.0), (0.0, 5.0, 0.0)), 90.0)
        bb = renderer.render(node).val().BoundingBox()
        assert bb.center.x == pytest.approx(-5.0, abs=1e-6)

    def test_bare_2d_rejected(self, renderer):
        with pytest.raises(ValueError, match="Extrude"):
            renderer.render(Circle(1.0))

    def test_unknown_node(self, renderer):
        with pytest.raises(TypeError):
            renderer.render("not a node")


class TestGearRendering:
    """Tests that generated gears become valid solids."""

    def test_tooth_reaches_tip(self, renderer):
        gear = driving_wheel_profile(24, 6)
        bb = renderer.render(ToothProfileGenerator(gear).generate()).val().BoundingBox()
        assert bb.ymax == pytest.approx(tip_point(gear)[1], abs=1e-3)
        assert bb.zlen == pytest.approx(1.0)

    def test_pinion_is_valid(self, renderer):
        gear = driven_pinion_profile(6)
        pinion = WheelGenerator(gear, "rounded", thickness=2.0).generate()
        solid = renderer.render(pinion.solid).val()
        assert solid.isValid()
        assert solid.BoundingBox().zlen == pytest.approx(2.0)

    def test_pitch_only_volume(self, renderer):
        gear = driving_wheel_profile(24, 6)
        wheel = WheelGenerator(gear, settings=RenderSettings(full_teeth=False)).generate()
        volume = renderer.render(wheel.solid).val().Volume()
        assert volume == pytest.approx(math.pi * 12**2, rel=1e-6)
