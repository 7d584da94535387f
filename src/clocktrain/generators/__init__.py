"""Part generators for cycloidal clock gears."""

from .tooth import ToothProfileGenerator
from .wheel import WheelGenerator, WheelModel, root_fillet_radius
from .decoration import SpokeCutter, drill_center_hole

__all__ = [
    "ToothProfileGenerator",
    "WheelGenerator",
    "WheelModel",
    "root_fillet_radius",
    "SpokeCutter",
    "drill_center_hole",
]
