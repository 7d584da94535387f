"""Train layout and assembly building."""

from .builder import TrainAssemblyBuilder
from .layout import TrainLayoutSolver, center_distance

__all__ = ["TrainAssemblyBuilder", "TrainLayoutSolver", "center_distance"]
