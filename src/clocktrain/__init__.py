"""Cycloidal clock wheel, pinion and wheel-train generator."""

from .errors import (
    ClockTrainError,
    DecorationError,
    InvalidSelectionError,
    TrainConfigurationError,
)
from .models import GearSpec, RenderSettings, TrainSpec, pitch_diameter

__all__ = [
    "ClockTrainError",
    "DecorationError",
    "InvalidSelectionError",
    "TrainConfigurationError",
    "GearSpec",
    "RenderSettings",
    "TrainSpec",
    "pitch_diameter",
]

__version__ = "0.1.0"
