"""Data models for the clock train generator."""

from .spec import TrainSpec, TeethSpec, DecorationSpec, RenderSettings
from .geometry import (
    CurvatureCenter,
    GearSpec,
    PartMetadata,
    PartPlacement,
    PartType,
    PinionFamily,
    RootProfile,
    TrainLayout,
    TrainNode,
    pitch_diameter,
)

__all__ = [
    "TrainSpec",
    "TeethSpec",
    "DecorationSpec",
    "RenderSettings",
    "CurvatureCenter",
    "GearSpec",
    "PartMetadata",
    "PartPlacement",
    "PartType",
    "PinionFamily",
    "RootProfile",
    "TrainLayout",
    "TrainNode",
    "pitch_diameter",
]
