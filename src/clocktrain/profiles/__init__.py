"""Tooth profile proportions and flank geometry."""

from .curvature import curvature_center, flank_centers, half_chord, is_degenerate
from .standard import (
    driving_wheel_factors,
    driving_wheel_profile,
    driven_pinion_factors,
    driven_pinion_profile,
    select_profile,
    sometimes_driven_factors,
    sometimes_driven_profile,
)

__all__ = [
    "curvature_center",
    "flank_centers",
    "half_chord",
    "is_degenerate",
    "driving_wheel_factors",
    "driving_wheel_profile",
    "driven_pinion_factors",
    "driven_pinion_profile",
    "select_profile",
    "sometimes_driven_factors",
    "sometimes_driven_profile",
]
