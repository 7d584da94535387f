"""Pydantic models for input specification parsing and validation."""

from __future__ import annotations

import math
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RenderSettings(BaseModel):
    """Rendering options threaded through every generator call."""

    model_config = ConfigDict(frozen=True)

    full_teeth: bool = Field(
        default=True, description="Draw tooth geometry; False draws pitch circles only"
    )
    tolerance: float = Field(default=0.01, gt=0, description="Linear STL tolerance in mm")
    angular_tolerance: float = Field(
        default=0.1, gt=0, description="Angular STL tolerance in radians"
    )


class TeethSpec(BaseModel):
    """Tooth counts along a four-position train.

    Lower-case names are pinions, upper-case names are wheels. Node 1
    carries only pinion ``t1``, node 4 only wheel ``T4``.
    """

    t1: int = Field(ge=6, description="Input pinion leaves (node 1)")
    T2: int = Field(ge=3, description="Wheel on node 2")
    t2: int = Field(ge=6, description="Pinion on node 2")
    T3: int = Field(ge=3, description="Wheel on node 3")
    t3: int = Field(ge=6, description="Pinion on node 3")
    T4: int = Field(ge=3, description="Terminal wheel (node 4)")

    def as_tuple(self) -> tuple[int, int, int, int, int, int]:
        return (self.t1, self.T2, self.t2, self.T3, self.t3, self.T4)


class DecorationSpec(BaseModel):
    """Spoke crossing-out and arbor hole for each wheel."""

    spokes: int = Field(default=5, ge=0, le=12, description="Number of spokes (0 = solid)")
    spoke_width: float = Field(default=0.08, gt=0, description="Spoke width as a fraction of pitch diameter")
    rim_diameter: float = Field(
        default=0.8, gt=0, lt=1, description="Inner rim diameter as a fraction of pitch diameter"
    )
    hub_diameter: float = Field(
        default=0.2, gt=0, lt=1, description="Hub diameter as a fraction of pitch diameter"
    )
    hole_diameter: float = Field(
        default=1.0,
        ge=0,
        description="Arbor hole diameter in mm, not scaled with the module (0 = no hole)",
    )

    @model_validator(mode="after")
    def validate_hub_inside_rim(self) -> "DecorationSpec":
        if self.hub_diameter >= self.rim_diameter:
            raise ValueError("hub_diameter must be smaller than rim_diameter")
        return self


class TrainSpec(BaseModel):
    """Top-level specification for a four wheel train."""

    name: str = Field(min_length=1, description="Train identifier")
    module: float = Field(gt=0, description="Gear module in mm")
    initial_angle: float = Field(description="Angle of node 2 seen from node 1, degrees")
    span_length: float = Field(gt=0, description="Distance from node 1 to node 4 in mm")
    teeth: TeethSpec
    root_profile: Literal["square", "rounded"] = "rounded"
    pinion_family: Optional[Literal["A", "B", "C"]] = None
    wheel_thickness: float = Field(default=1.5, gt=0, description="Wheel face width in mm")
    pinion_thickness: float = Field(default=3.0, gt=0, description="Pinion face width in mm")
    decoration: DecorationSpec = Field(default_factory=DecorationSpec)
    render: RenderSettings = Field(default_factory=RenderSettings)

    @model_validator(mode="after")
    def validate_span_reachable(self) -> "TrainSpec":
        t1, T2, t2, T3, t3, T4 = self.teeth.as_tuple()
        reach = self.module * (t1 + T2 + t2 + T3 + t3 + T4) / 2
        if self.span_length > reach:
            raise ValueError(
                f"span_length ({self.span_length}) exceeds the sum of centre "
                f"distances ({reach})"
            )
        return self

    @model_validator(mode="after")
    def validate_hole_fits(self) -> "TrainSpec":
        hole = self.decoration.hole_diameter
        if hole <= 0:
            return self
        smallest = min(self.teeth.as_tuple())
        root_diameter = (smallest - math.pi) * self.module
        if hole >= root_diameter:
            raise ValueError(
                f"hole_diameter ({hole} mm) must be smaller than the root diameter "
                f"of the {smallest}-tooth gear ({root_diameter:.3f} mm); "
                f"use a smaller hole or 0 for none"
            )
        return self
