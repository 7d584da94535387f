"""Tooth proportions after BS 978 Part 2.

Three cases are covered:

- wheels driving a pinion: addendum and flank radius factors depend on the
  pinion leaf count and the gear ratio;
- pinions driven by a wheel: three tooth forms (A, B, C) with fixed
  proportions that change at 10 leaves;
- wheels and pinions that are sometimes driven (motion work): proportions
  depend only on the tooth count.

Tables are ordered mappings from the lookup variable to ``(f, fr)`` pairs.
Values between breakpoints are linearly interpolated and values outside a
table clamp to the nearest end.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from typing import Mapping, Optional, Sequence

from ..errors import InvalidSelectionError
from ..models.geometry import GearSpec, PinionFamily

# Wheel driving pinion: pinion leaves -> {ratio: (addendum, flank radius)}
# Not transcribed from BS 978. Each addendum is the pointed rack-limit
# addendum for the leaf count, h(t) = (t/4)(1 - cos th) with th - sin th = pi/t,
# scaled by a ratio factor; the flank radius is the addendum times a second
# ratio factor. Fitted so the 10-leaf, ratio 5 entry is the published
# (1.554, 2.290).
DRIVING_WHEEL_TABLE: dict[int, dict[float, tuple[float, float]]] = {
    6: {
        3: (1.214, 1.748),
        4: (1.242, 1.813),
        5: (1.264, 1.864),
        6: (1.278, 1.898),
        8: (1.299, 1.949),
        10: (1.314, 1.984),
        12: (1.321, 2.001),
    },
    7: {
        3: (1.294, 1.863),
        4: (1.324, 1.933),
        5: (1.347, 1.987),
        6: (1.362, 2.023),
        8: (1.385, 2.078),
        10: (1.400, 2.114),
        12: (1.408, 2.133),
    },
    8: {
        3: (1.366, 1.967),
        4: (1.398, 2.041),
        5: (1.422, 2.097),
        6: (1.438, 2.135),
        8: (1.462, 2.193),
        10: (1.478, 2.232),
        12: (1.486, 2.251),
    },
    9: {
        3: (1.432, 2.062),
        4: (1.466, 2.140),
        5: (1.491, 2.199),
        6: (1.508, 2.239),
        8: (1.533, 2.300),
        10: (1.550, 2.341),
        12: (1.559, 2.362),
    },
    10: {
        3: (1.493, 2.150),
        4: (1.529, 2.232),
        5: (1.554, 2.290),
        6: (1.573, 2.336),
        8: (1.599, 2.399),
        10: (1.616, 2.440),
        12: (1.625, 2.462),
    },
    # 11 leaves: 10-leaf column
    12: {
        3: (1.603, 2.308),
        4: (1.641, 2.396),
        5: (1.669, 2.462),
        6: (1.688, 2.507),
        8: (1.716, 2.574),
        10: (1.735, 2.620),
        12: (1.745, 2.644),
    },
    # 13 leaves: 12-leaf column
    14: {
        3: (1.701, 2.449),
        4: (1.741, 2.542),
        5: (1.771, 2.612),
        6: (1.791, 2.660),
        8: (1.821, 2.732),
        10: (1.841, 2.780),
        12: (1.851, 2.804),
    },
    16: {
        3: (1.788, 2.575),
        4: (1.830, 2.672),
        5: (1.862, 2.746),
        6: (1.883, 2.796),
        8: (1.915, 2.873),
        10: (1.936, 2.923),
        12: (1.946, 2.948),
    },
    # above 16 leaves: 16-leaf column
}

# Pinion driven by a wheel: family -> (addendum, flank radius, thickness)
# for up to 10 leaves and for more than 10 leaves.
DRIVEN_PINION_FORMS: dict[PinionFamily, dict[str, tuple[float, float, float]]] = {
    PinionFamily.A: {"small": (0.525, 0.525, 1.05), "large": (0.625, 0.625, 1.25)},
    PinionFamily.B: {"small": (0.670, 0.700, 1.05), "large": (0.805, 0.840, 1.25)},
    PinionFamily.C: {"small": (0.855, 1.050, 1.05), "large": (1.050, 1.250, 1.25)},
}

# Sometimes driven: teeth -> (addendum, flank radius)
# Not transcribed from BS 978: breakpoints chosen to rise smoothly towards
# the rack form and keep every profile non-degenerate.
SOMETIMES_DRIVEN_TABLE: dict[int, tuple[float, float]] = {
    6: (0.720, 0.900),
    8: (0.735, 0.935),
    10: (0.750, 0.965),
    12: (0.760, 0.985),
    15: (0.772, 1.010),
    20: (0.785, 1.040),
    30: (0.800, 1.075),
    40: (0.810, 1.095),
    60: (0.820, 1.115),
    80: (0.826, 1.125),
    100: (0.830, 1.130),
}

SOMETIMES_DRIVEN_THICKNESS = 1.41


def interpolate(table: Mapping[float, Sequence[float]], x: float) -> tuple[float, ...]:
    """Piecewise-linear lookup with flat extrapolation at both ends.

    ``table`` keys must be in ascending order. An ``x`` equal to a breakpoint
    returns that row unchanged.
    """
    keys = list(table)
    if x <= keys[0]:
        return tuple(table[keys[0]])
    if x >= keys[-1]:
        return tuple(table[keys[-1]])

    i = bisect_right(keys, x)
    x0, x1 = keys[i - 1], keys[i]
    if x == x0:
        return tuple(table[x0])

    frac = (x - x0) / (x1 - x0)
    return tuple(a + (b - a) * frac for a, b in zip(table[x0], table[x1]))


def clamp_column(columns: Sequence[int], key: int) -> int:
    """Largest defined column not above ``key``, or the first column."""
    candidates = [c for c in columns if c <= key]
    return max(candidates) if candidates else min(columns)


def driving_wheel_factors(wheel_teeth: int, pinion_leaves: int) -> tuple[float, float]:
    """``(addendum, flank radius)`` factors for a wheel driving a pinion.

    Leaf counts without their own column share the next smaller one: 11 uses
    10, 13 uses 12, anything above 16 uses 16.
    """
    column = clamp_column(sorted(DRIVING_WHEEL_TABLE), pinion_leaves)
    ratio = wheel_teeth / pinion_leaves
    f, fr = interpolate(DRIVING_WHEEL_TABLE[column], ratio)
    return f, fr


def driven_pinion_family(leaves: int, family: "str | PinionFamily | None" = None) -> PinionFamily:
    """Requested family, or the automatic choice for this leaf count."""
    chosen = PinionFamily.parse(family)
    if chosen is not None:
        return chosen
    if leaves <= 7:
        return PinionFamily.C
    if leaves <= 9:
        return PinionFamily.B
    return PinionFamily.A


def driven_pinion_factors(
    leaves: int, family: "str | PinionFamily | None" = None
) -> tuple[float, float, float]:
    """``(addendum, flank radius, thickness)`` factors for a driven pinion."""
    forms = DRIVEN_PINION_FORMS[driven_pinion_family(leaves, family)]
    return forms["small"] if leaves <= 10 else forms["large"]


def sometimes_driven_factors(teeth: int) -> tuple[float, float]:
    f, fr = interpolate(SOMETIMES_DRIVEN_TABLE, teeth)
    return f, fr


def driving_wheel_profile(wheel_teeth: int, pinion_leaves: int, module: float = 1.0) -> GearSpec:
    """GearSpec for a wheel driving a pinion of ``pinion_leaves``."""
    f, fr = driving_wheel_factors(wheel_teeth, pinion_leaves)
    return GearSpec(wheel_teeth, module, f, fr, math.pi / 2)


def driven_pinion_profile(
    leaves: int, module: float = 1.0, family: "str | PinionFamily | None" = None
) -> GearSpec:
    """GearSpec for a pinion driven by a wheel."""
    f, fr, w = driven_pinion_factors(leaves, family)
    return GearSpec(leaves, module, f, fr, w)


def sometimes_driven_profile(teeth: int, module: float = 1.0) -> GearSpec:
    """GearSpec for motion-work wheels and pinions."""
    f, fr = sometimes_driven_factors(teeth)
    return GearSpec(teeth, module, f, fr, SOMETIMES_DRIVEN_THICKNESS)


def select_profile(
    role: str,
    teeth: int,
    module: float = 1.0,
    mate: Optional[int] = None,
    family: "str | PinionFamily | None" = None,
) -> GearSpec:
    """Dispatch on role name: driving-wheel, driven-pinion or sometimes-driven."""
    if role == "driving-wheel":
        if mate is None:
            raise ValueError("driving-wheel profiles need the mating pinion leaf count")
        return driving_wheel_profile(teeth, mate, module)
    if role == "driven-pinion":
        return driven_pinion_profile(teeth, module, family)
    if role == "sometimes-driven":
        return sometimes_driven_profile(teeth, module)
    raise InvalidSelectionError(f"Unknown profile role: {role!r}")
