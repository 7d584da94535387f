"""Evaluate solid expression trees with CadQuery."""

from __future__ import annotations

from functools import reduce
from typing import Optional

import cadquery as cq

from ..models.solid import (
    Circle,
    Cylinder,
    Difference,
    Extrude,
    Intersection,
    Polygon,
    Rotate,
    Solid,
    Translate,
    Union,
)


class CadQueryRenderer:
    """Turns an expression tree into a CadQuery Workplane.

    2D primitives are extruded by the height of the nearest enclosing
    ``Extrude``; a bare 2D node at the root is an error.
    """

    def render(self, node: Solid) -> cq.Workplane:
        return self._render(node, None)

    def _render(self, node: Solid, height: Optional[float]) -> cq.Workplane:
        if isinstance(node, Extrude):
            return self._render(node.child, node.height)

        if isinstance(node, Cylinder):
            return cq.Workplane("XY").circle(node.radius).extrude(node.height)

        if isinstance(node, Circle):
            self._require_height(node, height)
            return (
                cq.Workplane("XY")
                .center(*node.center)
                .circle(node.radius)
                .extrude(height)
            )

        if isinstance(node, Polygon):
            self._require_height(node, height)
            return cq.Workplane("XY").polyline(list(node.points)).close().extrude(height)

        if isinstance(node, Union):
            parts = [self._render(child, height) for child in node.children]
            return reduce(lambda a, b: a.union(b), parts)

        if isinstance(node, Intersection):
            parts = [self._render(child, height) for child in node.children]
            return reduce(lambda a, b: a.intersect(b), parts)

        if isinstance(node, Difference):
            result = self._render(node.base, height)
            for cutter in node.cutters:
                result = result.cut(self._render(cutter, height))
            return result

        if isinstance(node, Translate):
            return self._render(node.child, height).translate(node.offset)

        if isinstance(node, Rotate):
            return self._render(node.child, height).rotate(
                (0, 0, 0), (0, 0, 1), node.angle
            )

        raise TypeError(f"Cannot render node of type {type(node).__name__}")

    @staticmethod
    def _require_height(node: Solid, height: Optional[float]) -> None:
        if height is None:
            raise ValueError(f"{type(node).__name__} must be wrapped in an Extrude")
