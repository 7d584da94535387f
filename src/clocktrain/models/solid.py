"""Solid expression tree.

Generators never touch a CAD kernel. They return trees of the immutable nodes
below, which a renderer (see ``clocktrain.export.renderer``) evaluates later.

2D nodes (``Circle``, ``Polygon``) only become solids under an ``Extrude``.
The boolean and transform nodes work on either 2D or 3D children; the
renderer carries the extrusion height down to the primitives.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple, Union as TypingUnion

Point = Tuple[float, float]


@dataclass(frozen=True)
class Circle:
    """Disk of ``radius`` centred at ``center`` in the XY plane."""

    radius: float
    center: Point = (0.0, 0.0)


@dataclass(frozen=True)
class Polygon:
    """Closed polygon through ``points`` (XY plane)."""

    points: tuple[Point, ...]


@dataclass(frozen=True)
class Cylinder:
    """Cylinder on the Z axis, base at Z=0."""

    radius: float
    height: float


@dataclass(frozen=True)
class Extrude:
    """Extrude a 2D tree along +Z by ``height``."""

    child: "Solid"
    height: float


@dataclass(frozen=True)
class Union:
    children: tuple["Solid", ...]


@dataclass(frozen=True)
class Intersection:
    children: tuple["Solid", ...]


@dataclass(frozen=True)
class Difference:
    """``base`` with every node of ``cutters`` removed."""

    base: "Solid"
    cutters: tuple["Solid", ...]


@dataclass(frozen=True)
class Translate:
    child: "Solid"
    offset: tuple[float, float, float]


@dataclass(frozen=True)
class Rotate:
    """Rotate ``child`` by ``angle`` degrees about the Z axis."""

    child: "Solid"
    angle: float


Solid = TypingUnion[
    Circle, Polygon, Cylinder, Extrude, Union, Intersection, Difference, Translate, Rotate
]


def union(*children: Solid) -> Solid:
    """Union helper that collapses the single-child case."""
    if len(children) == 1:
        return children[0]
    return Union(tuple(children))


def children_of(node: Solid) -> tuple[Solid, ...]:
    """Direct children of a node, in evaluation order."""
    if isinstance(node, (Union, Intersection)):
        return node.children
    if isinstance(node, Difference):
        return (node.base,) + node.cutters
    if isinstance(node, (Extrude, Translate, Rotate)):
        return (node.child,)
    return ()


def walk(node: Solid) -> Iterator[Solid]:
    """Depth-first iteration over a tree, parents before children."""
    yield node
    for child in children_of(node):
        yield from walk(child)
