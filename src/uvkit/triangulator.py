"""Triangulation helpers for uvkit meshes.

We delegate to ``mapbox-earcut`` (the fast ear clipping implementation
used by Mapbox GL) to keep the logic compact and reliable.  The helpers
in this file normalise uvkit point lists into the format expected by
earcut and hand back index triangles, so that callers can build mesh
faces over their own vertex lists.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

try:
    import mapbox_earcut as _earcut
except ImportError as exc:  # pragma: no cover - import guard
    raise ImportError(
        "mapbox-earcut must be installed to triangulate polygons"
    ) from exc

from uvkit.geom import epsilon

Point2D = Tuple[float, float]
Triangle = Tuple[int, int, int]


def triangulate_polygon(outer: Sequence[Sequence[float]]
                        ) -> Tuple[List[int], List[Triangle]]:
    """Triangulate the XY projection of the simple polygon ``outer``.

    Returns ``(loop, triangles)``.  ``loop`` lists the indices into
    ``outer`` that survived cleaning: consecutive near-duplicates and a
    closing point equal to the first are dropped.  ``triangles`` holds
    index triples into ``outer``, each wound counter-clockwise so that
    the faces look up the +z axis whatever the input winding.  Fewer
    than three usable points give an empty triangle list.
    """

    loop = _prepare_loop(outer)
    if len(loop) < 3:
        return loop, []

    vertices = np.asarray([(float(outer[i][0]), float(outer[i][1])) for i in loop],
                          dtype=np.float64).reshape(-1, 2)
    ring_array = np.asarray([len(loop)], dtype=np.uint32)
    indices = _earcut.triangulate_float64(vertices, ring_array)

    triangles: List[Triangle] = []
    for i in range(0, len(indices), 3):
        a, b, c = (loop[int(indices[i])],
                   loop[int(indices[i + 1])],
                   loop[int(indices[i + 2])])
        if _signed_area([_xy(outer[a]), _xy(outer[b]), _xy(outer[c])]) < 0:
            b, c = c, b
        triangles.append((a, b, c))
    return loop, triangles


def signed_area(points: Sequence[Sequence[float]]) -> float:
    """Signed XY area of a closed loop, positive when counter-clockwise."""
    return _signed_area([_xy(p) for p in points])


def _xy(pt: Sequence[float]) -> Point2D:
    return float(pt[0]), float(pt[1])


def _prepare_loop(points: Sequence[Sequence[float]]) -> List[int]:
    loop: List[int] = []
    for i, pt in enumerate(points):
        if loop and _near(_xy(points[loop[-1]]), _xy(pt)):
            continue
        loop.append(i)
    if len(loop) > 1 and _near(_xy(points[loop[0]]), _xy(points[loop[-1]])):
        loop.pop()
    return loop


def _near(p1: Point2D, p2: Point2D) -> bool:
    return abs(p1[0] - p2[0]) <= epsilon and abs(p1[1] - p2[1]) <= epsilon


def _signed_area(loop: Sequence[Point2D]) -> float:
    total = 0.0
    for i, (x0, y0) in enumerate(loop):
        x1, y1 = loop[(i + 1) % len(loop)]
        total += x0 * y1 - x1 * y0
    return total / 2.0
