"""Texture coordinate (UV) re-mapping on uvkit meshes.

All functions here work on UV layer 0 of a mesh (see ``uvkit.mesh`` for
the layout) and rewrite the ``[u, v]`` lists in place, so references
obtained with ``getUVs(mesh, clone=False)`` see the changes.  Nothing
here adds or removes faces: UV layers stay the same length as the face
list.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from math import cos, radians, sin
from typing import List, Optional, Sequence

from uvkit.colors import Color
from uvkit.errors import InvalidArgument, PreconditionViolation
from uvkit.geom import isgoodnum, point
from uvkit.mesh import DebugLine, computeFaceNormals, computeVertexNormals, ismesh, meshbbox

logger = logging.getLogger(__name__)

UV = List[float]


def _check_mesh(m, what: str) -> None:
    if m is None:
        raise InvalidArgument(f"failed to {what}, mesh is None")
    if not ismesh(m):
        raise InvalidArgument(f"failed to {what}, argument is not a mesh")
    if not m[3]:
        raise PreconditionViolation(f"failed to {what}, mesh has no faces")


def _uv_layer(m, what: str) -> List[List[UV]]:
    _check_mesh(m, what)
    if not m[5] or not m[5][0]:
        raise PreconditionViolation(f"failed to {what}, mesh has no UVs")
    layer = m[5][0]
    if len(layer) != len(m[3]):
        raise PreconditionViolation(f"failed to {what}, UV count does not match face count")
    return layer


def _check_degree(degree, what: str) -> None:
    if not isgoodnum(degree) or degree != degree:
        raise InvalidArgument(f"failed to {what}, degree is invalid: {degree}")


def _set_from_vertices(m, layer, transform=None) -> None:
    verts = m[1]
    for face, uvs in zip(m[3], layer):
        for corner in range(3):
            v = verts[face[corner]]
            x, y = (v[0], v[1]) if transform is None else transform(v[0], v[1])
            uvs[corner][0] = x
            uvs[corner][1] = y


def planarProjectUV(m) -> None:
    """Project the mesh vertices onto the XY plane and normalize them
    into the unit square over the XY bounding box.  Every face corner
    gets ``((x - minx) / width, (y - miny) / height)``, written into the
    existing UV lists of layer 0.
    """
    layer = _uv_layer(m, "project UVs")
    mn, mx = meshbbox(m)
    width = mx[0] - mn[0]
    height = mx[1] - mn[1]
    if width == 0 or height == 0:
        raise PreconditionViolation("failed to project UVs, mesh has zero width or height")
    _set_from_vertices(m, layer, lambda x, y: ((x - mn[0]) / width, (y - mn[1]) / height))


def rotateUVAbsolute(degree: float, m) -> None:
    """Set each face corner UV to its vertex XY rotated about the z axis
    by ``-degree``.  Repeating the call with the same angle gives the
    same UVs; a zero angle makes the UVs equal the vertex XY values.
    """
    _check_degree(degree, "set UV rotation")
    layer = _uv_layer(m, "set UV rotation")
    r = radians(-degree)
    c, s = cos(r), sin(r)
    _set_from_vertices(m, layer, lambda x, y: (c * x - s * y, s * x + c * y))


def rotateUVIncremental(degree: float, m) -> None:
    """Rotate the current UVs about the UV origin by ``+degree``.  Each
    call adds to the previous rotation."""
    _check_degree(degree, "rotate UVs")
    layer = _uv_layer(m, "rotate UVs")
    r = radians(degree)
    c, s = cos(r), sin(r)
    for uvs in layer:
        for uv in uvs:
            u, v = uv[0], uv[1]
            uv[0] = c * u - s * v
            uv[1] = s * u + c * v


def matchUVsToVertices(m) -> None:
    """Reset every face corner UV to its vertex XY values."""
    layer = _uv_layer(m, "update UVs")
    _set_from_vertices(m, layer)


def flipFaceNormals(m) -> None:
    """Reverse the winding of every face by swapping its first and
    third vertex, swap the matching UV corners in every layer, and
    recompute the normals.  Flipping twice restores the mesh."""
    _check_mesh(m, "flip face normals")
    for face in m[3]:
        face[0], face[2] = face[2], face[0]
    for layer in m[5]:
        for uvs in layer:
            uvs[0], uvs[2] = uvs[2], uvs[0]
    computeFaceNormals(m)
    computeVertexNormals(m)


def getUVs(m, clone: bool = True) -> List[UV]:
    """Return the UVs of every face, three per face in face order.
    With ``clone`` false the returned lists are the mesh's own."""
    layer = _uv_layer(m, "get UVs")
    uvs = [uv for corners in layer for uv in corners]
    return deepcopy(uvs) if clone else uvs


def getUVLine(m) -> DebugLine:
    """A red debug line through every UV of the mesh, at z = 0."""
    return DebugLine([point(uv[0], uv[1]) for uv in getUVs(m)], Color.RED)


def scaleUVsToBounds(m, origin: Optional[Sequence[float]] = None) -> None:
    """Divide the existing UVs by the XY extents of the mesh, after
    subtracting ``origin`` if given.  Use after moving a mesh's vertices
    directly when its UVs hold vertex positions."""
    layer = _uv_layer(m, "scale UVs")
    mn, mx = meshbbox(m)
    width = mx[0] - mn[0]
    height = mx[1] - mn[1]
    if width == 0 or height == 0:
        raise PreconditionViolation("failed to scale UVs, mesh has zero width or height")
    ox, oy = (origin[0], origin[1]) if origin is not None else (0.0, 0.0)
    for uvs in layer:
        for uv in uvs:
            uv[0] = (uv[0] - ox) / width
            uv[1] = (uv[1] - oy) / height


def swapUV(m) -> None:
    """Exchange u and v on every UV, turning the texture a quarter turn
    and mirroring it."""
    layer = _uv_layer(m, "swap UVs")
    for uvs in layer:
        for uv in uvs:
            uv[0], uv[1] = uv[1], uv[0]
    logger.debug("swapped UVs on %d faces", len(layer))
