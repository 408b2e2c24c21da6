## contour, side and curve sampling operations for uvkit
## Copyright (c) uvkit contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""contours, sides and sampled curves for **uvkit**

A contour is a list of points read as a closed polygon (the last point
wraps to the first) or, for ``completeContour()``, an open polyline.
Clockwise XY winding is assumed by the offsetting operations: with a
positive padding, ``offsetContour()`` grows a clockwise contour
outward.

A side is a ``[start, end]`` pair of 3D points.  ``sides()`` derives
them from a contour with wrap-around, so side ``i`` runs from point
``i`` to point ``i+1``.

Curve sampling follows the ellipse-curve rules: the requested sweep is
wrapped into ``[0, 2pi]``, and a clockwise sweep runs the other way
round.  ``segments`` divisions always yield ``segments+1`` points, the
first and last included.

"""

from math import *
from enum import Enum
import sys

import mpmath as mpm

import uvkit.xform as xform
from uvkit.geom import *
from uvkit.errors import InvalidArgument, PreconditionViolation


class Curve(Enum):
    """Kinds of curved line segment understood by
    ``curvedSegmentAtOrigin()``."""
    BEZIER = "bezier"
    QUADRATIC = "quadratic"
    CIRCLE = "circle"
    SEMICIRCLE = "semicircle"
    FREEFORM = "freeform"

    @classmethod
    def fromValue(cls, value):
        """Look up a curve kind by its string value, ``None`` if unknown."""
        for c in cls:
            if c.value == value:
                return c
        return None

    def __str__(self):
        return self.value


## sides
## -----

def sides(points):
    """return the list of ``[start, end]`` sides of the closed contour
    ``points``, as 3D points with z = 0"""
    if not points:
        raise InvalidArgument('cannot create sides: points is None or empty')
    n = len(points)
    return [[point(points[i][0],points[i][1]),
             point(points[(i+1) % n][0],points[(i+1) % n][1])]
            for i in range(n)]

def sideDirection(side):
    """ unit vector from the start to the end of ``side`` """
    return normalize(sub(side[1],side[0]))

def sideNormal(side):
    """ ``sideDirection()`` turned a quarter turn counter-clockwise """
    d = sideDirection(side)
    rotate90CCW(d)
    return d

def sideCenter(side):
    return centerpoint(side[0],side[1])

def sideLength(side):
    return dist(side[0],side[1])

def findNormal(start,end):
    """
    Unit normal of the segment from ``start`` to ``end``: the direction
    of travel rotated 90 degrees counter-clockwise about +z.  A
    zero-length segment gives the zero vector.
    """
    if start is None or end is None:
        raise InvalidArgument('cannot find normal: start or end is None')
    d = sub(end,start)
    return normalize([-d[1],d[0],d[2],1.0])

## offsetting and thickening
## -------------------------

def _polarAngle(v):
    ## XY polar angle in [0, 2pi)
    return atan2(-float(v[1]),-float(v[0])) + pi

def offsetContour(padding,points):
    """
    Return the mitered offset of the closed contour ``points``.  Each
    vertex is replaced by the corner of the offset outline: the vector
    ``(padding, 0)`` is sheared by the half-angle of the corner, turned
    to face along the outgoing edge and moved to the vertex.  The first
    result point is repeated at the end to close the outline.

    With clockwise input, positive ``padding`` moves the contour
    outward.  Near-straight or near-reversing corners give very large
    but finite miter points; nothing is clamped.
    """
    if not points:
        raise InvalidArgument('cannot offset contour: points is None or empty')
    if len(points) < 3:
        raise PreconditionViolation('cannot offset contour: fewer than three points')
    n = len(points)
    offset = [padding,0.0,0.0,1.0]
    result = []
    for i in range(n):
        cur = points[i]
        v1 = sub(points[i-1],cur)
        v2 = sub(points[(i+1) % n],cur)
        a2 = _polarAngle(v2)
        halfAngle = (a2 - _polarAngle(v1))*0.5
        shift = tan(halfAngle - pi*0.5)
        tA = a2 + pi*0.5
        rot = xform.Matrix([[cos(tA),-sin(tA),0,0],
                            [sin(tA),cos(tA),0,0],
                            [0,0,1,0],
                            [0,0,0,1]])
        mat = xform.Translation([cur[0],cur[1],0.0]).mul(rot).mul(xform.Shear(yx=-shift))
        q = mat.mul(offset)
        result.append(point2(q[0],q[1]))
    result.append(list(result[0]))
    return result

def completeContour(offset,points):
    """
    Thicken the open polyline ``points`` into a closed ribbon ``offset``
    wide.  The result holds the input points in order, followed by
    the offset points walking back from the end.

    Each offset point sits along its vertex normal: the first and last
    vertices use the normal of their single edge, interior vertices the
    normal of the chord from their previous to their next neighbour.

    Consecutive coincident input points mark a junction between two
    sides.  When the combined normal there is 40 to 50 degrees from the
    previous normal (a right-angle turn), the pair is replaced by a
    single corner point pushed out by ``offset * sqrt(2)``.  Finally,
    adjacent points closer than ``dedupEpsilon`` are collapsed.
    """
    if not points:
        raise InvalidArgument('cannot complete contour: points is None or empty')
    n = len(points)
    if n < 2:
        raise PreconditionViolation('cannot complete contour: fewer than two points')

    normals = []
    shape = []
    for i in range(n):
        if i == 0:
            normals.append(findNormal(points[0],points[1]))
        elif i < n-1:
            normals.append(findNormal(points[i-1],points[i+1]))
        else:
            normals.append(findNormal(points[i-1],points[i]))
        shape.append(point(points[i]))

    i = n-1
    while i >= 0:
        shape.append(add(points[i],scale3(normals[i],offset)))
        if i < n-1 and i-2 >= 0 and equals(points[i],points[i-1],dedupEpsilon):
            prevNormal = normals[i-1]
            normal = normalize(add(normals[i],prevNormal))
            angle = abs(angleBetweenDeg(normal,prevNormal))
            if 40 <= angle <= 50:
                shape.pop()
                scale = min(angle/45.0,1.0)*sqrt(2)
                shape.append(add(points[i],scale3(normal,offset*scale)))
                ## skip the coincident partner
                i -= 1
        i -= 1

    final = []
    for p in shape:
        if not final or not equals(p,final[-1],dedupEpsilon):
            final.append(p)
    return final

## curve sampling
## --------------

def _ellipsePoints(cx,cy,rx,ry,start,end,clockwise,divisions):
    eps = sys.float_info.epsilon
    delta = end - start
    samePoints = abs(delta) < eps
    while delta < 0:
        delta += pi2
    while delta > pi2:
        delta -= pi2
    if delta < eps:
        delta = 0.0 if samePoints else pi2
    if clockwise and not samePoints:
        delta = -pi2 if delta == pi2 else delta - pi2
    pts = []
    for d in range(divisions+1):
        a = start + delta*d/divisions
        pts.append(point(cx + rx*cos(a),cy + ry*sin(a)))
    return pts

def _checkSegments(segments):
    if not isinstance(segments,int) or isinstance(segments,bool) or segments < 1:
        raise InvalidArgument('segment count must be a positive integer, got {}'.format(segments))

def pointsOnArc(radius,segments=12,start=0.0,end=pi2,clockwise=False):
    """return ``segments+1`` points on the arc of ``radius`` about the
    origin from ``start`` to ``end`` radians"""
    _checkSegments(segments)
    return _ellipsePoints(0.0,0.0,radius,radius,start,end,clockwise,segments)

def pointsOnCircle(rx,ry,segments=12,start=0.0,end=pi2,clockwise=True):
    """return ``segments+1`` points on the ellipse with radii ``rx`` and
    ``ry`` about the origin, clockwise unless asked otherwise"""
    _checkSegments(segments)
    return _ellipsePoints(0.0,0.0,rx,ry,start,end,clockwise,segments)

## line helpers
## ------------

def lineSegments(points):
    """ closed list of ``[p_i, p_i+1]`` segments around ``points`` """
    if points is None:
        raise InvalidArgument('cannot create line segments: points is None')
    n = len(points)
    return [[points[i],points[(i+1) % n]] for i in range(n)]

def segmentAtOrigin(a,b,center=True):
    """a two-point line along +x with the length of ``a``..``b``,
    centered on the origin unless ``center`` is false"""
    if a is None or b is None:
        raise InvalidArgument('unable to create a line segment at origin: one or more parameters is None')
    d = dist(a,b)
    shift = -d/2.0 if center else 0.0
    return [point(shift,0.0),point(d+shift,0.0)]

def _bezier(ctrl,divisions):
    pts = []
    for k in range(divisions+1):
        t = k/divisions
        s = 1.0 - t
        if len(ctrl) == 3:
            w = [s*s,2*s*t,t*t]
        else:
            w = [s*s*s,3*s*s*t,3*s*t*t,t*t*t]
        pts.append(point(sum(wi*c[0] for wi,c in zip(w,ctrl)),
                         sum(wi*c[1] for wi,c in zip(w,ctrl))))
    return pts

def curvedSegmentAtOrigin(a,b,curve,control,smoothness=16):
    """
    Sample a curved line spanning the distance from ``a`` to ``b``.

    ``QUADRATIC`` and ``BEZIER`` curves run from the origin to
    ``(d, 0)`` and are then centered on the origin; ``control`` gives
    the control point offset (quadratic: ``(d/2 + control.x,
    control.y)``; bezier: both handles at height ``control.y``).
    ``CIRCLE`` is a full circle of radius ``control.y`` about the
    origin.  ``SEMICIRCLE`` is a clockwise full circle of radius
    ``control.y`` centered at ``(-d/2, 0)``, starting at its leftmost
    point; use ``semicirclePoints()`` to trim it.

    Bezier curves are sampled at ``smoothness`` divisions, circles at
    ``2*smoothness``.
    """
    if a is None or b is None or curve is None or control is None:
        raise InvalidArgument('unable to create a curved segment at origin: one or more parameters is None')
    _checkSegments(smoothness)
    d = dist(a,b)
    if curve == Curve.QUADRATIC:
        pts = _bezier([[0.0,0.0],[d/2.0+control[0],control[1]],[d,0.0]],smoothness)
    elif curve == Curve.BEZIER:
        pts = _bezier([[0.0,0.0],[0.0,control[1]],[d,control[1]],[d,0.0]],smoothness)
    elif curve == Curve.CIRCLE:
        return _ellipsePoints(0.0,0.0,control[1],control[1],0.0,pi2,False,2*smoothness)
    elif curve == Curve.SEMICIRCLE:
        return _ellipsePoints(-d/2.0,0.0,control[1],control[1],pi,3*pi,True,2*smoothness)
    else:
        raise InvalidArgument('failed to create curved segment, curve type {} is not supported'.format(curve))
    return [add(p,[-d/2.0,0.0,0.0]) for p in pts]

def semicirclePoints(xlimit,a,b,control):
    """The ``SEMICIRCLE`` curve for ``a``..``b`` trimmed to the part
    right of ``xlimit``, closed off with points on the ``xlimit`` line."""
    pts = curvedSegmentAtOrigin(a,b,Curve.SEMICIRCLE,control)
    trimmed = []
    for p in pts:
        if xlimit < p[0]:
            if not trimmed:
                trimmed.append(point(xlimit,p[1]))
            trimmed.append(p)
    if trimmed:
        trimmed.append(point(xlimit,trimmed[-1][1]))
    return trimmed

def _forward(start,end,p):
    return dot(sub(end,start),sub(p,start)) >= 0

def lineIntersectionForward(a0,a1,b0,b1):
    """
    Intersection of the XY lines through ``a0``-``a1`` and ``b0``-``b1``,
    or ``None``.  The intersection must lie ahead of both start points
    in their direction of travel; an intersection behind either start
    counts as none.  Parallel lines never intersect.  The determinant
    is evaluated with mpmath so that nearly parallel lines are judged
    consistently.
    """
    if a0 is None or a1 is None or b0 is None or b1 is None:
        return None
    if list(a0[:3]) == list(a1[:3]) and list(b0[:3]) == list(b1[:3]):
        return None
    ax, ay = mpm.mpf(a0[0]), mpm.mpf(a0[1])
    bx, by = mpm.mpf(a1[0]), mpm.mpf(a1[1])
    cx, cy = mpm.mpf(b0[0]), mpm.mpf(b0[1])
    dx, dy = mpm.mpf(b1[0]), mpm.mpf(b1[1])

    A1 = by - ay
    B1 = ax - bx
    C1 = A1*ax + B1*ay
    A2 = dy - cy
    B2 = cx - dx
    C2 = A2*cx + B2*cy

    det = A1*B2 - A2*B1
    if det == 0:
        return None
    p = point(float((B2*C1 - B1*C2)/det),float((A1*C2 - A2*C1)/det))
    if _forward(a0,a1,p) and _forward(b0,b1,p):
        return p
    return None
