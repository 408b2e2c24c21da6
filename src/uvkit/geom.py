## point and vector algebra for uvkit
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

"""point and vector algebra for **uvkit**

====================
OVERVIEW
====================

The uvkit.geom module provides the stateless point and vector
operations that everything else in **uvkit** is built on: conversions
between 2D and 3D points, centers and centroids, angles and distances,
plane projection, inside/outside testing, corner classification, and
batch rotate/scale/flip of point lists around a pivot.

constants
=========

uvkit.geom provides the tolerance "constants" below.  Redefine these at
your peril.

- ``epsilon`` -- numerical zero for degeneracy checks (5E-6)
- ``equalsEpsilon`` -- default distance tolerance for ``equals()`` (0.01)
- ``segmentTolerance`` -- tolerance for ``isOnSegment()`` (0.001)
- ``dedupEpsilon`` -- tolerance for dropping adjacent duplicate contour
  points (0.001)

points
======

A 3D point is a list of four numbers, ``[x, y, z, 1.0]``.  The
trailing ``w`` coordinate is the homogeneous normalization factor, so
that points can be pushed through the 4x4 matrices of ``uvkit.xform``
directly.  A 2D point is a list of two numbers, ``[x, y]``.  Use the
``point()`` and ``point2()`` convenience functions to make them: ::

   p1 = point(0, 0)            # [0, 0, 0, 1.0]
   p2 = point(2.0, -2.0, 5.0)  # [2.0, -2.0, 5.0, 1.0]
   p3 = point2(1, 2)           # [1, 2]

Functions that read points accept any indexable with at least two
numeric components; a missing z reads as zero.  Functions that mutate
points in place (``rotateAroundPoint()`` and friends) write back into
the caller's lists, and only write z when the list has one.

equality
========

Point equality is approximate: ``equals(a, b, eps)`` is true when the
squared distance between ``a`` and ``b`` is no more than ``eps**2``.
Chained comparisons near the tolerance boundary are not transitive.

errors
======

Construction-style functions raise ``uvkit.errors.InvalidArgument`` on
``None``, empty or NaN input.  The inside-testing predicates
``pointInPolygon()``, ``isPointInsidePoints()`` and
``isPointInsideShape2D()`` never raise; they answer ``False``.

"""

from math import *
from copy import deepcopy
import json
import logging

import numpy as np

import uvkit.xform as xform
from uvkit.errors import InvalidArgument

logger = logging.getLogger(__name__)

## constants
epsilon = 0.000005
equalsEpsilon = 0.01
segmentTolerance = 0.001
dedupEpsilon = 0.001
pi2 = 2.0*pi

## operations on scalars
## -----------------------

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n,bool)) and isinstance(n,(int,float))

def close(a,b):
    """ are two scalars the same within epsilon
    """
    return abs(a-b) < epsilon

def _z(p):
    return p[2] if len(p) > 2 else 0.0

## points
## ------

def point(x=0.0,y=0.0,z=0.0):
    """Make a 3D point ``[x, y, z, 1.0]``.  If ``x`` is a list or tuple,
    copy its x, y (and z, if present) components instead."""
    if isinstance(x,(list,tuple)):
        return [x[0],x[1],_z(x),1.0]
    return [x,y,z,1.0]

def point2(x=0.0,y=0.0):
    """Make a 2D point ``[x, y]``."""
    if isinstance(x,(list,tuple)):
        return [x[0],x[1]]
    return [x,y]

def ispoint(x):
    """ is ``x`` something we can read as a point? """
    return isinstance(x,(list,tuple)) and 2 <= len(x) <= 4 and \
        all(isgoodnum(c) for c in x[:3])

def vstr(a):
    """ compact string form of a point or list of points """
    if ispoint(a):
        n = 3 if len(a) > 2 else 2
        return '[' + ', '.join('{:g}'.format(c) for c in a[:n]) + ']'
    if isinstance(a,(list,tuple)):
        return '[' + ', '.join(vstr(x) for x in a) + ']'
    return str(a)

## R^3 -> R^3 functions: ignore w component
## ------------------------------------------------

def add(a,b):
    """ 3 vector, `a + b`"""
    return [a[0]+b[0],a[1]+b[1],_z(a)+_z(b),1.0]

def sub(a,b):
    """ 3 vector, `a - b`"""
    return [a[0]-b[0],a[1]-b[1],_z(a)-_z(b),1.0]

def scale3(a,c):
    """ 3 vector ``a`` times scalar ``c``"""
    return [a[0]*c,a[1]*c,_z(a)*c,1.0]

def cross(a,b):
    """ 3 vector cross product `a x b`"""
    az = _z(a)
    bz = _z(b)
    return [ a[1]*bz - az*b[1],
             az*b[0] - a[0]*bz,
             a[0]*b[1] - a[1]*b[0],
             1.0 ]

def dot(a,b):
    """ 3 vector ``a`` dot ``b`` """
    return a[0]*b[0]+a[1]*b[1]+_z(a)*_z(b)

def mag(a):
    """ magnitude of 3 vector ``a``"""
    return sqrt(dot(a,a))

def dist(a,b):
    """ euclidean distance between points ``a`` and ``b``"""
    return mag(sub(a,b))

def distsq(a,b):
    """ squared euclidean distance between points ``a`` and ``b``"""
    d = sub(a,b)
    return dot(d,d)

def normalize(a):
    """return ``a`` scaled to unit length.  The zero vector stays zero."""
    m = mag(a)
    if m == 0:
        return point(0,0,0)
    return scale3(a,1.0/m)

def vclose(a,b):
    """ are two points the same within epsilon """
    return close(dist(a,b),0)

## conversions
## -----------

def to2d(p):
    """ drop the z component of ``p``, giving the top-down 2D point """
    if p is None:
        raise InvalidArgument('cannot convert point to 2D: point is None')
    return [p[0],p[1]]

def to2ds(points):
    """ batch form of ``to2d()`` """
    if points is None:
        raise InvalidArgument('cannot convert points to 2D: points is None')
    return [to2d(p) for p in points]

def to3d(p):
    """ lift ``p`` to a 3D point with z = 0 """
    if p is None:
        raise InvalidArgument('cannot convert point to 3D: point is None')
    return [p[0],p[1],0.0,1.0]

def to3ds(points):
    """ batch form of ``to3d()`` """
    if points is None:
        raise InvalidArgument('cannot convert points to 3D: points is None')
    return [to3d(p) for p in points]

def to3dsFrom2dArray(rows):
    """ convert rows of ``[x, y]`` numbers to 3D points """
    if rows is None:
        raise InvalidArgument('cannot convert 2d array: rows is None')
    return [point(r[0],r[1]) for r in rows]

def pointsFromJSON(text):
    """Parse a JSON list of ``{"x":..,"y":..,"z":..}`` objects into 3D
    points.  A missing z is read as zero."""
    if not text:
        raise InvalidArgument('cannot parse points: JSON text is empty or None')
    return [point(o['x'],o['y'],o.get('z',0.0)) for o in json.loads(text)]

def points2FromJSON(text):
    """ JSON ``{"x":..,"y":..}`` objects to 2D points """
    if not text:
        raise InvalidArgument('cannot parse points: JSON text is empty or None')
    return [point2(o['x'],o['y']) for o in json.loads(text)]

def clones(points):
    """ value copies of a point list """
    if points is None:
        raise InvalidArgument('cannot clone points: points is None')
    return deepcopy(list(points))

## simple arithmetic on points, with argument checks
## --------------------------------------------------

def centerpoint(a,b):
    """ midpoint of ``a`` and ``b`` """
    if a is None or b is None:
        raise InvalidArgument('cannot compute center point: one or both points are None')
    return scale3(add(a,b),0.5)

def addvector(base,delta):
    """ the point ``base`` moved by vector ``delta`` """
    if base is None or delta is None:
        raise InvalidArgument('cannot add vectors: one or both vectors are None')
    return add(base,delta)

def vectorbetween(tail,head):
    """ the vector pointing from ``tail`` to ``head``, `head - tail` """
    if tail is None or head is None:
        raise InvalidArgument('cannot create vector: one or both points are None')
    return sub(head,tail)

def invert(v):
    """ negate the x and y components of ``v``, keeping z """
    if v is None:
        raise InvalidArgument('cannot invert vector: vector is None')
    return [-v[0],-v[1],_z(v),1.0]

def rotate90CW(v):
    """ rotate XY vector ``v`` a quarter turn clockwise, in place """
    if v is not None:
        v[0],v[1] = v[1],-v[0]

def rotate90CCW(v):
    """ rotate XY vector ``v`` a quarter turn counter-clockwise, in place """
    if v is not None:
        v[0],v[1] = -v[1],v[0]

## value checks
## ------------

def isAllNumbers(v):
    """ true unless one of the x, y, z components is NaN """
    return not (isnan(v[0]) or isnan(v[1]) or isnan(_z(v)))

def isXYNumbers(v):
    """ true unless the x or y component is NaN """
    return not (isnan(v[0]) or isnan(v[1]))

def hasDirection(v):
    """ true if ``v`` has numeric components and is not (nearly) zero """
    if v is None or not isAllNumbers(v):
        return False
    return not equals(v,point(0,0,0))

## equality
## --------

def equals(a,b,eps=None):
    """Are ``a`` and ``b`` the same point, within ``eps`` (defaults to
    ``equalsEpsilon``)?  Compares squared distance against ``eps**2``."""
    if a is None or b is None:
        raise InvalidArgument('cannot determine equality: one or more parameters None')
    if eps is None:
        eps = equalsEpsilon
    return distsq(a,b) <= eps*eps

def arrayEquals(a,b):
    """Index-by-index ``equals()`` over two point lists.  Two ``None``
    lists are equal; lists of different length are not."""
    if a is None and b is None:
        return True
    if a is None or b is None or len(a) != len(b):
        return False
    return all(equals(p,q) for p,q in zip(a,b))

## inside testing
## --------------

def pointInPolygon(points,p):
    """
    Even-odd test of whether ``p`` lies inside the polygon ``points``,
    using only the x and y components.  Points lying exactly on an edge
    may answer either way.  Returns ``False`` rather than raising when
    either argument is ``None``.
    """
    if points is None or p is None:
        return False
    odd = False
    j = len(points) - 1
    for i in range(len(points)):
        pi_ = points[i]
        pj = points[j]
        if ((pi_[1] < p[1] and pj[1] >= p[1]) or
            (pj[1] < p[1] and pi_[1] >= p[1])) and \
            (pi_[0] < p[0] or pj[0] <= p[0]):
            if pi_[0] + (p[1]-pi_[1])/(pj[1]-pi_[1])*(pj[0]-pi_[0]) < p[0]:
                odd = not odd
        j = i
    return odd

def isPointInsidePoints(p,points):
    """Crossing-number test of ``p`` against ``points`` in the XY plane.
    Logs a warning and returns ``False`` for missing or NaN input."""
    if p is None or not isXYNumbers(p) or not points:
        logger.warning('failed to detect inside point, point or shape points is None or invalid')
        return False
    inside = False
    x = p[0]
    y = p[1]
    j = len(points) - 1
    for i in range(len(points)):
        xi, yi = points[i][0], points[i][1]
        xj, yj = points[j][0], points[j][1]
        if ((yi > y) != (yj > y)) and (x < (xj-xi)*(y-yi)/(yj-yi) + xi):
            inside = not inside
        j = i
    return inside

def isPointInsideShape2D(p,points):
    """ is ``p`` inside the XY shape bounded by ``points`` (three or more)? """
    if p is None or points is None:
        logger.warning('failed to detect point inside shape, point or shape is None')
        return False
    if len(points) < 3:
        logger.warning('failed to detect point inside shape, shape has fewer than three points')
        return False
    return isPointInsidePoints(p,list(points))

def isOnSegment(a,b,c):
    """Is ``c`` on the segment from ``a`` to ``b``?  True when the
    distance from ``a`` to ``b`` matches the distance travelled through
    ``c`` to within ``segmentTolerance``.  Points equal to either end
    point also satisfy the test."""
    if a is None or b is None or c is None:
        raise InvalidArgument('cannot determine if on segment: one or more points are None')
    return abs(dist(a,b) - (dist(a,c) + dist(c,b))) < segmentTolerance

def isOnOutline(points,p):
    """ is ``p`` on any edge of the closed polygon ``points``? """
    if points is None:
        raise InvalidArgument('cannot determine if on outline: points is None')
    if p is None:
        raise InvalidArgument('cannot determine if on outline: point is None')
    n = len(points)
    for i in range(n):
        if isOnSegment(points[i],points[(i+1) % n],p):
            return True
    return False

def contains(points,p):
    """ is ``p`` inside, or on the perimeter of, polygon ``points``? """
    return isOnOutline(points,p) or pointInPolygon(points,p)

## centroids, sorting, angles
## --------------------------

def centroid(points):
    """
    Return the area centroid of the closed polygon ``points`` using the
    shoelace formula over x and y.  The z coordinate is averaged with
    the same per-edge weights.  The polygon is not checked for
    simplicity, and a zero-area polygon yields NaN or infinite
    coordinates rather than an exception.
    """
    if not points:
        raise InvalidArgument('cannot get centroid: points is None or empty')
    pts = list(points) + [points[0]]
    area = 0.0
    x = y = z = 0.0
    for i in range(len(pts)-1):
        c = pts[i]
        n = pts[i+1]
        m = c[0]*n[1] - n[0]*c[1]
        area += m
        x += (c[0]+n[0])*m
        y += (c[1]+n[1])*m
        z += (_z(c)+_z(n))*m
    c = np.array([x,y,z],dtype=np.float64)
    with np.errstate(divide='ignore',invalid='ignore'):
        c = c/(6.0*(area/2.0))
    return point(float(c[0]),float(c[1]),float(c[2]))

def sortByDistance(origin,points):
    """ copies of ``points``, stably sorted by distance from ``origin`` """
    if origin is None or points is None:
        raise InvalidArgument('cannot sort points by distance: origin and/or points is None')
    return [point(p) for p in sorted(points,key=lambda p: dist(p,origin))]

def angleBetweenRad(a,b):
    """Signed difference of the XY polar angles of ``b`` and ``a``,
    `atan2(b.y, b.x) - atan2(a.y, a.x)`, in radians."""
    if a is None or b is None:
        raise InvalidArgument('cannot get angle: one or both vectors are None')
    return atan2(b[1],b[0]) - atan2(a[1],a[0])

def angleBetweenDeg(a,b):
    """ degree form of ``angleBetweenRad()`` """
    return angleBetweenRad(a,b)*180.0/pi

## planes
## ------

def distanceToPlane(p,origin,normal):
    """ unsigned distance from ``p`` to the plane through ``origin`` """
    if p is None or origin is None or normal is None:
        raise InvalidArgument('cannot compute plane distance: one or more arguments are None')
    m = mag(normal)
    if m < epsilon:
        raise InvalidArgument('cannot compute plane distance: zero-length plane normal')
    return abs(dot(sub(p,origin),normal))/m

def projectOntoPlane(p,origin,normal):
    """Project ``p`` onto the plane through ``origin`` with ``normal``.
    The normal-length offset is subtracted first; if that does not land
    on the plane (at 1E-4 resolution) it is added instead."""
    d = distanceToPlane(p,origin,normal)
    offset = scale3(normalize(normal),d)
    proj = sub(p,offset)
    residual = distanceToPlane(proj,origin,normal)
    if floor(residual*10000 + 0.5)/10000 > 0:
        proj = add(p,offset)
    return proj

## corners
## -------

def _cornerCross(current,nxt,previous):
    if current is None or nxt is None or previous is None:
        raise InvalidArgument('cannot classify corner: one or more points are None')
    u = sub(current,previous)
    v = sub(current,nxt)
    return cross(v,u)

def isInsideCorner(current,nxt,previous):
    """ is ``current`` a concave corner between ``previous`` and ``nxt``? """
    c = _cornerCross(current,nxt,previous)
    if mag(c) != 0:
        return c[2] >= 0
    return False

def isOutsideCorner(current,nxt,previous):
    """ is ``current`` a convex corner between ``previous`` and ``nxt``? """
    c = _cornerCross(current,nxt,previous)
    if mag(c) != 0:
        return c[2] < 0
    return False

## batch transforms about a pivot, in place
## ----------------------------------------

def _checkBatch(points,pivot,what):
    if not points:
        raise InvalidArgument(f'failed to {what} from point, points is None or empty')
    if pivot is None or not isAllNumbers(pivot):
        raise InvalidArgument(f'failed to {what} from point, pivot is None or has invalid values')

def _applyInPlace(mat,points):
    for p in points:
        q = mat.mul(point(p))
        p[0] = q[0]
        p[1] = q[1]
        if len(p) > 2:
            p[2] = q[2]

def _aboutPivot(mat,pivot):
    return xform.Translation(pivot).mul(mat).mul(xform.Translation(pivot,inverse=True))

def rotateAroundPoint(degree,points,pivot,axis=None):
    """
    Rotate ``points`` in place by ``degree`` degrees about ``axis``
    through ``pivot``, the z axis by default.  Positive angles turn
    counter-clockwise when looking down the axis.  A zero, ``None`` or
    NaN angle is rejected.
    """
    if not degree or isnan(degree):
        raise InvalidArgument('failed to rotate from point, degree is zero or invalid')
    _checkBatch(points,pivot,'rotate')
    if axis is None:
        axis = [0,0,1.0,1.0]
    if not hasDirection(axis):
        raise InvalidArgument('failed to rotate from point, axis has no direction')
    _applyInPlace(_aboutPivot(xform.Rotation(axis,degree),pivot),points)

def scaleAroundPoint(scale,points,pivot):
    """ scale ``points`` in place by ``[sx, sy, sz]`` about ``pivot``;
    a missing ``sz`` leaves z alone """
    if scale is None:
        raise InvalidArgument('failed to scale from point, scale is None')
    _checkBatch(points,pivot,'scale')
    sz = scale[2] if len(scale) > 2 else 1.0
    _applyInPlace(_aboutPivot(xform.Scale(scale[0],scale[1],sz),pivot),points)

def flipHorizontallyAroundPoint(points,pivot):
    """mirror XY-plane ``points`` in place across the vertical line
    through ``pivot``, by a half turn about the y axis"""
    _checkBatch(points,pivot,'flip')
    _applyInPlace(_aboutPivot(xform.Rotation([0,1,0,1.0],180.0),pivot),points)

## rounding

def roundValues(points,places=2,mutate=True):
    """
    Round the x, y, z values of ``points`` to ``places`` decimals (an
    integer from 1 to 10; anything else means 0).  Mutates and returns
    ``points`` unless ``mutate`` is false, in which case a rounded copy
    is returned.  Mostly useful for reading debug output.
    """
    if not points:
        raise InvalidArgument('roundValues failed, points is None or empty')
    if not (isinstance(places,int) and not isinstance(places,bool) and 0 < places < 11):
        places = 0
    pts = points if mutate else clones(points)
    for p in pts:
        for i in range(min(3,len(p))):
            p[i] = float('{:.{}f}'.format(p[i],places))
    return pts
