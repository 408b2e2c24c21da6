## procedural mesh construction for uvkit
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

"""procedural mesh generation for **uvkit**

Flat shapes are triangulated from their XY outline and face +z.
Extrusions run from z = 0 to z = depth with optional bevel layers on
either end.  Boards are six rectangular planes built at the origin,
rotated into place and welded into one box mesh.

Every generated mesh carries one UV layer; see ``uvkit.uv`` for ways to
rewrite it afterwards.
"""

from math import *
from dataclasses import dataclass
import logging

import uvkit.xform as xform
from uvkit.geom import *
from uvkit.mesh import *
from uvkit.colors import Color
from uvkit.contour import pointsOnCircle
from uvkit.triangulator import triangulate_polygon, signed_area
from uvkit.uv import rotateUVAbsolute, flipFaceNormals
from uvkit.errors import InvalidArgument, PreconditionViolation

logger = logging.getLogger(__name__)

## planar shapes
## -------------

def planarMesh(points):
    """
    Triangulate the XY projection of the simple polygon ``points`` into
    a flat mesh at z = 0 facing +z.  Consecutive duplicate points and a
    repeated closing point are dropped.  Each face corner's UV is its
    vertex ``(x, y)``.
    """
    if not points:
        raise InvalidArgument('cannot create planar mesh: points is None or empty')
    loop, tris = triangulate_polygon(points)
    if len(loop) < 3:
        raise PreconditionViolation('cannot create planar mesh: fewer than three distinct points')
    index = {src: i for i,src in enumerate(loop)}
    verts = [point(points[i][0],points[i][1]) for i in loop]
    faces = [[index[a],index[b],index[c]] for a,b,c in tris]
    uvs = [[[verts[i][0],verts[i][1]] for i in f] for f in faces]
    return mesh(verts,faces,[uvs])

def planarMeshFrom2dArray(rows):
    """ ``planarMesh()`` from rows of ``[x, y]`` numbers """
    if not rows:
        raise InvalidArgument('cannot create planar mesh from 2d array: rows is None or empty')
    return planarMesh(to3dsFrom2dArray(rows))

def boardPlane(points2,textureRotateDegree):
    """a flat mesh for one face of a board, with its UVs set to the
    vertex XY values turned by ``textureRotateDegree``"""
    m = planarMesh(points2)
    rotateUVAbsolute(textureRotateDegree,m)
    return m

## extrusion
## ---------

@dataclass
class BevelOptions:
    """Extrusion settings.  With ``enabled`` false the bevel segments,
    size and thickness are ignored.  ``steps`` is the number of body
    subdivisions along z; fewer than one is treated as one."""
    enabled: bool = True
    segments: int = 1
    steps: int = 0
    size: float = 0.0
    thickness: float = 0.0

def _outward(a,b):
    ## outward normal of edge a->b on a counter-clockwise loop
    d = normalize(sub(b,a))
    return [d[1],-d[0],0.0,1.0]

def _bevelVec(cur,prev,nxt):
    n1 = _outward(prev,cur)
    n2 = _outward(cur,nxt)
    d = 1.0 + dot(n1,n2)
    if d < epsilon:
        return n1
    return scale3(add(n1,n2),1.0/d)

def _wallUV(a,b,p):
    if abs(a[1]-b[1]) < abs(a[0]-b[0]):
        return [p[0],1.0-p[2]]
    return [p[1],1.0-p[2]]

def extrude(points,depth,bevel=None):
    """
    Extrude the XY outline ``points`` from z = 0 to z = ``depth``.

    The mesh is built from rings of outline vertices.  With bevel
    enabled there are ``segments`` front bevel rings, the body rings
    and ``segments`` back bevel rings.  Bevel ring ``b`` sits at
    ``t = b/segments``, pushed back by ``thickness*cos(t*pi/2)`` and
    out by ``size*sin(t*pi/2)``; the body rings are pushed out by the
    full ``size``.  The first and last rings are capped, and
    consecutive rings are joined by side walls.

    Cap UVs are ``(x, y)``.  Wall UVs are ``(x, 1-z)`` on walls running
    mostly along x, ``(y, 1-z)`` otherwise.
    """
    if not points:
        raise InvalidArgument('failed to create extruded mesh, points is None or empty')
    if bevel is None:
        bevel = BevelOptions()
    steps = max(1,int(bevel.steps))
    if bevel.enabled:
        segments = max(0,int(bevel.segments))
        size = bevel.size
        thickness = bevel.thickness
    else:
        segments = 0
        size = thickness = 0.0

    loop, tris = triangulate_polygon(points)
    if len(loop) < 3:
        raise PreconditionViolation('failed to create extruded mesh, fewer than three distinct points')
    contour = [point(points[i][0],points[i][1]) for i in loop]
    if signed_area(contour) < 0:
        contour.reverse()
    loop, tris = triangulate_polygon(contour)
    n = len(contour)
    moves = [_bevelVec(contour[i],contour[i-1],contour[(i+1) % n]) for i in range(n)]

    rings = []
    def ring(bs,z):
        rings.append([point(add(contour[i],scale3(moves[i],bs))[0:2] + [z]) for i in range(n)])

    for b in range(segments):
        t = b/segments
        ring(size*sin(t*pi/2),-thickness*cos(t*pi/2))
    for s in range(steps+1):
        ring(size,depth*s/steps)
    for b in range(segments-1,-1,-1):
        t = b/segments
        ring(size*sin(t*pi/2),depth+thickness*cos(t*pi/2))

    verts = [v for r in rings for v in r]
    faces = []
    uvs = []
    last = (len(rings)-1)*n
    for a,b,c in tris:
        faces.append([c,b,a])
        uvs.append([[verts[i][0],verts[i][1]] for i in (c,b,a)])
    for a,b,c in tris:
        f = [a+last,b+last,c+last]
        faces.append(f)
        uvs.append([[verts[i][0],verts[i][1]] for i in f])
    for r in range(len(rings)-1):
        lo = r*n
        hi = (r+1)*n
        for i in range(n):
            j = (i+1) % n
            a, b, c, d = lo+i, lo+j, hi+j, hi+i
            w = [_wallUV(verts[a],verts[b],verts[k]) for k in (a,b,c,d)]
            faces.append([a,b,c])
            uvs.append([w[0],w[1],w[2]])
            faces.append([a,c,d])
            uvs.append([list(w[0]),list(w[2]),w[3]])

    m = mesh(verts,faces,[uvs])
    logger.debug('extruded %d-point outline into %d rings, %d faces',n,len(rings),len(faces))
    return m

## boards
## ------

def _rect(w,h):
    return [point(0,0),point(0,h),point(w,h),point(w,0)]

def boardMesh(points,material=None):
    """
    Build a box mesh from exactly eight points.  Points 0-3 are the top
    face, 4-7 the bottom face, so that the length is ``|p0 p1|``, the
    width ``|p1 p2|`` and the thickness ``|p0 p4|``.

    ::

         6__________7
        /|         /|
       2----------3 |
       | 5_  _  _  _| 4
       1/_________0/

    The six faces are built as separate planes at the origin, rotated
    into place, merged and welded with ``mergevertices()``.  The result
    spans ``[0, length] x [0, width] x [-thickness, 0]``; it has the
    dimensions of the input but is not moved to the input position.
    Texture coordinates run along the length on the long faces and are
    turned 90 degrees on the end faces.
    """
    if points is None:
        raise InvalidArgument('failed to create board mesh, points is None')
    if len(points) != 8:
        raise PreconditionViolation('failed to create board mesh, expected 8 points, got {}'.format(len(points)))
    length = dist(points[0],points[1])
    width = dist(points[1],points[2])
    thickness = dist(points[0],points[4])

    top = boardPlane(_rect(length,width),0)
    bottom = transformmesh(top,xform.Translation([0,width,-thickness]).mul(xform.RotationX(180)))

    back = boardPlane(_rect(length,thickness),0)
    front = transformmesh(back,xform.RotationX(-90))
    back = transformmesh(back,xform.Translation([0,width,0]).mul(xform.RotationX(-90)))

    end = transformmesh(boardPlane(_rect(thickness,width),90),xform.RotationY(90))
    end1 = translatemesh(end,[length,0,0])
    end2 = copymesh(end)

    flipFaceNormals(front)
    flipFaceNormals(end2)

    board = mergemeshes([top,back,bottom,front,end1,end2])
    mergevertices(board)
    if material is not None:
        board[6]['material'] = material
    logger.debug('board %g x %g x %g: %d vertices, %d faces',
                 length,width,thickness,len(board[1]),len(board[3]))
    return board

## lines
## -----

def circleLinePoints(rx,ry,segments=12,start=0.0,end=pi2,clockwise=True):
    """ points of an ellipse, for drawing as a line """
    return pointsOnCircle(rx,ry,segments,start,end,clockwise)

def debugLine(points,color=Color.RED):
    """an open ``DebugLine`` through ``points``; repeat the first point
    to close it"""
    if not points:
        raise InvalidArgument('failed to create debug line, points is None or empty')
    return DebugLine([point(p) for p in points],color)

## spheres
## -------

def sphere(radius=1.0,vsegments=8,hsegments=8,color=Color.RED):
    """
    UV sphere about the origin with ``hsegments`` slices around the
    y axis and ``vsegments`` stacks from pole to pole.  Slices are
    clamped to at least 3 and stacks to at least 2.
    """
    if not isgoodnum(radius) or radius <= 0:
        raise InvalidArgument('failed to create sphere, radius must be positive')
    hseg = max(3,int(hsegments))
    vseg = max(2,int(vsegments))
    verts = []
    vuv = []
    grid = []
    for iy in range(vseg+1):
        v = iy/vseg
        row = []
        for ix in range(hseg+1):
            u = ix/hseg
            verts.append(point(-radius*cos(u*pi2)*sin(v*pi),
                               radius*cos(v*pi),
                               radius*sin(u*pi2)*sin(v*pi)))
            vuv.append([u,1.0-v])
            row.append(len(verts)-1)
        grid.append(row)
    faces = []
    for iy in range(vseg):
        for ix in range(hseg):
            a = grid[iy][ix+1]
            b = grid[iy][ix]
            c = grid[iy+1][ix]
            d = grid[iy+1][ix+1]
            if iy != 0:
                faces.append([a,b,d])
            if iy != vseg-1:
                faces.append([b,c,d])
    uvs = [[list(vuv[i]) for i in f] for f in faces]
    return mesh(verts,faces,[uvs],{'color': color})

## duplication and placement
## -------------------------

def duplicateAlongVector(m,count,vector):
    """merge ``count`` copies of ``m``, copy ``i`` moved by ``i*vector``"""
    if m is None or vector is None:
        raise InvalidArgument('cannot duplicate mesh: mesh or vector is None')
    if count < 1:
        raise InvalidArgument('cannot duplicate mesh: count must be at least 1')
    return mergemeshes([translatemesh(m,scale3(vector,i)) for i in range(count)])

def duplicateWithGap(m,count,gap,direction=None,useBounds=False):
    """
    Merge ``count`` copies of ``m`` spaced ``gap`` apart along
    ``direction``, +x by default.  With ``useBounds`` the x extent of the
    mesh is added to the gap so that the copies do not overlap.
    """
    if m is None:
        raise InvalidArgument('cannot duplicate mesh: mesh is None')
    if count < 1:
        raise InvalidArgument('cannot duplicate mesh: count must be at least 1')
    if direction is None:
        direction = point(1,0,0)
    if not hasDirection(direction):
        raise InvalidArgument('cannot duplicate mesh: direction has no length')
    if useBounds:
        mn, mx = meshbbox(m)
        gap += mx[0] - mn[0]
    u = normalize(direction)
    return mergemeshes([translatemesh(m,scale3(u,gap*i)) for i in range(count)])

def faceUp(m):
    """ turn a mesh drawn in the XY plane to lie in the XZ plane """
    return rotatemesh(m,-90,axis=point(1,0,0))

def faceFront(m):
    """ undo ``faceUp()`` """
    return rotatemesh(m,90,axis=point(1,0,0))

def alignToDirection(direction):
    """
    Return the rotation matrix that turns +x onto ``direction``.  A
    direction that rounds to -x uses a 180 degree turn about z.
    """
    if direction is None:
        raise InvalidArgument('cannot align to direction: direction is None')
    if equals(direction,point(0,0,0)):
        raise InvalidArgument('cannot align to direction: all xyz values are zero')
    if floor(direction[0]+0.5) == -1 and floor(direction[1]+0.5) == 0:
        return xform.RotationZ(180)
    d = normalize(direction)
    x = point(1,0,0)
    axis = cross(x,d)
    if mag(axis) < epsilon:
        return xform.Matrix()
    ang = degrees(atan2(mag(axis),dot(x,d)))
    return xform.Rotation(axis,ang)

## material UVs
## ------------

def assignMaterialUVs(m,width,height,scale=(1.0,1.0)):
    """
    Box-project UVs onto layer 0 of ``m`` for a material tile of
    ``width`` by ``height``.  Faces with any y component in their normal
    map from ``(x, z)``, else faces with any x component from
    ``(z, y)``, and the rest from ``(x, y)``.  Coordinates are taken
    relative to the bounding box minimum, divided by the tile size and
    multiplied by ``scale``.
    """
    if m is None:
        raise InvalidArgument('cannot assign material UVs: mesh is None')
    if not m[3]:
        raise PreconditionViolation('cannot assign material UVs: mesh has no faces')
    if not width or not height:
        raise InvalidArgument('cannot assign material UVs: width and height must be non-zero')
    mn, mx = meshbbox(m)
    su, sv = scale[0], scale[1]
    verts = m[1]
    layer = []
    for f,n in zip(m[3],m[4]):
        if abs(n[1]) > epsilon:
            i, j = 0, 2
        elif abs(n[0]) > epsilon:
            i, j = 2, 1
        else:
            i, j = 0, 1
        layer.append([[(verts[k][i]-mn[i])/width*su,(verts[k][j]-mn[j])/height*sv] for k in f])
    if m[5]:
        m[5][0] = layer
    else:
        m[5].append(layer)
    return m
