## triangle mesh representation for uvkit
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

"""
triangle meshes with per-face-vertex texture coordinates

A mesh is a list: ::

    ['mesh', vertices, normals, faces, facenormals, uvsets, metadata]

where ``vertices`` is a list of 3D points, ``normals`` a parallel list
of unit vertex normals (``w = 0``), ``faces`` a list of ``[a, b, c]``
vertex index triples wound counter-clockwise when seen from the front,
and ``facenormals`` a parallel list of unit face normals.

``uvsets`` is a list of UV layers.  Layer ``k`` holds one entry per
face, and each entry is a list of three ``[u, v]`` lists, one for each
corner of the face in ``a, b, c`` order.  UV lists are owned by their
face: rewriting one never changes another face's corner, even when the
two corners share a vertex.  Every layer must stay the same length as
the face list.

``metadata`` is a dictionary for caller data, such as a material name
or a color.

Functions named ``*mesh`` return transformed copies; ``mergevertices``,
``computeFaceNormals`` and ``computeVertexNormals`` work in place.
"""

from math import *
from copy import deepcopy
from dataclasses import dataclass, field
import logging

import uvkit.xform as xform
from uvkit.geom import *
from uvkit.colors import Color
from uvkit.errors import InvalidArgument, PreconditionViolation

logger = logging.getLogger(__name__)

## decimal places used to decide that two vertices are the same when
## welding with mergevertices()
mergePrecision = 4

def mesh(vertices,faces,uvsets=None,metadata=None):
    """
    Make a mesh from ``vertices`` and index triples ``faces``.  Face
    and vertex normals are computed.  ``uvsets`` defaults to no UV
    layers at all; each layer given must have one entry per face.
    """
    if vertices is None or faces is None:
        raise InvalidArgument('cannot make mesh: vertices or faces is None')
    verts = [point(v) for v in vertices]
    facs = []
    for f in faces:
        if len(f) != 3 or not all(isinstance(i,int) and 0 <= i < len(verts) for i in f):
            raise InvalidArgument('cannot make mesh: bad face {}'.format(f))
        facs.append(list(f))
    if uvsets is None:
        uvsets = []
    layers = []
    for layer in uvsets:
        if len(layer) != len(facs):
            raise InvalidArgument('cannot make mesh: UV layer length {} does not match face count {}'.format(
                len(layer),len(facs)))
        layers.append([[list(uv[0]),list(uv[1]),list(uv[2])] for uv in layer])
    if metadata is None:
        metadata = {}
    m = ['mesh',verts,[],facs,[],layers,dict(metadata)]
    computeFaceNormals(m)
    computeVertexNormals(m)
    return m

def ismesh(m,fast=True):
    """ is ``m`` a mesh?  With ``fast`` false, check the parallel lists too """
    if not isinstance(m,list) or len(m) != 7 or m[0] != 'mesh':
        return False
    if fast:
        return True
    verts,norms,faces,fnorms,uvsets,meta = m[1:]
    if len(verts) != len(norms) or len(faces) != len(fnorms):
        return False
    for f in faces:
        if len(f) != 3 or not all(0 <= i < len(verts) for i in f):
            return False
    for layer in uvsets:
        if len(layer) != len(faces):
            return False
    return isinstance(meta,dict)

def _check(m,what):
    if m is None:
        raise InvalidArgument('cannot {}: mesh is None'.format(what))
    if not ismesh(m):
        raise InvalidArgument('cannot {}: not a mesh'.format(what))

def meshbbox(m):
    """return the bounding box ``[min, max]`` of the mesh vertices"""
    _check(m,'compute bounding box')
    verts = m[1]
    if not verts:
        raise PreconditionViolation('cannot compute bounding box: mesh has no vertices')
    mn = point(min(v[0] for v in verts),min(v[1] for v in verts),min(v[2] for v in verts))
    mx = point(max(v[0] for v in verts),max(v[1] for v in verts),max(v[2] for v in verts))
    return [mn,mx]

def copymesh(m):
    _check(m,'copy mesh')
    return deepcopy(m)

def _facenormal(a,b,c):
    d = cross(sub(b,a),sub(c,a))
    l = mag(d)
    if l < epsilon*epsilon:
        return [0.0,0.0,0.0,0.0]
    return [d[0]/l,d[1]/l,d[2]/l,0.0]

def computeFaceNormals(m):
    """recompute unit face normals in place.  Degenerate faces get a
    zero normal."""
    verts = m[1]
    m[4] = [_facenormal(verts[f[0]],verts[f[1]],verts[f[2]]) for f in m[3]]
    return m

def computeVertexNormals(m):
    """recompute vertex normals in place as the area-weighted average of
    the normals of the faces sharing each vertex"""
    verts = m[1]
    acc = [[0.0,0.0,0.0] for v in verts]
    for f in m[3]:
        a,b,c = verts[f[0]],verts[f[1]],verts[f[2]]
        d = cross(sub(b,a),sub(c,a))
        for i in f:
            acc[i][0] += d[0]
            acc[i][1] += d[1]
            acc[i][2] += d[2]
    norms = []
    for n in acc:
        u = normalize(n)
        norms.append([u[0],u[1],u[2],0.0])
    m[2] = norms
    return m

def uvset(m,k=0):
    """ return UV layer ``k`` of the mesh """
    _check(m,'get UV layer')
    if k < 0 or k >= len(m[5]):
        raise PreconditionViolation('mesh has no UV layer {}'.format(k))
    return m[5][k]

## transformations, all returning copies
## -------------------------------------

def transformmesh(m,mat):
    """return a copy of the mesh with its vertices multiplied by the 4x4
    matrix ``mat``, normals recomputed"""
    _check(m,'transform mesh')
    m2 = deepcopy(m)
    m2[1] = [mat.mul(point(v)) for v in m2[1]]
    computeFaceNormals(m2)
    computeVertexNormals(m2)
    return m2

def rotatemesh(m,ang,cent=None,axis=None):
    """ return a copy of the mesh rotated ``ang`` degrees about ``axis``
    (default z) through ``cent`` (default the origin) """
    if close(ang,0.0):
        return copymesh(m)
    if axis is None:
        axis = point(0,0,1.0)
    if cent is None or vclose(cent,point(0,0,0)):
        mat = xform.Rotation(axis,ang)
    else:
        mat = xform.Translation(cent)
        mat = mat.mul(xform.Rotation(axis,ang))
        mat = mat.mul(xform.Translation(cent,inverse=True))
    return transformmesh(m,mat)

def translatemesh(m,delta):
    """ return a translated copy of the mesh """
    if delta is None:
        raise InvalidArgument('cannot translate mesh: delta is None')
    return transformmesh(m,xform.Translation(delta))

def scalemesh(m,s):
    """return a copy of the mesh scaled by ``s``, either a scalar or an
    ``[sx, sy, sz]`` vector, about the origin"""
    if s is None:
        raise InvalidArgument('cannot scale mesh: scale is None')
    return transformmesh(m,xform.Scale(s))

## merging and welding
## -------------------

def mergemeshes(meshes,mat=None):
    """
    Combine ``meshes`` into one new mesh.  If ``mat`` is given, it is
    applied to the vertices of every mesh being merged.  UV layers
    present in every input mesh are carried over, face by face; layers
    missing from any input are dropped.  Metadata is taken from the
    first mesh.
    """
    if not meshes:
        raise InvalidArgument('cannot merge meshes: no meshes given')
    for m in meshes:
        _check(m,'merge meshes')
    nlayers = min(len(m[5]) for m in meshes)
    verts = []
    faces = []
    layers = [[] for k in range(nlayers)]
    for m in meshes:
        base = len(verts)
        for v in m[1]:
            verts.append(mat.mul(point(v)) if mat is not None else point(v))
        for f in m[3]:
            faces.append([f[0]+base,f[1]+base,f[2]+base])
        for k in range(nlayers):
            layers[k].extend(deepcopy(m[5][k]))
    merged = mesh(verts,faces,layers,meshes[0][6])
    logger.debug('merged %d meshes into %d vertices, %d faces',
                 len(meshes),len(verts),len(faces))
    return merged

def _key(v,scale):
    return (floor(v[0]*scale + 0.5),floor(v[1]*scale + 0.5),floor(v[2]*scale + 0.5))

def mergevertices(m,precision=None):
    """
    Weld vertices that agree to ``precision`` decimal places (defaults
    to ``mergePrecision``), in place.  Faces that collapse onto fewer
    than three distinct vertices are removed together with their UVs in
    every layer, so UV layers stay the same length as the face list.
    Returns the number of vertices removed.
    """
    _check(m,'merge vertices')
    if precision is None:
        precision = mergePrecision
    scale = 10**precision
    seen = {}
    unique = []
    remap = []
    for v in m[1]:
        k = _key(v,scale)
        if k not in seen:
            seen[k] = len(unique)
            unique.append(v)
        remap.append(seen[k])

    faces = []
    keep = []
    for i,f in enumerate(m[3]):
        g = [remap[f[0]],remap[f[1]],remap[f[2]]]
        if g[0] == g[1] or g[1] == g[2] or g[0] == g[2]:
            continue
        faces.append(g)
        keep.append(i)

    removed = len(m[1]) - len(unique)
    m[1] = unique
    m[3] = faces
    m[5] = [[layer[i] for i in keep] for layer in m[5]]
    computeFaceNormals(m)
    computeVertexNormals(m)
    logger.debug('welded %d vertices, %d faces remain',removed,len(faces))
    return removed

## queries
## -------

def meshtriangles(m):
    """yield each face as a list of its three vertex points"""
    _check(m,'list triangles')
    verts = m[1]
    for f in m[3]:
        yield [verts[f[0]],verts[f[1]],verts[f[2]]]

def mesharea(m):
    """ total area of the mesh faces """
    area = 0.0
    for a,b,c in meshtriangles(m):
        area += mag(cross(sub(b,a),sub(c,a)))/2.0
    return area

## debug lines
## -----------

@dataclass
class DebugLine:
    """An open polyline with a display color, for visual debugging.
    Repeat the first point at the end to draw a closed outline."""
    points: list
    color: Color = Color.RED
    metadata: dict = field(default_factory=dict)

    def __len__(self):
        return len(self.points)
