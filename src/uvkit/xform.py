## matrix transformation operations for 3D homogeneous coordinates
## in uvkit

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

from math import *
import uvkit.geom as geom
from uvkit.errors import InvalidArgument

## a matrix is represented as a list of four four-vectors, one per
## row.  Points are lists, so Mx always means a column vector.  The
## transforms used by uvkit (contour offsets, pivot rotations, mesh
## placement) are all built by composing the constructors at the
## bottom of this file with Matrix.mul().


def _goodnum(x):
    return (not isinstance(x,bool)) and isinstance(x,(int,float))


class Matrix:
    """4x4 transformation matrix class for transforming homogeneous 3D coordinates"""

    def __init__(self,a=None):
        self.m = [[1,0,0,0],
                  [0,1,0,0],
                  [0,0,1,0],
                  [0,0,0,1]]

        if isinstance(a,Matrix):
            for i in range(4):
                self.m[i] = list(a.m[i])

        elif isinstance(a,(tuple,list)):
            if len(a) == 4 and all(isinstance(r,(tuple,list)) and len(r) == 4 for r in a):
                for i in range(4):
                    for j in range(4):
                        self.set(i,j,a[i][j])
            elif len(a) == 16:
                for i in range(4):
                    for j in range(4):
                        self.set(i,j,a[i*4+j])
            else:
                raise InvalidArgument('bad list used in attempt to initialize matrix: {}'.format(a))
        elif a is not None:
            raise InvalidArgument('bad thing used in attempt to initialize matrix: {}'.format(a))

    def __repr__(self):
        return "Matrix({},{},{},{})".format(self.m[0],self.m[1],
                                           self.m[2],self.m[3])

    #return value indexed by i,j
    def get(self,i,j):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise InvalidArgument('bad index passed to get: {},{}'.format(i,j))
        return self.m[i][j]

    #set value indexed by i,j
    def set(self,i,j,x):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise InvalidArgument('bad index passed to set: {},{}'.format(i,j))
        if not _goodnum(x):
            raise InvalidArgument('bad value passed to set: {}'.format(x))
        self.m[i][j] = x

    def getrow(self,i):
        return self.m[i]

    def getcol(self,j):
        return [self.m[0][j],
                self.m[1][j],
                self.m[2][j],
                self.m[3][j]]

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # point, compute Mx.  If x is a scalar, compute xM.

    def mul(self,x):
        if isinstance(x,Matrix):
            result = Matrix()
            for i in range(4):
                row = self.m[i]
                for j in range(4):
                    result.m[i][j] = sum(row[k]*x.m[k][j] for k in range(4))
            return result
        elif isinstance(x,(tuple,list)) and len(x) == 4:
            return [sum(self.m[i][k]*x[k] for k in range(4)) for i in range(4)]
        elif _goodnum(x):
            result = Matrix()
            for i in range(4):
                result.m[i] = [c*x for c in self.m[i]]
            return result

        raise InvalidArgument('bad thing passed to mul(): {}'.format(x))

    def isidentity(self):
        return all(self.m[i][j] == (1 if i == j else 0)
                   for i in range(4) for j in range(4))


# return the generalized 4x4 arbitrary axis rotation matrix, angle
# in degrees, counter-clockwise looking down the axis
def Rotation(axis,angle,inverse=False):
    m = geom.mag(axis)
    u = axis
    if m < geom.epsilon:
        raise InvalidArgument('zero-length rotation axis not allowed')
    if not geom.close(m,1.0):
        u = geom.scale3(axis,1.0/m)

    if inverse:
        angle *= -1.0
    rad = (angle%360.0)*geom.pi2/360.0

    ux = u[0]
    uy = u[1]
    uz = u[2]

    cang = cos(rad)
    cmin = 1.0-cang
    sang = sin(rad)

    R = [[cang + ux*ux*cmin, ux*uy*cmin-uz*sang, ux*uz*cmin+uy*sang,0],
         [uy*ux*cmin+uz*sang, cang + uy*uy*cmin, uy*uz*cmin - ux*sang,0],
         [uz*ux*cmin-uy*sang, uz*uy*cmin+ux*sang, cang+uz*uz*cmin,0],
         [0,0,0,1]]

    return Matrix(R)

def RotationX(angle):
    return Rotation([1,0,0],angle)

def RotationY(angle):
    return Rotation([0,1,0],angle)

def RotationZ(angle):
    return Rotation([0,0,1],angle)

def Translation(delta,inverse=False):
    dx = delta[0]
    dy = delta[1]
    dz = delta[2] if len(delta) > 2 else 0.0
    if inverse:
        dx, dy, dz = -dx, -dy, -dz
    T = [[1,0,0,dx],
         [0,1,0,dy],
         [0,0,1,dz],
         [0,0,0,1]]
    return Matrix(T)

def Scale(x,y=None,z=None,inverse=False):
    if _goodnum(x):
        sx = x
        if _goodnum(y) and _goodnum(z):
            sy = y
            sz = z
        else:
            sy = sz = x
    elif isinstance(x,(tuple,list)) and len(x) >= 3:
        sx = x[0]
        sy = x[1]
        sz = x[2]
    else:
        raise InvalidArgument('bad scaling values passed to Scale')

    if inverse:
        sx = 1.0/sx
        sy = 1.0/sy
        sz = 1.0/sz

    S = [[sx,0,0,0],
         [0,sy,0,0],
         [0,0,sz,0],
         [0,0,0,1.0]]
    return Matrix(S)

# 2D shear in the XY plane: x' = x + xy*y, y' = yx*x + y
def Shear(xy=0.0,yx=0.0):
    S = [[1,xy,0,0],
         [yx,1,0,0],
         [0,0,1,0],
         [0,0,0,1]]
    return Matrix(S)
