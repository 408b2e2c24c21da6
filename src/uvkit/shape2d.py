## flat outline shapes for uvkit
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
Shape2D
=======

A Shape2D pairs a closed XY outline of three or more points with its
sides and a flat mesh for display.  The mesh and the sides are built
once, when the shape is made.  Moving the points afterwards does not
touch either: call ``updateSides()`` to rebuild the sides from the
current points.

Side ``i`` runs from point ``i`` to point ``i+1``, wrapping the last
point to the first.  Side queries with an index out of range answer
``None`` (or ``0`` for ``getSideDistance()``) rather than raising.
"""

from uvkit.geom import *
from uvkit.colors import Color
from uvkit.contour import sides, sideDirection, sideNormal, sideCenter, sideLength
from uvkit.shapes import planarMesh
from uvkit.errors import InvalidArgument

class Shape2D:
    """closed XY outline with cached sides and a flat mesh"""

    def __init__(self,points,color=Color.RED):
        if not points or len(points) < 3:
            raise InvalidArgument('failed to create Shape2D, points are empty or fewer than 3')
        self.points = points
        self.color = color
        self.mesh = planarMesh(points)
        self.mesh[6]['color'] = color
        self.mesh[6]['opacity'] = 0.5
        self.sides = []
        self.updateSides()

    def __repr__(self):
        return 'Shape2D({})'.format(vstr(self.points))

    def getPoints(self):
        return self.points

    def updateSides(self):
        """ rebuild the cached sides from the current points """
        self.sides = sides(self.points)

    def getSide(self,i):
        if 0 <= i < len(self.sides):
            return self.sides[i]
        return None

    ## normalized direction from start to end, in outline order
    def getSideDirection(self,i):
        side = self.getSide(i)
        if side is None:
            return None
        return sideDirection(side)

    def getSideCenter(self,i):
        side = self.getSide(i)
        if side is None:
            return None
        return sideCenter(side)

    ## side direction turned a quarter turn counter-clockwise
    def getSideVectorNormal(self,i):
        side = self.getSide(i)
        if side is None:
            return None
        return sideNormal(side)

    def getSideDistance(self,i):
        side = self.getSide(i)
        if side is None:
            return 0
        return sideLength(side)

    def isPointInside(self,p):
        """ is ``p`` inside the outline?  ``False`` on bad input """
        return isPointInsideShape2D(p,self.points)

    def centroid(self):
        return centroid(self.points)
