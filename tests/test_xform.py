import pytest
from uvkit.xform import *
from uvkit.geom import point, vclose
from uvkit.errors import InvalidArgument
## unit tests for uvkit xform.py

class TestXform:
    """unit tests for uvkit matrix operations"""

    def test_matrix(self):
        foo = Matrix([1,2,3,4,5,6,7,8,9,10,11,12,13,14,15,16])
        bar = Matrix([[1,0,0,1],[0,1,0,1],[0,0,1,1],[0,0,0,1]])
        baz = [1,2,3,1]
        I = Matrix()
        a = 10.0
        assert(I.mul(bar).m == bar.m)
        assert(I.mul(foo).m == foo.m)
        assert(I.mul(I).m == I.m)
        assert(foo.mul(bar).m == [[1,2,3,10],[5,6,7,26],[9,10,11,42],[13,14,15,58]])
        assert(foo.mul(baz) == [18, 46, 74, 102])
        assert(foo.mul(a).m == [[10.0,20.0,30.0,40.0],
                                [50.0,60.0,70.0,80.0],
                                [90.0,100.0,110.0,120.0],
                                [130.0,140.0,150.0,160.0]])
        assert(I.mul(baz) == baz)
        assert I.isidentity()
        assert not foo.isidentity()

    def test_copy(self):
        foo = Matrix([1,2,3,4,5,6,7,8,9,10,11,12,13,14,15,16])
        cp = Matrix(foo)
        cp.set(0,0,99)
        assert foo.get(0,0) == 1
        assert cp.getcol(0) == [99,5,9,13]
        assert cp.getrow(1) == [5,6,7,8]

    def test_bad_init(self):
        with pytest.raises(InvalidArgument):
            Matrix([1,2,3])
        with pytest.raises(InvalidArgument):
            Matrix([[1,0,0,0],[0,1,0,0],[0,0,True,0],[0,0,0,1]])
        with pytest.raises(InvalidArgument):
            Matrix('identity')
        with pytest.raises(InvalidArgument):
            Matrix().mul('x')
        with pytest.raises(InvalidArgument):
            Matrix().get(4,0)

    def test_rotation(self):
        p = point(1,0,0)
        assert vclose(RotationZ(90).mul(p),point(0,1,0))
        assert vclose(RotationX(90).mul(point(0,1,0)),point(0,0,1))
        assert vclose(RotationY(90).mul(point(0,0,1)),point(1,0,0))
        assert vclose(Rotation(point(0,0,5),90).mul(p),point(0,1,0))
        assert vclose(Rotation(point(0,0,1),90,inverse=True).mul(p),point(0,-1,0))
        with pytest.raises(InvalidArgument):
            Rotation(point(0,0,0),45)

    def test_translation_and_scale(self):
        p = point(1,2,3)
        assert vclose(Translation(point(1,1,1)).mul(p),point(2,3,4))
        assert vclose(Translation(point(1,1,1),inverse=True).mul(p),point(0,1,2))
        assert vclose(Translation([1,1]).mul(p),point(2,3,3))
        assert vclose(Scale(2).mul(p),point(2,4,6))
        assert vclose(Scale(1,2,3).mul(p),point(1,4,9))
        assert vclose(Scale([2,2,2],inverse=True).mul(p),point(0.5,1,1.5))
        with pytest.raises(InvalidArgument):
            Scale('big')

    def test_shear(self):
        assert vclose(Shear(yx=-2).mul(point(1,0)),point(1,-2))
        assert vclose(Shear(xy=1).mul(point(0,1)),point(1,1))

    def test_composition(self):
        ## rotate about (1,1) by building T * R * T^-1
        c = point(1,1)
        mat = Translation(c).mul(RotationZ(90)).mul(Translation(c,inverse=True))
        assert vclose(mat.mul(point(2,1)),point(1,2))
