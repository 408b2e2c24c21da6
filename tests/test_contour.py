import pytest
from math import pi, sqrt
from uvkit.geom import *
from uvkit.contour import *
from uvkit.errors import InvalidArgument, PreconditionViolation
## unit tests for uvkit contour.py

## clockwise 10x10 square
CWSQUARE = [point(0,0),point(0,10),point(10,10),point(10,0)]

def allclose(a,b):
    return len(a) == len(b) and all(vclose(p,q) for p,q in zip(a,b))


class TestSides:

    def test_sides_wrap(self):
        s = sides(CWSQUARE)
        assert len(s) == 4
        assert s[3] == [point(10,0),point(0,0)]
        assert s[0] == [point(0,0),point(0,10)]

    def test_side_measures(self):
        side = [point(0,0),point(10,0)]
        assert vclose(sideDirection(side),point(1,0))
        assert vclose(sideNormal(side),point(0,1))
        assert vclose(sideCenter(side),point(5,0))
        assert close(sideLength(side),10.0)

    def test_find_normal(self):
        assert vclose(findNormal(point(0,0),point(0,5)),point(-1,0))
        assert vclose(findNormal(point(1,1),point(1,1)),point(0,0))
        with pytest.raises(InvalidArgument):
            findNormal(None,point(1,0))

    def test_empty(self):
        with pytest.raises(InvalidArgument):
            sides([])


class TestOffset:

    def test_grow_clockwise_square(self):
        out = offsetContour(1.0,CWSQUARE)
        assert len(out) == 5
        assert out[-1] == out[0]
        expect = [point(-1,-1),point(-1,11),point(11,11),point(11,-1)]
        assert allclose([point(p) for p in out[:4]],expect)

    def test_shrink(self):
        out = offsetContour(-2.0,CWSQUARE)
        assert vclose(point(out[0]),point(2,2))
        assert vclose(point(out[2]),point(8,8))

    def test_centroid_kept(self):
        out = offsetContour(3.0,CWSQUARE)
        assert vclose(centroid(out[:4]),centroid(CWSQUARE))

    def test_results_are_2d(self):
        for p in offsetContour(0.5,CWSQUARE):
            assert len(p) == 2

    def test_bad_input(self):
        with pytest.raises(InvalidArgument):
            offsetContour(1.0,[])
        with pytest.raises(PreconditionViolation):
            offsetContour(1.0,CWSQUARE[:2])


class TestComplete:

    def test_straight_ribbon(self):
        out = completeContour(1.0,[point(0,0),point(10,0)])
        assert allclose(out,[point(0,0),point(10,0),point(10,1),point(0,1)])

    def test_right_angle_junction(self):
        line = [point(0,0),point(10,0),point(10,0),point(10,10)]
        out = completeContour(1.0,line)
        expect = [point(0,0),point(10,0),point(10,10),
                  point(9,10),point(9,1),point(0,1)]
        assert allclose(out,expect)

    def test_bad_input(self):
        with pytest.raises(InvalidArgument):
            completeContour(1.0,None)
        with pytest.raises(PreconditionViolation):
            completeContour(1.0,[point(1,1)])


class TestSampling:

    def test_arc_full(self):
        pts = pointsOnArc(1.0,4)
        expect = [point(1,0),point(0,1),point(-1,0),point(0,-1),point(1,0)]
        assert allclose(pts,expect)

    def test_arc_half(self):
        pts = pointsOnArc(2.0,2,0.0,pi)
        assert allclose(pts,[point(2,0),point(0,2),point(-2,0)])

    def test_circle_runs_clockwise(self):
        pts = pointsOnCircle(1.0,1.0,4)
        expect = [point(1,0),point(0,-1),point(-1,0),point(0,1),point(1,0)]
        assert allclose(pts,expect)

    def test_ellipse_radii(self):
        pts = pointsOnCircle(3.0,1.0,4,clockwise=False)
        assert vclose(pts[0],point(3,0))
        assert vclose(pts[1],point(0,1))

    def test_same_start_end(self):
        pts = pointsOnArc(1.0,3,1.0,1.0)
        assert len(pts) == 4
        assert allclose(pts,[pts[0]]*4)

    @pytest.mark.parametrize("segments",[0,-3,2.5,True])
    def test_bad_segments(self,segments):
        with pytest.raises(InvalidArgument):
            pointsOnArc(1.0,segments)


class TestLines:

    def test_line_segments(self):
        tri = [point(0,0),point(1,0),point(0,1)]
        segs = lineSegments(tri)
        assert len(segs) == 3
        assert segs[2] == [tri[2],tri[0]]

    def test_segment_at_origin(self):
        assert allclose(segmentAtOrigin(point(0,0),point(3,4)),
                        [point(-2.5,0),point(2.5,0)])
        assert allclose(segmentAtOrigin(point(0,0),point(3,4),center=False),
                        [point(0,0),point(5,0)])

    def test_quadratic(self):
        pts = curvedSegmentAtOrigin(point(0,0),point(4,0),Curve.QUADRATIC,
                                    point(0,2),smoothness=4)
        assert len(pts) == 5
        assert vclose(pts[0],point(-2,0))
        assert vclose(pts[2],point(0,1))
        assert vclose(pts[4],point(2,0))

    def test_bezier(self):
        pts = curvedSegmentAtOrigin(point(0,0),point(4,0),Curve.BEZIER,
                                    point(0,4),smoothness=2)
        assert allclose(pts,[point(-2,0),point(0,3),point(2,0)])

    def test_circle(self):
        pts = curvedSegmentAtOrigin(point(0,0),point(4,0),Curve.CIRCLE,point(0,2))
        assert len(pts) == 33
        assert vclose(pts[0],point(2,0))
        for p in pts:
            assert close(mag(p),2.0)

    def test_circle_doubles_smoothness(self):
        pts = curvedSegmentAtOrigin(point(0,0),point(4,0),Curve.CIRCLE,
                                    point(0,2),smoothness=4)
        assert len(pts) == 9
        assert vclose(pts[2],point(0,2))
        assert vclose(pts[8],pts[0])

    def test_semicircle_trim(self):
        a, b, ctl = point(0,0), point(4,0), point(0,3)
        full = curvedSegmentAtOrigin(a,b,Curve.SEMICIRCLE,ctl)
        assert len(full) == 33
        assert vclose(full[0],point(-5,0))
        pts = semicirclePoints(-2.0,a,b,ctl)
        assert len(pts) >= 9
        assert pts[0][0] == -2.0
        assert pts[-1][0] == -2.0
        for p in pts:
            assert p[0] >= -2.0

    def test_unsupported_curve(self):
        with pytest.raises(InvalidArgument):
            curvedSegmentAtOrigin(point(0,0),point(1,0),Curve.FREEFORM,point(0,1))
        with pytest.raises(InvalidArgument):
            curvedSegmentAtOrigin(None,point(1,0),Curve.BEZIER,point(0,1))

    def test_curve_lookup(self):
        assert Curve.fromValue('circle') is Curve.CIRCLE
        assert Curve.fromValue('spiral') is None
        assert str(Curve.BEZIER) == 'bezier'


class TestIntersection:

    def test_ahead(self):
        p = lineIntersectionForward(point(0,0),point(1,0),point(5,-5),point(5,-4))
        assert vclose(p,point(5,0))

    def test_behind(self):
        assert lineIntersectionForward(point(0,0),point(1,0),
                                       point(5,5),point(5,6)) is None
        assert lineIntersectionForward(point(0,0),point(-1,0),
                                       point(5,-5),point(5,-4)) is None

    def test_parallel(self):
        assert lineIntersectionForward(point(0,0),point(1,0),
                                       point(0,1),point(1,1)) is None

    def test_missing(self):
        assert lineIntersectionForward(None,point(1,0),point(0,1),point(1,1)) is None
