import math
import pytest

import uvkit.xform as xform
from uvkit.geom import point, vclose
from uvkit.colors import Color
from uvkit.errors import InvalidArgument, PreconditionViolation
from uvkit.mesh import (DebugLine, copymesh, ismesh, mergemeshes, mergevertices,
                        mesh, mesharea, meshbbox, meshtriangles, rotatemesh,
                        scalemesh, transformmesh, translatemesh, uvset)


def _square(x0=0.0, uvs=True):
    verts = [point(x0, 0), point(x0 + 1, 0), point(x0 + 1, 1), point(x0, 1)]
    faces = [[0, 1, 2], [0, 2, 3]]
    layers = None
    if uvs:
        layers = [[[[v[0], v[1]] for v in (verts[i] for i in f)] for f in faces]]
    return mesh(verts, faces, layers, {'name': 'square'})


def test_mesh_layout():
    m = _square()
    assert m[0] == 'mesh'
    assert ismesh(m)
    assert ismesh(m, fast=False)
    assert len(m[1]) == len(m[2]) == 4
    assert len(m[3]) == len(m[4]) == 2
    assert len(m[5]) == 1 and len(m[5][0]) == 2
    assert m[6] == {'name': 'square'}
    for n in m[4]:
        assert vclose(n, [0, 0, 1.0, 0])
    for n in m[2]:
        assert n[3] == 0.0
        assert vclose(n, [0, 0, 1.0, 0])


def test_uv_lists_are_owned_by_faces():
    m = _square()
    layer = uvset(m)
    ## vertex 0 is shared by both faces
    layer[0][0][0] = 42.0
    assert layer[1][0][0] == 0.0


def test_mesh_bad_input():
    verts = [point(0, 0), point(1, 0), point(0, 1)]
    with pytest.raises(InvalidArgument):
        mesh(None, [[0, 1, 2]])
    with pytest.raises(InvalidArgument):
        mesh(verts, [[0, 1, 3]])
    with pytest.raises(InvalidArgument):
        mesh(verts, [[0, 1]])
    with pytest.raises(InvalidArgument):
        mesh(verts, [[0, 1, 2]], [[]])
    assert not ismesh(['surface'])
    assert not ismesh(None)


def test_uvset_missing_layer():
    with pytest.raises(PreconditionViolation):
        uvset(_square(), 1)
    with pytest.raises(PreconditionViolation):
        uvset(_square(uvs=False))


def test_degenerate_face_normal():
    m = mesh([point(0, 0), point(1, 0), point(2, 0)], [[0, 1, 2]])
    assert m[4][0] == [0.0, 0.0, 0.0, 0.0]


def test_bbox_and_area():
    m = _square(2.0)
    mn, mx = meshbbox(m)
    assert vclose(mn, point(2, 0, 0))
    assert vclose(mx, point(3, 1, 0))
    assert math.isclose(mesharea(m), 1.0)
    assert len(list(meshtriangles(m))) == 2
    with pytest.raises(PreconditionViolation):
        meshbbox(mesh([], []))


def test_transforms_return_copies():
    m = _square()
    t = translatemesh(m, point(0, 0, 5))
    assert vclose(meshbbox(t)[0], point(0, 0, 5))
    assert vclose(meshbbox(m)[0], point(0, 0, 0))

    r = rotatemesh(m, 90)
    assert vclose(r[1][1], point(0, 1, 0))
    assert vclose(m[1][1], point(1, 0, 0))

    r = rotatemesh(m, 180, cent=point(1, 1, 0))
    assert vclose(r[1][0], point(2, 2, 0))

    s = scalemesh(m, 2)
    assert math.isclose(mesharea(s), 4.0)
    s = scalemesh(m, [1, 3, 1])
    assert math.isclose(mesharea(s), 3.0)

    flipped = transformmesh(m, xform.RotationX(180))
    assert vclose(flipped[4][0], [0, 0, -1.0, 0])

    c = copymesh(m)
    c[1][0][0] = 99
    assert m[1][0][0] == 0


def test_rotatemesh_defaults_are_not_shared():
    assert rotatemesh.__defaults__ == (None, None)
    m = _square()
    a = rotatemesh(m, 90)
    b = rotatemesh(m, 90, cent=None, axis=None)
    for v, w in zip(a[1], b[1]):
        assert vclose(v, w)
    assert vclose(a[1][2], point(-1, 1, 0))


def test_merge_meshes():
    a = _square()
    b = _square(1.0)
    m = mergemeshes([a, b])
    assert len(m[1]) == 8
    assert len(m[3]) == 4
    assert m[3][2] == [4, 5, 6]
    assert len(m[5]) == 1 and len(m[5][0]) == 4
    assert m[6] == {'name': 'square'}
    assert math.isclose(mesharea(m), 2.0)


def test_merge_drops_partial_uv_layers():
    m = mergemeshes([_square(), _square(1.0, uvs=False)])
    assert m[5] == []
    assert ismesh(m, fast=False)


def test_merge_with_matrix():
    m = mergemeshes([_square()], xform.Translation([0, 0, 3]))
    assert vclose(meshbbox(m)[1], point(1, 1, 3))


def test_merge_bad_input():
    with pytest.raises(InvalidArgument):
        mergemeshes([])
    with pytest.raises(InvalidArgument):
        mergemeshes([_square(), None])


def test_mergevertices_welds_shared_edge():
    m = mergemeshes([_square(), _square(1.0)])
    removed = mergevertices(m)
    assert removed == 2
    assert len(m[1]) == 6
    assert len(m[3]) == 4
    assert len(m[5][0]) == len(m[3])
    assert ismesh(m, fast=False)
    assert math.isclose(mesharea(m), 2.0)


def test_mergevertices_drops_collapsed_faces():
    verts = [point(0, 0), point(1, 0), point(1, 0.00001), point(0, 1)]
    faces = [[0, 1, 2], [0, 1, 3]]
    uvs = [[[0, 0], [1, 0], [1, 0]], [[0, 0], [1, 0], [0, 1]]]
    m = mesh(verts, faces, [uvs])
    assert mergevertices(m) == 1
    assert m[3] == [[0, 1, 2]]
    assert m[5][0] == [[[0, 0], [1, 0], [0, 1]]]
    assert len(m[4]) == 1


def test_debug_line():
    line = DebugLine([point(0, 0), point(1, 0)])
    assert len(line) == 2
    assert line.color is Color.RED
    assert line.metadata == {}
