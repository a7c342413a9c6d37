import numpy as np
import pytest

from raygeom.mesh import Mesh, Vertex

POSITIONS = [(0, 0, 0), (1, 0, 0), (0, 1, 0)]
NORMALS = [(0, 0, 1)] * 3
TANGENTS = [(1, 0, 0)] * 3
UVS = [(0, 0), (1, 0), (0, 1)]


def translation(x, y, z):
    m = np.identity(4)
    m[:3, 3] = (x, y, z)
    return m


def test_identity_keeps_attributes():
    mesh = Mesh(POSITIONS, NORMALS, TANGENTS, UVS, [0, 1, 2])
    assert np.allclose(mesh.positions, POSITIONS)
    assert np.allclose(mesh.normals, NORMALS)
    assert np.allclose(mesh.tex_coords, UVS)
    assert mesh.triangle_count == 1


def test_triangle_count_truncates():
    mesh = Mesh(POSITIONS, NORMALS, TANGENTS, UVS, [0, 1, 2, 0, 1])
    assert mesh.triangle_count == 1


def test_translation_moves_points_not_directions():
    mesh = Mesh(POSITIONS, NORMALS, TANGENTS, UVS, [0, 1, 2], translation(1, 2, 3))
    assert np.allclose(mesh.positions, np.array(POSITIONS) + [1, 2, 3])
    assert np.allclose(mesh.normals, NORMALS)
    assert np.allclose(mesh.tangents, TANGENTS)


def test_scale_keeps_directions_unit():
    m = np.diag([2.0, 3.0, 4.0, 1.0])
    mesh = Mesh(POSITIONS, [(1, 1, 1)] * 3, TANGENTS, UVS, [0, 1, 2], m)
    assert np.allclose(np.linalg.norm(mesh.normals, axis=1), 1.0)
    assert np.allclose(mesh.positions[1], [2, 0, 0])


def test_from_vertices_matches_constructor():
    vertices = [Vertex(p, n, t, uv) for p, n, t, uv in zip(POSITIONS, NORMALS, TANGENTS, UVS)]
    tf = translation(0, 0, 5)
    a = Mesh.from_vertices(vertices, [0, 1, 2], tf)
    b = Mesh(POSITIONS, NORMALS, TANGENTS, UVS, [0, 1, 2], tf)
    assert np.allclose(a.positions, b.positions)
    assert np.allclose(a.normals, b.normals)
    assert np.allclose(a.tangents, b.tangents)
    assert np.allclose(a.tex_coords, b.tex_coords)
    assert list(a.indices) == list(b.indices)


def test_mismatched_lengths_raise():
    with pytest.raises(ValueError):
        Mesh(POSITIONS, NORMALS[:2], TANGENTS, UVS, [0, 1, 2])


def test_index_out_of_range_raises():
    with pytest.raises(ValueError):
        Mesh(POSITIONS, NORMALS, TANGENTS, UVS, [0, 1, 3])


def test_bad_transform_shape_raises():
    with pytest.raises(ValueError):
        Mesh(POSITIONS, NORMALS, TANGENTS, UVS, [0, 1, 2], np.identity(3))