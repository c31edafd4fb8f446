import math
import random

import pytest

from bvol3d.eigen import covariance_matrix, eigenv3, eigen_vecs
from bvol3d.errors import InsufficientPoints
from bvol3d.geom import Pt, cross, dot, norm
from bvol3d.hull import quickhull


CUBE = [
    (0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0),
    (0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1),
]


def stretched_cloud(n, seed, direction, factor=10.0):
    """Точки з кулі, розтягнуті вздовж direction."""
    rng = random.Random(seed)
    u = Pt(*direction)
    u = Pt(u.x / norm(u), u.y / norm(u), u.z / norm(u))
    pts = []
    while len(pts) < n:
        p = Pt(rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1))
        if dot(p, p) > 1.0:
            continue
        s = dot(p, u) * (factor - 1.0)
        pts.append((p.x + u.x * s, p.y + u.y * s, p.z + u.z * s))
    return pts


def assert_orthonormal(frame):
    for i in range(3):
        assert norm(frame[i]) == pytest.approx(1.0, abs=1e-9)
        for j in range(i + 1, 3):
            assert dot(frame[i], frame[j]) == pytest.approx(0.0, abs=1e-9)


# =============================================================================
# Covariance
# =============================================================================

def test_covariance_of_single_triangle():
    tri = (Pt(1.0, 0.0, 0.0), Pt(0.0, 1.0, 0.0), Pt(0.0, 0.0, 1.0))
    m11, m12, m13, m22, m23, m33 = covariance_matrix([tri])
    assert m11 == pytest.approx(2.0 / 9.0)
    assert m22 == pytest.approx(2.0 / 9.0)
    assert m33 == pytest.approx(2.0 / 9.0)
    assert m12 == pytest.approx(-1.0 / 9.0)
    assert m13 == pytest.approx(-1.0 / 9.0)
    assert m23 == pytest.approx(-1.0 / 9.0)


def test_covariance_of_cube_hull_diagonal():
    m11, _, _, m22, _, m33 = covariance_matrix(quickhull(CUBE))
    assert m11 == pytest.approx(0.25, abs=1e-12)
    assert m22 == pytest.approx(0.25, abs=1e-12)
    assert m33 == pytest.approx(0.25, abs=1e-12)


def test_covariance_is_translation_invariant():
    faces = quickhull(CUBE)
    shifted = [tuple(Pt(v.x + 5.0, v.y - 2.0, v.z + 0.5) for v in tri) for tri in faces]
    assert covariance_matrix(shifted) == pytest.approx(covariance_matrix(faces), abs=1e-12)


def test_covariance_without_faces():
    with pytest.raises(InsufficientPoints):
        covariance_matrix([])


# =============================================================================
# Eigen-frame
# =============================================================================

def test_eigenv3_of_diagonal_matrix():
    vals, frame = eigenv3((1.0, 0.0, 0.0, 3.0, 0.0, 2.0))
    assert vals == pytest.approx((3.0, 2.0, 1.0))
    assert abs(frame[0].y) == pytest.approx(1.0)
    assert abs(frame[1].z) == pytest.approx(1.0)
    assert abs(frame[2].x) == pytest.approx(1.0)


def test_eigenv3_frame_is_right_handed():
    _, frame = eigenv3((2.0, 0.5, 0.1, 1.5, -0.3, 1.0))
    assert_orthonormal(frame)
    c = cross(frame[0], frame[1])
    assert dot(c, frame[2]) == pytest.approx(1.0)


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_eigen_vecs_are_orthonormal(seed):
    rng = random.Random(seed)
    pts = [(rng.gauss(0, 3), rng.gauss(0, 1), rng.gauss(0, 0.5)) for _ in range(200)]
    vals, frame = eigen_vecs(pts)
    assert_orthonormal(frame)
    assert vals[0] >= vals[1] >= vals[2] >= -1e-12


def test_principal_axis_follows_elongation():
    direction = (1.0, 2.0, -1.0)
    u = Pt(*direction)
    u = Pt(u.x / norm(u), u.y / norm(u), u.z / norm(u))
    _, frame = eigen_vecs(stretched_cloud(400, 5, direction))
    assert abs(dot(frame[0], u)) > 0.95


def test_eigen_vecs_of_cube():
    vals, frame = eigen_vecs(CUBE)
    assert_orthonormal(frame)
    assert sum(vals) == pytest.approx(0.75)
    assert all(math.isfinite(v) for v in vals)


def test_eigen_vecs_of_flat_quad():
    vals, frame = eigen_vecs([(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)])
    assert_orthonormal(frame)
    # найменша дисперсія — вздовж нормалі площини
    assert vals[2] == pytest.approx(0.0, abs=1e-12)
    assert abs(frame[2].z) == pytest.approx(1.0)
