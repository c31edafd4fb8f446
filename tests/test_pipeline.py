import math
import random

import pytest

from bvol3d.geom import Pt, dot, sub
from bvol3d.pipeline import OrientedBox, hull_faces, oriented_box
from bvol3d.predicates import signed_distance_to_plane


CUBE = [
    (0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0),
    (0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1),
]


def rotated_box_corners(half, angle):
    """Кути бокса з напіврозмірами half, повернутого на angle навколо осі z і зсунутого."""
    c, s = math.cos(angle), math.sin(angle)
    out = []
    for sx in (-1, 1):
        for sy in (-1, 1):
            for sz in (-1, 1):
                x, y, z = sx * half[0], sy * half[1], sz * half[2]
                out.append((c * x - s * y + 4.0, s * x + c * y - 1.0, z + 2.0))
    return out


# =============================================================================
# Hull backends
# =============================================================================

def test_hull_faces_drops_duplicates():
    faces = hull_faces(CUBE + CUBE + [(1e-12, 0, 0)])
    assert len(faces) == 12


def test_scipy_backend_matches_quickhull():
    pytest.importorskip("scipy")
    rng = random.Random(17)
    pts = [(rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1)) for _ in range(150)]
    ours = hull_faces(pts)
    theirs = hull_faces(pts, backend="scipy")
    assert len(ours) == len(theirs)
    assert {v for tri in ours for v in tri} == {v for tri in theirs for v in tri}


def test_scipy_backend_faces_point_outward():
    pytest.importorskip("scipy")
    faces = hull_faces(CUBE, backend="scipy")
    assert len(faces) == 12
    pts = [Pt(*map(float, p)) for p in CUBE]
    for a, b, c in faces:
        assert all(signed_distance_to_plane(a, b, c, p) <= 1e-9 for p in pts)


def test_unknown_backend():
    with pytest.raises(ValueError):
        hull_faces(CUBE, backend="cgal")


# =============================================================================
# Oriented boxes
# =============================================================================

def test_oriented_box_contains_every_point():
    rng = random.Random(23)
    pts = [(rng.gauss(0, 4), rng.gauss(0, 1), rng.gauss(0, 2)) for _ in range(300)]
    obb = oriented_box(pts)
    for p in pts:
        d = sub(Pt(*p), obb.center)
        for axis, h in zip(obb.axes, obb.half_extents):
            assert abs(dot(d, axis)) <= h + 1e-9


def test_oriented_box_of_rotated_box():
    pts = rotated_box_corners((3.0, 1.0, 0.5), 0.4)
    obb = oriented_box(pts)
    assert isinstance(obb, OrientedBox)
    assert obb.center.x == pytest.approx(4.0, abs=1e-9)
    assert obb.center.y == pytest.approx(-1.0, abs=1e-9)
    assert obb.center.z == pytest.approx(2.0, abs=1e-9)
    # найдовша вісь бокса — головна вісь кадру
    major = Pt(math.cos(0.4), math.sin(0.4), 0.0)
    assert abs(dot(obb.axes[0], major)) > 0.9


def test_oriented_box_corners():
    obb = oriented_box(CUBE)
    corners = obb.corners()
    assert len(corners) == 8
    assert obb.volume == pytest.approx(
        8.0 * obb.half_extents[0] * obb.half_extents[1] * obb.half_extents[2])
    for p in CUBE:
        d = sub(Pt(*map(float, p)), obb.center)
        for axis, h in zip(obb.axes, obb.half_extents):
            assert abs(dot(d, axis)) <= h + 1e-9


def test_oriented_box_of_flat_rectangle():
    pts = [(0, 0, 0), (2, 0, 0), (2, 1, 0), (0, 1, 0), (1, 0.5, 0)]
    obb = oriented_box(pts)
    assert obb.center.z == pytest.approx(0.0, abs=1e-9)
    assert obb.half_extents[2] == pytest.approx(0.0, abs=1e-9)
    assert obb.volume == pytest.approx(0.0, abs=1e-8)
    for p in pts:
        d = sub(Pt(*map(float, p)), obb.center)
        for axis, h in zip(obb.axes, obb.half_extents):
            assert abs(dot(d, axis)) <= h + 1e-9
