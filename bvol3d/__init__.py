"""
bvol3d — обмежувальні об'єми для 3D хмар точок і сіток.
Зараз: AABB/сфера, slab-тест променя, quickhull, головні осі (eigen-frame), орієнтований бокс.
"""

__version__ = "0.2.0"

from bvol3d.geom import Pt, EPS, INFINITY, centroid, unique_points
from bvol3d.errors import BoundingVolumeError, InsufficientPoints, DegenerateInput
from bvol3d.predicates import Plane, plane_of, check_plane, orient3d, signed_distance_to_plane
from bvol3d.bbox import (
    AABB, Sphere, box, union, intersect, dist, center,
    surface_area, volume, max_extent, sphere, inside,
)
from bvol3d.ray import Ray, inv_sign, hit
from bvol3d.hull import HullFace, QuickHull, quickhull
from bvol3d.eigen import covariance_matrix, eigenv3, eigen_vecs
from bvol3d.pipeline import OrientedBox, hull_faces, oriented_box

__all__ = [
    "Pt", "EPS", "INFINITY", "centroid", "unique_points",
    "BoundingVolumeError", "InsufficientPoints", "DegenerateInput",
    "Plane", "plane_of", "check_plane", "orient3d", "signed_distance_to_plane",
    "AABB", "Sphere", "box", "union", "intersect", "dist", "center",
    "surface_area", "volume", "max_extent", "sphere", "inside",
    "Ray", "inv_sign", "hit",
    "HullFace", "QuickHull", "quickhull",
    "covariance_matrix", "eigenv3", "eigen_vecs",
    "OrientedBox", "hull_faces", "oriented_box",
    "__version__",
]
