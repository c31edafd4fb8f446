# bvol3d/eigen.py
"""
Головні осі хмари точок: опукла оболонка -> коваріація центроїдів граней -> власні вектори.
"""
from __future__ import annotations
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from .errors import InsufficientPoints
from .geom import Pt, average, centroid
from .hull import Triangle, quickhull

SymMat = Tuple[float, float, float, float, float, float]   # (m11, m12, m13, m22, m23, m33)
Frame = Tuple[Pt, Pt, Pt]


def covariance_matrix(faces: Sequence[Triangle]) -> SymMat:
    """
    Симетрична матриця коваріації вершин граней відносно середнього центроїда граней.
    Середнє — по центроїдах граней (без ваг площі), нормування — на 3*N.
    """
    n = len(faces)
    if n == 0:
        raise InsufficientPoints(1, 0, "faces")
    cx, cy, cz = centroid(average(a, b, c) for a, b, c in faces)

    m11 = m12 = m13 = m22 = m23 = m33 = 0.0
    for tri in faces:
        for v in tri:
            x = v.x - cx
            y = v.y - cy
            z = v.z - cz
            m11 += x*x; m12 += x*y; m13 += x*z
            m22 += y*y; m23 += y*z
            m33 += z*z
    d = 3.0 * n
    return (m11/d, m12/d, m13/d, m22/d, m23/d, m33/d)

def sym_to_array(m: SymMat) -> np.ndarray:
    m11, m12, m13, m22, m23, m33 = m
    return np.array([[m11, m12, m13],
                     [m12, m22, m23],
                     [m13, m23, m33]], dtype=float)

def eigenv3(m: SymMat) -> Tuple[Tuple[float, float, float], Frame]:
    """
    Власні значення (за спаданням) і власні вектори-рядки ортонормованого правого базису.
    """
    vals, vecs = np.linalg.eigh(sym_to_array(m))
    order = np.argsort(vals)[::-1]
    vals = vals[order]
    axes = vecs[:, order].T
    if np.linalg.det(axes) < 0.0:
        axes[2] = -axes[2]
    frame = tuple(Pt(float(r[0]), float(r[1]), float(r[2])) for r in axes)
    return (float(vals[0]), float(vals[1]), float(vals[2])), frame

def eigen_vecs(points: Iterable[Sequence[float]]) -> Tuple[Tuple[float, float, float], Frame]:
    """Головні осі набору точок (quickhull + covariance_matrix + eigenv3)."""
    faces: List[Triangle] = quickhull(points)
    return eigenv3(covariance_matrix(faces))
