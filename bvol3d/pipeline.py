from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from .eigen import Frame, covariance_matrix, eigenv3
from .geom import Pt, add, cross, dot, mul, sub, unique_points
from .hull import Triangle, quickhull

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrientedBox:
    """Орієнтований бокс: центр, осі (рядки ортонормованого базису), напіврозміри вздовж осей."""
    center: Pt
    axes: Frame
    half_extents: Tuple[float, float, float]

    @property
    def volume(self) -> float:
        hx, hy, hz = self.half_extents
        return 8.0 * hx * hy * hz

    def corners(self) -> List[Pt]:
        out: List[Pt] = []
        for sx in (-1.0, 1.0):
            for sy in (-1.0, 1.0):
                for sz in (-1.0, 1.0):
                    p = self.center
                    for s, axis, h in zip((sx, sy, sz), self.axes, self.half_extents):
                        p = add(p, mul(axis, s * h))
                    out.append(p)
        return out


def hull_faces(
    points: Iterable[Sequence[float]],
    backend: str = "quickhull",
) -> List[Triangle]:
    """
    Опукла оболонка після дедуплікації точок:
      - backend="quickhull" — наша реалізація (bvol3d.hull);
      - backend="scipy"     — scipy.spatial.ConvexHull (Qhull), грані зорієнтовані назовні.
    """
    pts: List[Pt] = unique_points(points)

    if backend.lower() == "quickhull":
        faces = quickhull(pts)
    elif backend.lower() == "scipy":
        try:
            from scipy.spatial import ConvexHull
        except ImportError as e:
            raise RuntimeError(
                "backend='scipy', but SciPy is not installed. "
                "Install scipy or use backend='quickhull'."
            ) from e

        arr = np.array([(p.x, p.y, p.z) for p in pts], dtype=float)
        qh = ConvexHull(arr)
        faces = []
        for (i, j, k), eq in zip(qh.simplices, qh.equations):
            a, b, c = pts[int(i)], pts[int(j)], pts[int(k)]
            outward = Pt(float(eq[0]), float(eq[1]), float(eq[2]))
            # Qhull не гарантує порядок вершин у simplices — орієнтуємо за нормаллю з equations
            if dot(cross(sub(b, a), sub(c, a)), outward) < 0.0:
                b, c = c, b
            faces.append((a, b, c))
    else:
        raise ValueError(f"Unknown backend: {backend}")

    logger.debug("hull_faces[%s]: %d points -> %d faces", backend, len(pts), len(faces))
    return faces


def oriented_box(
    points: Iterable[Sequence[float]],
    backend: str = "quickhull",
) -> OrientedBox:
    """
    Тісний орієнтований бокс:
      - оболонка -> коваріація -> власні осі;
      - проєкції точок на осі дають діапазони, середина діапазонів — центр.
    """
    pts = unique_points(points)
    _, axes = eigenv3(covariance_matrix(hull_faces(pts, backend)))

    arr = np.array([(p.x, p.y, p.z) for p in pts], dtype=float)
    basis = np.array([tuple(a) for a in axes], dtype=float)
    proj = arr @ basis.T                    # (N, 3): координати в базисі осей
    lo = proj.min(axis=0)
    hi = proj.max(axis=0)
    mid = (lo + hi) * 0.5
    c = mid @ basis
    half = (hi - lo) * 0.5
    return OrientedBox(Pt(float(c[0]), float(c[1]), float(c[2])), axes,
                       (float(half[0]), float(half[1]), float(half[2])))
