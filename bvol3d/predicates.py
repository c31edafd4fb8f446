# bvol3d/predicates.py
from __future__ import annotations
from typing import NamedTuple, Sequence, Tuple
from .geom import Pt, sub, cross, dot, norm, normalize, average


class Plane(NamedTuple):
    """Опорна площина грані: точка на площині (центроїд) + одинична нормаль."""
    point: Pt
    normal: Pt


def plane_of(tri: Sequence[Pt]) -> Plane:
    """Площина трикутника (a, b, c); нормаль за правилом правої руки, (b-a) x (c-a)."""
    a, b, c = tri
    return Plane(average(a, b, c), normalize(cross(sub(b, a), sub(c, a))))

def check_plane(p: Pt, tri: Sequence[Pt], eps: float = 0.0) -> Tuple[bool, float]:
    """
    Чи лежить p строго перед площиною трикутника tri = (a, b, c).
    Повертає (True, відстань) для точок попереду і (False, відстань позаду) інакше.
    Знак береться з orient3d по вершинах, а не з центроїда й нормованої нормалі:
    на цілих координатах точка в площині грані дає рівно 0.
    """
    a, b, c = tri
    s = signed_distance_to_plane(a, b, c, p)
    if s > eps:
        return True, s
    return False, -s

def orient3d(a: Pt, b: Pt, c: Pt, d: Pt) -> float:
    ab = sub(b, a)
    ac = sub(c, a)
    ad = sub(d, a)
    return dot(cross(ab, ac), ad)

def signed_distance_to_plane(a: Pt, b: Pt, c: Pt, p: Pt) -> float:
    n = cross(sub(b, a), sub(c, a))
    area2 = norm(n)
    if area2 == 0.0:
        return 0.0
    return orient3d(a, b, c, p) / area2
