# bvol3d/bbox.py
"""
Обмежувальні об'єми: вирівняний по осях бокс (AABB) і сфера.
Усі значення незмінні; операції повертають нові об'єкти (або той самий, якщо він уже охоплює інший).
"""
from __future__ import annotations
from dataclasses import dataclass
from math import sqrt
from numbers import Real
from typing import Iterable, Optional, Sequence, Union

from .geom import Pt, INFINITY, as_pt, average, dist_sqr, dot, sub


@dataclass(frozen=True)
class AABB:
    """
    Бокс (min, max). Валідний бокс має min <= max по кожній осі.
    Порожній бокс box() має min = +inf, max = -inf і поглинається union().
    """
    min: Pt
    max: Pt
    def __iter__(self):
        yield self.min; yield self.max

    @property
    def is_empty(self) -> bool:
        return self.min.x > self.max.x or self.min.y > self.max.y or self.min.z > self.max.z


@dataclass(frozen=True)
class Sphere:
    """Сфера (центр, квадрат радіуса) — корінь добуваємо лише за потреби."""
    center: Pt
    radius_sqr: float

    @property
    def radius(self) -> float:
        return sqrt(self.radius_sqr)


BoundingVolume = Union[AABB, Sphere]
Margin = Union[float, Sequence[float]]

EMPTY = AABB(Pt(INFINITY, INFINITY, INFINITY), Pt(-INFINITY, -INFINITY, -INFINITY))


def _is_point(v) -> bool:
    if isinstance(v, Pt):
        return True
    try:
        return len(v) == 3 and all(isinstance(c, Real) for c in v)
    except TypeError:
        return False

def _grow(bb: AABB, margin: Optional[Margin]) -> AABB:
    if margin is None:
        return bb
    if isinstance(margin, Real):
        mx = my = mz = float(margin)
    else:
        mx, my, mz = (float(m) for m in margin)
    return AABB(Pt(bb.min.x - mx, bb.min.y - my, bb.min.z - mz),
                Pt(bb.max.x + mx, bb.max.y + my, bb.max.z + mz))

def _from_points(points: Iterable[Sequence[float]]) -> AABB:
    it = iter(points)
    first = next(it, None)
    if first is None:
        return EMPTY
    p = as_pt(first)
    x0 = x1 = p.x
    y0 = y1 = p.y
    z0 = z1 = p.z
    for q in it:
        x, y, z = q
        if x < x0: x0 = x
        elif x > x1: x1 = x
        if y < y0: y0 = y
        elif y > y1: y1 = y
        if z < z0: z0 = z
        elif z > z1: z1 = z
    return AABB(Pt(float(x0), float(y0), float(z0)), Pt(float(x1), float(y1), float(z1)))

def box(first=None, second=None, margin: Optional[Margin] = None) -> AABB:
    """
    Створити бокс:
      box()                      -> порожній (нескінченний) бокс;
      box(points[, margin])      -> бокс, що охоплює точки (порожній список -> порожній бокс);
      box(p, q[, margin])        -> бокс за двома кутами у довільному порядку.
    margin — скаляр або (mx, my, mz); розширює кожну сторону.
    """
    if first is None:
        return EMPTY
    if _is_point(first):
        if second is None:
            raise TypeError("box(p, q) needs two corner points")
        p, q = as_pt(first), as_pt(second)
        bb = AABB(Pt(min(p.x, q.x), min(p.y, q.y), min(p.z, q.z)),
                  Pt(max(p.x, q.x), max(p.y, q.y), max(p.z, q.z)))
        return _grow(bb, margin)
    if second is not None:
        if margin is not None:
            raise TypeError("margin given twice")
        margin = second
    bb = _from_points(first)
    if bb is EMPTY:
        return bb
    return _grow(bb, margin)

def _encloses(a: AABB, lo: Pt, hi: Pt) -> bool:
    return (a.min.x <= lo.x and a.min.y <= lo.y and a.min.z <= lo.z and
            a.max.x >= hi.x and a.max.y >= hi.y and a.max.z >= hi.z)

def union(a: AABB, b: Union[AABB, Sequence[float]]) -> AABB:
    """Мінімальний бокс, що охоплює a і b (b — бокс або точка)."""
    if isinstance(b, AABB):
        lo, hi = b.min, b.max
        if _encloses(b, a.min, a.max):
            return b
    else:
        lo = hi = as_pt(b)
    if _encloses(a, lo, hi):
        return a
    return AABB(Pt(min(a.min.x, lo.x), min(a.min.y, lo.y), min(a.min.z, lo.z)),
                Pt(max(a.max.x, hi.x), max(a.max.y, hi.y), max(a.max.z, hi.z)))

def intersect(a: AABB, b: AABB) -> bool:
    """Чи перетинаються бокси (замкнені області: дотик — це перетин)."""
    if a.min.x > b.max.x or b.min.x > a.max.x:
        return False
    if a.min.y > b.max.y or b.min.y > a.max.y:
        return False
    if a.min.z > b.max.z or b.min.z > a.max.z:
        return False
    return True

def dist(a: AABB, b: AABB) -> Union[bool, float]:
    """False, якщо бокси перетинаються, інакше евклідова відстань між ними."""
    ds = 0.0
    for lo1, hi1, lo2, hi2 in ((a.min.x, a.max.x, b.min.x, b.max.x),
                               (a.min.y, a.max.y, b.min.y, b.max.y),
                               (a.min.z, a.max.z, b.min.z, b.max.z)):
        if hi2 < lo1:
            t = lo1 - hi2
            ds += t*t
        elif hi1 < lo2:
            t = lo2 - hi1
            ds += t*t
    if ds > 0.0:
        return sqrt(ds)
    return False

def center(bv: BoundingVolume) -> Pt:
    if isinstance(bv, Sphere):
        return bv.center
    return average(bv.min, bv.max)

def surface_area(a: AABB) -> float:
    if a.min.x > a.max.x:
        return 0.0
    x, y, z = sub(a.max, a.min)
    return 2.0 * (x*y + y*z + z*x)

def volume(a: AABB) -> float:
    if a.min.x > a.max.x:
        return 0.0
    x, y, z = sub(a.max, a.min)
    return x*y*z

def max_extent(a: AABB) -> Optional[int]:
    """Індекс найдовшої осі: 0 = X, 1 = Y, 2 = Z; None, якщо бокс нульового розміру."""
    x, y, z = sub(a.max, a.min)
    if x > y and x > z:
        return 0
    if y > z:
        return 1
    if y == z and z <= 0.0:
        return None
    return 2

def sphere(a: AABB) -> Sphere:
    """Сфера навколо бокса: центр бокса, радіус — до найдальшого кута (0 для виродженого бокса)."""
    c = center(a)
    if not inside(c, a):
        return Sphere(c, 0.0)
    # по кожній осі — дальша з двох граней; після округлення центру вони можуть відрізнятися
    h = Pt(max(c.x - a.min.x, a.max.x - c.x),
           max(c.y - a.min.y, a.max.y - c.y),
           max(c.z - a.min.z, a.max.z - c.z))
    return Sphere(c, dot(h, h))

def inside(p: Sequence[float], bv: BoundingVolume) -> bool:
    """Чи лежить точка в боксі (включно з межею) або в сфері."""
    p = as_pt(p)
    if isinstance(bv, Sphere):
        return dist_sqr(bv.center, p) <= bv.radius_sqr
    return (bv.min.x <= p.x <= bv.max.x and
            bv.min.y <= p.y <= bv.max.y and
            bv.min.z <= p.z <= bv.max.z)
