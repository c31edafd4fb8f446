from __future__ import annotations
from dataclasses import dataclass
from math import sqrt, inf
from typing import Iterable, Sequence, Tuple

EPS = 1e-10  # допуск для перевірок (валідація, тести)
INFINITY = inf


@dataclass(frozen=True, order=True)
class Pt:
    """Точка або вектор у 3D. Порівняння — лексикографічне (x, потім y, потім z)."""
    x: float
    y: float
    z: float
    def __iter__(self):
        yield self.x; yield self.y; yield self.z


ZERO = Pt(0.0, 0.0, 0.0)


def as_pt(v: Sequence[float]) -> Pt:
    if isinstance(v, Pt):
        return v
    x, y, z = v
    return Pt(float(x), float(y), float(z))

def sub(a: Pt, b: Pt) -> Pt:
    return Pt(a.x - b.x, a.y - b.y, a.z - b.z)

def add(a: Pt, b: Pt) -> Pt:
    return Pt(a.x + b.x, a.y + b.y, a.z + b.z)

def mul(a: Pt, s: float) -> Pt:
    return Pt(a.x*s, a.y*s, a.z*s)

def dot(a: Pt, b: Pt) -> float:
    return a.x*b.x + a.y*b.y + a.z*b.z

def cross(a: Pt, b: Pt) -> Pt:
    return Pt(a.y*b.z - a.z*b.y,
              a.z*b.x - a.x*b.z,
              a.x*b.y - a.y*b.x)

def norm(a: Pt) -> float:
    return sqrt(dot(a, a))

def dist_sqr(a: Pt, b: Pt) -> float:
    d = sub(a, b)
    return dot(d, d)

def normalize(a: Pt) -> Pt:
    """Одиничний вектор; для нульового вектора — нульовий вектор (без ділення на 0)."""
    n = norm(a)
    if n == 0.0:
        return ZERO
    inv = 1.0 / n
    return Pt(a.x*inv, a.y*inv, a.z*inv)

def vec_dist(a: Pt, b: Pt) -> Tuple[Pt, float]:
    """
    (напрямок від b до a як одиничний вектор, відстань |a - b|).
    Для збіжних точок повертає (ZERO, 0.0).
    """
    d = sub(a, b)
    n = norm(d)
    if n == 0.0:
        return ZERO, 0.0
    return Pt(d.x/n, d.y/n, d.z/n), n

def average(*points: Pt) -> Pt:
    inv = 1.0 / len(points)
    return Pt(sum(p.x for p in points)*inv,
              sum(p.y for p in points)*inv,
              sum(p.z for p in points)*inv)

def centroid(points: Iterable[Pt]) -> Pt:
    xs = ys = zs = 0.0
    n = 0
    for p in points:
        xs += p.x; ys += p.y; zs += p.z; n += 1
    if n == 0:
        raise ValueError("empty set")
    inv = 1.0 / n
    return Pt(xs*inv, ys*inv, zs*inv)

def unique_points(points: Iterable[Sequence[float]], scale: float = 1e9) -> list[Pt]:
    """
    Груба дедуплікація з квантуванням (стабільніше для float).
    `scale=1e9` ≈ EPS=1e-9 на координату. Порядок першої появи зберігається.
    """
    seen: dict[Tuple[int, int, int], Pt] = {}
    for p in points:
        p = as_pt(p)
        key = (int(round(p.x*scale)), int(round(p.y*scale)), int(round(p.z*scale)))
        if key not in seen:
            seen[key] = p
    return list(seen.values())
