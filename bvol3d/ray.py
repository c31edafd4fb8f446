# bvol3d/ray.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .bbox import AABB
from .geom import Pt, INFINITY, as_pt

Signs = Tuple[bool, bool, bool]


@dataclass(frozen=True)
class Ray:
    """Промінь o + t*d, t ∈ [near, far]."""
    origin: Pt
    direction: Pt
    near: float = 0.0
    far: float = INFINITY

    @classmethod
    def of(cls, origin: Sequence[float], direction: Sequence[float],
           near: float = 0.0, far: float = INFINITY) -> "Ray":
        return cls(as_pt(origin), as_pt(direction), float(near), float(far))


def _inv(c: float) -> float:
    # -0.0 теж дає +inf: знак має збігатися з бітом (c < 0.0), а він для -0.0 хибний
    if c == 0.0:
        return INFINITY
    return 1.0 / c

def inv_sign(direction: Sequence[float]) -> Tuple[Pt, Signs]:
    """
    Передобчислення для slab-тесту: обернений напрямок (±inf для нульових компонент)
    і біти знаку (True — компонента від'ємна, min/max для осі міняються місцями).
    """
    x, y, z = direction
    return Pt(_inv(x), _inv(y), _inv(z)), (x < 0.0, y < 0.0, z < 0.0)

def _slab(lo: float, hi: float, o: float, inv: float, neg: bool,
          near: float, far: float) -> Tuple[float, float]:
    t0 = (lo - o) * inv
    t1 = (hi - o) * inv
    if neg:
        t0, t1 = t1, t0
    # порядок аргументів важливий: max(near, nan) == near
    return max(near, t0), min(far, t1)

def hit(ray: Ray, bb: AABB, precomputed: Optional[Tuple[Pt, Signs]] = None) -> bool:
    """Чи влучає промінь у бокс (slab-тест по осях x, y, z; відстань не повертається)."""
    inv, (sx, sy, sz) = precomputed if precomputed is not None else inv_sign(ray.direction)
    o = ray.origin

    near, far = _slab(bb.min.x, bb.max.x, o.x, inv.x, sx, ray.near, ray.far)
    if not near < far:
        return False
    near, far = _slab(bb.min.y, bb.max.y, o.y, inv.y, sy, near, far)
    if not near < far:
        return False
    near, far = _slab(bb.min.z, bb.max.z, o.z, inv.z, sz, near, far)
    return near < far
