from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass, replace
from typing import Deque, Dict, Iterable, List, Sequence, Tuple

from .errors import DegenerateInput, InsufficientPoints
from .geom import Pt, EPS, ZERO, as_pt, cross, dot, normalize, sub, average, vec_dist
from .predicates import Plane, plane_of, check_plane, signed_distance_to_plane

logger = logging.getLogger(__name__)

Triangle = Tuple[Pt, Pt, Pt]
Edge = Tuple[Pt, Pt]          # орієнтоване ребро (u, v)


@dataclass(frozen=True)
class HullFace:
    """
    Трикутна грань оболонки, що будується.
    vertices: (a, b, c), нормаль площини — (b-a) x (c-a), назовні.
    plane: опорна площина (центроїд, одинична нормаль).
    outside: точки строго перед площиною; найвіддаленіша — перша.
             Виняток — стартова грань: у хвіст її множини додаються точки,
             що лежать рівно в площині стартового трикутника.
    """
    vertices: Triangle
    plane: Plane
    outside: Tuple[Pt, ...] = ()

    @classmethod
    def of(cls, a: Pt, b: Pt, c: Pt) -> "HullFace":
        return cls((a, b, c), plane_of((a, b, c)))

    def with_outside(self, points: Sequence[Pt]) -> "HullFace":
        return replace(self, outside=tuple(points))

    def edges(self) -> Tuple[Edge, Edge, Edge]:
        a, b, c = self.vertices
        return (a, b), (b, c), (c, a)


def split_outside(pool: Iterable[Pt], tri: Triangle, eps: float = 0.0) -> Tuple[List[Pt], List[Pt]]:
    """
    Розбити точки на (попереду площини трикутника tri, решта).
    У першому списку найвіддаленіша точка стоїть першою, порядок інших — порядок появи.
    """
    head = None
    worst = 0.0
    front: List[Pt] = []
    behind: List[Pt] = []
    for p in pool:
        is_front, d = check_plane(p, tri, eps)
        if not is_front:
            behind.append(p)
        elif head is None:
            head, worst = p, d
        elif d < worst:
            front.append(p)
        else:
            front.append(head)
            head, worst = p, d
    if head is not None:
        front.insert(0, head)
    return front, behind


def horizon_edges(faces: Iterable[HullFace]) -> List[Edge]:
    """
    Межа об'єднання граней: ребро, що зустрічається в обох напрямках, внутрішнє
    і скорочується; лишаються ребра горизонту в порядку появи.
    """
    eds: Dict[Edge, None] = {}
    for f in faces:
        for u, v in f.edges():
            if (v, u) in eds:
                del eds[(v, u)]
            else:
                eds[(u, v)] = None
    return list(eds)


def is_single_loop(edges: Sequence[Edge]) -> bool:
    """Чи утворюють орієнтовані ребра рівно один замкнений цикл."""
    if not edges:
        return False
    succ = dict(edges)
    if len(succ) != len(edges):
        return False
    start = edges[0][0]
    u = start
    for steps in range(1, len(edges) + 1):
        u = succ.get(u)
        if u is None:
            return False
        if u == start:
            return steps == len(edges)
    return False


class QuickHull:
    """
    Quickhull: інкрементальне розщеплення граней із зовнішніми множинами точок.

    Вхід: щонайменше 3 точки (будь-які 3-послідовності).
    Вихід: self.faces — список трикутників (a, b, c) з Pt, нормалі назовні.
    Кожна точка входу лежить на або позаду кожної грані.
    Плоский вхід (усі точки в одній площині) дає двосторонню віялову тріангуляцію
    його опуклого многокутника; колінеарний або збіжний вхід — DegenerateInput.
    """

    def __init__(self, points: Iterable[Sequence[float]], eps: float = 0.0):
        self.P: List[Pt] = [as_pt(p) for p in points]
        if len(self.P) < 3:
            raise InsufficientPoints(3, len(self.P))
        self.eps = eps
        # точні дублікати дали б грані з повтореними вершинами
        self.U: List[Pt] = list(dict.fromkeys(self.P))
        if len(self.U) < 3:
            raise DegenerateInput(f"Need at least 3 distinct points, got {len(self.U)}")

        # 1) стартовий двосторонній трикутник + розподіл решти точок
        work = self._build_initial_faces()

        # 2) основний цикл: поки існують грані з зовнішніми точками
        self.hull_faces: List[HullFace] = self._expand_until_done(work)
        self.faces: List[Triangle] = [f.vertices for f in self.hull_faces]
        logger.debug("quickhull: %d points -> %d faces", len(self.P), len(self.faces))

    # ---------------- Внутрішні методи ----------------
    def _seed_line(self) -> Tuple[Pt, Pt, List[Pt]]:
        """Лексикографічні мінімум і максимум усього входу за один прохід."""
        v1, v2, *rest = self.U
        m1, m2 = (v1, v2) if v1 < v2 else (v2, v1)
        remaining: List[Pt] = []
        for v in rest:
            if v < m1:
                remaining.append(m1)
                m1 = v
            elif v > m2:
                remaining.append(m2)
                m2 = v
            else:
                remaining.append(v)
        return m1, m2, remaining

    def _seed_apex(self, m1: Pt, m2: Pt, remaining: List[Pt]) -> Tuple[Pt, List[Pt]]:
        """
        Третя точка — приблизно найдальша від прямої m1-m2:
        відстань до середини відрізка * (1 - |cos| кута з прямою).
        """
        cen = average(m1, m2)
        axis = normalize(sub(m2, cen))

        def score(v: Pt) -> float:
            vvec, vd = vec_dist(v, cen)
            return vd * (1.0 - abs(dot(vvec, axis)))

        best = remaining[0]
        best_val = score(best)
        rest: List[Pt] = []
        for v in remaining[1:]:
            val = score(v)
            if val > best_val:
                rest.append(best)
                best, best_val = v, val
            else:
                rest.append(v)
        return best, rest

    def _build_initial_faces(self) -> Deque[HullFace]:
        m1, m2, remaining = self._seed_line()
        t3, remaining = self._seed_apex(m1, m2, remaining)

        face_a = HullFace.of(m1, m2, t3)
        if face_a.plane.normal == ZERO:
            raise DegenerateInput("All points collinear: cannot form a base triangle")
        # та сама площина з протилежною нормаллю — тоді кожна точка потрапляє рівно в одну половину
        n = face_a.plane.normal
        face_b = HullFace((m1, t3, m2), Plane(face_a.plane.point, Pt(-n.x, -n.y, -n.z)))
        logger.debug("quickhull seed: %s %s %s", m1, m2, t3)

        front, rest = split_outside(remaining, face_a.vertices, self.eps)
        back, on_plane = split_outside(rest, face_b.vertices, self.eps)
        logger.debug("quickhull initial split: %d front, %d back, %d on plane",
                     len(front), len(back), len(on_plane))
        if not front and not back:
            return deque(self._flat_faces(face_a, on_plane))
        # точки в площині стартового трикутника перевіряються знову, коли оболонка матиме об'єм
        if front:
            front += on_plane
        else:
            back += on_plane
        return deque([face_a.with_outside(front), face_b.with_outside(back)])

    def _flat_faces(self, seed: HullFace, points: List[Pt]) -> List[HullFace]:
        """
        Усі точки в площині seed: опуклий многокутник монотонним ланцюгом
        (порядок Pt — лексикографічний, тобто загальний напрямок у площині),
        потім віяло з першої вершини, лицем і зворотом.
        """
        a, b, c = seed.vertices
        n = cross(sub(b, a), sub(c, a))

        def turn(o: Pt, p: Pt, q: Pt) -> float:
            return dot(cross(sub(p, o), sub(q, o)), n)

        def chain(seq: Iterable[Pt]) -> List[Pt]:
            out: List[Pt] = []
            for q in seq:
                while len(out) >= 2 and turn(out[-2], out[-1], q) <= 0.0:
                    out.pop()
                out.append(q)
            return out

        pts = sorted({a, b, c, *points})
        ring = chain(pts)[:-1] + chain(reversed(pts))[:-1]
        logger.debug("quickhull: flat input, %d of %d points on the outline", len(ring), len(pts))

        h0 = ring[0]
        fan = list(zip(ring[1:-1], ring[2:]))
        return ([HullFace.of(h0, u, v) for u, v in fan] +
                [HullFace.of(h0, v, u) for u, v in fan])

    def _add_point(self, face: HullFace, others: List[HullFace]) -> Tuple[List[HullFace], List[HullFace]]:
        """
        Додати голову зовнішньої множини грані face:
          1) зібрати видимі з точки грані: від face через спільні ребра до сусідів,
             перед якими точка строго попереду (грань, у площині якої лежить точка, невидима),
          2) зібрати їхні зовнішні точки і горизонт,
          3) пришити нові грані (u, v, P) вздовж горизонту, жадібно роздаючи точки.
        Повертає (нові грані, грані, що лишилися).
        """
        p = face.outside[0]
        faces = [face] + others
        owner: Dict[Edge, int] = {e: i for i, f in enumerate(faces) for e in f.edges()}
        seen = {0}
        visible_ids = {0}
        stack = [0]
        while stack:
            for u, v in faces[stack.pop()].edges():
                j = owner.get((v, u))
                if j is None or j in seen:
                    continue
                seen.add(j)
                if check_plane(p, faces[j].vertices, self.eps)[0]:
                    visible_ids.add(j)
                    stack.append(j)
        visible = [f for i, f in enumerate(faces) if i in visible_ids]
        kept = [f for i, f in enumerate(faces) if i not in visible_ids]

        pool = [q for f in visible for q in f.outside if q != p]
        horizon = horizon_edges(visible)
        if not is_single_loop(horizon):
            logger.warning("quickhull: horizon of %s is not a single loop (%d edges)", p, len(horizon))

        new_faces: List[HullFace] = []
        for u, v in horizon:
            nf = HullFace.of(u, v, p)
            # перша нова грань, перед якою точка лежить, забирає її
            claimed, pool = split_outside(pool, nf.vertices, self.eps)
            new_faces.append(nf.with_outside(claimed))
        logger.debug("quickhull step: %d visible, %d horizon edges, %d points dropped",
                     len(visible), len(horizon), len(pool))
        return new_faces, kept

    def _expand_until_done(self, work: Deque[HullFace]) -> List[HullFace]:
        """Головний цикл: поки існує грань із зовнішніми точками, розширюємо hull."""
        done: List[HullFace] = []
        while work:
            face = work.popleft()
            if not face.outside:
                done.append(face)
                continue
            new_faces, kept = self._add_point(face, done + list(work))
            done, work = [], deque()
            for f in new_faces + kept:
                if f.outside:
                    work.append(f)
                else:
                    done.append(f)
        return done

    # ---------------- Публічний API ----------------
    def vertices(self) -> List[Pt]:
        """Унікальні вершини оболонки в порядку першої появи."""
        return list(dict.fromkeys(v for tri in self.faces for v in tri))

    def indexed(self) -> Tuple[List[Pt], List[Tuple[int, int, int]]]:
        """(вершини, трикутники як індекси у вершини)."""
        verts = self.vertices()
        index = {v: i for i, v in enumerate(verts)}
        return verts, [(index[a], index[b], index[c]) for a, b, c in self.faces]

    # ---------------- Діагностика / Експорт ----------------
    def validate(self, tol: float = EPS) -> dict:
        """
        Перевірка коректності:
          - кожне неорієнтоване ребро зустрічається рівно у 2 гранях;
          - ці дві грані проходять ребро у протилежних напрямках;
          - жодна точка входу не лежить перед гранню далі ніж tol.
          Для плоского входу (двостороннє віяло) діагоналі віяла мають по 4 грані.
        Повертає словник із діагностикою (порожні списки = все ок).
        """
        edge_count: Dict[Tuple[Pt, Pt], int] = {}
        directed: Dict[Edge, int] = {}
        for a, b, c in self.faces:
            for u, v in ((a, b), (b, c), (c, a)):
                key = (min(u, v), max(u, v))
                edge_count[key] = edge_count.get(key, 0) + 1
                directed[(u, v)] = directed.get((u, v), 0) + 1
        bad_edges = [(e, k) for e, k in edge_count.items() if k != 2]
        bad_winding = [e for e, k in directed.items() if k != 1 or (e[1], e[0]) not in directed]

        outside: List[Tuple[int, Pt, float]] = []
        for fid, (a, b, c) in enumerate(self.faces):
            for p in self.P:
                d = signed_distance_to_plane(a, b, c, p)
                if d > tol:
                    outside.append((fid, p, d))

        return {
            "faces": len(self.faces),
            "unique_vertices": len(self.vertices()),
            "bad_edges": bad_edges,
            "bad_winding": bad_winding,
            "outside_points": outside,
        }

    def to_off(self) -> str:
        """
        Експорт опуклої оболонки у формат OFF.
        """
        verts, tris = self.indexed()
        lines = ["OFF", f"{len(verts)} {len(tris)} 0"]
        for p in verts:
            lines.append(f"{p.x} {p.y} {p.z}")
        for a, b, c in tris:
            lines.append(f"3 {a} {b} {c}")
        return "\n".join(lines)


def quickhull(points: Iterable[Sequence[float]], eps: float = 0.0) -> List[Triangle]:
    """Опукла оболонка набору точок як список трикутників (a, b, c)."""
    return QuickHull(points, eps).faces
