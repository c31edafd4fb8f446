# examples/demo_pipeline.py
import math

from bvol3d.bbox import box, sphere, volume, inside
from bvol3d.eigen import eigen_vecs
from bvol3d.pipeline import oriented_box
from bvol3d.ray import Ray, hit

if __name__ == "__main__":
    # бокс 4 x 2 x 1, повернутий на 30° навколо z
    a = math.radians(30)
    ca, sa = math.cos(a), math.sin(a)
    pts = []
    for x in (-2, 2):
        for y in (-1, 1):
            for z in (-0.5, 0.5):
                pts.append((ca*x - sa*y, sa*x + ca*y, z))

    bb = box(pts)
    print("AABB:", bb.min, bb.max, "volume:", volume(bb))

    s = sphere(bb)
    print("Sphere radius:", s.radius, "contains all:", all(inside(p, s) for p in pts))

    vals, frame = eigen_vecs(pts)
    print("Eigenvalues:", vals)
    print("Frame:", frame)

    obb = oriented_box(pts)
    print("OBB half extents:", obb.half_extents, "volume:", obb.volume)

    print("Ray hit:", hit(Ray.of((-5, 0, 0), (1, 0, 0)), bb))
