# examples/demo_hull.py
import logging

from bvol3d.geom import unique_points
from bvol3d.hull import QuickHull

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    raw = [
        (0,0,0), (1,0,0), (1,1,0), (0,1,0),
        (0,0,1), (1,0,1), (1,1,1), (0,1,1),
        (0.5,0.5,0.5), (0.2,0.8,0.3), (0.8,0.2,0.7)
    ]
    pts = unique_points(raw)
    hull = QuickHull(pts)

    report = hull.validate()
    print("VALIDATION:", report)

    with open("hull.off", "w", encoding="utf-8") as f:
        f.write(hull.to_off())
    print("Wrote hull.off — можна глянути в MeshLab/ParaView.")
