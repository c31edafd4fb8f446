"""Помилки передумов. Усі — підкласи ValueError, як і решта перевірок вхідних даних."""


class BoundingVolumeError(ValueError):
    pass


class InsufficientPoints(BoundingVolumeError):
    """Замало точок для операції (quickhull < 3, коваріація без граней)."""

    def __init__(self, needed: int, got: int, what: str = "points"):
        super().__init__(f"Need at least {needed} {what}, got {got}")
        self.needed = needed
        self.got = got


class DegenerateInput(BoundingVolumeError):
    """Усі точки збігаються або лежать на одній прямій: опорного трикутника немає."""
