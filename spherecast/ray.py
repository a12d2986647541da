"""
Rays traced through the sphere scene.

Camera rays point from the lens sample to the focus plane and scattered
rays carry whatever direction the material produced, so directions are
never normalized here.
"""

from __future__ import annotations
from .vec3 import Vec3, Point3


class Ray:
    """Half-line origin + t * direction.

    Hit tests only accept t above a small positive epsilon, so the origin
    itself is never reported as an intersection.
    """

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Point3, direction: Vec3):
        self.origin = origin
        self.direction = direction

    def at(self, t: float) -> Point3:
        """Point at parameter t, measured in multiples of the direction's length."""
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
