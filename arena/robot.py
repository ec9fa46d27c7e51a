# ==============================================================================
# Author : Yuxuan Zhang (robotics@z-yx.cc)
# License: MIT
# ==============================================================================
from dataclasses import dataclass

from .geometry import Point
from .util import mod360


@dataclass(frozen=True)
class Pose:
    position: Point[float]
    # Degrees, counter-clockwise from +x, always within [0, 360)
    heading: float

    def __str__(self):
        return f"{self.position}, {self.heading:.4f}"


class Robot:
    """
    Point robot driven by a unicycle model: one (forward, angular) power pair
    per tick, both in percent of the platform's top speeds.
    """

    def __init__(
        self,
        position: Point[float],
        heading: float = 0.0,
        *,
        radius: float = 1.0,
        max_angular_speed: float = 2.718281828,
        max_forward_speed: float = 0.2,
    ):
        if radius < 0:
            raise ValueError(f"negative robot radius: {radius}")
        if max_angular_speed <= 0 or max_forward_speed <= 0:
            raise ValueError(
                f"speeds must be positive: {max_angular_speed}, {max_forward_speed}"
            )
        self.position = Point(*position)
        self.heading = mod360(heading)
        self.radius = radius
        self.max_angular_speed = max_angular_speed
        self.max_forward_speed = max_forward_speed

    @property
    def pose(self) -> Pose:
        return Pose(self.position, self.heading)

    def drive(self, forward_power: float, angular_power: float):
        """
        Rotate first, then move along the new heading. Powers are not
        clamped and no collision check is made.
        """
        self.heading = mod360(
            self.heading + angular_power / 100 * self.max_angular_speed
        )
        d = forward_power / 100 * self.max_forward_speed
        self.position = self.position.polar(self.heading, d)
