# ==============================================================================
# Author : Yuxuan Zhang (robotics@z-yx.cc)
# License: MIT
# ==============================================================================
from math import inf, sqrt

from .geometry import Point, Segment, intersection, sqr_distance
from .robot import Robot
from .world import World


class RangeSensor:
    """
    Single forward-facing range finder mounted on the robot's rim.
    Anything further than `max_range` reads as infinitely far.
    """

    def __init__(self, world: World, robot: Robot, max_range: float = 6.0):
        if max_range <= 0:
            raise ValueError(f"sensor range must be positive: {max_range}")
        self.world = world
        self.robot = robot
        self.max_range = max_range

    def ray(self) -> Segment:
        robot = self.robot
        edge = robot.position.polar(robot.heading, robot.radius)
        return edge, edge.polar(robot.heading, self.max_range)

    def front_distance(self) -> float:
        edge, vision = self.ray()
        nearest = inf
        for a, b in self.world.segments:
            p: Point | None = intersection(edge, vision, a, b)
            if p is None:
                continue
            nearest = min(nearest, sqr_distance(edge, p))
        return sqrt(nearest)
