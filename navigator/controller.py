# ==============================================================================
# Author : Yuxuan Zhang (robotics@z-yx.cc)
# License: MIT
# ==============================================================================
from arena.robot import Robot
from arena.util import clamp, mod360, signed_delta


class TurningController:
    """
    Proportional heading controller. Each call to turn_toward() issues one
    drive command, the caller keeps calling until is_close_to() holds.
    """

    # Alignment tolerance, in degrees
    threshold: float = 0.2

    def __init__(self, robot: Robot):
        self.robot = robot

    def power(self, delta: float) -> float:
        # Floor of 1% so the last fraction of a degree is never a zero command
        return clamp(1, abs(delta) / self.robot.max_angular_speed * 100, 100)

    def turn_toward(self, desired: float):
        delta = signed_delta(desired, self.robot.heading)
        # delta < -180 cannot happen with signed_delta(), kept for symmetry
        direction = +1 if (delta > 0 or delta < -180) else -1
        self.robot.drive(0, direction * self.power(delta))

    def is_close_to(self, desired: float) -> bool:
        delta = mod360(desired - self.robot.heading)
        return delta < self.threshold or delta > 360 - self.threshold
