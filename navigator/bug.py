# ==============================================================================
# Author : Yuxuan Zhang (robotics@z-yx.cc)
# License: MIT
# ==============================================================================
from enum import Enum
from math import ceil, floor, inf
from typing import TYPE_CHECKING

from arena.util import mod360, signed_delta

if TYPE_CHECKING:
    from . import Simulation


class Status(Enum):
    RUNNING = 0
    REACHED_TARGET = 1


class BugNavigator:
    """
    Bug algorithm driven by a single forward range sensor.

    The robot heads straight for the target until something shows up within
    `clearance`. It then sweeps a full turn to find the direction of the
    nearest surface (the wall normal), turns to whichever tangent points more
    toward the target and follows it until blocked again. Once the target
    lies more than 90 degrees off the following direction it turns back to
    the target and resumes seeking.

    Each call to step() issues exactly one drive command, or none once the
    target is reached. Rotations pending before a mode can continue are
    tracked on an explicit stack instead of nested calls.
    """

    class Mode(Enum):
        SEEK = 0
        ADVANCE = 1
        ALIGN = 2
        SWEEP = 3
        FOLLOW = 4
        REEVALUATE = 5
        RESUME = 6
        REACHED = 7

    # Seeking ends this close to the target
    reach_threshold: float = 0.1
    # Front distance that counts as blocked
    clearance: float = 5.0
    # Rotation per tick while sweeping, in degrees
    sweep_increment: float = 2.0

    def __init__(self):
        self.mode = self.Mode.SEEK
        # Modes to continue with once the current alignment completes
        self.pending: list[BugNavigator.Mode] = []
        self.align_to: float = 0.0
        # Sweep progress
        self.samples: int = 0
        self.nearest: float = inf
        self.normal: float | None = None
        # Statistics
        self.circumvents: int = 0
        self.sweeps: int = 0

    @property
    def sweep_samples(self):
        return ceil(360 / self.sweep_increment)

    def sweep_power(self, sim: "Simulation"):
        # Exact halves round up
        return floor(self.sweep_increment * 100 / sim.robot.max_angular_speed + 0.5)

    def align(self, heading: float, then: Mode):
        self.pending.append(then)
        self.align_to = heading
        self.mode = self.Mode.ALIGN

    def sweep(self):
        self.sweeps += 1
        self.samples = 0
        self.nearest = inf
        self.normal = None
        self.mode = self.Mode.SWEEP

    def tangent(self, sim: "Simulation") -> float:
        """
        Pick the side to go around the obstacle: of the two headings parallel
        to the sensed surface, the one closer to the target direction.
        """
        if self.normal is None:
            raise sim.Abort("unable to determine obstacle normal")
        left = mod360(self.normal + 90)
        right = mod360(self.normal - 90)
        target = sim.target_heading
        cost_left = abs(signed_delta(left, target))
        cost_right = abs(signed_delta(right, target))
        return left if cost_left < cost_right else right

    def step(self, sim: "Simulation") -> Status:
        while self.mode is not self.Mode.REACHED:
            if self.transition(sim):
                return Status.RUNNING
        return Status.REACHED_TARGET

    def transition(self, sim: "Simulation") -> bool:
        """
        Advance the state machine by one transition.
        Returns True if a drive command was issued, which ends the tick.
        """
        robot, sensor, controller = sim.robot, sim.sensor, sim.controller
        match self.mode:
            case self.Mode.SEEK:
                if sim.distance_to_target < self.reach_threshold:
                    self.mode = self.Mode.REACHED
                elif sensor.front_distance() < self.clearance:
                    self.circumvents += 1
                    self.sweep()
                else:
                    self.align(sim.target_heading, then=self.Mode.ADVANCE)
                return False
            case self.Mode.ADVANCE:
                robot.drive(100, 0)
                self.mode = self.Mode.SEEK
                return True
            case self.Mode.ALIGN:
                if controller.is_close_to(self.align_to):
                    self.mode = self.pending.pop()
                    return False
                controller.turn_toward(self.align_to)
                return True
            case self.Mode.SWEEP:
                if self.samples < self.sweep_samples:
                    d = sensor.front_distance()
                    # Strict comparison keeps the first of equal minima
                    if d < self.nearest:
                        self.nearest = d
                        self.normal = robot.heading
                    self.samples += 1
                    robot.drive(0, self.sweep_power(sim))
                    return True
                self.align(self.tangent(sim), then=self.Mode.FOLLOW)
                return False
            case self.Mode.FOLLOW:
                if sensor.front_distance() > self.clearance:
                    robot.drive(100, 0)
                    return True
                self.mode = self.Mode.REEVALUATE
                return False
            case self.Mode.REEVALUATE:
                if sim.target_off_course:
                    self.align(sim.target_heading, then=self.Mode.RESUME)
                else:
                    self.sweep()
                return False
            case self.Mode.RESUME:
                if sim.target_off_course:
                    self.sweep()
                else:
                    self.mode = self.Mode.SEEK
                return False
            case _:
                # Should never reach here
                raise RuntimeError(f"Invalid mode {self.mode}")
