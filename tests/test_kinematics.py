from __future__ import annotations

import math

import pytest

from arena.geometry import Point
from arena.robot import Robot
from navigator.controller import TurningController


def test_drive_forward() -> None:
    robot = Robot(Point(10, 10), 0.0)
    robot.drive(100, 0)
    assert robot.position.x == pytest.approx(10.2)
    assert robot.position.y == pytest.approx(10.0)
    assert robot.heading == 0.0


def test_drive_rotates_before_moving() -> None:
    robot = Robot(Point(0, 0), 0.0, max_angular_speed=90.0, max_forward_speed=1.0)
    robot.drive(100, 100)
    assert robot.heading == pytest.approx(90.0)
    assert robot.position.x == pytest.approx(0.0, abs=1e-9)
    assert robot.position.y == pytest.approx(1.0)


def test_drive_accepts_signed_and_out_of_range_powers() -> None:
    robot = Robot(Point(50, 50), 10.0, max_angular_speed=10.0, max_forward_speed=1.0)
    robot.drive(-200, -300)
    # -30 degrees from 10 wraps around
    assert robot.heading == pytest.approx(340.0)
    assert 0.0 <= robot.heading < 360.0
    assert robot.position.x == pytest.approx(50 - 2 * math.cos(math.radians(340)))
    assert robot.position.y == pytest.approx(50 - 2 * math.sin(math.radians(340)))


def test_heading_normalized_on_construction() -> None:
    assert Robot(Point(0, 0), -90.0).heading == 270.0
    assert Robot(Point(0, 0), 720.0).heading == 0.0


def test_invalid_robot_configuration() -> None:
    with pytest.raises(ValueError):
        Robot(Point(0, 0), radius=-1.0)
    with pytest.raises(ValueError):
        Robot(Point(0, 0), max_forward_speed=0.0)


def test_turn_power_is_clamped() -> None:
    controller = TurningController(Robot(Point(0, 0)))
    assert controller.power(0.0) == 1
    assert controller.power(180.0) == 100
    assert controller.power(1.0) == pytest.approx(100 / 2.718281828)


def test_turn_toward_converges() -> None:
    for start in range(0, 360, 15):
        for desired in (0.0, 41.19, 90.0, 180.0, 275.5, 359.9):
            robot = Robot(Point(0, 0), float(start))
            controller = TurningController(robot)
            error = abs(((desired - start) + 180) % 360 - 180)
            bound = math.ceil(error / robot.max_angular_speed) + 2
            ticks = 0
            while not controller.is_close_to(desired):
                controller.turn_toward(desired)
                ticks += 1
                assert ticks <= bound, (start, desired)


def test_turn_toward_takes_shortest_way() -> None:
    robot = Robot(Point(0, 0), 350.0)
    TurningController(robot).turn_toward(10.0)
    assert robot.heading == pytest.approx(350.0 + robot.max_angular_speed)
    robot = Robot(Point(0, 0), 10.0)
    TurningController(robot).turn_toward(350.0)
    assert robot.heading == pytest.approx(10.0 - robot.max_angular_speed)


def test_half_turn_goes_counter_clockwise() -> None:
    robot = Robot(Point(0, 0), 0.0)
    TurningController(robot).turn_toward(180.0)
    assert robot.heading == pytest.approx(robot.max_angular_speed)


def test_is_close_to_tolerance() -> None:
    robot = Robot(Point(0, 0), 0.1)
    controller = TurningController(robot)
    assert controller.is_close_to(0.0)
    assert controller.is_close_to(359.95)
    assert not controller.is_close_to(0.35)
