from __future__ import annotations

import pytest

from arena.arguments import parse
from arena.geometry import Point, Rect
from arena.world import World, Target
from navigator import Simulation, Status


def test_load_default_world(worlds) -> None:
    world = World(world_file=worlds / "default.yaml")
    assert world.name == "default"
    assert world.obstacles == (Rect(25, 15, 8, 35), Rect(65, 35, 8, 55))
    assert world.frame == Rect(0, 0, 100, 100)
    assert world.target.position == Point(90, 80)
    # Four edges per obstacle plus the arena frame
    assert len(world.segments) == 12


def test_simulation_reads_world_file(worlds) -> None:
    sim = Simulation(world=World(world_file=worlds / "default.yaml"))
    assert sim.robot.position == Point(10, 10)
    assert sim.robot.heading == 0.0
    assert sim.robot.radius == 1.0
    assert sim.robot.max_angular_speed == pytest.approx(2.718281828)
    assert sim.robot.max_forward_speed == pytest.approx(0.2)
    assert sim.sensor.max_range == 6
    assert sim.max_ticks is None
    assert sim.interval == 0.0


def test_arguments_override_world_file(worlds) -> None:
    meta = parse([str(worlds / "default.yaml"), "--src", "20,30", "-M", "100", "-r", "0.5"])
    assert isinstance(meta["world"], World)
    sim = Simulation(**meta)
    assert sim.robot.position == Point(20, 30)
    assert sim.robot.radius == 0.5
    assert sim.max_ticks == 100


def test_missing_world_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        World(world_file=tmp_path / "nowhere.yaml")


def test_world_without_target(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("obstacles: []\n")
    with pytest.raises(ValueError):
        World(world_file=path)


def test_world_without_start_position(tmp_path) -> None:
    path = tmp_path / "nostart.yaml"
    path.write_text("target: {position: [50, 50]}\n")
    with pytest.raises(ValueError):
        Simulation(world=World(world_file=path))


def test_invalid_configuration_fails_fast(worlds) -> None:
    with pytest.raises(ValueError):
        Target(Point(1, 1), -1.0)
    with pytest.raises(ValueError):
        World(initialized=True).initialize(
            obstacles=[], target=Target(Point(1, 1)), frame=Rect(0, 0, 0, 100)
        )
    with pytest.raises(ValueError):
        Simulation(world=World(world_file=worlds / "default.yaml"), radius=-1.0)


def test_run_writes_outputs(worlds, tmp_path, capsys) -> None:
    world = World(world_file=worlds / "open.yaml", meta=dict(prefix=f"{tmp_path}/"))
    sim = Simulation(world=world)
    assert Simulation.run(sim)
    assert sim.status is Status.REACHED_TARGET
    out = capsys.readouterr().out
    assert "# status     : REACHED_TARGET" in out
    assert "# circumvents: 0" in out
    assert "# sweeps     : 0" in out
    assert (tmp_path / "open.txt").is_file()
    assert (tmp_path / "open.png").is_file()
    lines = (tmp_path / "open.txt").read_text().splitlines()
    assert len([l for l in lines if not l.startswith("#")]) == sim.ticks


def test_run_reports_abort(worlds, capsys) -> None:
    sim = Simulation(world=World(world_file=worlds / "default.yaml"), max_ticks=10)
    assert Simulation.run(sim)
    out = capsys.readouterr().out
    assert "# abort      : exceeded max ticks" in out
    assert sim.ticks == 10
