# ==============================================================================
# Author : Yuxuan Zhang (robotics@z-yx.cc)
# License: MIT
# ==============================================================================
from arena.arguments import register_arguments, Argument
from arena.util import tuple_of
from arena.geometry import Point


def point(s: str) -> Point[float]:
    return Point(*tuple_of(float)(s), type=float)


register_arguments(
    src=Argument(type=point, required=False, help="Starting location (x,y)"),
    heading=Argument(
        type=float, required=False, help="Initial heading of the robot in degrees"
    ),
    radius=Argument("-r", type=float, required=False, help="Robot radius"),
    max_angular_speed=Argument(
        type=float, required=False, help="Top angular speed, in degrees per tick"
    ),
    max_forward_speed=Argument(
        type=float, required=False, help="Top forward speed, in units per tick"
    ),
    sensor_range=Argument(
        type=float,
        required=False,
        help="Range of the front sensor, anything further reads as infinity",
    ),
    max_ticks=Argument(
        "-M",
        type=int,
        required=False,
        help="Abort the simulation after this many ticks",
    ),
    max_travel=Argument(
        type=float,
        required=False,
        help="Abort the simulation after travelling this far",
    ),
    interval=Argument(
        "-i",
        type=float,
        required=False,
        help="Milliseconds between two ticks. "
        "Defaults to 5 with -v, otherwise runs as fast as possible",
    ),
)

# ==============================================================================
# End argument injection
# ==============================================================================
import builtins, sys, cv2
from dataclasses import dataclass, field
from time import perf_counter, sleep

from arena.util import ownAttributes, repeat, dup, warn, signed_delta
from arena.geometry import Segment, distance
from arena.world import World
from arena.robot import Robot, Pose
from arena.sensor import RangeSensor
from arena.output import Output
from arena.visualization import Visualization

from .controller import TurningController
from .bug import BugNavigator, Status

TUNABLES = dict(
    max_angular_speed=2.718281828,
    max_forward_speed=0.2,
    sensor_range=6.0,
    max_ticks=None,
    max_travel=None,
    interval=None,
)


@dataclass(frozen=True)
class Telemetry:
    """
    Read-only snapshot handed to the renderer after each tick
    """

    pose: Pose
    radius: float
    ray: Segment
    status: Status
    ticks: int
    world: World = field(compare=False, repr=False)


@ownAttributes
@dataclass(frozen=False)
class Simulation:
    world: World
    debug: bool = False

    src: Point[float] | None = None
    heading: float | None = None
    radius: float | None = None

    max_angular_speed: float | None = None
    max_forward_speed: float | None = None
    sensor_range: float | None = None
    max_ticks: int | None = None
    max_travel: float | None = None
    interval: float | None = None

    robot: Robot = field(init=False)
    sensor: RangeSensor = field(init=False)
    controller: TurningController = field(init=False)
    navigator: BugNavigator = field(init=False)
    out: Output = field(init=False)
    vis: Visualization = field(init=False)

    status: Status = field(init=False, default=Status.RUNNING)
    ticks: int = field(init=False, default=0)
    travel: float = field(init=False, default=0.0)

    class Abort(Exception):
        def __init__(self, reason: str):
            super().__init__(reason)
            self.reason = reason

    def __post_init__(self):
        # Command line first, then the world file, then built-in defaults
        robot = self.world.section("robot")
        if self.src is None:
            if "position" not in robot:
                raise ValueError("No starting position given")
            self.src = robot["position"]
        self.src = Point(*self.src)
        if self.heading is None:
            self.heading = float(robot.get("heading", 0.0))
        if self.radius is None:
            self.radius = float(robot.get("radius", 1.0))
        tunables = self.world.section("tunables")
        for name, default in TUNABLES.items():
            if getattr(self, name) is None:
                setattr(self, name, tunables.get(name, default))
        self.robot = Robot(
            self.src,
            self.heading,
            radius=self.radius,
            max_angular_speed=self.max_angular_speed,
            max_forward_speed=self.max_forward_speed,
        )
        self.sensor = RangeSensor(self.world, self.robot, self.sensor_range)
        self.controller = TurningController(self.robot)
        self.navigator = BugNavigator()
        self.out = Output(**self.world.meta)
        self.vis = Visualization(**self.world.meta)
        if self.interval is None:
            self.interval = 5.0 if self.vis.visualize else 0.0

    @property
    def dst(self) -> Point[float]:
        return self.world.target.position

    @property
    def distance_to_target(self) -> float:
        return distance(self.robot.position, self.dst)

    @property
    def target_heading(self) -> float:
        return (self.dst - self.robot.position).angle

    @property
    def target_off_course(self) -> bool:
        """
        The target lies more than a quarter turn away from the current heading
        """
        return abs(signed_delta(self.target_heading, self.robot.heading)) > 90

    @property
    def telemetry(self) -> Telemetry:
        return Telemetry(
            pose=self.robot.pose,
            radius=self.robot.radius,
            ray=self.sensor.ray(),
            status=self.status,
            ticks=self.ticks,
            world=self.world,
        )

    def step(self) -> Status:
        """
        Advance the simulation by one tick: at most one drive command
        """
        if self.status is Status.REACHED_TARGET:
            return self.status
        if self.max_ticks is not None and self.ticks >= self.max_ticks:
            raise Simulation.Abort("exceeded max ticks")
        p0 = self.robot.position
        self.status = self.navigator.step(self)
        if self.status is Status.RUNNING:
            self.ticks += 1
            self.travel += distance(p0, self.robot.position)
            if self.max_travel is not None and self.travel > self.max_travel:
                raise Simulation.Abort("exceeded max travel distance")
        return self.status

    def __iter__(self):
        """
        Run the simulation, yielding a telemetry snapshot after every tick
        """
        while self.step() is Status.RUNNING:
            yield self.telemetry

    def paced(self):
        """
        Same as iterating the simulation, but at most one tick per interval
        """
        interval = self.interval / 1000.0
        t0 = perf_counter()
        for telemetry in self:
            yield telemetry
            if interval <= 0:
                continue
            remaining = interval - (perf_counter() - t0)
            if remaining > 0:
                sleep(remaining)
            elif remaining < 0:
                warn("frame drop")
            t0 = perf_counter()

    @classmethod
    def run(cls, sim: "Simulation" = None, /, **kwargs):
        """
        Drive the simulation to completion, reporting the outcome on stdout
        """
        if sim is None:
            sim = cls(**kwargs)
        elif len(kwargs) > 0:
            raise TypeError("Cannot specify both sim and kwargs")
        vis, out = sim.vis, sim.out
        name = sim.world.name
        trj_list = out(name, suffix="txt")
        sim_img = out(name, suffix="png")
        if trj_list is not None:
            trj_list_file = open(trj_list, "w")
            print = dup(trj_list_file)
        else:
            print = builtins.print

        bg = vis.view
        trajectory = [sim.robot.position]
        failed = False
        flag_term = False

        def failure(img):
            p = vis.pixel_pos(sim.robot.position)
            cv2.drawMarker(
                img, p, (0, 0, 255), cv2.MARKER_TILTED_CROSS, vis.px(3), vis.px(0.3)
            )
            return img

        if vis.visualize:
            vis.show(vis.render(sim.telemetry, trajectory, bg))
            if not vis.no_wait:
                # Any key starts the simulation, ESC or 'q' leaves
                key = next(k for k in repeat(cv2.waitKey, 10) if k >= 0)
                flag_term = key == 27 or key == ord("q")

        try:
            for telemetry in (() if flag_term else sim.paced()):
                pose = telemetry.pose
                trajectory.append(pose.position)
                print(*pose.position, pose.heading, sep=",")
                if vis.visualize:
                    vis.show(vis.render(telemetry, trajectory, bg))
                    key = cv2.waitKey(1)
                    if key == 27 or key == ord("q"):  # ESC or 'q'
                        flag_term = True
                        break
            print("# src        :", sim.src)
            print("# dst        :", sim.dst)
            print("# status     :", sim.status.name)
            print("# ticks      :", sim.ticks)
            print("# travel     :", sim.travel)
            print("# circumvents:", sim.navigator.circumvents)
            print("# sweeps     :", sim.navigator.sweeps)
            if flag_term:
                print("# abort      : user aborted")
        except KeyboardInterrupt:
            flag_term = failed = True
            print("# abort      : user aborted")
        except Simulation.Abort as e:
            failed = True
            print("# abort      :", e.reason)
        except Exception as e:
            import traceback

            failed = True
            print("# abort      :", e)
            traceback.print_exception(e, file=sys.stderr)

        if trj_list is not None:
            trj_list_file.close()
        img = vis.render(sim.telemetry, trajectory, bg)
        if failed:
            failure(img)
        if sim_img is not None:
            vis.saveImg(sim_img, img)
        if vis.visualize and not vis.no_wait and not flag_term:
            try:
                vis.show(img)
                for key in repeat(cv2.waitKey, 10):
                    if key > 0:
                        break
            except KeyboardInterrupt:
                flag_term = True
        if vis.visualize:
            cv2.destroyAllWindows()

        return not flag_term
