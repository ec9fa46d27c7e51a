# ==============================================================================
# Author : Yuxuan Zhang (robotics@z-yx.cc)
# License: MIT
# ==============================================================================
from .arguments import register_arguments, Argument
from pathlib import Path

register_arguments(
    world_file=Argument(
        "world_file",
        opt_name=None,
        type=Path,
        nargs=1,
        help="Path to the world description (YAML)",
    ),
)

# ==============================================================================
# End argument injection
# ==============================================================================
from yaml import safe_load
from dataclasses import dataclass, field
from typing import Iterable

from .util import ownAttributes
from .geometry import Point, Rect, Segment


@dataclass(frozen=True)
class Target:
    position: Point[float]
    radius: float = 1.0

    def __post_init__(self):
        if self.radius < 0:
            raise ValueError(f"negative target radius: {self.radius}")


def rect(desc: dict | Iterable[float]) -> Rect:
    if isinstance(desc, dict):
        return Rect(desc["x"], desc["y"], desc["w"], desc["h"])
    return Rect(*desc)


@ownAttributes
@dataclass(frozen=False)
class World:
    # Snapshot of ALL arguments (not just the ones used in __init__)
    meta: dict = field(default_factory=dict)

    debug: bool = False
    world_file: Path | None = None
    # Flag to indicate post_init is done
    initialized: bool = False
    # Raw description as loaded from the world file
    desc: dict = field(default_factory=dict)
    # Static scene, read-only once initialized
    frame: Rect = field(init=False)
    obstacles: tuple[Rect, ...] = field(init=False)
    target: Target = field(init=False)
    # Collision surface consulted by the sensor
    segments: tuple[Segment, ...] = field(init=False)

    @staticmethod
    def create(*, world_file: list[Path], **kwargs):
        meta = kwargs
        world = World(**kwargs, meta=meta, world_file=world_file[0])
        meta["world"] = world
        return meta

    def initialize(
        self,
        *,
        obstacles: Iterable[Rect],
        target: Target,
        frame: Rect | None = None,
    ):
        self.initialized = True
        if frame is None:
            frame = Rect(0, 0, 100, 100)
        if frame.w <= 0 or frame.h <= 0:
            raise ValueError(f"degenerate arena frame: {frame}")
        self.frame = frame
        self.obstacles = tuple(obstacles)
        self.target = target
        # The frame is sensed like any other obstacle
        self.segments = tuple(
            segment for r in (*self.obstacles, frame) for segment in r.segments
        )
        return self

    def __post_init__(self):
        self.meta["world"] = self
        if self.initialized:
            return
        path = Path(self.world_file)
        if not path.is_file():
            raise FileNotFoundError(f"{path} not found")
        with path.open("r") as yaml:
            desc: dict = safe_load(yaml.read()) or {}
        self.desc = desc
        if "target" not in desc:
            raise ValueError(f"{path}: no target specified")
        t = desc["target"]
        self.initialize(
            obstacles=map(rect, desc.get("obstacles", [])),
            target=Target(Point(*t["position"]), float(t.get("radius", 1.0))),
            frame=rect(desc["frame"]) if "frame" in desc else None,
        )

    @property
    def name(self):
        if self.world_file is not None:
            return Path(self.world_file).stem
        else:
            return "Unnamed World"

    def section(self, key: str) -> dict:
        """
        A sub-dictionary of the world description, empty if absent
        """
        return self.desc.get(key) or {}
