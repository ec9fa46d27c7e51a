# ==============================================================================
# Author : Yuxuan Zhang (robotics@z-yx.cc)
# License: MIT
# ==============================================================================
from .arguments import register_arguments, Argument
from .util import tuple_of

register_arguments(
    view_scale=Argument(
        opt_name="scale",
        type=float,
        required=False,
        help="Viewport pixels per world unit",
    ),
    visualize=Argument(
        "-v",
        action="store_true",
        help="Enable visualization",
    ),
    no_wait=Argument(
        action="store_true",
        help="Start immediately and do not wait for a key stroke after "
        "the simulation is complete, effective only with the -v flag",
    ),
    line_color=Argument(
        type=tuple_of(int),
        required=False,
        help="Color of the trajectory line (b,g,r)",
    ),
)

# ==============================================================================
# End argument injection
# ==============================================================================
import cv2, numpy as np
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, TYPE_CHECKING

from .util import ownAttributes
from .geometry import Point
from .world import World

if TYPE_CHECKING:
    from navigator import Telemetry


@ownAttributes
@dataclass(frozen=False)
class Visualization:
    """
    Passive renderer. Everything it draws comes from a telemetry snapshot,
    it holds no reference to the robot or the navigator.
    """

    world: World
    debug: bool = False

    view_scale: float = 8.0
    visualize: bool = False
    no_wait: bool = False
    line_color: tuple[int, int, int] = (0, 0, 255)

    def px(self, d: float):
        return max(int(d * self.view_scale + 0.5), 1)

    @property
    def line_width(self):
        return self.px(0.1)

    @property
    def shape(self):
        frame = self.world.frame
        return self.px(frame.h), self.px(frame.w)

    def pixel_pos(self, p: Point[float]) -> Point[int]:
        """
        Get location on the view given the world coordinates (y pointing up)
        """
        frame = self.world.frame
        k = self.view_scale
        return Point((p.x - frame.x) * k, (frame.y + frame.h - p.y) * k, type=int)

    def line(self, img: np.ndarray, src, dst, color=(0, 0, 0), width=None):
        width = width or self.line_width
        cv2.line(
            img, self.pixel_pos(src), self.pixel_pos(dst), color, width, cv2.LINE_AA
        )

    def circle(self, img: np.ndarray, center, radius: float, color, filled=True):
        thickness = cv2.FILLED if filled else self.line_width
        cv2.circle(
            img, self.pixel_pos(center), self.px(radius), color, thickness, cv2.LINE_AA
        )

    @property
    def view(self) -> np.ndarray:
        """
        Static part of the scene (BGR, uint8): obstacles and collision segments
        """
        img = np.full((*self.shape, 3), 255, dtype=np.uint8)
        for r in self.world.obstacles:
            cv2.rectangle(
                img, self.pixel_pos(r.tl), self.pixel_pos(r.br), (0, 0, 128), cv2.FILLED
            )
        for a, b in self.world.segments:
            self.line(img, a, b, (0, 0, 0), self.px(0.25))
        target = self.world.target
        self.circle(img, target.position, target.radius, (170, 170, 170))
        self.circle(img, target.position, target.radius, (0, 0, 0), filled=False)
        return img

    def render(
        self,
        telemetry: "Telemetry",
        trajectory: Iterable[Point[float]] = (),
        bg: np.ndarray | None = None,
    ) -> np.ndarray:
        img = self.view if bg is None else bg.copy()
        pts = [self.pixel_pos(p) for p in trajectory]
        if len(pts) > 1:
            pts = np.array(pts, dtype=np.int32).reshape((-1, 1, 2))
            cv2.polylines(img, [pts], False, self.line_color, 1, cv2.LINE_AA)
        pose = telemetry.pose
        radius = telemetry.radius
        self.circle(img, pose.position, radius, (119, 119, 119))
        self.circle(img, pose.position, radius, (0, 0, 0), filled=False)
        # Eye, marking the heading
        eye = radius * 0.3
        self.circle(img, pose.position.polar(pose.heading, radius - eye), eye, (0, 0, 0))
        # Sensor ray
        self.line(img, *telemetry.ray, (0, 0, 0), self.px(0.15))
        self.caption(img, f"{telemetry.status.name} | tick {telemetry.ticks}")
        return img

    def caption(self, img: np.ndarray, text: str, color=(64, 64, 64)):
        a = self.px(1.5)
        cv2.putText(
            img,
            text,
            (a, img.shape[0] - a),
            cv2.FONT_HERSHEY_DUPLEX,
            0.05 * self.view_scale,
            color,
            1,
            cv2.LINE_AA,
        )

    @property
    def handle(self):
        return self.world.name

    def show(self, img: np.ndarray):
        cv2.imshow(self.handle, img)
        return self.handle

    def saveImg(self, path: Path | str, img: np.ndarray):
        cv2.imwrite(str(path), img)
