# ==============================================================================
# Author : Yuxuan Zhang (robotics@z-yx.cc)
# License: MIT
# ==============================================================================
from typing import Iterable, TypeVar, Iterator
from math import sqrt, atan2, cos, sin, radians, degrees
import builtins

from .util import mod360


def i(x: int | float):
    return int(round(x))


T = TypeVar("T")


class Point(tuple[T, T]):
    _type: type[T]

    @property
    def x(self) -> T:
        return self[0]

    @property
    def y(self) -> T:
        return self[1]

    def zip(self, other: T | tuple[T]):
        if isinstance(other, Iterable):
            assert len(self) == len(other), "dimension mismatch"
            other = Point(*other, type=builtins.type(other[0]))
        else:
            other = Point(other, type=builtins.type(other))
        return zip(self, other)

    def __new__(cls, *args, type: type[T] = float):
        if len(args) == 1:
            args = args * 2
        elif len(args) != 2:
            raise ValueError(f"invalid arguments: {args}")
        ret = tuple.__new__(cls, tuple(map(i if type is int else type, args)))
        setattr(ret, "_type", type)
        return ret

    @classmethod
    def Angular(cls, deg: float, length: float = 1.0):
        """Vector of a given length pointing along a heading in degrees"""
        r = radians(deg)
        return cls(length * cos(r), length * sin(r))

    def polar(self, deg: float, length: float):
        """This point moved by `length` along heading `deg` (degrees)"""
        return self + Point.Angular(deg, length)

    def __add__(self, other: tuple[T, T]):
        return self.__class__(*[s + o for s, o in self.zip(other)], type=self._type)

    def __sub__(self, other: tuple[T, T]):
        return self.__class__(*[s - o for s, o in self.zip(other)], type=self._type)

    def __mul__(self, other: T):
        return self.__class__(*[(s * o) for s, o in self.zip(other)], type=self._type)

    def __truediv__(self, other: T):
        return self.__class__(*[(s / o) for s, o in self.zip(other)], type=float)

    @property
    def sqr_norm(self):
        return sum(v**2 for v in self)

    @property
    def norm(self):
        return sqrt(self.sqr_norm)

    @property
    def angle(self):
        """Heading of this vector in degrees, within [0, 360)"""
        return mod360(degrees(atan2(self.y, self.x)))

    def __str__(self):
        if self._type is int:
            return f"{self.x}, {self.y}"
        elif self._type is float:
            return f"{self.x:.4f}, {self.y:.4f}"
        else:
            return f"{self.x}, {self.y}"


Segment = tuple[Point[float], Point[float]]


def sqr_distance(p: tuple[float, float], q: tuple[float, float]) -> float:
    dx = p[0] - q[0]
    dy = p[1] - q[1]
    return dx * dx + dy * dy


def distance(p: tuple[float, float], q: tuple[float, float]) -> float:
    return sqrt(sqr_distance(p, q))


def intersection(
    a1: Point[float], a2: Point[float], b1: Point[float], b2: Point[float]
) -> Point[float] | None:
    """
    Intersection point of segments a1-a2 and b1-b2, None if they do not cross.
    Parallel segments never intersect, including collinear overlapping ones.
    Touching endpoints count as an intersection.
    """
    dx1, dy1 = a2[0] - a1[0], a2[1] - a1[1]
    dx2, dy2 = b2[0] - b1[0], b2[1] - b1[1]
    det = dx1 * dy2 - dy1 * dx2
    if det == 0:
        return None
    t = ((b1[0] - a1[0]) * dy2 + (a1[1] - b1[1]) * dx2) / det
    u = ((a1[0] - b1[0]) * dy1 + (b1[1] - a1[1]) * dx1) / -det
    if t < 0 or t > 1 or u < 0 or u > 1:
        return None
    return Point(a1[0] + t * dx1, a1[1] + t * dy1)


class Rect:
    """
    Axis-aligned rectangle in world units, anchored at its lower-left corner.
    """

    def __init__(self, x: float, y: float, w: float, h: float):
        if w < 0 or h < 0:
            raise ValueError(f"invalid rectangle size: {w} x {h}")
        self.x, self.y, self.w, self.h = map(float, (x, y, w, h))

    @property
    def bl(self):
        return Point(self.x, self.y)

    @property
    def br(self):
        return Point(self.x + self.w, self.y)

    @property
    def tl(self):
        return Point(self.x, self.y + self.h)

    @property
    def tr(self):
        return Point(self.x + self.w, self.y + self.h)

    @property
    def segments(self) -> Iterator[Segment]:
        yield self.bl, self.br
        yield self.bl, self.tl
        yield self.tl, self.tr
        yield self.br, self.tr

    def __iter__(self):
        return iter((self.x, self.y, self.w, self.h))

    def __eq__(self, other):
        return isinstance(other, Rect) and tuple(self) == tuple(other)

    def __repr__(self):
        return f"Rect({self.x}, {self.y}, {self.w}, {self.h})"
