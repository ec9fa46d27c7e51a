# ==============================================================================
# Author : Yuxuan Zhang (robotics@z-yx.cc)
# License: MIT
# ==============================================================================
# This module is a termination point. No imports should be made to other modules
# ==============================================================================
import sys
from functools import wraps
from typing import Generic, TypeVar, Callable
from inspect import signature

T = TypeVar("T")


def ownAttributes(cls: T) -> T:
    slots = signature(cls).parameters
    init = cls.__init__

    @wraps(init)
    def init_filter(self, *args, **kwargs):
        return init(self, *args, **{k: v for k, v in kwargs.items() if k in slots})

    cls.__init__ = init_filter
    return cls


def strip_parentheses(s: str) -> str:
    while True:
        for l, r in ("()", "[]", "{}", "<>"):
            s = s.strip()
            if s.startswith(l) and s.endswith(r):
                s = s[1:-1]
        else:
            break
    return s.strip()


class tuple_of(Generic[T]):
    def __init__(self, t: Callable[[str], T]):
        self.type = t

    def __call__(self, s: str) -> tuple[T]:
        return tuple(map(self.type, strip_parentheses(s).split(",")))

    def __repr__(self):
        return f"tuple_of({self.type.__name__})"


def repeat(action: Callable, *args, **kwargs):
    while True:
        yield action(*args, **kwargs)


def dup(dst, src=None):
    from sys import stdout

    if src is None:
        src = stdout

    def p(*args, file=stdout, **kwargs):
        if file is src:
            print(*args, file=dst, **kwargs)
        print(*args, file=file, **kwargs)

    return p


def warn(*args):
    print("warning:", *args, file=sys.stderr, flush=True)


def clamp(low, value, high):
    return max(low, min(value, high))


def mod360(degrees: float) -> float:
    """
    Wrap an angle into [0, 360)
    """
    return (degrees % 360 + 360) % 360


def signed_delta(alpha: float, beta: float) -> float:
    """
    Shortest signed rotation from beta to alpha, in degrees.
    Result lies in (-180, 180], so an exact half turn is always +180.
    """
    delta = mod360(alpha - beta)
    return delta - 360 if delta > 180 else delta
