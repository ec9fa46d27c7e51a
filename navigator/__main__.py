# ==============================================================================
# Author : Yuxuan Zhang (robotics@z-yx.cc)
# License: MIT
# ==============================================================================
import sys

from arena.arguments import parse
from . import Simulation

if __name__ == "__main__":
    sys.exit(0 if Simulation.run(**parse()) else 1)
