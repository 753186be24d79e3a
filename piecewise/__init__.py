"""
Piecewise-constant (step) functions over intervals of any ordered domain.
"""

from piecewise.interval import Interval, Kind, InvalidBounds
from piecewise.segment import Segment
from piecewise.smallpiecewise import SmallPiecewise, Builder, BuilderConsumed

__all__ = ["Interval", "Kind", "InvalidBounds", "Segment", "SmallPiecewise",
           "Builder", "BuilderConsumed"]
