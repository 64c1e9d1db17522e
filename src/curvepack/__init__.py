# -*- coding: utf-8 -*-
"""bounded parametric curves and closed boundary loops for **curvepack**"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("curvepack")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

from curvepack.errors import CurveError
from curvepack.curve import Curve, IntersectionPoint, Usage
from curvepack.lineseg import LineSegment
from curvepack.arc import CircularArc
from curvepack.quadratic import QuadraticCurve
from curvepack.cubic import CubicCurve
from curvepack.loop import Joint, Loop, Milestone

__all__ = [
    "CircularArc",
    "CubicCurve",
    "Curve",
    "CurveError",
    "IntersectionPoint",
    "Joint",
    "LineSegment",
    "Loop",
    "Milestone",
    "QuadraticCurve",
    "Usage",
    "__version__",
]
