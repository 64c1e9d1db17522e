"""
Shared capability set of the bounded curve variants.

Every curve is parameterized over ``0 <= t <= 1`` and carries a trim
range, a sub-interval of ``[0, 1]`` that is the usable part of the
curve.  The ends of a curve are the points at the trim bounds.

Curves are values: ``trim_front()``, ``trim_back()``, ``reverse()``,
``transform()`` and ``with_usage()`` return new curves and never
modify the receiver.

The concrete variants are ``LineSegment``, ``CircularArc``,
``QuadraticCurve`` and ``CubicCurve``.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

import curvepack.geom as geom
from curvepack.errors import ParameterRangeError


class Usage(Enum):
    """Purpose of a curve, consumed by display code to pick a stroke."""
    ORDINARY = "ordinary"
    NOTIONAL = "notional"
    SELECTED = "selected"
    SKETCH = "sketch"
    CUSTOM = "custom"


@dataclass(frozen=True)
class IntersectionPoint:
    """A crossing of a curve and a line.

    ``t`` is the parameter on the curve that was hit.
    """
    x: float
    y: float
    z: float
    t: float

    @classmethod
    def at(cls, pt, t: float) -> "IntersectionPoint":
        return cls(pt[0], pt[1], pt[2], t)

    @property
    def point(self) -> list:
        return geom.point(self.x, self.y, self.z)


class Curve(ABC):
    """Base class for bounded parametric curves."""

    def __init__(self, usage: Usage = Usage.ORDINARY, custom: Any = None):
        self._trim = (0.0, 1.0)
        self._set_usage(usage, custom)

    def _set_usage(self, usage, custom):
        if not isinstance(usage, Usage):
            raise ValueError(f'usage must be a Usage member, got {usage!r}')
        if custom is not None and usage is not Usage.CUSTOM:
            raise ValueError('a custom payload requires Usage.CUSTOM')
        self._usage = usage
        self._custom = custom

    def _copy(self):
        return copy.copy(self)

    @property
    def usage(self) -> Usage:
        return self._usage

    @property
    def custom(self) -> Any:
        return self._custom

    def with_usage(self, usage: Usage, custom: Any = None) -> "Curve":
        fresh = self._copy()
        fresh._set_usage(usage, custom)
        return fresh

    @property
    def trim_range(self) -> Tuple[float, float]:
        return self._trim

    def trim_front(self, low: float) -> "Curve":
        """Return a copy whose usable range starts at ``low``."""
        if low < 0.0 or low >= self._trim[1]:
            raise ParameterRangeError(
                f'front trim {low} must lie in [0, {self._trim[1]})', low)
        fresh = self._copy()
        fresh._trim = (float(low), self._trim[1])
        return fresh

    def trim_back(self, high: float) -> "Curve":
        """Return a copy whose usable range ends at ``high``."""
        if high > 1.0 or high <= self._trim[0]:
            raise ParameterRangeError(
                f'back trim {high} must lie in ({self._trim[0]}, 1]', high)
        fresh = self._copy()
        fresh._trim = (self._trim[0], float(high))
        return fresh

    def _check_param(self, t: float, ignore_trim: bool = False):
        low, high = (0.0, 1.0) if ignore_trim else self._trim
        if t < low or t > high:
            raise ParameterRangeError(
                f'parameter {t} is outside [{low}, {high}]', t)

    def point_at(self, t: float, ignore_trim: bool = False) -> list:
        """Point on the curve at parameter ``t``."""
        self._check_param(t, ignore_trim)
        return self._evaluate(t)

    def get_one_end(self) -> list:
        return self._evaluate(self._trim[0])

    def get_other_end(self) -> list:
        return self._evaluate(self._trim[1])

    def _mirrored_trim(self) -> Tuple[float, float]:
        return (1.0 - self._trim[1], 1.0 - self._trim[0])

    @abstractmethod
    def _evaluate(self, t: float) -> list:
        """Unchecked evaluation of the full curve at ``t``."""

    @abstractmethod
    def tangent_at(self, t: float) -> list:
        pass

    @property
    @abstractmethod
    def length(self) -> float:
        pass

    @property
    @abstractmethod
    def bbox(self) -> list:
        pass

    @abstractmethod
    def approximate(self, tolerance: float) -> List[list]:
        pass

    @abstractmethod
    def intersect(self, line, accuracy: float = geom.epsilon) -> List[IntersectionPoint]:
        pass

    @abstractmethod
    def is_coincident(self, pt, accuracy: float = geom.epsilon) -> Tuple[bool, Optional[float]]:
        pass

    @abstractmethod
    def reverse(self) -> "Curve":
        pass

    @abstractmethod
    def transform(self, matrix) -> "Curve":
        pass


def dedupe_hits(hits: List[IntersectionPoint]) -> List[IntersectionPoint]:
    """Drop hits that land on an already reported point."""
    kept: List[IntersectionPoint] = []
    for hit in hits:
        if not any(geom.vclose(hit.point, seen.point) for seen in kept):
            kept.append(hit)
    return kept
