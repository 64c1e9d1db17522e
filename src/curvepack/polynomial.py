"""
Common machinery for the polynomial curves.

A polynomial curve keeps one list of coefficients per axis, lowest
power first, so that ``x(t) = c[0] + c[1]*t + c[2]*t**2 + ...``.
Intersection and closest point searches have no closed form here and
go through :mod:`curvepack.search`.
"""

from __future__ import annotations

from abc import abstractmethod
from math import comb
from typing import List, Optional, Sequence, Tuple

import numpy as np

import curvepack.geom as geom
import curvepack.search as search
from curvepack.curve import Curve, IntersectionPoint, Usage, dedupe_hits
from curvepack.errors import (
    CoincidentPointsError,
    NonCoplanarLinesError,
    ParameterRangeError,
    check_accuracy,
)

## samples used to estimate the bounding box
BBOX_DIVISIONS = 20

## pieces used by refine_range()
REFINE_CHUNKS = 10

_UNSET = object()


def solve_coefficients(rows: Sequence[Sequence[float]], values: Sequence[Sequence[float]]) -> List[List[float]]:
    """Solve ``rows @ c = values`` for the per-axis coefficients.

    Each row of ``rows`` holds the powers of ``t`` (or their
    derivatives) at one constraint; ``values`` holds the matching x, y,
    z triples.  Returns three coefficient lists, lowest power first.
    """
    solution = np.linalg.solve(np.array(rows, dtype=float),
                               np.array(values, dtype=float))
    return [[float(c) for c in solution[:, axis]] for axis in range(3)]


def power_row(t: float, degree: int) -> List[float]:
    return [t ** k for k in range(degree + 1)]


class PolynomialCurve(Curve):
    """Shared behavior of ``QuadraticCurve`` and ``CubicCurve``."""

    degree = 0

    def _setup(self, coeffs, usage, custom, trim=(0.0, 1.0)):
        Curve.__init__(self, usage, custom)
        self._coeffs = [list(map(float, axis)) for axis in coeffs]
        self._trim = trim
        self._plane = _UNSET
        if geom.vclose(self._evaluate(0.0), self._evaluate(1.0)):
            raise CoincidentPointsError('polynomial curve ends must be distinct',
                                        {'point': self._evaluate(0.0)})

    @classmethod
    def _build(cls, coeffs, usage: Usage = Usage.ORDINARY, custom=None, trim=(0.0, 1.0)):
        curve = cls.__new__(cls)
        curve._setup(coeffs, usage, custom, trim)
        return curve

    @classmethod
    def from_coefficients(cls, xs, ys, zs, usage: Usage = Usage.ORDINARY):
        """Curve from per-axis coefficients given highest power first,
        e.g. ``(a, b, c, d)`` for ``a*t**3 + b*t**2 + c*t + d``."""
        for axis in (xs, ys, zs):
            if len(axis) != cls.degree + 1:
                raise ValueError(f'expected {cls.degree + 1} coefficients per axis, got {len(axis)}')
        return cls._build([list(reversed(axis)) for axis in (xs, ys, zs)], usage)

    def coefficients(self) -> Tuple[Tuple[float, ...], ...]:
        """per-axis coefficients, highest power first"""
        return tuple(tuple(reversed(axis)) for axis in self._coeffs)

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, self.coefficients())

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return all(abs(a - b) < geom.epsilon_v
                   for mine, theirs in zip(self._coeffs, other._coeffs)
                   for a, b in zip(mine, theirs)) and self._trim == other._trim

    __hash__ = None

    def _evaluate(self, t):
        pt = []
        for axis in self._coeffs:
            acc = 0.0
            for c in reversed(axis):
                acc = acc * t + c
            pt.append(acc)
        return geom.point(pt)

    def tangent_at(self, t):
        self._check_param(t)
        return geom.vect([sum(k * axis[k] * t ** (k - 1) for k in range(1, len(axis)))
                          for axis in self._coeffs])

    @property
    def length(self):
        return search.polyline_length(self._evaluate, self._trim)

    @property
    def bbox(self):
        low, high = self._trim
        pts = [self._evaluate(low + (high - low) * i / BBOX_DIVISIONS)
               for i in range(BBOX_DIVISIONS + 1)]
        return geom.pointsbbox(pts)

    def approximate(self, tolerance):
        return search.approximate(self._evaluate, self._trim, tolerance)

    def plane(self):
        if self._plane is _UNSET:
            self._plane = self._find_plane()
        return self._plane

    @abstractmethod
    def _find_plane(self):
        """containing plane, or ``None``"""

    def intersect(self, line, accuracy=geom.epsilon) -> List[IntersectionPoint]:
        check_accuracy(accuracy)
        flat = self.plane()
        if flat is not None and not flat.contains_line(line, accuracy):
            raise NonCoplanarLinesError('line is not in the plane of the curve',
                                        {'line': line})
        hits = []
        for span in search.crossing_candidates(self._evaluate, line, self._trim):
            hit = search.converge_crossing(self._evaluate, line, span, accuracy)
            if hit is not None:
                hits.append(hit)
        return dedupe_hits(hits)

    def find_closest(self, target, accuracy=geom.epsilon) -> Optional[Tuple[list, float]]:
        """``(point, t)`` of the curve point nearest ``target``, or
        ``None`` when the target is far from the whole curve"""
        check_accuracy(accuracy)
        for t in self._trim:
            if geom.dist(target, self._evaluate(t)) < accuracy:
                return self._evaluate(t), t
        t = search.closest_param(self._evaluate, target, self._trim, self.length)
        if t is None:
            return None
        return self._evaluate(t), t

    def is_coincident(self, pt, accuracy=geom.epsilon):
        found = self.find_closest(pt, accuracy)
        if found is None or geom.dist(found[0], pt) >= accuracy:
            return False, None
        return True, found[1]

    def refine_range(self, target, span):
        """a narrower parameter range, inside ``span``, bracketing the
        sample nearest ``target``"""
        low, high = self._trim
        for bound in span:
            if bound < low or bound > high:
                raise ParameterRangeError(f'span bound {bound} is outside the trim range', bound)
        step = (span[1] - span[0]) / REFINE_CHUNKS
        params = [span[0] + step * g for g in range(REFINE_CHUNKS + 1)]
        seps = [geom.dist(target, self._evaluate(t)) for t in params]
        thumb = seps.index(min(seps))
        if thumb == 0:
            return params[0], params[1]
        if thumb == len(params) - 1:
            return params[-2], params[-1]
        return params[thumb - 1], params[thumb + 1]

    def reverse(self):
        """same curve run backwards, found by substituting ``1 - t``"""
        flipped = []
        for axis in self._coeffs:
            flipped.append([sum(axis[k] * comb(k, j) for k in range(j, len(axis))) * (-1) ** j
                            for j in range(len(axis))])
        return type(self)._build(flipped, self._usage, self._custom, self._mirrored_trim())

    def transform(self, matrix):
        """exact image of the curve under an affine ``matrix``"""
        if not matrix.isaffine():
            raise ValueError('polynomial curves take affine transforms only')
        terms = []
        for k in range(self.degree + 1):
            term = [axis[k] for axis in self._coeffs]
            # the constant term moves like a point, the rest like directions
            terms.append(matrix.mul(geom.point(term) if k == 0 else geom.vect(term)))
        coeffs = [[terms[k][axis] for k in range(self.degree + 1)] for axis in range(3)]
        return type(self)._build(coeffs, self._usage, self._custom, self._trim)
