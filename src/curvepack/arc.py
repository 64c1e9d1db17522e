"""
Circular arcs.

An arc is a center, a unit axis, a start point and a signed sweep
angle in radians, ``-2*pi <= sweep <= 2*pi``.  Positive sweeps turn
counterclockwise when looking down the axis.  Internally each arc
keeps a local frame with its origin at the center, local X towards
the start point and local Z along the axis, so that the point at
parameter ``t`` is simply ``(r*cos(sweep*t), r*sin(sweep*t), 0)`` in
local coordinates.
"""

from __future__ import annotations

import logging
from math import acos, atan2, ceil, cos, hypot, sin

import mpmath as mpm

import curvepack.geom as geom
from curvepack.curve import Curve, IntersectionPoint, Usage, dedupe_hits
from curvepack.errors import (
    ArcPointsError,
    CoincidentLinesError,
    CoincidentPointsError,
    CollinearPointsError,
    NegativeAccuracyError,
    NonCoplanarLinesError,
    NonOrthogonalError,
    NonUnitDirectionError,
    ParallelLinesError,
    ParameterRangeError,
    ZeroVectorError,
    check_accuracy,
)
from curvepack.line import Line, intersect_two, iscoincident, iscoplanar, isparallel
from curvepack.plane import Plane
from curvepack.xform import CoordinateSystem

logger = logging.getLogger(__name__)

## number of chords used to estimate the bounding box
BBOX_DIVISIONS = 20


class CircularArc(Curve):
    """A portion of a circle, or a whole one."""

    def __init__(self, center, axis, start, sweep, usage: Usage = Usage.ORDINARY, custom=None):
        if geom.iszero(axis):
            raise ZeroVectorError('arc axis has zero length', {'axis': axis})
        if not geom.isunit(axis):
            raise NonUnitDirectionError('arc axis must be a unit vector: {}'.format(geom.vstr(axis)),
                                        {'axis': axis})
        if geom.vclose(center, start):
            raise CoincidentPointsError('arc start point is on the center',
                                        {'point': start})
        baseline = geom.unit(geom.sub(start, center))
        if abs(geom.dot(axis, baseline)) >= geom.epsilon_v:
            raise NonOrthogonalError('arc start point is off the plane of the arc',
                                     {'start': start, 'axis': axis})
        if sweep < -geom.pi2 or sweep > geom.pi2:
            raise ParameterRangeError(f'sweep angle {sweep} is outside [-2pi, 2pi]', sweep)
        if abs(sweep) < 1e-12:
            raise ParameterRangeError('sweep angle must not be zero', sweep)

        super().__init__(usage, custom)
        self._center = geom.point(center)
        self._axis = geom.vect(axis)
        self._start = geom.point(start)
        self._sweep = float(sweep)
        self._radius = geom.dist(center, start)

        frame = CoordinateSystem(self._center, baseline, geom.unit(self._axis))
        self._to_global = frame.to_global()
        self._from_global = frame.from_global()

    @classmethod
    def from_ends(cls, center, end1, end2, use_small_angle: bool,
                  accuracy: float = geom.epsilon, usage: Usage = Usage.ORDINARY):
        """Arc around ``center`` from ``end1`` to ``end2``.

        The axis is chosen so that the short way round is a positive
        sweep; ``use_small_angle=False`` goes the long way instead, with
        a negative sweep.  Half circles are ambiguous and can't be built
        this way.
        """
        check_accuracy(accuracy)
        rad1 = geom.dist(center, end1)
        rad2 = geom.dist(center, end2)
        if abs(rad1 - rad2) >= accuracy:
            raise ArcPointsError('arc ends are at different distances from the center',
                                 {'center': center, 'end1': end1, 'end2': end2})
        if not geom.isuniquepool([center, end1, end2]):
            raise CoincidentPointsError('arc center and ends must be distinct',
                                        {'point': end1})
        if geom.islinear3(center, end1, end2):
            raise CollinearPointsError('arc center and ends are in a line',
                                       {'center': center, 'end1': end1, 'end2': end2})

        baseline = geom.unit(geom.sub(end1, center))
        buttress = geom.unit(geom.sub(end2, center))
        up = geom.unit(geom.cross(baseline, buttress))
        vert = geom.unit(geom.cross(up, baseline))
        end_angle = atan2(geom.dot(vert, buttress), geom.dot(baseline, buttress))
        sweep = end_angle if use_small_angle else end_angle - geom.pi2
        return cls(center, up, end1, sweep, usage)

    def __repr__(self):
        return 'CircularArc({},{},{},{})'.format(geom.vstr(self._center),
                                                 geom.vstr(self._axis),
                                                 geom.vstr(self._start),
                                                 self._sweep)

    def __eq__(self, other):
        if not isinstance(other, CircularArc):
            return NotImplemented
        return geom.vclose(self._center, other._center) and \
            geom.vsame(self._axis, other._axis) and \
            geom.vclose(self._start, other._start) and \
            abs(self._sweep - other._sweep) < geom.epsilon_v and \
            self._trim == other._trim

    __hash__ = None

    @property
    def center(self):
        return list(self._center)

    @property
    def axis(self):
        return list(self._axis)

    @property
    def start(self):
        return list(self._start)

    @property
    def sweep(self) -> float:
        return self._sweep

    @property
    def radius(self) -> float:
        return self._radius

    def plane(self) -> Plane:
        return Plane(self._center, geom.unit(self._axis))

    def point_at_angle(self, theta):
        """global point at angle ``theta`` from the start point"""
        local = geom.point(self._radius * cos(theta), self._radius * sin(theta), 0.0)
        return self._to_global.mul(local)

    def _evaluate(self, t):
        return self.point_at_angle(self._sweep * t)

    def tangent_at(self, t):
        self._check_param(t)
        theta = self._sweep * t
        rate = self._sweep * self._radius
        local = geom.vect(-rate * sin(theta), rate * cos(theta), 0.0)
        return self._to_global.mul(local)

    @property
    def length(self):
        return abs(self._sweep) * self._radius * (self._trim[1] - self._trim[0])

    @property
    def bbox(self):
        low, high = self._trim
        pts = [self._evaluate(low + (high - low) * i / BBOX_DIVISIONS)
               for i in range(BBOX_DIVISIONS + 1)]
        return geom.pointsbbox(pts)

    def approximate(self, tolerance):
        """points along the arc, spaced so that no chord strays more
        than ``tolerance`` from the arc"""
        check_accuracy(tolerance, 'tolerance')
        ratio = max(1.0 - tolerance / self._radius, -1.0)
        max_swing = 2.0 * acos(ratio)
        low, high = self._trim
        span = self._sweep * (high - low)
        count = max(1, int(ceil(abs(span / max_swing))))
        step = span / count
        first = self._sweep * low
        return [self.point_at_angle(first + step * i) for i in range(count + 1)]

    def _sweep_param(self, theta, slack):
        """parameter for local angle ``theta``, in ``(-pi, pi]``, or
        ``None`` when the angle is outside the trimmed sweep.  Angles
        past the +/- pi seam are wrapped according to the sweep sign."""
        if self._sweep > 0.0:
            if theta < -slack:
                theta += geom.pi2
            elif theta < 0.0:
                theta = 0.0
        else:
            if theta > slack:
                theta -= geom.pi2
            elif theta > 0.0:
                theta = 0.0
        t = theta / self._sweep
        tslack = slack / abs(self._sweep)
        low, high = self._trim
        if t < low - tslack or t > high + tslack:
            return None
        return min(max(t, low), high)

    def is_coincident(self, pt, accuracy=geom.epsilon):
        check_accuracy(accuracy)
        local = self._from_global.mul(geom.point(pt))
        if abs(local[2]) > accuracy:
            return False, None
        if abs(hypot(local[0], local[1]) - self._radius) > accuracy:
            return False, None
        t = self._sweep_param(atan2(local[1], local[0]), accuracy / self._radius)
        if t is None:
            return False, None
        return True, t

    def intersect(self, line, accuracy=geom.epsilon):
        """0, 1 or 2 crossings of a line lying in the plane of the arc"""
        check_accuracy(accuracy)
        if not self.plane().contains_line(line, accuracy):
            raise NonCoplanarLinesError('line is not in the plane of the arc',
                                        {'line': line, 'arc': self})

        _, perp = line.resolve_relative(self._center)
        if perp > self._radius + accuracy:
            return []
        nearest = line.drop_point(self._center)

        mpr = mpm.mpf(self._radius)
        mpp = mpm.mpf(min(perp, self._radius))
        half = float(mpm.sqrt(mpr*mpr - mpp*mpp))

        if half < geom.epsilon:
            candidates = [nearest]
        else:
            jump = geom.scale3(line.direction, half)
            candidates = [geom.offset(nearest, jump),
                          geom.offset(nearest, geom.reverse(jump))]

        hits = []
        for pt in candidates:
            local = self._from_global.mul(pt)
            t = self._sweep_param(atan2(local[1], local[0]), accuracy / self._radius)
            if t is not None:
                hits.append(IntersectionPoint.at(pt, t))
        return dedupe_hits(hits)

    def reverse(self):
        fresh = CircularArc(self._center, self._axis, self.point_at_angle(self._sweep),
                            -self._sweep, self._usage, self._custom)
        fresh._trim = self._mirrored_trim()
        return fresh

    def transform(self, matrix):
        center = matrix.mul(self._center)
        axis = geom.unit(matrix.mul(self._axis))
        start = matrix.mul(self._start)
        fresh = CircularArc(center, axis, start, self._sweep, self._usage, self._custom)
        fresh._trim = self._trim
        return fresh

    def concentric(self, delta):
        """arc with the same center, axis and sweep, and radius grown
        by ``delta``"""
        if delta <= -self._radius:
            raise CoincidentPointsError('concentric arc would shrink to a point',
                                        {'point': self._center, 'delta': delta})
        outward = geom.unit(geom.sub(self._start, self._center))
        start = geom.offset(self._start, geom.scale3(outward, delta))
        fresh = CircularArc(self._center, self._axis, start, self._sweep,
                            self._usage, self._custom)
        fresh._trim = self._trim
        return fresh

    @staticmethod
    def build_fillet(line1, line2, radius, keep_near1: bool, keep_near2: bool):
        """the small arc of radius ``radius`` tangent to two crossing
        lines.  ``keep_near1`` puts the arc on the side of ``line1``
        facing the origin of ``line2``, and ``keep_near2`` likewise."""
        if not radius > 0.0:
            raise NegativeAccuracyError(f'fillet radius must be positive, got {radius}', radius)
        if not iscoplanar(line1, line2):
            raise NonCoplanarLinesError('fillet lines do not share a plane',
                                        {'line_a': line1, 'line_b': line2})
        if iscoincident(line1, line2):
            raise CoincidentLinesError('fillet lines are coincident', {'line': line1})
        if isparallel(line1, line2):
            raise ParallelLinesError('fillet lines are parallel', {'line': line1})

        crux = intersect_two(line1, line2)
        toward2 = _toward(line1, line2, crux)
        toward1 = _toward(line2, line1, crux)
        shift1 = geom.scale3(toward2, radius if keep_near1 else -radius)
        shift2 = geom.scale3(toward1, radius if keep_near2 else -radius)
        guide1 = Line(geom.offset(line1.origin, shift1), line1.direction)
        guide2 = Line(geom.offset(line2.origin, shift2), line2.direction)
        center = intersect_two(guide1, guide2)
        logger.debug('fillet of radius %s centered at %s', radius, geom.vstr(center))
        return CircularArc.from_ends(center, line1.drop_point(center),
                                     line2.drop_point(center), True)

    @staticmethod
    def build_arc_fillet(line, arc, radius, keep_near1: bool, keep_near2: bool):
        """the small arc of radius ``radius`` tangent to ``line`` and to
        ``arc``, running from the arc to the line.

        ``keep_near1`` shifts the fillet center towards
        ``line.direction x arc.axis``, the other way otherwise.
        ``keep_near2`` puts the fillet inside the circle of ``arc``,
        outside otherwise.  When several centers are possible, the one
        nearest the start of ``arc`` wins.
        """
        if not radius > 0.0:
            raise NegativeAccuracyError(f'fillet radius must be positive, got {radius}', radius)
        if not arc.plane().contains_line(line):
            raise NonCoplanarLinesError('fillet line is not in the plane of the arc',
                                        {'line': line, 'arc': arc})

        side = geom.unit(geom.cross(line.direction, arc.axis))
        shift = geom.scale3(side, radius if keep_near1 else -radius)
        guide = Line(geom.offset(line.origin, shift), line.direction)
        track = arc.concentric(-radius if keep_near2 else radius)
        hits = sorted(track.intersect(guide), key=lambda hit: hit.t)
        if not hits:
            raise ParameterRangeError(f'no fillet of radius {radius} touches both line and arc',
                                      radius, {'line': line, 'arc': arc})
        center = hits[0].point

        radial = geom.unit(geom.sub(center, arc.center))
        on_arc = geom.offset(arc.center, geom.scale3(radial, arc.radius))
        logger.debug('arc fillet of radius %s centered at %s', radius, geom.vstr(center))
        return CircularArc.from_ends(center, on_arc, line.drop_point(center), True)


def _toward(base, other, crux):
    # unit vector, perpendicular to base, pointing at the origin of
    # other (or along other, when that origin sits on base)
    ref = other.origin
    if base.contains(ref):
        ref = geom.offset(crux, other.direction)
    _, perp = base.resolve_relative_vec(ref)
    return geom.unit(perp)
