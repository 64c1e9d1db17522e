"""
Straight line segments.

``LineSegment`` runs from ``end_alpha`` at ``t=0`` to ``end_omega`` at
``t=1``.  Everything about a segment has a closed form, including its
intersection with a ``Line``.  The static helpers at the bottom work
on lists of segments, such as polygon edges gathered in arbitrary
order.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import curvepack.geom as geom
from curvepack.curve import Curve, IntersectionPoint, Usage
from curvepack.errors import (
    AlignmentError,
    CoincidentLinesError,
    CoincidentPointsError,
    NonUnitDirectionError,
    ParallelLinesError,
    TinyArrayError,
    ZeroVectorError,
    check_accuracy,
)
from curvepack.line import Line, intersect_two, iscoincident, isparallel


class LineSegment(Curve):
    """A bounded straight segment between two distinct points."""

    def __init__(self, end1, end2, usage: Usage = Usage.ORDINARY, custom=None):
        if geom.vclose(end1, end2):
            raise CoincidentPointsError('segment ends must be distinct',
                                        {'point': end1})
        super().__init__(usage, custom)
        self._alpha = geom.point(end1)
        self._omega = geom.point(end2)

    def __repr__(self):
        return f'LineSegment({geom.vstr(self._alpha)},{geom.vstr(self._omega)})'

    def __eq__(self, other):
        if not isinstance(other, LineSegment):
            return NotImplemented
        return geom.vclose(self._alpha, other._alpha) and \
            geom.vclose(self._omega, other._omega) and \
            self._trim == other._trim

    __hash__ = None

    @property
    def end_alpha(self):
        return list(self._alpha)

    @property
    def end_omega(self):
        return list(self._omega)

    def _evaluate(self, t):
        return geom.lerp(self._alpha, self._omega, t)

    def direction(self):
        """unit vector from ``end_alpha`` towards ``end_omega``"""
        return geom.unit(geom.sub(self._omega, self._alpha))

    def tangent_at(self, t):
        self._check_param(t)
        return geom.sub(self._omega, self._alpha)

    @property
    def length(self):
        return geom.dist(self.get_one_end(), self.get_other_end())

    @property
    def bbox(self):
        return geom.bbox_from_corners(self.get_one_end(), self.get_other_end())

    def approximate(self, tolerance):
        check_accuracy(tolerance, 'tolerance')
        return [self.get_one_end(), self.get_other_end()]

    def reverse(self):
        fresh = self._copy()
        fresh._alpha, fresh._omega = self._omega, self._alpha
        fresh._trim = self._mirrored_trim()
        return fresh

    def transform(self, matrix):
        alpha = matrix.mul(self._alpha)
        omega = matrix.mul(self._omega)
        if geom.vclose(alpha, omega):
            raise CoincidentPointsError('transform collapsed the segment',
                                        {'point': alpha})
        fresh = self._copy()
        fresh._alpha = geom.point(alpha)
        fresh._omega = geom.point(omega)
        return fresh

    def resolve_relative_vec(self, pt):
        """components, along and perpendicular to the segment, of the
        vector from ``end_alpha`` to ``pt``"""
        return Line(self._alpha, self.direction()).resolve_relative_vec(pt)

    def resolve_relative(self, pt):
        return Line(self._alpha, self.direction()).resolve_relative(pt)

    def clip_to(self, stub, keep_near: bool):
        """new segment ending (or starting) at ``stub``, keeping the
        part near ``end_alpha`` when ``keep_near`` is true"""
        if keep_near:
            return LineSegment(self.get_one_end(), stub, self._usage, self._custom)
        return LineSegment(stub, self.get_other_end(), self._usage, self._custom)

    def mirror(self, plane):
        return LineSegment(plane.mirror(self._alpha), plane.mirror(self._omega),
                           self._usage, self._custom)

    def is_crossing(self, chop) -> bool:
        """do the ends of segment ``chop`` straddle this segment?"""
        along_a, perp_a = self.resolve_relative_vec(chop.get_one_end())
        along_b, perp_b = self.resolve_relative_vec(chop.get_other_end())
        farthest = self.length
        return geom.dot(perp_a, perp_b) < 0.0 and \
            geom.mag(along_a) <= farthest and geom.mag(along_b) <= farthest

    def is_coincident(self, pt, accuracy=geom.epsilon) -> Tuple[bool, Optional[float]]:
        check_accuracy(accuracy)
        if geom.dist(pt, self.get_one_end()) < accuracy:
            return True, self._trim[0]
        if geom.dist(pt, self.get_other_end()) < accuracy:
            return True, self._trim[1]

        full = geom.dist(self._alpha, self._omega)
        along, perp = self.resolve_relative(pt)
        if perp >= accuracy:
            return False, None
        t = along / full
        slack = accuracy / full
        if t < self._trim[0] - slack or t > self._trim[1] + slack:
            return False, None
        return True, min(max(t, self._trim[0]), self._trim[1])

    def intersect(self, line, accuracy=geom.epsilon) -> List[IntersectionPoint]:
        """crossing of ``line`` with the trimmed segment, if any.  A line
        that is parallel to, or lies along, the segment raises a
        relationship error."""
        check_accuracy(accuracy)
        carrier = Line(self._alpha, self.direction())
        if iscoincident(carrier, line):
            raise CoincidentLinesError('line lies along the segment', {'line': line})
        if isparallel(carrier, line):
            raise ParallelLinesError('line is parallel to the segment', {'line': line})
        collision = intersect_two(carrier, line)

        full = geom.dist(self._alpha, self._omega)
        t = geom.dot(geom.sub(collision, self._alpha), carrier.direction) / full
        slack = accuracy / full
        if t < self._trim[0] - slack or t > self._trim[1] + slack:
            return []
        t = min(max(t, self._trim[0]), self._trim[1])
        return [IntersectionPoint.at(self._evaluate(t), t)]

    ## helpers for lists of segments

    @staticmethod
    def gen_bisect(pt_a, pt_b, up) -> Line:
        """perpendicular bisector of ``pt_a``-``pt_b`` in the plane with
        normal ``up``"""
        if geom.vclose(pt_a, pt_b):
            raise CoincidentPointsError('bisector needs two distinct points',
                                        {'point': pt_a})
        if geom.iszero(up):
            raise ZeroVectorError('plane normal has zero length', {'normal': up})
        if not geom.isunit(up):
            raise NonUnitDirectionError('plane normal must be a unit vector',
                                        {'normal': up})
        along = geom.unit(geom.sub(pt_b, pt_a))
        inward = geom.unit(geom.cross(up, along))
        return Line(geom.midway(pt_a, pt_b), inward)

    @staticmethod
    def sum_lengths(segs) -> float:
        return sum(seg.length for seg in segs)

    @staticmethod
    def is_closed_chain(segs) -> bool:
        """does every end point of ``segs`` appear exactly twice?  The
        segments may be in any order, branching is not checked."""
        if len(segs) < 3:
            raise TinyArrayError(f'a closed chain needs at least 3 segments, got {len(segs)}',
                                 {'count': len(segs)})
        once = set()
        for seg in segs:
            for pt in (seg.get_one_end(), seg.get_other_end()):
                key = geom.vkey(pt)
                if key in once:
                    once.remove(key)
                else:
                    once.add(key)
        return not once

    @staticmethod
    def order_ring(segs) -> List["LineSegment"]:
        """put a ring of consistently directed segments in nose-to-tail
        order, starting with the segment whose start has the largest X"""
        if len(segs) < 3:
            raise TinyArrayError(f'a ring needs at least 3 segments, got {len(segs)}',
                                 {'count': len(segs)})
        remaining = list(segs)
        first = max(remaining, key=lambda seg: seg.get_one_end()[0])
        remaining.remove(first)
        chain = [first]
        tail = first.get_other_end()
        while remaining:
            nxt = next((seg for seg in remaining
                        if geom.vclose(seg.get_one_end(), tail)), None)
            if nxt is None:
                raise AlignmentError('ring is broken at {}'.format(geom.vstr(tail)),
                                     {'point': tail})
            chain.append(nxt)
            remaining.remove(nxt)
            tail = nxt.get_other_end()
        return chain
