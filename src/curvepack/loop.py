"""
Closed boundaries assembled from curve fragments.

A ``Loop`` accepts fragments in any order and any direction.  Each
fragment end is matched against the ``Joint`` list; when every joint
holds exactly two fragments and there are as many joints as fragments,
the loop is closed and the fragments are aligned nose to tail into
``ordered_curves``.

Containment is a ray test.  ``is_inside()`` casts ``RAY_COUNT`` lines,
``RAY_SPACING`` apart, through the target in the plane of the loop's
reference coordinate system, and calls the target inside only if every
one of them brackets it between a pair of crossings.
"""

from __future__ import annotations

import copy
import logging
from math import cos, pi, sin
from typing import List, Optional

import curvepack.geom as geom
from curvepack.curve import Curve
from curvepack.errors import (
    AlignmentError,
    CoincidentLinesError,
    CoincidentPointsError,
    CurveNotFoundError,
    JointDegreeError,
    NonCoplanarLinesError,
    ParallelLinesError,
    SplittingError,
)
from curvepack.line import Line
from curvepack.xform import CoordinateSystem

logger = logging.getLogger(__name__)

RAY_COUNT = 6
RAY_SPACING = pi / 6.0


class Joint:
    """A point where one or two fragments end."""

    def __init__(self, location, curve):
        self.location = geom.point(location)
        self.one = curve
        self.other = None

    def __repr__(self):
        return 'Joint({}, {})'.format(geom.vstr(self.location),
                                      'complete' if self.is_complete else 'open')

    @property
    def is_complete(self) -> bool:
        return self.one is not None and self.other is not None

    @property
    def is_empty(self) -> bool:
        return self.one is None and self.other is None

    def curves(self) -> List[Curve]:
        return [c for c in (self.one, self.other) if c is not None]

    def add_mate(self, curve):
        if self.is_complete:
            raise JointDegreeError('a third fragment ends at {}'.format(geom.vstr(self.location)),
                                   {'location': self.location, 'curve': curve})
        if self.one is None:
            self.one = curve
        else:
            self.other = curve

    def contains_point(self, pt) -> bool:
        return geom.vclose(self.location, pt)

    def contains_curve(self, curve) -> bool:
        return any(c is curve or Loop.equals_ends_type(c, curve, False)
                   for c in self.curves())

    def remove_curve(self, curve):
        """detach ``curve``.  A fragment held here is matched by
        identity; otherwise the first one with the same ends, in either
        direction, goes."""
        held = self.curves()
        kept = [c for c in held if c is not curve]
        if len(kept) == len(held):
            for index, c in enumerate(kept):
                if Loop.equals_ends_type(c, curve, True):
                    del kept[index]
                    break
        kept += [None, None]
        self.one, self.other = kept[0], kept[1]


class Milestone:
    """A crossing of a loop and a probing line.

    ``along`` is the signed distance from the line origin.  Milestones
    compare equal, and hash alike, when their points round to the same
    spot on the epsilon grid, which merges the hits that two adjacent
    fragments report for their shared end.
    """

    def __init__(self, pip, line, loop_index):
        if not line.contains(pip):
            raise NonCoplanarLinesError('milestone point is not on the line',
                                        {'point': pip, 'line': line})
        self.pip = geom.point(pip)
        self.loop_index = loop_index
        bridge = geom.sub(self.pip, line.origin)
        span = geom.mag(bridge)
        self.along = span if geom.dot(line.direction, bridge) > 0.0 else -span

    def __repr__(self):
        return 'Milestone({}, along={:.6f}, loop_index={})'.format(geom.vstr(self.pip),
                                                                   self.along,
                                                                   self.loop_index)

    def __eq__(self, other):
        if not isinstance(other, Milestone):
            return NotImplemented
        return geom.vkey(self.pip) == geom.vkey(other.pip)

    def __hash__(self):
        return hash(geom.vkey(self.pip))


def _align(raw, joints):
    """order ``raw`` into one nose-to-tail cycle"""
    if not all(joint.is_complete for joint in joints):
        raise AlignmentError('an open loop can not be aligned',
                             {'open_joints': [j.location for j in joints if not j.is_complete]})
    caboose = raw[0]
    source = raw[0]
    ordered = [caboose]
    used = {id(source)}
    while len(ordered) < len(joints):
        tail = caboose.get_other_end()
        joint = next((j for j in joints if j.contains_point(tail)), None)
        if joint is None:
            raise AlignmentError('no joint at {}'.format(geom.vstr(tail)), {'point': tail})
        follower = joint.other if joint.one is source else joint.one
        if id(follower) in used:
            raise AlignmentError('fragments form more than one cycle',
                                 {'point': tail, 'ordered': len(ordered)})
        used.add(id(follower))
        source = follower
        if not geom.vclose(follower.get_one_end(), tail):
            follower = follower.reverse()
        ordered.append(follower)
        caboose = follower
    logger.debug('aligned %d fragments', len(ordered))
    return ordered


class Loop:
    """A closed boundary built from curve fragments."""

    def __init__(self, ref_coord: Optional[CoordinateSystem] = None):
        self.ref_coord = ref_coord if ref_coord is not None else CoordinateSystem()
        self._raw: List[Curve] = []
        self._ordered: List[Curve] = []
        self._joints: List[Joint] = []
        self._closed = False

    def __repr__(self):
        return 'Loop({} fragments, {})'.format(len(self._raw),
                                               'closed' if self._closed else 'open')

    @property
    def raw_curves(self) -> List[Curve]:
        return list(self._raw)

    @property
    def ordered_curves(self) -> List[Curve]:
        return list(self._ordered)

    @property
    def joints(self) -> List[Joint]:
        return list(self._joints)

    @property
    def closed(self) -> bool:
        return self._closed

    def is_closed(self) -> bool:
        return self._closed

    def add(self, curve: Curve):
        """add a fragment.  Nothing changes if the fragment would make
        a third branch at some point."""
        if not isinstance(curve, Curve):
            raise TypeError(f'expected a Curve, got {type(curve).__name__}')
        joints = [copy.copy(j) for j in self._joints]
        for end in (curve.get_one_end(), curve.get_other_end()):
            home = next((j for j in joints if j.contains_point(end)), None)
            if home is None:
                joints.append(Joint(end, curve))
                logger.debug('new joint at %s', geom.vstr(end))
            else:
                home.add_mate(curve)
                logger.debug('mated joint at %s', geom.vstr(end))
        raw = self._raw + [curve]
        closed = len(joints) == len(raw) and all(j.is_complete for j in joints)
        ordered = _align(raw, joints) if closed else []

        self._raw = raw
        self._joints = joints
        self._ordered = ordered
        if closed and not self._closed:
            logger.debug('loop closed with %d fragments', len(raw))
        self._closed = closed

    def align(self):
        self._ordered = _align(self._raw, self._joints)

    def find_curve_raw(self, curve) -> Optional[int]:
        return self._find(self._raw, curve)

    def find_curve_ordered(self, curve) -> Optional[int]:
        return self._find(self._ordered, curve)

    @staticmethod
    def _find(curves, target):
        for index, c in enumerate(curves):
            if c is target:
                return index
        for index, c in enumerate(curves):
            if c == target:
                return index
        for index, c in enumerate(curves):
            if Loop.same_ends(target, c) or Loop.opposite_ends(target, c):
                return index
        return None

    def remove(self, curve):
        """take a fragment out.  The loop opens and its ordered list is
        emptied; what remains is not re-aligned."""
        index = self.find_curve_raw(curve)
        if index is None:
            raise CurveNotFoundError('fragment is not part of this loop', {'curve': curve})
        gone = self._raw[index]
        joints = [copy.copy(j) for j in self._joints]
        for joint in joints:
            if any(c is gone for c in joint.curves()):
                joint.remove_curve(gone)
        self._joints = [j for j in joints if not j.is_empty]
        self._raw = self._raw[:index] + self._raw[index + 1:]
        self._ordered = []
        if self._closed:
            logger.debug('loop opened by removing a fragment')
        self._closed = False

    @staticmethod
    def same_ends(a, b) -> bool:
        return geom.vclose(a.get_one_end(), b.get_one_end()) and \
            geom.vclose(a.get_other_end(), b.get_other_end())

    @staticmethod
    def opposite_ends(a, b) -> bool:
        return geom.vclose(a.get_one_end(), b.get_other_end()) and \
            geom.vclose(a.get_other_end(), b.get_one_end())

    @staticmethod
    def equals_ends_type(a, b, accept_reverse: bool) -> bool:
        if type(a) is not type(b):
            return False
        return Loop.same_ends(a, b) or (accept_reverse and Loop.opposite_ends(a, b))

    def length(self) -> float:
        return sum(c.length for c in self._raw)

    def bbox(self):
        box = None
        for c in self._raw:
            box = geom.bboxunion(box, c.bbox)
        return box

    def gen_milestones(self, line) -> List[Milestone]:
        """crossings of ``line`` with the aligned fragments, one per
        distinct point, sorted by signed distance along the line.  An
        open loop has no aligned fragments and gives no crossings."""
        markers = []
        for index, c in enumerate(self._ordered):
            try:
                hits = c.intersect(line, geom.epsilon)
            except (ParallelLinesError, CoincidentLinesError):
                logger.warning('skipping fragment %d, it runs parallel to %r', index, line)
                continue
            for hit in hits:
                markers.append(Milestone(hit.point, line, index))
        ## vclose hits straddling a grid line stay separate
        unique = list(dict.fromkeys(markers))
        return sorted(unique, key=lambda m: m.along)

    def _ray_directions(self):
        x = self.ref_coord.xaxis
        y = self.ref_coord.yaxis
        for k in range(RAY_COUNT):
            theta = k * RAY_SPACING
            yield geom.unit(geom.add(geom.scale3(x, cos(theta)), geom.scale3(y, sin(theta))))

    def is_inside(self, target) -> bool:
        """is ``target``, in the plane of the loop, inside it?"""
        for direction in self._ray_directions():
            dots = self.gen_milestones(Line(target, direction))
            bracketed = any(dots[g - 1].along <= 0.0 and dots[g].along >= 0.0
                            for g in range(1, len(dots), 2))
            if not bracketed:
                return False
        return True

    @staticmethod
    def find_split(a, b, loop) -> List[Milestone]:
        """crossings of the straight edge ``a``-``b`` with ``loop``"""
        if geom.vclose(a, b):
            raise CoincidentPointsError('edge ends must be distinct', {'point': a})
        line = Line(a, geom.unit(geom.sub(b, a)))
        cap = geom.dist(a, b)
        markers = [m for m in loop.gen_milestones(line)
                   if -geom.epsilon < m.along < cap + geom.epsilon]
        if len(markers) > 2:
            raise SplittingError(f'edge crosses the loop {len(markers)} times',
                                 {'count': len(markers)})
        return markers
