"""Tests for straight line segments."""

import pytest
from math import sqrt

from curvepack.curve import Usage
from curvepack.geom import point, vect, vclose, dist
from curvepack.line import Line
from curvepack.lineseg import LineSegment
from curvepack.plane import Plane
from curvepack.xform import Rotation, Translation
from curvepack.errors import (
    AlignmentError,
    CoincidentLinesError,
    CoincidentPointsError,
    NegativeAccuracyError,
    ParallelLinesError,
    ParameterRangeError,
    TinyArrayError,
)


@pytest.fixture
def diagonal():
    return LineSegment(point(1, 1, 1), point(5, 5, 5))


class TestLineSegmentBasics:

    def test_point_at(self, diagonal):
        assert vclose(diagonal.point_at(0.6), point(3.4, 3.4, 3.4))
        assert vclose(diagonal.get_one_end(), point(1, 1, 1))
        assert vclose(diagonal.get_other_end(), point(5, 5, 5))
        with pytest.raises(ParameterRangeError):
            diagonal.point_at(1.2)

    def test_construction(self):
        with pytest.raises(CoincidentPointsError):
            LineSegment(point(1, 1, 1), point(1, 1, 1.00001))

    def test_length_and_tangent(self, diagonal):
        assert diagonal.length == pytest.approx(4.0 * sqrt(3.0))
        assert diagonal.tangent_at(0.3) == pytest.approx(vect(4, 4, 4))
        third = 1.0 / sqrt(3.0)
        assert diagonal.direction() == pytest.approx(vect(third, third, third))

    def test_bbox(self):
        flat = LineSegment(point(0, 0, 0), point(4, 2, 0))
        box = flat.bbox
        assert box[0][:2] == pytest.approx([0, 0])
        assert box[1][:2] == pytest.approx([4, 2])
        assert box[1][2] - box[0][2] == pytest.approx(0.04)

    def test_approximate(self, diagonal):
        pts = diagonal.approximate(0.01)
        assert len(pts) == 2
        with pytest.raises(NegativeAccuracyError):
            diagonal.approximate(0.0)

    def test_equality(self, diagonal):
        assert diagonal == LineSegment(point(1, 1, 1), point(5, 5, 5))
        assert diagonal != diagonal.reverse()


class TestTrimAndCopy:

    def test_trim(self, diagonal):
        short = diagonal.trim_front(0.25).trim_back(0.75)
        assert short.trim_range == (0.25, 0.75)
        assert vclose(short.get_one_end(), point(2, 2, 2))
        assert vclose(short.get_other_end(), point(4, 4, 4))
        assert short.length == pytest.approx(2.0 * sqrt(3.0))
        ## the receiver is untouched
        assert diagonal.trim_range == (0.0, 1.0)
        with pytest.raises(ParameterRangeError):
            short.trim_front(0.8)
        with pytest.raises(ParameterRangeError):
            short.trim_back(0.2)
        with pytest.raises(ParameterRangeError):
            short.point_at(0.1)
        assert vclose(short.point_at(0.1, ignore_trim=True), point(1.4, 1.4, 1.4))

    def test_reverse(self, diagonal):
        short = diagonal.trim_front(0.25)
        back = short.reverse()
        assert back.trim_range == (0.0, 0.75)
        assert vclose(back.get_one_end(), short.get_other_end())
        assert vclose(back.get_other_end(), short.get_one_end())
        assert back.length == pytest.approx(short.length)

    def test_usage(self, diagonal):
        assert diagonal.usage is Usage.ORDINARY
        marked = diagonal.with_usage(Usage.CUSTOM, {'color': 'red'})
        assert marked.custom == {'color': 'red'}
        assert diagonal.usage is Usage.ORDINARY
        with pytest.raises(ValueError):
            diagonal.with_usage(Usage.SKETCH, 'payload')
        with pytest.raises(ValueError):
            LineSegment(point(0, 0, 0), point(1, 0, 0), 'sketch')

    def test_transform(self, diagonal):
        moved = diagonal.transform(Translation(vect(1, 0, 0)))
        assert vclose(moved.get_one_end(), point(2, 1, 1))
        turned = LineSegment(point(1, 0, 0), point(2, 0, 0)).transform(
            Rotation(vect(0, 0, 1), 3.141592653589793 / 2))
        assert vclose(turned.get_other_end(), point(0, 2, 0))

    def test_mirror_and_clip(self, diagonal):
        flipped = diagonal.mirror(Plane(point(0, 0, 0), vect(0, 0, 1)))
        assert vclose(flipped.get_other_end(), point(5, 5, -5))
        near = diagonal.clip_to(point(3, 3, 3), True)
        far = diagonal.clip_to(point(3, 3, 3), False)
        assert vclose(near.get_other_end(), point(3, 3, 3))
        assert vclose(far.get_one_end(), point(3, 3, 3))


class TestSegmentQueries:

    def test_resolve_relative(self):
        seg = LineSegment(point(0, 0, 0), point(4, 0, 0))
        along, perp = seg.resolve_relative(point(1, 2, 0))
        assert along == pytest.approx(1.0)
        assert perp == pytest.approx(2.0)

    def test_is_coincident(self, diagonal):
        hit, t = diagonal.is_coincident(point(3, 3, 3))
        assert hit
        assert t == pytest.approx(0.5)
        hit, t = diagonal.is_coincident(point(5, 5, 5))
        assert hit and t == 1.0
        assert diagonal.is_coincident(point(6, 6, 6)) == (False, None)
        assert diagonal.is_coincident(point(3, 3, 3.1)) == (False, None)

    def test_intersect(self):
        seg = LineSegment(point(0, 0, 0), point(4, 0, 0))
        hits = seg.intersect(Line(point(1, -2, 0), vect(0, 1, 0)))
        assert len(hits) == 1
        assert vclose(hits[0].point, point(1, 0, 0))
        assert hits[0].t == pytest.approx(0.25)
        assert seg.intersect(Line(point(6, -2, 0), vect(0, 1, 0))) == []
        with pytest.raises(ParallelLinesError):
            seg.intersect(Line(point(0, 1, 0), vect(1, 0, 0)))
        with pytest.raises(CoincidentLinesError):
            seg.intersect(Line(point(2, 0, 0), vect(-1, 0, 0)))

    def test_intersect_trimmed(self):
        seg = LineSegment(point(0, 0, 0), point(4, 0, 0)).trim_front(0.5)
        assert seg.intersect(Line(point(1, -2, 0), vect(0, 1, 0))) == []
        hits = seg.intersect(Line(point(3, -2, 0), vect(0, 1, 0)))
        assert hits[0].t == pytest.approx(0.75)

    def test_is_crossing(self):
        base = LineSegment(point(0, 0, 0), point(4, 0, 0))
        assert base.is_crossing(LineSegment(point(2, -1, 0), point(2, 1, 0)))
        assert not base.is_crossing(LineSegment(point(2, 1, 0), point(2, 3, 0)))


class TestChains:

    def _square(self):
        corners = [point(0, 0, 0), point(2, 0, 0), point(2, 2, 0), point(0, 2, 0)]
        return [LineSegment(corners[i], corners[(i + 1) % 4]) for i in range(4)]

    def test_gen_bisect(self):
        bisector = LineSegment.gen_bisect(point(0, 0, 0), point(2, 0, 0), vect(0, 0, 1))
        assert vclose(bisector.origin, point(1, 0, 0))
        assert bisector.direction == pytest.approx(vect(0, 1, 0))
        with pytest.raises(CoincidentPointsError):
            LineSegment.gen_bisect(point(0, 0, 0), point(0, 0, 0), vect(0, 0, 1))

    def test_sum_lengths(self):
        assert LineSegment.sum_lengths(self._square()) == pytest.approx(8.0)

    def test_is_closed_chain(self):
        square = self._square()
        assert LineSegment.is_closed_chain([square[2], square[0], square[3], square[1]])
        assert not LineSegment.is_closed_chain(square[:3])
        with pytest.raises(TinyArrayError):
            LineSegment.is_closed_chain(square[:2])

    def test_order_ring(self):
        square = self._square()
        ring = LineSegment.order_ring([square[3], square[0], square[2], square[1]])
        assert len(ring) == 4
        for prior, nxt in zip(ring, ring[1:]):
            assert vclose(prior.get_other_end(), nxt.get_one_end())
        assert ring[0].get_one_end()[0] == pytest.approx(2.0)
        broken = [square[0], square[1], LineSegment(point(0, 2, 0), point(0, 5, 0))]
        with pytest.raises(AlignmentError):
            LineSegment.order_ring(broken)
