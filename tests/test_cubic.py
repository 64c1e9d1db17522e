"""Tests for cubic curves.

Most checks use the hump from (0,0) to (3,0) with control points
(1,2) and (2,2); it reduces to ``x = 3t``, ``y = 6t(1 - t)``.
"""

import pytest
from math import sqrt

from curvepack.cubic import CubicCurve
from curvepack.geom import point, vclose, vect
from curvepack.line import Line
from curvepack.xform import Rotation
from curvepack.errors import (
    CoincidentPointsError,
    ParameterRangeError,
    ZeroVectorError,
)


def _hump_at(t):
    return point(3.0 * t, 6.0 * t * (1.0 - t), 0.0)


@pytest.fixture
def hump():
    return CubicCurve(point(0, 0, 0), point(1, 2, 0), point(2, 2, 0), point(3, 0, 0))


class TestCubicConstruction:

    def test_bezier(self, hump):
        for t in (0.0, 0.25, 0.5, 0.9):
            assert vclose(hump.point_at(t), _hump_at(t))
        with pytest.raises(CoincidentPointsError):
            CubicCurve(point(0, 0, 0), point(1, 2, 0), point(1, 2, 0), point(3, 0, 0))

    def test_hermite(self, hump):
        same = CubicCurve.hermite(point(0, 0, 0), vect(3, 6, 0), point(3, 0, 0), vect(3, -6, 0))
        assert same == hump
        with pytest.raises(ZeroVectorError):
            CubicCurve.hermite(point(0, 0, 0), vect(0, 0, 0), point(3, 0, 0), vect(3, -6, 0))
        with pytest.raises(CoincidentPointsError):
            CubicCurve.hermite(point(0, 0, 0), vect(3, 6, 0), point(0, 0, 0), vect(3, -6, 0))

    def test_through(self, hump):
        same = CubicCurve.through(point(0, 0, 0), _hump_at(0.25), 0.25,
                                  _hump_at(0.75), 0.75, point(3, 0, 0))
        assert same == hump

    def test_through_errors(self):
        with pytest.raises(ParameterRangeError):
            CubicCurve.through(point(0, 0, 0), _hump_at(0.25), 0.0,
                               _hump_at(0.75), 0.75, point(3, 0, 0))
        with pytest.raises(ParameterRangeError):
            CubicCurve.through(point(0, 0, 0), _hump_at(0.25), 0.5,
                               _hump_at(0.75), 0.5, point(3, 0, 0))
        with pytest.raises(CoincidentPointsError):
            CubicCurve.through(point(0, 0, 0), point(0, 0, 0), 0.25,
                               _hump_at(0.75), 0.75, point(3, 0, 0))

    def test_slope_start(self, hump):
        front = CubicCurve.slope_start(point(0, 0, 0), vect(3, 6, 0),
                                       _hump_at(0.5), 0.5, point(3, 0, 0))
        assert front.trim_range == (0.0, 0.5)
        assert vclose(front.get_other_end(), point(1.5, 1.5, 0))
        assert vclose(front.point_at(0.2), hump.point_at(0.2))
        with pytest.raises(ParameterRangeError):
            CubicCurve.slope_start(point(0, 0, 0), vect(3, 6, 0),
                                   _hump_at(0.5), 1.5, point(3, 0, 0))


class TestCubicGeometry:

    def test_derivatives(self, hump):
        assert hump.tangent_at(0.0) == pytest.approx(vect(3, 6, 0))
        assert hump.tangent_at(1.0) == pytest.approx(vect(3, -6, 0))
        assert hump.second_derivative(0.4) == pytest.approx(vect(0, -12, 0))

    def test_plane(self, hump):
        assert abs(hump.plane().normal[2]) == pytest.approx(1.0)
        twisted = CubicCurve(point(0, 0, 0), point(1, 0, 0), point(1, 1, 0), point(1, 1, 1))
        assert twisted.plane() is None

    def test_reverse(self, hump):
        back = hump.trim_front(0.2).reverse()
        assert back.trim_range == pytest.approx((0.0, 0.8))
        assert vclose(back.get_other_end(), _hump_at(0.2))
        assert back.length == pytest.approx(hump.trim_front(0.2).length)

    def test_transform(self, hump):
        turned = hump.transform(Rotation(vect(0, 0, 1), 3.141592653589793))
        assert vclose(turned.point_at(0.5), point(-1.5, -1.5, 0))
        assert turned.length == pytest.approx(hump.length)


class TestCubicQueries:

    def test_intersect_twice(self, hump):
        hits = hump.intersect(Line(point(-1, 1, 0), vect(1, 0, 0)))
        assert len(hits) == 2
        root = sqrt(1.0 / 3.0)
        ts = sorted(h.t for h in hits)
        assert ts[0] == pytest.approx((1.0 - root) / 2.0, abs=1e-3)
        assert ts[1] == pytest.approx((1.0 + root) / 2.0, abs=1e-3)

    def test_intersect_trimmed(self, hump):
        hits = hump.trim_back(0.5).intersect(Line(point(-1, 1, 0), vect(1, 0, 0)))
        assert len(hits) == 1
        assert hits[0].t < 0.5

    def test_find_closest(self, hump):
        pt, t = hump.find_closest(point(1.5, 1.8, 0))
        assert t == pytest.approx(0.5, abs=1e-3)
        assert vclose(pt, point(1.5, 1.5, 0))
