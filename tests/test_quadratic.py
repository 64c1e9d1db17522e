"""Tests for quadratic curves.

The sample curve is the Bezier parabola from (0,0) through control
point (1,2) to (2,0), which works out to ``x = 2t``, ``y = 4t - 4t**2``.
"""

import pytest
from math import asinh, sqrt

from curvepack.geom import point, vclose, vect
from curvepack.line import Line
from curvepack.polynomial import PolynomialCurve
from curvepack.quadratic import QuadraticCurve
from curvepack.xform import Matrix, Translation
from curvepack.errors import (
    CoincidentPointsError,
    NegativeAccuracyError,
    NonCoplanarLinesError,
    ParameterRangeError,
)


@pytest.fixture
def arch():
    return QuadraticCurve(point(0, 0, 0), point(1, 2, 0), point(2, 0, 0))


class TestQuadraticConstruction:

    def test_bezier(self, arch):
        assert vclose(arch.point_at(0.5), point(1, 1, 0))
        assert arch.coefficients() == ((0.0, 2.0, 0.0), (-4.0, 4.0, 0.0), (0.0, 0.0, 0.0))
        with pytest.raises(CoincidentPointsError):
            QuadraticCurve(point(0, 0, 0), point(1, 1, 0), point(0, 0, 0))

    def test_through(self, arch):
        bent = QuadraticCurve.through(point(0, 0, 0), point(1, 1, 0), 0.5, point(2, 0, 0))
        assert bent == arch
        with pytest.raises(ParameterRangeError):
            QuadraticCurve.through(point(0, 0, 0), point(1, 1, 0), 1.2, point(2, 0, 0))

    def test_from_coefficients(self, arch):
        same = QuadraticCurve.from_coefficients((0, 2, 0), (-4, 4, 0), (0, 0, 0))
        assert same == arch
        with pytest.raises(ValueError):
            QuadraticCurve.from_coefficients((1, 2), (0, 0, 0), (0, 0, 0))

    def test_base_class_is_abstract(self):
        ## every variant has to say how it finds its plane
        with pytest.raises(TypeError):
            PolynomialCurve.from_coefficients((1,), (0,), (0,))


class TestQuadraticGeometry:

    def test_tangent(self, arch):
        assert arch.tangent_at(0.0) == pytest.approx(vect(2, 4, 0))
        assert arch.tangent_at(0.5) == pytest.approx(vect(2, 0, 0))

    def test_length(self, arch):
        exact = sqrt(5.0) + 0.5 * asinh(2.0)
        assert arch.length == pytest.approx(exact, rel=1e-3)
        assert arch.reverse().length == pytest.approx(arch.length)
        assert arch.trim_back(0.5).length == pytest.approx(exact / 2.0, rel=1e-3)

    def test_bbox(self, arch):
        box = arch.bbox
        assert box[0][:2] == pytest.approx([0.0, 0.0])
        assert box[1][:2] == pytest.approx([2.0, 1.0])

    def test_approximate(self, arch):
        pts = arch.approximate(0.01)
        assert len(pts) > 2
        assert vclose(pts[0], point(0, 0, 0))
        assert vclose(pts[-1], point(2, 0, 0))
        with pytest.raises(NegativeAccuracyError):
            arch.approximate(-0.01)

    def test_plane(self, arch):
        flat = arch.plane()
        assert abs(flat.normal[2]) == pytest.approx(1.0)
        straight = QuadraticCurve(point(0, 0, 0), point(1, 0, 0), point(2, 0, 0))
        assert straight.plane() is None

    def test_reverse(self, arch):
        back = arch.reverse()
        for t in (0.0, 0.3, 0.5, 1.0):
            assert vclose(back.point_at(t), arch.point_at(1.0 - t))

    def test_transform(self, arch):
        moved = arch.transform(Translation(vect(1, 0, 0)))
        assert vclose(moved.point_at(0.5), point(2, 1, 0))
        skewed = Matrix([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 1, 1]])
        with pytest.raises(ValueError):
            arch.transform(skewed)


class TestQuadraticQueries:

    def test_intersect(self, arch):
        hits = arch.intersect(Line(point(-1, 0.5, 0), vect(1, 0, 0)))
        assert len(hits) == 2
        xs = sorted(h.x for h in hits)
        assert xs[0] == pytest.approx(1.0 - sqrt(0.5), abs=1e-3)
        assert xs[1] == pytest.approx(1.0 + sqrt(0.5), abs=1e-3)
        for hit in hits:
            assert vclose(arch.point_at(hit.t), hit.point)

    def test_intersect_misses(self, arch):
        assert arch.intersect(Line(point(-1, 3, 0), vect(1, 0, 0))) == []
        with pytest.raises(NonCoplanarLinesError):
            arch.intersect(Line(point(0, 0, 1), vect(1, 0, 0)))

    def test_find_closest(self, arch):
        pt, t = arch.find_closest(point(1, 1.3, 0))
        assert t == pytest.approx(0.5, abs=1e-3)
        assert vclose(pt, point(1, 1, 0))
        ## too far from every part of the curve
        assert arch.find_closest(point(1, 2, 0)) is None

    def test_is_coincident(self, arch):
        hit, t = arch.is_coincident(point(0.6, 0.84, 0))
        assert hit
        assert t == pytest.approx(0.3, abs=1e-3)
        assert arch.is_coincident(point(0.6, 0.9, 0)) == (False, None)
        hit, t = arch.is_coincident(point(2, 0, 0))
        assert hit and t == 1.0

    def test_refine_range(self, arch):
        low, high = arch.refine_range(point(0.6, 0.84, 0), (0.0, 1.0))
        assert low == pytest.approx(0.2)
        assert high == pytest.approx(0.4)
        with pytest.raises(ParameterRangeError):
            arch.trim_front(0.5).refine_range(point(0.6, 0.84, 0), (0.0, 1.0))
