"""Quadratic curves, ``x(t) = a*t**2 + b*t + c`` on each axis."""

from __future__ import annotations

import curvepack.geom as geom
from curvepack.curve import Usage
from curvepack.errors import CoincidentPointsError, ParameterRangeError
from curvepack.plane import Plane
from curvepack.polynomial import PolynomialCurve, power_row, solve_coefficients


class QuadraticCurve(PolynomialCurve):
    """A parabolic arc.  The plain constructor takes the Bezier form:
    the two ends and a single control point.  Use ``through()`` to pass
    the curve through three points instead."""

    degree = 2

    def __init__(self, pt_a, control, pt_b, usage: Usage = Usage.ORDINARY, custom=None):
        if not geom.isuniquepool([pt_a, control, pt_b]):
            raise CoincidentPointsError('quadratic points must be distinct',
                                        {'points': [pt_a, control, pt_b]})
        self._setup([[pt_a[i],
                      2.0 * (control[i] - pt_a[i]),
                      pt_a[i] - 2.0 * control[i] + pt_b[i]] for i in range(3)],
                    usage, custom)

    @classmethod
    def through(cls, pt_a, beta, beta_fraction, pt_c, usage: Usage = Usage.ORDINARY):
        """curve from ``pt_a`` at ``t=0`` through ``beta`` at
        ``t=beta_fraction`` to ``pt_c`` at ``t=1``"""
        if not 0.0 < beta_fraction < 1.0:
            raise ParameterRangeError(f'beta fraction {beta_fraction} must lie in (0, 1)',
                                      beta_fraction)
        if not geom.isuniquepool([pt_a, beta, pt_c]):
            raise CoincidentPointsError('quadratic points must be distinct',
                                        {'points': [pt_a, beta, pt_c]})
        rows = [power_row(0.0, 2), power_row(beta_fraction, 2), power_row(1.0, 2)]
        coeffs = solve_coefficients(rows, [pt_a[:3], beta[:3], pt_c[:3]])
        return cls._build(coeffs, usage)

    def _find_plane(self):
        # a parabola always lies in a plane, unless it is straight
        alpha = self._evaluate(0.0)
        beta = self._evaluate(0.52)
        omega = self._evaluate(1.0)
        if not geom.isuniquepool([alpha, beta, omega]) or geom.islinear3(alpha, beta, omega):
            return None
        return Plane.from_points(alpha, beta, omega)
