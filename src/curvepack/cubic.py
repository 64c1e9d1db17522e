"""
Cubic curves, ``x(t) = a*t**3 + b*t**2 + c*t + d`` on each axis.

Four ways to build one:

``CubicCurve(pt_a, control_a, control_b, pt_b)``
    Bezier form, two ends and two control points
``CubicCurve.hermite(pt_a, slope_a, pt_b, slope_b)``
    two ends and the derivative at each
``CubicCurve.through(alpha, beta, beta_fraction, gamma, gamma_fraction, delta)``
    four points on the curve, the middle two at given parameters
``CubicCurve.slope_start(alpha, alpha_prime, beta, beta_fraction, gamma)``
    a start point with its slope, a point to stop at, and a point
    beyond; the result is trimmed to end at ``beta``
"""

from __future__ import annotations

import curvepack.geom as geom
from curvepack.curve import Usage
from curvepack.errors import CoincidentPointsError, ParameterRangeError, ZeroVectorError
from curvepack.plane import Plane
from curvepack.polynomial import PolynomialCurve, power_row, solve_coefficients

## parameter used to pick a third point when looking for a plane
PLANE_PROBE = 0.53


def _check_fraction(name, value):
    if not 0.0 < value < 1.0:
        raise ParameterRangeError(f'{name} {value} must lie in (0, 1)', value)


class CubicCurve(PolynomialCurve):

    degree = 3

    def __init__(self, pt_a, control_a, control_b, pt_b, usage: Usage = Usage.ORDINARY, custom=None):
        if not geom.isuniquepool([pt_a, control_a, control_b, pt_b]):
            raise CoincidentPointsError('Bezier points must be distinct',
                                        {'points': [pt_a, control_a, control_b, pt_b]})
        coeffs = []
        for i in range(3):
            a, ca, cb, b = pt_a[i], control_a[i], control_b[i], pt_b[i]
            coeffs.append([a,
                           3.0 * (ca - a),
                           3.0 * a - 6.0 * ca + 3.0 * cb,
                           -a + 3.0 * ca - 3.0 * cb + b])
        self._setup(coeffs, usage, custom)

    @classmethod
    def hermite(cls, pt_a, slope_a, pt_b, slope_b, usage: Usage = Usage.ORDINARY):
        for slope in (slope_a, slope_b):
            if geom.iszero(slope):
                raise ZeroVectorError('end slope has zero length', {'slope': slope})
        if geom.vclose(pt_a, pt_b):
            raise CoincidentPointsError('curve ends must be distinct', {'point': pt_a})
        coeffs = []
        for i in range(3):
            a, sa, b, sb = pt_a[i], slope_a[i], pt_b[i], slope_b[i]
            coeffs.append([a,
                           sa,
                           -3.0 * a - 2.0 * sa + 3.0 * b - sb,
                           2.0 * a + sa - 2.0 * b + sb])
        return cls._build(coeffs, usage)

    @classmethod
    def through(cls, alpha, beta, beta_fraction, gamma, gamma_fraction, delta,
                usage: Usage = Usage.ORDINARY):
        _check_fraction('beta fraction', beta_fraction)
        _check_fraction('gamma fraction', gamma_fraction)
        if abs(beta_fraction - gamma_fraction) < geom.epsilon_v:
            raise ParameterRangeError('beta and gamma fractions must differ', gamma_fraction)
        if not geom.isuniquepool([alpha, beta, gamma, delta]):
            raise CoincidentPointsError('curve points must be distinct',
                                        {'points': [alpha, beta, gamma, delta]})
        rows = [power_row(t, 3) for t in (0.0, beta_fraction, gamma_fraction, 1.0)]
        coeffs = solve_coefficients(rows, [alpha[:3], beta[:3], gamma[:3], delta[:3]])
        return cls._build(coeffs, usage)

    @classmethod
    def slope_start(cls, alpha, alpha_prime, beta, beta_fraction, gamma,
                    usage: Usage = Usage.ORDINARY):
        _check_fraction('beta fraction', beta_fraction)
        if geom.iszero(alpha_prime):
            raise ZeroVectorError('start slope has zero length', {'slope': alpha_prime})
        if not geom.isuniquepool([alpha, beta, gamma]):
            raise CoincidentPointsError('curve points must be distinct',
                                        {'points': [alpha, beta, gamma]})
        rows = [power_row(0.0, 3),
                [0.0, 1.0, 0.0, 0.0],
                power_row(beta_fraction, 3),
                power_row(1.0, 3)]
        coeffs = solve_coefficients(rows, [alpha[:3], alpha_prime[:3], beta[:3], gamma[:3]])
        return cls._build(coeffs, usage, trim=(0.0, float(beta_fraction)))

    def second_derivative(self, t):
        self._check_param(t)
        return geom.vect([2.0 * axis[2] + 6.0 * axis[3] * t for axis in self._coeffs])

    def _find_plane(self):
        alpha = self._evaluate(0.0)
        beta = self._evaluate(PLANE_PROBE)
        omega = self._evaluate(1.0)
        if not geom.isuniquepool([alpha, beta, omega]) or geom.islinear3(alpha, beta, omega):
            return None
        flat = Plane.from_points(alpha, beta, omega)
        for g in range(1, 10):
            if not flat.contains(self._evaluate(g / 10.0)):
                return None
        return flat
