"""
Bounded numerical searches over a curve parameter.

The polynomial curves have no closed form for intersection or closest
point, so they dice their parameter range into sub-ranges and refine
the promising ones.  Every search here is an iterative loop with a
fixed maximum number of levels; running out of levels raises
``ConvergenceError`` rather than quietly returning nothing.

All functions take ``evaluate``, a callable mapping a parameter to a
point on the curve.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

import curvepack.geom as geom
from curvepack.curve import IntersectionPoint
from curvepack.errors import ConvergenceError, check_accuracy

logger = logging.getLogger(__name__)

Span = Tuple[float, float]

INTERSECT_DIVISIONS = 100
REFINE_DIVISIONS = 5
MAX_INTERSECT_LEVELS = 8
CLOSEST_DIVISIONS = 40
MAX_CLOSEST_LEVELS = 8
CROWN_SAMPLES = 20
MAX_STEP_HALVINGS = 16


def dice_range(span: Span, chunks: int) -> List[Span]:
    """Split ``span`` into ``chunks`` equal, contiguous sub-ranges."""
    low, high = span
    width = (high - low) / chunks
    bounds = [low + width * i for i in range(chunks)] + [high]
    return [(bounds[i], bounds[i + 1]) for i in range(chunks)]


def does_cross(evaluate: Callable, line, span: Span) -> float:
    """Dot product of the perpendicular offsets from ``line`` at the two
    ends of ``span``.  Negative or zero means the curve reaches the line
    somewhere inside."""
    _, perp_low = line.resolve_relative_vec(evaluate(span[0]))
    _, perp_high = line.resolve_relative_vec(evaluate(span[1]))
    return geom.dot(perp_low, perp_high)


def crossing_candidates(evaluate: Callable, line, span: Span,
                        chunks: int = INTERSECT_DIVISIONS) -> List[Span]:
    return [piece for piece in dice_range(span, chunks)
            if does_cross(evaluate, line, piece) <= 0.0]


def converge_crossing(evaluate: Callable, line, span: Span, accuracy: float,
                      max_levels: int = MAX_INTERSECT_LEVELS) -> Optional[IntersectionPoint]:
    """Refine a candidate sub-range down to a single crossing.

    Returns ``None`` when no refined sub-range shows a crossing, which
    happens for a curve that grazes the line without reaching it.
    """
    check_accuracy(accuracy)
    current = span
    for level in range(max_levels):
        chosen = None
        for piece in dice_range(current, REFINE_DIVISIONS):
            proj = does_cross(evaluate, line, piece)
            if proj == 0.0:
                low_pt = evaluate(piece[0])
                if line.contains(low_pt):
                    return IntersectionPoint.at(low_pt, piece[0])
                return IntersectionPoint.at(evaluate(piece[1]), piece[1])
            if proj < 0.0:
                low_pt = evaluate(piece[0])
                high_pt = evaluate(piece[1])
                if geom.dist(low_pt, high_pt) < accuracy:
                    mid = (piece[0] + piece[1]) / 2.0
                    logger.debug('crossing converged at t=%.6f after %d levels',
                                 mid, level + 1)
                    return IntersectionPoint.at(evaluate(mid), mid)
                chosen = piece
                break
        if chosen is None:
            return None
        current = chosen
    raise ConvergenceError(
        f'crossing search did not converge in {max_levels} levels',
        max_levels, {'span': span, 'accuracy': accuracy})


def _rank(evaluate: Callable, target, spans: List[Span]) -> List[Tuple[float, Span]]:
    scored = []
    for piece in spans:
        mid = (piece[0] + piece[1]) / 2.0
        scored.append((geom.dist(target, evaluate(mid)), piece))
    scored.sort(key=lambda item: item[0])
    return scored


def closest_param(evaluate: Callable, target, span: Span, length: float,
                  max_levels: int = MAX_CLOSEST_LEVELS) -> Optional[float]:
    """Parameter of the curve point nearest ``target``.

    Sub-ranges whose midpoint is farther than a quarter of the curve
    length from the target are discarded up front; if none remain the
    result is ``None``.
    """
    ranked = [entry for entry in _rank(evaluate, target,
                                       dice_range(span, CLOSEST_DIVISIONS))
              if entry[0] < length / 4.0]
    if not ranked:
        return None

    best = ranked[0][1]
    for level in range(max_levels):
        _, best = _rank(evaluate, target, dice_range(best, REFINE_DIVISIONS))[0]
        if geom.dist(evaluate(best[0]), evaluate(best[1])) < geom.epsilon:
            logger.debug('closest point converged after %d levels', level + 1)
            return (best[0] + best[1]) / 2.0
    raise ConvergenceError(
        f'closest point search did not converge in {max_levels} levels',
        max_levels, {'target': target})


def crown(points: List[list]) -> float:
    """Largest perpendicular distance of ``points`` from the chord
    joining the first and last of them."""
    alpha = points[0]
    omega = points[-1]
    return max(geom.perpdist(p, alpha, omega) for p in points)


def find_crown(evaluate: Callable, low: float, high: float,
               samples: int = CROWN_SAMPLES) -> float:
    pts = [evaluate(low + (high - low) * i / samples) for i in range(samples + 1)]
    return crown(pts)


def find_step(evaluate: Callable, span: Span, current: float, tolerance: float) -> float:
    """Largest parameter step from ``current`` whose chord stays within
    ``tolerance`` of the curve, found by halving."""
    high = span[1]
    step = high - current
    for _ in range(MAX_STEP_HALVINGS):
        trial = high if step >= high - current else current + step
        if find_crown(evaluate, current, trial) <= tolerance:
            return trial
        step /= 2.0
    raise ConvergenceError(
        f'no acceptable step after {MAX_STEP_HALVINGS} halvings',
        MAX_STEP_HALVINGS, {'current': current, 'tolerance': tolerance})


def approximate(evaluate: Callable, span: Span, tolerance: float) -> List[list]:
    """Polyline through the curve, each chord within ``tolerance``."""
    check_accuracy(tolerance, 'tolerance')
    current = span[0]
    pts = [evaluate(current)]
    while current < span[1]:
        current = find_step(evaluate, span, current, tolerance)
        pts.append(evaluate(current))
    return pts


def polyline_length(evaluate: Callable, span: Span, chunks: int = 100) -> float:
    """Length of the curve, summed over ``chunks`` straight pieces."""
    total = 0.0
    prior = evaluate(span[0])
    for _, high in dice_range(span, chunks):
        pt = evaluate(high)
        total += geom.dist(prior, pt)
        prior = pt
    return total
