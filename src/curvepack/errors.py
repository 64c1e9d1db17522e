"""Exception classes raised by **curvepack**.

Every error is a ``ValueError`` carrying a ``details`` dict, so callers
that only care about "bad geometry" can catch ``ValueError`` and callers
that want to recover selectively can catch the specific subclass.

construction validity
    ``ZeroVectorError``, ``NonUnitDirectionError``,
    ``CoincidentPointsError``, ``CollinearPointsError``,
    ``ArcPointsError``, ``NonOrthogonalError``

domain
    ``ParameterRangeError``, ``NegativeAccuracyError``

relationship
    ``ParallelLinesError``, ``CoincidentLinesError``,
    ``NonCoplanarLinesError``, ``ParallelPlanesError``

iteration exhaustion
    ``ConvergenceError``

topology
    ``AlignmentError``, ``SplittingError``, ``JointDegreeError``,
    ``CurveNotFoundError``, ``TinyArrayError``
"""


class CurveError(ValueError):
    """Base class for all curvepack failures."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


## construction validity

class ZeroVectorError(CurveError):
    """A direction or axis vector has zero length."""


class NonUnitDirectionError(CurveError):
    """A direction that must be normalized is not."""


class CoincidentPointsError(CurveError):
    """Two defining points that must be distinct are not."""


class CollinearPointsError(CurveError):
    """Three defining points lie on one line."""


class ArcPointsError(CurveError):
    """Arc end points are at different distances from the center."""


class NonOrthogonalError(CurveError):
    """A start point or reference direction is not perpendicular to an axis."""


## domain

class ParameterRangeError(CurveError):
    """A parameter or angle is outside its allowed range."""

    def __init__(self, message, value=None, details=None):
        details = dict(details or {})
        details.setdefault('value', value)
        super().__init__(message, details)
        self.value = value


class NegativeAccuracyError(CurveError):
    """An accuracy or tolerance argument is zero or negative."""

    def __init__(self, message, accuracy=None):
        super().__init__(message, {'accuracy': accuracy})
        self.accuracy = accuracy


## relationship

class ParallelLinesError(CurveError):
    pass


class CoincidentLinesError(CurveError):
    pass


class NonCoplanarLinesError(CurveError):
    pass


class ParallelPlanesError(CurveError):
    pass


## iteration exhaustion

class ConvergenceError(CurveError):
    """A bounded numerical search ran out of iterations."""

    def __init__(self, message, iterations, details=None):
        details = dict(details or {})
        details['iterations'] = iterations
        super().__init__(message, details)
        self.iterations = iterations


## topology

class AlignmentError(CurveError):
    """A loop could not be ordered into a single nose-to-tail cycle."""


class SplittingError(CurveError):
    """A straight edge crosses a loop more than twice."""


class JointDegreeError(CurveError):
    """More than two fragments meet at one point."""


class CurveNotFoundError(CurveError):
    pass


class TinyArrayError(CurveError):
    """A chain operation was given too few members."""


def check_accuracy(accuracy, name='accuracy'):
    """raise ``NegativeAccuracyError`` unless ``accuracy`` is positive"""
    if not accuracy > 0.0:
        raise NegativeAccuracyError(f'{name} must be positive, got {accuracy}',
                                    accuracy)
