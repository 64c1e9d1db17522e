"""Unbounded straight lines.

A ``Line`` is an origin point plus a unit direction.  Lines are the
probes handed to ``Curve.intersect()``; the module-level predicates
``isparallel()``, ``iscoincident()`` and ``iscoplanar()`` and the
solver ``intersect_two()`` describe how two lines relate.
"""

import curvepack.geom as geom
from curvepack.errors import (
    CoincidentLinesError,
    NonCoplanarLinesError,
    NonUnitDirectionError,
    ParallelLinesError,
    ZeroVectorError,
)


class Line:
    """unbounded line through ``origin`` along unit vector ``direction``"""

    def __init__(self,origin,direction):
        if geom.iszero(direction):
            raise ZeroVectorError('line direction has zero length',
                                  {'direction': direction})
        if not geom.isunit(direction):
            raise NonUnitDirectionError('line direction must be a unit vector: {}'.format(geom.vstr(direction)),
                                        {'direction': direction})
        self.__origin = geom.point(origin)
        self.__direction = geom.vect(direction)

    def __repr__(self):
        return 'Line({},{})'.format(geom.vstr(self.__origin),
                                    geom.vstr(self.__direction))

    def __eq__(self,other):
        if not isinstance(other,Line):
            return NotImplemented
        return geom.vclose(self.__origin,other.origin) and \
            geom.vsame(self.__direction,other.direction)

    @property
    def origin(self):
        return list(self.__origin)

    @property
    def direction(self):
        return list(self.__direction)

    def resolve_relative_vec(self,pt):
        """split the vector from the origin to ``pt`` into components
        along and perpendicular to the line; returns ``(along, perp)``
        vectors"""
        bridge = geom.sub(geom.point(pt),self.__origin)
        along = geom.scale3(self.__direction,geom.dot(bridge,self.__direction))
        perp = geom.sub(bridge,along)
        return along,perp

    def resolve_relative(self,pt):
        """signed distance along the line, and unsigned distance away
        from it, of ``pt``"""
        bridge = geom.sub(geom.point(pt),self.__origin)
        along = geom.dot(bridge,self.__direction)
        perp = geom.mag(geom.sub(bridge,geom.scale3(self.__direction,along)))
        return along,perp

    def drop_point(self,pt):
        """foot of the perpendicular from ``pt`` to the line"""
        along,_ = self.resolve_relative_vec(pt)
        return geom.add(self.__origin,along)

    def contains(self,pt,accuracy=geom.epsilon):
        _,perp = self.resolve_relative_vec(pt)
        return geom.mag(perp) < accuracy

    def transform(self,matrix):
        origin = matrix.mul(self.__origin)
        direction = geom.unit(matrix.mul(self.__direction))
        return Line(origin,direction)


def isparallel(a,b):
    """do two lines share a direction, in either sense?"""
    return geom.vsame(a.direction,b.direction) or \
        geom.isopposite(a.direction,b.direction)

def iscoincident(a,b):
    return isparallel(a,b) and a.contains(b.origin)

def iscoplanar(a,b):
    """can the two lines lie in one plane?  Parallel lines always can."""
    if isparallel(a,b):
        return True
    bridge = geom.sub(b.origin,a.origin)
    if geom.mag(bridge) < geom.epsilon:
        return True
    normal = geom.unit(geom.cross(a.direction,b.direction))
    return abs(geom.dot(normal,bridge)) < geom.epsilon

def intersect_two(a,b):
    """the single point where two lines cross"""
    if iscoincident(a,b):
        raise CoincidentLinesError('lines are coincident',{'line': a})
    if isparallel(a,b):
        raise ParallelLinesError('lines are parallel',{'line': a})
    if not iscoplanar(a,b):
        raise NonCoplanarLinesError('lines do not share a plane',
                                    {'line_a': a,'line_b': b})

    if geom.vclose(a.origin,b.origin):
        return a.origin
    if a.contains(b.origin):
        return b.origin
    if b.contains(a.origin):
        return a.origin

    _,perp = a.resolve_relative_vec(b.origin)
    gap = geom.mag(perp)
    propor = geom.dot(geom.unit(perp),b.direction)
    return geom.offset(b.origin,geom.scale3(b.direction,-gap/propor))
