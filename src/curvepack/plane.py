"""Infinite planes: a location plus a unit normal."""

import curvepack.geom as geom
from curvepack.errors import (
    CoincidentPointsError,
    CollinearPointsError,
    NonUnitDirectionError,
    ParallelLinesError,
    ParallelPlanesError,
    ZeroVectorError,
    check_accuracy,
)
from curvepack.line import Line


class Plane:
    """plane through ``location`` with unit ``normal``"""

    def __init__(self,location,normal):
        if geom.iszero(normal):
            raise ZeroVectorError('plane normal has zero length',{'normal': normal})
        if not geom.isunit(normal):
            raise NonUnitDirectionError('plane normal must be a unit vector: {}'.format(geom.vstr(normal)),
                                        {'normal': normal})
        self.__location = geom.point(location)
        self.__normal = geom.vect(normal)

    @classmethod
    def from_points(cls,alpha,beta,gamma):
        """plane through three distinct, non-collinear points.  The
        normal follows the right-hand rule, alpha to beta to gamma."""
        if not geom.isuniquepool([alpha,beta,gamma]):
            raise CoincidentPointsError('plane points must be distinct',
                                        {'points': [alpha,beta,gamma]})
        if geom.islinear3(alpha,beta,gamma):
            raise CollinearPointsError('plane points must not be collinear',
                                       {'points': [alpha,beta,gamma]})
        normal = geom.unit(geom.cross(geom.sub(beta,alpha),geom.sub(gamma,alpha)))
        return cls(alpha,normal)

    def __repr__(self):
        return 'Plane({},{})'.format(geom.vstr(self.__location),
                                     geom.vstr(self.__normal))

    def __eq__(self,other):
        if not isinstance(other,Plane):
            return NotImplemented
        return geom.vsame(self.__normal,other.normal) and self.contains(other.location)

    @property
    def location(self):
        return list(self.__location)

    @property
    def normal(self):
        return list(self.__normal)

    def resolve_relative_vec(self,pt):
        """split the vector from the location to ``pt`` into in-plane
        and normal components"""
        bridge = geom.sub(geom.point(pt),self.__location)
        perp = geom.scale3(self.__normal,geom.dot(bridge,self.__normal))
        return geom.sub(bridge,perp),perp

    def contains(self,pt,accuracy=geom.epsilon):
        check_accuracy(accuracy)
        bridge = geom.sub(geom.point(pt),self.__location)
        return abs(geom.dot(bridge,self.__normal)) < accuracy

    def isparallel_line(self,line):
        return abs(geom.dot(line.direction,self.__normal)) < geom.epsilon_v

    def contains_line(self,line,accuracy=geom.epsilon):
        """does ``line`` lie in the plane?"""
        return self.isparallel_line(line) and self.contains(line.origin,accuracy)

    def mirror(self,pt):
        _,perp = self.resolve_relative_vec(pt)
        return geom.offset(pt,geom.scale3(perp,-2.0))

    def mirror_vector(self,v):
        along = geom.scale3(self.__normal,geom.dot(self.__normal,v))
        return geom.sub(geom.vect(v),geom.scale3(along,2.0))

    def project(self,pt):
        """closest point on the plane to ``pt``"""
        _,perp = self.resolve_relative_vec(pt)
        return geom.point(geom.sub(geom.point(pt),perp))

    def intersect_line(self,line):
        if self.isparallel_line(line):
            raise ParallelLinesError('line is parallel to the plane',
                                     {'line': line,'plane': self})
        bridge = geom.sub(self.__location,line.origin)
        t = geom.dot(bridge,self.__normal)/geom.dot(line.direction,self.__normal)
        return geom.offset(line.origin,geom.scale3(line.direction,t))


def isparallel(p,q):
    return geom.vsame(p.normal,q.normal) or geom.isopposite(p.normal,q.normal)

def iscoincident(p,q,accuracy=geom.epsilon):
    return isparallel(p,q) and p.contains(q.location,accuracy)

def intersect_planes(p,q):
    """the line common to two non-parallel planes"""
    if isparallel(p,q):
        raise ParallelPlanesError('planes are parallel',{'plane_a': p,'plane_b': q})
    direction = geom.unit(geom.cross(p.normal,q.normal))
    across = geom.unit(geom.cross(direction,q.normal))
    anchor = p.intersect_line(Line(q.location,across))
    return Line(anchor,direction)
