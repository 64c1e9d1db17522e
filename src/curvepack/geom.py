## foundational point, vector and bounding box operations for curvepack
## Copyright (c) 2020 Richard W. DeVaul
## Copyright (c) 2020 yapCAD contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""foundational point and vector operations for **curvepack**

====================
OVERVIEW
====================

Points and vectors are lists of four numbers, ``[x,y,z,w]``, in
homogeneous coordinates.  ``point()`` makes coordinates with ``w=1``,
and ``vect()`` makes direction vectors with ``w=0``, so that a
``curvepack.xform.Matrix`` applies translations to points and leaves
directions alone.

``add()`` and ``sub()`` combine the ``w`` coordinate too, which keeps
the bookkeeping honest: point minus point is a vector, point plus
vector is a point.

constants
=========

``epsilon`` is the distance below which two points are the same
point.  ``epsilon_v`` is the tolerance used when comparing the
components of direction vectors.  Redefine these at your peril.

bounding boxes
==============

A bounding box is a list of two points, ``[pmin,pmax]``.  Boxes built
by ``bbox_from_corners()`` always have some thickness, even for
figures that are flat or straight along an axis.

"""

from math import *

from curvepack.errors import ZeroVectorError

epsilon = 0.0001
epsilon_v = 0.0001
pi2 = 2.0*pi

def isgoodnum(n):
    return (not isinstance(n,bool)) and isinstance(n,(int,float))

def point(x=0.0,y=0.0,z=0.0):
    """make a point, ``[x,y,z,1]``, from three numbers or from a
    list of two or three numbers"""
    if isinstance(x,(tuple,list)):
        r = [0.0,0.0,0.0,1.0]
        for i in range(min(3,len(x))):
            r[i]=x[i]
        return r
    return [x,y,z,1.0]

def vect(i=0.0,j=0.0,k=0.0):
    """make a direction vector, ``[i,j,k,0]``"""
    if isinstance(i,(tuple,list)):
        r = [0.0,0.0,0.0,0.0]
        for n in range(min(3,len(i))):
            r[n]=i[n]
        return r
    return [i,j,k,0.0]

def ispoint(x):
    return isinstance(x,(list,tuple)) and len(x) == 4 and x[3] > 0

def isvect(x):
    return isinstance(x,(list,tuple)) and len(x) == 4 and \
        all(isgoodnum(c) for c in x)

def add(a,b):
    return [a[0]+b[0],a[1]+b[1],a[2]+b[2],a[3]+b[3]]

def sub(a,b):
    return [a[0]-b[0],a[1]-b[1],a[2]-b[2],a[3]-b[3]]

## scale the x, y and z coordinates, leave w alone
def scale3(a,c):
    return [a[0]*c,a[1]*c,a[2]*c,a[3]]

def dot(a,b):
    return a[0]*b[0]+a[1]*b[1]+a[2]*b[2]

def dot4(a,b):
    return a[0]*b[0]+a[1]*b[1]+a[2]*b[2]+a[3]*b[3]

def cross(a,b):
    return [a[1]*b[2]-a[2]*b[1],
            a[2]*b[0]-a[0]*b[2],
            a[0]*b[1]-a[1]*b[0],
            0.0]

def mag(a):
    return sqrt(dot(a,a))

def dist(a,b):  # compute distance between two points a & b
    return mag(sub(a,b))

def unit(a):
    """return a normalized copy of vector ``a``; zero-length vectors
    can't be normalized"""
    m = mag(a)
    if m < 1e-12:
        raise ZeroVectorError('can not normalize a zero-length vector',
                              {'vector': a})
    return [a[0]/m,a[1]/m,a[2]/m,0.0]

def midway(a,b):
    return point((a[0]+b[0])/2.0,(a[1]+b[1])/2.0,(a[2]+b[2])/2.0)

## displace point p by vector v
def offset(p,v):
    return point(p[0]+v[0],p[1]+v[1],p[2]+v[2])

## negate the x, y and z parts of a vector
def reverse(v):
    return [-v[0],-v[1],-v[2],v[3]]

## determine if two points are the same, to within epsilon
def vclose(a,b):
    return dist(a,b) < epsilon

def vkey(a):
    """hash key for a point: each coordinate rounded to the epsilon
    grid.  Points that are ``vclose()`` usually, but not always,
    share a key."""
    return (round(a[0]/epsilon),round(a[1]/epsilon),round(a[2]/epsilon))

def iszero(v):
    return mag(v) < epsilon_v

def isunit(v):
    return abs(mag(v) - 1.0) < epsilon_v

## component-wise comparison of two direction vectors
def vsame(a,b):
    return abs(a[0]-b[0]) < epsilon_v and abs(a[1]-b[1]) < epsilon_v \
        and abs(a[2]-b[2]) < epsilon_v

def isopposite(a,b):
    """are two unit vectors pointing in exactly opposite directions?"""
    return vsame(a,reverse(b))

def isscaled(a,b):
    """are two vectors parallel, in either sense?"""
    return mag(cross(unit(a),unit(b))) < epsilon_v

def islinear3(a,b,c):
    """do three distinct points lie on one line?"""
    return isscaled(sub(b,a),sub(c,a))

def isuniquepool(pts):
    """are all of the points in ``pts`` pairwise distinct?"""
    for i in range(len(pts)):
        for j in range(i+1,len(pts)):
            if vclose(pts[i],pts[j]):
                return False
    return True

## interpolate between points a and b
def lerp(a,b,u):
    return point(a[0]+(b[0]-a[0])*u,
                 a[1]+(b[1]-a[1])*u,
                 a[2]+(b[2]-a[2])*u)

def perpdist(p,a,b):
    """perpendicular distance from point ``p`` to the line through
    ``a`` and ``b``.  If ``a`` and ``b`` coincide, return the distance
    from ``p`` to ``a``."""
    chord = sub(b,a)
    span = mag(chord)
    if span < 1e-12:
        return dist(p,a)
    return mag(cross(chord,sub(p,a)))/span

def vstr(a):
    """format a point or vector for printing, dropping the ``w``
    coordinate"""
    def nstr(x):
        if isinstance(x,float) and x == round(x):
            return str(int(x))
        return str(round(x,6))
    return '[' + ', '.join(nstr(c) for c in a[:3]) + ']'

## bounding boxes

def bbox_from_corners(p1,p2):
    """return ``[pmin,pmax]`` spanning two arbitrary corners.  An axis
    thinner than epsilon is padded out, symmetrically, to one percent
    of the largest span (and never less than ten times epsilon)."""
    lo = [min(p1[i],p2[i]) for i in range(3)]
    hi = [max(p1[i],p2[i]) for i in range(3)]
    widest = max(hi[i]-lo[i] for i in range(3))
    pad = max(widest*0.01,epsilon*10.0)/2.0
    for i in range(3):
        if hi[i]-lo[i] < epsilon:
            lo[i] -= pad
            hi[i] += pad
    return [point(lo),point(hi)]

def bboxunion(a,b):
    if not a:
        return b
    if not b:
        return a
    return [point(min(a[0][0],b[0][0]),min(a[0][1],b[0][1]),min(a[0][2],b[0][2])),
            point(max(a[1][0],b[1][0]),max(a[1][1],b[1][1]),max(a[1][2],b[1][2]))]

def pointsbbox(pts):
    """bounding box of a list of points"""
    lo = [min(p[i] for p in pts) for i in range(3)]
    hi = [max(p[i] for p in pts) for i in range(3)]
    return bbox_from_corners(point(lo),point(hi))

def isinsidebbox(bbox,p):
    return p[0] >= bbox[0][0] and p[0] <= bbox[1][0] \
        and p[1] >= bbox[0][1] and p[1] <= bbox[1][1] \
        and p[2] >= bbox[0][2] and p[2] <= bbox[1][2]
