## matrix transformations and local coordinate frames for curvepack
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

from math import *
import curvepack.geom as geom
from curvepack.errors import NonOrthogonalError, NonUnitDirectionError

## a matrix is represented as a list of four row vectors.  Vectors
## are plain lists, so M.mul(x) always treats x as a column vector.
## Points carry w=1 and pick up the translation column; direction
## vectors carry w=0 and don't.


class Matrix:
    """4x4 transformation matrix for homogeneous 3D coordinates"""

    def __init__(self,a=None):
        self.m = [[1.0,0.0,0.0,0.0],
                  [0.0,1.0,0.0,0.0],
                  [0.0,0.0,1.0,0.0],
                  [0.0,0.0,0.0,1.0]]

        if isinstance(a,Matrix):
            for i in range(4):
                self.setrow(i,a.getrow(i))
        elif isinstance(a,(tuple,list)):
            if len(a) == 4 and all(isinstance(r,(tuple,list)) and len(r) == 4
                                   for r in a):
                for i in range(4):
                    for j in range(4):
                        self.set(i,j,a[i][j])
            elif len(a) == 16:
                for i in range(4):
                    for j in range(4):
                        self.set(i,j,a[i*4+j])
            else:
                raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        elif a is not None:
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))

    def __repr__(self):
        return "Matrix({},{},{},{})".format(self.m[0],self.m[1],
                                            self.m[2],self.m[3])

    def __eq__(self,other):
        if not isinstance(other,Matrix):
            return NotImplemented
        return all(abs(self.m[i][j]-other.m[i][j]) < geom.epsilon_v
                   for i in range(4) for j in range(4))

    #return value indexed by i,j
    def get(self,i,j):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to get: {},{}'.format(i,j))
        return self.m[i][j]

    #set value indexed by i,j
    def set(self,i,j,x):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to set: {},{}'.format(i,j))
        if not geom.isgoodnum(x):
            raise ValueError('bad value passed to set: {}'.format(x))
        self.m[i][j]=x

    def getrow(self,i):
        if i < 0 or i > 3:
            raise ValueError('bad row passed to getrow: {}'.format(i))
        return list(self.m[i])

    def getcol(self,j):
        if j < 0 or j > 3:
            raise ValueError('bad column passed to getcol: {}'.format(j))
        return [self.m[0][j],self.m[1][j],self.m[2][j],self.m[3][j]]

    def setrow(self,i,x):
        if not geom.isvect(x):
            raise ValueError('bad non-vector passed to setrow: {}'.format(x))
        if i < 0 or i > 3:
            raise ValueError('bad row index passed to setrow: {}'.format(i))
        self.m[i] = list(x)

    def setcol(self,j,x):
        if not geom.isvect(x):
            raise ValueError('bad non-vector passed to setcol: {}'.format(x))
        if j < 0 or j > 3:
            raise ValueError('bad column index passed to setcol: {}'.format(j))
        for i in range(4):
            self.m[i][j] = x[i]

    def transpose(self):
        return Matrix([self.getcol(j) for j in range(4)])

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # vector, compute Mx. If x is a scalar, compute xM.

    def mul(self,x):
        if isinstance(x,Matrix):
            result = Matrix()
            for i in range(4):
                for j in range(4):
                    result.set(i,j,geom.dot4(self.m[i],x.getcol(j)))
            return result
        elif geom.isvect(x):
            return [geom.dot4(self.m[i],x) for i in range(4)]
        elif geom.isgoodnum(x):
            return Matrix([[c*x for c in row] for row in self.m])

        raise ValueError('bad thing passed to mul(): {}'.format(x))

    def isaffine(self):
        return self.m[3] == [0.0,0.0,0.0,1.0] or self.m[3] == [0,0,0,1]


# return the 4x4 rotation matrix about an arbitrary axis through the
# origin; angle in radians, positive angles are counterclockwise when
# looking down the axis
def Rotation(axis,angle,inverse=False):
    u = geom.unit(axis)

    if inverse:
        angle *= -1.0

    ux = u[0]
    uy = u[1]
    uz = u[2]

    cang = cos(angle)
    cmin = 1.0-cang
    sang = sin(angle)

    # see http://www.opengl-tutorial.org/assets/faq_quaternions/index.html#Q38
    R = [[cang + ux*ux*cmin, ux*uy*cmin-uz*sang, ux*uz*cmin+uy*sang,0.0],
         [uy*ux*cmin+uz*sang, cang + uy*uy*cmin, uy*uz*cmin - ux*sang,0.0],
         [uz*ux*cmin-uy*sang, uz*uy*cmin+ux*sang, cang+uz*uz*cmin,0.0],
         [0.0,0.0,0.0,1.0]]

    return Matrix(R)

def Translation(delta,inverse=False):
    if inverse:
        delta = geom.scale3(delta,-1.0)
    T = [[1.0,0.0,0.0,delta[0]],
         [0.0,1.0,0.0,delta[1]],
         [0.0,0.0,1.0,delta[2]],
         [0.0,0.0,0.0,1.0]]
    return Matrix(T)

def Scale(x,y=None,z=None,inverse=False):
    if y is None or z is None:
        y = z = x
    if abs(x) < geom.epsilon_v or abs(y) < geom.epsilon_v or abs(z) < geom.epsilon_v:
        raise ValueError('degenerate scale factor: {},{},{}'.format(x,y,z))
    if inverse:
        x = 1.0/x
        y = 1.0/y
        z = 1.0/z
    S = [[x,0.0,0.0,0.0],
         [0.0,y,0.0,0.0],
         [0.0,0.0,z,0.0],
         [0.0,0.0,0.0,1.0]]
    return Matrix(S)


class CoordinateSystem:
    """a right-handed local frame: an origin, a unit reference
    direction (the local X axis) and a unit normal (the local Z axis).
    The local Y axis is normal x reference.

    ``to_global()`` maps local coordinates into the global frame,
    ``from_global()`` is its inverse.  With no arguments you get the
    global XY frame.
    """

    def __init__(self,origin=None,ref_direction=None,normal=None):
        if origin is None:
            origin = geom.point(0,0,0)
        if ref_direction is None:
            ref_direction = geom.vect(1,0,0)
        if normal is None:
            normal = geom.vect(0,0,1)
        for v in (ref_direction,normal):
            if not geom.isunit(v):
                raise NonUnitDirectionError('frame axes must be unit vectors: {}'.format(geom.vstr(v)),
                                            {'vector': v})
        if abs(geom.dot(ref_direction,normal)) > geom.epsilon_v:
            raise NonOrthogonalError('reference direction is not perpendicular to the normal',
                                     {'ref_direction': ref_direction,'normal': normal})
        self.__origin = geom.point(origin)
        self.__xaxis = geom.vect(ref_direction)
        self.__zaxis = geom.vect(normal)
        self.__yaxis = geom.unit(geom.cross(normal,ref_direction))

    def __repr__(self):
        return 'CoordinateSystem({},{},{})'.format(geom.vstr(self.__origin),
                                                   geom.vstr(self.__xaxis),
                                                   geom.vstr(self.__zaxis))

    @property
    def origin(self):
        return list(self.__origin)

    @property
    def xaxis(self):
        return list(self.__xaxis)

    @property
    def yaxis(self):
        return list(self.__yaxis)

    @property
    def zaxis(self):
        return list(self.__zaxis)

    def to_global(self):
        M = Matrix()
        M.setcol(0,self.__xaxis)
        M.setcol(1,self.__yaxis)
        M.setcol(2,self.__zaxis)
        M.setcol(3,self.__origin)
        return M

    def from_global(self):
        # the rotation part is orthonormal, so its inverse is its transpose
        R = Matrix()
        R.setrow(0,self.__xaxis)
        R.setrow(1,self.__yaxis)
        R.setrow(2,self.__zaxis)
        return R.mul(Translation(self.__origin,inverse=True))
