"""
Provides the Interval class for describing convex intervals over any ordered
domain (ints, floats, dates, ...). Bounds may be open, closed or missing
(unbounded), and the empty interval is an ordinary value rather than an error.
"""

import enum

from piecewise import invariant

class Error(Exception):
  """Base error for the interval module."""

class InvalidBounds(Error, ValueError):
  """The bounds given do not describe a non-empty interval."""

class Kind(enum.Enum):
  """The shape of an interval. Naming follows the side that is open or
     unbounded, so RIGHT_HALF_OPEN is [a, b) and UNBOUNDED_OPEN_RIGHT is
     (-inf, b)."""
  EMPTY = enum.auto()
  SINGLETON = enum.auto()
  CLOSED = enum.auto()
  OPEN = enum.auto()
  LEFT_HALF_OPEN = enum.auto()
  RIGHT_HALF_OPEN = enum.auto()
  UNBOUNDED_CLOSED_RIGHT = enum.auto()
  UNBOUNDED_OPEN_RIGHT = enum.auto()
  UNBOUNDED_CLOSED_LEFT = enum.auto()
  UNBOUNDED_OPEN_LEFT = enum.auto()
  UNBOUNDED = enum.auto()

def _isOrdered(lower, upper):
  return lower < upper

def _maxLower(a, b):
  """Picks the tighter of two (value, closed) lower bounds. None is -inf."""
  if a[0] is None:
    return b
  if b[0] is None:
    return a
  if b[0] > a[0]:
    return b
  if a[0] > b[0]:
    return a
  return a[0], a[1] and b[1]

def _minUpper(a, b):
  """Picks the tighter of two (value, closed) upper bounds. None is +inf."""
  if a[0] is None:
    return b
  if b[0] is None:
    return a
  if b[0] < a[0]:
    return b
  if a[0] < b[0]:
    return a
  return a[0], a[1] and b[1]

class Interval(metaclass=invariant.EnforceInvariant):
  """A single convex interval. Immutable; every operation returns a new
     interval."""

  def __init__(self):
    """Creates an empty interval"""
    self._empty = True
    self._lower = None
    self._lowerClosed = False
    self._upper = None
    self._upperClosed = False

  @classmethod
  def _fromBounds(klass, lower, lowerClosed, upper, upperClosed):
    """Builds an interval from raw bounds, yielding the empty interval when
       they do not enclose any point. None means unbounded on that side."""
    ival = klass()
    if lower is not None and upper is not None:
      if not _isOrdered(lower, upper) and \
         not (lower == upper and lowerClosed and upperClosed):
        return ival
    ival._empty = False
    ival._lower = lower
    ival._lowerClosed = lowerClosed and lower is not None
    ival._upper = upper
    ival._upperClosed = upperClosed and upper is not None
    ival._checkInvariant()
    return ival

  @classmethod
  def _bounded(klass, lower, lowerClosed, upper, upperClosed):
    if not _isOrdered(lower, upper):
      raise InvalidBounds("Lower bound %r must be less than upper bound %r." %
                          (lower, upper))
    return klass._fromBounds(lower, lowerClosed, upper, upperClosed)

  @classmethod
  def _halfBounded(klass, bound, isLower, closed):
    if bound != bound:
      raise InvalidBounds("Bound %r is not comparable with itself." % (bound,))
    if isLower:
      return klass._fromBounds(bound, closed, None, False)
    return klass._fromBounds(None, False, bound, closed)

  @classmethod
  def empty(klass):
    return klass()

  @classmethod
  def singleton(klass, point):
    """The interval {point}."""
    if point != point:
      raise InvalidBounds("Point %r is not comparable with itself." % (point,))
    return klass._fromBounds(point, True, point, True)

  @classmethod
  def closed(klass, lower, upper):
    """[lower, upper]. Use singleton for a single point."""
    return klass._bounded(lower, True, upper, True)

  @classmethod
  def open(klass, lower, upper):
    """(lower, upper)"""
    return klass._bounded(lower, False, upper, False)

  @classmethod
  def leftHalfOpen(klass, lower, upper):
    """(lower, upper]"""
    return klass._bounded(lower, False, upper, True)

  @classmethod
  def rightHalfOpen(klass, lower, upper):
    """[lower, upper)"""
    return klass._bounded(lower, True, upper, False)

  @classmethod
  def unboundedClosedRight(klass, upper):
    """(-inf, upper]"""
    return klass._halfBounded(upper, False, True)

  @classmethod
  def unboundedOpenRight(klass, upper):
    """(-inf, upper)"""
    return klass._halfBounded(upper, False, False)

  @classmethod
  def unboundedClosedLeft(klass, lower):
    """[lower, +inf)"""
    return klass._halfBounded(lower, True, True)

  @classmethod
  def unboundedOpenLeft(klass, lower):
    """(lower, +inf)"""
    return klass._halfBounded(lower, True, False)

  @classmethod
  def unbounded(klass):
    """(-inf, +inf)"""
    return klass._fromBounds(None, False, None, False)

  def _checkInvariant(self):
    if self._empty:
      assert self._lower is None and self._upper is None
      assert not self._lowerClosed and not self._upperClosed
      return
    assert self._lower is not None or not self._lowerClosed
    assert self._upper is not None or not self._upperClosed
    if self._lower is not None and self._upper is not None:
      assert _isOrdered(self._lower, self._upper) or \
             (self._lower == self._upper and self._lowerClosed and
              self._upperClosed)

  def _key(self):
    return (self._empty, self._lower, self._lowerClosed, self._upper,
            self._upperClosed)

  def __eq__(self, other):
    if not isinstance(other, Interval):
      return NotImplemented
    return self._key() == other._key()

  def __hash__(self):
    return hash(self._key())

  def __repr__(self):
    return "Interval(%s)" % self

  def __str__(self):
    if self._empty:
      return "{}"
    if self._lower is not None and self._lower == self._upper:
      return "{%s}" % (self._lower,)
    left = "-inf" if self._lower is None else self._lower
    right = "+inf" if self._upper is None else self._upper
    return "%s%s, %s%s" % ("[" if self._lowerClosed else "(", left, right,
                           "]" if self._upperClosed else ")")

  @property
  def kind(self):
    if self._empty:
      return Kind.EMPTY
    if self._lower is None and self._upper is None:
      return Kind.UNBOUNDED
    if self._lower is None:
      return Kind.UNBOUNDED_CLOSED_RIGHT if self._upperClosed \
             else Kind.UNBOUNDED_OPEN_RIGHT
    if self._upper is None:
      return Kind.UNBOUNDED_CLOSED_LEFT if self._lowerClosed \
             else Kind.UNBOUNDED_OPEN_LEFT
    if self._lower == self._upper:
      return Kind.SINGLETON
    if self._lowerClosed and self._upperClosed:
      return Kind.CLOSED
    if self._lowerClosed:
      return Kind.RIGHT_HALF_OPEN
    if self._upperClosed:
      return Kind.LEFT_HALF_OPEN
    return Kind.OPEN

  def isEmpty(self):
    return self._empty

  def lower(self):
    """Returns the lower bound, or None if the interval is empty or unbounded
       below. Whether the bound is included is given by kind."""
    return self._lower

  def upper(self):
    """Returns the upper bound, or None if the interval is empty or unbounded
       above."""
    return self._upper

  def contains(self, point):
    """True if point lies in the interval. Points that do not compare with the
       bounds (NaN and friends) are never contained."""
    if self._empty:
      return False
    if self._lower is not None:
      if self._lowerClosed:
        if not self._lower <= point:
          return False
      elif not self._lower < point:
        return False
    if self._upper is not None:
      if self._upperClosed:
        if not point <= self._upper:
          return False
      elif not point < self._upper:
        return False
    return True

  def intersect(self, other):
    """Returns the interval covering points in both self and other. This may
       be the empty interval."""
    if self._empty or other._empty:
      return Interval()
    lower, lowerClosed = _maxLower((self._lower, self._lowerClosed),
                                   (other._lower, other._lowerClosed))
    upper, upperClosed = _minUpper((self._upper, self._upperClosed),
                                   (other._upper, other._upperClosed))
    return Interval._fromBounds(lower, lowerClosed, upper, upperClosed)

  def complement(self):
    """Returns a tuple of the (at most two) disjoint intervals covering every
       point not in self, in increasing order. The complement of the empty
       interval is the whole line, and the whole line has no complement."""
    if self._empty:
      return (Interval.unbounded(),)
    pieces = []
    if self._lower is not None:
      pieces.append(Interval._fromBounds(None, False, self._lower,
                                         not self._lowerClosed))
    if self._upper is not None:
      pieces.append(Interval._fromBounds(self._upper, not self._upperClosed,
                                         None, False))
    return tuple(pieces)

  def compare(self, other):
    """Orders two intervals by where they start, for use as a sort or merge
       key. Returns -1, 0 or 1, or None if the two are incomparable (either is
       empty, or the endpoints do not compare). -inf sorts first, and a closed
       start sorts before an open one at the same value. For disjoint
       intervals this is the same order as by where they end."""
    if self._empty or other._empty:
      return None
    mine, theirs = self._lower, other._lower
    if mine is None or theirs is None:
      if mine is None and theirs is None:
        return 0
      return -1 if mine is None else 1
    if mine < theirs:
      return -1
    if theirs < mine:
      return 1
    if mine == theirs:
      return int(other._lowerClosed) - int(self._lowerClosed)
    return None
