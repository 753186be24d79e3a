"""
Segments: a single value held constant over one interval. A step function is
an ordered run of these.
"""

class Segment:
  """Pairs an Interval with a value. Segments are never modified in place;
     scaling and clipping build new ones."""

  def __init__(self, interval, value):
    self._interval = interval
    self._value = value

  @property
  def interval(self):
    return self._interval

  @property
  def value(self):
    return self._value

  def scale(self, factor):
    """Returns a new segment over the same interval with value * factor. The
       value's type decides what factor may be."""
    return Segment(self._interval, self._value * factor)

  def __mul__(self, factor):
    return self.scale(factor)

  def __eq__(self, other):
    if not isinstance(other, Segment):
      return NotImplemented
    return self._interval == other._interval and self._value == other._value

  def __repr__(self):
    return "Segment(%r, %r)" % (self._interval, self._value)
