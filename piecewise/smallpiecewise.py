"""
Step functions over a small number of segments. A SmallPiecewise is an
immutable run of disjoint segments; points outside every segment are simply
undefined, so gaps in the domain are a normal state. Builder assembles one
segment at a time with "newest segment wins" semantics.
"""

import logging

from piecewise import invariant
from piecewise import multiply
from piecewise.segment import Segment

log = logging.getLogger(__name__)

class Error(Exception):
  """Base error for the smallpiecewise module."""

class BuilderConsumed(Error):
  """The builder has already been turned into a SmallPiecewise."""

class SmallPiecewise(metaclass=invariant.EnforceInvariant):
  """A piecewise-constant function. Lookups scan the segments in storage
     order, which beats a binary search at the sizes this is meant for."""

  def __init__(self):
    """Creates a function with no segments, undefined everywhere."""
    self._segments = ()

  @classmethod
  def fromSortedSegments(klass, segments):
    """Factory method that wraps segments as-is, skipping the overlay work a
       Builder does. The caller guarantees the segments are pairwise disjoint
       and sorted by Interval.compare (by start, which for disjoint intervals
       is also by end). Nothing checks this: if it is false the
       result is still safe to query, but what valueAt returns is
       unspecified."""
    function = klass()
    function._segments = tuple(segments)
    function._checkInvariant()
    return function

  def _checkInvariant(self):
    assert type(self._segments) is tuple

  def __len__(self):
    return len(self._segments)

  def __iter__(self):
    return iter(self._segments)

  def __eq__(self, other):
    # Order matters!
    if not isinstance(other, SmallPiecewise):
      return NotImplemented
    return self._segments == other._segments

  def __repr__(self):
    return "SmallPiecewise(%r)" % (list(self._segments),)

  def __str__(self):
    return "\n".join("%s: %s" % (seg.interval, seg.value)
                     for seg in self._segments)

  def __mul__(self, other):
    if isinstance(other, SmallPiecewise):
      return self.multiply(other)
    return self.scale(other)

  def __rmul__(self, factor):
    return self.scale(factor)

  @property
  def segments(self):
    """The segments in storage order."""
    return self._segments

  def valueAt(self, point):
    """Returns the value of the first segment containing point, or None if
       the function is undefined there."""
    for seg in self._segments:
      if seg.interval.contains(point):
        return seg.value
    return None

  def scale(self, factor):
    """Returns a new function with every value multiplied by factor."""
    return SmallPiecewise.fromSortedSegments(
        seg.scale(factor) for seg in self._segments)

  def multiply(self, other):
    """Returns the pointwise product. It is defined only where both self and
       other are defined."""
    return SmallPiecewise.fromSortedSegments(
        multiply.multiplySegments(self._segments, other._segments))

class Builder(metaclass=invariant.EnforceInvariant):
  """Accumulates segments into a SmallPiecewise. Each overlaid segment takes
     precedence over whatever was there before it, so the builder's segments
     are disjoint at all times, though not necessarily sorted."""

  def __init__(self):
    self._segments = []
    self._consumed = False

  def _checkInvariant(self):
    if self._consumed:
      assert self._segments is None
      return
    assert type(self._segments) is list

  def __len__(self):
    return 0 if self._consumed else len(self._segments)

  def _ensureLive(self):
    if self._consumed:
      raise BuilderConsumed("build() has already been called on this builder.")

  def overlay(self, segment):
    """Adds segment so that it wins wherever it overlaps earlier segments,
       which are clipped to what lies outside it. Returns the builder."""
    self._ensureLive()
    outside = segment.interval.complement()
    trimmed = []
    for existing in self._segments:
      for piece in outside:
        clipped = existing.interval.intersect(piece)
        if not clipped.isEmpty():
          trimmed.append(Segment(clipped, existing.value))
    if invariant.CHECK_INVARIANTS:
      # Only the newcomer can overlap; the survivors were disjoint already.
      for survivor in trimmed:
        assert survivor.interval.intersect(segment.interval).isEmpty()
    trimmed.append(segment)
    self._segments = trimmed
    return self

  def overlayAll(self, segments):
    """Overlays each of segments in order; later ones win."""
    self._ensureLive()
    for segment in segments:
      self.overlay(segment)
    return self

  def build(self):
    """Hands the segments over to a new SmallPiecewise and retires the
       builder. The overlays have already made them disjoint, so nothing is
       checked again."""
    self._ensureLive()
    segments, self._segments = self._segments, None
    self._consumed = True
    log.debug("Built step function with %i segments", len(segments))
    return SmallPiecewise.fromSortedSegments(segments)
