"""
Pointwise multiplication of two step functions. Both operands are walked once
in interval order, pairing each newly visited segment with the most recent
segment seen on the other side, so the product is refined to the common
partition of the two without any searching.
"""

import functools
import logging

from piecewise.segment import Segment

log = logging.getLogger(__name__)

def _compareSegments(a, b):
  order = a.interval.compare(b.interval)
  return 0 if order is None else order

def _ordered(segments):
  """Drops empty segments, which cannot contribute to a product, and puts the
     rest in interval order. Already ordered input is returned unchanged."""
  segments = [seg for seg in segments if not seg.interval.isEmpty()]
  return tuple(sorted(segments, key=functools.cmp_to_key(_compareSegments)))

def _product(left, right):
  """The segment covering left & right, or None if they do not overlap."""
  interval = left.interval.intersect(right.interval)
  if interval.isEmpty():
    return None
  return Segment(interval, left.value * right.value)

def _iterMerge(left, right):
  """Yields ('left', seg), ('right', seg) or ('both', (lseg, rseg)) steps for
     the ordered merge of two segment sequences. Incomparable pairs are
     resolved in favour of the left side so the walk always advances."""
  left_i = right_i = 0
  while left_i < len(left) or right_i < len(right):
    if right_i == len(right):
      order = -1
    elif left_i == len(left):
      order = 1
    else:
      order = left[left_i].interval.compare(right[right_i].interval)

    if order == 0:
      yield "both", (left[left_i], right[right_i])
      left_i += 1
      right_i += 1
    elif order is None or order < 0:
      yield "left", left[left_i]
      left_i += 1
    else:
      yield "right", right[right_i]
      right_i += 1

def iterProduct(left, right):
  """Yields the segments of the pointwise product of two segment sequences,
     each sorted by Interval.compare and pairwise disjoint. Output is in
     emission order, which is taken as the storage order of the result."""
  pending_left = pending_right = None

  for (step, segs) in _iterMerge(tuple(left), tuple(right)):
    if step == "left":
      if pending_right is not None:
        seg = _product(segs, pending_right)
        if seg is not None:
          yield seg
      pending_left = segs
    elif step == "right":
      if pending_left is not None:
        seg = _product(pending_left, segs)
        if seg is not None:
          yield seg
      pending_right = segs
    else:
      new_left, new_right = segs
      right_induced = left_induced = None
      if pending_left is not None:
        right_induced = _product(pending_left, new_right)
      if pending_right is not None:
        left_induced = _product(new_left, pending_right)

      # At most one of these is emitted, so a shared boundary point is never
      # covered twice. The right-induced term wins.
      if right_induced is not None:
        yield right_induced
      elif left_induced is not None:
        yield left_induced

      seg = _product(new_left, new_right)
      if seg is not None:
        yield seg
      pending_left, pending_right = new_left, new_right

def multiplySegments(left, right):
  """Returns the product of two step functions' segments as a tuple. Either
     side may be in any order, as Builder leaves it; both are put in interval
     order before the merge."""
  left, right = _ordered(left), _ordered(right)
  product = tuple(iterProduct(left, right))
  log.debug("Multiplied %i x %i segments into %i", len(left), len(right),
            len(product))
  return product
