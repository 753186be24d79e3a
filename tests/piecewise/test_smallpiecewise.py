import itertools
import unittest

import mock

from piecewise.interval import Interval
from piecewise.segment import Segment
from piecewise.smallpiecewise import SmallPiecewise, Builder, BuilderConsumed
from piecewise.smallpiecewise import Error

def _build(*segments):
  """Overlays segments in order and builds."""
  return Builder().overlayAll(segments).build()

def _sample(function, points):
  return [function.valueAt(p) for p in points]

POINTS = [-1000, 0, 1, 4.5, 5, 5.5, 10, 15, 179, 180, 190, 199.9, 200, 210,
          229, 230, 231, 1000]

class test_SmallPiecewise(unittest.TestCase):
  def test_value_at(self):
    """Lookups return the covering segment's value, None in the gaps."""
    function = SmallPiecewise.fromSortedSegments([
        Segment(Interval.unboundedOpenRight(200), 1.0),
        Segment(Interval.unboundedClosedLeft(230), 2.0)])
    self.assertEqual(function.valueAt(1), 1.0)
    self.assertIsNone(function.valueAt(200))
    self.assertIsNone(function.valueAt(215))
    self.assertEqual(function.valueAt(230), 2.0)

  def test_empty(self):
    function = SmallPiecewise()
    self.assertEqual(len(function), 0)
    self.assertEqual(function.segments, ())
    for point in POINTS:
      self.assertIsNone(function.valueAt(point))
    self.assertEqual(function, Builder().build())
    self.assertEqual(str(function), "")

  def test_container(self):
    segs = [Segment(Interval.closed(0, 1), "a"),
            Segment(Interval.leftHalfOpen(1, 2), "b")]
    function = SmallPiecewise.fromSortedSegments(iter(segs))
    self.assertEqual(len(function), 2)
    self.assertEqual(list(function), segs)
    self.assertEqual(function.segments, tuple(segs))
    self.assertEqual(str(function), "[0, 1]: a\n(1, 2]: b")
    self.assertNotEqual(function, SmallPiecewise.fromSortedSegments(segs[:1]))
    # Order matters!
    self.assertNotEqual(function,
                        SmallPiecewise.fromSortedSegments(reversed(segs)))

  def test_fast_path_trusts_caller(self):
    """The fast path never inspects intervals, and overlapping input is
       answered from the first match rather than rejected."""
    segs = [Segment(Interval.closed(0, 10), 1), Segment(Interval.closed(5, 15), 2)]
    with mock.patch.object(Interval, "intersect") as intersect, \
         mock.patch.object(Interval, "compare") as compare:
      function = SmallPiecewise.fromSortedSegments(segs)
      self.assertFalse(intersect.called)
      self.assertFalse(compare.called)
    self.assertEqual(function.valueAt(7), 1)
    self.assertEqual(function.valueAt(12), 2)

  def test_scale(self):
    function = _build(Segment(Interval.unboundedOpenRight(200), 1.0),
                      Segment(Interval.unboundedClosedLeft(230), 2.0))
    for factor in [0, -1, 0.5, 3]:
      scaled = function.scale(factor)
      self.assertEqual(scaled, function * factor)
      for point in POINTS:
        value = function.valueAt(point)
        if value is None:
          self.assertIsNone(scaled.valueAt(point))
        else:
          self.assertEqual(scaled.valueAt(point), value * factor)
    self.assertEqual(len(SmallPiecewise().scale(2)), 0)

  def test_scalar_on_either_side(self):
    function = _build(Segment(Interval.closed(0, 1), 3),
                      Segment(Interval.unboundedOpenLeft(1), -2))
    self.assertEqual(2 * function, function * 2)
    self.assertEqual((2 * function).valueAt(5), -4)
    self.assertIsNone((2 * function).valueAt(-1))

class test_Builder(unittest.TestCase):
  def test_overlay_order(self):
    """Later segments win where they overlap earlier ones."""
    function = _build(Segment(Interval.unbounded(), 5.0),
                      Segment(Interval.unboundedClosedLeft(230), 2.0),
                      Segment(Interval.unboundedOpenRight(200), 1.0))
    self.assertEqual(function.valueAt(1), 1.0)
    self.assertEqual(function.valueAt(210), 5.0)
    self.assertEqual(function.valueAt(230), 2.0)
    self.assertEqual(function.valueAt(231), 2.0)

    # Clipped survivors first, in their old order, then the newcomer.
    self.assertEqual(function.segments, (
        Segment(Interval.rightHalfOpen(200, 230), 5.0),
        Segment(Interval.unboundedClosedLeft(230), 2.0),
        Segment(Interval.unboundedOpenRight(200), 1.0)))

  def test_overlay_empty_builder(self):
    seg = Segment(Interval.closed(1, 2), 3)
    function = _build(seg)
    self.assertEqual(function.segments, (seg,))
    self.assertIs(function.segments[0], seg)

  def test_idempotent(self):
    segs = [Segment(Interval.closed(0, 10), 1),
            Segment(Interval.open(5, 20), 2),
            Segment(Interval.singleton(7), 3)]
    once = _build(*segs)
    for seg in segs:
      self.assertEqual(_build(*(segs + [seg, seg])), _build(*(segs + [seg])))
    self.assertEqual(_build(*(segs + [segs[-1]])), once)

  def test_newest_wins(self):
    """For every order of overlapping segments, each point takes the value of
       the last segment containing it."""
    segs = [Segment(Interval.closed(0, 10), "a"),
            Segment(Interval.rightHalfOpen(5, 15), "b"),
            Segment(Interval.unboundedClosedRight(5), "c"),
            Segment(Interval.singleton(10), "d"),
            Segment(Interval.unboundedOpenLeft(180), "e")]
    for order in itertools.permutations(segs):
      function = _build(*order)
      for point in POINTS:
        expected = None
        for seg in order:
          if seg.interval.contains(point):
            expected = seg.value
        self.assertEqual(function.valueAt(point), expected, (order, point))

  def test_disjoint_after_overlay(self):
    builder = Builder()
    builder.overlay(Segment(Interval.closed(0, 10), 1))
    builder.overlay(Segment(Interval.closed(2, 3), 2))
    builder.overlay(Segment(Interval.open(3, 8), 3))
    self.assertEqual(len(builder), 4)
    function = builder.build()
    for (a, b) in itertools.combinations(function.segments, 2):
      self.assertTrue(a.interval.intersect(b.interval).isEmpty())
    self.assertEqual(_sample(function, [0, 2, 3, 3.5, 8, 10]),
                     [1, 2, 2, 3, 1, 1])

  def test_overlay_uses_complement_once(self):
    builder = Builder()
    builder.overlay(Segment(Interval.closed(0, 10), 1))
    seg = Segment(Interval.closed(2, 3), 2)
    original = Interval.complement
    with mock.patch.object(Interval, "complement", autospec=True,
                           side_effect=original) as complement:
      builder.overlay(seg)
    complement.assert_called_once_with(seg.interval)

  def test_overlay_cost_is_linear(self):
    """Each overlay intersects a bounded number of times per existing
       segment, however many segments the builder already holds."""
    original = Interval.intersect
    for size in [10, 40, 160]:
      builder = Builder().overlayAll(
          Segment(Interval.rightHalfOpen(i, i + 1), i) for i in range(size))
      with mock.patch.object(Interval, "intersect", autospec=True,
                             side_effect=original) as intersect:
        builder.overlay(Segment(Interval.rightHalfOpen(size, size + 1), size))
      self.assertLessEqual(intersect.call_count, 3 * size)
      self.assertEqual(len(builder), size + 1)

  def test_empty_segment(self):
    """An empty-interval segment covers nothing and clips nothing."""
    function = _build(Segment(Interval.closed(0, 10), 1),
                      Segment(Interval(), 2))
    self.assertEqual(_sample(function, [0, 5, 10, 11]), [1, 1, 1, None])

  def test_consumed(self):
    builder = Builder().overlay(Segment(Interval.unbounded(), 1))
    function = builder.build()
    self.assertEqual(function.valueAt(0), 1)
    self.assertEqual(len(builder), 0)
    self.assertRaises(BuilderConsumed, builder.build)
    self.assertRaises(BuilderConsumed, builder.overlay,
                      Segment(Interval.unbounded(), 2))
    self.assertRaises(Error, builder.overlayAll, [])
    # The built function is unaffected.
    self.assertEqual(function.valueAt(0), 1)

  def test_build_logs(self):
    builder = Builder().overlayAll([Segment(Interval.singleton(1), 1),
                                    Segment(Interval.singleton(2), 2)])
    with self.assertLogs("piecewise.smallpiecewise", level="DEBUG") as logs:
      builder.build()
    self.assertIn("2 segments", logs.output[0])

if __name__ == '__main__':
  unittest.main()
