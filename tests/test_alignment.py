import unittest
from unittest.mock import patch, MagicMock

import sys
if '.' not in sys.path:
	sys.path.append('.')

from core.alignment import (
	VIEW_ORIGINAL, VIEW_MODIFIED, VIEW_UNIFIED, ALL_VIEWS,
	Anchor, buildAlignmentTable
)
from core.diff_provider import KIND_UNCHANGED, KIND_INSERTED, KIND_DELETED, Segment, computeDiff
from core.document import Document
from core.exceptions import DiffContractError

# The a/b/c -> a/X/c comparison used across the engine tests
SCENARIO_SEGMENTS = [
	Segment(KIND_UNCHANGED, ("a",)),
	Segment(KIND_DELETED, ("b",)),
	Segment(KIND_INSERTED, ("X",)),
	Segment(KIND_UNCHANGED, ("c",)),
]


class TestBuildAlignmentTable(unittest.TestCase):
	"""
	Unit tests for the alignment table builder and anchor lookup.
	"""

	def setUp(self: 'TestBuildAlignmentTable') -> None:
		self.patcher = patch('core.alignment.logger', MagicMock())
		self.mock_logger = self.patcher.start()

	def tearDown(self: 'TestBuildAlignmentTable') -> None:
		self.patcher.stop()

	def test_scenarioAnchors(self: 'TestBuildAlignmentTable') -> None:
		table = buildAlignmentTable(SCENARIO_SEGMENTS)
		self.assertEqual(list(table.anchors), [
			Anchor(0, 0, 0, 1, KIND_UNCHANGED),
			Anchor(1, 1, 1, 1, KIND_DELETED),
			Anchor(2, 1, 2, 1, KIND_INSERTED),
			Anchor(2, 2, 3, 1, KIND_UNCHANGED),
		])
		self.assertEqual(table.totalLines(VIEW_ORIGINAL), 3)
		self.assertEqual(table.totalLines(VIEW_MODIFIED), 3)
		self.assertEqual(table.totalLines(VIEW_UNIFIED), 4)

	def test_emptyDiff_degenerateAnchor(self: 'TestBuildAlignmentTable') -> None:
		table = buildAlignmentTable([])
		self.assertEqual(len(table), 1)
		anchor = table.anchors[0]
		self.assertEqual((anchor.originalStart, anchor.modifiedStart, anchor.unifiedStart), (0, 0, 0))
		for view in ALL_VIEWS:
			self.assertEqual(table.totalLines(view), 0)
			self.assertIsNone(table.findAnchor(view, 0))

	def test_countersAreMonotonic(self: 'TestBuildAlignmentTable') -> None:
		linesA = ["import os", "", "def a():", "    pass", "", "def b():", "    return 1", "x = 1"]
		linesB = ["import os", "import sys", "", "def a():", "    return 0", "", "def c():", "    return 3", "y = 2", "z = 3"]
		table = buildAlignmentTable(computeDiff(Document("a", tuple(linesA)), Document("b", tuple(linesB))))
		for view in ALL_VIEWS:
			starts = [anchor.start(view) for anchor in table.anchors]
			self.assertEqual(starts, sorted(starts), f"{view} counter decreased")
			last = table.anchors[-1]
			self.assertEqual(last.start(view) + last.length(view), table.totalLines(view))
		self.assertEqual(table.totalLines(VIEW_ORIGINAL), len(linesA))
		self.assertEqual(table.totalLines(VIEW_MODIFIED), len(linesB))

	def test_rangesPerKind(self: 'TestBuildAlignmentTable') -> None:
		table = buildAlignmentTable(SCENARIO_SEGMENTS)
		deleted = table.anchors[1]
		inserted = table.anchors[2]
		self.assertEqual(deleted.lineRange(VIEW_ORIGINAL), range(1, 2))
		self.assertEqual(deleted.lineRange(VIEW_MODIFIED), range(1, 1))
		self.assertEqual(inserted.lineRange(VIEW_ORIGINAL), range(2, 2))
		self.assertEqual(inserted.lineRange(VIEW_MODIFIED), range(1, 2))
		self.assertEqual(inserted.lineRange(VIEW_UNIFIED), range(2, 3))

	def test_findAnchor_skipsSegmentsInvisibleInView(self: 'TestBuildAlignmentTable') -> None:
		table = buildAlignmentTable(SCENARIO_SEGMENTS)
		# Original line 2 is 'c': the inserted anchor also starts at 2 in the original view but is empty there
		self.assertEqual(table.findAnchorIndex(VIEW_ORIGINAL, 2), 3)
		# Modified line 1 is 'X': the deleted anchor also starts at 1 in the modified view but is empty there
		self.assertEqual(table.findAnchorIndex(VIEW_MODIFIED, 1), 2)
		self.assertEqual(table.findAnchorIndex(VIEW_UNIFIED, 1), 1)
		self.assertIsNone(table.findAnchorIndex(VIEW_UNIFIED, 4))
		self.assertIsNone(table.findAnchorIndex(VIEW_ORIGINAL, -1))

	def test_unknownView(self: 'TestBuildAlignmentTable') -> None:
		table = buildAlignmentTable(SCENARIO_SEGMENTS)
		with self.assertRaises(ValueError):
			table.totalLines('sideways')
		with self.assertRaises(ValueError):
			table.anchors[0].start('sideways')

	# --- Contract Violations ---

	def test_zeroLengthSegment_failsFast(self: 'TestBuildAlignmentTable') -> None:
		with self.assertRaisesRegex(DiffContractError, "zero-length"):
			buildAlignmentTable([Segment(KIND_UNCHANGED, ("a",)), Segment(KIND_INSERTED, ())])
		self.mock_logger.error.assert_called()

	def test_unknownKind_failsFast(self: 'TestBuildAlignmentTable') -> None:
		with self.assertRaisesRegex(DiffContractError, "unknown kind"):
			buildAlignmentTable([Segment('moved', ("a",))])

	def test_adjacentSameKind_failsFast(self: 'TestBuildAlignmentTable') -> None:
		with self.assertRaisesRegex(DiffContractError, "maximal"):
			buildAlignmentTable([Segment(KIND_DELETED, ("a",)), Segment(KIND_DELETED, ("b",))])


if __name__ == '__main__':
	unittest.main()
