import unittest
from unittest.mock import patch, MagicMock

import sys
if '.' not in sys.path:
	sys.path.append('.')

from core.alignment import VIEW_ORIGINAL, VIEW_MODIFIED, VIEW_UNIFIED, ALL_VIEWS, buildAlignmentTable
from core.diff_provider import KIND_UNCHANGED, KIND_INSERTED, KIND_DELETED, Segment, computeDiff
from core.document import Document
from core.translator import clampLine, translate


def _tableFor(linesA, linesB):
	return buildAlignmentTable(computeDiff(Document("a", tuple(linesA)), Document("b", tuple(linesB))))


class TestTranslate(unittest.TestCase):
	"""
	Unit tests for viewport-offset translation between the three views.
	"""

	def setUp(self: 'TestTranslate') -> None:
		self.patcher = patch('core.translator.logger', MagicMock())
		self.mock_logger = self.patcher.start()
		self.table = buildAlignmentTable([
			Segment(KIND_UNCHANGED, ("a",)),
			Segment(KIND_DELETED, ("b",)),
			Segment(KIND_INSERTED, ("X",)),
			Segment(KIND_UNCHANGED, ("c",)),
		])

	def tearDown(self: 'TestTranslate') -> None:
		self.patcher.stop()

	def test_unifiedDeletedRow(self: 'TestTranslate') -> None:
		"""The deleted row maps to its own line in A and to the insertion point in B."""
		self.assertEqual(translate(self.table, VIEW_UNIFIED, 1), {VIEW_ORIGINAL: 1, VIEW_MODIFIED: 1})

	def test_unifiedInsertedRow(self: 'TestTranslate') -> None:
		self.assertEqual(translate(self.table, VIEW_UNIFIED, 2), {VIEW_ORIGINAL: 2, VIEW_MODIFIED: 1})

	def test_fromOriginal(self: 'TestTranslate') -> None:
		self.assertEqual(translate(self.table, VIEW_ORIGINAL, 0), {VIEW_MODIFIED: 0, VIEW_UNIFIED: 0})
		self.assertEqual(translate(self.table, VIEW_ORIGINAL, 1), {VIEW_MODIFIED: 1, VIEW_UNIFIED: 1})
		self.assertEqual(translate(self.table, VIEW_ORIGINAL, 2), {VIEW_MODIFIED: 2, VIEW_UNIFIED: 3})

	def test_fromModified(self: 'TestTranslate') -> None:
		self.assertEqual(translate(self.table, VIEW_MODIFIED, 1), {VIEW_ORIGINAL: 2, VIEW_UNIFIED: 2})
		self.assertEqual(translate(self.table, VIEW_MODIFIED, 2), {VIEW_ORIGINAL: 2, VIEW_UNIFIED: 3})

	def test_outOfRangeSourceIsClamped(self: 'TestTranslate') -> None:
		self.assertEqual(translate(self.table, VIEW_ORIGINAL, 99), {VIEW_MODIFIED: 2, VIEW_UNIFIED: 3})
		self.assertEqual(translate(self.table, VIEW_ORIGINAL, -5), {VIEW_MODIFIED: 0, VIEW_UNIFIED: 0})

	def test_deltaWithinLongerSegment(self: 'TestTranslate') -> None:
		"""Three deleted lines replaced by one: every deleted row lands on the single replacement."""
		table = _tableFor(["a", "b1", "b2", "b3", "c"], ["a", "X", "c"])
		self.assertEqual(translate(table, VIEW_ORIGINAL, 2), {VIEW_MODIFIED: 1, VIEW_UNIFIED: 2})
		self.assertEqual(translate(table, VIEW_UNIFIED, 3), {VIEW_ORIGINAL: 3, VIEW_MODIFIED: 1})
		# 'X' in B is the inserted row after the three deleted ones in the unified view
		self.assertEqual(translate(table, VIEW_MODIFIED, 1), {VIEW_ORIGINAL: 4, VIEW_UNIFIED: 4})

	def test_trailingDeletion_clampsIntoModified(self: 'TestTranslate') -> None:
		table = _tableFor(["a", "b", "c"], ["a"])
		self.assertEqual(translate(table, VIEW_UNIFIED, 2), {VIEW_ORIGINAL: 2, VIEW_MODIFIED: 0})

	def test_identicalDocuments_identity(self: 'TestTranslate') -> None:
		lines = [f"line {i}" for i in range(12)]
		table = _tableFor(lines, list(lines))
		for source in ALL_VIEWS:
			for line in range(len(lines)):
				targets = translate(table, source, line)
				self.assertEqual(set(targets.values()), {line}, f"{source} line {line}")

	def test_emptyOriginal(self: 'TestTranslate') -> None:
		table = _tableFor([], ["x", "y"])
		self.assertEqual(translate(table, VIEW_MODIFIED, 1), {VIEW_ORIGINAL: 0, VIEW_UNIFIED: 1})
		self.assertEqual(translate(table, VIEW_UNIFIED, 1), {VIEW_ORIGINAL: 0, VIEW_MODIFIED: 1})
		# Empty source view never fails
		self.assertEqual(translate(table, VIEW_ORIGINAL, 5), {VIEW_MODIFIED: 0, VIEW_UNIFIED: 0})

	def test_bothEmpty(self: 'TestTranslate') -> None:
		table = buildAlignmentTable([])
		for source in ALL_VIEWS:
			self.assertEqual(set(translate(table, source, 3).values()), {0})

	def test_monotonic(self: 'TestTranslate') -> None:
		"""Scrolling any source forward never moves a target backward."""
		linesA = ["h", "a", "b", "c", "d", "e", "f", "g", "i", "j", "k"]
		linesB = ["a", "B", "C", "x", "d", "e", "F", "G", "H", "I", "j", "k", "l", "m"]
		table = _tableFor(linesA, linesB)
		for source in ALL_VIEWS:
			previous = None
			for line in range(-2, table.totalLines(source) + 2):
				targets = translate(table, source, line)
				if previous is not None:
					for view, value in targets.items():
						self.assertGreaterEqual(value, previous[view], f"{source} line {line} -> {view}")
				for view, value in targets.items():
					self.assertGreaterEqual(value, 0)
					self.assertLess(value, max(table.totalLines(view), 1))
				previous = targets

	def test_unknownSourceView(self: 'TestTranslate') -> None:
		with self.assertRaises(ValueError):
			translate(self.table, 'sideways', 0)


class TestClampLine(unittest.TestCase):

	def test_clamp(self: 'TestClampLine') -> None:
		self.assertEqual(clampLine(-1, 10), 0)
		self.assertEqual(clampLine(4, 10), 4)
		self.assertEqual(clampLine(10, 10), 9)
		self.assertEqual(clampLine(7, 0), 0)


if __name__ == '__main__':
	unittest.main()
