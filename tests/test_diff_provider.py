# --- START: tests/test_diff_provider.py ---
import unittest
from unittest.mock import patch, MagicMock
from typing import List

# Ensure imports work correctly assuming tests are run from the project root
import sys
if '.' not in sys.path:
	sys.path.append('.')

from core.document import Document
from core.diff_provider import (
	KIND_UNCHANGED, KIND_INSERTED, KIND_DELETED, SIDE_ORIGINAL, SIDE_MODIFIED,
	Segment, computeDiff, reconstructDocument, summarizeDiff
)


class TestComputeDiff(unittest.TestCase):
	"""
	Unit tests for computeDiff and the helpers over its result.
	"""

	def setUp(self: 'TestComputeDiff') -> None:
		self.patcher = patch('core.diff_provider.logger', MagicMock())
		self.mock_logger = self.patcher.start()

	def tearDown(self: 'TestComputeDiff') -> None:
		self.patcher.stop()

	def _diff(self: 'TestComputeDiff', linesA: List[str], linesB: List[str]) -> List[Segment]:
		return computeDiff(Document("a.txt", tuple(linesA)), Document("b.txt", tuple(linesB)))

	def test_replaceBecomesDeletedThenInserted(self: 'TestComputeDiff') -> None:
		"""A changed middle line is a deletion followed by an insertion."""
		segments = self._diff(["a", "b", "c"], ["a", "X", "c"])
		self.assertEqual(segments, [
			Segment(KIND_UNCHANGED, ("a",)),
			Segment(KIND_DELETED, ("b",)),
			Segment(KIND_INSERTED, ("X",)),
			Segment(KIND_UNCHANGED, ("c",)),
		])

	def test_identicalDocuments_singleUnchangedSegment(self: 'TestComputeDiff') -> None:
		lines = ["one", "two", "three", "four"]
		segments = self._diff(lines, list(lines))
		self.assertEqual(segments, [Segment(KIND_UNCHANGED, tuple(lines))])

	def test_bothEmpty_noSegments(self: 'TestComputeDiff') -> None:
		self.assertEqual(self._diff([], []), [])

	def test_emptyOriginal_allInserted(self: 'TestComputeDiff') -> None:
		self.assertEqual(self._diff([], ["x", "y"]), [Segment(KIND_INSERTED, ("x", "y"))])

	def test_emptyModified_allDeleted(self: 'TestComputeDiff') -> None:
		self.assertEqual(self._diff(["x", "y"], []), [Segment(KIND_DELETED, ("x", "y"))])

	def test_segmentsAreMaximal(self: 'TestComputeDiff') -> None:
		"""No two adjacent segments share a kind, whatever opcodes difflib produced."""
		linesA = ["a", "b", "c", "d", "e", "f", "g"]
		linesB = ["a", "B", "C", "x", "y", "e", "G", "h", "i"]
		segments = self._diff(linesA, linesB)
		for previous, current in zip(segments, segments[1:]):
			self.assertNotEqual(previous.kind, current.kind)
		for segment in segments:
			self.assertGreater(segment.lineCount, 0)

	def test_reconstruction(self: 'TestComputeDiff') -> None:
		"""Non-inserted segments rebuild A; non-deleted segments rebuild B."""
		cases = [
			(["a", "b", "c"], ["a", "X", "c"]),
			(["a", "b", "c", "d", "e"], ["a", "X", "c", "d", "e", "f"]),
			([], ["only", "new"]),
			(["only", "old"], []),
			(["same"] * 3, ["same"] * 5),
			(["def f():", "    return 1", "", "x = f()"], ["def f(a):", "    return a", "", "x = f(2)", "print(x)"]),
		]
		for linesA, linesB in cases:
			with self.subTest(linesA=linesA, linesB=linesB):
				segments = self._diff(linesA, linesB)
				self.assertEqual(reconstructDocument(segments, SIDE_ORIGINAL), linesA)
				self.assertEqual(reconstructDocument(segments, SIDE_MODIFIED), linesB)

	def test_reconstructDocument_unknownSide(self: 'TestComputeDiff') -> None:
		with self.assertRaises(ValueError):
			reconstructDocument([], 'sideways')

	def test_deterministic(self: 'TestComputeDiff') -> None:
		linesA = ["a", "b", "c", "b", "a"]
		linesB = ["b", "a", "c", "a", "b"]
		self.assertEqual(self._diff(linesA, linesB), self._diff(linesA, linesB))


class TestSummarizeDiff(unittest.TestCase):

	def test_summary_countsLinesAndRegions(self: 'TestSummarizeDiff') -> None:
		segments = [
			Segment(KIND_UNCHANGED, ("a",)),
			Segment(KIND_DELETED, ("b",)),
			Segment(KIND_INSERTED, ("X",)),
			Segment(KIND_UNCHANGED, ("c", "d", "e")),
			Segment(KIND_INSERTED, ("f",)),
		]
		summary = summarizeDiff(segments)
		self.assertEqual(summary.insertedLines, 2)
		self.assertEqual(summary.deletedLines, 1)
		self.assertEqual(summary.unchangedLines, 4)
		# Deleted+inserted pair is one region, trailing insertion is another
		self.assertEqual(summary.changeCount, 2)
		self.assertFalse(summary.identical)

	def test_summary_empty(self: 'TestSummarizeDiff') -> None:
		summary = summarizeDiff([])
		self.assertTrue(summary.identical)
		self.assertEqual((summary.insertedLines, summary.deletedLines, summary.unchangedLines), (0, 0, 0))


if __name__ == '__main__':
	unittest.main()
# --- END: tests/test_diff_provider.py ---
