# core/alignment.py
"""
Alignment table construction.

Sweeps a Diff Result once and records, for every segment, an anchor holding the
number of original, modified and unified lines consumed before that segment.
The resulting table maps line positions between the three views and is the
only structure the translator and scroll arbitrator read.
"""

import bisect
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .diff_provider import KIND_DELETED, KIND_INSERTED, KIND_UNCHANGED, SEGMENT_KINDS, Segment
from .exceptions import DiffContractError

logger: logging.Logger = logging.getLogger(__name__)

# --- View Identifiers ---
VIEW_ORIGINAL: str = 'original' # Document A
VIEW_MODIFIED: str = 'modified' # Document B
VIEW_UNIFIED: str = 'unified' # Every segment, in diff order
ALL_VIEWS: Tuple[str, ...] = (VIEW_ORIGINAL, VIEW_MODIFIED, VIEW_UNIFIED)


@dataclass(frozen=True)
class Anchor:
	"""
	Cumulative line counts at the start of one segment.

	Attributes:
		originalStart (int): Original-view lines consumed before the segment.
		modifiedStart (int): Modified-view lines consumed before the segment.
		unifiedStart (int): Unified-view lines consumed before the segment.
		lineCount (int): Number of lines in the segment (0 only for the degenerate anchor).
		kind (str): Segment kind tag.
	"""
	originalStart: int
	modifiedStart: int
	unifiedStart: int
	lineCount: int
	kind: str

	def start(self: 'Anchor', view: str) -> int:
		if view == VIEW_ORIGINAL:
			return self.originalStart
		if view == VIEW_MODIFIED:
			return self.modifiedStart
		if view == VIEW_UNIFIED:
			return self.unifiedStart
		raise ValueError(f"Unknown view: '{view}'")

	def length(self: 'Anchor', view: str) -> int:
		""" Number of lines this segment occupies in the given view (0 if invisible there). """
		if view == VIEW_ORIGINAL and self.kind == KIND_INSERTED:
			return 0
		if view == VIEW_MODIFIED and self.kind == KIND_DELETED:
			return 0
		if view not in ALL_VIEWS:
			raise ValueError(f"Unknown view: '{view}'")
		return self.lineCount

	def lineRange(self: 'Anchor', view: str) -> range:
		start: int = self.start(view)
		return range(start, start + self.length(view))


class AlignmentTable:
	"""
	Read-only list of anchors plus the per-view totals they imply.

	Anchors are non-decreasing on all three counters. For each view the table also
	keeps the start lines of the anchors visible in that view, so the anchor
	containing a given line is found by binary search.
	"""

	def __init__(self: 'AlignmentTable', anchors: Sequence[Anchor], totals: Dict[str, int]) -> None:
		self._anchors: Tuple[Anchor, ...] = tuple(anchors)
		self._totals: Dict[str, int] = dict(totals)
		self._visibleStarts: Dict[str, List[int]] = {}
		self._visibleIndices: Dict[str, List[int]] = {}
		for view in ALL_VIEWS:
			indices: List[int] = [i for i, anchor in enumerate(self._anchors) if anchor.length(view) > 0]
			self._visibleIndices[view] = indices
			self._visibleStarts[view] = [self._anchors[i].start(view) for i in indices]

	@property
	def anchors(self: 'AlignmentTable') -> Tuple[Anchor, ...]:
		return self._anchors

	def __len__(self: 'AlignmentTable') -> int:
		return len(self._anchors)

	def totalLines(self: 'AlignmentTable', view: str) -> int:
		if view not in self._totals:
			raise ValueError(f"Unknown view: '{view}'")
		return self._totals[view]

	def findAnchorIndex(self: 'AlignmentTable', view: str, line: int) -> Optional[int]:
		"""
		Returns the index of the anchor whose range in `view` contains `line`,
		or None if the line lies outside the view.
		"""
		if line < 0 or line >= self.totalLines(view):
			return None
		starts: List[int] = self._visibleStarts[view]
		position: int = bisect.bisect_right(starts, line) - 1
		return self._visibleIndices[view][position]

	def findAnchor(self: 'AlignmentTable', view: str, line: int) -> Optional[Anchor]:
		index: Optional[int] = self.findAnchorIndex(view, line)
		return self._anchors[index] if index is not None else None

	def __repr__(self: 'AlignmentTable') -> str:
		return f"AlignmentTable(anchors={len(self._anchors)}, totals={self._totals})"


def _validateSegment(index: int, segment: Segment, previous: Optional[Segment]) -> None:
	if segment.kind not in SEGMENT_KINDS:
		raise DiffContractError(f"Segment {index} has unknown kind '{segment.kind}'.")
	if segment.lineCount <= 0:
		raise DiffContractError(f"Segment {index} ({segment.kind}) is empty; zero-length segments are not allowed.")
	if previous is not None and previous.kind == segment.kind:
		raise DiffContractError(f"Segments {index - 1} and {index} are both '{segment.kind}'; segments must be maximal.")


def buildAlignmentTable(segments: Sequence[Segment]) -> AlignmentTable:
	"""
	Builds the alignment table for a Diff Result in one linear pass.

	Args:
		segments (Sequence[Segment]): The ordered Diff Result.

	Returns:
		AlignmentTable: One anchor per segment, or a single degenerate anchor
						at (0, 0, 0) for an empty Diff Result.

	Raises:
		DiffContractError: If any segment is empty, of unknown kind, or not maximal.
	"""
	originalCount: int = 0
	modifiedCount: int = 0
	unifiedCount: int = 0
	anchors: List[Anchor] = []
	previous: Optional[Segment] = None

	for index, segment in enumerate(segments):
		try:
			_validateSegment(index, segment, previous)
		except DiffContractError as e:
			logger.error(f"Rejecting malformed diff result: {e}")
			raise
		anchors.append(Anchor(originalCount, modifiedCount, unifiedCount, segment.lineCount, segment.kind))
		if segment.kind != KIND_INSERTED:
			originalCount += segment.lineCount
		if segment.kind != KIND_DELETED:
			modifiedCount += segment.lineCount
		unifiedCount += segment.lineCount
		previous = segment

	if not anchors:
		anchors.append(Anchor(0, 0, 0, 0, KIND_UNCHANGED))

	table = AlignmentTable(anchors, {
		VIEW_ORIGINAL: originalCount,
		VIEW_MODIFIED: modifiedCount,
		VIEW_UNIFIED: unifiedCount,
	})
	logger.debug(f"Built {table!r}")
	return table
