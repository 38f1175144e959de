# core/sync_engine.py
"""
Session facade over the diff, alignment and scroll-synchronization pieces.

One SyncEngine serves the main window for its whole lifetime. Each call to
`loadDiff` replaces the documents, Diff Result, alignment table, viewport states
and arbitrator wholesale; nothing from the previous comparison survives.
"""

import logging
from typing import Dict, List, Optional

from .alignment import ALL_VIEWS, AlignmentTable, buildAlignmentTable
from .diff_provider import KIND_UNCHANGED, DiffSummary, Segment, computeDiff, summarizeDiff
from .document import Document
from .scroll_arbitrator import POLICY_ARBITRATE, ScrollArbitrator, ViewportApplier, ViewportState

logger: logging.Logger = logging.getLogger(__name__)


class SyncEngine:
	"""
	Holds the current comparison and routes scroll events through the arbitrator.

	Before the first `loadDiff` the engine behaves as if two empty documents were
	compared: every view has zero lines and scroll events are no-ops.
	"""

	def __init__(self: 'SyncEngine', applier: Optional[ViewportApplier] = None, policy: str = POLICY_ARBITRATE) -> None:
		self._applier: Optional[ViewportApplier] = applier
		self._policy: str = policy
		self._documentA: Document = Document.empty()
		self._documentB: Document = Document.empty()
		self._segments: List[Segment] = []
		self._table: AlignmentTable = buildAlignmentTable([])
		self._summary: DiffSummary = summarizeDiff([])
		self._arbitrator: ScrollArbitrator = ScrollArbitrator(self._table, applier, policy)

	# --- Session Lifecycle ---
	def loadDiff(self: 'SyncEngine', documentA: Document, documentB: Document) -> List[Segment]:
		"""
		Compares two documents and rebuilds all derived state.

		Returns:
			List[Segment]: The new Diff Result.

		Raises:
			DiffContractError: If the diff provider produced a malformed result.
		"""
		segments: List[Segment] = computeDiff(documentA, documentB)
		table: AlignmentTable = buildAlignmentTable(segments)
		# Only swap state once everything has been built successfully
		self._documentA = documentA
		self._documentB = documentB
		self._segments = segments
		self._table = table
		self._summary = summarizeDiff(segments)
		self._arbitrator = ScrollArbitrator(table, self._applier, self._policy)
		logger.info(
			f"Compared '{documentA.name}' ({len(documentA)} lines) with '{documentB.name}' ({len(documentB)} lines): "
			f"+{self._summary.insertedLines} -{self._summary.deletedLines} in {self._summary.changeCount} change(s)."
		)
		return segments

	def setPolicy(self: 'SyncEngine', policy: str) -> None:
		""" Switches the arbitration policy; takes effect through a fresh arbitrator for the current diff. """
		self._arbitrator = ScrollArbitrator(self._table, self._applier, policy)
		self._policy = policy

	# --- Accessors ---
	@property
	def documentA(self: 'SyncEngine') -> Document:
		return self._documentA

	@property
	def documentB(self: 'SyncEngine') -> Document:
		return self._documentB

	@property
	def segments(self: 'SyncEngine') -> List[Segment]:
		return list(self._segments)

	@property
	def table(self: 'SyncEngine') -> AlignmentTable:
		return self._table

	@property
	def summary(self: 'SyncEngine') -> DiffSummary:
		return self._summary

	@property
	def arbitrator(self: 'SyncEngine') -> ScrollArbitrator:
		return self._arbitrator

	@property
	def policy(self: 'SyncEngine') -> str:
		return self._policy

	def viewport(self: 'SyncEngine', view: str) -> ViewportState:
		return self._arbitrator.viewport(view)

	def totalLines(self: 'SyncEngine', view: str) -> int:
		return self._table.totalLines(view)

	# --- Scrolling ---
	def handleScroll(self: 'SyncEngine', view: str, firstVisibleLine: int, hoveredView: Optional[str] = None) -> Dict[str, int]:
		return self._arbitrator.handleScroll(view, firstVisibleLine, hoveredView)

	def jumpTo(self: 'SyncEngine', view: str, line: int) -> Dict[str, int]:
		return self._arbitrator.jumpTo(view, line)

	# --- Change Navigation ---
	def changeStarts(self: 'SyncEngine', view: str) -> List[int]:
		"""
		First line, in `view`, of every changed region.
		A deletion directly followed by an insertion is one region.
		"""
		if view not in ALL_VIEWS:
			raise ValueError(f"Unknown view: '{view}'")
		starts: List[int] = []
		previousKind: str = KIND_UNCHANGED
		for anchor in self._table.anchors:
			if anchor.kind != KIND_UNCHANGED and previousKind == KIND_UNCHANGED and anchor.lineCount > 0:
				start: int = min(anchor.start(view), max(self._table.totalLines(view) - 1, 0))
				if not starts or starts[-1] != start:
					starts.append(start)
			previousKind = anchor.kind
		return starts

	def navigateToChange(self: 'SyncEngine', view: str, currentLine: Optional[int] = None, forward: bool = True) -> Dict[str, int]:
		"""
		Jumps to the next (or previous) changed region after (or before) `currentLine`,
		wrapping around at either end.

		Without `currentLine` the engine's own first visible line of `view` is used. It keeps
		the line a jump targeted even when the widget cannot scroll that far.

		Returns:
			Dict[str, int]: Positions applied to the three views, or an empty dict if there are no changes.
		"""
		starts: List[int] = self.changeStarts(view)
		if not starts:
			logger.debug("No changes to navigate to.")
			return {}
		if currentLine is None:
			currentLine = self.viewport(view).firstVisibleLine
		if forward:
			later: List[int] = [line for line in starts if line > currentLine]
			target: int = later[0] if later else starts[0]
		else:
			earlier: List[int] = [line for line in starts if line < currentLine]
			target = earlier[-1] if earlier else starts[-1]
		logger.debug(f"Navigating {'forward' if forward else 'backward'} in '{view}' from line {currentLine} to change at {target}.")
		return self.jumpTo(view, target)
