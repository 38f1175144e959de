# core/diff_provider.py
"""
Line-level diff between two documents.

Produces the ordered Diff Result consumed by the alignment engine: a list of
maximal segments tagged unchanged / inserted / deleted. The comparison itself is
delegated to difflib.SequenceMatcher; this module only converts its opcodes into
segments and offers a couple of helpers over the result.
"""

import difflib
import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .document import Document

logger: logging.Logger = logging.getLogger(__name__)

# --- Segment Kinds ---
KIND_UNCHANGED: str = 'unchanged'
KIND_INSERTED: str = 'inserted' # Present only in the modified document
KIND_DELETED: str = 'deleted' # Present only in the original document
SEGMENT_KINDS: Tuple[str, ...] = (KIND_UNCHANGED, KIND_INSERTED, KIND_DELETED)

# Which side a reconstruction targets
SIDE_ORIGINAL: str = 'original'
SIDE_MODIFIED: str = 'modified'


@dataclass(frozen=True)
class Segment:
	"""
	A maximal run of lines sharing one diff classification.

	Attributes:
		kind (str): One of KIND_UNCHANGED, KIND_INSERTED, KIND_DELETED.
		lines (Tuple[str, ...]): The lines of the run, in order.
	"""
	kind: str
	lines: Tuple[str, ...]

	@property
	def lineCount(self: 'Segment') -> int:
		return len(self.lines)

	@property
	def inOriginal(self: 'Segment') -> bool:
		return self.kind != KIND_INSERTED

	@property
	def inModified(self: 'Segment') -> bool:
		return self.kind != KIND_DELETED


@dataclass(frozen=True)
class DiffSummary:
	"""Line and change counts of a diff result, used for the status bar."""
	insertedLines: int
	deletedLines: int
	unchangedLines: int
	changeCount: int # Number of contiguous changed regions (a deletion directly followed by an insertion counts once)

	@property
	def identical(self: 'DiffSummary') -> bool:
		return self.changeCount == 0


def _appendSegment(segments: List[Segment], kind: str, lines: Sequence[str]) -> None:
	""" Appends lines as a segment, merging into the previous segment when kinds match. """
	if not lines:
		return
	if segments and segments[-1].kind == kind:
		previous: Segment = segments.pop()
		segments.append(Segment(kind, previous.lines + tuple(lines)))
	else:
		segments.append(Segment(kind, tuple(lines)))


def computeDiff(documentA: Document, documentB: Document) -> List[Segment]:
	"""
	Computes the line-level Diff Result between two documents.

	A 'replace' opcode is emitted as a deleted segment followed by an inserted one,
	so the unified view shows removed lines before their replacements.

	Args:
		documentA (Document): The original document.
		documentB (Document): The modified document.

	Returns:
		List[Segment]: Ordered, maximal segments. Empty only if both documents are empty.
	"""
	linesA: List[str] = list(documentA.lines)
	linesB: List[str] = list(documentB.lines)
	matcher = difflib.SequenceMatcher(None, linesA, linesB, autojunk=False)

	segments: List[Segment] = []
	for tag, i1, i2, j1, j2 in matcher.get_opcodes():
		if tag == 'equal':
			_appendSegment(segments, KIND_UNCHANGED, linesA[i1:i2])
		elif tag == 'delete':
			_appendSegment(segments, KIND_DELETED, linesA[i1:i2])
		elif tag == 'insert':
			_appendSegment(segments, KIND_INSERTED, linesB[j1:j2])
		elif tag == 'replace':
			_appendSegment(segments, KIND_DELETED, linesA[i1:i2])
			_appendSegment(segments, KIND_INSERTED, linesB[j1:j2])
		else:
			# SequenceMatcher only documents the four tags above
			raise ValueError(f"Unexpected difflib opcode tag: {tag}")

	logger.debug(f"Diff computed for '{documentA.name}' vs '{documentB.name}': {len(segments)} segment(s).")
	return segments


def reconstructDocument(segments: Sequence[Segment], side: str) -> List[str]:
	"""
	Rebuilds the lines of one side of the comparison from a Diff Result.

	Args:
		segments (Sequence[Segment]): The Diff Result.
		side (str): SIDE_ORIGINAL or SIDE_MODIFIED.

	Returns:
		List[str]: The lines of the requested document.
	"""
	if side == SIDE_ORIGINAL:
		return [line for segment in segments if segment.inOriginal for line in segment.lines]
	if side == SIDE_MODIFIED:
		return [line for segment in segments if segment.inModified for line in segment.lines]
	raise ValueError(f"Unknown document side: '{side}'")


def summarizeDiff(segments: Sequence[Segment]) -> DiffSummary:
	inserted: int = 0
	deleted: int = 0
	unchanged: int = 0
	changes: int = 0
	previousWasChange: bool = False
	for segment in segments:
		if segment.kind == KIND_UNCHANGED:
			unchanged += segment.lineCount
			previousWasChange = False
			continue
		if segment.kind == KIND_INSERTED:
			inserted += segment.lineCount
		else:
			deleted += segment.lineCount
		if not previousWasChange:
			changes += 1
		previousWasChange = True
	return DiffSummary(insertedLines=inserted, deletedLines=deleted, unchangedLines=unchanged, changeCount=changes)
