# core/translator.py
"""
Viewport-offset translation between the original, modified and unified views.

Given the first visible line of one view, finds the semantically corresponding
first visible line of the other two using the alignment table. Positions are
best-effort UI state, so every input is clamped and every output is defined.
"""

import logging
from typing import Dict

from .alignment import ALL_VIEWS, AlignmentTable, Anchor

logger: logging.Logger = logging.getLogger(__name__)


def clampLine(line: int, totalLines: int) -> int:
	""" Clamps a line index into [0, totalLines - 1]; an empty view always yields 0. """
	if totalLines <= 0:
		return 0
	return max(0, min(line, totalLines - 1))


def _mapIntoView(anchor: Anchor, delta: int, targetView: str, targetTotal: int) -> int:
	start: int = anchor.start(targetView)
	length: int = anchor.length(targetView)
	if length > 0:
		return clampLine(start + min(delta, length - 1), targetTotal)
	# Segment is invisible in the target view: land on the line right after it would have been
	return clampLine(start, targetTotal)


def translate(table: AlignmentTable, sourceView: str, sourceFirstVisibleLine: int) -> Dict[str, int]:
	"""
	Translates a first-visible line in one view into the other two views.

	Args:
		table (AlignmentTable): Alignment table of the current Diff Result.
		sourceView (str): The view being scrolled (VIEW_ORIGINAL, VIEW_MODIFIED or VIEW_UNIFIED).
		sourceFirstVisibleLine (int): First visible line of the source view. Out-of-range
									  values are clamped before translation.

	Returns:
		Dict[str, int]: Target view -> first visible line, for the two views other than sourceView.
	"""
	if sourceView not in ALL_VIEWS:
		raise ValueError(f"Unknown view: '{sourceView}'")
	targetViews = [view for view in ALL_VIEWS if view != sourceView]

	sourceTotal: int = table.totalLines(sourceView)
	if sourceTotal == 0:
		logger.debug(f"Source view '{sourceView}' is empty; translating to line 0 everywhere.")
		return {view: 0 for view in targetViews}

	line: int = clampLine(sourceFirstVisibleLine, sourceTotal)
	if line != sourceFirstVisibleLine:
		logger.debug(f"Clamped '{sourceView}' line {sourceFirstVisibleLine} to {line} (total {sourceTotal}).")

	anchor = table.findAnchor(sourceView, line)
	# Cannot be None: line is within [0, sourceTotal) and the view is non-empty
	delta: int = line - anchor.start(sourceView)
	return {view: _mapIntoView(anchor, delta, view, table.totalLines(view)) for view in targetViews}
