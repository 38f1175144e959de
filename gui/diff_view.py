# gui/diff_view.py
"""
Module responsible for rendering the three comparison panes (original, modified,
unified diff) and for converting between the engine's line indices and the
panes' scrollbars.

The panes are QPlainTextEdit widgets with line wrapping disabled: every line is
one text block, so a vertical scrollbar value is exactly the index of the first
visible line. Segment kinds are turned into block background colours here; the
engine itself only hands out kind tags.
"""
import logging
from typing import Dict, List, Tuple, TYPE_CHECKING

from PySide6.QtWidgets import QPlainTextEdit
from PySide6.QtGui import QColor, QTextBlockFormat, QTextCursor

from core.alignment import VIEW_ORIGINAL, VIEW_MODIFIED, VIEW_UNIFIED, ALL_VIEWS
from core.diff_provider import KIND_UNCHANGED, KIND_INSERTED, KIND_DELETED, Segment

if TYPE_CHECKING:
	from .main_window import MainWindow

logger: logging.Logger = logging.getLogger(__name__)

# --- Constants ---

# Background colours per segment kind
COLOR_INSERTED_BG: str = "#e6ffed"
COLOR_DELETED_BG: str = "#ffeef0"
KIND_BACKGROUNDS: Dict[str, str] = {
	KIND_INSERTED: COLOR_INSERTED_BG,
	KIND_DELETED: COLOR_DELETED_BG,
}

# Marker prepended to every line of the unified pane
UNIFIED_PREFIXES: Dict[str, str] = {
	KIND_UNCHANGED: "  ",
	KIND_INSERTED: "+ ",
	KIND_DELETED: "- ",
}

# (kind, text) for one rendered line
PaneLine = Tuple[str, str]


# --- Render Model ---

def build_pane_lines(segments: List[Segment]) -> Dict[str, List[PaneLine]]:
	"""
	Expands a Diff Result into the lines each pane shows, tagged with their segment kind.

	Returns:
		Dict[str, List[PaneLine]]: View -> ordered (kind, text) pairs. The unified lines carry their prefix.
	"""
	paneLines: Dict[str, List[PaneLine]] = {view: [] for view in ALL_VIEWS}
	for segment in segments:
		prefix: str = UNIFIED_PREFIXES[segment.kind]
		for line in segment.lines:
			if segment.inOriginal:
				paneLines[VIEW_ORIGINAL].append((segment.kind, line))
			if segment.inModified:
				paneLines[VIEW_MODIFIED].append((segment.kind, line))
			paneLines[VIEW_UNIFIED].append((segment.kind, prefix + line))
	return paneLines


def pane_for_view(window: 'MainWindow', view: str) -> QPlainTextEdit:
	if view == VIEW_ORIGINAL:
		return window._originalPane
	if view == VIEW_MODIFIED:
		return window._modifiedPane
	if view == VIEW_UNIFIED:
		return window._unifiedPane
	raise ValueError(f"Unknown view: '{view}'")


# --- Rendering ---

def _fill_pane(pane: QPlainTextEdit, lines: List[PaneLine]) -> None:
	""" Sets the pane text and colours the background of changed lines. """
	pane.setPlainText("\n".join(text for _, text in lines))
	document = pane.document()
	cursor: QTextCursor = QTextCursor(document)
	cursor.beginEditBlock()
	try:
		block = document.firstBlock()
		for kind, _ in lines:
			if not block.isValid():
				break
			background = KIND_BACKGROUNDS.get(kind)
			if background:
				blockFormat: QTextBlockFormat = QTextBlockFormat()
				blockFormat.setBackground(QColor(background))
				cursor.setPosition(block.position())
				cursor.setBlockFormat(blockFormat)
			block = block.next()
	finally:
		cursor.endEditBlock()


def render_comparison(window: 'MainWindow', segments: List[Segment]) -> None:
	"""
	Renders a Diff Result into the three panes and scrolls them all to the top.
	Scrollbar signals are blocked while the text is replaced, so rendering never starts a sync pass.
	"""
	paneLines: Dict[str, List[PaneLine]] = build_pane_lines(segments)
	for view in ALL_VIEWS:
		pane: QPlainTextEdit = pane_for_view(window, view)
		scrollBar = pane.verticalScrollBar()
		wasBlocked: bool = scrollBar.blockSignals(True)
		try:
			_fill_pane(pane, paneLines[view])
			scrollBar.setValue(0)
		finally:
			scrollBar.blockSignals(wasBlocked)
		logger.debug(f"Rendered {len(paneLines[view])} line(s) into the {view} pane.")


def show_document(window: 'MainWindow', view: str, lines: List[str]) -> None:
	""" Shows a single loaded document, uncoloured, before any comparison has been made. """
	pane: QPlainTextEdit = pane_for_view(window, view)
	scrollBar = pane.verticalScrollBar()
	wasBlocked: bool = scrollBar.blockSignals(True)
	try:
		_fill_pane(pane, [(KIND_UNCHANGED, line) for line in lines])
	finally:
		scrollBar.blockSignals(wasBlocked)


def clear_panes(window: 'MainWindow', views: Tuple[str, ...] = ALL_VIEWS) -> None:
	for view in views:
		pane: QPlainTextEdit = pane_for_view(window, view)
		scrollBar = pane.verticalScrollBar()
		wasBlocked: bool = scrollBar.blockSignals(True)
		try:
			pane.clear()
		finally:
			scrollBar.blockSignals(wasBlocked)


# --- Viewport Conversion ---

def apply_viewport(window: 'MainWindow', view: str, line: int) -> None:
	"""
	Scrolls a pane so that `line` is its first visible line.

	Called by the engine during a sync pass. The resulting valueChanged signal reaches
	the engine again and is dropped by the scroll arbitrator. Qt clamps the value to
	the scrollbar maximum, so the last page of a pane cannot move further.
	"""
	scrollBar = pane_for_view(window, view).verticalScrollBar()
	if scrollBar.value() != line:
		scrollBar.setValue(line)
