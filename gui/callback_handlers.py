# gui/callback_handlers.py
"""
Module containing the slots that handle signals emitted by the document worker
threads. These update the MainWindow state and UI once a file has been read or
has failed to load.
"""

import logging
from typing import TYPE_CHECKING

from core.alignment import VIEW_ORIGINAL, VIEW_MODIFIED, VIEW_UNIFIED
from core.document import Document
from . import diff_view
from . import event_handlers
from .threads import SLOT_ORIGINAL

if TYPE_CHECKING:
	from .main_window import MainWindow

logger: logging.Logger = logging.getLogger(__name__)


def on_document_loaded(window: 'MainWindow', slot: int, document: Document) -> None:
	"""
	Stores a freshly loaded document, replacing the previous one for that slot.

	If a comparison is already on screen it is recomputed immediately, so the panes
	never show a diff of a document that is no longer loaded. Otherwise the document
	is shown uncoloured in its pane until 'Compare' is pressed.
	"""
	if slot == SLOT_ORIGINAL:
		window._documentA = document
		window._originalFileLabel.setText(document.name)
		view: str = VIEW_ORIGINAL
	else:
		window._documentB = document
		window._modifiedFileLabel.setText(document.name)
		view = VIEW_MODIFIED
	logger.info(f"Document '{document.name}' loaded into the {view} slot ({document.lineCount} lines).")

	if window._hasComparison and window._documentA is not None and window._documentB is not None:
		event_handlers.handle_compare(window)
		return

	diff_view.show_document(window, view, list(document.lines))
	diff_view.clear_panes(window, (VIEW_UNIFIED,))
	window._updateStatusBar(f"Loaded '{document.name}'.", 5000)
	window._updateWidgetStates()


def handle_file_processing_error(window: 'MainWindow', errorMessage: str) -> None:
	logger.error(f"Document could not be loaded: {errorMessage}")
	window._showError("File Error", errorMessage)
	window._updateWidgetStates()


def handle_worker_error(window: 'MainWindow', errorMessage: str, workerName: str) -> None:
	logger.critical(f"Unexpected error in {workerName}: {errorMessage}")
	window._showError("Internal Error", f"An unexpected error occurred while loading a file:\n{errorMessage}")
	window._updateWidgetStates()
