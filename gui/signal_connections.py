# gui/signal_connections.py
"""
Module responsible for connecting signals to slots in the MainWindow.
"""

import logging
from typing import TYPE_CHECKING

from core.alignment import VIEW_ORIGINAL, VIEW_MODIFIED, VIEW_UNIFIED
from . import event_handlers
from . import callback_handlers
from . import diff_view
from .threads import SLOT_ORIGINAL, SLOT_MODIFIED

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
	from .main_window import MainWindow


def _connect_pane_scrollbar(window: 'MainWindow', view: str) -> None:
	scrollBar = diff_view.pane_for_view(window, view).verticalScrollBar()
	# Bind view as a default argument; a bare closure would capture the loop variable
	scrollBar.valueChanged.connect(lambda value, view=view: event_handlers.handle_pane_scrolled(window, view, value))


def connect_signals(window: 'MainWindow') -> None:
	"""
	Connects all signals to their corresponding slots in the application.

	Args:
		window: The MainWindow instance whose signals/slots need connecting.
	"""
	logger.debug("Connecting signals to slots.")

	# --- UI Widget Signals ---
	window._openOriginalButton.clicked.connect(lambda: event_handlers.handle_open_file(window, SLOT_ORIGINAL))
	window._openModifiedButton.clicked.connect(lambda: event_handlers.handle_open_file(window, SLOT_MODIFIED))
	window._compareButton.clicked.connect(lambda: event_handlers.handle_compare(window))
	window._syncPolicyCombo.currentIndexChanged.connect(lambda index: event_handlers.handle_policy_change(window, index))

	# --- Worker Signals ---
	for slot, worker in window._documentWorkers.items():
		workerName: str = f"DocumentWorker[{slot}]"
		worker.statusUpdate.connect(window._updateStatusBar)
		worker.progressUpdate.connect(window._updateProgress)
		worker.errorOccurred.connect(lambda msg, name=workerName: callback_handlers.handle_worker_error(window, msg, name))
		worker.fileProcessingError.connect(lambda msg: callback_handlers.handle_file_processing_error(window, msg))
		worker.documentLoaded.connect(lambda loadedSlot, document: callback_handlers.on_document_loaded(window, loadedSlot, document))
		worker.finished.connect(window._updateWidgetStates)

	# --- Scroll Sync ---
	for view in (VIEW_ORIGINAL, VIEW_MODIFIED, VIEW_UNIFIED):
		_connect_pane_scrollbar(window, view)

	logger.debug("Signal connections established.")
