# --- START: gui/event_handlers.py ---
# gui/event_handlers.py
"""
Module containing the primary event handling slots for user interactions
in the MainWindow (file selection, compare, scrolling, change navigation).
These functions are typically connected to widget signals (like `clicked`).
"""

import logging
import os
from typing import Dict, TYPE_CHECKING

from PySide6.QtWidgets import QFileDialog

from core.alignment import VIEW_UNIFIED
from core.exceptions import ConfigurationError, DiffContractError
from . import diff_view
from .threads import SLOT_ORIGINAL, SLOT_MODIFIED

if TYPE_CHECKING:
	from .main_window import MainWindow

logger: logging.Logger = logging.getLogger(__name__)


# --- File Handlers ---

def handle_open_file(window: 'MainWindow', slot: int) -> None:
	"""
	Handles the 'Open Original...' / 'Open Modified...' buttons.
	Asks for a file and starts the document worker for that slot.

	Args:
		window (MainWindow): The main application window instance.
		slot (int): SLOT_ORIGINAL or SLOT_MODIFIED.
	"""
	worker = window._documentWorkers[slot]
	if worker.busy:
		window._showWarning("Busy", "That file is still loading. Please wait.")
		return

	title: str = "Select Original File" if slot == SLOT_ORIGINAL else "Select Modified File"
	filePath, _ = QFileDialog.getOpenFileName(window, title, window._lastDirectory, "All Files (*)")
	if not filePath:
		logger.debug(f"File selection cancelled for slot {slot}.")
		return

	window._lastDirectory = os.path.dirname(filePath)
	try:
		window._configManager.setConfigValue('General', 'LastDirectory', window._lastDirectory)
	except ConfigurationError as e:
		logger.warning(f"Could not remember last directory: {e}")

	logger.info(f"Loading {'original' if slot == SLOT_ORIGINAL else 'modified'} file: {filePath}")
	worker.startLoad(slot, filePath)
	window._updateWidgetStates()


def handle_compare(window: 'MainWindow') -> None:
	"""
	Handles the 'Compare' button. Diffs the two loaded documents, rebuilds the
	engine state and renders the three panes.
	"""
	if window._documentA is None or window._documentB is None:
		window._showWarning("Files Missing", "Load both the original and the modified file first.")
		return

	try:
		segments = window._syncEngine.loadDiff(window._documentA, window._documentB)
	except DiffContractError as e:
		logger.critical(f"Diff result rejected by the alignment engine: {e}", exc_info=True)
		window._showError("Diff Error", f"The computed diff is inconsistent and cannot be displayed:\n{e}")
		return

	diff_view.render_comparison(window, segments)
	window._hasComparison = True
	summary = window._syncEngine.summary
	if summary.identical:
		window._updateStatusBar(f"'{window._documentA.name}' and '{window._documentB.name}' are identical.")
	else:
		window._updateStatusBar(
			f"{summary.changeCount} change(s): +{summary.insertedLines} / -{summary.deletedLines} lines "
			f"({summary.unchangedLines} unchanged)."
		)
	window._updateWidgetStates()


def handle_policy_change(window: 'MainWindow', index: int) -> None:
	""" Applies the sync policy chosen in the combo box and stores it in the configuration. """
	policy: str = window._syncPolicyCombo.itemData(index)
	if not policy or policy == window._syncEngine.policy:
		return
	window._syncEngine.setPolicy(policy)
	logger.info(f"Scroll sync policy set to '{policy}'.")
	try:
		window._configManager.setConfigValue('Sync', 'Policy', policy)
	except ConfigurationError as e:
		logger.warning(f"Could not store sync policy: {e}")


# --- Scroll Handlers ---

def handle_pane_scrolled(window: 'MainWindow', view: str, value: int) -> None:
	"""
	Slot for a pane's vertical scrollbar valueChanged signal.
	Forwards the new first visible line to the engine together with the hovered pane.
	"""
	if not window._hasComparison:
		return
	window._syncEngine.handleScroll(view, value, hoveredView=window._hoveredView)


def handle_navigate_change(window: 'MainWindow', forward: bool) -> None:
	""" Jumps the unified pane (and, through the engine, the other two) to the next or previous change. """
	if not window._hasComparison:
		return
	# Engine position: a pane's scrollbar stops one page short of its last lines
	positions: Dict[str, int] = window._syncEngine.navigateToChange(VIEW_UNIFIED, forward=forward)
	if not positions:
		window._updateStatusBar("No changes to navigate to.", 3000)

# --- END: gui/event_handlers.py ---
