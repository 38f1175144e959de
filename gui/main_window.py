# --- START: gui/main_window.py ---
# gui/main_window.py
"""
Main application window module for the GUI application.

Handles GUI setup, state management, signal connections and logging, and
orchestrates interactions between the panes, the document workers and the
synchronization engine. An event filter on the panes tracks which pane the
mouse is over (for the hover sync policy) and handles change navigation keys.
"""

# Standard library imports
import logging
from typing import Optional, Dict, List, Any

# Qt imports
from PySide6.QtWidgets import QMainWindow, QWidget, QMessageBox
from PySide6.QtCore import Slot, Qt, QObject, QEvent
from PySide6.QtGui import QKeyEvent

# Local Core/Util imports
from core.alignment import VIEW_ORIGINAL, VIEW_MODIFIED, VIEW_UNIFIED
from core.config_manager import ConfigManager
from core.document import Document
from core.exceptions import ConfigurationError
from core.settings import AppSettings
from core.sync_engine import SyncEngine
from utils.logger_setup import levelFromName
from gui.gui_utils import QtLogHandler, logMessageToHtml

# Local GUI module imports
from . import ui_setup
from . import signal_connections
from . import diff_view
from . import event_handlers
from .threads import DocumentWorker, SLOT_ORIGINAL, SLOT_MODIFIED

logger: logging.Logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
	"""
	Main application window class.

	Owns the two loaded documents, the SyncEngine for the current comparison and the
	background document workers. The engine moves panes through `diff_view.apply_viewport`.
	"""

	def __init__(self: 'MainWindow', configManager: ConfigManager, settings: AppSettings, parent: Optional[QWidget] = None) -> None:
		"""
		Initialise the main window.

		Args:
			configManager (ConfigManager): Instance for managing application configuration.
			settings (AppSettings): Settings read from the configuration at start-up.
			parent (Optional[QWidget]): Optional parent widget. Defaults to None.
		"""
		super().__init__(parent)
		logger.info("Initialising MainWindow...")
		self._configManager: ConfigManager = configManager
		self._settings: AppSettings = settings

		# --- State Variables ---
		self._documentA: Optional[Document] = None # Original document
		self._documentB: Optional[Document] = None # Modified document
		self._hasComparison: bool = False # True once 'Compare' has rendered a diff
		self._hoveredView: Optional[str] = None # Pane under the mouse, passed to the engine on every scroll
		self._lastDirectory: str = settings.lastDirectory

		# --- Synchronization Engine ---
		self._syncEngine: SyncEngine = SyncEngine(
			applier=lambda view, line: diff_view.apply_viewport(self, view, line),
			policy=settings.syncPolicy,
		)

		# --- Initialise UI Elements ---
		ui_setup.setup_ui(self, fontPointSize=settings.fontPointSize)
		policyIndex: int = self._syncPolicyCombo.findData(settings.syncPolicy)
		if policyIndex >= 0:
			self._syncPolicyCombo.setCurrentIndex(policyIndex)

		# --- Install Event Filters ---
		# Installed on the editor widget so Enter/Leave also cover its scrollbars
		self._paneViews: Dict[QObject, str] = {}
		for view in (VIEW_ORIGINAL, VIEW_MODIFIED, VIEW_UNIFIED):
			pane = diff_view.pane_for_view(self, view)
			pane.installEventFilter(self)
			self._paneViews[pane] = view

		# --- Initialise Background Workers ---
		self._documentWorkers: Dict[int, DocumentWorker] = {
			SLOT_ORIGINAL: DocumentWorker(parent=self),
			SLOT_MODIFIED: DocumentWorker(parent=self),
		}
		for worker in self._documentWorkers.values():
			worker.configure(settings.encoding, settings.maxFileSizeBytes)

		# --- Connect Signals and Slots ---
		signal_connections.connect_signals(self)

		# --- Setup GUI Logging Handler ---
		self._guiLogHandler: Optional[QtLogHandler] = None
		self._setupGuiLogging()

		self._updateWidgetStates()
		logger.info("MainWindow initialisation complete.")

	# --- GUI Logging Setup ---
	def _setupGuiLogging(self: 'MainWindow') -> None:
		""" Configures and adds the QtLogHandler to the root logger. """
		try:
			guiLogLevel: int = levelFromName(self._configManager.getConfigValue('Logging', 'GuiLogLevel', fallback='INFO'), logging.INFO)
			logFormat: str = self._configManager.getConfigValue('Logging', 'GuiLogFormat', fallback='%(asctime)s - %(levelname)s - %(message)s')
			dateFormat: str = self._configManager.getConfigValue('Logging', 'GuiLogDateFormat', fallback='%H:%M:%S')
		except ConfigurationError as e:
			logger.error(f"Configuration error setting up GUI logging: {e}", exc_info=True)
			return

		guiHandler: QtLogHandler = QtLogHandler(parent=self)
		guiHandler.setLevel(guiLogLevel)
		guiHandler.setFormatter(logging.Formatter(logFormat, datefmt=dateFormat))
		guiHandler.messageLogged.connect(self._appendLogMessage)
		logging.getLogger().addHandler(guiHandler)
		self._guiLogHandler = guiHandler
		logger.info(f"GUI logging handler added with level {logging.getLevelName(guiLogLevel)}.")

	# --- Core State and UI Update Methods ---

	@Slot()
	def _updateWidgetStates(self: 'MainWindow') -> None:
		""" Enables or disables widgets based on the loaded documents and running workers. """
		loading: bool = any(worker.busy for worker in self._documentWorkers.values())
		bothLoaded: bool = self._documentA is not None and self._documentB is not None
		self._openOriginalButton.setEnabled(not self._documentWorkers[SLOT_ORIGINAL].busy)
		self._openModifiedButton.setEnabled(not self._documentWorkers[SLOT_MODIFIED].busy)
		self._compareButton.setEnabled(bothLoaded and not loading)

	@Slot(int, str)
	def _updateProgress(self: 'MainWindow', value: int, message: str) -> None:
		"""
		Updates the progress bar.

		Args:
			value (int): Progress percentage (0-100), -1 for indeterminate, >100 to hide.
			message (str): Text message to display alongside progress.
		"""
		if value == -1:
			self._progressBar.setVisible(True)
			self._progressBar.setRange(0, 0)
			self._progressBar.setFormat(message or "Working...")
		elif 0 <= value <= 100:
			self._progressBar.setVisible(True)
			self._progressBar.setRange(0, 100)
			self._progressBar.setValue(value)
			self._progressBar.setFormat(f"{message} (%p%)" if message else "%p%")
		else:
			self._progressBar.setVisible(False)
			self._progressBar.setRange(0, 100)
			self._progressBar.setValue(0)

	@Slot(str)
	def _updateStatusBar(self: 'MainWindow', message: str, timeout: int = 0) -> None:
		self._statusBar.showMessage(message, timeout)

	@Slot(str, int)
	def _appendLogMessage(self: 'MainWindow', message: str, level: int) -> None:
		""" Appends a formatted log message to the GUI's log text area. """
		self._appLogArea.append(logMessageToHtml(message, level))

	# --- Message Box Convenience Methods ---
	def _showError(self: 'MainWindow', title: str, message: str) -> None:
		logger.error(f"Displaying Error Dialog - Title: '{title}', Message: '{message}'")
		QMessageBox.critical(self, title, str(message))

	def _showWarning(self: 'MainWindow', title: str, message: str) -> None:
		logger.warning(f"Displaying Warning Dialog - Title: '{title}', Message: '{message}'")
		QMessageBox.warning(self, title, str(message))

	# --- Event Filter for Hover Tracking and Change Navigation ---
	def eventFilter(self, watched: QObject, event: QEvent) -> bool:
		"""
		Tracks the pane under the mouse and handles Alt+Down / Alt+Up change navigation.

		Returns:
			bool: True if the event was handled here, False to continue default processing.
		"""
		view: Optional[str] = self._paneViews.get(watched) if hasattr(self, '_paneViews') else None
		if view is None:
			return super().eventFilter(watched, event)

		eventType = event.type()
		if eventType == QEvent.Type.Enter:
			self._hoveredView = view
		elif eventType == QEvent.Type.Leave:
			if self._hoveredView == view:
				self._hoveredView = None
		elif eventType == QEvent.Type.KeyPress and isinstance(event, QKeyEvent):
			if event.modifiers() == Qt.KeyboardModifier.AltModifier and event.key() in (Qt.Key.Key_Down, Qt.Key.Key_Up):
				event_handlers.handle_navigate_change(self, forward=event.key() == Qt.Key.Key_Down)
				return True
		return super().eventFilter(watched, event)

	# --- Window Close Event ---
	def closeEvent(self: 'MainWindow', event: QEvent) -> None:
		""" Saves configuration, detaches the GUI log handler and waits for workers before closing. """
		try:
			self._configManager.saveConfig()
		except ConfigurationError as e:
			logger.warning(f"Configuration not saved on exit: {e}")

		workers: List[Any] = [worker for worker in self._documentWorkers.values() if worker.isRunning()]
		for worker in workers:
			logger.debug(f"Waiting for {worker.__class__.__name__} to finish...")
			if not worker.wait(2000):
				logger.warning(f"{worker.__class__.__name__} did not finish within 2 seconds.")

		if self._guiLogHandler is not None:
			logging.getLogger().removeHandler(self._guiLogHandler)
			self._guiLogHandler = None
		logger.info("Closing application window.")
		super().closeEvent(event)

# --- END: gui/main_window.py ---
