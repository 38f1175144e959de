# --- START: gui/ui_setup.py ---
# gui/ui_setup.py
"""
Module responsible for creating and laying out the UI widgets
for the MainWindow.
"""

import os
from typing import TYPE_CHECKING
from PySide6.QtWidgets import (
	QWidget, QVBoxLayout, QHBoxLayout,
	QLabel, QPushButton, QTextEdit, QPlainTextEdit,
	QProgressBar, QStatusBar, QSplitter, QTabWidget, QComboBox
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QFont, QIcon
import logging

from core.scroll_arbitrator import POLICY_ARBITRATE, POLICY_HOVER

if TYPE_CHECKING:
	from .main_window import MainWindow

logger = logging.getLogger(__name__)

CODE_FONT_FAMILY: str = "Courier New"
NO_FILE_TEXT: str = "(no file loaded)"

# Labels shown in the sync policy combo box, with the policy each selects
POLICY_LABELS = [
	("Sync any scrolled pane", POLICY_ARBITRATE),
	("Sync only the pane under the mouse", POLICY_HOVER),
]


def _create_pane(window: 'MainWindow', title: str, objectName: str, codeFont: QFont) -> QPlainTextEdit:
	""" Creates one read-only, non-wrapping code pane wrapped in a titled container on the splitter. """
	layout = QVBoxLayout()
	layout.setContentsMargins(0, 0, 0, 0)
	layout.addWidget(QLabel(title))
	pane = QPlainTextEdit()
	pane.setReadOnly(True)
	pane.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
	pane.setFont(codeFont)
	pane.setObjectName(objectName)
	layout.addWidget(pane)
	container = QWidget()
	container.setLayout(layout)
	window._paneSplitter.addWidget(container)
	return pane


def setup_ui(window: 'MainWindow', fontPointSize: int = 9) -> None:
	"""
	Sets up the user interface layout and widgets for the main window.

	Args:
		window: The MainWindow instance to set up.
		fontPointSize: Point size of the monospace font used in the three panes.
	"""
	logger.debug("Setting up UI elements.")
	window.setWindowTitle("Tri-Pane Diff Viewer")
	iconPath = os.path.join('resources', 'app_icon.png')
	if os.path.exists(iconPath):
		window.setWindowIcon(QIcon(iconPath))

	window._centralWidget = QWidget()
	window.setCentralWidget(window._centralWidget)
	window._mainLayout = QVBoxLayout(window._centralWidget)

	# --- Top: File Selection and Compare ---
	fileLayout = QHBoxLayout()
	window._openOriginalButton = QPushButton("Open Original...")
	window._openOriginalButton.setToolTip("Choose the original file (left pane).")
	window._originalFileLabel = QLabel(NO_FILE_TEXT)
	window._openModifiedButton = QPushButton("Open Modified...")
	window._openModifiedButton.setToolTip("Choose the modified file (middle pane).")
	window._modifiedFileLabel = QLabel(NO_FILE_TEXT)
	window._compareButton = QPushButton("Compare")
	window._compareButton.setToolTip("Compute the line diff of the two files. Enabled once both are loaded.")
	window._syncPolicyCombo = QComboBox()
	for label, policy in POLICY_LABELS:
		window._syncPolicyCombo.addItem(label, policy)
	window._syncPolicyCombo.setToolTip("Choose which pane may drive scroll synchronization.")
	fileLayout.addWidget(window._openOriginalButton)
	fileLayout.addWidget(window._originalFileLabel, 1)
	fileLayout.addWidget(window._openModifiedButton)
	fileLayout.addWidget(window._modifiedFileLabel, 1)
	fileLayout.addWidget(window._compareButton)
	fileLayout.addWidget(window._syncPolicyCombo)
	window._mainLayout.addLayout(fileLayout)

	# --- Tabs: Comparison and Application Log ---
	window._tabWidget = QTabWidget()

	codeFont = QFont(CODE_FONT_FAMILY)
	codeFont.setStyleHint(QFont.StyleHint.Monospace)
	codeFont.setPointSize(fontPointSize)

	comparisonWidget = QWidget()
	comparisonLayout = QVBoxLayout(comparisonWidget)
	window._paneSplitter = QSplitter(Qt.Orientation.Horizontal)
	window._originalPane = _create_pane(window, "Original", "originalPane", codeFont)
	window._modifiedPane = _create_pane(window, "Modified", "modifiedPane", codeFont)
	window._unifiedPane = _create_pane(window, "Unified Diff", "unifiedPane", codeFont)
	window._unifiedPane.setToolTip("Alt+Down / Alt+Up jump to the next / previous change.")
	window._paneSplitter.setSizes([400, 400, 400])
	comparisonLayout.addWidget(window._paneSplitter)
	window._tabWidget.addTab(comparisonWidget, "Comparison")

	window._appLogArea = QTextEdit()
	window._appLogArea.setReadOnly(True)
	window._appLogArea.setLineWrapMode(QTextEdit.LineWrapMode.NoWrap)
	logFont = QFont("monospace")
	logFont.setPointSize(9)
	window._appLogArea.setFont(logFont)
	window._tabWidget.addTab(window._appLogArea, "Application Log")

	window._mainLayout.addWidget(window._tabWidget, stretch=1)

	# --- Status Bar ---
	window._statusBar = QStatusBar()
	window.setStatusBar(window._statusBar)
	window._progressBar = QProgressBar()
	window._progressBar.setVisible(False)
	window._progressBar.setTextVisible(True)
	window._progressBar.setRange(0, 100)
	window._statusBar.addPermanentWidget(window._progressBar)

	logger.debug("UI setup complete.")

# --- END: gui/ui_setup.py ---
