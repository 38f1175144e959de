# gui/gui_utils.py
"""
Utility functions and classes specific to the GUI components.
Includes the logging handler that forwards records to the Application Log tab.
"""

import html
import logging
from typing import Dict, Optional
from PySide6.QtCore import QObject, Signal

# Colours used for log lines in the Application Log tab, by level
LOG_LEVEL_COLOURS: Dict[int, str] = {
	logging.DEBUG: "#6c757d",
	logging.INFO: "#212529",
	logging.WARNING: "#b36b00",
	logging.ERROR: "#c82333",
	logging.CRITICAL: "#c82333",
}


class LogSignalEmitter(QObject):
	"""
	Carries formatted log messages across threads.
	Records logged from worker threads are delivered to GUI-thread slots by Qt's queued connections.
	"""
	messageLogged = Signal(str, int) # (formatted message, level number)


class QtLogHandler(logging.Handler):
	"""
	A logging handler that emits each formatted record through a Qt signal.
	"""

	def __init__(self: 'QtLogHandler', parent: Optional[QObject] = None) -> None:
		"""
		Args:
			parent (Optional[QObject]): Parent of the internal signal emitter, ties its lifetime to a widget.
		"""
		super().__init__()
		self._emitter: LogSignalEmitter = LogSignalEmitter(parent)

	@property
	def messageLogged(self: 'QtLogHandler') -> Signal:
		return self._emitter.messageLogged

	def emit(self: 'QtLogHandler', record: logging.LogRecord) -> None:
		try:
			msg: str = self.format(record)
			self._emitter.messageLogged.emit(msg, record.levelno)
		except Exception:
			self.handleError(record)


def logMessageToHtml(message: str, level: int) -> str:
	""" Renders one log line as coloured, escaped HTML for a QTextEdit. """
	colour: str = LOG_LEVEL_COLOURS.get(level, LOG_LEVEL_COLOURS[logging.INFO])
	weight: str = "bold" if level >= logging.ERROR else "normal"
	return f"<span style='color:{colour};font-weight:{weight};white-space:pre;'>{html.escape(message)}</span>"
