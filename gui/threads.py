"""
Threading module for background task execution in the GUI application.
Provides worker classes for handling file reads without freezing the UI.

Features:
- Base worker thread with common signal handling
- Document worker that loads the original or modified file

Each worker emits signals to update the GUI about progress and completion status.
"""

# Standard library imports
import logging
from typing import Optional, Any

# Qt imports
from PySide6.QtCore import QThread, Signal

# Local imports
from core.document import Document, loadDocument, DEFAULT_ENCODING, DEFAULT_MAX_FILE_SIZE
from core.exceptions import FileProcessingError

# Initialize logging
logger: logging.Logger = logging.getLogger(__name__)

# Document slots a DocumentWorker can fill
SLOT_ORIGINAL: int = 1
SLOT_MODIFIED: int = 2


class BaseWorker(QThread):
    """
    Base class for worker threads providing common functionality and signals.

    Signals:
        progressUpdate (int, str): Emitted to update progress percentage and message
        statusUpdate (str): Emitted to update status message
        errorOccurred (str): Emitted when an unexpected error occurs

    Attributes:
        _task (Optional[str]): Current task name
        _args (list): Task arguments
        _kwargs (dict): Task keyword arguments
        _isRunning (bool): Thread running state
    """

    progressUpdate = Signal(int, str)
    statusUpdate = Signal(str)
    errorOccurred = Signal(str)

    def __init__(self: 'BaseWorker', parent: Optional[Any] = None) -> None:
        super().__init__(parent)
        self._task: Optional[str] = None
        self._args: list = []
        self._kwargs: dict = {}
        self._isRunning = False

    @property
    def busy(self: 'BaseWorker') -> bool:
        return self._isRunning

    def setTask(self: 'BaseWorker', taskName: str, args: list, kwargs: dict) -> None:
        self._task = taskName
        self._args = args
        self._kwargs = kwargs

    def start(self, priority=QThread.Priority.InheritPriority) -> None:
        if self._isRunning:
            logger.warning(f"{self.__class__.__name__} already running. Ignoring start request.")
            return
        self._isRunning = True
        super().start(priority)

    def run(self: 'BaseWorker') -> None:
        if not self._task:
            logger.warning(f"{self.__class__.__name__} started without a task.")
            self.errorOccurred.emit(f"{self.__class__.__name__} started without task.")
            self._isRunning = False
            return
        try:
            self._executeTask()
        except Exception as e:
            logger.critical(f"Unhandled exception in {self.__class__.__name__} task '{self._task}': {e}", exc_info=True)
            self.errorOccurred.emit(f"Critical internal error in {self.__class__.__name__}: {e}")
        finally:
            self._task = None
            self._isRunning = False
            self.progressUpdate.emit(101, "")

    def _executeTask(self: 'BaseWorker') -> None:
        raise NotImplementedError("Subclasses must implement _executeTask.")


class DocumentWorker(BaseWorker):
    """
    Worker thread that reads a document from disk.

    Signals:
        documentLoaded (int, object): Slot (SLOT_ORIGINAL / SLOT_MODIFIED) and the loaded Document
        fileProcessingError (str): Emitted when the file cannot be loaded
    """

    documentLoaded = Signal(int, object)
    fileProcessingError = Signal(str)

    def __init__(self: 'DocumentWorker', parent: Optional[Any] = None) -> None:
        super().__init__(parent)
        self._encoding: str = DEFAULT_ENCODING
        self._maxBytes: int = DEFAULT_MAX_FILE_SIZE

    def configure(self: 'DocumentWorker', encoding: str, maxBytes: int) -> None:
        self._encoding = encoding
        self._maxBytes = maxBytes

    def startLoad(self: 'DocumentWorker', slot: int, filePath: str) -> None:
        if slot not in (SLOT_ORIGINAL, SLOT_MODIFIED):
            raise ValueError(f"Unknown document slot: {slot}")
        self.setTask('load', [slot, filePath], {})
        self.start()

    def _executeTask(self: 'DocumentWorker') -> None:
        """Executes the assigned document task."""
        if self._task != 'load':
            errMsg: str = f"Unknown DocumentWorker task: {self._task}"
            logger.error(errMsg)
            self.errorOccurred.emit(errMsg)
            return
        slot, filePath = self._args
        self.statusUpdate.emit(f"Loading '{filePath}'...")
        self.progressUpdate.emit(-1, "Loading file...")
        try:
            document: Document = loadDocument(filePath, encoding=self._encoding, maxBytes=self._maxBytes)
        except FileProcessingError as e:
            logger.error(f"Document load failed: {e}")
            self.fileProcessingError.emit(str(e))
            return
        self.statusUpdate.emit(f"Loaded '{document.name}' ({document.lineCount} lines).")
        self.documentLoaded.emit(slot, document)
