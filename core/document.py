# core/document.py
"""
Document model and loader.

A Document is an immutable, zero-based sequence of lines with a display name.
Two of them (original and modified) exist per comparison session; they are
replaced wholesale whenever the user loads a new file.
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterator, Tuple

from .exceptions import FileProcessingError

logger: logging.Logger = logging.getLogger(__name__)

# --- Constants ---
DEFAULT_ENCODING: str = 'utf-8'
DEFAULT_MAX_FILE_SIZE: int = 1 * 1024 * 1024 # 1MB


@dataclass(frozen=True)
class Document:
	"""
	An ordered, read-only sequence of text lines.

	Attributes:
		name (str): Display name (usually the file's base name).
		lines (Tuple[str, ...]): The lines, without line terminators.
	"""
	name: str
	lines: Tuple[str, ...]

	@classmethod
	def fromText(cls, text: str, name: str = "") -> 'Document':
		"""
		Builds a Document by splitting text on universal newlines.
		A trailing newline does not create an extra empty line.
		"""
		return cls(name=name, lines=tuple(text.splitlines()))

	@classmethod
	def empty(cls, name: str = "") -> 'Document':
		return cls(name=name, lines=())

	def __len__(self: 'Document') -> int:
		return len(self.lines)

	def __getitem__(self: 'Document', index: int) -> str:
		return self.lines[index]

	def __iter__(self: 'Document') -> Iterator[str]:
		return iter(self.lines)

	@property
	def lineCount(self: 'Document') -> int:
		return len(self.lines)


def loadDocument(filePath: str, encoding: str = DEFAULT_ENCODING, maxBytes: int = DEFAULT_MAX_FILE_SIZE) -> Document:
	"""
	Reads a text file from disk into a Document.

	Undecodable bytes are replaced rather than rejected, so binary-ish files still
	show up as (garbled) lines instead of failing the whole comparison.

	Args:
		filePath (str): Path of the file to read.
		encoding (str): Text encoding used to decode the file.
		maxBytes (int): Files larger than this are refused.

	Returns:
		Document: The loaded document, named after the file's base name.

	Raises:
		FileProcessingError: If the path does not exist, is not a regular file,
							 exceeds maxBytes, or cannot be read.
	"""
	if not filePath:
		raise FileProcessingError("No file path given.")
	if not os.path.exists(filePath):
		raise FileProcessingError(f"File not found: '{filePath}'")
	if not os.path.isfile(filePath):
		raise FileProcessingError(f"Not a regular file: '{filePath}'")

	try:
		fileSize: int = os.path.getsize(filePath)
		if fileSize > maxBytes:
			logger.warning(f"Refusing to load '{filePath}': {fileSize} bytes exceeds limit of {maxBytes} bytes.")
			raise FileProcessingError(f"File too large to compare (>{maxBytes // 1024} KB): '{filePath}'")
		with open(filePath, 'r', encoding=encoding, errors='replace') as f:
			text: str = f.read()
	except LookupError as e:
		# Unknown codec name from configuration
		raise FileProcessingError(f"Unknown text encoding '{encoding}' for '{filePath}': {e}") from e
	except OSError as e:
		logger.error(f"Error reading '{filePath}': {e}", exc_info=True)
		raise FileProcessingError(f"Error reading file '{filePath}': {e}") from e

	document: Document = Document.fromText(text, name=os.path.basename(filePath))
	logger.info(f"Loaded '{filePath}' ({document.lineCount} lines, {fileSize} bytes).")
	return document
