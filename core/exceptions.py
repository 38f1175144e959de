# --- START: core/exceptions.py ---
# core/exceptions.py
"""
Defines custom exception classes for specific error conditions within the application.
Catching these instead of bare Exception keeps loader, config and diff failures apart.
"""


class BaseApplicationError(Exception):
	"""
	Base class for all custom application-specific exceptions.
	Provides a common ancestor for catching application-related errors.
	"""
	def __init__(self: 'BaseApplicationError', message: str = "An application error occurred.") -> None:
		"""
		Initialises the BaseApplicationError.

		Args:
			message (str): A descriptive message for the error.
		"""
		super().__init__(message)


class ConfigurationError(BaseApplicationError):
	"""
	Raised for errors encountered during loading, parsing, or accessing
	configuration settings (e.g., missing keys, invalid values, unreadable .ini).
	"""
	def __init__(self: 'ConfigurationError', message: str = "Configuration error.") -> None:
		super().__init__(message)


class FileProcessingError(BaseApplicationError):
	"""
	Raised when a document cannot be loaded: missing path, directory instead of file,
	file over the configured size limit, or an OS error while reading.
	"""
	def __init__(self: 'FileProcessingError', message: str = "File processing error.") -> None:
		super().__init__(message)


class DiffContractError(BaseApplicationError):
	"""
	Raised when a diff result breaks the segment contract the alignment engine relies on:
	zero-length segments, unknown segment kinds, or two adjacent segments of
	the same kind.

	This is a programmer error at the diff provider boundary and is never recovered from.
	"""
	def __init__(self: 'DiffContractError', message: str = "Malformed diff result.") -> None:
		super().__init__(message)

# --- END: core/exceptions.py ---
