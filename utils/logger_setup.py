# utils/logger_setup.py
"""
Provides centralised functions for configuring the application's logging system.
Sets up handlers (console, rotating file) and formatters, either with explicit
arguments or from the [Logging] section of the configuration.
"""

import logging
import sys
import os
from logging.handlers import RotatingFileHandler
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
	from core.config_manager import ConfigManager

DEFAULT_LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s'
DEFAULT_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'
DEFAULT_LOG_FILE_NAME: str = 'tripane_diff.log'
DEFAULT_LOG_DIR: str = 'logs'


def levelFromName(levelName: str, default: int = logging.DEBUG) -> int:
	""" Converts a level name such as 'info' to its logging constant, falling back to default. """
	level = logging.getLevelName(str(levelName).strip().upper())
	return level if isinstance(level, int) else default


def setupLogging(
	logLevel: int = logging.DEBUG,
	logToConsole: bool = True,
	logToFile: bool = True,
	logFileName: str = DEFAULT_LOG_FILE_NAME,
	logFileLevel: int = logging.DEBUG,
	logDir: str = DEFAULT_LOG_DIR,
	maxBytes: int = 5*1024*1024, # 5 MB
	backupCount: int = 3,
	logFormat: str = DEFAULT_LOG_FORMAT,
	dateFormat: str = DEFAULT_DATE_FORMAT
) -> logging.Logger:
	"""
	Configures the root logger for the application.

	Existing handlers are removed first, so calling this again (for example after
	the configuration has been loaded) replaces rather than duplicates output.

	Args:
		logLevel (int): Minimum level of the root logger.
		logToConsole (bool): Add a stderr handler.
		logToFile (bool): Add a rotating file handler.
		logFileName (str): Name of the log file.
		logFileLevel (int): Minimum level for the file handler.
		logDir (str): Directory of the log file; created if missing.
		maxBytes (int): Size at which the log file rotates.
		backupCount (int): Number of rotated files kept.
		logFormat (str): Format string for all handlers.
		dateFormat (str): Date format string for all handlers.

	Returns:
		logging.Logger: The configured root logger.
	"""
	logHandlers: List[logging.Handler] = []
	formatter: logging.Formatter = logging.Formatter(logFormat, datefmt=dateFormat)

	if logToConsole:
		consoleHandler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
		consoleHandler.setFormatter(formatter)
		logHandlers.append(consoleHandler)

	fileError: str = ""
	if logToFile:
		try:
			absLogDir: str = os.path.abspath(logDir)
			os.makedirs(absLogDir, exist_ok=True)
			fileHandler: RotatingFileHandler = RotatingFileHandler(
				os.path.join(absLogDir, logFileName),
				maxBytes=maxBytes,
				backupCount=backupCount,
				encoding='utf-8'
			)
			fileHandler.setFormatter(formatter)
			fileHandler.setLevel(logFileLevel)
			logHandlers.append(fileHandler)
		except OSError as e:
			# Keep running with console logging only
			fileError = str(e)
			print(f"ERROR: Failed to configure file logging to '{os.path.join(logDir, logFileName)}': {e}", file=sys.stderr)

	rootLogger: logging.Logger = logging.getLogger()
	rootLogger.setLevel(logLevel)
	for handler in rootLogger.handlers[:]:
		rootLogger.removeHandler(handler)
		handler.close()
	for handler in logHandlers:
		rootLogger.addHandler(handler)

	if fileError:
		rootLogger.error(f"File logging disabled: {fileError}")
	rootLogger.info(f"Logging initialised (Root Level: {logging.getLevelName(rootLogger.level)}). Console: {logToConsole}, File: {logToFile and not fileError}.")
	return rootLogger


def setupLoggingFromConfig(configManager: 'ConfigManager') -> logging.Logger:
	"""
	Reconfigures logging from the [Logging] section of the configuration.

	Raises:
		ConfigurationError: If the configuration file failed to load.
	"""
	fileLevelName: str = configManager.getConfigValue('Logging', 'FileLogLevel', fallback='DEBUG')
	return setupLogging(
		logToConsole=True,
		logToFile=configManager.getConfigValueBool('Logging', 'LogToFile', fallback=True),
		logFileLevel=levelFromName(fileLevelName),
		logDir=configManager.getConfigValue('Logging', 'LogDirectory', fallback=DEFAULT_LOG_DIR),
		logFileName=configManager.getConfigValue('Logging', 'LogFileName', fallback=DEFAULT_LOG_FILE_NAME),
	)
