# main.py
"""
Main application entry point.
Initialises logging, configuration, the GUI, and starts the Qt event loop.
"""
import sys
import logging
from PySide6.QtWidgets import QApplication, QMessageBox
from core.config_manager import ConfigManager
from core.exceptions import ConfigurationError
from core.settings import AppSettings, loadAppSettings
from gui.main_window import MainWindow
from utils.logger_setup import setupLogging, setupLoggingFromConfig

# --- Constants ---
CONFIG_FILE_PATH: str = 'config.ini'
ENV_FILE_PATH: str = '.env'


def _ensureApplication() -> QApplication:
	app = QApplication.instance()
	if not app:
		app = QApplication(sys.argv)
	return app


def main() -> None:
	"""Main application entry point."""
	# Basic logging until the configuration is known
	logger: logging.Logger = setupLogging(logToConsole=True, logToFile=False)
	logger.info("================ Application Starting ================")

	configManager: ConfigManager = ConfigManager(CONFIG_FILE_PATH, ENV_FILE_PATH)
	try:
		configManager.loadEnv()
		configManager.loadConfig()
		logger = setupLoggingFromConfig(configManager)
		settings: AppSettings = loadAppSettings(configManager)
		logger.info(f"Configuration loaded. Sync policy: '{settings.syncPolicy}'.")
	except ConfigurationError as e:
		errorMessage = f"Fatal Configuration Error: {e}\nPlease check your '{ENV_FILE_PATH}' and '{CONFIG_FILE_PATH}' files.\nApplication cannot continue."
		logger.critical(errorMessage, exc_info=True)
		_ensureApplication()
		QMessageBox.critical(None, "Configuration Error", errorMessage)
		sys.exit(1)

	app: QApplication = _ensureApplication()

	try:
		mainWindow: MainWindow = MainWindow(configManager, settings)
		mainWindow.resize(settings.windowWidth, settings.windowHeight)
		mainWindow.show()
	except Exception as e:
		errorMessage = f"Failed to initialise the main application window: {e}"
		logger.critical(errorMessage, exc_info=True)
		QMessageBox.critical(None, "GUI Initialisation Error", errorMessage)
		sys.exit(1)

	logger.info("Main window displayed. Starting Qt event loop.")
	exitCode: int = app.exec()
	logger.info(f"Application finished with exit code: {exitCode}")
	sys.exit(exitCode)


if __name__ == "__main__":
	main()
