# core/settings.py
"""
Typed application settings read once from the ConfigManager at start-up.
"""

import logging
import os
from dataclasses import dataclass

from .config_manager import ConfigManager
from .document import DEFAULT_ENCODING
from .exceptions import ConfigurationError
from .scroll_arbitrator import POLICY_ARBITRATE, SYNC_POLICIES

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppSettings:
	syncPolicy: str = POLICY_ARBITRATE
	encoding: str = DEFAULT_ENCODING
	maxFileSizeKB: int = 1024
	windowWidth: int = 1200
	windowHeight: int = 800
	fontPointSize: int = 9
	lastDirectory: str = ""

	@property
	def maxFileSizeBytes(self: 'AppSettings') -> int:
		return self.maxFileSizeKB * 1024


def loadAppSettings(configManager: ConfigManager) -> AppSettings:
	"""
	Reads all settings the application uses, applying defaults for missing values.

	Raises:
		ConfigurationError: If a present value is invalid (bad integer, unknown policy, non-positive size).
	"""
	defaults = AppSettings()
	settings = AppSettings(
		syncPolicy=configManager.getConfigChoice('Sync', 'Policy', list(SYNC_POLICIES), defaults.syncPolicy),
		encoding=configManager.getConfigValue('Loader', 'Encoding', fallback=defaults.encoding),
		maxFileSizeKB=configManager.getConfigValueInt('Loader', 'MaxFileSizeKB', fallback=defaults.maxFileSizeKB),
		windowWidth=configManager.getConfigValueInt('GUI', 'WindowWidth', fallback=defaults.windowWidth),
		windowHeight=configManager.getConfigValueInt('GUI', 'WindowHeight', fallback=defaults.windowHeight),
		fontPointSize=configManager.getConfigValueInt('GUI', 'FontPointSize', fallback=defaults.fontPointSize),
		lastDirectory=configManager.getConfigValue('General', 'LastDirectory', fallback="") or os.path.expanduser("~"),
	)
	for name in ('maxFileSizeKB', 'windowWidth', 'windowHeight', 'fontPointSize'):
		if getattr(settings, name) <= 0:
			raise ConfigurationError(f"Configuration value '{name}' must be positive, got {getattr(settings, name)}.")
	logger.debug(f"Application settings: {settings}")
	return settings
