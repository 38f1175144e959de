# --- START: core/config_manager.py ---
# core/config_manager.py
"""
Manages loading and accessing application configuration.

Non-sensitive settings live in a configuration file (config.ini). A .env file is
loaded into the process environment, and when an override prefix is set, an
environment variable named <PREFIX>_<SECTION>_<KEY> wins over the .ini value.
Includes functionality to save configuration changes back to the .ini file.
"""

import os
import configparser
import logging
from typing import Optional, Any, List, Dict

from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger: logging.Logger = logging.getLogger(__name__)

# Default prefix for environment overrides, e.g. TRIPANE_SYNC_POLICY
DEFAULT_ENV_PREFIX: str = 'TRIPANE'


class ConfigManager:
	"""
	Handles loading and providing access to configuration parameters.
	Loads from .env files and .ini files, and allows saving changes to .ini.
	"""
	_config: configparser.ConfigParser
	_envLoaded: bool
	_configLoaded: bool
	_configLoadAttempted: bool
	_configLoadError: Optional[Exception] = None
	_envFilePath: Optional[str]
	_configFilePath: Optional[str]
	_envPrefix: Optional[str]

	def __init__(self: 'ConfigManager', configFilePath: Optional[str] = 'config.ini', envFilePath: Optional[str] = '.env', envPrefix: Optional[str] = DEFAULT_ENV_PREFIX) -> None:
		"""
		Initialises the ConfigManager.

		Args:
			configFilePath (Optional[str]): Path to the .ini configuration file.
			envFilePath (Optional[str]): Path to the .env file for environment variables.
			envPrefix (Optional[str]): Prefix of environment variables overriding .ini values.
									   None disables overrides.
		"""
		self._config = configparser.ConfigParser(interpolation=None)
		self._envLoaded = False
		self._configLoaded = False
		self._configLoadAttempted = False
		self._configLoadError = None
		self._envFilePath = envFilePath
		self._configFilePath = configFilePath
		self._envPrefix = envPrefix
		logger.debug(f"ConfigManager initialised with config file: '{configFilePath}', env file: '{envFilePath}', env prefix: '{envPrefix}'")

	def loadEnv(self: 'ConfigManager', override: bool = False) -> bool:
		"""
		Loads environment variables from the .env file specified during initialisation.
		Existing environment variables are NOT overwritten unless override is True.

		Returns:
			bool: True if the .env file was found and loaded successfully, False otherwise.

		Raises:
			ConfigurationError: If there's an OS error checking or processing the .env file.
		"""
		if not self._envFilePath:
			logger.info("No .env file path specified. Skipping loading from .env file.")
			return False
		try:
			if not os.path.exists(self._envFilePath):
				logger.debug(f".env file not found at: {self._envFilePath}. Skipping.")
				return False
			logger.info(f"Loading environment variables from: {self._envFilePath}")
			self._envLoaded = load_dotenv(dotenv_path=self._envFilePath, override=override)
			if not self._envLoaded:
				logger.warning(f".env file found at '{self._envFilePath}' but defined no variables.")
			return self._envLoaded
		except Exception as e:
			logger.error(f"Failed to load .env file from '{self._envFilePath}': {e}", exc_info=True)
			raise ConfigurationError(f"Error processing .env file '{self._envFilePath}': {e}") from e

	def loadConfig(self: 'ConfigManager') -> None:
		"""
		Loads configuration settings from the .ini file specified during initialisation.
		A missing file is not an error; defaults apply.

		Raises:
			ConfigurationError: If the .ini file exists but is unreadable or has parsing errors.
		"""
		self._configLoadAttempted = True
		self._configLoaded = False
		self._configLoadError = None

		if not self._configFilePath:
			logger.info("No configuration file path specified. Using defaults.")
			return

		try:
			if not os.path.exists(self._configFilePath):
				logger.warning(f"Configuration file not found: {self._configFilePath}. Using defaults.")
				return
			logger.info(f"Loading configuration from: {self._configFilePath}")
			self._config = configparser.ConfigParser(interpolation=None)
			readFiles: List[str] = self._config.read(self._configFilePath, encoding='utf-8')
			if not readFiles:
				raise ConfigurationError(f"Config file exists at '{self._configFilePath}' but could not be read.")
			self._configLoaded = True
			logger.debug(f"Loaded {len(self._config.sections())} section(s) from {self._configFilePath}")
		except ConfigurationError as e:
			logger.error(str(e))
			self._configLoadError = e
			raise
		except configparser.Error as e:
			logger.error(f"Failed to parse configuration file '{self._configFilePath}': {e}", exc_info=True)
			self._configLoadError = e
			raise ConfigurationError(f"Error parsing config file '{self._configFilePath}': {e}") from e
		except OSError as e:
			logger.error(f"Failed to read configuration file '{self._configFilePath}': {e}", exc_info=True)
			self._configLoadError = e
			raise ConfigurationError(f"Error reading config file '{self._configFilePath}': {e}") from e

	def envOverrideName(self: 'ConfigManager', section: str, key: str) -> Optional[str]:
		""" Name of the environment variable overriding section/key, or None if overrides are disabled. """
		if not self._envPrefix:
			return None
		return f"{self._envPrefix}_{section}_{key}".upper()

	def getEnvVar(self: 'ConfigManager', varName: str, defaultValue: Optional[str] = None, required: bool = False) -> Optional[str]:
		"""
		Retrieves an environment variable.

		Raises:
			ConfigurationError: If required=True and the environment variable is not found.
		"""
		value = os.getenv(varName)
		if value is None:
			if required:
				errMsg = f"Required environment variable '{varName}' is not set."
				logger.error(errMsg)
				raise ConfigurationError(errMsg)
			return defaultValue
		return value

	def getConfigValue(self: 'ConfigManager', section: str, key: str, fallback: Optional[Any] = None, required: bool = False) -> Optional[Any]:
		"""
		Retrieves a raw configuration value.

		Lookup order: environment override, then the .ini file, then fallback.

		Args:
			section (str): The section name in the .ini file.
			key (str): The key name within the section.
			fallback (Optional[Any]): Value to return if not found (and not required).
			required (bool): If True, raises ConfigurationError if the value is not found.

		Returns:
			Optional[Any]: The raw value (as string), or fallback.

		Raises:
			ConfigurationError: If required and not found, or if the config file failed to load.
		"""
		overrideName: Optional[str] = self.envOverrideName(section, key)
		if overrideName:
			overrideValue: Optional[str] = self.getEnvVar(overrideName)
			if overrideValue is not None:
				logger.debug(f"Config value '{section}/{key}' taken from environment variable {overrideName}.")
				return overrideValue.strip()

		if self._configLoadAttempted and not self._configLoaded and self._configLoadError:
			raise ConfigurationError(f"Cannot retrieve config value '{section}/{key}'; configuration file '{self._configFilePath}' failed to load. Error: {self._configLoadError}") from self._configLoadError

		if self._configLoaded and self._config.has_option(section, key):
			value = self._config.get(section, key, raw=True)
			# configparser keeps inline comments as part of the value
			if isinstance(value, str):
				if '#' in value: value = value.split('#', 1)[0]
				if ';' in value: value = value.split(';', 1)[0]
				value = value.strip()
			logger.debug(f"Accessed config value '{section}/{key}'. Value: '{value}'")
			return value

		if required:
			errMsg = f"Required configuration value '{key}' not found in section '{section}'."
			if self._configFilePath:
				errMsg += f" Checked '{self._configFilePath}'"
				if overrideName:
					errMsg += f" and environment variable {overrideName}"
				errMsg += "."
			logger.error(errMsg)
			raise ConfigurationError(errMsg)
		return fallback

	def getConfigValueInt(self: 'ConfigManager', section: str, key: str, fallback: Optional[int] = None, required: bool = False) -> Optional[int]:
		valueStr = self.getConfigValue(section, key, fallback=None, required=required)
		if valueStr is None: return fallback
		try:
			return int(valueStr)
		except (ValueError, TypeError) as e:
			errMsg = f"Configuration value '{section}/{key}' ('{valueStr}') is not a valid integer."
			logger.error(errMsg)
			raise ConfigurationError(errMsg) from e

	def getConfigValueBool(self: 'ConfigManager', section: str, key: str, fallback: Optional[bool] = None, required: bool = False) -> Optional[bool]:
		valueStr = self.getConfigValue(section, key, fallback=None, required=required)
		if valueStr is None: return fallback
		valueLower = valueStr.strip().lower()
		if valueLower in ['true', 'yes', 'on', '1']: return True
		if valueLower in ['false', 'no', 'off', '0']: return False
		errMsg = f"Configuration value '{section}/{key}' ('{valueStr}') is not a valid boolean (use 1/yes/true/on or 0/no/false/off)."
		logger.error(errMsg)
		raise ConfigurationError(errMsg)

	def getConfigChoice(self: 'ConfigManager', section: str, key: str, choices: List[str], fallback: str) -> str:
		"""
		Retrieves a value that must be one of `choices` (case-insensitive).

		Raises:
			ConfigurationError: If the configured value is not one of the choices.
		"""
		valueStr = self.getConfigValue(section, key, fallback=None)
		if valueStr is None:
			return fallback
		valueLower: str = valueStr.strip().lower()
		if valueLower not in choices:
			errMsg = f"Configuration value '{section}/{key}' ('{valueStr}') must be one of: {', '.join(choices)}."
			logger.error(errMsg)
			raise ConfigurationError(errMsg)
		return valueLower

	def setConfigValue(self: 'ConfigManager', section: str, key: str, value: str) -> None:
		"""
		Sets a configuration value **in memory**. Use saveConfig() to persist changes.

		Raises:
			ConfigurationError: If the config file failed to load, or the value cannot be set.
		"""
		if self._configLoadError:
			errMsg = f"Cannot set configuration value: '{self._configFilePath}' failed to load. Error: {self._configLoadError}"
			logger.error(errMsg)
			raise ConfigurationError(errMsg) from self._configLoadError
		try:
			if not self._config.has_section(section):
				self._config.add_section(section)
			self._config.set(section, key, value)
			self._configLoaded = True
			self._configLoadAttempted = True
			logger.debug(f"Set in-memory config value: [{section}] {key} = {value}")
		except configparser.Error as e:
			errMsg = f"Error updating configuration in memory: {e}"
			logger.error(errMsg, exc_info=True)
			raise ConfigurationError(errMsg) from e

	def saveConfig(self: 'ConfigManager') -> None:
		"""
		Saves the current in-memory configuration state back to the .ini file.

		Raises:
			ConfigurationError: If no file path is set, or the file cannot be written.
		"""
		if not self._configFilePath:
			errMsg = "Cannot save configuration: No configuration file path was specified during initialisation."
			logger.error(errMsg)
			raise ConfigurationError(errMsg)
		try:
			configDir = os.path.dirname(self._configFilePath)
			if configDir and not os.path.exists(configDir):
				os.makedirs(configDir, exist_ok=True)
			with open(self._configFilePath, 'w', encoding='utf-8') as configFile:
				self._config.write(configFile)
			self._configLoaded = True
			self._configLoadError = None
			logger.info(f"Saved configuration to: {self._configFilePath}")
		except OSError as e:
			errMsg = f"Failed to write configuration file '{self._configFilePath}': {e}"
			logger.error(errMsg, exc_info=True)
			raise ConfigurationError(errMsg) from e

	@property
	def isEnvLoaded(self: 'ConfigManager') -> bool:
		return self._envLoaded

	@property
	def isConfigLoaded(self: 'ConfigManager') -> bool:
		return self._configLoaded

# --- END: core/config_manager.py ---
