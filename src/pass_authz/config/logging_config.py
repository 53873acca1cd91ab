"""Centralized logging configuration for pass-authz.

Provides consistent, configurable logging with environment-based control over
verbosity, format and per-logger levels.
"""

import logging
import logging.config
import os
from typing import Dict, Mapping, Optional
from enum import Enum


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    """Log verbosity modes."""
    QUIET = "QUIET"      # Only errors and critical
    NORMAL = "NORMAL"    # Standard logging (warnings and above)
    VERBOSE = "VERBOSE"  # Info level logging
    DEBUG = "DEBUG"      # Full debug logging


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


LOGGER_OVERRIDE_PREFIX = "LOG_"

# Variables under the override prefix that configure logging itself
RESERVED_VARIABLES = {"LOG_LEVEL", "LOG_VERBOSITY", "LOG_FORMAT"}


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Map verbosity mode to log level."""
    verbosity_map = {
        LogVerbosity.QUIET: LogLevel.ERROR.value,
        LogVerbosity.NORMAL: LogLevel.WARNING.value,
        LogVerbosity.VERBOSE: LogLevel.INFO.value,
        LogVerbosity.DEBUG: LogLevel.DEBUG.value,
    }
    try:
        return verbosity_map[LogVerbosity(verbosity.upper())]
    except ValueError:
        return LogLevel.WARNING.value


def logger_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect per-logger levels from the environment.

    A variable ``LOG_PASS_AUTHZ_FEATURES_ACL=DEBUG`` sets the level of logger
    ``pass_authz.features.acl``. Unknown levels fall back to DEBUG.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        Mapping of logger name to level name
    """
    environ = os.environ if environ is None else environ
    overrides = {}
    for key, value in environ.items():
        if not key.startswith(LOGGER_OVERRIDE_PREFIX) or key in RESERVED_VARIABLES:
            continue

        name = key[len(LOGGER_OVERRIDE_PREFIX):].lower().replace("_", ".")
        name = name.replace("pass.authz", "pass_authz", 1)
        if not name:
            continue

        level = value.upper()
        if level not in LogLevel.__members__:
            level = LogLevel.DEBUG.value
        overrides[name] = level
    return overrides


class LoggingConfig:
    """Centralized logging configuration manager."""

    # Modules that should only log errors
    ERROR_ONLY_MODULES = [
        "httpx",
        "httpcore",
        "asyncio",
    ]

    # Modules that stay at warning unless explicitly overridden
    QUIET_MODULES = [
        "rdflib",
    ]

    @classmethod
    def configure(cls, environ: Optional[Mapping[str, str]] = None) -> None:
        """Configure logging based on environment variables."""
        environ = os.environ if environ is None else environ
        log_level = environ.get("LOG_LEVEL")
        log_verbosity = environ.get("LOG_VERBOSITY", "NORMAL").upper()
        log_format = environ.get("LOG_FORMAT", LogFormat.SIMPLE.value)

        # Explicit level wins over verbosity
        if log_level and log_level.upper() in LogLevel.__members__:
            effective_log_level = log_level.upper()
        else:
            effective_log_level = get_log_level_from_verbosity(log_verbosity)

        if log_format == LogFormat.JSON.value:
            format_string = '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}'
        elif log_format == LogFormat.DETAILED.value:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
        else:  # simple
            format_string = "%(asctime)s - %(levelname)s - %(message)s"

        logging_config = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": format_string,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": "DEBUG",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {
                "level": effective_log_level,
                "handlers": ["console"],
            },
            "loggers": {}
        }

        for module in cls.ERROR_ONLY_MODULES:
            logging_config["loggers"][module] = {"level": "ERROR"}

        for module in cls.QUIET_MODULES:
            logging_config["loggers"][module] = {"level": "WARNING"}

        for module, level in logger_overrides(environ).items():
            logging_config["loggers"][module] = {"level": level}

        logging.config.dictConfig(logging_config)

        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={effective_log_level}, format={log_format}")

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a configured logger for the given module name."""
        return logging.getLogger(name)

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Set log level for a specific module.

        Args:
            module_name: Name of the module
            level: Log level to set
        """
        logger = logging.getLogger(module_name)
        logger.setLevel(getattr(logging, level.upper()))


def setup_logging() -> None:
    """Setup logging configuration from environment variables.

    This is the main entry point for configuring logging in an application.
    It should be called once at application startup.
    """
    LoggingConfig.configure()


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger."""
    return LoggingConfig.get_logger(name)
