"""Configuration module for pass-authz.

Settings come from the environment via pydantic-settings; logging is
configured with the standard library from the same environment.
"""

from .settings import (
    AuthzSettings,
    get_settings,
    create_repository_client,
)

from .logging_config import (
    setup_logging,
    get_logger,
    logger_overrides,
    LogLevel,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    # Settings
    "AuthzSettings",
    "get_settings",
    "create_repository_client",
    
    # Logging configuration
    "setup_logging",
    "get_logger",
    "logger_overrides",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]
