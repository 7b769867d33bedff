"""
Logging setup for the OCI Storage SDK

The SDK logs through ``logging.getLogger(__name__)`` everywhere and leaves
handler configuration to the application. ``configure_logging`` is a
convenience for scripts and the CLI.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError

SDK_LOGGER_NAME = "oci_storage_sdk"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingSettings:
    """Logging configuration"""
    enabled: bool = False
    level: str = "info"
    format: str = DEFAULT_FORMAT

    def __post_init__(self):
        if self.level.lower() not in _LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.level}",
                details={"allowed": sorted(_LEVELS)}
            )

    @property
    def numeric_level(self) -> int:
        return _LEVELS[self.level.lower()]


def configure_logging(settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """
    Configure the SDK logger.

    When logging is disabled the SDK logger only gets a NullHandler, so
    records propagate to whatever the application configured.

    Returns:
        logging.Logger: The package logger
    """
    settings = settings or LoggingSettings()
    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)

    for handler in list(sdk_logger.handlers):
        if getattr(handler, "_oci_storage_sdk", False):
            sdk_logger.removeHandler(handler)

    if not settings.enabled:
        handler = logging.NullHandler()
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.format))
        sdk_logger.setLevel(settings.numeric_level)

    handler._oci_storage_sdk = True
    sdk_logger.addHandler(handler)
    return sdk_logger
