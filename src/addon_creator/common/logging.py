"""Loguru setup for the create-local-addon command and for library use.

The package logs nothing until either ``setup_cli_logging`` attaches the
rotating log file or ``enable_library_logging`` attaches stderr.
"""

import sys
from pathlib import Path
from typing import Any, Literal

import loguru
from loguru import logger
from pydantic import BaseModel, ConfigDict

from addon_creator.constants import PACKAGE_NAME

from .models import AppInfo, AppPaths
from .paths import get_data_directory

type LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]

TEXT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[scope]} | {message} | {extra}\n{exception}"


class LoggingConfig(BaseModel):
    """The ``logging`` section of the global config file."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    log_level: LogLevel = "INFO"
    log_file: str | None = None
    rotation: str = "1 MB"
    retention: str = "7 days"
    format: Literal["json", "text"] = "text"

    def resolve_log_file(self, paths: AppPaths) -> Path:
        return Path(self.log_file).expanduser() if self.log_file else get_default_log_file_path(paths)


def setup_cli_logging(app_info: AppInfo, config: LoggingConfig, paths: AppPaths) -> int:
    """Send every package record at ``config.log_level`` or above to the log file.

    Returns the loguru handler id.
    """
    log_file = config.resolve_log_file(paths)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.enable(PACKAGE_NAME)
    logger.remove()
    logger.configure(extra={"scope": "cli", "env": app_info.environment})

    handler_id = logger.add(
        log_file,
        level=config.log_level,
        rotation=config.rotation,
        retention=config.retention,
        diagnose=app_info.environment == "dev",
        **_record_layout(config),
    )
    logger.debug("CLI logging initialized", log_file=str(log_file), level=config.log_level, format=config.format)
    return handler_id


def _record_layout(config: LoggingConfig) -> dict[str, Any]:
    if config.format == "json":
        return {"serialize": True}
    return {"format": TEXT_FORMAT}


def disable_library_logging() -> None:
    logger.disable(PACKAGE_NAME)


def enable_library_logging(level: LogLevel = "INFO") -> int:
    """Route package records to stderr for callers embedding addon_creator."""
    logger.enable(PACKAGE_NAME)
    logger.remove()
    logger.configure(extra={"scope": "library"})
    return logger.add(sys.stderr, level=level, format=TEXT_FORMAT, colorize=False)


def create_logger(scope: str) -> "loguru.Logger":
    return logger.bind(scope=scope)


def get_default_log_file_path(paths: AppPaths) -> Path:
    return get_data_directory(paths) / "logs" / paths.log_filename
