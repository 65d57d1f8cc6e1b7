"""Common models and helpers used across addon-creator modules."""

from .fields import DirectUrl, NonEmptyString
from .logging import (
    LoggingConfig,
    create_logger,
    disable_library_logging,
    enable_library_logging,
    get_default_log_file_path,
    setup_cli_logging,
)
from .models import AppInfo, AppPaths, BoilerplateSettings, HostSettings
from .paths import get_data_directory, get_global_config_root, resolve_working_directory

__all__ = [
    "AppInfo",
    "AppPaths",
    "BoilerplateSettings",
    "DirectUrl",
    "HostSettings",
    "LoggingConfig",
    "NonEmptyString",
    "create_logger",
    "disable_library_logging",
    "enable_library_logging",
    "get_data_directory",
    "get_default_log_file_path",
    "get_global_config_root",
    "resolve_working_directory",
    "setup_cli_logging",
]
