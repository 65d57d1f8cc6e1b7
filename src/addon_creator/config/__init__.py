from .loader import global_config_path, load_global_config
from .models import (
    ConfigError,
    ConfigIOError,
    ConfigNotFoundError,
    ConfigValidationError,
    ConfigYamlError,
    GlobalConfig,
)

__all__ = [
    "ConfigError",
    "ConfigIOError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "ConfigYamlError",
    "GlobalConfig",
    "global_config_path",
    "load_global_config",
]
