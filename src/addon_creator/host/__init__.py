"""Discovery of the Local application on this machine."""

from .models import (
    AddonListingError,
    AppRegistry,
    ApplicationVariant,
    HostError,
    NoInstallationError,
    UnsupportedPlatformError,
)
from .platforms import SUPPORT_DIRS, build_registry, resolve_support_dir
from .probe import detect_installations, list_existing_addons, probe_environment, select_variant

__all__ = [
    "SUPPORT_DIRS",
    "AddonListingError",
    "AppRegistry",
    "ApplicationVariant",
    "HostError",
    "NoInstallationError",
    "UnsupportedPlatformError",
    "build_registry",
    "detect_installations",
    "list_existing_addons",
    "probe_environment",
    "resolve_support_dir",
    "select_variant",
]
