"""Data and error models describing the Local installation on this machine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class ApplicationVariant(str, Enum):
    """Release channels of the host application."""

    PRIMARY = "primary"
    BETA = "beta"


@dataclass(frozen=True)
class AppRegistry:
    """Fixed locations and remote resources a run works against.

    Attributes:
        app_names: Display name of each variant, also its support directory name
        install_dirs: Support directory of each variant
        boilerplate_url: Zip archive every new add-on is seeded from
        archive_root: Name of the single top-level folder inside the archive
        archive_filename: Temporary file name used while the archive is unpacked
        default_addon_name: Suggestion offered when prompting for a name
        addons_dir_name: Add-ons subdirectory inside a support directory
        enabled_addons_filename: Host state file listing enabled add-ons
        download_timeout: Seconds allowed for each network operation
    """

    app_names: Mapping[ApplicationVariant, str]
    install_dirs: Mapping[ApplicationVariant, Path]
    boilerplate_url: str
    archive_root: str
    archive_filename: str = "boilerplate.zip"
    default_addon_name: str = "my-new-local-addon"
    addons_dir_name: str = "addons"
    enabled_addons_filename: str = "enabled-addons.json"
    download_timeout: float = 60.0

    def app_name(self, variant: ApplicationVariant) -> str:
        return self.app_names[variant]

    def install_dir(self, variant: ApplicationVariant) -> Path:
        return self.install_dirs[variant]

    def addons_dir(self, variant: ApplicationVariant) -> Path:
        return self.install_dirs[variant] / self.addons_dir_name

    def enabled_addons_file(self, variant: ApplicationVariant) -> Path:
        return self.install_dirs[variant] / self.enabled_addons_filename


class BaseHostError(BaseModel):
    """Base host error model."""

    model_config = ConfigDict(extra="forbid")

    message: str


class NoInstallationError(BaseHostError):
    """None of the known variants is installed."""

    searched: list[Path]


class UnsupportedPlatformError(BaseHostError):
    """The running platform has no known support directory."""

    platform: str


class AddonListingError(BaseHostError):
    """The add-ons directory of a variant could not be read."""

    path: Path


type HostError = NoInstallationError | UnsupportedPlatformError | AddonListingError


__all__ = [
    "AddonListingError",
    "AppRegistry",
    "ApplicationVariant",
    "BaseHostError",
    "HostError",
    "NoInstallationError",
    "UnsupportedPlatformError",
]
