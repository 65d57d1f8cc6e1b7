"""Application support directory lookup per operating system."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Final

from result import Err, Ok, Result

from addon_creator.common import BoilerplateSettings, HostSettings, create_logger

from .models import AppRegistry, ApplicationVariant, UnsupportedPlatformError

logger = create_logger("host.platforms")

type SupportDirResolver = Callable[[Path, Mapping[str, str]], Path]


def _macos_support_dir(home: Path, env: Mapping[str, str]) -> Path:
    return home / "Library" / "Application Support"


def _windows_support_dir(home: Path, env: Mapping[str, str]) -> Path:
    appdata = env.get("APPDATA")
    return Path(appdata) if appdata else home / "AppData" / "Roaming"


def _linux_support_dir(home: Path, env: Mapping[str, str]) -> Path:
    xdg_base = env.get("XDG_CONFIG_HOME")
    return Path(xdg_base).expanduser() if xdg_base else home / ".config"


SUPPORT_DIRS: Final[Mapping[str, SupportDirResolver]] = MappingProxyType(
    {
        "darwin": _macos_support_dir,
        "win32": _windows_support_dir,
        "linux": _linux_support_dir,
    }
)


def resolve_support_dir(
    platform: str | None = None,
    *,
    home: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Result[Path, UnsupportedPlatformError]:
    """Resolve the directory under which desktop applications keep their state.

    Args:
        platform: Platform identifier as reported by ``sys.platform``
        home: Home directory, defaults to the current user's
        env: Environment variables, defaults to ``os.environ``

    Returns:
        The support directory, or an error for a platform missing from the table
    """
    platform = platform or sys.platform
    resolver = SUPPORT_DIRS.get(platform)
    if resolver is None:
        logger.error("Unsupported platform", platform=platform)
        return Err(
            UnsupportedPlatformError(
                platform=platform,
                message=f"Platform '{platform}' is not supported. Supported: {', '.join(sorted(SUPPORT_DIRS))}",
            )
        )

    return Ok(resolver(home or Path.home(), os.environ if env is None else env))


def build_registry(
    host: HostSettings,
    boilerplate: BoilerplateSettings,
    *,
    platform: str | None = None,
) -> Result[AppRegistry, UnsupportedPlatformError]:
    support_dir = Ok(host.support_dir.expanduser()) if host.support_dir else resolve_support_dir(platform)

    def to_registry(base: Path) -> AppRegistry:
        app_names = {
            ApplicationVariant.PRIMARY: host.primary_app_name,
            ApplicationVariant.BETA: host.beta_app_name,
        }
        return AppRegistry(
            app_names=MappingProxyType(app_names),
            install_dirs=MappingProxyType({variant: base / name for variant, name in app_names.items()}),
            boilerplate_url=str(boilerplate.url),
            archive_root=boilerplate.archive_root,
            archive_filename=boilerplate.archive_filename,
            default_addon_name=boilerplate.default_addon_name,
            addons_dir_name=host.addons_dir_name,
            enabled_addons_filename=host.enabled_addons_filename,
            download_timeout=boilerplate.timeout,
        )

    return support_dir.map(to_registry)
