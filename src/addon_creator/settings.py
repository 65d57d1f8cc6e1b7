from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from result import Result

from addon_creator.common import AppInfo, AppPaths, BoilerplateSettings, HostSettings
from addon_creator.host import AppRegistry, UnsupportedPlatformError, build_registry


class Settings(BaseSettings):
    app: AppInfo = AppInfo()
    paths: AppPaths = AppPaths()
    host: HostSettings = HostSettings()
    boilerplate: BoilerplateSettings = BoilerplateSettings()

    model_config = SettingsConfigDict(
        env_prefix="ADDON_CREATOR_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        nested_model_default_partial_update=True,
    )

    def to_registry(self, platform: str | None = None) -> Result[AppRegistry, UnsupportedPlatformError]:
        return build_registry(self.host, self.boilerplate, platform=platform)


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


# Private singleton instance
_settings: Settings | None = None

# Convenience access - pre-initialized singleton
settings = get_settings()


__all__ = [
    "AppInfo",
    "AppPaths",
    "Settings",
    "get_settings",
    "settings",
]
