"""Common models used across addon-creator."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from addon_creator.constants import (
    APP_NAME,
    BOILERPLATE_ARCHIVE_ROOT,
    BOILERPLATE_URL,
    DEFAULT_ADDON_NAME,
)

from .fields import DirectUrl, NonEmptyString


class AppInfo(BaseModel):
    project_name: str = APP_NAME
    version: str = "0.1.0"
    environment: Literal["test", "dev", "prod"] = "prod"


class AppPaths(BaseModel):
    config_dir_name: str = APP_NAME
    data_dir_name: str = APP_NAME
    global_config_filename: str = "config.yaml"
    log_filename: str = f"{APP_NAME}.log"


class HostSettings(BaseModel):
    """Where the Local application keeps its per-variant state."""

    primary_app_name: NonEmptyString = "Local"
    beta_app_name: NonEmptyString = "Local Beta"
    addons_dir_name: NonEmptyString = "addons"
    enabled_addons_filename: NonEmptyString = "enabled-addons.json"
    support_dir: Path | None = Field(
        default=None,
        description="Overrides the platform application support directory.",
    )


class BoilerplateSettings(BaseModel):
    """Remote archive every new add-on is seeded from."""

    url: DirectUrl = BOILERPLATE_URL
    archive_root: NonEmptyString = BOILERPLATE_ARCHIVE_ROOT
    archive_filename: NonEmptyString = "boilerplate.zip"
    default_addon_name: NonEmptyString = DEFAULT_ADDON_NAME
    timeout: float = Field(default=60.0, gt=0)
