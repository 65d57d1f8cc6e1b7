"""Data and error models for add-on generation."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict
from pydantic.dataclasses import dataclass

from addon_creator.host import ApplicationVariant


@dataclass(kw_only=True, frozen=True)
class RunOptions:
    """Choices made on the command line before anything touches the disk."""

    prefer_beta: bool = False
    place_directly: bool = False
    do_not_symlink: bool = False
    disable: bool = False
    explicit_name: str | None = None

    @property
    def should_symlink(self) -> bool:
        return not self.do_not_symlink and not self.place_directly

    @property
    def should_enable(self) -> bool:
        return not self.disable and (self.place_directly or self.should_symlink)


class AddonSummary(BaseModel):
    """Outcome of a successful run."""

    model_config = ConfigDict(frozen=True)

    variant: ApplicationVariant
    app_name: str
    name: str
    destination_root: Path
    addon_dir: Path
    symlink: Path | None = None
    enabled: bool = False


class BaseAddonError(BaseModel):
    """Base add-on error model."""

    model_config = ConfigDict(extra="forbid")

    message: str


class BoilerplateDownloadError(BaseAddonError):
    """The boilerplate archive could not be downloaded."""

    url: str
    status_code: int | None = None


class BoilerplateArchiveError(BaseAddonError):
    """The downloaded archive could not be opened or extracted."""

    archive: Path


class AddonLayoutError(BaseAddonError):
    """The extracted boilerplate could not be turned into the add-on directory."""

    source: Path
    target: Path


class AddonLinkError(BaseAddonError):
    """The add-on could not be linked into the add-ons directory."""

    link: Path
    target: Path


class AddonEnableError(BaseAddonError):
    """The add-on could not be marked as enabled."""

    name: str
    path: Path


type BoilerplateError = BoilerplateDownloadError | BoilerplateArchiveError | AddonLayoutError

type AddonError = BoilerplateError | AddonLinkError | AddonEnableError


__all__ = [
    "AddonEnableError",
    "AddonError",
    "AddonLayoutError",
    "AddonLinkError",
    "AddonSummary",
    "BaseAddonError",
    "BoilerplateArchiveError",
    "BoilerplateDownloadError",
    "BoilerplateError",
    "RunOptions",
]
