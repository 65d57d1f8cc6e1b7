"""Creation of new add-on directories."""

from .boilerplate import BoilerplateFetcher
from .linker import AddonEnabler, EnabledAddonsFile, link_addon
from .models import (
    AddonEnableError,
    AddonError,
    AddonLayoutError,
    AddonLinkError,
    AddonSummary,
    BoilerplateArchiveError,
    BoilerplateDownloadError,
    BoilerplateError,
    RunOptions,
)
from .naming import Prompter, negotiate_name, validate_addon_name

__all__ = [
    "AddonEnableError",
    "AddonEnabler",
    "AddonError",
    "AddonLayoutError",
    "AddonLinkError",
    "AddonSummary",
    "BoilerplateArchiveError",
    "BoilerplateDownloadError",
    "BoilerplateError",
    "BoilerplateFetcher",
    "EnabledAddonsFile",
    "Prompter",
    "RunOptions",
    "link_addon",
    "negotiate_name",
    "validate_addon_name",
]
