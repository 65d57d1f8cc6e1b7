"""Exposing a new add-on to the host application."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from result import Err, Ok, Result

from addon_creator.common import create_logger
from addon_creator.host import AppRegistry, ApplicationVariant

from .models import AddonEnableError, AddonLinkError

logger = create_logger("addon.linker")


def link_addon(addon_dir: Path, link: Path) -> Result[Path, AddonLinkError]:
    """Create ``link`` as a symbolic link pointing at ``addon_dir``."""
    try:
        link.parent.mkdir(parents=True, exist_ok=True)
        link.symlink_to(addon_dir, target_is_directory=True)
    except OSError as exc:
        logger.error("Symlink failed", link=str(link), target=str(addon_dir), error=str(exc))
        return Err(
            AddonLinkError(
                link=link,
                target=addon_dir,
                message=f"Could not link '{link}' to '{addon_dir}': {exc}",
            )
        )

    logger.debug("Add-on linked", link=str(link), target=str(addon_dir))
    return Ok(link)


class AddonEnabler(Protocol):
    """Protocol for marking an add-on as enabled in the host application."""

    def enable(self, variant: ApplicationVariant, name: str) -> Result[None, AddonEnableError]:
        """Enable add-on ``name`` for ``variant``."""
        ...


class EnabledAddonsFile:
    """Enables add-ons through the host's ``enabled-addons.json`` state file.

    The file maps add-on names to booleans. Entries for other add-ons are
    preserved; a missing file is treated as empty.
    """

    def __init__(self, registry: AppRegistry) -> None:
        self._registry = registry

    def enable(self, variant: ApplicationVariant, name: str) -> Result[None, AddonEnableError]:
        path = self._registry.enabled_addons_file(variant)

        def fail(reason: str) -> Result[None, AddonEnableError]:
            logger.error("Enabling add-on failed", name=name, path=str(path), error=reason)
            return Err(AddonEnableError(name=name, path=path, message=reason))

        try:
            state = json.loads(path.read_text(encoding="utf-8")) if path.exists() else {}
        except json.JSONDecodeError as exc:
            return fail(f"Invalid JSON in {path.name}: {exc}")
        except OSError as exc:
            return fail(f"Could not read {path.name}: {exc}")

        if not isinstance(state, dict):
            return fail(f"{path.name} must contain a JSON object")

        state[name] = True

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(state, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            return fail(f"Could not write {path.name}: {exc}")

        logger.info("Add-on enabled", name=name, variant=variant.value)
        return Ok(None)
