"""Detection of installed variants and of the add-ons they already carry."""

from __future__ import annotations

from result import Err, Ok, Result

from addon_creator.common import create_logger

from .models import AddonListingError, AppRegistry, ApplicationVariant, NoInstallationError

logger = create_logger("host.probe")


def detect_installations(registry: AppRegistry) -> frozenset[ApplicationVariant]:
    installed = frozenset(variant for variant in ApplicationVariant if registry.install_dir(variant).is_dir())
    logger.debug("Detected installations", installed=sorted(variant.value for variant in installed))
    return installed


def select_variant(
    installed: frozenset[ApplicationVariant],
    *,
    prefer_beta: bool,
) -> ApplicationVariant | None:
    if prefer_beta and ApplicationVariant.BETA in installed:
        return ApplicationVariant.BETA
    if ApplicationVariant.PRIMARY in installed:
        return ApplicationVariant.PRIMARY
    if ApplicationVariant.BETA in installed:
        return ApplicationVariant.BETA
    return None


def probe_environment(
    registry: AppRegistry,
    *,
    prefer_beta: bool,
) -> Result[ApplicationVariant, NoInstallationError]:
    """Choose the variant a run targets.

    Beta wins only when asked for and installed; otherwise the primary
    release is used, then beta as a last resort.
    """
    variant = select_variant(detect_installations(registry), prefer_beta=prefer_beta)
    if variant is None:
        searched = [registry.install_dir(v) for v in ApplicationVariant]
        logger.error("No installation found", searched=[str(path) for path in searched])
        return Err(
            NoInstallationError(
                searched=searched,
                message="No installations of Local found! Please install Local at https://localwp.com to create an add-on.",
            )
        )

    logger.info("Using installation", variant=variant.value, path=str(registry.install_dir(variant)))
    return Ok(variant)


def list_existing_addons(
    registry: AppRegistry,
    variant: ApplicationVariant,
) -> Result[frozenset[str], AddonListingError]:
    addons_dir = registry.addons_dir(variant)
    try:
        names = frozenset(entry.name for entry in addons_dir.iterdir() if not entry.name.startswith("."))
    except OSError as exc:
        return Err(
            AddonListingError(
                path=addons_dir,
                message=f"There was a problem identifying your existing add-ons: {exc}",
            )
        )

    logger.debug("Existing add-ons", variant=variant.value, count=len(names))
    return Ok(names)
