"""Ordered pipeline that creates a new add-on."""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import partial
from pathlib import Path
from typing import Protocol

from result import Err, Ok, Result

from addon_creator.addon import (
    AddonEnabler,
    AddonError,
    AddonSummary,
    BoilerplateFetcher,
    EnabledAddonsFile,
    Prompter,
    RunOptions,
    link_addon,
    negotiate_name,
)
from addon_creator.common import create_logger, resolve_working_directory
from addon_creator.host import (
    AppRegistry,
    ApplicationVariant,
    HostError,
    list_existing_addons,
    probe_environment,
)

logger = create_logger("generator")

type CreatorError = HostError | AddonError


class Reporter(Protocol):
    """Receives the user-facing progress messages of a run."""

    def info(self, message: str) -> None: ...

    def prompt(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


@dataclass(frozen=True)
class _GenerationContext:
    """Internal data passed between generation steps."""

    options: RunOptions
    variant: ApplicationVariant
    existing: frozenset[str]
    name: str = ""
    destination_root: Path | None = None
    addon_dir: Path | None = None
    symlink: Path | None = None
    enabled: bool = False


class AddonGenerator:
    """Runs detect, enumerate, name, fetch/unpack, link and enable in order.

    The first failing step ends the run. The only exception is reading the
    existing add-ons, which degrades to an empty set with a warning.
    """

    def __init__(
        self,
        registry: AppRegistry,
        *,
        prompter: Prompter,
        reporter: Reporter,
        fetcher: BoilerplateFetcher | None = None,
        enabler: AddonEnabler | None = None,
    ) -> None:
        self._registry = registry
        self._prompter = prompter
        self._reporter = reporter
        self._fetcher = fetcher or BoilerplateFetcher(registry)
        self._enabler = enabler or EnabledAddonsFile(registry)

    def run(
        self,
        options: RunOptions,
        *,
        working_dir: Path | None = None,
    ) -> Result[AddonSummary, CreatorError]:
        logger.info(
            "Creating add-on",
            prefer_beta=options.prefer_beta,
            symlink=options.should_symlink,
            enable=options.should_enable,
        )

        resolve_destination = partial(self._resolve_destination, working_dir)

        return (
            self._initialize(options)
            .map(self._prompt_for_name)
            .map(resolve_destination)
            .and_then(self._write_addon)
            .and_then(self._install)
            .map(self._summarize)
            .inspect(self._log_success)
            .inspect_err(self._log_error)
        )

    def _initialize(self, options: RunOptions) -> Result[_GenerationContext, CreatorError]:
        self._reporter.info("Checking on your existing Local installations and add-ons...")

        def build_context(variant: ApplicationVariant) -> _GenerationContext:
            return _GenerationContext(options=options, variant=variant, existing=self._existing_addons(variant))

        return (
            probe_environment(self._registry, prefer_beta=options.prefer_beta)
            .map(build_context)
            .inspect(lambda _: self._reporter.success("Everything looks good! Let's start making that new add-on..."))
        )

    def _existing_addons(self, variant: ApplicationVariant) -> frozenset[str]:
        match list_existing_addons(self._registry, variant):
            case Ok(names):
                return names
            case Err(error):
                logger.warning("Treating existing add-ons as empty", path=str(error.path), error=error.message)
                self._reporter.warning(error.message)
                return frozenset()

    def _prompt_for_name(self, context: _GenerationContext) -> _GenerationContext:
        self._reporter.prompt("We need a bit of information before we can create your add-on.")
        name = negotiate_name(
            context.existing,
            self._prompter,
            default=self._registry.default_addon_name,
            explicit_name=context.options.explicit_name,
        )
        return replace(context, name=name)

    def _resolve_destination(self, working_dir: Path | None, context: _GenerationContext) -> _GenerationContext:
        if context.options.place_directly:
            destination_root = self._registry.addons_dir(context.variant)
        else:
            destination_root = resolve_working_directory(working_dir)

        logger.debug("Destination resolved", destination_root=str(destination_root))
        return replace(context, destination_root=destination_root)

    def _write_addon(self, context: _GenerationContext) -> Result[_GenerationContext, CreatorError]:
        assert context.destination_root is not None
        app_name = self._registry.app_name(context.variant)
        self._reporter.info(f"Pulling down the boilerplate {app_name} add-on to set up...")

        return (
            self._fetcher.materialize(context.destination_root, context.name)
            .map(lambda addon_dir: replace(context, addon_dir=addon_dir))
            .inspect(lambda _: self._reporter.success(f"Success! Your {app_name} add-on directory has been created."))
        )

    def _install(self, context: _GenerationContext) -> Result[_GenerationContext, CreatorError]:
        options = context.options
        if not (options.should_symlink or options.should_enable):
            return Ok(context)

        app_name = self._registry.app_name(context.variant)
        self._reporter.info(f"Setting up your new add-on in the {app_name} application...")
        return self._link(context).and_then(self._enable)

    def _link(self, context: _GenerationContext) -> Result[_GenerationContext, CreatorError]:
        if not context.options.should_symlink:
            return Ok(context)

        assert context.addon_dir is not None
        link = self._registry.addons_dir(context.variant) / context.name
        return link_addon(context.addon_dir, link).map(lambda path: replace(context, symlink=path))

    def _enable(self, context: _GenerationContext) -> Result[_GenerationContext, CreatorError]:
        if not context.options.should_enable:
            return Ok(context)

        self._reporter.info("Enabling your add-on...")
        return self._enabler.enable(context.variant, context.name).map(lambda _: replace(context, enabled=True))

    def _summarize(self, context: _GenerationContext) -> AddonSummary:
        return AddonSummary(
            variant=context.variant,
            app_name=self._registry.app_name(context.variant),
            name=context.name,
            destination_root=context.destination_root,
            addon_dir=context.addon_dir,
            symlink=context.symlink,
            enabled=context.enabled,
        )

    def _log_success(self, summary: AddonSummary) -> None:
        logger.success(
            "Add-on created",
            name=summary.name,
            variant=summary.variant.value,
            path=str(summary.addon_dir),
            symlink=str(summary.symlink) if summary.symlink else None,
            enabled=summary.enabled,
        )

    def _log_error(self, error: CreatorError) -> None:
        logger.error("Failed to create add-on", error_type=type(error).__name__, error=error.message)
