from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer
from result import Err, Ok

from addon_creator.addon import (
    AddonEnableError,
    AddonLayoutError,
    AddonLinkError,
    BoilerplateArchiveError,
    BoilerplateDownloadError,
    BoilerplateFetcher,
    EnabledAddonsFile,
    RunOptions,
)
from addon_creator.common import LoggingConfig, create_logger, setup_cli_logging
from addon_creator.config import ConfigNotFoundError, global_config_path, load_global_config
from addon_creator.generator import AddonGenerator, CreatorError
from addon_creator.host import NoInstallationError, UnsupportedPlatformError
from addon_creator.settings import settings

from .console import ConsoleReporter, prompt_user

logger = create_logger("cli")

app = typer.Typer(
    help="Create a new add-on for the Local desktop application.",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)


@app.command()
def create(
    ctx: typer.Context,
    name: Annotated[str | None, typer.Argument(help="Internal name for the new add-on")] = None,
    beta: Annotated[bool, typer.Option("--beta", help="Prefer installing the add-on for Local Beta")] = False,
    place_directly: Annotated[
        bool,
        typer.Option(
            "--place-directly",
            help="Place the add-on directory directly into the Local add-ons directory (implies --do-not-symlink)",
        ),
    ] = False,
    do_not_symlink: Annotated[
        bool,
        typer.Option(
            "--do-not-symlink",
            help="Skip creating a symbolic link in the Local add-ons directory to your add-on directory",
        ),
    ] = False,
    disable: Annotated[bool, typer.Option("--disable", help="Skip enabling the add-on")] = False,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable colored output")] = False,
    working_dir: Annotated[
        Path | None,
        typer.Option(
            "--working-dir",
            hidden=True,
            help="Override the working directory the add-on is created in.",
        ),
    ] = None,
) -> None:
    """Scaffold a new Local add-on from the boilerplate archive.

    Examples:

        # Prompt for a name, create it here and link it into Local
        create-local-addon

        # Create 'my-addon' straight inside the Local Beta add-ons directory
        create-local-addon my-addon --beta --place-directly
    """
    # Respect NO_COLOR environment variable and --no-color flag
    if no_color or os.getenv("NO_COLOR"):
        ctx.color = False

    reporter = ConsoleReporter()
    reporter.banner()

    options = RunOptions(
        prefer_beta=beta,
        place_directly=place_directly,
        do_not_symlink=do_not_symlink,
        disable=disable,
        explicit_name=name,
    )

    match settings.to_registry():
        case Ok(registry):
            pass
        case Err(error):
            _handle_error(reporter, error)
            raise typer.Exit(code=1)

    generator = AddonGenerator(
        registry,
        prompter=prompt_user,
        reporter=reporter,
        fetcher=BoilerplateFetcher(registry),
        enabler=EnabledAddonsFile(registry),
    )

    match generator.run(options, working_dir=working_dir):
        case Ok(summary):
            reporter.success(f"Your {summary.app_name} add-on has been created and set up successfully.")
            reporter.info(f"You can find the directory for your newly created add-on at {summary.addon_dir}")
            if summary.symlink is not None:
                reporter.info(f"Linked into {summary.app_name} at {summary.symlink}")
        case Err(error):
            _handle_error(reporter, error)
            raise typer.Exit(code=1)


def _handle_error(reporter: ConsoleReporter, error: CreatorError) -> None:
    """Handle generation errors with user-friendly messages."""
    match error:
        case NoInstallationError(searched=searched):
            reporter.error(error.message)
            for path in searched:
                reporter.detail(f"looked in {path}")
            reporter.hint("set ADDON_CREATOR_HOST__SUPPORT_DIR if Local keeps its data elsewhere")
        case UnsupportedPlatformError(platform=platform):
            reporter.error(f"Cannot locate Local on platform '{platform}'.")
            reporter.hint("set ADDON_CREATOR_HOST__SUPPORT_DIR to the directory containing Local's data")
        case BoilerplateDownloadError(url=url, message=message):
            reporter.error("There was a problem retrieving the Local add-on boilerplate archive.")
            reporter.detail(f"{url}: {message}")
            reporter.hint("check your network connection and try again")
        case BoilerplateArchiveError(message=message):
            reporter.error("There was a problem unpacking the Local add-on boilerplate archive.")
            reporter.detail(message)
        case AddonLayoutError(target=target, message=message):
            reporter.error("There was a problem setting up the Local add-on directory.")
            reporter.detail(message)
            if target.exists():
                reporter.hint(f"remove or rename '{target}' and try again")
        case AddonLinkError(link=link, message=message):
            reporter.error("There was a problem linking your add-on into Local.")
            reporter.detail(message)
            if link.exists() or link.is_symlink():
                reporter.hint(f"remove '{link}' or rerun with --do-not-symlink")
        case AddonEnableError(message=message):
            reporter.error("There was a problem enabling your add-on.")
            reporter.detail(message)
            reporter.hint("enable it from the Local add-ons screen, or rerun with --disable")
        case _:
            reporter.error(error.message)


def _setup_logging() -> None:
    config_path = global_config_path(settings.paths)

    match load_global_config(config_path):
        case Ok(config):
            logging_config = config.logging
        case Err(ConfigNotFoundError()):
            logging_config = LoggingConfig()
        case Err(error):
            typer.secho(f"warning: ignoring {config_path}: {error.message}", err=True, fg=typer.colors.YELLOW)
            logging_config = LoggingConfig()

    if logging_config.enabled:
        setup_cli_logging(
            app_info=settings.app,
            config=logging_config,
            paths=settings.paths,
        )
        logger.debug("CLI logging initialized", config=logging_config.model_dump())


def main() -> None:
    """Entrypoint for the create-local-addon CLI."""
    _setup_logging()
    app()
