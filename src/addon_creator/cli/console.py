"""Severity-marked terminal output."""

from __future__ import annotations

import typer

BANNER = "LOCAL ADDON CREATOR"


class ConsoleReporter:
    """Prints progress messages prefixed with a colored severity marker."""

    def banner(self) -> None:
        typer.secho(f" {BANNER:^78} ", fg=typer.colors.WHITE, bg=typer.colors.GREEN, bold=True)

    def info(self, message: str) -> None:
        self._emit("INFO", typer.colors.YELLOW, message)

    def prompt(self, message: str) -> None:
        self._emit("PROMPTS", typer.colors.CYAN, message)

    def success(self, message: str) -> None:
        self._emit("DONE", typer.colors.GREEN, message)

    def warning(self, message: str) -> None:
        self._emit("WARNING", typer.colors.RED, message)

    def error(self, message: str) -> None:
        self._emit("ERROR", typer.colors.RED, message, err=True)

    def hint(self, message: str) -> None:
        typer.secho(f"hint: {message}", err=True, fg=typer.colors.CYAN)

    def detail(self, message: str) -> None:
        typer.secho(f"  {message}", err=True)

    def _emit(self, marker: str, color: str, message: str, *, err: bool = False) -> None:
        typer.echo(err=err)
        typer.secho(f"{marker}: ", fg=color, bold=True, nl=False, err=err)
        typer.echo(message, err=err)


def prompt_user(message: str, default: str) -> str:
    return typer.prompt(message, default=default)
