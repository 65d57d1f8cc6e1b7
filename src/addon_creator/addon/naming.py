"""Add-on name negotiation."""

from __future__ import annotations

from collections.abc import Callable, Set

from addon_creator.common import create_logger

logger = create_logger("addon.naming")

type Prompter = Callable[[str, str], str]
"""Ask the user a question, ``(message, default) -> answer``."""

NAME_QUESTION = "What is the name of your add-on?"


def validate_addon_name(name: str) -> str | None:
    """Return why ``name`` cannot be used as an add-on directory, or None."""
    if not name.strip():
        return "the name cannot be empty"
    if name in {".", ".."}:
        return "the name cannot be a relative directory reference"
    if "/" in name or "\\" in name:
        return "the name cannot contain path separators"
    if not name.isprintable():
        return "the name cannot contain control characters"
    if name.startswith("."):
        return "the name cannot start with a dot"
    return None


def negotiate_name(
    existing: Set[str],
    prompt: Prompter,
    *,
    default: str,
    explicit_name: str | None = None,
) -> str:
    """Settle on a name that is usable and not already taken.

    The explicit name, when given, is the first candidate; otherwise the user
    is asked. Unusable or colliding candidates are re-prompted until one passes.
    """
    candidate = explicit_name if explicit_name is not None else prompt(NAME_QUESTION, default)

    while True:
        if (problem := validate_addon_name(candidate)) is not None:
            logger.debug("Rejected add-on name", name=candidate, reason=problem)
            candidate = prompt(f"'{candidate}' cannot be used because {problem}. {NAME_QUESTION}", default)
            continue
        if candidate in existing:
            logger.debug("Add-on name already taken", name=candidate)
            candidate = prompt(f"An add-on with the provided name already exists. {NAME_QUESTION}", default)
            continue
        break

    logger.info("Add-on name chosen", name=candidate)
    return candidate
