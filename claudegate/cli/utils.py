# -*- coding: utf-8 -*-
"""Interactive prompt and console helpers shared by the CLI commands."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import click

from ..constant import LOG_LEVEL_ENV
from ..profiles import validate_profile_name
from ..providers import EnvVarSpec, ProviderDefinition

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")

LOG_LEVEL_OPTION = click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="warning",
    show_default=True,
    envvar=LOG_LEVEL_ENV,
    help="Logging verbosity.",
)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Status output
# ---------------------------------------------------------------------------


def show_success(message: str) -> None:
    click.echo(f"{click.style('  ✓', fg='green')} {message}")


def show_error(message: str) -> None:
    click.echo(f"{click.style('  ✗', fg='red')} {message}")


def show_info(message: str) -> None:
    click.echo(f"{click.style('  i', fg='blue')} {message}")


def show_warning(message: str) -> None:
    click.echo(f"{click.style('  ⚠', fg='yellow')} {message}")


def show_divider() -> None:
    click.echo(click.style("  " + "─" * 55, dim=True))


def show_banner() -> None:
    border = "═" * 55
    click.echo()
    click.secho(f"  ╔{border}╗", fg="cyan", bold=True)
    click.echo(
        click.style("  ║", fg="cyan", bold=True)
        + click.style("CLAUDEGATE".center(55), fg="white", bold=True)
        + click.style("║", fg="cyan", bold=True),
    )
    click.secho(f"  ╚{border}╝", fg="cyan", bold=True)
    click.echo()


def mask_api_key(api_key: str, visible_chars: int = 4) -> str:
    """Mask an API key for safe display.

    Example: ``"sk-abcdefghijk"`` → ``"sk-****hijk"``
    """
    if not api_key:
        return ""
    if len(api_key) <= visible_chars:
        return "*" * len(api_key)
    prefix = api_key[:3] if len(api_key) > 3 else ""
    suffix = api_key[-visible_chars:]
    hidden_len = len(api_key) - len(prefix) - visible_chars
    return f"{prefix}{'*' * max(hidden_len, 4)}{suffix}"


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


def prompt_choice(
    prompt_text: str,
    options: Sequence[str],
    default: Optional[int] = None,
) -> int:
    """Show a numbered menu and return the zero-based index picked.

    *default* is a zero-based index pre-selected on Enter.
    """
    if not options:
        raise ValueError("options cannot be empty")

    click.echo()
    click.secho(prompt_text, fg="green", bold=True)
    for i, label in enumerate(options, 1):
        click.echo(f"  {click.style(str(i), fg='cyan')}. {label}")

    choice = click.prompt(
        "Enter choice",
        type=click.IntRange(1, len(options)),
        default=default + 1 if default is not None else None,
    )
    return choice - 1


def prompt_profile_name(default: Optional[str] = None) -> str:
    while True:
        name = click.prompt("Profile name", default=default).strip()
        error = validate_profile_name(name)
        if error is None:
            return name
        show_error(error)


CLEAR_VALUE = "-"


def _prompt_env_var(spec: EnvVarSpec, existing: Optional[str]) -> str:
    # Clearing a variable with a default falls back to that default.
    clearable = bool(existing) and (
        not spec.required or spec.default is not None
    )
    hints = [] if spec.required else ["optional"]
    if clearable:
        hints.append(f"{CLEAR_VALUE} to clear")
    suffix = f" ({', '.join(hints)})" if hints else ""
    default = existing
    if default is None and spec.default is not None:
        default = str(spec.default)

    while True:
        value = click.prompt(
            f"{spec.label}{suffix}",
            default=default if default is not None else "",
            hide_input=spec.sensitive,
            show_default=bool(default) and not spec.sensitive,
        ).strip()
        if clearable and value == CLEAR_VALUE:
            return ""
        # A declared default satisfies a required variable.
        if value or not spec.required or spec.default is not None:
            return value
        show_error(f"{spec.label} is required")


def prompt_env_vars(
    provider: ProviderDefinition,
    existing: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """Prompt for every variable the provider declares.

    Only non-empty answers are returned; with *existing*, pressing Enter
    keeps the stored value and ``-`` clears an optional one.
    """
    existing = existing or {}
    values: Dict[str, str] = {}
    for spec in provider.env_vars:
        value = _prompt_env_var(spec, existing.get(spec.name))
        if value:
            values[spec.name] = value
    return values


def sensitive_names(provider: Optional[ProviderDefinition]) -> List[str]:
    if provider is None:
        return []
    return [spec.name for spec in provider.env_vars if spec.sensitive]
