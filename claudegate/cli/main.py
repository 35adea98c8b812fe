# -*- coding: utf-8 -*-
"""Entry points: ``claudegate`` (pick a profile and launch Claude) and
``claudegate-config`` (non-interactive profile/provider management).
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

import click

from ..config import Profile, get_config_path, load_config
from ..constant import (
    ANTHROPIC_BASE_URL,
    MODEL_SLOT_ENV_VARS,
    NATIVE_PROFILE_ID,
)
from ..launcher import LaunchError, build_env_vars, launch_claude
from ..profiles import native_profile, set_active_profile
from ..providers import get_provider
from .profiles_cmd import (
    add_profile_flow,
    manage_profiles_flow,
    profiles_group,
    provider_label,
    resolve_profile,
)
from .providers_cmd import providers_group
from .utils import (
    LOG_LEVEL_OPTION,
    prompt_choice,
    setup_logging,
    show_banner,
    show_divider,
    show_info,
    show_success,
)

logger = logging.getLogger(__name__)

_ADD = "__add__"
_MANAGE = "__manage__"


def _selector_entries(
    profiles: List[Profile],
    active_id: Optional[str],
) -> List[Tuple[str, Union[Profile, str]]]:
    """Return ``(label, target)`` rows; target is a Profile or an action."""

    def row(profile: Profile, label: str, active: bool):
        marker = click.style("●", fg="green") if active else " "
        current = click.style(" [current]", dim=True) if active else ""
        return f"{marker} {label}{current}", profile

    native = native_profile()
    native_active = active_id in (None, NATIVE_PROFILE_ID)
    entries = [row(native, native.name, native_active)]
    for profile in profiles:
        entries.append(
            row(
                profile,
                f"{profile.name} ({provider_label(profile)})",
                profile.id == active_id,
            ),
        )
    entries.append((click.style("+ Add new profile", fg="cyan"), _ADD))
    if profiles:
        manage = click.style("⚙ Manage profiles", fg="yellow")
        entries.append((manage, _MANAGE))
    return entries


def show_profile_selector() -> Profile:
    """Loop on the main menu until a profile is picked or created."""
    while True:
        show_banner()
        config = load_config()
        entries = _selector_entries(config.profiles, config.active_profile_id)

        default = 0
        for i, (_, target) in enumerate(entries):
            if (
                isinstance(target, Profile)
                and target.id == config.active_profile_id
            ):
                default = i

        index = prompt_choice(
            "Select active profile:",
            [label for label, _ in entries],
            default=default,
        )
        target = entries[index][1]

        if target == _ADD:
            return add_profile_flow()
        if target == _MANAGE:
            manage_profiles_flow()
            continue

        if config.active_profile_id != target.id:
            set_active_profile(target.id)
            click.echo()
            show_success(f"Switched to: {target.name}")
        return target


def _pick_profile(profile_ref: str) -> Profile:
    if profile_ref in (NATIVE_PROFILE_ID, "native", "anthropic"):
        return native_profile()
    return resolve_profile(profile_ref)


def show_launch_summary(profile: Profile) -> None:
    provider = get_provider(profile.provider_id)
    click.echo()
    show_divider()
    click.echo()
    if provider is not None and provider.use_existing_config:
        show_info("Using your existing Claude CLI configuration")
    else:
        env = build_env_vars(profile, provider)
        show_info(f"Provider: {provider_label(profile)}")
        if env.get(ANTHROPIC_BASE_URL):
            show_info(f"Endpoint: {env[ANTHROPIC_BASE_URL]}")
        sonnet = env.get(MODEL_SLOT_ENV_VARS["sonnet"])
        if sonnet:
            show_info(f"Model: {sonnet}")
    click.echo()
    show_divider()
    click.echo()


@click.command(
    "claudegate",
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
@click.option(
    "--profile",
    "-P",
    "profile_ref",
    default=None,
    help="Launch with this profile (name or id) instead of the menu.",
)
@LOG_LEVEL_OPTION
@click.argument("claude_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def main(
    ctx: click.Context,
    profile_ref: Optional[str],
    log_level: str,
    claude_args: Tuple[str, ...],
) -> None:
    """Pick a profile and launch Claude; CLAUDE_ARGS are passed through."""
    setup_logging(log_level)
    logger.debug("Passing %d arguments to claude", len(claude_args))
    try:
        if profile_ref:
            profile = _pick_profile(profile_ref)
        else:
            profile = show_profile_selector()
    except click.Abort:
        click.echo()
        ctx.exit(0)

    show_launch_summary(profile)
    try:
        code = launch_claude(profile, claude_args)
    except LaunchError as exc:
        click.echo(click.style(f"Error: {exc}", fg="red"), err=True)
        ctx.exit(1)
    ctx.exit(code)


@click.group("claudegate-config")
@LOG_LEVEL_OPTION
def config_cli(log_level: str) -> None:
    """Manage ClaudeGate profiles and inspect providers."""
    setup_logging(log_level)


@config_cli.command("path")
def path_cmd() -> None:
    """Print the location of the config file."""
    click.echo(str(get_config_path()))


config_cli.add_command(profiles_group)
config_cli.add_command(providers_group)
