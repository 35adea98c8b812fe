# -*- coding: utf-8 -*-
"""CLI commands and interactive flows for managing profiles."""
from __future__ import annotations

import click

from ..config import Profile, load_config
from ..constant import ANTHROPIC_BASE_URL
from ..launcher import build_env_vars
from ..profiles import (
    create_profile,
    delete_profile,
    get_active_profile_id,
    get_all_profiles,
    get_profile_by_id,
    get_profile_by_name,
    set_active_profile,
    update_profile,
)
from ..providers import get_provider, list_providers
from .model_select import (
    api_key_for,
    select_models,
    supports_model_selection,
)
from .utils import (
    mask_api_key,
    prompt_choice,
    prompt_env_vars,
    prompt_profile_name,
    sensitive_names,
    show_error,
    show_info,
    show_success,
)


def _timeout_seconds() -> float:
    return load_config().settings.timeout / 1000


def provider_label(profile: Profile) -> str:
    provider = get_provider(profile.provider_id)
    return provider.name if provider else profile.provider_id


def resolve_profile(ref: str) -> Profile:
    """Find a profile by id or name, or exit with an error."""
    profile = get_profile_by_id(ref) or get_profile_by_name(ref)
    if profile is None:
        click.echo(click.style(f"Unknown profile: {ref}", fg="red"))
        raise SystemExit(1)
    return profile


# ---------------------------------------------------------------------------
# Interactive flows
# ---------------------------------------------------------------------------


def add_profile_flow() -> Profile:
    """Create a profile interactively and make it active."""
    providers = list_providers()
    labels = [
        f"{p.name} - {click.style(p.description, dim=True)}" for p in providers
    ]
    index = prompt_choice("Select provider:", labels)
    provider = providers[index]

    click.echo()
    name = prompt_profile_name()

    env_vars: dict = {}
    if provider.env_vars:
        click.echo()
        click.echo(click.style(f"  Configure {provider.name}:", dim=True))
        env_vars = prompt_env_vars(provider)

    selected_models = None
    if supports_model_selection(provider):
        api_key = api_key_for(provider, env_vars)
        if api_key:
            click.echo()
            click.secho("  Model Selection:", fg="cyan")
            selected_models = select_models(
                provider,
                api_key,
                timeout=_timeout_seconds(),
            )

    profile = create_profile(name, provider.id, env_vars, selected_models)
    set_active_profile(profile.id)
    click.echo()
    show_success(f"Profile '{name}' created and set as active!")
    return profile


def edit_profile_flow(profile: Profile) -> None:
    provider = get_provider(profile.provider_id)
    if provider is None:
        show_error("Unknown provider")
        return

    click.echo()
    name = prompt_profile_name(profile.name)

    declared = {spec.name for spec in provider.env_vars}
    # Undeclared keys (hand-edited) are kept; declared ones are re-asked.
    env_vars = {
        key: value
        for key, value in profile.env_vars.items()
        if key not in declared
    }
    if provider.env_vars:
        click.echo()
        click.echo(
            click.style("  Leave blank to keep existing value", dim=True),
        )
        env_vars.update(prompt_env_vars(provider, profile.env_vars))

    update_profile(profile.id, name=name, env_vars=env_vars)
    click.echo()
    show_success(f"Profile '{name}' updated!")


def change_models_flow(profile: Profile) -> None:
    provider = get_provider(profile.provider_id)
    if provider is None:
        show_error("Unknown provider")
        return
    if not supports_model_selection(provider):
        show_error(f"{provider.name} does not offer model selection")
        return

    api_key = api_key_for(provider, profile.env_vars)
    if not api_key:
        show_error("No API key configured for this profile")
        return

    click.echo()
    click.secho("  Model Selection:", fg="cyan")
    selected = select_models(
        provider,
        api_key,
        profile.selected_models,
        timeout=_timeout_seconds(),
    )
    update_profile(profile.id, selected_models=selected)
    click.echo()
    show_success("Models updated!")


def delete_profile_flow(
    profile: Profile,
    *,
    assume_yes: bool = False,
) -> None:
    if get_active_profile_id() == profile.id:
        show_info("This is your active profile.")
    if not assume_yes and not click.confirm(
        f"Delete profile '{profile.name}'?",
        default=False,
    ):
        show_info("Cancelled")
        return
    delete_profile(profile.id)
    show_success(f"Profile '{profile.name}' deleted!")


def check_profile_flow(profile: Profile) -> None:
    """Show what launching with *profile* would configure."""
    provider = get_provider(profile.provider_id)
    click.echo()
    show_info(f"Testing profile: {profile.name}")
    show_info(f"Provider: {provider_label(profile)}")

    if profile.selected_models is not None:
        click.echo()
        for slot, model in profile.selected_models.slots():
            show_info(f"{slot.capitalize()} model: {model.name}")
    click.echo()

    if provider is None:
        show_error("Provider is no longer available")
    elif provider.use_existing_config:
        show_success("Uses your existing Claude CLI configuration")
    else:
        url = build_env_vars(profile, provider).get(ANTHROPIC_BASE_URL)
        if url:
            show_info(f"Endpoint: {url}")
        show_success("Configuration looks valid")


def manage_profiles_flow() -> None:
    """Pick a profile, then an action to run on it."""
    profiles = get_all_profiles()
    if not profiles:
        click.echo()
        show_info("No profiles to manage. Add a profile first.")
        return

    labels = [f"{p.name} ({provider_label(p)})" for p in profiles]
    labels.append(click.style("← Back", dim=True))
    index = prompt_choice("Select profile to manage:", labels)
    if index == len(profiles):
        return
    profile = profiles[index]

    actions = [("Edit - Modify settings", edit_profile_flow)]
    if supports_model_selection(get_provider(profile.provider_id)):
        actions.append(
            ("Change Models - Select different models", change_models_flow),
        )
    actions += [
        ("Delete - Remove this profile", delete_profile_flow),
        ("Test - Verify configuration", check_profile_flow),
    ]
    labels = [label for label, _ in actions]
    labels.append(click.style("← Back", dim=True))

    index = prompt_choice(f"Action for '{profile.name}':", labels)
    if index == len(actions):
        return
    actions[index][1](profile)


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------


@click.group("profiles")
def profiles_group() -> None:
    """Manage launch profiles."""


@profiles_group.command("list")
def list_cmd() -> None:
    """Show all profiles."""
    config = load_config()
    if not config.profiles:
        click.echo("No profiles configured.")
        return
    for profile in config.profiles:
        marker = "●" if profile.id == config.active_profile_id else " "
        click.echo(
            f"{marker} {profile.name:24s} {provider_label(profile):24s} "
            f"{profile.id}",
        )


@profiles_group.command("add")
def add_cmd() -> None:
    """Interactively create a profile."""
    add_profile_flow()


@profiles_group.command("edit")
@click.argument("profile_ref")
def edit_cmd(profile_ref: str) -> None:
    """Edit a profile's name and variables."""
    edit_profile_flow(resolve_profile(profile_ref))


@profiles_group.command("models")
@click.argument("profile_ref")
def models_cmd(profile_ref: str) -> None:
    """Change the models selected for a profile."""
    change_models_flow(resolve_profile(profile_ref))


@profiles_group.command("delete")
@click.argument("profile_ref")
@click.option("--yes", "-y", is_flag=True, help="Do not ask to confirm.")
def delete_cmd(profile_ref: str, yes: bool) -> None:
    """Delete a profile."""
    delete_profile_flow(resolve_profile(profile_ref), assume_yes=yes)


@profiles_group.command("use")
@click.argument("profile_ref")
def use_cmd(profile_ref: str) -> None:
    """Make a profile the active one."""
    profile = resolve_profile(profile_ref)
    set_active_profile(profile.id)
    show_success(f"Switched to: {profile.name}")


@profiles_group.command("env")
@click.argument("profile_ref")
@click.option(
    "--show-secrets",
    is_flag=True,
    help="Print sensitive values unmasked.",
)
def env_cmd(profile_ref: str, show_secrets: bool) -> None:
    """Print the variables a profile sets at launch."""
    profile = resolve_profile(profile_ref)
    provider = get_provider(profile.provider_id)
    env = build_env_vars(profile, provider)
    if not env:
        click.echo("(no variables; the ambient environment is used)")
        return
    hidden = set() if show_secrets else set(sensitive_names(provider))
    for key, value in env.items():
        shown = mask_api_key(value) if key in hidden else value
        click.echo(f"{key}={shown}")
