# -*- coding: utf-8 -*-
"""CLI commands for inspecting the built-in providers."""
from __future__ import annotations

from typing import Optional

import click

from ..config import load_config
from ..providers import (
    PROVIDERS,
    get_models_for_provider,
    get_unique_fallback_models,
    list_providers,
)
from .utils import show_warning


@click.group("providers")
def providers_group() -> None:
    """Inspect supported providers and their models."""


@providers_group.command("list")
def list_cmd() -> None:
    """Show all providers and the variables they use."""
    click.echo("\n=== Providers ===")
    for defn in list_providers():
        click.echo(f"\n{'─' * 44}")
        click.echo(f"  {defn.name} ({defn.id})")
        click.echo(f"{'─' * 44}")
        click.echo(f"  {defn.description}")
        if defn.use_existing_config:
            click.echo("  uses your existing Claude CLI configuration")
            continue
        for spec in defn.env_vars:
            flags = "required" if spec.required else "optional"
            if spec.default is not None and str(spec.default):
                flags += f", default: {spec.default}"
            click.echo(f"  {spec.name:30s}: {flags}")
        if defn.model_fetching is not None:
            click.echo(f"  {'models':30s}: {defn.model_fetching.endpoint}")
    click.echo()


@providers_group.command("models")
@click.argument("provider_id")
@click.option(
    "--api-key",
    default=None,
    help="Credential for the live model listing.",
)
def models_cmd(provider_id: str, api_key: Optional[str]) -> None:
    """List a provider's models (live if an API key is given)."""
    defn = PROVIDERS.get(provider_id)
    if defn is None:
        click.echo(click.style(f"Unknown provider: {provider_id}", fg="red"))
        raise SystemExit(1)

    if api_key:
        timeout = load_config().settings.timeout / 1000
        result = get_models_for_provider(defn, api_key, timeout=timeout)
        if result.error:
            show_warning(result.error)
        models = result.models
    else:
        models = get_unique_fallback_models(defn)

    if not models:
        click.echo("No models available.")
        return
    for model in models:
        line = f"{model.id:40s} {model.name}"
        if model.description:
            line += click.style(f"  {model.description}", dim=True)
        click.echo(line)
