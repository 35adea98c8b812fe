# -*- coding: utf-8 -*-
"""Interactive model selection for a profile's tier slots."""

from __future__ import annotations

from typing import List, Optional, Tuple

import click

from ..config import SelectedModel, SelectedModels
from ..constant import ANTHROPIC_AUTH_TOKEN
from ..profiles import now_iso
from ..providers import (
    ModelFetchErrorKind,
    ModelInfo,
    ProviderDefinition,
    Tier,
    get_fallback_models_for_tier,
    get_models_for_provider,
    has_fallback_models,
)
from .utils import prompt_choice, show_error, show_warning

MAX_CHOICES = 20

_SKIP = "__skip__"
_CUSTOM = "__custom__"

# (slot, menu label, tier whose fallbacks are recommended)
SLOTS: List[Tuple[str, str, Tier]] = [
    ("haiku", "HAIKU (fast/cheap tasks)", "haiku"),
    ("sonnet", "SONNET (balanced tasks)", "sonnet"),
    ("opus", "OPUS (complex reasoning)", "opus"),
    ("default", "DEFAULT (ANTHROPIC_MODEL)", "sonnet"),
    ("subagent", "SUBAGENT (fast tasks)", "haiku"),
]

_LOUD_ERRORS = (
    ModelFetchErrorKind.SERVER_ERROR,
    ModelFetchErrorKind.UNREACHABLE,
)


def supports_model_selection(provider: Optional[ProviderDefinition]) -> bool:
    if provider is None or provider.use_existing_config:
        return False
    return provider.model_fetching is not None or has_fallback_models(
        provider.id,
    )


def api_key_for(provider: ProviderDefinition, env_vars: dict) -> str:
    """Return the credential used to list the provider's models."""
    if provider.model_fetching is not None:
        var = provider.model_fetching.auth_key_env_var
    else:
        var = ANTHROPIC_AUTH_TOKEN
    return env_vars.get(var, "")


def select_model_for_slot(
    label: str,
    all_models: List[ModelInfo],
    tier_fallbacks: List[ModelInfo],
    current: Optional[SelectedModel] = None,
) -> Optional[SelectedModel]:
    """Pick one model: skip, recommended, listed, or a custom id.

    Returns ``None`` when the slot is skipped.
    """
    # (menu label, value)
    choices: List[Tuple[str, str]] = [
        (
            "Skip (use provider default)"
            + (f" - current: {current.name}" if current else ""),
            _SKIP,
        ),
    ]
    values = {_SKIP}

    def add(text: str, value: str) -> None:
        if value not in values:
            values.add(value)
            choices.append((text, value))

    if current and all(m.id != current.id for m in all_models):
        add(f"{current.name} (current)", current.id)
    for model in tier_fallbacks:
        add(f"{model.name} (Recommended)", model.id)
    for model in all_models:
        text = model.name
        if model.description:
            text += click.style(f" - {model.description}", dim=True)
        add(text, model.id)

    if len(choices) >= MAX_CHOICES:
        choices = choices[: MAX_CHOICES - 1]
    custom_label = click.style("Enter custom model ID...", fg="cyan")
    choices.append((custom_label, _CUSTOM))

    index = prompt_choice(
        f"Select model for {label}:",
        [text for text, _ in choices],
        default=0,
    )
    value = choices[index][1]
    if value == _SKIP:
        return None
    if value == _CUSTOM:
        while True:
            custom = click.prompt("Enter model ID").strip()
            if custom:
                return SelectedModel(id=custom, name=custom)
            show_error("Model ID is required")

    names = {m.id: m.name for m in tier_fallbacks}
    names.update({m.id: m.name for m in all_models})
    if current is not None:
        names.setdefault(current.id, current.name)
    return SelectedModel(id=value, name=names.get(value, value))


def select_models(
    provider: ProviderDefinition,
    api_key: str,
    current: Optional[SelectedModels] = None,
    *,
    timeout: Optional[float] = None,
) -> SelectedModels:
    """Fetch the provider's models and prompt for every slot."""
    click.echo(click.style("  Fetching available models...", dim=True))
    result = get_models_for_provider(provider, api_key, timeout=timeout)

    if result.error:
        if result.error_kind in _LOUD_ERRORS:
            show_error(result.error)
        else:
            show_warning(result.error)
    if not result.models:
        show_warning("No models available. You can enter custom model IDs.")

    click.echo()
    click.echo(
        click.style(
            "  Select models for each tier (or skip to use defaults):",
            dim=True,
        ),
    )

    picks = {}
    for slot, label, tier in SLOTS:
        picks[slot] = select_model_for_slot(
            label,
            result.models,
            get_fallback_models_for_tier(provider, tier),
            getattr(current, slot) if current else None,
        )
    return SelectedModels(last_fetched=now_iso(), **picks)
