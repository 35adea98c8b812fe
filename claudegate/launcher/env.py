# -*- coding: utf-8 -*-
"""Turning a profile into the environment the Claude CLI is launched with."""

from __future__ import annotations

import os
from typing import Dict, Mapping, Optional

from ..config import Profile
from ..constant import ANTHROPIC_API_KEY, MODEL_SLOT_ENV_VARS
from ..providers import ProviderDefinition, get_provider


def build_env_vars(
    profile: Profile,
    provider: Optional[ProviderDefinition] = None,
) -> Dict[str, str]:
    """Return the variables *profile* sets on top of the ambient env.

    An empty mapping means "leave the environment alone": the provider is
    native (``use_existing_config``) or no longer registered. Otherwise the
    result holds, in order, the cleared native key, provider defaults,
    non-empty profile overrides and the selected models; later writes win.

    ``ANTHROPIC_API_KEY`` is always ``""`` for non-native providers, even
    if the profile overrides it. An exported native key would otherwise
    make the CLI ignore ``ANTHROPIC_BASE_URL`` and talk to Anthropic.
    """
    if provider is None:
        provider = get_provider(profile.provider_id)
    if provider is None or provider.use_existing_config:
        return {}

    env: Dict[str, str] = {ANTHROPIC_API_KEY: ""}

    for spec in provider.env_vars:
        if spec.default is not None:
            env[spec.name] = str(spec.default)

    for key, value in profile.env_vars.items():
        if value:
            env[key] = value

    env[ANTHROPIC_API_KEY] = ""

    if profile.selected_models is not None:
        for slot, model in profile.selected_models.slots():
            env[MODEL_SLOT_ENV_VARS[slot]] = model.id

    return env


def merge_env(
    profile_env: Mapping[str, str],
    base: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Overlay *profile_env* on *base* (``os.environ`` by default)."""
    merged = dict(os.environ if base is None else base)
    merged.update(profile_env)
    return merged
