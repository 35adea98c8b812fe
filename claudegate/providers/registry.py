# -*- coding: utf-8 -*-
"""Built-in provider definitions and registry."""

from __future__ import annotations

from typing import List, Optional

from ..constant import (
    ANTHROPIC_API_KEY,
    ANTHROPIC_AUTH_TOKEN,
    ANTHROPIC_BASE_URL,
    ANTHROPIC_MODEL,
)
from .models import (
    EnvVarSpec,
    FallbackModel,
    ModelFetching,
    ProviderDefinition,
    ResponseFormat,
)

# ---------------------------------------------------------------------------
# Shared variable specs
# ---------------------------------------------------------------------------


def _auth_token(label: str, description: str) -> EnvVarSpec:
    return EnvVarSpec(
        name=ANTHROPIC_AUTH_TOKEN,
        label=label,
        description=description,
        type="apiKey",
        sensitive=True,
        required=True,
    )


def _base_url(description: str, default: str) -> EnvVarSpec:
    return EnvVarSpec(
        name=ANTHROPIC_BASE_URL,
        label="Base URL",
        description=description,
        type="url",
        default=default,
        required=True,
    )


TIMEOUT_SPEC = EnvVarSpec(
    name="API_TIMEOUT_MS",
    label="Timeout (ms)",
    description="API request timeout in milliseconds",
    type="number",
    default=3000000,
    required=False,
)

# ---------------------------------------------------------------------------
# Provider definitions
# ---------------------------------------------------------------------------

PROVIDER_ANTHROPIC = ProviderDefinition(
    id="anthropic",
    name="Anthropic (Native)",
    description="Use your existing Claude CLI configuration",
    color="#D4A574",
    use_existing_config=True,
)

PROVIDER_ZAI = ProviderDefinition(
    id="zai",
    name="Z.AI (GLM Models)",
    description="Cheaper alternative using GLM-4.7 models",
    color="#4A90D9",
    env_vars=[
        _auth_token(
            "Z.AI API Key",
            "Your Z.AI authentication token from z.ai/manage-apikey",
        ),
        _base_url("Z.AI API endpoint", "https://api.z.ai/api/anthropic"),
        TIMEOUT_SPEC,
    ],
    model_fetching=ModelFetching(
        endpoint="https://api.z.ai/api/paas/v4/models",
        auth_key_env_var=ANTHROPIC_AUTH_TOKEN,
    ),
    fallback_models=[
        FallbackModel(id="glm-4.7", name="GLM-4.7", tier="opus"),
        FallbackModel(id="glm-4.6", name="GLM-4.6", tier="sonnet"),
        FallbackModel(
            id="glm-4.5-air",
            name="GLM-4.5 Air (fast)",
            tier="haiku",
        ),
    ],
)

PROVIDER_OPENROUTER = ProviderDefinition(
    id="openrouter",
    name="OpenRouter",
    description="Access 320+ models through OpenRouter",
    color="#6366F1",
    env_vars=[
        EnvVarSpec(
            name="OPENROUTER_API_KEY",
            label="OpenRouter API Key",
            description="Your OpenRouter API key",
            type="apiKey",
            sensitive=True,
            required=True,
        ),
        EnvVarSpec(
            name=ANTHROPIC_API_KEY,
            label="Anthropic Key Override",
            description="Must be empty for OpenRouter to work",
            type="string",
            default="",
            required=True,
        ),
        _base_url("OpenRouter API endpoint", "https://openrouter.ai/api"),
    ],
    model_fetching=ModelFetching(
        endpoint="https://openrouter.ai/api/v1/models",
        auth_key_env_var="OPENROUTER_API_KEY",
        response_format=ResponseFormat.OPENROUTER,
    ),
    fallback_models=[
        FallbackModel(
            id="anthropic/claude-sonnet-4",
            name="Claude Sonnet 4",
            tier="opus",
        ),
        FallbackModel(
            id="anthropic/claude-3.5-sonnet",
            name="Claude 3.5 Sonnet",
            tier="sonnet",
        ),
        FallbackModel(
            id="anthropic/claude-3-haiku",
            name="Claude 3 Haiku",
            tier="haiku",
        ),
    ],
)

PROVIDER_MOONSHOT = ProviderDefinition(
    id="moonshot",
    name="Kimi K2 (Moonshot AI)",
    description="90% cheaper - Moonshot AI Kimi K2 models",
    color="#10B981",
    env_vars=[
        _auth_token(
            "Moonshot API Key",
            "Your Moonshot AI API key from platform.moonshot.ai",
        ),
        _base_url(
            "Moonshot API endpoint",
            "https://api.moonshot.ai/anthropic",
        ),
    ],
    model_fetching=ModelFetching(
        endpoint="https://api.moonshot.ai/v1/models",
        auth_key_env_var=ANTHROPIC_AUTH_TOKEN,
    ),
    fallback_models=[
        FallbackModel(id="kimi-k2-0711-preview", name="Kimi K2", tier=tier)
        for tier in ("opus", "sonnet", "haiku")
    ],
)

PROVIDER_NOVITA = ProviderDefinition(
    id="novita",
    name="Novita AI",
    description="Novita AI provider",
    color="#F59E0B",
    env_vars=[
        _auth_token("Novita API Key", "Your Novita AI API key"),
        _base_url("Novita API endpoint", "https://api.novita.ai/anthropic"),
    ],
    model_fetching=ModelFetching(
        endpoint="https://api.novita.ai/v3/openai/models",
        auth_key_env_var=ANTHROPIC_AUTH_TOKEN,
    ),
    fallback_models=[
        FallbackModel(
            id="claude-3-5-sonnet",
            name="Claude 3.5 Sonnet",
            tier="opus",
        ),
        FallbackModel(
            id="claude-3-5-sonnet",
            name="Claude 3.5 Sonnet",
            tier="sonnet",
        ),
        FallbackModel(
            id="claude-3-haiku",
            name="Claude 3 Haiku",
            tier="haiku",
        ),
    ],
)

PROVIDER_MINIMAX = ProviderDefinition(
    id="minimax",
    name="MiniMax (M2 Models)",
    description="Agent-native M2/M2.1 models for coding workflows",
    color="#FF6B35",
    env_vars=[
        _auth_token(
            "MiniMax API Key",
            "Your MiniMax API key from platform.minimax.io",
        ),
        _base_url(
            "MiniMax Anthropic-compatible endpoint",
            "https://api.minimax.io/anthropic",
        ),
        TIMEOUT_SPEC,
    ],
    model_fetching=ModelFetching(
        endpoint="https://api.minimax.io/v1/models",
        auth_key_env_var=ANTHROPIC_AUTH_TOKEN,
    ),
    fallback_models=[
        FallbackModel(
            id="MiniMax-M2.1",
            name="MiniMax M2.1 (230B, code optimized)",
            tier="opus",
        ),
        FallbackModel(
            id="MiniMax-M2.1",
            name="MiniMax M2.1 (230B, code optimized)",
            tier="sonnet",
        ),
        FallbackModel(
            id="MiniMax-M2",
            name="MiniMax M2 (200k context, agentic)",
            tier="haiku",
        ),
    ],
)

PROVIDER_DEEPSEEK = ProviderDefinition(
    id="deepseek",
    name="DeepSeek (V3 Models)",
    description="Cost-effective 128K context models with reasoning",
    color="#1A73E8",
    env_vars=[
        _auth_token(
            "DeepSeek API Key",
            "Your DeepSeek API key from platform.deepseek.com",
        ),
        _base_url("DeepSeek API endpoint", "https://api.deepseek.com"),
        TIMEOUT_SPEC,
    ],
    model_fetching=ModelFetching(
        endpoint="https://api.deepseek.com/models",
        auth_key_env_var=ANTHROPIC_AUTH_TOKEN,
    ),
    fallback_models=[
        FallbackModel(
            id="deepseek-reasoner",
            name="DeepSeek Reasoner (thinking mode)",
            tier="opus",
        ),
        FallbackModel(
            id="deepseek-chat",
            name="DeepSeek Chat V3",
            tier="sonnet",
        ),
        FallbackModel(
            id="deepseek-chat",
            name="DeepSeek Chat V3",
            tier="haiku",
        ),
    ],
)

PROVIDER_CUSTOM = ProviderDefinition(
    id="custom",
    name="Custom / Self-hosted",
    description="LiteLLM, Hugging Face TGI, or other compatible endpoints",
    color="#8B5CF6",
    env_vars=[
        EnvVarSpec(
            name=ANTHROPIC_BASE_URL,
            label="Base URL",
            description="Your custom API endpoint URL",
            type="url",
            required=True,
        ),
        EnvVarSpec(
            name=ANTHROPIC_AUTH_TOKEN,
            label="Auth Token",
            description="Authentication token (if required)",
            type="apiKey",
            sensitive=True,
        ),
        EnvVarSpec(
            name=ANTHROPIC_API_KEY,
            label="API Key",
            description="API key (if required instead of token)",
            type="apiKey",
            sensitive=True,
        ),
        EnvVarSpec(
            name=ANTHROPIC_MODEL,
            label="Model",
            description="Model identifier (optional)",
            type="string",
        ),
    ],
)

# Registry: provider_id -> ProviderDefinition (declaration order is the
# order shown in menus)
PROVIDERS: dict[str, ProviderDefinition] = {
    p.id: p
    for p in (
        PROVIDER_ANTHROPIC,
        PROVIDER_ZAI,
        PROVIDER_OPENROUTER,
        PROVIDER_MOONSHOT,
        PROVIDER_NOVITA,
        PROVIDER_MINIMAX,
        PROVIDER_DEEPSEEK,
        PROVIDER_CUSTOM,
    )
}


def get_provider(provider_id: str) -> Optional[ProviderDefinition]:
    """Return a provider definition by id, or None if not found."""
    return PROVIDERS.get(provider_id)


def list_providers() -> List[ProviderDefinition]:
    """Return all registered provider definitions."""
    return list(PROVIDERS.values())


def supports_model_fetching(provider_id: str) -> bool:
    """Whether the provider exposes a live model listing endpoint."""
    provider = get_provider(provider_id)
    return bool(provider and provider.model_fetching)


def has_fallback_models(provider_id: str) -> bool:
    provider = get_provider(provider_id)
    return bool(provider and provider.fallback_models)
