# -*- coding: utf-8 -*-
"""Provider registry, models and live model listing."""

from .models import (
    TIERS,
    EnvVarSpec,
    FallbackModel,
    ModelFetchErrorKind,
    ModelFetchResult,
    ModelFetching,
    ModelInfo,
    ProviderDefinition,
    ResponseFormat,
    Tier,
)
from .registry import (
    PROVIDERS,
    get_provider,
    has_fallback_models,
    list_providers,
    supports_model_fetching,
)
from .model_service import (
    fetch_models,
    get_fallback_models,
    get_fallback_models_for_tier,
    get_models_for_provider,
    get_unique_fallback_models,
)

__all__ = [
    # models
    "TIERS",
    "EnvVarSpec",
    "FallbackModel",
    "ModelFetchErrorKind",
    "ModelFetchResult",
    "ModelFetching",
    "ModelInfo",
    "ProviderDefinition",
    "ResponseFormat",
    "Tier",
    # registry
    "PROVIDERS",
    "get_provider",
    "has_fallback_models",
    "list_providers",
    "supports_model_fetching",
    # model service
    "fetch_models",
    "get_fallback_models",
    "get_fallback_models_for_tier",
    "get_models_for_provider",
    "get_unique_fallback_models",
]
