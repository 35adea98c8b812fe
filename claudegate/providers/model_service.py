# -*- coding: utf-8 -*-
"""Listing the models a provider offers (live endpoint or built-in list).

Nothing here raises: every failure is reported through
:class:`ModelFetchResult` so menus can fall back to the built-in
recommendations instead of aborting the session.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Union

import httpx

from ..constant import OPENROUTER_MODEL_LIMIT
from .models import (
    FallbackModel,
    ModelFetchErrorKind,
    ModelFetchResult,
    ModelInfo,
    ProviderDefinition,
    ResponseFormat,
    Tier,
)
from .registry import get_provider

logger = logging.getLogger(__name__)

FALLBACK_SUFFIX = " - showing fallback models"

ProviderRef = Union[ProviderDefinition, str]


def _resolve(provider: ProviderRef) -> Optional[ProviderDefinition]:
    if isinstance(provider, ProviderDefinition):
        return provider
    return get_provider(provider)


# ---------------------------------------------------------------------------
# Built-in (fallback) models
# ---------------------------------------------------------------------------


def get_fallback_models(provider: ProviderRef) -> List[FallbackModel]:
    """Return the provider's declared fallback list (may repeat ids)."""
    defn = _resolve(provider)
    return list(defn.fallback_models) if defn else []


def get_fallback_models_for_tier(
    provider: ProviderRef,
    tier: Tier,
) -> List[ModelInfo]:
    """Return fallback models recommended for *tier*, without the tier."""
    return [
        m.to_model() for m in get_fallback_models(provider) if m.tier == tier
    ]


def get_unique_fallback_models(provider: ProviderRef) -> List[ModelInfo]:
    """Return fallback models deduplicated by id, first occurrence wins."""
    seen: set[str] = set()
    unique: List[ModelInfo] = []
    for model in get_fallback_models(provider):
        if model.id in seen:
            continue
        seen.add(model.id)
        unique.append(model.to_model())
    return unique


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------


def _entries(data: Any) -> List[dict]:
    """Return the dict entries of a top-level ``data`` array, else []."""
    if not isinstance(data, dict):
        return []
    items = data.get("data")
    if not isinstance(items, list):
        return []
    return [
        item for item in items if isinstance(item, dict) and item.get("id")
    ]


def parse_openrouter_models(data: Any) -> List[ModelInfo]:
    """Parse an OpenRouter listing: ``{"data": [{id, name, description}]}``."""
    models = [
        ModelInfo(
            id=str(item["id"]),
            name=str(item.get("name") or item["id"]),
            description=str(item["description"])
            if item.get("description")
            else None,
        )
        for item in _entries(data)
    ]
    return models[:OPENROUTER_MODEL_LIMIT]


def parse_openai_models(data: Any) -> List[ModelInfo]:
    """Parse an OpenAI-compatible listing: ``{"data": [{id, owned_by}]}``."""
    models = []
    for item in _entries(data):
        owner = item.get("owned_by")
        models.append(
            ModelInfo(
                id=str(item["id"]),
                name=str(item["id"]),
                description=f"Owned by: {owner}" if owner else None,
            ),
        )
    return models


_PARSERS: Dict[ResponseFormat, Callable[[Any], List[ModelInfo]]] = {
    ResponseFormat.OPENROUTER: parse_openrouter_models,
    ResponseFormat.OPENAI: parse_openai_models,
}


def parse_models_response(
    response_format: ResponseFormat,
    data: Any,
) -> List[ModelInfo]:
    return _PARSERS[response_format](data)


# ---------------------------------------------------------------------------
# Live listing
# ---------------------------------------------------------------------------


def _classify_status(response: httpx.Response) -> ModelFetchResult:
    status = response.status_code
    if status in (401, 403):
        return ModelFetchResult.failure(
            ModelFetchErrorKind.UNAUTHORIZED,
            "API key not authorized (may need account balance)",
        )
    if status == 429:
        return ModelFetchResult.failure(
            ModelFetchErrorKind.RATE_LIMITED,
            "Rate limited - try again later",
        )
    if status >= 500:
        return ModelFetchResult.failure(
            ModelFetchErrorKind.SERVER_ERROR,
            f"Server error ({status}) - provider may be down",
        )
    return ModelFetchResult.failure(
        ModelFetchErrorKind.API_ERROR,
        f"API error: {status} {response.reason_phrase}".rstrip(),
    )


def _get(
    url: str,
    headers: dict,
    client: Optional[httpx.Client],
    timeout: Optional[float],
) -> httpx.Response:
    if client is not None:
        return client.get(url, headers=headers, follow_redirects=True)
    kwargs = {} if timeout is None else {"timeout": timeout}
    with httpx.Client(follow_redirects=True, **kwargs) as owned:
        return owned.get(url, headers=headers)


def fetch_models(
    provider: ProviderRef,
    api_key: str,
    *,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None,
) -> ModelFetchResult:
    """List the provider's models from its live endpoint.

    Providers without an endpoint get their deduplicated fallback list.
    Failures come back as ``success=False`` with an empty model list; the
    fallback substitution is left to :func:`get_models_for_provider`.
    *client* may be passed to reuse a connection pool (or, in tests, a
    mock transport). *timeout* is in seconds.
    """
    defn = _resolve(provider)
    if defn is None:
        return ModelFetchResult.failure(
            ModelFetchErrorKind.NOT_FOUND,
            "Provider not found",
        )

    fetching = defn.model_fetching
    if fetching is None or not fetching.endpoint:
        return ModelFetchResult.ok(get_unique_fallback_models(defn))

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    logger.debug("Listing models for %s from %s", defn.id, fetching.endpoint)
    try:
        response = _get(fetching.endpoint, headers, client, timeout)
        if not response.is_success:
            result = _classify_status(response)
            logger.warning(
                "Model listing for %s failed: %s",
                defn.id,
                result.error,
            )
            return result
        data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        detail = str(exc) or type(exc).__name__
        logger.warning("Model listing for %s failed: %s", defn.id, detail)
        return ModelFetchResult.failure(
            ModelFetchErrorKind.UNREACHABLE,
            f"Fetch failed: {detail}",
        )

    models = parse_models_response(fetching.response_format, data)
    logger.debug("Provider %s returned %d models", defn.id, len(models))
    return ModelFetchResult.ok(models)


def get_models_for_provider(
    provider: ProviderDefinition,
    api_key: str,
    *,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None,
) -> ModelFetchResult:
    """Return live models, falling back to the built-in list.

    A failed or empty live listing is replaced by the unique fallback
    models with ``success=True``; the upstream error is kept, suffixed
    with ``" - showing fallback models"``. When there is nothing to fall
    back to, the live result is returned unchanged.
    """
    if provider.model_fetching is None:
        return ModelFetchResult.ok(get_unique_fallback_models(provider))

    result = fetch_models(provider, api_key, client=client, timeout=timeout)
    if result.success and result.models:
        return result

    fallbacks = get_unique_fallback_models(provider)
    if not fallbacks:
        return result
    return ModelFetchResult(
        success=True,
        models=fallbacks,
        error=f"{result.error}{FALLBACK_SUFFIX}" if result.error else None,
        error_kind=result.error_kind,
    )
