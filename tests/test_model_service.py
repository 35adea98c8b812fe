"""Tests for listing provider models and the fallback policy."""

import httpx
import pytest

from claudegate.providers import (
    FallbackModel,
    ModelFetchErrorKind,
    ModelFetching,
    ProviderDefinition,
    ResponseFormat,
    fetch_models,
    get_fallback_models_for_tier,
    get_models_for_provider,
    get_provider,
    get_unique_fallback_models,
)
from claudegate.providers.model_service import (
    parse_openai_models,
    parse_openrouter_models,
)


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def _status_client(status_code):
    return _client(lambda request: httpx.Response(status_code))


def _json_client(payload, seen=None):
    def handler(request):
        if seen is not None:
            seen.append(request)
        return httpx.Response(200, json=payload)

    return _client(handler)


# ---------------------------------------------------------------------------
# Fallback lists
# ---------------------------------------------------------------------------


def test_unique_fallback_models_dedupes_by_id():
    models = get_unique_fallback_models("moonshot")
    assert [m.id for m in models] == ["kimi-k2-0711-preview"]


def test_unique_fallback_models_keeps_first_occurrence_order():
    models = get_unique_fallback_models("deepseek")
    assert [m.id for m in models] == ["deepseek-reasoner", "deepseek-chat"]


def test_unique_fallback_models_unknown_provider():
    assert get_unique_fallback_models("nope") == []


def test_fallback_models_for_tier():
    haiku = get_fallback_models_for_tier("zai", "haiku")
    assert [(m.id, m.name) for m in haiku] == [
        ("glm-4.5-air", "GLM-4.5 Air (fast)"),
    ]
    assert get_fallback_models_for_tier("custom", "opus") == []


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def test_parse_openrouter_models():
    models = parse_openrouter_models(
        {
            "data": [
                {"id": "a/b", "name": "A B", "description": "desc"},
                {"id": "c/d"},
                {"name": "missing id"},
            ],
        },
    )
    assert [(m.id, m.name, m.description) for m in models] == [
        ("a/b", "A B", "desc"),
        ("c/d", "c/d", None),
    ]


def test_parse_openrouter_models_caps_at_100():
    payload = {"data": [{"id": f"m{i}"} for i in range(150)]}
    models = parse_openrouter_models(payload)
    assert len(models) == 100
    assert models[-1].id == "m99"


def test_parse_openai_models():
    models = parse_openai_models(
        {
            "object": "list",
            "data": [
                {"id": "deepseek-chat", "owned_by": "deepseek"},
                {"id": "deepseek-reasoner"},
                {"owned_by": "nobody"},
            ],
        },
    )
    assert [(m.id, m.name, m.description) for m in models] == [
        ("deepseek-chat", "deepseek-chat", "Owned by: deepseek"),
        ("deepseek-reasoner", "deepseek-reasoner", None),
    ]


@pytest.mark.parametrize(
    "payload",
    [None, [], "text", {"models": []}, {"data": "nope"}, {"data": [1, "x"]}],
)
def test_malformed_payloads_yield_no_models(payload):
    assert parse_openai_models(payload) == []
    assert parse_openrouter_models(payload) == []


# ---------------------------------------------------------------------------
# fetch_models
# ---------------------------------------------------------------------------


def test_fetch_models_sends_bearer_token():
    seen = []
    client = _json_client({"data": [{"id": "glm-4.7"}]}, seen)
    result = fetch_models(get_provider("zai"), "secret", client=client)

    assert result.success
    assert [m.id for m in result.models] == ["glm-4.7"]
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert str(seen[0].url) == "https://api.z.ai/api/paas/v4/models"
    assert seen[0].headers["Authorization"] == "Bearer secret"


def test_fetch_models_follows_redirects():
    moved = "https://api.z.ai/api/paas/v5/models"

    def handler(request):
        if str(request.url) == moved:
            return httpx.Response(200, json={"data": [{"id": "glm-5"}]})
        return httpx.Response(301, headers={"Location": moved})

    result = fetch_models(get_provider("zai"), "k", client=_client(handler))

    assert result.success
    assert [m.id for m in result.models] == ["glm-5"]


def test_fetch_models_uses_openrouter_shape():
    client = _json_client(
        {"data": [{"id": "x/y", "name": "XY", "description": "d"}]},
    )
    result = fetch_models("openrouter", "key", client=client)
    assert result.models[0].name == "XY"
    assert result.models[0].description == "d"


@pytest.mark.parametrize(
    ("status", "kind", "message"),
    [
        (401, ModelFetchErrorKind.UNAUTHORIZED, "not authorized"),
        (403, ModelFetchErrorKind.UNAUTHORIZED, "account balance"),
        (429, ModelFetchErrorKind.RATE_LIMITED, "Rate limited"),
        (500, ModelFetchErrorKind.SERVER_ERROR, "Server error (500)"),
        (503, ModelFetchErrorKind.SERVER_ERROR, "provider may be down"),
        (404, ModelFetchErrorKind.API_ERROR, "API error: 404"),
    ],
)
def test_fetch_models_classifies_http_errors(status, kind, message):
    result = fetch_models("zai", "key", client=_status_client(status))
    assert not result.success
    assert result.models == []
    assert result.error_kind == kind
    assert message in result.error


def test_fetch_models_network_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = fetch_models("deepseek", "key", client=_client(handler))
    assert not result.success
    assert result.error_kind == ModelFetchErrorKind.UNREACHABLE
    assert result.error == "Fetch failed: connection refused"


def test_fetch_models_invalid_json():
    client = _client(lambda request: httpx.Response(200, text="<html>"))
    result = fetch_models("deepseek", "key", client=client)
    assert not result.success
    assert result.error.startswith("Fetch failed:")


def test_fetch_models_unknown_provider():
    result = fetch_models("missing", "key")
    assert not result.success
    assert result.error == "Provider not found"
    assert result.error_kind == ModelFetchErrorKind.NOT_FOUND


def test_fetch_models_without_endpoint_returns_fallbacks():
    provider = ProviderDefinition(
        id="static",
        name="Static",
        fallback_models=[
            FallbackModel(id="a", name="A", tier="opus"),
            FallbackModel(id="a", name="A", tier="haiku"),
        ],
    )
    result = fetch_models(provider, "")
    assert result.success
    assert [m.id for m in result.models] == ["a"]


# ---------------------------------------------------------------------------
# get_models_for_provider
# ---------------------------------------------------------------------------


def test_live_models_returned_as_is():
    client = _json_client({"data": [{"id": "live-model"}]})
    result = get_models_for_provider(
        get_provider("deepseek"),
        "key",
        client=client,
    )
    assert result.success
    assert result.error is None
    assert [m.id for m in result.models] == ["live-model"]


def test_server_error_falls_back_with_message():
    result = get_models_for_provider(
        get_provider("deepseek"),
        "key",
        client=_status_client(500),
    )
    assert result.success
    assert "Server error (500)" in result.error
    assert result.error.endswith("showing fallback models")
    assert [m.id for m in result.models] == [
        "deepseek-reasoner",
        "deepseek-chat",
    ]


def test_empty_live_listing_falls_back_without_error():
    result = get_models_for_provider(
        get_provider("zai"),
        "key",
        client=_json_client({"data": []}),
    )
    assert result.success
    assert result.error is None
    assert [m.id for m in result.models] == [
        "glm-4.7",
        "glm-4.6",
        "glm-4.5-air",
    ]


def test_failure_without_fallbacks_is_returned_unchanged():
    provider = ProviderDefinition(
        id="bare",
        name="Bare",
        model_fetching=ModelFetching(
            endpoint="https://bare.example/models",
            auth_key_env_var="TOKEN",
            response_format=ResponseFormat.OPENAI,
        ),
    )
    result = get_models_for_provider(
        provider,
        "key",
        client=_status_client(429),
    )
    assert not result.success
    assert result.models == []
    assert result.error == "Rate limited - try again later"


def test_provider_without_listing_uses_fallbacks_directly():
    provider = ProviderDefinition(
        id="static",
        name="Static",
        fallback_models=[FallbackModel(id="s", name="S", tier="sonnet")],
    )
    result = get_models_for_provider(provider, "")
    assert result.success
    assert result.error is None
    assert [m.id for m in result.models] == ["s"]
