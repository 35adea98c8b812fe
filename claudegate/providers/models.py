# -*- coding: utf-8 -*-
"""Pydantic data models for providers and models."""

from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

Tier = Literal["haiku", "sonnet", "opus"]

TIERS: tuple[Tier, ...] = ("haiku", "sonnet", "opus")


class EnvVarSpec(BaseModel):
    """An environment variable a provider reads or requires."""

    name: str = Field(..., description="Environment variable to set")
    label: str = Field(..., description="Prompt label")
    description: str = Field(default="")
    type: Literal["apiKey", "url", "string", "number"] = Field(
        default="string",
        description="Informational value type (not enforced)",
    )
    sensitive: bool = Field(
        default=False,
        description="Mask the value when it is entered or displayed",
    )
    default: Optional[Union[str, int]] = Field(
        default=None,
        description="Value applied when the profile does not override it",
    )
    required: bool = Field(
        default=False,
        description="Whether profile creation needs a value",
    )


class ResponseFormat(str, Enum):
    """Shape of a provider's model listing response."""

    OPENROUTER = "openrouter"
    OPENAI = "openai"


class ModelFetching(BaseModel):
    """Where and how to list a provider's live models."""

    endpoint: str = Field(..., description="GET endpoint returning models")
    auth_key_env_var: str = Field(
        ...,
        description="Profile variable holding the bearer credential",
    )
    response_format: ResponseFormat = Field(default=ResponseFormat.OPENAI)


class ModelInfo(BaseModel):
    """A single model offered by a provider."""

    id: str = Field(..., description="Model identifier used in API calls")
    name: str = Field(..., description="Human-readable model name")
    description: Optional[str] = Field(default=None)


class FallbackModel(BaseModel):
    """A built-in model recommendation for one tier."""

    id: str
    name: str
    tier: Tier

    def to_model(self) -> ModelInfo:
        return ModelInfo(id=self.id, name=self.name)


class ProviderDefinition(BaseModel):
    """Static definition of a provider."""

    model_config = {"frozen": True, "protected_namespaces": ()}

    id: str = Field(..., description="Provider identifier")
    name: str = Field(..., description="Human-readable provider name")
    description: str = Field(default="")
    color: str = Field(default="", description="Display color (hex)")
    use_existing_config: bool = Field(
        default=False,
        description="Set no variables, defer to the user's own setup",
    )
    env_vars: List[EnvVarSpec] = Field(default_factory=list)
    model_fetching: Optional[ModelFetching] = Field(default=None)
    fallback_models: List[FallbackModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def _native_declares_nothing(self) -> "ProviderDefinition":
        if self.use_existing_config and (
            self.env_vars or self.model_fetching
        ):
            raise ValueError(
                f"provider {self.id!r} uses the existing config and "
                "cannot declare env vars or model fetching",
            )
        return self

    def get_env_var(self, name: str) -> Optional[EnvVarSpec]:
        """Return the declared spec for *name*, if any."""
        for spec in self.env_vars:
            if spec.name == name:
                return spec
        return None


class ModelFetchErrorKind(str, Enum):
    """Classified reasons a model listing failed."""

    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    API_ERROR = "api_error"
    UNREACHABLE = "unreachable"


class ModelFetchResult(BaseModel):
    """Outcome of listing a provider's models."""

    success: bool
    models: List[ModelInfo] = Field(default_factory=list)
    error: Optional[str] = Field(default=None)
    error_kind: Optional[ModelFetchErrorKind] = Field(default=None)

    @classmethod
    def ok(
        cls,
        models: List[ModelInfo],
        error: Optional[str] = None,
    ) -> "ModelFetchResult":
        return cls(success=True, models=models, error=error)

    @classmethod
    def failure(
        cls,
        kind: ModelFetchErrorKind,
        error: str,
    ) -> "ModelFetchResult":
        return cls(success=False, models=[], error=error, error_kind=kind)
