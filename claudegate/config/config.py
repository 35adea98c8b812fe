# -*- coding: utf-8 -*-
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from ..constant import CONFIG_VERSION, DEFAULT_TIMEOUT_MS
from ..providers.models import TIERS


class SelectedModel(BaseModel):
    """A model picked for one slot."""

    id: str
    name: str


class SelectedModels(BaseModel):
    """Per-slot model choices of a profile.

    ``haiku`` / ``sonnet`` / ``opus`` map to the Claude CLI's tier
    variables; ``default`` sets ``ANTHROPIC_MODEL`` and ``subagent`` sets
    ``CLAUDE_CODE_SUBAGENT_MODEL``.
    """

    model_config = {"populate_by_name": True}

    haiku: Optional[SelectedModel] = None
    sonnet: Optional[SelectedModel] = None
    opus: Optional[SelectedModel] = None
    default: Optional[SelectedModel] = None
    subagent: Optional[SelectedModel] = None
    last_fetched: Optional[str] = Field(default=None, alias="lastFetched")

    def slots(self) -> Iterator[Tuple[str, SelectedModel]]:
        """Yield ``(slot, model)`` for every populated slot, tiers first."""
        for slot in (*TIERS, "default", "subagent"):
            model = getattr(self, slot)
            if model is not None:
                yield slot, model


class Profile(BaseModel):
    """A named binding of a provider to concrete variable values."""

    model_config = {"populate_by_name": True}

    id: str
    name: str
    provider_id: str = Field(alias="providerId")
    created_at: str = Field(default="", alias="createdAt")
    updated_at: str = Field(default="", alias="updatedAt")
    # User-supplied overrides only, never computed defaults.
    env_vars: Dict[str, str] = Field(default_factory=dict, alias="envVars")
    selected_models: Optional[SelectedModels] = Field(
        default=None,
        alias="selectedModels",
    )

    @field_validator("env_vars", mode="before")
    @classmethod
    def _coerce_env_values(cls, value: Any) -> Any:
        # Hand-edited files may carry nulls or numbers.
        if not isinstance(value, dict):
            return value
        return {
            str(key): str(val) for key, val in value.items() if val is not None
        }


class AppSettings(BaseModel):
    model_config = {"populate_by_name": True}

    claude_cli_path: Optional[str] = Field(
        default=None,
        alias="claudeCliPath",
    )
    timeout: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        description="Request timeout in milliseconds",
    )


class AppConfig(BaseModel):
    """Root config (config.json)."""

    model_config = {"populate_by_name": True}

    version: str = CONFIG_VERSION
    active_profile_id: Optional[str] = Field(
        default=None,
        alias="activeProfileId",
    )
    profiles: List[Profile] = Field(default_factory=list)
    settings: AppSettings = Field(default_factory=AppSettings)

    def find_profile(self, profile_id: str) -> Optional[Profile]:
        for profile in self.profiles:
            if profile.id == profile_id:
                return profile
        return None
