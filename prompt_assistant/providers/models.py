# -*- coding: utf-8 -*-
"""Pydantic data models for providers, filters and cached models."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ModelInfo(BaseModel):
    """A single model offered by a provider."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Model identifier used in API calls")
    label: str = Field(default="", description="Human-readable model name")
    description: str = Field(default="", description="Short description")


class ProviderConfig(BaseModel):
    """Provider-type specific settings.

    Only the keys read by availability checks and model listing are named
    here; anything else the caller sends is kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(
        default="",
        description="Auth/endpoint kind: api_key, cli or openai_compatible",
    )
    env_var: str = Field(
        default="",
        description="Environment variable holding the API key",
    )
    api_key: str = Field(default="", description="Inline API key")
    base_url: str = Field(default="", description="API base URL")


class Provider(BaseModel):
    """A configured AI backend (built-in or custom)."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Provider identifier")
    name: str = Field(..., description="Human-readable provider name")
    builtin: bool = Field(
        default=False,
        description="True for providers shipped with the app",
    )
    supports_dynamic_models: bool = Field(
        default=False,
        description="Whether models can be listed from the upstream API",
    )
    config: ProviderConfig = Field(default_factory=ProviderConfig)
    models: List[ModelInfo] = Field(
        default_factory=list,
        description="Static model list used when nothing can be fetched",
    )
    created_at: Optional[datetime] = Field(
        default=None,
        description="Creation time (custom providers only)",
    )


class ProviderCreate(BaseModel):
    """Input accepted by ``ProviderRegistry.add_provider``."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1, description="Provider identifier")
    name: str = Field(..., min_length=1, description="Display name")
    supports_dynamic_models: bool = False
    config: ProviderConfig = Field(default_factory=ProviderConfig)
    models: List[ModelInfo] = Field(default_factory=list)


class StoreFile(BaseModel):
    """Top-level structure of providers.json."""

    providers: List[Provider] = Field(default_factory=list)
    filtered_models: Dict[str, List[str]] = Field(default_factory=dict)


class CacheEntry(BaseModel):
    """Models fetched for one provider and when they were fetched."""

    models: List[ModelInfo] = Field(default_factory=list)
    fetched_at_ms: float = Field(
        ...,
        description="Fetch time in epoch milliseconds",
    )


# ---------------------------------------------------------------------------
# API views
# ---------------------------------------------------------------------------


class ProviderAvailability(BaseModel):
    available: bool = False
    reason: str = ""


class ProviderSetup(BaseModel):
    """How to make a provider usable."""

    env: List[str] = Field(default_factory=list)
    docs: str = ""
    steps: List[str] = Field(default_factory=list)


class ProviderView(Provider):
    """Provider info returned by API (definition + availability)."""

    available: bool = False
    unavailable_reason: str = ""
    setup: ProviderSetup = Field(default_factory=ProviderSetup)


class ModelsResponse(BaseModel):
    provider: str
    is_dynamic: bool = False
    models: List[ModelInfo] = Field(default_factory=list)
    note: Optional[str] = None
    from_cache: bool = False


class FilteredModelsResponse(BaseModel):
    provider: str
    filtered_models: Optional[List[str]] = Field(
        default=None,
        description="Allow-list of model ids, null when no filter is set",
    )


class RescanResult(BaseModel):
    success: bool
    model_count: int = 0
    reason: str = ""


class ModelListing(BaseModel):
    """Result of listing a provider's models upstream."""

    models: List[ModelInfo] = Field(default_factory=list)
    is_dynamic: bool = False
    note: str = ""
