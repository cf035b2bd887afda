# -*- coding: utf-8 -*-
"""API routes for providers and their model filters."""

from __future__ import annotations

from typing import Dict, List, Optional
from urllib.parse import urlparse

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Response
from pydantic import BaseModel, Field, field_validator

from ...providers import (
    DuplicateProviderError,
    FilteredModelsResponse,
    FilterStore,
    ModelInfo,
    ModelListing,
    ModelService,
    NotFoundOrBuiltinError,
    Provider,
    ProviderConfig,
    ProviderCreate,
    ProviderRegistry,
    ProviderView,
    RescanResult,
    mask_api_key,
    provider_availability,
    provider_setup,
)
from ..deps import get_filters, get_model_service, get_registry

router = APIRouter(prefix="/providers", tags=["providers"])


# ---------------------------------------------------------------------------
# Request / response schemas
# ---------------------------------------------------------------------------


class AddProviderRequest(BaseModel):
    """Request body for adding a custom provider."""

    id: str = Field(
        ...,
        min_length=2,
        max_length=32,
        pattern=r"^[a-z][a-z0-9-]*[a-z0-9]$",
        description="Lowercase letters, digits and dashes; "
        "starts with a letter, ends with a letter or digit",
    )
    name: str = Field(..., min_length=1, description="Display name")
    config: ProviderConfig = Field(..., description="Provider settings")
    supports_dynamic_models: bool = Field(default=False)
    models: List[ModelInfo] = Field(
        default_factory=list,
        description="Static model list",
    )

    @field_validator("config")
    @classmethod
    def _check_base_url(cls, config: ProviderConfig) -> ProviderConfig:
        if config.base_url:
            parsed = urlparse(config.base_url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError("Base URL must use HTTP or HTTPS protocol")
        return config


class FilteredModelsRequest(BaseModel):
    model_ids: List[str] = Field(
        ...,
        description="Model ids to show; an empty list removes the filter",
    )


class ProvidersResponse(BaseModel):
    providers: List[ProviderView]


class ProviderResponse(BaseModel):
    provider: ProviderView


class ProviderCheckResponse(BaseModel):
    success: bool
    message: str


class AvailableModelsResponse(BaseModel):
    provider: str
    models: List[ModelInfo]
    is_dynamic: bool = False
    note: Optional[str] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_provider_view(
    provider: Provider,
    service: ModelService,
) -> ProviderView:
    """Attach availability and setup hints; never expose raw API keys."""
    availability = provider_availability(
        provider,
        service.environ,
        service.home,
    )
    data = provider.model_dump()
    data["config"]["api_key"] = mask_api_key(provider.config.api_key)
    return ProviderView.model_validate(
        {
            **data,
            "available": availability.available,
            "unavailable_reason": availability.reason,
            "setup": provider_setup(provider.id),
        },
    )


# ---------------------------------------------------------------------------
# Endpoints: provider CRUD
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=ProvidersResponse,
    summary="List all providers",
    description="Built-in providers followed by custom ones, "
    "with availability and setup hints.",
)
def list_all_providers(
    registry: ProviderRegistry = Depends(get_registry),
    service: ModelService = Depends(get_model_service),
) -> ProvidersResponse:
    return ProvidersResponse(
        providers=[
            _build_provider_view(p, service)
            for p in registry.get_all_providers()
        ],
    )


@router.post(
    "",
    response_model=ProviderResponse,
    status_code=201,
    summary="Add a custom provider",
)
def add_provider(
    body: AddProviderRequest = Body(..., description="Provider to add"),
    registry: ProviderRegistry = Depends(get_registry),
    service: ModelService = Depends(get_model_service),
) -> ProviderResponse:
    try:
        provider = registry.add_provider(
            ProviderCreate.model_validate(body.model_dump()),
        )
    except DuplicateProviderError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return ProviderResponse(provider=_build_provider_view(provider, service))


@router.post(
    "/rescan",
    response_model=Dict[str, RescanResult],
    summary="Clear the model cache and re-list every available provider",
)
def rescan_providers(
    service: ModelService = Depends(get_model_service),
) -> Dict[str, RescanResult]:
    return service.rescan()


@router.delete(
    "/{provider_id}",
    status_code=204,
    summary="Delete a custom provider",
    description="Also removes the provider's model filter and cached "
    "models. Built-in providers cannot be deleted.",
)
def delete_provider(
    provider_id: str = Path(..., description="Provider identifier"),
    service: ModelService = Depends(get_model_service),
) -> Response:
    try:
        service.delete_provider(provider_id)
    except NotFoundOrBuiltinError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)


@router.post(
    "/{provider_id}/test",
    response_model=ProviderCheckResponse,
    summary="Check whether a provider is configured",
)
def check_provider(
    provider_id: str = Path(..., description="Provider identifier"),
    registry: ProviderRegistry = Depends(get_registry),
    service: ModelService = Depends(get_model_service),
) -> ProviderCheckResponse:
    provider = registry.get_provider(provider_id)
    if provider is None:
        raise HTTPException(status_code=404, detail="Provider not found")
    availability = provider_availability(
        provider,
        service.environ,
        service.home,
    )
    return ProviderCheckResponse(
        success=availability.available,
        message="Provider is configured correctly"
        if availability.available
        else availability.reason,
    )


# ---------------------------------------------------------------------------
# Endpoints: models and filters
# ---------------------------------------------------------------------------


@router.get(
    "/{provider_id}/available-models",
    response_model=AvailableModelsResponse,
    summary="List every model a provider offers (unfiltered)",
)
def get_available_models(
    provider_id: str = Path(..., description="Provider identifier"),
    service: ModelService = Depends(get_model_service),
) -> AvailableModelsResponse:
    listing: Optional[ModelListing] = service.get_available_models(
        provider_id,
    )
    if listing is None:
        raise HTTPException(status_code=404, detail="Provider not found")
    return AvailableModelsResponse(
        provider=provider_id,
        models=listing.models,
        is_dynamic=listing.is_dynamic,
        note=listing.note or None,
    )


@router.get(
    "/{provider_id}/filtered-models",
    response_model=FilteredModelsResponse,
    summary="Get a provider's model filter",
)
def get_filtered_models(
    provider_id: str = Path(..., description="Provider identifier"),
    filters: FilterStore = Depends(get_filters),
) -> FilteredModelsResponse:
    return FilteredModelsResponse(
        provider=provider_id,
        filtered_models=filters.get_filtered_models(provider_id),
    )


@router.put(
    "/{provider_id}/filtered-models",
    response_model=FilteredModelsResponse,
    summary="Set a provider's model filter",
    description="An empty list removes the filter.",
)
def set_filtered_models(
    provider_id: str = Path(..., description="Provider identifier"),
    body: FilteredModelsRequest = Body(...),
    filters: FilterStore = Depends(get_filters),
) -> FilteredModelsResponse:
    filters.set_filtered_models(provider_id, body.model_ids)
    return FilteredModelsResponse(
        provider=provider_id,
        filtered_models=filters.get_filtered_models(provider_id),
    )
