# -*- coding: utf-8 -*-
"""API routes for model listing and the model cache."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ...providers import ModelCache, ModelService, ModelsResponse
from ..deps import get_cache, get_model_service

router = APIRouter(prefix="/models", tags=["models"])


@router.get(
    "",
    response_model=ModelsResponse,
    summary="List a provider's models",
    description="Served from the model cache while it is fresh; "
    "refresh=true always fetches. The provider's filter is applied.",
)
def list_models(
    provider: str = Query(..., description="Provider identifier"),
    refresh: bool = Query(False, description="Bypass the model cache"),
    service: ModelService = Depends(get_model_service),
) -> ModelsResponse:
    result = service.get_models(provider.lower(), refresh=refresh)
    if result is None:
        raise HTTPException(status_code=400, detail="Unknown provider")
    return result


@router.delete(
    "/cache",
    status_code=204,
    summary="Clear cached model lists",
    description="Clears one provider's entry, or all entries when "
    "no provider is given.",
)
def clear_model_cache(
    provider: Optional[str] = Query(None, description="Provider identifier"),
    cache: ModelCache = Depends(get_cache),
) -> Response:
    cache.clear_model_cache(provider)
    return Response(status_code=204)
