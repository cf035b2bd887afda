# -*- coding: utf-8 -*-
"""Dependencies resolving the per-app provider objects."""

from __future__ import annotations

from fastapi import Request

from ..providers import FilterStore, ModelCache, ModelService, ProviderRegistry


def get_registry(request: Request) -> ProviderRegistry:
    return request.app.state.registry


def get_filters(request: Request) -> FilterStore:
    return request.app.state.filters


def get_cache(request: Request) -> ModelCache:
    return request.app.state.cache


def get_model_service(request: Request) -> ModelService:
    return request.app.state.model_service
