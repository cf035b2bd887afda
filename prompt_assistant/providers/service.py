# -*- coding: utf-8 -*-
"""Model listing on top of the registry, filters and model cache."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Mapping, Optional

from .availability import provider_availability
from .cache import ModelCache
from .errors import UpstreamError
from .filters import FilterStore
from .models import ModelListing, ModelsResponse, RescanResult
from .registry import (
    ProviderRegistry,
    get_fallback_models,
    list_builtin_providers,
)
from .upstream import ModelLister

logger = logging.getLogger(__name__)


class ModelService:
    """Decides between cached and freshly listed models for a provider."""

    def __init__(
        self,
        registry: ProviderRegistry,
        filters: FilterStore,
        cache: ModelCache,
        lister: ModelLister,
        environ: Optional[Mapping[str, str]] = None,
        home: Optional[Path] = None,
    ):
        self.registry = registry
        self.filters = filters
        self.cache = cache
        self.lister = lister
        self.environ = environ
        self.home = home

    def get_models(
        self,
        provider_id: str,
        refresh: bool = False,
    ) -> Optional[ModelsResponse]:
        """Models for *provider_id* with its filter applied.

        A fresh, non-empty cache entry is served unless *refresh* is set.
        Returns None for an unknown provider.
        """
        provider = self.registry.get_provider(provider_id)
        if provider is None:
            return None

        if not refresh:
            cached = self.cache.get_cached_models(provider_id)
            if (
                cached is not None
                and cached.models
                and not self.cache.is_cache_stale(provider_id)
            ):
                fetched = datetime.fromtimestamp(cached.fetched_at_ms / 1000)
                return ModelsResponse(
                    provider=provider_id,
                    is_dynamic=True,
                    models=self.filters.apply_filter(
                        provider_id,
                        cached.models,
                    ),
                    note="Cached models (refreshed "
                    f"{fetched.isoformat(sep=' ', timespec='seconds')}).",
                    from_cache=True,
                )

        try:
            listing = self.lister.list_models(provider)
        except UpstreamError as exc:
            logger.warning(f"Using fallback models for {provider_id}: {exc}")
            return ModelsResponse(
                provider=provider_id,
                is_dynamic=False,
                models=get_fallback_models(provider),
                note=f"Using fallback list: {exc}",
            )

        if listing.is_dynamic and listing.models:
            self.cache.set_cached_models(provider_id, listing.models)

        note = listing.note
        models = listing.models
        allowed = self.filters.get_filtered_models(provider_id)
        if allowed:
            models = self.filters.apply_filter(provider_id, models)
            if not note:
                note = f"Showing {len(models)} filtered model(s)."

        return ModelsResponse(
            provider=provider_id,
            is_dynamic=listing.is_dynamic,
            models=models,
            note=note or None,
        )

    def get_available_models(self, provider_id: str) -> Optional[ModelListing]:
        """Every model the provider offers, unfiltered and uncached.

        Used to build the filter UI. Returns None for an unknown provider.
        """
        provider = self.registry.get_provider(provider_id)
        if provider is None:
            return None
        try:
            listing = self.lister.list_models(provider)
        except UpstreamError as exc:
            logger.warning(f"Failed to fetch models for {provider_id}: {exc}")
            listing = ModelListing(note=str(exc))
        if not listing.models:
            listing.models = get_fallback_models(provider)
            listing.is_dynamic = False
        return listing

    def delete_provider(self, provider_id: str) -> None:
        """Delete a custom provider and drop its cached models.

        Raises NotFoundOrBuiltinError like the registry does; the cache
        is only cleared once the delete went through.
        """
        self.registry.delete_provider(provider_id)
        self.cache.clear_model_cache(provider_id)

    def rescan(self) -> Dict[str, RescanResult]:
        """Drop every cache entry and re-list the built-in providers.

        Custom providers are left to be listed on demand.
        """
        self.cache.clear_model_cache()
        results: Dict[str, RescanResult] = {}
        for provider in list_builtin_providers():
            availability = provider_availability(
                provider,
                self.environ,
                self.home,
            )
            if not availability.available:
                results[provider.id] = RescanResult(
                    success=False,
                    reason=availability.reason,
                )
                continue
            try:
                listing = self.lister.list_models(provider)
            except UpstreamError as exc:
                logger.warning(f"Rescan failed for {provider.id}: {exc}")
                results[provider.id] = RescanResult(
                    success=False,
                    reason=str(exc),
                )
                continue
            if not listing.models:
                results[provider.id] = RescanResult(
                    success=False,
                    reason="No models found",
                )
                continue
            self.cache.set_cached_models(provider.id, listing.models)
            results[provider.id] = RescanResult(
                success=True,
                model_count=len(listing.models),
            )
        logger.info(
            "Rescanned providers: "
            f"{sum(r.success for r in results.values())}/{len(results)} ok",
        )
        return results
