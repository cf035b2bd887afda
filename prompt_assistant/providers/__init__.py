# -*- coding: utf-8 -*-
"""Provider management: built-in catalog, custom store, filters, cache."""

from .availability import (
    provider_availability,
    provider_setup,
    resolve_api_key,
)
from .cache import DEFAULT_MAX_AGE_MS, ModelCache
from .errors import (
    DuplicateProviderError,
    NotFoundOrBuiltinError,
    ProviderStoreError,
    StorageCorruptError,
    UpstreamError,
)
from .filters import FilterStore
from .models import (
    CacheEntry,
    FilteredModelsResponse,
    ModelInfo,
    ModelListing,
    ModelsResponse,
    Provider,
    ProviderAvailability,
    ProviderConfig,
    ProviderCreate,
    ProviderSetup,
    ProviderView,
    RescanResult,
    StoreFile,
)
from .registry import (
    BUILTIN_PROVIDERS,
    FALLBACK_MODELS,
    ProviderRegistry,
    get_builtin_provider,
    get_fallback_models,
    is_builtin,
    list_builtin_providers,
)
from .service import ModelService
from .store import ProviderStore, get_providers_json_path, mask_api_key
from .upstream import ModelLister

__all__ = [
    # models
    "CacheEntry",
    "FilteredModelsResponse",
    "ModelInfo",
    "ModelListing",
    "ModelsResponse",
    "Provider",
    "ProviderAvailability",
    "ProviderConfig",
    "ProviderCreate",
    "ProviderSetup",
    "ProviderView",
    "RescanResult",
    "StoreFile",
    # errors
    "DuplicateProviderError",
    "NotFoundOrBuiltinError",
    "ProviderStoreError",
    "StorageCorruptError",
    "UpstreamError",
    # registry
    "BUILTIN_PROVIDERS",
    "FALLBACK_MODELS",
    "ProviderRegistry",
    "get_builtin_provider",
    "get_fallback_models",
    "is_builtin",
    "list_builtin_providers",
    # store / filters / cache
    "FilterStore",
    "ModelCache",
    "DEFAULT_MAX_AGE_MS",
    "ProviderStore",
    "get_providers_json_path",
    "mask_api_key",
    # availability / upstream
    "ModelLister",
    "ModelService",
    "provider_availability",
    "provider_setup",
    "resolve_api_key",
]
