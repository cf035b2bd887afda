# -*- coding: utf-8 -*-
"""In-memory cache of model lists fetched from upstream providers."""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Optional

from .models import CacheEntry, ModelInfo

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE_MS = 5 * 60 * 1000


def _now_ms() -> float:
    return time.time() * 1000


class ModelCache:
    """Fetched model lists keyed by provider id.

    Entries are never evicted; whether an entry is fresh enough is decided
    when it is read, against the caller's max age. Nothing here is
    persisted.
    """

    def __init__(
        self,
        default_max_age_ms: float = DEFAULT_MAX_AGE_MS,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.default_max_age_ms = default_max_age_ms
        self._clock = clock or _now_ms
        self._entries: Dict[str, CacheEntry] = {}

    def get_cached_models(self, provider_id: str) -> Optional[CacheEntry]:
        """Copy of the entry for *provider_id*, or None."""
        entry = self._entries.get(provider_id)
        if entry is None:
            return None
        return entry.model_copy(deep=True)

    def set_cached_models(
        self,
        provider_id: str,
        models: List[ModelInfo],
    ) -> CacheEntry:
        entry = CacheEntry(
            models=[m.model_copy() for m in models],
            fetched_at_ms=self._clock(),
        )
        self._entries[provider_id] = entry
        logger.debug(f"Cached {len(models)} model(s) for {provider_id}")
        return entry.model_copy(deep=True)

    def is_cache_stale(
        self,
        provider_id: str,
        max_age_ms: Optional[float] = None,
    ) -> bool:
        """True when there is no entry or it is at least *max_age_ms* old.

        A *max_age_ms* of 0 makes every entry stale.
        """
        entry = self._entries.get(provider_id)
        if entry is None:
            return True
        if max_age_ms is None:
            max_age_ms = self.default_max_age_ms
        return self._clock() - entry.fetched_at_ms >= max_age_ms

    def clear_model_cache(self, provider_id: Optional[str] = None) -> None:
        """Drop one provider's entry, or every entry when no id is given."""
        if provider_id is None:
            self._entries.clear()
            logger.debug("Cleared model cache")
        else:
            self._entries.pop(provider_id, None)
            logger.debug(f"Cleared model cache for {provider_id}")
