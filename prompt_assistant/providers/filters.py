# -*- coding: utf-8 -*-
"""Per-provider model allow-lists stored in providers.json."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .models import ModelInfo
from .store import ProviderStore

logger = logging.getLogger(__name__)


class FilterStore:
    """Model-name allow-lists keyed by provider id.

    ``None`` means no filter (show every model). An empty list is never
    stored: setting one removes the filter.
    """

    def __init__(self, store: ProviderStore):
        self.store = store

    def get_filtered_models(self, provider_id: str) -> Optional[List[str]]:
        """Return the allow-list for *provider_id*, or None when unset."""
        return self.store.read().filtered_models.get(provider_id)

    def set_filtered_models(
        self,
        provider_id: str,
        model_ids: Sequence[str],
    ) -> None:
        doc = self.store.read()
        if not model_ids:
            doc.filtered_models.pop(provider_id, None)
            logger.info(f"Cleared model filter for {provider_id}")
        else:
            doc.filtered_models[provider_id] = list(model_ids)
            logger.info(
                f"Set model filter for {provider_id}: "
                f"{len(model_ids)} model(s)",
            )
        self.store.write(doc)

    def apply_filter(
        self,
        provider_id: str,
        models: List[ModelInfo],
    ) -> List[ModelInfo]:
        """Restrict *models* to the provider's allow-list, if any."""
        allowed = self.get_filtered_models(provider_id)
        if not allowed:
            return models
        allowed_ids = set(allowed)
        return [m for m in models if m.id in allowed_ids]
