# -*- coding: utf-8 -*-
"""Built-in provider catalog and the merged provider registry."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Union

from .errors import DuplicateProviderError, NotFoundOrBuiltinError
from .models import ModelInfo, Provider, ProviderConfig, ProviderCreate
from .store import ProviderStore

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Fallback model lists (used when upstream listing fails or is unsupported)
# ---------------------------------------------------------------------------

OPENAI_MODELS: List[ModelInfo] = [
    ModelInfo(id="gpt-4o", label="GPT-4o"),
    ModelInfo(id="gpt-4o-mini", label="GPT-4o Mini"),
    ModelInfo(id="gpt-4-turbo", label="GPT-4 Turbo"),
    ModelInfo(id="gpt-4", label="GPT-4"),
    ModelInfo(id="gpt-3.5-turbo", label="GPT-3.5 Turbo"),
    ModelInfo(id="o1", label="O1"),
    ModelInfo(id="o1-mini", label="O1 Mini"),
]

GEMINI_MODELS: List[ModelInfo] = [
    ModelInfo(id="gemini-2.0-flash", label="Gemini 2.0 Flash"),
    ModelInfo(id="gemini-1.5-pro", label="Gemini 1.5 Pro"),
    ModelInfo(id="gemini-1.5-flash", label="Gemini 1.5 Flash"),
]

COPILOT_MODELS: List[ModelInfo] = [
    ModelInfo(id="claude-sonnet-4.5", label="Claude Sonnet 4.5"),
    ModelInfo(id="claude-haiku-4.5", label="Claude Haiku 4.5"),
    ModelInfo(id="claude-opus-4.5", label="Claude Opus 4.5"),
    ModelInfo(id="gpt-5.1-codex", label="GPT-5.1 Codex"),
    ModelInfo(id="gpt-5-mini", label="GPT-5 Mini"),
    ModelInfo(id="gpt-4.1", label="GPT-4.1"),
]

CLAUDE_MODELS: List[ModelInfo] = [
    ModelInfo(
        id="sonnet",
        label="Sonnet (Latest)",
        description="Fast and intelligent",
    ),
    ModelInfo(id="opus", label="Opus (Latest)", description="Most capable"),
    ModelInfo(
        id="haiku",
        label="Haiku (Latest)",
        description="Fastest, most compact",
    ),
]

# ---------------------------------------------------------------------------
# Built-in provider definitions
# ---------------------------------------------------------------------------

PROVIDER_OPENAI = Provider(
    id="openai",
    name="OpenAI",
    builtin=True,
    supports_dynamic_models=True,
    config=ProviderConfig(type="api_key", env_var="OPENAI_API_KEY"),
)

PROVIDER_GEMINI = Provider(
    id="gemini",
    name="Google Gemini",
    builtin=True,
    supports_dynamic_models=True,
    config=ProviderConfig(type="api_key", env_var="GEMINI_API_KEY"),
)

PROVIDER_COPILOT = Provider(
    id="copilot",
    name="Copilot CLI",
    builtin=True,
    config=ProviderConfig(type="cli", env_var="GH_TOKEN"),
)

PROVIDER_CLAUDE = Provider(
    id="claude",
    name="Claude Code",
    builtin=True,
    config=ProviderConfig(type="cli"),
)

# Declaration order is the listing order.
BUILTIN_PROVIDERS: tuple[Provider, ...] = (
    PROVIDER_OPENAI,
    PROVIDER_GEMINI,
    PROVIDER_COPILOT,
    PROVIDER_CLAUDE,
)

FALLBACK_MODELS: dict[str, List[ModelInfo]] = {
    PROVIDER_OPENAI.id: OPENAI_MODELS,
    PROVIDER_GEMINI.id: GEMINI_MODELS,
    PROVIDER_COPILOT.id: COPILOT_MODELS,
    PROVIDER_CLAUDE.id: CLAUDE_MODELS,
}


def is_builtin(provider_id: str) -> bool:
    return any(p.id == provider_id for p in BUILTIN_PROVIDERS)


def get_builtin_provider(provider_id: str) -> Optional[Provider]:
    """Return a copy of a built-in provider, or None if not found."""
    for provider in BUILTIN_PROVIDERS:
        if provider.id == provider_id:
            return provider.model_copy(deep=True)
    return None


def list_builtin_providers() -> List[Provider]:
    """Return copies of all built-in providers in declaration order."""
    return [p.model_copy(deep=True) for p in BUILTIN_PROVIDERS]


def get_fallback_models(provider: Provider) -> List[ModelInfo]:
    """Static models for *provider*: the built-in list or its own."""
    fallback = FALLBACK_MODELS.get(provider.id) if provider.builtin else None
    if fallback is None:
        fallback = provider.models
    return [m.model_copy() for m in fallback]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class ProviderRegistry:
    """One provider list spanning the built-in catalog and custom providers.

    Only custom providers are stored and only they can be added or
    deleted. Ids are unique across both sets.
    """

    def __init__(self, store: ProviderStore):
        self.store = store

    def get_all_providers(self) -> List[Provider]:
        """Built-in providers first, then custom ones in stored order."""
        return list_builtin_providers() + self.get_custom_providers()

    def get_custom_providers(self) -> List[Provider]:
        return self.store.read().providers

    def get_provider(self, provider_id: str) -> Optional[Provider]:
        """Return the provider with *provider_id*, or None if not found."""
        builtin = get_builtin_provider(provider_id)
        if builtin is not None:
            return builtin
        for provider in self.get_custom_providers():
            if provider.id == provider_id:
                return provider
        return None

    def add_provider(
        self,
        data: Union[ProviderCreate, Mapping[str, Any]],
    ) -> Provider:
        """Store a new custom provider and return the stored record.

        Raises:
            DuplicateProviderError: the id belongs to a built-in provider
                or to an existing custom provider.
        """
        if not isinstance(data, ProviderCreate):
            data = ProviderCreate.model_validate(dict(data))

        doc = self.store.read()
        if is_builtin(data.id) or any(
            p.id == data.id for p in doc.providers
        ):
            raise DuplicateProviderError(data.id)

        provider = Provider.model_validate(
            {
                **data.model_dump(),
                "builtin": False,
                "created_at": datetime.now(timezone.utc),
            },
        )
        doc.providers.append(provider)
        self.store.write(doc)
        logger.info(f"Added custom provider: {provider.id}")
        return provider

    def delete_provider(self, provider_id: str) -> None:
        """Delete a custom provider together with its model filter.

        Raises:
            NotFoundOrBuiltinError: no custom provider has this id. Built-in
                ids get the same error as unknown ones.
        """
        doc = self.store.read()
        remaining = [p for p in doc.providers if p.id != provider_id]
        if len(remaining) == len(doc.providers):
            raise NotFoundOrBuiltinError(provider_id)

        doc.providers = remaining
        doc.filtered_models.pop(provider_id, None)
        self.store.write(doc)
        logger.info(f"Deleted custom provider: {provider_id}")
