# -*- coding: utf-8 -*-
"""Listing models from provider APIs."""

from __future__ import annotations

import logging
import os
import re
from typing import Any, List, Mapping, Optional
from urllib.parse import urlparse

import httpx

from ..constant import (
    GEMINI_BASE_URL,
    OPENAI_BASE_URL,
    UPSTREAM_MAX_MODELS,
    UPSTREAM_TIMEOUT_SEC,
)
from .availability import resolve_api_key
from .errors import UpstreamError
from .models import ModelInfo, ModelListing, Provider
from .registry import get_fallback_models

logger = logging.getLogger(__name__)

# Upstream responses larger than this are rejected.
MAX_RESPONSE_BYTES = 5 * 1024 * 1024

_OPENAI_CHAT_MODEL = re.compile(r"^(gpt|o1)")


def _check_base_url(base_url: str) -> str:
    parsed = urlparse(base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise UpstreamError(f"Invalid base URL: {base_url!r}")
    return base_url.rstrip("/")


class ModelLister:
    """Fetches model lists with an ``httpx.Client``.

    The lister does not cache; callers put results in a ``ModelCache``.
    """

    def __init__(
        self,
        http_client: Optional[httpx.Client] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self._client = http_client or httpx.Client(
            timeout=UPSTREAM_TIMEOUT_SEC,
        )
        self._environ = environ

    def close(self) -> None:
        self._client.close()

    def _get_json(
        self,
        what: str,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, str]] = None,
    ) -> Any:
        try:
            response = self._client.get(url, headers=headers, params=params)
        except httpx.TimeoutException as exc:
            raise UpstreamError(f"{what} models request timed out") from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"{what} models request failed: {exc}") from exc

        if response.status_code >= 400:
            raise UpstreamError(
                f"{what} models request failed: {response.status_code}",
            )
        length = response.headers.get("content-length")
        if length and length.isdigit() and int(length) > MAX_RESPONSE_BYTES:
            raise UpstreamError(f"{what} models response too large")
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(f"{what} returned invalid JSON") from exc

    # ------------------------------------------------------------------
    # Per-API listing
    # ------------------------------------------------------------------

    def fetch_openai_models(self, api_key: str) -> List[ModelInfo]:
        data = self._get_json(
            "OpenAI",
            f"{OPENAI_BASE_URL.rstrip('/')}/models",
            headers={"Authorization": f"Bearer {api_key}"},
        )
        items = data.get("data") if isinstance(data, dict) else None
        ids = sorted(
            item["id"]
            for item in items or []
            if isinstance(item, dict)
            and isinstance(item.get("id"), str)
            and _OPENAI_CHAT_MODEL.match(item["id"])
        )
        return [ModelInfo(id=i, label=i) for i in ids]

    def fetch_gemini_models(self, api_key: str) -> List[ModelInfo]:
        data = self._get_json(
            "Gemini",
            f"{GEMINI_BASE_URL.rstrip('/')}/models",
            params={"key": api_key},
        )
        items = data.get("models") if isinstance(data, dict) else None
        models: List[ModelInfo] = []
        for item in items or []:
            if not isinstance(item, dict):
                continue
            methods = item.get("supportedGenerationMethods") or []
            if "generateContent" not in methods:
                continue
            name = item.get("name") or ""
            model_id = name.rsplit("/", 1)[-1]
            if not model_id or "gemini" not in model_id:
                continue
            display = item.get("displayName")
            label = f"{display} ({model_id})" if display else model_id
            models.append(ModelInfo(id=model_id, label=label))
        return models

    def fetch_openai_compatible_models(
        self,
        base_url: str,
        api_key: str,
    ) -> List[ModelInfo]:
        url = f"{_check_base_url(base_url)}/models"
        data = self._get_json(
            "OpenAI-compatible",
            url,
            headers={"Authorization": f"Bearer {api_key}"},
        )
        items = data.get("data") if isinstance(data, dict) else None
        models = [
            ModelInfo(id=item["id"], label=item["id"])
            for item in items or []
            if isinstance(item, dict) and isinstance(item.get("id"), str)
        ]
        return models[:UPSTREAM_MAX_MODELS]

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def list_models(self, provider: Provider) -> ModelListing:
        """List the models *provider* offers.

        Raises:
            UpstreamError: OpenAI or Gemini could not be listed. Failures
                of OpenAI-compatible endpoints fall back to the provider's
                configured models instead.
        """
        environ = self._environ if self._environ is not None else os.environ
        api_key = resolve_api_key(provider, environ)

        if provider.id in ("openai", "gemini") and provider.builtin:
            if not api_key:
                return ModelListing(
                    note=f"{provider.config.env_var} not set; "
                    "no models available.",
                )
            if provider.id == "openai":
                models = self.fetch_openai_models(api_key)
            else:
                models = self.fetch_gemini_models(api_key)
            if not models:
                models = get_fallback_models(provider)
            return ModelListing(models=models, is_dynamic=True)

        if provider.id in ("copilot", "claude") and provider.builtin:
            return ModelListing(
                models=get_fallback_models(provider),
                note=f"{provider.name} uses its built-in model list.",
            )

        if provider.config.type == "openai_compatible":
            if not (api_key and provider.config.base_url):
                return ModelListing(
                    models=get_fallback_models(provider),
                    note="API key not configured; using configured list.",
                )
            try:
                models = self.fetch_openai_compatible_models(
                    provider.config.base_url,
                    api_key,
                )
            except UpstreamError as exc:
                logger.warning(
                    f"Failed to fetch models for {provider.id}: {exc}",
                )
                return ModelListing(
                    models=get_fallback_models(provider),
                    note="Failed to fetch models from API; "
                    "using configured list.",
                )
            return ModelListing(models=models, is_dynamic=True)

        return ModelListing(models=get_fallback_models(provider))
