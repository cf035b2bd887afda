# -*- coding: utf-8 -*-
"""Errors raised by the provider store, registry and model listing."""


class ProviderStoreError(Exception):
    """Base class for provider registry errors."""


class StorageCorruptError(ProviderStoreError):
    """providers.json exists but cannot be parsed.

    The file is left untouched so it can be inspected or fixed by hand.
    """

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupt provider storage at {path}: {reason}")


class DuplicateProviderError(ProviderStoreError):
    """The id is already taken by a built-in or custom provider."""

    def __init__(self, provider_id: str):
        self.provider_id = provider_id
        super().__init__("Provider ID already exists")


class NotFoundOrBuiltinError(ProviderStoreError):
    """No custom provider with this id (built-in ids are never deletable)."""

    def __init__(self, provider_id: str):
        self.provider_id = provider_id
        super().__init__("Provider not found or is built-in")


class UpstreamError(Exception):
    """Listing models from a provider's API failed."""
