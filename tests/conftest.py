"""Shared fixtures for provider storage, registry and cache tests."""

import pytest

from prompt_assistant.providers import (
    FilterStore,
    ModelCache,
    ModelListing,
    ProviderRegistry,
    ProviderStore,
)


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now_ms: float = 1_700_000_000_000.0):
        self.now_ms = now_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


class StubLister:
    """Stands in for ModelLister; returns canned listings per provider."""

    def __init__(self, listings=None, error=None):
        self.listings = listings or {}
        self.error = error
        self.calls = []

    def list_models(self, provider):
        self.calls.append(provider.id)
        if self.error is not None:
            raise self.error
        return self.listings.get(provider.id, ModelListing())

    def close(self):
        pass


@pytest.fixture
def storage_path(tmp_path):
    return tmp_path / "storage" / "providers.json"


@pytest.fixture
def store(storage_path):
    return ProviderStore(storage_path)


@pytest.fixture
def registry(store):
    return ProviderRegistry(store)


@pytest.fixture
def filters(store):
    return FilterStore(store)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ModelCache(clock=clock)
