"""Tests for the merged provider registry."""

import json

import pytest
from pydantic import ValidationError

from prompt_assistant.providers import (
    BUILTIN_PROVIDERS,
    DuplicateProviderError,
    NotFoundOrBuiltinError,
    ProviderCreate,
    get_builtin_provider,
    is_builtin,
)

BUILTIN_IDS = ["openai", "gemini", "copilot", "claude"]


def _read_raw(path):
    return json.loads(path.read_text(encoding="utf-8"))


class TestListing:
    """getAllProviders / getProvider."""

    def test_empty_store_lists_exactly_builtins(self, registry):
        providers = registry.get_all_providers()

        assert [p.id for p in providers] == BUILTIN_IDS
        assert all(p.builtin for p in providers)
        assert registry.get_custom_providers() == []

    def test_custom_providers_follow_builtins(self, registry):
        registry.add_provider({"id": "local-a", "name": "Local A"})
        registry.add_provider({"id": "local-b", "name": "Local B"})

        ids = [p.id for p in registry.get_all_providers()]

        assert ids == BUILTIN_IDS + ["local-a", "local-b"]

    def test_get_builtin_provider(self, registry):
        provider = registry.get_provider("openai")

        assert provider is not None
        assert provider.builtin is True
        assert provider.config.env_var == "OPENAI_API_KEY"

    def test_get_unknown_provider_returns_none(self, registry):
        assert registry.get_provider("unknown") is None

    def test_builtin_catalog_cannot_be_mutated_through_results(
        self,
        registry,
    ):
        provider = registry.get_provider("openai")
        provider.name = "Renamed"

        assert get_builtin_provider("openai").name == "OpenAI"
        assert registry.get_all_providers()[0].name == "OpenAI"

    def test_is_builtin(self):
        assert is_builtin("claude")
        assert not is_builtin("my-provider")
        assert len(BUILTIN_PROVIDERS) == 4


class TestAddProvider:
    """addProvider."""

    def test_add_provider_stamps_generated_fields(self, registry):
        provider = registry.add_provider(
            {
                "id": "local",
                "name": "Local LLM",
                "config": {"type": "api_key", "env_var": "LOCAL_KEY"},
            },
        )

        assert provider.builtin is False
        assert provider.created_at is not None
        assert provider.created_at.tzinfo is not None

        stored = registry.get_provider("local")
        assert stored is not None
        assert stored.builtin is False
        assert stored.created_at == provider.created_at
        assert stored.config.env_var == "LOCAL_KEY"

    def test_add_provider_accepts_model(self, registry):
        provider = registry.add_provider(
            ProviderCreate(id="local", name="Local"),
        )
        assert provider.id == "local"

    def test_builtin_flag_in_input_is_ignored(self, registry):
        provider = registry.add_provider(
            {"id": "sneaky", "name": "Sneaky", "builtin": True},
        )
        assert provider.builtin is False

    def test_persisted_document_holds_only_custom_providers(
        self,
        registry,
        storage_path,
    ):
        registry.add_provider({"id": "local", "name": "Local"})

        raw = _read_raw(storage_path)
        assert [p["id"] for p in raw["providers"]] == ["local"]
        assert raw["providers"][0]["builtin"] is False
        assert isinstance(raw["providers"][0]["created_at"], str)

    @pytest.mark.parametrize("provider_id", BUILTIN_IDS)
    def test_builtin_ids_are_reserved(self, registry, provider_id):
        with pytest.raises(DuplicateProviderError):
            registry.add_provider(
                {
                    "id": provider_id,
                    "name": "Fake",
                    "config": {"type": "openai_compatible"},
                },
            )
        assert registry.get_custom_providers() == []

    def test_duplicate_custom_id_rejected(self, registry):
        first = registry.add_provider({"id": "local", "name": "First"})

        with pytest.raises(DuplicateProviderError, match="already exists"):
            registry.add_provider({"id": "local", "name": "Second"})

        custom = registry.get_custom_providers()
        assert len(custom) == 1
        assert custom[0].name == "First"
        assert custom[0].created_at == first.created_at

    @pytest.mark.parametrize(
        "data",
        [{"name": "No id"}, {"id": "no-name"}, {"id": "", "name": "Empty"}],
    )
    def test_id_and_name_required(self, registry, data):
        with pytest.raises(ValidationError):
            registry.add_provider(data)


class TestDeleteProvider:
    """deleteProvider."""

    def test_delete_removes_provider_and_filter(
        self,
        registry,
        filters,
        storage_path,
    ):
        registry.add_provider({"id": "to-delete", "name": "To Delete"})
        registry.add_provider({"id": "keep", "name": "Keep"})
        filters.set_filtered_models("to-delete", ["model1", "model2"])
        filters.set_filtered_models("keep", ["model3"])

        result = registry.delete_provider("to-delete")

        assert result is None
        assert "to-delete" not in [p.id for p in registry.get_all_providers()]
        raw = _read_raw(storage_path)
        assert [p["id"] for p in raw["providers"]] == ["keep"]
        assert raw["filtered_models"] == {"keep": ["model3"]}

    def test_delete_unknown_raises(self, registry):
        with pytest.raises(NotFoundOrBuiltinError):
            registry.delete_provider("unknown")

    @pytest.mark.parametrize("provider_id", BUILTIN_IDS)
    def test_delete_builtin_raises_same_error(self, registry, provider_id):
        with pytest.raises(NotFoundOrBuiltinError) as excinfo:
            registry.delete_provider(provider_id)

        assert str(excinfo.value) == "Provider not found or is built-in"
        assert registry.get_provider(provider_id) is not None

    def test_id_can_be_reused_after_delete(self, registry):
        registry.add_provider({"id": "local", "name": "Old"})
        registry.delete_provider("local")

        provider = registry.add_provider({"id": "local", "name": "New"})

        assert provider.name == "New"
        assert len(registry.get_custom_providers()) == 1
