"""Tests for the `prompt-assistant providers` commands."""

import json

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient

from prompt_assistant.app import create_app
from prompt_assistant.cli import providers_cmd
from prompt_assistant.cli.main import cli

from .conftest import StubLister


@pytest.fixture
def app(store, cache, tmp_path):
    return create_app(
        store=store,
        cache=cache,
        lister=StubLister(),
        environ={},
        home=tmp_path,
    )


@pytest.fixture
def run(app, monkeypatch):
    base_urls = []

    def fake_client(base_url):
        base_urls.append(base_url)
        return TestClient(app)

    monkeypatch.setattr(providers_cmd, "client", fake_client)

    def _run(args):
        return CliRunner().invoke(cli, args)

    _run.base_urls = base_urls
    return _run


def test_help_lists_commands():
    result = CliRunner().invoke(cli, ["providers", "--help"])

    assert result.exit_code == 0
    for name in ("list", "add", "delete", "filter", "models", "rescan"):
        assert name in result.output


def test_list_json(run):
    result = run(["providers", "list", "--json"])

    assert result.exit_code == 0
    ids = [p["id"] for p in json.loads(result.output)["providers"]]
    assert ids == ["openai", "gemini", "copilot", "claude"]


def test_global_host_and_port(run):
    run(["--host", "10.0.0.5", "--port", "9000", "providers", "list"])
    run(["providers", "list", "--base-url", "http://api.local:1234/"])

    assert run.base_urls == ["http://10.0.0.5:9000", "http://api.local:1234"]


def test_add_list_delete(run, registry):
    added = run(
        [
            "providers",
            "add",
            "my-llm",
            "--name",
            "My LLM",
            "--endpoint",
            "http://localhost:8000/v1",
            "--model",
            "llama3",
        ],
    )
    assert added.exit_code == 0, added.output
    assert "Added provider my-llm" in added.output

    stored = registry.get_provider("my-llm")
    assert stored.config.base_url == "http://localhost:8000/v1"
    assert [m.id for m in stored.models] == ["llama3"]

    listed = run(["providers", "list"])
    assert "My LLM (my-llm) [custom]" in listed.output

    deleted = run(["providers", "delete", "my-llm"])
    assert deleted.exit_code == 0
    assert registry.get_provider("my-llm") is None


def test_duplicate_add_fails(run):
    result = run(["providers", "add", "openai", "--name", "Fake"])

    assert result.exit_code == 1
    assert "409" in result.output


def test_delete_builtin_fails(run):
    result = run(["providers", "delete", "claude"])

    assert result.exit_code == 1
    assert "Provider not found or is built-in" in result.output


def test_filter_set_show_clear(run, filters):
    run(["providers", "filter", "openai", "gpt-4o", "o1"])
    assert filters.get_filtered_models("openai") == ["gpt-4o", "o1"]

    shown = run(["providers", "filter", "openai"])
    assert json.loads(shown.output)["filtered_models"] == ["gpt-4o", "o1"]

    run(["providers", "filter", "openai", "--clear"])
    assert filters.get_filtered_models("openai") is None


def test_test_command_reports_missing_key(run):
    result = run(["providers", "test", "openai"])

    assert result.exit_code == 1
    assert "OPENAI_API_KEY not set." in result.output


def test_clear_cache(run, cache):
    cache.set_cached_models("openai", [])
    cache.set_cached_models("gemini", [])

    result = run(["providers", "clear-cache", "openai"])

    assert result.exit_code == 0
    assert cache.get_cached_models("openai") is None
    assert cache.get_cached_models("gemini") is not None
