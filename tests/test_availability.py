"""Tests for provider availability checks and setup hints."""

import pytest

from prompt_assistant.providers import (
    Provider,
    ProviderConfig,
    get_builtin_provider,
    provider_availability,
    provider_setup,
    resolve_api_key,
)


def _custom(**config):
    return Provider(id="custom", name="Custom", config=ProviderConfig(**config))


@pytest.mark.parametrize(
    ("provider_id", "env_var"),
    [("openai", "OPENAI_API_KEY"), ("gemini", "GEMINI_API_KEY")],
)
def test_api_key_builtins(tmp_path, provider_id, env_var):
    provider = get_builtin_provider(provider_id)

    missing = provider_availability(provider, {}, tmp_path)
    present = provider_availability(provider, {env_var: "key"}, tmp_path)

    assert missing.available is False
    assert missing.reason == f"{env_var} not set."
    assert present.available is True


class TestCopilot:
    def test_token(self, tmp_path):
        provider = get_builtin_provider("copilot")
        result = provider_availability(provider, {"GITHUB_TOKEN": "t"}, tmp_path)
        assert result.available is True

    def test_auth_dir_under_xdg_config(self, tmp_path):
        config_home = tmp_path / "xdg"
        (config_home / "github-copilot").mkdir(parents=True)
        provider = get_builtin_provider("copilot")

        result = provider_availability(
            provider,
            {"XDG_CONFIG_HOME": str(config_home)},
            tmp_path / "home",
        )

        assert result.available is True

    def test_home_copilot_dir(self, tmp_path):
        (tmp_path / ".copilot").mkdir()
        provider = get_builtin_provider("copilot")
        assert provider_availability(provider, {}, tmp_path).available

    def test_not_configured(self, tmp_path):
        provider = get_builtin_provider("copilot")
        result = provider_availability(provider, {}, tmp_path)
        assert result.available is False
        assert result.reason == "Copilot CLI auth not configured."


def test_claude_login_file(tmp_path):
    provider = get_builtin_provider("claude")
    assert provider_availability(provider, {}, tmp_path).available is False

    (tmp_path / ".claude.json").write_text("{}", encoding="utf-8")

    assert provider_availability(provider, {}, tmp_path).available is True


class TestCustomProviders:
    def test_api_key_inline(self, tmp_path):
        provider = _custom(type="api_key", api_key="secret")
        assert provider_availability(provider, {}, tmp_path).available

    def test_api_key_from_env_var(self, tmp_path):
        provider = _custom(type="api_key", env_var="MY_KEY")

        missing = provider_availability(provider, {}, tmp_path)
        present = provider_availability(provider, {"MY_KEY": "x"}, tmp_path)

        assert "set MY_KEY" in missing.reason
        assert present.available is True

    def test_openai_compatible_needs_url_and_key(self, tmp_path):
        no_url = _custom(type="openai_compatible", api_key="k")
        ready = _custom(
            type="openai_compatible",
            api_key="k",
            base_url="http://localhost:8000/v1",
        )

        assert provider_availability(no_url, {}, tmp_path).available is False
        assert provider_availability(ready, {}, tmp_path).available is True

    def test_unknown_type_unavailable(self, tmp_path):
        result = provider_availability(_custom(type="cli"), {}, tmp_path)
        assert result.available is False
        assert result.reason == "Provider not configured."


def test_resolve_api_key_prefers_inline_key():
    provider = _custom(api_key="inline", env_var="MY_KEY")
    assert resolve_api_key(provider, {"MY_KEY": "env"}) == "inline"
    assert resolve_api_key(_custom(env_var="MY_KEY"), {"MY_KEY": "env"}) == "env"
    assert resolve_api_key(_custom(), {}) == ""


def test_resolve_api_key_builtin_uses_declared_env_var():
    openai = get_builtin_provider("openai")
    assert openai.config.env_var == "OPENAI_API_KEY"
    assert resolve_api_key(openai, {"OPENAI_API_KEY": "sk-env"}) == "sk-env"
    assert resolve_api_key(openai, {}) == ""


def test_provider_setup():
    assert provider_setup("openai").env == ["OPENAI_API_KEY"]
    assert provider_setup("copilot").env == ["GH_TOKEN", "GITHUB_TOKEN"]
    assert provider_setup("my-provider").steps == []
