# -*- coding: utf-8 -*-
"""Whether a provider is usable, and how to set it up when it is not."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Mapping, Optional

from .models import Provider, ProviderAvailability, ProviderSetup

_SETUP: dict[str, ProviderSetup] = {
    "openai": ProviderSetup(
        env=["OPENAI_API_KEY"],
        docs="https://platform.openai.com/api-keys",
        steps=[
            "Create an API key in the OpenAI dashboard.",
            "Set OPENAI_API_KEY in your environment or .env file.",
            "Restart the server or container.",
        ],
    ),
    "gemini": ProviderSetup(
        env=["GEMINI_API_KEY"],
        docs="https://ai.google.dev/gemini-api/docs/api-key",
        steps=[
            "Create a Gemini API key in Google AI Studio.",
            "Set GEMINI_API_KEY in your environment or .env file.",
            "Restart the server or container.",
        ],
    ),
    "copilot": ProviderSetup(
        env=["GH_TOKEN", "GITHUB_TOKEN"],
        docs="https://docs.github.com/copilot/concepts/agents/"
        "about-copilot-cli",
        steps=[
            "Install the Copilot CLI and authenticate with /login or a PAT.",
            "Set GH_TOKEN or GITHUB_TOKEN with the Copilot Requests "
            "permission.",
            "If using Docker + OAuth login, mount ~/.config/github-copilot.",
            "Restart the server or container.",
        ],
    ),
    "claude": ProviderSetup(
        env=[],
        docs="https://code.claude.com/docs/en/setup",
        steps=[
            "Install Claude Code and run `claude`, then use /login.",
            "Mount ~/.claude and ~/.claude.json into the container if needed.",
            "Restart the server or container.",
        ],
    ),
}


def provider_setup(provider_id: str) -> ProviderSetup:
    """Return setup hints for a built-in provider (empty for custom ones)."""
    setup = _SETUP.get(provider_id)
    return setup.model_copy(deep=True) if setup else ProviderSetup()


def resolve_api_key(
    provider: Provider,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Inline ``config.api_key`` first, then the ``config.env_var`` value."""
    if environ is None:
        environ = os.environ
    if provider.config.api_key:
        return provider.config.api_key
    if provider.config.env_var:
        return environ.get(provider.config.env_var, "")
    return ""


def _copilot_auth_dirs(
    environ: Mapping[str, str],
    home: Path,
) -> List[Path]:
    base = Path(environ.get("XDG_CONFIG_HOME") or home / ".config")
    return [
        base / "github-copilot",
        base / "copilot",
        home / ".copilot",
    ]


def _claude_auth_paths(home: Path) -> List[Path]:
    return [home / ".claude.json", home / ".claude"]


def _any_exists(paths: List[Path]) -> bool:
    return any(p.exists() for p in paths)


def provider_availability(
    provider: Provider,
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> ProviderAvailability:
    """Check credentials for *provider* without contacting it."""
    if environ is None:
        environ = os.environ
    if home is None:
        home = Path.home()
    config = provider.config

    if provider.id == "openai":
        if environ.get("OPENAI_API_KEY"):
            return ProviderAvailability(available=True)
        return ProviderAvailability(reason="OPENAI_API_KEY not set.")

    if provider.id == "gemini":
        if environ.get("GEMINI_API_KEY"):
            return ProviderAvailability(available=True)
        return ProviderAvailability(reason="GEMINI_API_KEY not set.")

    if provider.id == "copilot":
        if environ.get("GH_TOKEN") or environ.get("GITHUB_TOKEN"):
            return ProviderAvailability(available=True)
        if _any_exists(_copilot_auth_dirs(environ, home)):
            return ProviderAvailability(available=True)
        return ProviderAvailability(reason="Copilot CLI auth not configured.")

    if provider.id == "claude":
        if _any_exists(_claude_auth_paths(home)):
            return ProviderAvailability(available=True)
        return ProviderAvailability(reason="Claude Code login not detected.")

    if config.type == "api_key":
        if resolve_api_key(provider, environ):
            return ProviderAvailability(available=True)
        hint = (
            f" (set {config.env_var} or configure in provider settings)"
            if config.env_var
            else ""
        )
        return ProviderAvailability(reason=f"API key not configured{hint}.")

    if config.type == "openai_compatible":
        if config.base_url and resolve_api_key(provider, environ):
            return ProviderAvailability(available=True)
        return ProviderAvailability(
            reason="API endpoint and key not configured.",
        )

    return ProviderAvailability(reason="Provider not configured.")
